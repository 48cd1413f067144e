[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minnow"
version = "0.1.0"
description = "Small TCP utilities: a one-shot HTTP fetcher and a bidirectional stdin/stdout socket relay"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "http", "netcat", "socket", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
webget = "minnow.webget:main"
tcp-native = "minnow.tcp_native:main"

[tool.hatch.build.targets.wheel]
packages = ["minnow"]

[tool.pytest.ini_options]
addopts = "-ra"
