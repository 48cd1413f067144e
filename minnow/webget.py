"""Fetch a page over HTTP/1.1 and print the raw response."""

from __future__ import annotations

import socket
import sys
from typing import BinaryIO


def build_request(host: str, path: str) -> bytes:
    """Return the GET request sent for ``path`` on ``host``."""
    return (
        f"GET {path} HTTP/1.1\r\n"
        f"Host: {host}\r\n"
        "Connection: close\r\n\r\n"
    ).encode()


def get_url(host: str, path: str, out: BinaryIO | None = None, port: int | str = "http") -> None:
    """Send a GET request and copy everything the server returns to ``out``."""
    out = out if out is not None else sys.stdout.buffer
    with socket.create_connection((host, port)) as sock:
        sock.sendall(build_request(host, path))
        while True:
            chunk = sock.recv(65536)
            if not chunk:
                break
            out.write(chunk)
    out.flush()


def main(argv: list[str] | None = None) -> int:
    """Run the command with ``HOST PATH`` arguments."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Usage: webget HOST PATH", file=sys.stderr)
        print("\tExample: webget stanford.edu /class/cs144", file=sys.stderr)
        return 1
    host, path = args
    try:
        get_url(host, path)
    except OSError as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())