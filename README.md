# minnow

Two small command-line tools for working with TCP connections, built only on
the Python standard library.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## webget

Fetches one HTTP resource over a plain TCP connection to port 80 and writes
the raw response, headers and all, to standard output.

```
webget HOST PATH
```

For example:

```
webget example.com /index.html
```

The request is an HTTP/1.1 `GET` with a `Host` header and
`Connection: close`; the tool reads until the server closes the connection.
Given anything other than exactly two arguments it prints a usage message to
standard error and exits with status 1. A connection or network error is
printed to standard error and also gives status 1.

The same command can be run as `python -m minnow.webget HOST PATH`.

## tcp-native

A minimal netcat: it copies standard input to a TCP connection and the
connection's data to standard output until both directions are finished.

Client mode connects to a remote host:

```
tcp-native HOST PORT
```

Server mode binds to an address (with `SO_REUSEADDR`) and accepts exactly
one connection:

```
tcp-native -l HOST PORT
```

Any arguments after these are ignored. With too few arguments the usage text
is printed to standard error and the exit status is 1. Any failure while
connecting or copying is reported as `Exception: <message>` on standard error,
also with status 1.

Progress messages (connecting, connected, listening, stream finished) go to
standard error with a `DEBUG:` prefix, so standard output carries only the
peer's data. When standard input reaches end of file the sending side of the
socket is shut down; when the peer closes its side, standard output is closed.

The same command can be run as `python -m minnow.tcp_native`.

## Library use

The pieces behind the commands can be used directly.

`minnow.webget`:

- `build_request(host, path)` returns the request bytes that are sent.
- `get_url(host, path, out=None, port="http")` connects, sends the request
  and copies the response to the binary stream `out` (standard output by
  default).

```python
from minnow.webget import build_request, get_url

print(build_request("example.com", "/"))
get_url("example.com", "/")
```

`minnow.tcp_native`:

- `parse_args(argv)` turns `[-l] HOST PORT` into a frozen `Options` value
  with `server_mode`, `host` and `port`, raising `UsageError` (a
  `ValueError`) when arguments are missing.
- `usage(prog)` returns the usage text.
- `open_connection(options, log=None)` returns a connected socket, either by
  connecting or by listening and accepting one connection.

`minnow.stream_copy`:

- `bidirectional_stream_copy(sock, peer_name, source=None, sink=None, log=None)`
  relays between a connected socket and a pair of binary streams (standard
  input and output by default) through 1 MiB buffers, using `selectors`. The
  streams must have real file descriptors; the socket and both descriptors
  are switched to non-blocking mode. It returns once both directions have
  finished or an error has stopped them.

## What it does not do

- Only IPv4 is used by `tcp-native`; host names are resolved to IPv4
  addresses.
- `webget` speaks plain HTTP only: no HTTPS, no redirects, and the response
  is not parsed or decoded in any way.
- There is no TCP implementation of its own here; both tools use the
  operating system's TCP sockets.