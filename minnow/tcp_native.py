"""Connect (or accept one connection) over the host's TCP and copy stdin/stdout."""

from __future__ import annotations

import socket
import sys
from dataclasses import dataclass
from typing import TextIO

from minnow.stream_copy import bidirectional_stream_copy

PROG = "tcp_native"


class UsageError(ValueError):
    """Raised when the command line does not match the expected form."""


@dataclass(frozen=True)
class Options:
    server_mode: bool
    host: str
    port: str


def parse_args(argv: list[str]) -> Options:
    """Parse ``[-l] <host> <port>``; extra trailing arguments are ignored."""
    if len(argv) < 2:
        raise UsageError("required arguments are missing")
    if argv[0] == "-l":
        if len(argv) < 3:
            raise UsageError("required arguments are missing")
        return Options(True, argv[1], argv[2])
    return Options(False, argv[0], argv[1])


def usage(prog: str = PROG) -> str:
    """Return the usage text."""
    return (
        f"Usage: {prog} [-l] <host> <port>\n\n"
        "  -l specifies listen mode; <host>:<port> is the listening address.\n"
    )


def _resolve(host: str, port: str) -> tuple[str, int]:
    family, _, _, _, sockaddr = socket.getaddrinfo(
        host, port, socket.AF_INET, socket.SOCK_STREAM
    )[0]
    return sockaddr[0], sockaddr[1]


def _format(address: tuple) -> str:
    return f"{address[0]}:{address[1]}"


def open_connection(options: Options, log: TextIO | None = None) -> socket.socket:
    """Connect to the peer, or listen and accept exactly one connection."""
    log = log if log is not None else sys.stderr
    address = _resolve(options.host, options.port)
    if options.server_mode:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind(address)
            listener.listen()
            log.write("DEBUG: Listening for incoming connection...\n")
            connected, peer = listener.accept()
        log.write(f"DEBUG: New connection from {_format(peer)}.\n")
        return connected

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    log.write(f"DEBUG: Connecting to {_format(address)}... ")
    try:
        sock.connect(address)
    except OSError:
        sock.close()
        raise
    log.write(f"DEBUG: Successfully connected to {_format(sock.getpeername())}.\n")
    return sock


def main(argv: list[str] | None = None) -> int:
    """Run the command; returns the process exit status."""
    args = sys.argv[1:] if argv is None else argv
    try:
        options = parse_args(args)
    except UsageError:
        sys.stderr.write(usage())
        return 1
    try:
        with open_connection(options) as sock:
            bidirectional_stream_copy(sock, _format(sock.getpeername()))
    except Exception as error:  # report any failure like the command line tool does
        print(f"Exception: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())