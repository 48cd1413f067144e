"""Copy data between a connected socket and a local source/sink pair."""

from __future__ import annotations

import os
import selectors
import socket
import sys
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, TextIO

BUFFER_SIZE = 1_048_576


@dataclass
class _Pipe:
    """A bounded in-memory byte queue with close and error flags."""

    capacity: int
    buffer: bytearray = field(default_factory=bytearray)
    closed: bool = False
    error: bool = False

    @property
    def available(self) -> int:
        return self.capacity - len(self.buffer)

    @property
    def finished(self) -> bool:
        return self.closed and not self.buffer

    def push(self, data: bytes) -> None:
        self.buffer += data[: self.available]


@dataclass
class _Rule:
    name: str
    fd: int
    event: int
    callback: Callable[[], None]
    interested: Callable[[], bool]
    error_message: str


def bidirectional_stream_copy(
    sock: socket.socket,
    peer_name: str,
    source: BinaryIO | None = None,
    sink: BinaryIO | None = None,
    log: TextIO | None = None,
) -> None:
    """Copy source to the socket and the socket to sink until both directions finish."""
    source = source if source is not None else sys.stdin.buffer
    sink = sink if sink is not None else sys.stdout.buffer
    log = log if log is not None else sys.stderr

    in_fd = source.fileno()
    out_fd = sink.fileno()
    sock_fd = sock.fileno()

    outbound = _Pipe(BUFFER_SIZE)
    inbound = _Pipe(BUFFER_SIZE)
    shut = {"outbound": False, "inbound": False}

    sock.setblocking(False)
    os.set_blocking(in_fd, False)
    os.set_blocking(out_fd, False)

    def fail(message: str) -> None:
        log.write(f"DEBUG: {message}\n")
        outbound.error = True
        inbound.error = True

    def read_source() -> None:
        data = os.read(in_fd, outbound.available)
        if data:
            outbound.push(data)
        else:
            outbound.closed = True

    def write_socket() -> None:
        if outbound.buffer:
            sent = sock.send(outbound.buffer)
            del outbound.buffer[:sent]
        if outbound.finished:
            sock.shutdown(socket.SHUT_WR)
            shut["outbound"] = True
            log.write(f"DEBUG: Outbound stream to {peer_name} finished.\n")

    def read_socket() -> None:
        data = sock.recv(inbound.available)
        if data:
            inbound.push(data)
        else:
            inbound.closed = True

    def write_sink() -> None:
        if inbound.buffer:
            written = os.write(out_fd, inbound.buffer)
            del inbound.buffer[:written]
        if inbound.finished:
            sink.close()
            shut["inbound"] = True
            ending = " uncleanly." if inbound.error else "."
            log.write(f"DEBUG: Inbound stream from {peer_name} finished{ending}\n")

    rules = [
        _Rule(
            "read from stdin into outbound byte stream",
            in_fd,
            selectors.EVENT_READ,
            read_source,
            lambda: not outbound.error
            and not inbound.error
            and outbound.available > 0
            and not outbound.closed,
            "Outbound stream had error from source.",
        ),
        _Rule(
            "read from outbound byte stream into socket",
            sock_fd,
            selectors.EVENT_WRITE,
            write_socket,
            lambda: bool(outbound.buffer) or (outbound.finished and not shut["outbound"]),
            "Outbound stream had error from destination.",
        ),
        _Rule(
            "read from socket into inbound byte stream",
            sock_fd,
            selectors.EVENT_READ,
            read_socket,
            lambda: not inbound.error
            and not outbound.error
            and inbound.available > 0
            and not inbound.closed,
            "Inbound stream had error from source.",
        ),
        _Rule(
            "read from inbound byte stream into stdout",
            out_fd,
            selectors.EVENT_WRITE,
            write_sink,
            lambda: bool(inbound.buffer) or (inbound.finished and not shut["inbound"]),
            "Inbound stream had error from destination.",
        ),
    ]

    while True:
        active = [rule for rule in rules if rule.interested()]
        if not active:
            return

        masks: dict[int, int] = {}
        for rule in active:
            masks[rule.fd] = masks.get(rule.fd, 0) | rule.event

        with selectors.DefaultSelector() as selector:
            for fd, mask in masks.items():
                selector.register(fd, mask)
            ready = {key.fd: events for key, events in selector.select()}

        for rule in active:
            if not ready.get(rule.fd, 0) & rule.event or not rule.interested():
                continue
            try:
                rule.callback()
            except (BlockingIOError, InterruptedError):
                continue
            except OSError:
                rules.remove(rule)
                fail(rule.error_message)