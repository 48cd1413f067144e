"""TCP utilities: an HTTP fetcher and a bidirectional stdin/stdout socket relay."""

__version__ = "0.1.0"
__all__ = ["stream_copy", "webget", "tcp_native"]