import io
import socket
import threading

import pytest

from minnow.webget import build_request, get_url, main


def test_build_request_wire_format():
    assert build_request("stanford.edu", "/class/cs144") == (
        b"GET /class/cs144 HTTP/1.1\r\nHost: stanford.edu\r\nConnection: close\r\n\r\n"
    )


def test_build_request_ends_with_blank_line():
    request = build_request("h", "/p")
    assert request.endswith(b"\r\n\r\n")
    assert request.count(b"\r\n\r\n") == 1


def test_get_url_against_local_server():
    listener = socket.socket()
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    response = b"HTTP/1.1 200 OK\r\nContent-Length: 2\r\n\r\nok"
    seen = {}

    def serve():
        conn, _ = listener.accept()
        with conn:
            data = b""
            while not data.endswith(b"\r\n\r\n"):
                chunk = conn.recv(1024)
                if not chunk:
                    break
                data += chunk
            seen["request"] = data
            conn.sendall(response)

    thread = threading.Thread(target=serve)
    thread.start()
    out = io.BytesIO()
    get_url("127.0.0.1", "/x", out=out, port=port)
    thread.join(timeout=5)
    listener.close()

    assert out.getvalue() == response
    assert seen["request"] == build_request("127.0.0.1", "/x")


def test_main_wrong_argument_count(capsys):
    assert main(["only-host"]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_get_url_refused_raises():
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    out = io.BytesIO()
    with pytest.raises(ConnectionRefusedError):
        get_url("127.0.0.1", "/", out=out, port=port)
    assert out.getvalue() == b""