"""Tests for the default resolver and TCP transport."""

import socket
import threading

import pytest

from browser_net.http_client import HttpClient
from browser_net.transport import TcpTransport, address_family, resolve_host


@pytest.fixture
def one_shot_server():
    """Accept one connection, record the request, send a reply and close."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    state = {"request": b""}

    def serve(reply: bytes):
        conn, _ = listener.accept()
        with conn:
            data = b""
            while b"\r\n\r\n" not in data:
                chunk = conn.recv(1024)
                if not chunk:
                    break
                data += chunk
            state["request"] = data
            conn.sendall(reply)

    def start(reply: bytes):
        thread = threading.Thread(target=serve, args=(reply,), daemon=True)
        thread.start()
        return listener.getsockname()[1], thread

    yield start, state
    listener.close()


class TestResolveHost:
    def test_localhost(self):
        assert "127.0.0.1" in resolve_host("localhost")

    def test_ip_literal(self):
        assert resolve_host("127.0.0.1") == ["127.0.0.1"]

    def test_failure_raises_oserror(self):
        with pytest.raises(OSError):
            resolve_host("does-not-exist.invalid")


class TestAddressFamily:
    def test_names(self):
        assert address_family("ipv4") == socket.AF_INET
        assert address_family("IPv6") == socket.AF_INET6
        assert address_family("any") == socket.AF_UNSPEC

    def test_unknown(self):
        with pytest.raises(ValueError):
            address_family("ipx")


class TestTcpTransport:
    def test_read_write_roundtrip(self, one_shot_server):
        start, state = one_shot_server
        port, thread = start(b"hello")

        with TcpTransport() as transport:
            transport.connect("127.0.0.1", port)
            assert transport.connected
            assert transport.write(b"ping\r\n\r\n") == 8
            data = b""
            while True:
                chunk = transport.read(4096)
                if not chunk:
                    break
                data += chunk

        thread.join(timeout=5)
        assert data == b"hello"
        assert state["request"] == b"ping\r\n\r\n"
        assert not transport.connected

    def test_connect_refused(self):
        probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
        probe.close()

        transport = TcpTransport()
        with pytest.raises(OSError):
            transport.connect("127.0.0.1", port)
        assert not transport.connected

    def test_unconnected_io_raises_oserror(self):
        transport = TcpTransport()
        with pytest.raises(OSError):
            transport.read(10)
        with pytest.raises(OSError):
            transport.write(b"x")

    def test_close_is_idempotent(self):
        transport = TcpTransport()
        transport.close()
        transport.close()


class TestClientOverLoopback:
    def test_get(self, one_shot_server):
        """End to end against a real socket."""
        start, state = one_shot_server
        port, thread = start(b"HTTP/1.1 200 OK\r\nContent-Length: 2\r\n\r\nok")

        result = HttpClient().get("127.0.0.1", port, "index.html")
        thread.join(timeout=5)

        assert result.success, result
        assert result.response.status_code == 200
        assert result.response.body == "ok"
        assert state["request"] == (
            b"GET /index.html HTTP/1.1\r\n"
            b"Host: 127.0.0.1\r\n"
            b"Accept: text/html\r\n"
            b"Connection: close\r\n"
            b"\r\n"
        )
