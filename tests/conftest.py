import pytest


class FakeTransport:
    """In-memory stand-in for TcpTransport.

    `chunks` are handed out one per read; an Exception in the list is raised
    at that read instead. Once exhausted, reads return b"".
    """

    def __init__(self, chunks=(), connect_error=None, write_error=None):
        self.chunks = list(chunks)
        self.connect_error = connect_error
        self.write_error = write_error
        self.connected_to = []
        self.written = b""
        self.read_sizes = []
        self.closed = False

    def connect(self, address, port):
        self.connected_to.append((address, port))
        if self.connect_error:
            raise self.connect_error

    def write(self, data):
        if self.write_error:
            raise self.write_error
        self.written += data
        return len(data)

    def read(self, size):
        self.read_sizes.append(size)
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        if isinstance(chunk, Exception):
            raise chunk
        return chunk

    def close(self):
        self.closed = True


class FakeResolver:
    def __init__(self, addresses=None, error=None):
        self.addresses = addresses if addresses is not None else ["93.184.216.34"]
        self.error = error
        self.calls = []

    def __call__(self, host):
        self.calls.append(host)
        if self.error:
            raise self.error
        return list(self.addresses)


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def make_resolver():
    return FakeResolver
