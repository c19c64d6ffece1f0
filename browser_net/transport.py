"""
Default resolver and TCP transport used by HttpClient.

Both are thin wrappers over the socket module. HttpClient only relies on the
call shapes here, so tests and embedders can pass their own.
"""

import socket
from typing import List, Optional

import structlog

logger = structlog.get_logger(__name__)

ADDRESS_FAMILIES = {
    "ipv4": socket.AF_INET,
    "ipv6": socket.AF_INET6,
    "any": socket.AF_UNSPEC,
}


def address_family(name: str) -> int:
    """Map a config name (ipv4, ipv6, any) to a socket address family."""
    try:
        return ADDRESS_FAMILIES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown address family: {name!r} (expected one of {sorted(ADDRESS_FAMILIES)})")


def resolve_host(host: str, family: int = socket.AF_INET) -> List[str]:
    """Resolve a hostname to its addresses, in resolver order.

    Raises OSError (socket.gaierror) when the lookup itself fails.
    """
    infos = socket.getaddrinfo(host, None, family, socket.SOCK_STREAM)
    addresses: List[str] = []
    for _, _, _, _, sockaddr in infos:
        address = sockaddr[0]
        if address not in addresses:
            addresses.append(address)
    logger.debug("host_resolved", host=host, addresses=addresses)
    return addresses


class TcpTransport:
    """Blocking byte stream over a single TCP connection."""

    def __init__(self):
        self._sock: Optional[socket.socket] = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self, address: str, port: int) -> None:
        family = socket.AF_INET6 if ":" in address else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.connect((address, port))
        except OSError:
            sock.close()
            raise
        self._sock = sock

    def write(self, data: bytes) -> int:
        self._require_socket().sendall(data)
        return len(data)

    def read(self, size: int) -> bytes:
        return self._require_socket().recv(size)

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise OSError("transport is not connected")
        return self._sock

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
