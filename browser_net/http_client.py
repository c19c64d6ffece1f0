"""
Blocking HTTP/1.1 GET over a plain TCP connection.

One call runs resolve -> connect -> send -> read until close -> decode ->
parse. The first failing phase ends the call and comes back as a
NetworkError value; nothing is retried.
"""

import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

import structlog

from .config import Config
from .errors import BrowserNetError, NetworkError, Phase, ResponseParseError
from .response import HttpResponse
from .transport import TcpTransport, address_family, resolve_host
from .url import Url

logger = structlog.get_logger(__name__)

READ_CHUNK_SIZE = 4096
MAX_PORT = 65535

Resolver = Callable[[str], List[str]]
ResponseFactory = Callable[[str], Union[HttpResponse, ResponseParseError]]


class FetchResult:
    def __init__(
        self,
        host: str,
        port: Optional[int],
        path: str,
        response: Optional[HttpResponse] = None,
        error: Optional[BrowserNetError] = None,
        fetch_time: float = 0.0,
    ):
        """Outcome of one GET: exactly one of response and error is set."""
        self.host = host
        self.port = port
        self.path = path
        self.response = response
        self.error = error
        self.fetch_time = fetch_time
        self.timestamp = datetime.now(timezone.utc)

    @property
    def success(self) -> bool:
        """Check if the fetch produced a response."""
        return self.error is None

    def __repr__(self) -> str:
        outcome = f"error={self.error!r}" if self.error else f"response={self.response!r}"
        return f"FetchResult(host={self.host!r}, port={self.port!r}, path={self.path!r}, {outcome})"


def build_request(host: str, path: str) -> bytes:
    return (
        f"GET /{path} HTTP/1.1\r\n"
        f"Host: {host}\r\n"
        f"Accept: text/html\r\n"
        f"Connection: close\r\n"
        f"\r\n"
    ).encode("utf-8")


class HttpClient:
    def __init__(
        self,
        resolver: Resolver = None,
        transport_factory: Callable[[], TcpTransport] = None,
        response_factory: ResponseFactory = None,
        read_chunk_size: int = READ_CHUNK_SIZE,
    ):
        """Initialize the client. Every argument is a collaborator seam."""
        self.resolver = resolver or resolve_host
        self.transport_factory = transport_factory or TcpTransport
        self.response_factory = response_factory or HttpResponse.from_text
        if read_chunk_size <= 0:
            raise ValueError(f"read_chunk_size must be positive, got {read_chunk_size}")
        self.read_chunk_size = read_chunk_size

    def get(self, host: str, port: int, path: str) -> FetchResult:
        """GET http://host:port/path and hand the decoded text to the response factory."""
        start_time = time.time()

        def failed(error: BrowserNetError) -> FetchResult:
            logger.debug("fetch_failed", host=host, port=port, path=path, error=error.message)
            return FetchResult(host, port, path, error=error, fetch_time=time.time() - start_time)

        logger.debug("resolving_host", host=host)
        # idna encoding of a bad label raises UnicodeError, not gaierror
        try:
            addresses = self.resolver(host)
        except (OSError, UnicodeError) as e:
            return failed(NetworkError(Phase.RESOLVE, "resolution failed", str(e)))
        if not addresses:
            return failed(NetworkError(Phase.RESOLVE, "no addresses"))

        address = addresses[0]
        transport = self.transport_factory()
        try:
            logger.debug("connecting", host=host, address=address, port=port)
            try:
                transport.connect(address, port)
            except (OSError, OverflowError) as e:
                return failed(NetworkError(Phase.CONNECT, "connect failed", str(e)))

            try:
                transport.write(build_request(host, path))
            except OSError as e:
                return failed(NetworkError(Phase.WRITE, "write failed", str(e)))
            logger.debug("request_sent", host=host, path=path)

            received = bytearray()
            while True:
                try:
                    chunk = transport.read(self.read_chunk_size)
                except OSError as e:
                    return failed(NetworkError(Phase.READ, "read failed", str(e)))
                if not chunk:
                    break
                received.extend(chunk)
        finally:
            transport.close()

        logger.debug("response_received", host=host, size=len(received))

        try:
            text = bytes(received).decode("utf-8")
        except UnicodeDecodeError as e:
            return failed(NetworkError(Phase.DECODE, f"invalid encoding: {e}"))

        parsed = self.response_factory(text)
        if isinstance(parsed, ResponseParseError):
            return failed(parsed)
        return FetchResult(host, port, path, response=parsed, fetch_time=time.time() - start_time)

    def fetch(self, raw_url: str) -> FetchResult:
        """Parse raw_url and GET it."""
        result = Url(raw_url).parse()
        if not result.success:
            return FetchResult("", None, "", error=result.error)

        url = result.url
        port = url.port_number
        if port is None or not 0 <= port <= MAX_PORT:
            return FetchResult(
                url.host, None, url.path,
                error=NetworkError(Phase.CONNECT, f"invalid port: {url.port}"),
            )
        return self.get(url.host, port, url.path)


def create_client(config: Config = None) -> HttpClient:
    """Create an HttpClient from configuration."""
    config = config or Config()
    client_config = config.client_settings()
    family = address_family(client_config["address_family"])
    return HttpClient(
        resolver=lambda host: resolve_host(host, family),
        read_chunk_size=client_config["read_chunk_size"],
    )
