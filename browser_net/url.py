"""
Split an absolute http:// URL into host, port, path and searchpart.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .errors import UnsupportedScheme

HTTP_SCHEME = "http://"
DEFAULT_PORT = "80"


@dataclass
class Url:
    raw: str
    host: str = ""
    port: str = ""
    path: str = ""
    searchpart: str = ""

    def __str__(self) -> str:
        return self.raw

    @property
    def port_number(self) -> Optional[int]:
        """The port as an int, or None when it is not a decimal number."""
        # isdigit() also accepts superscripts that int() rejects
        if not self.port.isdecimal():
            return None
        return int(self.port)

    def parse(self) -> "ParseResult":
        """Populate the derived fields from the raw string.

        Only the scheme check can fail. On failure the instance is left
        untouched and the error is returned inside the result.
        """
        if not self._is_http():
            return ParseResult(error=UnsupportedScheme(self.raw))

        host = self._extract_host()
        port = self._extract_port()
        path = self._extract_path()
        searchpart = self._extract_searchpart()

        self.host, self.port, self.path, self.searchpart = host, port, path, searchpart
        return ParseResult(url=replace(self))

    def _is_http(self) -> bool:
        return self.raw.startswith(HTTP_SCHEME)

    def _host_segment(self) -> str:
        rest = self.raw[len(HTTP_SCHEME):]
        end = len(rest)
        for sep in ("/", "?"):
            idx = rest.find(sep)
            if idx != -1 and idx < end:
                end = idx
        return rest[:end]

    def _extract_host(self) -> str:
        host_with_port = self._host_segment()
        return host_with_port.split(":", 1)[0]

    def _extract_port(self) -> str:
        host_with_port = self._host_segment()
        if ":" not in host_with_port:
            return DEFAULT_PORT
        return host_with_port.split(":", 1)[1]

    def _extract_path(self) -> str:
        rest = self.raw[len(HTTP_SCHEME):]
        # the path only starts where a "/" closes the host segment
        start = len(self._host_segment())
        if not rest.startswith("/", start):
            return ""
        return rest[start + 1:].split("?", 1)[0]

    def _extract_searchpart(self) -> str:
        idx = self.raw.find("?")
        if idx == -1:
            return ""
        return self.raw[idx + 1:]


class ParseResult:
    def __init__(self, url: Optional[Url] = None, error: Optional[UnsupportedScheme] = None):
        self.url = url
        self.error = error

    @property
    def success(self) -> bool:
        return self.error is None

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParseResult):
            return NotImplemented
        return self.url == other.url and self.error == other.error

    def __repr__(self) -> str:
        if self.success:
            return f"ParseResult(url={self.url!r})"
        return f"ParseResult(error={self.error!r})"


def parse_url(raw: str) -> ParseResult:
    """Shortcut for Url(raw).parse()."""
    return Url(raw).parse()
