from .errors import BrowserNetError, NetworkError, Phase, ResponseParseError, UnsupportedScheme
from .http_client import FetchResult, HttpClient, create_client
from .response import HttpResponse
from .url import ParseResult, Url, parse_url

__all__ = [
    "BrowserNetError",
    "FetchResult",
    "HttpClient",
    "HttpResponse",
    "NetworkError",
    "ParseResult",
    "Phase",
    "ResponseParseError",
    "UnsupportedScheme",
    "Url",
    "create_client",
    "parse_url",
]
