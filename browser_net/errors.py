"""
Error values returned by the URL parser and the HTTP client.

Nothing here is raised across the public API: callers get one of these back
inside a ParseResult or FetchResult and dispatch on its type.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Phase(str, Enum):
    RESOLVE = "resolve"
    CONNECT = "connect"
    WRITE = "write"
    READ = "read"
    DECODE = "decode"


class BrowserNetError(ABC):
    """Common base for every error value."""

    @property
    @abstractmethod
    def message(self) -> str:
        ...

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class UnsupportedScheme(BrowserNetError):
    url: str

    @property
    def message(self) -> str:
        return f"Only HTTP scheme is supported: {self.url!r}"


@dataclass(frozen=True)
class NetworkError(BrowserNetError):
    phase: Phase
    detail: str
    cause: Optional[str] = None

    @property
    def message(self) -> str:
        if self.cause:
            return f"{self.detail}: {self.cause}"
        return self.detail


@dataclass(frozen=True)
class ResponseParseError(BrowserNetError):
    reason: str

    @property
    def message(self) -> str:
        return f"Invalid HTTP response: {self.reason}"
