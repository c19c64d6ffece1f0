"""
Minimal HTTP response parser handed the decoded text by HttpClient.

It splits the status line, the header block and the body. Anything past that
(content length, transfer encodings) is left to the layers above.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .errors import ResponseParseError

CRLF = "\r\n"


@dataclass
class HttpResponse:
    version: str
    status_code: int
    reason: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: str = ""

    def header_value(self, name: str) -> Optional[str]:
        """Value of the first header called `name` (case-insensitive)."""
        name = name.lower()
        for key, value in self.headers:
            if key == name:
                return value
        return None

    @classmethod
    def from_text(cls, raw: str) -> Union["HttpResponse", ResponseParseError]:
        head, sep, body = raw.partition(CRLF + CRLF)
        if not sep:
            # tolerate bare LF line endings
            head, sep, body = raw.partition("\n\n")
        lines = head.replace(CRLF, "\n").split("\n")

        status = _parse_status_line(lines[0])
        if isinstance(status, ResponseParseError):
            return status
        version, status_code, reason = status

        headers: List[Tuple[str, str]] = []
        for line in lines[1:]:
            if not line:
                continue
            if line[0] in " \t":
                if not headers:
                    return ResponseParseError(f"continuation line without a header: {line!r}")
                key, value = headers[-1]
                headers[-1] = (key, f"{value} {line.strip()}")
                continue
            colon_idx = line.find(":")
            if colon_idx <= 0:
                return ResponseParseError(f"malformed header line: {line!r}")
            headers.append((line[:colon_idx].strip().lower(), line[colon_idx + 1:].strip()))

        return cls(version=version, status_code=status_code, reason=reason, headers=headers, body=body)


def _parse_status_line(line: str) -> Union[Tuple[str, int, str], ResponseParseError]:
    parts = line.split(" ", 2)
    if len(parts) < 2 or not parts[0].startswith("HTTP/"):
        return ResponseParseError(f"bad status line: {line!r}")
    if not parts[1].isdigit():
        return ResponseParseError(f"bad status code: {parts[1]!r}")
    reason = parts[2] if len(parts) == 3 else ""
    return parts[0], int(parts[1]), reason
