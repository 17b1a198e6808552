"""Response envelope and raw HTTP response parsing.

The storage protocol carries almost everything interesting in headers:
tokens, storage URLs and free-form ``x-`` metadata. Responses are therefore
normalised into a flat, lower-cased header map plus the numeric status, which
is also mirrored into the map under ``HTTP-Code``.
"""

import re
from dataclasses import dataclass, field
from typing import Mapping, Optional

from swift_tools.core.exceptions import ProtocolError

STATUS_KEY = "HTTP-Code"

_STATUS_LINE = re.compile(r"^HTTP/\S+ (\d{3})")
_HEADER_LINE = re.compile(r"^([A-Za-z0-9\-_]+):[ \t]*(.*)$")


@dataclass(frozen=True)
class ResponseEnvelope:
    """Status, headers and body of a single response."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    url: Optional[str] = None

    @classmethod
    def build(
        cls,
        status_code: int,
        headers: Mapping[str, str],
        body: bytes = b"",
        url: Optional[str] = None,
    ) -> "ResponseEnvelope":
        """Create an envelope, lower-casing header names.

        Names differing only in case collapse to one entry and the later one
        wins. Values are stored verbatim: a header repeated on the wire reaches
        this point already comma-joined when it came through ``requests``, and
        is never split again since values such as ``Date`` contain commas.
        """
        normalized = {STATUS_KEY: str(status_code)}
        for name, value in headers.items():
            normalized[name.lower()] = value
        return cls(status_code=status_code, headers=normalized, body=body, url=url)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Look up a header case-insensitively."""
        if name == STATUS_KEY:
            return self.headers[STATUS_KEY]
        return self.headers.get(name.lower(), default)

    def x_headers(self, prefix: str = "x-") -> dict[str, str]:
        """Return headers whose name starts with ``prefix``."""
        return select_prefixed(self.headers, prefix)


def select_prefixed(headers: Mapping[str, str], prefix: str) -> dict[str, str]:
    """Keep only headers whose name starts with ``prefix`` (case-insensitive)."""
    prefix = prefix.lower()
    return {
        name: value for name, value in headers.items() if name.lower().startswith(prefix)
    }


def _split_head(raw: bytes) -> tuple[bytes, bytes]:
    for separator in (b"\r\n\r\n", b"\n\n"):
        head, found, rest = raw.partition(separator)
        if found:
            return head, rest
    return raw, b""


def parse_response(raw: bytes, url: Optional[str] = None) -> ResponseEnvelope:
    """Parse a raw HTTP/1.x response into a ``ResponseEnvelope``.

    Interim ``1xx`` blocks such as ``100 Continue`` are skipped. When a header
    line repeats, the last value wins.

    Args:
        raw: Response bytes as read from the wire, headers included
        url: Request URL, recorded on the envelope

    Returns:
        ResponseEnvelope with ``HTTP-Code`` set from the status line

    Raises:
        ProtocolError: If no status line can be found
    """
    head, rest = _split_head(raw)
    lines = head.decode("iso-8859-1").splitlines()
    match = _STATUS_LINE.match(lines[0]) if lines else None

    while match and match.group(1).startswith("1") and rest:
        head, rest = _split_head(rest)
        lines = head.decode("iso-8859-1").splitlines()
        match = _STATUS_LINE.match(lines[0]) if lines else None

    if match is None:
        raise ProtocolError("Response does not start with an HTTP status line")

    headers: dict[str, str] = {}
    for line in lines[1:]:
        header_match = _HEADER_LINE.match(line)
        if header_match:
            headers[header_match.group(1)] = header_match.group(2).strip()

    return ResponseEnvelope.build(int(match.group(1)), headers, rest, url)
