"""Single-request HTTP execution against the storage service.

The executor is stateless per call: everything a request needs lives on the
``RequestSpec`` handed to ``send``, so query parameters, headers and bodies
can never leak from one operation into the next. Only the underlying
``requests.Session`` (and its connection pool) is reused.

Method shaping:
    GET/HEAD    query parameters appended to the URL, body dropped
    POST        query parameters form-encoded into the body
    PUT         body sent with a declared length; files are streamed
    other       sent as a literal custom method, body untouched
"""

import time
from dataclasses import dataclass, field
from typing import BinaryIO, Optional, Union
from urllib.parse import urlencode

import requests

from swift_tools.core import get_logger, get_tracer, settings
from swift_tools.core.exceptions import TransportError

from .parsing import ResponseEnvelope

logger = get_logger(__name__)
tracer = get_tracer(__name__)

Body = Union[bytes, BinaryIO, None]


@dataclass
class RequestSpec:
    """Everything needed to issue one request."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, Optional[Union[str, int]]] = field(default_factory=dict)
    body: Body = None
    content_length: Optional[int] = None
    timeout_ms: Optional[int] = None

    def encoded_params(self) -> str:
        """URL-encode query parameters, dropping ``None`` values."""
        return urlencode(
            [(key, value) for key, value in self.query_params.items() if value is not None]
        )


class RequestExecutor:
    """Sends one request at a time and returns a ``ResponseEnvelope``."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout_ms: Optional[int] = None,
        verify_tls: Optional[bool] = None,
    ):
        """Initialize the executor.

        Args:
            session: Session to send through; a new one is created if omitted
            timeout_ms: Default timeout in milliseconds, ``None`` for the
                transport default
            verify_tls: Verify server certificates (settings default if omitted)
        """
        self.session = session if session is not None else requests.Session()
        self.session.headers["Accept-Encoding"] = "gzip, deflate"
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.timeout_ms
        self.verify_tls = settings.verify_tls if verify_tls is None else verify_tls

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestExecutor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _timeout_seconds(self, spec: RequestSpec) -> Optional[float]:
        timeout_ms = spec.timeout_ms if spec.timeout_ms is not None else self.timeout_ms
        if timeout_ms is None:
            return None
        return timeout_ms / 1000.0

    def _shape(self, spec: RequestSpec) -> tuple[str, str, dict[str, str], object]:
        """Resolve the final method, URL, headers and body for a spec."""
        method = spec.method.upper()
        url = spec.url
        headers = dict(spec.headers)
        data: object = None

        if method in ("GET", "HEAD"):
            query = spec.encoded_params()
            if query:
                url += ("&" if "?" in url else "?") + query
        elif method == "POST":
            query = spec.encoded_params()
            if query:
                data = query
                headers.setdefault("Content-Type", "application/x-www-form-urlencoded")
        elif method == "PUT":
            data = spec.body if spec.body is not None else b""
            if spec.content_length is not None:
                length = spec.content_length
            elif isinstance(data, bytes):
                length = len(data)
            else:
                length = None
            if length is not None:
                headers["Content-Length"] = str(length)
        else:
            data = spec.body

        return method, url, headers, data

    def send(self, spec: RequestSpec) -> ResponseEnvelope:
        """Send a request and return the parsed response.

        Args:
            spec: Request description

        Returns:
            ResponseEnvelope with lower-cased headers and the raw body

        Raises:
            TransportError: If the request cannot be completed
        """
        method, url, headers, data = self._shape(spec)
        logger.debug("Sending storage request", method=method, url=url)

        with tracer.start_as_current_span("swift.request") as span:
            span.set_attribute("http.method", method)
            span.set_attribute("http.url", url)
            started = time.monotonic()
            try:
                response = self.session.request(
                    method,
                    url,
                    headers=headers,
                    data=data,
                    timeout=self._timeout_seconds(spec),
                    allow_redirects=False,
                    verify=self.verify_tls,
                )
            except requests.RequestException as e:
                error_msg = f"{method} {url} failed: {e}"
                logger.error("Storage request failed", method=method, url=url, error=str(e))
                raise TransportError(error_msg, url=url) from e

            span.set_attribute("http.status_code", response.status_code)

        envelope = ResponseEnvelope.build(
            response.status_code,
            response.headers,
            response.content,
            url,
        )
        logger.info(
            "Storage request completed",
            method=method,
            url=url,
            status=envelope.status_code,
            elapsed_ms=int((time.monotonic() - started) * 1000),
        )
        return envelope
