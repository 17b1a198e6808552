"""Request plumbing shared by the account and container clients."""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from swift_tools.auth import AuthSession
from swift_tools.core import get_logger, settings
from swift_tools.core.exceptions import StorageError, ValidationError
from swift_tools.transport import RequestExecutor, RequestSpec, ResponseEnvelope

from .headers import FORMATS, merge_headers, select_prefixed, split_listing

logger = get_logger(__name__)


@dataclass
class ContainerDescriptor:
    """Name, URL and ``x-`` metadata of a container."""

    name: str
    url: str
    metadata: dict[str, str] = field(default_factory=dict)


def resolve_format(output_format: Optional[str], default: str) -> str:
    if output_format is None:
        return default
    if output_format not in FORMATS:
        raise ValidationError(
            f"Invalid format: {output_format!r}. Must be '', 'json' or 'xml'"
        )
    return output_format


class StorageOperations:
    """Request plumbing shared by the account and container clients."""

    def __init__(
        self,
        executor: RequestExecutor,
        session: AuthSession,
        response_format: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        self.executor = executor
        self.session = session
        self.format = resolve_format(response_format, settings.response_format)
        self.timeout_ms = timeout_ms

    def _send(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        body=None,
        content_length: Optional[int] = None,
    ) -> ResponseEnvelope:
        return self.executor.send(
            RequestSpec(
                method=method,
                url=url,
                headers=merge_headers(headers, self.session.auth_headers()),
                query_params=dict(params or {}),
                body=body,
                content_length=content_length,
                timeout_ms=self.timeout_ms,
            )
        )

    @staticmethod
    def _expect(
        response: ResponseEnvelope, operation: str, *codes: int
    ) -> ResponseEnvelope:
        if response.status_code not in codes:
            logger.warning(
                "Unexpected storage response",
                operation=operation,
                status=response.status_code,
                expected=list(codes),
            )
            raise StorageError(response.status_code, operation)
        return response

    def _put_local_file(
        self,
        url: str,
        local_path: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ResponseEnvelope:
        if not os.path.isfile(local_path):
            raise ValidationError(f"File '{local_path}' does not exist")
        with open(local_path, "rb") as fp:
            return self._send(
                "PUT",
                url,
                headers=headers,
                body=fp,
                content_length=os.fstat(fp.fileno()).st_size,
            )

    def _list(
        self,
        url: str,
        params: dict[str, Any],
        output_format: Optional[str],
        operation: str,
    ) -> Union[list[str], str]:
        params["format"] = resolve_format(output_format, self.format)
        response = self._send("GET", url, params=params)
        self._expect(response, operation, 200, 204)
        return split_listing(response.text, params["format"])

    def _set_metadata(
        self, url: str, headers: Mapping[str, str], prefix: str, operation: str, *codes: int
    ) -> int:
        response = self._send("POST", url, headers=select_prefixed(headers, prefix))
        return self._expect(response, operation, *codes).status_code
