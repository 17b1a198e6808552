"""Account-scope storage operations.

An ``AccountClient`` works against the storage root returned by the auth
handshake: it lists and manages containers, sets account metadata and
configures the temp URL key.
"""

import json
import os
from typing import Any, Mapping, Optional, Union

from swift_tools.auth import AuthSession
from swift_tools.core import get_logger
from swift_tools.core.exceptions import ProtocolError, ValidationError
from swift_tools.transport import RequestExecutor, ResponseEnvelope

from .base import ContainerDescriptor, StorageOperations
from .container import ContainerClient
from .headers import (
    ACCEPT_BY_FORMAT,
    ACCOUNT_META_PREFIX,
    CONTAINER_META_PREFIX,
    split_listing,
)
from .tempurl import build_temp_url

logger = get_logger(__name__)

ARCHIVE_EXTENSIONS = ("tar", "tar.gz", "tar.bz2")


def archive_extension(archive_path: str) -> str:
    """Return the ``extract-archive`` value for a local archive name."""
    name = os.path.basename(archive_path).lower()
    for extension in sorted(ARCHIVE_EXTENSIONS, key=len, reverse=True):
        if name.endswith("." + extension):
            return extension
    if name.endswith(".tgz"):
        return "tar.gz"
    _, extension = os.path.splitext(name)
    if not extension:
        raise ValidationError(f"Cannot determine archive type of '{archive_path}'")
    return extension.lstrip(".")


def decode_json_report(text: str) -> dict[str, Any]:
    """Decode a JSON extraction report; an empty body is an empty report."""
    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Archive report is not valid JSON: {e}") from e


class AccountClient(StorageOperations):
    """Operations on the storage account root."""

    def __init__(
        self,
        executor: RequestExecutor,
        session: AuthSession,
        response_format: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        super().__init__(executor, session, response_format, timeout_ms)
        self.url = session.root_url
        self._info: Optional[dict[str, str]] = None

    def get_account_info(self, refresh: bool = False) -> dict[str, str]:
        """Return the account's ``x-`` headers, cached until refreshed."""
        if self._info is None or refresh:
            response = self._send("HEAD", self.url)
            self._expect(response, "getAccountInfo", 204)
            self._info = response.x_headers()
        return self._info

    def list_containers(
        self,
        limit: int = 10000,
        marker: str = "",
        format: Optional[str] = None,
    ) -> Union[list[str], str]:
        """List container names, or the raw JSON/XML listing.

        Args:
            limit: Maximum number of containers
            marker: Return containers after this name
            format: '', 'json' or 'xml'; client default if omitted

        Returns:
            List of names for the plain format, trimmed raw payload otherwise
        """
        logger.info("Listing containers", limit=limit, marker=marker)
        return self._list(
            self.url, {"limit": limit, "marker": marker}, format, "listContainers"
        )

    def create_container(
        self, name: str, headers: Optional[Mapping[str, str]] = None
    ) -> ContainerDescriptor:
        """Create a container and return its freshly fetched descriptor.

        ``headers`` may carry e.g. ``X-Container-Meta-Type: public``.
        """
        logger.info("Creating container", container=name)
        response = self._send("PUT", self.url + name, headers=headers)
        self._expect(response, "createContainer", 201, 202)
        return self.get_container(name)

    def get_container(self, name: str) -> ContainerDescriptor:
        response = self._send("HEAD", self.url + name)
        self._expect(response, "getContainer", 204)
        return ContainerDescriptor(
            name=name, url=self.url + name, metadata=response.x_headers()
        )

    def open_container(self, name: str) -> ContainerClient:
        """Return a client scoped to an existing container."""
        return ContainerClient(
            self.executor,
            self.session,
            self.get_container(name),
            response_format=self.format,
            timeout_ms=self.timeout_ms,
        )

    def delete(self, name: str) -> ResponseEnvelope:
        """Delete an empty container, or an object given as ``container/object``."""
        logger.info("Deleting resource", name=name)
        response = self._send("DELETE", self.url + name)
        return self._expect(response, "deleteResource", 204)

    def copy(self, origin: str, destination: str) -> ResponseEnvelope:
        """Server-side copy of ``origin`` to ``destination`` (both account relative)."""
        logger.info("Copying object", origin=origin, destination=destination)
        return self._send(
            "COPY",
            self.url + origin,
            headers={"Destination": self.session.root_path + destination},
        )

    def set_temp_url_key(self, key: str) -> int:
        """Set ``X-Account-Meta-Temp-URL-Key``; needed once before temp URLs work."""
        response = self._send("POST", self.url, headers={"X-Account-Meta-Temp-URL-Key": key})
        return self._expect(response, "setAccountMetaTempURLKey", 202).status_code

    def set_account_metadata(self, headers: Mapping[str, str]) -> int:
        return self._set_metadata(
            self.url, headers, ACCOUNT_META_PREFIX, "setAccountMetadata", 202, 204
        )

    def set_container_metadata(self, name: str, headers: Mapping[str, str]) -> int:
        return self._set_metadata(
            self.url + name, headers, CONTAINER_META_PREFIX, "setContainerMetaHeaders", 204
        )

    def put_archive(
        self, archive_path: str, extract_path: str = ""
    ) -> Union[list[str], dict[str, Any], str]:
        """Upload an archive and have the server extract it under ``extract_path``.

        Returns:
            Lines of the plain report, the decoded JSON report, or the raw XML
        """
        extension = archive_extension(archive_path)
        url = f"{self.url}{extract_path}?extract-archive={extension}"
        logger.info("Uploading archive", archive=archive_path, extract_path=extract_path)

        response = self._put_local_file(
            url, archive_path, headers={"Accept": ACCEPT_BY_FORMAT[self.format]}
        )
        self._expect(response, "putArchive", 200, 201)

        if self.format == "json":
            return decode_json_report(response.text)
        return split_listing(response.text, self.format)

    def temp_url(
        self,
        key: str,
        path: str,
        expires_at: int,
        filename: Optional[str] = None,
        method: str = "GET",
    ) -> str:
        """Signed temp URL for ``path`` (``container/object``)."""
        return build_temp_url(self.url, key, path, expires_at, filename, method)
