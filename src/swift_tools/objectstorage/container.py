"""Container-scope storage operations.

A ``ContainerClient`` addresses objects relative to
``<storage url>/<container>/``. It shares the executor and auth session of
the account it came from rather than extending the account client.
"""

import json
import os
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlparse

from swift_tools.auth import AuthSession
from swift_tools.core import get_logger
from swift_tools.transport import RequestExecutor, ResponseEnvelope

from .base import ContainerDescriptor, StorageOperations
from .headers import OBJECT_META_PREFIX
from .tempurl import build_temp_url

logger = get_logger(__name__)

DIRECTORY_CONTENT_TYPE = "application/directory"
SYMLINK_CONTENT_TYPE = "x-storage/symlink"


class ContainerClient(StorageOperations):
    """Operations on the objects of one container."""

    def __init__(
        self,
        executor: RequestExecutor,
        session: AuthSession,
        container: Union[str, ContainerDescriptor],
        response_format: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        super().__init__(executor, session, response_format, timeout_ms)
        if isinstance(container, ContainerDescriptor):
            self.name = container.name
            self._descriptor: Optional[ContainerDescriptor] = container
        else:
            self.name = container
            self._descriptor = None
        self.url = f"{session.root_url}{self.name}/"

    @property
    def path(self) -> str:
        """URL path of the container, with a trailing slash."""
        return urlparse(self.url).path

    def get_info(self, refresh: bool = False) -> dict[str, str]:
        """Return the container's ``x-`` headers, cached until refreshed."""
        if self._descriptor is None or refresh:
            response = self._send("HEAD", self.url)
            self._expect(response, "getContainerInfo", 204)
            self._descriptor = ContainerDescriptor(
                name=self.name, url=self.url.rstrip("/"), metadata=response.x_headers()
            )
        return self._descriptor.metadata

    def list_files(
        self,
        limit: int = 10000,
        marker: Optional[str] = None,
        prefix: Optional[str] = None,
        path: Optional[str] = None,
        delimiter: Optional[str] = None,
        format: Optional[str] = None,
    ) -> Union[list[str], str]:
        """List object names, or the raw JSON/XML listing.

        Args:
            limit: Maximum number of objects
            marker: Return objects after this name
            prefix: Only objects whose name starts with this
            path: Only objects nested directly under this pseudo-directory
            delimiter: Roll names up to the first occurrence of this character
            format: '', 'json' or 'xml'; client default if omitted

        Returns:
            List of names for the plain format, trimmed raw payload otherwise
        """
        params = {
            "limit": limit,
            "marker": marker,
            "prefix": prefix,
            "path": path,
            "delimiter": delimiter,
        }
        return self._list(self.url, params, format, "listFiles")

    def get_file_info(self, name: str) -> dict[str, Any]:
        """Listing record (hash, bytes, content type, ...) for ``name``, or ``{}``."""
        listing = self.list_files(limit=1, marker="", prefix=name, format="json")
        records = json.loads(listing) if listing else []
        if isinstance(records, list) and records and isinstance(records[0], dict):
            return records[0]
        return {}

    def get_file(
        self, name: str, headers: Optional[Mapping[str, str]] = None
    ) -> ResponseEnvelope:
        """Download an object.

        Supported conditional headers are ``If-Match``, ``If-None-Match``,
        ``If-Modified-Since`` and ``If-Unmodified-Since``. The envelope is
        returned as received, so a 304 or 412 reaches the caller unchanged.
        """
        return self._send("GET", self.url + name, headers=headers)

    def put_file(
        self,
        local_path: str,
        remote_name: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ResponseEnvelope:
        """Upload a local file, streaming it from disk."""
        if remote_name is None:
            remote_name = os.path.basename(local_path)
        logger.info("Uploading file", container=self.name, name=remote_name)
        response = self._put_local_file(self.url + remote_name, local_path, headers)
        return self._expect(response, "putFile", 201)

    def put_file_contents(self, contents: bytes, remote_name: str) -> ResponseEnvelope:
        """Upload an in-memory buffer."""
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        logger.info("Uploading contents", container=self.name, name=remote_name)
        response = self._send(
            "PUT", self.url + remote_name, body=contents, content_length=len(contents)
        )
        return self._expect(response, "putFileContents", 201)

    def create_directory(self, name: str) -> ResponseEnvelope:
        """Create a directory marker object."""
        response = self._send(
            "PUT",
            self.url + name,
            headers={"Content-Type": DIRECTORY_CONTENT_TYPE},
            body=b"",
            content_length=0,
        )
        return self._expect(response, "createDirectory", 201)

    def create_link(self, link_path: str, target_path: str) -> int:
        """Create a symlink object resolved server-side to ``target_path``."""
        response = self._send(
            "PUT",
            self.url + link_path,
            headers={
                "X-Object-Meta-Location": self.path + target_path,
                "Content-Type": SYMLINK_CONTENT_TYPE,
                "Content-Length": "0",
            },
            body=b"",
            content_length=0,
        )
        return self._expect(response, "createLink", 201).status_code

    def set_object_metadata(self, name: str, headers: Mapping[str, str]) -> int:
        return self._set_metadata(
            self.url + name, headers, OBJECT_META_PREFIX, "setFileHeaders", 202, 204
        )

    def delete_file(self, name: str) -> ResponseEnvelope:
        logger.info("Deleting file", container=self.name, name=name)
        response = self._send("DELETE", self.url + name)
        return self._expect(response, "deleteFile", 204)

    def temp_url(
        self,
        key: str,
        name: str,
        expires_at: int,
        filename: Optional[str] = None,
        method: str = "GET",
    ) -> str:
        """Signed temp URL for an object of this container."""
        return build_temp_url(self.url, key, name, expires_at, filename, method)
