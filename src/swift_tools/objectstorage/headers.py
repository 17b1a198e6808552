"""Header conventions shared by account and container operations."""

from typing import Mapping, Optional

from swift_tools.transport.parsing import select_prefixed

__all__ = [
    "ACCEPT_BY_FORMAT",
    "ACCOUNT_META_PREFIX",
    "CONTAINER_META_PREFIX",
    "FORMATS",
    "OBJECT_META_PREFIX",
    "merge_headers",
    "select_prefixed",
    "split_listing",
]

ACCOUNT_META_PREFIX = "X-Account-Meta-"
CONTAINER_META_PREFIX = "X-Container-Meta-"
OBJECT_META_PREFIX = "X-Object-Meta-"

FORMATS = ("", "json", "xml")

ACCEPT_BY_FORMAT = {
    "": "text/plain",
    "json": "application/json",
    "xml": "application/xml",
}


def merge_headers(*groups: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Merge header mappings left to right, later groups winning."""
    merged: dict[str, str] = {}
    for group in groups:
        if group:
            merged.update(group)
    return merged


def split_listing(body: str, output_format: str):
    """Turn a listing body into names (plain) or the trimmed raw payload."""
    trimmed = body.strip()
    if output_format == "":
        if not trimmed:
            return []
        return [line.strip() for line in trimmed.split("\n")]
    return trimmed
