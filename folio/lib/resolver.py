"""Resolve opaque file identifiers to candidate URLs.

A candidate list is ordered highest fidelity first. Images (and the image-like
kinds) get the direct view URL followed by a sized thumbnail; videos only have
an embeddable preview page.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any
from urllib.parse import parse_qs, urlsplit

CandidateList = tuple[str, ...]

DRIVE_HOSTS = frozenset({"drive.google.com", "docs.google.com"})
_DRIVE_PATH_ID = re.compile(r"/(?:file/)?d/([^/]+)")


class MediaKind(str, Enum):
    """Kinds of asset a portfolio document references."""

    IMAGE = "image"
    VIDEO = "video"
    ICON = "icon"
    AVATAR = "avatar"
    COVER = "cover"


@dataclass(frozen=True)
class UrlTemplates:
    """URL templates for the upstream blob store, keyed by ``{identifier}``."""

    view: str = "https://drive.google.com/uc?export=view&id={identifier}"
    thumbnail: str = "https://drive.google.com/thumbnail?id={identifier}&sz=w{size}"
    preview: str = "https://drive.google.com/file/d/{identifier}/preview"
    thumbnail_size: int = 1000

    def via_proxy(self, base_url: str) -> UrlTemplates:
        """Return templates whose direct view candidate goes through the asset proxy."""
        base = base_url.rstrip("/")
        return replace(self, view=f"{base}/asset/{{identifier}}")


DEFAULT_TEMPLATES = UrlTemplates()


def normalize_identifier(value: Any) -> str | None:
    """Return *value* stripped of whitespace, or ``None`` if it names no asset."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def resolve(
    identifier: str | None,
    kind: MediaKind,
    templates: UrlTemplates = DEFAULT_TEMPLATES,
) -> CandidateList:
    """Return the candidate URLs for an identifier of the given kind.

    An absent or blank identifier resolves to an empty tuple, which callers
    treat as "no asset available".
    """
    identifier = normalize_identifier(identifier)
    if identifier is None:
        return ()

    kind = MediaKind(kind)
    if kind is MediaKind.VIDEO:
        return (templates.preview.format(identifier=identifier),)

    return (
        templates.view.format(identifier=identifier),
        templates.thumbnail.format(identifier=identifier, size=templates.thumbnail_size),
    )


def is_absolute_url(value: str) -> bool:
    parts = urlsplit(value)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def drive_identifier(url: str) -> str | None:
    """Extract the file identifier from a Google Drive share or view URL.

    Understands ``?id=<id>`` (``uc``, ``open`` and ``thumbnail`` links) and
    ``/file/d/<id>/...`` paths. Returns ``None`` for anything else.
    """
    parts = urlsplit(url)
    if (parts.hostname or "").lower() not in DRIVE_HOSTS:
        return None

    query_ids = parse_qs(parts.query).get("id")
    if query_ids:
        return normalize_identifier(query_ids[0])

    match = _DRIVE_PATH_ID.search(parts.path)
    if match:
        return normalize_identifier(match.group(1))
    return None


def split_reference(value: Any) -> tuple[str | None, str | None]:
    """Split a legacy media field into ``(identifier, direct_url)``.

    Older documents store full URLs where newer ones store identifiers. A
    Drive URL yields its identifier; any other absolute URL is returned as
    the direct URL with the URL itself standing in as identifier. Plain
    values are treated as identifiers.
    """
    value = normalize_identifier(value)
    if value is None or not is_absolute_url(value):
        return value, None
    identifier = drive_identifier(value)
    if identifier is not None:
        return identifier, None
    return value, value


def resolve_reference(
    value: Any,
    kind: MediaKind,
    templates: UrlTemplates = DEFAULT_TEMPLATES,
) -> CandidateList:
    """Resolve a legacy field that holds either an identifier or a full URL.

    A non-Drive URL is its own and only candidate.
    """
    identifier, direct_url = split_reference(value)
    if direct_url is not None:
        return (direct_url,)
    return resolve(identifier, kind, templates)
