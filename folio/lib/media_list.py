"""Project media lists: merged, positioned image and video sequences."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from folio.lib.resolver import (
    DEFAULT_TEMPLATES,
    CandidateList,
    MediaKind,
    UrlTemplates,
    normalize_identifier,
    resolve,
    split_reference,
)


@dataclass(frozen=True)
class MediaEntry:
    """One navigable item of a project's media carousel.

    ``url`` is set only for entries from older documents that point at a
    non-Drive location; it is then the entry's sole candidate. ``poster`` is
    a display-only still for video entries and never enters a fallback chain.
    """

    kind: MediaKind
    identifier: str
    position: int
    url: str | None = None
    poster: str | None = None

    def candidates(self, templates: UrlTemplates = DEFAULT_TEMPLATES) -> CandidateList:
        if self.url is not None:
            return (self.url,)
        return resolve(self.identifier, self.kind, templates)


MediaList = tuple[MediaEntry, ...]


def _valid(identifiers: Iterable[Any] | None) -> list[str]:
    if not identifiers:
        return []
    if isinstance(identifiers, str):
        identifiers = [identifiers]
    return [ident for ident in map(normalize_identifier, identifiers) if ident is not None]


def build(
    image_identifiers: Iterable[Any] | None,
    video_identifiers: Iterable[Any] | None,
) -> MediaList:
    """Merge image and video identifiers into one positioned sequence.

    Invalid identifiers are dropped. Images come first, then videos, each
    group in source order; positions count up from 0 over the result.
    """
    items = [(MediaKind.IMAGE, ident) for ident in _valid(image_identifiers)]
    items += [(MediaKind.VIDEO, ident) for ident in _valid(video_identifiers)]
    return tuple(
        MediaEntry(kind=kind, identifier=ident, position=position)
        for position, (kind, ident) in enumerate(items)
    )


def _single_media(project: Mapping[str, Any]) -> MediaList:
    if project.get("mediaType") == "video":
        kind = MediaKind.VIDEO
        value = project.get("mediaUrl")
        poster = normalize_identifier(project.get("thumbnailUrl"))
    else:
        kind = MediaKind.IMAGE
        value = project.get("mediaUrl") or project.get("imageUrl")
        poster = None

    identifier, direct_url = split_reference(value)
    if identifier is None:
        return ()
    return (MediaEntry(kind, identifier, 0, url=direct_url, poster=poster),)


def build_for_project(project: Mapping[str, Any]) -> MediaList:
    """Build the media list for a project mapping from a portfolio document.

    Reads ``imageIds``/``videoIds``. Documents that predate the id
    collections carry a single ``mediaUrl`` (or ``imageUrl``) whose kind is
    given by ``mediaType``; those hold full URLs, so Drive links are reduced
    to their identifier and other links are delivered as they are. A video's
    ``thumbnailUrl`` is kept as its poster.
    """
    images = project.get("imageIds")
    videos = project.get("videoIds")
    if images is None and videos is None:
        return _single_media(project)
    return build(images, videos)


def has_navigation(entries: MediaList) -> bool:
    """Whether next/previous controls should be shown."""
    return len(entries) > 1


def next_position(entries: MediaList, position: int) -> int:
    if not has_navigation(entries):
        return position
    return (position + 1) % len(entries)


def previous_position(entries: MediaList, position: int) -> int:
    if not has_navigation(entries):
        return position
    return (position - 1) % len(entries)
