"""Ambient presentation computed once per portfolio document.

Header background and avatar are document-wide concerns. Rather than have
the rendering tree poke at shared page styling, the document is reduced to a
single :class:`AmbientPresentation` value that is passed down.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from folio.lib.colors import decode_hex
from folio.lib.resolver import (
    DEFAULT_TEMPLATES,
    CandidateList,
    MediaKind,
    UrlTemplates,
    resolve,
    resolve_reference,
)

DEFAULT_HEADER_COLOR = "#6200ea"


@dataclass(frozen=True)
class AmbientPresentation:
    """Document-wide visual settings for the portfolio page."""

    background_candidates: CandidateList
    background_color: str
    avatar_candidates: CandidateList
    avatar_initials: str

    @property
    def has_background_image(self) -> bool:
        return bool(self.background_candidates)

    @property
    def has_avatar(self) -> bool:
        return bool(self.avatar_candidates)


def initials(name: Any) -> str:
    """Up to two uppercase initials for the avatar placeholder."""
    if not isinstance(name, str):
        return ""
    words = name.split()
    if len(words) == 1:
        return words[0][:2].upper()
    return "".join(word[0] for word in words[:2]).upper()


def _header_color(value: Any) -> str:
    # Packed ints come from the mobile editor, CSS strings from hand-written documents
    if isinstance(value, bool):
        return DEFAULT_HEADER_COLOR
    if isinstance(value, int):
        return decode_hex(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_HEADER_COLOR


def _asset_candidates(
    document: Mapping[str, Any],
    id_field: str,
    url_field: str,
    kind: MediaKind,
    templates: UrlTemplates,
) -> CandidateList:
    # The id field wins; the url field is what older documents carry
    candidates = resolve(document.get(id_field), kind, templates)
    if candidates:
        return candidates
    return resolve_reference(document.get(url_field), kind, templates)


def ambient_presentation(
    document: Mapping[str, Any],
    templates: UrlTemplates = DEFAULT_TEMPLATES,
) -> AmbientPresentation:
    """Reduce a portfolio document to its ambient presentation."""
    return AmbientPresentation(
        background_candidates=_asset_candidates(
            document, "headerBackgroundImageId", "headerBackgroundImage", MediaKind.COVER, templates
        ),
        background_color=_header_color(document.get("headerBackgroundColor")),
        avatar_candidates=_asset_candidates(
            document, "avatarId", "avatarUrl", MediaKind.AVATAR, templates
        ),
        avatar_initials=initials(document.get("name")),
    )
