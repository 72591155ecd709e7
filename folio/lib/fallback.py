"""Per-slot delivery fallback state machine.

Every rendered asset slot walks its resolver candidate list in order. The
rendering boundary reports each delivery outcome; a failure advances to the
next candidate and a failure on the last candidate ends in the terminal
placeholder state. A success freezes the slot on the candidate that loaded.

Usage:
    from folio.lib.fallback import DeliveryOutcome, FallbackController

    slots = FallbackController()
    state = slots.mount("project-3/media-0", "1AbC", MediaKind.IMAGE)
    img.src = state.url

    # the <img> reported an error
    state = slots.report("project-3/media-0", DeliveryOutcome.FAILURE)
    if state.show_placeholder:
        ...
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from folio.lib.resolver import (
    DEFAULT_TEMPLATES,
    CandidateList,
    MediaKind,
    UrlTemplates,
    normalize_identifier,
    resolve,
)

if TYPE_CHECKING:
    from folio.lib.media_list import MediaEntry


class DeliveryOutcome(str, Enum):
    """Outcome signal reported by the rendering boundary for one attempt."""

    SUCCESS = "success"
    FAILURE = "failure"


class FallbackPhase(str, Enum):
    PENDING = "pending"
    SETTLED = "settled"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class FallbackState:
    """Immutable fallback state for a single asset slot."""

    identifier: str | None
    kind: MediaKind
    candidates: CandidateList
    index: int = 0
    terminal: bool = False
    settled: bool = False

    @property
    def phase(self) -> FallbackPhase:
        if self.terminal:
            return FallbackPhase.TERMINAL
        if self.settled:
            return FallbackPhase.SETTLED
        return FallbackPhase.PENDING

    @property
    def url(self) -> str | None:
        """The candidate URL the slot should currently deliver, if any."""
        if self.terminal:
            return None
        return self.candidates[self.index]

    @property
    def show_placeholder(self) -> bool:
        return self.terminal


def initial_state(
    identifier: str | None,
    kind: MediaKind,
    templates: UrlTemplates = DEFAULT_TEMPLATES,
    candidates: CandidateList | None = None,
) -> FallbackState:
    """Create the state for a freshly rendered slot.

    Slots without any candidate start out terminal so the caller renders its
    placeholder straight away. *candidates* replaces resolution for entries
    that already know their URLs (see ``MediaEntry.candidates``).
    """
    kind = MediaKind(kind)
    if candidates is None:
        candidates = resolve(identifier, kind, templates)
    return FallbackState(
        identifier=normalize_identifier(identifier),
        kind=kind,
        candidates=candidates,
        terminal=not candidates,
    )


def reduce(state: FallbackState, outcome: DeliveryOutcome) -> FallbackState:
    """Apply a delivery outcome to a slot state and return the next state."""
    if state.terminal or state.settled:
        return state

    if DeliveryOutcome(outcome) is DeliveryOutcome.SUCCESS:
        return replace(state, settled=True)

    next_index = state.index + 1
    if next_index < len(state.candidates):
        return replace(state, index=next_index)
    return replace(state, terminal=True)


class FallbackController:
    """Registry of independent fallback states keyed by slot identity."""

    def __init__(self, templates: UrlTemplates = DEFAULT_TEMPLATES) -> None:
        self._templates = templates
        self._slots: dict[Hashable, FallbackState] = {}

    def mount(
        self,
        slot_id: Hashable,
        identifier: str | None,
        kind: MediaKind,
        candidates: CandidateList | None = None,
    ) -> FallbackState:
        """Register a slot, keeping its state if it already shows the same asset."""
        kind = MediaKind(kind)
        current = self._slots.get(slot_id)
        if (
            current is not None
            and current.identifier == normalize_identifier(identifier)
            and current.kind is kind
        ):
            return current

        state = initial_state(identifier, kind, self._templates, candidates)
        self._slots[slot_id] = state
        return state

    def mount_entry(self, slot_id: Hashable, entry: MediaEntry) -> FallbackState:
        """Register a slot for a media list entry."""
        return self.mount(
            slot_id, entry.identifier, entry.kind, entry.candidates(self._templates)
        )

    def report(self, slot_id: Hashable, outcome: DeliveryOutcome) -> FallbackState:
        """Feed a delivery outcome for a mounted slot.

        Raises:
            KeyError: If the slot is not mounted.
        """
        state = reduce(self._slots[slot_id], outcome)
        self._slots[slot_id] = state
        return state

    def state(self, slot_id: Hashable) -> FallbackState | None:
        return self._slots.get(slot_id)

    def unmount(self, slot_id: Hashable) -> None:
        self._slots.pop(slot_id, None)

    def __contains__(self, slot_id: object) -> bool:
        return slot_id in self._slots

    def __len__(self) -> int:
        return len(self._slots)
