from __future__ import annotations

"""Generation menu flow.

Single-color strategies run immediately against the editor's pick color.
Palette-wide strategies first enter a *selection mode*: a
:class:`PendingIntent` waits for the user to click a target palette and can
be cancelled at any time with no side effects, since nothing has been
generated yet.

The ``modify`` option opens a :class:`ModificationSession`: the pick color
at the moment the session starts is the neutral reference, and every later
pick color is previewed as a palette-wide HSL shift relative to it.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from palette.generator import GenerationKind, SourceMode, apply_delta_to_palette
from palette.model import Color, Palette
from store.palette_store import PaletteStore

from .color_editor import ColorEditor

logger = logging.getLogger(__name__)


class IntentKind(Enum):
    VARIATIONS = "fromExisting"
    EXPAND = "expand"
    MODIFY = "modify"


@dataclass(frozen=True)
class PendingIntent:
    """A generation request waiting for its target palette."""

    kind: IntentKind


@dataclass
class ModificationSession:
    """Live recolor preview of one palette.

    Attributes
    ----------
    source:
        Palette being modified (left untouched in the store).
    neutral_hex:
        Pick color when the session started; the zero point of the shift.
    colors:
        Current preview, same ids and names as ``source.colors``.
    """

    source: Palette
    neutral_hex: str
    colors: Tuple[Color, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.colors:
            self.colors = self.source.colors

    def preview(self, current_hex: str) -> Tuple[Color, ...]:
        """Recompute the preview for ``current_hex``; malformed input keeps the last one."""
        shifted = apply_delta_to_palette(self.source.colors, self.neutral_hex, current_hex)
        if shifted or not self.source.colors:
            self.colors = tuple(shifted)
        return self.colors

    @property
    def result_name(self) -> str:
        return f"Modified {self.source.name}"


_IMMEDIATE = {kind.value: kind for kind in GenerationKind}
_DEFERRED = {kind.value: kind for kind in IntentKind}
_DEFERRED[SourceMode.VARIATIONS.value] = IntentKind.VARIATIONS


class GenerationWorkflow:
    """Routes generation menu options to the store."""

    def __init__(self, store: PaletteStore, editor: ColorEditor) -> None:
        self._store = store
        self._editor = editor
        self._pending: Optional[PendingIntent] = None
        self._session: Optional[ModificationSession] = None

    @property
    def pending(self) -> Optional[PendingIntent]:
        return self._pending

    @property
    def session(self) -> Optional[ModificationSession]:
        return self._session

    @property
    def busy(self) -> bool:
        """True while the menu should be disabled (selection or modification open)."""
        return self._pending is not None or self._session is not None

    def choose(self, option: str) -> Optional[Palette]:
        """Handle a menu option.

        Immediate options return the generated palette. Deferred options
        enter selection mode and return None. Unknown options, and any option
        while selection or modification is open, are ignored.
        """
        if self.busy:
            logger.debug("generation menu busy; ignoring %r", option)
            return None
        if option in _IMMEDIATE:
            return self._store.generate_palette(_IMMEDIATE[option], self._editor.current_color)
        if option in _DEFERRED:
            self._pending = PendingIntent(_DEFERRED[option])
            return None
        logger.debug("ignoring unknown generation option %r", option)
        return None

    def cancel(self) -> None:
        """Leave selection mode (or close the modification session) without changes."""
        if self._pending is not None:
            self._pending = None
            return
        self._session = None

    def select_palette(self, palette_id: str) -> Optional[Palette]:
        """Resolve the pending intent against ``palette_id``.

        Returns the generated palette for variations/expand; for modify the
        session is opened and None is returned.
        """
        intent = self._pending
        self._pending = None
        if intent is None:
            return None
        if intent.kind is IntentKind.MODIFY:
            source = self._store.get_palette(palette_id)
            if source is not None:
                self._session = ModificationSession(source, self._editor.current_color)
            return None
        mode = SourceMode.EXPAND if intent.kind is IntentKind.EXPAND else SourceMode.VARIATIONS
        return self._store.generate_from_palette(palette_id, mode)

    def preview(self) -> List[Color]:
        """Preview of the open modification session for the current pick color."""
        if self._session is None:
            return []
        return list(self._session.preview(self._editor.current_color))

    def save_modification(self) -> Optional[Palette]:
        """Store the preview as a new ``Modified <name>`` palette and close the session.

        A source without colors still yields an empty ``Modified <name>`` palette.
        """
        session = self._session
        if session is None:
            return None
        session.preview(self._editor.current_color)
        self._session = None
        if not session.colors:
            return self._store.create_palette(session.result_name)
        return self._store.add_generated_palette(session.result_name, list(session.colors))


__all__ = [
    "IntentKind",
    "PendingIntent",
    "ModificationSession",
    "GenerationWorkflow",
]
