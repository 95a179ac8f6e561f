from __future__ import annotations

"""Current pick color and chip editing.

Raw text from RGB inputs is parsed leniently: a leading integer/float is
used, anything unparsable reads as 0, and the result is clamped to the
channel range.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Optional

from palette.colorspace import (
    HSL,
    RGB,
    clamp,
    get_contrast_color,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    normalize_hex,
    rgb_to_hex,
)
from palette.model import Color, Palette
from palette.naming import name_for_hex
from store.palette_store import PaletteStore

logger = logging.getLogger(__name__)

DEFAULT_PICK_COLOR = "#ff0000"
CHANNELS = ("r", "g", "b")

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_int_prefix(value: object) -> int:
    """Leading integer of ``value`` (``"12px"`` -> 12), 0 when there is none."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else 0
    m = _INT_PREFIX.match(str(value))
    return int(m.group(0)) if m else 0


def parse_float_prefix(value: object) -> float:
    """Leading float of ``value``, 0.0 when there is none."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if math.isfinite(value) else 0.0
    m = _FLOAT_PREFIX.match(str(value))
    return float(m.group(0)) if m else 0.0


@dataclass(frozen=True)
class EditingChip:
    """A color chip being edited in place."""

    palette_id: str
    color_id: str
    original_pick: str


class ColorEditor:
    """Holds the current pick color and the chip being edited, if any."""

    def __init__(self, current_color: str = DEFAULT_PICK_COLOR) -> None:
        self._current = normalize_hex(current_color) or DEFAULT_PICK_COLOR
        self._editing: Optional[EditingChip] = None
        self._edit_name = ""

    # --- current color ---
    @property
    def current_color(self) -> str:
        return self._current

    def set_current_color(self, hex_str: str) -> bool:
        """Set the pick color; malformed hex is ignored (returns False)."""
        norm = normalize_hex(hex_str)
        if norm is None:
            logger.debug("ignoring malformed pick color %r", hex_str)
            return False
        self._current = norm
        return True

    @property
    def rgb(self) -> RGB:
        rgb = hex_to_rgb(self._current)
        assert rgb is not None
        return rgb

    @property
    def normalized_rgb(self) -> tuple[float, float, float]:
        r, g, b = self.rgb
        return (r / 255.0, g / 255.0, b / 255.0)

    @property
    def hsl(self) -> HSL:
        hsl = hex_to_hsl(self._current)
        assert hsl is not None
        return hsl

    @property
    def contrast_color(self) -> str:
        return get_contrast_color(self._current)

    def set_rgb_component(self, component: str, value: object) -> str:
        """Update one 0-255 channel from raw input and return the new hex."""
        if component not in CHANNELS:
            raise ValueError(f"unknown channel: {component!r}")
        channel = int(clamp(parse_int_prefix(value), 0, 255))
        values = self.rgb._replace(**{component: channel})
        self._current = rgb_to_hex(*values)
        return self._current

    def set_normalized_component(self, component: str, value: object) -> str:
        """Update one channel from a 0-1 value and return the new hex."""
        if component not in CHANNELS:
            raise ValueError(f"unknown channel: {component!r}")
        unit = clamp(parse_float_prefix(value), 0.0, 1.0)
        channel = int(unit * 255.0 + 0.5)
        values = self.rgb._replace(**{component: channel})
        self._current = rgb_to_hex(*values)
        return self._current

    def set_hsl(self, h: float, s: float, l: float) -> str:
        """Slider update; saturation and lightness are clamped to [0, 100]."""
        self._current = hsl_to_hex(h, clamp(s, 0.0, 100.0), clamp(l, 0.0, 100.0))
        return self._current

    def current_name(self, existing_names: frozenset[str] = frozenset()) -> str:
        """Name shown for the pick color: the edit name while editing a chip."""
        if self._editing is not None:
            return self._edit_name
        return name_for_hex(self._current, existing_names)

    # --- chip editing ---
    @property
    def editing(self) -> Optional[EditingChip]:
        return self._editing

    @property
    def edit_name(self) -> str:
        return self._edit_name

    def set_edit_name(self, name: str) -> None:
        self._edit_name = name

    def pick(self, color: Color) -> None:
        """Load a chip's color as the pick color without starting an edit."""
        self._current = color.hex

    def begin_edit(self, palette: Palette, color_id: str) -> bool:
        color = palette.find_color(color_id)
        if color is None:
            return False
        original = self._editing.original_pick if self._editing else self._current
        self._editing = EditingChip(palette.id, color.id, original)
        self._current = color.hex
        self._edit_name = color.name or name_for_hex(color.hex)
        return True

    def commit_edit(self, store: PaletteStore) -> Optional[Palette]:
        """Write the pick color and edit name back into the chip."""
        chip = self._editing
        if chip is None:
            return None
        updated = store.update_color(
            chip.palette_id, chip.color_id, hex=self._current, name=self._edit_name
        )
        self._editing = None
        return updated

    def save_name(self, store: PaletteStore) -> Optional[Palette]:
        """Write only the edit name back into the chip being edited."""
        chip = self._editing
        if chip is None:
            return None
        return store.update_color(chip.palette_id, chip.color_id, name=self._edit_name)

    def cancel_edit(self) -> None:
        """Drop the edit and restore the pick color from before it started."""
        chip = self._editing
        if chip is None:
            return
        self._current = chip.original_pick
        self._editing = None
        self._edit_name = ""

    def add_current_to(self, store: PaletteStore, palette_id: str) -> Optional[Palette]:
        """Append the pick color to a palette with a generated, unused name."""
        return store.add_color(palette_id, current_hex=self._current)


__all__ = [
    "ColorEditor",
    "EditingChip",
    "DEFAULT_PICK_COLOR",
    "parse_int_prefix",
    "parse_float_prefix",
]
