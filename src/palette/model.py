from __future__ import annotations

"""Immutable color and palette records.

This module defines :class:`Color` and :class:`Palette`. Both are frozen
dataclasses; mutation happens by building a new value (see the ``with_*``
helpers), which lets the store hand out snapshots without copying.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from .colorspace import normalize_hex


@dataclass(frozen=True)
class Color:
    """A named color inside a palette.

    Attributes
    ----------
    id:
        Opaque token, unique within the owning palette.
    hex:
        Normalized lowercase ``#rrggbb``. Any accepted input spelling
        (``"FF0000"``, ``"#Ff0000"``) is normalized on construction.
    name:
        Display name, possibly empty.
    """

    id: str
    hex: str
    name: str = ""

    def __post_init__(self) -> None:
        norm = normalize_hex(self.hex)
        if norm is None:
            raise ValueError(f"invalid hex color: {self.hex!r}")
        object.__setattr__(self, "hex", norm)
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "name", "" if self.name is None else str(self.name))

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "hex": self.hex, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Color":
        return cls(id=str(data["id"]), hex=data["hex"], name=data.get("name") or "")


@dataclass(frozen=True)
class Palette:
    """An ordered, named sequence of colors.

    ``colors`` order is the display and export order.
    """

    id: str
    name: str
    colors: Tuple[Color, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        name = str(self.name).strip() if self.name is not None else ""
        if not name:
            raise ValueError("palette name must not be empty")
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "colors", tuple(self.colors))

    # --- lookups ---
    def index_of(self, color_id: str) -> int:
        """Index of ``color_id`` or -1."""
        for i, c in enumerate(self.colors):
            if c.id == color_id:
                return i
        return -1

    def find_color(self, color_id: str) -> Optional[Color]:
        idx = self.index_of(color_id)
        return self.colors[idx] if idx >= 0 else None

    def color_names(self) -> frozenset[str]:
        return frozenset(c.name for c in self.colors if c.name)

    def color_ids(self) -> frozenset[str]:
        return frozenset(c.id for c in self.colors)

    # --- derived values ---
    def with_colors(self, colors: Iterable[Color]) -> "Palette":
        return replace(self, colors=tuple(colors))

    def appended(self, color: Color) -> "Palette":
        return self.with_colors(self.colors + (color,))

    def without(self, color_id: str) -> "Palette":
        return self.with_colors(c for c in self.colors if c.id != color_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "colors": [c.to_dict() for c in self.colors],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Palette":
        colors = tuple(Color.from_dict(c) for c in data.get("colors") or [])
        return cls(id=str(data["id"]), name=data["name"], colors=colors)


__all__ = ["Color", "Palette"]
