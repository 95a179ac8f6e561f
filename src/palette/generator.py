from __future__ import annotations

"""Palette generation strategies.

Every strategy returns a list of :class:`palette.model.Color`. Ids come from
an injected :data:`util.ids.IdFactory`; the random strategies draw from an
injected ``numpy.random.Generator`` so results are reproducible with a seeded
generator.

Malformed hex input never raises: the offending source item is skipped, and
a batch with no usable input yields ``[]``.

Policies
--------
shades:
    9 lightness steps 10, 20, ..., 90 at the base hue and saturation.
complements:
    Hues ``h, h+180, h+120, h+240`` (base, complement, triad), each as
    darker / base / lighter (lightness -15 / 0 / +15, clamped to [10, 90]).
    12 colors.
random_palette:
    5 equal hue sectors, one color per sector. Saturation is an integer in
    [40, 100), lightness an integer in [30, 70).
expand_from_palette:
    Per source color: darker, original, lighter (lightness -20 / 0 / +20,
    clamped to [10, 90]), then hue -30 and +30 degrees.
jitter_palette:
    Per source color: lightness + U(-15, 15) clamped to [10, 90],
    saturation + U(-10, 10) clamped to [10, 100]; hue unchanged.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from util.ids import IdFactory, uuid_ids

from .colorspace import HSL, clamp, hex_to_hsl, hsl_to_hex, normalize_hex, normalize_hue
from .model import Color
from .naming import assign_name

logger = logging.getLogger(__name__)

ColorSource = Union[Color, str]

LIGHTNESS_FLOOR = 10.0
LIGHTNESS_CEIL = 90.0

SHADE_LIGHTNESS_STEPS: Tuple[float, ...] = tuple(float(v) for v in range(10, 91, 10))

COMPLEMENT_HUE_OFFSETS: Tuple[float, ...] = (0.0, 180.0, 120.0, 240.0)
COMPLEMENT_LIGHTNESS_OFFSETS: Tuple[float, ...] = (-15.0, 0.0, 15.0)

RANDOM_SECTORS = 5
RANDOM_SATURATION_RANGE = (40, 100)
RANDOM_LIGHTNESS_RANGE = (30, 70)

JITTER_LIGHTNESS_SPAN = 15.0
JITTER_SATURATION_SPAN = 10.0
JITTER_SATURATION_FLOOR = 10.0


@dataclass(frozen=True)
class Variation:
    """Offset applied to a source color by the shared variation kernel."""

    hue_offset: float = 0.0
    lightness_offset: float = 0.0

    @property
    def is_identity(self) -> bool:
        return self.hue_offset == 0.0 and self.lightness_offset == 0.0


EXPAND_VARIATIONS: Tuple[Variation, ...] = (
    Variation(lightness_offset=-20.0),
    Variation(),
    Variation(lightness_offset=20.0),
    Variation(hue_offset=-30.0),
    Variation(hue_offset=30.0),
)

COMPLEMENT_VARIATIONS: Tuple[Variation, ...] = tuple(
    Variation(hue_offset=dh, lightness_offset=dl)
    for dh in COMPLEMENT_HUE_OFFSETS
    for dl in COMPLEMENT_LIGHTNESS_OFFSETS
)


class GenerationKind(Enum):
    """Strategies that start from a single base color (or none)."""

    SHADES = "shades"
    COMPLEMENTS = "complements"
    RANDOM = "random"


class SourceMode(Enum):
    """Strategies that start from an existing palette."""

    VARIATIONS = "variations"
    EXPAND = "expand"


# --- helpers ---
def _source_hex(item: ColorSource) -> Optional[str]:
    if isinstance(item, Color):
        return item.hex
    return normalize_hex(item) if isinstance(item, str) else None


def _vary(hsl: HSL, variation: Variation) -> HSL:
    return HSL(
        normalize_hue(hsl.h + variation.hue_offset),
        hsl.s,
        clamp(hsl.l + variation.lightness_offset, LIGHTNESS_FLOOR, LIGHTNESS_CEIL),
    )


def _variation_kernel(
    base_hex: str, variations: Sequence[Variation]
) -> List[Tuple[str, HSL]]:
    """Apply ``variations`` to one color; the identity keeps the exact hex."""
    hsl = hex_to_hsl(base_hex)
    if hsl is None:
        return []
    out: List[Tuple[str, HSL]] = []
    for v in variations:
        if v.is_identity:
            out.append((base_hex, hsl))
            continue
        varied = _vary(hsl, v)
        out.append((hsl_to_hex(*varied), varied))
    return out


def _materialize(
    samples: Iterable[Tuple[str, HSL]],
    ids: IdFactory,
    taken: FrozenSet[str] = frozenset(),
) -> List[Color]:
    """Turn (hex, hsl) samples into named colors, names unique in the batch."""
    colors: List[Color] = []
    for hex_value, hsl in samples:
        name, taken = assign_name(hsl.h, hsl.s, hsl.l, taken)
        colors.append(Color(id=ids(), hex=hex_value, name=name))
    return colors


def name_colors(hexes: Iterable[str], ids: IdFactory | None = None) -> List[Color]:
    """Wrap raw hex values as named colors, skipping malformed entries."""
    ids = ids or uuid_ids()
    samples: List[Tuple[str, HSL]] = []
    for value in hexes:
        norm = normalize_hex(value)
        hsl = hex_to_hsl(value)
        if norm is None or hsl is None:
            logger.debug("name_colors: skipping malformed hex %r", value)
            continue
        samples.append((norm, hsl))
    return _materialize(samples, ids)


# --- single-color strategies ---
def shades(base_hex: str, *, ids: IdFactory | None = None) -> List[Color]:
    """Lightness ladder at constant hue and saturation."""
    hsl = hex_to_hsl(base_hex)
    if hsl is None:
        return []
    ids = ids or uuid_ids()
    samples = []
    for light in SHADE_LIGHTNESS_STEPS:
        sample = HSL(hsl.h, hsl.s, light)
        samples.append((hsl_to_hex(*sample), sample))
    return _materialize(samples, ids)


def complements(base_hex: str, *, ids: IdFactory | None = None) -> List[Color]:
    """Base, complementary and triadic hues, each in three lightness variants."""
    norm = normalize_hex(base_hex)
    if norm is None:
        return []
    return _materialize(_variation_kernel(norm, COMPLEMENT_VARIATIONS), ids or uuid_ids())


def random_palette(
    rng: np.random.Generator | None = None,
    *,
    ids: IdFactory | None = None,
    sectors: int = RANDOM_SECTORS,
) -> List[Color]:
    """One random color per equal hue sector, so hues spread around the wheel."""
    if sectors <= 0:
        return []
    rng = rng if rng is not None else np.random.default_rng()
    width = 360.0 / sectors
    s_lo, s_hi = RANDOM_SATURATION_RANGE
    l_lo, l_hi = RANDOM_LIGHTNESS_RANGE
    samples = []
    for i in range(sectors):
        hue = float(rng.uniform(i * width, (i + 1) * width))
        sat = float(rng.integers(s_lo, s_hi))
        light = float(rng.integers(l_lo, l_hi))
        sample = HSL(normalize_hue(hue), sat, light)
        samples.append((hsl_to_hex(*sample), sample))
    return _materialize(samples, ids or uuid_ids())


# --- palette-wide strategies ---
def expand_from_palette(
    source_colors: Iterable[ColorSource], *, ids: IdFactory | None = None
) -> List[Color]:
    """Family of variations per source color, concatenated in source order."""
    samples: List[Tuple[str, HSL]] = []
    for item in source_colors:
        hex_value = _source_hex(item)
        family = _variation_kernel(hex_value, EXPAND_VARIATIONS) if hex_value else []
        if not family:
            logger.debug("expand_from_palette: skipping malformed source %r", item)
            continue
        samples.extend(family)
    return _materialize(samples, ids or uuid_ids())


def jitter_palette(
    source_colors: Iterable[ColorSource],
    rng: np.random.Generator | None = None,
    *,
    ids: IdFactory | None = None,
) -> List[Color]:
    """Randomly nudge lightness and saturation of every source color."""
    rng = rng if rng is not None else np.random.default_rng()
    samples: List[Tuple[str, HSL]] = []
    for item in source_colors:
        hex_value = _source_hex(item)
        hsl = hex_to_hsl(hex_value) if hex_value else None
        if hsl is None:
            logger.debug("jitter_palette: skipping malformed source %r", item)
            continue
        dl = float(rng.uniform(-JITTER_LIGHTNESS_SPAN, JITTER_LIGHTNESS_SPAN))
        ds = float(rng.uniform(-JITTER_SATURATION_SPAN, JITTER_SATURATION_SPAN))
        sample = HSL(
            hsl.h,
            clamp(hsl.s + ds, JITTER_SATURATION_FLOOR, 100.0),
            clamp(hsl.l + dl, LIGHTNESS_FLOOR, LIGHTNESS_CEIL),
        )
        samples.append((hsl_to_hex(*sample), sample))
    return _materialize(samples, ids or uuid_ids())


def apply_delta_to_palette(
    original_colors: Sequence[Color], neutral_hex: str, current_hex: str
) -> List[Color]:
    """Shift every color by ``HSL(current) - HSL(neutral)``.

    Hue wraps modulo 360, saturation and lightness are clamped to [0, 100].
    Ids and names are kept; only ``hex`` changes. A zero delta returns the
    originals unchanged. If either reference color is malformed the delta is
    undefined and ``[]`` is returned.
    """
    neutral = hex_to_hsl(neutral_hex)
    current = hex_to_hsl(current_hex)
    if neutral is None or current is None:
        return []
    dh = current.h - neutral.h
    ds = current.s - neutral.s
    dl = current.l - neutral.l
    if dh == 0.0 and ds == 0.0 and dl == 0.0:
        return list(original_colors)

    shifted: List[Color] = []
    for color in original_colors:
        hsl = hex_to_hsl(color.hex)
        if hsl is None:
            continue
        new_hex = hsl_to_hex(
            normalize_hue(hsl.h + dh),
            clamp(hsl.s + ds, 0.0, 100.0),
            clamp(hsl.l + dl, 0.0, 100.0),
        )
        shifted.append(Color(id=color.id, hex=new_hex, name=color.name))
    return shifted


# --- dispatch ---
def generate(
    kind: GenerationKind | str,
    base_hex: str,
    *,
    rng: np.random.Generator | None = None,
    ids: IdFactory | None = None,
) -> List[Color]:
    """Run a single-color strategy by kind (``"shades"``, ``"complements"``, ``"random"``)."""
    kind = GenerationKind(kind)
    if kind is GenerationKind.SHADES:
        return shades(base_hex, ids=ids)
    if kind is GenerationKind.COMPLEMENTS:
        return complements(base_hex, ids=ids)
    return random_palette(rng, ids=ids)


def generate_from_source(
    mode: SourceMode | str,
    source_colors: Sequence[ColorSource],
    *,
    rng: np.random.Generator | None = None,
    ids: IdFactory | None = None,
) -> List[Color]:
    """Run a palette-wide strategy by mode (``"variations"`` or ``"expand"``)."""
    mode = SourceMode(mode)
    if mode is SourceMode.EXPAND:
        return expand_from_palette(source_colors, ids=ids)
    return jitter_palette(source_colors, rng, ids=ids)


def generated_palette_name(kind: GenerationKind | str) -> str:
    """Display name for a palette produced by :func:`generate`."""
    value = GenerationKind(kind).value
    return f"Generated {value[:1].upper()}{value[1:]}"


__all__ = [
    "GenerationKind",
    "SourceMode",
    "Variation",
    "SHADE_LIGHTNESS_STEPS",
    "COMPLEMENT_HUE_OFFSETS",
    "COMPLEMENT_LIGHTNESS_OFFSETS",
    "EXPAND_VARIATIONS",
    "RANDOM_SECTORS",
    "RANDOM_SATURATION_RANGE",
    "RANDOM_LIGHTNESS_RANGE",
    "name_colors",
    "shades",
    "complements",
    "random_palette",
    "expand_from_palette",
    "jitter_palette",
    "apply_delta_to_palette",
    "generate",
    "generate_from_source",
    "generated_palette_name",
]
