from __future__ import annotations

"""Deterministic two-word color names.

A name is ``"{qualifier} {hue word}"``. The qualifier comes from the first
bucket in :data:`QUALIFIER_BUCKETS` whose saturation/lightness bounds match,
and the word inside that bucket is picked from the hue so neighbouring hues
read differently. The hue word comes from :data:`HUE_BANDS`.

Collisions are resolved by a linear probe: ``" 1"``, ``" 2"``, ... are
appended until the name is unused.
"""

import math
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

from .colorspace import hex_to_hsl, normalize_hue

Bound = Tuple[Optional[float], Optional[float]]


@dataclass(frozen=True)
class QualifierBucket:
    """Qualifier words for an open (s, l) rectangle.

    Bounds are exclusive; ``None`` leaves that side unbounded.
    """

    s_range: Bound
    l_range: Bound
    words: Tuple[str, ...]

    def matches(self, s: float, l: float) -> bool:
        return _within(s, self.s_range) and _within(l, self.l_range)


def _within(value: float, bound: Bound) -> bool:
    lo, hi = bound
    if lo is not None and not value > lo:
        return False
    if hi is not None and not value < hi:
        return False
    return True


# First match wins. The last bucket is unbounded, so every (s, l) maps to
# exactly one qualifier.
QUALIFIER_BUCKETS: Tuple[QualifierBucket, ...] = (
    QualifierBucket(
        (None, 35.0),
        (None, 35.0),
        ("Smoky", "Dusky", "Muted", "Dull", "Dusty", "Subdued", "Washed", "Chalky"),
    ),
    QualifierBucket(
        (None, 35.0),
        (65.0, None),
        ("Chalky", "Misty", "Hazy", "Muted", "Dull", "Dusty", "Subdued", "Washed"),
    ),
    QualifierBucket(
        (None, 35.0),
        (None, None),
        ("Muted", "Dull", "Dusty", "Subdued", "Washed", "Chalky"),
    ),
    QualifierBucket((65.0, None), (65.0, None), ("Light", "Airy")),
    QualifierBucket((65.0, None), (40.0, 65.0), ("Bright", "Intense")),
    QualifierBucket((65.0, None), (None, 35.0), ("Deep", "Dark")),
    QualifierBucket((None, None), (None, 35.0), ("Deep", "Dark", "Dusky")),
    QualifierBucket((None, None), (65.0, None), ("Light", "Airy", "Pale")),
    QualifierBucket((None, None), (None, None), ("Soft", "Faded", "Earthy")),
)

DEFAULT_QUALIFIER = "Soft"

# Half-open [start, end) hue bands in degrees; red wraps across 0.
HUE_BANDS: Tuple[Tuple[float, float, str], ...] = (
    (0.0, 15.0, "Red"),
    (15.0, 36.0, "Orange"),
    (36.0, 51.0, "Goldenrod"),
    (51.0, 66.0, "Yellow"),
    (66.0, 81.0, "Chartreuse"),
    (81.0, 111.0, "Lime"),
    (111.0, 151.0, "Green"),
    (151.0, 201.0, "Teal"),
    (201.0, 221.0, "Cerulean"),
    (221.0, 256.0, "Blue"),
    (256.0, 271.0, "Indigo"),
    (271.0, 286.0, "Violet"),
    (286.0, 301.0, "Purple"),
    (301.0, 325.0, "Magenta"),
    (325.0, 345.0, "Pink"),
    (345.0, 360.0, "Red"),
)

DEFAULT_HUE_WORD = "Gray"


def qualifier_bucket(s: float, l: float) -> QualifierBucket:
    """Return the first bucket matching (s, l)."""
    for bucket in QUALIFIER_BUCKETS:
        if bucket.matches(s, l):
            return bucket
    # Unreachable while the table ends with an unbounded bucket.
    return QUALIFIER_BUCKETS[-1]


def qualifier_word(h: float, s: float, l: float) -> str:
    words = qualifier_bucket(s, l).words
    if not words or not math.isfinite(h):
        return DEFAULT_QUALIFIER
    idx = int(math.floor((normalize_hue(h) / 360.0) * len(words)))
    if 0 <= idx < len(words):
        return words[idx]
    return DEFAULT_QUALIFIER


def hue_word(h: float) -> str:
    if not math.isfinite(h):
        return DEFAULT_HUE_WORD
    hn = normalize_hue(h)
    for start, end, word in HUE_BANDS:
        if start <= hn < end:
            return word
    return DEFAULT_HUE_WORD


def base_color_name(h: float, s: float, l: float) -> str:
    """The collision-free two-word name before any numeric suffix."""
    return f"{qualifier_word(h, s, l)} {hue_word(h)}"


def _probe(base: str, taken: FrozenSet[str]) -> str:
    name = base
    counter = 1
    while name in taken:
        name = f"{base} {counter}"
        counter += 1
    return name


def generate_color_name(
    h: float,
    s: float,
    l: float,
    existing_names: Iterable[str] = (),
) -> str:
    """Generate a name for (h, s, l) that is not in ``existing_names``.

    ``existing_names`` is only read, never modified.
    """
    return _probe(base_color_name(h, s, l), frozenset(existing_names))


def assign_name(
    h: float,
    s: float,
    l: float,
    taken: FrozenSet[str] = frozenset(),
) -> Tuple[str, FrozenSet[str]]:
    """Fold step for naming a batch of colors.

    Returns the new name together with ``taken`` grown by that name, so a
    caller can thread the exclusion set through a loop without shared state.
    """
    name = _probe(base_color_name(h, s, l), taken)
    return name, taken | {name}


def name_for_hex(hex_str: str, existing_names: Iterable[str] = ()) -> str:
    """Name a hex color; malformed input yields an empty name."""
    hsl = hex_to_hsl(hex_str)
    if hsl is None:
        return ""
    return generate_color_name(hsl.h, hsl.s, hsl.l, existing_names)


__all__ = [
    "QualifierBucket",
    "QUALIFIER_BUCKETS",
    "HUE_BANDS",
    "qualifier_bucket",
    "qualifier_word",
    "hue_word",
    "base_color_name",
    "generate_color_name",
    "assign_name",
    "name_for_hex",
]
