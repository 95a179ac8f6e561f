"""Public entrypoint for the swatchbook palette core.

This module re-exports the color model, conversions, naming and generation
functions so that applications can simply import from ``palette`` instead
of individual submodules.
"""

from .colorspace import (
    HSL,
    RGB,
    get_contrast_color,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    normalize_hex,
    rgb_to_hex,
)
from .generator import (
    GenerationKind,
    SourceMode,
    apply_delta_to_palette,
    complements,
    expand_from_palette,
    generate,
    generate_from_source,
    generated_palette_name,
    jitter_palette,
    random_palette,
    shades,
)
from .model import Color, Palette
from .naming import assign_name, generate_color_name, name_for_hex

__all__ = [
    "RGB",
    "HSL",
    "Color",
    "Palette",
    "hex_to_rgb",
    "rgb_to_hex",
    "hex_to_hsl",
    "hsl_to_hex",
    "normalize_hex",
    "get_contrast_color",
    "generate_color_name",
    "assign_name",
    "name_for_hex",
    "GenerationKind",
    "SourceMode",
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
