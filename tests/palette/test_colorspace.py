from __future__ import annotations

import pytest

from palette.colorspace import (
    HSL,
    RGB,
    get_contrast_color,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    luminance,
    normalize_hex,
    rgb_to_hex,
)


def _approx_hsl(hsl, p=6):
    return tuple(round(v, p) for v in hsl)


def test_hex_to_rgb_accepts_optional_hash_and_any_case() -> None:
    assert hex_to_rgb("#ff0000") == RGB(255, 0, 0)
    assert hex_to_rgb("FF0000") == RGB(255, 0, 0)
    assert hex_to_rgb("#Ab12cD") == RGB(0xAB, 0x12, 0xCD)


@pytest.mark.parametrize("bad", ["#abc", "not-a-color", "#ff00000", "#ff000g", "", "#ff0000\n", None, 123])
def test_hex_to_rgb_rejects_malformed(bad) -> None:
    assert hex_to_rgb(bad) is None
    assert normalize_hex(bad) is None
    assert hex_to_hsl(bad) is None


def test_rgb_to_hex_lowercase_and_masks_channels() -> None:
    assert rgb_to_hex(255, 0, 170) == "#ff00aa"
    assert rgb_to_hex(256, -1, 15) == "#00ff0f"


def test_normalize_hex() -> None:
    assert normalize_hex("FF00AA") == "#ff00aa"
    assert normalize_hex("#00FF00") == "#00ff00"


def test_hex_to_hsl_primaries() -> None:
    assert _approx_hsl(hex_to_hsl("#ff0000")) == (0.0, 100.0, 50.0)
    assert _approx_hsl(hex_to_hsl("#00ff00")) == (120.0, 100.0, 50.0)
    assert _approx_hsl(hex_to_hsl("#0000ff")) == (240.0, 100.0, 50.0)


def test_hex_to_hsl_achromatic_has_zero_hue_and_saturation() -> None:
    hsl = hex_to_hsl("#808080")
    assert hsl.h == 0.0 and hsl.s == 0.0
    assert hsl.l == pytest.approx(128 / 255 * 100)
    assert hex_to_hsl("#000000") == HSL(0.0, 0.0, 0.0)
    assert hex_to_hsl("#ffffff") == HSL(0.0, 0.0, 100.0)


def test_hex_to_hsl_mid_blue() -> None:
    h, s, l = hex_to_hsl("#3366cc")
    assert h == pytest.approx(220.0)
    assert s == pytest.approx(60.0)
    assert l == pytest.approx(50.0)


def test_hsl_to_hex_primaries_and_hue_wrap() -> None:
    assert hsl_to_hex(0, 100, 50) == "#ff0000"
    assert hsl_to_hex(120, 100, 50) == "#00ff00"
    assert hsl_to_hex(240, 100, 50) == "#0000ff"
    assert hsl_to_hex(180, 100, 50) == "#00ffff"
    assert hsl_to_hex(360, 100, 50) == "#ff0000"


def test_hsl_to_hex_rounds_half_up() -> None:
    # 0.35 * 2 * 255 = 178.5
    assert hsl_to_hex(0, 100, 35) == "#b30000"


def test_hsl_to_hex_grays() -> None:
    assert hsl_to_hex(0, 0, 0) == "#000000"
    assert hsl_to_hex(200, 0, 100) == "#ffffff"


def test_luminance_uses_luma_weights() -> None:
    assert luminance("#ffffff") == pytest.approx(1.0)
    assert luminance("#000000") == 0.0
    assert luminance("#0000ff") == pytest.approx(0.114)
    assert luminance("nope") is None


@pytest.mark.parametrize(
    "bg, expected",
    [
        ("#ffffff", "#000000"),
        ("#ffff00", "#000000"),
        ("#000000", "#ffffff"),
        ("#0000ff", "#ffffff"),
        ("#ff0000", "#ffffff"),
        ("garbage", "#000000"),
    ],
)
def test_contrast_color(bg: str, expected: str) -> None:
    assert get_contrast_color(bg) == expected


def test_contrast_threshold_is_strict() -> None:
    # luma 128/255 ~ 0.502 and 127/255 ~ 0.498
    assert get_contrast_color("#808080") == "#000000"
    assert get_contrast_color("#7f7f7f") == "#ffffff"


def test_contrast_flips_once_along_luminance() -> None:
    steps = range(0, 256, 15)
    grid = [rgb_to_hex(r, g, b) for r in steps for g in steps for b in steps]
    grid.sort(key=luminance)
    picks = [get_contrast_color(h) for h in grid]
    flips = sum(1 for a, b in zip(picks, picks[1:]) if a != b)
    assert picks[0] == "#ffffff"
    assert picks[-1] == "#000000"
    assert flips == 1
