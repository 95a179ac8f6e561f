from __future__ import annotations

import pytest

from palette.model import Color, Palette


def test_color_normalizes_hex_and_id() -> None:
    c = Color(7, "FF00AA", None)  # type: ignore[arg-type]
    assert c.id == "7"
    assert c.hex == "#ff00aa"
    assert c.name == ""


def test_color_rejects_malformed_hex() -> None:
    with pytest.raises(ValueError):
        Color("a", "#fff")


def test_palette_name_is_stripped_and_required() -> None:
    assert Palette("p", "  Warm  ").name == "Warm"
    with pytest.raises(ValueError):
        Palette("p", "   ")


def test_palette_derived_values_do_not_mutate() -> None:
    red, green = Color("r", "#ff0000", "Red"), Color("g", "#00ff00", "Green")
    pal = Palette("p", "P", (red,))
    grown = pal.appended(green)
    assert pal.colors == (red,)
    assert grown.colors == (red, green)
    assert grown.index_of("g") == 1
    assert grown.index_of("zz") == -1
    assert grown.find_color("g") is green
    assert grown.without("r").colors == (green,)
    assert grown.color_names() == frozenset({"Red", "Green"})
    assert grown.color_ids() == frozenset({"r", "g"})


def test_palette_dict_form() -> None:
    pal = Palette("p", "P", [Color("r", "#FF0000", "Red")])
    data = pal.to_dict()
    assert data == {"id": "p", "name": "P", "colors": [{"id": "r", "hex": "#ff0000", "name": "Red"}]}
    assert Palette.from_dict(data) == pal
