from __future__ import annotations

import pytest

from editor import ColorEditor, GenerationWorkflow
from editor.workflow import IntentKind, ModificationSession
from store import PaletteStore


@pytest.fixture()
def editor() -> ColorEditor:
    return ColorEditor("#3366cc")


@pytest.fixture()
def flow(store: PaletteStore, editor: ColorEditor) -> GenerationWorkflow:
    return GenerationWorkflow(store, editor)


def test_immediate_options_use_pick_color(flow: GenerationWorkflow, store: PaletteStore) -> None:
    pal = flow.choose("shades")
    assert pal.name == "Generated Shades"
    assert len(pal.colors) == 9
    assert flow.choose("complements").name == "Generated Complements"
    assert len(flow.choose("random").colors) == 5
    assert len(store.palettes) == 4
    assert flow.pending is None


def test_unknown_option_is_ignored(flow: GenerationWorkflow, store: PaletteStore) -> None:
    assert flow.choose("plaid") is None
    assert flow.pending is None
    assert len(store.palettes) == 1


@pytest.mark.parametrize(
    "option, kind",
    [("fromExisting", IntentKind.VARIATIONS), ("variations", IntentKind.VARIATIONS),
     ("expand", IntentKind.EXPAND), ("modify", IntentKind.MODIFY)],
)
def test_deferred_options_enter_selection_mode(flow: GenerationWorkflow, store: PaletteStore, option, kind) -> None:
    assert flow.choose(option) is None
    assert flow.pending is not None and flow.pending.kind is kind
    assert flow.busy
    assert len(store.palettes) == 1


def test_cancel_selection_has_no_side_effects(flow: GenerationWorkflow, store: PaletteStore) -> None:
    before = store.palettes
    flow.choose("expand")
    flow.cancel()
    assert flow.pending is None
    assert not flow.busy
    assert flow.select_palette(before[0].id) is None
    assert store.palettes == before


def test_select_palette_resolves_expand(flow: GenerationWorkflow, store: PaletteStore) -> None:
    src = store.palettes[0]
    flow.choose("expand")
    pal = flow.select_palette(src.id)
    assert pal.name == "Generated from Default Palette"
    assert len(pal.colors) == 15
    assert flow.pending is None


def test_select_palette_resolves_variations(flow: GenerationWorkflow, store: PaletteStore) -> None:
    src = store.palettes[0]
    flow.choose("fromExisting")
    pal = flow.select_palette(src.id)
    assert len(pal.colors) == len(src.colors)


def test_modify_session_preview_and_save(
    flow: GenerationWorkflow, store: PaletteStore, editor: ColorEditor
) -> None:
    src = store.palettes[0]
    editor.set_current_color("#ff0000")
    flow.choose("modify")
    assert flow.select_palette(src.id) is None
    session = flow.session
    assert isinstance(session, ModificationSession)
    assert session.neutral_hex == "#ff0000"
    assert flow.preview() == list(src.colors)

    editor.set_current_color("#00ff00")
    assert [c.hex for c in flow.preview()] == ["#00ff00", "#0000ff", "#ff0000"]
    # malformed pick keeps the last preview
    assert [c.hex for c in session.preview("bad")] == ["#00ff00", "#0000ff", "#ff0000"]

    saved = flow.save_modification()
    assert saved.name == "Modified Default Palette"
    assert [c.name for c in saved.colors] == ["Red", "Green", "Blue"]
    assert [c.hex for c in saved.colors] == ["#00ff00", "#0000ff", "#ff0000"]
    assert store.get_palette(src.id) == src
    assert flow.session is None
    assert flow.save_modification() is None


def test_modify_cancel_discards_session(flow: GenerationWorkflow, store: PaletteStore, editor: ColorEditor) -> None:
    flow.choose("modify")
    flow.select_palette(store.palettes[0].id)
    editor.set_current_color("#000000")
    flow.preview()
    flow.cancel()
    assert flow.session is None
    assert flow.preview() == []
    assert len(store.palettes) == 1


def test_modify_unknown_palette_opens_nothing(flow: GenerationWorkflow) -> None:
    flow.choose("modify")
    assert flow.select_palette("missing") is None
    assert flow.session is None
    assert flow.pending is None


def test_menu_is_disabled_while_busy(flow: GenerationWorkflow, store: PaletteStore) -> None:
    flow.choose("modify")
    flow.select_palette(store.palettes[0].id)
    session = flow.session
    assert flow.choose("expand") is None
    assert flow.choose("shades") is None
    assert flow.pending is None
    assert flow.session is session
    assert len(store.palettes) == 1

    flow.cancel()
    flow.choose("expand")
    assert flow.choose("modify") is None
    assert flow.pending.kind is IntentKind.EXPAND


def test_modifying_empty_palette_saves_empty_copy(flow: GenerationWorkflow, store: PaletteStore) -> None:
    empty = store.create_palette("Blank")
    flow.choose("modify")
    flow.select_palette(empty.id)
    assert flow.preview() == []
    saved = flow.save_modification()
    assert saved is not None
    assert saved.name == "Modified Blank"
    assert saved.colors == ()
    assert store.palettes[-1] == saved
