from __future__ import annotations

from pathlib import Path

from util.utils import _find_project_root, _safe_load_yaml, config_section, load_config


def test_find_project_root_fallback(tmp_path: Path) -> None:
    # tmp_path/a/b のような構造（上流に .git/pyproject.toml/configs が無い）では
    # フォールバックで start.parent.parent を返す
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    assert _find_project_root(start) == start.parent.parent


def test_safe_load_yaml_is_fail_soft(tmp_path: Path) -> None:
    broken = tmp_path / "broken.yaml"
    broken.write_text("palette_store: [unclosed\n", encoding="utf-8")
    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("just text\n", encoding="utf-8")
    assert _safe_load_yaml(broken) == {}
    assert _safe_load_yaml(scalar) == {}
    assert _safe_load_yaml(tmp_path / "missing.yaml") == {}


def test_root_config_overrides_default_sections(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "palette_store:\n  storage_key: base\nother: 1\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("palette_store:\n  state_dir: /srv/pal\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg["other"] == 1
    # top-level keys are replaced, not deep-merged
    assert config_section("palette_store", tmp_path) == {"state_dir": "/srv/pal"}
    assert config_section("other", tmp_path) == {}
