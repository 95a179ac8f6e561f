"""
どこで: `util.utils`。
何を: `configs/default.yaml` とルート `config.yaml` を読み込み、節単位で返す。
なぜ: 保存先などの既定値をコードではなく設定ファイルで差し替えられるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("configs") / "default.yaml"
OVERRIDE_CONFIG = Path("config.yaml")


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    """YAML を辞書として読む。欠損/構文エラー/非 dict は空辞書。"""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError:
        return {}
    except yaml.YAMLError:
        logger.warning("ignoring unparsable config file: %s", path)
        return {}
    return data if isinstance(data, dict) else {}


def _find_project_root(start: Path) -> Path:
    """`.git` / `pyproject.toml` / `configs/` を持つ最も近い祖先を返す。

    見つからない場合は `start.parent.parent`（`<repo>/src/util` 想定）を返す。
    """
    cur = start.resolve()
    for parent in [cur, *cur.parents]:
        if any((parent / marker).exists() for marker in (".git", "pyproject.toml", "configs")):
            return parent
    return cur.parent.parent


def load_config(root: Path | None = None) -> Dict[str, Any]:
    """既定設定にルート `config.yaml` をトップレベル単位で上書きした辞書を返す（フェイルソフト）。"""
    project_root = root if root is not None else _find_project_root(Path(__file__).parent)
    merged: Dict[str, Any] = {}
    for rel in (DEFAULT_CONFIG, OVERRIDE_CONFIG):
        path = project_root / rel
        if path.exists():
            merged.update(_safe_load_yaml(path))
    return merged


def config_section(name: str, root: Path | None = None) -> Dict[str, Any]:
    """`load_config()` のトップレベル節（欠損/型不一致は空辞書）。"""
    section = load_config(root).get(name, {})
    return section if isinstance(section, dict) else {}


__all__ = ["load_config", "config_section"]
