"""
どこで: `store.persistence`。
何を: パレットコレクションと JSON スナップショットの相互変換、既定パレット、保存先の解決。
なぜ: 破損/旧形式のスナップショットでも読める範囲は復元し、読めなければ既定へ落とすため。

仕様（要点）:
- 形式: `[{"id", "name", "colors": [{"id", "hex", "name"}]}]`（JSON 配列）。
- 旧スナップショットの数値 ID は文字列化して受理する。
- 不正な色/パレットはスキップ（warning ログ）。配列でなければ全体を不正扱い（None）。
- 重複 ID（パレット間 / パレット内の色）は IdFactory で振り直す。
- 保存先: 既定 `data/palettes/<key>.json`。設定 `palette_store.state_dir` または
  環境変数 `SWB_STATE_DIR` で上書き可（環境変数優先）。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from common.settings import get as get_settings
from palette.model import Color, Palette
from util.ids import IdFactory, uuid_ids
from util.utils import config_section

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "colorPalettes"
DEFAULT_PALETTE_NAME = "Default Palette"
DEFAULT_SEED_COLORS: tuple[tuple[str, str], ...] = (
    ("#ff0000", "Red"),
    ("#00ff00", "Green"),
    ("#0000ff", "Blue"),
)


def default_palette(ids: IdFactory | None = None) -> Palette:
    """初回起動/読込失敗時に合成する既定パレット。"""
    ids = ids or uuid_ids()
    colors = tuple(Color(id=ids(), hex=h, name=n) for h, n in DEFAULT_SEED_COLORS)
    return Palette(id=ids(), name=DEFAULT_PALETTE_NAME, colors=colors)


def encode_collection(palettes: Iterable[Palette]) -> str:
    """コレクションを JSON 文字列へ変換する（順序を保持）。"""
    return json.dumps([p.to_dict() for p in palettes], ensure_ascii=False, indent=2)


def _decode_color(raw: Any) -> Color | None:
    if not isinstance(raw, dict) or "id" not in raw or "hex" not in raw:
        return None
    try:
        return Color.from_dict(raw)
    except (TypeError, ValueError):
        return None


def _decode_palette(raw: Any, ids: IdFactory) -> Palette | None:
    if not isinstance(raw, dict) or "id" not in raw:
        return None
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    raw_colors = raw.get("colors") or []
    if not isinstance(raw_colors, list):
        raw_colors = []

    colors: list[Color] = []
    seen: set[str] = set()
    for rc in raw_colors:
        color = _decode_color(rc)
        if color is None:
            logger.warning("dropping malformed color in palette %r: %r", name, rc)
            continue
        if color.id in seen:
            color = Color(id=ids(), hex=color.hex, name=color.name)
        seen.add(color.id)
        colors.append(color)
    return Palette(id=str(raw["id"]), name=name, colors=tuple(colors))


def decode_collection(raw: str, ids: IdFactory | None = None) -> list[Palette] | None:
    """JSON 文字列からコレクションを復元する。

    JSON として不正、またはトップレベルが配列でない場合は None を返す。
    """
    ids = ids or uuid_ids()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("saved palettes are not valid JSON", exc_info=True)
        return None
    if not isinstance(data, list):
        logger.warning("saved palettes have unexpected shape: %s", type(data).__name__)
        return None

    palettes: list[Palette] = []
    seen: set[str] = set()
    for entry in data:
        pal = _decode_palette(entry, ids)
        if pal is None:
            logger.warning("dropping malformed palette entry: %r", entry)
            continue
        if pal.id in seen:
            pal = Palette(id=ids(), name=pal.name, colors=pal.colors)
        seen.add(pal.id)
        palettes.append(pal)
    return palettes


def resolve_state_dir() -> Path:
    env_dir = get_settings().STATE_DIR
    if env_dir:
        return Path(env_dir)
    state_dir = config_section("palette_store").get("state_dir")
    if isinstance(state_dir, str) and state_dir.strip():
        return Path(state_dir)
    return Path.cwd() / "data" / "palettes"


def resolve_storage_key() -> str:
    env_key = get_settings().STORAGE_KEY
    if env_key:
        return env_key
    key = config_section("palette_store").get("storage_key")
    if isinstance(key, str) and key.strip():
        return key.strip()
    return DEFAULT_STORAGE_KEY


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "DEFAULT_PALETTE_NAME",
    "DEFAULT_SEED_COLORS",
    "default_palette",
    "encode_collection",
    "decode_collection",
    "resolve_state_dir",
    "resolve_storage_key",
]
