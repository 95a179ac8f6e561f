from __future__ import annotations

"""パレット API（公開入口）。

どこで: `api.palettes`。
何を: 設定（環境変数 / `configs/default.yaml`）から保存先と乱数を決め、
      読込済みの `PaletteStore` とそれに紐づくエディタ状態を返す。
なぜ: 利用側が保存先や ID 生成を意識せずに `open_store()` 一行で始められるようにするため。
"""

import logging
from pathlib import Path
from typing import NamedTuple

import numpy as np

from common.logging import setup_default_logging
from common.settings import get as get_settings
from editor.color_editor import ColorEditor
from editor.workflow import GenerationWorkflow
from store.palette_store import PaletteStore
from store.persistence import resolve_state_dir, resolve_storage_key
from store.storage import JsonFileStorage
from util.ids import IdFactory

logger = logging.getLogger(__name__)


def _default_rng() -> np.random.Generator:
    seed = get_settings().RANDOM_SEED
    return np.random.default_rng(seed)


def open_store(
    state_dir: str | Path | None = None,
    key: str | None = None,
    *,
    ids: IdFactory | None = None,
    rng: np.random.Generator | None = None,
) -> PaletteStore:
    """JSON ファイル保存の `PaletteStore` を作り、`load()` 済みで返す。

    引数が None の項目は `SWB_STATE_DIR` / `SWB_STORAGE_KEY` → `palette_store` 設定節 →
    既定値（`data/palettes`, `colorPalettes`）の順に解決する。
    """
    setup_default_logging()
    directory = Path(state_dir) if state_dir is not None else resolve_state_dir()
    storage_key = key if key else resolve_storage_key()
    store = PaletteStore(
        JsonFileStorage(directory),
        key=storage_key,
        ids=ids,
        rng=rng if rng is not None else _default_rng(),
    )
    store.load()
    logger.info("opened palette store at %s (key=%s)", directory, storage_key)
    return store


class Session(NamedTuple):
    """1 画面分の状態（ストア / ピッカー / 生成メニュー）。"""

    store: PaletteStore
    editor: ColorEditor
    workflow: GenerationWorkflow


def open_session(store: PaletteStore | None = None, **kwargs) -> Session:
    """`open_store()`（または既存ストア）にエディタと生成ワークフローを束ねて返す。"""
    store = store if store is not None else open_store(**kwargs)
    editor = ColorEditor()
    return Session(store, editor, GenerationWorkflow(store, editor))


__all__ = ["open_store", "open_session", "Session"]
