"""共通フィクスチャ。

- 乱数は固定シードの Generator を注入
- ID は連番（`t-1`, `t-2`, ...）
- 環境変数 `SWB_*` はテストごとに未設定へ戻す
"""

from __future__ import annotations

import os
from typing import Iterator

import numpy as np
import pytest

from common.settings import reload_from_env
from store import MemoryStorage, PaletteStore
from util.ids import IdFactory, sequential_ids


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """`SWB_*` を外した状態で設定を読み直す。"""
    for name in list(os.environ):
        if name.startswith("SWB_"):
            monkeypatch.delenv(name, raising=False)
    reload_from_env()
    yield


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture()
def ids() -> IdFactory:
    return sequential_ids("t")


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def store(storage: MemoryStorage, ids: IdFactory, rng: np.random.Generator) -> PaletteStore:
    """既定パレット 1 つを読み込んだ状態のストア。"""
    s = PaletteStore(storage, ids=ids, rng=rng)
    s.load()
    return s
