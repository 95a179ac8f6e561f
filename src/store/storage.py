"""
どこで: `store.storage`。
何を: スナップショット文字列を名前付きで保存/取得するバックエンド（メモリ / JSON ファイル）。
なぜ: `PaletteStore` が環境依存のグローバルストレージに触れず、テストで差し替え可能にするため。

仕様（要点）:
- `get(key)` は未保存なら None を返す。
- I/O 例外はここでは握りつぶさず送出する（ログとフォールバックは `PaletteStore` の責務）。
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


class StorageBackend(Protocol):
    """名前付きスナップショットの get/set インタフェース。"""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """プロセス内 dict に保持するバックエンド（テスト/揮発モード用）。"""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStorage:
    """`<state_dir>/<key>.json` に保存するバックエンド。

    書き込みは一時ファイル経由で置き換え、途中失敗で既存スナップショットを壊さない。
    """

    def __init__(self, state_dir: str | os.PathLike[str]) -> None:
        self._state_dir = Path(state_dir)

    @property
    def state_dir(self) -> Path:
        return self._state_dir

    def path_for(self, key: str) -> Path:
        stem = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in key) or "snapshot"
        return self._state_dir / f"{stem}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            f.write(value)
        os.replace(tmp, path)


__all__ = ["StorageBackend", "MemoryStorage", "JsonFileStorage"]
