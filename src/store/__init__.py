"""
どこで: `store` パッケージ。
何を: パレットコレクションの所有・変更・永続化（`PaletteStore` とストレージ実装）。
なぜ: 変更操作を単一の入口に直列化し、UI には不変スナップショットだけを渡すため。
"""

from .palette_store import Collection, PaletteStore
from .persistence import DEFAULT_STORAGE_KEY, default_palette
from .storage import JsonFileStorage, MemoryStorage, StorageBackend

__all__ = [
    "Collection",
    "PaletteStore",
    "StorageBackend",
    "MemoryStorage",
    "JsonFileStorage",
    "DEFAULT_STORAGE_KEY",
    "default_palette",
]
