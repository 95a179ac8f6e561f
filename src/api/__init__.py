"""
どこで: `api` 入口（高レベル公開 API）。
何を: `open_store` / `open_session` と主要な型を再輸出する。
なぜ: 利用者が単一名前空間からパレットの読込→編集→生成まで完結できるようにするため。

Usage:
    from api import open_session

    s = open_session()
    pal = s.store.create_palette("Sunset")
    s.editor.set_current_color("#ff8800")
    s.editor.add_current_to(s.store, pal.id)
    s.workflow.choose("shades")
"""

from editor import ColorEditor, GenerationWorkflow
from palette import Color, GenerationKind, Palette, SourceMode
from store import PaletteStore

from .palettes import Session, open_session, open_store

__all__ = [
    # メインAPI
    "open_store",
    "open_session",
    "Session",
    # 型
    "Color",
    "Palette",
    "PaletteStore",
    "ColorEditor",
    "GenerationWorkflow",
    "GenerationKind",
    "SourceMode",
]

# バージョン情報
__version__ = "2026.10"
