"""
どこで: `store.palette_store` の状態管理層。
何を: パレットコレクションを単独で所有し、CRUD/並べ替え/移動/生成コマンドと load/save を提供する。
なぜ: UI が渡す ID や色は信用できないため、全変更を 1 箇所で検証し no-op に落とすため。

補足:
- 変更系の戻り値は「影響したパレットの新しいスナップショット」。何も起きなければ None。
- 成功した変更のたびに `save()` とリスナー通知を行う。
- 例外は外へ出さない（不明 ID・不正 hex・空名はすべて no-op）。
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from palette.colorspace import hex_to_hsl, normalize_hex
from palette.generator import (
    GenerationKind,
    SourceMode,
    generate,
    generate_from_source,
    generated_palette_name,
)
from palette.model import Color, Palette
from palette.naming import generate_color_name
from util.ids import IdFactory, uuid_ids

from .persistence import (
    DEFAULT_STORAGE_KEY,
    decode_collection,
    default_palette,
    encode_collection,
)
from .storage import MemoryStorage, StorageBackend

logger = logging.getLogger(__name__)

Collection = Tuple[Palette, ...]
Listener = Callable[[Collection], None]
ColorLike = Union[Color, str]


class PaletteStore:
    """パレットコレクションを集中管理する。"""

    def __init__(
        self,
        storage: StorageBackend | None = None,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        ids: IdFactory | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._storage: StorageBackend = storage if storage is not None else MemoryStorage()
        self._key = key
        self._ids = ids or uuid_ids()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._palettes: list[Palette] = []
        self._listeners: list[Listener] = []
        self._lock = RLock()
        self._loaded = False

    # --- 問合せ ---
    @property
    def palettes(self) -> Collection:
        """現在のコレクション（不変スナップショット）。"""
        with self._lock:
            return tuple(self._palettes)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get_palette(self, palette_id: str) -> Optional[Palette]:
        with self._lock:
            idx = self._index(palette_id)
            return self._palettes[idx] if idx >= 0 else None

    def _index(self, palette_id: str) -> int:
        for i, p in enumerate(self._palettes):
            if p.id == palette_id:
                return i
        return -1

    # --- 永続化 ---
    def load(self) -> Collection:
        """保存済みスナップショットを読み込む。

        未保存/不正/空の場合は既定パレットを合成し、それを新しい保存状態とする。
        """
        with self._lock:
            raw: str | None = None
            try:
                raw = self._storage.get(self._key)
            except Exception:
                logger.warning("failed to read saved palettes (key=%s)", self._key, exc_info=True)

            palettes = decode_collection(raw, ids=self._ids) if raw is not None else None
            self._loaded = True
            if palettes:
                logger.debug("loaded %d palettes (key=%s)", len(palettes), self._key)
                self._palettes = palettes
            else:
                logger.info("no usable saved palettes (key=%s); creating default palette", self._key)
                self._palettes = [default_palette(self._ids)]
                self.save()
            snapshot = tuple(self._palettes)
        self._notify(snapshot)
        return snapshot

    def save(self, collection: Sequence[Palette] | None = None) -> bool:
        """コレクションをそのまま書き出す。

        `load()` が成功する前は書き込まない（部分的な状態で保存済みデータを上書きしないため）。
        失敗時は False を返す（フェイルソフト）。
        """
        with self._lock:
            if not self._loaded:
                logger.debug("skipping save: palettes not loaded yet")
                return False
            data = list(self._palettes if collection is None else collection)
            try:
                self._storage.set(self._key, encode_collection(data))
            except Exception:
                logger.warning("failed to save palettes (key=%s)", self._key, exc_info=True)
                return False
            logger.debug("saved %d palettes (key=%s)", len(data), self._key)
            return True

    # --- 内部: 変更の確定 ---
    def _replace(self, idx: int, palette: Palette) -> Palette:
        self._palettes[idx] = palette
        return palette

    def _commit(self) -> None:
        self.save()
        self._notify(tuple(self._palettes))

    def _fresh_colors(self, colors: Iterable[Color]) -> tuple[Color, ...]:
        """ID 重複を除いた色列（重複した色にだけ新しい ID を振る）。"""
        out: list[Color] = []
        seen: set[str] = set()
        for c in colors:
            if c.id in seen:
                c = Color(id=self._ids(), hex=c.hex, name=c.name)
            seen.add(c.id)
            out.append(c)
        return tuple(out)

    def _coerce_color(self, value: ColorLike) -> Optional[Color]:
        """追加用に新しい ID を持つ色へ変換する（不正 hex は None）。"""
        if isinstance(value, Color):
            return Color(id=self._ids(), hex=value.hex, name=value.name)
        norm = normalize_hex(value) if isinstance(value, str) else None
        if norm is None:
            return None
        return Color(id=self._ids(), hex=norm, name="")

    # --- パレット操作 ---
    def create_palette(self, name: str, colors: Iterable[ColorLike] = ()) -> Optional[Palette]:
        """空白のみの名前は拒否（no-op）。色を渡した場合は新しい ID で複製して格納する。"""
        if not isinstance(name, str) or not name.strip():
            return None
        seeded = [c for c in (self._coerce_color(v) for v in colors) if c is not None]
        with self._lock:
            palette = Palette(id=self._new_palette_id(), name=name.strip(), colors=tuple(seeded))
            self._palettes.append(palette)
            self._commit()
        return palette

    def _new_palette_id(self) -> str:
        taken = {p.id for p in self._palettes}
        pid = self._ids()
        while pid in taken:
            pid = self._ids()
        return pid

    def delete_palette(self, palette_id: str) -> Optional[Palette]:
        with self._lock:
            idx = self._index(palette_id)
            if idx < 0:
                return None
            removed = self._palettes.pop(idx)
            self._commit()
        return removed

    # --- 色操作 ---
    def add_color(
        self,
        palette_id: str,
        color: ColorLike | None = None,
        *,
        current_hex: str | None = None,
    ) -> Optional[Palette]:
        """色を末尾に追加する。

        `color` 省略時は `current_hex`（ピッカーの現在色）から、パレット内の既存名を避けた
        名前付きの色を合成する。
        """
        with self._lock:
            idx = self._index(palette_id)
            if idx < 0:
                return None
            pal = self._palettes[idx]
            if color is None:
                new_color = self._color_from_pick(current_hex, pal.color_names())
            else:
                new_color = self._coerce_color(color)
            if new_color is None:
                return None
            while new_color.id in pal.color_ids():
                new_color = Color(id=self._ids(), hex=new_color.hex, name=new_color.name)
            updated = self._replace(idx, pal.appended(new_color))
            self._commit()
        return updated

    def _color_from_pick(self, current_hex: str | None, taken: frozenset[str]) -> Optional[Color]:
        if current_hex is None:
            return None
        hsl = hex_to_hsl(current_hex)
        norm = normalize_hex(current_hex)
        if hsl is None or norm is None:
            return None
        name = generate_color_name(hsl.h, hsl.s, hsl.l, taken)
        return Color(id=self._ids(), hex=norm, name=name)

    def remove_color(self, palette_id: str, color_id: str) -> Optional[Palette]:
        with self._lock:
            idx = self._index(palette_id)
            if idx < 0 or self._palettes[idx].index_of(color_id) < 0:
                return None
            updated = self._replace(idx, self._palettes[idx].without(color_id))
            self._commit()
        return updated

    def update_color(
        self,
        palette_id: str,
        color_id: str,
        *,
        hex: str | None = None,
        name: str | None = None,
    ) -> Optional[Palette]:
        """`hex` / `name` を該当色へマージする。不正 hex は無視する。"""
        with self._lock:
            idx = self._index(palette_id)
            if idx < 0:
                return None
            pal = self._palettes[idx]
            cidx = pal.index_of(color_id)
            if cidx < 0:
                return None
            old = pal.colors[cidx]
            new_hex = normalize_hex(hex) if hex is not None else None
            if hex is not None and new_hex is None:
                logger.debug("update_color: ignoring malformed hex %r", hex)
            merged = Color(
                id=old.id,
                hex=new_hex or old.hex,
                name=old.name if name is None else name,
            )
            if merged == old:
                return None
            colors = list(pal.colors)
            colors[cidx] = merged
            updated = self._replace(idx, pal.with_colors(colors))
            self._commit()
        return updated

    def reorder_color(
        self, palette_id: str, moved_color_id: str, target_color_id: str
    ) -> Optional[Palette]:
        """`moved` を取り出し、`target` が占めていた位置へ差し込む。"""
        if moved_color_id == target_color_id:
            return None
        with self._lock:
            idx = self._index(palette_id)
            if idx < 0:
                return None
            pal = self._palettes[idx]
            src = pal.index_of(moved_color_id)
            dst = pal.index_of(target_color_id)
            if src < 0 or dst < 0:
                return None
            colors = list(pal.colors)
            moved = colors.pop(src)
            colors.insert(dst, moved)
            updated = self._replace(idx, pal.with_colors(colors))
            self._commit()
        return updated

    def move_color_between_palettes(
        self, from_palette_id: str, color_id: str, to_palette_id: str
    ) -> Optional[Palette]:
        """元パレットから外して移動先の末尾へ追加する（両方成功か、何もしないか）。

        戻り値は移動先パレット。
        """
        with self._lock:
            src_idx = self._index(from_palette_id)
            dst_idx = self._index(to_palette_id)
            if src_idx < 0 or dst_idx < 0:
                return None
            src = self._palettes[src_idx]
            color = src.find_color(color_id)
            if color is None:
                return None
            if src_idx == dst_idx:
                moved = src.without(color_id).appended(color)
                return self._finish_move(dst_idx, moved)
            dst = self._palettes[dst_idx]
            if color.id in dst.color_ids():
                color = Color(id=self._ids(), hex=color.hex, name=color.name)
            self._palettes[src_idx] = src.without(color_id)
            return self._finish_move(dst_idx, dst.appended(color))

    def _finish_move(self, dst_idx: int, palette: Palette) -> Palette:
        updated = self._replace(dst_idx, palette)
        self._commit()
        return updated

    def drop_color(
        self,
        from_palette_id: str,
        color_id: str,
        to_palette_id: str,
        target_color_id: str | None = None,
    ) -> Optional[Palette]:
        """ドラッグ&ドロップの解決。

        - 色の上へ・同一パレット: 並べ替え
        - 色の上へ・別パレット: 移動
        - パレット末尾へ（target なし）: 新しい ID で複製して追加
        """
        with self._lock:
            src = self.get_palette(from_palette_id)
            color = src.find_color(color_id) if src is not None else None
            if color is None:
                return None
            if target_color_id is None:
                return self.add_color(to_palette_id, color)
            if from_palette_id == to_palette_id:
                return self.reorder_color(to_palette_id, color_id, target_color_id)
            return self.move_color_between_palettes(from_palette_id, color_id, to_palette_id)

    # --- 生成コマンド ---
    def add_generated_palette(self, name: str, colors: Sequence[Color]) -> Optional[Palette]:
        """生成済みの色列を 1 つのパレットとして追加する（空なら no-op）。"""
        if not colors or not isinstance(name, str) or not name.strip():
            return None
        with self._lock:
            palette = Palette(
                id=self._new_palette_id(),
                name=name,
                colors=self._fresh_colors(colors),
            )
            self._palettes.append(palette)
            self._commit()
        return palette

    def generate_palette(self, kind: GenerationKind | str, base_hex: str) -> Optional[Palette]:
        """shades / complements / random で新しいパレットを追加する。"""
        try:
            kind = GenerationKind(kind)
        except ValueError:
            logger.debug("generate_palette: unknown kind %r", kind)
            return None
        colors = generate(kind, base_hex, rng=self._rng, ids=self._ids)
        return self.add_generated_palette(generated_palette_name(kind), colors)

    def generate_from_palette(
        self, source_palette_id: str, mode: SourceMode | str
    ) -> Optional[Palette]:
        """既存パレットから `Generated from <name>` を追加する（variations / expand）。"""
        try:
            mode = SourceMode(mode)
        except ValueError:
            logger.debug("generate_from_palette: unknown mode %r", mode)
            return None
        source = self.get_palette(source_palette_id)
        if source is None:
            return None
        colors = generate_from_source(mode, source.colors, rng=self._rng, ids=self._ids)
        return self.add_generated_palette(f"Generated from {source.name}", colors)

    # --- リスナー ---
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _notify(self, snapshot: Collection) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.debug("palette listener failed", exc_info=True)
                continue


__all__ = ["PaletteStore", "Collection", "Listener"]
