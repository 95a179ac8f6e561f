"""
どこで: `util.ids`。
何を: 色/パレットの不透明 ID を払い出す `IdFactory` と、その標準実装を提供する。
なぜ: 時刻ベースの一意性に依存せず、テストでは連番へ差し替えられるようにするため。
"""

from __future__ import annotations

import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def uuid_ids() -> IdFactory:
    """uuid4 の 16 進表記を返す IdFactory。"""

    def _next() -> str:
        return uuid.uuid4().hex

    return _next


def sequential_ids(prefix: str = "id", start: int = 1) -> IdFactory:
    """`<prefix>-1`, `<prefix>-2`, ... を返す決定的な IdFactory。"""
    counter = itertools.count(start)

    def _next() -> str:
        return f"{prefix}-{next(counter)}"

    return _next


__all__ = ["IdFactory", "uuid_ids", "sequential_ids"]
