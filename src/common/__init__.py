"""
どこで: `common` パッケージ。
何を: palette/store/editor 層で共有する軽量ユーティリティ（ロギング・環境変数・設定）。
なぜ: 設定やロギングの初期化を 1 箇所に集め、依存の向きを単純化するため。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
