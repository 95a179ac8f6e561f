"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

補足:
- `STATE_DIR`/`STORAGE_KEY` が None の場合は `configs/default.yaml` の
  `palette_store` セクション（`util.utils.load_config`）が使われる。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, env_str


@dataclass
class _Settings:
    # 永続化
    STATE_DIR: str | None = None
    STORAGE_KEY: str | None = None

    # ロギング
    LOG_LEVEL: str = "INFO"

    # 生成（None の場合は毎回 OS エントロピーから初期化）
    RANDOM_SEED: int | None = None


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 文字列は `env_str`、int は `env_int` を使用。
    - 不正値は既定値へフォールバックする。
    """
    _settings.STATE_DIR = env_str("SWB_STATE_DIR")
    _settings.STORAGE_KEY = env_str("SWB_STORAGE_KEY")
    _settings.LOG_LEVEL = (env_str("SWB_LOG_LEVEL", "INFO") or "INFO").upper()
    _settings.RANDOM_SEED = env_int("SWB_RANDOM_SEED", None, min_value=0)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
