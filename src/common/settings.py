"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int


@dataclass
class _Settings:
    # 描画面
    DEVICE_PIXEL_RATIO: float = 1.0
    MIN_DUAL_SURFACE_SIZE: float = 100.0

    # フレーム駆動
    FPS: int = 60
    RESIZE_DEBOUNCE_MS: int = 100

    # Misc
    DEBUG_FRAMES: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int`、float は `env_float` を使用。
    - 一部は下限丸めを適用。
    """
    _settings.DEVICE_PIXEL_RATIO = env_float("ILLUS_DEVICE_PIXEL_RATIO", 1.0, min_value=0.1) or 1.0
    _settings.MIN_DUAL_SURFACE_SIZE = (
        env_float("ILLUS_MIN_DUAL_SURFACE_SIZE", 100.0, min_value=0.0) or 0.0
    )

    _settings.FPS = env_int("ILLUS_FPS", 60, min_value=1) or 60
    _settings.RESIZE_DEBOUNCE_MS = env_int("ILLUS_RESIZE_DEBOUNCE_MS", 100, min_value=0) or 0

    _settings.DEBUG_FRAMES = env_bool("ILLUS_DEBUG_FRAMES", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
