"""
どこで: `common.logging`
何を: ランナー/CLI 向けの最小ロギング設定ヘルパ。
なぜ: 各モジュールは `logging.getLogger(__name__)` を使うだけにし、
     ハンドラ構成は上位（`api.runner`）で 1 度だけ行うため。
"""

from __future__ import annotations

import logging

# フレーム単位の詳細ログを出すロガー（ILLUS_DEBUG_FRAMES=1 で DEBUG へ）
FRAME_LOGGERS = ("engine.core.animation", "engine.core.scheduler")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_default_logging(level: int | str = "INFO", *, debug_frames: bool | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - `debug_frames` が None の場合は `common.settings` の `DEBUG_FRAMES` を参照
    """
    root = logging.getLogger()
    if root.handlers:
        # アプリ側で設定済み
        return
    logging.basicConfig(
        level=_resolve_level(level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if debug_frames is None:
        from .settings import get as _get_settings

        debug_frames = bool(_get_settings().DEBUG_FRAMES)
    if debug_frames:
        for name in FRAME_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG)


__all__ = ["setup_default_logging", "FRAME_LOGGERS"]
