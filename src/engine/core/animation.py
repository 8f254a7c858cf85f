"""
どこで: `engine.core.animation`
何を: イラスト単位のフレームドライバ `AnimationLoop`（start/stop と resize の遅延通知）。
なぜ: 表示更新ごとに 1 回だけ `on_frame` を同期実行し、停止時に保留中の
     フレーム/リサイズ通知を確実に解除するため。

フレーム供給元:
- 既定は `pyglet.clock`（遅延 import）。`FrameClock` を渡せば複数ループを 1 本の tick に束ねられる。
- どちらも `schedule(func)` / `schedule_once(func, delay)` / `unschedule(func)` を持つ。
"""

from __future__ import annotations

import logging
from typing import Callable

from .frame_clock import FrameSource

logger = logging.getLogger(__name__)


def _default_frame_source() -> FrameSource:
    # 遅延インポート（ヘッドレス環境で import 時にウィンドウ系を読まないため）
    import pyglet

    return pyglet.clock  # type: ignore[return-value]


class AnimationLoop:
    """`on_frame` を表示更新ごとに呼び出すループ。`start()`/`stop()` は冪等。"""

    def __init__(
        self,
        on_frame: Callable[[], None],
        *,
        frame_source: FrameSource | None = None,
        resize_debounce_ms: float | None = None,
    ):
        self.on_frame = on_frame
        self.on_resize: Callable[[], None] | None = None
        self._source = frame_source
        if resize_debounce_ms is None:
            from common.settings import get as _get_settings

            resize_debounce_ms = float(_get_settings().RESIZE_DEBOUNCE_MS)
        self._resize_delay = max(0.0, float(resize_debounce_ms)) / 1000.0
        self._running = False
        self._resize_pending = False
        self._frames = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def frame_count(self) -> int:
        return self._frames

    @property
    def resize_pending(self) -> bool:
        return self._resize_pending

    def _frame_source(self) -> FrameSource:
        if self._source is None:
            self._source = _default_frame_source()
        return self._source

    def start(self) -> None:
        """ループを開始する（実行中なら何もしない）。"""
        if self._running:
            return
        self._running = True
        self._frame_source().schedule(self._tick)
        logger.debug("animation loop started: %r", self.on_frame)

    def stop(self) -> None:
        """ループを停止し、保留中のフレーム/リサイズ通知を解除する（停止済みなら何もしない）。"""
        if not self._running:
            return
        self._running = False
        source = self._frame_source()
        source.unschedule(self._tick)
        if self._resize_pending:
            source.unschedule(self._fire_resize)
            self._resize_pending = False
        logger.debug("animation loop stopped after %d frames", self._frames)

    def _tick(self, dt: float) -> None:
        if not self._running:
            return
        self._frames += 1
        self.on_frame()

    # ---- resize（debounce） ----
    def handle_resize(self) -> None:
        """リサイズ通知。最後の通知から debounce 時間経過後に `on_resize` を 1 回呼ぶ。"""
        source = self._frame_source()
        if self._resize_pending:
            source.unschedule(self._fire_resize)
        self._resize_pending = True
        source.schedule_once(self._fire_resize, self._resize_delay)

    def _fire_resize(self, dt: float) -> None:
        self._resize_pending = False
        if self.on_resize is not None:
            self.on_resize()


__all__ = ["AnimationLoop"]
