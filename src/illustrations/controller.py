"""
どこで: `illustrations.controller`
何を: モデル + レンダラ + `AnimationLoop` を束ねるコントローラの共通骨格 `IllustrationController`。
なぜ: load/start/stop/resize の順序と冪等性を 3 種のイラストで揃えるため。

ライフサイクル:
    ctrl = SphereIllustration(container)   # 設定/描画面の検証（失敗は構築時に送出）
    ctrl.start()                           # 未ロードなら load() → 描画面セットアップ → ループ開始 → 初回描画
    ctrl.stop()                            # ループ・保留中リサイズ・個別タスクを停止（冪等）
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from common.timebase import TimeSource, now_ms
from engine.core.animation import AnimationLoop
from engine.core.frame_clock import FrameSource

logger = logging.getLogger(__name__)


class IllustrationController:
    """各イラストの基底。サブクラスは `model` / `renderer` を用意し `advance()` を実装する。"""

    type_name: ClassVar[str] = ""

    model: Any
    renderer: Any

    def __init__(self, *, frame_source: FrameSource | None = None, time_source: TimeSource | None = None):
        self.time_source: TimeSource = time_source or now_ms
        self.is_loaded = False
        self.animation = AnimationLoop(self.on_frame, frame_source=frame_source)
        self.animation.on_resize = self.on_resize

    def now(self) -> float:
        return float(self.time_source())

    # ---- サブクラス実装 ----
    def load(self) -> None:
        """形状の取得/生成。既定は何もせずロード済みにする。"""
        self.is_loaded = True

    def advance(self, now: float) -> None:
        """1 フレーム分モデルを進める。"""
        raise NotImplementedError

    def _on_stop(self) -> None:
        """停止時の追加処理（タスク解除など）。"""

    # ---- 共通 ----
    def start(self) -> None:
        if not self.is_loaded:
            self.load()
        self.renderer.setup_canvas()
        self.animation.start()
        self.render()

    def stop(self) -> None:
        self.animation.stop()
        self._on_stop()

    def dispose(self) -> None:
        self.stop()

    @property
    def is_running(self) -> bool:
        return self.animation.is_running

    def render(self) -> Any:
        return self.renderer.render(self.model)

    def _label(self) -> str:
        return self.type_name or type(self).__name__

    def on_frame(self) -> None:
        if not self.is_loaded:
            return
        # 共有 FrameClock 上の他インスタンスへ例外を流さない
        try:
            self.advance(self.now())
            self.render()
        except Exception:
            logger.exception("%s illustration failed during a frame; stopping it", self._label())
            self.stop()

    def handle_resize(self) -> None:
        """表示サイズ変更の通知（debounce 後に `on_resize`）。"""
        self.animation.handle_resize()

    def on_resize(self) -> None:
        if not self.is_loaded:
            return
        try:
            self.renderer.setup_canvas()
            self.render()
        except Exception:
            logger.exception("%s illustration failed during resize; stopping it", self._label())
            self.stop()

    # 旧来の取得 API
    def get_model(self) -> Any:
        return self.model

    def get_renderer(self) -> Any:
        return self.renderer


__all__ = ["IllustrationController"]
