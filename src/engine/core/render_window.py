"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA/背景クリア）と描画コールバック登録を提供。
なぜ: イラストのセル描画を GUI 依存から切り離し、`on_draw` の順序だけをここで決めるため。

使用例:
    win = RenderWindow(1080, 360, bg_color=(0.96, 0.94, 0.9, 1.0), caption="Illustrations")
    win.add_draw_callback(surface.draw)
    pyglet.app.run()
"""

from typing import Callable, Sequence

import pyglet
from pyglet.gl import Config, glClearColor

DEFAULT_CAPTION = "Illustrations"


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
        caption: str = DEFAULT_CAPTION,
        resizable: bool = True,
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            bg_color: 背景色 RGBA（0.0〜1.0）。
            caption: タイトルバーの文字列。
        """
        # 多角形の縁と線を滑らかにするために MSAA を有効化
        config = Config(double_buffer=True, sample_buffers=1, samples=4, vsync=True)
        super().__init__(width=width, height=height, caption=caption, config=config, resizable=resizable)
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される（後に登録したものが手前）。
        """
        self._draw_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    # ---- helpers ----
    def set_background_color(self, rgba: Sequence[float]) -> None:
        """背景色 RGBA(0–1) を更新する。次フレームから反映。4 要素でなければ ValueError。"""
        if len(rgba) != 4:
            raise ValueError(f"background color must have 4 components, got {len(rgba)}")
        r, g, b, a = rgba
        self._bg_color = (float(r), float(g), float(b), float(a))


__all__ = ["RenderWindow", "DEFAULT_CAPTION"]
