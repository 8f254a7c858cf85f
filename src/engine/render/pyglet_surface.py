"""
どこで: `engine.render.pyglet_surface`
何を: `Surface` の pyglet 実装。パス命令を `pyglet.shapes`（Line/Polygon/Circle/Rectangle）へ変換し、
     1 つの `pyglet.graphics.Batch` に積んで `draw()` でまとめて描く。
なぜ: イラストのレンダラを Canvas 風 API のまま、ウィンドウ上のセルへ描画するため。

座標:
- 描画面の論理座標（左上原点・y 下向き）を、ウィンドウ座標（左下原点・y 上向き）へ反転する。
- `scale(dpr)` は記録のみ。HiDPI の拡大は pyglet ウィンドウ側が受け持つ。
"""

from __future__ import annotations

import logging
import math
from typing import Any

import pyglet
from pyglet.graphics import Batch, Group

from util.color import to_u8_rgba

logger = logging.getLogger(__name__)


class PygletSurface:
    """ウィンドウ内の 1 セル（左下 `origin`）に描く描画面。"""

    def __init__(self, origin_x: float = 0.0, origin_y: float = 0.0, *, batch: Batch | None = None):
        self.origin_x = float(origin_x)
        self.origin_y = float(origin_y)
        self.batch = batch or Batch()
        self.fill_style = "rgb(0, 0, 0)"
        self.stroke_style = "rgb(0, 0, 0)"
        self.line_width = 1.0
        self.global_alpha = 1.0
        self.css_width = 0.0
        self.css_height = 0.0
        self.dpr = 1.0
        self._shapes: list[Any] = []
        self._order = 0
        self._subpaths: list[list[tuple[float, float]]] = []
        self._closed: list[bool] = []
        self._arcs: list[tuple[float, float, float]] = []

    # ---- 座標 ----
    def _to_window(self, x: float, y: float) -> tuple[float, float]:
        return (self.origin_x + x, self.origin_y + self.css_height - y)

    def move_origin(self, origin_x: float, origin_y: float) -> None:
        self.origin_x = float(origin_x)
        self.origin_y = float(origin_y)

    def _next_group(self) -> Group:
        # 描画順 = 発行順（種類の異なる shape 間でも保つ）
        self._order += 1
        return Group(order=self._order)

    def _color(self, style: str) -> tuple[int, int, int, int]:
        return to_u8_rgba(style, alpha=self.global_alpha)

    def _keep(self, shape: Any) -> None:
        self._shapes.append(shape)

    # ---- Surface ----
    def resize(self, width: float, height: float, *, css_width: float, css_height: float) -> None:
        self.css_width = float(css_width)
        self.css_height = float(css_height)
        self.dpr = 1.0

    def scale(self, sx: float, sy: float) -> None:
        self.dpr *= float(sx)

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        """保持中の shape を破棄する（部分消去は扱わず常に全消去）。"""
        for shape in self._shapes:
            shape.delete()
        self._shapes.clear()
        self._order = 0

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        wx, wy = self._to_window(x, y + h)
        self._keep(
            pyglet.shapes.Rectangle(
                wx,
                wy,
                w,
                h,
                color=self._color(self.fill_style),
                batch=self.batch,
                group=self._next_group(),
            )
        )

    def begin_path(self) -> None:
        self._subpaths = []
        self._closed = []
        self._arcs = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([self._to_window(x, y)])
        self._closed.append(False)

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append(self._to_window(x, y))

    def close_path(self) -> None:
        if self._closed:
            self._closed[-1] = True

    def arc(self, x: float, y: float, radius: float, start: float, end: float) -> None:
        if abs(end - start) < 2.0 * math.pi - 1e-9:
            logger.debug("partial arc approximated by full circle: %s..%s", start, end)
        wx, wy = self._to_window(x, y)
        self._arcs.append((wx, wy, float(radius)))

    def fill(self) -> None:
        color = self._color(self.fill_style)
        for wx, wy, r in self._arcs:
            self._keep(
                pyglet.shapes.Circle(wx, wy, r, color=color, batch=self.batch, group=self._next_group())
            )
        for pts in self._subpaths:
            if len(pts) < 3:
                continue
            self._keep(
                pyglet.shapes.Polygon(*pts, color=color, batch=self.batch, group=self._next_group())
            )

    def stroke(self) -> None:
        color = self._color(self.stroke_style)
        width = max(float(self.line_width), 0.5)
        for pts, closed in zip(self._subpaths, self._closed):
            seq = pts + [pts[0]] if closed and len(pts) > 2 else pts
            for (x0, y0), (x1, y1) in zip(seq, seq[1:]):
                # 第 5 引数は pyglet 2.0 の width / 2.1 の thickness に対応
                self._keep(
                    pyglet.shapes.Line(
                        x0, y0, x1, y1, width, color=color, batch=self.batch, group=self._next_group()
                    )
                )

    # ---- ウィンドウ側 ----
    def draw(self) -> None:
        self.batch.draw()

    @property
    def shape_count(self) -> int:
        return len(self._shapes)


__all__ = ["PygletSurface"]
