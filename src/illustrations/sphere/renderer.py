"""
どこで: `illustrations.sphere.renderer`
何を: 点群スフィアの描画（中心からの放射線分 + 端点の円）。
なぜ: 深度（z）に応じて不透明度と半径を変え、奥行き感を出すため。

描画規則（論理 → 描画面は `SurfaceRenderer` が写像）:
- `depth_factor = (z + R) / (2R)`、`depth_opacity = 0.4 + 0.6 · depth_factor`
- 線: 中心から `0.5·(p − c)` 〜 `length·(p − c)`、alpha = `opacity · depth_opacity`
- 点: `length·(p − c)`、半径 = `point_radius·s + (depth_factor − 0.5)·2·s`、
      alpha = `opacity · max(0, (length − 0.5)·2) · depth_opacity`
"""

from __future__ import annotations

import math
from typing import Sequence

from engine.core.geometry3d import project_orthogonal
from engine.render.container import Container
from engine.render.surface_renderer import SurfaceRenderer

from .config import SphereConfig
from .model import RenderPoint, SphereModel

FALLBACK_ACCENT_COLOR = "rgba(255, 105, 105, 1)"


class SphereRenderer:
    def __init__(self, container: Container, config: SphereConfig, *, helper: SurfaceRenderer | None = None):
        self.config = config
        self.base = helper or SurfaceRenderer(container)

    # ---- IllustrationRenderer ----
    def setup_canvas(self) -> None:
        self.base.setup_canvas()

    def clear(self) -> None:
        self.base.clear()

    def render(self, model: SphereModel) -> bool:
        """1 フレーム描画する。モデルは読むだけで変更しない。"""
        b = self.base
        b.setup_canvas()
        points = b.sort_by_depth(model.get_points_for_render())
        text_color = b.get_text_color()
        accent = b.get_color_from_css(self.config.accent_color, 1) or FALLBACK_ACCENT_COLOR
        b.clear()
        self._render_lines(points, text_color)
        self._render_points(points, accent)
        return True

    # ---- 内部 ----
    def _depth_factor(self, z: float) -> float:
        r = float(self.config.radius)
        return (z + r) / (2.0 * r)

    def _screen(self, rp: RenderPoint) -> tuple[float, float]:
        projected = project_orthogonal(rp.point)
        return (self.base.scale_coordinate_x(projected.x), self.base.scale_coordinate_y(projected.y))

    def _render_lines(self, points: Sequence[RenderPoint], color: str) -> None:
        b = self.base
        s = b.surface
        s.stroke_style = color
        s.line_width = self.config.line_width * b.min_scale
        cx, cy = b.center_x, b.center_y
        for rp in points:
            length = rp.line.length_progress or 1.0
            depth_opacity = 0.4 + self._depth_factor(rp.point.z) * 0.6
            sx, sy = self._screen(rp)
            s.global_alpha = rp.line.opacity * depth_opacity
            s.begin_path()
            s.move_to(cx + (sx - cx) * 0.5, cy + (sy - cy) * 0.5)
            s.line_to(cx + (sx - cx) * length, cy + (sy - cy) * length)
            s.stroke()
        s.global_alpha = 1.0

    def _render_points(self, points: Sequence[RenderPoint], color: str) -> None:
        b = self.base
        s = b.surface
        s.fill_style = color
        k = b.min_scale
        cx, cy = b.center_x, b.center_y
        for rp in points:
            length = rp.line.length_progress or 1.0
            depth_factor = self._depth_factor(rp.point.z)
            depth_opacity = 0.4 + depth_factor * 0.6
            sx, sy = self._screen(rp)
            radius = self.config.point_radius * k + (depth_factor - 0.5) * 2.0 * k
            s.global_alpha = rp.line.opacity * max(0.0, (length - 0.5) * 2.0) * depth_opacity
            s.begin_path()
            s.arc(cx + (sx - cx) * length, cy + (sy - cy) * length, max(0.0, radius), 0.0, 2.0 * math.pi)
            s.fill()
        s.global_alpha = 1.0


__all__ = ["SphereRenderer", "FALLBACK_ACCENT_COLOR"]
