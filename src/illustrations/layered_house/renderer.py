"""
どこで: `illustrations.layered_house.renderer`
何を: 多層ハウスの描画（背景 → 奥の層から順に塗り多角形 + 内部線分）。
"""

from __future__ import annotations

import logging
from typing import Sequence

from common.types import ProjectedPoint
from engine.render.container import Container
from engine.render.surface_renderer import SurfaceRenderer

from .config import LayeredHouseConfig
from .model import LayeredHouseModel, StrokeSegment

logger = logging.getLogger(__name__)

FALLBACK_ACCENT_COLOR = "rgba(255, 105, 105, 1)"
FILL_ALPHA = 0.7


class LayeredHouseRenderer:
    def __init__(
        self, container: Container, config: LayeredHouseConfig, *, helper: SurfaceRenderer | None = None
    ):
        self.config = config
        self.base = helper or SurfaceRenderer(container)

    def setup_canvas(self) -> None:
        self.base.setup_canvas()

    def clear(self) -> None:
        self.base.clear()

    def render(self, model: LayeredHouseModel) -> bool:
        """1 フレーム描画する。背景色が解決できなければ何も描かず False。"""
        b = self.base
        b.setup_canvas()
        layers = model.get_layers_for_render()
        accent = b.get_color_from_css(self.config.accent_color, 1) or FALLBACK_ACCENT_COLOR
        fill_color = b.get_color_from_css(self.config.background_color, FILL_ALPHA)
        if fill_color is None:
            logger.warning("Background color not found: %s", self.config.background_color)
            return False
        backdrop = b.get_color_from_css(self.config.background_color, 1)
        b.clear()
        if backdrop is not None:
            b.surface.fill_style = backdrop
            b.surface.fill_rect(0.0, 0.0, b.size, b.size)
        for layer in layers:
            self._render_fills(layer.fills, fill_color, accent)
            self._render_strokes(layer.strokes, accent)
        return True

    def _offsets(self) -> tuple[float, float]:
        b = self.base
        return ((self.config.offset_x or 0.0) * b.scale_x, (self.config.offset_y or 0.0) * b.scale_y)

    def _render_fills(self, fills: Sequence[Sequence[ProjectedPoint]], fill_color: str, stroke_color: str) -> None:
        b = self.base
        s = b.surface
        s.fill_style = fill_color
        s.stroke_style = stroke_color
        s.line_width = self.config.line_width * b.min_scale
        ox, oy = self._offsets()
        for points in fills:
            if len(points) < 2:
                continue
            s.begin_path()
            first, rest = points[0], points[1:]
            s.move_to(b.scale_coordinate_x(first.x) + ox, b.scale_coordinate_y(first.y) + oy)
            for p in rest:
                s.line_to(b.scale_coordinate_x(p.x) + ox, b.scale_coordinate_y(p.y) + oy)
            s.close_path()
            s.fill()
            s.stroke()

    def _render_strokes(self, strokes: Sequence[StrokeSegment], color: str) -> None:
        b = self.base
        s = b.surface
        s.stroke_style = color
        s.line_width = self.config.line_width * b.min_scale
        ox, oy = self._offsets()
        for seg in strokes:
            s.begin_path()
            s.move_to(b.scale_coordinate_x(seg.x1) + ox, b.scale_coordinate_y(seg.y1) + oy)
            s.line_to(b.scale_coordinate_x(seg.x2) + ox, b.scale_coordinate_y(seg.y2) + oy)
            s.stroke()


__all__ = ["LayeredHouseRenderer", "FILL_ALPHA"]
