"""
どこで: `illustrations.splash.renderer`
何を: スプラッシュの描画。単一面モードと、奥（z ≥ 0）/手前（z < 0）を別々の面に描く二面モード。
なぜ: 二面モードでは手前の面を前景コンテンツの上に重ね、奥の面を背後に置けるようにするため。

補足:
- 二面モードでは各面を最小サイズ（`MIN_DUAL_SURFACE_SIZE`）まで引き上げ、
  写像（scale/center）は両面とも奥の面のものを使う。
- 背景色が解決できないフレームは描かずに警告ログだけ出す。
"""

from __future__ import annotations

import logging
from typing import Sequence

from common.settings import get as get_settings
from engine.render.container import Container, PairedSurface
from engine.render.surface_renderer import SurfaceRenderer, sort_by_depth

from .config import SplashConfig
from .model import RenderObject, SplashModel

logger = logging.getLogger(__name__)

FALLBACK_ACCENT_COLOR = "rgba(255, 105, 105, 1)"
FILL_ALPHA = 0.7


class SplashRenderer:
    def __init__(self, target: Container | PairedSurface, config: SplashConfig):
        self.config = config
        self.is_dual = isinstance(target, PairedSurface)
        if isinstance(target, PairedSurface):
            min_size = float(get_settings().MIN_DUAL_SURFACE_SIZE)
            self.base = SurfaceRenderer(target.primary, min_size=min_size)
            self.front: SurfaceRenderer | None = SurfaceRenderer(target.secondary, min_size=min_size)
        else:
            self.base = SurfaceRenderer(target)
            self.front = None

    def setup_canvas(self) -> None:
        self.base.setup_canvas()
        if self.front is not None:
            self.front.setup_canvas()

    def clear(self) -> None:
        self.base.clear()
        if self.front is not None:
            self.front.clear()

    def render(self, model: SplashModel) -> bool:
        b = self.base
        fill_color = b.get_color_from_css(self.config.background_color, FILL_ALPHA)
        if fill_color is None:
            logger.warning("Background color not found: %s", self.config.background_color)
            return False
        accent = b.get_color_from_css(self.config.accent_color, 1) or FALLBACK_ACCENT_COLOR
        objects = model.get_objects_for_render()
        if self.front is None:
            b.clear()
            self._draw(b, sort_by_depth(objects), fill_color, accent)
            return True
        back = [o for o in objects if o.z >= 0]
        front = [o for o in objects if o.z < 0]
        b.clear()
        self.front.clear()
        self._draw(b, sort_by_depth(back), fill_color, accent)
        self._draw(self.front, sort_by_depth(front), fill_color, accent)
        return True

    def _draw(
        self, target: SurfaceRenderer, objects: Sequence[RenderObject], fill_color: str, stroke_color: str
    ) -> None:
        # 写像は常に奥の面のもの
        m = self.base
        s = target.surface
        ox = (self.config.offset_x or 0.0) * m.scale_x
        oy = (self.config.offset_y or 0.0) * m.scale_y
        s.fill_style = fill_color
        s.stroke_style = stroke_color
        s.line_width = self.config.line_width * m.min_scale
        for obj in objects:
            if len(obj.points) < 2:
                continue
            first, rest = obj.points[0], obj.points[1:]
            s.begin_path()
            s.move_to(m.scale_coordinate_x(first.x) + ox, m.scale_coordinate_y(first.y) + oy)
            for p in rest:
                s.line_to(m.scale_coordinate_x(p.x) + ox, m.scale_coordinate_y(p.y) + oy)
            s.close_path()
            s.fill()
            s.stroke()


__all__ = ["SplashRenderer", "FILL_ALPHA"]
