"""
どこで: `engine.render.surface_renderer`
何を: 各イラストのレンダラが合成して使う描画補助 `SurfaceRenderer`。
     DPR を考慮した正方形サイズ決定、1000×1000 論理空間 → 描画面の写像、
     深度ソート、スタイル変数からの色解決を提供する。
なぜ: 継承ではなく合成で共通処理を共有し、3 種のレンダラを同じ土台に載せるため。

設計メモ:
- 論理空間は常に 1000×1000。`scale_x = scale_y = size/1000`、中心は `size/2`。
- `setup_canvas()` はリサイズ検知のたびに呼び直してよい（冪等）。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, TypeVar

from common.errors import SurfaceNotFoundError
from util.color import format_rgba

from .container import Container
from .surface import Surface

LOGICAL_SIZE = 1000.0
LOGICAL_CENTER = LOGICAL_SIZE / 2.0
DEFAULT_TEXT_COLOR = "rgb(0, 0, 0)"

T = TypeVar("T")


def _depth_of(item: Any) -> float:
    """要素の z を取り出す（欠落/None は 0）。"""
    if isinstance(item, Mapping):
        z = item.get("z")
    elif isinstance(item, (tuple, list)) and not hasattr(item, "z"):
        z = item[2] if len(item) > 2 else None
    else:
        z = getattr(item, "z", None)
    return 0.0 if z is None else float(z)


def sort_by_depth(items: Iterable[T]) -> list[T]:
    """z 降順（奥 → 手前）の安定ソート。入力は変更しない。"""
    return sorted(items, key=_depth_of, reverse=True)


class SurfaceRenderer:
    """1 つの `Container` に対する描画面セットアップと座標写像。"""

    def __init__(
        self,
        container: Container,
        *,
        device_pixel_ratio: float | None = None,
        min_size: float = 0.0,
    ):
        if container.surface is None:
            raise SurfaceNotFoundError(f"container {container.name or '<unnamed>'!r} has no surface")
        self.container = container
        self.surface: Surface = container.surface
        self._dpr_override = device_pixel_ratio
        self.min_size = float(min_size)
        self.dpr = 1.0
        self.size = 0.0
        self.scale_x = 1.0
        self.scale_y = 1.0
        self.center_x = 0.0
        self.center_y = 0.0

    # ---- サイズ ----
    def _resolve_dpr(self) -> float:
        if self._dpr_override is not None:
            return float(self._dpr_override)
        if self.container.device_pixel_ratio is not None:
            return float(self.container.device_pixel_ratio)
        from common.settings import get as _get_settings

        return float(_get_settings().DEVICE_PIXEL_RATIO or 1.0)

    def current_size(self) -> float:
        """正方形の一辺 = min(幅, 高さ)（`min_size` 未満なら引き上げ）。"""
        size = min(float(self.container.width), float(self.container.height))
        return max(size, self.min_size)

    def setup_canvas(self) -> None:
        """描画面を `size × dpr` に確保し、論理空間の写像を更新する。"""
        self.dpr = self._resolve_dpr()
        size = self.current_size()
        self.size = size
        self.surface.resize(size * self.dpr, size * self.dpr, css_width=size, css_height=size)
        self.surface.scale(self.dpr, self.dpr)
        self.scale_x = size / LOGICAL_SIZE
        self.scale_y = size / LOGICAL_SIZE
        self.center_x = size / 2.0
        self.center_y = size / 2.0

    def clear(self) -> None:
        self.surface.clear_rect(0.0, 0.0, self.size, self.size)

    @property
    def min_scale(self) -> float:
        return min(self.scale_x, self.scale_y)

    # ---- 座標写像 ----
    def scale_coordinate_x(self, x: float) -> float:
        return (x - LOGICAL_CENTER) * self.scale_x + self.center_x

    def scale_coordinate_y(self, y: float) -> float:
        return (y - LOGICAL_CENTER) * self.scale_y + self.center_y

    sort_by_depth = staticmethod(sort_by_depth)

    # ---- 色 ----
    def get_color_from_css(
        self, name: str, alpha: float = 1.0, element: Container | None = None
    ) -> str | None:
        """スタイル変数（"r, g, b" 形式）を `rgba(r, g, b, alpha)` にする。未設定/空は None。"""
        el = element or self.container
        value = el.get_style(name)
        if not value:
            return None
        return format_rgba(value, alpha)

    def get_text_color(self, element: Container | None = None) -> str:
        el = element or self.container
        return el.get_style("color") or DEFAULT_TEXT_COLOR


__all__ = [
    "LOGICAL_SIZE",
    "LOGICAL_CENTER",
    "DEFAULT_TEXT_COLOR",
    "SurfaceRenderer",
    "sort_by_depth",
]
