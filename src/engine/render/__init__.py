"""
どこで: `engine.render` サブパッケージ。
何を: 描画面（Surface/RecordingSurface/PygletSurface）・コンテナ・共通描画補助 SurfaceRenderer を提供。
なぜ: 計算（core/illustrations）と描画の責務を分離し、GUI 依存を `pyglet_surface` に局所化するため。
"""

from .container import Container, PairedSurface
from .surface import DrawOp, RecordingSurface, Surface
from .surface_renderer import SurfaceRenderer, sort_by_depth
from .types import IllustrationRenderer

__all__ = [
    "Container",
    "PairedSurface",
    "Surface",
    "DrawOp",
    "RecordingSurface",
    "SurfaceRenderer",
    "sort_by_depth",
    "IllustrationRenderer",
]
