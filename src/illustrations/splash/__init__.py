"""
どこで: `illustrations.splash`
何を: 矩形/多角形のスプラッシュ群の首振りと深度入替え（単一面/二面）。
"""

from .config import DEFAULT_Z_COORDINATES, SplashConfig
from .illustration import SplashIllustration
from .model import DepthChangeState, RenderObject, SplashModel, SplashObject, sway_angle_at
from .renderer import SplashRenderer

__all__ = [
    "DEFAULT_Z_COORDINATES",
    "SplashConfig",
    "SplashIllustration",
    "SplashModel",
    "SplashObject",
    "SplashRenderer",
    "DepthChangeState",
    "RenderObject",
    "sway_angle_at",
]
