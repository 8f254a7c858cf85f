"""
どこで: `illustrations.sphere`
何を: 回転する点群スフィア（線の出現/消滅ライフサイクル付き）。
"""

from .config import SphereConfig
from .illustration import SphereIllustration
from .model import LineState, RenderPoint, SphereLine, SphereModel, generate_sphere_points
from .renderer import SphereRenderer

__all__ = [
    "SphereConfig",
    "SphereIllustration",
    "SphereModel",
    "SphereLine",
    "LineState",
    "RenderPoint",
    "SphereRenderer",
    "generate_sphere_points",
]
