"""
どこで: `illustrations.layered_house`
何を: 5 層に複製した家シルエットの、層ごとに位相をずらした揺れアニメーション。
"""

from .config import LayeredHouseConfig
from .illustration import LayeredHouseIllustration
from .model import LAYER_COUNT, HouseLayer, LayerAnimation, LayeredHouseModel, Phase, phase_at
from .renderer import LayeredHouseRenderer

__all__ = [
    "LAYER_COUNT",
    "LayeredHouseConfig",
    "LayeredHouseIllustration",
    "LayeredHouseModel",
    "LayeredHouseRenderer",
    "HouseLayer",
    "LayerAnimation",
    "Phase",
    "phase_at",
]
