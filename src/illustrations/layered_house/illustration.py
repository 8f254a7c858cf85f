"""
どこで: `illustrations.layered_house.illustration`
何を: 多層ハウスのコントローラ。`load()` で形状記述を取得・解析し、毎フレーム層の揺れを進める。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.timebase import TimeSource
from engine.core.frame_clock import FrameSource
from engine.render.container import Container, merged_attributes

from ..controller import IllustrationController
from ..loader import load_shape_description
from ..registry import illustration
from .config import LayeredHouseConfig
from .model import LayeredHouseModel
from .renderer import LayeredHouseRenderer

logger = logging.getLogger(__name__)


@illustration("layered-house")
class LayeredHouseIllustration(IllustrationController):
    def __init__(
        self,
        container: Container,
        *,
        frame_source: FrameSource | None = None,
        time_source: TimeSource | None = None,
        config: LayeredHouseConfig | None = None,
        overrides: Mapping[str, Any] | None = None,
        shape_text: str | None = None,
    ):
        super().__init__(frame_source=frame_source, time_source=time_source)
        self.container = container
        self.config = config or LayeredHouseConfig.from_attributes(merged_attributes(container, overrides))
        self.renderer = LayeredHouseRenderer(container, self.config)
        self.model = LayeredHouseModel(self.config)
        self._shape_text = shape_text

    def load(self) -> None:
        """形状記述を取得して解析する（失敗は `GeometryLoadError` として伝播）。"""
        text = self._shape_text
        if text is None:
            text = load_shape_description(self.config.source)
        self.model.load_svg(text)
        self.is_loaded = True
        logger.debug("layered-house loaded: scale=%.3f", self.model.scale)

    def advance(self, now: float) -> None:
        self.model.update_animations(now)

    def update_rotation(
        self, rotation_x: float, rotation_y: float, rotation_z: float, layer_spacing: float
    ) -> None:
        """固定回転と層間隔を差し替えて再描画する（未ロードなら何もしない）。"""
        if not self.is_loaded:
            return
        self.model.update_rotation(rotation_x, rotation_y, rotation_z, layer_spacing)
        self.render()


__all__ = ["LayeredHouseIllustration"]
