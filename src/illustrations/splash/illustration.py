"""
どこで: `illustrations.splash.illustration`
何を: スプラッシュのコントローラ。単一の `Container` か二面の `PairedSurface` を受け取る。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from common.timebase import TimeSource
from engine.core.frame_clock import FrameSource
from engine.render.container import Container, PairedSurface, merged_attributes

from ..controller import IllustrationController
from ..loader import load_shape_description
from ..registry import illustration
from .config import SplashConfig
from .model import SplashModel
from .renderer import SplashRenderer

logger = logging.getLogger(__name__)


@illustration("splash")
class SplashIllustration(IllustrationController):
    def __init__(
        self,
        container: Container | PairedSurface,
        *,
        frame_source: FrameSource | None = None,
        time_source: TimeSource | None = None,
        config: SplashConfig | None = None,
        overrides: Mapping[str, Any] | None = None,
        shape_text: str | None = None,
        rng: np.random.Generator | None = None,
    ):
        super().__init__(frame_source=frame_source, time_source=time_source)
        self.container = container
        self.config = config or SplashConfig.from_attributes(merged_attributes(container, overrides))
        self.renderer = SplashRenderer(container, self.config)
        self.model = SplashModel(self.config, rng=rng)
        self._shape_text = shape_text

    @property
    def is_dual(self) -> bool:
        return self.renderer.is_dual

    def load(self) -> None:
        text = self._shape_text
        if text is None:
            text = load_shape_description(self.config.source)
        self.model.load_svg(text)
        self.is_loaded = True
        logger.debug(
            "splash loaded: %d objects, scale=%.3f, dual=%s", len(self.model.objects), self.model.scale, self.is_dual
        )

    def advance(self, now: float) -> None:
        self.model.update(now)


__all__ = ["SplashIllustration"]
