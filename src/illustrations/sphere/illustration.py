"""
どこで: `illustrations.sphere.illustration`
何を: 点群スフィアのコントローラ（モデル + レンダラ + ループ + 線の増減タスク）。

1 フレームの順序:
    1) 期限到来の増減タスクを実行
    2) 回転角を加算
    3) 線のフェードを更新
    4) 描画
"""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from common.timebase import TimeSource
from engine.core.frame_clock import FrameSource
from engine.core.scheduler import TaskScheduler
from engine.render.container import Container, merged_attributes

from ..controller import IllustrationController
from ..registry import illustration
from .config import SphereConfig
from .model import SphereModel
from .renderer import SphereRenderer


@illustration("sphere")
class SphereIllustration(IllustrationController):
    def __init__(
        self,
        container: Container,
        *,
        frame_source: FrameSource | None = None,
        time_source: TimeSource | None = None,
        config: SphereConfig | None = None,
        overrides: Mapping[str, Any] | None = None,
        rng: np.random.Generator | None = None,
    ):
        super().__init__(frame_source=frame_source, time_source=time_source)
        self.container = container
        self.config = config or SphereConfig.from_attributes(merged_attributes(container, overrides))
        self.renderer = SphereRenderer(container, self.config)
        self.scheduler = TaskScheduler(self.time_source)
        self.model = SphereModel(
            self.config, time_source=self.time_source, scheduler=self.scheduler, rng=rng
        )

    def load(self) -> None:
        self.model.initialize(self.now())
        self.is_loaded = True

    def start(self) -> None:
        was_running = self.is_running
        super().start()
        if not was_running and not self.model.is_managing_lines:
            self.model.start_line_management()

    def advance(self, now: float) -> None:
        self.scheduler.run_due(now)
        self.model.update_rotation_angles(self.config.rotation_speed)
        self.model.update_line_opacities(now)

    def _on_stop(self) -> None:
        self.model.stop_line_management()


__all__ = ["SphereIllustration"]
