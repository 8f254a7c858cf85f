"""
どこで: `illustrations.splash.model`
何を: 矩形/多角形のスプラッシュ群に深度を割り当て、首振り（Y 回転）と深度の入替えを進めるモデル。
なぜ: 深度値の多重集合を保ったまま割当てだけを入れ替え、急峻な ease-out で補間するため。

深度プール:
- 各オブジェクトに最初に割り当てた深度の列（`z_coordinates[i]`、足りなければ 0）。
- 入替えは常にこのプールの順列なので、何度入替えても多重集合は不変。

時刻はミリ秒。`update(now)` の初回呼び出しが首振りと入替えタイマーの原点になる。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Literal, Sequence

import numpy as np

from common.easing import clamp01, ease_in_out, sharp_ease_out
from common.types import ProjectedPoint, Rotation
from engine.core.geometry3d import project_perspective_array, rotate_points

from ..fitting import fit_scale
from ..svg import SplashShape, parse_splash_shapes
from .config import SplashConfig

logger = logging.getLogger(__name__)

AUTO_SCALE_REDUCTION = 0.7
REFERENCE_PERSPECTIVE_DISTANCE = 600.0
PROJECTION_CENTER = 500.0


@dataclass
class SplashObject:
    type: Literal["rect", "polygon"]
    original_points: np.ndarray
    z: float
    target_z: float


@dataclass
class DepthChangeState:
    is_changing: bool = False
    start_time: float | None = None
    start_z: list[float] = field(default_factory=list)
    target_z: list[float] = field(default_factory=list)
    last_depth_change_time: float | None = None


@dataclass(frozen=True)
class RenderObject:
    type: str
    points: list[ProjectedPoint]
    z: float


def calculate_auto_scale(shapes: Sequence[SplashShape], z_coordinates: Sequence[float]) -> float:
    """参照距離 600 の透視投影で外接矩形を余白内へ収める倍率（×0.7, [0.1, 10]）。"""
    parts = []
    for i, shape in enumerate(shapes):
        if not len(shape.points):
            continue
        z = float(z_coordinates[i]) if i < len(z_coordinates) else 0.0
        pts = np.column_stack([shape.points, np.full(len(shape.points), z)])
        parts.append(
            project_perspective_array(
                pts,
                center_x=PROJECTION_CENTER,
                center_y=PROJECTION_CENTER,
                distance=REFERENCE_PERSPECTIVE_DISTANCE,
            )[:, :2]
        )
    if not parts:
        return 1.0
    return fit_scale(np.vstack(parts), AUTO_SCALE_REDUCTION)


def sway_angle_at(elapsed: float, angle_deg: float, duration: float) -> float:
    """首振り角 [rad]。−A → +A（duration）→ −A（duration）を ease-in-out で往復する。"""
    t = max(0.0, float(elapsed)) % (duration * 2.0)
    if t < duration:
        deg = -angle_deg + angle_deg * 2.0 * ease_in_out(t / duration)
    else:
        deg = angle_deg - angle_deg * 2.0 * ease_in_out((t - duration) / duration)
    return math.radians(deg)


class SplashModel:
    def __init__(self, config: SplashConfig, *, rng: np.random.Generator | None = None):
        self.config = config
        self.rng = rng or np.random.default_rng()
        self.objects: list[SplashObject] = []
        self.depth_pool: list[float] = []
        self.scale = config.scale or 1.0
        self.rotation_y = 0.0
        self.animation_start_time: float | None = None
        self.depth_change = DepthChangeState()

    @property
    def is_loaded(self) -> bool:
        return bool(self.objects) or self.animation_start_time is not None

    # ---- 読込 ----
    def load_svg(self, text: str) -> None:
        self.load_shapes(parse_splash_shapes(text))

    def load_shapes(self, shapes: Sequence[SplashShape]) -> None:
        pool = self.config.z_coordinates
        if self.config.scale:
            self.scale = float(self.config.scale)
        else:
            self.scale = calculate_auto_scale(shapes, pool)
        self.objects = []
        for i, shape in enumerate(shapes):
            z = float(pool[i]) if i < len(pool) else 0.0
            self.objects.append(SplashObject(shape.type, shape.points * self.scale, z, z))
        self.depth_pool = [obj.z for obj in self.objects]
        self.depth_change = DepthChangeState(
            start_z=[obj.z for obj in self.objects],
            target_z=list(self.depth_pool),
        )
        self.animation_start_time = None
        self.rotation_y = 0.0
        if len(shapes) > len(pool):
            logger.debug("splash: %d shapes exceed depth pool, extra depths set to 0", len(shapes) - len(pool))

    # ---- 深度入替え ----
    def generate_new_z_coordinates(self) -> list[float]:
        """深度プールの一様ランダムな順列。"""
        return [self.depth_pool[i] for i in self.rng.permutation(len(self.depth_pool))]

    def start_depth_change(self, now: float) -> None:
        self.depth_change.is_changing = True
        self.depth_change.start_time = float(now)
        self.depth_change.start_z = [obj.z for obj in self.objects]
        self.depth_change.target_z = self.generate_new_z_coordinates()
        self.depth_change.last_depth_change_time = float(now)

    def update_depth_change(self, now: float) -> None:
        st = self.depth_change
        if not st.is_changing or st.start_time is None:
            return
        progress = clamp01((float(now) - st.start_time) / self.config.depth_change_duration)
        eased = sharp_ease_out(progress, self.config.depth_change_easing_power)
        for obj, z0, z1 in zip(self.objects, st.start_z, st.target_z):
            obj.target_z = z1
            # 完了時は補間誤差を残さず目標値へ
            obj.z = z1 if progress >= 1.0 else z0 + (z1 - z0) * eased
        if progress >= 1.0:
            st.is_changing = False
            st.start_z = [obj.z for obj in self.objects]

    # ---- 毎フレーム ----
    def update(self, now: float) -> None:
        t = float(now)
        if self.animation_start_time is None:
            self.animation_start_time = t
        self.rotation_y = sway_angle_at(
            t - self.animation_start_time, self.config.animation_angle, self.config.animation_duration
        )
        st = self.depth_change
        if st.last_depth_change_time is None:
            st.last_depth_change_time = t
        elif not st.is_changing and t - st.last_depth_change_time >= self.config.depth_change_interval:
            self.start_depth_change(t)
        self.update_depth_change(t)

    def get_objects_for_render(self) -> list[RenderObject]:
        """Y 回転 → 透視投影（`perspective_distance`）した各オブジェクト（入力順）。"""
        rotation = Rotation(0.0, self.rotation_y, 0.0)
        out: list[RenderObject] = []
        for obj in self.objects:
            pts = np.column_stack([obj.original_points, np.full(len(obj.original_points), obj.z)])
            projected = project_perspective_array(
                rotate_points(pts, rotation),
                center_x=PROJECTION_CENTER,
                center_y=PROJECTION_CENTER,
                distance=self.config.perspective_distance,
            )
            out.append(
                RenderObject(
                    obj.type,
                    [ProjectedPoint(float(x), float(y), float(z), float(s)) for x, y, z, s in projected],
                    obj.z,
                )
            )
        return out

    def current_depths(self) -> list[float]:
        return [obj.z for obj in self.objects]


__all__ = [
    "AUTO_SCALE_REDUCTION",
    "REFERENCE_PERSPECTIVE_DISTANCE",
    "SplashObject",
    "DepthChangeState",
    "RenderObject",
    "SplashModel",
    "calculate_auto_scale",
    "sway_angle_at",
]
