"""
どこで: `illustrations.layered_house.model`
何を: 家シルエットを 5 つの深度へ複製し、層ごとに 4 相（forward/pause1/backward/pause2）の
     平面内揺れを与えるモデル。
なぜ: 揺れ（平面内回転）→ 固定 3D 回転 → 正射影の順を 1 か所で保証し、
     レンダラは投影済みの層を描くだけにするため。

座標:
- シルエットは viewBox 中心基準で読み込み、スケールを 1 度だけ掛ける。
- 重心（塗り頂点 + 線分端点の平均）はスケール後に 1 度だけ計算する。
- 投影中心は (450, 280)。層 i の深度は `i · layer_spacing`。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from common.easing import ease_in_out
from common.types import ProjectedPoint
from engine.core.geometry3d import project_orthogonal_array, rotate_2d_around, rotate_points

from ..fitting import fit_scale
from ..svg import Silhouette, parse_silhouette
from .config import LayeredHouseConfig

LAYER_COUNT = 5
PROJECTION_CENTER_X = 450.0
PROJECTION_CENTER_Y = 280.0
AUTO_SCALE_BOOST = 1.2


class Phase(str, Enum):
    FORWARD = "forward"
    PAUSE1 = "pause1"
    BACKWARD = "backward"
    PAUSE2 = "pause2"


@dataclass
class LayerAnimation:
    phase: Phase
    start_time: float
    current_angle: float = 0.0


@dataclass(frozen=True)
class StrokeSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    z: float


@dataclass
class HouseLayer:
    z: float
    fills: list[list[ProjectedPoint]] = field(default_factory=list)
    strokes: list[StrokeSegment] = field(default_factory=list)


def _project(xy: np.ndarray, z: float, config: LayeredHouseConfig) -> np.ndarray:
    """平面座標 `(N,2)` を深度 z に置き、固定回転 → 正射影した `(N,3)` を返す。"""
    pts = np.column_stack([xy, np.full(len(xy), float(z))]) if len(xy) else np.zeros((0, 3))
    rotated = rotate_points(pts, config.rotation)
    return project_orthogonal_array(
        rotated, center_x=PROJECTION_CENTER_X, center_y=PROJECTION_CENTER_Y
    )


def calculate_auto_scale(silhouette: Silhouette, config: LayeredHouseConfig) -> float:
    """全層を投影した外接矩形を余白内へ収める倍率（×1.2, [0.1, 10]）。"""
    pts = silhouette.all_points()
    if len(pts) == 0:
        return 1.0
    projected = [_project(pts, i * config.layer_spacing, config)[:, :2] for i in range(LAYER_COUNT)]
    return fit_scale(np.vstack(projected), AUTO_SCALE_BOOST)


def phase_at(elapsed: float, config: LayeredHouseConfig) -> tuple[Phase, float]:
    """層の経過時間 [ms] から (相, 角度[deg]) を求める。負の経過時間は (forward, 0)。"""
    if elapsed < 0:
        return Phase.FORWARD, 0.0
    tf = config.animation_duration_forward
    pf = config.animation_pause_after_forward
    tb = config.animation_duration_backward
    angle = config.animation_angle
    t = elapsed % config.cycle_duration
    if t < tf:
        return Phase.FORWARD, angle * ease_in_out(t / tf)
    if t < tf + pf:
        return Phase.PAUSE1, angle
    if t < tf + pf + tb:
        return Phase.BACKWARD, angle * (1.0 - ease_in_out((t - tf - pf) / tb))
    return Phase.PAUSE2, 0.0


class LayeredHouseModel:
    def __init__(self, config: LayeredHouseConfig):
        self.config = config
        self.geometry: Silhouette | None = None
        self.layers: list[HouseLayer] = []
        self.scale = config.scale or 1.0
        self.geometry_center: tuple[float, float] | None = None
        self.layer_animations: list[LayerAnimation] = []
        self.animation_start_time: float | None = None

    @property
    def is_loaded(self) -> bool:
        return self.geometry is not None

    # ---- 読込 ----
    def load_svg(self, text: str) -> None:
        self.load_geometry(parse_silhouette(text))

    def load_geometry(self, silhouette: Silhouette) -> None:
        if self.config.scale:
            self.scale = float(self.config.scale)
        else:
            self.scale = calculate_auto_scale(silhouette, self.config)
        s = self.scale
        self.geometry = Silhouette(
            fills=[f * s for f in silhouette.fills],
            strokes=silhouette.strokes * s,
            center=silhouette.center,
            size=silhouette.size,
        )
        pts = self.geometry.all_points()
        if len(pts):
            c = pts.mean(axis=0)
            self.geometry_center = (float(c[0]), float(c[1]))
        else:
            self.geometry_center = (0.0, 0.0)
        self.initialize_animations()
        self.create_layers()

    # ---- アニメーション ----
    def initialize_animations(self) -> None:
        self.layer_animations = [
            LayerAnimation(Phase.FORWARD, i * self.config.animation_delay, 0.0)
            for i in range(LAYER_COUNT)
        ]
        self.animation_start_time = None

    def update_animations(self, now: float) -> None:
        """各層の相と角度を `now` [ms] に合わせ、層を作り直す。初回呼び出しが時刻原点。"""
        if self.geometry is None:
            return
        if self.animation_start_time is None:
            self.animation_start_time = float(now)
        for anim in self.layer_animations:
            elapsed = float(now) - self.animation_start_time - anim.start_time
            anim.phase, anim.current_angle = phase_at(elapsed, self.config)
        self.create_layers()

    def update_rotation(
        self, rotation_x: float, rotation_y: float, rotation_z: float, layer_spacing: float
    ) -> None:
        """固定 3D 回転 [deg] と層間隔を差し替えて層を作り直す（スケールは据え置き）。"""
        self.config.rotation_x = float(rotation_x)
        self.config.rotation_y = float(rotation_y)
        self.config.rotation_z = float(rotation_z)
        self.config.layer_spacing = float(layer_spacing)
        if self.geometry is not None:
            self.create_layers()

    # ---- 層 ----
    def create_layers(self) -> None:
        if self.geometry is None:
            self.layers = []
            return
        center = self.geometry_center or (0.0, 0.0)
        strokes = self.geometry.strokes
        layers: list[HouseLayer] = []
        for i in range(LAYER_COUNT):
            z = i * self.config.layer_spacing
            anim = self.layer_animations[i] if i < len(self.layer_animations) else None
            angle = math.radians(anim.current_angle) if anim is not None else 0.0
            layer = HouseLayer(z=z)
            for fill in self.geometry.fills:
                proj = _project(rotate_2d_around(fill, center, angle), z, self.config)
                layer.fills.append([ProjectedPoint(float(x), float(y), float(pz)) for x, y, pz in proj])
            if len(strokes):
                p1 = _project(rotate_2d_around(strokes[:, 0:2], center, angle), z, self.config)
                p2 = _project(rotate_2d_around(strokes[:, 2:4], center, angle), z, self.config)
                layer.strokes = [
                    StrokeSegment(float(a[0]), float(a[1]), float(b[0]), float(b[1]), float(a[2]))
                    for a, b in zip(p1, p2)
                ]
            layers.append(layer)
        self.layers = layers

    def get_layers_for_render(self) -> list[HouseLayer]:
        """奥（z 大）→ 手前の順に並べた層。"""
        return sorted(self.layers, key=lambda layer: layer.z, reverse=True)


__all__ = [
    "LAYER_COUNT",
    "PROJECTION_CENTER_X",
    "PROJECTION_CENTER_Y",
    "AUTO_SCALE_BOOST",
    "Phase",
    "LayerAnimation",
    "StrokeSegment",
    "HouseLayer",
    "LayeredHouseModel",
    "calculate_auto_scale",
    "phase_at",
]
