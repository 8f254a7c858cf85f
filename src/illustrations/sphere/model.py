"""
どこで: `illustrations.sphere.model`
何を: 球面上の点群と、点ごとの線メタデータ（出現 → 常駐 → 消滅）の状態機械。
なぜ: 線の増減を自己再スケジュール型タスク（`TaskScheduler`）で駆動し、
     仮想時刻だけで寿命/個数制御を決定的に検証できるようにするため。

不変条件:
- `points` と `lines` は同じ id 集合を持ち、追加/削除は常に両方同時に行う。
- id は単調増加で再利用しない（初期シードは 0..n-1、以降 `next_id` から）。
- 描画対象は `lines` にメタデータを持つ点のみ。

時刻はすべてミリ秒。`now` を省略した呼び出しは注入された時刻ソースを使う。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from common.timebase import TimeSource, now_ms
from common.types import Point3D, Rotation
from engine.core.geometry3d import rotate_points
from engine.core.scheduler import ScheduledTask, TaskScheduler

from .config import SphereConfig

logger = logging.getLogger(__name__)

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))
MIN_LENGTH_PROGRESS = 0.5


class LineState(str, Enum):
    APPEARING = "appearing"
    ACTIVE = "active"
    DISAPPEARING = "disappearing"


@dataclass
class SphereLine:
    """中心から点へ伸びる 1 本の線のメタデータ。"""

    id: int
    state: LineState
    opacity: float
    length_progress: float
    created_at: float
    fade_start_time: float | None = None


@dataclass(frozen=True)
class RenderPoint:
    """描画用スナップショット（回転済みの点 + 線メタデータ）。"""

    id: int
    point: Point3D
    line: SphereLine

    @property
    def z(self) -> float:
        return self.point.z


def generate_sphere_points(num_points: int, radius: float) -> list[Point3D]:
    """黄金角による球面上のほぼ均等な点列（決定的）。

    `y_i = 1 − 2i/(n−1)`。n = 1 のときは赤道（y = 0, θ = 0）に 1 点置き `(radius, 0, 0)` を返す。
    """
    if num_points <= 0:
        return []
    if num_points == 1:
        return [Point3D(float(radius), 0.0, 0.0)]
    points: list[Point3D] = []
    for i in range(num_points):
        y = 1.0 - (i / (num_points - 1)) * 2.0
        radius_at_y = math.sqrt(max(0.0, 1.0 - y * y))
        theta = GOLDEN_ANGLE * i
        points.append(
            Point3D(
                math.cos(theta) * radius_at_y * radius,
                y * radius,
                math.sin(theta) * radius_at_y * radius,
            )
        )
    return points


def random_sphere_point(radius: float, rng: np.random.Generator) -> Point3D:
    """球面上の一様乱数点（極角は `acos(2u − 1)` で棄却なしに一様化）。"""
    theta = rng.random() * 2.0 * math.pi
    phi = math.acos(2.0 * rng.random() - 1.0)
    return Point3D(
        math.sin(phi) * math.cos(theta) * radius,
        math.cos(phi) * radius,
        math.sin(phi) * math.sin(theta) * radius,
    )


class SphereModel:
    def __init__(
        self,
        config: SphereConfig,
        *,
        time_source: TimeSource | None = None,
        scheduler: TaskScheduler | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config
        self._time = time_source or now_ms
        self.scheduler = scheduler or TaskScheduler(self._time)
        self.rng = rng or np.random.default_rng()
        self.points: dict[int, Point3D] = {}
        self.lines: dict[int, SphereLine] = {}
        self.rotation = Rotation()
        self.next_id = config.num_points
        self._add_task: ScheduledTask | None = None
        self._remove_task: ScheduledTask | None = None

    def _now(self, now: float | None) -> float:
        return float(self._time()) if now is None else float(now)

    # ---- 初期化 ----
    def initialize(self, now: float | None = None) -> None:
        """黄金角の点列でシードする。シード線は ACTIVE（不透明度 1）で始まる。"""
        t = self._now(now)
        self.points.clear()
        self.lines.clear()
        for i, p in enumerate(generate_sphere_points(self.config.num_points, self.config.radius)):
            self.points[i] = p
            self.lines[i] = SphereLine(i, LineState.ACTIVE, 1.0, 1.0, t, None)
        self.next_id = max(self.config.num_points, 0)
        self.rotation = Rotation()

    # ---- 回転 ----
    def update_rotation_angles(self, speed: Rotation | None = None) -> None:
        s = speed or self.config.rotation_speed
        self.rotation = Rotation(self.rotation.x + s.x, self.rotation.y + s.y, self.rotation.z + s.z)

    # ---- 寿命 ----
    def update_line_opacities(self, now: float | None = None) -> list[int]:
        """フェード進捗を更新し、消滅完了で削除した id を返す。"""
        t = self._now(now)
        fade = float(self.config.fade_duration)
        finished: list[int] = []
        for line in self.lines.values():
            if line.state is LineState.ACTIVE:
                line.length_progress = 1.0
                continue
            if line.fade_start_time is None:
                line.fade_start_time = t
            progress = min(1.0, max(0.0, (t - line.fade_start_time) / fade))
            if line.state is LineState.APPEARING:
                line.opacity = progress
                line.length_progress = MIN_LENGTH_PROGRESS + progress * (1.0 - MIN_LENGTH_PROGRESS)
                if progress >= 1.0:
                    line.state = LineState.ACTIVE
                    line.fade_start_time = None
                    line.length_progress = 1.0
            else:
                line.opacity = 1.0 - progress
                line.length_progress = 1.0 - progress * (1.0 - MIN_LENGTH_PROGRESS)
                if progress >= 1.0:
                    finished.append(line.id)
        # 反復後にまとめて削除
        for line_id in finished:
            self.remove_line_by_id(line_id)
        return finished

    def remove_line_by_id(self, line_id: int) -> bool:
        """メタデータと点を同時に削除する（未登録は False）。"""
        line = self.lines.pop(line_id, None)
        point = self.points.pop(line_id, None)
        return line is not None or point is not None

    # ---- 個数 ----
    def visible_count(self) -> int:
        """消滅中でない線の数（上限判定用）。"""
        return sum(1 for line in self.lines.values() if line.state is not LineState.DISAPPEARING)

    def live_count(self) -> int:
        """ACTIVE または APPEARING の線の数（下限判定用）。"""
        return sum(
            1
            for line in self.lines.values()
            if line.state in (LineState.ACTIVE, LineState.APPEARING)
        )

    def add_new_line(self, now: float | None = None) -> int | None:
        """上限未満なら球面上の一様乱数点を 1 本追加し、その id を返す。"""
        if self.visible_count() >= self.config.max_lines:
            return None
        t = self._now(now)
        line_id = self.next_id
        self.next_id += 1
        self.points[line_id] = random_sphere_point(self.config.radius, self.rng)
        self.lines[line_id] = SphereLine(line_id, LineState.APPEARING, 0.0, MIN_LENGTH_PROGRESS, t, t)
        return line_id

    def remove_random_line(self, now: float | None = None) -> int | None:
        """下限超過なら、`2 × fade_duration` より古い ACTIVE 線を 1 本消滅へ移す。"""
        if self.live_count() <= self.config.min_lines:
            return None
        t = self._now(now)
        min_age = self.config.fade_duration * 2.0
        candidates = [
            line
            for line in self.lines.values()
            if line.state is LineState.ACTIVE and t - line.created_at > min_age
        ]
        if not candidates:
            return None
        line = candidates[int(self.rng.integers(len(candidates)))]
        line.state = LineState.DISAPPEARING
        line.fade_start_time = t
        return line.id

    # ---- 増減タスク ----
    def _interval(self, lo: float, hi: float) -> float:
        return lo + self.rng.random() * (hi - lo)

    def schedule_add_line(self) -> None:
        self.scheduler.cancel(self._add_task)
        delay = self._interval(self.config.add_interval_min, self.config.add_interval_max)
        self._add_task = self.scheduler.call_later(delay, self._run_add)

    def schedule_remove_line(self) -> None:
        self.scheduler.cancel(self._remove_task)
        delay = self._interval(self.config.remove_interval_min, self.config.remove_interval_max)
        self._remove_task = self.scheduler.call_later(delay, self._run_remove)

    def _run_add(self) -> None:
        added = self.add_new_line()
        if added is not None:
            logger.debug("sphere line added id=%d total=%d", added, len(self.lines))
        self.schedule_add_line()

    def _run_remove(self) -> None:
        removed = self.remove_random_line()
        if removed is not None:
            logger.debug("sphere line fading out id=%d", removed)
        self.schedule_remove_line()

    def start_line_management(self) -> None:
        self.schedule_add_line()
        self.schedule_remove_line()

    def stop_line_management(self) -> None:
        self.scheduler.cancel(self._add_task)
        self.scheduler.cancel(self._remove_task)
        self._add_task = None
        self._remove_task = None

    @property
    def is_managing_lines(self) -> bool:
        return self._add_task is not None or self._remove_task is not None

    # ---- 描画用 ----
    def get_points_for_render(self) -> list[RenderPoint]:
        """メタデータを持つ点を現在の回転で回したスナップショット（id 昇順）。"""
        ids = [i for i in self.points if i in self.lines]
        if not ids:
            return []
        coords = np.array([self.points[i].as_tuple() for i in ids], dtype=np.float64)
        rotated = rotate_points(coords, self.rotation)
        return [
            RenderPoint(i, Point3D(float(x), float(y), float(z)), self.lines[i])
            for i, (x, y, z) in zip(ids, rotated)
        ]


__all__ = [
    "LineState",
    "SphereLine",
    "RenderPoint",
    "SphereModel",
    "generate_sphere_points",
    "random_sphere_point",
    "GOLDEN_ANGLE",
]
