"""
どこで: `common` の型定義。
何を: Point3D/Rotation/ProjectedPoint などの軽量値型と Vec2/Vec3 エイリアス。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class Point3D:
    """論理空間上の 3D 点（同一性なし、自由にコピー可能）。"""

    x: float
    y: float
    z: float = 0.0

    def as_tuple(self) -> Vec3:
        return (float(self.x), float(self.y), float(self.z))


@dataclass(frozen=True, slots=True)
class Rotation:
    """X→Y→Z の順で適用する回転角 [rad]。"""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_degrees(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> "Rotation":
        return cls(math.radians(x), math.radians(y), math.radians(z))


@dataclass(frozen=True, slots=True)
class ProjectedPoint:
    """投影後の 2D 座標 + 深度（透視投影時のみ scale を保持）。"""

    x: float
    y: float
    z: float
    scale: float | None = None


__all__ = ["Vec2", "Vec3", "Point3D", "Rotation", "ProjectedPoint"]
