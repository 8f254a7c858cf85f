"""
どこで: `engine.core.geometry3d`
何を: 軸回転・合成回転（X→Y→Z 固定順）と正射影/等角/透視投影の純関数群。
なぜ: 3 種のイラストが共有する唯一の 3D 数学層として、状態を持たずに再利用するため。

構成:
- スカラ版（`Point3D` を受け取り新しい値を返す）: `rotate_x/y/z`, `rotate_point`,
  `project_orthogonal`, `project_isometric`, `project_perspective`。
- NumPy 版（`(N,3)` 配列を一括変換）: `rotation_matrix`, `rotate_points`,
  `project_orthogonal_array`, `project_perspective_array`。
  スカラ版と同じ規約（右手系、X→Y→Z）で、行ごとの結果は一致する。

注意:
- 透視投影は `z → −distance` で発散する。深度設定は特異点から十分離すこと。
"""

from __future__ import annotations

import math

import numpy as np

from common.types import Point3D, ProjectedPoint, Rotation

DEFAULT_CENTER = 500.0
DEFAULT_PERSPECTIVE_DISTANCE = 1000.0

_COS30 = math.cos(math.pi / 6.0)
_SIN30 = math.sin(math.pi / 6.0)


# ---- 軸回転 -------------------------------------------------------------


def rotate_x(point: Point3D, angle: float) -> Point3D:
    """X 軸回りの回転 [rad]。"""
    c = math.cos(angle)
    s = math.sin(angle)
    return Point3D(point.x, point.y * c - point.z * s, point.y * s + point.z * c)


def rotate_y(point: Point3D, angle: float) -> Point3D:
    """Y 軸回りの回転 [rad]。"""
    c = math.cos(angle)
    s = math.sin(angle)
    return Point3D(point.x * c + point.z * s, point.y, -point.x * s + point.z * c)


def rotate_z(point: Point3D, angle: float) -> Point3D:
    """Z 軸回りの回転 [rad]。"""
    c = math.cos(angle)
    s = math.sin(angle)
    return Point3D(point.x * c - point.y * s, point.x * s + point.y * c, point.z)


def rotate_point(point: Point3D, rotation: Rotation) -> Point3D:
    """X → Y → Z の順で回転を適用する（順序は非可換なので固定）。"""
    rotated = rotate_x(point, rotation.x)
    rotated = rotate_y(rotated, rotation.y)
    return rotate_z(rotated, rotation.z)


# ---- 投影 ---------------------------------------------------------------


def project_orthogonal(
    point: Point3D,
    *,
    center_x: float = DEFAULT_CENTER,
    center_y: float = DEFAULT_CENTER,
) -> ProjectedPoint:
    """正射影（Z 軸方向から見下ろす）。z は深度用にそのまま保持。"""
    return ProjectedPoint(center_x + point.x, center_y + point.y, point.z)


def project_isometric(
    point: Point3D,
    *,
    center_x: float = DEFAULT_CENTER,
    center_y: float = DEFAULT_CENTER,
) -> ProjectedPoint:
    """古典的な 30° 等角投影。"""
    x = center_x + (point.x - point.y) * _COS30
    y = center_y + (point.x + point.y) * _SIN30 + point.z
    return ProjectedPoint(x, y, point.z)


def project_perspective(
    point: Point3D,
    *,
    center_x: float = DEFAULT_CENTER,
    center_y: float = DEFAULT_CENTER,
    distance: float = DEFAULT_PERSPECTIVE_DISTANCE,
) -> ProjectedPoint:
    """透視投影。`scale = distance / (distance + z)` を XY に掛ける。"""
    scale = distance / (distance + point.z)
    return ProjectedPoint(
        center_x + point.x * scale,
        center_y + point.y * scale,
        point.z,
        scale,
    )


# ---- NumPy 一括版 ---------------------------------------------------------


def rotation_matrix(rotation: Rotation) -> np.ndarray:
    """`rotate_point` と等価な 3x3 行列 `Rz @ Ry @ Rx` を返す（float64）。"""
    cx, sx = math.cos(rotation.x), math.sin(rotation.x)
    cy, sy = math.cos(rotation.y), math.sin(rotation.y)
    cz, sz = math.cos(rotation.z), math.sin(rotation.z)
    rx = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]], dtype=np.float64)
    ry = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]], dtype=np.float64)
    rz = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)
    return rz @ ry @ rx


def rotate_points(coords: np.ndarray, rotation: Rotation) -> np.ndarray:
    """`(N,3)` 配列を X→Y→Z で回転した新しい配列を返す。"""
    arr = np.asarray(coords, dtype=np.float64).reshape(-1, 3)
    if arr.shape[0] == 0:
        return arr.copy()
    return arr @ rotation_matrix(rotation).T


def project_orthogonal_array(
    coords: np.ndarray,
    *,
    center_x: float = DEFAULT_CENTER,
    center_y: float = DEFAULT_CENTER,
) -> np.ndarray:
    """正射影の一括版。戻り値は `(N,3)` の `[x', y', z]`。"""
    arr = np.asarray(coords, dtype=np.float64).reshape(-1, 3)
    out = arr.copy()
    out[:, 0] += center_x
    out[:, 1] += center_y
    return out


def project_perspective_array(
    coords: np.ndarray,
    *,
    center_x: float = DEFAULT_CENTER,
    center_y: float = DEFAULT_CENTER,
    distance: float = DEFAULT_PERSPECTIVE_DISTANCE,
) -> np.ndarray:
    """透視投影の一括版。戻り値は `(N,4)` の `[x', y', z, scale]`。"""
    arr = np.asarray(coords, dtype=np.float64).reshape(-1, 3)
    scale = distance / (distance + arr[:, 2])
    out = np.empty((arr.shape[0], 4), dtype=np.float64)
    out[:, 0] = center_x + arr[:, 0] * scale
    out[:, 1] = center_y + arr[:, 1] * scale
    out[:, 2] = arr[:, 2]
    out[:, 3] = scale
    return out


def rotate_2d_around(xy: np.ndarray, center: tuple[float, float], angle: float) -> np.ndarray:
    """`(N,2)` 配列を平面内で `center` 回りに回転する [rad]。"""
    arr = np.asarray(xy, dtype=np.float64).reshape(-1, 2)
    c = math.cos(angle)
    s = math.sin(angle)
    dx = arr[:, 0] - center[0]
    dy = arr[:, 1] - center[1]
    out = np.empty_like(arr)
    out[:, 0] = dx * c - dy * s + center[0]
    out[:, 1] = dx * s + dy * c + center[1]
    return out


__all__ = [
    "DEFAULT_CENTER",
    "DEFAULT_PERSPECTIVE_DISTANCE",
    "rotate_x",
    "rotate_y",
    "rotate_z",
    "rotate_point",
    "project_orthogonal",
    "project_isometric",
    "project_perspective",
    "rotation_matrix",
    "rotate_points",
    "project_orthogonal_array",
    "project_perspective_array",
    "rotate_2d_around",
]
