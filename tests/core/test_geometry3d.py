from __future__ import annotations

import math

import numpy as np
import pytest

from common.types import Point3D, Rotation
from engine.core.geometry3d import (
    project_isometric,
    project_orthogonal,
    project_orthogonal_array,
    project_perspective,
    project_perspective_array,
    rotate_2d_around,
    rotate_point,
    rotate_points,
    rotate_x,
    rotate_y,
    rotate_z,
    rotation_matrix,
)


def _as_array(p: Point3D) -> np.ndarray:
    return np.array(p.as_tuple())


def _rx(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[1, 0, 0], [0, c, -s], [0, s, c]])


def _ry(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]])


def _rz(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]])


def test_axis_rotations_quarter_turn() -> None:
    p = Point3D(0.0, 1.0, 0.0)
    np.testing.assert_allclose(_as_array(rotate_x(p, math.pi / 2)), [0, 0, 1], atol=1e-12)
    np.testing.assert_allclose(_as_array(rotate_z(p, math.pi / 2)), [-1, 0, 0], atol=1e-12)
    q = Point3D(1.0, 0.0, 0.0)
    np.testing.assert_allclose(_as_array(rotate_y(q, math.pi / 2)), [0, 0, -1], atol=1e-12)


def test_rotate_point_matches_matrix_product_x_then_y_then_z() -> None:
    rot = Rotation(0.3, -1.1, 0.7)
    p = Point3D(12.0, -4.0, 9.0)
    expected = _rz(rot.z) @ _ry(rot.y) @ _rx(rot.x) @ _as_array(p)
    np.testing.assert_allclose(_as_array(rotate_point(p, rot)), expected, atol=1e-9)
    np.testing.assert_allclose(rotation_matrix(rot), _rz(rot.z) @ _ry(rot.y) @ _rx(rot.x), atol=1e-12)


def test_rotation_order_is_not_commutative() -> None:
    p = Point3D(0.0, 1.0, 0.0)
    x_then_y = rotate_y(rotate_x(p, math.pi / 2), math.pi / 2)
    y_then_x = rotate_x(rotate_y(p, math.pi / 2), math.pi / 2)
    np.testing.assert_allclose(_as_array(x_then_y), [1, 0, 0], atol=1e-12)
    np.testing.assert_allclose(_as_array(y_then_x), [0, 0, 1], atol=1e-12)
    np.testing.assert_allclose(
        _as_array(rotate_point(p, Rotation(math.pi / 2, math.pi / 2, 0.0))), _as_array(x_then_y), atol=1e-12
    )


def test_rotate_points_matches_scalar_version() -> None:
    rot = Rotation(0.5, 0.25, -0.75)
    pts = [Point3D(1, 2, 3), Point3D(-4, 0, 2.5), Point3D(0, 0, 0)]
    arr = rotate_points(np.array([p.as_tuple() for p in pts]), rot)
    for row, p in zip(arr, pts):
        np.testing.assert_allclose(row, _as_array(rotate_point(p, rot)), atol=1e-9)


def test_rotate_points_empty_returns_empty() -> None:
    out = rotate_points(np.zeros((0, 3)), Rotation(1, 2, 3))
    assert out.shape == (0, 3)


def test_orthogonal_projection_preserves_z_and_offsets_center() -> None:
    p = project_orthogonal(Point3D(1.0, 2.0, 3.0))
    assert (p.x, p.y, p.z) == (501.0, 502.0, 3.0)
    assert p.scale is None
    arr = project_orthogonal_array(np.array([[1.0, 2.0, 3.0]]), center_x=0.0, center_y=10.0)
    np.testing.assert_allclose(arr, [[1.0, 12.0, 3.0]])


def test_isometric_projection() -> None:
    p = project_isometric(Point3D(1.0, 1.0, 0.0))
    assert p.x == pytest.approx(500.0)
    assert p.y == pytest.approx(501.0)
    assert p.z == 0.0


def test_perspective_scale_at_reference_points() -> None:
    at_origin = project_perspective(Point3D(10.0, -10.0, 0.0))
    assert at_origin.scale == pytest.approx(1.0)
    assert (at_origin.x, at_origin.y) == (510.0, 490.0)

    far = project_perspective(Point3D(100.0, 0.0, 600.0), distance=600.0)
    assert far.scale == pytest.approx(0.5)
    assert far.x == pytest.approx(550.0)
    assert far.z == 600.0


def test_perspective_array_matches_scalar() -> None:
    coords = np.array([[10.0, 20.0, -100.0], [0.0, 5.0, 300.0]])
    arr = project_perspective_array(coords, center_x=0.0, center_y=0.0, distance=800.0)
    for row, (x, y, z) in zip(arr, coords):
        p = project_perspective(Point3D(x, y, z), center_x=0.0, center_y=0.0, distance=800.0)
        np.testing.assert_allclose(row, [p.x, p.y, p.z, p.scale])


def test_rotate_2d_around_center() -> None:
    out = rotate_2d_around(np.array([[2.0, 1.0]]), (1.0, 1.0), math.pi / 2)
    np.testing.assert_allclose(out, [[1.0, 2.0]], atol=1e-12)
    same = rotate_2d_around(np.array([[3.0, 4.0]]), (0.0, 0.0), 0.0)
    np.testing.assert_allclose(same, [[3.0, 4.0]])
