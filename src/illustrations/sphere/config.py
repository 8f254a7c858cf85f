"""
どこで: `illustrations.sphere.config`
何を: 点群スフィアの設定 `SphereConfig` と、宣言属性からの構築 `from_attributes()`。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from common.errors import ConfigurationError
from common.types import Rotation

from ..attributes import AttributeReader

DEFAULT_ACCENT_COLOR = "--ids__accent-RGB"


@dataclass
class SphereConfig:
    radius: float = 400.0
    num_points: int = 45
    # 1 フレームあたりの回転量 [rad]
    rotation_speed_x: float = 0.002
    rotation_speed_y: float = 0.003
    rotation_speed_z: float = 0.001
    min_lines: int = 30
    max_lines: int = 60
    fade_duration: float = 250.0
    add_interval_min: float = 200.0
    add_interval_max: float = 400.0
    remove_interval_min: float = 300.0
    remove_interval_max: float = 500.0
    line_width: float = 2.0
    point_radius: float = 4.0
    accent_color: str = DEFAULT_ACCENT_COLOR

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ConfigurationError(f"sphere: radius must be positive, got {self.radius}")
        if self.num_points < 0:
            raise ConfigurationError(f"sphere: numPoints must be >= 0, got {self.num_points}")
        if self.fade_duration <= 0:
            raise ConfigurationError(f"sphere: fadeDuration must be positive, got {self.fade_duration}")
        if self.min_lines > self.max_lines:
            raise ConfigurationError(
                f"sphere: minLines ({self.min_lines}) must not exceed maxLines ({self.max_lines})"
            )
        for lo, hi, name in (
            (self.add_interval_min, self.add_interval_max, "addInterval"),
            (self.remove_interval_min, self.remove_interval_max, "removeInterval"),
        ):
            if lo < 0 or hi < lo:
                raise ConfigurationError(f"sphere: invalid {name} range [{lo}, {hi}]")

    @property
    def rotation_speed(self) -> Rotation:
        return Rotation(self.rotation_speed_x, self.rotation_speed_y, self.rotation_speed_z)

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any] | None) -> "SphereConfig":
        a = AttributeReader(attributes, owner="sphere")
        d = cls.__dataclass_fields__
        return cls(
            radius=a.get_float("radius", d["radius"].default),
            num_points=a.get_int("numPoints", d["num_points"].default),
            rotation_speed_x=a.get_float("rotationSpeedX", d["rotation_speed_x"].default),
            rotation_speed_y=a.get_float("rotationSpeedY", d["rotation_speed_y"].default),
            rotation_speed_z=a.get_float("rotationSpeedZ", d["rotation_speed_z"].default),
            min_lines=a.get_int("minLines", d["min_lines"].default),
            max_lines=a.get_int("maxLines", d["max_lines"].default),
            fade_duration=float(a.get_int("fadeDuration", int(d["fade_duration"].default))),
            add_interval_min=a.get_float("addIntervalMin", d["add_interval_min"].default),
            add_interval_max=a.get_float("addIntervalMax", d["add_interval_max"].default),
            remove_interval_min=a.get_float("removeIntervalMin", d["remove_interval_min"].default),
            remove_interval_max=a.get_float("removeIntervalMax", d["remove_interval_max"].default),
            line_width=a.get_float("lineWidth", d["line_width"].default),
            point_radius=a.get_float("pointRadius", d["point_radius"].default),
            accent_color=a.get_str("accentColor", d["accent_color"].default),
        )


__all__ = ["SphereConfig", "DEFAULT_ACCENT_COLOR"]
