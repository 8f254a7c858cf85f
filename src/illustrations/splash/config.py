"""
どこで: `illustrations.splash.config`
何を: スプラッシュの設定 `SplashConfig`（深度プール 10 個・首振り・深度入替えのタイミング）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from common.errors import ConfigurationError

from ..attributes import AttributeReader

DEFAULT_ACCENT_COLOR = "--ids__accent-RGB"
DEFAULT_SOURCE = "package:splash.svg"
DEPTH_POOL_SIZE = 10
# 半数が正・半数が負になるよう 0 の周りに対称配置
DEFAULT_Z_COORDINATES: tuple[float, ...] = (-75, 15, -105, 75, -45, 135, -15, 105, 45, -135)


def normalize_depth_pool(values: Sequence[float]) -> list[float]:
    """深度プールをちょうど 10 個にそろえる（不足は既定値の同じ位置で補い、超過は切り捨て）。"""
    out = [float(v) for v in values][:DEPTH_POOL_SIZE]
    while len(out) < DEPTH_POOL_SIZE:
        idx = len(out)
        out.append(float(DEFAULT_Z_COORDINATES[idx]) if idx < len(DEFAULT_Z_COORDINATES) else 0.0)
    return out


@dataclass
class SplashConfig:
    background_color: str | None = None
    z_coordinates: list[float] = field(default_factory=lambda: list(DEFAULT_Z_COORDINATES))
    accent_color: str = DEFAULT_ACCENT_COLOR
    line_width: float = 3.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float | None = None
    animation_angle: float = 30.0
    # 片道の時間 [ms]（往復は 2 倍）
    animation_duration: float = 8000.0
    perspective_distance: float = 1000.0
    depth_change_easing_power: float = 7.0
    depth_change_interval: float = 1000.0
    depth_change_duration: float = 3000.0
    source: str = DEFAULT_SOURCE

    def __post_init__(self) -> None:
        if not self.background_color:
            raise ConfigurationError("data-background-color is required for splash illustration")
        self.z_coordinates = normalize_depth_pool(self.z_coordinates)
        if self.animation_duration <= 0:
            raise ConfigurationError(f"splash: animationDuration must be positive, got {self.animation_duration}")
        if self.depth_change_duration <= 0:
            raise ConfigurationError(
                f"splash: depthChangeDuration must be positive, got {self.depth_change_duration}"
            )
        if self.perspective_distance <= 0:
            raise ConfigurationError(
                f"splash: perspectiveDistance must be positive, got {self.perspective_distance}"
            )
        nearest = min(self.z_coordinates)
        if nearest <= -self.perspective_distance:
            raise ConfigurationError(
                f"splash: depth {nearest} reaches the perspective singularity (-{self.perspective_distance})"
            )
        if self.scale is not None and self.scale <= 0:
            self.scale = None

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any] | None) -> "SplashConfig":
        a = AttributeReader(attributes, owner="splash")
        d = cls.__dataclass_fields__

        def f(attr: str, field_name: str) -> Any:
            return a.get_float(attr, d[field_name].default)

        return cls(
            background_color=a.get_str("backgroundColor", None),
            z_coordinates=a.get_float_list("zCoordinates", list(DEFAULT_Z_COORDINATES)),
            accent_color=a.get_str("accentColor", DEFAULT_ACCENT_COLOR),
            line_width=f("lineWidth", "line_width"),
            offset_x=f("offsetX", "offset_x"),
            offset_y=f("offsetY", "offset_y"),
            scale=a.get_float("scale", None),
            animation_angle=f("animationAngle", "animation_angle"),
            animation_duration=f("animationDuration", "animation_duration"),
            perspective_distance=f("perspectiveDistance", "perspective_distance"),
            depth_change_easing_power=f("depthChangeEasingPower", "depth_change_easing_power"),
            depth_change_interval=f("depthChangeInterval", "depth_change_interval"),
            depth_change_duration=f("depthChangeDuration", "depth_change_duration"),
            source=a.get_str("source", DEFAULT_SOURCE),
        )


__all__ = [
    "SplashConfig",
    "DEFAULT_Z_COORDINATES",
    "DEPTH_POOL_SIZE",
    "normalize_depth_pool",
    "DEFAULT_SOURCE",
]
