"""
どこで: `illustrations.layered_house.config`
何を: 多層ハウスの設定 `LayeredHouseConfig`（回転角は度、時間はミリ秒）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from common.errors import ConfigurationError
from common.types import Rotation

from ..attributes import AttributeReader

DEFAULT_ACCENT_COLOR = "--ids__accent-RGB"
DEFAULT_SOURCE = "package:layered_house.svg"


@dataclass
class LayeredHouseConfig:
    background_color: str | None = None
    rotation_x: float = -41.0
    rotation_y: float = -25.0
    rotation_z: float = -26.0
    layer_spacing: float = 130.0
    offset_x: float = 15.0
    offset_y: float = 0.0
    accent_color: str = DEFAULT_ACCENT_COLOR
    line_width: float = 4.0
    scale: float | None = None
    animation_angle: float = 10.0
    animation_duration_forward: float = 2000.0
    animation_pause_after_forward: float = 2000.0
    animation_duration_backward: float = 2000.0
    animation_pause_after_backward: float = 2000.0
    animation_delay: float = 200.0
    source: str = DEFAULT_SOURCE

    def __post_init__(self) -> None:
        if not self.background_color:
            raise ConfigurationError("data-background-color is required for layered-house illustration")
        phases = (
            self.animation_duration_forward,
            self.animation_pause_after_forward,
            self.animation_duration_backward,
            self.animation_pause_after_backward,
        )
        if any(p < 0 for p in phases) or self.cycle_duration <= 0:
            raise ConfigurationError(f"layered-house: invalid animation durations {phases}")
        if self.scale is not None and self.scale <= 0:
            # 0 以下は未指定扱い（自動スケール）
            self.scale = None

    @property
    def cycle_duration(self) -> float:
        return (
            self.animation_duration_forward
            + self.animation_pause_after_forward
            + self.animation_duration_backward
            + self.animation_pause_after_backward
        )

    @property
    def rotation(self) -> Rotation:
        return Rotation.from_degrees(self.rotation_x, self.rotation_y, self.rotation_z)

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any] | None) -> "LayeredHouseConfig":
        a = AttributeReader(attributes, owner="layered-house")
        d = cls.__dataclass_fields__

        def f(attr: str, field_name: str) -> Any:
            return a.get_float(attr, d[field_name].default)

        return cls(
            background_color=a.get_str("backgroundColor", None),
            rotation_x=f("rotationX", "rotation_x"),
            rotation_y=f("rotationY", "rotation_y"),
            rotation_z=f("rotationZ", "rotation_z"),
            layer_spacing=f("layerSpacing", "layer_spacing"),
            offset_x=f("offsetX", "offset_x"),
            offset_y=f("offsetY", "offset_y"),
            accent_color=a.get_str("accentColor", DEFAULT_ACCENT_COLOR),
            line_width=f("lineWidth", "line_width"),
            scale=a.get_float("scale", None),
            animation_angle=f("animationAngle", "animation_angle"),
            animation_duration_forward=f("animationDurationForward", "animation_duration_forward"),
            animation_pause_after_forward=f("animationPauseAfterForward", "animation_pause_after_forward"),
            animation_duration_backward=f("animationDurationBackward", "animation_duration_backward"),
            animation_pause_after_backward=f("animationPauseAfterBackward", "animation_pause_after_backward"),
            animation_delay=f("animationDelay", "animation_delay"),
            source=a.get_str("source", DEFAULT_SOURCE),
        )


__all__ = ["LayeredHouseConfig", "DEFAULT_SOURCE"]
