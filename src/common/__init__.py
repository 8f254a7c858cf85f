"""
どこで: `common` パッケージ。
何を: 値型・例外・イージング・環境設定・レジストリ基底などの軽量ユーティリティ。
なぜ: engine/illustrations/api から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .base_registry import BaseRegistry
from .errors import ConfigurationError, GeometryLoadError, IllustrationError, SurfaceNotFoundError
from .types import Point3D, ProjectedPoint, Rotation

__all__ = [
    "BaseRegistry",
    "IllustrationError",
    "ConfigurationError",
    "GeometryLoadError",
    "SurfaceNotFoundError",
    "Point3D",
    "ProjectedPoint",
    "Rotation",
]
