"""
どこで: `common.errors`
何を: イラスト系の例外階層（設定/ジオメトリ読込/描画面欠落）。
なぜ: レジストリがインスタンス単位で失敗を隔離できるよう、失敗種別を型で判別するため。
"""

from __future__ import annotations


class IllustrationError(Exception):
    """イラスト処理に起因する例外の基底。"""


class ConfigurationError(IllustrationError, ValueError):
    """必須設定の欠落や数値として解釈できない属性値（構築時に送出）。"""


class GeometryLoadError(IllustrationError, RuntimeError):
    """形状記述の取得/解析失敗（`load()`/`start()` から伝播）。"""


class SurfaceNotFoundError(IllustrationError, LookupError):
    """描画面（または対になるコンテナ）が見つからない（構築時に送出）。"""


__all__ = [
    "IllustrationError",
    "ConfigurationError",
    "GeometryLoadError",
    "SurfaceNotFoundError",
]
