"""
どこで: `engine.render.container`
何を: 描画面を収める箱 `Container`（表示サイズ/宣言属性/スタイル変数/描画面）と、
     二面合成用の `PairedSurface`。
なぜ: レンダラが「どこに・どの大きさで・どの色で」描くかを、GUI から独立した値として受け取るため。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .surface import Surface


@dataclass
class Container:
    """1 つのイラストが占める表示領域。

    - `attributes`: `data-*` 風の宣言属性（文字列キー/値）。
    - `styles`: カスタムプロパティ（例: ``{"--ids__accent-RGB": "255, 105, 105", "color": "rgb(0, 0, 0)"}``）。
    - `device_pixel_ratio`: None なら設定値（`ILLUS_DEVICE_PIXEL_RATIO`）を使う。
    """

    width: float
    height: float
    surface: Surface | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    styles: dict[str, str] = field(default_factory=dict)
    device_pixel_ratio: float | None = None
    name: str | None = None

    def get_style(self, name: str) -> str:
        """スタイル値を返す（未設定は空文字列）。"""
        value = self.styles.get(name)
        return "" if value is None else str(value).strip()

    def set_size(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)


@dataclass
class PairedSurface:
    """奥（z ≥ 0）を `primary`、手前（z < 0）を `secondary` に描く二面構成。"""

    primary: Container
    secondary: Container

    @property
    def attributes(self) -> dict[str, str]:
        return self.primary.attributes

    @property
    def styles(self) -> dict[str, str]:
        return self.primary.styles


def merged_attributes(container: Container | PairedSurface, extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """宣言属性に上書き値を重ねた辞書を返す。"""
    out: dict[str, Any] = dict(container.attributes)
    if extra:
        out.update(extra)
    return out


__all__ = ["Container", "PairedSurface", "merged_attributes"]
