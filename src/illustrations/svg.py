"""
どこで: `illustrations.svg`
何を: 平面の形状記述（SVG のサブセット）を、viewBox 中心基準の NumPy 配列へ変換する。
なぜ: 家シルエット（塗り多角形 + 線分）とスプラッシュ（矩形 + 多角形）の双方で、
     同じ座標規約・同じ失敗型（`GeometryLoadError`）で扱うため。

受理する要素:
- `polygon.<cls>`: `points="x1,y1 x2,y2 ..."`（区切りは空白/カンマ混在可）
- `line.<cls>`: `x1 y1 x2 y2`
- `rect.<cls>`: `x y width height` → 4 頂点の多角形（時計回り）

viewBox が無い場合は呼び出し側の既定値を用いる。HTML に埋め込まれた `<svg>` も切り出して読む。
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Iterator, Literal

import numpy as np

from common.errors import GeometryLoadError

SILHOUETTE_FILL_CLASS = "cls-2"
SILHOUETTE_STROKE_CLASS = "cls-1"
SPLASH_SHAPE_CLASS = "cls-1"

# viewBox 欠落時の既定（minX, minY, width, height）
DEFAULT_SILHOUETTE_VIEWBOX = (0.0, 0.0, 400.0, 315.0)
DEFAULT_SPLASH_VIEWBOX = (0.0, 0.0, 399.361, 300.39)

_SPLIT_RE = re.compile(r"[\s,]+")
_SVG_BLOCK_RE = re.compile(r"<svg\b.*?</svg\s*>", re.DOTALL | re.IGNORECASE)


@dataclass
class Silhouette:
    """家シルエット: 塗り多角形 `(k,2)` のリストと線分 `(m,4)`（x1,y1,x2,y2）。"""

    fills: list[np.ndarray] = field(default_factory=list)
    strokes: np.ndarray = field(default_factory=lambda: np.zeros((0, 4), dtype=np.float64))
    center: tuple[float, float] = (0.0, 0.0)
    size: tuple[float, float] = (0.0, 0.0)

    def all_points(self) -> np.ndarray:
        """塗り頂点 → 線分端点の順に全点を `(N,2)` で返す。"""
        parts = [f for f in self.fills if len(f)]
        if len(self.strokes):
            parts.append(self.strokes.reshape(-1, 2))
        if not parts:
            return np.zeros((0, 2), dtype=np.float64)
        return np.vstack(parts)

    @property
    def is_empty(self) -> bool:
        return not self.fills and len(self.strokes) == 0


@dataclass
class SplashShape:
    """スプラッシュの 1 プリミティブ（`rect` は 4 頂点化済み）。"""

    type: Literal["rect", "polygon"]
    points: np.ndarray


# ---- 内部 ----------------------------------------------------------------


def _parse_root(text: str) -> ET.Element:
    match = _SVG_BLOCK_RE.search(text)
    source = match.group(0) if match else text
    try:
        return ET.fromstring(source)
    except ET.ParseError as e:
        raise GeometryLoadError(f"SVG parsing error: {e}") from e


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def _iter_elements(root: ET.Element, name: str, css_class: str) -> Iterator[ET.Element]:
    """文書順に `<name class="... css_class ...">` を列挙する（名前空間は無視）。"""
    for el in root.iter():
        if _local_name(el.tag) != name:
            continue
        classes = (el.get("class") or "").split()
        if css_class in classes:
            yield el


def _view_box(root: ET.Element, default: tuple[float, float, float, float]) -> tuple[float, float, float, float]:
    raw = root.get("viewBox")
    if not raw:
        return default
    try:
        values = [float(v) for v in _SPLIT_RE.split(raw.strip()) if v]
    except ValueError as e:
        raise GeometryLoadError(f"invalid viewBox: {raw!r}") from e
    if len(values) != 4:
        raise GeometryLoadError(f"invalid viewBox: {raw!r}")
    return (values[0], values[1], values[2], values[3])


def _float_attr(el: ET.Element, name: str) -> float:
    raw = el.get(name)
    try:
        return float(raw) if raw is not None else 0.0
    except ValueError as e:
        raise GeometryLoadError(f"<{_local_name(el.tag)}> has non-numeric {name}={raw!r}") from e


def _parse_points(raw: str) -> np.ndarray:
    """`points` 属性を `(k,2)` へ（端数の座標は捨てる）。"""
    tokens = [t for t in _SPLIT_RE.split(raw.strip()) if t]
    try:
        values = [float(t) for t in tokens]
    except ValueError as e:
        raise GeometryLoadError(f"invalid points attribute: {raw!r}") from e
    n = len(values) // 2
    return np.asarray(values[: n * 2], dtype=np.float64).reshape(n, 2)


def _center_of(view_box: tuple[float, float, float, float]) -> tuple[float, float]:
    min_x, min_y, width, height = view_box
    return (min_x + width / 2.0, min_y + height / 2.0)


# ---- 公開 API --------------------------------------------------------------


def parse_silhouette(text: str) -> Silhouette:
    """家シルエットを解析する（座標は viewBox 中心からの相対）。"""
    root = _parse_root(text)
    view_box = _view_box(root, DEFAULT_SILHOUETTE_VIEWBOX)
    cx, cy = _center_of(view_box)
    offset = np.array([cx, cy], dtype=np.float64)

    fills: list[np.ndarray] = []
    for el in _iter_elements(root, "polygon", SILHOUETTE_FILL_CLASS):
        raw = el.get("points")
        if not raw:
            continue
        pts = _parse_points(raw)
        if len(pts):
            fills.append(pts - offset)

    segments = [
        (
            _float_attr(el, "x1") - cx,
            _float_attr(el, "y1") - cy,
            _float_attr(el, "x2") - cx,
            _float_attr(el, "y2") - cy,
        )
        for el in _iter_elements(root, "line", SILHOUETTE_STROKE_CLASS)
    ]
    strokes = np.asarray(segments, dtype=np.float64).reshape(-1, 4)
    return Silhouette(fills=fills, strokes=strokes, center=(cx, cy), size=(view_box[2], view_box[3]))


def parse_splash_shapes(text: str) -> list[SplashShape]:
    """スプラッシュの矩形 → 多角形の順で解析する（座標は viewBox 中心からの相対）。"""
    root = _parse_root(text)
    cx, cy = _center_of(_view_box(root, DEFAULT_SPLASH_VIEWBOX))
    offset = np.array([cx, cy], dtype=np.float64)

    shapes: list[SplashShape] = []
    for el in _iter_elements(root, "rect", SPLASH_SHAPE_CLASS):
        x = _float_attr(el, "x") - cx
        y = _float_attr(el, "y") - cy
        w = _float_attr(el, "width")
        h = _float_attr(el, "height")
        pts = np.array([[x, y], [x + w, y], [x + w, y + h], [x, y + h]], dtype=np.float64)
        shapes.append(SplashShape("rect", pts))

    for el in _iter_elements(root, "polygon", SPLASH_SHAPE_CLASS):
        raw = el.get("points")
        if not raw:
            continue
        pts = _parse_points(raw)
        if len(pts):
            shapes.append(SplashShape("polygon", pts - offset))
    return shapes


__all__ = [
    "Silhouette",
    "SplashShape",
    "parse_silhouette",
    "parse_splash_shapes",
    "SILHOUETTE_FILL_CLASS",
    "SILHOUETTE_STROKE_CLASS",
    "SPLASH_SHAPE_CLASS",
]
