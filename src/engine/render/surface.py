"""
どこで: `engine.render.surface`
何を: Canvas 風の 2D 描画プリミティブ `Surface` Protocol と、ヘッドレスの `RecordingSurface`。
なぜ: イラストのレンダラを GUI バックエンドから切り離し、テストでは描画命令列を
     そのまま検査できるようにするため。

座標系:
- 原点は左上、y は下向き（論理サイズ × `scale()` の係数が物理ピクセル）。
- 色はすべて CSS 風文字列（"rgba(r, g, b, a)" / "rgb(...)" / "#RRGGBB"）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Surface(Protocol):
    """描画面の最小インターフェース。"""

    fill_style: str
    stroke_style: str
    line_width: float
    global_alpha: float

    def resize(self, width: float, height: float, *, css_width: float, css_height: float) -> None: ...

    def scale(self, sx: float, sy: float) -> None: ...

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def close_path(self) -> None: ...

    def arc(self, x: float, y: float, radius: float, start: float, end: float) -> None: ...

    def fill(self) -> None: ...

    def stroke(self) -> None: ...


@dataclass(frozen=True)
class DrawOp:
    """記録された 1 命令（実行時点のスタイルを併記）。"""

    name: str
    args: tuple[Any, ...] = ()
    fill_style: str = ""
    stroke_style: str = ""
    line_width: float = 1.0
    global_alpha: float = 1.0


@dataclass
class RecordingSurface:
    """全プリミティブを `ops` に追記するだけの描画面。

    - `scale()` は変換を累積する（Canvas の `setTransform` 相当のリセットは `resize()`）。
    - 現在パスは `move_to/line_to/close_path/arc` で構築され、`fill/stroke` 時に
      `path` 引数として命令へ添付される（論理座標のまま）。
    """

    fill_style: str = "rgb(0, 0, 0)"
    stroke_style: str = "rgb(0, 0, 0)"
    line_width: float = 1.0
    global_alpha: float = 1.0
    width: float = 0.0
    height: float = 0.0
    css_width: float = 0.0
    css_height: float = 0.0
    transform: tuple[float, float] = (1.0, 1.0)
    ops: list[DrawOp] = field(default_factory=list)
    _path: list[tuple[Any, ...]] = field(default_factory=list, repr=False)

    # ---- 記録 ----
    def _record(self, name: str, *args: Any) -> None:
        self.ops.append(
            DrawOp(
                name,
                tuple(args),
                self.fill_style,
                self.stroke_style,
                float(self.line_width),
                float(self.global_alpha),
            )
        )

    def reset_ops(self) -> None:
        self.ops.clear()

    def ops_named(self, name: str) -> list[DrawOp]:
        return [op for op in self.ops if op.name == name]

    # ---- Surface ----
    def resize(self, width: float, height: float, *, css_width: float, css_height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self.css_width = float(css_width)
        self.css_height = float(css_height)
        self.transform = (1.0, 1.0)
        self._record("resize", self.width, self.height)

    def scale(self, sx: float, sy: float) -> None:
        self.transform = (self.transform[0] * sx, self.transform[1] * sy)
        self._record("scale", sx, sy)

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._record("clear_rect", x, y, w, h)

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._record("fill_rect", x, y, w, h)

    def begin_path(self) -> None:
        self._path = []
        self._record("begin_path")

    def move_to(self, x: float, y: float) -> None:
        self._path.append(("M", float(x), float(y)))

    def line_to(self, x: float, y: float) -> None:
        self._path.append(("L", float(x), float(y)))

    def close_path(self) -> None:
        self._path.append(("Z",))

    def arc(self, x: float, y: float, radius: float, start: float, end: float) -> None:
        self._path.append(("A", float(x), float(y), float(radius), float(start), float(end)))

    def fill(self) -> None:
        self._record("fill", tuple(self._path))

    def stroke(self) -> None:
        self._record("stroke", tuple(self._path))


__all__ = ["Surface", "DrawOp", "RecordingSurface"]
