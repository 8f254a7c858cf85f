"""
どこで: `util.color`。
何を: 色指定の正規化/変換（Hex, RGBA 0–1, RGBA 0–255, CSS 風 `rgba(...)` 文字列）を一元化。
なぜ: スタイル変数 → 描画面の色文字列 → pyglet の整数 RGBA までを同一の受理仕様で扱うため。
"""

from __future__ import annotations

import re
from typing import Sequence

RGBA = tuple[float, float, float, float]

_FUNC_RE = re.compile(r"^\s*(rgba?)\s*\(\s*([^)]*)\)\s*$", re.IGNORECASE)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def parse_css_color(s: str) -> RGBA:
    """`rgba(r, g, b, a)` / `rgb(r, g, b)` / Hex を RGBA(0–1) へ。

    r/g/b は 0–255、a は 0–1（`rgb()` は a=1）。範囲外は丸める。
    """
    m = _FUNC_RE.match(s)
    if m is None:
        return parse_hex_color_str(s)
    func = m.group(1).lower()
    parts = [p.strip() for p in m.group(2).split(",")]
    expected = 4 if func == "rgba" else 3
    if len(parts) != expected:
        raise ValueError(f"invalid {func}() color: '{s}'")
    try:
        r, g, b = (float(p) for p in parts[:3])
        a = float(parts[3]) if expected == 4 else 1.0
    except ValueError as e:
        raise ValueError(f"invalid {func}() color: '{s}'") from e
    return (_clamp01(r / 255.0), _clamp01(g / 255.0), _clamp01(b / 255.0), _clamp01(a))


def format_rgba(rgb: str | Sequence[float], alpha: float = 1.0) -> str:
    """`"r, g, b"` 文字列または (r, g, b)（0–255）から `rgba(r, g, b, alpha)` を作る。"""
    if isinstance(rgb, str):
        body = rgb.strip()
    else:
        if len(rgb) < 3:
            raise ValueError("rgb sequence must have 3 components")
        body = ", ".join(str(int(round(float(c)))) for c in rgb[:3])
    return f"rgba({body}, {alpha})"


def _as_sequence(value: object) -> Sequence[float | int] | None:
    if isinstance(value, (list, tuple)):
        return value  # type: ignore[return-value]
    return None


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 受理: CSS 風/Hex 文字列, (r,g,b[,a]) （0–1 または 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        return parse_css_color(value)
    seq = _as_sequence(value)
    if seq is None:
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        fseq = [float(c) for c in seq]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(fseq) == 3:
        fseq.append(1.0 if all(0.0 <= c <= 1.0 for c in fseq) else 255.0)
    # 全要素が 0..1 ならそのまま
    if all(0.0 <= c <= 1.0 for c in fseq):
        r, g, b, a = fseq
        return (_clamp01(r), _clamp01(g), _clamp01(b), _clamp01(a))
    # 0–255 とみなし、整数丸め → 0–1 へスケール
    r8, g8, b8, a8 = (max(0, min(255, int(round(c)))) for c in fseq)
    return (r8 / 255.0, g8 / 255.0, b8 / 255.0, a8 / 255.0)


def to_u8_rgba(value: object, alpha: float = 1.0) -> tuple[int, int, int, int]:
    """色を RGBA(0–255) へ変換する（`alpha` を乗算）。"""
    r, g, b, a = normalize_color(value)
    a = _clamp01(a * alpha)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))


__all__ = [
    "RGBA",
    "parse_hex_color_str",
    "parse_css_color",
    "format_rgba",
    "normalize_color",
    "to_u8_rgba",
]
