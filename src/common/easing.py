"""
どこで: `common.easing`
何を: 正規化時間 t∈[0,1] → [0,1] のイージング関数（ease-in-out / 鋭い ease-out）。
なぜ: レイヤーの揺れ、スプラッシュの首振り、深度入替えで同じ曲線を共有するため。

設計方針:
- 純粋・決定的。副作用なし。
- 入力は呼び出し側で [0,1] に収める（`clamp01` を併用）。
"""

from __future__ import annotations


def clamp01(t: float) -> float:
    """t を [0,1] に丸める。"""
    return 0.0 if t < 0.0 else 1.0 if t > 1.0 else float(t)


def ease_in_out(t: float) -> float:
    """二次の ease-in-out。`t<0.5 ? 2t² : −1+(4−2t)t`。"""
    return 2.0 * t * t if t < 0.5 else -1.0 + (4.0 - 2.0 * t) * t


def sharp_ease_out(t: float, power: float = 4.0) -> float:
    """急峻な立ち上がりと長い減速の尾を持つ `1−(1−t)^power`。"""
    return 1.0 - (1.0 - t) ** power


__all__ = ["clamp01", "ease_in_out", "sharp_ease_out"]
