"""
どこで: `illustrations.fitting`
何を: 投影済み点群の外接矩形を、余白付きの 1000×1000 論理空間へ収める自動スケール。
なぜ: 家シルエット（正射影, ×1.2）とスプラッシュ（透視, ×0.7）で同じ余白規約を共有するため。
"""

from __future__ import annotations

import numpy as np

LOGICAL_SIZE = 1000.0
PADDING_TOP = 20.0
PADDING_BOTTOM = 50.0
PADDING_SIDES = 30.0
SCALE_MIN = 0.1
SCALE_MAX = 10.0


def fit_scale(projected_xy: np.ndarray, factor: float) -> float:
    """外接矩形が余白内に収まる倍率 × `factor` を [0.1, 10] に丸めて返す。

    - 点が無い/境界が非有限なら 1。
    - 幅（高さ）が 0 の軸は倍率 1 とみなす。
    """
    arr = np.asarray(projected_xy, dtype=np.float64).reshape(-1, 2)
    if arr.shape[0] == 0:
        return 1.0
    lo = arr.min(axis=0)
    hi = arr.max(axis=0)
    if not (np.all(np.isfinite(lo)) and np.all(np.isfinite(hi))):
        return 1.0
    width = float(hi[0] - lo[0])
    height = float(hi[1] - lo[1])
    available_w = LOGICAL_SIZE - PADDING_SIDES * 2.0
    available_h = LOGICAL_SIZE - PADDING_TOP - PADDING_BOTTOM
    sx = available_w / width if width > 0 else 1.0
    sy = available_h / height if height > 0 else 1.0
    scale = min(sx, sy) * float(factor)
    return max(SCALE_MIN, min(scale, SCALE_MAX))


__all__ = ["fit_scale", "SCALE_MIN", "SCALE_MAX", "PADDING_TOP", "PADDING_BOTTOM", "PADDING_SIDES"]
