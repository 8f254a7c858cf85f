"""
どこで: `common.env`
何を: `ILLUS_*` 環境変数を型付きで読むヘルパ（int/float/bool）。
なぜ: 実行時設定（FPS・DPR・デバウンス等）の上書きで、不正値を既定値へ落とす規則を一箇所に集めるため。
"""

from __future__ import annotations

import math
import os
from typing import Callable, Optional, TypeVar

T = TypeVar("T", int, float)

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})


def _read_number(
    name: str, parse: Callable[[str], T], default: Optional[T], min_value: Optional[T]
) -> Optional[T]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        val = parse(raw.strip())
    except ValueError:
        return default
    if isinstance(val, float) and not math.isfinite(val):
        return default
    if min_value is not None and val < min_value:
        return min_value
    return val


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """整数の環境変数を読む。

    Parameters
    ----------
    name : str
        環境変数名（例: ``ILLUS_FPS``）。
    default : Optional[int]
        未設定・空文字・不正値のときに返す値。
    min_value : Optional[int]
        下限。下回った値は下限に丸める。
    """
    return _read_number(name, int, default, min_value)


def env_float(
    name: str, default: Optional[float] = None, *, min_value: Optional[float] = None
) -> Optional[float]:
    """浮動小数の環境変数を読む（NaN/inf は不正値扱い）。"""
    return _read_number(name, float, default, min_value)


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    s = raw.strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    return bool(default)
