"""
どこで: `common.timebase`
何を: ミリ秒単位の単調時刻ソース `now_ms()` と、その型 `TimeSource`。
なぜ: モデル/スケジューラへ時刻関数を注入し、テストで仮想時刻に差し替えられるようにするため。
"""

from __future__ import annotations

import time
from typing import Callable

TimeSource = Callable[[], float]


def now_ms() -> float:
    """単調増加する現在時刻 [ms]。"""
    return time.monotonic() * 1000.0


__all__ = ["TimeSource", "now_ms"]
