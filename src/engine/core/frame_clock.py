"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` 列の固定順序呼び出しに加え、`pyglet.clock` 互換の
     `schedule / schedule_once / unschedule` を持つ FrameClock。
なぜ: 複数イラストのアニメーションループを 1 本の表示更新に相乗りさせ、
     テストでは `tick(dt)` を手で進めるだけで決定的に駆動できるようにするため。
"""

from __future__ import annotations

import time
from typing import Callable, Protocol, Sequence

from .tickable import Tickable

FrameCallback = Callable[[float], None]


class FrameSource(Protocol):
    """フレーム供給元（`pyglet.clock` モジュール、または `FrameClock`）。"""

    def schedule(self, func: FrameCallback) -> None: ...

    def schedule_once(self, func: FrameCallback, delay: float) -> None: ...

    def unschedule(self, func: FrameCallback) -> None: ...


class FrameClock:
    """登録された Tickable とコールバックを固定順序で実行する極小クラス。"""

    def __init__(self, tickables: Sequence[Tickable] = ()):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self._elapsed = 0.0
        self._every_tick: list[FrameCallback] = []
        # (due_elapsed, func) のリスト（登録順を保つ）
        self._once: list[tuple[float, FrameCallback]] = []

    @property
    def elapsed(self) -> float:
        """累積経過時間 [秒]。"""
        return self._elapsed

    # ---- pyglet.clock 互換 ----
    def schedule(self, func: FrameCallback) -> None:
        """毎 tick 呼び出すコールバックを登録（重複登録は無視）。"""
        if func not in self._every_tick:
            self._every_tick.append(func)

    def schedule_once(self, func: FrameCallback, delay: float) -> None:
        """`delay` 秒後の最初の tick で 1 度だけ呼ぶ。"""
        self._once.append((self._elapsed + max(0.0, float(delay)), func))

    def unschedule(self, func: FrameCallback) -> None:
        """登録を解除（未登録なら何もしない）。"""
        self._every_tick = [f for f in self._every_tick if f != func]
        self._once = [(due, f) for due, f in self._once if f != func]

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if dt is None:  # pyglet は dt を渡してくれる
            now = time.perf_counter()  # 他フレームワーク用
            dt = now - self._last_time
            self._last_time = now
        self._elapsed += dt

        for t in self._tickables:
            t.tick(dt)

        # 呼び出し中の登録/解除に備えてスナップショットを回す
        for func in list(self._every_tick):
            if func in self._every_tick:
                func(dt)

        if self._once:
            due = [(d, f) for d, f in self._once if d <= self._elapsed]
            if due:
                self._once = [(d, f) for d, f in self._once if d > self._elapsed]
                for _, func in due:
                    func(dt)


__all__ = ["FrameClock", "FrameSource", "FrameCallback"]
