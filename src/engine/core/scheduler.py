"""
どこで: `engine.core.scheduler`
何を: `(fire_at, seq, action)` の優先度付きキューで遅延タスクを管理する TaskScheduler。
なぜ: 壁時計タイマーではなくフレームクロックから `run_due()` で駆動し、
     仮想時刻を進めるだけで自己再スケジュール型タスクを決定的にテストできるようにするため。

使用例:
    sched = TaskScheduler(time_source=clock_ms)
    handle = sched.call_later(250.0, spawn_line)
    ...
    sched.run_due()      # 毎フレーム
    sched.cancel(handle) # 停止時
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable

from common.timebase import TimeSource, now_ms

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ScheduledTask:
    """キュー要素。比較は `(fire_at, seq)` のみで行う。"""

    fire_at: float
    seq: int
    action: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class TaskScheduler:
    """単一スレッド協調型の遅延タスクキュー（Tickable）。"""

    def __init__(self, time_source: TimeSource | None = None):
        self._time = time_source or now_ms
        self._heap: list[ScheduledTask] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return float(self._time())

    def call_later(self, delay_ms: float, action: Callable[[], None]) -> ScheduledTask:
        """`delay_ms` 後に `action()` を実行するタスクを登録してハンドルを返す。"""
        task = ScheduledTask(self.now() + max(0.0, float(delay_ms)), next(self._seq), action)
        heapq.heappush(self._heap, task)
        return task

    def cancel(self, task: ScheduledTask | None) -> None:
        """ハンドルを取り消す（None/実行済みは無視）。"""
        if task is not None:
            task.cancelled = True

    def clear(self) -> None:
        for task in self._heap:
            task.cancelled = True
        self._heap.clear()

    def run_due(self, now: float | None = None) -> int:
        """期限到来済みのタスクを fire_at 順に実行し、実行数を返す。

        実行中に登録された新規タスクも、期限が `now` 以前なら同じ呼び出しで実行する。
        """
        t = self.now() if now is None else float(now)
        fired = 0
        while self._heap and self._heap[0].fire_at <= t:
            task = heapq.heappop(self._heap)
            if task.cancelled:
                continue
            task.cancelled = True
            task.action()
            fired += 1
        if fired:
            logger.debug("scheduler fired=%d pending=%d", fired, len(self))
        return fired

    def tick(self, dt: float) -> None:
        self.run_due()

    def __len__(self) -> int:
        return sum(1 for task in self._heap if not task.cancelled)


__all__ = ["TaskScheduler", "ScheduledTask"]
