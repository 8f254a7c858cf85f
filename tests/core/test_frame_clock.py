from __future__ import annotations

from engine.core.frame_clock import FrameClock


class _Recorder:
    def __init__(self, name: str, log: list[str]):
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append(self.name)


def test_tickables_run_in_fixed_order() -> None:
    log: list[str] = []
    clock = FrameClock([_Recorder("a", log), _Recorder("b", log)])
    clock.tick(0.1)
    clock.tick(0.1)
    assert log == ["a", "b", "a", "b"]
    assert clock.elapsed == 0.2


def test_schedule_deduplicates_and_unschedule_removes() -> None:
    clock = FrameClock()
    seen: list[float] = []

    def cb(dt: float) -> None:
        seen.append(dt)

    clock.schedule(cb)
    clock.schedule(cb)
    clock.tick(0.5)
    assert seen == [0.5]
    clock.unschedule(cb)
    clock.tick(0.5)
    assert seen == [0.5]


def test_schedule_once_fires_after_delay_only_once() -> None:
    clock = FrameClock()
    fired: list[int] = []
    clock.schedule_once(lambda dt: fired.append(1), 0.25)
    clock.tick(0.1)
    assert fired == []
    clock.tick(0.2)
    assert fired == [1]
    clock.tick(1.0)
    assert fired == [1]


def test_callback_may_unschedule_itself_during_tick() -> None:
    clock = FrameClock()
    calls: list[int] = []

    def once(dt: float) -> None:
        calls.append(1)
        clock.unschedule(once)

    clock.schedule(once)
    clock.tick(0.1)
    clock.tick(0.1)
    assert calls == [1]
