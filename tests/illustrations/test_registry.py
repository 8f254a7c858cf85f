from __future__ import annotations

import logging

import pytest

from engine.core.frame_clock import FrameClock
from illustrations import IllustrationRegistry, list_illustrations
from illustrations.layered_house import LayeredHouseIllustration
from illustrations.sphere import SphereIllustration
from illustrations.splash import SplashIllustration
from tests._utils.dummies import VirtualTime, drive


@pytest.fixture()
def registry() -> IllustrationRegistry:
    return IllustrationRegistry(frame_source=FrameClock(), time_source=VirtualTime())


def test_builtin_types_are_registered() -> None:
    names = list_illustrations()
    for name in ("sphere", "layered-house", "splash"):
        assert name in names
    assert SphereIllustration.type_name == "sphere"
    assert LayeredHouseIllustration.type_name == "layered-house"
    assert SplashIllustration.type_name == "splash"


def test_type_defaults_to_sphere(registry: IllustrationRegistry, make_container) -> None:
    key = registry.create(make_container(attributes={"numPoints": "3"}))
    assert key == "illustration-0"
    assert isinstance(registry.get(key), SphereIllustration)


def test_type_is_read_from_attributes(registry: IllustrationRegistry, make_container) -> None:
    key = registry.create(
        make_container(attributes={"data-illustration-type": "layered-house", "backgroundColor": "--bg-RGB"})
    )
    assert isinstance(registry.get(key), LayeredHouseIllustration)


def test_unknown_type_is_skipped(registry: IllustrationRegistry, make_container, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert registry.create(make_container(), type_name="teapot") is None
    assert "Unknown illustration type: teapot" in caplog.text
    assert len(registry) == 0


def test_construction_failure_is_isolated(registry: IllustrationRegistry, make_container, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        bad = registry.create(make_container(), type_name="layered-house", key="bad")
    good = registry.create(make_container(attributes={"numPoints": "2"}), type_name="sphere", key="good")
    assert bad is None
    assert good == "good"
    assert registry.keys() == ["good"]
    assert "Failed to initialize layered-house illustration" in caplog.text


def test_load_failure_is_isolated(registry: IllustrationRegistry, make_container, caplog) -> None:
    registry.create(
        make_container(attributes={"backgroundColor": "--bg-RGB", "source": "package:missing.svg"}),
        type_name="layered-house",
        key="house",
    )
    registry.create(make_container(attributes={"numPoints": "2"}), key="sphere")
    with caplog.at_level(logging.ERROR):
        started = registry.start_all()
    assert started == ["sphere"]
    assert not registry.get("house").is_running
    assert registry.get("sphere").is_running
    assert "Failed to start illustration 'house'" in caplog.text


def test_reusing_key_disposes_previous(registry: IllustrationRegistry, make_container) -> None:
    registry.create(make_container(), key="a")
    first = registry.get("a")
    registry.start("a")
    assert first.is_running
    registry.create(make_container(), key="a")
    assert registry.get("a") is not first
    assert not first.is_running
    assert len(registry) == 1


def test_dispose_all_stops_everything(registry: IllustrationRegistry, make_container) -> None:
    keys = [registry.create(make_container()) for _ in range(3)]
    assert keys == ["illustration-0", "illustration-1", "illustration-2"]
    registry.start_all()
    instances = [registry.get(k) for k in keys]
    registry.dispose_all()
    assert len(registry) == 0
    assert not any(i.is_running for i in instances)
    assert registry.dispose("illustration-0") is None
    assert registry.start("missing") is False


def test_unexpected_start_error_does_not_stop_siblings(
    registry: IllustrationRegistry, make_container, monkeypatch: pytest.MonkeyPatch, caplog
) -> None:
    registry.create(make_container(attributes={"numPoints": "2"}), key="a")
    registry.create(make_container(attributes={"numPoints": "2"}), key="b")
    broken = registry.get("a")

    def _raise_key_error() -> None:
        raise KeyError("x")

    monkeypatch.setattr(broken, "start", _raise_key_error)
    with caplog.at_level(logging.ERROR):
        assert registry.start_all() == ["b"]
    assert not broken.is_running
    assert registry.get("b").is_running
    assert "Failed to start illustration 'a'" in caplog.text


def test_unexpected_construction_error_is_isolated(
    registry: IllustrationRegistry, make_container, monkeypatch: pytest.MonkeyPatch, caplog
) -> None:
    def _raise_attribute_error(self, *args, **kwargs) -> None:
        raise AttributeError("broken container")

    monkeypatch.setattr(LayeredHouseIllustration, "__init__", _raise_attribute_error)
    with caplog.at_level(logging.ERROR):
        assert registry.create(make_container(), type_name="layered-house") is None
    assert registry.create(make_container(attributes={"numPoints": "2"})) == "illustration-0"
    assert "Failed to initialize layered-house illustration" in caplog.text


def test_frame_error_stops_only_the_failing_instance(make_container, monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    clock, frames = VirtualTime(), FrameClock()
    registry = IllustrationRegistry(frame_source=frames, time_source=clock)
    registry.create(make_container(attributes={"numPoints": "2"}), key="a")
    registry.create(make_container(attributes={"numPoints": "2"}), key="b")
    failing, healthy = registry.get("a"), registry.get("b")

    def _divide_by_zero(now: float) -> None:
        raise ZeroDivisionError("bad frame")

    calls: list[float] = []
    original_advance = healthy.advance

    def _counting_advance(now: float) -> None:
        calls.append(now)
        original_advance(now)

    monkeypatch.setattr(failing, "advance", _divide_by_zero)
    monkeypatch.setattr(healthy, "advance", _counting_advance)
    assert registry.start_all() == ["a", "b"]

    with caplog.at_level(logging.ERROR):
        drive(clock, frames, 48.0)
    assert calls == [16.0, 32.0, 48.0]
    assert not failing.is_running
    assert healthy.is_running
    assert caplog.text.count("failed during a frame") == 1
