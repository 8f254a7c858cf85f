from __future__ import annotations

import pytest

from common.base_registry import BaseRegistry


def test_register_and_get_with_normalization() -> None:
    reg = BaseRegistry()

    @reg.register(None)
    class LayeredHouse:  # noqa: N801 (テスト用)
        pass

    assert reg.is_registered("layered_house")
    assert reg.is_registered("layered-house")
    assert reg.get("LayeredHouse") is LayeredHouse
    assert "layered_house" in reg.list_all()


def test_duplicate_and_unregister() -> None:
    reg = BaseRegistry()

    @reg.register("sphere")
    class Sphere:
        pass

    with pytest.raises(ValueError):
        reg.register("Sphere")(type("Other", (), {}))

    # 同一オブジェクトの再登録は許容
    reg.register("sphere")(Sphere)

    reg.unregister("Sphere")
    assert not reg.is_registered("sphere")


def test_unregister_noop_and_get_missing() -> None:
    reg = BaseRegistry()
    reg.unregister("nonexistent")  # 例外にならない
    with pytest.raises(KeyError):
        reg.get("nonexistent")


def test_invalid_keys() -> None:
    reg = BaseRegistry()
    with pytest.raises(ValueError):
        reg.is_registered("   ")
    with pytest.raises(TypeError):
        reg.is_registered(123)  # type: ignore[arg-type]


def test_registry_property_is_a_copy_and_clear() -> None:
    reg = BaseRegistry()
    reg.register("splash")(object)
    snapshot = reg.registry
    snapshot.clear()
    assert reg.is_registered("splash")
    reg.clear()
    assert reg.list_all() == []
