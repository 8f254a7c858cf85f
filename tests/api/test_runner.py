from __future__ import annotations

import sys

import pytest

from api import IllustrationDeclaration, run_illustrations
from api.runner import (
    build_containers,
    cell_origins,
    grid_shape,
    main,
    parse_declarations,
    populate_registry,
    resolve_options,
)
from engine.core.frame_clock import FrameClock
from engine.render.container import Container, PairedSurface
from engine.render.surface import RecordingSurface
from illustrations import IllustrationRegistry
from illustrations.splash import SplashIllustration
from tests._utils.dummies import VirtualTime

STYLES = {"color": "rgb(30, 30, 30)", "--bg-RGB": "245, 240, 230", "--ids__accent-RGB": "255, 105, 105"}


def test_parse_declarations_accepts_mixed_entries() -> None:
    decls = parse_declarations(
        [
            "sphere",
            {"type": "splash", "dual": True, "attributes": {"zCoordinates": [1, 2, 3]}},
            IllustrationDeclaration(type="layered-house", key="house"),
        ],
        {"splash": {"backgroundColor": "--bg-RGB"}, "layered-house": {"backgroundColor": "--a-RGB"}},
    )
    assert [d.type for d in decls] == ["sphere", "splash", "layered-house"]
    assert decls[0].attributes == {}
    assert decls[1].dual is True
    assert decls[1].attributes == {"backgroundColor": "--bg-RGB", "zCoordinates": "1, 2, 3"}
    assert decls[2].key == "house"
    assert decls[2].attributes == {"backgroundColor": "--a-RGB"}


def test_declared_attributes_win_over_defaults() -> None:
    (decl,) = parse_declarations(
        [{"type": "splash", "attributes": {"backgroundColor": "--mine-RGB"}}],
        {"splash": {"backgroundColor": "--bg-RGB", "lineWidth": 5}},
    )
    assert decl.attributes == {"backgroundColor": "--mine-RGB", "lineWidth": "5"}


@pytest.mark.parametrize("raw", [{"type": "sphere"}, [42], [{"type": "sphere", "attributes": [1, 2]}]])
def test_parse_declarations_rejects_invalid(raw) -> None:
    with pytest.raises(ValueError):
        parse_declarations(raw)


def test_resolve_options_prefers_explicit_arguments() -> None:
    cfg = {"fps": 30, "window": {"cell_size": 200, "columns": 2, "background": "#000000"}, "styles": {"a": 1}}
    opts = resolve_options(cfg)
    assert (opts.cell_size, opts.columns, opts.fps, opts.background) == (200, 2, 30, "#000000")
    assert opts.styles == {"a": "1"}
    opts = resolve_options(cfg, cell_size=0, fps=None, columns=4)
    assert (opts.cell_size, opts.columns, opts.fps) == (1, 4, 30)
    assert resolve_options({}).cell_size == 360


def test_grid_layout() -> None:
    assert grid_shape(0) == (1, 1)
    assert grid_shape(2) == (2, 1)
    assert grid_shape(5) == (3, 2)
    assert grid_shape(5, columns=1) == (1, 5)
    assert cell_origins(4, 100.0, 3, 200.0) == [(0.0, 100.0), (100.0, 100.0), (200.0, 100.0), (0.0, 0.0)]


def test_build_containers_and_registry() -> None:
    decls = parse_declarations(
        [
            {"type": "sphere", "attributes": {"numPoints": 4}},
            {"type": "splash", "dual": True, "attributes": {"backgroundColor": "--bg-RGB"}, "key": "hero"},
        ]
    )
    containers = build_containers(decls, RecordingSurface, cell_size=120, styles=STYLES)
    sphere_box, pair = containers
    assert isinstance(sphere_box, Container)
    assert sphere_box.name == "sphere-0"
    assert sphere_box.attributes["illustrationType"] == "sphere"
    assert (sphere_box.width, sphere_box.height) == (120, 120)
    assert isinstance(pair, PairedSurface)
    assert pair.secondary.name == "hero-front"
    assert pair.primary.surface is not pair.secondary.surface

    registry = IllustrationRegistry(frame_source=FrameClock(), time_source=VirtualTime())
    keys = populate_registry(registry, decls, containers)
    assert keys == ["illustration-0", "hero"]
    splash = registry.get("hero")
    assert isinstance(splash, SplashIllustration) and splash.is_dual
    assert registry.start_all() == keys


def test_init_only_skips_window_toolkit(monkeypatch: pytest.MonkeyPatch) -> None:
    # pyglet を読み込もうとすれば ImportError になる状態
    monkeypatch.setitem(sys.modules, "pyglet", None)
    decls = run_illustrations(["sphere", "splash"], init_only=True)
    assert [d.type for d in decls] == ["sphere", "splash"]
    # 同梱構成の型別既定値で必須属性が補われる
    assert decls[1].attributes["backgroundColor"] == "--ids__background-RGB"


def test_init_only_uses_bundled_declarations() -> None:
    decls = run_illustrations(init_only=True)
    assert [d.type for d in decls] == ["sphere", "layered-house", "splash"]
    assert decls[2].dual is True
    assert decls[2].attributes["zCoordinates"].startswith("-75, 15, -105")


def test_empty_declaration_list_returns_early(caplog) -> None:
    assert run_illustrations([], init_only=False) == []
    assert "No illustrations declared" in caplog.text


def test_main_forwards_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    seen = {}

    def fake_run(declarations, **kwargs):
        seen["declarations"] = declarations
        seen.update(kwargs)

    monkeypatch.setattr("api.runner.run_illustrations", fake_run)
    main(["splash", "--fps", "30", "--cell-size", "200"])
    assert seen["declarations"] == ["splash"]
    assert seen["fps"] == 30 and seen["cell_size"] == 200
    main([])
    assert seen["declarations"] is None
