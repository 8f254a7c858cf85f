from __future__ import annotations

import logging

import numpy as np
import pytest

from engine.core.frame_clock import FrameClock
from illustrations.layered_house import (
    LAYER_COUNT,
    LayeredHouseConfig,
    LayeredHouseIllustration,
    LayeredHouseModel,
    Phase,
    phase_at,
)
from illustrations.svg import parse_silhouette
from tests._utils.dummies import VirtualTime, drive


def _config(**kw) -> LayeredHouseConfig:
    kw.setdefault("background_color", "--bg-RGB")
    return LayeredHouseConfig(**kw)


@pytest.mark.parametrize(
    "elapsed,phase,angle",
    [
        (-5.0, Phase.FORWARD, 0.0),
        (0.0, Phase.FORWARD, 0.0),
        (1000.0, Phase.FORWARD, 5.0),
        (3000.0, Phase.PAUSE1, 10.0),
        (5000.0, Phase.BACKWARD, 5.0),
        (7000.0, Phase.PAUSE2, 0.0),
        (8200.0, Phase.FORWARD, 0.2),
    ],
)
def test_phase_cycle(elapsed: float, phase: Phase, angle: float) -> None:
    got_phase, got_angle = phase_at(elapsed, _config())
    assert got_phase is phase
    assert got_angle == pytest.approx(angle)


def test_layers_are_stacked_by_spacing(house_svg: str) -> None:
    model = LayeredHouseModel(_config())
    model.load_svg(house_svg)
    assert len(model.layers) == LAYER_COUNT
    for layer in model.layers:
        assert len(layer.fills) == 3
        assert len(layer.strokes) == 5
    ordered = model.get_layers_for_render()
    assert [layer.z for layer in ordered] == [520.0, 390.0, 260.0, 130.0, 0.0]
    assert 0.1 <= model.scale <= 10.0


def test_identity_rotation_projects_around_fixed_center(house_svg: str) -> None:
    cfg = _config(rotation_x=0.0, rotation_y=0.0, rotation_z=0.0, scale=2.0)
    model = LayeredHouseModel(cfg)
    model.load_svg(house_svg)
    assert model.scale == 2.0

    source = parse_silhouette(house_svg)
    back = model.layers[3]
    got = np.array([(p.x, p.y) for p in back.fills[0]])
    np.testing.assert_allclose(got, source.fills[0] * 2.0 + [450.0, 280.0])
    assert all(p.z == pytest.approx(390.0) for p in back.fills[0])
    assert back.strokes[0].z == pytest.approx(390.0)


def test_layers_sway_with_staggered_delay(house_svg: str) -> None:
    model = LayeredHouseModel(_config())
    model.load_svg(house_svg)
    model.update_animations(10_000.0)
    model.update_animations(11_000.0)
    angles = [a.current_angle for a in model.layer_animations]
    assert angles[0] == pytest.approx(5.0)
    assert angles[1] == pytest.approx(10.0 * 2 * 0.4 * 0.4)
    # 後段の層ほど遅れて動き出す
    assert angles == sorted(angles, reverse=True)


def test_update_rotation_keeps_scale(house_svg: str) -> None:
    model = LayeredHouseModel(_config())
    model.load_svg(house_svg)
    scale = model.scale
    model.update_rotation(0.0, 0.0, 0.0, 10.0)
    assert model.scale == scale
    assert [layer.z for layer in model.layers] == [0.0, 10.0, 20.0, 30.0, 40.0]


def test_renderer_draws_backdrop_fills_and_strokes(make_container, house_svg: str) -> None:
    container = make_container(attributes={"data-background-color": "--bg-RGB"})
    house = LayeredHouseIllustration(
        container, frame_source=FrameClock(), time_source=VirtualTime(), shape_text=house_svg
    )
    house.load()
    assert house.renderer.render(house.model) is True

    surface = container.surface
    (backdrop,) = surface.ops_named("fill_rect")
    assert backdrop.fill_style == "rgba(245, 240, 230, 1)"
    assert backdrop.args == (0.0, 0.0, 400.0, 400.0)
    fills = surface.ops_named("fill")
    assert len(fills) == 15
    assert {op.fill_style for op in fills} == {"rgba(245, 240, 230, 0.7)"}
    strokes = surface.ops_named("stroke")
    assert len(strokes) == 15 + 25
    assert {op.stroke_style for op in strokes} == {"rgba(255, 105, 105, 1)"}
    assert strokes[0].line_width == pytest.approx(4.0 * 0.4)


def test_renderer_skips_frame_without_background(make_container, house_svg: str, caplog) -> None:
    container = make_container(attributes={"backgroundColor": "--missing-RGB"})
    house = LayeredHouseIllustration(container, frame_source=FrameClock(), shape_text=house_svg)
    house.load()
    with caplog.at_level(logging.WARNING):
        assert house.renderer.render(house.model) is False
    assert "Background color not found: --missing-RGB" in caplog.text
    assert container.surface.ops_named("fill") == []


def test_illustration_runs_on_frame_clock(make_container, house_svg: str) -> None:
    clock, frames = VirtualTime(), FrameClock()
    container = make_container(attributes={"backgroundColor": "--bg-RGB"})
    house = LayeredHouseIllustration(container, frame_source=frames, time_source=clock, shape_text=house_svg)

    house.update_rotation(0.0, 0.0, 0.0, 50.0)
    assert not house.is_loaded

    house.start()
    assert house.is_loaded and house.is_running
    drive(clock, frames, 1000)
    assert house.model.animation_start_time == 16.0
    assert house.model.layer_animations[0].phase is Phase.FORWARD
    assert house.model.layer_animations[0].current_angle > 0.0

    container.surface.reset_ops()
    house.update_rotation(-30.0, -20.0, -10.0, 60.0)
    assert house.config.rotation_y == -20.0
    assert len(container.surface.ops_named("fill")) == 15

    house.stop()
    assert not house.is_running
