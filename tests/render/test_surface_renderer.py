from __future__ import annotations

from types import SimpleNamespace

import pytest

from common.errors import SurfaceNotFoundError
from engine.render import IllustrationRenderer
from engine.render.container import Container, PairedSurface, merged_attributes
from engine.render.surface import RecordingSurface, Surface
from engine.render.surface_renderer import DEFAULT_TEXT_COLOR, SurfaceRenderer, sort_by_depth


def test_setup_canvas_uses_square_size_and_device_pixel_ratio(make_container) -> None:
    c = make_container(300, 200, device_pixel_ratio=2.0)
    r = SurfaceRenderer(c)
    r.setup_canvas()

    s = c.surface
    assert r.size == 200
    assert (s.width, s.height) == (400, 400)
    assert (s.css_width, s.css_height) == (200, 200)
    assert s.transform == (2.0, 2.0)
    assert r.scale_x == pytest.approx(0.2)
    assert (r.center_x, r.center_y) == (100.0, 100.0)
    assert [op.name for op in s.ops] == ["resize", "scale"]


def test_setup_canvas_is_idempotent_transform(make_container) -> None:
    c = make_container(100, 100, device_pixel_ratio=2.0)
    r = SurfaceRenderer(c)
    r.setup_canvas()
    r.setup_canvas()
    # resize() が変換をリセットするので倍率は累積しない
    assert c.surface.transform == (2.0, 2.0)


def test_dpr_override_wins_over_container(make_container) -> None:
    c = make_container(100, 100, device_pixel_ratio=3.0)
    r = SurfaceRenderer(c, device_pixel_ratio=1.5)
    r.setup_canvas()
    assert r.dpr == 1.5


def test_min_size_raises_small_containers(make_container) -> None:
    c = make_container(50, 80)
    r = SurfaceRenderer(c, min_size=100)
    r.setup_canvas()
    assert r.size == 100
    assert r.scale_x == pytest.approx(0.1)


def test_logical_center_maps_to_surface_center(make_container) -> None:
    r = SurfaceRenderer(make_container(400, 400))
    r.setup_canvas()
    assert r.scale_coordinate_x(500) == pytest.approx(200)
    assert r.scale_coordinate_y(500) == pytest.approx(200)
    assert r.scale_coordinate_x(1000) == pytest.approx(400)
    assert r.scale_coordinate_y(0) == pytest.approx(0)


def test_clear_covers_the_square(make_container) -> None:
    c = make_container(120, 300)
    r = SurfaceRenderer(c)
    r.setup_canvas()
    r.clear()
    assert c.surface.ops_named("clear_rect")[-1].args == (0.0, 0.0, 120.0, 120.0)


def test_missing_surface_raises() -> None:
    with pytest.raises(SurfaceNotFoundError):
        SurfaceRenderer(Container(100, 100, None, name="hero"))


def test_color_from_css_variables(make_container) -> None:
    c = make_container(styles={"--accent": " 1, 2, 3 ", "--empty": ""})
    r = SurfaceRenderer(c)
    assert r.get_color_from_css("--accent", 0.5) == "rgba(1, 2, 3, 0.5)"
    assert r.get_color_from_css("--empty") is None
    assert r.get_color_from_css("--missing") is None


def test_color_from_css_uses_shared_formatter(make_container, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[tuple[str, float]] = []

    def _format(rgb: str, alpha: float = 1.0) -> str:
        seen.append((rgb, alpha))
        return "formatted"

    monkeypatch.setattr("engine.render.surface_renderer.format_rgba", _format)
    r = SurfaceRenderer(make_container(styles={"--accent": "9, 8, 7"}))
    assert r.get_color_from_css("--accent", 0.3) == "formatted"
    assert seen == [("9, 8, 7", 0.3)]


def test_text_color_fallback(make_container) -> None:
    assert SurfaceRenderer(make_container(styles={})).get_text_color() == DEFAULT_TEXT_COLOR
    c = make_container(styles={"color": "rgb(10, 20, 30)"})
    assert SurfaceRenderer(c).get_text_color() == "rgb(10, 20, 30)"


def test_color_lookup_on_another_element(make_container) -> None:
    a = make_container(styles={})
    b = make_container(styles={"--x": "4, 5, 6"})
    assert SurfaceRenderer(a).get_color_from_css("--x", 1, element=b) == "rgba(4, 5, 6, 1)"


def test_sort_by_depth_is_stable_descending() -> None:
    items = [
        {"id": 1, "z": 1.0},
        {"id": 2, "z": 3.0},
        {"id": 3, "z": 1.0},
        {"id": 4, "z": None},
        {"id": 5, "z": -2.0},
    ]
    original = list(items)
    out = sort_by_depth(items)
    assert [i["id"] for i in out] == [2, 1, 3, 4, 5]
    assert items == original


def test_sort_by_depth_accepts_objects_and_tuples() -> None:
    objs = [SimpleNamespace(name="near", z=-5), SimpleNamespace(name="far", z=5), SimpleNamespace(name="none")]
    assert [o.name for o in sort_by_depth(objs)] == ["far", "none", "near"]
    tuples = [(0, 0, 1), (0, 0, 9), (0, 0)]
    assert sort_by_depth(tuples) == [(0, 0, 9), (0, 0, 1), (0, 0)]
    assert SurfaceRenderer.sort_by_depth([]) == []


def test_recording_surface_records_paths_with_style() -> None:
    s = RecordingSurface()
    assert isinstance(s, Surface)
    s.fill_style = "rgba(1, 2, 3, 0.5)"
    s.begin_path()
    s.move_to(0, 0)
    s.line_to(10, 0)
    s.close_path()
    s.fill()
    op = s.ops_named("fill")[0]
    assert op.args == ((("M", 0.0, 0.0), ("L", 10.0, 0.0), ("Z",)),)
    assert op.fill_style == "rgba(1, 2, 3, 0.5)"
    s.reset_ops()
    assert s.ops == []


def test_paired_surface_exposes_primary_attributes(make_container) -> None:
    a = make_container(attributes={"illustrationType": "splash"})
    b = make_container()
    pair = PairedSurface(a, b)
    assert pair.attributes == {"illustrationType": "splash"}
    assert merged_attributes(pair, {"scale": "2"}) == {"illustrationType": "splash", "scale": "2"}


def test_renderers_satisfy_protocol(make_container) -> None:
    from illustrations.sphere import SphereConfig, SphereRenderer

    assert isinstance(SphereRenderer(make_container(), SphereConfig()), IllustrationRenderer)
