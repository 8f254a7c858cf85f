from __future__ import annotations

from pathlib import Path

import pytest
import requests

from common.errors import GeometryLoadError
from illustrations import loader
from illustrations.loader import HTTP_TIMEOUT_SEC, load_shape_description


class _FakeResponse:
    def __init__(self, text: str, status: int = 200):
        self.text = text
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_bundled_asset() -> None:
    text = load_shape_description("package:layered_house.svg")
    assert "<svg" in text


def test_missing_bundled_asset_raises() -> None:
    with pytest.raises(GeometryLoadError, match="missing.svg"):
        load_shape_description("package:missing.svg")


def test_file_path_and_str(tmp_path: Path) -> None:
    p = tmp_path / "shape.svg"
    p.write_text("<svg/>", encoding="utf-8")
    assert load_shape_description(p) == "<svg/>"
    assert load_shape_description(str(p)) == "<svg/>"


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(GeometryLoadError) as excinfo:
        load_shape_description(tmp_path / "nope.svg")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_undecodable_file_raises(tmp_path: Path) -> None:
    p = tmp_path / "latin1.svg"
    p.write_bytes(b"<svg>\xff\xfe</svg>")
    with pytest.raises(GeometryLoadError, match="latin1.svg") as excinfo:
        load_shape_description(p)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_url_is_fetched_with_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, float]] = []

    def fake_get(url: str, timeout: float) -> _FakeResponse:
        calls.append((url, timeout))
        return _FakeResponse("<svg viewBox='0 0 1 1'/>")

    monkeypatch.setattr(loader.requests, "get", fake_get)
    assert load_shape_description("https://example.com/house.svg") == "<svg viewBox='0 0 1 1'/>"
    assert calls == [("https://example.com/house.svg", HTTP_TIMEOUT_SEC)]


def _not_found(url: str, timeout: float) -> _FakeResponse:
    return _FakeResponse("not found", status=404)


def _refused(url: str, timeout: float) -> _FakeResponse:
    raise requests.ConnectionError("refused")


@pytest.mark.parametrize("fake_get", [_not_found, _refused], ids=["http-error", "connection-error"])
def test_url_failures_become_geometry_load_error(monkeypatch: pytest.MonkeyPatch, fake_get) -> None:
    monkeypatch.setattr(loader.requests, "get", fake_get)
    with pytest.raises(GeometryLoadError, match="Failed to load shape description"):
        load_shape_description("http://example.com/splash.svg")
