"""共通フィクスチャ。

- 乱数シード固定
- 仮想時刻とフレームクロック
- 記録用描画面付きのコンテナ
- 同梱の形状記述
"""

from __future__ import annotations

from typing import Callable

import numpy as np
import pytest

from engine.core.frame_clock import FrameClock
from engine.render.container import Container
from engine.render.surface import RecordingSurface
from illustrations.loader import load_shape_description
from tests._utils.dummies import VirtualTime

DEFAULT_STYLES = {
    "color": "rgb(30, 30, 30)",
    "--ids__accent-RGB": "255, 105, 105",
    "--bg-RGB": "245, 240, 230",
}


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture()
def virtual_time() -> VirtualTime:
    return VirtualTime(0.0)


@pytest.fixture()
def frame_clock() -> FrameClock:
    return FrameClock()


@pytest.fixture()
def make_container() -> Callable[..., Container]:
    def _make(
        width: float = 400.0,
        height: float = 400.0,
        *,
        attributes: dict[str, str] | None = None,
        styles: dict[str, str] | None = None,
        device_pixel_ratio: float | None = 1.0,
    ) -> Container:
        return Container(
            width,
            height,
            RecordingSurface(),
            dict(attributes or {}),
            dict(DEFAULT_STYLES if styles is None else styles),
            device_pixel_ratio=device_pixel_ratio,
        )

    return _make


@pytest.fixture(scope="session")
def house_svg() -> str:
    return load_shape_description("package:layered_house.svg")


@pytest.fixture(scope="session")
def splash_svg() -> str:
    return load_shape_description("package:splash.svg")
