"""
どこで: `api.runner`（実行ランナー）。
何を: YAML/引数のイラスト宣言からコンテナとコントローラを組み立て、pyglet ウィンドウに
     正方形セルを並べて全イラストを 1 本のフレームクロックで駆動する。
なぜ: ページ埋め込みの代わりにデスクトップ上で 3 種のイラストを並べて確認できるようにするため。

実行フロー（概要）:
1) ロギング: `setup_default_logging()`（ルートに既にハンドラがあれば何もしない）。
2) 構成解決: `util.utils.load_config()` からセル寸法/列数/背景/FPS/スタイル変数/宣言を読み、引数で上書き。
3) 宣言 → `Container`（`PygletSurface` 付き）。`dual: true` のスプラッシュは同じセルに 2 面を重ねる。
4) `IllustrationRegistry` で構築/開始（失敗はインスタンス単位でログに残して継続）。
5) `FrameClock` を `pyglet.clock.schedule_interval(frame_clock.tick, 1/fps)` で駆動し、
   各イラストの `AnimationLoop` はこのクロックに相乗りする。
6) ウィンドウのリサイズでセルを並べ直し、各イラストへ debounce 付きで通知する。

`init_only=True` は pyglet を読み込まずに宣言の解決だけを行って返す（構成の検証用）。
"""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Sequence

from common.logging import setup_default_logging
from common.settings import get as get_settings
from common.timebase import TimeSource, now_ms
from engine.render.container import Container, PairedSurface
from engine.render.surface import Surface
from illustrations import IllustrationRegistry
from util.color import normalize_color
from util.utils import load_config

logger = logging.getLogger(__name__)

DEFAULT_CELL_SIZE = 360
DEFAULT_BACKGROUND = "#ffffff"

SurfaceFactory = Callable[[], Surface]


@dataclass
class IllustrationDeclaration:
    """1 セル分のイラスト宣言。`attributes` はキャメルケース/`data-*` どちらの綴りでもよい。"""

    type: str = "sphere"
    attributes: dict[str, str] = field(default_factory=dict)
    styles: dict[str, str] = field(default_factory=dict)
    dual: bool = False
    key: str | None = None


@dataclass
class RunnerOptions:
    cell_size: int = DEFAULT_CELL_SIZE
    columns: int | None = None
    fps: int = 60
    background: Any = DEFAULT_BACKGROUND
    styles: dict[str, str] = field(default_factory=dict)


def _str_dict(raw: Any, what: str) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"{what} must be a mapping, got {type(raw).__name__}")
    out: dict[str, str] = {}
    for k, v in raw.items():
        # YAML のリストは "a, b, c" 形式の属性値へ
        out[str(k)] = ", ".join(str(x) for x in v) if isinstance(v, (list, tuple)) else str(v)
    return out


def parse_declarations(raw: Any, defaults: Mapping[str, Any] | None = None) -> list[IllustrationDeclaration]:
    """YAML 由来のリスト（または宣言オブジェクト列）を `IllustrationDeclaration` 列へ正規化する。

    `defaults` は型名 → 既定属性。宣言側の属性が優先する（型名だけの宣言でも必須属性を補える）。
    """
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"illustrations must be a list, got {type(raw).__name__}")
    defaults = defaults or {}
    out: list[IllustrationDeclaration] = []
    for i, item in enumerate(raw):
        if isinstance(item, IllustrationDeclaration):
            decl = item
        elif isinstance(item, str):
            decl = IllustrationDeclaration(type=item)
        elif isinstance(item, Mapping):
            decl = IllustrationDeclaration(
                type=str(item.get("type", "sphere")),
                attributes=_str_dict(item.get("attributes"), f"illustrations[{i}].attributes"),
                styles=_str_dict(item.get("styles"), f"illustrations[{i}].styles"),
                dual=bool(item.get("dual", False)),
                key=None if item.get("key") is None else str(item.get("key")),
            )
        else:
            raise ValueError(f"illustrations[{i}] must be a mapping or a type name")
        base = _str_dict(defaults.get(decl.type), f"defaults.{decl.type}")
        if base:
            base.update(decl.attributes)
            decl = replace(decl, attributes=base)
        out.append(decl)
    return out


def resolve_options(cfg: Mapping[str, Any], **overrides: Any) -> RunnerOptions:
    """構成辞書と明示引数から `RunnerOptions` を得る（引数が優先、None は未指定扱い）。"""
    window = cfg.get("window") or {}
    if not isinstance(window, Mapping):
        window = {}
    opts = RunnerOptions(
        cell_size=int(window.get("cell_size", DEFAULT_CELL_SIZE)),
        columns=window.get("columns"),
        fps=int(cfg.get("fps", get_settings().FPS)),
        background=window.get("background", DEFAULT_BACKGROUND),
        styles=_str_dict(cfg.get("styles"), "styles"),
    )
    for name, value in overrides.items():
        if value is not None:
            setattr(opts, name, value)
    opts.cell_size = max(1, int(opts.cell_size))
    opts.fps = max(1, int(opts.fps))
    if opts.columns is not None:
        opts.columns = max(1, int(opts.columns))
    return opts


def grid_shape(count: int, columns: int | None = None) -> tuple[int, int]:
    """セル数 → (列, 行)。列未指定は 3 列まで横に並べる。"""
    if count <= 0:
        return (1, 1)
    cols = columns or min(count, 3)
    return (cols, math.ceil(count / cols))


def cell_origins(count: int, cell_size: float, columns: int, window_height: float) -> list[tuple[float, float]]:
    """左上から行優先で並べたセルの左下原点（ウィンドウ座標・y 上向き）。"""
    out = []
    for i in range(count):
        col, row = i % columns, i // columns
        out.append((col * cell_size, window_height - (row + 1) * cell_size))
    return out


def build_containers(
    declarations: Sequence[IllustrationDeclaration],
    surface_factory: SurfaceFactory,
    *,
    cell_size: float,
    styles: Mapping[str, str] | None = None,
) -> list[Container | PairedSurface]:
    """宣言ごとにコンテナ（`dual` なら同サイズ 2 面の `PairedSurface`）を作る。"""
    out: list[Container | PairedSurface] = []
    for i, decl in enumerate(declarations):
        merged = dict(styles or {})
        merged.update(decl.styles)
        attrs = dict(decl.attributes)
        attrs.setdefault("illustrationType", decl.type)
        name = decl.key or f"{decl.type}-{i}"
        primary = Container(cell_size, cell_size, surface_factory(), attrs, merged, name=name)
        if decl.dual:
            secondary = Container(cell_size, cell_size, surface_factory(), attrs, merged, name=f"{name}-front")
            out.append(PairedSurface(primary, secondary))
        else:
            out.append(primary)
    return out


def populate_registry(
    registry: IllustrationRegistry,
    declarations: Sequence[IllustrationDeclaration],
    containers: Sequence[Container | PairedSurface],
) -> list[str]:
    """宣言順にインスタンスを構築し、構築できたキーを返す。"""
    keys: list[str] = []
    for decl, container in zip(declarations, containers):
        key = registry.create(container, decl.type, decl.key)
        if key is not None:
            keys.append(key)
    return keys


def run_illustrations(
    declarations: Sequence[IllustrationDeclaration | Mapping[str, Any] | str] | None = None,
    *,
    cell_size: int | None = None,
    columns: int | None = None,
    fps: int | None = None,
    background: Any = None,
    time_source: TimeSource | None = None,
    log_level: str = "INFO",
    init_only: bool = False,
) -> list[IllustrationDeclaration] | None:
    """宣言されたイラストをウィンドウに並べて実行する。

    Parameters
    ----------
    declarations : 宣言列 | None
        None なら構成ファイルの `illustrations` を使う。
    cell_size : int | None
        各セル（正方形）の一辺 [px]。None で構成値/既定 360。
    columns : int | None
        列数。None で最大 3 列。
    fps : int | None
        フレームクロックの駆動レート。None で構成値/`ILLUS_FPS`。
    background : str | tuple | None
        ウィンドウ背景（#RRGGBB か RGBA 0–1）。
    init_only : bool, default False
        True で pyglet を読み込まず、解決済みの宣言を返して終了する。
    """
    setup_default_logging(log_level)
    cfg = load_config()
    opts = resolve_options(cfg, cell_size=cell_size, columns=columns, fps=fps, background=background)
    decls = parse_declarations(
        cfg.get("illustrations") if declarations is None else list(declarations),
        cfg.get("defaults") if isinstance(cfg.get("defaults"), Mapping) else None,
    )
    if not decls:
        logger.warning("No illustrations declared; nothing to run")
        return decls
    if init_only:
        return decls

    import pyglet

    from engine.core.frame_clock import FrameClock
    from engine.core.render_window import RenderWindow
    from engine.render.pyglet_surface import PygletSurface

    cols, rows = grid_shape(len(decls), opts.columns)
    size = opts.cell_size
    window = RenderWindow(cols * size, rows * size, bg_color=normalize_color(opts.background))

    containers = build_containers(decls, PygletSurface, cell_size=size, styles=opts.styles)
    frame_clock = FrameClock()
    registry = IllustrationRegistry(frame_source=frame_clock, time_source=time_source or now_ms)
    keys = populate_registry(registry, decls, containers)

    primaries = [c.primary if isinstance(c, PairedSurface) else c for c in containers]
    fronts = [c.secondary for c in containers if isinstance(c, PairedSurface)]

    def _layout(width: float, height: float) -> float:
        n_cols, n_rows = grid_shape(len(primaries), opts.columns)
        cell = max(1.0, min(width / n_cols, height / n_rows))
        origins = cell_origins(len(containers), cell, n_cols, height)
        for container, (ox, oy) in zip(containers, origins):
            members = (
                (container.primary, container.secondary) if isinstance(container, PairedSurface) else (container,)
            )
            for c in members:
                c.set_size(cell, cell)
                c.surface.move_origin(ox, oy)
        return cell

    _layout(window.width, window.height)

    # 奥の面 → 手前の面の順に描く
    for c in primaries + fronts:
        window.add_draw_callback(c.surface.draw)

    def on_resize(width: int, height: int) -> None:
        cell = _layout(width, height)
        logger.debug("window resized to %dx%d (cell %.1f)", width, height, cell)
        for _, instance in registry.items():
            instance.handle_resize()

    def on_close() -> None:
        registry.dispose_all()

    window.push_handlers(on_resize=on_resize, on_close=on_close)

    started = [key for key in keys if registry.start(key)]
    logger.info("started %d/%d illustrations at %d fps", len(started), len(decls), opts.fps)

    pyglet.clock.schedule_interval(frame_clock.tick, 1 / opts.fps)
    try:
        pyglet.app.run()
    finally:
        pyglet.clock.unschedule(frame_clock.tick)
        registry.dispose_all()
    return None


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the declared illustrations in a pyglet window.")
    parser.add_argument(
        "types",
        nargs="*",
        help="illustration types to show (sphere, layered-house, splash); defaults to configs/default.yaml",
    )
    parser.add_argument("--cell-size", type=int, default=None)
    parser.add_argument("--columns", type=int, default=None)
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--background", default=None)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    run_illustrations(
        args.types or None,
        cell_size=args.cell_size,
        columns=args.columns,
        fps=args.fps,
        background=args.background,
        log_level=args.log_level,
    )


__all__ = [
    "IllustrationDeclaration",
    "RunnerOptions",
    "parse_declarations",
    "resolve_options",
    "grid_shape",
    "cell_origins",
    "build_containers",
    "populate_registry",
    "run_illustrations",
    "main",
]
