"""
どこで: `engine.render` 型定義。
何を: イラスト別レンダラが満たす能力インターフェース `IllustrationRenderer`。
なぜ: 基底クラスを持たずに `{setup_canvas, clear, render(model)}` の形だけを共有し、
     型タグで選ばれたコントローラが自前のレンダラを組み立てられるようにするため。
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

M = TypeVar("M", contravariant=True)


@runtime_checkable
class IllustrationRenderer(Protocol[M]):
    """モデルを 1 フレーム描画するレンダラ。"""

    def setup_canvas(self) -> None: ...

    def clear(self) -> None: ...

    def render(self, model: M) -> Any: ...


__all__ = ["IllustrationRenderer"]
