"""
どこで: `illustrations.registry`
何を: 型タグ → コントローラクラスの登録（`@illustration("sphere")`）と、
     インスタンスを明示的に所有する `IllustrationRegistry`（create/start/stop/dispose）。
なぜ: モジュール状態に頼らずインスタンスの寿命を呼び出し側が管理し、
     1 インスタンスの失敗（設定/読込/描画面）を他へ波及させないため。
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from common.base_registry import BaseRegistry
from common.timebase import TimeSource
from engine.core.frame_clock import FrameSource
from engine.render.container import Container, PairedSurface

from .attributes import AttributeReader
from .controller import IllustrationController

logger = logging.getLogger(__name__)

DEFAULT_TYPE = "sphere"
TYPE_ATTRIBUTE = "illustrationType"

_illustration_registry = BaseRegistry()


def illustration(name: str | None = None):
    """コントローラクラスを型タグで登録するデコレータ。"""

    def decorator(cls: type[IllustrationController]) -> type[IllustrationController]:
        _illustration_registry.register(name)(cls)
        cls.type_name = name or cls.__name__
        return cls

    return decorator


def get_illustration_class(name: str) -> type[IllustrationController]:
    return _illustration_registry.get(name)


def is_illustration_registered(name: str) -> bool:
    return _illustration_registry.is_registered(name)


def list_illustrations() -> list[str]:
    """登録済みの型タグ（宣言で使う綴り）を昇順で返す。"""
    return sorted(cls.type_name for cls in _illustration_registry.registry.values())


class IllustrationRegistry:
    """イラストインスタンスの所有コレクション。

    - `create()` は構築時の例外（種類を問わない）をログに残して None を返す（他インスタンスに影響しない）。
    - `start()` は読込/開始の失敗をログに残して False を返す。
    """

    def __init__(
        self,
        *,
        frame_source: FrameSource | None = None,
        time_source: TimeSource | None = None,
        default_type: str = DEFAULT_TYPE,
    ):
        self.frame_source = frame_source
        self.time_source = time_source
        self.default_type = default_type
        self._instances: dict[str, IllustrationController] = {}
        self._counter = 0

    # ---- 構築 ----
    def _resolve_type(self, container: Container | PairedSurface, type_name: str | None) -> str:
        if type_name:
            return type_name
        reader = AttributeReader(container.attributes)
        return reader.get_str(TYPE_ATTRIBUTE, None) or self.default_type

    def _next_key(self) -> str:
        while True:
            key = f"illustration-{self._counter}"
            self._counter += 1
            if key not in self._instances:
                return key

    def create(
        self,
        container: Container | PairedSurface,
        type_name: str | None = None,
        key: str | None = None,
        **kwargs: Any,
    ) -> str | None:
        """コンテナからインスタンスを構築して登録し、キーを返す（失敗時 None）。"""
        resolved = self._resolve_type(container, type_name)
        if not is_illustration_registered(resolved):
            logger.warning("Unknown illustration type: %s", resolved)
            return None
        cls = get_illustration_class(resolved)
        try:
            instance = cls(
                container,
                frame_source=self.frame_source,
                time_source=self.time_source,
                **kwargs,
            )
        except Exception:
            logger.exception("Failed to initialize %s illustration in container %r", resolved, container)
            return None
        if key is None:
            key = self._next_key()
        elif key in self._instances:
            self.dispose(key)
        self._instances[key] = instance
        return key

    # ---- ライフサイクル ----
    def start(self, key: str) -> bool:
        instance = self._instances.get(key)
        if instance is None:
            logger.warning("No illustration registered under %r", key)
            return False
        try:
            instance.start()
        except Exception:
            logger.exception("Failed to start illustration %r", key)
            instance.stop()
            return False
        return True

    def start_all(self) -> list[str]:
        """全インスタンスを開始し、開始できたキーを返す。"""
        return [key for key in list(self._instances) if self.start(key)]

    def stop(self, key: str) -> None:
        instance = self._instances.get(key)
        if instance is not None:
            instance.stop()

    def stop_all(self) -> None:
        for instance in self._instances.values():
            instance.stop()

    def dispose(self, key: str) -> IllustrationController | None:
        """停止して登録から外す（未登録は None）。"""
        instance = self._instances.pop(key, None)
        if instance is not None:
            instance.dispose()
        return instance

    def dispose_all(self) -> None:
        for key in list(self._instances):
            self.dispose(key)

    # ---- 参照 ----
    def get(self, key: str) -> IllustrationController | None:
        return self._instances.get(key)

    def keys(self) -> list[str]:
        return list(self._instances)

    def items(self) -> Iterator[tuple[str, IllustrationController]]:
        return iter(list(self._instances.items()))

    def __len__(self) -> int:
        return len(self._instances)

    def __contains__(self, key: object) -> bool:
        return key in self._instances


__all__ = [
    "illustration",
    "get_illustration_class",
    "is_illustration_registered",
    "list_illustrations",
    "IllustrationRegistry",
    "DEFAULT_TYPE",
]
