"""
どこで: `illustrations.attributes`
何を: `data-*` 風の宣言属性（文字列キー/値）を型付きで読み出す `AttributeReader`。
なぜ: 3 種の設定データクラスで、キー綴り（`data-fade-duration` / `fadeDuration`）と
     数値変換の失敗（`ConfigurationError`）を同じ規約で扱うため。

規約:
- 空文字列/空白のみの値は「未指定」とみなし既定値を使う。
- 整数項目は小数表記も受理し、切り捨てる（"250.7" → 250）。
- 非数値は `ConfigurationError`（元の `ValueError` を `from` で連結）。
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from common.errors import ConfigurationError

_DATA_PREFIX = "data-"
_KEBAB_RE = re.compile(r"-([a-z0-9])")


def normalize_attribute_key(key: str) -> str:
    """`data-rotation-speed-x` / `rotation-speed-x` / `rotationSpeedX` → `rotationSpeedX`。"""
    k = str(key).strip()
    if k.lower().startswith(_DATA_PREFIX):
        k = k[len(_DATA_PREFIX) :]
        return _KEBAB_RE.sub(lambda m: m.group(1).upper(), k.lower())
    if "-" in k:
        return _KEBAB_RE.sub(lambda m: m.group(1).upper(), k.lower())
    return k


class AttributeReader:
    """宣言属性の読み取りビュー（キーは正規化済み）。"""

    def __init__(self, attributes: Mapping[str, Any] | None, *, owner: str = "illustration"):
        self.owner = owner
        self._values: dict[str, Any] = {}
        for key, value in (attributes or {}).items():
            self._values[normalize_attribute_key(key)] = value

    def raw(self, name: str) -> Any | None:
        value = self._values.get(name)
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def __contains__(self, name: str) -> bool:
        return self.raw(name) is not None

    def _fail(self, name: str, value: Any, kind: str) -> ConfigurationError:
        return ConfigurationError(f"{self.owner}: attribute '{name}' must be {kind}, got {value!r}")

    def get_float(self, name: str, default: float | None) -> float | None:
        value = self.raw(name)
        if value is None:
            return default
        try:
            out = float(value)
        except (TypeError, ValueError) as e:
            raise self._fail(name, value, "a number") from e
        if math.isnan(out):
            raise ConfigurationError(f"{self.owner}: attribute '{name}' must not be NaN")
        return out

    def get_int(self, name: str, default: int) -> int:
        value = self.raw(name)
        if value is None:
            return default
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError) as e:
            raise self._fail(name, value, "an integer") from e

    def get_str(self, name: str, default: str | None) -> str | None:
        value = self.raw(name)
        return default if value is None else str(value).strip()

    def get_float_list(self, name: str, default: list[float]) -> list[float]:
        """カンマ区切り文字列（または数値列）を float のリストへ。空要素は無視する。"""
        value = self.raw(name)
        if value is None:
            return list(default)
        items = value.split(",") if isinstance(value, str) else list(value)
        out: list[float] = []
        for item in items:
            if isinstance(item, str) and not item.strip():
                continue
            try:
                out.append(float(item))
            except (TypeError, ValueError) as e:
                raise self._fail(name, value, "a comma separated list of numbers") from e
        return out


__all__ = ["AttributeReader", "normalize_attribute_key"]
