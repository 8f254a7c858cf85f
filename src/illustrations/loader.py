"""
どこで: `illustrations.loader`
何を: 形状記述テキストの取得（ファイルパス / 同梱アセット `package:<name>` / HTTP(S) URL）。
なぜ: 取得元の違いを 1 関数に閉じ込め、失敗を一律 `GeometryLoadError` として
     コントローラの `load()` から伝播させるため。
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

import requests

from common.errors import GeometryLoadError

logger = logging.getLogger(__name__)

PACKAGE_PREFIX = "package:"
HTTP_TIMEOUT_SEC = 10.0


def _load_package_asset(name: str) -> str:
    try:
        return resources.files("illustrations").joinpath("assets", name).read_text(encoding="utf-8")
    except (FileNotFoundError, OSError) as e:
        raise GeometryLoadError(f"bundled asset not found: {name!r}") from e


def _load_url(url: str) -> str:
    try:
        response = requests.get(url, timeout=HTTP_TIMEOUT_SEC)
        response.raise_for_status()
    except requests.RequestException as e:
        raise GeometryLoadError(f"Failed to load shape description from {url}: {e}") from e
    return response.text


def load_shape_description(source: str | Path) -> str:
    """形状記述テキストを返す。

    - `Path` / 文字列パス: UTF-8 で読み込み
    - `package:<name>`: `illustrations/assets/<name>`
    - `http://` / `https://`: `requests.get(timeout=10s)`
    """
    if isinstance(source, Path):
        path = source
    else:
        text = str(source).strip()
        if text.startswith(PACKAGE_PREFIX):
            logger.debug("loading bundled asset %s", text)
            return _load_package_asset(text[len(PACKAGE_PREFIX) :])
        if text.lower().startswith(("http://", "https://")):
            logger.debug("fetching shape description %s", text)
            return _load_url(text)
        path = Path(text).expanduser()
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise GeometryLoadError(f"cannot read shape description {str(path)!r}: {e}") from e


__all__ = ["load_shape_description", "PACKAGE_PREFIX", "HTTP_TIMEOUT_SEC"]
