"""
どこで: `illustrations` パッケージ。
何を: 3 種のイラスト（sphere / layered-house / splash）と、その登録・所有を担うレジストリを公開。
なぜ: サブパッケージを読み込むだけで `@illustration` 登録が済み、型タグから構築できるようにするため。
"""

from .controller import IllustrationController
from .layered_house import LayeredHouseIllustration
from .registry import (
    IllustrationRegistry,
    get_illustration_class,
    illustration,
    is_illustration_registered,
    list_illustrations,
)
from .sphere import SphereIllustration
from .splash import SplashIllustration

__all__ = [
    "IllustrationController",
    "IllustrationRegistry",
    "illustration",
    "get_illustration_class",
    "is_illustration_registered",
    "list_illustrations",
    "SphereIllustration",
    "LayeredHouseIllustration",
    "SplashIllustration",
]
