"""
どこで: `api` 入口（高レベル公開 API）。
何を: イラストの実行ランナーと、型タグ登録/所有レジストリを再輸出。
なぜ: 利用者が単一名前空間から宣言 → 構築 → 実行まで完結できるようにするため。

Usage:
    from api import run

    run(["sphere", "layered-house", "splash"], fps=60)
"""

from illustrations import IllustrationRegistry, illustration, list_illustrations

from .runner import IllustrationDeclaration, run_illustrations
from .runner import run_illustrations as run

__all__ = [
    "run",  # 実行（エイリアス）
    "run_illustrations",
    "IllustrationDeclaration",
    "IllustrationRegistry",
    "illustration",  # ユーザー拡張用デコレータ
    "list_illustrations",
]

__version__ = "2026.10"
