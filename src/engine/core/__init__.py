"""
どこで: `engine.core` サブパッケージ。
何を: 3D 幾何カーネル・フレーム駆動（Tickable/FrameClock/AnimationLoop）・遅延タスクキューを提供。
なぜ: 計算と駆動の基盤を構成し、上位層（render/illustrations/api）から再利用可能にするため。
"""
