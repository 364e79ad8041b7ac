"""
Bots module - Golf AI players.

Provides:
- GolfStrategy: Interface for strategy decision-making
- RandomStrategy / GreedyStrategy: built-in strategies
- AiPlayer: a strategy bound to an rng
"""

from .policy import (
    GolfStrategy,
    RandomStrategy,
    GreedyStrategy,
    AiPlayer,
    STRATEGIES,
    get_strategy,
)

__all__ = [
    "GolfStrategy",
    "RandomStrategy",
    "GreedyStrategy",
    "AiPlayer",
    "STRATEGIES",
    "get_strategy",
]
