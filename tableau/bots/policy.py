"""
Golf Strategies - Pluggable AI decision-making for 9-Card Golf.

A strategy looks at the acting player's grid and the shared table
and returns a GolfAction (draw source + move). Strategies never
mutate the state they are given; randomness comes only from the
rng argument so seeded games replay exactly.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..engine_core.rng import Rng, choose_index, default_rng
from ..games.golf.game import (
    GolfAction,
    GolfPlayerState,
    GolfSession,
    GolfSharedState,
    enumerate_draw_sources,
    enumerate_legal_moves,
    peek_draw_source,
)
from ..games.golf.grid import copy_grid
from ..games.golf.rules import apply_move
from ..games.golf.scoring import score_grid


class GolfStrategy(ABC):
    """
    Abstract base class for Golf strategies.

    Implementations range from uniform random play to one-ply
    score minimisation.
    """

    name: str = "strategy"

    @abstractmethod
    def choose_action(
        self,
        player_state: GolfPlayerState,
        shared: GolfSharedState,
        rng: Rng,
    ) -> GolfAction:
        """
        Pick a draw source and a move.

        Args:
            player_state: The acting player's grid
            shared: Stock, discard pile and round-end tracker
            rng: Source of randomness in [0, 1)

        Returns:
            The action to execute
        """

    def get_name(self) -> str:
        return self.name


class RandomStrategy(GolfStrategy):
    """
    Uniform random play.

    Used for:
    - Testing
    - Baseline comparison
    - Fallback when no better option exists
    """

    name = "random"

    def choose_action(
        self,
        player_state: GolfPlayerState,
        shared: GolfSharedState,
        rng: Rng,
    ) -> GolfAction:
        sources = enumerate_draw_sources(shared)
        moves = enumerate_legal_moves(player_state.grid)
        if not sources or not moves:
            raise ValueError("No legal actions available")

        return GolfAction(
            draw_source=sources[choose_index(rng, len(sources))],
            move=moves[choose_index(rng, len(moves))],
        )


class GreedyStrategy(GolfStrategy):
    """
    One-ply greedy play: minimise the full grid score after the move.

    Each (source, move) pair is simulated on a copied grid with a copy
    of the card that would be drawn. Hidden cards count toward the
    score, so revealing a card is never penalised for what it shows.
    Ties are broken uniformly at random.
    """

    name = "greedy"

    def __init__(self):
        self._fallback = RandomStrategy()

    def evaluate(
        self,
        player_state: GolfPlayerState,
        shared: GolfSharedState,
    ) -> list[tuple[int, GolfAction]]:
        """Score every candidate action, in enumeration order."""
        candidates: list[tuple[int, GolfAction]] = []
        moves = enumerate_legal_moves(player_state.grid)

        for source in enumerate_draw_sources(shared):
            card = peek_draw_source(shared, source)
            if card is None:
                continue
            for move in moves:
                grid = copy_grid(player_state.grid)
                apply_move(grid, card.copy(), move)
                candidates.append((score_grid(grid), GolfAction(source, move)))

        return candidates

    def choose_action(
        self,
        player_state: GolfPlayerState,
        shared: GolfSharedState,
        rng: Rng,
    ) -> GolfAction:
        candidates = self.evaluate(player_state, shared)
        if not candidates:
            return self._fallback.choose_action(player_state, shared, rng)

        best_score = min(score for score, _ in candidates)
        tied = [action for score, action in candidates if score == best_score]
        return tied[choose_index(rng, len(tied))]


STRATEGIES: dict[str, type[GolfStrategy]] = {
    RandomStrategy.name: RandomStrategy,
    GreedyStrategy.name: GreedyStrategy,
}


def get_strategy(name: str) -> GolfStrategy:
    """
    Look up a strategy by name.

    Raises:
        KeyError: unknown strategy name
    """
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise KeyError(
            f"Unknown strategy {name!r}; available: {', '.join(sorted(STRATEGIES))}"
        ) from None


@dataclass
class AiPlayer:
    """A strategy bound to its own rng, acting on the session's current player."""
    strategy: GolfStrategy
    rng: Rng = default_rng()

    def choose_action(self, session: GolfSession) -> GolfAction:
        game_state = session.game_state
        player_state = game_state.player_states[game_state.current_player_index]
        return self.strategy.choose_action(player_state, session.shared, self.rng)
