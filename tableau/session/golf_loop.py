"""
Golf Game Loop - Drives a Golf session turn by turn.

The loop:
1. Announce the current player (turn-started)
2. Human seats submit an action; AI seats ask their strategy
3. Execute the turn and record it in the transcript
4. Emit turn-completed, then state-settled
5. Announce the next player, or game-ended once the round is over
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Mapping, Sequence

from ..bots.policy import GolfStrategy
from ..engine_core.errors import PhaseError
from ..engine_core.events import (
    GameEvent,
    GameEventEmitter,
    GameEndedPayload,
    StateSettledPayload,
    TurnCompletedPayload,
    TurnStartedPayload,
)
from ..engine_core.rng import Rng, default_rng
from ..engine_core.turns import get_current_player, is_game_over
from ..games.golf.game import GolfAction, GolfSession, TurnResult, execute_turn
from ..games.golf.scoring import score_grid
from ..games.golf.transcript import GolfTranscript, TranscriptRecorder

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    NOT_STARTED = "not_started"
    WAITING_HUMAN_ACTION = "waiting_human_action"
    RUNNING_AI = "running_ai"
    GAME_OVER = "game_over"


class GolfGameLoop:
    """
    The Golf game loop driver.

    Usage:
        session = setup_golf_game(rng=create_seeded_rng(7))
        loop = GolfGameLoop(session, {1: GreedyStrategy()}, rng)
        loop.start()

        while not loop.is_over:
            if loop.current_player_needs_input():
                loop.play_turn(ask_human())
            else:
                loop.play_turn()

        transcript = loop.finalize()
    """

    def __init__(
        self,
        session: GolfSession,
        strategies: Mapping[int, GolfStrategy] | Sequence[GolfStrategy | None] | None = None,
        rng: Rng | None = None,
    ):
        self.session = session
        self.rng = rng or default_rng()
        self.events = GameEventEmitter()
        self.state = LoopState.NOT_STARTED

        if strategies is None:
            strategies = {}
        if not isinstance(strategies, Mapping):
            strategies = {i: s for i, s in enumerate(strategies) if s is not None}
        self.strategies: dict[int, GolfStrategy] = dict(strategies)

        names = [
            self.strategies[i].get_name() if i in self.strategies else None
            for i in range(session.game_state.num_players)
        ]
        self.recorder = TranscriptRecorder(session, names)
        self.transcript: GolfTranscript | None = None

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def is_over(self) -> bool:
        return is_game_over(self.session.game_state)

    def current_player_needs_input(self) -> bool:
        """True when the seat to act has no strategy (a human)."""
        if self.is_over:
            return False
        return self.session.game_state.current_player_index not in self.strategies

    def scores(self) -> list[int]:
        return [score_grid(ps.grid) for ps in self.session.game_state.player_states]

    # =========================================================================
    # Driving
    # =========================================================================

    def start(self) -> None:
        """Announce the first player. Only the first call has an effect."""
        if self.state != LoopState.NOT_STARTED:
            return
        self._announce_turn()

    def play_turn(self, action: GolfAction | None = None) -> TurnResult:
        """
        Play one turn for the current player.

        Args:
            action: Required for human seats; AI seats choose their own
                when omitted

        Raises:
            PhaseError: the round is over
            ValueError: a human seat did not supply an action
            IllegalMoveError / EmptySourceError: from execute_turn
        """
        if self.is_over:
            raise PhaseError("Round is over")
        self.start()

        game_state = self.session.game_state
        player_index = game_state.current_player_index

        if action is None:
            strategy = self.strategies.get(player_index)
            if strategy is None:
                raise ValueError(f"Player {player_index} is human and must supply an action")
            action = strategy.choose_action(
                game_state.player_states[player_index], self.session.shared, self.rng
            )

        result = execute_turn(self.session, action)
        self.recorder.record_turn(result, action.draw_source)

        self.events.emit(GameEvent.TURN_COMPLETED, TurnCompletedPayload(
            turn_number=game_state.turn_number,
            player_index=player_index,
            player_name=game_state.players[player_index].name,
            phase=game_state.phase,
        ))
        self.events.emit(GameEvent.STATE_SETTLED, StateSettledPayload(
            turn_number=game_state.turn_number,
            phase=game_state.phase,
        ))

        if result.round_ended:
            self._finish()
        else:
            self._announce_turn()
        return result

    def run_ai_turns(self, max_turns: int = 500) -> list[TurnResult]:
        """Play AI seats until a human must act, the round ends, or max_turns turns."""
        results = []
        self.start()
        while (
            not self.is_over
            and not self.current_player_needs_input()
            and len(results) < max_turns
        ):
            results.append(self.play_turn())
        return results

    def run(self, max_turns: int = 500) -> list[TurnResult]:
        """
        Play an all-AI round to completion, or until max_turns turns.

        Raises:
            ValueError: a human seat came up
        """
        results = []
        self.start()
        while not self.is_over and len(results) < max_turns:
            if self.current_player_needs_input():
                raise ValueError("run() needs every seat to have a strategy")
            results.append(self.play_turn())
        return results

    def finalize(self) -> GolfTranscript:
        self.transcript = self.recorder.finalize()
        return self.transcript

    # =========================================================================
    # Internals
    # =========================================================================

    def _announce_turn(self) -> None:
        game_state = self.session.game_state
        player = get_current_player(game_state)
        self.state = (
            LoopState.WAITING_HUMAN_ACTION
            if self.current_player_needs_input()
            else LoopState.RUNNING_AI
        )
        self.events.emit(GameEvent.TURN_STARTED, TurnStartedPayload(
            turn_number=game_state.turn_number,
            player_index=game_state.current_player_index,
            player_name=player.name,
            is_ai=game_state.current_player_index in self.strategies,
        ))

    def _finish(self) -> None:
        self.state = LoopState.GAME_OVER
        scores = self.scores()
        winner_index = scores.index(min(scores))
        turn_number = self.session.game_state.turn_number

        logger.info("Golf round over after turn %d, scores %s", turn_number, scores)
        self.events.emit(GameEvent.GAME_ENDED, GameEndedPayload(
            final_turn_number=turn_number,
            winner_index=winner_index,
            reason="round-complete",
        ))
