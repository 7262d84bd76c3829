from __future__ import annotations

import abc
from typing import NamedTuple, Optional

from quarto.game.board import QuartoGameState
from quarto.game.errors import QuartoError
from quarto.game.piece import Piece
from quarto.game.types import Point


class Decision(NamedTuple):
    point: Optional[Point]  # None for the initial hand-off
    piece: Piece  # piece handed to the opponent


class Agent(abc.ABC):
    @abc.abstractmethod
    def select_move(self, game_state: QuartoGameState) -> Decision:
        """Return where to place the forced piece and which piece to hand off."""

    def play(self, game_state: QuartoGameState) -> QuartoGameState:
        """Commit exactly one transition chosen by `select_move` and return the game."""
        assert game_state.running, "Game is already over"
        commit(game_state, self.select_move(game_state))
        return game_state

    @property
    def name(self) -> str:
        return self.__class__.__name__


def commit(game_state: QuartoGameState, decision: Decision) -> None:
    """Apply an agent's decision. A rejected move is a bug in the agent."""
    try:
        if decision.point is None:
            game_state.initial_move(decision.piece)
        else:
            game_state.do_move(decision.point, decision.piece)
    except QuartoError as exc:
        raise AssertionError(f"Agents should only do legal moves: {decision}") from exc
