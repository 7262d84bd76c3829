from __future__ import annotations

from quarto.game.board import QuartoGameState
from quarto.game.rng import RandomSource

from .base import Agent, Decision


class RandomAgent(Agent):
    def __init__(self, seed: int = 0) -> None:
        self.rng = RandomSource(seed)

    def select_move(self, game_state: QuartoGameState) -> Decision:
        assert game_state.running, "No legal moves available"
        remaining = game_state.remaining_pieces
        if game_state.is_initial_move:
            return Decision(None, self.rng.choose(remaining))
        point = self.rng.choose(game_state.board.empty_spaces())
        # The last placement hands nothing off; any piece is accepted.
        piece = self.rng.choose(remaining) if remaining else game_state.next_piece
        return Decision(point, piece)
