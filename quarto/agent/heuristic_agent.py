"""One-ply lookahead agent.

Strategy: place the forced piece on a winning cell if there is one. Otherwise
look at every non-winning placement and, for each remaining piece, every
reply the opponent could make with it. Placements that allow any winning
reply are dropped, and any piece that allowed a winning reply anywhere is
never handed off. The remaining choices are made uniformly at random.

Known weakness: a piece is marked unsafe for all placements as soon as it is
unsafe for one of them, so some safe hand-offs are rejected.
"""

from __future__ import annotations

import logging
import time

from quarto.game.board import Board, InitialMove, Move, QuartoGameState
from quarto.game.piece import Piece
from quarto.game.rng import RandomSource
from quarto.game.types import Player, Point

from .base import Agent, Decision

logger = logging.getLogger(__name__)


def wins_with(board: Board, point: Point, piece: Piece, square_mode: bool) -> bool:
    """Would placing `piece` at `point` complete a line? The board is left unchanged."""
    board.put(point, piece)
    try:
        return board.check_for_win(square_mode)
    finally:
        board.clear(point)


class HeuristicAgent(Agent):
    def __init__(self, player: Player, seed: int) -> None:
        self.player = player
        self.rng = RandomSource(seed)

    @classmethod
    def with_seed(cls, player: Player, seed: int) -> HeuristicAgent:
        return cls(player, seed)

    @property
    def name(self) -> str:
        return "HeuristicAgent"

    def select_move(self, game_state: QuartoGameState) -> Decision:
        status = game_state.status
        assert game_state.player is self.player, f"It is not {self.player}'s turn"

        if isinstance(status, InitialMove):
            logger.debug("Initial move: any piece will do")
            return Decision(None, self.rng.choose(game_state.remaining_pieces))

        assert isinstance(status, Move), "Game should be over"
        started = time.perf_counter()
        our_piece = status.next_piece
        square_mode = game_state.square_mode
        remaining = game_state.remaining_pieces
        empty_spaces = game_state.board.empty_spaces()
        logger.debug("%d empty spaces for %s", len(empty_spaces), our_piece)

        candidates: list[tuple[Board, Point]] = []
        for point in empty_spaces:
            board = game_state.board.copy()
            board.put(point, our_piece)
            if board.check_for_win(square_mode):
                # Winning now beats any lookahead; the hand-off no longer matters.
                hand_off = remaining[0] if remaining else our_piece
                logger.debug("Winning placement at %s", point)
                return Decision(point, hand_off)
            candidates.append((board, point))

        removals: set[int] = set()
        unsafe: set[Piece] = set()
        for idx, (board, _) in enumerate(candidates):
            replies = board.empty_spaces()
            for piece in remaining:
                for reply in replies:
                    if wins_with(board, reply, piece, square_mode):
                        logger.debug(
                            "%s lets the opponent win at %s after we play %s",
                            piece, reply, candidates[idx][1],
                        )
                        removals.add(idx)
                        unsafe.add(piece)
                        break

        safe_pieces = [p for p in remaining if p not in unsafe]
        logger.debug(
            "%d candidates, %d remaining pieces, %d to avoid (%.0f us)",
            len(candidates), len(remaining), len(unsafe),
            (time.perf_counter() - started) * 1e6,
        )

        if not safe_pieces:
            logger.debug("Loss is imminent, handing off any piece")
            if not remaining:
                return Decision(candidates[0][1], our_piece)
            return Decision(candidates[0][1], self.rng.choose(remaining))

        piece = self.rng.choose(safe_pieces)
        survivors = [pt for idx, (_, pt) in enumerate(candidates) if idx not in removals]
        if not survivors:
            # The safe pick above is still drawn, then replaced.
            logger.debug("Every placement loses next move")
            piece = self.rng.choose(remaining)
            return Decision(self.rng.choose(empty_spaces), piece)

        return Decision(self.rng.choose(survivors), piece)
