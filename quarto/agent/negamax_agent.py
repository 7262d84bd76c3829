"""Negamax agent with alpha-beta pruning and a transposition table.

A ply is one placement plus the hand-off that follows it. Positions are scored
from the point of view of the player about to move: a lost game scores
-(WIN_SCORE + remaining depth) so that faster wins are preferred, draws and
search leaves score 0.
"""

from __future__ import annotations

import math
from typing import Optional

from quarto.agent.base import Agent, Decision
from quarto.game.board import QuartoGameState, Won
from quarto.game.rng import RandomSource

WIN_SCORE = 1_000

INF = math.inf


# ---------------------------------------------------------------------------
# Move generation
# ---------------------------------------------------------------------------

def generate_decisions(game_state: QuartoGameState) -> list[Decision]:
    """Every legal (placement, hand-off) pair, placements in row-major order."""
    remaining = game_state.remaining_pieces
    if game_state.is_initial_move:
        return [Decision(None, piece) for piece in remaining]
    if not game_state.running:
        return []
    # The 16th placement hands nothing off.
    hand_offs = remaining or [game_state.next_piece]
    return [
        Decision(point, piece)
        for point in game_state.board.empty_spaces()
        for piece in hand_offs
    ]


def _apply(game_state: QuartoGameState, decision: Decision) -> None:
    if decision.point is None:
        game_state.initial_move(decision.piece)
    else:
        game_state.do_move(decision.point, decision.piece)


def _terminal_score(game_state: QuartoGameState, depth: int) -> float:
    # A finished game was finished by the previous mover.
    if isinstance(game_state.status, Won):
        return -(WIN_SCORE + depth)
    return 0


# ---------------------------------------------------------------------------
# Negamax with alpha-beta + transposition table
# ---------------------------------------------------------------------------

def negamax(
    game_state: QuartoGameState,
    depth: int,
    alpha: float,
    beta: float,
    tt: Optional[dict] = None,
) -> float:
    """Best score for the player to move, searching `depth` plies."""
    if not game_state.running:
        return _terminal_score(game_state, depth)
    if depth == 0:
        return 0

    if tt is not None:
        key = _tt_key(game_state)
        entry = tt.get(key)
        if entry is not None:
            tt_depth, tt_flag, tt_score = entry
            if tt_depth >= depth:
                if tt_flag == 0:  # exact
                    return tt_score
                elif tt_flag == 1 and tt_score >= beta:  # lower bound
                    return tt_score
                elif tt_flag == -1 and tt_score <= alpha:  # upper bound
                    return tt_score

    orig_alpha = alpha
    best = -INF
    for decision in generate_decisions(game_state):
        _apply(game_state, decision)
        score = -negamax(game_state, depth - 1, -beta, -alpha, tt)
        game_state.undo_move()

        best = max(best, score)
        alpha = max(alpha, score)
        if alpha >= beta:
            break

    if tt is not None:
        if best <= orig_alpha:
            flag = -1  # upper bound
        elif best >= beta:
            flag = 1   # lower bound
        else:
            flag = 0   # exact
        tt[key] = (depth, flag, best)

    return best


def _tt_key(game_state: QuartoGameState) -> tuple:
    """Board contents, remaining set, forced piece and rule variant."""
    return (
        frozenset(game_state.board._grid.items()),
        frozenset(game_state.remaining_pieces),
        game_state.next_piece,
        game_state.square_mode,
    )


# ---------------------------------------------------------------------------
# NegamaxAgent
# ---------------------------------------------------------------------------

class NegamaxAgent(Agent):
    """Full-width negamax search to a fixed depth."""

    def __init__(self, depth: int = 2, seed: int = 0) -> None:
        assert depth >= 1, "depth must be at least one ply"
        self.depth = depth
        self.rng = RandomSource(seed)

    @property
    def name(self) -> str:
        return f"NegamaxAgent(d={self.depth})"

    def select_move(self, game_state: QuartoGameState) -> Decision:
        if game_state.is_initial_move:
            # Every first hand-off is equivalent.
            return Decision(None, self.rng.choose(game_state.remaining_pieces))

        game = game_state.copy()
        tt: dict = {}
        best_score = -INF
        best: Optional[Decision] = None

        for decision in generate_decisions(game):
            _apply(game, decision)
            score = -negamax(game, self.depth - 1, -INF, -best_score, tt)
            game.undo_move()

            if score > best_score:
                best_score = score
                best = decision

        assert best is not None, "No candidates found"
        return best
