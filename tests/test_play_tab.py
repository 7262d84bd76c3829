import pytest

from quarto.agent.heuristic_agent import HeuristicAgent
from quarto.agent.negamax_agent import NegamaxAgent
from quarto.agent.random_agent import RandomAgent
from quarto.game.board import Draw, Move, Won
from quarto.game.piece import Piece
from quarto.game.types import ArrayBase, Player, Point
from quarto.ui.play_tab import (
    GameSession,
    _apply_human_move,
    _make_agent,
    _new_game,
    _undo_move,
)


def _start(first="You", agent="HeuristicAgent", square=False, base="1", seed=0):
    session = GameSession()
    result = _new_game(first, agent, square, base, seed, session)
    return session, result


def test_make_agent():
    assert isinstance(_make_agent("RandomAgent", Player.PLAYER_TWO, 1), RandomAgent)
    heuristic = _make_agent("HeuristicAgent", Player.PLAYER_TWO, 1)
    assert isinstance(heuristic, HeuristicAgent)
    assert heuristic.player is Player.PLAYER_TWO
    negamax = _make_agent("NegamaxAgent (d=2)", Player.PLAYER_TWO, 1)
    assert isinstance(negamax, NegamaxAgent)
    assert negamax.depth == 2


def test_new_game_human_first():
    session, result = _start()
    assert session.human_player is Player.PLAYER_ONE
    assert session.game.is_initial_move
    assert session.cell_choices == []
    assert len(session.piece_choices) == 16
    assert "Pick a piece" in result[2]
    assert result[-1] is session


def test_new_game_ai_first():
    session, _ = _start(first="AI")
    assert len(session.game.plies) == 1
    assert session.game.plies[0].player is Player.PLAYER_TWO
    assert isinstance(session.game.status, Move)
    assert session.game.player is Player.PLAYER_ONE
    assert len(session.cell_choices) == 16


def test_new_game_options():
    session, _ = _start(square=True, base="0", seed=7)
    assert session.game.square_mode
    assert session.array_base is ArrayBase.ZERO
    assert session.piece_choices[0] == "0: sqhd"


def test_labels_round_trip():
    session, _ = _start(first="AI")
    for base in ArrayBase:
        session.array_base = base
        label = session.cell_label(Point(2, 3))
        assert session.parse_cell(label) == Point(2, 3)
        piece_label = session.piece_choices[0]
        assert session.parse_piece(piece_label) == session.game.remaining_pieces[0]
    assert session.parse_cell(None) is None
    assert session.parse_piece("") is None
    assert session.parse_piece("99: TRFL") is None


def test_human_hand_off_then_ai_places():
    session, _ = _start()
    _apply_human_move(None, "1: sqhd", session)
    game = session.game
    assert game.board.occupied_count == 1
    assert game.plies[0].handed_off == Piece(0)
    assert game.plies[1].piece == Piece(0)
    assert game.player is Player.PLAYER_ONE
    assert game.next_piece is not None


def test_hand_off_required():
    session, _ = _start()
    result = _apply_human_move(None, None, session)
    assert "Pick a piece" in result[2]
    assert session.game.is_initial_move


def test_cell_required():
    session, _ = _start(first="AI")
    result = _apply_human_move(None, session.piece_choices[0], session)
    assert "Pick a cell" in result[2]
    assert session.game.board.occupied_count == 0


def test_illegal_move_reported():
    session, _ = _start()
    _apply_human_move(None, "1: sqhd", session)
    taken = session.cell_label(session.game.plies[-1].point)
    plies = len(session.game.plies)
    result = _apply_human_move(taken, session.piece_choices[0], session)
    assert result[2].startswith("Illegal move:")
    assert len(session.game.plies) == plies


def test_human_move_then_ai_reply():
    session, _ = _start(first="AI", agent="RandomAgent")
    cell = session.cell_choices[0]
    _apply_human_move(cell, session.piece_choices[0], session)
    # Human placement plus AI reply.
    assert session.game.board.occupied_count == 2 or not session.game.running


def test_undo_returns_to_human_turn():
    session, _ = _start(agent="RandomAgent")
    _apply_human_move(None, "1: sqhd", session)
    assert len(session.game.plies) == 2
    _undo_move(session)
    assert session.game.plies == []
    assert session.game.is_initial_move
    assert len(session.game.remaining_pieces) == 16


def test_undo_with_nothing_to_undo():
    session, _ = _start()
    result = _undo_move(session)
    assert result[2] == "Nothing to undo."


def test_undo_replays_ai_opening():
    session, _ = _start(first="AI")
    _undo_move(session)
    assert len(session.game.plies) == 1
    assert session.game.player is Player.PLAYER_ONE


@pytest.mark.parametrize(
    "status, banner",
    [
        (Won(winner=Player.PLAYER_ONE), "You win!"),
        (Won(winner=Player.PLAYER_TWO), "AI wins!"),
        (Draw(last_player=Player.PLAYER_TWO), "Draw!"),
    ],
)
def test_game_over_banner(status, banner):
    session = GameSession()
    session.game.status = status
    assert session.game_over_banner == banner
    assert session.status_text.startswith("Game over:")
    assert session.cell_choices == []
    assert session.piece_choices == []


def test_game_over_banner_empty_when_playing():
    session = GameSession()
    assert session.game_over_banner == ""


def test_moves_ignored_after_game_over():
    session = GameSession()
    session.game.status = Won(winner=Player.PLAYER_TWO)
    result = _apply_human_move("1,1", "1: sqhd", session)
    assert result[2].startswith("Game over:")
    assert session.game.board.occupied_count == 0
