import pytest

from quarto.game.board import ALL_POINTS, QuartoGameState, new_game
from quarto.game.piece import Piece
from quarto.game.types import Player, Point

# Full boards listed row-major as attribute vectors.
# No row, column or diagonal shares an attribute.
NO_WIN_GRID = [1, 6, 7, 9, 10, 4, 13, 14, 15, 0, 8, 11, 2, 5, 12, 3]
# Only the main diagonal (10, 2, 3, 15) shares an attribute; (3, 3) completes it.
LAST_CELL_WIN_GRID = [10, 0, 1, 8, 7, 2, 5, 14, 11, 13, 3, 6, 4, 9, 12, 15]


def fill_row_major(game: QuartoGameState, grid: list[int], count: int) -> QuartoGameState:
    """Hand off grid[0], then place grid[k] on the k-th cell for k < count.

    Each placement hands off the piece for the next cell.
    """
    game.initial_move(Piece(grid[0]))
    for k in range(count):
        if k + 1 < len(grid):
            hand_off = Piece(grid[k + 1])
        else:
            hand_off = game.next_piece
        game.do_move(ALL_POINTS[k], hand_off)
    return game


def play_sequence(
    game: QuartoGameState,
    first_piece: int,
    moves: list[tuple[Point, int]],
) -> QuartoGameState:
    """Initial hand-off, then (placement, hand-off) pairs."""
    game.initial_move(Piece(first_piece))
    for point, hand_off in moves:
        game.do_move(point, Piece(hand_off))
    return game


@pytest.fixture
def tall_row_game():
    """Row 0 holds three tall pieces, (0, 3) is empty and Player 1 must place tall 7."""
    return play_sequence(
        new_game(Player.PLAYER_ONE),
        1,
        [(Point(0, 0), 3), (Point(0, 1), 5), (Point(0, 2), 7)],
    )


@pytest.fixture
def blocking_game():
    """Row 0 holds three tall pieces, Player 1 must place the attribute-free piece 0."""
    return play_sequence(
        new_game(Player.PLAYER_ONE),
        1,
        [(Point(0, 0), 3), (Point(0, 1), 5), (Point(0, 2), 0)],
    )


@pytest.fixture
def two_wins_game():
    """Tall pieces fill (0,1)-(0,3) and (3,0)-(3,2); Player 2 must place tall 13."""
    return play_sequence(
        new_game(Player.PLAYER_ONE),
        1,
        [
            (Point(0, 1), 3),
            (Point(0, 2), 5),
            (Point(0, 3), 7),
            (Point(3, 0), 9),
            (Point(3, 1), 11),
            (Point(3, 2), 13),
        ],
    )
