from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .errors import CellOccupied, IllegalTransition, UnknownPiece
from .piece import NUM_PIECES, Piece, canonical_pieces
from .types import Player, Point

logger = logging.getLogger(__name__)

BOARD_SIZE = 4

Line = tuple[Point, ...]

ROW_LINES: tuple[Line, ...] = tuple(
    tuple(Point(r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE)
)
COL_LINES: tuple[Line, ...] = tuple(
    tuple(Point(r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)
)
DIAGONAL_LINES: tuple[Line, ...] = (
    tuple(Point(i, i) for i in range(BOARD_SIZE)),
    tuple(Point(i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE)),
)
# Overlapping 2x2 blocks, row-major by top-left corner. Only lines in square mode.
SQUARE_LINES: tuple[Line, ...] = tuple(
    (Point(r, c), Point(r, c + 1), Point(r + 1, c), Point(r + 1, c + 1))
    for r in range(BOARD_SIZE - 1)
    for c in range(BOARD_SIZE - 1)
)
STANDARD_LINES: tuple[Line, ...] = ROW_LINES + COL_LINES + DIAGONAL_LINES

ALL_POINTS: tuple[Point, ...] = tuple(
    Point(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)
)


def lines_for(square_mode: bool) -> tuple[Line, ...]:
    """Lines in the order they are checked for a win."""
    return STANDARD_LINES + SQUARE_LINES if square_mode else STANDARD_LINES


class Board:
    """4x4 Quarto board. Each cell holds at most one piece."""

    def __init__(self) -> None:
        self._grid: dict[Point, Piece] = {}

    def put(self, point: Point, piece: Piece) -> None:
        assert self.is_on_grid(point), f"Point {point} is off the grid"
        if point in self._grid:
            raise CellOccupied(f"{point} is occupied")
        self._grid[point] = piece

    def clear(self, point: Point) -> Piece:
        """Remove and return the piece at `point`. KeyError if the cell is empty."""
        return self._grid.pop(point)

    def get(self, point: Point) -> Optional[Piece]:
        return self._grid.get(point)

    def is_empty(self, point: Point) -> bool:
        return point not in self._grid

    def is_on_grid(self, point: Point) -> bool:
        return 0 <= point.row < BOARD_SIZE and 0 <= point.col < BOARD_SIZE

    @property
    def occupied_count(self) -> int:
        return len(self._grid)

    def empty_spaces(self) -> list[Point]:
        """Unoccupied points in row-major order."""
        return [p for p in ALL_POINTS if p not in self._grid]

    def copy(self) -> Board:
        board = Board()
        board._grid = dict(self._grid)
        return board

    def line_wins(self, line: Line) -> bool:
        """True if every cell of `line` is filled and the pieces share an attribute."""
        shared = NUM_PIECES - 1
        for point in line:
            piece = self._grid.get(point)
            if piece is None:
                return False
            shared &= piece.properties
        return shared != 0

    def winning_line(self, square_mode: bool = False) -> Optional[Line]:
        for line in lines_for(square_mode):
            if self.line_wins(line):
                return line
        return None

    def check_for_win(self, square_mode: bool = False) -> bool:
        return self.winning_line(square_mode) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid


# ---------------------------------------------------------------------------
# Game status
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InitialMove:
    starting_player: Player


@dataclass(frozen=True)
class Move:
    next_player: Player
    next_piece: Piece


@dataclass(frozen=True)
class Won:
    winner: Player


@dataclass(frozen=True)
class Draw:
    last_player: Player


Status = Union[InitialMove, Move, Won, Draw]


@dataclass(frozen=True)
class Ply:
    """One committed transition. `point`/`piece` are None for the initial hand-off."""

    player: Player
    point: Optional[Point]
    piece: Optional[Piece]
    handed_off: Optional[Piece]


class QuartoGameState:
    """Full game state for Quarto: board, remaining pieces and turn status."""

    def __init__(
        self,
        starting_player: Player = Player.PLAYER_ONE,
        square_mode: bool = False,
    ) -> None:
        self.board = Board()
        self.square_mode = square_mode
        self.status: Status = InitialMove(starting_player)
        self.plies: list[Ply] = []
        self._remaining: list[Piece] = canonical_pieces()

    @property
    def remaining_pieces(self) -> list[Piece]:
        """Unplaced pieces not in hand, in canonical order."""
        return list(self._remaining)

    @property
    def round(self) -> int:
        return (NUM_PIECES - len(self._remaining)) // 2 + 1

    @property
    def running(self) -> bool:
        return isinstance(self.status, (InitialMove, Move))

    @property
    def is_initial_move(self) -> bool:
        return isinstance(self.status, InitialMove)

    @property
    def winner(self) -> Optional[Player]:
        if isinstance(self.status, Won):
            return self.status.winner
        return None

    @property
    def is_draw(self) -> bool:
        return isinstance(self.status, Draw)

    @property
    def player(self) -> Player:
        """The player to act, or the player who ended the game."""
        status = self.status
        if isinstance(status, InitialMove):
            return status.starting_player
        if isinstance(status, Move):
            return status.next_player
        if isinstance(status, Won):
            return status.winner
        return status.last_player

    @property
    def next_piece(self) -> Optional[Piece]:
        """The piece the current player must place, if any."""
        if isinstance(self.status, Move):
            return self.status.next_piece
        return None

    def initial_move(self, piece: Piece) -> None:
        """Hand the first piece to the opponent. Nothing is placed on the board."""
        status = self.status
        if not isinstance(status, InitialMove):
            raise IllegalTransition(f"Initial move not allowed in {status}")
        if piece not in self._remaining:
            raise UnknownPiece(f"{piece} is not a remaining piece")

        self._remaining.remove(piece)
        player = status.starting_player
        self.status = Move(next_player=player.other, next_piece=piece)
        self.plies.append(Ply(player, None, None, piece))
        logger.debug("%s hands %s to %s", player, piece, player.other)

    def do_move(self, point: Point, next_piece: Piece) -> None:
        """Place the forced piece at `point` and hand `next_piece` to the opponent.

        The placed piece always comes from the status, never from the arguments.
        On the 16th placement the game is a draw and `next_piece` is ignored.
        A rejected move leaves the state untouched.
        """
        status = self.status
        if not isinstance(status, Move):
            raise IllegalTransition(f"Move not allowed in {status}")
        if not self.board.is_empty(point):
            raise CellOccupied(f"{point} is occupied")
        last_piece = not self._remaining
        if not last_piece and next_piece not in self._remaining:
            raise UnknownPiece(f"{next_piece} is not a remaining piece")

        player = status.next_player
        self.board.put(point, status.next_piece)

        if last_piece:
            self.status = Draw(last_player=player)
            self.plies.append(Ply(player, point, status.next_piece, None))
            logger.debug("%s places %s at %s; board full, draw", player, status.next_piece, point)
            return

        self._remaining.remove(next_piece)
        self.plies.append(Ply(player, point, status.next_piece, next_piece))
        if self.board.check_for_win(self.square_mode):
            self.status = Won(winner=player)
            logger.debug("%s places %s at %s and wins", player, status.next_piece, point)
        else:
            self.status = Move(next_player=player.other, next_piece=next_piece)
            logger.debug(
                "%s places %s at %s, hands %s", player, status.next_piece, point, next_piece
            )

    def unmove(self, point: Point) -> None:
        """Undo the placement at `point`, which must be the latest one."""
        if isinstance(self.status, InitialMove):
            raise IllegalTransition("Nothing to undo before the initial move")
        if not self.plies or self.plies[-1].point != point:
            raise IllegalTransition(f"{point} is not the latest placement")

        ply = self.plies.pop()
        piece = self.board.clear(point)
        if ply.handed_off is not None:
            self._restore(ply.handed_off)
        self.status = Move(next_player=ply.player, next_piece=piece)

    def undo_move(self) -> Optional[Ply]:
        """Undo the last ply, including the initial hand-off. None if nothing to undo."""
        if not self.plies:
            return None
        ply = self.plies[-1]
        if ply.point is not None:
            self.unmove(ply.point)
            return ply
        self.plies.pop()
        assert ply.handed_off is not None
        self._restore(ply.handed_off)
        self.status = InitialMove(starting_player=ply.player)
        return ply

    def copy(self) -> QuartoGameState:
        game = QuartoGameState.__new__(QuartoGameState)
        game.board = self.board.copy()
        game.square_mode = self.square_mode
        game.status = self.status
        game.plies = list(self.plies)
        game._remaining = list(self._remaining)
        return game

    def _restore(self, piece: Piece) -> None:
        # Keep canonical order: remaining is always sorted by attribute vector.
        keys = [p.properties for p in self._remaining]
        self._remaining.insert(bisect.bisect_left(keys, piece.properties), piece)


def new_game(starting_player: Player = Player.PLAYER_ONE, square_mode: bool = False) -> QuartoGameState:
    return QuartoGameState(starting_player, square_mode=square_mode)
