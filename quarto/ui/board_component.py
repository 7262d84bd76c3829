"""SVG board and piece renderer for Gradio."""

from __future__ import annotations

from typing import Optional

from quarto.game.board import BOARD_SIZE, QuartoGameState
from quarto.game.piece import Piece, Property
from quarto.game.types import ArrayBase, Point

# Layout constants
CELL_SIZE = 90
MARGIN = 40
BOARD_PX = MARGIN * 2 + CELL_SIZE * BOARD_SIZE
TALL_RADIUS = 34
SHORT_RADIUS = 24
PIECE_PX = 2 * TALL_RADIUS + 8

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
LIGHT_PIECE = "#F5E6C8"
DARK_PIECE = "#5C3A21"
PIECE_STROKE = "#2B1B10"
WIN_COLOR = "#E74C3C"
LAST_MOVE_COLOR = "#3498DB"


def _cell_origin(point: Point) -> tuple[int, int]:
    """Top-left pixel of a cell."""
    return MARGIN + point.col * CELL_SIZE, MARGIN + point.row * CELL_SIZE


def piece_shape_svg(piece: Piece, cx: float, cy: float) -> str:
    """SVG elements for one piece centred on (cx, cy).

    Tall pieces are drawn larger, round pieces as circles, light pieces in a pale
    fill, and hollow pieces with a hole in the middle.
    """
    radius = TALL_RADIUS if piece.get(Property.TALL) else SHORT_RADIUS
    fill = LIGHT_PIECE if piece.get(Property.LIGHT) else DARK_PIECE
    parts: list[str] = []
    if piece.get(Property.ROUND):
        parts.append(
            f'<circle cx="{cx}" cy="{cy}" r="{radius}" '
            f'fill="{fill}" stroke="{PIECE_STROKE}" stroke-width="2"/>'
        )
    else:
        parts.append(
            f'<rect x="{cx - radius}" y="{cy - radius}" width="{2 * radius}" '
            f'height="{2 * radius}" rx="4" fill="{fill}" '
            f'stroke="{PIECE_STROKE}" stroke-width="2"/>'
        )
    if not piece.get(Property.FULL):
        parts.append(
            f'<circle cx="{cx}" cy="{cy}" r="{radius // 3}" '
            f'fill="{BG_COLOR}" stroke="{PIECE_STROKE}" stroke-width="1.5" class="hole"/>'
        )
    return "\n".join(parts)


def render_piece_svg(piece: Optional[Piece]) -> str:
    """A single piece in its own small SVG (empty frame for None)."""
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{PIECE_PX}" height="{PIECE_PX}" '
        f'viewBox="0 0 {PIECE_PX} {PIECE_PX}" class="quarto-piece">'
    ]
    if piece is not None:
        parts.append(piece_shape_svg(piece, PIECE_PX / 2, PIECE_PX / 2))
        parts.append(f"<title>{piece.label}</title>")
    parts.append("</svg>")
    return "\n".join(parts)


def render_board_svg(
    game_state: QuartoGameState,
    array_base: ArrayBase = ArrayBase.ONE,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{BOARD_PX}" height="{BOARD_PX}" '
        f'viewBox="0 0 {BOARD_PX} {BOARD_PX}" '
        f'id="quarto-board">'
    )
    parts.append(
        f'<rect width="{BOARD_PX}" height="{BOARD_PX}" fill="{BG_COLOR}" rx="4"/>'
    )

    # Grid lines
    for i in range(BOARD_SIZE + 1):
        offset = MARGIN + i * CELL_SIZE
        end = MARGIN + BOARD_SIZE * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{end}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{end}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )

    # Row and column labels
    for i in range(BOARD_SIZE):
        centre = MARGIN + i * CELL_SIZE + CELL_SIZE // 2
        label = array_base.based(i)
        parts.append(
            f'<text x="{centre}" y="{MARGIN - 12}" text-anchor="middle" '
            f'font-size="14" font-family="monospace" fill="{LINE_COLOR}">{label}</text>'
        )
        parts.append(
            f'<text x="{MARGIN - 18}" y="{centre + 5}" text-anchor="middle" '
            f'font-size="14" font-family="monospace" fill="{LINE_COLOR}">{label}</text>'
        )

    # A line completed by the 16th placement is still a draw.
    winning = ()
    if game_state.winner is not None:
        winning = game_state.board.winning_line(game_state.square_mode) or ()
    last_point = None
    if game_state.plies:
        last_point = game_state.plies[-1].point

    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            pt = Point(r, c)
            x, y = _cell_origin(pt)
            if pt in winning:
                parts.append(
                    f'<rect x="{x + 3}" y="{y + 3}" width="{CELL_SIZE - 6}" '
                    f'height="{CELL_SIZE - 6}" fill="none" stroke="{WIN_COLOR}" '
                    f'stroke-width="4" class="win-cell"/>'
                )
            elif highlight_last and pt == last_point:
                parts.append(
                    f'<rect x="{x + 3}" y="{y + 3}" width="{CELL_SIZE - 6}" '
                    f'height="{CELL_SIZE - 6}" fill="none" stroke="{LAST_MOVE_COLOR}" '
                    f'stroke-width="3" class="last-move"/>'
                )
            piece = game_state.board.get(pt)
            if piece is None:
                continue
            parts.append(piece_shape_svg(piece, x + CELL_SIZE / 2, y + CELL_SIZE / 2))

    if game_over_message:
        parts.append(
            f'<rect x="0" y="{BOARD_PX / 2 - 30}" width="{BOARD_PX}" height="60" '
            f'fill="rgba(0, 0, 0, 0.6)"/>'
        )
        parts.append(
            f'<text x="{BOARD_PX / 2}" y="{BOARD_PX / 2 + 10}" text-anchor="middle" '
            f'font-size="28" font-family="sans-serif" fill="#FFFFFF">{game_over_message}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)
