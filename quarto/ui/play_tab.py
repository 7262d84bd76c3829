"""Play tab: Human vs AI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from quarto.agent.base import Agent
from quarto.agent.heuristic_agent import HeuristicAgent
from quarto.agent.negamax_agent import NegamaxAgent
from quarto.agent.random_agent import RandomAgent
from quarto.game.board import QuartoGameState, new_game
from quarto.game.errors import QuartoError
from quarto.game.piece import Piece
from quarto.game.types import ArrayBase, Player, Point
from quarto.ui.board_component import render_board_svg, render_piece_svg

AGENT_CHOICES = ["HeuristicAgent", "NegamaxAgent (d=2)", "RandomAgent"]


def _make_agent(name: str, player: Player, seed: int) -> Agent:
    if name == "RandomAgent":
        return RandomAgent(seed=seed)
    if name.startswith("NegamaxAgent"):
        depth = int(name.split("=")[1].rstrip(")"))
        return NegamaxAgent(depth=depth, seed=seed)
    return HeuristicAgent.with_seed(player, seed)


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: QuartoGameState = field(default_factory=new_game)
    human_player: Player = field(default=Player.PLAYER_ONE)
    agent: Agent = field(
        default_factory=lambda: HeuristicAgent.with_seed(Player.PLAYER_TWO, 0)
    )
    array_base: ArrayBase = field(default=ArrayBase.ONE)

    @property
    def game_over_banner(self) -> str:
        g = self.game
        if g.running:
            return ""
        if g.winner is not None:
            return "You win!" if g.winner == self.human_player else "AI wins!"
        return "Draw!"

    @property
    def status_text(self) -> str:
        g = self.game
        if not g.running:
            if g.winner is not None:
                who = "You win!" if g.winner == self.human_player else "AI wins!"
                return f"Game over: {who} ({g.winner} completed a line)"
            return "Game over: Draw!"
        if g.player != self.human_player:
            return f"AI is thinking... ({g.player})"
        if g.is_initial_move:
            return f"Round {g.round}: your move ({g.player}). Pick a piece for the AI."
        return f"Round {g.round}: your move ({g.player}). Place your piece and pick one for the AI."

    def cell_label(self, point: Point) -> str:
        return f"{self.array_base.based(point.row)},{self.array_base.based(point.col)}"

    def piece_label(self, index: int, piece: Piece) -> str:
        return f"{self.array_base.based(index)}: {piece.label}"

    @property
    def cell_choices(self) -> list[str]:
        if self.game.is_initial_move or not self.game.running:
            return []
        return [self.cell_label(p) for p in self.game.board.empty_spaces()]

    @property
    def piece_choices(self) -> list[str]:
        if not self.game.running:
            return []
        return [self.piece_label(i, p) for i, p in enumerate(self.game.remaining_pieces)]

    def parse_cell(self, label: Optional[str]) -> Optional[Point]:
        if not label:
            return None
        row, col = (self.array_base.unbased(int(x)) for x in label.split(","))
        return Point(row, col)

    def parse_piece(self, label: Optional[str]) -> Optional[Piece]:
        if not label:
            return None
        index = self.array_base.unbased(int(label.split(":")[0]))
        remaining = self.game.remaining_pieces
        if not 0 <= index < len(remaining):
            return None
        return remaining[index]


def _outputs(session: GameSession, message: Optional[str] = None):
    game = session.game
    return (
        render_board_svg(game, session.array_base, game_over_message=session.game_over_banner),
        render_piece_svg(game.next_piece),
        message if message is not None else session.status_text,
        gr.update(choices=session.cell_choices, value=None),
        gr.update(choices=session.piece_choices, value=None),
        session,
    )


def _ai_turn(session: GameSession) -> None:
    if session.game.running and session.game.player != session.human_player:
        session.agent.play(session.game)


def _new_game(
    first_choice: str,
    agent_choice: str,
    square_mode: bool,
    base_choice: str,
    seed: float,
    session: GameSession,
):
    """Start a new game. first_choice is 'You' or 'AI'."""
    human = Player.PLAYER_ONE
    starting = human if first_choice == "You" else human.other
    session.game = new_game(starting, square_mode=square_mode)
    session.human_player = human
    session.agent = _make_agent(agent_choice, human.other, int(seed or 0))
    session.array_base = ArrayBase.ZERO if base_choice == "0" else ArrayBase.ONE
    _ai_turn(session)
    return _outputs(session)


def _apply_human_move(cell: Optional[str], piece_text: Optional[str], session: GameSession):
    """Process a human move, then let the AI respond."""
    game = session.game
    if not game.running:
        return _outputs(session)
    if game.player != session.human_player:
        return _outputs(session, "Wait, it's the AI's turn.")

    piece = session.parse_piece(piece_text)
    point = session.parse_cell(cell)
    try:
        if game.is_initial_move:
            if piece is None:
                return _outputs(session, "Pick a piece to hand to the AI.")
            game.initial_move(piece)
        else:
            if point is None:
                return _outputs(session, "Pick a cell for your piece.")
            if piece is None and game.remaining_pieces:
                return _outputs(session, "Pick a piece to hand to the AI.")
            game.do_move(point, piece if piece is not None else game.next_piece)
    except QuartoError as exc:
        return _outputs(session, f"Illegal move: {exc}")

    _ai_turn(session)
    return _outputs(session)


def _undo_move(session: GameSession):
    """Undo back to the human's previous turn (AI ply + human ply)."""
    game = session.game
    if not game.plies:
        return _outputs(session, "Nothing to undo.")
    if game.plies[-1].player != session.human_player:
        game.undo_move()  # undo AI
    if game.plies:
        game.undo_move()  # undo human
    # The AI may have opened the game.
    _ai_turn(session)
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())
    initial = GameSession()

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(initial.game, initial.array_base),
                label="Board",
            )
        with gr.Column(scale=2):
            status_text = gr.Textbox(
                value=initial.status_text,
                label="Status",
                interactive=False,
                lines=2,
            )
            gr.Markdown("### Piece to place")
            forced_html = gr.HTML(value=render_piece_svg(None))

            gr.Markdown("### Your Move")
            cell_choice = gr.Dropdown(choices=initial.cell_choices, label="Cell (row,col)")
            piece_choice = gr.Dropdown(choices=initial.piece_choices, label="Piece for the AI")
            submit_btn = gr.Button("Submit Move", variant="primary")
            undo_btn = gr.Button("Undo")

            gr.Markdown("### New Game")
            first_choice = gr.Radio(choices=["You", "AI"], value="You", label="First move")
            agent_choice = gr.Dropdown(
                choices=AGENT_CHOICES,
                value=AGENT_CHOICES[0],
                label="Opponent",
            )
            square_mode = gr.Checkbox(value=False, label="2x2 squares also win")
            base_choice = gr.Radio(choices=["0", "1"], value="1", label="Numbering starts at")
            seed = gr.Number(value=0, precision=0, label="AI seed")
            new_game_btn = gr.Button("New Game")

    outputs = [board_html, forced_html, status_text, cell_choice, piece_choice, session_state]

    submit_btn.click(
        fn=_apply_human_move,
        inputs=[cell_choice, piece_choice, session_state],
        outputs=outputs,
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=outputs,
    )

    new_game_btn.click(
        fn=_new_game,
        inputs=[first_choice, agent_choice, square_mode, base_choice, seed, session_state],
        outputs=outputs,
    )
