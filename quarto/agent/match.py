"""Play complete games between two agents."""

from __future__ import annotations

from typing import Mapping

from quarto.game.board import QuartoGameState, new_game
from quarto.game.types import Player

from .base import Agent, Decision, commit


def play_game(
    agents: Mapping[Player, Agent],
    starting_player: Player = Player.PLAYER_ONE,
    square_mode: bool = False,
) -> tuple[QuartoGameState, list[Decision]]:
    """Play one game to the end. Returns the finished game and every decision made."""
    game = new_game(starting_player, square_mode=square_mode)
    decisions: list[Decision] = []
    while game.running:
        decision = agents[game.player].select_move(game)
        commit(game, decision)
        decisions.append(decision)
    return game, decisions
