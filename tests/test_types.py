from quarto.game.types import ArrayBase, Player, Point


def test_player_other():
    assert Player.PLAYER_ONE.other is Player.PLAYER_TWO
    assert Player.PLAYER_TWO.other is Player.PLAYER_ONE


def test_player_str():
    assert str(Player.PLAYER_ONE) == "Player 1"
    assert str(Player.PLAYER_TWO) == "Player 2"


def test_point_is_namedtuple():
    p = Point(3, 1)
    assert p.row == 3
    assert p.col == 1
    assert p == Point(3, 1)


def test_array_base():
    assert ArrayBase.ZERO.based(0) == 0
    assert ArrayBase.ONE.based(0) == 1
    assert ArrayBase.ONE.unbased(4) == 3
    for base in ArrayBase:
        assert base.unbased(base.based(2)) == 2
