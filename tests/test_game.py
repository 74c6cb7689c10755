import pytest

from solong.game import (
    Direction,
    Game,
    GameOver,
    Outcome,
    new_game,
    window_size,
)
from solong.maps import MapError

SIMPLE = "1111111\n1P0C0E1\n1111111\n"
EXIT_FIRST = "1111111\n1PE0C01\n1111111\n"


def _write(tmp_path, text, name="map.ber"):
    path = tmp_path / name
    path.write_text(text)
    return path


def _manual(rows, player, tile=32, window=None, collectibles=1):
    grid = [list(row) for row in rows]
    width = window[0] if window else len(grid[0]) * tile
    height = window[1] if window else len(grid) * tile
    return Game(
        rows=grid,
        player_x=player[0],
        player_y=player[1],
        collectibles=collectibles,
        tile_size=tile,
        window_width=width,
        window_height=height,
    )


def test_window_size_is_capped():
    assert window_size(100, 100, 64) == (1200, 900)


def test_window_size_small_map():
    assert window_size(7, 3, 32) == (7 * 32, 3 * 32)


def test_new_game_initial_state(tmp_path):
    game = new_game(_write(tmp_path, SIMPLE), 32)
    assert (game.player_x, game.player_y) == (1, 1)
    assert game.collectibles == 1
    assert game.moves == 0
    assert game.direction is Direction.FRONT
    assert (game.camera_x, game.camera_y) == (0, 0)
    assert (game.window_width, game.window_height) == (7 * 32, 3 * 32)
    assert ["".join(r) for r in game.rows] == SIMPLE.splitlines()


def test_new_game_rejects_extension(tmp_path):
    with pytest.raises(MapError, match="Invalid file extension"):
        new_game(_write(tmp_path, SIMPLE, "map.txt"), 32)


def test_new_game_without_player(tmp_path):
    with pytest.raises(MapError, match="No player found"):
        new_game(_write(tmp_path, "111\n1C1\n111\n"), 32)


def test_move_right(tmp_path):
    game = new_game(_write(tmp_path, SIMPLE), 32)
    assert game.handle_key("d") is Outcome.MOVED
    assert (game.player_x, game.player_y) == (2, 1)
    assert game.direction is Direction.RIGHT
    assert game.moves == 1
    assert game.rows[1][1] == "0"
    assert game.rows[1][2] == "P"


def test_move_into_wall_is_blocked(tmp_path):
    game = new_game(_write(tmp_path, SIMPLE), 32)
    assert game.handle_key("up") is Outcome.BLOCKED
    assert game.direction is Direction.BACK
    assert game.moves == 0
    assert (game.player_x, game.player_y) == (1, 1)


def test_collect_and_win(tmp_path):
    game = new_game(_write(tmp_path, SIMPLE), 32)
    game.handle_key("d")
    game.handle_key("d")
    assert game.collectibles == 0
    game.handle_key("d")
    with pytest.raises(GameOver) as info:
        game.handle_key("right")
    assert info.value.outcome is Outcome.WON


def test_exit_is_restored_after_leaving(tmp_path):
    game = new_game(_write(tmp_path, EXIT_FIRST), 32)
    assert game.handle_key("d") is Outcome.MOVED
    assert game.on_exit is True
    assert game.rows[1][2] == "P"
    game.handle_key("d")
    assert game.rows[1][2] == "E"
    assert game.on_exit is False
    assert game.moves == 2


def test_enemy_kills(tmp_path):
    game = _manual(["11111", "1PX01", "1C0E1", "11111"], (1, 1))
    with pytest.raises(GameOver) as info:
        game.handle_key("D")
    assert info.value.outcome is Outcome.DIED


def test_escape_quits(tmp_path):
    game = new_game(_write(tmp_path, SIMPLE), 32)
    with pytest.raises(GameOver) as info:
        game.handle_key("escape")
    assert info.value.outcome is Outcome.QUIT
    assert info.value.message == "Exiting game"


def test_unknown_key_ignored(tmp_path):
    game = new_game(_write(tmp_path, SIMPLE), 32)
    assert game.handle_key("q") is Outcome.IGNORED
    assert game.moves == 0


def test_status_lines(tmp_path):
    game = new_game(_write(tmp_path, SIMPLE), 32)
    game.handle_key("d")
    assert game.status_lines() == ["Collectibles remaining: 1", "Moves: 1"]


def _wide_game(player_x):
    rows = ["1" * 30] + ["1" + "0" * 28 + "1"] * 8 + ["1" * 30]
    rows[1] = rows[1][:player_x] + "P" + rows[1][player_x + 1:]
    return _manual(rows, (player_x, 1), tile=10, window=(100, 100))


def test_camera_clamped_at_left():
    game = _wide_game(1)
    game.update_camera()
    assert game.camera_x == 0
    assert game.camera_y == 0


def test_camera_clamped_at_right():
    game = _wide_game(28)
    game.update_camera()
    assert game.camera_x == game.width - 100 // 10


def test_camera_follows_player():
    game = _wide_game(20)
    game.update_camera()
    assert game.camera_x == 15