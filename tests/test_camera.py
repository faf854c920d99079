import pytest

from punchy.camera import camera_move_speed
from punchy.consts import CAMERA_SPEED


def test_no_players_no_move():
    assert camera_move_speed([], 0.0, 150.0) is None


def test_player_inside_boundary_no_move():
    assert camera_move_speed([100.0], 0.0, 150.0) is None


def test_player_at_boundary_no_move():
    assert camera_move_speed([150.0], 0.0, 150.0) is None


def test_player_past_boundary_moves():
    assert camera_move_speed([200.0], 0.0, 150.0) == pytest.approx(50.0 * CAMERA_SPEED)


def test_rightmost_player_decides():
    many = camera_move_speed([10.0, 300.0, 120.0], 50.0, 150.0)
    single = camera_move_speed([300.0], 50.0, 150.0)
    assert many == single


def test_speed_grows_with_distance():
    near = camera_move_speed([200.0], 0.0, 150.0)
    far = camera_move_speed([400.0], 0.0, 150.0)
    assert far > near > 0