import random

import pytest

from punchy.consts import MAX_Y, MIN_Y
from punchy.entities import EnemySpawn
from punchy.game import kill_check, main, set_target_near_player
from punchy.metadata import F32_MIN, FighterSpawnMeta


def _enemy(trip_point_x=F32_MIN):
    return EnemySpawn.from_meta(
        FighterSpawnMeta(fighter="enemy.fighter.yaml", location=(0.0, 0.0, 0.0), trip_point_x=trip_point_x)
    )


@pytest.mark.parametrize(
    "health, state, finished, expected",
    [
        (0, "idle", False, ("dying", False)),
        (50, "idle", True, ("idle", False)),
        (-5, "running", True, ("dying", True)),
        (50, "dying", True, ("dying", True)),
        (50, "dying", False, ("dying", False)),
    ],
)
def test_kill_check(health, state, finished, expected):
    assert kill_check(health, state, finished) == expected


def test_no_players_no_targets():
    enemy = _enemy()
    assert set_target_near_player([(enemy, "idle")], [], random.Random(1)) == []


def test_idle_enemy_gets_target_near_player():
    enemy = _enemy(trip_point_x=10.0)
    targets = set_target_near_player([(enemy, "idle")], [(50.0, -120.0)], random.Random(3))
    assert len(targets) == 1
    got, (tx, ty) = targets[0]
    assert got is enemy
    assert -50.0 <= tx <= 150.0
    assert MIN_Y <= ty <= MAX_Y
    assert enemy.trip_point_x == F32_MIN


def test_target_y_is_clamped():
    rng = random.Random(7)
    for _ in range(50):
        enemy = _enemy()
        [(_, (_, ty))] = set_target_near_player([(enemy, "idle")], [(0.0, 1000.0)], rng)
        assert ty == MAX_Y


def test_trip_point_not_passed_keeps_enemy_waiting():
    enemy = _enemy(trip_point_x=500.0)
    targets = set_target_near_player([(enemy, "idle")], [(100.0, -120.0)], random.Random(2))
    assert targets == []
    assert enemy.trip_point_x == 500.0


def test_non_idle_enemy_ignored():
    enemy = _enemy(trip_point_x=0.0)
    targets = set_target_near_player([(enemy, "attacking")], [(100.0, -120.0)], random.Random(2))
    assert targets == []
    assert enemy.trip_point_x == 0.0


def test_rightmost_player_trips_enemy():
    enemy = _enemy(trip_point_x=200.0)
    players = [(0.0, -120.0), (300.0, -120.0)]
    targets = set_target_near_player([(enemy, "idle")], players, random.Random(5))
    assert [e for e, _ in targets] == [enemy]


def test_main_missing_game_asset(tmp_path, capsys):
    assert main([str(tmp_path / "missing.game.yaml")]) == 1
    assert "error" in capsys.readouterr().err


def test_main_invalid_yaml(tmp_path, capsys):
    path = tmp_path / "bad.game.yaml"
    path.write_text("a: [\n")
    assert main([str(path)]) == 1
    assert "error" in capsys.readouterr().err


def test_main_unknown_asset_kind(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    assert main([str(path)]) == 1