"""Game states, fighter death, enemy targeting and the game's entry point."""

from __future__ import annotations

import logging
import random
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Hashable, Iterable, Optional, Sequence

from punchy.assets import load_asset
from punchy.config import EngineConfig
from punchy.consts import MAX_Y, MIN_Y
from punchy.loading import build_level
from punchy.metadata import F32_MIN, GameMeta, LevelMeta
from punchy.theme import MetadataError

logger = logging.getLogger(__name__)

IDLE = "idle"
DYING = "dying"

DEFAULT_ASSET_DIR = "assets"

# Enemies aim for a spot within this distance of a player on each axis.
TARGET_SPREAD = 100.0


class GameState(Enum):
    """Top-level states the game moves through."""

    LOADING_STORAGE = "loading_storage"
    LOADING_GAME = "loading_game"
    MAIN_MENU = "main_menu"
    LOADING_LEVEL = "loading_level"
    IN_GAME = "in_game"
    PAUSED = "paused"


def kill_check(health: int, state: Hashable, animation_finished: bool) -> tuple[Hashable, bool]:
    """New state of a fighter and whether it should be removed.

    A fighter without health starts dying; once its dying animation has
    finished it is marked for removal.
    """
    if health <= 0:
        state = DYING
    return state, state == DYING and animation_finished


def set_target_near_player(
    enemies: Iterable[tuple[Any, Hashable]],
    player_positions: Sequence[Sequence[float]],
    rng: Optional[random.Random] = None,
) -> list[tuple[Any, tuple[float, float]]]:
    """Pick targets near players for idle enemies without one.

    ``enemies`` holds ``(enemy, state)`` pairs, where each enemy has a mutable
    ``trip_point_x``. An idle enemy gets a target near a random player once the
    rightmost player has passed its trip point; the trip point is then cleared
    to the lowest float so it never holds the enemy back again.
    """
    chooser = rng if rng is not None else random.Random()
    players = list(player_positions)
    max_player_x = max((position[0] for position in players), default=None)
    if max_player_x is None:
        return []

    targets: list[tuple[Any, tuple[float, float]]] = []
    for enemy, state in enemies:
        if state != IDLE:
            continue
        px, py = chooser.choice(players)[:2]
        if max_player_x > enemy.trip_point_x:
            enemy.trip_point_x = F32_MIN
            x_offset = chooser.uniform(-TARGET_SPREAD, TARGET_SPREAD)
            y_offset = chooser.uniform(-TARGET_SPREAD, TARGET_SPREAD)
            target = (px + x_offset, min(max(py + y_offset, MIN_Y), MAX_Y))
            targets.append((enemy, target))
    return targets


def _configure_logging(log_level: str) -> None:
    base = next(
        (part.strip() for part in log_level.split(",") if part.strip() and "=" not in part),
        "info",
    )
    level = logging.getLevelName(base.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load(root: Path, relative: str) -> Any:
    data = (root / relative).read_bytes()
    return load_asset(data, relative).value


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the configured game and its start level, and report what was set up."""
    config = EngineConfig.from_args(argv)
    _configure_logging(config.log_level)
    logger.debug("Starting game with %r", config)

    root = Path(config.asset_dir or DEFAULT_ASSET_DIR)
    try:
        game = _load(root, config.game_asset)
        if not isinstance(game, GameMeta):
            raise MetadataError(f"{config.game_asset}: not a game asset")
        level = _load(root, game.start_level_handle.path)
        if not isinstance(level, LevelMeta):
            raise MetadataError(f"{game.start_level_handle.path}: not a level asset")
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    setup = build_level(level)
    state = GameState.IN_GAME if config.auto_start else GameState.MAIN_MENU
    print(f"game: {config.game_asset}")
    print(f"start level: {game.start_level_handle.path}")
    print(
        f"players: {len(setup.players)}, enemies: {len(setup.enemies)}, "
        f"items: {len(setup.items)}"
    )
    print(f"state: {state.value}")
    return 0