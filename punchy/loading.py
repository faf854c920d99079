"""Game and level loading, hot reload bookkeeping and fighter setup."""

from __future__ import annotations

import copy
import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Optional

from punchy.animation import Animation
from punchy.assets import _theme_borders
from punchy.collisions import BodyLayers
from punchy.consts import PLAYER_HITBOX_HEIGHT, PLAYER_SPRITE_WIDTH
from punchy.entities import EnemySpawn, ItemSpawn
from punchy.input import MenuAction
from punchy.metadata import FighterMeta, FighterSpawnMeta, GameMeta, LevelMeta, Stats
from punchy.progress import AssetHandle, LoadProgress

logger = logging.getLogger(__name__)

# Half extents of a fighter's body collider.
FIGHTER_COLLIDER_HALF_EXTENTS = (PLAYER_SPRITE_WIDTH / 8.0, PLAYER_HITBOX_HEIGHT / 8.0)


def menu_input_map() -> dict[MenuAction, list[tuple]]:
    """Default menu bindings.

    Bindings are ``("key", name)``, ``("button", name)`` for gamepad buttons, or
    ``("axis", axis, positive_low, negative_low)`` for gamepad stick axes.
    """
    bindings: dict[MenuAction, list[tuple]] = {action: [] for action in MenuAction}

    def bind(action: MenuAction, *inputs: tuple) -> None:
        bindings[action].extend(inputs)

    bind(
        MenuAction.UP,
        ("key", "Up"),
        ("button", "DPadUp"),
        ("axis", "LeftStickY", 0.5, -1.0),
    )
    bind(
        MenuAction.LEFT,
        ("key", "Left"),
        ("button", "DPadLeft"),
        ("axis", "LeftStickX", 1.0, -0.5),
    )
    bind(
        MenuAction.DOWN,
        ("key", "Down"),
        ("button", "DPadDown"),
        ("axis", "LeftStickY", 1.0, -0.5),
    )
    bind(
        MenuAction.RIGHT,
        ("key", "Right"),
        ("button", "DPadRight"),
        ("axis", "LeftStickX", 0.5, -1.0),
    )
    bind(MenuAction.CONFIRM, ("key", "Return"), ("button", "South"), ("button", "Start"))
    bind(MenuAction.BACK, ("key", "Escape"), ("button", "East"))
    bind(MenuAction.TOGGLE_FULLSCREEN, ("key", "F11"), ("button", "Mode"))
    bind(MenuAction.PAUSE, ("key", "Escape"), ("button", "Start"))
    return bindings


def level_ready(progress: LoadProgress) -> bool:
    """True once everything a game or level needs has loaded."""
    return progress.as_percent() >= 1.0


@dataclass
class _GameSetup:
    """What loading or reloading the game asset sets up."""

    game: GameMeta
    start_level: AssetHandle
    locale: tuple[str, str]
    camera_scale: float
    menu_input: dict[MenuAction, list[tuple]]
    despawn_camera: bool = False
    fonts: Optional[dict[str, list]] = None
    enter_main_menu: bool = False


class GameLoader:
    """Loads the game asset once and, with hot reload, again whenever it changes."""

    def __init__(self) -> None:
        self.skip_next_asset_update_event = False
        self.camera_spawned = False
        self._pending_modified = 0
        self._textures: dict[AssetHandle, int] = {}
        self._texture_ids = itertools.count()

    def asset_modified(self) -> None:
        """Record that the game asset was modified on disk."""
        self._pending_modified += 1

    def should_skip_run(self, is_hot_reload: bool) -> bool:
        """True when a hot reload run finds no fresh modification to act on."""
        if not is_hot_reload:
            return False
        pending, self._pending_modified = self._pending_modified, 0
        has_update = False
        for _ in range(pending):
            if self.skip_next_asset_update_event:
                self.skip_next_asset_update_event = False
            else:
                logger.debug("Game updated")
                has_update = True
        return not has_update

    def _texture_id(self, handle: AssetHandle) -> int:
        texture = self._textures.get(handle)
        if texture is None:
            texture = self._textures[handle] = next(self._texture_ids)
        return texture

    def load(self, game: Optional[GameMeta], is_hot_reload: bool) -> Optional[_GameSetup]:
        """Set up the game from its loaded asset.

        Returns None when the run is skipped or the asset is not loaded yet.
        The asset's border images are given texture ids in place.
        """
        if self.should_skip_run(is_hot_reload):
            return None
        if game is None:
            logger.debug("Awaiting game load")
            return None

        despawn_camera = False
        fonts: Optional[dict[str, list]] = None
        enter_main_menu = False
        if is_hot_reload:
            despawn_camera = self.camera_spawned
            # Changing the asset below triggers another modification event.
            self.skip_next_asset_update_event = True
        else:
            # Empty families keep fonts that are still loading usable.
            fonts = {name: [] for name in game.ui_theme.font_families}
            enter_main_menu = True

        translations = game.translations
        locale = (translations.detected_locale, translations.default_locale)
        camera_scale = game.camera_height / 2.0
        self.camera_spawned = True

        for border in _theme_borders(game.ui_theme):
            border.texture_id = self._texture_id(border.handle)

        return _GameSetup(
            game=copy.deepcopy(game),
            start_level=game.start_level_handle,
            locale=locale,
            camera_scale=camera_scale,
            menu_input=menu_input_map(),
            despawn_camera=despawn_camera,
            fonts=fonts,
            enter_main_menu=enter_main_menu,
        )


@dataclass
class LevelSetup:
    """Everything placed in the world when a level starts."""

    level: LevelMeta
    parallax_layers: list[dict[str, Any]]
    clear_color: tuple[float, float, float]
    players: list[tuple[int, FighterSpawnMeta]] = field(default_factory=list)
    enemies: list[EnemySpawn] = field(default_factory=list)
    items: list[ItemSpawn] = field(default_factory=list)


def build_level(level: LevelMeta) -> LevelSetup:
    """Lay out a loaded level: background, players by index, enemies and items."""
    return LevelSetup(
        level=copy.deepcopy(level),
        parallax_layers=level.parallax_background.layer_data(),
        clear_color=level.background_rgb(),
        players=list(enumerate(level.players)),
        enemies=[EnemySpawn.from_meta(enemy) for enemy in level.enemies],
        items=[ItemSpawn.from_meta(item) for item in level.items],
    )


@dataclass
class FighterSetup:
    """Components a fighter gets once its asset has loaded."""

    name: str
    atlas: AssetHandle
    animation: Animation
    stats: Stats
    collision_groups: tuple[BodyLayers, BodyLayers]
    sprite_index: int = 0
    collider_half_extents: tuple[float, float] = FIGHTER_COLLIDER_HALF_EXTENTS


def load_fighter(
    fighter: FighterMeta, is_player: bool, rng: Optional[random.Random] = None
) -> FighterSetup:
    """Build a fighter from its asset, with a randomly chosen spritesheet."""
    atlases = fighter.spritesheet.atlas_handle
    if not atlases:
        raise ValueError(f"fighter {fighter.name!r} has no spritesheet atlas")
    chooser = rng if rng is not None else random
    layer = BodyLayers.PLAYER if is_player else BodyLayers.ENEMY
    return FighterSetup(
        name=fighter.name,
        atlas=chooser.choice(atlases),
        animation=Animation(fighter.spritesheet.animation_fps, fighter.spritesheet.animations),
        stats=copy.deepcopy(fighter.stats),
        collision_groups=(layer, BodyLayers.ALL),
    )