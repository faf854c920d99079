"""Game, level, fighter and item metadata read from YAML asset files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from punchy.animation import Clip
from punchy.input import PlayerAction
from punchy.progress import AssetHandle, untracked, untracked_type
from punchy.theme import (
    FontMeta,
    MetadataError,
    UIThemeMeta,
    _boolean,
    _byte,
    _font,
    _list,
    _mapping,
    _number,
    _string,
    _ui_theme,
    _uint,
    _uvec2,
    _vec2,
    _vec3,
    _vector,
    strict_fields,
)

F32_MIN = -3.4028234663852886e38

_LOCALE_RE = re.compile(r"^[A-Za-z]{2,8}(?:[-_][A-Za-z0-9]{1,8})*$")


def _i32(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MetadataError(f"{what}: expected an integer, got {value!r}")
    if not -(2**31) <= value < 2**31:
        raise MetadataError(f"{what}: {value} is out of range")
    return value


def _locale(value: Any, what: str) -> str:
    text = _string(value, what)
    if not _LOCALE_RE.match(text):
        raise MetadataError(f"{what}: invalid locale {text!r}")
    return text


@dataclass
class Stats:
    """Health, damage and speed of a fighter."""

    health: int = 100
    damage: int = 35
    movement_speed: float = 150.0


def _stats(data: Any, what: str) -> Stats:
    d = strict_fields(data, what, ("health", "damage", "movement_speed"))
    return Stats(
        health=_i32(d["health"], f"{what}.health"),
        damage=_i32(d["damage"], f"{what}.damage"),
        movement_speed=_number(d["movement_speed"], f"{what}.movement_speed"),
    )


@dataclass
class ImageMeta:
    """An image file and its size."""

    image: str
    image_size: tuple[float, float]
    image_handle: AssetHandle = field(default_factory=AssetHandle)


def _image(data: Any, what: str) -> ImageMeta:
    d = strict_fields(data, what, ("image", "image_size"))
    return ImageMeta(
        image=_string(d["image"], f"{what}.image"),
        image_size=_vec2(d["image_size"], f"{what}.image_size"),
    )


@dataclass
class MainMenuMeta:
    """Look and music of the main menu."""

    title_font: FontMeta
    background_image: ImageMeta
    music: str
    music_handle: AssetHandle = field(default_factory=AssetHandle)


def _main_menu(data: Any, what: str) -> MainMenuMeta:
    d = strict_fields(data, what, ("title_font", "background_image", "music"))
    return MainMenuMeta(
        title_font=_font(d["title_font"], f"{what}.title_font"),
        background_image=_image(d["background_image"], f"{what}.background_image"),
        music=_string(d["music"], f"{what}.music"),
    )


@dataclass
class TranslationsMeta:
    """Locale files and the locales to pick messages from."""

    default_locale: str = untracked()
    locales: list[str] = field(default_factory=list)
    detected_locale: str = untracked(default="und")
    locale_handles: list[AssetHandle] = field(default_factory=list)


def _translations(data: Any, what: str) -> TranslationsMeta:
    d = strict_fields(data, what, ("default_locale", "locales"))
    return TranslationsMeta(
        default_locale=_locale(d["default_locale"], f"{what}.default_locale"),
        locales=_list(d["locales"], f"{what}.locales", _string),
    )


@dataclass
class PlayerControls:
    """Input bindings for one control method."""

    movement: Any
    flop_attack: Any
    throw: Any
    shoot: Any


@dataclass
class PlayerControlMethods:
    """Bindings for gamepads and for the two keyboard players."""

    gamepad: PlayerControls
    keyboard1: PlayerControls
    keyboard2: PlayerControls

    def input_map(self, player_idx: int) -> dict[PlayerAction, list[Any]]:
        """Bindings of each action for a player.

        Gamepad bindings apply to the gamepad numbered ``player_idx``; players 0
        and 1 also get the first and second keyboard bindings.
        """
        bindings: dict[PlayerAction, list[Any]] = {action: [] for action in PlayerAction}

        def add(controls: PlayerControls) -> None:
            bindings[PlayerAction.MOVE].append(controls.movement)
            bindings[PlayerAction.FLOP_ATTACK].append(controls.flop_attack)
            bindings[PlayerAction.SHOOT].append(controls.shoot)
            bindings[PlayerAction.THROW].append(controls.throw)

        add(self.gamepad)
        keyboard = {0: self.keyboard1, 1: self.keyboard2}.get(player_idx)
        if keyboard is not None:
            add(keyboard)
        return bindings


def _player_controls(data: Any, what: str) -> PlayerControls:
    d = strict_fields(data, what, ("movement", "flop_attack", "throw", "shoot"), None)
    return PlayerControls(d["movement"], d["flop_attack"], d["throw"], d["shoot"])


@untracked_type
@dataclass
class Settings:
    """Global settings kept in persistent storage."""

    STORAGE_KEY: ClassVar[str] = "settings"

    player_controls: PlayerControlMethods


def _settings(data: Any, what: str) -> Settings:
    d = strict_fields(data, what, ("player_controls",), None)
    controls = strict_fields(
        d["player_controls"], f"{what}.player_controls", ("gamepad", "keyboard1", "keyboard2"), None
    )
    return Settings(
        PlayerControlMethods(
            **{
                key: _player_controls(value, f"{what}.player_controls.{key}")
                for key, value in controls.items()
                if key in ("gamepad", "keyboard1", "keyboard2")
            }
        )
    )


@dataclass
class GameMeta:
    """Top-level description of the game."""

    start_level: str
    main_menu: MainMenuMeta
    ui_theme: UIThemeMeta
    camera_height: int
    camera_move_right_boundary: float
    default_settings: Settings
    translations: TranslationsMeta
    start_level_handle: AssetHandle = field(default_factory=AssetHandle)

    @classmethod
    def from_dict(cls, data: Any) -> "GameMeta":
        """Parse a ``.game.yaml`` document."""
        what = "game"
        d = strict_fields(
            data,
            what,
            (
                "start_level",
                "main_menu",
                "ui_theme",
                "camera_height",
                "camera_move_right_boundary",
                "default_settings",
                "translations",
            ),
        )
        return cls(
            start_level=_string(d["start_level"], f"{what}.start_level"),
            main_menu=_main_menu(d["main_menu"], f"{what}.main_menu"),
            ui_theme=_ui_theme(d["ui_theme"], f"{what}.ui_theme"),
            camera_height=_uint(d["camera_height"], f"{what}.camera_height"),
            camera_move_right_boundary=_number(
                d["camera_move_right_boundary"], f"{what}.camera_move_right_boundary"
            ),
            default_settings=_settings(d["default_settings"], f"{what}.default_settings"),
            translations=_translations(d["translations"], f"{what}.translations"),
        )


@dataclass
class FighterSpawnMeta:
    """Where a fighter starts in a level."""

    fighter: str
    location: tuple[float, float, float]
    trip_point_x: float = F32_MIN
    fighter_handle: AssetHandle = field(default_factory=AssetHandle)


def _fighter_spawn(data: Any, what: str) -> FighterSpawnMeta:
    d = strict_fields(data, what, ("fighter", "location"), ("trip_point_x",))
    return FighterSpawnMeta(
        fighter=_string(d["fighter"], f"{what}.fighter"),
        location=_vec3(d["location"], f"{what}.location"),
        trip_point_x=_number(d["trip_point_x"], f"{what}.trip_point_x")
        if "trip_point_x" in d
        else F32_MIN,
    )


@dataclass
class ItemSpawnMeta:
    """Where an item lies in a level."""

    item: str
    location: tuple[float, float, float]
    item_handle: AssetHandle = field(default_factory=AssetHandle)


def _item_spawn(data: Any, what: str) -> ItemSpawnMeta:
    d = strict_fields(data, what, ("item", "location"))
    return ItemSpawnMeta(
        item=_string(d["item"], f"{what}.item"),
        location=_vec3(d["location"], f"{what}.location"),
    )


_LAYER_FIELDS = ("speed", "path", "tile_size", "cols", "rows", "scale", "z", "transition_factor")


@dataclass
class ParallaxLayerMeta:
    """One layer of a parallax background."""

    speed: float
    path: str
    tile_size: tuple[float, float]
    cols: int
    rows: int
    scale: float
    z: float
    transition_factor: float
    image_handle: AssetHandle = field(default_factory=AssetHandle)


def _parallax_layer(data: Any, what: str) -> ParallaxLayerMeta:
    d = strict_fields(data, what, _LAYER_FIELDS)
    return ParallaxLayerMeta(
        speed=_number(d["speed"], f"{what}.speed"),
        path=_string(d["path"], f"{what}.path"),
        tile_size=_vec2(d["tile_size"], f"{what}.tile_size"),
        cols=_uint(d["cols"], f"{what}.cols"),
        rows=_uint(d["rows"], f"{what}.rows"),
        scale=_number(d["scale"], f"{what}.scale"),
        z=_number(d["z"], f"{what}.z"),
        transition_factor=_number(d["transition_factor"], f"{what}.transition_factor"),
    )


@dataclass
class ParallaxMeta:
    """A parallax background made of layers."""

    layers: list[ParallaxLayerMeta]

    def layer_data(self) -> list[dict[str, Any]]:
        """Layer settings as handed to the background renderer."""
        return [{name: getattr(layer, name) for name in _LAYER_FIELDS} for layer in self.layers]


def _parallax(data: Any, what: str) -> ParallaxMeta:
    d = strict_fields(data, what, ("layers",))
    return ParallaxMeta(_list(d["layers"], f"{what}.layers", _parallax_layer))


@dataclass
class LevelMeta:
    """A level: background, spawns and music."""

    background_color: tuple[int, int, int] = untracked()
    parallax_background: ParallaxMeta = None  # type: ignore[assignment]
    players: list[FighterSpawnMeta] = field(default_factory=list)
    music: str = ""
    enemies: list[FighterSpawnMeta] = field(default_factory=list)
    items: list[ItemSpawnMeta] = field(default_factory=list)
    music_handle: AssetHandle = field(default_factory=AssetHandle)

    def background_rgb(self) -> tuple[float, float, float]:
        """Background colour with channels scaled to 0.0-1.0."""
        r, g, b = self.background_color
        return (r / 255, g / 255, b / 255)

    @classmethod
    def from_dict(cls, data: Any) -> "LevelMeta":
        """Parse a ``.level.yaml`` document."""
        what = "level"
        d = strict_fields(
            data,
            what,
            ("background_color", "parallax_background", "players", "music"),
            ("enemies", "items"),
        )
        return cls(
            background_color=_vector(d["background_color"], f"{what}.background_color", 3, _byte),
            parallax_background=_parallax(d["parallax_background"], f"{what}.parallax_background"),
            players=_list(d["players"], f"{what}.players", _fighter_spawn),
            music=_string(d["music"], f"{what}.music"),
            enemies=_list(d.get("enemies", []), f"{what}.enemies", _fighter_spawn),
            items=_list(d.get("items", []), f"{what}.items", _item_spawn),
        )


@dataclass
class FighterHudMeta:
    """What a fighter shows on the HUD."""

    portrait: ImageMeta


def _clip(data: Any, what: str) -> Clip:
    d = strict_fields(data, what, ("frames",), ("repeat",))
    frames = strict_fields(d["frames"], f"{what}.frames", ("start", "end"))
    return Clip(
        frames=range(
            _uint(frames["start"], f"{what}.frames.start"),
            _uint(frames["end"], f"{what}.frames.end"),
        ),
        repeat=_boolean(d["repeat"], f"{what}.repeat") if "repeat" in d else False,
    )


@dataclass
class FighterSpritesheetMeta:
    """Spritesheets of a fighter and the clips cut from them."""

    image: list[str]
    tile_size: tuple[int, int]
    columns: int
    rows: int
    animation_fps: float
    animations: dict[str, Clip]
    atlas_handle: list[AssetHandle] = field(default_factory=list)


def _spritesheet(data: Any, what: str) -> FighterSpritesheetMeta:
    d = strict_fields(
        data, what, ("image", "tile_size", "columns", "rows", "animation_fps", "animations")
    )
    return FighterSpritesheetMeta(
        image=_list(d["image"], f"{what}.image", _string),
        tile_size=_uvec2(d["tile_size"], f"{what}.tile_size"),
        columns=_uint(d["columns"], f"{what}.columns"),
        rows=_uint(d["rows"], f"{what}.rows"),
        animation_fps=_number(d["animation_fps"], f"{what}.animation_fps"),
        animations=_mapping(d["animations"], f"{what}.animations", _string, _clip),
    )


@dataclass
class AudioMeta:
    """Sound effects played on given animation frames of given states."""

    effects: dict[str, dict[int, str]]
    effect_handles: dict[str, dict[int, AssetHandle]] = field(default_factory=dict)


def _frame_effects(data: Any, what: str) -> dict[int, str]:
    return _mapping(data, what, _uint, _string)


def _audio(data: Any, what: str) -> AudioMeta:
    d = strict_fields(data, what, ("effects",))
    return AudioMeta(_mapping(d["effects"], f"{what}.effects", _string, _frame_effects))


@dataclass
class FighterMeta:
    """A fighter: stats, look and sounds."""

    name: str
    stats: Stats
    hud: FighterHudMeta
    spritesheet: FighterSpritesheetMeta
    audio: AudioMeta

    @classmethod
    def from_dict(cls, data: Any) -> "FighterMeta":
        """Parse a ``.fighter.yaml`` document."""
        what = "fighter"
        d = strict_fields(data, what, ("name", "stats", "hud", "spritesheet", "audio"))
        hud = strict_fields(d["hud"], f"{what}.hud", ("portrait",))
        return cls(
            name=_string(d["name"], f"{what}.name"),
            stats=_stats(d["stats"], f"{what}.stats"),
            hud=FighterHudMeta(_image(hud["portrait"], f"{what}.hud.portrait")),
            spritesheet=_spritesheet(d["spritesheet"], f"{what}.spritesheet"),
            audio=_audio(d["audio"], f"{what}.audio"),
        )


@dataclass
class ItemMeta:
    """An item that can lie in a level and be picked up."""

    name: str
    image: ImageMeta

    @classmethod
    def from_dict(cls, data: Any) -> "ItemMeta":
        """Parse a ``.item.yaml`` document."""
        d = strict_fields(data, "item", ("name", "image"))
        return cls(name=_string(d["name"], "item.name"), image=_image(d["image"], "item.image"))


__all__ = [
    "AudioMeta",
    "F32_MIN",
    "FighterHudMeta",
    "FighterMeta",
    "FighterSpawnMeta",
    "FighterSpritesheetMeta",
    "GameMeta",
    "ImageMeta",
    "ItemMeta",
    "ItemSpawnMeta",
    "LevelMeta",
    "MainMenuMeta",
    "MetadataError",
    "ParallaxLayerMeta",
    "ParallaxMeta",
    "PlayerControlMethods",
    "PlayerControls",
    "Settings",
    "Stats",
    "TranslationsMeta",
]

_UNUSED: Optional[int] = None