from pathlib import PurePosixPath

import pytest
import yaml

from punchy.assets import (
    LoadedAsset,
    detect_locale,
    load_asset,
    load_fighter_meta,
    load_font,
    load_game_meta,
    load_item_meta,
    load_level_meta,
    loader_for,
    relative_asset_path,
)
from punchy.theme import MetadataError

BORDER = {"image": "ui/border.png", "image_size": [32, 32]}
FONT = {"family": "ark", "size": 12}
CONTROLS = {"movement": {"up": "W"}, "flop_attack": "Space", "throw": "E", "shoot": "Q"}

GAME = {
    "start_level": "levels/one.level.yaml",
    "main_menu": {
        "title_font": FONT,
        "background_image": {"image": "ui/bg.png", "image_size": [640, 480]},
        "music": "music/menu.ogg",
    },
    "ui_theme": {
        "font_families": {"ark": "fonts/ark.ttf"},
        "font_styles": {"heading": FONT},
        "hud": {
            "player_hud_width": 200,
            "portrait_frame": BORDER,
            "font": FONT,
            "lifebar": {"height": 10, "background_image": BORDER, "progress_image": BORDER},
        },
        "panel": {"border": BORDER},
        "button_styles": {"normal": {"font": FONT, "borders": {"default": BORDER, "focused": BORDER}}},
    },
    "camera_height": 448,
    "camera_move_right_boundary": 150,
    "default_settings": {
        "player_controls": {"gamepad": CONTROLS, "keyboard1": CONTROLS, "keyboard2": CONTROLS}
    },
    "translations": {"default_locale": "en-US", "locales": ["locale/en-US.ftl"]},
}

LEVEL = {
    "background_color": [0, 0, 0],
    "parallax_background": {
        "layers": [
            {
                "speed": 0.9,
                "path": "bg/layer.png",
                "tile_size": [896, 480],
                "cols": 1,
                "rows": 1,
                "scale": 1,
                "z": 0,
                "transition_factor": 1,
            }
        ]
    },
    "players": [{"fighter": "../fighters/a.fighter.yaml", "location": [0, 0, 0]}],
    "enemies": [{"fighter": "../fighters/b.fighter.yaml", "location": [5, 0, 0], "trip_point_x": 1}],
    "items": [{"item": "../items/bottle.item.yaml", "location": [1, 2, 0]}],
    "music": "music/level.ogg",
}

FIGHTER = {
    "name": "Fishy",
    "stats": {"health": 100, "damage": 35, "movement_speed": 150},
    "hud": {"portrait": {"image": "portrait.png", "image_size": [35, 35]}},
    "spritesheet": {
        "image": ["a.png", "b.png"],
        "tile_size": [96, 80],
        "columns": 14,
        "rows": 7,
        "animation_fps": 0.12,
        "animations": {"idle": {"frames": {"start": 0, "end": 13}, "repeat": True}},
    },
    "audio": {"effects": {"attacking": {3: "hit.ogg"}}},
}

ITEM = {"name": "Bottle", "image": {"image": "bottle.png", "image_size": [11, 31]}}


def dump(doc):
    return yaml.safe_dump(doc).encode()


def test_relative_path_joins_directory():
    assert relative_asset_path("game/default.game.yaml", "levels/one.level.yaml") == PurePosixPath(
        "game/levels/one.level.yaml"
    )


def test_absolute_path_is_from_root():
    assert relative_asset_path("game/default.game.yaml", "/fonts/ark.ttf") == PurePosixPath(
        "fonts/ark.ttf"
    )


def test_relative_path_without_directory():
    assert relative_asset_path("default.game.yaml", "x.png") == PurePosixPath("x.png")


def test_game_meta_handles_and_dependencies():
    path = "game/default.game.yaml"
    loaded = load_game_meta(dump(GAME), path, "fr-FR")
    meta = loaded.value
    assert meta.translations.detected_locale == "fr-FR"
    assert meta.start_level_handle.path == str(relative_asset_path(path, GAME["start_level"]))
    assert meta.main_menu.music_handle.path == str(relative_asset_path(path, "music/menu.ogg"))
    assert set(meta.ui_theme.font_handles) == set(meta.ui_theme.font_families)
    deps = {str(p) for p in loaded.dependencies}
    handles = [
        meta.start_level_handle,
        meta.main_menu.music_handle,
        meta.main_menu.background_image.image_handle,
        meta.ui_theme.hud.portrait_frame.handle,
        meta.ui_theme.panel.border.handle,
        meta.ui_theme.button_styles_default_handle
        if hasattr(meta.ui_theme, "button_styles_default_handle")
        else next(iter(meta.ui_theme.button_styles.values())).borders.focused.handle,
        *meta.translations.locale_handles,
        *meta.ui_theme.font_handles.values(),
    ]
    assert all(h.path in deps for h in handles)
    assert all(str(p).startswith("game/") for p in loaded.dependencies)


def test_game_meta_unknown_field_rejected():
    with pytest.raises(MetadataError):
        load_game_meta(dump({**GAME, "bogus": 1}), "default.game.yaml", "en-US")


def test_level_meta_paths():
    path = "levels/one.level.yaml"
    loaded = load_level_meta(dump(LEVEL), path)
    meta = loaded.value
    layer = meta.parallax_background.layers[0]
    assert layer.path == layer.image_handle.path
    assert layer.path == str(relative_asset_path(path, "bg/layer.png"))
    assert meta.players[0].fighter_handle.path == str(
        relative_asset_path(path, "../fighters/a.fighter.yaml")
    )
    assert meta.items[0].item_handle.path == str(
        relative_asset_path(path, "../items/bottle.item.yaml")
    )
    deps = {str(p) for p in loaded.dependencies}
    assert meta.music_handle.path in deps
    assert meta.enemies[0].fighter_handle.path in deps


def test_fighter_meta_atlases_and_effects():
    path = "fighters/a.fighter.yaml"
    loaded = load_fighter_meta(dump(FIGHTER), path)
    meta = loaded.value
    assert set(loaded.labeled) == {"atlas_0", "atlas_1"}
    assert len(meta.spritesheet.atlas_handle) == len(meta.spritesheet.image)
    atlas = loaded.labeled["atlas_0"]
    assert atlas.dependencies == [relative_asset_path(path, "a.png")]
    assert atlas.value["columns"] == FIGHTER["spritesheet"]["columns"]
    assert meta.audio.effect_handles["attacking"][3].path == str(relative_asset_path(path, "hit.ogg"))
    assert meta.hud.portrait.image_handle.path in {str(p) for p in loaded.dependencies}


def test_item_meta_image_handle():
    path = "items/bottle.item.yaml"
    loaded = load_item_meta(dump(ITEM), path)
    assert loaded.value.image.image_handle.path == str(relative_asset_path(path, "bottle.png"))
    assert loaded.dependencies == [relative_asset_path(path, "bottle.png")]


def test_invalid_yaml_raises():
    with pytest.raises(MetadataError):
        load_item_meta(b"name: [", "x.item.yaml")


def test_font_loads_bytes():
    loaded = load_font(b"\x00\x01", "fonts/a.ttf")
    assert loaded == LoadedAsset(b"\x00\x01")


def test_loader_for_extensions():
    assert loader_for("default.game.yaml") is load_game_meta
    assert loader_for("a/one.level.yml") is load_level_meta
    assert loader_for("x.fighter.yaml") is load_fighter_meta
    assert loader_for("bottle.item.yml") is load_item_meta
    assert loader_for("ark.ttf") is load_font


def test_loader_for_unknown_extension():
    with pytest.raises(ValueError):
        loader_for("picture.png")


def test_load_asset_dispatches():
    loaded = load_asset(dump(ITEM), "items/bottle.item.yaml")
    assert loaded.value.name == "Bottle"


def test_detect_locale_from_environment(monkeypatch):
    monkeypatch.setenv("LC_ALL", "de_DE.UTF-8")
    assert detect_locale() == "de-DE"


def test_detect_locale_falls_back(monkeypatch):
    monkeypatch.setenv("LC_ALL", "C")
    assert detect_locale() == "en-US"