"""Loading of game, level, fighter, item and font asset files."""

from __future__ import annotations

import locale as _locale
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Callable, Iterator, Optional, Union

import yaml

from punchy.metadata import FighterMeta, GameMeta, ItemMeta, LevelMeta
from punchy.progress import AssetHandle
from punchy.theme import BorderImageMeta, MetadataError, UIThemeMeta

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"

PathLike = Union[str, PurePosixPath]

_LANGID_RE = re.compile(
    r"^(?:[A-Za-z]{2,3}|[A-Za-z]{5,8})"
    r"(?:-[A-Za-z]{4})?"
    r"(?:-(?:[A-Za-z]{2}|[0-9]{3}))?"
    r"(?:-(?:[A-Za-z0-9]{5,8}|[0-9][A-Za-z0-9]{3}))*$"
)


@dataclass
class LoadedAsset:
    """A parsed asset, the asset paths it depends on and any labelled sub-assets."""

    value: Any
    dependencies: list[PurePosixPath] = field(default_factory=list)
    labeled: dict[str, "LoadedAsset"] = field(default_factory=dict)


def relative_asset_path(asset_path: PathLike, relative_path: str) -> PurePosixPath:
    """Resolve ``relative_path`` against the directory of ``asset_path``.

    A path starting with ``/`` is taken from the asset root instead.
    """
    if relative_path.startswith("/"):
        return PurePosixPath(relative_path.lstrip("/"))
    return PurePosixPath(str(asset_path)).parent / relative_path


class _Dependencies:
    """Collects the asset paths referenced while loading one asset."""

    def __init__(self, path: PathLike) -> None:
        self.path = PurePosixPath(str(path))
        self.paths: list[PurePosixPath] = []

    def handle(self, relative_path: str) -> AssetHandle:
        resolved = relative_asset_path(self.path, relative_path)
        self.paths.append(resolved)
        return AssetHandle(str(resolved))


def _system_locale() -> Optional[str]:
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value:
            return value
    code, _ = _locale.getlocale()
    return code


def _canonical_locale(text: str) -> str:
    language, *rest = text.split("-")
    parts = [language.lower()]
    for part in rest:
        if len(part) == 4 and part.isalpha():
            parts.append(part.title())
        elif (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            parts.append(part.upper())
        else:
            parts.append(part.lower())
    return "-".join(parts)


def detect_locale() -> str:
    """The user's locale as a language identifier, defaulting to ``en-US``."""
    raw = _system_locale() or DEFAULT_LOCALE
    text = re.split(r"[.@]", raw, maxsplit=1)[0].replace("_", "-")
    if not _LANGID_RE.match(text):
        logger.warning(
            'Could not parse system locale string ( "%s" ), defaulting to "%s"',
            raw,
            DEFAULT_LOCALE,
        )
        return DEFAULT_LOCALE
    locale = _canonical_locale(text)
    logger.debug("Detected system locale: %s", locale)
    return locale


def _parse_yaml(data: bytes, path: PathLike) -> Any:
    try:
        return yaml.safe_load(bytes(data))
    except yaml.YAMLError as exc:
        raise MetadataError(f"{path}: {exc}") from exc


def _theme_borders(theme: UIThemeMeta) -> Iterator[BorderImageMeta]:
    yield theme.hud.portrait_frame
    yield theme.panel.border
    yield theme.hud.lifebar.background_image
    yield theme.hud.lifebar.progress_image
    for button in theme.button_styles.values():
        yield button.borders.default
        if button.borders.clicked is not None:
            yield button.borders.clicked
        if button.borders.focused is not None:
            yield button.borders.focused


def load_game_meta(data: bytes, path: PathLike, locale: Optional[str] = None) -> LoadedAsset:
    """Load a ``.game.yaml`` asset; ``locale`` defaults to the detected one."""
    meta = GameMeta.from_dict(_parse_yaml(data, path))
    logger.debug("Loaded game asset %s", path)
    meta.translations.detected_locale = locale if locale is not None else detect_locale()

    deps = _Dependencies(path)
    meta.translations.locale_handles = [deps.handle(name) for name in meta.translations.locales]
    meta.start_level_handle = deps.handle(meta.start_level)

    background = meta.main_menu.background_image
    background.image_handle = deps.handle(background.image)

    theme = meta.ui_theme
    for border in _theme_borders(theme):
        border.handle = deps.handle(border.image)

    meta.main_menu.music_handle = deps.handle(meta.main_menu.music)

    for font_name, font_path in theme.font_families.items():
        theme.font_handles[font_name] = deps.handle(font_path)

    return LoadedAsset(meta, deps.paths)


def load_level_meta(data: bytes, path: PathLike) -> LoadedAsset:
    """Load a ``.level.yaml`` asset."""
    meta = LevelMeta.from_dict(_parse_yaml(data, path))
    logger.debug("Loaded level asset %s", path)
    deps = _Dependencies(path)

    for spawn in (*meta.players, *meta.enemies):
        spawn.fighter_handle = deps.handle(spawn.fighter)

    for item in meta.items:
        item.item_handle = deps.handle(item.item)

    for layer in meta.parallax_background.layers:
        handle = deps.handle(layer.path)
        # The background renderer expects paths from the asset root.
        layer.path = handle.path
        layer.image_handle = handle

    meta.music_handle = deps.handle(meta.music)
    return LoadedAsset(meta, deps.paths)


def load_fighter_meta(data: bytes, path: PathLike) -> LoadedAsset:
    """Load a ``.fighter.yaml`` asset, with one texture atlas per spritesheet image."""
    meta = FighterMeta.from_dict(_parse_yaml(data, path))
    logger.debug("Loaded fighter asset %s", path)
    deps = _Dependencies(path)

    portrait = meta.hud.portrait
    portrait.image_handle = deps.handle(portrait.image)

    for state, frame_files in meta.audio.effects.items():
        handles = meta.audio.effect_handles.setdefault(state, {})
        for frame, audio_file in frame_files.items():
            handles[frame] = deps.handle(audio_file)

    sheet = meta.spritesheet
    labeled: dict[str, LoadedAsset] = {}
    for index, image in enumerate(sheet.image):
        texture = relative_asset_path(path, image)
        label = f"atlas_{index}"
        atlas = {
            "texture": AssetHandle(str(texture)),
            "tile_size": sheet.tile_size,
            "columns": sheet.columns,
            "rows": sheet.rows,
        }
        labeled[label] = LoadedAsset(atlas, [texture])
        sheet.atlas_handle.append(AssetHandle(f"{path}#{label}"))

    return LoadedAsset(meta, deps.paths, labeled)


def load_item_meta(data: bytes, path: PathLike) -> LoadedAsset:
    """Load a ``.item.yaml`` asset."""
    meta = ItemMeta.from_dict(_parse_yaml(data, path))
    logger.debug("Loaded item asset %s", path)
    deps = _Dependencies(path)
    meta.image.image_handle = deps.handle(meta.image.image)
    return LoadedAsset(meta, deps.paths)


def load_font(data: bytes, path: PathLike) -> LoadedAsset:
    """Load a font file as raw bytes."""
    logger.debug("Loaded font asset %s", path)
    return LoadedAsset(bytes(data))


Loader = Callable[[bytes, PathLike], LoadedAsset]

_LOADERS: dict[str, Loader] = {
    "game.yml": load_game_meta,
    "game.yaml": load_game_meta,
    "level.yml": load_level_meta,
    "level.yaml": load_level_meta,
    "fighter.yml": load_fighter_meta,
    "fighter.yaml": load_fighter_meta,
    "item.yml": load_item_meta,
    "item.yaml": load_item_meta,
    "ttf": load_font,
}


def loader_for(path: PathLike) -> Loader:
    """The loader for a file, chosen by its longest known extension."""
    _, dot, rest = PurePosixPath(str(path)).name.partition(".")
    while dot:
        loader = _LOADERS.get(rest)
        if loader is not None:
            return loader
        _, dot, rest = rest.partition(".")
    raise ValueError(f"no asset loader for {path}")


def load_asset(data: bytes, path: PathLike) -> LoadedAsset:
    """Load an asset with the loader its file name calls for."""
    return loader_for(path)(data, path)