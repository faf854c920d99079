"""User-interface theme metadata: fonts, colours, borders and buttons."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from punchy.progress import AssetHandle, untracked_type

T = TypeVar("T")


class MetadataError(ValueError):
    """Raised when metadata does not have the expected shape."""


def strict_fields(
    data: Any,
    name: str,
    required: Iterable[str],
    optional: Optional[Iterable[str]] = (),
) -> dict:
    """Check that ``data`` is a mapping holding the given fields.

    Missing required fields are errors. Fields that are neither required nor
    optional are errors too, unless ``optional`` is None.
    """
    if not isinstance(data, Mapping):
        raise MetadataError(f"{name}: expected a mapping, got {type(data).__name__}")
    required = tuple(required)
    missing = [key for key in required if key not in data]
    if missing:
        raise MetadataError(f"{name}: missing field(s) {', '.join(missing)}")
    if optional is not None:
        allowed = set(required) | set(optional)
        unknown = sorted(str(key) for key in data if key not in allowed)
        if unknown:
            raise MetadataError(f"{name}: unknown field(s) {', '.join(unknown)}")
    return dict(data)


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MetadataError(f"{what}: expected a number, got {value!r}")
    return float(value)


def _uint(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MetadataError(f"{what}: expected a non-negative integer, got {value!r}")
    return value


def _byte(value: Any, what: str) -> int:
    if _uint(value, what) > 255:
        raise MetadataError(f"{what}: {value} is out of range 0-255")
    return value


def _string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise MetadataError(f"{what}: expected a string, got {value!r}")
    return value


def _boolean(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise MetadataError(f"{what}: expected a boolean, got {value!r}")
    return value


def _vector(value: Any, what: str, size: int, item: Callable[[Any, str], T]) -> tuple:
    if not isinstance(value, (list, tuple)) or len(value) != size:
        raise MetadataError(f"{what}: expected a list of {size} values, got {value!r}")
    return tuple(item(v, what) for v in value)


def _vec2(value: Any, what: str) -> tuple[float, float]:
    return _vector(value, what, 2, _number)


def _uvec2(value: Any, what: str) -> tuple[int, int]:
    return _vector(value, what, 2, _uint)


def _vec3(value: Any, what: str) -> tuple[float, float, float]:
    return _vector(value, what, 3, _number)


def _list(value: Any, what: str, item: Callable[[Any, str], T]) -> list[T]:
    if not isinstance(value, list):
        raise MetadataError(f"{what}: expected a list, got {value!r}")
    return [item(v, f"{what}[{i}]") for i, v in enumerate(value)]


def _mapping(
    value: Any,
    what: str,
    key: Callable[[Any, str], Any],
    item: Callable[[Any, str], T],
) -> dict:
    if not isinstance(value, Mapping):
        raise MetadataError(f"{what}: expected a mapping, got {value!r}")
    return {key(k, f"{what} key"): item(v, f"{what}.{k}") for k, v in value.items()}


class FontStyle(Enum):
    """Named font styles of the theme."""

    HEADING = "heading"
    NORMAL = "normal"
    BIGGER = "bigger"


class ButtonStyle(Enum):
    """Named button styles of the theme."""

    NORMAL = "normal"
    SMALL = "small"


def _style(enum_cls: type, message: str) -> Callable[[Any, str], Any]:
    def parse(value: Any, what: str) -> Any:
        if isinstance(value, str):
            try:
                return enum_cls(value)
            except ValueError:
                pass
        raise MetadataError(message)

    return parse


_font_style = _style(FontStyle, "Invalid font style")
_button_style = _style(ButtonStyle, "Invalid button style")


@untracked_type
@dataclass(frozen=True)
class ColorMeta:
    """An RGB colour with 8-bit channels."""

    rgb: tuple[int, int, int] = (0, 0, 0)

    @classmethod
    def from_value(cls, value: Any) -> "ColorMeta":
        """Parse a ``[r, g, b]`` list."""
        return _color(value, "color")


def _color(value: Any, what: str) -> ColorMeta:
    return ColorMeta(_vector(value, what, 3, _byte))


@dataclass
class MarginMeta:
    """Margins on the four sides of a box."""

    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> "MarginMeta":
        """Parse a mapping; missing sides are zero."""
        return _margin(data, "margin")


def _margin(data: Any, what: str) -> MarginMeta:
    d = strict_fields(data, what, (), ("top", "bottom", "left", "right"))
    return MarginMeta(**{k: _number(v, f"{what}.{k}") for k, v in d.items()})


def _optional(d: dict, key: str, what: str, parse: Callable[[Any, str], T], default: T) -> T:
    return parse(d[key], f"{what}.{key}") if key in d else default


@untracked_type
@dataclass
class FontMeta:
    """A font family, size and colour."""

    family: str
    size: float
    color: ColorMeta = field(default_factory=ColorMeta)

    def colored(self, color: ColorMeta) -> "FontMeta":
        """A copy of this font in another colour."""
        return dataclasses.replace(self, color=color)

    @classmethod
    def from_dict(cls, data: Any) -> "FontMeta":
        """Parse a font mapping."""
        return _font(data, "font")


def _font(data: Any, what: str) -> FontMeta:
    d = strict_fields(data, what, ("family", "size"), ("color",))
    return FontMeta(
        family=_string(d["family"], f"{what}.family"),
        size=_number(d["size"], f"{what}.size"),
        color=_optional(d, "color", what, _color, ColorMeta()),
    )


@dataclass
class BorderImageMeta:
    """A nine-patch border image."""

    image: str
    image_size: tuple[int, int]
    border_size: MarginMeta = field(default_factory=MarginMeta)
    scale: float = 1.0
    handle: AssetHandle = field(default_factory=AssetHandle)
    texture_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "BorderImageMeta":
        """Parse a border image mapping."""
        return _border(data, "border image")


def _border(data: Any, what: str) -> BorderImageMeta:
    d = strict_fields(data, what, ("image", "image_size"), ("border_size", "scale"))
    return BorderImageMeta(
        image=_string(d["image"], f"{what}.image"),
        image_size=_uvec2(d["image_size"], f"{what}.image_size"),
        border_size=_optional(d, "border_size", what, _margin, MarginMeta()),
        scale=_optional(d, "scale", what, _number, 1.0),
    )


def _optional_border(value: Any, what: str) -> Optional[BorderImageMeta]:
    return None if value is None else _border(value, what)


@dataclass
class ProgressBarMeta:
    """A bar drawn as a background image with a progress image over it."""

    height: float
    background_image: BorderImageMeta
    progress_image: BorderImageMeta


@dataclass
class ButtonBordersMeta:
    """Border images of a button in its various states."""

    default: BorderImageMeta
    focused: Optional[BorderImageMeta] = None
    clicked: Optional[BorderImageMeta] = None


@dataclass
class HudThemeMeta:
    """Theme of the in-game heads-up display."""

    player_hud_width: float
    portrait_frame: BorderImageMeta
    font: FontMeta
    lifebar: ProgressBarMeta


@dataclass
class PanelThemeMeta:
    """Theme of menu panels."""

    border: BorderImageMeta
    font_color: ColorMeta = field(default_factory=ColorMeta)
    padding: MarginMeta = field(default_factory=MarginMeta)


@dataclass
class ButtonThemeMeta:
    """Theme of one button style."""

    font: FontMeta
    borders: ButtonBordersMeta
    padding: MarginMeta = field(default_factory=MarginMeta)


@dataclass
class UIThemeMeta:
    """The whole user-interface theme."""

    font_families: dict[str, str]
    font_styles: dict[FontStyle, FontMeta]
    hud: HudThemeMeta
    panel: PanelThemeMeta
    button_styles: dict[ButtonStyle, ButtonThemeMeta]
    font_handles: dict[str, AssetHandle] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "UIThemeMeta":
        """Parse a theme mapping."""
        return _ui_theme(data, "ui_theme")


def _progress_bar(data: Any, what: str) -> ProgressBarMeta:
    d = strict_fields(data, what, ("height", "background_image", "progress_image"))
    return ProgressBarMeta(
        height=_number(d["height"], f"{what}.height"),
        background_image=_border(d["background_image"], f"{what}.background_image"),
        progress_image=_border(d["progress_image"], f"{what}.progress_image"),
    )


def _button_borders(data: Any, what: str) -> ButtonBordersMeta:
    d = strict_fields(data, what, ("default",), ("focused", "clicked"))
    return ButtonBordersMeta(
        default=_border(d["default"], f"{what}.default"),
        focused=_optional_border(d.get("focused"), f"{what}.focused"),
        clicked=_optional_border(d.get("clicked"), f"{what}.clicked"),
    )


def _hud(data: Any, what: str) -> HudThemeMeta:
    d = strict_fields(data, what, ("player_hud_width", "portrait_frame", "font", "lifebar"))
    return HudThemeMeta(
        player_hud_width=_number(d["player_hud_width"], f"{what}.player_hud_width"),
        portrait_frame=_border(d["portrait_frame"], f"{what}.portrait_frame"),
        font=_font(d["font"], f"{what}.font"),
        lifebar=_progress_bar(d["lifebar"], f"{what}.lifebar"),
    )


def _panel(data: Any, what: str) -> PanelThemeMeta:
    d = strict_fields(data, what, ("border",), ("font_color", "padding"))
    return PanelThemeMeta(
        border=_border(d["border"], f"{what}.border"),
        font_color=_optional(d, "font_color", what, _color, ColorMeta()),
        padding=_optional(d, "padding", what, _margin, MarginMeta()),
    )


def _button_theme(data: Any, what: str) -> ButtonThemeMeta:
    d = strict_fields(data, what, ("font", "borders"), ("padding",))
    return ButtonThemeMeta(
        font=_font(d["font"], f"{what}.font"),
        borders=_button_borders(d["borders"], f"{what}.borders"),
        padding=_optional(d, "padding", what, _margin, MarginMeta()),
    )


def _ui_theme(data: Any, what: str) -> UIThemeMeta:
    d = strict_fields(
        data, what, ("font_families", "font_styles", "hud", "panel", "button_styles")
    )
    return UIThemeMeta(
        font_families=_mapping(d["font_families"], f"{what}.font_families", _string, _string),
        font_styles=_mapping(d["font_styles"], f"{what}.font_styles", _font_style, _font),
        hud=_hud(d["hud"], f"{what}.hud"),
        panel=_panel(d["panel"], f"{what}.panel"),
        button_styles=_mapping(
            d["button_styles"], f"{what}.button_styles", _button_style, _button_theme
        ),
    )