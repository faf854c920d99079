"""Music and sound-effect selection for menus, levels and fighters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Optional

from punchy.progress import AssetHandle

MUSIC_VOLUME = 0.5
EFFECTS_VOLUME = 0.5


@dataclass
class FighterStateEffectsPlayback:
    """Sound effects tied to animation frames while a fighter stays in one state."""

    state: Hashable
    effects: dict[int, AssetHandle]
    last_played: Optional[int] = None
    expired: bool = field(default=False, init=False)

    def update(self, fighter_state: Hashable, animation_index: Optional[int]) -> Optional[AssetHandle]:
        """Return the effect to play for this frame, if any.

        Once the fighter leaves the state, the playback is marked expired and
        plays nothing more. Each frame's effect plays once per arrival on it.
        """
        if fighter_state != self.state:
            self.expired = True
            return None
        if self.expired or animation_index is None:
            return None
        handle = self.effects.get(animation_index)
        if handle is None or self.last_played == animation_index:
            return None
        self.last_played = animation_index
        return handle


def menu_music(game_meta: Any, auto_start: bool) -> Optional[AssetHandle]:
    """Music for the main menu; none when the menu is skipped at start."""
    if auto_start:
        return None
    return game_meta.main_menu.music_handle


def level_music(level: Any) -> Optional[AssetHandle]:
    """Music of a loaded level, or None when no level is loaded."""
    if level is None:
        return None
    return level.music_handle