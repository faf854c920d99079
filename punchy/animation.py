"""Sprite animation clips and the per-fighter animation player."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Mapping, Optional


class Facing(Enum):
    """Which way a fighter or projectile faces."""

    LEFT = "left"
    RIGHT = "right"

    def is_left(self) -> bool:
        """True when facing left; sprites facing left are flipped horizontally."""
        return self is Facing.LEFT


@dataclass(frozen=True)
class Clip:
    """A run of spritesheet frames played for one fighter state.

    The clip plays from ``frames.start`` up to and including ``frames.stop``.
    """

    frames: range
    repeat: bool = False


class Animation:
    """Plays the clip that belongs to a fighter's current state."""

    def __init__(self, frame_duration: float, animations: Mapping[Hashable, Clip]) -> None:
        self.frame_duration = frame_duration
        self.animations = dict(animations)
        self.current_frame = 0
        self.played_once = False
        self._state: Optional[Hashable] = None
        self._elapsed = 0.0

    @property
    def current_state(self) -> Optional[Hashable]:
        """The state whose clip is playing, if any."""
        return self._state

    def _clip(self) -> Optional[Clip]:
        if self._state is None:
            return None
        return self.animations.get(self._state)

    def is_finished(self) -> bool:
        """True once the clip has played through to its last frame."""
        return self.played_once

    def is_repeating(self) -> bool:
        """True when the current clip loops."""
        clip = self._clip()
        return clip is not None and clip.repeat

    def is_last_frame(self) -> bool:
        """True when the current frame is at or past the clip's end."""
        indices = self.current_indices()
        if indices is None:
            return False
        return indices.start + self.current_frame >= indices.stop

    def current_indices(self) -> Optional[range]:
        """Frame range of the current clip, or None without one."""
        clip = self._clip()
        return clip.frames if clip is not None else None

    def current_index(self) -> Optional[int]:
        """Spritesheet index of the frame being shown, or None without a clip."""
        indices = self.current_indices()
        if indices is None:
            return None
        return indices.start + self.current_frame

    def set_state(self, state: Hashable) -> None:
        """Switch to ``state``'s clip, restarting it unless already playing."""
        if self._state != state:
            self.played_once = False
            self.current_frame = 0
            self._state = state
            self._elapsed = 0.0

    def tick(self, delta: float) -> Optional[int]:
        """Advance time by ``delta`` seconds and return the sprite index to show."""
        if self.is_finished() and not self.is_repeating():
            return self.current_index()

        self._elapsed = min(self._elapsed + delta, self.frame_duration)
        if self._elapsed >= self.frame_duration:
            self._elapsed = 0.0
            if self.is_last_frame():
                # Marked only here so that the last frame gets its full duration.
                self.played_once = True
                if self.is_repeating():
                    self.current_frame = 0
            else:
                self.current_frame += 1

        return self.current_index()