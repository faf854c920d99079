"""Camera following the rightmost player."""

from __future__ import annotations

from typing import Iterable, Optional

from punchy.consts import CAMERA_SPEED


def camera_move_speed(
    player_xs: Iterable[float], camera_x: float, right_boundary: float
) -> Optional[float]:
    """Speed to move the camera right, or None when it should stay.

    The camera moves once the rightmost player passes ``right_boundary``
    beyond the camera's x position. No limits are enforced here.
    """
    max_x = max(player_xs, default=None)
    if max_x is None:
        return None
    diff = max_x - camera_x - right_boundary
    if diff > 0:
        return diff * CAMERA_SPEED
    return None