"""Collision layers and the outcome of an attack hitting a fighter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

KNOCKBACK_FORCE = 150.0
KNOCKBACK_DURATION = 0.15


class BodyLayers(IntFlag):
    """Collision layers, one bit each."""

    ENEMY = 1 << 0
    PLAYER = 1 << 1
    PLAYER_ATTACK = 1 << 2
    ENEMY_ATTACK = 1 << 3
    ITEM = 1 << 4
    ALL = 0xFFFFFFFF


@dataclass(frozen=True)
class Hit:
    """What happens to a fighter struck by an attack."""

    damage: int
    knocked_left: bool
    direction: tuple[float, float]
    duration: float = KNOCKBACK_DURATION


def resolve_hit(damage: int, attack_x: float, fighter_x: float) -> Hit:
    """Work out knockback for an attack at ``attack_x`` hitting a fighter at ``fighter_x``.

    An attack coming from the left knocks the fighter to the right (positive x force)
    and puts it in the knocked-left state; otherwise the opposite.
    """
    if attack_x < fighter_x:
        return Hit(damage=damage, knocked_left=True, direction=(KNOCKBACK_FORCE, 0.0))
    return Hit(damage=damage, knocked_left=False, direction=(-KNOCKBACK_FORCE, 0.0))