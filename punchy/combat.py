"""Attacks, projectiles, thrown items and the flop attack jump."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Optional

from punchy.animation import Facing
from punchy.collisions import BodyLayers
from punchy.consts import (
    ATTACK_HEIGHT,
    ATTACK_LAYER,
    ATTACK_WIDTH,
    ITEM_HEIGHT,
    ITEM_LAYER,
    ITEM_WIDTH,
    PLAYER_HEIGHT,
    THROW_ITEM_ANGLE_OFFSET,
    THROW_ITEM_DAMAGE,
    THROW_ITEM_ROTATION_SPEED,
    THROW_ITEM_SPEED,
    THROW_ITEM_X_OFFSET,
    THROW_ITEM_Y_OFFSET,
)

ATTACKING = "attacking"
WAITING = "waiting"

PROJECTILE_TEXTURE = "bottled_seaweed11x31.png"
PROJECTILE_SPEED = 300.0
PROJECTILE_DAMAGE = 10
PROJECTILE_LIFETIME = 1.0

ENEMY_ATTACK_DAMAGE = 10
ENEMY_ATTACK_OFFSET = 24.0

# Half extents of a melee hitbox once it becomes active.
HITBOX_HALF_EXTENTS = (ATTACK_WIDTH * 0.8, ATTACK_HEIGHT * 0.8)

FLOP_FORWARD_SPEED = 200.0
FLOP_RISE_SPEED = 180.0
FLOP_FALL_SPEED = 90.0


@dataclass(frozen=True)
class Attack:
    """Damage dealt by whatever carries it."""

    damage: int


@dataclass(frozen=True)
class AttackFrames:
    """Animation frames at which a melee hitbox appears and goes away."""

    startup: int
    active: int
    recovery: int

    def hitbox_active(self, frame: int) -> bool:
        """True when the hitbox should exist on ``frame``."""
        return self.startup <= frame <= self.active

    def expired(self, frame: int) -> bool:
        """True once the attack is over and its hitbox should be removed."""
        return frame >= self.recovery


PLAYER_FLOP_FRAMES = AttackFrames(startup=0, active=3, recovery=4)
ENEMY_ATTACK_FRAMES = AttackFrames(startup=1, active=2, recovery=3)


@dataclass
class Projectile:
    """A bottle shot straight ahead, living for a fixed time."""

    position: tuple[float, float, float]
    velocity: tuple[float, float]
    facing: Facing
    rotation_speed: float
    rotate_right: bool
    half_extents: tuple[float, float]
    collision_groups: tuple[BodyLayers, BodyLayers]
    attack: Attack
    lifetime: float = PROJECTILE_LIFETIME
    texture: str = PROJECTILE_TEXTURE
    elapsed: float = field(default=0.0)

    @classmethod
    def create(cls, x: float, y: float, facing: Facing) -> "Projectile":
        """Shoot a projectile from ``(x, y)`` in the direction faced."""
        direction = -1.0 if facing.is_left() else 1.0
        return cls(
            position=(x, y, ATTACK_LAYER),
            velocity=(direction * PROJECTILE_SPEED, 0.0),
            facing=facing,
            rotation_speed=THROW_ITEM_ROTATION_SPEED,
            rotate_right=not facing.is_left(),
            half_extents=(ATTACK_WIDTH / 2.0, ATTACK_HEIGHT / 2.0),
            collision_groups=(BodyLayers.PLAYER_ATTACK, BodyLayers.ENEMY),
            attack=Attack(PROJECTILE_DAMAGE),
        )

    def tick(self, delta: float) -> None:
        """Let ``delta`` seconds of the projectile's life pass."""
        self.elapsed = min(self.elapsed + delta, self.lifetime)

    def finished(self) -> bool:
        """True once the projectile's lifetime is used up."""
        return self.elapsed >= self.lifetime


def throw_angles(facing: Facing) -> tuple[float, float]:
    """Start and end angles, in degrees, of the arc a thrown item follows."""
    if facing.is_left():
        return (90.0 - THROW_ITEM_ANGLE_OFFSET, 180.0)
    return (90.0 + THROW_ITEM_ANGLE_OFFSET, 0.0)


@dataclass
class ThrownItem:
    """An item thrown in an arc in front of a player."""

    position: tuple[float, float, float]
    origin: tuple[float, float]
    radius: tuple[float, float]
    speed: float
    angle: float
    end_angle: float
    inverse_direction: bool
    rotation_speed: float
    rotate_right: bool
    half_extents: tuple[float, float]
    collision_groups: tuple[BodyLayers, BodyLayers]
    attack: Attack
    texture: str = PROJECTILE_TEXTURE

    @classmethod
    def create(cls, x: float, y: float, facing: Facing) -> "ThrownItem":
        """Throw from a player standing at ``(x, y)``.

        The arc starts slightly ahead of the player, at the player's feet.
        """
        offset = -THROW_ITEM_X_OFFSET if facing.is_left() else THROW_ITEM_X_OFFSET
        origin = (x + offset, y - PLAYER_HEIGHT / 2.0)
        start, end = throw_angles(facing)
        return cls(
            position=(origin[0], origin[1], ITEM_LAYER),
            origin=origin,
            radius=(50.0, PLAYER_HEIGHT + THROW_ITEM_Y_OFFSET + ITEM_HEIGHT),
            speed=THROW_ITEM_SPEED,
            angle=start,
            end_angle=end,
            inverse_direction=facing.is_left(),
            rotation_speed=THROW_ITEM_ROTATION_SPEED,
            rotate_right=not facing.is_left(),
            half_extents=(ITEM_WIDTH / 2.0, ITEM_HEIGHT / 2.0),
            collision_groups=(BodyLayers.ITEM, BodyLayers.ENEMY),
            attack=Attack(THROW_ITEM_DAMAGE),
        )


@dataclass
class FlopJump:
    """Movement of a player during the flop attack.

    The player leaps forward over the first three frames, rising on the first
    and falling on the next two. When the animation finishes, the vertical
    component is the height recorded when the jump began, which puts the player
    back on solid footing however many game frames each animation frame lasted.
    """

    start_y: Optional[float] = None

    def step(
        self,
        y: float,
        frame: int,
        finished: bool,
        facing: Facing,
        delta: float,
    ) -> tuple[float, float]:
        """Movement ``(dx, dy)`` for this game frame of the jump."""
        dx = 0.0
        dy = 0.0
        if frame < 3:
            dx = -FLOP_FORWARD_SPEED * delta if facing.is_left() else FLOP_FORWARD_SPEED * delta

        if self.start_y is None:
            self.start_y = y

        if frame < 1:
            dy = FLOP_RISE_SPEED * delta
        elif frame < 3:
            dy = -FLOP_FALL_SPEED * delta
        elif finished:
            dy = self.start_y
            self.start_y = None
        return (dx, dy)


def enemy_attack_offset(facing: Facing) -> float:
    """Horizontal offset of an enemy's hitbox from its body."""
    return -ENEMY_ATTACK_OFFSET if facing.is_left() else ENEMY_ATTACK_OFFSET


def enemy_attack_decision(state: Hashable, coin: bool) -> Optional[str]:
    """What an enemy that reached its target does next.

    Returns the new state, or None when it is already attacking. On a true
    ``coin`` an enemy that is not already waiting waits; otherwise it attacks.
    """
    if state == ATTACKING:
        return None
    if coin and state != WAITING:
        return WAITING
    return ATTACKING