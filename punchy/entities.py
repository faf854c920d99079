"""Enemy and item spawns, and picking items up."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Mapping, Optional, Sequence

from punchy.animation import Facing
from punchy.consts import GROUND_Y, ITEM_LAYER, PICK_ITEM_RADIUS
from punchy.metadata import F32_MIN, FighterSpawnMeta, ItemSpawnMeta
from punchy.progress import AssetHandle

IDLE = "idle"
RUNNING = "running"

# Fighters may only pick up or use items while in one of these states.
FREE_STATES = frozenset({IDLE, RUNNING})


@dataclass
class EnemySpawn:
    """An enemy placed in the level, waiting for its fighter asset to load.

    ``trip_point_x`` is the level x coordinate a player must pass before the
    enemy starts moving; once passed it is set to the lowest float.
    """

    fighter_handle: AssetHandle
    position: tuple[float, float, float]
    facing: Facing = Facing.LEFT
    trip_point_x: float = F32_MIN

    @classmethod
    def from_meta(cls, meta: FighterSpawnMeta) -> "EnemySpawn":
        """Place an enemy from level metadata, raised onto the ground line."""
        x, y, z = meta.location
        return cls(
            fighter_handle=meta.fighter_handle,
            position=(x, y + GROUND_Y, z),
            facing=Facing.LEFT,
            trip_point_x=meta.trip_point_x,
        )


@dataclass
class ItemSpawn:
    """An item lying on the map, ready to be picked up."""

    item_handle: AssetHandle
    position: tuple[float, float, float]

    @classmethod
    def from_meta(cls, meta: ItemSpawnMeta) -> "ItemSpawn":
        """Place an item from level metadata on the ground, on the item layer."""
        x, y, z = meta.location
        return cls(item_handle=meta.item_handle, position=(x, y + GROUND_Y, z + ITEM_LAYER))


@dataclass(frozen=True)
class PickCandidate:
    """A player that may pick up an item this frame."""

    player: Hashable
    position: Sequence[float]
    state: Hashable = IDLE
    throw_pressed: bool = False

    @property
    def can_pick(self) -> bool:
        """True when the player is free and has just pressed throw."""
        return self.state in FREE_STATES and self.throw_pressed


def _distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def pick_items(
    players: Iterable[PickCandidate],
    items: Mapping[Hashable, Sequence[float]],
) -> dict[Hashable, Hashable]:
    """Decide which player picks which item.

    ``items`` maps item ids to their positions on the map. Each eligible player
    picks the first item within reach that nobody has picked yet; the result maps
    player to item. Only x and y count towards the distance.
    """
    picked: dict[Hashable, Hashable] = {}
    taken: set[Hashable] = set()
    for candidate in players:
        if not candidate.can_pick:
            continue
        for item_id, item_position in items.items():
            if item_id in taken:
                continue
            if _distance(candidate.position, item_position) <= PICK_ITEM_RADIUS:
                picked[candidate.player] = item_id
                taken.add(item_id)
                break
    return picked


def item_carried_by_player(
    children: Iterable[Hashable],
    item_name: str,
    item_names: Mapping[Hashable, str],
) -> Optional[Hashable]:
    """The first child of a player that is an item called ``item_name``.

    ``item_names`` maps the ids of loaded item entities to their item names;
    children that are not there are not items.
    """
    return next((child for child in children if item_names.get(child) == item_name), None)


__all__ = [
    "EnemySpawn",
    "FREE_STATES",
    "IDLE",
    "ItemSpawn",
    "PickCandidate",
    "RUNNING",
    "item_carried_by_player",
    "pick_items",
]

_DEFAULT_FIELD = field