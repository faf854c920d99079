"""Actions that players and menus can be bound to."""

from enum import Enum


class PlayerAction(Enum):
    """In-game actions of a player."""

    MOVE = "Move"
    FLOP_ATTACK = "FlopAttack"
    THROW = "Throw"
    SHOOT = "Shoot"


class MenuAction(Enum):
    """Actions available in menus."""

    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"
    CONFIRM = "Confirm"
    BACK = "Back"
    PAUSE = "Pause"
    TOGGLE_FULLSCREEN = "ToggleFullscreen"