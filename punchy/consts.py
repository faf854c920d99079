"""Gameplay constants shared across the game."""

PLAYER_SPRITE_WIDTH = 96.0
PLAYER_SPRITE_HEIGHT = 80.0
PLAYER_HITBOX_HEIGHT = 50.0

PLAYER_HEIGHT = PLAYER_SPRITE_HEIGHT - 50.0
# Distance from the player, after which the player movement boundary is moved forward.
LEFT_BOUNDARY_MAX_DISTANCE = 380.0

GROUND_Y = -120.0
GROUND_HEIGHT = 150.0
GROUND_OFFSET = 0.0

CAMERA_SPEED = 0.8

MAX_Y = (GROUND_HEIGHT / 2.0) + GROUND_Y
MIN_Y = -(GROUND_HEIGHT / 2.0) + GROUND_Y

ATTACK_LAYER = 101.0
ATTACK_WIDTH = 16.0
ATTACK_HEIGHT = 16.0

ITEM_LAYER = 100.0
ITEM_WIDTH = 30.0
ITEM_HEIGHT = 10.0

THROW_ITEM_X_OFFSET = 5.0
THROW_ITEM_Y_OFFSET = 30.0
THROW_ITEM_ANGLE_OFFSET = 5.0
THROW_ITEM_SPEED = 200.0
THROW_ITEM_DAMAGE = 10
THROW_ITEM_ROTATION_SPEED = 10.0

PICK_ITEM_RADIUS = 24.0

ITEM_BOTTLE_NAME = "Bottle"