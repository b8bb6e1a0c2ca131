from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SCREEN_WIDTH = 90
SCREEN_HEIGHT = 26
WIN_WIDTH = 70
BORDER_COLS = 17
ENEMY_COUNT = 3
CAR_SIZE = 4
CAR_BOTTOM_Y = 22  # row where the player car sits
ROAD_MIN_X = BORDER_COLS + 1
ROAD_MAX_X = WIN_WIDTH - BORDER_COLS - CAR_SIZE - 1

MOVE_STEP = 4
# wider than the sprite on purpose; see collision.collides
COLLISION_WIDTH = 9
SPAWN_ATTEMPTS = 20
SPAWN_SPREAD = 33  # obstacles spawn at ROAD_MIN_X + randrange(SPAWN_SPREAD)
TOP_ROW = 1
ACTIVATION_ROW = 10  # enemy 1 starts when enemy 0 reaches this row
ACTIVATION_SCORE = 5  # enemy 2 starts at this score

DATA_FILE = Path("data.txt")


@dataclass(frozen=True)
class Playfield:
    """Fixed geometry of the road, the sprites and the obstacle rules."""

    road_min: int = ROAD_MIN_X
    road_max: int = ROAD_MAX_X
    player_row: int = CAR_BOTTOM_Y
    height: int = SCREEN_HEIGHT
    width: int = SCREEN_WIDTH
    win_width: int = WIN_WIDTH
    sprite_width: int = CAR_SIZE
    sprite_height: int = CAR_SIZE
    top_row: int = TOP_ROW
    move_step: int = MOVE_STEP
    collision_width: int = COLLISION_WIDTH
    enemy_count: int = ENEMY_COUNT
    spawn_spread: int = SPAWN_SPREAD
    spawn_attempts: int = SPAWN_ATTEMPTS
    activation_row: int = ACTIVATION_ROW
    activation_score: int = ACTIVATION_SCORE

    def __post_init__(self):
        if self.road_min > self.road_max:
            raise ValueError(f"road_min {self.road_min} > road_max {self.road_max}")
        if self.sprite_height >= self.height or self.sprite_width > self.win_width:
            raise ValueError("sprite does not fit inside the playfield")
        if not 0 <= self.player_row < self.height:
            raise ValueError(f"player_row {self.player_row} outside 0..{self.height - 1}")
        if self.spawn_attempts < 1 or self.spawn_spread < 1:
            raise ValueError("spawn_attempts and spawn_spread must be positive")

    @property
    def bottom_bound(self) -> int:
        # an obstacle has left the road once y > bottom_bound
        return self.height - self.sprite_height

    @property
    def separation(self) -> int:
        return self.sprite_width + 2

    @property
    def start_position(self) -> int:
        return self.win_width // 2 - 1


DEFAULT_PLAYFIELD = Playfield()
