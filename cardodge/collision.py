from __future__ import annotations

from typing import Iterable

from .config import DEFAULT_PLAYFIELD, Playfield
from .obstacles import Obstacle
from .player import Player


def overlap(obstacle: Obstacle, player: Player, playfield: Playfield = DEFAULT_PLAYFIELD) -> int:
    return obstacle.x + playfield.sprite_width - player.position


def collides(player: Player, obstacles: Iterable[Obstacle], playfield: Playfield = DEFAULT_PLAYFIELD) -> bool:
    """True if any active enemy has reached the player's row and overlaps the car.

    This is a column-distance approximation, not a glyph intersection. The hit
    window is collision_width (9) wide, wider than the 4-column sprite, and the
    player's own width is not part of the formula. That tuning is kept as is.
    """
    for ob in obstacles:
        if not ob.active:
            continue
        if ob.y + playfield.sprite_height >= playfield.player_row:
            if 0 <= overlap(ob, player, playfield) < playfield.collision_width:
                return True
    return False
