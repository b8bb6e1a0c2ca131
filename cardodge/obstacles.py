"""Fixed pool of falling enemy cars.

Slots are allocated once per game and reused: an enemy that leaves the bottom
of the road is recycled to the top with a fresh column instead of being
replaced.
"""

from __future__ import annotations

import random

from .config import DEFAULT_PLAYFIELD, Playfield
from .logger import get_logger

log = get_logger("obstacles")


class Obstacle:
    def __init__(self, index: int, x: int = 0, y: int = 0, active: bool = False):
        self.index = index
        self.x = x
        self.y = y
        self.active = active

    def __repr__(self):
        state = "active" if self.active else "idle"
        return f"Obstacle({self.index}, x={self.x}, y={self.y}, {state})"


class ObstacleSet:
    def __init__(self, playfield: Playfield = DEFAULT_PLAYFIELD, rng=None):
        self.playfield = playfield
        self.rng = rng if rng is not None else random.Random()
        self.obstacles = [Obstacle(i, y=playfield.top_row) for i in range(playfield.enemy_count)]

    def __iter__(self):
        return iter(self.obstacles)

    def __len__(self):
        return len(self.obstacles)

    def __getitem__(self, index: int) -> Obstacle:
        return self.obstacles[index]

    def active(self) -> list[Obstacle]:
        return [ob for ob in self.obstacles if ob.active]

    def reset(self):
        """Put every slot back at the top; only enemy 0 starts moving."""
        for ob in self.obstacles:
            ob.active = False
            ob.y = self.playfield.top_row
        self.obstacles[0].active = True
        for ob in self.obstacles:
            ob.x = self.spawn_position(ob.index)

    def spawn_position(self, index: int) -> int:
        """Pick a column away from the other active enemies.

        Gives up after spawn_attempts tries and keeps the last candidate, so a
        crowded road may get overlapping enemies but this always returns.
        """
        pf = self.playfield
        taken = [ob.x for ob in self.obstacles if ob.index != index and ob.active]
        for _ in range(pf.spawn_attempts):
            x = pf.road_min + self.rng.randrange(pf.spawn_spread)
            if all(abs(x - other) >= pf.separation for other in taken):
                return x
        log.debug("no free column for enemy %d after %d tries, using %d", index, pf.spawn_attempts, x)
        return x

    def should_activate(self, index: int, score: int) -> bool:
        pf = self.playfield
        if index == 0:
            return True
        if index == 1:
            return self.obstacles[0].y == pf.activation_row
        return score >= pf.activation_score

    def activate(self, score: int) -> list[Obstacle]:
        """Start any idle enemy whose trigger has fired; returns the ones started."""
        started = []
        for ob in self.obstacles:
            if ob.active or not self.should_activate(ob.index, score):
                continue
            ob.active = True
            if ob.index >= 2:
                ob.y = self.playfield.top_row
            log.debug("enemy %d activated at score %d", ob.index, score)
            started.append(ob)
        return started

    def advance(self):
        for ob in self.obstacles:
            if ob.active:
                ob.y += 1

    def exited(self) -> list[Obstacle]:
        bottom = self.playfield.bottom_bound
        return [ob for ob in self.obstacles if ob.active and ob.y > bottom]

    def recycle(self, index: int):
        ob = self.obstacles[index]
        ob.y = self.playfield.top_row
        ob.x = self.spawn_position(index)
