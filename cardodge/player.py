from __future__ import annotations

from .config import DEFAULT_PLAYFIELD, Playfield

LEFT = -1
RIGHT = 1


class Player:
    def __init__(self, playfield: Playfield = DEFAULT_PLAYFIELD):
        self.playfield = playfield
        self.position = playfield.start_position
        self.score = 0
        # best score seen by this process; survives reset()
        self.high_score = 0

    def reset(self):
        self.position = self.playfield.start_position
        self.score = 0

    def move(self, direction: int) -> bool:
        """Shift one step left (-1) or right (+1). Returns False if the step would leave the road."""
        target = self.position + direction * self.playfield.move_step
        if not self.playfield.road_min <= target <= self.playfield.road_max:
            return False
        self.position = target
        return True

    def record_pass(self):
        self.score += 1
        if self.score > self.high_score:
            self.high_score = self.score
