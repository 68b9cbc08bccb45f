from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LevelConfig:
    """Board dimensions derived from the level number."""
    num_colors: int
    num_tubes: int
    tube_capacity: int

    @property
    def total_balls(self) -> int:
        return self.num_colors * self.tube_capacity