from __future__ import annotations

from dataclasses import dataclass

from ballsort.components.level_config import LevelConfig
from ballsort.constants import (
    BASE_TUBE_CAPACITY,
    CAPACITY_LEVEL_CAP,
    EARLY_LEVEL_CAP,
    MAX_COLORS,
    MAX_TUBE_CAPACITY,
    MIN_LEVEL,
    RATING_FALLBACK,
    RATING_THRESHOLDS,
    WORKING_TUBES,
)

_EARLY_DIFFICULTY = {1: "Easy", 2: "Medium", 3: "Hard"}


@dataclass(frozen=True, slots=True)
class LevelPreview:
    """Short description of an upcoming level for the transition screen."""
    level: int
    num_colors: int
    tube_capacity: int
    difficulty: str


def clamp_level(level: int) -> int:
    """Treat anything below the first level as the first level."""
    try:
        value = int(level)
    except (TypeError, ValueError, OverflowError):
        return MIN_LEVEL
    return max(MIN_LEVEL, value)


def compute_level_config(level: int) -> LevelConfig:
    """Return the board dimensions for ``level``.

    Levels 1-3 add one color each on four-ball tubes, levels 4-6 hold six
    colors and grow capacity every second level, and from level 7 on the
    board stays at six colors in six-ball tubes.
    """
    level = clamp_level(level)
    if level <= EARLY_LEVEL_CAP:
        num_colors = 3 + level
        return LevelConfig(
            num_colors=num_colors,
            num_tubes=num_colors + WORKING_TUBES,
            tube_capacity=BASE_TUBE_CAPACITY,
        )
    if level <= CAPACITY_LEVEL_CAP:
        return LevelConfig(
            num_colors=MAX_COLORS,
            num_tubes=MAX_COLORS + WORKING_TUBES,
            tube_capacity=BASE_TUBE_CAPACITY + (level - EARLY_LEVEL_CAP) // 2,
        )
    return LevelConfig(
        num_colors=MAX_COLORS,
        num_tubes=MAX_COLORS + WORKING_TUBES,
        tube_capacity=MAX_TUBE_CAPACITY,
    )


def difficulty_label(level: int) -> str:
    level = clamp_level(level)
    if level <= EARLY_LEVEL_CAP:
        return _EARLY_DIFFICULTY[level]
    if level <= CAPACITY_LEVEL_CAP:
        return "Very Hard"
    return "Extreme"


def next_level_preview(level: int) -> LevelPreview:
    """Describe ``level`` for the level-complete screen."""
    level = clamp_level(level)
    config = compute_level_config(level)
    return LevelPreview(
        level=level,
        num_colors=config.num_colors,
        tube_capacity=config.tube_capacity,
        difficulty=difficulty_label(level),
    )


def performance_rating(move_count: int, config: LevelConfig) -> str:
    """Grade a finished level by how far the move count exceeds par."""
    par = config.total_balls
    for allowance, rating in RATING_THRESHOLDS:
        if move_count <= par + allowance:
            return rating
    return RATING_FALLBACK
