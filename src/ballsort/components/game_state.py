"""Game state resource describing the puzzle currently in play."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from ballsort.components.level_config import LevelConfig
from ballsort.utils.difficulty import compute_level_config

Tube = List[str]
Board = List[Tube]


class MoveOutcome(Enum):
    """Result of a single tube click."""
    SELECTED = auto()
    DESELECTED = auto()
    MOVED = auto()
    INVALID_MOVE = auto()
    NO_OP = auto()


@dataclass
class GameState:
    """Singleton component storing the board, level and current selection.

    ``board`` lists tubes bottom-to-top. ``config`` is recomputed from ``level``.
    """
    board: Board
    level: int
    move_count: int = 0
    selection: Optional[int] = None

    @property
    def config(self) -> LevelConfig:
        return compute_level_config(self.level)

    def copy_board(self) -> Board:
        return [list(tube) for tube in self.board]
