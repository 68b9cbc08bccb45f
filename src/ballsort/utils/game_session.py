"""Session-level operations threading an explicit GameState value.

Every function returns a new ``GameState`` and leaves its input untouched,
so a presentation layer can keep the previous state for comparison.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ballsort.components.game_state import GameState, MoveOutcome
from ballsort.components.level_config import LevelConfig
from ballsort.constants import MIN_LEVEL
from ballsort.errors import IllegalMove, InvalidIndex
from ballsort.systems import board_ops
from ballsort.systems.solver import solve
from ballsort.utils.difficulty import (
    LevelPreview,
    clamp_level,
    compute_level_config,
    next_level_preview,
    performance_rating,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LevelSummary:
    """Stats shown once a level is won."""
    level: int
    move_count: int
    num_colors: int
    tube_capacity: int
    num_tubes: int
    rating: str
    next_level: LevelPreview


def new_game(level: int = MIN_LEVEL, rng: random.Random | None = None) -> GameState:
    level = clamp_level(level)
    config = compute_level_config(level)
    board = board_ops.generate_puzzle(config, rng)
    logger.debug("New game at level %d", level)
    return GameState(board=board, level=level)


def reset_game(state: GameState, rng: random.Random | None = None) -> GameState:
    """Reshuffle the current level from scratch."""
    return new_game(state.level, rng)


def advance_level(state: GameState, rng: random.Random | None = None) -> GameState:
    logger.debug("Advancing from level %d", state.level)
    return new_game(state.level + 1, rng)


def restart_from_level_one(rng: random.Random | None = None) -> GameState:
    return new_game(MIN_LEVEL, rng)


def select_or_move(state: GameState, index: int) -> Tuple[GameState, MoveOutcome]:
    """Handle one tube click.

    With nothing selected a non-empty tube becomes the selection. With a
    selection, clicking the same tube deselects it and clicking any other
    tube attempts a move; either way the selection is cleared afterwards.
    """
    capacity = state.config.tube_capacity
    selected = state.selection
    if selected is None:
        try:
            board_ops.check_index(state.board, index)
        except InvalidIndex as exc:
            logger.debug("Ignoring click: %s", exc)
            return state, MoveOutcome.NO_OP
        if not state.board[index]:
            return state, MoveOutcome.NO_OP
        return replace(state, selection=index), MoveOutcome.SELECTED

    cleared = replace(state, selection=None)
    if index == selected:
        return cleared, MoveOutcome.DESELECTED
    try:
        board = board_ops.apply_move(state.board, selected, index, capacity)
    except (IllegalMove, InvalidIndex) as exc:
        logger.debug("Rejected move: %s", exc)
        return cleared, MoveOutcome.INVALID_MOVE
    logger.debug("Moved ball %d -> %d", selected, index)
    return replace(cleared, board=board, move_count=state.move_count + 1), MoveOutcome.MOVED


def is_win(state: GameState) -> bool:
    return board_ops.check_win(state.board, state.config.tube_capacity, state.config.num_colors)


def is_tube_complete(state: GameState, index: int) -> bool:
    """False for an index outside the board."""
    try:
        return board_ops.check_tube_completion(state.board, index, state.config.tube_capacity)
    except InvalidIndex:
        return False


def selectable_targets(state: GameState) -> list[int]:
    """Tubes the selected ball may move to, empty when nothing is selected."""
    if state.selection is None:
        return []
    return board_ops.valid_targets(state.board, state.selection, state.config.tube_capacity)


def next_level_config(state: GameState) -> LevelConfig:
    return compute_level_config(state.level + 1)


def level_summary(state: GameState) -> LevelSummary:
    config = state.config
    return LevelSummary(
        level=state.level,
        move_count=state.move_count,
        num_colors=config.num_colors,
        tube_capacity=config.tube_capacity,
        num_tubes=config.num_tubes,
        rating=performance_rating(state.move_count, config),
        next_level=next_level_preview(state.level + 1),
    )


def hint(state: GameState, **solver_kwargs) -> Optional[Tuple[int, int]]:
    """First move of a solution from the current board, if one is found."""
    route = solve(state.board, state.config.tube_capacity, state.config.num_colors, **solver_kwargs)
    if not route:
        return None
    return route[0]
