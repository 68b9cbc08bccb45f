from __future__ import annotations

import logging
import random
from typing import List, Sequence

from ballsort.components.game_state import Board, Tube
from ballsort.components.level_config import LevelConfig
from ballsort.constants import PALETTE, WORKING_TUBES
from ballsort.errors import IllegalMove, InvalidIndex

logger = logging.getLogger(__name__)


def check_index(board: Sequence[Tube], index: int) -> None:
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(board):
        raise InvalidIndex(index, len(board))


def _in_range(board: Sequence[Tube], index: int) -> bool:
    try:
        check_index(board, index)
    except InvalidIndex:
        return False
    return True


def top_color(tube: Tube) -> str | None:
    return tube[-1] if tube else None


def is_tube_sorted(tube: Tube, capacity: int) -> bool:
    """Full and holding a single color."""
    return len(tube) == capacity and all(ball == tube[0] for ball in tube)


def ball_count(board: Sequence[Tube]) -> int:
    return sum(len(tube) for tube in board)


def build_ball_pool(config: LevelConfig) -> List[str]:
    """Each of the first ``num_colors`` palette colors, ``tube_capacity`` times."""
    if config.num_colors > len(PALETTE):
        raise ValueError(f"Palette has {len(PALETTE)} colors, level needs {config.num_colors}")
    pool: List[str] = []
    for color in PALETTE[:config.num_colors]:
        pool.extend([color] * config.tube_capacity)
    return pool


def generate_puzzle(config: LevelConfig, rng: random.Random | None = None) -> Board:
    """Shuffle the level's balls into all but the working tubes.

    Shuffles are retried until the layout is not already solved.
    """
    rng = rng or random.Random()
    pool = build_ball_pool(config)
    filled = config.num_tubes - WORKING_TUBES
    if filled * config.tube_capacity != len(pool):
        raise ValueError(
            f"{filled} tubes of {config.tube_capacity} cannot hold {len(pool)} balls"
        )
    attempts = 0
    while True:
        attempts += 1
        rng.shuffle(pool)
        board: Board = [
            pool[i * config.tube_capacity:(i + 1) * config.tube_capacity]
            for i in range(filled)
        ]
        board.extend([] for _ in range(WORKING_TUBES))
        if not check_win(board, config.tube_capacity, config.num_colors):
            break
        logger.debug("Shuffle %d produced a solved board; reshuffling", attempts)
    logger.debug(
        "Generated %d-tube board (%d colors, capacity %d) after %d shuffle(s)",
        config.num_tubes, config.num_colors, config.tube_capacity, attempts,
    )
    return board


def can_move_ball(board: Sequence[Tube], src: int, dst: int, capacity: int) -> bool:
    return rejection_reason(board, src, dst, capacity) is None


def rejection_reason(board: Sequence[Tube], src: int, dst: int, capacity: int) -> str | None:
    """Reason code for an illegal move, or None when the move is legal."""
    if not _in_range(board, src) or not _in_range(board, dst):
        return "out_of_range"
    if src == dst:
        return "same_tube"
    if not board[src]:
        return "source_empty"
    if len(board[dst]) >= capacity:
        return "destination_full"
    if board[dst] and board[src][-1] != board[dst][-1]:
        return "color_mismatch"
    return None


def apply_move(board: Sequence[Tube], src: int, dst: int, capacity: int) -> Board:
    """Return a copy of ``board`` with the top ball of ``src`` placed on ``dst``.

    Raises InvalidIndex or IllegalMove instead of touching the board.
    """
    check_index(board, src)
    check_index(board, dst)
    reason = rejection_reason(board, src, dst, capacity)
    if reason is not None:
        raise IllegalMove(src, dst, reason)
    new_board = [list(tube) for tube in board]
    new_board[dst].append(new_board[src].pop())
    return new_board


def valid_targets(board: Sequence[Tube], src: int, capacity: int) -> List[int]:
    return [dst for dst in range(len(board)) if can_move_ball(board, src, dst, capacity)]


def check_win(board: Sequence[Tube], capacity: int, num_colors: int) -> bool:
    """Every tube is empty or sorted, and all level colors are present."""
    colors = set()
    for tube in board:
        if not tube:
            continue
        if not is_tube_sorted(tube, capacity):
            return False
        colors.add(tube[0])
    return len(colors) == num_colors


def check_tube_completion(board: Sequence[Tube], index: int, capacity: int) -> bool:
    check_index(board, index)
    return is_tube_sorted(board[index], capacity)
