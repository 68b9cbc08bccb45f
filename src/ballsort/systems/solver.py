"""Depth-first search for a sequence of legal moves that sorts a board.

Used to confirm generated layouts are solvable and to suggest a hint move.
Boards are compared by a canonical key (sorted tuple of tubes) so that
layouts differing only in tube order are explored once.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ballsort.components.game_state import Tube
from ballsort.constants import SOLVER_MAX_STATES
from ballsort.systems.board_ops import check_win, is_tube_sorted

logger = logging.getLogger(__name__)

Move = Tuple[int, int]
_Key = Tuple[Tuple[str, ...], ...]


def _key(board: Sequence[Tube]) -> _Key:
    return tuple(sorted(tuple(tube) for tube in board))


def _candidate_moves(board: Sequence[Tube], capacity: int) -> List[Move]:
    moves: List[Move] = []
    for src, source in enumerate(board):
        if not source or is_tube_sorted(source, capacity):
            continue
        color = source[-1]
        monochrome = all(ball == color for ball in source)
        tried_empty = False
        for dst, target in enumerate(board):
            if dst == src or len(target) >= capacity:
                continue
            if not target:
                # Only one empty destination is worth trying, and never for a single-color tube.
                if monochrome or tried_empty:
                    continue
                tried_empty = True
                moves.append((src, dst))
            elif target[-1] == color:
                moves.append((src, dst))
    # Prefer stacking onto matching colors over spilling into empty tubes.
    moves.sort(key=lambda move: not board[move[1]])
    return moves


def solve(
    board: Sequence[Tube],
    capacity: int,
    num_colors: int,
    *,
    max_states: int = SOLVER_MAX_STATES,
) -> Optional[List[Move]]:
    """Return a list of ``(src, dst)`` moves that wins the board.

    Returns an empty list for an already won board and ``None`` when no
    solution was found within ``max_states`` visited boards.
    """
    start = [list(tube) for tube in board]
    if check_win(start, capacity, num_colors):
        return []
    seen = {_key(start)}
    # Each frame: board, moves still to try, path taken to reach the board.
    stack = [(start, _candidate_moves(start, capacity), [])]
    while stack:
        current, pending, path = stack[-1]
        if not pending:
            stack.pop()
            continue
        src, dst = pending.pop(0)
        nxt = [list(tube) for tube in current]
        nxt[dst].append(nxt[src].pop())
        key = _key(nxt)
        if key in seen:
            continue
        seen.add(key)
        route = path + [(src, dst)]
        if check_win(nxt, capacity, num_colors):
            logger.debug("Solved in %d moves after %d states", len(route), len(seen))
            return route
        if len(seen) >= max_states:
            logger.debug("Solver gave up after %d states", len(seen))
            return None
        stack.append((nxt, _candidate_moves(nxt, capacity), route))
    return None


def is_solvable(board: Sequence[Tube], capacity: int, num_colors: int, *, max_states: int = SOLVER_MAX_STATES) -> bool:
    return solve(board, capacity, num_colors, max_states=max_states) is not None
