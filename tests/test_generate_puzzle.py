import random
from collections import Counter

import pytest

from ballsort.constants import PALETTE
from ballsort.systems import board_ops
from ballsort.utils.difficulty import compute_level_config


def test_level_one_layout():
    config = compute_level_config(1)
    board = board_ops.generate_puzzle(config, random.Random(3))
    assert len(board) == 6
    assert [len(tube) for tube in board] == [4, 4, 4, 4, 0, 0]
    counts = Counter(ball for tube in board for ball in tube)
    assert set(counts) == set(PALETTE[:4])
    assert all(count == 4 for count in counts.values())


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 7])
def test_generated_board_is_never_already_won(level):
    config = compute_level_config(level)
    rng = random.Random(level)
    for _ in range(50):
        board = board_ops.generate_puzzle(config, rng)
        assert not board_ops.check_win(board, config.tube_capacity, config.num_colors)
        assert board_ops.ball_count(board) == config.total_balls
        assert all(len(tube) <= config.tube_capacity for tube in board)


class _SortingRandom(random.Random):
    """Leaves the pool untouched for the first few shuffles, so the board comes out solved."""

    def __init__(self, solved_shuffles: int):
        super().__init__(0)
        self.solved_shuffles = solved_shuffles
        self.calls = 0

    def shuffle(self, x):
        self.calls += 1
        if self.calls <= self.solved_shuffles:
            return
        super().shuffle(x)


def test_solved_shuffle_is_rejected_and_retried():
    config = compute_level_config(1)
    rng = _SortingRandom(solved_shuffles=2)
    board = board_ops.generate_puzzle(config, rng)
    assert rng.calls >= 3
    assert not board_ops.check_win(board, config.tube_capacity, config.num_colors)


def test_same_seed_gives_same_board():
    config = compute_level_config(2)
    first = board_ops.generate_puzzle(config, random.Random(42))
    second = board_ops.generate_puzzle(config, random.Random(42))
    assert first == second
