import itertools
import random

import pytest

from ballsort.errors import IllegalMove, InvalidIndex
from ballsort.systems import board_ops
from ballsort.utils.difficulty import compute_level_config

R, B, G, Y = 'red', 'blue', 'green', 'yellow'


def test_example_board_rules():
    board = [[R, R, R, R], [B, B, B], [], [B]]
    assert board_ops.can_move_ball(board, 3, 2, 4)
    assert not board_ops.can_move_ball(board, 2, 3, 4), 'Empty source has nothing to move'
    assert board_ops.can_move_ball(board, 3, 1, 4)
    assert not board_ops.can_move_ball(board, 1, 0, 4), 'Full destination'
    assert not board_ops.check_win(board, 4, 2)


def test_same_tube_is_never_a_move():
    board = [[R, B], [R], []]
    for index in range(len(board)):
        assert not board_ops.can_move_ball(board, index, index, 4)


def test_mismatched_tops_rejected():
    board = [[R, B], [G], []]
    assert not board_ops.can_move_ball(board, 0, 1, 4)
    assert board_ops.can_move_ball(board, 0, 2, 4)


def test_out_of_range_indices_are_not_legal():
    board = [[R], []]
    assert not board_ops.can_move_ball(board, 0, 5, 4)
    assert not board_ops.can_move_ball(board, -1, 1, 4)


def test_apply_move_moves_exactly_one_ball():
    board = [[R, B, B], [G, B], [], [Y]]
    snapshot = [list(tube) for tube in board]
    moved = board_ops.apply_move(board, 0, 1, 4)
    assert moved == [[R, B], [G, B, B], [], [Y]]
    assert board == snapshot, 'Input board must not be mutated'


def test_apply_move_rejects_illegal_move_without_changes():
    board = [[R, B], [G], []]
    snapshot = [list(tube) for tube in board]
    with pytest.raises(IllegalMove) as excinfo:
        board_ops.apply_move(board, 0, 1, 4)
    assert excinfo.value.reason == 'color_mismatch'
    assert board == snapshot


@pytest.mark.parametrize('src, dst, expected', [
    (0, 5, 'out_of_range'),
    (-1, 2, 'out_of_range'),
    (0, 0, 'same_tube'),
    (2, 0, 'source_empty'),
    (1, 3, 'destination_full'),
    (0, 1, 'color_mismatch'),
    (0, 2, None),
])
def test_rejection_reason_codes(src, dst, expected):
    board = [[R, B], [G] * 4, [], [Y] * 4]
    assert board_ops.rejection_reason(board, src, dst, 4) == expected
    assert board_ops.can_move_ball(board, src, dst, 4) is (expected is None)


def test_apply_move_rejects_bad_index():
    board = [[R], []]
    with pytest.raises(InvalidIndex):
        board_ops.apply_move(board, 0, 2, 4)
    with pytest.raises(InvalidIndex):
        board_ops.check_tube_completion(board, 9, 4)


def test_illegal_move_is_a_value_error():
    with pytest.raises(ValueError):
        board_ops.apply_move([[], [R]], 0, 1, 4)


def test_random_play_conserves_balls_and_touches_two_tubes():
    config = compute_level_config(2)
    rng = random.Random(11)
    board = board_ops.generate_puzzle(config, rng)
    capacity = config.tube_capacity
    for _ in range(300):
        legal = [
            (src, dst)
            for src, dst in itertools.permutations(range(len(board)), 2)
            if board_ops.can_move_ball(board, src, dst, capacity)
        ]
        if not legal:
            break
        src, dst = rng.choice(legal)
        after = board_ops.apply_move(board, src, dst, capacity)
        assert board_ops.ball_count(after) == config.total_balls
        assert len(after[src]) == len(board[src]) - 1
        assert len(after[dst]) == len(board[dst]) + 1
        assert after[dst][-1] == board[src][-1]
        for index in range(len(board)):
            if index not in (src, dst):
                assert after[index] == board[index]
        board = after


def test_valid_targets_lists_every_legal_destination():
    board = [[R, B], [G, B], [], [Y, Y, Y, B]]
    assert board_ops.valid_targets(board, 0, 4) == [1, 2]
    assert board_ops.valid_targets(board, 2, 4) == []
