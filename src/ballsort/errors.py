"""Exceptions raised by the puzzle rules."""


class BallSortError(Exception):
    """Base class for recoverable puzzle errors."""


class InvalidIndex(BallSortError, IndexError):
    """Tube index outside the current board."""

    def __init__(self, index: int, num_tubes: int):
        super().__init__(f"Tube index {index!r} out of range for {num_tubes} tubes")
        self.index = index
        self.num_tubes = num_tubes


class IllegalMove(BallSortError, ValueError):
    """Move that breaks the ball placement rule."""

    def __init__(self, src: int, dst: int, reason: str):
        super().__init__(f"Cannot move ball from tube {src} to tube {dst}: {reason}")
        self.src = src
        self.dst = dst
        self.reason = reason
