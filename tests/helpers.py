from __future__ import annotations

from typing import Sequence

from ballsort.components.game_state import GameState
from ballsort.events.bus import EventBus


def make_state(
    board: Sequence[Sequence[str]],
    *,
    level: int = 1,
    selection: int | None = None,
) -> GameState:
    """Build a GameState around a hand-written board.

    Capacity and color count come from ``level``, so win checks use that
    level's rules; boards only exercising selection may have fewer tubes.
    """

    tubes = [list(tube) for tube in board]
    return GameState(board=tubes, level=level, selection=selection)


def capture_events(bus: EventBus, *names: str) -> list[tuple[str, dict]]:
    """Record (name, payload) for every emit of the given events, in order."""

    received: list[tuple[str, dict]] = []
    for name in names:
        def _handler(sender, _name=name, **payload):
            received.append((_name, payload))
        bus.subscribe(name, _handler)
    return received
