from __future__ import annotations

import logging
import random
from typing import Any

from esper import World

from ballsort.components.game_state import GameState, MoveOutcome
from ballsort.events.bus import (
    EVENT_BALL_MOVED,
    EVENT_GAME_STARTED,
    EVENT_HINT_READY,
    EVENT_HINT_REQUEST,
    EVENT_HINT_UNAVAILABLE,
    EVENT_LEVEL_COMPLETE,
    EVENT_MOVE_INVALID,
    EVENT_NEW_GAME_REQUEST,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_RESET_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_TUBE_CLICK,
    EVENT_TUBE_COMPLETED,
    EVENT_TUBE_DESELECTED,
    EVENT_TUBE_SELECTED,
    EventBus,
)
from ballsort.systems import board_ops
from ballsort.utils import game_session
from ballsort.utils.game_state import get_game_state, store_game_state

logger = logging.getLogger(__name__)


def _sanitize_index(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class TubeSystem:
    """Bridges tube clicks and menu requests on the bus to the puzzle rules.

    The GameState component is replaced, never mutated, after each handled
    event. Every click is resolved (selection, move, completion and win
    checks) before ``emit`` returns, so no second move can interleave.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        if get_game_state(world) is None:
            store_game_state(world, game_session.new_game(rng=self._rng))
        self.event_bus.subscribe(EVENT_TUBE_CLICK, self.on_tube_click)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self.on_new_game_request)
        self.event_bus.subscribe(EVENT_RESET_REQUEST, self.on_reset_request)
        self.event_bus.subscribe(EVENT_NEXT_LEVEL_REQUEST, self.on_next_level_request)
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self.on_restart_request)
        self.event_bus.subscribe(EVENT_HINT_REQUEST, self.on_hint_request)

    @property
    def state(self) -> GameState:
        state = get_game_state(self.world)
        if state is None:
            raise RuntimeError("GameState component not found")
        return state

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_tube_click(self, sender: Any, **payload: Any) -> None:
        index = _sanitize_index(payload.get("index"))
        if index is None:
            return
        previous = self.state
        if game_session.is_win(previous):
            # Board is finished; wait for a new game request.
            return
        state, outcome = game_session.select_or_move(previous, index)
        store_game_state(self.world, state)

        if outcome is MoveOutcome.SELECTED:
            self.event_bus.emit(
                EVENT_TUBE_SELECTED,
                index=index,
                valid_targets=game_session.selectable_targets(state),
            )
        elif outcome is MoveOutcome.DESELECTED:
            self.event_bus.emit(EVENT_TUBE_DESELECTED, index=index, reason="reselected")
        elif outcome is MoveOutcome.INVALID_MOVE:
            src = previous.selection
            self.event_bus.emit(EVENT_TUBE_DESELECTED, index=src, reason="invalid_move")
            self.event_bus.emit(
                EVENT_MOVE_INVALID,
                src=src,
                dst=index,
                reason=board_ops.rejection_reason(
                    previous.board, src, index, previous.config.tube_capacity
                ),
            )
        elif outcome is MoveOutcome.MOVED:
            self._after_move(previous.selection, index, state)

    def on_new_game_request(self, sender: Any, **payload: Any) -> None:
        level = payload.get("level")
        if level is None:
            level = self.state.level
        self._start(game_session.new_game(level, self._rng), reason="new_game")

    def on_reset_request(self, sender: Any, **payload: Any) -> None:
        self._start(game_session.reset_game(self.state, self._rng), reason="reset")

    def on_next_level_request(self, sender: Any, **payload: Any) -> None:
        self._start(game_session.advance_level(self.state, self._rng), reason="next_level")

    def on_restart_request(self, sender: Any, **payload: Any) -> None:
        self._start(game_session.restart_from_level_one(self._rng), reason="restart")

    def on_hint_request(self, sender: Any, **payload: Any) -> None:
        move = game_session.hint(self.state)
        if move is None:
            self.event_bus.emit(EVENT_HINT_UNAVAILABLE)
            return
        src, dst = move
        self.event_bus.emit(EVENT_HINT_READY, src=src, dst=dst)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _after_move(self, src: int, dst: int, state: GameState) -> None:
        color = board_ops.top_color(state.board[dst])
        self.event_bus.emit(
            EVENT_BALL_MOVED,
            src=src,
            dst=dst,
            color=color,
            move_count=state.move_count,
        )
        if game_session.is_tube_complete(state, dst):
            self.event_bus.emit(EVENT_TUBE_COMPLETED, index=dst, color=color)
        if game_session.is_win(state):
            summary = game_session.level_summary(state)
            logger.info(
                "Level %d complete in %d moves (%s)",
                summary.level, summary.move_count, summary.rating,
            )
            self.event_bus.emit(EVENT_LEVEL_COMPLETE, summary=summary)

    def _start(self, state: GameState, *, reason: str) -> None:
        store_game_state(self.world, state)
        logger.debug("Started level %d (%s)", state.level, reason)
        self.event_bus.emit(
            EVENT_GAME_STARTED,
            level=state.level,
            config=state.config,
            board=state.copy_board(),
            reason=reason,
        )
