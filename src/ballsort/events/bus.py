from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references keep handlers alive for systems nobody holds on to.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT REQUESTS (presentation -> game)
# ============================================================================
EVENT_TUBE_CLICK = "tube_click"                    # payload: index=int
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: level=int|None
EVENT_RESET_REQUEST = "reset_request"              # payload: None
EVENT_NEXT_LEVEL_REQUEST = "next_level_request"    # payload: None
EVENT_RESTART_REQUEST = "restart_request"          # payload: None
EVENT_HINT_REQUEST = "hint_request"                # payload: None


# ============================================================================
# SELECTION & MOVES (game -> presentation)
# ============================================================================
EVENT_TUBE_SELECTED = "tube_selected"      # payload: index=int, valid_targets=list[int]
EVENT_TUBE_DESELECTED = "tube_deselected"  # payload: index=int, reason=str
EVENT_BALL_MOVED = "ball_moved"            # payload: src=int, dst=int, color=str, move_count=int
EVENT_MOVE_INVALID = "move_invalid"        # payload: src=int, dst=int, reason=str
EVENT_TUBE_COMPLETED = "tube_completed"    # payload: index=int, color=str


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_STARTED = "game_started"        # payload: level=int, config=LevelConfig, board=list[list[str]], reason=str
EVENT_LEVEL_COMPLETE = "level_complete"    # payload: summary=LevelSummary
EVENT_HINT_READY = "hint_ready"            # payload: src=int, dst=int
EVENT_HINT_UNAVAILABLE = "hint_unavailable"  # payload: None
