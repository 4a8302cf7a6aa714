"""
Single-slot driver for a match in progress.

MatchSession holds the one current game state, stamps every transition with
the time from its clock and records a short history of what was applied.
"""
import logging
from collections import deque
from typing import Callable, List, Optional

from ..models import GameState, TimeReport
from ..utils.constants import DEFAULT_HISTORY_SIZE
from ..utils.time_utils import now_ms
from . import game_transitions
from .time_report_service import build_time_report

logger = logging.getLogger(__name__)


class MatchSession:
    """
    Serializes transitions against a single game state.

    Each action returns True when the state changed and False when the
    transition rejected the request (the transition returned the very same
    state object). Undo covers the last substitution only; there is no redo.
    """

    def __init__(self, state: GameState, clock: Optional[Callable[[], int]] = None,
                 max_history: int = DEFAULT_HISTORY_SIZE):
        """
        Initialize the session.

        Args:
            state: Initial game state
            clock: Callable returning the current time in epoch milliseconds
            max_history: Maximum number of entries kept in history
        """
        self._state = state
        self._clock = clock or now_ms
        self._history = deque(maxlen=max_history)

    @property
    def state(self) -> GameState:
        return self._state

    def _apply(self, description: str, transition: Callable[..., GameState], *args) -> bool:
        new_state = transition(self._state, *args)
        if new_state is self._state:
            logger.debug("No change: %s", description)
            return False
        self._state = new_state
        self._history.append(description)
        return True

    # ---------- Actions ---------- #

    def substitute(self) -> bool:
        return self._apply("Substitution", game_transitions.substitute, self._clock())

    def undo_substitution(self) -> bool:
        return self._apply("Undo substitution", game_transitions.undo, self._clock())

    def switch_positions(self, player_a_id: str, player_b_id: str) -> bool:
        return self._apply(
            f"Switch {player_a_id} and {player_b_id}",
            game_transitions.switch_positions, player_a_id, player_b_id, self._clock(),
        )

    def switch_goalie(self, new_goalie_id: str) -> bool:
        return self._apply(
            f"New goalie {new_goalie_id}",
            game_transitions.switch_goalie, new_goalie_id, self._clock(),
        )

    def toggle_inactive(self, player_id: str) -> bool:
        return self._apply(
            f"Toggle inactive {player_id}",
            game_transitions.toggle_inactive, player_id, self._clock(),
        )

    def swap_bench_slots(self, player_a_id: str, player_b_id: str) -> bool:
        return self._apply(
            f"Swap substitutes {player_a_id} and {player_b_id}",
            game_transitions.swap_bench_slots, player_a_id, player_b_id,
        )

    def set_next_pair_to_sub_out(self, pair_key: str) -> bool:
        return self._apply(
            f"Next pair {pair_key}", game_transitions.set_next_pair_to_sub_out, pair_key
        )

    def set_next_player_to_sub_out(self, player_id: str) -> bool:
        return self._apply(
            f"Next off {player_id}", game_transitions.set_next_player_to_sub_out, player_id
        )

    def set_next_next_player_to_sub_out(self, player_id: str) -> bool:
        return self._apply(
            f"Next-next off {player_id}",
            game_transitions.set_next_next_player_to_sub_out, player_id,
        )

    def set_next_to_go_in(self, player_id: str) -> bool:
        return self._apply(
            f"Next in {player_id}", game_transitions.set_next_to_go_in, player_id
        )

    def pause(self) -> bool:
        return self._apply("Pause", game_transitions.pause, self._clock())

    def resume(self) -> bool:
        return self._apply("Resume", game_transitions.resume, self._clock())

    def finalize_period(self) -> bool:
        return self._apply("End period", game_transitions.finalize_period, self._clock())

    # ---------- Queries ---------- #

    def time_report(self) -> TimeReport:
        """Build a playing time report at the current clock time."""
        return build_time_report(self._state, self._clock())

    def can_undo(self) -> bool:
        """Check if a substitution can be undone."""
        return self._state.last_substitution is not None

    def get_history(self) -> List[str]:
        """Get descriptions of the applied transitions, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
