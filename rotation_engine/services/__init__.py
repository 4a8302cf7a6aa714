"""
Services package for the Sideline Rotation Engine.

This package contains the time accounting, substitution strategies, state
transitions and reporting built on top of the immutable models.
"""
from .errors import RotationEngineError, InvalidOperationError, InvariantViolationError
from .time_accounting import (
    accrue, change_role, start_stint, end_stint, pause_player_time,
    resume_player_time, current_stint_seconds
)
from .substitution_strategies import (
    SubstitutionContext, SubstitutionResult, SubstitutionStrategy,
    PairsSubstitution, IndividualSubstitution, Individual7Substitution,
    field_pointers, get_strategy
)
from .game_transitions import (
    substitute, undo, switch_positions, switch_goalie, toggle_inactive,
    swap_bench_slots, set_next_pair_to_sub_out, set_next_player_to_sub_out,
    set_next_next_player_to_sub_out, set_next_to_go_in, pause, resume,
    finalize_period
)
from .game_factory import create_game_state, start_next_period
from .time_report_service import build_time_report, time_report_csv
from .match_session import MatchSession

__all__ = [
    "RotationEngineError", "InvalidOperationError", "InvariantViolationError",
    "accrue", "change_role", "start_stint", "end_stint", "pause_player_time",
    "resume_player_time", "current_stint_seconds",
    "SubstitutionContext", "SubstitutionResult", "SubstitutionStrategy",
    "PairsSubstitution", "IndividualSubstitution", "Individual7Substitution",
    "field_pointers", "get_strategy",
    "substitute", "undo", "switch_positions", "switch_goalie", "toggle_inactive",
    "swap_bench_slots", "set_next_pair_to_sub_out", "set_next_player_to_sub_out",
    "set_next_next_player_to_sub_out", "set_next_to_go_in", "pause", "resume",
    "finalize_period", "create_game_state", "start_next_period",
    "build_time_report", "time_report_csv", "MatchSession"
]
