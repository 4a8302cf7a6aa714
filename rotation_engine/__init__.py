"""
Sideline Rotation Engine

Tracks and rotates players on and off a small-sided soccer field, keeping
playing time fair across field roles and the goal under three squad
formations (Pairs-7, Individual-6 and Individual-7).

The engine is a set of pure functions over immutable state; the host
supplies the current time in epoch milliseconds.
"""
from .models import (
    Player, PlayerStats, PlayerRole, PlayerStatus, Formation, FormationType,
    RotationQueue, GameState, TeamConfig, PairRoleRotation, TimeReport
)
from .services import (
    InvalidOperationError, InvariantViolationError, MatchSession,
    create_game_state, start_next_period, build_time_report
)
from .utils import fmt_mmss, now_ms, APP_TITLE

__version__ = "1.0.0"
__author__ = "Soccer Coach Development Team"

__all__ = [
    "Player", "PlayerStats", "PlayerRole", "PlayerStatus", "Formation",
    "FormationType", "RotationQueue", "GameState", "TeamConfig",
    "PairRoleRotation", "TimeReport", "InvalidOperationError",
    "InvariantViolationError", "MatchSession", "create_game_state",
    "start_next_period", "build_time_report", "fmt_mmss", "now_ms", "APP_TITLE"
]
