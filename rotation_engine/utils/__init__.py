"""
Utilities package for the Sideline Rotation Engine.

This package contains constants and time helpers used throughout the engine.
"""
from .time_utils import fmt_mmss, now_ms, elapsed_seconds
from .constants import (
    APP_TITLE, GOALIE, LEFT_DEFENDER, RIGHT_DEFENDER, LEFT_ATTACKER,
    RIGHT_ATTACKER, SUBSTITUTE_1, SUBSTITUTE_2, LEFT_PAIR, RIGHT_PAIR,
    SUB_PAIR, PAIR_DEFENDER, PAIR_ATTACKER, PAIR_KEYS, FIELD_PAIR_KEYS,
    pair_slot
)

__all__ = [
    "fmt_mmss", "now_ms", "elapsed_seconds", "APP_TITLE", "GOALIE",
    "LEFT_DEFENDER", "RIGHT_DEFENDER", "LEFT_ATTACKER", "RIGHT_ATTACKER",
    "SUBSTITUTE_1", "SUBSTITUTE_2", "LEFT_PAIR", "RIGHT_PAIR", "SUB_PAIR",
    "PAIR_DEFENDER", "PAIR_ATTACKER", "PAIR_KEYS", "FIELD_PAIR_KEYS", "pair_slot"
]
