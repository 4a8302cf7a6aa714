"""
Constants for the Sideline Rotation Engine.

This module contains configuration constants used throughout the engine.
"""

# Application metadata
APP_TITLE = "Sideline Rotation Engine"

# Slot keys shared by every formation type
GOALIE = "goalie"

# Individual formations
LEFT_DEFENDER = "left_defender"
RIGHT_DEFENDER = "right_defender"
LEFT_ATTACKER = "left_attacker"
RIGHT_ATTACKER = "right_attacker"
SUBSTITUTE_1 = "substitute_1"
SUBSTITUTE_2 = "substitute_2"

# Pairs formation - each pair holds a defender and an attacker slot
LEFT_PAIR = "left_pair"
RIGHT_PAIR = "right_pair"
SUB_PAIR = "sub_pair"
PAIR_DEFENDER = "defender"
PAIR_ATTACKER = "attacker"
PAIR_KEYS = (LEFT_PAIR, RIGHT_PAIR, SUB_PAIR)
FIELD_PAIR_KEYS = (LEFT_PAIR, RIGHT_PAIR)

# Time accounting
MS_PER_SECOND = 1000

# Reporting
FAIRNESS_THRESHOLD_SECONDS = 120  # +/- 2 minutes regarded as notable variance

# Match session
DEFAULT_HISTORY_SIZE = 50


def pair_slot(pair_key: str, member: str) -> str:
    """Build the slot key for one member of a pair, e.g. ``left_pair.defender``."""
    return f"{pair_key}.{member}"
