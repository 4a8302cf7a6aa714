"""
Models package for the Sideline Rotation Engine.

This package contains the immutable value types the engine operates on.
"""
from .player import Player, PlayerStats, PlayerRole, PlayerStatus
from .formation import (
    Formation, FormationType, FormationDefinition, FORMATION_DEFINITIONS, get_definition
)
from .rotation_queue import RotationQueue
from .game_state import GameState, TeamConfig, PairRoleRotation, SubstitutionRecord
from .time_report import PlayerTimeBreakdown, TimeReport

__all__ = [
    "Player", "PlayerStats", "PlayerRole", "PlayerStatus",
    "Formation", "FormationType", "FormationDefinition", "FORMATION_DEFINITIONS",
    "get_definition", "RotationQueue", "GameState", "TeamConfig",
    "PairRoleRotation", "SubstitutionRecord", "PlayerTimeBreakdown", "TimeReport"
]
