"""Dataclasses representing playing-time reports for the rotation engine."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class PlayerTimeBreakdown:
    """Per-role playing time for a single player, live stint included."""

    player_id: str
    name: str
    number: Optional[str]
    role: str
    status: str
    slot: Optional[str]
    is_inactive: bool
    time_on_field_seconds: int
    time_as_defender_seconds: int
    time_as_midfielder_seconds: int
    time_as_attacker_seconds: int
    time_as_goalie_seconds: int
    time_as_substitute_seconds: int
    active_stint_seconds: int
    delta_seconds: int = 0
    fairness: str = "ok"


@dataclass
class TimeReport:
    """Snapshot of playing time distribution for the current period."""

    generated_ms: int
    period_number: int
    formation_type: str
    is_paused: bool
    players: List[PlayerTimeBreakdown] = field(default_factory=list)
    average_field_seconds: float = 0.0
    median_field_seconds: float = 0.0
    min_field_seconds: int = 0
    max_field_seconds: int = 0
    fairness_counts: Dict[str, int] = field(default_factory=dict)
