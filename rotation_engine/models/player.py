"""
Player model for the Sideline Rotation Engine.

This module contains the Player and PlayerStats dataclasses which represent
individual players and their in-period state, including per-role playing time
counters and the timestamp of the current stint.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional


class PlayerRole(Enum):
    """Role a player currently fills."""
    GOALIE = "goalie"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    ATTACKER = "attacker"
    SUBSTITUTE = "substitute"


class PlayerStatus(Enum):
    """Where a player currently is. Exactly one applies at any time."""
    ON_FIELD = "on_field"
    SUBSTITUTE = "substitute"
    GOALIE = "goalie"


# Role -> name of the per-role counter credited while on the field
FIELD_ROLE_COUNTERS = {
    PlayerRole.DEFENDER: "time_as_defender_seconds",
    PlayerRole.MIDFIELDER: "time_as_midfielder_seconds",
    PlayerRole.ATTACKER: "time_as_attacker_seconds",
}


@dataclass(frozen=True)
class PlayerStats:
    """
    In-period state and accumulated time for a single player.

    Attributes:
        role: Current role
        status: Current status (on field, on the bench, or in goal)
        slot: Formation slot key the player occupies
        time_on_field_seconds: Total outfield seconds
        time_as_defender_seconds: Outfield seconds spent as defender
        time_as_midfielder_seconds: Outfield seconds spent as midfielder
        time_as_attacker_seconds: Outfield seconds spent as attacker
        time_as_goalie_seconds: Seconds spent in goal
        time_as_substitute_seconds: Seconds spent on the bench
        stint_start_ms: Epoch milliseconds when the current stint started,
            None when the player is not accruing time
        is_inactive: Bench-only flag removing the player from rotation
        is_captain: Captain flag
        fair_play_award: Fair-play award flag
    """
    role: PlayerRole = PlayerRole.SUBSTITUTE
    status: PlayerStatus = PlayerStatus.SUBSTITUTE
    slot: Optional[str] = None
    time_on_field_seconds: int = 0
    time_as_defender_seconds: int = 0
    time_as_midfielder_seconds: int = 0
    time_as_attacker_seconds: int = 0
    time_as_goalie_seconds: int = 0
    time_as_substitute_seconds: int = 0
    stint_start_ms: Optional[int] = None
    is_inactive: bool = False
    is_captain: bool = False
    fair_play_award: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "role": self.role.value,
            "status": self.status.value,
            "slot": self.slot,
            "time_on_field_seconds": self.time_on_field_seconds,
            "time_as_defender_seconds": self.time_as_defender_seconds,
            "time_as_midfielder_seconds": self.time_as_midfielder_seconds,
            "time_as_attacker_seconds": self.time_as_attacker_seconds,
            "time_as_goalie_seconds": self.time_as_goalie_seconds,
            "time_as_substitute_seconds": self.time_as_substitute_seconds,
            "stint_start_ms": self.stint_start_ms,
            "is_inactive": self.is_inactive,
            "is_captain": self.is_captain,
            "fair_play_award": self.fair_play_award,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PlayerStats':
        """Create from dictionary for JSON deserialization."""
        if not data:
            return cls()
        return cls(
            role=PlayerRole(data.get("role", PlayerRole.SUBSTITUTE.value)),
            status=PlayerStatus(data.get("status", PlayerStatus.SUBSTITUTE.value)),
            slot=data.get("slot"),
            time_on_field_seconds=data.get("time_on_field_seconds", 0),
            time_as_defender_seconds=data.get("time_as_defender_seconds", 0),
            time_as_midfielder_seconds=data.get("time_as_midfielder_seconds", 0),
            time_as_attacker_seconds=data.get("time_as_attacker_seconds", 0),
            time_as_goalie_seconds=data.get("time_as_goalie_seconds", 0),
            time_as_substitute_seconds=data.get("time_as_substitute_seconds", 0),
            stint_start_ms=data.get("stint_start_ms"),
            is_inactive=data.get("is_inactive", False),
            is_captain=data.get("is_captain", False),
            fair_play_award=data.get("fair_play_award", False),
        )


@dataclass(frozen=True)
class Player:
    """
    Represents a squad member taking part in the current match.

    Players are immutable; every change produces a new instance through
    :meth:`with_stats`.

    Attributes:
        id: Unique identifier, stable for the whole match
        name: Display name
        number: Jersey number (optional)
        stats: In-period role, status, slot and time counters
    """
    id: str
    name: str = ""
    number: Optional[str] = ""
    stats: PlayerStats = field(default_factory=PlayerStats)

    @property
    def is_inactive(self) -> bool:
        return self.stats.is_inactive

    def with_stats(self, **changes: Any) -> 'Player':
        """
        Return a copy of this player with the given stats fields replaced.

        Args:
            **changes: PlayerStats field names and their new values

        Returns:
            New Player instance
        """
        return replace(self, stats=replace(self.stats, **changes))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance
        """
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            number=data.get("number", ""),
            stats=PlayerStats.from_dict(data.get("stats")),
        )
