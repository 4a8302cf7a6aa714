"""
GameState model for the Sideline Rotation Engine.

This module contains the GameState dataclass which represents the complete
state of one period of play: formation, roster, rotation queue, pointers to
the next players to come off, and the record needed to undo the last
substitution.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .formation import Formation, FormationType
from .player import Player, PlayerStats, PlayerStatus
from .rotation_queue import RotationQueue
from ..utils.constants import LEFT_PAIR


class PairRoleRotation(Enum):
    """How roles inside a pair behave when the pair goes back on."""
    KEEP_THROUGHOUT_PERIOD = "keep_throughout_period"
    SWAP_EVERY_ROTATION = "swap_every_rotation"


@dataclass(frozen=True)
class TeamConfig:
    """
    Per-match configuration supplied by the host application.

    Attributes:
        formation_type: Squad formation in use
        pair_role_rotation: Role behaviour for pairs when they re-enter
    """
    formation_type: FormationType = FormationType.INDIVIDUAL_6
    pair_role_rotation: PairRoleRotation = PairRoleRotation.KEEP_THROUGHOUT_PERIOD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "formation_type": self.formation_type.value,
            "pair_role_rotation": self.pair_role_rotation.value,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'TeamConfig':
        if not data:
            return cls()
        return cls(
            formation_type=FormationType(data.get("formation_type", FormationType.INDIVIDUAL_6.value)),
            pair_role_rotation=PairRoleRotation(
                data.get("pair_role_rotation", PairRoleRotation.KEEP_THROUGHOUT_PERIOD.value)
            ),
        )


@dataclass(frozen=True)
class SubstitutionRecord:
    """
    Everything needed to reverse the most recent substitution.

    Created when a substitution is applied, consumed by undo, and superseded
    by the next substitution.
    """
    timestamp_ms: int
    before_formation: Formation
    before_queue: RotationQueue
    before_next_pair: Optional[str]
    before_next_player_id: Optional[str]
    before_next_next_player_id: Optional[str]
    players_going_off: Tuple[str, ...]
    players_coming_on: Tuple[str, ...]
    going_off_original_stats: Dict[str, PlayerStats] = field(default_factory=dict)
    coming_on_original_stats: Dict[str, PlayerStats] = field(default_factory=dict)


@dataclass(frozen=True)
class GameState:
    """
    Represents the complete state of a period of play.

    Attributes:
        team_config: Formation type and pair role behaviour
        formation: Current slot assignments
        players: Every squad member taking part, in roster order
        rotation_queue: Priority order for coming off, plus inactive players
        next_pair_to_sub_out: Pairs formation - field pair that goes off next
        next_player_id: Individual formations - player that goes off next
        next_next_player_id: Individual-7 - player that goes off after that
        is_paused: Whether the substitution timer is paused
        paused_at_ms: When the current pause began, None while running
        last_substitution: Record for single-level undo, if any
        players_to_highlight: Ids moved by the last transition
        period_number: 1-based period index
    """
    team_config: TeamConfig
    formation: Formation
    players: Tuple[Player, ...] = ()
    rotation_queue: RotationQueue = field(default_factory=RotationQueue)
    next_pair_to_sub_out: Optional[str] = LEFT_PAIR
    next_player_id: Optional[str] = None
    next_next_player_id: Optional[str] = None
    is_paused: bool = False
    paused_at_ms: Optional[int] = None
    last_substitution: Optional[SubstitutionRecord] = None
    players_to_highlight: Tuple[str, ...] = ()
    period_number: int = 1

    @property
    def formation_type(self) -> FormationType:
        return self.formation.formation_type

    @property
    def goalie_id(self) -> Optional[str]:
        return self.formation.goalie

    def player(self, player_id: Optional[str]) -> Optional[Player]:
        """Find a player by id, or None."""
        if player_id is None:
            return None
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_map(self) -> Dict[str, Player]:
        return {player.id: player for player in self.players}

    def with_players(self, updated: Iterable[Player]) -> Tuple[Player, ...]:
        """
        Merge updated players into the roster, keeping roster order.

        Args:
            updated: Players replacing the roster entries with the same id

        Returns:
            New roster tuple
        """
        by_id = {player.id: player for player in updated}
        return tuple(by_id.get(player.id, player) for player in self.players)

    def evolve(self, **changes: Any) -> 'GameState':
        """Return a copy of this state with fields replaced."""
        return replace(self, **changes)

    # ---------- Read accessors ---------- #

    def next_players_to_sub_out(self, count: int = 1) -> List[str]:
        """
        Ids due to come off next.

        For pairs this is the pair selected by ``next_pair_to_sub_out``;
        for individual formations it is the front of the active queue.
        """
        if self.formation.definition.is_pairs:
            if self.next_pair_to_sub_out is None:
                return []
            return [pid for pid in self.formation.pair(self.next_pair_to_sub_out) if pid]
        return self.rotation_queue.next_active(count)

    @property
    def inactive_player_ids(self) -> List[str]:
        return list(self.rotation_queue.inactive)

    def field_player_ids(self) -> List[str]:
        return self.formation.field_player_ids()

    def bench_player_ids(self) -> List[str]:
        return self.formation.bench_player_ids()

    def players_with_status(self, status: PlayerStatus) -> List[Player]:
        return [player for player in self.players if player.stats.status is status]

    def to_json(self) -> dict:
        """
        Convert GameState to JSON-serializable dictionary.

        The undo record is not included; a restored state starts without one.
        """
        return {
            "team_config": self.team_config.to_dict(),
            "formation": self.formation.to_dict(),
            "players": [player.to_dict() for player in self.players],
            "rotation_queue": self.rotation_queue.to_dict(),
            "next_pair_to_sub_out": self.next_pair_to_sub_out,
            "next_player_id": self.next_player_id,
            "next_next_player_id": self.next_next_player_id,
            "is_paused": self.is_paused,
            "paused_at_ms": self.paused_at_ms,
            "period_number": self.period_number,
        }

    @staticmethod
    def from_json(data: dict) -> "GameState":
        """
        Create GameState from JSON dictionary.

        Args:
            data: Dictionary with game state data

        Returns:
            New GameState instance
        """
        return GameState(
            team_config=TeamConfig.from_dict(data.get("team_config")),
            formation=Formation.from_dict(data["formation"]),
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            rotation_queue=RotationQueue.from_dict(data.get("rotation_queue", {})),
            next_pair_to_sub_out=data.get("next_pair_to_sub_out", LEFT_PAIR),
            next_player_id=data.get("next_player_id"),
            next_next_player_id=data.get("next_next_player_id"),
            is_paused=data.get("is_paused", False),
            paused_at_ms=data.get("paused_at_ms"),
            period_number=int(data.get("period_number", 1)),
        )
