"""Formation models for the Sideline Rotation Engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from .player import PlayerRole, PlayerStatus
from ..utils.constants import (
    GOALIE, LEFT_DEFENDER, RIGHT_DEFENDER, LEFT_ATTACKER, RIGHT_ATTACKER,
    SUBSTITUTE_1, SUBSTITUTE_2, LEFT_PAIR, RIGHT_PAIR, SUB_PAIR,
    PAIR_DEFENDER, PAIR_ATTACKER, PAIR_KEYS, pair_slot
)


class FormationType(Enum):
    """Supported squad formations."""
    PAIRS_7 = "pairs_7"
    INDIVIDUAL_6 = "individual_6"
    INDIVIDUAL_7 = "individual_7"


@dataclass(frozen=True)
class FormationDefinition:
    """
    Static description of a formation type.

    Attributes:
        formation_type: The formation this definition describes
        slot_roles: Slot key -> role the occupant plays, goalie included
        field_slots: Outfield slot keys, in rotation order
        bench_slots: Substitute slot keys, ordered by priority to enter
        supports_inactive_players: Whether bench players can be inactivated
        supports_next_next: Whether a second "next off" pointer is tracked
    """
    formation_type: FormationType
    slot_roles: Mapping[str, PlayerRole]
    field_slots: Tuple[str, ...]
    bench_slots: Tuple[str, ...]
    supports_inactive_players: bool = False
    supports_next_next: bool = False

    @property
    def is_pairs(self) -> bool:
        return self.formation_type is FormationType.PAIRS_7

    @property
    def all_slots(self) -> Tuple[str, ...]:
        """All slot keys including goalie, in display order."""
        return (GOALIE,) + self.field_slots + self.bench_slots

    @property
    def outfield_slots(self) -> Tuple[str, ...]:
        """Field and bench slots - the positions a switch may target."""
        return self.field_slots + self.bench_slots

    def role_for_slot(self, slot: Optional[str]) -> Optional[PlayerRole]:
        """
        Look up the role played from a slot.

        Bench slots of the pairs formation keep the pair role
        (defender/attacker) so the player's next field role is known.
        """
        if slot is None:
            return None
        return self.slot_roles.get(slot)

    def status_for_slot(self, slot: Optional[str]) -> Optional[PlayerStatus]:
        """Look up the status of a slot's occupant."""
        if slot == GOALIE:
            return PlayerStatus.GOALIE
        if slot in self.field_slots:
            return PlayerStatus.ON_FIELD
        if slot in self.bench_slots:
            return PlayerStatus.SUBSTITUTE
        return None


def _pairs_definition() -> FormationDefinition:
    roles: Dict[str, PlayerRole] = {GOALIE: PlayerRole.GOALIE}
    for pair_key in PAIR_KEYS:
        roles[pair_slot(pair_key, PAIR_DEFENDER)] = PlayerRole.DEFENDER
        roles[pair_slot(pair_key, PAIR_ATTACKER)] = PlayerRole.ATTACKER
    return FormationDefinition(
        formation_type=FormationType.PAIRS_7,
        slot_roles=roles,
        field_slots=(
            pair_slot(LEFT_PAIR, PAIR_DEFENDER), pair_slot(LEFT_PAIR, PAIR_ATTACKER),
            pair_slot(RIGHT_PAIR, PAIR_DEFENDER), pair_slot(RIGHT_PAIR, PAIR_ATTACKER),
        ),
        bench_slots=(
            pair_slot(SUB_PAIR, PAIR_DEFENDER), pair_slot(SUB_PAIR, PAIR_ATTACKER),
        ),
    )


def _individual_definition(formation_type: FormationType,
                           bench_slots: Tuple[str, ...]) -> FormationDefinition:
    roles: Dict[str, PlayerRole] = {
        GOALIE: PlayerRole.GOALIE,
        LEFT_DEFENDER: PlayerRole.DEFENDER,
        RIGHT_DEFENDER: PlayerRole.DEFENDER,
        LEFT_ATTACKER: PlayerRole.ATTACKER,
        RIGHT_ATTACKER: PlayerRole.ATTACKER,
    }
    for slot in bench_slots:
        roles[slot] = PlayerRole.SUBSTITUTE
    return FormationDefinition(
        formation_type=formation_type,
        slot_roles=roles,
        field_slots=(LEFT_DEFENDER, RIGHT_DEFENDER, LEFT_ATTACKER, RIGHT_ATTACKER),
        bench_slots=bench_slots,
        supports_inactive_players=len(bench_slots) > 1,
        supports_next_next=len(bench_slots) > 1,
    )


# Built once; every role/status lookup goes through these tables
FORMATION_DEFINITIONS: Dict[FormationType, FormationDefinition] = {
    FormationType.PAIRS_7: _pairs_definition(),
    FormationType.INDIVIDUAL_6: _individual_definition(
        FormationType.INDIVIDUAL_6, (SUBSTITUTE_1,)
    ),
    FormationType.INDIVIDUAL_7: _individual_definition(
        FormationType.INDIVIDUAL_7, (SUBSTITUTE_1, SUBSTITUTE_2)
    ),
}


def get_definition(formation_type: FormationType) -> FormationDefinition:
    """Get the static definition for a formation type."""
    return FORMATION_DEFINITIONS[formation_type]


@dataclass(frozen=True)
class Formation:
    """
    Structural snapshot mapping slot keys to player ids.

    The mapping is never mutated; :meth:`assign` returns a new formation.
    Unassigned slots hold ``None``.
    """
    formation_type: FormationType
    slots: Mapping[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def create(cls, formation_type: FormationType,
               assignments: Optional[Mapping[str, Optional[str]]] = None) -> Formation:
        """
        Create a formation with every slot of its type present.

        Args:
            formation_type: Formation type
            assignments: Slot key -> player id

        Returns:
            New Formation

        Raises:
            ValueError: If an assignment names a slot the type does not have
        """
        definition = get_definition(formation_type)
        assignments = dict(assignments or {})
        unknown = [key for key in assignments if key not in definition.slot_roles]
        if unknown:
            raise ValueError(
                f"Unknown slots for {formation_type.value}: {', '.join(sorted(unknown))}"
            )
        slots = {slot: assignments.get(slot) for slot in definition.all_slots}
        return cls(formation_type=formation_type, slots=slots)

    @property
    def definition(self) -> FormationDefinition:
        return get_definition(self.formation_type)

    @property
    def goalie(self) -> Optional[str]:
        return self.slots.get(GOALIE)

    def get(self, slot: str) -> Optional[str]:
        """Get the player id in a slot, or None."""
        return self.slots.get(slot)

    def slot_of(self, player_id: Optional[str]) -> Optional[str]:
        """Find the slot key a player occupies, or None."""
        if player_id is None:
            return None
        for slot in self.definition.all_slots:
            if self.slots.get(slot) == player_id:
                return slot
        return None

    def pair(self, pair_key: str) -> Tuple[Optional[str], Optional[str]]:
        """Get the (defender, attacker) ids of a pair."""
        return (
            self.slots.get(pair_slot(pair_key, PAIR_DEFENDER)),
            self.slots.get(pair_slot(pair_key, PAIR_ATTACKER)),
        )

    def player_ids(self) -> List[str]:
        """Assigned player ids in slot order (goalie first)."""
        return [
            self.slots[slot] for slot in self.definition.all_slots
            if self.slots.get(slot) is not None
        ]

    def field_player_ids(self) -> List[str]:
        return [self.slots[s] for s in self.definition.field_slots if self.slots.get(s)]

    def bench_player_ids(self) -> List[str]:
        return [self.slots[s] for s in self.definition.bench_slots if self.slots.get(s)]

    def assign(self, changes: Mapping[str, Optional[str]]) -> Formation:
        """
        Return a new formation with the given slots reassigned.

        Args:
            changes: Slot key -> player id (or None to clear)

        Returns:
            New Formation

        Raises:
            ValueError: If a key is not a slot of this formation type
        """
        for key in changes:
            if key not in self.definition.slot_roles:
                raise ValueError(f"Unknown slot for {self.formation_type.value}: {key}")
        slots = dict(self.slots)
        slots.update(changes)
        return Formation(formation_type=self.formation_type, slots=slots)

    def to_dict(self) -> Dict:
        """Convert formation to dictionary for serialization."""
        return {
            "formation_type": self.formation_type.value,
            "slots": dict(self.slots),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> Formation:
        """Create formation from dictionary."""
        return cls.create(FormationType(data["formation_type"]), data.get("slots", {}))
