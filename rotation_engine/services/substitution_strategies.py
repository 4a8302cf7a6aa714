"""
Formation-specific substitution algorithms.

Each formation type has a stateless strategy that turns a formation, rotation
queue and roster into the next formation, roster and queue. Strategies never
mutate their input and either return a complete result or raise before
anything is applied.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..models import (
    Formation, FormationType, PairRoleRotation, Player, PlayerRole,
    PlayerStatus, RotationQueue
)
from ..utils.constants import (
    FIELD_PAIR_KEYS, LEFT_PAIR, RIGHT_PAIR, SUB_PAIR, PAIR_DEFENDER,
    PAIR_ATTACKER, SUBSTITUTE_1, SUBSTITUTE_2, pair_slot
)
from .errors import InvalidOperationError, InvariantViolationError
from .time_accounting import accrue

logger = logging.getLogger(__name__)


def field_pointers(formation: Formation,
                   queue: RotationQueue) -> Tuple[Optional[str], Optional[str]]:
    """
    The next and next-next players to come off.

    Walks the active queue in order and keeps the ids currently in a field
    slot, so a bench player at the front of the queue is never chosen.
    """
    field_ids = set(formation.field_player_ids())
    upcoming = [pid for pid in queue.active if pid in field_ids]
    next_id = upcoming[0] if upcoming else None
    next_next_id = upcoming[1] if len(upcoming) > 1 else None
    return next_id, next_next_id


@dataclass(frozen=True)
class SubstitutionContext:
    """Inputs shared by every substitution strategy."""
    formation: Formation
    rotation_queue: RotationQueue
    players: Tuple[Player, ...]
    now_ms: int
    is_paused: bool = False
    next_pair_to_sub_out: Optional[str] = LEFT_PAIR
    next_player_id: Optional[str] = None
    pair_role_rotation: PairRoleRotation = PairRoleRotation.KEEP_THROUGHOUT_PERIOD

    def player(self, player_id: Optional[str]) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None


@dataclass(frozen=True)
class SubstitutionResult:
    """Outputs of a substitution strategy."""
    formation: Formation
    players: Tuple[Player, ...]
    rotation_queue: RotationQueue
    next_pair_to_sub_out: Optional[str]
    next_player_id: Optional[str]
    next_next_player_id: Optional[str]
    players_going_off: Tuple[str, ...] = ()
    players_coming_on: Tuple[str, ...] = ()
    moved_on_bench: Tuple[str, ...] = field(default_factory=tuple)


class SubstitutionStrategy(ABC):
    """Abstract base class for the per-formation substitution algorithms."""

    formation_type: FormationType

    @abstractmethod
    def execute(self, context: SubstitutionContext) -> SubstitutionResult:
        """
        Perform one substitution.

        Args:
            context: Current formation, queue, roster and clock

        Returns:
            New formation, roster, queue and pointers

        Raises:
            InvalidOperationError: If the substitution cannot be performed
            InvariantViolationError: If the state breaks an engine invariant
        """
        pass

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _send_off(player: Player, slot: str, context: SubstitutionContext) -> Player:
        """Credit the field stint and move the player to a bench slot."""
        role = context.formation.definition.role_for_slot(slot)
        return accrue(player, context.now_ms, context.is_paused).with_stats(
            status=PlayerStatus.SUBSTITUTE,
            slot=slot,
            role=role or PlayerRole.SUBSTITUTE,
        )

    @staticmethod
    def _bring_on(player: Player, slot: str, context: SubstitutionContext) -> Player:
        """Credit the bench stint and move the player to a field slot."""
        role = context.formation.definition.role_for_slot(slot)
        return accrue(player, context.now_ms, context.is_paused).with_stats(
            status=PlayerStatus.ON_FIELD,
            slot=slot,
            role=role,
        )

    @staticmethod
    def _merge(players: Tuple[Player, ...], updated: Dict[str, Player]) -> Tuple[Player, ...]:
        return tuple(updated.get(player.id, player) for player in players)

    @staticmethod
    def _require_player(context: SubstitutionContext, player_id: str) -> Player:
        player = context.player(player_id)
        if player is None:
            raise InvalidOperationError(f"Player {player_id} is not in the roster")
        return player


class PairsSubstitution(SubstitutionStrategy):
    """
    Pairs-7: one field pair swaps with the bench pair.

    Left and right pairs alternate strictly. Incoming players take the role
    of the slot they occupy; with ``SWAP_EVERY_ROTATION`` the incoming pair
    also exchanges defender and attacker.
    """

    formation_type = FormationType.PAIRS_7

    def execute(self, context: SubstitutionContext) -> SubstitutionResult:
        formation = context.formation
        pair_out = context.next_pair_to_sub_out
        if pair_out not in FIELD_PAIR_KEYS:
            raise InvalidOperationError(f"Invalid pair to substitute: {pair_out!r}")

        out_defender, out_attacker = formation.pair(pair_out)
        in_defender, in_attacker = formation.pair(SUB_PAIR)
        if in_defender is None and in_attacker is None:
            raise InvalidOperationError("No substitute pair available")
        if out_defender is None and out_attacker is None:
            raise InvalidOperationError(f"Pair {pair_out} has no players to substitute")

        if context.pair_role_rotation is PairRoleRotation.SWAP_EVERY_ROTATION:
            in_defender, in_attacker = in_attacker, in_defender

        out_def_slot = pair_slot(pair_out, PAIR_DEFENDER)
        out_att_slot = pair_slot(pair_out, PAIR_ATTACKER)
        sub_def_slot = pair_slot(SUB_PAIR, PAIR_DEFENDER)
        sub_att_slot = pair_slot(SUB_PAIR, PAIR_ATTACKER)

        new_formation = formation.assign({
            out_def_slot: in_defender,
            out_att_slot: in_attacker,
            sub_def_slot: out_defender,
            sub_att_slot: out_attacker,
        })

        updated: Dict[str, Player] = {}
        for player_id, slot in ((out_defender, sub_def_slot), (out_attacker, sub_att_slot)):
            if player_id:
                updated[player_id] = self._send_off(
                    self._require_player(context, player_id), slot, context
                )
        for player_id, slot in ((in_defender, out_def_slot), (in_attacker, out_att_slot)):
            if player_id:
                updated[player_id] = self._bring_on(
                    self._require_player(context, player_id), slot, context
                )

        going_off = tuple(pid for pid in (out_defender, out_attacker) if pid)
        coming_on = tuple(pid for pid in (in_defender, in_attacker) if pid)

        queue = context.rotation_queue
        for player_id in going_off:
            queue = queue.rotate_to_end(player_id)

        next_pair = RIGHT_PAIR if pair_out == LEFT_PAIR else LEFT_PAIR
        logger.debug("Pairs substitution: %s off, %s on, next pair %s",
                     going_off, coming_on, next_pair)

        return SubstitutionResult(
            formation=new_formation,
            players=self._merge(context.players, updated),
            rotation_queue=queue,
            next_pair_to_sub_out=next_pair,
            next_player_id=field_pointers(new_formation, queue)[0],
            next_next_player_id=None,
            players_going_off=going_off,
            players_coming_on=coming_on,
        )


class IndividualSubstitution(SubstitutionStrategy):
    """
    Individual-6: the next field player swaps with ``substitute_1``.

    The outgoing player rotates to the end of the active queue.
    """

    formation_type = FormationType.INDIVIDUAL_6

    def _outgoing(self, context: SubstitutionContext) -> Tuple[str, str]:
        """Resolve the outgoing player id and the field slot they vacate."""
        formation = context.formation
        field_slots = formation.definition.field_slots
        candidate = context.next_player_id
        if formation.slot_of(candidate) not in field_slots:
            candidate, _ = field_pointers(formation, context.rotation_queue)
        slot = formation.slot_of(candidate)
        if candidate is None or slot not in field_slots:
            raise InvalidOperationError("No field player is due to come off")
        return candidate, slot

    def execute(self, context: SubstitutionContext) -> SubstitutionResult:
        formation = context.formation
        incoming_id = formation.get(SUBSTITUTE_1)
        if incoming_id is None:
            raise InvalidOperationError("Substitute slot is empty")
        outgoing_id, out_slot = self._outgoing(context)

        outgoing = self._require_player(context, outgoing_id)
        incoming = self._require_player(context, incoming_id)

        new_formation = formation.assign({out_slot: incoming_id, SUBSTITUTE_1: outgoing_id})
        updated = {
            outgoing_id: self._send_off(outgoing, SUBSTITUTE_1, context),
            incoming_id: self._bring_on(incoming, out_slot, context),
        }

        queue = context.rotation_queue.rotate_to_end(outgoing_id)
        next_id, _ = field_pointers(new_formation, queue)
        logger.debug("Individual substitution: %s off, %s on, next %s",
                     outgoing_id, incoming_id, next_id)

        return SubstitutionResult(
            formation=new_formation,
            players=self._merge(context.players, updated),
            rotation_queue=queue,
            next_pair_to_sub_out=context.next_pair_to_sub_out,
            next_player_id=next_id,
            next_next_player_id=None,
            players_going_off=(outgoing_id,),
            players_coming_on=(incoming_id,),
        )


class Individual7Substitution(IndividualSubstitution):
    """
    Individual-7: ``substitute_1`` goes on; the bench shifts up.

    ``substitute_2`` moves to ``substitute_1`` and the outgoing player takes
    ``substitute_2``. When ``substitute_2`` is inactive (or empty) the
    outgoing player lands in ``substitute_1`` instead and the inactive player
    stays put.
    """

    formation_type = FormationType.INDIVIDUAL_7

    def execute(self, context: SubstitutionContext) -> SubstitutionResult:
        formation = context.formation
        incoming_id = formation.get(SUBSTITUTE_1)
        if incoming_id is None:
            raise InvalidOperationError("Substitute slot is empty")
        incoming = self._require_player(context, incoming_id)
        if incoming.is_inactive:
            raise InvariantViolationError(
                f"Player {incoming_id} in {SUBSTITUTE_1} is inactive but was selected to go on"
            )

        outgoing_id, out_slot = self._outgoing(context)
        outgoing = self._require_player(context, outgoing_id)

        second_id = formation.get(SUBSTITUTE_2)
        second = context.player(second_id)
        second_unavailable = second is None or second.is_inactive

        updated: Dict[str, Player] = {
            incoming_id: self._bring_on(incoming, out_slot, context),
        }
        moved_on_bench: Tuple[str, ...] = ()
        if second_unavailable:
            new_formation = formation.assign({out_slot: incoming_id, SUBSTITUTE_1: outgoing_id})
            updated[outgoing_id] = self._send_off(outgoing, SUBSTITUTE_1, context)
        else:
            new_formation = formation.assign({
                out_slot: incoming_id,
                SUBSTITUTE_1: second_id,
                SUBSTITUTE_2: outgoing_id,
            })
            updated[outgoing_id] = self._send_off(outgoing, SUBSTITUTE_2, context)
            updated[second_id] = second.with_stats(slot=SUBSTITUTE_1, role=PlayerRole.SUBSTITUTE)
            moved_on_bench = (second_id,)

        queue = context.rotation_queue.rotate_to_end(outgoing_id)
        next_id, next_next_id = field_pointers(new_formation, queue)
        logger.debug("Individual-7 substitution: %s off, %s on, next %s then %s",
                     outgoing_id, incoming_id, next_id, next_next_id)

        return SubstitutionResult(
            formation=new_formation,
            players=self._merge(context.players, updated),
            rotation_queue=queue,
            next_pair_to_sub_out=context.next_pair_to_sub_out,
            next_player_id=next_id,
            next_next_player_id=next_next_id,
            players_going_off=(outgoing_id,),
            players_coming_on=(incoming_id,),
            moved_on_bench=moved_on_bench,
        )


_STRATEGIES: Dict[FormationType, SubstitutionStrategy] = {
    FormationType.PAIRS_7: PairsSubstitution(),
    FormationType.INDIVIDUAL_6: IndividualSubstitution(),
    FormationType.INDIVIDUAL_7: Individual7Substitution(),
}


def get_strategy(formation_type: FormationType) -> SubstitutionStrategy:
    """
    Select the substitution strategy for a formation type.

    Raises:
        InvalidOperationError: If the formation type has no strategy
    """
    try:
        return _STRATEGIES[formation_type]
    except KeyError:
        raise InvalidOperationError(f"Unknown formation type: {formation_type!r}") from None
