"""
Game-state transitions for the Sideline Rotation Engine.

Every public function takes a :class:`GameState` and returns a new one. A
request the rules forbid is logged and answered with the very same state
object, so callers can detect a rejected call with an identity check.
"""
import functools
import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from ..models import (
    Formation, FormationType, GameState, Player, PlayerRole,
    RotationQueue, SubstitutionRecord
)
from ..utils.constants import FIELD_PAIR_KEYS, GOALIE, SUBSTITUTE_1, SUBSTITUTE_2
from ..utils.time_utils import elapsed_seconds
from .errors import InvalidOperationError
from .substitution_strategies import SubstitutionContext, field_pointers, get_strategy
from .time_accounting import (
    accrue, change_role, credit_field_time, end_stint, pause_player_time,
    resume_player_time
)

logger = logging.getLogger(__name__)

Transition = Callable[..., GameState]


def fail_safe(func: Transition) -> Transition:
    """
    Turn :class:`InvalidOperationError` into a logged no-op.

    The wrapped transition returns its input state untouched when the
    request is rejected. Any other error reaches the caller.
    """
    @functools.wraps(func)
    def wrapper(state: GameState, *args, **kwargs) -> GameState:
        try:
            return func(state, *args, **kwargs)
        except InvalidOperationError as e:
            logger.warning("%s rejected: %s", func.__name__, e)
            return state
    return wrapper


# ---------- Helpers ---------- #

def _require_player(state: GameState, player_id: Optional[str]) -> Player:
    player = state.player(player_id)
    if player is None:
        raise InvalidOperationError(f"Player {player_id} not found")
    return player


def _require_formation(state: GameState, *formation_types: FormationType) -> None:
    if state.formation_type not in formation_types:
        names = ", ".join(ft.value for ft in formation_types)
        raise InvalidOperationError(
            f"Not supported for {state.formation_type.value} (requires {names})"
        )


def _pointers(formation: Formation,
              queue: RotationQueue) -> Tuple[Optional[str], Optional[str]]:
    """Next and next-next ids, with next-next only where the formation tracks it."""
    next_id, next_next_id = field_pointers(formation, queue)
    if not formation.definition.supports_next_next:
        next_next_id = None
    return next_id, next_next_id


def _place(player: Player, formation: Formation, slot: str) -> Player:
    """Set slot, status and table role for a player without touching time."""
    definition = formation.definition
    return player.with_stats(
        slot=slot,
        status=definition.status_for_slot(slot),
        role=definition.role_for_slot(slot) or PlayerRole.SUBSTITUTE,
    )


# ---------- Substitution ---------- #

@fail_safe
def substitute(state: GameState, now_ms: int) -> GameState:
    """
    Perform the next substitution for the current formation.

    Args:
        state: Current game state
        now_ms: Current time in epoch milliseconds

    Returns:
        New state holding an undo record and highlighting the moved players

    Raises:
        InvariantViolationError: If the incoming substitute is inactive
    """
    strategy = get_strategy(state.formation_type)
    context = SubstitutionContext(
        formation=state.formation,
        rotation_queue=state.rotation_queue,
        players=state.players,
        now_ms=now_ms,
        is_paused=state.is_paused,
        next_pair_to_sub_out=state.next_pair_to_sub_out,
        next_player_id=state.next_player_id,
        pair_role_rotation=state.team_config.pair_role_rotation,
    )
    result = strategy.execute(context)

    before = state.player_map()
    record = SubstitutionRecord(
        timestamp_ms=now_ms,
        before_formation=state.formation,
        before_queue=state.rotation_queue,
        before_next_pair=state.next_pair_to_sub_out,
        before_next_player_id=state.next_player_id,
        before_next_next_player_id=state.next_next_player_id,
        players_going_off=result.players_going_off,
        players_coming_on=result.players_coming_on,
        going_off_original_stats={pid: before[pid].stats for pid in result.players_going_off},
        coming_on_original_stats={pid: before[pid].stats for pid in result.players_coming_on},
    )

    logger.info("Substitution: %s off, %s on",
                ", ".join(result.players_going_off), ", ".join(result.players_coming_on))
    return state.evolve(
        formation=result.formation,
        players=result.players,
        rotation_queue=result.rotation_queue,
        next_pair_to_sub_out=result.next_pair_to_sub_out,
        next_player_id=result.next_player_id,
        next_next_player_id=result.next_next_player_id,
        last_substitution=record,
        players_to_highlight=result.players_going_off + result.players_coming_on,
    )


@fail_safe
def undo(state: GameState, now_ms: int) -> GameState:
    """
    Reverse the most recent substitution.

    Players who came on get their pre-substitution stats back verbatim.
    Players who went off keep what they had and have the bench time since the
    substitution credited as field time in the role they held before going
    off. Everyone else keeps their time and only has their slot realigned
    with the restored formation.

    While paused, time is settled up to the pause rather than ``now_ms``.
    """
    record = state.last_substitution
    if record is None:
        raise InvalidOperationError("No substitution to undo")

    formation = record.before_formation
    end_ms = now_ms
    if state.is_paused and state.paused_at_ms is not None:
        end_ms = state.paused_at_ms
    bench_seconds = elapsed_seconds(record.timestamp_ms, end_ms)
    updated: List[Player] = []

    for player in state.players:
        slot = formation.slot_of(player.id)
        if player.id in record.coming_on_original_stats:
            restored = replace(player, stats=record.coming_on_original_stats[player.id])
            if state.is_paused:
                # pause credited this player's stint; settle the restored one too
                restored = accrue(restored, end_ms)
            updated.append(restored)
        elif player.id in record.going_off_original_stats:
            original = record.going_off_original_stats[player.id]
            restored = player.with_stats(
                time_as_substitute_seconds=original.time_as_substitute_seconds
            )
            restored = credit_field_time(restored, bench_seconds, original.role)
            updated.append(restored.with_stats(
                role=original.role,
                status=original.status,
                slot=slot,
                stint_start_ms=end_ms,
            ))
        elif slot is not None and player.stats.slot != slot:
            settled = accrue(player, now_ms, state.is_paused)
            updated.append(_place(settled, formation, slot))

    logger.info("Undid substitution from %d (%d s ago)", record.timestamp_ms, bench_seconds)
    return state.evolve(
        formation=formation,
        players=state.with_players(updated),
        rotation_queue=record.before_queue,
        next_pair_to_sub_out=record.before_next_pair,
        next_player_id=record.before_next_player_id,
        next_next_player_id=record.before_next_next_player_id,
        last_substitution=None,
        players_to_highlight=record.players_going_off,
    )


# ---------- Manual overrides ---------- #

@fail_safe
def switch_positions(state: GameState, player_a_id: str, player_b_id: str,
                     now_ms: int) -> GameState:
    """
    Swap the slots of two outfield players.

    Each player's role is recomputed from the slot they move into; time in
    the old role and status is credited first.
    """
    if player_a_id == player_b_id:
        raise InvalidOperationError("Cannot switch a player with themselves")
    player_a = _require_player(state, player_a_id)
    player_b = _require_player(state, player_b_id)
    if state.goalie_id in (player_a_id, player_b_id):
        raise InvalidOperationError("The goalie cannot switch positions; use switch_goalie")

    formation = state.formation
    definition = formation.definition
    slot_a = formation.slot_of(player_a_id)
    slot_b = formation.slot_of(player_b_id)
    for player_id, slot in ((player_a_id, slot_a), (player_b_id, slot_b)):
        if slot not in definition.outfield_slots:
            raise InvalidOperationError(f"Player {player_id} is not in a swappable position")
    for player, target in ((player_a, slot_b), (player_b, slot_a)):
        if player.is_inactive and target in definition.field_slots:
            raise InvalidOperationError(f"Inactive player {player.id} cannot go on the field")

    new_formation = formation.assign({slot_a: player_b_id, slot_b: player_a_id})
    moved = []
    for player, target in ((player_a, slot_b), (player_b, slot_a)):
        role = definition.role_for_slot(target) or PlayerRole.SUBSTITUTE
        switched = change_role(player, role, now_ms, state.is_paused)
        moved.append(switched.with_stats(status=definition.status_for_slot(target), slot=target))

    next_id, next_next_id = _pointers(new_formation, state.rotation_queue)
    logger.info("Switched %s (%s) and %s (%s)", player_a_id, slot_a, player_b_id, slot_b)
    return state.evolve(
        formation=new_formation,
        players=state.with_players(moved),
        next_player_id=next_id,
        next_next_player_id=next_next_id,
        players_to_highlight=(player_a_id, player_b_id),
    )


@fail_safe
def switch_goalie(state: GameState, new_goalie_id: str, now_ms: int) -> GameState:
    """
    Make an outfield player the goalie.

    The current goalie takes over the new goalie's slot and joins the back
    of the rotation queue; the new goalie leaves the queue.
    """
    old_goalie_id = state.goalie_id
    if old_goalie_id is None:
        raise InvalidOperationError("There is no current goalie")
    if new_goalie_id == old_goalie_id:
        raise InvalidOperationError(f"Player {new_goalie_id} is already the goalie")
    new_goalie = _require_player(state, new_goalie_id)
    old_goalie = _require_player(state, old_goalie_id)
    if new_goalie.is_inactive:
        raise InvalidOperationError(f"Inactive player {new_goalie_id} cannot become goalie")

    formation = state.formation
    vacated = formation.slot_of(new_goalie_id)
    if vacated not in formation.definition.outfield_slots:
        raise InvalidOperationError(f"Player {new_goalie_id} has no outfield slot")

    new_formation = formation.assign({GOALIE: new_goalie_id, vacated: old_goalie_id})
    promoted = _place(accrue(new_goalie, now_ms, state.is_paused), new_formation, GOALIE)
    demoted = _place(accrue(old_goalie, now_ms, state.is_paused), new_formation, vacated)

    queue = state.rotation_queue.remove(new_goalie_id).add(old_goalie_id)
    next_id, next_next_id = _pointers(new_formation, queue)

    logger.info("Goalie switch: %s in goal, %s to %s", new_goalie_id, old_goalie_id, vacated)
    return state.evolve(
        formation=new_formation,
        players=state.with_players((promoted, demoted)),
        rotation_queue=queue,
        next_player_id=next_id,
        next_next_player_id=next_next_id,
        last_substitution=None,
        players_to_highlight=(new_goalie_id, old_goalie_id),
    )


@fail_safe
def toggle_inactive(state: GameState, player_id: str, now_ms: int) -> GameState:
    """
    Inactivate or reactivate a bench player (Individual-7 only).

    An inactive player always sits in ``substitute_2`` so ``substitute_1``
    is the next to go in. At least one live substitute is kept at all times.
    A reactivated player joins the end of the active queue.
    """
    _require_formation(state, FormationType.INDIVIDUAL_7)
    player = _require_player(state, player_id)
    formation = state.formation
    slot = formation.slot_of(player_id)
    if slot not in (SUBSTITUTE_1, SUBSTITUTE_2):
        raise InvalidOperationError(f"Only substitutes can be inactivated, not {player_id}")

    other_slot = SUBSTITUTE_2 if slot == SUBSTITUTE_1 else SUBSTITUTE_1
    other_id = formation.get(other_slot)
    other = state.player(other_id)
    changes: Dict[str, Player] = {}

    if player.is_inactive:
        toggled = accrue(player, now_ms, state.is_paused).with_stats(is_inactive=False)
        queue = state.rotation_queue.reactivate(player_id)
        if slot == SUBSTITUTE_2 and other is not None:
            formation = formation.assign({SUBSTITUTE_1: player_id, SUBSTITUTE_2: other_id})
            toggled = _place(toggled, formation, SUBSTITUTE_1)
            changes[other.id] = _place(other, formation, SUBSTITUTE_2)
        action = "reactivated"
    else:
        if other is None or other.is_inactive:
            raise InvalidOperationError(
                f"Cannot inactivate {player_id}: no other live substitute would remain"
            )
        toggled = accrue(player, now_ms, state.is_paused).with_stats(is_inactive=True)
        queue = state.rotation_queue.deactivate(player_id)
        if slot == SUBSTITUTE_1:
            formation = formation.assign({SUBSTITUTE_1: other_id, SUBSTITUTE_2: player_id})
            toggled = _place(toggled, formation, SUBSTITUTE_2)
            changes[other.id] = _place(other, formation, SUBSTITUTE_1)
        action = "inactivated"
    changes[player_id] = toggled

    next_id, next_next_id = _pointers(formation, queue)
    logger.info("Player %s %s", player_id, action)
    return state.evolve(
        formation=formation,
        players=state.with_players(changes.values()),
        rotation_queue=queue,
        next_player_id=next_id,
        next_next_player_id=next_next_id,
        last_substitution=None,
        players_to_highlight=(player_id,),
    )


@fail_safe
def swap_bench_slots(state: GameState, player_a_id: str, player_b_id: str) -> GameState:
    """Exchange the occupants of ``substitute_1`` and ``substitute_2`` (Individual-7)."""
    _require_formation(state, FormationType.INDIVIDUAL_7)
    formation = state.formation
    bench = {formation.get(SUBSTITUTE_1), formation.get(SUBSTITUTE_2)}
    if player_a_id == player_b_id or {player_a_id, player_b_id} != bench:
        raise InvalidOperationError(
            f"{player_a_id} and {player_b_id} are not the two substitutes"
        )

    first_id, second_id = formation.get(SUBSTITUTE_1), formation.get(SUBSTITUTE_2)
    new_formation = formation.assign({SUBSTITUTE_1: second_id, SUBSTITUTE_2: first_id})
    moved = [
        _place(_require_player(state, second_id), new_formation, SUBSTITUTE_1),
        _place(_require_player(state, first_id), new_formation, SUBSTITUTE_2),
    ]
    logger.debug("Bench swapped: %s now first substitute", second_id)
    return state.evolve(
        formation=new_formation,
        players=state.with_players(moved),
        players_to_highlight=(player_a_id, player_b_id),
    )


@fail_safe
def set_next_pair_to_sub_out(state: GameState, pair_key: str) -> GameState:
    """Choose which field pair goes off next (Pairs-7)."""
    _require_formation(state, FormationType.PAIRS_7)
    if pair_key not in FIELD_PAIR_KEYS:
        raise InvalidOperationError(f"Unknown field pair: {pair_key!r}")
    return state.evolve(next_pair_to_sub_out=pair_key)


def _require_active_field_player(state: GameState, player_id: str) -> None:
    _require_player(state, player_id)
    if player_id not in state.formation.field_player_ids():
        raise InvalidOperationError(f"Player {player_id} is not on the field")
    if not state.rotation_queue.contains(player_id):
        raise InvalidOperationError(f"Player {player_id} is not in the rotation")


@fail_safe
def set_next_player_to_sub_out(state: GameState, player_id: str) -> GameState:
    """Move a field player to the front of the rotation queue."""
    _require_formation(state, FormationType.INDIVIDUAL_6, FormationType.INDIVIDUAL_7)
    _require_active_field_player(state, player_id)
    queue = state.rotation_queue.move_to_front(player_id)
    next_id, next_next_id = _pointers(state.formation, queue)
    return state.evolve(
        rotation_queue=queue,
        next_player_id=next_id,
        next_next_player_id=next_next_id,
    )


@fail_safe
def set_next_next_player_to_sub_out(state: GameState, player_id: str) -> GameState:
    """Make a field player the second to come off (Individual-7)."""
    _require_formation(state, FormationType.INDIVIDUAL_7)
    _require_active_field_player(state, player_id)
    next_id, next_next_id = _pointers(state.formation, state.rotation_queue)
    if player_id == next_id:
        raise InvalidOperationError(f"Player {player_id} is already next to come off")
    if player_id == next_next_id:
        return state
    queue = state.rotation_queue.insert_before(player_id, next_next_id)
    next_id, next_next_id = _pointers(state.formation, queue)
    return state.evolve(
        rotation_queue=queue,
        next_player_id=next_id,
        next_next_player_id=next_next_id,
    )


def set_next_to_go_in(state: GameState, player_id: str) -> GameState:
    """
    Make a substitute the next player to go in (Individual-7).

    The player in ``substitute_2`` is swapped into ``substitute_1``; asking
    for the player already in ``substitute_1`` changes nothing.
    """
    if state.formation_type is FormationType.INDIVIDUAL_7:
        if state.formation.get(SUBSTITUTE_1) == player_id:
            return state
        player = state.player(player_id)
        if player is not None and player.is_inactive:
            logger.warning("set_next_to_go_in rejected: player %s is inactive", player_id)
            return state
    return swap_bench_slots(state, player_id, state.formation.get(SUBSTITUTE_1))


# ---------- Clock ---------- #

@fail_safe
def pause(state: GameState, now_ms: int) -> GameState:
    """Credit everyone's time up to ``now_ms`` and stop accrual."""
    if state.is_paused:
        return state
    players = tuple(pause_player_time(player, now_ms) for player in state.players)
    logger.debug("Paused at %d", now_ms)
    return state.evolve(players=players, is_paused=True, paused_at_ms=now_ms)


@fail_safe
def resume(state: GameState, now_ms: int) -> GameState:
    """Restart every stint at ``now_ms`` so the paused span is not counted."""
    if not state.is_paused:
        return state
    players = tuple(resume_player_time(player, now_ms) for player in state.players)
    logger.debug("Resumed at %d", now_ms)
    return state.evolve(players=players, is_paused=False, paused_at_ms=None)


def finalize_period(state: GameState, now_ms: int) -> GameState:
    """
    Close every stint at the end of a period.

    Time is credited up to ``now_ms`` (or up to the pause, when paused) and
    no player accrues afterwards. The undo record is dropped.
    """
    players = tuple(end_stint(player, now_ms, state.is_paused) for player in state.players)
    logger.info("Period %d finalized", state.period_number)
    return state.evolve(players=players, last_substitution=None, players_to_highlight=())
