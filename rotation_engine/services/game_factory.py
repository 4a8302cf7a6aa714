"""
Construction of the initial game state for a period.

The host supplies a formation (slot key -> player id) and the squad; this
module derives every player's role, status and slot from the formation,
starts their stints and builds the rotation queue.
"""
import logging
from typing import Iterable, Mapping, Optional

from ..models import Formation, GameState, Player, PlayerRole, RotationQueue, TeamConfig
from ..utils.constants import LEFT_PAIR
from .errors import InvalidOperationError
from .substitution_strategies import field_pointers
from .time_accounting import start_stint
from .game_transitions import finalize_period

logger = logging.getLogger(__name__)


def _build_formation(team_config: TeamConfig,
                     formation_slots: Mapping[str, Optional[str]],
                     roster_ids: Iterable[str]) -> Formation:
    try:
        formation = Formation.create(team_config.formation_type, formation_slots)
    except ValueError as e:
        raise InvalidOperationError(str(e)) from e

    definition = formation.definition
    missing = [slot for slot in definition.all_slots if not formation.get(slot)]
    if missing:
        raise InvalidOperationError(
            f"Formation {definition.formation_type.value} is missing: {', '.join(missing)}"
        )

    assigned = formation.player_ids()
    duplicates = sorted({pid for pid in assigned if assigned.count(pid) > 1})
    if duplicates:
        raise InvalidOperationError(f"Players assigned twice: {', '.join(duplicates)}")

    known = set(roster_ids)
    unknown = [pid for pid in assigned if pid not in known]
    if unknown:
        raise InvalidOperationError(f"Unknown players in formation: {', '.join(unknown)}")
    return formation


def _seat_inactive_last(formation: Formation, roster: Mapping[str, Player]) -> Formation:
    """Move inactive substitutes behind the live ones so substitute_1 can go in."""
    bench = formation.definition.bench_slots
    occupants = [formation.get(slot) for slot in bench]
    live = [pid for pid in occupants if not roster[pid].is_inactive]
    if not live:
        raise InvalidOperationError("At least one substitute must be active")
    resting = [pid for pid in occupants if roster[pid].is_inactive]
    if live + resting == occupants:
        return formation
    logger.debug("Inactive substitutes %s seated last", ", ".join(resting))
    return formation.assign(dict(zip(bench, live + resting)))


def create_game_state(team_config: TeamConfig,
                      formation_slots: Mapping[str, Optional[str]],
                      players: Iterable[Player],
                      now_ms: int,
                      period_number: int = 1,
                      next_pair_to_sub_out: str = LEFT_PAIR) -> GameState:
    """
    Build the state at the start of a period.

    Players in the squad but not in the formation are left out of the
    period. Inactive flags are only honoured for formations that support
    inactive players, and only for bench slots; an inactive substitute is
    seated behind the live one.

    Args:
        team_config: Formation type and pair role behaviour
        formation_slots: Slot key -> player id, every slot filled
        players: Squad members; their time counters are carried over
        now_ms: Kick-off time in epoch milliseconds
        period_number: 1-based period index
        next_pair_to_sub_out: Pairs formation - first pair to go off

    Returns:
        New GameState with every stint started at ``now_ms``

    Raises:
        InvalidOperationError: If the formation is incomplete, names an
            unknown player, assigns a player twice, or has no active
            substitute
    """
    roster = {}
    for player in players:
        if player.id in roster:
            raise InvalidOperationError(f"Duplicate player id: {player.id}")
        roster[player.id] = player

    formation = _build_formation(team_config, formation_slots, roster)
    if formation.definition.supports_inactive_players:
        formation = _seat_inactive_last(formation, roster)
    definition = formation.definition

    participants = []
    for slot in definition.all_slots:
        player = roster[formation.get(slot)]
        is_inactive = (player.is_inactive and definition.supports_inactive_players
                       and slot in definition.bench_slots)
        participants.append(start_stint(player.with_stats(
            slot=slot,
            status=definition.status_for_slot(slot),
            role=definition.role_for_slot(slot) or PlayerRole.SUBSTITUTE,
            is_inactive=is_inactive,
        ), now_ms))
    by_id = {player.id: player for player in participants}

    outfield_ids = [formation.get(slot) for slot in definition.outfield_slots]
    queue = RotationQueue.initialize(outfield_ids, lambda pid: by_id[pid].is_inactive)
    next_id, next_next_id = field_pointers(formation, queue)
    if not definition.supports_next_next:
        next_next_id = None

    logger.info("Period %d started: %s with %d players",
                period_number, definition.formation_type.value, len(participants))
    return GameState(
        team_config=team_config,
        formation=formation,
        players=tuple(participants),
        rotation_queue=queue,
        next_pair_to_sub_out=next_pair_to_sub_out if definition.is_pairs else None,
        next_player_id=next_id,
        next_next_player_id=next_next_id,
        period_number=period_number,
    )


def start_next_period(state: GameState,
                      formation_slots: Mapping[str, Optional[str]],
                      now_ms: int,
                      team_config: Optional[TeamConfig] = None) -> GameState:
    """
    Finalize the current period and build the state for the next one.

    Accumulated counters carry over; players may be reassigned freely.
    """
    finished = finalize_period(state, now_ms)
    return create_game_state(
        team_config or state.team_config,
        formation_slots,
        finished.players,
        now_ms,
        period_number=state.period_number + 1,
    )
