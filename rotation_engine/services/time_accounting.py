"""
Time accounting for the Sideline Rotation Engine.

Pure functions that turn elapsed wall-clock time into per-role playing
seconds for a single player. Nothing here mutates its input; every function
returns a new Player.
"""
import logging
from typing import Optional

from ..models.player import FIELD_ROLE_COUNTERS, Player, PlayerRole, PlayerStatus
from ..utils.time_utils import elapsed_seconds

logger = logging.getLogger(__name__)


def current_stint_seconds(player: Player, now_ms: int) -> int:
    """
    Seconds accrued in the current stint but not yet credited.

    Args:
        player: Player to inspect
        now_ms: Current time in epoch milliseconds

    Returns:
        Whole seconds since the stint started, 0 if no stint is running
    """
    return elapsed_seconds(player.stats.stint_start_ms, now_ms)


def _credit(player: Player, seconds: int, status: PlayerStatus,
            role: Optional[PlayerRole]) -> Player:
    """Add ``seconds`` to the counters matching a status and role."""
    stats = player.stats
    if seconds <= 0:
        return player
    if status is PlayerStatus.ON_FIELD:
        changes = {"time_on_field_seconds": stats.time_on_field_seconds + seconds}
        counter = FIELD_ROLE_COUNTERS.get(role)
        if counter:
            changes[counter] = getattr(stats, counter) + seconds
        return player.with_stats(**changes)
    if status is PlayerStatus.SUBSTITUTE:
        return player.with_stats(
            time_as_substitute_seconds=stats.time_as_substitute_seconds + seconds
        )
    if status is PlayerStatus.GOALIE:
        return player.with_stats(time_as_goalie_seconds=stats.time_as_goalie_seconds + seconds)
    logger.warning("Unknown status %r for player %s; time not credited", status, player.id)
    return player


def credit_field_time(player: Player, seconds: int, role: Optional[PlayerRole]) -> Player:
    """Credit outfield seconds in a given role without touching the stint."""
    return _credit(player, seconds, PlayerStatus.ON_FIELD, role)


def accrue(player: Player, now_ms: int, is_paused: bool = False) -> Player:
    """
    Credit the current stint to the player's current status and role.

    Args:
        player: Player whose stint is credited
        now_ms: Current time in epoch milliseconds
        is_paused: When True nothing changes and the stint start is kept,
            so the paused span is never attributed to any counter

    Returns:
        Player with counters updated and the stint restarted at ``now_ms``
    """
    if is_paused:
        return player
    seconds = current_stint_seconds(player, now_ms)
    credited = _credit(player, seconds, player.stats.status, player.stats.role)
    return credited.with_stats(stint_start_ms=now_ms)


def change_role(player: Player, new_role: PlayerRole, now_ms: int,
                is_paused: bool = False) -> Player:
    """
    Switch a player's role, crediting time spent in the old role first.

    Args:
        player: Player changing role
        new_role: Role the player takes on
        now_ms: Current time in epoch milliseconds
        is_paused: When True the stint start is left untouched

    Returns:
        Player in the new role
    """
    updated = accrue(player, now_ms, is_paused).with_stats(role=new_role)
    if not is_paused:
        updated = start_stint(updated, now_ms)
    return updated


def start_stint(player: Player, now_ms: int) -> Player:
    """Start a new stint at ``now_ms``."""
    return player.with_stats(stint_start_ms=now_ms)


def end_stint(player: Player, now_ms: int, is_paused: bool = False) -> Player:
    """Credit the running stint and stop accruing (period end)."""
    return accrue(player, now_ms, is_paused).with_stats(stint_start_ms=None)


def pause_player_time(player: Player, now_ms: int) -> Player:
    """
    Credit time up to the moment of pausing.

    The stint start moves to the pause moment, so stats captured while paused
    always hold everything owed up to the pause. :func:`resume_player_time`
    restarts the stint, so the paused span is never counted.
    """
    if player.stats.stint_start_ms is None:
        return player
    return accrue(player, now_ms)


def resume_player_time(player: Player, now_ms: int) -> Player:
    """Restart the stint for any player holding a status."""
    if player.stats.status in (PlayerStatus.ON_FIELD, PlayerStatus.SUBSTITUTE,
                               PlayerStatus.GOALIE):
        return start_stint(player, now_ms)
    return player
