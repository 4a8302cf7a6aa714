"""
Rotation queue model for the Sideline Rotation Engine.

The queue orders active outfield players by priority to be substituted off
next. Inactive players are removed from the ordering entirely and tracked in
a separate list, so they can never drift to the front.
"""
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class RotationQueue:
    """
    Immutable rotation queue.

    Every operation returns a new queue; operations on ids the queue does not
    hold are silently ignored so repeated UI events replay safely.

    Attributes:
        active: Active player ids, front is next to come off
        inactive: Inactive player ids, in the order they were inactivated
    """
    active: Tuple[str, ...] = ()
    inactive: Tuple[str, ...] = ()

    @classmethod
    def initialize(cls, player_ids: Iterable[str],
                   is_inactive: Optional[Callable[[str], bool]] = None) -> 'RotationQueue':
        """
        Partition ids into active and inactive buckets.

        Duplicates are dropped, keeping the first occurrence, so initializing
        from an already-partitioned id list yields the same queue.

        Args:
            player_ids: Outfield player ids in priority order
            is_inactive: Predicate telling whether a player is inactive

        Returns:
            New RotationQueue
        """
        check = is_inactive or (lambda _player_id: False)
        active: List[str] = []
        inactive: List[str] = []
        for player_id in player_ids:
            if player_id is None or player_id in active or player_id in inactive:
                continue
            if check(player_id):
                inactive.append(player_id)
            else:
                active.append(player_id)
        return cls(active=tuple(active), inactive=tuple(inactive))

    def next_active(self, count: int = 1) -> List[str]:
        """Get the first ``count`` active ids (fewer if the queue is shorter)."""
        return list(self.active[:max(0, count)])

    @property
    def next_player_id(self) -> Optional[str]:
        return self.active[0] if self.active else None

    def contains(self, player_id: str) -> bool:
        return player_id in self.active

    def is_inactive(self, player_id: str) -> bool:
        return player_id in self.inactive

    def position(self, player_id: str) -> int:
        """Index of a player in the active list, or -1."""
        try:
            return self.active.index(player_id)
        except ValueError:
            return -1

    def all_ids(self) -> List[str]:
        """Active then inactive ids."""
        return list(self.active) + list(self.inactive)

    # ---------- Reordering ---------- #

    def rotate_to_end(self, player_id: str) -> 'RotationQueue':
        """Move an active player to the end. Inactive or unknown ids are ignored."""
        if player_id not in self.active:
            return self
        rest = tuple(pid for pid in self.active if pid != player_id)
        return RotationQueue(active=rest + (player_id,), inactive=self.inactive)

    def remove(self, player_id: str) -> 'RotationQueue':
        """Drop a player from the active list."""
        if player_id not in self.active:
            return self
        return RotationQueue(
            active=tuple(pid for pid in self.active if pid != player_id),
            inactive=self.inactive,
        )

    def add(self, player_id: str, index: Optional[int] = None) -> 'RotationQueue':
        """
        Place a player in the active list, at ``index`` or at the end.

        The player is first removed from wherever it was; inactive ids are
        left alone.
        """
        if player_id in self.inactive:
            return self
        active = [pid for pid in self.active if pid != player_id]
        if index is None or index >= len(active):
            active.append(player_id)
        else:
            active.insert(max(0, index), player_id)
        return RotationQueue(active=tuple(active), inactive=self.inactive)

    def move_to_front(self, player_id: str) -> 'RotationQueue':
        """Make an active player the next one to come off."""
        if player_id not in self.active:
            return self
        return self.add(player_id, 0)

    def insert_before(self, player_id: str, target_id: str) -> 'RotationQueue':
        """Place an active player directly ahead of another active player."""
        if player_id == target_id or player_id not in self.active or target_id not in self.active:
            return self
        active = [pid for pid in self.active if pid != player_id]
        active.insert(active.index(target_id), player_id)
        return RotationQueue(active=tuple(active), inactive=self.inactive)

    # ---------- Activity ---------- #

    def deactivate(self, player_id: str) -> 'RotationQueue':
        """Move a player from the active list to the end of the inactive list."""
        if player_id in self.inactive:
            return self
        if player_id not in self.active:
            return self
        return RotationQueue(
            active=tuple(pid for pid in self.active if pid != player_id),
            inactive=self.inactive + (player_id,),
        )

    def reactivate(self, player_id: str) -> 'RotationQueue':
        """
        Move an inactive player to the end of the active list.

        Appending keeps a returning bench player behind every player who is
        already on the field, so they are never the next to come off.
        """
        if player_id not in self.inactive:
            return self
        return RotationQueue(
            active=tuple(pid for pid in self.active if pid != player_id) + (player_id,),
            inactive=tuple(pid for pid in self.inactive if pid != player_id),
        )

    def to_dict(self) -> dict:
        return {"active": list(self.active), "inactive": list(self.inactive)}

    @classmethod
    def from_dict(cls, data: dict) -> 'RotationQueue':
        return cls(
            active=tuple(data.get("active", [])),
            inactive=tuple(data.get("inactive", [])),
        )
