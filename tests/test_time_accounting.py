"""
Unit tests for time accounting.

Tests crediting of elapsed stint time to status and role counters and the
behaviour of the pause flag.
"""
import unittest

from rotation_engine.models import Player, PlayerRole, PlayerStatus
from rotation_engine.services.time_accounting import (
    accrue, change_role, current_stint_seconds, end_stint, pause_player_time,
    resume_player_time, start_stint
)
from rotation_engine.utils import elapsed_seconds, fmt_mmss

T0 = 1_700_000_000_000


def on_field(role=PlayerRole.DEFENDER, start=T0) -> Player:
    return Player(id="p1", name="Alex").with_stats(
        status=PlayerStatus.ON_FIELD, role=role, slot="left_defender", stint_start_ms=start
    )


class TestElapsedSeconds(unittest.TestCase):
    """Test the floored elapsed-seconds helper."""

    def test_floors_partial_seconds(self) -> None:
        self.assertEqual(elapsed_seconds(T0, T0 + 1999), 1)

    def test_never_negative_or_unset(self) -> None:
        self.assertEqual(elapsed_seconds(T0, T0 - 5000), 0)
        self.assertEqual(elapsed_seconds(None, T0), 0)
        self.assertEqual(elapsed_seconds(0, T0), 0)
        self.assertEqual(elapsed_seconds(T0, None), 0)
        self.assertEqual(elapsed_seconds(float("nan"), T0), 0)

    def test_fmt_mmss(self) -> None:
        self.assertEqual(fmt_mmss(90), "01:30")


class TestAccrue(unittest.TestCase):
    """Test crediting a stint to the current status and role."""

    def test_field_time_goes_to_total_and_role(self) -> None:
        player = accrue(on_field(), T0 + 65_900)

        self.assertEqual(player.stats.time_on_field_seconds, 65)
        self.assertEqual(player.stats.time_as_defender_seconds, 65)
        self.assertEqual(player.stats.time_as_attacker_seconds, 0)
        self.assertEqual(player.stats.stint_start_ms, T0 + 65_900)

    def test_midfielder_counter(self) -> None:
        player = accrue(on_field(PlayerRole.MIDFIELDER), T0 + 10_000)

        self.assertEqual(player.stats.time_as_midfielder_seconds, 10)

    def test_substitute_and_goalie_counters(self) -> None:
        bench = on_field().with_stats(status=PlayerStatus.SUBSTITUTE, role=PlayerRole.SUBSTITUTE)
        goalie = on_field().with_stats(status=PlayerStatus.GOALIE, role=PlayerRole.GOALIE)

        self.assertEqual(accrue(bench, T0 + 20_000).stats.time_as_substitute_seconds, 20)
        self.assertEqual(accrue(bench, T0 + 20_000).stats.time_on_field_seconds, 0)
        self.assertEqual(accrue(goalie, T0 + 20_000).stats.time_as_goalie_seconds, 20)

    def test_paused_accrue_changes_nothing(self) -> None:
        player = on_field()

        self.assertIs(accrue(player, T0 + 30_000, is_paused=True), player)

    def test_accrue_after_paused_call_measures_from_original_start(self) -> None:
        player = accrue(on_field(), T0 + 10_000, is_paused=True)
        player = accrue(player, T0 + 20_000)

        self.assertEqual(player.stats.time_on_field_seconds, 20)

    def test_clock_behind_stint_start_credits_nothing(self) -> None:
        player = accrue(on_field(), T0 - 5_000)

        self.assertEqual(player.stats.time_on_field_seconds, 0)

    def test_unset_stint_start_credits_nothing(self) -> None:
        player = accrue(on_field(start=None), T0)

        self.assertEqual(player.stats.time_on_field_seconds, 0)
        self.assertEqual(player.stats.stint_start_ms, T0)

    def test_continuous_stint_equals_sum_of_accruals(self) -> None:
        player = on_field()
        for step in range(1, 7):
            player = accrue(player, T0 + step * 10_000)

        self.assertEqual(player.stats.time_on_field_seconds, 60)


class TestChangeRole(unittest.TestCase):
    """Test role changes credit the old role first."""

    def test_old_role_is_credited(self) -> None:
        player = change_role(on_field(), PlayerRole.ATTACKER, T0 + 30_000)
        player = accrue(player, T0 + 40_000)

        self.assertEqual(player.stats.role, PlayerRole.ATTACKER)
        self.assertEqual(player.stats.time_as_defender_seconds, 30)
        self.assertEqual(player.stats.time_as_attacker_seconds, 10)
        self.assertEqual(player.stats.time_on_field_seconds, 40)

    def test_paused_change_keeps_stint_start(self) -> None:
        player = change_role(on_field(), PlayerRole.ATTACKER, T0 + 30_000, is_paused=True)

        self.assertEqual(player.stats.role, PlayerRole.ATTACKER)
        self.assertEqual(player.stats.stint_start_ms, T0)
        self.assertEqual(player.stats.time_on_field_seconds, 0)


class TestStints(unittest.TestCase):
    """Test stint start, end, pause and resume helpers."""

    def test_start_and_current_stint(self) -> None:
        player = start_stint(on_field(start=None), T0)

        self.assertEqual(current_stint_seconds(player, T0 + 42_000), 42)

    def test_end_stint_credits_and_stops(self) -> None:
        player = end_stint(on_field(), T0 + 90_000)

        self.assertEqual(player.stats.time_on_field_seconds, 90)
        self.assertIsNone(player.stats.stint_start_ms)
        self.assertEqual(current_stint_seconds(player, T0 + 200_000), 0)

    def test_pause_then_resume_skips_paused_span(self) -> None:
        player = pause_player_time(on_field(), T0 + 30_000)
        self.assertEqual(player.stats.time_on_field_seconds, 30)
        self.assertEqual(player.stats.stint_start_ms, T0 + 30_000)

        player = resume_player_time(player, T0 + 90_000)
        player = accrue(player, T0 + 100_000)

        self.assertEqual(player.stats.time_on_field_seconds, 40)


if __name__ == '__main__':
    unittest.main()
