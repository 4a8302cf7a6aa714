"""
Unit tests for MatchSession.

The session clock is driven by the test so every transition time is known.
"""
import unittest

from rotation_engine.services import MatchSession
from builders import T0, individual6_state, individual7_state


class TestMatchSession(unittest.TestCase):
    """Test applying transitions through a session."""

    def setUp(self) -> None:
        self.now = T0
        self.session = MatchSession(individual6_state(), clock=lambda: self.now)

    def test_substitution_changes_state(self) -> None:
        self.now = T0 + 60_000

        self.assertTrue(self.session.substitute())
        self.assertEqual(self.session.state.formation.get("substitute_1"), "a")
        self.assertTrue(self.session.can_undo())
        self.assertEqual(self.session.get_history(), ["Substitution"])

    def test_rejected_action_reports_no_change(self) -> None:
        before = self.session.state

        self.assertFalse(self.session.undo_substitution())
        self.assertFalse(self.session.switch_goalie("g"))
        self.assertIs(self.session.state, before)
        self.assertEqual(self.session.get_history(), [])

    def test_undo_uses_clock(self) -> None:
        self.now = T0 + 60_000
        self.session.substitute()
        self.now = T0 + 75_000

        self.assertTrue(self.session.undo_substitution())
        self.assertFalse(self.session.can_undo())
        self.assertEqual(self.session.state.player("a").stats.time_on_field_seconds, 75)

    def test_history_is_bounded(self) -> None:
        session = MatchSession(individual6_state(), clock=lambda: self.now, max_history=2)

        session.pause()
        session.resume()
        session.pause()

        self.assertEqual(session.get_history(), ["Resume", "Pause"])
        session.clear_history()
        self.assertEqual(session.get_history(), [])

    def test_overrides_and_report(self) -> None:
        session = MatchSession(individual7_state(), clock=lambda: self.now)

        self.assertTrue(session.toggle_inactive("e"))
        self.assertTrue(session.set_next_player_to_sub_out("c"))
        self.assertTrue(session.set_next_next_player_to_sub_out("d"))
        self.assertFalse(session.swap_bench_slots("a", "b"))
        self.now = T0 + 30_000

        report = session.time_report()

        self.assertEqual(report.generated_ms, T0 + 30_000)
        self.assertEqual(session.state.next_player_id, "c")
        self.assertEqual(session.state.next_next_player_id, "d")
        self.assertTrue(session.finalize_period())


if __name__ == '__main__':
    unittest.main()
