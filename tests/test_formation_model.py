"""
Unit tests for the formation, player and game state models.

Tests the slot lookup tables per formation type, immutable slot assignment
and dictionary serialization used by host persistence.
"""
import unittest

from rotation_engine.models import (
    Formation, FormationType, GameState, Player, PlayerRole, PlayerStatus,
    get_definition
)
from builders import T0, individual7_state


class TestFormationDefinitions(unittest.TestCase):
    """Test the per-formation slot tables."""

    def test_pairs_slots_and_roles(self) -> None:
        definition = get_definition(FormationType.PAIRS_7)

        self.assertTrue(definition.is_pairs)
        self.assertEqual(len(definition.all_slots), 7)
        self.assertEqual(definition.role_for_slot("right_pair.attacker"), PlayerRole.ATTACKER)
        self.assertEqual(definition.role_for_slot("sub_pair.defender"), PlayerRole.DEFENDER)
        self.assertEqual(definition.status_for_slot("sub_pair.defender"), PlayerStatus.SUBSTITUTE)

    def test_individual_formations(self) -> None:
        six = get_definition(FormationType.INDIVIDUAL_6)
        seven = get_definition(FormationType.INDIVIDUAL_7)

        self.assertEqual(six.bench_slots, ("substitute_1",))
        self.assertEqual(seven.bench_slots, ("substitute_1", "substitute_2"))
        self.assertFalse(six.supports_inactive_players)
        self.assertTrue(seven.supports_inactive_players)
        self.assertTrue(seven.supports_next_next)
        self.assertEqual(seven.role_for_slot("left_attacker"), PlayerRole.ATTACKER)
        self.assertEqual(seven.role_for_slot("substitute_2"), PlayerRole.SUBSTITUTE)
        self.assertEqual(seven.status_for_slot("goalie"), PlayerStatus.GOALIE)
        self.assertIsNone(seven.role_for_slot("left_pair.defender"))
        self.assertIsNone(seven.status_for_slot("nowhere"))


class TestFormation(unittest.TestCase):
    """Test Formation snapshots."""

    def setUp(self) -> None:
        self.formation = Formation.create(FormationType.INDIVIDUAL_6, {
            "goalie": "g", "left_defender": "a", "right_defender": "b",
            "left_attacker": "c", "right_attacker": "d", "substitute_1": "e",
        })

    def test_create_rejects_unknown_slot(self) -> None:
        with self.assertRaises(ValueError):
            Formation.create(FormationType.INDIVIDUAL_6, {"substitute_2": "x"})

    def test_create_fills_missing_slots_with_none(self) -> None:
        formation = Formation.create(FormationType.INDIVIDUAL_7, {"goalie": "g"})

        self.assertIsNone(formation.get("substitute_2"))
        self.assertEqual(formation.player_ids(), ["g"])

    def test_lookups(self) -> None:
        self.assertEqual(self.formation.goalie, "g")
        self.assertEqual(self.formation.slot_of("c"), "left_attacker")
        self.assertIsNone(self.formation.slot_of("zz"))
        self.assertEqual(self.formation.field_player_ids(), ["a", "b", "c", "d"])
        self.assertEqual(self.formation.bench_player_ids(), ["e"])

    def test_assign_returns_new_formation(self) -> None:
        changed = self.formation.assign({"left_defender": "e", "substitute_1": "a"})

        self.assertEqual(changed.get("left_defender"), "e")
        self.assertEqual(self.formation.get("left_defender"), "a")
        with self.assertRaises(ValueError):
            self.formation.assign({"sub_pair.defender": "a"})

    def test_pair_lookup(self) -> None:
        formation = Formation.create(FormationType.PAIRS_7, {
            "left_pair.defender": "1", "left_pair.attacker": "2",
        })

        self.assertEqual(formation.pair("left_pair"), ("1", "2"))
        self.assertEqual(formation.pair("sub_pair"), (None, None))


class TestSerialization(unittest.TestCase):
    """Test dictionary round trips of players and game state."""

    def test_player_round_trip(self) -> None:
        player = Player(id="7", name="Sam", number="7").with_stats(
            role=PlayerRole.ATTACKER, status=PlayerStatus.ON_FIELD,
            slot="left_attacker", time_on_field_seconds=120,
            time_as_attacker_seconds=120, stint_start_ms=T0, is_captain=True,
        )

        self.assertEqual(Player.from_dict(player.to_dict()), player)

    def test_player_from_minimal_dict(self) -> None:
        player = Player.from_dict({"id": 12})

        self.assertEqual(player.id, "12")
        self.assertEqual(player.stats.status, PlayerStatus.SUBSTITUTE)

    def test_game_state_round_trip(self) -> None:
        state = individual7_state(inactive=("f",))

        restored = GameState.from_json(state.to_json())

        self.assertEqual(restored, state)
        self.assertEqual(restored.inactive_player_ids, ["f"])

    def test_paused_state_round_trip(self) -> None:
        state = individual7_state().evolve(is_paused=True, paused_at_ms=T0 + 5_000)

        restored = GameState.from_json(state.to_json())

        self.assertTrue(restored.is_paused)
        self.assertEqual(restored.paused_at_ms, T0 + 5_000)


if __name__ == '__main__':
    unittest.main()
