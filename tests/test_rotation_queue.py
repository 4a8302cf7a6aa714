"""
Unit tests for the RotationQueue model.

Covers initialization, reordering, activity toggling and the silent
handling of ids the queue does not hold.
"""
import unittest

from rotation_engine.models import RotationQueue


class TestRotationQueueInitialize(unittest.TestCase):
    """Test partitioning into active and inactive players."""

    def test_initialize_partitions_by_predicate(self) -> None:
        queue = RotationQueue.initialize(["a", "b", "c", "d"], lambda pid: pid == "c")

        self.assertEqual(queue.active, ("a", "b", "d"))
        self.assertEqual(queue.inactive, ("c",))

    def test_initialize_is_idempotent(self) -> None:
        queue = RotationQueue.initialize(["a", "b", "c"], lambda pid: pid == "b")
        again = RotationQueue.initialize(queue.all_ids(), lambda pid: pid == "b")

        self.assertEqual(again, queue)

    def test_initialize_drops_duplicates_and_none(self) -> None:
        queue = RotationQueue.initialize(["a", None, "b", "a"])

        self.assertEqual(queue.active, ("a", "b"))
        self.assertEqual(queue.inactive, ())


class TestRotationQueueReads(unittest.TestCase):
    """Test read-only accessors."""

    def setUp(self) -> None:
        self.queue = RotationQueue(active=("a", "b", "c"), inactive=("d",))

    def test_next_active_returns_prefix(self) -> None:
        self.assertEqual(self.queue.next_active(2), ["a", "b"])
        self.assertEqual(self.queue.next_active(10), ["a", "b", "c"])
        self.assertEqual(self.queue.next_active(0), [])
        self.assertEqual(self.queue.next_player_id, "a")

    def test_membership(self) -> None:
        self.assertTrue(self.queue.contains("b"))
        self.assertFalse(self.queue.contains("d"))
        self.assertTrue(self.queue.is_inactive("d"))
        self.assertEqual(self.queue.position("c"), 2)
        self.assertEqual(self.queue.position("d"), -1)

    def test_empty_queue_has_no_next_player(self) -> None:
        self.assertIsNone(RotationQueue().next_player_id)


class TestRotationQueueOperations(unittest.TestCase):
    """Test operations that produce a new queue."""

    def setUp(self) -> None:
        self.queue = RotationQueue(active=("a", "b", "c"), inactive=("d",))

    def test_rotate_to_end(self) -> None:
        rotated = self.queue.rotate_to_end("a")

        self.assertEqual(rotated.active, ("b", "c", "a"))
        self.assertEqual(self.queue.active, ("a", "b", "c"))

    def test_unknown_and_inactive_ids_are_ignored(self) -> None:
        self.assertIs(self.queue.rotate_to_end("d"), self.queue)
        self.assertIs(self.queue.rotate_to_end("zz"), self.queue)
        self.assertIs(self.queue.remove("zz"), self.queue)
        self.assertIs(self.queue.move_to_front("d"), self.queue)
        self.assertIs(self.queue.insert_before("zz", "a"), self.queue)
        self.assertIs(self.queue.add("d"), self.queue)
        self.assertIs(self.queue.deactivate("zz"), self.queue)
        self.assertIs(self.queue.reactivate("a"), self.queue)

    def test_deactivate_is_idempotent(self) -> None:
        once = self.queue.deactivate("b")
        twice = once.deactivate("b")

        self.assertEqual(once.active, ("a", "c"))
        self.assertEqual(once.inactive, ("d", "b"))
        self.assertIs(twice, once)

    def test_reactivated_player_goes_to_end(self) -> None:
        queue = RotationQueue(active=("A", "B", "C"), inactive=("D",))

        result = queue.deactivate("A").reactivate("A")

        self.assertEqual(result.active, ("B", "C", "A"))
        self.assertEqual(result.inactive, ("D",))

    def test_move_to_front_and_insert_before(self) -> None:
        self.assertEqual(self.queue.move_to_front("c").active, ("c", "a", "b"))
        self.assertEqual(self.queue.insert_before("c", "b").active, ("a", "c", "b"))
        self.assertIs(self.queue.insert_before("a", "a"), self.queue)

    def test_add_at_index_and_end(self) -> None:
        self.assertEqual(self.queue.add("e").active, ("a", "b", "c", "e"))
        self.assertEqual(self.queue.add("e", 1).active, ("a", "e", "b", "c"))
        self.assertEqual(self.queue.add("a").active, ("b", "c", "a"))

    def test_remove(self) -> None:
        self.assertEqual(self.queue.remove("b").active, ("a", "c"))

    def test_membership_is_conserved(self) -> None:
        result = (
            self.queue.rotate_to_end("a")
            .deactivate("c")
            .move_to_front("b")
            .reactivate("d")
            .reactivate("c")
        )

        self.assertEqual(sorted(result.all_ids()), ["a", "b", "c", "d"])
        self.assertEqual(len(result.all_ids()), 4)

    def test_dict_round_trip(self) -> None:
        self.assertEqual(RotationQueue.from_dict(self.queue.to_dict()), self.queue)


if __name__ == '__main__':
    unittest.main()
