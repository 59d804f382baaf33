"""Turn recording and the final-round trigger/completion rules."""
import unittest
from test_utils import EventCollector, make_keeper, ids_by_name, FIXED_NOW_MS
from zombiedice.core.game_event import GameEventType


class RecordTurnTests(unittest.TestCase):
    def setUp(self):
        self.keeper = make_keeper("A", "B", "C", target=10)
        self.ids = ids_by_name(self.keeper)

    def _player(self, name):
        return self.keeper.roster.find(self.ids[name])

    def test_banks_brains_and_counts_turn(self):
        self.keeper.record_turn(self.ids["A"], 3, 1, "  careful  ")
        a = self._player("A")
        self.assertEqual((a.total, a.turns), (3, 1))
        entry = self.keeper.log.last()
        self.assertEqual(entry.player_id, self.ids["A"])
        self.assertEqual((entry.brains, entry.shotguns, entry.note, entry.ts), (3, 1, "careful", FIXED_NOW_MS))

    def test_input_is_coerced(self):
        self.keeper.record_turn(self.ids["A"], "-4", "2.7", None)
        self.keeper.record_turn(self.ids["A"], 2.9, "lots")
        a = self._player("A")
        self.assertEqual((a.total, a.turns), (2, 2))
        self.assertEqual([(e.brains, e.shotguns, e.note) for e in self.keeper.log], [(0, 2, ""), (2, 0, "")])

    def test_unknown_player_is_a_no_op(self):
        before = self.keeper.to_dict()
        self.keeper.record_turn("nobody", 5)
        self.keeper.record_turn(None, 5)
        self.assertEqual(self.keeper.to_dict(), before)

    def test_totals_always_match_log(self):
        script = [("A", 2), ("B", 4), ("C", 0), ("A", 5), ("B", 1), ("C", 9), ("A", 3)]
        for name, brains in script:
            self.keeper.record_turn(self.ids[name], brains)
            for p in self.keeper.roster:
                entries = self.keeper.log.entries_for(p.id)
                self.assertEqual(p.total, sum(e.brains for e in entries))
                self.assertEqual(p.turns, len(entries))

    def test_scenario_trigger_advance_lock(self):
        k, ids = self.keeper, self.ids
        k.record_turn(ids["A"], 10)
        self.assertTrue(k.final_round.active)
        self.assertEqual(k.final_round.starter_id, ids["A"])
        self.assertEqual(k.final_round.remaining_ids, [ids["B"], ids["C"]])

        k.record_turn(ids["B"], 3)
        self.assertEqual(k.final_round.remaining_ids, [ids["C"]])
        self.assertFalse(k.locked)

        k.record_turn(ids["C"], 0)
        self.assertEqual(k.final_round.remaining_ids, [])
        self.assertTrue(k.locked)

        k.undo()
        self.assertFalse(k.locked)
        self.assertEqual(k.final_round.remaining_ids, [ids["C"]])
        self.assertEqual(self._player("C").total, 0)
        self.assertEqual(self._player("C").turns, 0)

    def test_trigger_includes_players_with_no_turns(self):
        keeper = make_keeper("A", "B", "C", "D", target=13)
        ids = ids_by_name(keeper)
        keeper.record_turn(ids["C"], 13)
        self.assertEqual(keeper.final_round.starter_id, ids["C"])
        self.assertEqual(keeper.final_round.remaining_ids, [ids["A"], ids["B"], ids["D"]])

    def test_overshooting_the_target_triggers(self):
        self.keeper.record_turn(self.ids["B"], 7)
        self.keeper.record_turn(self.ids["B"], 6)
        self.assertEqual(self.keeper.final_round.starter_id, self.ids["B"])

    def test_starter_never_reenters_remaining(self):
        k, ids = self.keeper, self.ids
        k.record_turn(ids["A"], 10)
        k.record_turn(ids["A"], 4)
        self.assertNotIn(ids["A"], k.final_round.remaining_ids)
        k.record_turn(ids["B"], 20)
        self.assertEqual(k.final_round.starter_id, ids["A"])
        self.assertNotIn(ids["A"], k.final_round.remaining_ids)

    def test_extra_turns_for_finished_players_do_not_lock(self):
        k, ids = self.keeper, self.ids
        k.record_turn(ids["A"], 10)
        k.record_turn(ids["B"], 1)
        k.record_turn(ids["B"], 1)
        self.assertFalse(k.locked)
        self.assertEqual(k.final_round.remaining_ids, [ids["C"]])

    def test_locked_game_rejects_score_changes(self):
        k, ids = self.keeper, self.ids
        k.lock()
        before = k.to_dict()
        k.record_turn(ids["A"], 5)
        k.set_target(50)
        k.add_player("Late")
        self.assertEqual(k.to_dict(), before)

    def test_single_player_final_round_never_auto_locks(self):
        keeper = make_keeper("Solo", target=5)
        solo = keeper.roster.ids()[0]
        keeper.record_turn(solo, 5)
        self.assertTrue(keeper.final_round.active)
        self.assertEqual(keeper.final_round.remaining_ids, [])
        keeper.record_turn(solo, 1)
        self.assertFalse(keeper.locked)


class ManualLockTests(unittest.TestCase):
    def test_lock_after_final_round_pins_the_lock(self):
        keeper = make_keeper("A", "B", target=5)
        ids = ids_by_name(keeper)
        keeper.record_turn(ids["A"], 5)
        keeper.record_turn(ids["B"], 1)
        self.assertTrue(keeper.locked)
        keeper.lock()
        self.assertTrue(keeper.locked_manually)
        keeper.undo()
        self.assertTrue(keeper.locked)
        self.assertEqual(len(keeper.log), 2)

    def test_pinning_an_existing_lock_does_not_announce_it_twice(self):
        keeper = make_keeper("A", "B", target=5)
        ids = ids_by_name(keeper)
        keeper.record_turn(ids["A"], 5)
        keeper.record_turn(ids["B"], 1)
        collector = EventCollector()
        keeper.event_listener.subscribe(collector.on_event)
        keeper.lock()
        self.assertNotIn(GameEventType.GAME_LOCKED, collector.types())
        self.assertEqual(collector.of_type(GameEventType.STATE_CHANGED)[0].get("command"), "lock")

    def test_lock_is_forced_and_irreversible_without_new_game(self):
        keeper = make_keeper("A", "B")
        keeper.lock()
        self.assertTrue(keeper.locked)
        self.assertFalse(keeper.final_round.active)
        keeper.new_game()
        self.assertFalse(keeper.locked)

    def test_validation_fallbacks_never_lock(self):
        keeper = make_keeper("A", "B", target=5)
        a = keeper.roster.ids()[0]
        for junk in ("x", None, -1, float("nan"), "", "9e999"):
            keeper.record_turn(a, junk, junk, junk)
        keeper.set_target("junk")
        self.assertFalse(keeper.locked)
        self.assertFalse(keeper.final_round.active)


if __name__ == '__main__':
    unittest.main()
