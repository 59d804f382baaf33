import unittest
from test_utils import make_keeper, ids_by_name, FIXED_NOW_MS
from zombiedice.core.game_state_enum import GamePhase
from zombiedice.ui.formatting import format_timestamp, leader_badge, log_detail, log_headline


class GameViewTests(unittest.TestCase):
    def setUp(self):
        self.keeper = make_keeper("A", "B", "C", target=10)
        self.ids = ids_by_name(self.keeper)

    def test_commands_return_views(self):
        view = self.keeper.record_turn(self.ids["B"], 4, 2, "lucky")
        self.assertEqual(view.player(self.ids["B"]).total, 4)
        self.assertEqual(view.next_player_id, self.ids["C"])
        self.assertEqual(view.phase, GamePhase.PLAYING)

    def test_standings_sorted_but_players_seated(self):
        self.keeper.record_turn(self.ids["C"], 5)
        self.keeper.record_turn(self.ids["A"], 2)
        view = self.keeper.view()
        self.assertEqual([p.name for p in view.players], ["A", "B", "C"])
        self.assertEqual([p.name for p in view.standings], ["C", "A", "B"])
        self.assertEqual([p.is_leader for p in view.standings], [True, False, False])

    def test_log_is_newest_first_with_names(self):
        self.keeper.record_turn(self.ids["A"], 1)
        self.keeper.record_turn(self.ids["B"], 2)
        view = self.keeper.view()
        self.assertEqual([(e.player_name, e.brains) for e in view.log], [("B", 2), ("A", 1)])

    def test_status_lines(self):
        k, ids = self.keeper, self.ids
        self.assertEqual(k.view().status.badge, "Game active")
        self.assertIn("Playing to 10 brains", k.view().status.text)

        k.record_turn(ids["A"], 10)
        view = k.view()
        self.assertEqual((view.status.badge, view.status.kind), ("Final round!", "warn"))
        self.assertEqual(view.status.text, "A hit 10+ brains. Remaining last turns: B, C.")
        self.assertEqual(view.final_round.starter_name, "A")
        self.assertEqual(view.final_round.remaining_names, ("B", "C"))

        k.record_turn(ids["B"], 0)
        k.record_turn(ids["C"], 0)
        view = k.view()
        self.assertEqual((view.status.badge, view.status.kind), ("Game locked", "danger"))
        self.assertTrue(view.final_round.locked)
        self.assertFalse(view.can_play)
        self.assertFalse(view.can_add_player)
        self.assertTrue(view.can_undo)
        self.assertFalse(view.can_lock)

    def test_final_round_complete_badge_when_remaining_unknown(self):
        k = self.keeper
        k.final_round.start("ghost-starter", ["ghost-starter"])
        view = k.view()
        self.assertEqual(view.status.badge, "Final turn complete")

    def test_formatting(self):
        self.keeper.record_turn(self.ids["A"], 3, 2, "close call")
        self.keeper.record_turn(self.ids["B"], 3)
        view = self.keeper.view()
        newest, oldest = view.log
        self.assertEqual(log_headline(oldest), "A +3 brains")
        stamp = format_timestamp(FIXED_NOW_MS)
        self.assertEqual(log_detail(oldest), f"{stamp} · shotguns: 2 · close call")
        self.assertEqual(log_detail(newest), stamp)
        self.assertEqual(leader_badge(view), "Tie: A, B (3)")
        self.keeper.record_turn(self.ids["C"], 4)
        self.assertEqual(leader_badge(self.keeper.view()), "Leader: C (4)")
        self.assertEqual(leader_badge(make_keeper().view()), "No players yet")


if __name__ == '__main__':
    unittest.main()
