import unittest
from test_utils import EventCollector, make_keeper, ids_by_name
from zombiedice.core.event_listener import EventListener
from zombiedice.core.game_event import GameEvent, GameEventType


class CommandEventTests(unittest.TestCase):
    def setUp(self):
        self.keeper = make_keeper("A", "B", target=6)
        self.ids = ids_by_name(self.keeper)
        self.collector = EventCollector()
        self.keeper.event_listener.subscribe(self.collector.on_event)

    def test_final_round_event_sequence(self):
        self.keeper.record_turn(self.ids["A"], 6)
        self.assertEqual(self.collector.types(), [
            GameEventType.TURN_RECORDED,
            GameEventType.FINAL_ROUND_STARTED,
            GameEventType.PHASE_CHANGED,
            GameEventType.STATE_CHANGED,
        ])
        started = self.collector.of_type(GameEventType.FINAL_ROUND_STARTED)[0]
        self.assertEqual(started.get("remaining_ids"), [self.ids["B"]])

        self.collector.clear()
        self.keeper.record_turn(self.ids["B"], 2)
        self.assertEqual(self.collector.types(), [
            GameEventType.TURN_RECORDED,
            GameEventType.FINAL_ROUND_ADVANCED,
            GameEventType.GAME_LOCKED,
            GameEventType.PHASE_CHANGED,
            GameEventType.STATE_CHANGED,
        ])
        self.assertEqual(self.collector.of_type(GameEventType.GAME_LOCKED)[0].get("reason"), "final_round_complete")

    def test_rejections_do_not_announce_state_changes(self):
        self.keeper.lock()
        self.collector.clear()
        self.keeper.record_turn(self.ids["A"], 1)
        self.keeper.add_player("C")
        self.keeper.set_target(3)
        self.keeper.lock()
        self.assertNotIn(GameEventType.STATE_CHANGED, self.collector.types())
        denied = self.collector.of_type(GameEventType.REQUEST_DENIED)
        self.assertEqual([e.get("command") for e in denied], ["record_turn", "add_player", "set_target", "lock"])
        self.assertTrue(all(e.get("reason") == "locked" for e in denied))

    def test_state_changed_once_per_accepted_command(self):
        self.keeper.add_player("C")
        self.keeper.record_turn(self.ids["A"], 1)
        self.keeper.undo()
        self.keeper.set_target(9)
        self.keeper.new_game()
        self.keeper.lock()
        self.keeper.hard_reset()
        commands = [e.get("command") for e in self.collector.of_type(GameEventType.STATE_CHANGED)]
        self.assertEqual(commands, ["add_player", "record_turn", "undo", "set_target", "new_game", "lock", "hard_reset"])


class EventListenerTests(unittest.TestCase):
    def test_filtered_subscription_and_unsubscribe(self):
        listener = EventListener()
        seen = []
        listener.subscribe(seen.append, types={GameEventType.NEW_GAME})
        listener.publish(GameEvent(GameEventType.TURN_RECORDED))
        listener.publish(GameEvent(GameEventType.NEW_GAME))
        listener.unsubscribe(seen.append)
        listener.publish(GameEvent(GameEventType.NEW_GAME))
        self.assertEqual([e.type for e in seen], [GameEventType.NEW_GAME])

    def test_nested_publish_is_queued(self):
        listener = EventListener()
        order = []
        def first(ev):
            order.append(ev.type)
            if ev.type == GameEventType.TURN_RECORDED:
                listener.publish(GameEvent(GameEventType.STATE_CHANGED))
        listener.subscribe(first)
        listener.publish(GameEvent(GameEventType.TURN_RECORDED))
        self.assertEqual(order, [GameEventType.TURN_RECORDED, GameEventType.STATE_CHANGED])

    def test_failing_subscriber_does_not_break_dispatch(self):
        listener = EventListener()
        seen = []
        def boom(ev):
            raise RuntimeError("subscriber failure")
        listener.subscribe(boom)
        listener.subscribe(seen.append)
        listener.publish(GameEvent(GameEventType.NEW_GAME))
        self.assertEqual(len(seen), 1)
        self.assertEqual(listener.failures, 1)


if __name__ == '__main__':
    unittest.main()
