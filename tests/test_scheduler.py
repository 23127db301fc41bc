import unittest

from fretboarder.scheduler import Scheduler


class TestScheduler(unittest.TestCase):
    def setUp(self):
        self.scheduler = Scheduler()
        self.fired = []

    def record(self, name):
        return lambda: self.fired.append(name)

    def test_fires_when_due(self):
        self.scheduler.schedule("a", 0.5, self.record("a"))
        self.assertEqual(self.scheduler.advance(0.4), 0)
        self.assertTrue(self.scheduler.pending("a"))
        self.assertEqual(self.scheduler.advance(0.1), 1)
        self.assertEqual(self.fired, ["a"])
        self.assertFalse(self.scheduler.pending("a"))

    def test_fires_once(self):
        self.scheduler.schedule("a", 0.1, self.record("a"))
        self.scheduler.advance(1.0)
        self.scheduler.advance(1.0)
        self.assertEqual(self.fired, ["a"])

    def test_deadline_order(self):
        self.scheduler.schedule("late", 0.3, self.record("late"))
        self.scheduler.schedule("early", 0.1, self.record("early"))
        self.scheduler.schedule("tie", 0.3, self.record("tie"))
        self.scheduler.advance(1.0)
        self.assertEqual(self.fired, ["early", "late", "tie"])

    def test_same_name_replaces(self):
        self.scheduler.schedule("a", 0.1, self.record("first"))
        self.scheduler.schedule("a", 0.5, self.record("second"))
        self.scheduler.advance(0.2)
        self.assertEqual(self.fired, [])
        self.scheduler.advance(0.3)
        self.assertEqual(self.fired, ["second"])

    def test_cancel(self):
        self.scheduler.schedule("a", 0.1, self.record("a"))
        self.assertTrue(self.scheduler.cancel("a"))
        self.assertFalse(self.scheduler.cancel("a"))
        self.scheduler.advance(1.0)
        self.assertEqual(self.fired, [])

    def test_cancel_all(self):
        self.scheduler.schedule("a", 0.1, self.record("a"))
        self.scheduler.schedule("b", 0.2, self.record("b"))
        self.assertEqual(self.scheduler.pending_names(), ["a", "b"])
        self.scheduler.cancel_all()
        self.assertEqual(self.scheduler.pending_names(), [])

    def test_callback_can_rearm(self):
        def again():
            self.fired.append("tick")
            if len(self.fired) < 3:
                self.scheduler.schedule("tick", 0.0, again)

        self.scheduler.schedule("tick", 0.1, again)
        self.assertEqual(self.scheduler.advance(0.1), 3)

    def test_clock_never_goes_back(self):
        self.scheduler.advance(1.0)
        self.scheduler.advance(-5.0)
        self.assertEqual(self.scheduler.now, 1.0)
        self.scheduler.schedule("a", -1.0, self.record("a"))
        self.scheduler.advance(0)
        self.assertEqual(self.fired, ["a"])


if __name__ == "__main__":
    unittest.main()
