from __future__ import annotations

import unittest

from dayview.grouper import Group, group_events
from dayview.layout import layout_group, layout_groups
from dayview.model import Event


class TestLayoutGroupContract(unittest.TestCase):
    def test_fractions_and_column_major_order(self) -> None:
        evs = [Event(1.0, 0.0, 2.0), Event(2.0, 1.0, 3.0), Event(3.0, 2.0, 4.0)]
        (lg,) = layout_groups(group_events(evs))

        self.assertEqual((lg.start, lg.end, lg.column_count), (0.0, 4.0, 2))
        got = [(int(it.event.id), it.column, it.top, it.height, it.bottom) for it in lg.items]
        self.assertEqual(
            got,
            [
                (1, 0, 0.0, 0.5, 0.5),
                (3, 0, 0.5, 0.5, 0.0),
                (2, 1, 0.25, 0.5, 0.25),
            ],
        )

    def test_fractions_sum_to_one(self) -> None:
        evs = [Event(1.0, 0.1, 0.7), Event(2.0, 0.3, 1.9), Event(3.0, 0.35, 0.36), Event(4.0, 1.2, 2.3)]
        for lg in layout_groups(group_events(evs)):
            for it in lg.items:
                self.assertAlmostEqual(it.top + it.height + it.bottom, 1.0, places=12)
                self.assertGreaterEqual(it.top, 0.0)
                self.assertGreaterEqual(it.bottom, 0.0)
                self.assertGreater(it.height, 0.0)
                self.assertLess(it.column, lg.column_count)

    def test_event_is_passed_through(self) -> None:
        ev = Event(42.0, 3.0, 4.0)
        (lg,) = layout_groups(group_events([ev]))
        self.assertIs(lg.items[0].event, ev)
        self.assertEqual((lg.items[0].top, lg.items[0].height, lg.items[0].bottom), (0.0, 1.0, 0.0))


class TestZeroSpanContract(unittest.TestCase):
    def _zero_group(self) -> Group:
        g = Group()
        g.add(Event(1.0, 5.0, 5.0))
        return g

    def test_fill_policy(self) -> None:
        lg = layout_group(self._zero_group(), zero_span="fill")
        it = lg.items[0]
        self.assertEqual((lg.start, lg.end, lg.column_count), (5.0, 5.0, 1))
        self.assertEqual((it.top, it.height, it.bottom, it.column), (0.0, 1.0, 0.0, 0))

    def test_collapse_policy(self) -> None:
        it = layout_group(self._zero_group(), zero_span="collapse").items[0]
        self.assertEqual((it.top, it.height, it.bottom), (0.0, 0.0, 0.0))

    def test_unknown_policy_rejected(self) -> None:
        with self.assertRaises(ValueError):
            layout_group(self._zero_group(), zero_span="nan")

    def test_empty_group_rejected(self) -> None:
        with self.assertRaises(ValueError):
            layout_group(Group())


if __name__ == "__main__":
    unittest.main(verbosity=2)
