from __future__ import annotations

import unittest

from dayview.api import layout_events
from dayview.model import Event, EventLayout, LayoutGroup
from dayview.validate import (
    EventValidationError,
    InvalidIntervalError,
    MalformedInputError,
    assert_valid_buffer,
    make_event,
    validate_buffer,
    validate_layout,
)


class TestMakeEventContract(unittest.TestCase):
    def test_valid(self) -> None:
        self.assertEqual(make_event(1, 0, 2), Event(1.0, 0.0, 2.0))

    def test_rejects_degenerate_and_reversed(self) -> None:
        for start, end in ((5, 5), (3, 1), (float("nan"), 1), (0, float("inf"))):
            with self.assertRaises(InvalidIntervalError, msg=f"{start}->{end}"):
                make_event(1, start, end)

    def test_error_hierarchy(self) -> None:
        self.assertTrue(issubclass(InvalidIntervalError, EventValidationError))
        self.assertTrue(issubclass(MalformedInputError, EventValidationError))
        self.assertTrue(issubclass(EventValidationError, ValueError))


class TestValidateBufferContract(unittest.TestCase):
    def test_ok(self) -> None:
        self.assertEqual(validate_buffer([1, 0, 1, 2, 1, 2]), [])

    def test_collects_every_bad_event(self) -> None:
        errs = validate_buffer([1, 0, 1, 2, 3, 3, 3, 4, 2])
        self.assertEqual(len(errs), 2)
        self.assertIn("events[1] id=2", errs[0])
        self.assertIn("events[2] id=3", errs[1])

    def test_length_message(self) -> None:
        errs = validate_buffer([1, 2], label="buf")
        self.assertEqual(errs, ["buf: length must be a multiple of 3 (got 2)"])

    def test_assert_raises_matching_kind(self) -> None:
        with self.assertRaises(MalformedInputError):
            assert_valid_buffer([1, 2, 3, 4])
        with self.assertRaises(InvalidIntervalError):
            assert_valid_buffer([1, 2, 1])
        assert_valid_buffer([])


class TestValidateLayoutContract(unittest.TestCase):
    def test_clean_layout(self) -> None:
        evs = [Event(1.0, 0.0, 2.0), Event(2.0, 1.0, 3.0), Event(3.0, 2.0, 4.0), Event(4.0, 9.0, 10.0)]
        self.assertEqual(validate_layout(evs, layout_events(evs)), [])

    def test_detects_lost_event(self) -> None:
        evs = [Event(1.0, 0.0, 2.0), Event(2.0, 5.0, 6.0)]
        groups = layout_events(evs[:1])
        errs = validate_layout(evs, groups)
        self.assertTrue(any("not conserved" in e for e in errs), errs)

    def test_detects_column_overlap(self) -> None:
        a = Event(1.0, 0.0, 2.0)
        b = Event(2.0, 1.0, 3.0)
        bad = LayoutGroup(
            start=0.0,
            end=3.0,
            column_count=1,
            items=(
                EventLayout(top=0.0, bottom=1 / 3, height=2 / 3, column=0, event=a),
                EventLayout(top=1 / 3, bottom=0.0, height=2 / 3, column=0, event=b),
            ),
        )
        errs = validate_layout([a, b], [bad])
        self.assertTrue(any("overlaps id=2.0" in e for e in errs), errs)

    def test_detects_bad_fractions_and_column_range(self) -> None:
        a = Event(1.0, 0.0, 2.0)
        bad = LayoutGroup(
            start=0.0,
            end=2.0,
            column_count=1,
            items=(EventLayout(top=0.0, bottom=0.0, height=0.5, column=1, event=a),),
        )
        errs = validate_layout([a], [bad])
        self.assertTrue(any("top+height+bottom" in e for e in errs), errs)
        self.assertTrue(any("out of range" in e for e in errs), errs)

    def test_detects_split_cluster(self) -> None:
        a = Event(1.0, 0.0, 2.0)
        b = Event(2.0, 1.0, 3.0)
        split = [
            LayoutGroup(0.0, 2.0, 1, (EventLayout(0.0, 0.0, 1.0, 0, a),)),
            LayoutGroup(1.0, 3.0, 1, (EventLayout(0.0, 0.0, 1.0, 0, b),)),
        ]
        errs = validate_layout([a, b], split)
        self.assertTrue(any("overlaps groups[0]" in e for e in errs), errs)
        self.assertTrue(any("re-clustering" in e for e in errs), errs)


if __name__ == "__main__":
    unittest.main(verbosity=2)
