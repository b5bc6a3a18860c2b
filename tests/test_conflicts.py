import unittest

from seat_layout.conflicts import (
    ConflictReport,
    detect_conflicts,
    existing_seat_labels,
    filter_valid,
    find_batch_duplicates,
    is_seat_label_available,
    resolve_conflicts,
)
from seat_layout.models import ExistingItem, SeatItem


def _seat(row_label, seat_number, x=0):
    return SeatItem(
        id=f"s-{row_label}{seat_number}-{x}",
        x=x,
        y=0,
        w=10,
        h=10,
        category_id="c1",
        row_label=row_label,
        seat_number=seat_number,
        label=f"{row_label}{seat_number}",
    )


class TestConflictResolver(unittest.TestCase):
    def test_existing_labels_only_count_labelled_seats(self):
        items = [
            ExistingItem(id="1", type="seat", row_label="A", seat_number=1),
            ExistingItem(id="2", type="seat", row_label="A"),
            ExistingItem(id="3", type="table", row_label="B", seat_number=2),
        ]
        self.assertEqual(existing_seat_labels(items), {"A1"})

    def test_detect_and_filter(self):
        generated = [_seat("A", 1), _seat("A", 2), _seat("B", 1)]
        existing = [ExistingItem(id="x", type="seat", row_label="A", seat_number=2)]
        conflicts = detect_conflicts(generated, existing)
        self.assertEqual(conflicts, {"A2"})
        self.assertEqual([s.label for s in filter_valid(generated, conflicts)], ["A1", "B1"])

    def test_batch_duplicates_keep_first(self):
        generated = [_seat("A", 1, x=0), _seat("A", 2), _seat("A", 1, x=50)]
        self.assertEqual(find_batch_duplicates(generated), {"A1"})
        valid = filter_valid(generated, set())
        self.assertEqual([(s.label, s.x) for s in valid], [("A1", 0), ("A2", 0)])

    def test_report_partial(self):
        generated = [_seat("A", n) for n in range(1, 11)]
        existing = [ExistingItem(id="x", type="seat", row_label="A", seat_number=n) for n in (10, 2)]
        valid, report = resolve_conflicts(generated, existing)
        self.assertEqual(len(valid), 8)
        self.assertEqual(report.conflicts, ("A2", "A10"))
        self.assertEqual(report.skipped_count, 2)
        self.assertTrue(report.needs_confirmation)
        self.assertFalse(report.all_conflict)
        self.assertIn("2 seats will be skipped", report.confirmation_message())
        self.assertIn("Continue with 8 seats?", report.confirmation_message())

    def test_report_all_conflict(self):
        generated = [_seat("A", 1)]
        existing = [ExistingItem(id="x", type="seat", row_label="A", seat_number=1)]
        valid, report = resolve_conflicts(generated, existing)
        self.assertEqual(valid, [])
        self.assertTrue(report.all_conflict)
        self.assertFalse(report.needs_confirmation)

    def test_report_clean(self):
        report = ConflictReport(generated=3, valid=3, conflicts=())
        self.assertFalse(report.needs_confirmation)
        self.assertFalse(report.all_conflict)
        self.assertEqual(report.skipped_labels, ())

    def test_single_seat_availability(self):
        existing = [ExistingItem(id="a", type="seat", row_label="B", seat_number=4)]
        self.assertFalse(is_seat_label_available("B", 4, existing))
        self.assertTrue(is_seat_label_available("B", 4, existing, exclude_id="a"))
        self.assertTrue(is_seat_label_available("B", 5, existing))
        self.assertTrue(is_seat_label_available("", 4, existing))

    def test_seat_number_zero_is_a_real_label(self):
        zero = ExistingItem(id="z", type="seat", row_label="A", seat_number=0)
        self.assertEqual(zero.seat_label, "A0")
        self.assertIsNone(ExistingItem(id="n", type="seat", row_label="A").seat_label)
        self.assertEqual(existing_seat_labels([zero]), {"A0"})
        self.assertFalse(is_seat_label_available("A", 0, [zero]))
        self.assertTrue(is_seat_label_available("A", 0, [zero], exclude_id="z"))
        self.assertTrue(is_seat_label_available("A", None, [zero]))


if __name__ == "__main__":
    unittest.main()
