import unittest

from seat_layout.models import ExistingItem, NumberDirection, RowDirection, SequencingError
from seat_layout.sequencing import (
    determine_start_index,
    existing_row_labels,
    parse_manual_start,
    row_label_for_offset,
    seat_number_for_column,
)


class TestStartIndex(unittest.TestCase):
    def test_auto_detect_empty(self):
        self.assertEqual(determine_start_index(RowDirection.a_to_z, None, set()), 0)
        self.assertEqual(determine_start_index(RowDirection.one_to_n, None, set()), 0)

    def test_auto_detect_skips_used_rows(self):
        self.assertEqual(determine_start_index(RowDirection.a_to_z, None, {"A", "B", "D"}), 2)
        self.assertEqual(determine_start_index(RowDirection.one_to_n, None, {"1", "2"}), 2)

    def test_auto_detect_reverse_directions_use_forward_labels(self):
        self.assertEqual(determine_start_index(RowDirection.z_to_a, None, {"A"}), 1)
        self.assertEqual(determine_start_index(RowDirection.n_to_one, None, {"1"}), 1)

    def test_auto_detect_past_z(self):
        used = {chr(ord("A") + i) for i in range(26)}
        self.assertEqual(determine_start_index(RowDirection.a_to_z, None, used), 26)

    def test_manual_start(self):
        self.assertEqual(determine_start_index(RowDirection.a_to_z, "C", {"A"}), 2)
        self.assertEqual(determine_start_index(RowDirection.a_to_z, "aa", set()), 26)
        self.assertEqual(determine_start_index(RowDirection.one_to_n, "12", set()), 11)

    def test_manual_start_invalid(self):
        with self.assertRaises(SequencingError):
            parse_manual_start(RowDirection.a_to_z, "3")
        with self.assertRaises(SequencingError):
            parse_manual_start(RowDirection.one_to_n, "B")
        with self.assertRaises(SequencingError):
            parse_manual_start(RowDirection.n_to_one, "0")

    def test_existing_row_labels_ignores_non_seats(self):
        items = [
            ExistingItem(id="1", type="seat", row_label="A", seat_number=1),
            ExistingItem(id="2", type="stage", row_label="B"),
            ExistingItem(id="3", type="seat"),
        ]
        self.assertEqual(existing_row_labels(items), {"A"})


class TestRowLabels(unittest.TestCase):
    def test_a_to_z(self):
        labels = [row_label_for_offset(i, RowDirection.a_to_z, 24, 4) for i in range(4)]
        self.assertEqual(labels, ["Y", "Z", "AA", "AB"])

    def test_z_to_a_default(self):
        labels = [row_label_for_offset(i, RowDirection.z_to_a, 0, 3) for i in range(3)]
        self.assertEqual(labels, ["Z", "Y", "X"])

    def test_z_to_a_default_clips_at_a(self):
        self.assertEqual(row_label_for_offset(25, RowDirection.z_to_a, 0, 30), "A")
        self.assertEqual(row_label_for_offset(29, RowDirection.z_to_a, 0, 30), "A")

    def test_z_to_a_manual(self):
        labels = [row_label_for_offset(i, RowDirection.z_to_a, 2, 4, "C") for i in range(4)]
        self.assertEqual(labels, ["C", "B", "A", "A"])

    def test_one_to_n(self):
        labels = [row_label_for_offset(i, RowDirection.one_to_n, 3, 3) for i in range(3)]
        self.assertEqual(labels, ["4", "5", "6"])

    def test_n_to_one_default(self):
        labels = [row_label_for_offset(i, RowDirection.n_to_one, 0, 3) for i in range(3)]
        self.assertEqual(labels, ["3", "2", "1"])

    def test_n_to_one_manual(self):
        labels = [row_label_for_offset(i, RowDirection.n_to_one, 9, 3, "10") for i in range(3)]
        self.assertEqual(labels, ["10", "9", "8"])
        self.assertEqual(row_label_for_offset(5, RowDirection.n_to_one, 1, 6, "2"), "1")


class TestSeatNumbers(unittest.TestCase):
    def test_directions(self):
        self.assertEqual([seat_number_for_column(c, 4, NumberDirection.one_to_n) for c in range(4)], [1, 2, 3, 4])
        self.assertEqual([seat_number_for_column(c, 4, NumberDirection.n_to_one) for c in range(4)], [4, 3, 2, 1])


if __name__ == "__main__":
    unittest.main()
