from __future__ import annotations

from typing import Iterable, Optional

from .labels import index_to_label, label_to_index
from .models import ExistingItem, LabelError, NumberDirection, RowDirection, SequencingError

# Upper bound for the next-free-row scan.
MAX_ROW_SCAN = 1000

# Default Z-A sequence counts down from Z.
_Z_INDEX = 25


def existing_row_labels(existing: Iterable[ExistingItem]) -> set[str]:
    return {it.row_label for it in existing if it.type == "seat" and it.row_label}


def forward_label(index: int, direction: RowDirection) -> str:
    if direction.alphabetic:
        return index_to_label(index)
    return str(index + 1)


def parse_manual_start(direction: RowDirection, manual_start: str) -> int:
    """Turn a user-entered starting row ("C", "AA", "12") into a 0-based row index."""
    text = manual_start.strip()
    if direction.alphabetic:
        try:
            return label_to_index(text.upper())
        except LabelError as e:
            raise SequencingError(f"starting row {manual_start!r} is not a letter label") from e
    try:
        n = int(text)
    except ValueError as e:
        raise SequencingError(f"starting row {manual_start!r} is not a number") from e
    if n < 1:
        raise SequencingError(f"starting row must be >= 1, got {n}")
    return n - 1


def determine_start_index(
    direction: RowDirection,
    manual_start: Optional[str],
    existing_labels: set[str],
) -> int:
    if manual_start:
        return parse_manual_start(direction, manual_start)

    # mex over the forward labels already in use
    for i in range(MAX_ROW_SCAN):
        if forward_label(i, direction) not in existing_labels:
            return i
    return 0


def row_label_for_offset(
    offset: int,
    direction: RowDirection,
    start_index: int,
    rows: int,
    manual_start: Optional[str] = None,
) -> str:
    if direction is RowDirection.a_to_z:
        return index_to_label(start_index + offset)

    if direction is RowDirection.z_to_a:
        if manual_start:
            manual_index = parse_manual_start(direction, manual_start)
            return index_to_label(max(0, manual_index - offset))
        # Fixed ceiling; grids taller than 26 rows repeat "A".
        return index_to_label(max(0, _Z_INDEX - offset))

    if direction is RowDirection.one_to_n:
        return str(start_index + offset + 1)

    if manual_start:
        manual_number = parse_manual_start(direction, manual_start) + 1
        return str(max(1, manual_number - offset))
    return str(max(1, rows - offset))


def seat_number_for_column(col: int, total_columns: int, direction: NumberDirection) -> int:
    if direction is NumberDirection.n_to_one:
        return total_columns - col
    return col + 1
