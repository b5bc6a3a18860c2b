from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .models import ExistingItem, SeatItem


def existing_seat_labels(existing: Iterable[ExistingItem]) -> set[str]:
    return {label for label in (it.seat_label for it in existing) if label is not None}


def detect_conflicts(generated: Sequence[SeatItem], existing: Iterable[ExistingItem]) -> set[str]:
    taken = existing_seat_labels(existing)
    return {s.label for s in generated if s.label in taken}


def find_batch_duplicates(generated: Sequence[SeatItem]) -> set[str]:
    counts = Counter(s.label for s in generated)
    return {label for label, n in counts.items() if n > 1}


def filter_valid(generated: Sequence[SeatItem], conflicts: set[str]) -> list[SeatItem]:
    """
    Drop seats whose label collides with the inventory, then keep only the first seat
    of any label repeated inside the batch. Row-major order is preserved.
    """
    seen: set[str] = set()
    out: list[SeatItem] = []
    for s in generated:
        if s.label in conflicts or s.label in seen:
            continue
        seen.add(s.label)
        out.append(s)
    return out


@dataclass(frozen=True)
class ConflictReport:
    generated: int
    valid: int
    conflicts: tuple[str, ...]
    duplicates: tuple[str, ...] = ()

    @property
    def skipped_count(self) -> int:
        return self.generated - self.valid

    @property
    def skipped_labels(self) -> tuple[str, ...]:
        return tuple(sorted(set(self.conflicts) | set(self.duplicates), key=_label_sort_key))

    @property
    def all_conflict(self) -> bool:
        return self.generated > 0 and self.valid == 0

    @property
    def needs_confirmation(self) -> bool:
        return 0 < self.valid < self.generated

    def confirmation_message(self) -> str:
        return (
            f"{self.skipped_count} seats will be skipped due to duplicate numbers "
            f"({', '.join(self.skipped_labels)}). Continue with {self.valid} seats?"
        )


def _label_sort_key(label: str) -> tuple:
    head = label.rstrip("0123456789")
    tail = label[len(head):]
    return (len(head), head, int(tail) if tail else 0)


def resolve_conflicts(
    generated: Sequence[SeatItem],
    existing: Iterable[ExistingItem],
) -> tuple[list[SeatItem], ConflictReport]:
    conflicts = detect_conflicts(generated, existing)
    valid = filter_valid(generated, conflicts)
    report = ConflictReport(
        generated=len(generated),
        valid=len(valid),
        conflicts=tuple(sorted(conflicts, key=_label_sort_key)),
        duplicates=tuple(sorted(find_batch_duplicates(generated) - conflicts, key=_label_sort_key)),
    )
    return valid, report


def is_seat_label_available(
    row_label: str,
    seat_number: Optional[int],
    existing: Iterable[ExistingItem],
    exclude_id: Optional[str] = None,
) -> bool:
    """Single-seat check used when a seat is relabelled by hand."""
    if not row_label or seat_number is None:
        return True
    return not any(
        it.id != exclude_id and it.type == "seat" and it.row_label == row_label and it.seat_number == seat_number
        for it in existing
    )
