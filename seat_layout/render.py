from __future__ import annotations

from typing import Iterable, Optional

from .builder import BatchPreview
from .models import SeatItem
from .placement import compute_geometry


def _cell(text: Optional[str], width: int) -> str:
    if not text:
        return ".".center(width)
    t = str(text)
    if len(t) > width:
        t = t[: max(0, width - 1)] + "…"
    return t.center(width)


def render_preview(preview: BatchPreview, *, cell_width: int = 5) -> str:
    """
    Text grid of a previewed batch, one line per generated row.

    "." marks an aisle or a seat outside the canvas; "x" marks a seat dropped as a duplicate.
    """
    cell_width = max(3, int(cell_width))
    config = preview.config
    by_pos = {(s.x, s.y): s for s in preview.seats}
    kept = {s.id for s in preview.valid}

    header = " " * (cell_width + 2) + " ".join(f"C{c}".center(cell_width) for c in range(config.columns))
    lines = [header]
    for r in range(config.rows):
        cells: list[str] = []
        row_label = ""
        for c in range(config.columns):
            g = compute_geometry(r, c, config)
            seat = by_pos.get((g.x, g.y))
            if seat is None:
                cells.append(_cell(None, cell_width))
                continue
            row_label = seat.row_label
            cells.append(_cell(seat.label if seat.id in kept else "x", cell_width))
        lines.append(row_label.ljust(cell_width + 2) + " ".join(cells))
    return "\n".join(lines)


def render_rows(seats: Iterable[SeatItem]) -> str:
    rows: dict[str, list[SeatItem]] = {}
    for s in seats:
        rows.setdefault(s.row_label, []).append(s)
    lines = []
    for label, row in rows.items():
        numbers = " ".join(str(s.seat_number) for s in sorted(row, key=lambda s: s.seat_number))
        lines.append(f"{label}: {numbers}")
    return "\n".join(lines)
