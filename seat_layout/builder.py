from __future__ import annotations

import uuid
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterable, Optional, Sequence, Union

from loguru import logger

from .aisles import SkipPredicate, should_skip
from .conflicts import ConflictReport, resolve_conflicts
from .models import (
    AllConflictsError,
    CanvasSize,
    CommitDeclinedError,
    ExistingItem,
    GenerationConfig,
    NoCategoriesError,
    SeatCategory,
    SeatItem,
    UnknownCategoryError,
)
from .placement import anchor_config, compute_geometry, is_within_bounds
from .sequencing import determine_start_index, existing_row_labels, row_label_for_offset, seat_number_for_column


def _new_seat_id() -> str:
    return f"seat_{uuid.uuid4().hex[:12]}"


def require_categories(categories: Sequence[SeatCategory]) -> None:
    if not categories:
        raise NoCategoriesError("create at least one seat category before creating bulk seats")


def validate_category(config: GenerationConfig, categories: Sequence[SeatCategory]) -> None:
    require_categories(categories)
    if not any(c.id == config.category_id for c in categories):
        raise UnknownCategoryError(f"unknown seat category: {config.category_id!r}")


def generate_seats(
    config: GenerationConfig,
    canvas: CanvasSize,
    existing: Iterable[ExistingItem] = (),
    *,
    custom_skip: Optional[SkipPredicate] = None,
) -> list[SeatItem]:
    start_index = determine_start_index(
        config.row_direction,
        config.starting_row,
        existing_row_labels(existing),
    )

    seats: list[SeatItem] = []
    clipped = 0
    for r in range(config.rows):
        row_label = row_label_for_offset(r, config.row_direction, start_index, config.rows, config.starting_row)
        for c in range(config.columns):
            if should_skip(r, c, config.columns, config.skip_pattern, custom_skip):
                continue
            geom = compute_geometry(r, c, config)
            if not is_within_bounds(geom, canvas):
                clipped += 1
                continue
            seat_number = seat_number_for_column(c, config.columns, config.number_direction)
            seats.append(
                SeatItem(
                    id=_new_seat_id(),
                    x=geom.x,
                    y=geom.y,
                    w=geom.w,
                    h=geom.h,
                    rotation=geom.rotation,
                    category_id=config.category_id,
                    row_label=row_label,
                    seat_number=seat_number,
                    label=f"{row_label}{seat_number}",
                )
            )

    logger.debug(
        "generated {} seats ({}x{} grid, {} outside canvas {}x{})",
        len(seats),
        config.rows,
        config.columns,
        clipped,
        canvas.w,
        canvas.h,
    )
    return seats


@dataclass(frozen=True)
class BatchPreview:
    config: GenerationConfig
    canvas: CanvasSize
    seats: tuple[SeatItem, ...]
    valid: tuple[SeatItem, ...]
    report: ConflictReport


@lru_cache(maxsize=128)
def _cached_preview(
    config: GenerationConfig,
    canvas: CanvasSize,
    existing: tuple[ExistingItem, ...],
) -> BatchPreview:
    seats = generate_seats(config, canvas, existing)
    valid, report = resolve_conflicts(seats, existing)
    return BatchPreview(config=config, canvas=canvas, seats=tuple(seats), valid=tuple(valid), report=report)


def preview_batch(
    config: GenerationConfig,
    canvas: CanvasSize,
    existing: Iterable[ExistingItem] = (),
) -> BatchPreview:
    """Generate and conflict-check a batch; cached on the three inputs for live previews."""
    return _cached_preview(config, canvas, tuple(existing))


def place_at(
    config: GenerationConfig,
    canvas: CanvasSize,
    existing: Iterable[ExistingItem],
    x: float,
    y: float,
) -> BatchPreview:
    return preview_batch(anchor_config(config, canvas, x, y), canvas, existing)


@dataclass(frozen=True)
class CommitOutcome:
    kind: str
    report: ConflictReport
    seats: tuple[SeatItem, ...] = ()
    config: Optional[GenerationConfig] = None


@dataclass(frozen=True)
class DirectCreate:
    sink: Callable[[list[SeatItem]], None]
    kind: str = "direct"

    def dispatch(self, preview: BatchPreview) -> CommitOutcome:
        # Cached previews share ids; every commit gets its own.
        seats = tuple(s.model_copy(update={"id": _new_seat_id()}) for s in preview.valid)
        self.sink(list(seats))
        return CommitOutcome(kind=self.kind, report=preview.report, seats=seats)


@dataclass(frozen=True)
class InteractivePlacement:
    handler: Callable[[GenerationConfig], None]
    kind: str = "placement"

    def dispatch(self, preview: BatchPreview) -> CommitOutcome:
        # Hand over the exact config that produced the preview.
        self.handler(preview.config)
        return CommitOutcome(kind=self.kind, report=preview.report, config=preview.config)


CommitMode = Union[DirectCreate, InteractivePlacement]
Confirmation = Union[bool, Callable[[ConflictReport], bool]]


def check_committable(preview: BatchPreview, confirm: Confirmation) -> None:
    report = preview.report
    if report.generated == 0 or report.all_conflict:
        raise AllConflictsError(report)
    if report.needs_confirmation:
        approved = confirm(report) if callable(confirm) else bool(confirm)
        if not approved:
            raise CommitDeclinedError(report)
        logger.warning("skipping {} duplicate seats: {}", report.skipped_count, ", ".join(report.skipped_labels))


def commit_batch(preview: BatchPreview, mode: CommitMode, *, confirm: Confirmation = False) -> CommitOutcome:
    check_committable(preview, confirm)
    outcome = mode.dispatch(preview)
    logger.info("committed {} of {} seats via {} mode", preview.report.valid, preview.report.generated, mode.kind)
    return outcome
