from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from .conflicts import ConflictReport


class SeatLayoutError(Exception):
    pass


class LabelError(SeatLayoutError):
    pass


class SequencingError(SeatLayoutError):
    pass


class NoCategoriesError(SeatLayoutError):
    pass


class UnknownCategoryError(SeatLayoutError):
    pass


class AllConflictsError(SeatLayoutError):
    def __init__(self, report: "ConflictReport"):
        if report.generated == 0:
            super().__init__("No seats to create - the grid does not fit on the canvas")
        else:
            super().__init__("No seats to create - all seat numbers already exist!")
        self.report = report


class CommitDeclinedError(SeatLayoutError):
    def __init__(self, report: "ConflictReport"):
        super().__init__(
            f"not confirmed: {report.skipped_count} seats would be skipped as duplicates "
            f"({', '.join(report.skipped_labels)})"
        )
        self.report = report


class RowDirection(str, Enum):
    a_to_z = "A-Z"
    z_to_a = "Z-A"
    one_to_n = "1-N"
    n_to_one = "N-1"

    @property
    def alphabetic(self) -> bool:
        return self in (RowDirection.a_to_z, RowDirection.z_to_a)


class NumberDirection(str, Enum):
    one_to_n = "1-N"
    n_to_one = "N-1"


class SkipPattern(str, Enum):
    none = "none"
    aisle_center = "aisle-center"
    aisle_sides = "aisle-sides"
    custom = "custom"  # predicate supplied by the caller


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SeatCategory(_Frozen):
    id: str
    name: str
    color: str = "#3b82f6"
    price: float = Field(ge=0, default=0.0)


class CanvasSize(_Frozen):
    w: int = Field(gt=0)
    h: int = Field(gt=0)


class GenerationConfig(_Frozen):
    rows: int = Field(ge=1, le=50, default=5)
    columns: int = Field(ge=1, le=50, default=10)
    seat_size: int = Field(ge=12, le=60, default=24)
    row_spacing: int = Field(ge=20, le=100, default=30)
    column_spacing: int = Field(ge=20, le=100, default=25)
    category_id: str = ""
    start_x: int = Field(ge=0, default=100)
    start_y: int = Field(ge=0, default=200)
    rotation: int = Field(ge=0, le=359, default=0)
    row_direction: RowDirection = RowDirection.a_to_z
    number_direction: NumberDirection = NumberDirection.one_to_n
    skip_pattern: SkipPattern = SkipPattern.none
    # Blank means auto-detect the next free row.
    starting_row: Optional[str] = None

    @field_validator("starting_row")
    @classmethod
    def _blank_is_auto(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class SeatItem(_Frozen):
    id: str
    type: Literal["seat"] = "seat"
    x: int
    y: int
    w: int
    h: int
    rotation: int = 0
    category_id: str
    row_label: str
    seat_number: int
    label: str

    def placement_key(self) -> tuple:
        return (self.row_label, self.seat_number, self.x, self.y, self.w, self.h, self.rotation)


class ExistingItem(_Frozen):
    id: str
    type: str
    row_label: Optional[str] = None
    seat_number: Optional[int] = None

    @property
    def seat_label(self) -> Optional[str]:
        # Only labelled seats take part in conflict checks.
        # Seat 0 is a real number; only a missing one means unlabelled.
        if self.type != "seat" or not self.row_label or self.seat_number is None:
            return None
        return f"{self.row_label}{self.seat_number}"

    @classmethod
    def from_seat(cls, seat: SeatItem) -> "ExistingItem":
        return cls(id=seat.id, type=seat.type, row_label=seat.row_label, seat_number=seat.seat_number)
