from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from seat_layout.models import ExistingItem, GenerationConfig, SeatCategory, SeatItem


def _utc_now() -> datetime:
    return datetime.utcnow()


class Layout(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str

    # Canvas in pixels; generated seats must fit inside.
    canvas_w: int = 1200
    canvas_h: int = 800

    created_at: datetime = Field(default_factory=_utc_now)


class Category(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    layout_id: int = Field(index=True, foreign_key="layout.id")
    name: str
    color: str = "#3b82f6"
    price: float = 0.0

    def to_domain(self) -> SeatCategory:
        return SeatCategory(id=str(self.id), name=self.name, color=self.color, price=self.price)


class LayoutItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    layout_id: int = Field(index=True, foreign_key="layout.id")
    # Opaque id assigned at generation time.
    uid: str = Field(index=True)
    type: str = "seat"

    x: int
    y: int
    w: int
    h: int
    rotation: int = 0

    category_id: Optional[str] = None
    row_label: Optional[str] = None
    seat_number: Optional[int] = None
    label: Optional[str] = None

    created_at: datetime = Field(default_factory=_utc_now)

    @classmethod
    def from_seat(cls, layout_id: int, seat: SeatItem) -> "LayoutItem":
        return cls(
            layout_id=layout_id,
            uid=seat.id,
            type=seat.type,
            x=seat.x,
            y=seat.y,
            w=seat.w,
            h=seat.h,
            rotation=seat.rotation,
            category_id=seat.category_id,
            row_label=seat.row_label,
            seat_number=seat.seat_number,
            label=seat.label,
        )

    def to_existing(self) -> ExistingItem:
        return ExistingItem(id=self.uid, type=self.type, row_label=self.row_label, seat_number=self.seat_number)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "uid": self.uid,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "rotation": self.rotation,
            "category_id": self.category_id,
            "row_label": self.row_label,
            "seat_number": self.seat_number,
            "label": self.label,
        }


class PendingPlacement(SQLModel, table=True):
    layout_id: int = Field(primary_key=True, foreign_key="layout.id")

    # Validated GenerationConfig waiting for a canvas click.
    config_json: str
    # JSON list of skipped labels the user accepted when the placement started.
    confirmed_labels: str = "[]"

    created_at: datetime = Field(default_factory=_utc_now)

    def config(self) -> GenerationConfig:
        return GenerationConfig.model_validate_json(self.config_json)

    def accepted_skips(self) -> set[str]:
        return set(json.loads(self.confirmed_labels or "[]"))
