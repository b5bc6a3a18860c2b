from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from seat_layout.models import GenerationConfig, SeatItem


class LayoutCreate(BaseModel):
    name: str
    canvas_w: int = Field(gt=0, default=1200)
    canvas_h: int = Field(gt=0, default=800)


class CategoryCreate(BaseModel):
    name: str
    color: str = "#3b82f6"
    price: float = Field(ge=0, default=0.0)


class ItemUpdate(BaseModel):
    x: Optional[int] = None
    y: Optional[int] = None
    rotation: Optional[int] = Field(default=None, ge=0, le=359)
    category_id: Optional[str] = None
    row_label: Optional[str] = None
    seat_number: Optional[int] = Field(default=None, ge=1)


class BulkSeatPreviewRequest(BaseModel):
    config: GenerationConfig


class BulkSeatRequest(BaseModel):
    config: GenerationConfig
    mode: Literal["direct", "placement"] = "direct"
    # Required when some generated seats collide with existing ones.
    confirm: bool = False


class PlacementClick(BaseModel):
    x: float = Field(ge=0)
    y: float = Field(ge=0)
    confirm: bool = False


class BulkSeatPreview(BaseModel):
    seats: list[SeatItem]
    conflicts: list[str]
    duplicates: list[str]
    skipped_count: int
    valid_count: int
    total: int
    all_conflict: bool
    needs_confirmation: bool
