from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .models import CanvasSize, ExistingItem, SeatCategory, SeatItem, SeatLayoutError


class LayoutDocument(BaseModel):
    """A layout as the CLI keeps it on disk: canvas, categories and the seats placed so far."""

    canvas: CanvasSize
    categories: list[SeatCategory] = Field(default_factory=list)
    items: list[SeatItem] = Field(default_factory=list)

    def existing_items(self) -> tuple[ExistingItem, ...]:
        return tuple(ExistingItem.from_seat(s) for s in self.items)

    def category(self, category_id: str) -> Optional[SeatCategory]:
        for c in self.categories:
            if c.id == category_id:
                return c
        return None


def load_layout(path: str | Path) -> LayoutDocument:
    p = Path(path)
    if not p.exists():
        raise SeatLayoutError(f"layout file not found: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SeatLayoutError(f"failed to read layout JSON: {e}") from e

    try:
        return LayoutDocument.model_validate(data)
    except ValidationError as e:
        raise SeatLayoutError(f"invalid layout data: {e}") from e


def save_layout(layout: LayoutDocument, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(layout.model_dump(mode="json"), indent=2, sort_keys=True) + "\n", encoding="utf-8")


def maybe_init_layout(
    path: str | Path,
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
    overwrite: bool = False,
) -> LayoutDocument:
    p = Path(path)
    if p.exists() and not overwrite:
        return load_layout(p)

    if width is None or height is None:
        raise SeatLayoutError("width and height are required to initialize a new layout")

    try:
        layout = LayoutDocument(canvas=CanvasSize(w=width, h=height))
    except ValidationError as e:
        raise SeatLayoutError(f"invalid canvas size: {e}") from e
    save_layout(layout, p)
    return layout
