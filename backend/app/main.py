from __future__ import annotations

import json
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlmodel import Session, delete, select

from seat_layout.builder import (
    BatchPreview,
    DirectCreate,
    InteractivePlacement,
    commit_batch,
    place_at,
    preview_batch,
    validate_category,
)
from seat_layout.conflicts import is_seat_label_available
from seat_layout.logger_config import configure_logging
from seat_layout.models import (
    AllConflictsError,
    CanvasSize,
    CommitDeclinedError,
    ExistingItem,
    GenerationConfig,
    NoCategoriesError,
    SeatItem,
    SeatLayoutError,
    UnknownCategoryError,
)

from .db import get_session, init_db
from .models import Category, Layout, LayoutItem, PendingPlacement
from .schemas import (
    BulkSeatPreview,
    BulkSeatPreviewRequest,
    BulkSeatRequest,
    CategoryCreate,
    ItemUpdate,
    LayoutCreate,
    PlacementClick,
)


app = FastAPI(title="Seat Layout Generator API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup() -> None:
    configure_logging()
    init_db()


def _session() -> Session:
    return get_session()


def _get_layout(session: Session, layout_id: int) -> Layout:
    layout = session.get(Layout, layout_id)
    if not layout:
        raise HTTPException(status_code=404, detail="layout not found")
    return layout


def _canvas(layout: Layout) -> CanvasSize:
    return CanvasSize(w=layout.canvas_w, h=layout.canvas_h)


def _existing_items(session: Session, layout_id: int) -> tuple[ExistingItem, ...]:
    items = session.exec(select(LayoutItem).where(LayoutItem.layout_id == layout_id).order_by(LayoutItem.id)).all()
    return tuple(it.to_existing() for it in items)


def _validate_config(session: Session, layout_id: int, config: GenerationConfig) -> None:
    categories = session.exec(select(Category).where(Category.layout_id == layout_id)).all()
    validate_category(config, [c.to_domain() for c in categories])


def _layout_error(e: SeatLayoutError) -> HTTPException:
    if isinstance(e, AllConflictsError):
        return HTTPException(
            status_code=409,
            detail={"code": "all_duplicates", "message": str(e), "conflicts": list(e.report.skipped_labels)},
        )
    if isinstance(e, CommitDeclinedError):
        return HTTPException(
            status_code=409,
            detail={
                "code": "confirmation_required",
                "message": e.report.confirmation_message(),
                "skipped_count": e.report.skipped_count,
                "skipped_labels": list(e.report.skipped_labels),
                "valid_count": e.report.valid,
            },
        )
    if isinstance(e, NoCategoriesError):
        return HTTPException(status_code=409, detail={"code": "no_categories", "message": str(e)})
    if isinstance(e, UnknownCategoryError):
        return HTTPException(status_code=400, detail={"code": "unknown_category", "message": str(e)})
    return HTTPException(status_code=400, detail={"code": "invalid_config", "message": str(e)})


def _preview(session: Session, layout: Layout, config: GenerationConfig) -> BatchPreview:
    try:
        _validate_config(session, int(layout.id), config)
        return preview_batch(config, _canvas(layout), _existing_items(session, int(layout.id)))
    except SeatLayoutError as e:
        raise _layout_error(e) from e


def _insert_seats(session: Session, layout_id: int, seats: list[SeatItem]) -> None:
    for s in seats:
        session.add(LayoutItem.from_seat(layout_id, s))


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.post("/layouts")
def create_layout(payload: LayoutCreate, session: Session = Depends(_session)) -> dict:
    layout = Layout(**payload.model_dump())
    session.add(layout)
    session.commit()
    session.refresh(layout)
    return {"id": layout.id, "name": layout.name}


@app.get("/layouts")
def list_layouts(session: Session = Depends(_session)) -> list[dict]:
    layouts = session.exec(select(Layout).order_by(Layout.created_at.desc())).all()
    return [{"id": v.id, "name": v.name} for v in layouts]


@app.get("/layouts/{layout_id}")
def get_layout(layout_id: int, session: Session = Depends(_session)) -> dict:
    layout = _get_layout(session, layout_id)
    pending = session.get(PendingPlacement, layout_id)
    return {
        "id": layout.id,
        "name": layout.name,
        "canvas": {"w": layout.canvas_w, "h": layout.canvas_h},
        "pending_placement": pending.config().model_dump(mode="json") if pending else None,
    }


@app.delete("/layouts/{layout_id}")
def delete_layout(layout_id: int, session: Session = Depends(_session)) -> dict:
    layout = _get_layout(session, layout_id)
    session.exec(delete(LayoutItem).where(LayoutItem.layout_id == layout_id))
    session.exec(delete(Category).where(Category.layout_id == layout_id))
    session.exec(delete(PendingPlacement).where(PendingPlacement.layout_id == layout_id))
    session.delete(layout)
    session.commit()
    return {"deleted": True}


@app.post("/layouts/{layout_id}/categories")
def create_category(layout_id: int, payload: CategoryCreate, session: Session = Depends(_session)) -> dict:
    _get_layout(session, layout_id)
    c = Category(layout_id=layout_id, **payload.model_dump())
    session.add(c)
    session.commit()
    session.refresh(c)
    return c.to_domain().model_dump()


@app.get("/layouts/{layout_id}/categories")
def list_categories(layout_id: int, session: Session = Depends(_session)) -> list[dict]:
    _get_layout(session, layout_id)
    cats = session.exec(select(Category).where(Category.layout_id == layout_id).order_by(Category.id)).all()
    return [c.to_domain().model_dump() for c in cats]


@app.get("/layouts/{layout_id}/items")
def list_items(layout_id: int, session: Session = Depends(_session)) -> list[dict]:
    _get_layout(session, layout_id)
    items = session.exec(select(LayoutItem).where(LayoutItem.layout_id == layout_id).order_by(LayoutItem.id)).all()
    return [it.to_dict() for it in items]


@app.put("/items/{item_id}")
def update_item(item_id: int, payload: ItemUpdate, session: Session = Depends(_session)) -> dict:
    item = session.get(LayoutItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="item not found")

    row_label = payload.row_label.strip() if payload.row_label is not None else item.row_label
    seat_number = payload.seat_number if payload.seat_number is not None else item.seat_number
    if (row_label, seat_number) != (item.row_label, item.seat_number):
        existing = _existing_items(session, item.layout_id)
        if not is_seat_label_available(row_label or "", seat_number, existing, exclude_id=item.uid):
            raise HTTPException(status_code=409, detail=f"seat {row_label}{seat_number} already exists")
        item.row_label = row_label
        item.seat_number = seat_number
        item.label = f"{row_label}{seat_number}" if row_label and seat_number is not None else None

    if payload.x is not None:
        item.x = int(payload.x)
    if payload.y is not None:
        item.y = int(payload.y)
    if payload.rotation is not None:
        item.rotation = int(payload.rotation)
    if payload.category_id is not None:
        item.category_id = payload.category_id
    session.add(item)
    session.commit()
    return {"updated": True}


@app.delete("/items/{item_id}")
def delete_item(item_id: int, session: Session = Depends(_session)) -> dict:
    item = session.get(LayoutItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="item not found")
    session.delete(item)
    session.commit()
    return {"deleted": True}


@app.post("/layouts/{layout_id}/bulk-seats/preview", response_model=BulkSeatPreview)
def preview_bulk_seats(
    layout_id: int, payload: BulkSeatPreviewRequest, session: Session = Depends(_session)
) -> BulkSeatPreview:
    layout = _get_layout(session, layout_id)
    preview = _preview(session, layout, payload.config)
    report = preview.report
    return BulkSeatPreview(
        seats=list(preview.seats),
        conflicts=list(report.conflicts),
        duplicates=list(report.duplicates),
        skipped_count=report.skipped_count,
        valid_count=report.valid,
        total=report.generated,
        all_conflict=report.all_conflict,
        needs_confirmation=report.needs_confirmation,
    )


@app.post("/layouts/{layout_id}/bulk-seats")
def create_bulk_seats(layout_id: int, payload: BulkSeatRequest, session: Session = Depends(_session)) -> dict:
    layout = _get_layout(session, layout_id)
    preview = _preview(session, layout, payload.config)

    def _store_pending(config: GenerationConfig) -> None:
        pending = session.get(PendingPlacement, layout_id)
        if pending is None:
            pending = PendingPlacement(layout_id=layout_id, config_json=config.model_dump_json())
        else:
            pending.config_json = config.model_dump_json()
        pending.confirmed_labels = json.dumps(list(preview.report.skipped_labels) if payload.confirm else [])
        session.add(pending)

    if payload.mode == "placement":
        mode = InteractivePlacement(_store_pending)
    else:
        mode = DirectCreate(lambda seats: _insert_seats(session, layout_id, seats))

    try:
        outcome = commit_batch(preview, mode, confirm=payload.confirm)
    except SeatLayoutError as e:
        raise _layout_error(e) from e
    session.commit()

    result: dict = {"mode": outcome.kind, "skipped_count": outcome.report.skipped_count}
    if outcome.config is not None:
        result["config"] = outcome.config.model_dump(mode="json")
    else:
        result["created"] = len(outcome.seats)
    return result


@app.post("/layouts/{layout_id}/placement/click")
def placement_click(layout_id: int, payload: PlacementClick, session: Session = Depends(_session)) -> dict:
    layout = _get_layout(session, layout_id)
    pending = session.get(PendingPlacement, layout_id)
    if not pending:
        raise HTTPException(status_code=404, detail="no pending placement")

    placed = place_at(pending.config(), _canvas(layout), _existing_items(session, layout_id), payload.x, payload.y)
    try:
        outcome = commit_batch(
            placed,
            DirectCreate(lambda seats: _insert_seats(session, layout_id, seats)),
            # The start-time answer only covers the labels the user saw then.
            confirm=lambda report: payload.confirm or set(report.skipped_labels) <= pending.accepted_skips(),
        )
    except SeatLayoutError as e:
        raise _layout_error(e) from e
    session.delete(pending)
    session.commit()
    logger.info("placed {} seats on layout {} at ({}, {})", len(outcome.seats), layout_id, payload.x, payload.y)
    return {
        "created": len(outcome.seats),
        "skipped_count": outcome.report.skipped_count,
        "start_x": placed.config.start_x,
        "start_y": placed.config.start_y,
    }


@app.delete("/layouts/{layout_id}/placement")
def cancel_placement(layout_id: int, session: Session = Depends(_session)) -> dict:
    _get_layout(session, layout_id)
    pending: Optional[PendingPlacement] = session.get(PendingPlacement, layout_id)
    if not pending:
        return {"deleted": False}
    session.delete(pending)
    session.commit()
    return {"deleted": True}
