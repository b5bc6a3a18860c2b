from __future__ import annotations

import argparse
import csv
import uuid
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from .builder import DirectCreate, InteractivePlacement, commit_batch, place_at, preview_batch, validate_category
from .logger_config import configure_logging
from .models import (
    GenerationConfig,
    NumberDirection,
    RowDirection,
    SeatCategory,
    SeatLayoutError,
    SkipPattern,
)
from .render import render_preview, render_rows
from .storage import LayoutDocument, load_layout, maybe_init_layout, save_layout


DEFAULT_FILE = "seat_layout.json"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--file",
        default=DEFAULT_FILE,
        help=f"Path to layout JSON file (default: {DEFAULT_FILE})",
    )


def _add_generation_args(p: argparse.ArgumentParser) -> None:
    defaults = GenerationConfig()
    p.add_argument("--rows", type=int, default=defaults.rows)
    p.add_argument("--columns", type=int, default=defaults.columns)
    p.add_argument("--seat-size", type=int, default=defaults.seat_size)
    p.add_argument("--row-spacing", type=int, default=defaults.row_spacing)
    p.add_argument("--column-spacing", type=int, default=defaults.column_spacing)
    p.add_argument("--start-x", type=int, default=defaults.start_x)
    p.add_argument("--start-y", type=int, default=defaults.start_y)
    p.add_argument("--rotation", type=int, default=defaults.rotation)
    p.add_argument("--row-direction", choices=[d.value for d in RowDirection], default=defaults.row_direction.value)
    p.add_argument(
        "--number-direction",
        choices=[d.value for d in NumberDirection],
        default=defaults.number_direction.value,
    )
    p.add_argument(
        "--skip",
        choices=[s.value for s in SkipPattern if s is not SkipPattern.custom],
        default=SkipPattern.none.value,
        help="Aisle pattern",
    )
    p.add_argument("--starting-row", help="First row label (default: next free row)")
    p.add_argument("--category", help="Seat category id (default: first category)")


def _config_from_args(args: argparse.Namespace, layout: LayoutDocument) -> GenerationConfig:
    category_id = args.category or (layout.categories[0].id if layout.categories else "")
    try:
        config = GenerationConfig(
            rows=args.rows,
            columns=args.columns,
            seat_size=args.seat_size,
            row_spacing=args.row_spacing,
            column_spacing=args.column_spacing,
            category_id=category_id,
            start_x=args.start_x,
            start_y=args.start_y,
            rotation=args.rotation,
            row_direction=RowDirection(args.row_direction),
            number_direction=NumberDirection(args.number_direction),
            skip_pattern=SkipPattern(args.skip),
            starting_row=args.starting_row,
        )
    except ValidationError as e:
        raise SeatLayoutError(f"invalid generation settings: {e}") from e
    validate_category(config, layout.categories)
    return config


def cmd_init(args: argparse.Namespace) -> int:
    maybe_init_layout(args.file, width=args.width, height=args.height, overwrite=args.overwrite)
    print(f"Initialized layout at {args.file} ({args.width} x {args.height} canvas)")
    return 0


def cmd_add_category(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    category_id = args.id or f"cat_{uuid.uuid4().hex[:8]}"
    if layout.category(category_id) is not None:
        raise SeatLayoutError(f"category already exists: {category_id}")
    try:
        category = SeatCategory(id=category_id, name=args.name, color=args.color, price=args.price)
    except ValidationError as e:
        raise SeatLayoutError(f"invalid category: {e}") from e
    layout.categories.append(category)
    save_layout(layout, args.file)
    print(f"Added category {category.name!r} ({category.id})")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    if not layout.items:
        print("No seats placed")
        return 1
    print(render_rows(layout.items))
    print(f"{len(layout.items)} seats")
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    config = _config_from_args(args, layout)
    preview = preview_batch(config, layout.canvas, layout.existing_items())
    report = preview.report
    print(render_preview(preview, cell_width=args.width))
    print(f"Total seats: {report.generated} (valid {report.valid}, skipped {report.skipped_count})")
    if report.skipped_labels:
        print(f"Duplicates: {', '.join(report.skipped_labels)}")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    config = _config_from_args(args, layout)
    preview = preview_batch(config, layout.canvas, layout.existing_items())
    outcome = commit_batch(preview, DirectCreate(layout.items.extend), confirm=args.yes)
    save_layout(layout, args.file)
    print(f"Created {len(outcome.seats)} seats ({outcome.report.skipped_count} skipped)")
    return 0


def cmd_place(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    config = _config_from_args(args, layout)
    existing = layout.existing_items()

    pending: list[GenerationConfig] = []
    commit_batch(preview_batch(config, layout.canvas, existing), InteractivePlacement(pending.append), confirm=args.yes)

    x, y = args.at
    placed = place_at(pending[0], layout.canvas, existing, x, y)
    outcome = commit_batch(placed, DirectCreate(layout.items.extend), confirm=args.yes)
    save_layout(layout, args.file)
    print(f"Placed {len(outcome.seats)} seats around ({x}, {y})")
    return 0


def cmd_export_csv(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["id", "row_label", "seat_number", "label", "x", "y", "w", "h", "rotation", "category_id"])
        for s in layout.items:
            w.writerow([s.id, s.row_label, s.seat_number, s.label, s.x, s.y, s.w, s.h, s.rotation, s.category_id])
    print(f"Exported {len(layout.items)} seats to {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seat_layout", description="Bulk seat layout generator (CLI).")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="Create a new layout JSON file")
    _add_common_args(p_init)
    p_init.add_argument("--width", type=int, required=True)
    p_init.add_argument("--height", type=int, required=True)
    p_init.add_argument("--overwrite", action="store_true", help="Overwrite existing layout file")
    p_init.set_defaults(func=cmd_init)

    p_cat = sub.add_parser("add-category", help="Add a seat category")
    _add_common_args(p_cat)
    p_cat.add_argument("--name", required=True)
    p_cat.add_argument("--color", default="#3b82f6")
    p_cat.add_argument("--price", type=float, default=0.0)
    p_cat.add_argument("--id", help="Category id (default: generated)")
    p_cat.set_defaults(func=cmd_add_category)

    p_show = sub.add_parser("show", help="List placed seats by row")
    _add_common_args(p_show)
    p_show.set_defaults(func=cmd_show)

    p_preview = sub.add_parser("preview", help="Preview a bulk seat grid without saving")
    _add_common_args(p_preview)
    _add_generation_args(p_preview)
    p_preview.add_argument("--width", type=int, default=5, help="Cell width for display")
    p_preview.set_defaults(func=cmd_preview)

    p_gen = sub.add_parser("generate", help="Create a bulk seat grid")
    _add_common_args(p_gen)
    _add_generation_args(p_gen)
    p_gen.add_argument("--yes", action="store_true", help="Create the remaining seats when some are duplicates")
    p_gen.set_defaults(func=cmd_generate)

    p_place = sub.add_parser("place", help="Place a bulk seat grid centred on a canvas point")
    _add_common_args(p_place)
    _add_generation_args(p_place)
    p_place.add_argument("--at", type=float, nargs=2, metavar=("X", "Y"), required=True)
    p_place.add_argument("--yes", action="store_true", help="Create the remaining seats when some are duplicates")
    p_place.set_defaults(func=cmd_place)

    p_export = sub.add_parser("export-csv", help="Export placed seats to a CSV file")
    _add_common_args(p_export)
    p_export.add_argument("--output", required=True)
    p_export.set_defaults(func=cmd_export_csv)

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    configure_logging()
    try:
        return int(args.func(args))
    except SeatLayoutError as e:
        logger.debug("command {} failed: {}", args.cmd, e)
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
