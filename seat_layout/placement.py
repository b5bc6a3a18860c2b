from __future__ import annotations

from dataclasses import dataclass

from shapely.geometry import box

from .models import CanvasSize, GenerationConfig


@dataclass(frozen=True)
class Geometry:
    x: int
    y: int
    w: int
    h: int
    rotation: int


def compute_geometry(row: int, col: int, config: GenerationConfig) -> Geometry:
    return Geometry(
        x=config.start_x + col * config.column_spacing,
        y=config.start_y + row * config.row_spacing,
        w=config.seat_size,
        h=config.seat_size,
        rotation=config.rotation,
    )


def is_within_bounds(geometry: Geometry, canvas: CanvasSize) -> bool:
    # covers() accepts seats touching the canvas edge.
    area = box(0, 0, canvas.w, canvas.h)
    seat = box(geometry.x, geometry.y, geometry.x + geometry.w, geometry.y + geometry.h)
    return area.covers(seat)


def grid_extent(config: GenerationConfig) -> tuple[int, int]:
    width = (config.columns - 1) * config.column_spacing + config.seat_size
    height = (config.rows - 1) * config.row_spacing + config.seat_size
    return width, height


def _clamp_origin(centre: float, extent: int, limit: int) -> int:
    origin = int(round(centre - extent / 2.0))
    if extent <= limit:
        origin = min(origin, limit - extent)
    return max(0, origin)


def anchor_config(config: GenerationConfig, canvas: CanvasSize, x: float, y: float) -> GenerationConfig:
    """
    Re-anchor a validated config so its grid is centred on a canvas click.

    Only the origin moves; numbering, spacing, rotation and category stay exactly as previewed.
    Grids larger than the canvas are pinned to the top-left corner and clipped by the bounds check.
    """
    width, height = grid_extent(config)
    return config.model_copy(
        update={
            "start_x": _clamp_origin(x, width, canvas.w),
            "start_y": _clamp_origin(y, height, canvas.h),
        }
    )
