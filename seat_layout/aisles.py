from __future__ import annotations

from typing import Callable, Optional

from .models import SkipPattern

SkipPredicate = Callable[[int, int], bool]


def should_skip(
    row: int,
    col: int,
    total_columns: int,
    pattern: SkipPattern,
    custom: Optional[SkipPredicate] = None,
) -> bool:
    if pattern is SkipPattern.aisle_center:
        return col == total_columns // 2
    if pattern is SkipPattern.aisle_sides:
        return col == 0 or col == total_columns - 1
    if pattern is SkipPattern.custom:
        return bool(custom(row, col)) if custom is not None else False
    return False
