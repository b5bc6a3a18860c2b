from __future__ import annotations

from .models import LabelError

_ALPHABET = 26
_BASE = ord("A")


def index_to_label(index: int) -> str:
    """
    Spreadsheet-style row label for a 0-based index (0=A, 25=Z, 26=AA, 52=BA).

    Bijective base-26: there is no zero digit, so every label maps to exactly one index.
    """
    if index < 0:
        raise LabelError(f"row index must be >= 0, got {index}")
    n = index + 1
    out: list[str] = []
    while n > 0:
        n, rem = divmod(n - 1, _ALPHABET)
        out.append(chr(_BASE + rem))
    return "".join(reversed(out))


def label_to_index(label: str) -> int:
    if not label or not all("A" <= ch <= "Z" for ch in label):
        raise LabelError(f"invalid row label: {label!r} (expected A-Z letters)")
    n = 0
    for ch in label:
        n = n * _ALPHABET + (ord(ch) - _BASE + 1)
    return n - 1
