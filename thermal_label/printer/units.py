"""
printer/units.py

RU: Перевод мм / пикселей редактора в точки принтера.
EN: Millimetre and reference-pixel conversion into device dots.

Every value is rounded once, half away from zero, so 2.5 -> 3 and -2.5 -> -3
regardless of Python's banker's rounding.
"""

import math
from typing import Final, Union

from ..model.enums import MM_PER_INCH, REFERENCE_DPI, TextAlign

__all__ = [
    "round_half_away",
    "to_dots",
    "px_to_dots",
    "font_size_to_dots",
    "align_offset",
    "quarter_turns",
]

Number = Union[int, float]

_QUARTER: Final[float] = 90.0


def round_half_away(value: float) -> int:
    magnitude = math.floor(abs(value) + 0.5)
    return int(-magnitude if value < 0 else magnitude)


def to_dots(value_mm: Number, dpi: int) -> int:
    """Millimetres -> dots."""
    return round_half_away(value_mm / MM_PER_INCH * dpi)


def px_to_dots(value_px: Number, dpi: int) -> int:
    """Editor pixels (1/96 inch) -> dots."""
    return round_half_away(value_px * dpi / REFERENCE_DPI)


def font_size_to_dots(size_px: Number, dpi: int) -> int:
    return px_to_dots(size_px, dpi)


def align_offset(box_width: int, content_width: int, align: Union[TextAlign, str]) -> int:
    """
    Horizontal shift that places ``content_width`` inside ``box_width``.

    Content wider than the box is never shifted left of the box origin.
    """
    align = TextAlign.coerce(align)
    if align is TextAlign.CENTER:
        return max(0, round_half_away((box_width - content_width) / 2))
    if align is TextAlign.RIGHT:
        return max(0, box_width - content_width)
    return 0


def quarter_turns(rotation: Union[Number, None]) -> int:
    """Nearest quarter turn (0..3) of a rotation in degrees; None means 0."""
    if not rotation:
        return 0
    return round_half_away(rotation / _QUARTER) % 4
