"""
RU: QR-код: число модулей для выбора увеличения и растр для языков без QR.
EN: QR helpers built on the ``qrcode`` package: module count (to size the
symbol to its box) and a 1-bit raster for languages without a native QR
command.
"""

from __future__ import annotations

import logging
from typing import Dict, Final, List

import qrcode
from PIL import Image, ImageDraw
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError

from ..model.bitmap import MonochromeBitmap
from ..model.enums import ErrorCorrectionLevel

logger = logging.getLogger(__name__)

__all__ = [
    "MIN_QR_CELL",
    "MAX_QR_CELL",
    "QRDataTooLargeError",
    "qr_matrix",
    "qr_module_count",
    "qr_cell_size",
    "qr_raster",
]

MIN_QR_CELL: Final[int] = 1
MAX_QR_CELL: Final[int] = 10

_EC_CONSTANTS: Final[Dict[ErrorCorrectionLevel, int]] = {
    ErrorCorrectionLevel.L: ERROR_CORRECT_L,
    ErrorCorrectionLevel.M: ERROR_CORRECT_M,
    ErrorCorrectionLevel.Q: ERROR_CORRECT_Q,
    ErrorCorrectionLevel.H: ERROR_CORRECT_H,
}


class QRDataTooLargeError(ValueError):
    """Value does not fit in any QR version at the requested EC level."""


def _build(value: str, level: ErrorCorrectionLevel) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        error_correction=_EC_CONSTANTS[ErrorCorrectionLevel.coerce(level)],
        box_size=1,
        border=0,
    )
    qr.add_data(value)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        # qrcode 8 reports overflow as ValueError("Invalid version ...")
        raise QRDataTooLargeError(
            f"QR value of {len(value)} characters does not fit at EC level {level}"
        ) from exc
    return qr


def qr_matrix(value: str, level: ErrorCorrectionLevel) -> List[List[bool]]:
    """Module grid without quiet zone, True = dark module."""
    return _build(value, level).get_matrix()


def qr_module_count(value: str, level: ErrorCorrectionLevel) -> int:
    return _build(value, level).modules_count


def qr_cell_size(box_width: int, box_height: int, modules: int) -> int:
    """Largest cell (dots per module) that fits the box, clamped to 1..10."""
    cell = min(box_width, box_height) // max(modules, 1)
    return max(MIN_QR_CELL, min(MAX_QR_CELL, cell))


def qr_raster(value: str, level: ErrorCorrectionLevel, cell: int) -> MonochromeBitmap:
    """Render the symbol as a 1-bit bitmap, each module ``cell`` dots square."""
    matrix = qr_matrix(value, level)
    side = len(matrix) * cell
    image = Image.new("1", (side, side), 1)
    draw = ImageDraw.Draw(image)
    for row, modules in enumerate(matrix):
        for col, dark in enumerate(modules):
            if dark:
                x0, y0 = col * cell, row * cell
                draw.rectangle((x0, y0, x0 + cell - 1, y0 + cell - 1), fill=0)
    logger.debug("Rasterized QR %dx%d modules at %d dots/module", len(matrix), len(matrix), cell)
    return MonochromeBitmap.from_image(image)
