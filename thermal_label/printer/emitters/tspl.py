"""
printer/emitters/tspl.py

RU: Эмиттер TSPL/TSPL2 (TSC). Размер этикетки в мм, координаты в точках.
EN: TSC Printer Language emitter. Label size and gap in millimetres, element
coordinates in dots; copies requested by ``PRINT n,1``.
"""

import logging
from typing import Final, Mapping, Tuple

from ...model.elements import BarcodeElement, ImageElement, QRCodeElement, RectangleElement
from ...model.enums import ErrorCorrectionLevel, PrinterLanguage
from ..symbology import barcode_code
from .base import BitmapFont, ResidentFontEmitter, scale_font_table

logger = logging.getLogger(__name__)

__all__ = ["TsplEmitter", "TSPL_FONTS"]

# Resident fonts at 203 DPI; scaled for other resolutions.
TSPL_FONTS: Final[Mapping[str, Tuple[int, int]]] = {
    "1": (8, 12),
    "2": (12, 20),
    "3": (16, 24),
    "4": (24, 32),
    "5": (32, 48),
}
TSPL_MAX_MULTIPLIER: Final[int] = 10
WIDE_BAR_DOTS: Final[int] = 4


def escape(value: str) -> str:
    """TSPL has no backslash escape; a quote is sent as \\["]."""
    return value.replace('"', '\\["]')


def mm(value: float) -> str:
    return format(value, "g")


class TsplEmitter(ResidentFontEmitter):
    language = PrinterLanguage.TSPL
    native_copies = True
    max_multiplier = TSPL_MAX_MULTIPLIER

    def comment(self, text: str) -> bytes:
        return f"REM {text}\n".encode(self.config.encoding, errors="replace")

    def header(self) -> None:
        self.write(f"SIZE {mm(self.config.label_width)} mm, {mm(self.config.label_height)} mm")
        self.write(f"GAP {mm(self.config.gap_mm)} mm, 0 mm")
        if self.config.print_speed is not None:
            self.write(f"SPEED {self.config.print_speed}")
        if self.config.darkness is not None:
            self.write(f"DENSITY {self.config.darkness}")
        self.write("DIRECTION 1")
        self.write("REFERENCE 0,0")
        self.write("CLS")

    def footer(self) -> None:
        self.write(f"PRINT {self.config.copies},1")

    # --- resident font hooks ----------------------------------------------

    def font_table(self) -> Mapping[str, Tuple[int, int]]:
        if self.dpi == 203:
            return TSPL_FONTS
        return scale_font_table(TSPL_FONTS, self.dpi / 203)

    def text_line(self, x: int, y: int, turns: int, font: BitmapFont, data: str) -> None:
        name, mult = font[0], font[1]
        self.write(f'TEXT {x},{y},"{name}",{turns * 90},{mult},{mult},"{escape(data)}"')

    def bar(self, x: int, y: int, width: int, height: int) -> None:
        self.write(f"BAR {x},{y},{width},{height}")

    # --- elements ---------------------------------------------------------

    def barcode(self, element: BarcodeElement) -> None:
        code = barcode_code(self.language, element.format)
        x = self.barcode_x(element)
        y = self.dots(element.y)
        readable = 1 if element.display_value else 0
        self.write(
            f'BARCODE {x},{y},"{code}",{self.barcode_height(element)},{readable},'
            f'{self.turns(element) * 90},2,{WIDE_BAR_DOTS},"{escape(element.value)}"'
        )

    def qrcode(self, element: QRCodeElement) -> None:
        cell = self.qr_cell(element)
        x, y = self.origin(element)
        level = ErrorCorrectionLevel.coerce(element.error_correction_level).value
        self.write(
            f'QRCODE {x},{y},{level},{cell},A,{self.turns(element) * 90},"{escape(element.value)}"'
        )

    def image(self, element: ImageElement) -> None:
        bitmap = self.resolve_raster(element)
        x, y = self.origin(element)
        self.write_binary(f"BITMAP {x},{y},{bitmap.bytes_per_row},{bitmap.height},0,", bitmap.inverted())

    def rectangle(self, element: RectangleElement) -> None:
        x, y = self.origin(element)
        width, height = self.size(element)
        if element.is_filled:
            self.bar(x, y, width, height)
            return
        radius = self.dots(element.border_radius)
        suffix = f",{radius}" if radius > 0 else ""
        self.write(
            f"BOX {x},{y},{x + width},{y + height},{self.stroke(element.border_width)}{suffix}"
        )
