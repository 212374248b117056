"""
printer/emitters/epl.py

RU: Эмиттер EPL2 (Eltron). Нет нативного QR и нативных копий в нашем формате.
EN: Eltron Programming Language emitter.

EPL has no QR command, so the symbol is rasterized with the ``qrcode``
package and sent as a GW graphic. The copy count is honoured by repeating
the whole block (header, fields, ``P1``) ``copies`` times.
"""

import logging
from typing import Dict, Final, Mapping, Tuple

from ...model.elements import BarcodeElement, ImageElement, QRCodeElement, RectangleElement
from ...model.enums import PrinterLanguage
from ..qr import qr_raster
from ..symbology import barcode_code
from .base import BitmapFont, ResidentFontEmitter, scale_font_table

logger = logging.getLogger(__name__)

__all__ = ["EplEmitter", "EPL_FONTS"]

# Resident fonts 1-5: (cell width, cell height) in dots.
EPL_FONTS: Final[Dict[int, Dict[str, Tuple[int, int]]]] = {
    203: {"1": (8, 12), "2": (10, 16), "3": (12, 20), "4": (14, 24), "5": (32, 48)},
    300: {"1": (12, 20), "2": (16, 28), "3": (20, 36), "4": (24, 44), "5": (48, 80)},
}
EPL_MAX_MULTIPLIER: Final[int] = 6
WIDE_BAR_DOTS: Final[int] = 4


def escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class EplEmitter(ResidentFontEmitter):
    language = PrinterLanguage.EPL
    native_copies = False
    max_multiplier = EPL_MAX_MULTIPLIER

    def comment(self, text: str) -> bytes:
        return f"; {text}\n".encode(self.config.encoding, errors="replace")

    def header(self) -> None:
        # Leading blank line flushes any half-received command on the printer.
        self.write("")
        self.write("N")
        self.write(f"q{self.label_width_dots}")
        self.write(f"Q{self.label_height_dots},{self.mm_dots(self.config.gap_mm)}")
        if self.config.print_speed is not None:
            self.write(f"S{self.config.print_speed}")
        if self.config.darkness is not None:
            self.write(f"D{self.config.darkness}")

    def footer(self) -> None:
        self.write("P1")

    # --- resident font hooks ----------------------------------------------

    def font_table(self) -> Mapping[str, Tuple[int, int]]:
        table = EPL_FONTS.get(self.dpi)
        if table is None:
            table = scale_font_table(EPL_FONTS[203], self.dpi / 203)
        return table

    def text_line(self, x: int, y: int, turns: int, font: BitmapFont, data: str) -> None:
        name, mult = font[0], font[1]
        self.write(f'A{x},{y},{turns},{name},{mult},{mult},N,"{escape(data)}"')

    def bar(self, x: int, y: int, width: int, height: int) -> None:
        self.write(f"LO{x},{y},{width},{height}")

    # --- elements ---------------------------------------------------------

    def barcode(self, element: BarcodeElement) -> None:
        code = barcode_code(self.language, element.format)
        x = self.barcode_x(element)
        y = self.dots(element.y)
        readable = "B" if element.display_value else "N"
        self.write(
            f"B{x},{y},{self.turns(element)},{code},2,{WIDE_BAR_DOTS},"
            f'{self.barcode_height(element)},{readable},"{escape(element.value)}"'
        )

    def qrcode(self, element: QRCodeElement) -> None:
        cell = self.qr_cell(element)
        bitmap = qr_raster(element.value, element.error_correction_level, cell)
        x, y = self.origin(element)
        logger.debug(
            "EPL has no QR command, %r sent as a %dx%d graphic",
            element.id,
            bitmap.width,
            bitmap.height,
        )
        self.write_binary(f"GW{x},{y},{bitmap.bytes_per_row},{bitmap.height},", bitmap.inverted())

    def image(self, element: ImageElement) -> None:
        bitmap = self.resolve_raster(element)
        x, y = self.origin(element)
        self.write_binary(f"GW{x},{y},{bitmap.bytes_per_row},{bitmap.height},", bitmap.inverted())

    def rectangle(self, element: RectangleElement) -> None:
        x, y = self.origin(element)
        width, height = self.size(element)
        if element.is_filled:
            self.bar(x, y, width, height)
            return
        t = self.stroke(element.border_width)
        if element.border_radius:
            logger.debug("EPL draws square corners, border radius of %r ignored", element.id)
        self.bar(x, y, width, t)
        self.bar(x, y + height - t, width, t)
        self.bar(x, y, t, height)
        self.bar(x + width - t, y, t, height)
