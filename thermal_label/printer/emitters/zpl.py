"""
printer/emitters/zpl.py

RU: Эмиттер ZPL (Zebra). Размеры в точках, копии задаются ^PQ.
EN: Zebra Programming Language emitter.

Block layout::

    ^XA
    ^PW{w}  ^LL{h}  [^PR{speed}]  [~SD{darkness}]  ^LH0,0
    ...one line per field...
    [^PQ{copies}]
    ^XZ
"""

import logging
from typing import Dict, Final, Tuple

from ...model.elements import (
    BarcodeElement,
    ImageElement,
    LineElement,
    QRCodeElement,
    RectangleElement,
    TextElement,
)
from ...model.enums import ErrorCorrectionLevel, LineOrientation, PrinterLanguage, TextAlign
from ..symbology import barcode_code
from ..units import align_offset, round_half_away
from .base import CommandEmitter

logger = logging.getLogger(__name__)

__all__ = ["ZplEmitter"]

ORIENTATIONS: Final[Tuple[str, ...]] = ("N", "R", "I", "B")
GLYPH_WIDTH_RATIO: Final[float] = 0.7
MAX_CORNER_ROUNDING: Final[int] = 8

_JUSTIFY: Final[Dict[TextAlign, str]] = {
    TextAlign.LEFT: "L",
    TextAlign.CENTER: "C",
    TextAlign.RIGHT: "R",
}

# Characters that would end or redirect a field; sent as _XX under ^FH_.
_HEX_ESCAPED: Final[str] = "^~_"


def field_data(value: str) -> Tuple[str, str]:
    """Return (^FH prefix or "", data safe to place after ^FD)."""
    if not any(ch in value for ch in _HEX_ESCAPED):
        return "", value
    escaped = "".join(f"_{ord(ch):02X}" if ch in _HEX_ESCAPED else ch for ch in value)
    return "^FH_", escaped


class ZplEmitter(CommandEmitter):
    language = PrinterLanguage.ZPL
    native_copies = True

    def comment(self, text: str) -> bytes:
        return f"^FX {text}\n".encode(self.config.encoding, errors="replace")

    def header(self) -> None:
        self.write("^XA")
        self.write(f"^PW{self.label_width_dots}")
        self.write(f"^LL{self.label_height_dots}")
        if self.config.print_speed is not None:
            self.write(f"^PR{self.config.print_speed}")
        if self.config.darkness is not None:
            self.write(f"~SD{self.config.darkness:02d}")
        self.write("^LH0,0")

    def footer(self) -> None:
        if self.config.copies > 1:
            self.write(f"^PQ{self.config.copies}")
        self.write("^XZ")

    # --- elements ---------------------------------------------------------

    def text(self, element: TextElement) -> None:
        if not element.content:
            logger.debug("Skipping empty text %r", element.id)
            return
        self.warn_ignored_style(element)
        x, y = self.origin(element)
        height = self.text_height(element)
        glyph_width = max(1, round_half_away(height * GLYPH_WIDTH_RATIO))
        orientation = ORIENTATIONS[self.turns(element)]
        lines = element.lines
        align = TextAlign.coerce(element.text_align)

        block = ""
        box_width = self.dots(element.width) or max(1, self.label_width_dots - x)
        if align is not TextAlign.LEFT or len(lines) > 1:
            spacing = self.line_pitch(element, height) - height
            block = f"^FB{box_width},{len(lines)},{spacing},{_JUSTIFY[align]},0"

        prefix, data = field_data("\\&".join(lines))
        font = f"^A0{orientation},{height},{glyph_width}"
        self.write(f"^FO{x},{y}{font}{block}{prefix}^FD{data}^FS")
        if element.is_bold:
            self.write(f"^FO{x + self.bold_offset},{y}{font}{block}{prefix}^FD{data}^FS")

        if element.underline:
            pitch = self.line_pitch(element, height)
            thickness = self.rule_thickness(height)
            for index, row in enumerate(lines):
                if not row:
                    continue
                width = min(len(row) * glyph_width, box_width)
                ux = x + (align_offset(box_width, width, align) if block else 0)
                uy = y + index * pitch + height
                self.write(f"^FO{ux},{uy}^GB{width},{thickness},{thickness}^FS")

    def barcode(self, element: BarcodeElement) -> None:
        code = barcode_code(self.language, element.format)
        x = self.barcode_x(element)
        y = self.dots(element.y)
        height = self.barcode_height(element)
        o = ORIENTATIONS[self.turns(element)]
        f = "Y" if element.display_value else "N"
        params = {
            "BC": f"{o},{height},{f},N,N",
            "BE": f"{o},{height},{f},N",
            "B8": f"{o},{height},{f},N",
            "BI": f"{o},{height},{f},N",
            "BU": f"{o},{height},{f},N,Y",
            "B3": f"{o},N,{height},{f},N",
            "BM": f"{o},B,{height},{f},N,N",
            "BP": f"{o},N,{height},{f},N",
        }[code]
        prefix, data = field_data(element.value)
        self.write(f"^FO{x},{y}^BY2,2,{height}^{code}{params}{prefix}^FD{data}^FS")

    def qrcode(self, element: QRCodeElement) -> None:
        magnification = self.qr_cell(element)
        x, y = self.origin(element)
        level = ErrorCorrectionLevel.coerce(element.error_correction_level).value
        prefix, data = field_data(element.value)
        self.write(f"^FO{x},{y}^BQN,2,{magnification}{prefix}^FD{level}A,{data}^FS")

    def image(self, element: ImageElement) -> None:
        bitmap = self.resolve_raster(element)
        x, y = self.origin(element)
        total = bitmap.total_bytes
        self.write(f"^FO{x},{y}^GFA,{total},{total},{bitmap.bytes_per_row},{bitmap.hex()}^FS")

    def rectangle(self, element: RectangleElement) -> None:
        x, y = self.origin(element)
        width, height = self.size(element)
        thickness = max(1, min(width, height)) if element.is_filled else self.stroke(element.border_width)
        rounding = self._corner_rounding(element, width, height)
        suffix = f",B,{rounding}" if rounding else ""
        self.write(f"^FO{x},{y}^GB{width},{height},{thickness}{suffix}^FS")

    def line(self, element: LineElement) -> None:
        x, y = self.origin(element)
        thickness = self.stroke(element.thickness)
        if element.orientation == LineOrientation.VERTICAL:
            self.write(f"^FO{x},{y}^GB{thickness},{self.dots(element.height)},{thickness}^FS")
        else:
            self.write(f"^FO{x},{y}^GB{self.dots(element.width)},{thickness},{thickness}^FS")

    def _corner_rounding(self, element: RectangleElement, width: int, height: int) -> int:
        """^GB rounding 0..8: radius relative to half of the shorter side."""
        radius = self.dots(element.border_radius)
        half = min(width, height) / 2
        if radius <= 0 or half <= 0:
            return 0
        return min(MAX_CORNER_ROUNDING, round_half_away(radius / half * MAX_CORNER_ROUNDING))
