"""
printer/emitters/base.py

RU: Общий контракт эмиттеров: заголовок, элементы по z-порядку, подвал.
EN: Shared emitter contract. A concrete emitter only knows its language's
syntax; ordering, dispatch, geometry conversion and the copy policy live here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Dict, Final, Iterable, List, Mapping, Optional, Tuple, assert_never

from ...errors import UnsupportedElementError
from ...model.bitmap import MonochromeBitmap
from ...model.elements import (
    BarcodeElement,
    BaseElement,
    ImageElement,
    LabelElement,
    LineElement,
    QRCodeElement,
    RectangleElement,
    TextElement,
)
from ...model.enums import LineOrientation, PrinterLanguage
from ...model.print_config import ThermalPrintConfig
from ...model.template import LabelTemplate
from ..barcode_width import estimate_width
from ..qr import QRDataTooLargeError, qr_cell_size, qr_module_count
from ..units import align_offset, font_size_to_dots, px_to_dots, quarter_turns, round_half_away, to_dots

logger = logging.getLogger(__name__)

__all__ = [
    "CommandEmitter",
    "ResidentFontEmitter",
    "BitmapFont",
    "ordered_elements",
    "pick_bitmap_font",
    "scale_font_table",
]

BARCODE_TEXT_RATIO: Final[float] = 0.75  # bar share of the box when the text line is shown
MIN_BARCODE_HEIGHT_MM: Final[float] = 5.0

# (name, multiplier, cell width, cell height) in dots, multiplier applied
BitmapFont = Tuple[str, int, int, int]


def ordered_elements(elements: Iterable[LabelElement]) -> List[LabelElement]:
    """Ascending z_index (missing = 0); ties keep template order."""
    return sorted(elements, key=lambda e: e.stacking_order)


def scale_font_table(
    table: Mapping[str, Tuple[int, int]], factor: float
) -> Dict[str, Tuple[int, int]]:
    return {
        name: (max(1, round_half_away(w * factor)), max(1, round_half_away(h * factor)))
        for name, (w, h) in table.items()
    }


def pick_bitmap_font(
    fonts: Mapping[str, Tuple[int, int]], target_height: int, max_multiplier: int
) -> BitmapFont:
    """
    Resident font and integer multiplier whose height is closest to the target.

    Fonts are tried in table order and multipliers ascending; on a tie the
    first candidate wins, so the smallest font that matches is used.
    """
    best: Optional[BitmapFont] = None
    best_diff = 0
    for name, (width, height) in fonts.items():
        for mult in range(1, max_multiplier + 1):
            diff = abs(height * mult - target_height)
            if best is None or diff < best_diff:
                best = (name, mult, width * mult, height * mult)
                best_diff = diff
    if best is None:
        raise ValueError("Font table is empty")
    return best


class CommandEmitter(ABC):
    """
    Serializes one LabelTemplate into a command buffer.

    One instance per call; nothing is cached between calls.

    Subclasses provide the header/footer and one method per element variant.
    ``native_copies`` tells whether the footer can request copies itself; when
    it cannot, the whole block is repeated ``config.copies`` times.
    """

    language: ClassVar[PrinterLanguage]
    native_copies: ClassVar[bool] = True

    def __init__(self, config: ThermalPrintConfig) -> None:
        config.validate()
        self.config = config
        self.dpi = config.dpi
        self._buffer = bytearray()

    # --- public -----------------------------------------------------------

    def emit(self, template: LabelTemplate) -> bytes:
        block = self._emit_block(template)
        copies = 1 if self.native_copies else self.config.copies
        logger.debug(
            "%s: %d bytes for template %r (%d elements, block x%d)",
            self.language.value,
            len(block),
            template.id,
            len(template.elements),
            copies,
        )
        return block * copies

    @abstractmethod
    def comment(self, text: str) -> bytes:
        """One comment line in this language (used between batch items)."""

    # --- language hooks ---------------------------------------------------

    @abstractmethod
    def header(self) -> None: ...

    @abstractmethod
    def footer(self) -> None: ...

    @abstractmethod
    def text(self, element: TextElement) -> None: ...

    @abstractmethod
    def barcode(self, element: BarcodeElement) -> None: ...

    @abstractmethod
    def qrcode(self, element: QRCodeElement) -> None: ...

    @abstractmethod
    def image(self, element: ImageElement) -> None: ...

    @abstractmethod
    def rectangle(self, element: RectangleElement) -> None: ...

    @abstractmethod
    def line(self, element: LineElement) -> None: ...

    # --- assembly ---------------------------------------------------------

    def _emit_block(self, template: LabelTemplate) -> bytes:
        self._buffer = bytearray()
        self.header()
        for element in ordered_elements(template.elements):
            self._dispatch(element)
        self.footer()
        return bytes(self._buffer)

    def _dispatch(self, element: LabelElement) -> None:
        match element:
            case TextElement():
                self.text(element)
            case BarcodeElement():
                self.barcode(element)
            case QRCodeElement():
                self.qrcode(element)
            case ImageElement():
                self.image(element)
            case RectangleElement():
                self.rectangle(element)
            case LineElement():
                self.line(element)
            case _:
                assert_never(element)

    def write(self, line: str) -> None:
        """Append one command line, encoded with the configured code page."""
        self._buffer += line.encode(self.config.encoding, errors="replace") + b"\n"

    def write_binary(self, prefix: str, data: bytes) -> None:
        """Command whose argument list ends in raw bytes (graphics)."""
        self._buffer += prefix.encode("ascii") + data + b"\n"

    # --- shared geometry --------------------------------------------------

    def dots(self, value_px: float) -> int:
        return px_to_dots(value_px, self.dpi)

    def mm_dots(self, value_mm: float) -> int:
        return to_dots(value_mm, self.dpi)

    def origin(self, element: BaseElement) -> Tuple[int, int]:
        return self.dots(element.x), self.dots(element.y)

    def size(self, element: BaseElement) -> Tuple[int, int]:
        return self.dots(element.width), self.dots(element.height)

    @staticmethod
    def turns(element: BaseElement) -> int:
        return quarter_turns(element.rotation)

    @property
    def label_width_dots(self) -> int:
        return self.mm_dots(self.config.label_width)

    @property
    def label_height_dots(self) -> int:
        return self.mm_dots(self.config.label_height)

    @property
    def bold_offset(self) -> int:
        return max(1, self.dpi // 203)

    def text_height(self, element: TextElement) -> int:
        return max(1, font_size_to_dots(element.font_size, self.dpi))

    @staticmethod
    def line_pitch(element: TextElement, glyph_height: int) -> int:
        factor = element.line_height if element.line_height else 1.0
        return max(1, round_half_away(glyph_height * factor))

    @staticmethod
    def rule_thickness(glyph_height: int) -> int:
        """Underline bar thickness for a glyph height."""
        return max(1, glyph_height // 12)

    def stroke(self, width_px: float) -> int:
        return max(1, self.dots(width_px))

    def warn_ignored_style(self, element: TextElement) -> None:
        if element.italic:
            logger.debug(
                "%s: italic has no resident font equivalent, ignored on %r",
                self.language.value,
                element.id,
            )

    # --- barcode / QR / image helpers -------------------------------------

    def barcode_height(self, element: BarcodeElement) -> int:
        box = self.dots(element.height)
        floor = self.mm_dots(MIN_BARCODE_HEIGHT_MM)
        if element.display_value:
            return max(round_half_away(box * BARCODE_TEXT_RATIO), floor)
        return max(box, floor)

    def barcode_x(self, element: BarcodeElement) -> int:
        """Alignment shifts only unrotated symbols, as for text."""
        x = self.dots(element.x)
        if self.turns(element) != 0:
            return x
        return x + align_offset(
            self.dots(element.width),
            estimate_width(element.format, element.value),
            element.text_align,
        )

    def qr_cell(self, element: QRCodeElement) -> int:
        try:
            modules = qr_module_count(element.value, element.error_correction_level)
        except QRDataTooLargeError as exc:
            raise self.unsupported(element, str(exc)) from exc
        width, height = self.size(element)
        return qr_cell_size(width, height, modules)

    def resolve_raster(self, element: ImageElement) -> MonochromeBitmap:
        if element.raster is not None:
            return element.raster
        if element.src.startswith("data:"):
            try:
                return MonochromeBitmap.from_data_uri(element.src)
            except ValueError as exc:
                raise self.unsupported(element, f"Image cannot be used as-is: {exc}") from exc
        raise self.unsupported(
            element, "Image needs a pre-rasterized monochrome bitmap; remote sources are not fetched"
        )

    def unsupported(self, element: BaseElement, message: str) -> UnsupportedElementError:
        return UnsupportedElementError(
            message,
            element_id=element.id,
            element_type=element.element_type,
            language=self.language.value,
        )


class ResidentFontEmitter(CommandEmitter):
    """
    Emitter for languages that print text with numbered resident bitmap
    fonts and integer multipliers (EPL, TSPL).

    Text is placed one command per line. Alignment shifts the line origin by
    the measured width and applies only to unrotated text.
    """

    max_multiplier: ClassVar[int]

    @abstractmethod
    def font_table(self) -> Mapping[str, Tuple[int, int]]:
        """Resident fonts for the configured DPI: name -> (cell width, cell height)."""

    @abstractmethod
    def text_line(self, x: int, y: int, turns: int, font: BitmapFont, data: str) -> None: ...

    @abstractmethod
    def bar(self, x: int, y: int, width: int, height: int) -> None:
        """Solid black box."""

    @staticmethod
    def advance(x: int, y: int, turns: int, offset: int) -> Tuple[int, int]:
        """Origin of a line ``offset`` dots further along the text's line axis."""
        if turns == 1:
            return x - offset, y
        if turns == 2:
            return x, y - offset
        if turns == 3:
            return x + offset, y
        return x, y + offset

    def text(self, element: TextElement) -> None:
        if not element.content:
            logger.debug("Skipping empty text %r", element.id)
            return
        self.warn_ignored_style(element)
        x, y = self.origin(element)
        turns = self.turns(element)
        font = pick_bitmap_font(self.font_table(), self.text_height(element), self.max_multiplier)
        cell_width, cell_height = font[2], font[3]
        pitch = self.line_pitch(element, cell_height)
        box_width = self.dots(element.width)

        for index, row in enumerate(element.lines):
            if not row:
                continue
            measured = len(row) * cell_width
            lx, ly = self.advance(x, y, turns, index * pitch)
            if turns == 0:
                lx += align_offset(box_width, measured, element.text_align)
            self.text_line(lx, ly, turns, font, row)
            if element.is_bold:
                self.text_line(lx + self.bold_offset, ly, turns, font, row)
            if element.underline:
                if turns == 0:
                    self.bar(lx, ly + cell_height, measured, self.rule_thickness(cell_height))
                else:
                    logger.debug("Underline on rotated text %r not drawn", element.id)

    def line(self, element: LineElement) -> None:
        x, y = self.origin(element)
        thickness = self.stroke(element.thickness)
        if element.orientation == LineOrientation.VERTICAL:
            self.bar(x, y, thickness, self.dots(element.height))
        else:
            self.bar(x, y, self.dots(element.width), thickness)
