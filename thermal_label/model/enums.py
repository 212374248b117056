"""
model/enums.py

(Краткое RU: Перечисления модели этикетки и целевых языков термопринтеров.)

EN: Domain enums for the label model and the three thermal printer command
languages. NO command syntax here: see thermal_label/printer for protocol logic.

- Printer languages: ZPL (Zebra), EPL (Eltron), TSPL (TSC).
- Abstract barcode formats as authored in the label editor.
- Alignment, line orientation, QR error-correction levels, label units.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Optional, Tuple, Union

_logger: Final[logging.Logger] = logging.getLogger(__name__)

# === HARDWARE / EDITOR CONSTANTS ===
REFERENCE_DPI: Final[int] = 96  # editor canvas: 1px = 1/96 inch
MM_PER_INCH: Final[float] = 25.4
NARROW_BAR_DOTS: Final[int] = 2  # default module width of every emitter
MIN_PRINT_SPEED: Final[int] = 1
MAX_PRINT_SPEED: Final[int] = 10


class PrinterLanguage(str, Enum):
    ZPL = "ZPL"
    EPL = "EPL"
    TSPL = "TSPL"

    @property
    def description(self) -> str:
        names = {
            PrinterLanguage.ZPL: "Zebra Programming Language",
            PrinterLanguage.EPL: "Eltron Programming Language",
            PrinterLanguage.TSPL: "TSC Printer Language",
        }
        return names[self]

    @property
    def darkness_range(self) -> Tuple[int, int]:
        """Inclusive darkness/density scale accepted by the language."""
        ranges = {
            PrinterLanguage.ZPL: (0, 30),
            PrinterLanguage.EPL: (0, 15),
            PrinterLanguage.TSPL: (0, 15),
        }
        return ranges[self]

    @property
    def file_extension(self) -> str:
        extensions = {
            PrinterLanguage.ZPL: "zpl",
            PrinterLanguage.EPL: "epl",
            PrinterLanguage.TSPL: "prn",
        }
        return extensions[self]

    @classmethod
    def parse(cls, value: Union[str, "PrinterLanguage"]) -> "PrinterLanguage":
        """Case-insensitive lookup. Raises ValueError for unknown names."""
        if isinstance(value, PrinterLanguage):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValueError(f"Unknown printer language: {value!r}")


class BarcodeFormat(str, Enum):
    CODE128 = "CODE128"
    EAN13 = "EAN13"
    EAN8 = "EAN8"
    UPC = "UPC"
    CODE39 = "CODE39"
    ITF14 = "ITF14"
    MSI = "MSI"
    PHARMACODE = "pharmacode"

    @classmethod
    def coerce(cls, value: Union[str, "BarcodeFormat", None]) -> Optional["BarcodeFormat"]:
        """
        Resolve an editor format name, exact match first, then ignoring case.

        Returns None for anything unrecognized; callers fall back to their
        language default instead of failing.
        """
        if isinstance(value, BarcodeFormat):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            pass
        folded = value.strip().casefold()
        for member in cls:
            if member.value.casefold() == folded:
                return member
        return None


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def coerce(cls, value: Union[str, "TextAlign", None]) -> "TextAlign":
        if isinstance(value, TextAlign):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            _logger.debug("Unknown alignment %r, using left", value)
            return cls.LEFT


class LineOrientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ErrorCorrectionLevel(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @classmethod
    def coerce(cls, value: Union[str, "ErrorCorrectionLevel", None]) -> "ErrorCorrectionLevel":
        if isinstance(value, ErrorCorrectionLevel):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return DEFAULT_ERROR_CORRECTION


class LabelUnit(str, Enum):
    MM = "mm"
    CM = "cm"
    IN = "in"
    PX = "px"

    @property
    def mm_factor(self) -> float:
        factors = {
            LabelUnit.MM: 1.0,
            LabelUnit.CM: 10.0,
            LabelUnit.IN: MM_PER_INCH,
            LabelUnit.PX: MM_PER_INCH / REFERENCE_DPI,
        }
        return factors[self]


DEFAULT_LANGUAGE: Final[PrinterLanguage] = PrinterLanguage.ZPL
DEFAULT_BARCODE_FORMAT: Final[BarcodeFormat] = BarcodeFormat.CODE128
DEFAULT_ERROR_CORRECTION: Final[ErrorCorrectionLevel] = ErrorCorrectionLevel.M
DEFAULT_ALIGNMENT: Final[TextAlign] = TextAlign.LEFT
