"""
printer/symbology.py

RU: Таблицы соответствия абстрактных форматов штрихкода кодам каждого языка.
EN: Abstract barcode format -> per-language symbology code.

Lookup is total. An unknown format never fails a job: it falls back to the
language default (Code 128) and a warning is logged.
"""

import logging
from typing import Dict, Final, Union

from ..model.enums import BarcodeFormat, PrinterLanguage

logger = logging.getLogger(__name__)

__all__ = [
    "ZPL_BARCODE_CODES",
    "EPL_BARCODE_CODES",
    "TSPL_BARCODE_CODES",
    "DEFAULT_BARCODE_CODES",
    "barcode_code",
]

ZPL_BARCODE_CODES: Final[Dict[BarcodeFormat, str]] = {
    BarcodeFormat.CODE128: "BC",
    BarcodeFormat.EAN13: "BE",
    BarcodeFormat.EAN8: "B8",
    BarcodeFormat.UPC: "BU",
    BarcodeFormat.CODE39: "B3",
    BarcodeFormat.ITF14: "BI",
    BarcodeFormat.MSI: "BM",
    BarcodeFormat.PHARMACODE: "BP",
}

EPL_BARCODE_CODES: Final[Dict[BarcodeFormat, str]] = {
    BarcodeFormat.CODE128: "1",
    BarcodeFormat.EAN13: "E30",
    BarcodeFormat.EAN8: "E80",
    BarcodeFormat.UPC: "UA0",
    BarcodeFormat.CODE39: "3",
    BarcodeFormat.ITF14: "2",
    BarcodeFormat.MSI: "M",
    # No pharmacode in EPL; Code 39 is the closest resident symbology.
    BarcodeFormat.PHARMACODE: "3",
}

TSPL_BARCODE_CODES: Final[Dict[BarcodeFormat, str]] = {
    BarcodeFormat.CODE128: "128",
    BarcodeFormat.EAN13: "EAN13",
    BarcodeFormat.EAN8: "EAN8",
    BarcodeFormat.UPC: "UPCA",
    BarcodeFormat.CODE39: "39",
    BarcodeFormat.ITF14: "ITF14",
    BarcodeFormat.MSI: "MSI",
    BarcodeFormat.PHARMACODE: "93",
}

_TABLES: Final[Dict[PrinterLanguage, Dict[BarcodeFormat, str]]] = {
    PrinterLanguage.ZPL: ZPL_BARCODE_CODES,
    PrinterLanguage.EPL: EPL_BARCODE_CODES,
    PrinterLanguage.TSPL: TSPL_BARCODE_CODES,
}

DEFAULT_BARCODE_CODES: Final[Dict[PrinterLanguage, str]] = {
    PrinterLanguage.ZPL: "BC",
    PrinterLanguage.EPL: "1",
    PrinterLanguage.TSPL: "128",
}


def barcode_code(language: Union[PrinterLanguage, str], fmt: Union[BarcodeFormat, str, None]) -> str:
    """Symbology code for ``fmt`` in ``language``."""
    lang = PrinterLanguage.parse(language)
    resolved = BarcodeFormat.coerce(fmt)
    if resolved is None:
        default = DEFAULT_BARCODE_CODES[lang]
        logger.warning(
            "Unknown barcode format %r for %s, falling back to %s", fmt, lang.value, default
        )
        return default
    return _TABLES[lang][resolved]
