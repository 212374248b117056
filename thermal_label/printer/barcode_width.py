"""
printer/barcode_width.py

RU: Оценка ширины штрихкода в точках (узкий штрих = 2 точки).
EN: Approximate printed barcode width, used only to center/right-align a
barcode inside its element box. Not a symbology encoder.
"""

from typing import Union

from ..model.enums import NARROW_BAR_DOTS, BarcodeFormat

__all__ = ["estimate_width"]

_EAN13_MODULES = 95
_EAN8_MODULES = 67
_UPC_MODULES = 95
_ITF14_MODULES = 7 * 18 + 20


def estimate_width(fmt: Union[BarcodeFormat, str, None], value: str) -> int:
    """Estimated width in dots of ``value`` encoded as ``fmt``."""
    length = len(value or "")
    resolved = BarcodeFormat.coerce(fmt)
    if resolved is BarcodeFormat.CODE128:
        modules = length * 11 + 35
    elif resolved is BarcodeFormat.EAN13:
        modules = _EAN13_MODULES
    elif resolved is BarcodeFormat.EAN8:
        modules = _EAN8_MODULES
    elif resolved is BarcodeFormat.UPC:
        modules = _UPC_MODULES
    elif resolved is BarcodeFormat.CODE39:
        modules = length * 13 + 25
    elif resolved is BarcodeFormat.ITF14:
        modules = _ITF14_MODULES
    else:
        modules = length * 12
    return modules * NARROW_BAR_DOTS
