"""
model

Доменная модель этикетки: элементы, шаблон, параметры печати.

Public API:
    - LabelElement и варианты (TextElement, BarcodeElement, QRCodeElement,
      ImageElement, RectangleElement, LineElement)
    - LabelConfig, LabelTemplate
    - ThermalPrintConfig
    - MonochromeBitmap
    - перечисления (PrinterLanguage, BarcodeFormat, TextAlign, ...)
"""

from .bitmap import MonochromeBitmap
from .elements import (
    BarcodeElement,
    BaseElement,
    ImageElement,
    LabelElement,
    LineElement,
    QRCodeElement,
    RectangleElement,
    TextElement,
    element_from_dict,
)
from .enums import (
    BarcodeFormat,
    ErrorCorrectionLevel,
    LabelUnit,
    LineOrientation,
    PrinterLanguage,
    TextAlign,
)
from .print_config import COMMON_DPIS, DEFAULT_THERMAL_CONFIGS, ThermalPrintConfig
from .template import LabelConfig, LabelTemplate

__all__ = [
    "MonochromeBitmap",
    "BaseElement",
    "TextElement",
    "BarcodeElement",
    "QRCodeElement",
    "ImageElement",
    "RectangleElement",
    "LineElement",
    "LabelElement",
    "element_from_dict",
    "BarcodeFormat",
    "ErrorCorrectionLevel",
    "LabelUnit",
    "LineOrientation",
    "PrinterLanguage",
    "TextAlign",
    "ThermalPrintConfig",
    "DEFAULT_THERMAL_CONFIGS",
    "COMMON_DPIS",
    "LabelConfig",
    "LabelTemplate",
]
