"""
model/elements.py

RU: Элементы шаблона этикетки (tagged union) в пикселях редактора (96 DPI).
EN: Label template elements as a tagged union, in editor reference pixels.

Variants: TextElement, BarcodeElement, QRCodeElement, ImageElement,
RectangleElement, LineElement. Every emitter matches on the concrete class,
so a new variant has to be added to LabelElement and to each emitter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Type, Union

from .bitmap import MonochromeBitmap
from .enums import (
    DEFAULT_ALIGNMENT,
    DEFAULT_BARCODE_FORMAT,
    DEFAULT_ERROR_CORRECTION,
    ErrorCorrectionLevel,
    LineOrientation,
    TextAlign,
)

logger = logging.getLogger(__name__)

__all__ = [
    "BaseElement",
    "TextElement",
    "BarcodeElement",
    "QRCodeElement",
    "ImageElement",
    "RectangleElement",
    "LineElement",
    "LabelElement",
    "element_from_dict",
]


@dataclass(kw_only=True)
class BaseElement:
    """Geometry shared by every element. All lengths in reference pixels."""

    element_type: ClassVar[str] = ""

    id: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rotation: Optional[float] = None
    z_index: Optional[int] = None
    locked: bool = False

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Element {self.id!r}: width and height must be non-negative, "
                f"got {self.width}x{self.height}"
            )
        if self.rotation is not None and not (0 <= self.rotation < 360):
            raise ValueError(
                f"Element {self.id!r}: rotation must be in [0, 360), got {self.rotation}"
            )

    @property
    def stacking_order(self) -> int:
        return self.z_index if self.z_index is not None else 0


@dataclass(kw_only=True)
class TextElement(BaseElement):
    element_type: ClassVar[str] = "text"

    content: str = ""
    font_size: float = 12.0
    font_family: str = "Arial"
    font_weight: str = "normal"
    color: str = "#000000"
    text_align: TextAlign = DEFAULT_ALIGNMENT
    italic: bool = False
    underline: bool = False
    line_height: Optional[float] = None

    @property
    def is_bold(self) -> bool:
        weight = str(self.font_weight).strip().lower()
        if weight == "bold":
            return True
        return weight.isdigit() and int(weight) >= 600

    @property
    def lines(self) -> List[str]:
        return self.content.split("\n")


@dataclass(kw_only=True)
class BarcodeElement(BaseElement):
    element_type: ClassVar[str] = "barcode"

    value: str = ""
    # Kept as authored; unknown names resolve to each language's default.
    format: str = DEFAULT_BARCODE_FORMAT.value
    display_value: bool = True
    font_size: Optional[float] = None
    line_color: Optional[str] = None
    background: Optional[str] = None
    text_align: TextAlign = DEFAULT_ALIGNMENT


@dataclass(kw_only=True)
class QRCodeElement(BaseElement):
    element_type: ClassVar[str] = "qrcode"

    value: str = ""
    bg_color: Optional[str] = None
    fg_color: Optional[str] = None
    error_correction_level: ErrorCorrectionLevel = DEFAULT_ERROR_CORRECTION


@dataclass(kw_only=True)
class ImageElement(BaseElement):
    element_type: ClassVar[str] = "image"

    src: str = ""
    opacity: float = 1.0
    object_fit: str = "contain"
    raster: Optional[MonochromeBitmap] = None


@dataclass(kw_only=True)
class RectangleElement(BaseElement):
    element_type: ClassVar[str] = "rectangle"

    fill_color: Optional[str] = None
    border_color: Optional[str] = None
    border_width: float = 1.0
    border_radius: float = 0.0

    @property
    def is_filled(self) -> bool:
        return bool(self.fill_color) and self.fill_color != "transparent"


@dataclass(kw_only=True)
class LineElement(BaseElement):
    element_type: ClassVar[str] = "line"

    color: str = "#000000"
    thickness: float = 1.0
    orientation: LineOrientation = LineOrientation.HORIZONTAL


LabelElement = Union[
    TextElement,
    BarcodeElement,
    QRCodeElement,
    ImageElement,
    RectangleElement,
    LineElement,
]

_ELEMENT_TYPES: Dict[str, Type[BaseElement]] = {
    cls.element_type: cls
    for cls in (
        TextElement,
        BarcodeElement,
        QRCodeElement,
        ImageElement,
        RectangleElement,
        LineElement,
    )
}

# Editor JSON (camelCase) -> dataclass field
_FIELD_ALIASES: Dict[str, str] = {
    "zIndex": "z_index",
    "fontSize": "font_size",
    "fontFamily": "font_family",
    "fontWeight": "font_weight",
    "textAlign": "text_align",
    "lineHeight": "line_height",
    "displayValue": "display_value",
    "lineColor": "line_color",
    "bgColor": "bg_color",
    "fgColor": "fg_color",
    "errorCorrectionLevel": "error_correction_level",
    "objectFit": "object_fit",
    "fillColor": "fill_color",
    "borderColor": "border_color",
    "borderWidth": "border_width",
    "borderRadius": "border_radius",
}


def element_from_dict(data: Mapping[str, Any]) -> LabelElement:
    """
    Build an element from the editor's JSON shape.

    Unknown keys are ignored (logged at DEBUG). Raises ValueError for an
    unknown ``type``, a negative size or a rotation outside [0, 360).
    """
    kind = data.get("type")
    cls = _ELEMENT_TYPES.get(str(kind))
    if cls is None:
        raise ValueError(f"Unknown element type: {kind!r}")

    known = {f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "type":
            continue
        name = _FIELD_ALIASES.get(key, key)
        if name not in known:
            logger.debug("Ignoring unknown %s field %r", kind, key)
            continue
        kwargs[name] = value

    if "id" not in kwargs:
        raise ValueError(f"Element of type {kind!r} has no id")
    kwargs["id"] = str(kwargs["id"])
    if "text_align" in kwargs:
        kwargs["text_align"] = TextAlign.coerce(kwargs["text_align"])
    if "error_correction_level" in kwargs:
        kwargs["error_correction_level"] = ErrorCorrectionLevel.coerce(
            kwargs["error_correction_level"]
        )
    if "orientation" in kwargs:
        kwargs["orientation"] = LineOrientation(kwargs["orientation"])
    if "font_weight" in kwargs:
        kwargs["font_weight"] = str(kwargs["font_weight"])
    if isinstance(kwargs.get("raster"), Mapping):
        raster = kwargs["raster"]
        kwargs["raster"] = MonochromeBitmap(
            width=int(raster["width"]),
            height=int(raster["height"]),
            data=bytes.fromhex(raster["data"]),
        )
    return cls(**kwargs)  # type: ignore[return-value]
