"""
model/template.py — конфигурация и шаблон этикетки.

EN: LabelConfig (physical size, unit, page-layout metadata carried through)
and LabelTemplate (config + ordered elements, exclusively owned).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .elements import LabelElement, element_from_dict
from .enums import LabelUnit

logger = logging.getLogger(__name__)

__all__ = ["LabelConfig", "LabelTemplate"]

_CONFIG_ALIASES: Dict[str, str] = {
    "backgroundColor": "background_color",
    "showGrid": "show_grid",
    "gridSize": "grid_size",
    "snapToGrid": "snap_to_grid",
    "marginTop": "margin_top",
    "marginBottom": "margin_bottom",
    "marginLeft": "margin_left",
    "marginRight": "margin_right",
    "spacingHorizontal": "spacing_horizontal",
    "spacingVertical": "spacing_vertical",
}


@dataclass
class LabelConfig:
    name: str = ""
    width: float = 50.0
    height: float = 30.0
    unit: LabelUnit = LabelUnit.MM
    background_color: str = "#FFFFFF"
    padding: float = 0.0
    description: Optional[str] = None
    show_grid: bool = False
    grid_size: Optional[float] = None
    snap_to_grid: bool = False
    columns: Optional[int] = None
    rows: Optional[int] = None
    margin_top: Optional[float] = None
    margin_bottom: Optional[float] = None
    margin_left: Optional[float] = None
    margin_right: Optional[float] = None
    spacing_horizontal: Optional[float] = None
    spacing_vertical: Optional[float] = None
    # Anything else the editor stores (showPrice, currencySymbol, ...)
    extra: Dict[str, Any] = field(default_factory=dict)

    def size_mm(self) -> Tuple[float, float]:
        """Declared label size converted to millimetres."""
        factor = LabelUnit(self.unit).mm_factor
        return self.width * factor, self.height * factor

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LabelConfig":
        known = set(cls.__dataclass_fields__) - {"extra"}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            name = _CONFIG_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                extra[key] = value
        if "unit" in kwargs:
            kwargs["unit"] = LabelUnit(kwargs["unit"])
        return cls(extra=extra, **kwargs)


@dataclass
class LabelTemplate:
    id: str
    config: LabelConfig = field(default_factory=LabelConfig)
    elements: List[LabelElement] = field(default_factory=list)
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LabelTemplate":
        """Parse the editor's saved-template JSON."""
        elements = [element_from_dict(item) for item in data.get("elements", [])]
        template = cls(
            id=str(data.get("id", "")),
            config=LabelConfig.from_dict(data.get("config", {})),
            elements=elements,
            category=data.get("category"),
            tags=list(data.get("tags") or []),
        )
        logger.debug("Loaded template %r with %d elements", template.id, len(elements))
        return template
