"""
model/print_config.py

RU: Параметры одного задания термопечати (неизменяемые) и их проверка.
EN: Immutable input of a single generation call, plus validation.
"""

from __future__ import annotations

import codecs
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Final, Mapping, Optional, Union

from ..errors import InvalidConfigError
from .enums import (
    DEFAULT_LANGUAGE,
    MAX_PRINT_SPEED,
    MIN_PRINT_SPEED,
    PrinterLanguage,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ThermalPrintConfig",
    "DEFAULT_THERMAL_CONFIGS",
    "COMMON_DPIS",
]

# Suggested speed/darkness per printer resolution.
DEFAULT_THERMAL_CONFIGS: Final[Dict[int, Dict[str, int]]] = {
    203: {"print_speed": 4, "darkness": 15},
    300: {"print_speed": 4, "darkness": 15},
    600: {"print_speed": 3, "darkness": 12},
}

COMMON_DPIS: Final[Dict[int, str]] = {
    203: "203 DPI (8 dots/mm)",
    300: "300 DPI (12 dots/mm)",
    600: "600 DPI (24 dots/mm)",
}

_DICT_ALIASES: Final[Dict[str, str]] = {
    "format": "language",
    "labelWidth": "label_width",
    "labelHeight": "label_height",
    "printSpeed": "print_speed",
    "gapMm": "gap_mm",
}


@dataclass(frozen=True)
class ThermalPrintConfig:
    """
    Target printer profile for one generation call.

    Attributes:
        language: ZPL, EPL or TSPL (a plain string is accepted and checked
                  by validate()).
        dpi: Device resolution in dots per inch.
        label_width: Label width in mm.
        label_height: Label height in mm.
        print_speed: Optional speed 1-10.
        darkness: Optional darkness, scale depends on the language.
        copies: Number of copies, >= 1.
        gap_mm: Gap between labels on the liner, in mm.
        encoding: Code page used to encode field data.
    """

    language: Union[PrinterLanguage, str] = DEFAULT_LANGUAGE
    dpi: int = 203
    label_width: float = 50.0
    label_height: float = 30.0
    print_speed: Optional[int] = None
    darkness: Optional[int] = None
    copies: int = 1
    gap_mm: float = 2.0
    encoding: str = "cp850"

    @property
    def printer_language(self) -> PrinterLanguage:
        """Resolved language. Raises InvalidConfigError when unknown."""
        try:
            return PrinterLanguage.parse(self.language)
        except ValueError as exc:
            raise InvalidConfigError(str(exc), field="language") from exc

    def validate(self) -> PrinterLanguage:
        """
        Check every field; return the resolved language.

        Raises:
            InvalidConfigError: On the first invalid field.
        """
        language = self.printer_language

        if not _is_int(self.dpi) or self.dpi <= 0:
            raise InvalidConfigError(f"DPI must be a positive integer, got {self.dpi!r}", "dpi")
        for name in ("label_width", "label_height"):
            value = getattr(self, name)
            if not _is_number(value) or not math.isfinite(value) or value <= 0:
                raise InvalidConfigError(f"{name} must be a positive number of mm, got {value!r}", name)
        if not _is_int(self.copies) or self.copies < 1:
            raise InvalidConfigError(f"copies must be an integer >= 1, got {self.copies!r}", "copies")
        if self.print_speed is not None and (
            not _is_int(self.print_speed)
            or not (MIN_PRINT_SPEED <= self.print_speed <= MAX_PRINT_SPEED)
        ):
            raise InvalidConfigError(
                f"print_speed must be {MIN_PRINT_SPEED}-{MAX_PRINT_SPEED}, got {self.print_speed!r}",
                "print_speed",
            )
        if self.darkness is not None:
            low, high = language.darkness_range
            if not _is_int(self.darkness) or not (low <= self.darkness <= high):
                raise InvalidConfigError(
                    f"darkness for {language.value} must be {low}-{high}, got {self.darkness!r}",
                    "darkness",
                )
        if not _is_number(self.gap_mm) or not math.isfinite(self.gap_mm) or self.gap_mm < 0:
            raise InvalidConfigError(f"gap_mm must be >= 0, got {self.gap_mm!r}", "gap_mm")
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as exc:
            raise InvalidConfigError(f"Unknown encoding: {self.encoding!r}", "encoding") from exc
        return language

    def with_copies(self, copies: int) -> "ThermalPrintConfig":
        return replace(self, copies=copies)

    def with_dpi_defaults(self) -> "ThermalPrintConfig":
        """Fill missing speed/darkness from DEFAULT_THERMAL_CONFIGS for this DPI."""
        preset = DEFAULT_THERMAL_CONFIGS.get(self.dpi)
        if not preset:
            return self
        return replace(
            self,
            print_speed=self.print_speed if self.print_speed is not None else preset["print_speed"],
            darkness=self.darkness if self.darkness is not None else preset["darkness"],
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ThermalPrintConfig":
        """Accept both snake_case and the editor's camelCase keys (``format`` = language)."""
        known = set(cls.__dataclass_fields__)
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _DICT_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                logger.debug("Ignoring unknown print config key %r", key)
        return cls(**kwargs)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
