"""
errors.py — типизированные ошибки генерации команд термопринтера.

EN: Typed error taxonomy of the command engine. Everything raised by
validation or by an emitter derives from ThermalPrintError, so a caller
printing a batch can catch one type and decide to skip, substitute or abort.
"""

from typing import Optional

__all__ = [
    "ThermalPrintError",
    "InvalidConfigError",
    "UnsupportedElementError",
]


class ThermalPrintError(Exception):
    """Base error of the thermal command engine."""


class InvalidConfigError(ThermalPrintError):
    """Print configuration rejected before any emission began."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UnsupportedElementError(ThermalPrintError):
    """
    An element (or one of its options) cannot be serialized for a language.

    Carries the element id, element type and target language so the caller
    can drop or convert the element and retry.
    """

    def __init__(
        self,
        message: str,
        element_id: Optional[str] = None,
        element_type: Optional[str] = None,
        language: Optional[str] = None,
    ):
        super().__init__(message)
        self.element_id = element_id
        self.element_type = element_type
        self.language = language

    def __str__(self) -> str:
        base = super().__str__()
        context = ", ".join(
            f"{k}={v}"
            for k, v in (
                ("element", self.element_id),
                ("type", self.element_type),
                ("language", self.language),
            )
            if v is not None
        )
        return f"{base} ({context})" if context else base
