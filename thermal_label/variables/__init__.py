"""
variables

Подстановка данных товара в шаблон этикетки.

Public API:
    - substitute: заменить ${nome}/$preco/... в строке
    - substitute_element / substitute_elements: копии элементов с подстановкой
    - ProductVariableParser: extract/has/validate helpers
    - SubstitutionOptions
"""

from .variable_parser import (
    KNOWN_VARIABLES,
    PRICE_DECIMAL,
    PRICE_INTEGER,
    ProductVariableParser,
    SubstitutionOptions,
    substitute,
    substitute_element,
    substitute_elements,
)

__all__ = [
    "KNOWN_VARIABLES",
    "PRICE_DECIMAL",
    "PRICE_INTEGER",
    "ProductVariableParser",
    "SubstitutionOptions",
    "substitute",
    "substitute_element",
    "substitute_elements",
]
