"""
RU: Подстановка переменных товара (${nome}, $preco, ...) в текст этикетки, независимо от языка принтера.
EN: Product variable substitution for label text, independent of the printer language.
"""

import dataclasses
import logging
import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..model.elements import BarcodeElement, LabelElement, QRCodeElement, TextElement

logger = logging.getLogger(__name__)

__all__ = [
    "KNOWN_VARIABLES",
    "PRICE_DECIMAL",
    "PRICE_INTEGER",
    "SubstitutionOptions",
    "ProductVariableParser",
    "substitute",
    "substitute_element",
    "substitute_elements",
]

# ${name} or $name
_VAR_REGEX = re.compile(r"\$\{([^}]+)\}|\$([a-zA-Z]+)")

PRICE_DECIMAL = "decimal"
PRICE_INTEGER = "integer"
_CENTS = Decimal("0.01")

KNOWN_VARIABLES: Tuple[str, ...] = (
    "nome",
    "codigo",
    "sku",
    "codigobarras",
    "preco",
    "descricao",
    "categoria",
    "marca",
    "estoque",
)


@dataclass(frozen=True)
class SubstitutionOptions:
    """
    price_format: "decimal" (19.90) or "integer" (19, cents dropped).
    """

    price_prefix: str = "R$ "
    max_name_length: Optional[int] = None
    price_format: str = PRICE_DECIMAL


def _field(product: Any, *names: str) -> Any:
    """First non-empty value among ``names`` on a mapping or attribute object."""
    for name in names:
        if isinstance(product, Mapping):
            value = product.get(name)
        else:
            value = getattr(product, name, None)
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _format_price(value: Any, options: SubstitutionOptions) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, Decimal) or (isinstance(value, Real) and not isinstance(value, bool)):
        if options.price_format == PRICE_INTEGER:
            return f"{options.price_prefix}{math.floor(value)}"
        if options.price_format != PRICE_DECIMAL:
            logger.warning("Unknown price format %r, using %r", options.price_format, PRICE_DECIMAL)
        if isinstance(value, Decimal):
            return f"{options.price_prefix}{value.quantize(_CENTS, rounding=ROUND_HALF_UP)}"
        return f"{options.price_prefix}{float(value):.2f}"
    return f"{options.price_prefix}{value}"


def _format_category(product: Any) -> str:
    category = _field(product, "categoria", "category")
    if isinstance(category, Mapping):
        return _text(category.get("nome") or category.get("name"))
    if category is not None and not isinstance(category, str):
        return _text(getattr(category, "nome", None) or getattr(category, "name", None))
    return _text(category)


def _format_name(product: Any, options: SubstitutionOptions) -> str:
    name = _text(_field(product, "nome", "name"))
    limit = options.max_name_length
    if limit is not None and len(name) > limit:
        return name[:limit] + "..."
    return name


_RESOLVERS: Dict[str, Callable[[Any, SubstitutionOptions], str]] = {
    "nome": _format_name,
    "codigo": lambda p, o: _text(_field(p, "codigoProprio", "codigo", "code")),
    "sku": lambda p, o: _text(_field(p, "codigoProprio", "sku", "codigo")),
    "codigobarras": lambda p, o: _text(_field(p, "codigoBarras", "barcode")),
    "preco": lambda p, o: _format_price(_field(p, "preco", "price"), o),
    "descricao": lambda p, o: _text(_field(p, "descricao", "description")),
    "categoria": lambda p, o: _format_category(p),
    "marca": lambda p, o: _text(_field(p, "marca", "brand")),
    "estoque": lambda p, o: _text(_field(p, "estoque", "stock", "quantity")),
}


class ProductVariableParser:
    """
    Resolves ``${token}`` / ``$token`` against a product record.

    Known tokens always disappear from the output (a missing field becomes
    an empty string); unknown tokens are kept exactly as written so a typo
    stays visible on the printed label instead of vanishing.
    """

    @staticmethod
    def substitute(
        text: str,
        product: Any,
        options: Optional[SubstitutionOptions] = None,
    ) -> str:
        if product is None or not text:
            return text
        opts = options or SubstitutionOptions()

        def replace(m: "re.Match[str]") -> str:
            name = m.group(1) if m.group(1) is not None else m.group(2)
            resolver = _RESOLVERS.get(name.lower())
            if resolver is None:
                logger.debug("Unknown variable %r left as literal", m.group(0))
                return m.group(0)
            value = resolver(product, opts)
            logger.debug("Substituting %s -> %r", m.group(0), value)
            return value

        return _VAR_REGEX.sub(replace, text)

    @staticmethod
    def extract_variables(text: str) -> List[str]:
        """Token names in order of appearance, as written (case preserved)."""
        return [
            m.group(1) if m.group(1) is not None else m.group(2)
            for m in _VAR_REGEX.finditer(text or "")
        ]

    @staticmethod
    def has_variables(text: str) -> bool:
        return bool(_VAR_REGEX.search(text or ""))

    @staticmethod
    def validate_variables(text: str) -> Tuple[bool, List[str]]:
        unknown = [
            name
            for name in ProductVariableParser.extract_variables(text)
            if name.lower() not in _RESOLVERS
        ]
        return not unknown, unknown


def substitute(
    text: str,
    product: Any,
    options: Optional[SubstitutionOptions] = None,
) -> str:
    return ProductVariableParser.substitute(text, product, options)


def substitute_element(
    element: LabelElement,
    product: Any,
    options: Optional[SubstitutionOptions] = None,
) -> LabelElement:
    """Copy of a text/barcode/QR element with its content substituted."""
    if isinstance(element, TextElement):
        return dataclasses.replace(
            element, content=substitute(element.content, product, options)
        )
    if isinstance(element, (BarcodeElement, QRCodeElement)):
        return dataclasses.replace(
            element, value=substitute(element.value, product, options)
        )
    return element


def substitute_elements(
    elements: Iterable[LabelElement],
    product: Any,
    options: Optional[SubstitutionOptions] = None,
) -> List[LabelElement]:
    return [substitute_element(e, product, options) for e in elements]
