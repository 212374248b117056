"""
printer/assembler.py

RU: Сборка задания печати: проверка конфигурации, подстановка переменных,
выбор эмиттера по языку.
EN: Print job assembly. Validates the config before anything is emitted,
substitutes product variables, picks the emitter from a closed mapping and
returns its buffer unmodified. Errors propagate; no partial buffer is
ever returned.
"""

import dataclasses
import logging
from typing import Any, Dict, Final, Iterable, Mapping, Optional, Tuple, Type, Union

from ..model.enums import PrinterLanguage
from ..model.print_config import ThermalPrintConfig
from ..model.template import LabelTemplate
from ..variables.variable_parser import SubstitutionOptions, substitute_elements
from .emitters.base import CommandEmitter
from .emitters.epl import EplEmitter
from .emitters.tspl import TsplEmitter
from .emitters.zpl import ZplEmitter

logger = logging.getLogger(__name__)

__all__ = [
    "EMITTERS",
    "get_emitter",
    "generate",
    "generate_batch",
    "command_file_name",
]

EMITTERS: Final[Dict[PrinterLanguage, Type[CommandEmitter]]] = {
    PrinterLanguage.ZPL: ZplEmitter,
    PrinterLanguage.EPL: EplEmitter,
    PrinterLanguage.TSPL: TsplEmitter,
}


def get_emitter(config: ThermalPrintConfig) -> CommandEmitter:
    """Fresh emitter for the config's language. Raises InvalidConfigError."""
    language = config.validate()
    return EMITTERS[language](config)


def _with_product(
    template: LabelTemplate,
    product: Any,
    options: Optional[SubstitutionOptions],
) -> LabelTemplate:
    if product is None:
        return template
    return dataclasses.replace(
        template, elements=substitute_elements(template.elements, product, options)
    )


def generate(
    template: LabelTemplate,
    config: ThermalPrintConfig,
    product: Any = None,
    options: Optional[SubstitutionOptions] = None,
) -> bytes:
    """
    Command buffer for one template.

    Args:
        template: Label template; never modified.
        config: Target printer profile.
        product: Optional record whose fields replace ${...} tokens.
        options: Substitution options (price prefix, name truncation).

    Raises:
        InvalidConfigError: config rejected before emission.
        UnsupportedElementError: an element cannot be expressed in the language.
    """
    emitter = get_emitter(config)
    buffer = emitter.emit(_with_product(template, product, options))
    logger.info(
        "Generated %s job for template %r: %d bytes, %d cop%s",
        emitter.language.value,
        template.id,
        len(buffer),
        config.copies,
        "y" if config.copies == 1 else "ies",
    )
    return buffer


def _product_label(product: Any) -> str:
    for name in ("nome", "name", "codigoProprio", "codigo", "id"):
        value = product.get(name) if isinstance(product, Mapping) else getattr(product, name, None)
        if value:
            return str(value)
    return "product"


def generate_batch(
    template: LabelTemplate,
    items: Iterable[Tuple[Any, int]],
    config: ThermalPrintConfig,
    options: Optional[SubstitutionOptions] = None,
) -> bytes:
    """
    One buffer for several products: a comment line naming each product,
    then its labels generated with ``copies=quantity``.
    """
    parts = []
    for product, quantity in items:
        item_config = config.with_copies(quantity)
        emitter = get_emitter(item_config)
        parts.append(emitter.comment(f"{_product_label(product)} x{quantity}"))
        parts.append(emitter.emit(_with_product(template, product, options)))
    buffer = b"".join(parts)
    logger.info("Generated batch of %d items: %d bytes", len(parts) // 2, len(buffer))
    return buffer


def command_file_name(language: Union[PrinterLanguage, str], stem: str) -> str:
    """File name for a saved job, e.g. ``labels.zpl`` / ``labels.prn``."""
    return f"{stem}.{PrinterLanguage.parse(language).file_extension}"
