"""
printer

Генерация команд термопринтера (ZPL / EPL / TSPL) из шаблона этикетки.

Public API:
    - generate, generate_batch, get_emitter, command_file_name
    - to_dots, px_to_dots, font_size_to_dots, align_offset
    - barcode_code, estimate_width
"""

from .assembler import EMITTERS, command_file_name, generate, generate_batch, get_emitter
from .barcode_width import estimate_width
from .symbology import barcode_code
from .units import align_offset, font_size_to_dots, px_to_dots, to_dots

__all__ = [
    "EMITTERS",
    "command_file_name",
    "generate",
    "generate_batch",
    "get_emitter",
    "estimate_width",
    "barcode_code",
    "align_offset",
    "font_size_to_dots",
    "px_to_dots",
    "to_dots",
]
