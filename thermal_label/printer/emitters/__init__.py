"""
printer/emitters

Один эмиттер на язык принтера: ZPL, EPL, TSPL.
"""

from .base import CommandEmitter, ResidentFontEmitter, ordered_elements, pick_bitmap_font
from .epl import EplEmitter
from .tspl import TsplEmitter
from .zpl import ZplEmitter

__all__ = [
    "CommandEmitter",
    "ResidentFontEmitter",
    "ordered_elements",
    "pick_bitmap_font",
    "ZplEmitter",
    "EplEmitter",
    "TsplEmitter",
]
