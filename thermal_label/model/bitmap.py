"""
model/bitmap.py

RU: Монохромное растровое изображение, уже подготовленное для термопечати.
EN: Pre-rasterized monochrome bitmap accepted by the image emitters.

The engine never dithers or thresholds: an image has to arrive in Pillow's
1-bit mode ("1") or as packed rows. Conversion of photos/logos is the job
of whoever builds the template.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from io import BytesIO
from typing import Final

from PIL import Image

logger = logging.getLogger(__name__)

__all__ = ["MonochromeBitmap"]

_DATA_URI: Final[re.Pattern[str]] = re.compile(
    r"^data:image/[a-zA-Z0-9.+-]+;base64,(?P<payload>.+)$", re.DOTALL
)


@dataclass(frozen=True)
class MonochromeBitmap:
    """
    Packed 1-bit raster.

    Attributes:
        width: Width in dots.
        height: Height in dots (rows).
        data: Row-major bytes, MSB first, bit 1 = black dot. Every row is
              padded to a whole byte; padding bits are 0 (white).
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Bitmap size must be positive, got {self.width}x{self.height}")
        expected = self.bytes_per_row * self.height
        if len(self.data) != expected:
            raise ValueError(
                f"Bitmap data length ({len(self.data)} bytes) must match "
                f"{self.bytes_per_row} bytes/row x {self.height} rows = {expected}"
            )

    @property
    def bytes_per_row(self) -> int:
        return (self.width + 7) // 8

    @property
    def total_bytes(self) -> int:
        return len(self.data)

    def hex(self) -> str:
        """Uppercase ASCII hex, bit 1 = black (ZPL ^GF convention)."""
        return self.data.hex().upper()

    def inverted(self) -> bytes:
        """Packed rows with bit 0 = black (EPL GW / TSPL BITMAP convention)."""
        return bytes(b ^ 0xFF for b in self.data)

    @classmethod
    def from_image(cls, image: Image.Image) -> "MonochromeBitmap":
        """
        Wrap a Pillow image that is already 1-bit.

        Raises:
            ValueError: If the image is not in mode "1".
        """
        if image.mode != "1":
            raise ValueError(
                f"Image must already be monochrome (mode '1'), got mode {image.mode!r}"
            )
        width, height = image.size
        # Pillow packs mode "1" with bit 1 = white; flip to bit 1 = black.
        raw = bytes(b ^ 0xFF for b in image.tobytes())
        bytes_per_row = (width + 7) // 8
        spare = bytes_per_row * 8 - width
        if spare:
            mask = (0xFF << spare) & 0xFF
            rows = bytearray(raw)
            for row_end in range(bytes_per_row - 1, len(rows), bytes_per_row):
                rows[row_end] &= mask
            raw = bytes(rows)
        return cls(width=width, height=height, data=raw)

    @classmethod
    def from_data_uri(cls, uri: str) -> "MonochromeBitmap":
        """
        Decode ``data:image/...;base64,...`` holding a 1-bit image.

        Raises:
            ValueError: Not a base64 image data URI, undecodable payload,
                        or an image that is not already 1-bit.
        """
        match = _DATA_URI.match(uri.strip())
        if not match:
            raise ValueError("Image source is not a base64 image data URI")
        try:
            payload = base64.b64decode(match.group("payload"), validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Invalid base64 payload: {exc}") from exc
        try:
            with Image.open(BytesIO(payload)) as image:
                image.load()
                bitmap = cls.from_image(image)
        except OSError as exc:
            raise ValueError(f"Cannot decode image payload: {exc}") from exc
        logger.debug("Decoded data URI bitmap %dx%d", bitmap.width, bitmap.height)
        return bitmap
