"""Тесты эмиттера EPL."""

from typing import List

import pytest

from thermal_label.errors import UnsupportedElementError
from thermal_label.model.bitmap import MonochromeBitmap
from thermal_label.model.elements import (
    BarcodeElement,
    ImageElement,
    LabelElement,
    LineElement,
    QRCodeElement,
    RectangleElement,
    TextElement,
)
from thermal_label.model.enums import TextAlign
from thermal_label.model.print_config import ThermalPrintConfig
from thermal_label.model.template import LabelTemplate
from thermal_label.printer.emitters.epl import EplEmitter
from thermal_label.printer.units import to_dots

HEADER = b"\nN\nq400\nQ240,16\n"


@pytest.fixture
def config() -> ThermalPrintConfig:
    return ThermalPrintConfig(language="EPL", dpi=203, label_width=50, label_height=30)


def emit(config: ThermalPrintConfig, *elements: LabelElement) -> bytes:
    return EplEmitter(config).emit(LabelTemplate(id="t", elements=list(elements)))


def header(config: ThermalPrintConfig) -> bytes:
    """Header of a config without speed or darkness."""
    width = to_dots(config.label_width, config.dpi)
    height = to_dots(config.label_height, config.dpi)
    gap = to_dots(config.gap_mm, config.dpi)
    return f"\nN\nq{width}\nQ{height},{gap}\n".encode("ascii")


def body(config: ThermalPrintConfig, *elements: LabelElement) -> List[bytes]:
    buffer = emit(config, *elements)
    expected = header(config)
    assert buffer.startswith(expected)
    assert buffer.endswith(b"P1\n")
    return buffer[len(expected) : -len(b"P1\n")].split(b"\n")[:-1]


def test_empty_label(config: ThermalPrintConfig) -> None:
    assert emit(config) == HEADER + b"P1\n"


def test_speed_and_darkness() -> None:
    config = ThermalPrintConfig(language="EPL", print_speed=3, darkness=10)
    assert emit(config) == HEADER + b"S3\nD10\nP1\n"


def test_gap_in_dots() -> None:
    config = ThermalPrintConfig(language="EPL", gap_mm=3)
    assert b"\nQ240,24\n" in emit(config)


def test_copies_repeat_whole_block() -> None:
    config = ThermalPrintConfig(language="EPL", copies=3)
    text = TextElement(id="t", content="X")
    one = EplEmitter(config.with_copies(1)).emit(LabelTemplate(id="t", elements=[text]))
    three = EplEmitter(config).emit(LabelTemplate(id="t", elements=[text]))
    assert three == one * 3
    assert three.count(b"P1\n") == 3
    assert b"P3" not in three


def test_comment(config: ThermalPrintConfig) -> None:
    assert EplEmitter(config).comment("Arroz x2") == b"; Arroz x2\n"


class TestText:
    def test_font_and_multiplier(self, config: ThermalPrintConfig) -> None:
        text = TextElement(id="t", x=10, y=20, content="Hello", font_size=12)
        assert body(config, text) == [b'A21,42,0,1,2,2,N,"Hello"']

    def test_300_dpi_table(self) -> None:
        config = ThermalPrintConfig(language="EPL", dpi=300)
        assert emit(config).startswith(b"\nN\nq591\nQ354,24\n")
        text = TextElement(id="t", content="Hi", font_size=12)
        (line,) = body(config, text)
        assert line == b'A0,0,0,1,2,2,N,"Hi"'

    def test_center_alignment_moves_origin(self, config: ThermalPrintConfig) -> None:
        text = TextElement(id="t", width=96, content="Hello", text_align=TextAlign.CENTER)
        assert body(config, text) == [b'A62,0,0,1,2,2,N,"Hello"']

    def test_right_alignment(self, config: ThermalPrintConfig) -> None:
        text = TextElement(id="t", width=96, content="Hello", text_align=TextAlign.RIGHT)
        assert body(config, text) == [b'A123,0,0,1,2,2,N,"Hello"']

    def test_multiline(self, config: ThermalPrintConfig) -> None:
        text = TextElement(id="t", content="A\n\nB")
        assert body(config, text) == [b'A0,0,0,1,2,2,N,"A"', b'A0,48,0,1,2,2,N,"B"']

    def test_bold_and_underline(self, config: ThermalPrintConfig) -> None:
        text = TextElement(id="t", content="Hi", font_weight="700", underline=True)
        assert body(config, text) == [
            b'A0,0,0,1,2,2,N,"Hi"',
            b'A1,0,0,1,2,2,N,"Hi"',
            b"LO0,24,32,2",
        ]

    def test_rotated_lines_step_along_x(self, config: ThermalPrintConfig) -> None:
        text = TextElement(id="t", x=96, content="A\nB", rotation=90, underline=True)
        assert body(config, text) == [b'A203,0,1,1,2,2,N,"A"', b'A179,0,1,1,2,2,N,"B"']

    def test_escaping(self, config: ThermalPrintConfig) -> None:
        (line,) = body(config, TextElement(id="t", content='Say "hi" \\o/'))
        assert line == b'A0,0,0,1,2,2,N,"Say \\"hi\\" \\\\o/"'


class TestBarcode:
    def test_ean13(self, config: ThermalPrintConfig) -> None:
        barcode = BarcodeElement(id="b", height=48, value="7891234567895", format="EAN13")
        assert body(config, barcode) == [b'B0,0,0,E30,2,4,77,B,"7891234567895"']

    def test_no_text_and_unknown_format(self, config: ThermalPrintConfig) -> None:
        barcode = BarcodeElement(id="b", height=48, value="ABC", format="??", display_value=False)
        assert body(config, barcode) == [b'B0,0,0,1,2,4,102,N,"ABC"']

    def test_right_aligned(self, config: ThermalPrintConfig) -> None:
        barcode = BarcodeElement(
            id="b", width=200, height=48, value="7891234567895", format="EAN13", text_align=TextAlign.RIGHT
        )
        (line,) = body(config, barcode)
        assert line.startswith(b"B233,0,")


class TestGraphics:
    def test_qr_is_rasterized(self, config: ThermalPrintConfig) -> None:
        qr = QRCodeElement(id="q", width=100, height=100, value="HELLO")
        buffer = emit(config, qr)
        prefix = b"GW0,0,27,210,"
        start = buffer.index(prefix) + len(prefix)
        end = start + 27 * 210
        assert buffer[end : end + 1] == b"\n"
        assert buffer[end + 1 :] == b"P1\n"
        # Top-left module is dark: 0 bits print in EPL graphics.
        assert buffer[start] & 0x80 == 0

    def test_image(self, config: ThermalPrintConfig) -> None:
        raster = MonochromeBitmap(width=8, height=2, data=b"\xf0\x0a")
        buffer = emit(config, ImageElement(id="i", raster=raster))
        assert buffer == HEADER + b"GW0,0,1,2,\x0f\xf5\nP1\n"

    def test_image_without_raster(self, config: ThermalPrintConfig) -> None:
        with pytest.raises(UnsupportedElementError) as exc_info:
            emit(config, ImageElement(id="i", src="logo.png"))
        assert exc_info.value.language == "EPL"

    def test_rectangle_outline(self, config: ThermalPrintConfig) -> None:
        rect = RectangleElement(id="r", width=96, height=48)
        assert body(config, rect) == [
            b"LO0,0,203,2",
            b"LO0,100,203,2",
            b"LO0,0,2,102",
            b"LO201,0,2,102",
        ]

    def test_rectangle_filled(self, config: ThermalPrintConfig) -> None:
        rect = RectangleElement(id="r", width=96, height=48, fill_color="black")
        assert body(config, rect) == [b"LO0,0,203,102"]

    def test_line(self, config: ThermalPrintConfig) -> None:
        assert body(config, LineElement(id="l", width=96, thickness=2)) == [b"LO0,0,203,4"]
