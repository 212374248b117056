import pytest

from thermal_label.model.enums import TextAlign
from thermal_label.printer.units import (
    align_offset,
    font_size_to_dots,
    px_to_dots,
    quarter_turns,
    round_half_away,
    to_dots,
)


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (-2.5, -3), (2.49, 2), (0.0, 0), (-0.4, 0)],
)
def test_round_half_away(value: float, expected: int) -> None:
    assert round_half_away(value) == expected


@pytest.mark.parametrize(
    "mm, dpi, dots",
    [(40, 203, 320), (30, 203, 240), (50, 203, 400), (25.4, 300, 300), (10, 600, 236), (5, 203, 40)],
)
def test_to_dots(mm: float, dpi: int, dots: int) -> None:
    assert to_dots(mm, dpi) == dots


def test_to_dots_monotone() -> None:
    values = [to_dots(v / 10, 203) for v in range(0, 1000)]
    assert values == sorted(values)


@pytest.mark.parametrize("px", [0, 1, 17, 96, 250])
def test_px_to_dots_identity_at_reference(px: int) -> None:
    assert px_to_dots(px, 96) == px


def test_px_to_dots_scales() -> None:
    assert px_to_dots(96, 203) == 203
    assert px_to_dots(10, 203) == 21
    assert px_to_dots(12, 300) == 38
    assert font_size_to_dots(12, 203) == px_to_dots(12, 203) == 25


@pytest.mark.parametrize(
    "box, content, align, expected",
    [
        (100, 40, TextAlign.LEFT, 0),
        (100, 40, TextAlign.CENTER, 30),
        (100, 40, TextAlign.RIGHT, 60),
        (100, 41, "center", 30),
        (40, 100, TextAlign.CENTER, 0),
        (40, 100, TextAlign.RIGHT, 0),
        (100, 40, "justify", 0),
    ],
)
def test_align_offset(box: int, content: int, align: object, expected: int) -> None:
    assert align_offset(box, content, align) == expected  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "rotation, turns",
    [(None, 0), (0, 0), (44, 0), (45, 1), (90, 1), (180, 2), (269, 3), (315, 0), (359, 0)],
)
def test_quarter_turns(rotation: object, turns: int) -> None:
    assert quarter_turns(rotation) == turns  # type: ignore[arg-type]
