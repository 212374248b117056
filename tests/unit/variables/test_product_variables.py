"""Тесты подстановки переменных товара."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional
from unittest import mock

import pytest

from thermal_label.model.elements import (
    BarcodeElement,
    LineElement,
    QRCodeElement,
    TextElement,
)
from thermal_label.variables import (
    KNOWN_VARIABLES,
    PRICE_INTEGER,
    ProductVariableParser,
    SubstitutionOptions,
    substitute,
    substitute_element,
    substitute_elements,
)
from thermal_label.variables import variable_parser


@dataclass
class Produto:
    nome: str
    preco: Any = None
    codigoBarras: Optional[str] = None
    marca: Optional[str] = None


def test_price_two_decimals() -> None:
    assert substitute("Preço: ${preco}", {"preco": 19.9}) == "Preço: R$ 19.90"


@pytest.mark.parametrize(
    "value, expected",
    [(0, "R$ 0.00"), (5, "R$ 5.00"), (1234.567, "R$ 1234.57"), ("sob consulta", "R$ sob consulta")],
)
def test_price_formats(value: Any, expected: str) -> None:
    assert substitute("$preco", {"preco": value}) == expected


def test_price_bool_is_not_numeric() -> None:
    assert substitute("$preco", {"preco": True}) == "R$ True"


@pytest.mark.parametrize(
    "value, expected",
    [(Decimal("19.9"), "R$ 19.90"), (Decimal("2.345"), "R$ 2.35"), (Decimal("7"), "R$ 7.00")],
)
def test_decimal_price_two_decimals(value: Decimal, expected: str) -> None:
    assert substitute("${preco}", {"preco": value}) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(19.9, "R$ 19"), (5, "R$ 5"), (Decimal("3.99"), "R$ 3"), ("sob consulta", "R$ sob consulta")],
)
def test_integer_price_format(value: Any, expected: str) -> None:
    options = SubstitutionOptions(price_format=PRICE_INTEGER)
    assert substitute("$preco", {"preco": value}, options) == expected


def test_unknown_price_format_falls_back_to_decimal() -> None:
    options = SubstitutionOptions(price_format="roman")
    with mock.patch.object(variable_parser.logger, "warning") as warning:
        assert substitute("$preco", {"preco": 4}, options) == "R$ 4.00"
    warning.assert_called_once()


def test_both_syntaxes_and_case_insensitive() -> None:
    product = {"nome": "Café", "marca": "Pilão"}
    assert substitute("$NOME / ${Marca}", product) == "Café / Pilão"


def test_missing_field_becomes_empty() -> None:
    assert substitute("[${descricao}]", {"nome": "x"}) == "[]"
    assert substitute("[$estoque]", {"estoque": None}) == "[]"


def test_unknown_token_left_literal() -> None:
    text = "${desconto} e $foo e ${nome}"
    assert substitute(text, {"nome": "A"}) == "${desconto} e $foo e A"


def test_no_product_or_empty_text() -> None:
    assert substitute("${nome}", None) == "${nome}"
    assert substitute("", {"nome": "x"}) == ""


def test_single_pass() -> None:
    assert substitute("${nome}", {"nome": "${preco}", "preco": 1}) == "${preco}"


def test_dollar_followed_by_digit_untouched() -> None:
    assert substitute("$5 off", {"nome": "x"}) == "$5 off"


@pytest.mark.parametrize(
    "token, product, expected",
    [
        ("nome", {"name": "Rice"}, "Rice"),
        ("codigo", {"codigoProprio": "P1", "codigo": "C1"}, "P1"),
        ("codigo", {"code": "X9"}, "X9"),
        ("sku", {"sku": "S1", "codigo": "C1"}, "S1"),
        ("sku", {"codigo": "C1"}, "C1"),
        ("codigobarras", {"barcode": "789"}, "789"),
        ("descricao", {"description": "d"}, "d"),
        ("categoria", {"categoria": {"nome": "Bebidas"}}, "Bebidas"),
        ("categoria", {"category": {"name": "Drinks"}}, "Drinks"),
        ("categoria", {"categoria": "Mercearia"}, "Mercearia"),
        ("marca", {"brand": "B"}, "B"),
        ("estoque", {"quantity": 12}, "12"),
        ("estoque", {"estoque": 0}, "0"),
    ],
)
def test_field_fallbacks(token: str, product: Any, expected: str) -> None:
    assert substitute("${" + token + "}", product) == expected


def test_attribute_product() -> None:
    item = Produto(nome="Feijão", preco=7.5, codigoBarras="7891234567895")
    assert substitute("$nome $preco $codigoBarras $marca", item) == "Feijão R$ 7.50 7891234567895 "


def test_product_not_mutated() -> None:
    product = {"nome": "Arroz", "preco": 10}
    substitute("${nome} ${preco}", product)
    assert product == {"nome": "Arroz", "preco": 10}


def test_options() -> None:
    options = SubstitutionOptions(price_prefix="€", max_name_length=5)
    assert substitute("$nome $preco", {"nome": "Chocolate", "preco": 2}, options) == "Choco... €2.00"
    assert substitute("$nome", {"nome": "Sal"}, options) == "Sal"


def test_extract_has_validate() -> None:
    text = "${nome} - $Preco - ${oferta}"
    assert ProductVariableParser.extract_variables(text) == ["nome", "Preco", "oferta"]
    assert ProductVariableParser.has_variables(text)
    assert not ProductVariableParser.has_variables("sem variáveis")
    assert ProductVariableParser.validate_variables(text) == (False, ["oferta"])
    assert ProductVariableParser.validate_variables("$nome") == (True, [])


def test_known_variables() -> None:
    assert "preco" in KNOWN_VARIABLES
    assert len(KNOWN_VARIABLES) == 9


def test_substitute_element_copies() -> None:
    product = {"nome": "Leite", "codigoBarras": "123"}
    text = TextElement(id="t", content="${nome}")
    barcode = BarcodeElement(id="b", value="${codigoBarras}")
    qr = QRCodeElement(id="q", value="https://x/$codigoBarras")
    line = LineElement(id="l")

    out = substitute_elements([text, barcode, qr, line], product)
    assert out[0].content == "Leite"  # type: ignore[union-attr]
    assert out[1].value == "123"  # type: ignore[union-attr]
    assert out[2].value == "https://x/123"  # type: ignore[union-attr]
    assert out[3] is line
    assert text.content == "${nome}"
    assert substitute_element(text, None) == text
