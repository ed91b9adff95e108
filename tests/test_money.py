"""Tests for money utilities"""
from decimal import Decimal

from gomarket.services.money import (
    add,
    format_money,
    format_value,
    multiply,
    round_money,
    to_decimal,
    to_float,
)


def test_to_decimal_from_float_is_exact():
    """Test floats go through their string form"""
    assert to_decimal(9.99) == Decimal("9.99")


def test_to_decimal_invalid_is_zero():
    """Test garbage and None map to zero"""
    assert to_decimal(None) == Decimal("0")
    assert to_decimal("abc") == Decimal("0")


def test_arithmetic():
    """Test add and multiply"""
    assert add("0.1", 0.2) == Decimal("0.3")
    assert multiply(Decimal("9.99"), 3) == Decimal("29.97")


def test_round_money():
    """Test half-up rounding"""
    assert round_money("2.345") == Decimal("2.35")
    assert round_money("2.5", to_int=True) == Decimal("3")


def test_to_float():
    """Test float conversion for the wire format"""
    assert to_float(Decimal("9.99")) == 9.99


def test_format_money_prefix_currencies():
    """Test symbol before the amount"""
    assert format_money(Decimal("35"), "USD") == "$35.00"
    assert format_money(Decimal("1234.5"), "USD") == "$1,234.50"


def test_format_money_integer_currency():
    """Test integer currencies drop minor units"""
    assert format_money(Decimal("1500.4"), "RUB") == "1,500 ₽"


def test_format_money_unknown_currency():
    """Test unknown codes are used as the symbol"""
    assert format_money(10, "CHF") == "10.00 CHF"


def test_format_value_with_currency():
    """Test the display formatter"""
    assert format_value(Decimal("19.98"), "USD") == "$19.98"


def test_format_money_brazilian_real():
    """Test BRL uses Brazilian separators"""
    assert format_money(Decimal("1234.5"), "BRL") == "R$ 1.234,50"
    assert format_money(Decimal("35"), "BRL") == "R$ 35,00"
