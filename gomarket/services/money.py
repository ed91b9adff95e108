"""
Money Utilities - Safe Decimal operations for cart prices.

Avoids float precision issues by using Decimal throughout.
Floats only appear at the snapshot boundary (JSON numbers).
"""
import os
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

# Precision for integer currencies
INTEGER_PRECISION = Decimal("1")

# Currency used by format_value when none is given
CART_CURRENCY = os.environ.get("CART_CURRENCY", "BRL")

CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "RUB": "₽",
    "UAH": "₴",
}

# Currencies displayed without minor units
INTEGER_CURRENCIES = {"RUB", "UAH"}

# Symbol goes before the amount for these
PREFIX_CURRENCIES = ("BRL", "USD", "EUR", "GBP")

# (thousands, decimal) separators where they differ from 1,234.56
NUMBER_SEPARATORS = {
    "BRL": (".", ","),
    "EUR": (".", ","),
}

# Symbol and amount separated by a space, as in "R$ 1.234,50"
SPACED_SYMBOLS = {"BRL", "EUR"}

Number = Union[str, int, float, Decimal]


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number, to_int: bool = False) -> Decimal:
    """
    Round monetary value to appropriate precision.

    Args:
        value: Value to round
        to_int: If True, round to integer (for RUB, UAH, etc.)

    Returns:
        Rounded Decimal value
    """
    decimal_value = to_decimal(value)
    precision = INTEGER_PRECISION if to_int else MONEY_PRECISION
    return decimal_value.quantize(precision, rounding=ROUND_HALF_UP)


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at the snapshot boundary, not for internal calculations.
    """
    return float(to_decimal(value))


def add(a: Number, b: Number) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def format_money(value: Number, currency: str = "USD") -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (BRL, USD, RUB, etc.)

    Returns:
        Formatted string with currency symbol
    """
    decimal_value = to_decimal(value)
    symbol = CURRENCY_SYMBOLS.get(currency, currency)

    if currency in INTEGER_CURRENCIES:
        formatted = f"{int(round_money(decimal_value, to_int=True)):,}"
    else:
        formatted = f"{round_money(decimal_value):,.2f}"

    if currency in NUMBER_SEPARATORS:
        thousands, decimal_mark = NUMBER_SEPARATORS[currency]
        formatted = formatted.translate(str.maketrans({",": thousands, ".": decimal_mark}))

    if currency in PREFIX_CURRENCIES:
        spacer = " " if currency in SPACED_SYMBOLS else ""
        return f"{symbol}{spacer}{formatted}"
    return f"{formatted} {symbol}"


def format_value(amount: Number, currency: str = CART_CURRENCY) -> str:
    """Display formatter used by the cart views."""
    return format_money(amount, currency)
