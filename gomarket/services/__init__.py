"""Shared services: money arithmetic and display formatting."""
from .money import (
    to_decimal,
    round_money,
    to_float,
    add,
    multiply,
    format_money,
    format_value,
)

__all__ = [
    "to_decimal",
    "round_money",
    "to_float",
    "add",
    "multiply",
    "format_money",
    "format_value",
]
