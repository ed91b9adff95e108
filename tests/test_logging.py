"""Tests for log value sanitizing"""
from gomarket.logging import loggable


def test_product_ids_are_not_truncated():
    """Test ordinary catalog ids are logged whole"""
    product_id = "8f14e45f-ceea-467f-a0e6-1b2c3d4e5f60"

    assert loggable(product_id) == product_id


def test_control_characters_escaped():
    """Test a value cannot forge a second log line"""
    assert loggable("p1\nINFO fake entry\x00") == "p1\\nINFO fake entry"


def test_long_values_cut():
    """Test long titles are shortened"""
    assert loggable("x" * 10, max_length=4) == "xxxx..."


def test_empty_values():
    """Test missing values"""
    assert loggable(None) == "N/A"
    assert loggable("") == "N/A"
