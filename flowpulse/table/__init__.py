"""Delimited table parsing and cell coercion."""

from .coercion import coerce_value, parse_literal, parse_number
from .parser import parse_table

__all__ = ["parse_table", "coerce_value", "parse_literal", "parse_number"]
