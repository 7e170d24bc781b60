"""
decimath - arbitrary-precision decimal numbers.

Provides a fluent fixed-point DecimalNumber type (truncating arithmetic,
half-away-from-zero rounding, comparison at a fixed precision, human
formatting) and integer base conversion for bases 2 to 64.

Usage:
    from decimath import DecimalNumber

    DecimalNumber("546.2255").mul("42").format(2)  # '22 941.47'
"""
from decimath.errors import InvalidNumber
from decimath.number import PRECISION, DecimalNumber
from decimath.utils.number_utils import is_number, normalize_number

__all__ = [
    "DecimalNumber",
    "InvalidNumber",
    "PRECISION",
    "is_number",
    "normalize_number",
    ]
