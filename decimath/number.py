"""
Arbitrary-precision decimal number.

DecimalNumber wraps a validated decimal string and exposes fluent, in-place
arithmetic: every mutating method returns the same instance so operations
can be chained.

Key concepts:
- Precision: number of fractional digits kept by add, sub, mul, div, sqrt,
  pow and by comparisons. Extra digits are truncated, not rounded.
- Integer domain: mod, pow_mod, ceil, floor, abs and to_base ignore the
  precision.
- Canonical form: str() always returns the normalized number ('-0.000'
  becomes '0', '+00042.4200' becomes '42.42').

Example:
    >>> DecimalNumber("0.9").add("41.1", "-2").mul(2)
    DecimalNumber('80', precision=9)
    >>> DecimalNumber("255173029255255255.98797").format(3, ",", ".")
    '255.173.029.255.255.255,988'

Note:
    Instances are single-owner mutable values. Use copy() (or build a new
    DecimalNumber from an existing one) before handing a value to code that
    must not see later mutations.
"""
from __future__ import annotations

import re
from contextvars import ContextVar
from typing import Any, Optional, Union

from decimath.config import get_settings
from decimath.errors import InvalidNumber
from decimath.logging_config import get_logger
from decimath.utils import decimal_utils
from decimath.utils.base_convert import get_base_char, get_base_converter
from decimath.utils.number_utils import (
    is_number,
    normalize_number,
    validate_number_string,
    validate_positive_integer,
    )

logger = get_logger(__name__)

# Default precision
PRECISION = 9

# Process default precision, read once by each new instance
_global_precision: ContextVar[int] = ContextVar("decimath_global_precision", default=get_settings().DECIMAL_PRECISION)

# Digit grouping for format(): a position followed by groups of 3 digits
_THOUSANDS_PATTERN = re.compile(r"(?<=\d)(?=(\d{3})+(?!\d))")

NumberLike = Union[str, int, "DecimalNumber"]


class DecimalNumber:
    """
    Signed decimal number with fixed-point arithmetic.

    Attributes:
        precision: Fractional digits kept by truncating operations

    Raises:
        InvalidNumber: If the constructor value is not a decimal number
    """

    def __init__(self, value: NumberLike):
        self.precision = _global_precision.get()
        self._number = self.validate_input_number(value)

    # ========================================================================
    # CONSTRUCTION & CONFIGURATION
    # ========================================================================

    @classmethod
    def number(cls, value: NumberLike) -> DecimalNumber:
        """Factory alias of the constructor, handy at the start of a chain."""
        return cls(value)

    @staticmethod
    def set_global_precision(precision: int) -> None:
        """
        Set the default precision of every DecimalNumber built from now on.

        Existing instances keep the precision they captured at construction.
        Negative values are clamped to 0.

        The default lives in a ContextVar, so the change is scoped to the
        current context: threads started afterwards and asyncio tasks created
        before the call still see the value from Settings.DECIMAL_PRECISION.
        """
        precision = max(0, int(precision))
        _global_precision.set(precision)
        logger.debug("global_precision_set", precision=precision)

    @staticmethod
    def get_global_precision() -> int:
        """Default precision of new instances."""
        return _global_precision.get()

    def set_precision(self, precision: int) -> DecimalNumber:
        """Set this instance's precision (negative values are clamped to 0)."""
        self.precision = max(0, int(precision))
        return self

    def copy(self) -> DecimalNumber:
        """Independent instance with the same digits and precision."""
        return type(self)(self).set_precision(self.precision)

    # ========================================================================
    # INSPECTION
    # ========================================================================

    def get_number(self) -> str:
        """Internal (possibly non-normalized) number string."""
        return self._number

    def is_positive(self) -> bool:
        """True unless the internal number carries a leading '-'."""
        return not self._number.startswith("-")

    def has_decimals(self) -> bool:
        """True if the internal number has a fractional part (even '.000')."""
        return "." in self._number

    def normalize(self) -> DecimalNumber:
        """Replace the internal number with its canonical form."""
        self._number = normalize_number(self._number)
        return self

    def __str__(self) -> str:
        return normalize_number(self._number)

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}', precision={self.precision})"

    # ========================================================================
    # ARITHMETIC
    # ========================================================================

    def add(self, *values: NumberLike) -> DecimalNumber:
        """Add every value in turn, truncating to precision."""
        result = self._number
        for number in self._validate_all(values):
            result = decimal_utils.add(result, number, self.precision)
        self._number = result
        return self

    def sub(self, *values: NumberLike) -> DecimalNumber:
        """Subtract every value in turn, truncating to precision."""
        result = self._number
        for number in self._validate_all(values):
            result = decimal_utils.sub(result, number, self.precision)
        self._number = result
        return self

    def mul(self, *values: NumberLike) -> DecimalNumber:
        """Multiply by every value in turn, truncating to precision."""
        result = self._number
        for number in self._validate_all(values):
            result = decimal_utils.mul(result, number, self.precision)
        self._number = result
        return self

    def div(self, *values: NumberLike) -> DecimalNumber:
        """
        Divide by every value in turn, truncating to precision.

        Raises:
            InvalidNumber: If a value is not a number or is zero
        """
        result = self._number
        for number in self._validate_all(values):
            result = decimal_utils.div(result, number, self.precision)
        self._number = result
        return self

    def sqrt(self) -> DecimalNumber:
        """
        Square root, truncated to precision.

        Raises:
            InvalidNumber: If the number is negative
        """
        self._number = decimal_utils.sqrt(self._number, self.precision)
        return self

    def pow(self, exponent: Any) -> DecimalNumber:
        """
        Raise to a positive integer power, truncating to precision.

        Raises:
            InvalidNumber: If exponent is not a positive integer
        """
        exponent = validate_positive_integer(exponent)
        self._number = decimal_utils.power(self._number, exponent, self.precision)
        return self

    def mod(self, modulus: Any) -> DecimalNumber:
        """
        Integer remainder of the integer part (sign follows the dividend).

        Raises:
            InvalidNumber: If modulus is not a positive integer
        """
        modulus = validate_positive_integer(modulus)
        self._number = decimal_utils.modulo(self._number, modulus)
        return self

    def pow_mod(self, exponent: Any, modulus: Any) -> DecimalNumber:
        """
        Modular exponentiation, same result as pow(exponent).mod(modulus).

        Raises:
            InvalidNumber: If exponent or modulus is not a positive integer,
                or if the number is not integer valued
        """
        exponent = validate_positive_integer(exponent)
        modulus = validate_positive_integer(modulus)
        self._number = decimal_utils.power_modulo(self._number, exponent, modulus)
        return self

    # ========================================================================
    # ROUNDING & FORMATTING
    # ========================================================================

    def round(self, precision: int = 0) -> DecimalNumber:
        """
        Round half away from zero to `precision` fractional digits.

        Example:
            >>> str(DecimalNumber("54.55").round(1))
            '54.6'
            >>> str(DecimalNumber("-3.6").round())
            '-4'
        """
        precision = max(0, int(precision))
        if self.has_decimals():
            half = "0." + "0" * precision + "5"
            if self.is_positive():
                self._number = decimal_utils.add(self._number, half, precision)
            else:
                self._number = decimal_utils.sub(self._number, half, precision)

        return self

    def ceil(self) -> DecimalNumber:
        """
        Round positive numbers up to the next integer, truncate negative ones.

        Example:
            >>> str(DecimalNumber("1.000001").ceil())
            '2'
            >>> str(DecimalNumber("-6.99").ceil())
            '-6'
        """
        if self.has_decimals():
            if self.is_positive() and not decimal_utils.is_integral(self._number):
                self._number = decimal_utils.add(self._number, "1", 0)
            else:
                self._number = decimal_utils.truncate(self._number, 0)

        return self

    def floor(self) -> DecimalNumber:
        """
        Truncate positive numbers, round negative ones down to the next integer.

        Example:
            >>> str(DecimalNumber("-6.99").floor())
            '-7'
        """
        if self.has_decimals():
            if not self.is_positive() and not decimal_utils.is_integral(self._number):
                self._number = decimal_utils.sub(self._number, "1", 0)
            else:
                self._number = decimal_utils.truncate(self._number, 0)

        return self

    def abs(self) -> DecimalNumber:
        """Drop the sign."""
        self._number = self._number.lstrip("-")
        return self

    def format(self, decimals: int = 0, decimal_point: str = ".", thousands_separator: str = " ") -> str:
        """
        Human readable representation. Does not mutate the instance.

        Args:
            decimals: Number of fractional digits (rounded half away from zero,
                right-padded with zeros)
            decimal_point: Separator between integer and fractional part
            thousands_separator: Separator inserted every 3 integer digits

        Returns:
            Formatted string

        Examples:
            >>> DecimalNumber("255173029255255255.98797").format(5)
            '255 173 029 255 255 255.98797'
            >>> DecimalNumber("-0").format(2)
            '0.00'
        """
        decimals = max(0, int(decimals))
        number = type(self)(self).round(decimals).normalize()
        sign = "" if number.is_positive() else "-"
        _, integer, fraction = decimal_utils.split_number(number.get_number())

        result = sign + _THOUSANDS_PATTERN.sub(thousands_separator, integer)
        if decimals:
            result += decimal_point + fraction.ljust(decimals, "0")[:decimals]

        return result

    # ========================================================================
    # COMPARISON
    # ========================================================================

    def compare(self, value: NumberLike) -> int:
        """
        Three-way comparison at this instance's precision.

        Returns:
            -1 if self < value, 0 if equal, 1 if self > value
        """
        return decimal_utils.compare(self._number, self.validate_input_number(value), self.precision)

    def gte(self, value: NumberLike) -> bool:
        return self.compare(value) >= 0

    def gt(self, value: NumberLike) -> bool:
        return self.compare(value) == 1

    def lte(self, value: NumberLike) -> bool:
        return self.compare(value) <= 0

    def lt(self, value: NumberLike) -> bool:
        return self.compare(value) == -1

    def eq(self, value: NumberLike) -> bool:
        return self.compare(value) == 0

    def max(self, *values: NumberLike) -> DecimalNumber:
        """Keep the highest number among self and all values."""
        for number in self._validate_all(values):
            if decimal_utils.compare(number, self._number, self.precision) == 1:
                self._number = number

        return self

    def min(self, *values: NumberLike) -> DecimalNumber:
        """Keep the smallest number among self and all values."""
        for number in self._validate_all(values):
            if decimal_utils.compare(number, self._number, self.precision) == -1:
                self._number = number

        return self

    # ========================================================================
    # BASE CONVERSION
    # ========================================================================

    def to_base(self, base: int) -> str:
        """
        Convert the integer value to any base from 2 to 64.

        The sign is dropped: only the magnitude is converted.

        Args:
            base: Target base

        Returns:
            Digits in the base alphabet

        Raises:
            InvalidNumber: If base is invalid or the number has decimals

        Example:
            >>> DecimalNumber("255").to_base(16)
            'ff'
        """
        base_char = get_base_char(base)
        if self.normalize().has_decimals():
            raise InvalidNumber("Argument number is not an integer", self._number)

        number = str(self).lstrip("-")
        return get_base_converter().to_base(number, len(base_char))

    @classmethod
    def from_base(cls, number: str, base: int) -> DecimalNumber:
        """
        Build a DecimalNumber from digits in any base from 2 to 64.

        Bases up to 36 are case insensitive. Conventional decorations are
        tolerated: '0x' (16), '0b' (2), a leading '0' (8), '=' padding (64).

        Raises:
            InvalidNumber: If base is invalid, number is empty, has a dot, or
                holds a character outside the base alphabet

        Example:
            >>> str(DecimalNumber.from_base("0xFF", 16))
            '255'
        """
        base_char = get_base_char(base)
        base = len(base_char)
        number = str(number).strip()
        # base36 or less is case insensitive
        if base < 37:
            number = number.lower()

        # clean up particular input formats
        if base == 16 and number.startswith("0x"):
            number = number[2:]
        elif base == 8 and number.startswith("0") and len(number) > 1:
            number = number[1:]
        elif base == 2 and number.startswith("0b"):
            number = number[2:]
        elif base == 64:
            number = number.rstrip("=")

        # only positive integers
        number = number.lstrip("-")
        if number == "" or "." in number:
            raise InvalidNumber("Argument number is not an integer", number)

        invalid = [char for char in number if char not in base_char]
        if invalid:
            raise InvalidNumber(f"Argument number is invalid for base {base}: {invalid[0]!r}", number)

        if number.strip(base_char[0]) == "":
            return cls("0")

        return cls(get_base_converter().from_base(number, base))

    # ========================================================================
    # VALIDATION
    # ========================================================================

    @staticmethod
    def is_number(value: Any) -> bool:
        """See decimath.utils.number_utils.is_number."""
        return is_number(value)

    @staticmethod
    def normalize_number(value: Any, default: Optional[str] = None) -> Optional[str]:
        """See decimath.utils.number_utils.normalize_number."""
        return normalize_number(value, default)

    @classmethod
    def validate_input_number(cls, value: NumberLike) -> str:
        """
        Validate an operand.

        DecimalNumber instances are trusted and their internal digits reused;
        anything else is trimmed and checked against the number grammar.

        Raises:
            InvalidNumber: If value is not a decimal number
        """
        if isinstance(value, DecimalNumber):
            return value.get_number()

        return validate_number_string(value)

    @classmethod
    def _validate_all(cls, values) -> list:
        """Validate every operand before anything gets applied."""
        if not values:
            raise InvalidNumber("At least one operand is required")
        return [cls.validate_input_number(value) for value in values]
