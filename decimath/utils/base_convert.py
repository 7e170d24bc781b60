"""
Integer base conversion (bases 2 to 64).

Two interchangeable converters implement the same contract:
- PositionalBaseConverter: reference algorithm (repeated divide/remainder
  and positional weighted sum) built on the fixed-point primitives.
- GmpBaseConverter: delegates to gmpy2 for bases up to 62 and hands larger
  bases over to the positional converter.

The active converter is selected once, from settings, the first time
get_base_converter() is called. Both work on non-negative integer decimal
strings and return values only: input cleanup and validation belong to the
caller (see DecimalNumber.from_base / DecimalNumber.to_base).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional

import gmpy2

from decimath.config import get_settings
from decimath.errors import InvalidNumber
from decimath.logging_config import get_logger
from decimath.utils import decimal_utils

logger = get_logger(__name__)

# base <= 64 char list
BASECHAR_64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

# base <= 62 char list
BASECHAR_62 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# base <= 36 char list
BASECHAR_36 = "0123456789abcdefghijklmnopqrstuvwxyz"

MIN_BASE = 2
MAX_BASE = 64
GMP_MAX_BASE = 62

# gmpy2 may prefix these bases when rendering digits
_GMP_PREFIXES = {2: "0b", 8: "0o", 16: "0x"}


@lru_cache(maxsize=None)
def get_base_char(base: int, max_base: int = MAX_BASE) -> str:
    """
    Get the digit alphabet for a base.

    Args:
        base: Target base (2 to 64)
        max_base: Upper bound accepted by the caller (never above 64)

    Returns:
        The alphabet truncated to `base` characters

    Raises:
        InvalidNumber: If base is outside 2..min(max_base, 64)

    Examples:
        >>> get_base_char(16)
        '0123456789abcdef'
        >>> get_base_char(64)[:4]
        'ABCD'
    """
    try:
        base = int(base)
    except (TypeError, ValueError):
        raise InvalidNumber("Argument base is not valid, base 2 to 64 are supported", base)

    if base < MIN_BASE or base > max_base or base > MAX_BASE:
        raise InvalidNumber("Argument base is not valid, base 2 to 64 are supported", base)

    if base > 62:
        return BASECHAR_64[:base]
    if base > 36:
        return BASECHAR_62[:base]
    return BASECHAR_36[:base]


def base_convert(number: str, from_base: int = 10, to_base: int = 62) -> str:
    """
    Convert an integer between two bases (2 to 62) with gmpy2.

    Args:
        number: Digits of the integer in `from_base`
        from_base: Source base
        to_base: Target base

    Returns:
        Digits of the integer in `to_base` (GMP alphabet: lower case up to
        base 36, 0-9A-Za-z above)

    Raises:
        InvalidNumber: If a base is out of range or number has invalid digits

    Example:
        >>> base_convert("255", 10, 16)
        'ff'
    """
    get_base_char(from_base, GMP_MAX_BASE)
    get_base_char(to_base, GMP_MAX_BASE)
    try:
        value = gmpy2.mpz(number, int(from_base))
    except ValueError:
        raise InvalidNumber("Argument number is invalid", number)
    return _gmp_digits(value, int(to_base))


def _gmp_digits(value, base: int) -> str:
    """Render an mpz in base without any gmpy2 prefix."""
    negative = value < 0
    digits = gmpy2.mpz(abs(value)).digits(base)
    prefix = _GMP_PREFIXES.get(base)
    if prefix and digits.startswith(prefix):
        digits = digits[len(prefix):]
    return "-" + digits if negative else digits


# ============================================================================
# CONVERTERS
# ============================================================================

class BaseConverter(ABC):
    """Converts non-negative integers between base 10 and bases 2 to 64."""

    name: str = "abstract"

    @abstractmethod
    def to_base(self, number: str, base: int) -> str:
        """
        Convert a non-negative integer decimal string to `base`.

        Args:
            number: Canonical non-negative integer (e.g. "255")
            base: Target base (validated by the caller)

        Returns:
            Digits in the base alphabet, "0"-character for zero
        """

    @abstractmethod
    def from_base(self, digits: str, base: int) -> str:
        """
        Convert validated digits in `base` to a decimal integer string.

        Args:
            digits: Non-empty string of characters from get_base_char(base)
            base: Source base (validated by the caller)

        Returns:
            Decimal integer string
        """


class PositionalBaseConverter(BaseConverter):
    """Reference converter: digit-by-digit arithmetic on decimal strings."""

    name = "positional"

    def to_base(self, number: str, base: int) -> str:
        base_char = get_base_char(base)
        divisor = str(base)
        result = ""
        while decimal_utils.compare(number, "0", 0) != 0:  # still data to process
            remainder = decimal_utils.modulo(number, base)
            number = decimal_utils.div(decimal_utils.sub(number, remainder, 0), divisor, 0)
            result = base_char[int(remainder)] + result

        return result or base_char[0]

    def from_base(self, digits: str, base: int) -> str:
        base_char = get_base_char(base)
        multiplier = str(base)
        result = "0"
        # most significant digit first: result = result * base + digit
        for char in digits:
            ordinal = base_char.index(char)
            result = decimal_utils.add(decimal_utils.mul(result, multiplier, 0), str(ordinal), 0)

        return result


class GmpBaseConverter(BaseConverter):
    """gmpy2-backed converter for bases up to 62."""

    name = "gmp"

    def __init__(self, fallback: Optional[BaseConverter] = None):
        self.fallback = fallback or PositionalBaseConverter()

    def to_base(self, number: str, base: int) -> str:
        if base > GMP_MAX_BASE:
            return self.fallback.to_base(number, base)
        return _gmp_digits(gmpy2.mpz(number), base)

    def from_base(self, digits: str, base: int) -> str:
        if base > GMP_MAX_BASE:
            return self.fallback.from_base(digits, base)
        return gmpy2.mpz(digits, base).digits(10)


_converter: Optional[BaseConverter] = None


def select_base_converter(gmp_support: bool) -> BaseConverter:
    """Build the converter matching the GMP_SUPPORT setting."""
    return GmpBaseConverter() if gmp_support else PositionalBaseConverter()


def get_base_converter() -> BaseConverter:
    """
    Get the process-wide converter, selecting it from settings on first use.

    Returns:
        BaseConverter: The active converter
    """
    global _converter
    if _converter is None:
        _converter = select_base_converter(get_settings().GMP_SUPPORT)
        logger.debug("base_converter_selected", converter=_converter.name)
    return _converter


def set_base_converter(converter: Optional[BaseConverter]) -> None:
    """
    Replace the process-wide converter.

    Args:
        converter: Converter to use, or None to re-select from settings on
            next use
    """
    global _converter
    _converter = converter
    logger.debug("base_converter_set", converter=converter.name if converter else None)
