"""
Fixed-point decimal primitives for decimath.

All functions work on decimal strings that already passed validation
(see decimath.utils.number_utils) and return plain fixed-point strings.
Results of scaled operations carry exactly `scale` fractional digits and are
truncated (ROUND_DOWN), never rounded: this is fixed-point decimal
truncation, not banker's rounding.

Usage:
    from decimath.utils.decimal_utils import add, div, truncate

    add("0.9", "41.1", 9)       # "42.000000000"
    div("1", "3", 4)            # "0.3333"
    truncate("-175.12399", 2)   # "-175.12"

Note:
    Additions, subtractions, products and quotients go through Decimal with a
    working context wide enough to keep every digit exact before the final
    quantize. Square roots, integer powers and remainders are computed on
    scaled gmpy2 integers instead: digit strings never go through int(str)
    or str(int), which CPython caps at 4300 digits.
"""
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    MAX_EMAX,
    MIN_EMIN,
    Overflow,
    ROUND_DOWN,
    localcontext,
    )
from typing import Tuple

import gmpy2

from decimath.errors import InvalidNumber


# ============================================================================
# INTERNAL HELPERS
# ============================================================================

def _working_context(*numbers: str, scale: int = 0) -> Context:
    """Decimal context with enough significant digits to keep results exact."""
    digits = sum(len(number) for number in numbers) + scale + 2
    return Context(
        prec=digits,
        rounding=ROUND_DOWN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, DivisionByZero, Overflow],
        )


def _quantize(value: Decimal, scale: int) -> str:
    """Truncate value to `scale` fractional digits and format it."""
    with localcontext(_working_context(scale=max(value.adjusted(), 0) + scale)):
        # Create quantizer for the target scale
        # Example: scale=6 → quantizer=0.000001
        quantizer = Decimal(1).scaleb(-scale)
        result = value.quantize(quantizer, rounding=ROUND_DOWN)

    if result.is_zero():
        result = result.copy_abs()

    return format(result, "f")


def split_number(number: str) -> Tuple[bool, str, str]:
    """
    Split a valid number into (negative, integer digits, fraction digits).

    Example:
        >>> split_number("-.50")
        (True, '', '50')
    """
    negative = number.startswith("-")
    body = number.lstrip("+-")
    integer, _, fraction = body.partition(".")
    return negative, integer, fraction


def _scaled_integer(number: str, scale: int) -> gmpy2.mpz:
    """Return number * 10**scale truncated toward zero."""
    negative, integer, fraction = split_number(number)
    fraction = (fraction + "0" * scale)[:scale]
    magnitude = gmpy2.mpz((integer + fraction) or "0")
    return -magnitude if negative else magnitude


def _from_scaled_integer(value: gmpy2.mpz, scale: int) -> str:
    """Format value / 10**scale with exactly `scale` fractional digits."""
    digits = gmpy2.mpz(abs(value)).digits(10).rjust(scale + 1, "0")
    text = digits[:-scale] + "." + digits[-scale:] if scale else digits
    return "-" + text if value < 0 else text


# ============================================================================
# PUBLIC PRIMITIVES
# ============================================================================

def is_integral(number: str) -> bool:
    """True if number has no fractional part, or only zeros after the dot."""
    _, _, fraction = split_number(number)
    return fraction.strip("0") == ""


def truncate(number: str, scale: int) -> str:
    """
    Truncate number to `scale` fractional digits.

    Args:
        number: Valid decimal string
        scale: Number of fractional digits to keep

    Returns:
        Fixed-point string with exactly `scale` fractional digits

    Example:
        >>> truncate("175.123456789", 6)
        '175.123456'
        >>> truncate("-0.5", 0)
        '0'
    """
    return _quantize(Decimal(number), scale)


def add(left: str, right: str, scale: int) -> str:
    """Sum of left and right, truncated to `scale` fractional digits."""
    with localcontext(_working_context(left, right, scale=scale)):
        result = Decimal(left) + Decimal(right)
    return _quantize(result, scale)


def sub(left: str, right: str, scale: int) -> str:
    """Difference left - right, truncated to `scale` fractional digits."""
    with localcontext(_working_context(left, right, scale=scale)):
        result = Decimal(left) - Decimal(right)
    return _quantize(result, scale)


def mul(left: str, right: str, scale: int) -> str:
    """Product of left and right, truncated to `scale` fractional digits."""
    with localcontext(_working_context(left, right, scale=scale)):
        result = Decimal(left) * Decimal(right)
    return _quantize(result, scale)


def div(left: str, right: str, scale: int) -> str:
    """
    Quotient left / right, truncated to `scale` fractional digits.

    Raises:
        InvalidNumber: If right is zero
    """
    divisor = Decimal(right)
    if divisor.is_zero():
        raise InvalidNumber("Division by zero", right)

    with localcontext(_working_context(left, right, scale=scale)):
        # context rounding is ROUND_DOWN, so the quotient is already truncated
        result = Decimal(left) / divisor
    return _quantize(result, scale)


def compare(left: str, right: str, scale: int) -> int:
    """
    Three-way comparison of left and right, both truncated to `scale`.

    Returns:
        -1 if left < right, 0 if equal, 1 if left > right

    Example:
        >>> compare("42.0000000001", "42", 9)
        0
    """
    left_value = Decimal(truncate(left, scale))
    right_value = Decimal(truncate(right, scale))
    return (left_value > right_value) - (left_value < right_value)


def sqrt(number: str, scale: int) -> str:
    """
    Square root of number, truncated to `scale` fractional digits.

    Raises:
        InvalidNumber: If number is negative
    """
    negative, integer, fraction = split_number(number)
    if negative and (integer + fraction).strip("0"):
        raise InvalidNumber("Square root of a negative number", number)

    # floor(sqrt(floor(x))) == floor(sqrt(x)) for x >= 0
    radicand = abs(_scaled_integer(number, 2 * scale))
    return _from_scaled_integer(gmpy2.isqrt(radicand), scale)


def power(number: str, exponent: int, scale: int) -> str:
    """
    number ** exponent (exponent >= 0), truncated to `scale` fractional digits.

    Example:
        >>> power("3.14", 2, 9)
        '9.859600000'
    """
    negative, integer, fraction = split_number(number)
    magnitude = gmpy2.mpz((integer + fraction) or "0") ** exponent
    exact_scale = len(fraction) * exponent

    if exact_scale > scale:
        magnitude //= 10 ** (exact_scale - scale)
    else:
        magnitude *= 10 ** (scale - exact_scale)

    if negative and exponent % 2:
        magnitude = -magnitude
    return _from_scaled_integer(magnitude, scale)


def modulo(number: str, modulus: int) -> str:
    """
    Integer remainder of number's integer part by modulus.

    The sign of the result follows the dividend: modulo("-7", 3) == "-1".
    """
    dividend = _scaled_integer(number, 0)
    remainder = abs(dividend) % modulus
    return _from_scaled_integer(-remainder if dividend < 0 else remainder, 0)


def power_modulo(number: str, exponent: int, modulus: int) -> str:
    """
    (number ** exponent) mod modulus by fast modular exponentiation.

    Same result as modulo(power(number, exponent, 0), modulus): the sign
    follows the dividend.

    Raises:
        InvalidNumber: If number is not integer valued
    """
    if not is_integral(number):
        raise InvalidNumber("Argument number is not an integer", number)

    base = _scaled_integer(number, 0)
    remainder = gmpy2.powmod(abs(base), exponent, modulus)
    if base < 0 and exponent % 2:
        remainder = -remainder
    return _from_scaled_integer(remainder, 0)
