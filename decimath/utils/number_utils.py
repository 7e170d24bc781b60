"""
Number validation and normalization utilities.

Every value entering the fixed-point primitives goes through these checks:
the primitives trust their input, so things like '1.1.1' or '12E16' must be
rejected before they get there.

Accepted grammar (no surrounding whitespace, no exponent, single dot):

    [+-]?([0-9]+(\\.[0-9]+)?|\\.[0-9]+)

Usage:
    from decimath.utils.number_utils import is_number, normalize_number

    is_number("-000042000.00")    # True
    is_number("42e64")            # False
    normalize_number("+00100.0001")  # "100.0001"
"""
import re
from decimal import Decimal
from typing import Any, Optional

import gmpy2

from decimath.errors import InvalidNumber

NUMBER_PATTERN = re.compile(r"^([+-])?([0-9]+(\.[0-9]+)?|\.[0-9]+)$")


def _as_text(value: Any) -> str:
    """str() for candidates; ints go through gmpy2 so digit count is unbounded."""
    if isinstance(value, int) and not isinstance(value, bool):
        return gmpy2.mpz(value).digits(10)
    return value if isinstance(value, str) else str(value)


def is_number(value: Any) -> bool:
    """
    Check whether value is a plain decimal number.

    Args:
        value: Candidate number (non-strings are converted with str())

    Returns:
        True if value fully matches the decimal number grammar

    Examples:
        >>> is_number("+00004200000")
        True
        >>> is_number("-000042000.")
        False
        >>> is_number(" 42")
        False
    """
    return NUMBER_PATTERN.fullmatch(_as_text(value)) is not None


def normalize_number(value: Any, default: Optional[str] = None) -> Optional[str]:
    """
    Remove redundant signs and zeros from a decimal number.

    Leading '+' and zeros are dropped, trailing fractional zeros and a
    dangling dot are dropped, and every zero value (including '-0.000')
    becomes '0'.

    Args:
        value: Candidate number
        default: Returned as-is when value is not a number

    Returns:
        Canonical number string, or default

    Examples:
        >>> normalize_number("000255173029255255255.000")
        '255173029255255255'
        >>> normalize_number("-.0001")
        '-0.0001'
        >>> normalize_number("-000.000")
        '0'
        >>> normalize_number("abc", default="0")
        '0'
    """
    if not is_number(value):
        return default

    value = _as_text(value)
    sign = "-" if value[0] == "-" else ""
    number = value.lstrip("0+-")

    if "." in number:
        # also clear trailing 0
        integer, fraction = number.split(".")
        fraction = fraction.rstrip("0")
        number = (integer or "0") + ("." + fraction if fraction else "")

    if not number or number == "0":
        return "0"

    return sign + number


def validate_number_string(value: Any) -> str:
    """
    Validate a raw numeric input and return it as a string.

    Surrounding whitespace is ignored. The returned string is valid but not
    normalized.

    Args:
        value: str, int, Decimal or float

    Returns:
        The trimmed numeric string

    Raises:
        InvalidNumber: If value does not match the number grammar
    """
    if isinstance(value, Decimal):
        text = format(value, "f")
    else:
        text = _as_text(value).strip()

    if not is_number(text):
        raise InvalidNumber(f"Argument number is not valid: {value!r}", value)

    return text


def validate_positive_integer(value: Any) -> int:
    """
    Coerce value to a strictly positive integer.

    Numeric strings are truncated toward zero ("3.9" -> 3). Used for
    exponents and moduli.

    Args:
        value: int, float, numeric string or number object

    Returns:
        The integer value (> 0)

    Raises:
        InvalidNumber: If value is not numeric or is not > 0 once truncated

    Examples:
        >>> validate_positive_integer("42")
        42
        >>> validate_positive_integer(" 7.9 ")
        7
        >>> validate_positive_integer("0.5")  # InvalidNumber
    """
    if isinstance(value, bool):
        raise InvalidNumber(f"Argument number is not a positive integer: {value!r}", value)

    if isinstance(value, int):
        integer = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise InvalidNumber(f"Argument number is not a positive integer: {value!r}", value)
        integer = int(value)
    else:
        text = normalize_number(validate_number_string(value))
        integer = int(gmpy2.mpz(text.split(".")[0]))

    if integer <= 0:
        raise InvalidNumber(f"Argument number is not a positive integer: {value!r}", value)

    return integer
