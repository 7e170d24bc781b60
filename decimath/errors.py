"""
Exceptions raised by decimath.
"""
from typing import Any


class InvalidNumber(ValueError):
    """
    Raised when a value cannot be used as a number by the requested operation.

    Covers malformed numeric strings, non-positive exponents or moduli,
    unsupported bases, non-integer input to base conversion, digits outside
    a base alphabet, negative square roots and division by zero.

    Attributes:
        value: The offending input (None when not applicable)
    """

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value
