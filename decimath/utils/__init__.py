"""
Utility functions for decimath.

This package contains:
- number_utils: Number validation and normalization
- decimal_utils: Fixed-point primitives (truncating arithmetic on decimal strings)
- base_convert: Base alphabets and base 2..64 converters
"""
