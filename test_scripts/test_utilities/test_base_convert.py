"""
Tests for base alphabets and base converters.

Tests cover:
- Alphabet selection and truncation for every supported base
- Base validation
- Positional (reference) converter
- gmpy2-backed converter, including delegation above base 62
- Direct gmpy2 base_convert helper
- Converter selection from settings
"""
import pytest

from decimath.errors import InvalidNumber
from decimath.utils import base_convert as base_convert_module
from decimath.utils.base_convert import (
    BASECHAR_36,
    BASECHAR_62,
    BASECHAR_64,
    GmpBaseConverter,
    PositionalBaseConverter,
    base_convert,
    get_base_char,
    get_base_converter,
    select_base_converter,
    set_base_converter,
    )

NUMBERS = ["0", "1", "10", "35", "36", "61", "62", "63", "64", "1000", "9856565", "255173029255255255255"]


class TestGetBaseChar:
    """Tests for get_base_char()."""

    def test_full_alphabets(self):
        """Bases 36, 62 and 64 use their whole alphabet."""
        assert get_base_char(36) == BASECHAR_36
        assert get_base_char(62) == BASECHAR_62
        assert get_base_char(64) == BASECHAR_64

    @pytest.mark.parametrize("base,expected", [
        (2, "01"),
        (8, "01234567"),
        (16, "0123456789abcdef"),
        (37, "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZa"),
        (63, BASECHAR_64[:63]),
        ])
    def test_truncated_alphabets(self, base, expected):
        """Other bases use the first `base` characters of their alphabet."""
        assert get_base_char(base) == expected

    def test_string_base(self):
        """Numeric strings are accepted as bases."""
        assert get_base_char("16") == "0123456789abcdef"

    @pytest.mark.parametrize("base", [0, 1, 65, -16, "abc", None])
    def test_invalid_base(self, base):
        """Only bases 2 to 64 are supported."""
        with pytest.raises(InvalidNumber, match="base 2 to 64"):
            get_base_char(base)

    def test_max_base(self):
        """Callers can lower the upper bound."""
        with pytest.raises(InvalidNumber):
            get_base_char(63, 62)


class TestPositionalBaseConverter:
    """Reference divide/remainder converter."""

    converter = PositionalBaseConverter()

    @pytest.mark.parametrize("number,base,expected", [
        ("255", 16, "ff"),
        ("255", 8, "377"),
        ("255", 2, "11111111"),
        ("0", 10, "0"),
        ("0", 64, "A"),
        ("63", 64, "/"),
        ("64", 64, "BA"),
        ("61", 62, "z"),
        ("62", 62, "10"),
        ("35", 36, "z"),
        ])
    def test_to_base(self, number, base, expected):
        """Known conversions."""
        assert self.converter.to_base(number, base) == expected

    @pytest.mark.parametrize("digits,base,expected", [
        ("ff", 16, "255"),
        ("377", 8, "255"),
        ("BA", 64, "64"),
        ("10", 62, "62"),
        ("z", 36, "35"),
        ])
    def test_from_base(self, digits, base, expected):
        """Positional weighted sum, most significant digit first."""
        assert self.converter.from_base(digits, base) == expected

    @pytest.mark.parametrize("base", range(2, 65))
    def test_round_trip(self, base):
        """from_base(to_base(n)) == n for every base."""
        for number in NUMBERS:
            assert self.converter.from_base(self.converter.to_base(number, base), base) == number


class TestGmpBaseConverter:
    """gmpy2-backed converter."""

    converter = GmpBaseConverter()
    reference = PositionalBaseConverter()

    @pytest.mark.parametrize("base", range(2, 65))
    def test_matches_reference(self, base):
        """Both converters produce the same digits."""
        for number in NUMBERS:
            digits = self.reference.to_base(number, base)
            assert self.converter.to_base(number, base) == digits
            if digits.strip(get_base_char(base)[0]):
                assert self.converter.from_base(digits, base) == number

    def test_delegates_above_62(self):
        """Bases 63 and 64 go through the fallback converter."""
        assert self.converter.to_base("64", 64) == "BA"
        assert self.converter.from_base("BA", 64) == "64"

    def test_no_gmp_prefix(self):
        """Rendered digits never carry a 0x / 0o / 0b prefix."""
        assert self.converter.to_base("255", 16) == "ff"
        assert self.converter.to_base("255", 8) == "377"
        assert self.converter.to_base("5", 2) == "101"


class TestBaseConvertHelper:
    """Tests for the direct gmpy2 base_convert() helper."""

    def test_decimal_to_hex(self):
        """Default source base is 10."""
        assert base_convert("255", 10, 16) == "ff"

    @pytest.mark.parametrize("number,base", [
        ("0", 62), ("10", 36), ("9856565", 62), ("255173029255255255", 2), ("25517993029255255255", 37),
        ])
    def test_round_trip(self, number, base):
        """Converting there and back gives the original number."""
        assert base_convert(base_convert(number, 10, base), base, 10) == number

    def test_invalid_digits(self):
        """Digits outside the source base are rejected."""
        with pytest.raises(InvalidNumber):
            base_convert("xyz", 10, 16)

    def test_base_above_62(self):
        """gmpy2 only handles bases up to 62."""
        with pytest.raises(InvalidNumber):
            base_convert("10", 10, 64)


class TestConverterSelection:
    """Process-wide converter selection."""

    @pytest.fixture(autouse=True)
    def restore_converter(self):
        yield
        set_base_converter(None)

    def test_select_from_flag(self):
        """GMP_SUPPORT picks the gmpy2 converter."""
        assert isinstance(select_base_converter(True), GmpBaseConverter)
        assert isinstance(select_base_converter(False), PositionalBaseConverter)

    def test_selected_once_from_settings(self, monkeypatch):
        """Settings are read on first use only."""
        set_base_converter(None)
        monkeypatch.setenv("GMP_SUPPORT", "false")
        converter = get_base_converter()
        assert isinstance(converter, PositionalBaseConverter)

        monkeypatch.setenv("GMP_SUPPORT", "true")
        assert get_base_converter() is converter

    def test_override(self):
        """set_base_converter() replaces the active converter."""
        converter = PositionalBaseConverter()
        set_base_converter(converter)
        assert get_base_converter() is converter
        assert base_convert_module._converter is converter
