"""
Tests for DecimalNumber.to_base() / DecimalNumber.from_base().

Every scenario runs against both the gmpy2-backed and the positional
converter.
"""
import pytest

from decimath import DecimalNumber, InvalidNumber
from decimath.utils.base_convert import (
    GmpBaseConverter,
    PositionalBaseConverter,
    base_convert,
    set_base_converter,
    )

BASE_CONVERT_DATA = [
    ("0", 62),
    ("0", 36),
    ("10", 62),
    ("10", 36),
    ("62", 62),
    ("36", 36),
    ("000255173029255255255", 16),
    ("000255173029255255255", 63),
    ("00025517302925525525", 28),
    ("000255173029255255255", 8),
    ("000255173029255255255", 36),
    ("255173029255255255", 2),
    ("25517993029255255255", 37),
    ("25517993029255255255", 35),
    ("1000", 64),
    ("0", 48),
    ("9856565", 62),
    ]


@pytest.fixture(params=[GmpBaseConverter, PositionalBaseConverter], ids=["gmp", "positional"])
def converter(request):
    instance = request.param()
    set_base_converter(instance)
    yield instance
    set_base_converter(None)


class TestRoundTrip:
    """from_base(to_base(n)) == n."""

    @pytest.mark.parametrize("number,base", BASE_CONVERT_DATA)
    def test_round_trip(self, converter, number, base):
        expected = str(DecimalNumber(number))
        digits = DecimalNumber(number).to_base(base)
        assert str(DecimalNumber.from_base(digits, base)) == expected

    @pytest.mark.parametrize("number,base", [data for data in BASE_CONVERT_DATA if data[1] <= 62])
    def test_matches_gmp_helper(self, converter, number, base):
        """Up to base 62, digits match gmpy2's own rendering."""
        expected = base_convert(str(DecimalNumber(number)), 10, base)
        assert DecimalNumber(number).to_base(base) == expected

    @pytest.mark.parametrize("base", range(2, 65))
    def test_every_base(self, converter, base):
        for number in ("1", "63", "4096", "18446744073709551616"):
            digits = DecimalNumber(number).to_base(base)
            assert str(DecimalNumber.from_base(digits, base)) == number

    @pytest.mark.parametrize("base", [16, 62, 64])
    def test_large_number(self, converter, base):
        """Numbers past the int-to-str digit limit convert both ways."""
        number = "1" * 5000
        digits = DecimalNumber(number).to_base(base)
        assert str(DecimalNumber.from_base(digits, base)) == number


class TestToBase:
    """Decimal to base conversion."""

    @pytest.mark.parametrize("number,base,expected", [
        ("255", 16, "ff"),
        ("255", "16", "ff"),
        ("-255", 16, "ff"),
        ("42.000", 2, "101010"),
        ("0", 64, "A"),
        ("0", 16, "0"),
        ("64", 64, "BA"),
        ("61", 62, "z"),
        ])
    def test_known_values(self, converter, number, base, expected):
        assert DecimalNumber(number).to_base(base) == expected

    def test_non_integer(self, converter):
        """Only integers can be converted."""
        with pytest.raises(InvalidNumber, match="not an integer"):
            DecimalNumber("42.5").to_base(16)

    @pytest.mark.parametrize("base", [0, 1, 65, "x"])
    def test_invalid_base(self, converter, base):
        with pytest.raises(InvalidNumber):
            DecimalNumber("42").to_base(base)

    def test_ignores_precision(self, converter):
        """Integer conversion does not depend on precision."""
        assert DecimalNumber("1024").set_precision(0).to_base(2) == "10000000000"

    def test_large_power_of_two(self, converter):
        assert DecimalNumber("2").pow(15000).to_base(16) == "1" + "0" * 3750


class TestFromBase:
    """Base to decimal conversion."""

    @pytest.mark.parametrize("digits,base,expected", [
        ("FF", 16, "255"),
        ("ff", 16, "255"),
        ("0xFF", 16, "255"),
        ("0b11111111", 2, "255"),
        ("0377", 8, "255"),
        ("377", 8, "255"),
        ("0", 8, "0"),
        ("BA==", 64, "64"),
        ("AAA", 64, "0"),
        ("000", 10, "0"),
        ("-ff", 16, "255"),
        ("  z  ", 36, "35"),
        ("Z", 36, "35"),
        ("z", 62, "61"),
        ("Z", 62, "35"),
        ])
    def test_known_values(self, converter, digits, base, expected):
        assert str(DecimalNumber.from_base(digits, base)) == expected

    @pytest.mark.parametrize("digits,base", [
        ("", 16),
        ("-", 16),
        ("1.5", 10),
        ("g", 16),
        ("2", 2),
        ("+/", 62),
        ("==", 64),
        ])
    def test_invalid(self, converter, digits, base):
        with pytest.raises(InvalidNumber):
            DecimalNumber.from_base(digits, base)

    def test_invalid_base(self, converter):
        with pytest.raises(InvalidNumber, match="base 2 to 64"):
            DecimalNumber.from_base("10", 65)

    def test_returns_instance(self, converter):
        """The result is a regular DecimalNumber that can be chained."""
        number = DecimalNumber.from_base("ff", 16)
        assert isinstance(number, DecimalNumber)
        assert str(number.add("1")) == "256"
