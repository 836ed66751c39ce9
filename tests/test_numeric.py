"""
Test suite for std_float() - stdlib types and duck-typed third-party scalars.
"""

import math
from decimal import Decimal
from fractions import Fraction

import pytest

# Local ----------------------------------------------------------------------------------------------------------------

from numfmt.numeric import std_float


class ArrayScalar:
    """Mimics numpy/torch scalars exposing .item()."""

    def __init__(self, value):
        self._value = value

    def item(self):
        return self._value


class Quantity:
    """Mimics an Astropy Quantity."""

    def __init__(self, value, unit):
        self.value = value
        self.unit = unit


class IndexOnly:
    def __index__(self):
        return 7


class BrokenFloat:
    def __float__(self):
        raise ValueError("no float here")


class TestStdFloatBasicTypes:

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(42, 42.0, id="int"),
            pytest.param(-3.5, -3.5, id="float"),
            pytest.param(Decimal("2.5"), 2.5, id="decimal"),
            pytest.param(Fraction(1, 4), 0.25, id="fraction"),
            pytest.param(ArrayScalar(2), 2.0, id="item_int"),
            pytest.param(ArrayScalar(1.5), 1.5, id="item_float"),
            pytest.param(Quantity(3, "m"), 3.0, id="quantity"),
            pytest.param(IndexOnly(), 7.0, id="index"),
        ],
    )
    def test_convert(self, value, expected):
        res = std_float(value)
        assert res == expected
        assert isinstance(res, float)

    def test_negative_zero_sign(self):
        assert math.copysign(1.0, std_float(-0.0)) == -1.0


class TestStdFloatOverflow:

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(10 ** 400, math.inf, id="huge_int"),
            pytest.param(-10 ** 400, -math.inf, id="huge_negative_int"),
            pytest.param(Decimal("1e400"), math.inf, id="huge_decimal"),
            pytest.param(Fraction(10 ** 400, 3), math.inf, id="huge_fraction"),
            pytest.param(Fraction(-10 ** 400, 3), -math.inf, id="huge_negative_fraction"),
        ],
    )
    def test_overflow_to_inf(self, value, expected):
        assert std_float(value) == expected

    def test_special_values_pass(self):
        assert math.isnan(std_float(math.nan))
        assert std_float(-math.inf) == -math.inf


class TestStdFloatErrors:

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(None, id="none"),
            pytest.param(True, id="bool"),
            pytest.param("12", id="str"),
            pytest.param(b"12", id="bytes"),
            pytest.param([1], id="list"),
            pytest.param(object(), id="object"),
            pytest.param(BrokenFloat(), id="broken_float"),
        ],
    )
    def test_type_error(self, value):
        with pytest.raises(TypeError):
            std_float(value)
