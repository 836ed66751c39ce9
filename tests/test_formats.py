#
# numfmt - Cell Formatters Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import FrozenInstanceError

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from numfmt.formats import (
    BinaryFormat, BoolFormat, NumberFormat, StringFormat, UnknownFormat,
)
from numfmt.spec import Align, FormatSpec, FormatType


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class NumpyBool:
    """Mimics numpy.bool_ exposing .item()."""

    def __init__(self, value):
        self._value = value

    def item(self):
        return self._value


class TestNumberFormat:

    def test_defaults(self):
        fmt = NumberFormat()
        assert fmt.spec == FormatSpec()
        assert fmt.min_width == 0
        assert fmt.max_width is None

    def test_parse(self):
        fmt = NumberFormat.parse(",.2f", max_width=12)
        assert fmt.spec.grouping is True
        assert fmt.max_width == 12
        assert fmt.format(1234.5) == "1,234.50"

    def test_min_width_is_spec_width(self):
        fmt = NumberFormat().with_min_width(7)
        assert fmt.spec.width == 7
        assert fmt.min_width == 7
        assert fmt.with_precision(0).format(42) == "     42"

    def test_builders(self):
        fmt = NumberFormat().with_type(FormatType.EXPONENT).with_precision(2).with_max_width(9)
        assert fmt.spec.type is FormatType.EXPONENT
        assert fmt.spec.precision == 2
        assert fmt.max_width == 9
        assert fmt.format(12345) == "1.23e+4"

    @pytest.mark.parametrize(
        "pattern, max_width, value, expected",
        [
            pytest.param(".3f", 6, 1234.5678, "1234.6", id="fewer_digits"),
            pytest.param(".3f", None, 1234.5678, "1234.568", id="no_limit"),
            pytest.param(".3f", 10, 1234.5678, "1234.568", id="fits"),
            pytest.param(".0f", 5, 123456789, "1e+8", id="exponent_fallback"),
            pytest.param(".2e", 3, 123456789, "1e+8", id="shortest_when_nothing_fits"),
        ],
    )
    def test_max_width(self, pattern, max_width, value, expected):
        assert NumberFormat.parse(pattern, max_width=max_width).format(value) == expected

    def test_radix_not_shortened(self):
        assert NumberFormat.parse("x", max_width=2).format(0xABCD) == "abcd"

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            pytest.param({"spec": ".2f"}, TypeError, id="spec_text"),
            pytest.param({"max_width": -1}, ValueError, id="max_width_negative"),
            pytest.param({"max_width": 2.0}, TypeError, id="max_width_type"),
            pytest.param({"spec": FormatSpec(width=8), "max_width": 4}, ValueError, id="min_over_max"),
        ],
    )
    def test_invalid(self, kwargs, error):
        with pytest.raises(error):
            NumberFormat(**kwargs)

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            NumberFormat().max_width = 3


class TestStringFormat:

    @pytest.mark.parametrize(
        "kwargs, value, expected",
        [
            pytest.param({}, "abc", "abc", id="plain"),
            pytest.param({"min_width": 5}, "abc", "abc  ", id="pad_left_aligned"),
            pytest.param({"min_width": 5, "align": Align.RIGHT}, "abc", "  abc", id="pad_right"),
            pytest.param({"min_width": 6, "align": "^", "fill": "."}, "ab", "..ab..", id="center_fill"),
            pytest.param({"max_width": 4}, "abcdef", "abc…", id="ellipsis"),
            pytest.param({"max_width": 1}, "abcdef", "…", id="ellipsis_only"),
            pytest.param({"max_width": 0}, "abcdef", "", id="zero_width"),
            pytest.param({}, 12, "12", id="non_str"),
        ],
    )
    def test_format(self, kwargs, value, expected):
        assert StringFormat(**kwargs).format(value) == expected

    def test_builders(self):
        fmt = StringFormat().with_min_width(3).with_max_width(5)
        assert (fmt.min_width, fmt.max_width) == (3, 5)

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            pytest.param({"fill": "ab"}, ValueError, id="fill"),
            pytest.param({"align": "?"}, ValueError, id="align"),
            pytest.param({"min_width": 5, "max_width": 3}, ValueError, id="min_over_max"),
            pytest.param({"min_width": "5"}, TypeError, id="min_width_type"),
        ],
    )
    def test_invalid(self, kwargs, error):
        with pytest.raises(error):
            StringFormat(**kwargs)


class TestBinaryFormat:

    @pytest.mark.parametrize(
        "kwargs, value, expected",
        [
            pytest.param({}, b"\x01\xff", "0x01ff", id="prefix"),
            pytest.param({"prefix": False}, b"\x01\xff", "01ff", id="no_prefix"),
            pytest.param({}, bytearray(b"\xab"), "0xab", id="bytearray"),
            pytest.param({}, b"", "0x", id="empty"),
            pytest.param({"min_width": 8}, b"\x01", "    0x01", id="right_aligned"),
            pytest.param({"max_width": 5}, b"\x01\x02\x03", "0x01…", id="ellipsis"),
        ],
    )
    def test_format(self, kwargs, value, expected):
        assert BinaryFormat(**kwargs).format(value) == expected

    def test_not_bytes(self):
        with pytest.raises(TypeError, match="bytes-like"):
            BinaryFormat().format("01ff")


class TestBoolFormat:

    @pytest.mark.parametrize(
        "kwargs, value, expected",
        [
            pytest.param({}, True, "true", id="true"),
            pytest.param({}, False, "false", id="false"),
            pytest.param({"true_text": "yes", "false_text": "no"}, False, "no", id="custom"),
            pytest.param({"min_width": 6}, True, "  true", id="right_aligned"),
            pytest.param({}, NumpyBool(True), "true", id="item"),
        ],
    )
    def test_format(self, kwargs, value, expected):
        assert BoolFormat(**kwargs).format(value) == expected

    @pytest.mark.parametrize("value", [1, "true", None, NumpyBool(1)])
    def test_not_bool(self, value):
        with pytest.raises(TypeError, match="bool value expected"):
            BoolFormat().format(value)


class TestUnknownFormat:

    def test_defaults(self):
        fmt = UnknownFormat()
        assert fmt.min_width is None
        assert fmt.max_width is None

    def test_conversions_keep_widths(self):
        fmt = UnknownFormat(min_width=4, max_width=10)
        assert fmt.to_number() == NumberFormat(spec=FormatSpec(width=4), max_width=10)
        assert fmt.to_string() == StringFormat(min_width=4, max_width=10)
        assert fmt.to_binary() == BinaryFormat(min_width=4, max_width=10)
        assert fmt.to_bool() == BoolFormat(min_width=4, max_width=10)

    def test_conversions_without_widths(self):
        fmt = UnknownFormat()
        assert fmt.to_number().min_width == 0
        assert fmt.to_string().min_width == 0

    def test_builders(self):
        fmt = UnknownFormat().with_min_width(2).with_max_width(3)
        assert (fmt.min_width, fmt.max_width) == (2, 3)
        assert fmt.with_max_width(None).max_width is None

    def test_min_over_max(self):
        with pytest.raises(ValueError):
            UnknownFormat(min_width=4, max_width=3)
