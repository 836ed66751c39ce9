"""
Cell formatters for terminal tables, one per kind of value.

NumberFormat wraps a FormatSpec with an optional maximum width; StringFormat,
BinaryFormat and BoolFormat render text, bytes and booleans into the same
width constraints. UnknownFormat carries only the widths until the data kind
of a column is known, see numfmt.cells.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field, replace as dataclasses_replace
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .render import format_number
from .spec import Align, FormatSpec, FormatType, parse_spec
from .tools import fmt_type, fmt_value

log = logging.getLogger(__name__)

ELLIPSIS = "…"


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class NumberFormat:
    """
    Number cell formatter: a FormatSpec plus an optional maximum width.

    The minimum width is the width of the FormatSpec. When a rendered value is wider
    than max_width, fewer fractional digits are tried first, then exponent
    notation; if nothing fits the shortest attempt is returned, numbers are
    never cut.

    Example:
        >>> NumberFormat.parse(".3f", max_width=6).format(1234.5678)
        '1234.6'
    """
    spec: FormatSpec = field(default_factory=FormatSpec)
    max_width: int | None = None

    def __post_init__(self):
        if not isinstance(self.spec, FormatSpec):
            raise TypeError(f"spec must be FormatSpec, but got {fmt_type(self.spec)}")
        _check_widths(self.spec.width, self.max_width)

    @classmethod
    def parse(cls, pattern: str | FormatSpec, max_width: int | None = None) -> Self:
        return cls(spec=parse_spec(pattern), max_width=max_width)

    @property
    def min_width(self) -> int:
        return self.spec.width

    def with_min_width(self, min_width: int) -> "NumberFormat":
        return dataclasses_replace(self, spec=self.spec.with_width(min_width))

    def with_max_width(self, max_width: int | None) -> "NumberFormat":
        return dataclasses_replace(self, max_width=max_width)

    def with_type(self, format_type: FormatType | str) -> "NumberFormat":
        return dataclasses_replace(self, spec=self.spec.with_type(format_type))

    def with_precision(self, precision: int | None) -> "NumberFormat":
        return dataclasses_replace(self, spec=self.spec.with_precision(precision))

    def format(self, value: Any) -> str:
        text = format_number(self.spec, value)
        if self.max_width is None or len(text) <= self.max_width or self.spec.type.is_radix:
            return text

        attempts = [text]
        for precision in range(self.spec.precision - 1, -1, -1):
            text = format_number(self.spec.with_precision(precision), value)
            if len(text) <= self.max_width:
                return text
            attempts.append(text)

        if self.spec.type not in (FormatType.EXPONENT, FormatType.EXPONENT_UPPER):
            for precision in range(self.spec.precision, -1, -1):
                text = format_number(self.spec.merge(type=FormatType.EXPONENT, precision=precision), value)
                if len(text) <= self.max_width:
                    return text
                attempts.append(text)

        log.debug("value %s does not fit max_width=%d", fmt_value(value), self.max_width)
        return min(attempts, key=len)


@dataclass(frozen=True)
class StringFormat:
    """
    Text cell formatter.

    Values are converted with str(), padded to min_width and cut to max_width
    with a trailing ellipsis.
    """
    min_width: int = 0
    max_width: int | None = None
    align: Align = Align.LEFT
    fill: str = " "

    def __post_init__(self):
        _check_widths(self.min_width, self.max_width)
        _check_fill(self.fill)
        object.__setattr__(self, "align", Align(self.align))

    def with_min_width(self, min_width: int) -> "StringFormat":
        return dataclasses_replace(self, min_width=min_width)

    def with_max_width(self, max_width: int | None) -> "StringFormat":
        return dataclasses_replace(self, max_width=max_width)

    def format(self, value: Any) -> str:
        return _fit(str(value), self.min_width, self.max_width, self.align, self.fill)


@dataclass(frozen=True)
class BinaryFormat:
    """
    Binary cell formatter rendering bytes as hex digits, optionally with a 0x prefix.

    Example:
        >>> BinaryFormat().format(b"\\x01\\xff")
        '0x01ff'
    """
    prefix: bool = True
    min_width: int = 0
    max_width: int | None = None
    align: Align = Align.RIGHT
    fill: str = " "

    def __post_init__(self):
        _check_widths(self.min_width, self.max_width)
        _check_fill(self.fill)
        object.__setattr__(self, "align", Align(self.align))

    def with_min_width(self, min_width: int) -> "BinaryFormat":
        return dataclasses_replace(self, min_width=min_width)

    def with_max_width(self, max_width: int | None) -> "BinaryFormat":
        return dataclasses_replace(self, max_width=max_width)

    def format(self, value: bytes | bytearray | memoryview) -> str:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"binary value must be bytes-like, but got {fmt_type(value)}")
        text = ("0x" if self.prefix else "") + bytes(value).hex()
        return _fit(text, self.min_width, self.max_width, self.align, self.fill)


@dataclass(frozen=True)
class BoolFormat:
    """Boolean cell formatter."""
    true_text: str = "true"
    false_text: str = "false"
    min_width: int = 0
    max_width: int | None = None
    align: Align = Align.RIGHT
    fill: str = " "

    def __post_init__(self):
        _check_widths(self.min_width, self.max_width)
        _check_fill(self.fill)
        object.__setattr__(self, "align", Align(self.align))

    def with_min_width(self, min_width: int) -> "BoolFormat":
        return dataclasses_replace(self, min_width=min_width)

    def with_max_width(self, max_width: int | None) -> "BoolFormat":
        return dataclasses_replace(self, max_width=max_width)

    def format(self, value: Any) -> str:
        # numpy.bool_ and friends
        if not isinstance(value, bool) and hasattr(value, "item"):
            value = value.item()
        if not isinstance(value, bool):
            raise TypeError(f"bool value expected, but got {fmt_type(value)}")
        text = self.true_text if value else self.false_text
        return _fit(text, self.min_width, self.max_width, self.align, self.fill)


@dataclass(frozen=True)
class UnknownFormat:
    """
    Placeholder formatter holding only width constraints.

    Converted into a concrete formatter once the kind of the data is known.
    """
    min_width: int | None = None
    max_width: int | None = None

    def __post_init__(self):
        _check_widths(self.min_width, self.max_width)

    def with_min_width(self, min_width: int | None) -> "UnknownFormat":
        return dataclasses_replace(self, min_width=min_width)

    def with_max_width(self, max_width: int | None) -> "UnknownFormat":
        return dataclasses_replace(self, max_width=max_width)

    def to_number(self) -> NumberFormat:
        return NumberFormat(spec=FormatSpec(width=self.min_width or 0), max_width=self.max_width)

    def to_string(self) -> StringFormat:
        return StringFormat(min_width=self.min_width or 0, max_width=self.max_width)

    def to_binary(self) -> BinaryFormat:
        return BinaryFormat(min_width=self.min_width or 0, max_width=self.max_width)

    def to_bool(self) -> BoolFormat:
        return BoolFormat(min_width=self.min_width or 0, max_width=self.max_width)


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_widths(min_width: int | None, max_width: int | None) -> None:
    for name, width in (("min_width", min_width), ("max_width", max_width)):
        if width is None:
            continue
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError(f"{name} must be int or None, but got {fmt_type(width)}")
        if width < 0:
            raise ValueError(f"{name} must be int >= 0 or None, but got {fmt_value(width)}")
    if min_width is not None and max_width is not None and min_width > max_width:
        raise ValueError(f"min_width {min_width} exceeds max_width {max_width}")


def _check_fill(fill: str) -> None:
    if not isinstance(fill, str) or len(fill) != 1:
        raise ValueError(f"fill must be a single character, but got {fmt_value(fill)}")


def _fit(text: str, min_width: int, max_width: int | None, align: Align, fill: str) -> str:
    """Cut text to max_width with an ellipsis, then pad it to min_width."""
    if max_width is not None and len(text) > max_width:
        text = text[:max_width - 1] + ELLIPSIS if max_width > 0 else ""

    shortfall = min_width - len(text)
    if shortfall <= 0:
        return text
    if align == Align.LEFT:
        return text + fill * shortfall
    if align == Align.CENTER:
        half = shortfall // 2
        return fill * half + text + fill * (shortfall - half)
    return fill * shortfall + text
