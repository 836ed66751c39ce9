"""
Format specifier model: the mini-language describing how a number is rendered.

Grammar, each part optional, read left to right:

    [[fill]align][sign]["#"]["0"][width][","]["." precision][type]

    fill       any single character, only before an align character
    align      "<" left, ">" right, "^" center, "=" padding after the sign
    sign       "+" always, "-" negative only, " " space for positives
    "#"        alternate form: radix prefixes, forced decimal point
    "0"        zero padding after the sign
    width      minimum rendered length
    ","        thousands grouping
    precision  fractional digits
    type       one of "%", "b", "o", "x", "X", "f", "F", "e", "E", "s"; none is general

Examples:
    >>> FormatSpec.parse("+08,.2f").width
    8
    >>> str(FormatSpec.parse(".2%"))
    '.2%'
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, replace as dataclasses_replace
from enum import StrEnum, unique
from typing import Any, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .conf import FormatConf
from .sentinels import UNSET, UnsetType
from .tools import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class Align(StrEnum):
    """
    Placement of padding relative to the sign and the value.

    Attributes:
        LEFT:       "-42   "  value first, padding last
        RIGHT:      "   -42"  padding first (default)
        CENTER:     " -42  "  padding split, odd remainder trails
        SIGN_AWARE: "-   42"  padding between sign/prefix and digits
    """
    LEFT = "<"
    RIGHT = ">"
    CENTER = "^"
    SIGN_AWARE = "="


@unique
class Sign(StrEnum):
    """Sign glyph policy."""
    ALWAYS = "+"
    NEGATIVE_ONLY = "-"
    SPACE = " "


@unique
class FormatType(StrEnum):
    """
    Conversion algorithm selected by the type character.

    GENERAL has no character and renders fixed-point like FIXED.
    FIXED_ALT is fixed-point with upper case non-finite values ("INF", "NAN").
    """
    PERCENT = "%"
    BINARY = "b"
    OCTAL = "o"
    HEX = "x"
    HEX_UPPER = "X"
    FIXED = "f"
    FIXED_ALT = "F"
    EXPONENT = "e"
    EXPONENT_UPPER = "E"
    SI = "s"
    GENERAL = ""

    @property
    def is_radix(self) -> bool:
        return self in (FormatType.BINARY, FormatType.OCTAL, FormatType.HEX, FormatType.HEX_UPPER)

    @property
    def is_upper(self) -> bool:
        return self in (FormatType.HEX_UPPER, FormatType.EXPONENT_UPPER, FormatType.FIXED_ALT)

    @property
    def default_precision(self) -> int:
        return FormatConf.DEFAULT_PRECISION[self.value]
# @formatter:on


_ALIGN_CHARS = frozenset(a.value for a in Align)
_SIGN_CHARS = frozenset(s.value for s in Sign)
_TYPE_CHARS = frozenset(t.value for t in FormatType if t.value)


class SpecParseError(ValueError):
    """
    Format specifier text does not match the grammar.

    Attributes:
        text: The full specifier text.
        position: Index of the offending token in text.
        token: The offending token.
    """

    def __init__(self, message: str, *, text: str, position: int, token: str):
        super().__init__(message)
        self.text = text
        self.position = position
        self.token = token


@dataclass(frozen=True)
class FormatSpec:
    """
    Resolved number format specifier.

    Every field has a concrete value after construction; an omitted precision
    resolves to the default of the format type. Instances are immutable, the
    builder methods return new instances.

    Attributes:
        fill: Single padding character.
        align: Padding placement, see Align.
        sign: Sign glyph policy, see Sign.
        symbol: Alternate form flag ("#").
        zero: Zero padding after the sign ("0").
        width: Minimum rendered length.
        grouping: Thousands separators in the integer part (",").
        precision: Fractional digits; None resolves to the type default.
        type: Conversion algorithm, see FormatType.

    Example:
        >>> spec = FormatSpec.parse(".1%")
        >>> spec.format(0.256)
        '25.6%'
        >>> FormatSpec().with_precision(2).commas().format(1234.5)
        '1,234.50'

    Raises:
        TypeError: If a field has a wrong type.
        ValueError: If a field has an invalid value.
    """
    fill: str = " "
    align: Align = Align.RIGHT
    sign: Sign = Sign.NEGATIVE_ONLY
    symbol: bool = False
    zero: bool = False
    width: int = 0
    grouping: bool = False
    precision: int | None = None
    type: FormatType = FormatType.GENERAL

    def __post_init__(self):
        """Validate fields, coerce enum values and resolve the default precision"""

        if not isinstance(self.fill, str):
            raise TypeError(f"fill must be str, but got {fmt_type(self.fill)}")
        if len(self.fill) != 1:
            raise ValueError(f"fill must be a single character, but got {fmt_value(self.fill)}")

        object.__setattr__(self, "align", _to_enum(Align, self.align, "align"))
        object.__setattr__(self, "sign", _to_enum(Sign, self.sign, "sign"))
        object.__setattr__(self, "type", _to_enum(FormatType, self.type, "type"))

        for name in ("symbol", "zero", "grouping"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be bool, but got {fmt_type(getattr(self, name))}")

        if not isinstance(self.width, int) or isinstance(self.width, bool):
            raise TypeError(f"width must be int, but got {fmt_type(self.width)}")
        if self.width < 0:
            raise ValueError(f"width must be int >= 0, but got {fmt_value(self.width)}")

        if self.precision is None:
            object.__setattr__(self, "precision", self.type.default_precision)
        elif not isinstance(self.precision, int) or isinstance(self.precision, bool):
            raise TypeError(f"precision must be int or None, but got {fmt_type(self.precision)}")
        elif self.precision < 0:
            raise ValueError(f"precision must be int >= 0 or None, but got {fmt_value(self.precision)}")

    @classmethod
    def parse(cls, text: "str | FormatSpec") -> Self:
        """Parse specifier text, see parse_spec()."""
        return parse_spec(text)

    def __str__(self) -> str:
        """Canonical specifier text which parses back to an equal FormatSpec."""
        parts = []
        # The "0" flag implies "0" fill and, without an align character, sign-aware alignment
        default_fill, default_align = ("0", Align.SIGN_AWARE) if self.zero else (" ", Align.RIGHT)
        if self.fill != default_fill or self.align != default_align:
            fill = "" if self.fill == default_fill else self.fill
            parts.append(f"{fill}{self.align}")
        if self.sign != Sign.NEGATIVE_ONLY:
            parts.append(self.sign.value)
        if self.symbol:
            parts.append("#")
        if self.zero:
            parts.append("0")
        if self.width:
            parts.append(str(self.width))
        if self.grouping:
            parts.append(",")
        if self.precision != self.type.default_precision:
            parts.append(f".{self.precision}")
        parts.append(self.type.value)
        return "".join(parts)

    def format(self, value: Any) -> str:
        """Render a number with this specifier."""
        from .render import format_number
        return format_number(self, value)

    def merge(self,
              # Attrs override
              fill: str | UnsetType = UNSET,
              align: Align | str | UnsetType = UNSET,
              sign: Sign | str | UnsetType = UNSET,
              symbol: bool | UnsetType = UNSET,
              zero: bool | UnsetType = UNSET,
              width: int | UnsetType = UNSET,
              grouping: bool | UnsetType = UNSET,
              precision: int | None | UnsetType = UNSET,
              type: FormatType | str | UnsetType = UNSET,
              ) -> "FormatSpec":
        """
        Create a new FormatSpec instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.
        Passing precision=None resolves the default precision of the (new) type.
        """
        overrides = {k: v for k, v in dict(fill=fill, align=align, sign=sign, symbol=symbol, zero=zero,
                                            width=width, grouping=grouping, precision=precision,
                                            type=type).items() if v is not UNSET}
        return dataclasses_replace(self, **overrides)

    # Builder --------------------------------------------------------------------------------

    def with_fill(self, fill: str) -> "FormatSpec":
        return self.merge(fill=fill)

    def with_width(self, width: int) -> "FormatSpec":
        return self.merge(width=width)

    def with_precision(self, precision: int | None) -> "FormatSpec":
        return self.merge(precision=precision)

    def with_type(self, format_type: FormatType | str) -> "FormatSpec":
        """Change the format type keeping the current precision."""
        return self.merge(type=format_type)

    def left_align(self) -> "FormatSpec":
        return self.merge(align=Align.LEFT)

    def right_align(self) -> "FormatSpec":
        return self.merge(align=Align.RIGHT)

    def center_align(self) -> "FormatSpec":
        return self.merge(align=Align.CENTER)

    def sign_aware_align(self) -> "FormatSpec":
        return self.merge(align=Align.SIGN_AWARE)

    def zero_padding(self) -> "FormatSpec":
        """Pad with zeros between the sign and the digits."""
        return self.merge(zero=True, fill="0", align=Align.SIGN_AWARE)

    def commas(self) -> "FormatSpec":
        return self.merge(grouping=True)

    def no_commas(self) -> "FormatSpec":
        return self.merge(grouping=False)

    def always_sign(self) -> "FormatSpec":
        return self.merge(sign=Sign.ALWAYS)

    def type_prefix(self) -> "FormatSpec":
        """Alternate form: radix prefixes and forced decimal points."""
        return self.merge(symbol=True)

    def percentage(self) -> "FormatSpec":
        return self.merge(type=FormatType.PERCENT)

    def si(self) -> "FormatSpec":
        return self.merge(type=FormatType.SI)

    def scientific(self) -> "FormatSpec":
        return self.merge(type=FormatType.EXPONENT)

    def fixed(self) -> "FormatSpec":
        return self.merge(type=FormatType.FIXED)

    def hex(self) -> "FormatSpec":
        return self.merge(type=FormatType.HEX)


# Methods --------------------------------------------------------------------------------------------------------------

def parse_spec(text: "str | FormatSpec") -> FormatSpec:
    """
    Parse format specifier text into a resolved FormatSpec.

    Omitted parts take their defaults. The "0" flag without an explicit
    alignment selects sign-aware alignment, and "0" fill unless a fill is given.

    Args:
        text: Specifier text like "+08,.2f", ".2%", "#x" or "^10.3s".
            A FormatSpec is returned unchanged.

    Returns:
        The resolved FormatSpec.

    Raises:
        TypeError: If text is not a str or FormatSpec.
        SpecParseError: If text does not match the grammar or names an unknown type.

    Examples:
        >>> parse_spec("#x").symbol
        True
        >>> parse_spec("^10.3s").align
        <Align.CENTER: '^'>
    """
    if isinstance(text, FormatSpec):
        return text
    if not isinstance(text, str):
        raise TypeError(f"format specifier must be str, but got {fmt_type(text)}")

    n = len(text)
    pos = 0
    fields: dict[str, Any] = {}

    # [[fill]align]
    if n >= 2 and text[1] in _ALIGN_CHARS:
        fields["fill"], fields["align"] = text[0], text[1]
        pos = 2
    elif n >= 1 and text[0] in _ALIGN_CHARS:
        fields["align"] = text[0]
        pos = 1

    # [sign]
    if pos < n and text[pos] in _SIGN_CHARS:
        fields["sign"] = text[pos]
        pos += 1

    # ["#"]
    if pos < n and text[pos] == "#":
        fields["symbol"] = True
        pos += 1

    # ["0"]
    if pos < n and text[pos] == "0":
        fields["zero"] = True
        fields.setdefault("fill", "0")
        fields.setdefault("align", Align.SIGN_AWARE)
        pos += 1

    # [width]
    digits, pos = _read_digits(text, pos)
    if digits:
        fields["width"] = int(digits)

    # [","]
    if pos < n and text[pos] == ",":
        fields["grouping"] = True
        pos += 1

    # ["." precision]
    if pos < n and text[pos] == ".":
        digits, end = _read_digits(text, pos + 1)
        if not digits:
            token = text[pos:pos + 2]
            raise SpecParseError(f"precision digits expected after '.' at position {pos} "
                                 f"in format specifier {text!r}, got {token!r}",
                                 text=text, position=pos, token=token)
        fields["precision"] = int(digits)
        pos = end

    # [type]
    if pos < n and text[pos] in _TYPE_CHARS:
        fields["type"] = text[pos]
        pos += 1

    if pos < n:
        token = text[pos:]
        if pos == n - 1 and "type" not in fields:
            message = f"unrecognized format type {token!r} in format specifier {text!r}"
        else:
            message = f"unexpected {token!r} at position {pos} in format specifier {text!r}"
        raise SpecParseError(message, text=text, position=pos, token=token)

    return FormatSpec(**fields)


# Private Methods ------------------------------------------------------------------------------------------------------

def _read_digits(text: str, pos: int) -> tuple[str, int]:
    """Read a run of ASCII digits starting at pos."""
    end = pos
    while end < len(text) and text[end] in "0123456789":
        end += 1
    return text[pos:end], end


def _to_enum(enum_cls: type, value: Any, name: str):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise TypeError(f"{name} must be {enum_cls.__name__} or str, but got {fmt_type(value)}")
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(repr(m.value) for m in enum_cls)
        raise ValueError(f"{name} expected one of {choices} but found {fmt_value(value)}") from None
