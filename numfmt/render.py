"""
Render numbers into human-readable strings according to a format specifier.

    >>> format_number(",.0f", 1234567)
    '1,234,567'
    >>> format_number(".2s", 1_234_000.0)
    '1.23M'
    >>> format_number("#X", 255)
    '0xFF'
    >>> format_number("+08,.2f", -1234.5)
    '-1,234.50'

Rendering is a pure function of the specifier, the value and the module options
(see numfmt.conf.configure). Values are coerced to float first, all conversions
work on the magnitude and the sign is attached afterwards.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import math
import warnings
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .conf import FormatConf, FormatOptions, get_options
from .numeric import std_float
from .spec import Align, FormatSpec, FormatType, Sign, parse_spec
from .tools import fmt_value

log = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")


# Methods --------------------------------------------------------------------------------------------------------------

def format_number(pattern: str | FormatSpec, value: Any) -> str:
    """
    Format a number to the human-readable form defined by the format specifier.

    Args:
        pattern: Specifier text (see numfmt.spec) or a parsed FormatSpec.
        value: Anything convertible to float, see numfmt.numeric.std_float().

    Returns:
        The rendered string. Its length is at least spec.width; zero padding
        with grouping may exceed it by a character so that no group starts with
        a separator.

    Raises:
        SpecParseError: If pattern is malformed.
        TypeError: If value is not numeric.
        OverflowError: If a radix type gets a magnitude beyond the signed 64-bit
            range while options.radix_overflow is "raise".

    Notes:
        - A negative value whose rendered digits are all zero loses its minus
          sign under the default "-" sign policy, except for radix types:
          there -0.5 renders "-0" while -0.0 renders "0"
        - NaN and infinities render as options.nan / options.inf (upper case
          for X, E and F types) and are never grouped or radix-prefixed
        - Radix types truncate the magnitude toward zero
    """
    spec = parse_spec(pattern)
    options = get_options()
    number = std_float(value)
    ftype = spec.type

    finite = math.isfinite(number)
    # Radix types render integers, which have no negative zero
    if ftype.is_radix:
        negative = number < 0
    else:
        negative = math.copysign(1.0, number) < 0 and not math.isnan(number)
    magnitude = abs(number)
    unit = "%" if ftype == FormatType.PERCENT else ""
    si_prefix = ""

    if not finite:
        text = options.nan if math.isnan(number) else options.inf
        numeric = text.upper() if ftype.is_upper else text
    elif ftype == FormatType.PERCENT:
        numeric = f"{magnitude * 100:.{spec.precision}f}"
    elif ftype.is_radix:
        numeric = _radix_digits(magnitude, ftype, negative=negative, options=options)
    elif ftype in (FormatType.FIXED, FormatType.FIXED_ALT):
        numeric = f"{magnitude:.{spec.precision}f}"
        if spec.symbol and spec.precision == 0:
            numeric += "."
    elif ftype in (FormatType.EXPONENT, FormatType.EXPONENT_UPPER):
        numeric = _exponent_digits(magnitude, spec.precision, upper=ftype.is_upper, alternate=spec.symbol)
    elif ftype == FormatType.SI:
        numeric, si_prefix = _si_digits(magnitude, spec.precision)
    else:
        numeric = f"{magnitude:.{spec.precision}f}"

    # A value rounded to zero must not display a spurious minus
    if (negative and finite and not ftype.is_radix
            and spec.sign == Sign.NEGATIVE_ONLY
            and float(numeric) == 0):
        negative = False

    sign = _sign_prefix(negative, spec.sign)
    radix_prefix = FormatConf.RADIX_PREFIXES[ftype.value] if (spec.symbol and ftype.is_radix and finite) else ""

    # Integer digits are grouped, everything from the first non-digit on is suffix
    if not finite:
        digits, decimal_part = "", numeric
    elif ftype.is_radix:
        digits, decimal_part = numeric, ""
    else:
        digits, decimal_part = _split_digits(numeric)

    prefix = f"{sign}{radix_prefix}"
    suffix = f"{decimal_part}{si_prefix}{unit}"
    grouping = spec.grouping and finite

    if grouping and not spec.zero:
        digits = group_digits(digits, sep=options.thousands)

    length = len(prefix) + len(digits) + len(suffix)
    padding = spec.fill * (spec.width - length) if length < spec.width else ""

    # Zero padding is grouped together with the digits
    if grouping and spec.zero:
        digits = _zero_grouped(digits, spec.width - len(prefix) - len(suffix), sep=options.thousands)
        padding = ""

    if spec.align == Align.LEFT:
        return f"{prefix}{digits}{suffix}{padding}"
    if spec.align == Align.SIGN_AWARE:
        return f"{prefix}{padding}{digits}{suffix}"
    if spec.align == Align.CENTER:
        half = len(padding) // 2
        return f"{padding[:half]}{prefix}{digits}{suffix}{padding[half:]}"
    return f"{padding}{prefix}{digits}{suffix}"


def group_digits(digits: str, *, sep: str = ",", group: int = FormatConf.THOUSANDS_GROUP) -> str:
    """
    Insert separators between groups of digits, counting from the right.

    Args:
        digits: Run of digits without sign or decimal part.
        sep: Group separator.
        group: Digits per group.

    Examples:
        >>> group_digits("1234567")
        '1,234,567'
        >>> group_digits("1234567", group=4)
        '123,4567'
    """
    parts = []
    i = len(digits)
    while i > 0:
        parts.append(digits[max(0, i - group):i])
        i -= group
    return sep.join(reversed(parts))


# Private Methods ------------------------------------------------------------------------------------------------------

def _zero_grouped(digits: str, budget: int, *, sep: str) -> str:
    """
    Left-pad digits with zeros and group them until the grouped text fills budget.

    Leading zeros are added one at a time so that the result never starts
    with a separator and no significant digit is dropped.
    """
    grouped = group_digits(digits, sep=sep)
    while len(grouped) < budget:
        digits = "0" + digits
        grouped = group_digits(digits, sep=sep)
    return grouped


def _split_digits(numeric: str) -> tuple[str, str]:
    """Split rendered text into its leading digit run and the rest."""
    for i, ch in enumerate(numeric):
        if ch not in _DIGITS:
            return numeric[:i], numeric[i:]
    return numeric, ""


def _sign_prefix(negative: bool, policy: Sign) -> str:
    if negative:
        return "-"
    if policy == Sign.ALWAYS:
        return "+"
    if policy == Sign.SPACE:
        return " "
    return ""


def _radix_digits(magnitude: float, ftype: FormatType, *, negative: bool, options: FormatOptions) -> str:
    """Truncate magnitude to a signed 64-bit integer and render it in the radix of ftype."""
    integer = int(magnitude)
    limit = FormatConf.I64_MAX + 1 if negative else FormatConf.I64_MAX
    if integer > limit:
        if options.radix_overflow == "raise":
            raise OverflowError(f"magnitude {fmt_value(magnitude)} exceeds the signed 64-bit range "
                                f"of radix format {ftype.value!r}")
        warnings.warn(f"magnitude {magnitude!r} saturated to {limit} for radix format {ftype.value!r}",
                      RuntimeWarning, stacklevel=3)
        log.debug("radix magnitude %r saturated to %d", magnitude, limit)
        integer = limit
    return format(integer, ftype.value)


def _exponent_digits(magnitude: float, precision: int, *, upper: bool, alternate: bool) -> str:
    """
    Scientific notation with a signed, unpadded exponent: 1.23e+4, 5e-7.

    The alternate form keeps the decimal point when precision is 0: 5.e-7.
    """
    mantissa, exponent = f"{magnitude:.{precision}e}".split("e")
    if alternate and precision == 0:
        mantissa += "."
    exponent = int(exponent)
    letter = "E" if upper else "e"
    return f"{mantissa}{letter}{'-' if exponent < 0 else '+'}{abs(exponent)}"


def _si_digits(magnitude: float, precision: int) -> tuple[str, str]:
    """
    Scale magnitude into its power-of-1000 bucket and render the mantissa.

    Buckets outside the SI table clamp to its ends (y and Y); a mantissa
    rounded up to 1000 moves to the next bucket.

    Returns:
        Fixed-point mantissa and the SI prefix letter.
    """
    lo, hi = -FormatConf.SI_OFFSET, FormatConf.SI_OFFSET

    if magnitude == 0:
        bucket = 0
    else:
        bucket = min(max(math.floor(math.log10(magnitude) / 3), lo), hi)
        # log10 is inexact near powers of 1000
        if bucket < hi and magnitude >= 10.0 ** (3 * (bucket + 1)):
            bucket += 1
        elif bucket > lo and magnitude < 10.0 ** (3 * bucket):
            bucket -= 1

    text = f"{magnitude / 10.0 ** (3 * bucket):.{precision}f}"
    if bucket < hi and float(text) >= 1000:
        bucket += 1
        text = f"{magnitude / 10.0 ** (3 * bucket):.{precision}f}"

    return text, FormatConf.SI_PREFIX_LIST[bucket + FormatConf.SI_OFFSET]
