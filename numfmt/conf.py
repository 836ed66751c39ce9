"""
Constants and runtime options for number rendering.

FormatConf holds fixed tables (SI prefixes, radix prefixes, default precisions).
FormatOptions holds the few behaviours a caller may tune for the whole process,
changed with configure() and read with get_options().
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Literal, Self

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNSET, UnsetType, ifnotunset
from .tools import fmt_type, fmt_value

log = logging.getLogger(__name__)


# @formatter:off

class FormatConf:
    """
    Constant tables used by the specifier model and the renderer.

    Attributes:
        SI_PREFIXES: SI prefix letters for 10^(3N) exponents, N in -8..8.
            The renderer indexes it by bucket, so 10^0 maps to no prefix.

        SI_OFFSET: Bucket index of the empty prefix in SI_PREFIX_LIST.

        SI_PREFIX_LIST: SI_PREFIXES values ordered by exponent.

        RADIX_PREFIXES: Alternate form prefixes per radix type character.
            Upper case hex keeps the lower case "0x" prefix.

        DEFAULT_PRECISION: Precision used when the specifier text has none,
            keyed by type character ("" is the general type).

        THOUSANDS_GROUP: Digits per thousands group.
    """

    SI_PREFIXES = frozendict({
        -24: "y",   # yocto
        -21: "z",   # zepto
        -18: "a",   # atto
        -15: "f",   # femto
        -12: "p",   # pico  = 10⁻¹²
        -9: "n",    # nano  = 10⁻⁹
        -6: "µ",    # micro = 10⁻⁶
        -3: "m",    # milli = 10⁻³
        0: "",      # (no prefix) = 10⁰
        3: "k",     # kilo  = 10³
        6: "M",     # mega  = 10⁶
        9: "G",     # giga  = 10⁹
        12: "T",    # tera  = 10¹²
        15: "P",    # peta
        18: "E",    # exa
        21: "Z",    # zetta
        24: "Y",    # yotta
    })

    SI_PREFIX_LIST = tuple(prefix for _, prefix in sorted(SI_PREFIXES.items()))

    SI_OFFSET = 8

    RADIX_PREFIXES = frozendict({
        "b": "0b",
        "o": "0o",
        "x": "0x",
        "X": "0x",
    })

    DEFAULT_PRECISION = frozendict({
        "b": 0,
        "o": 0,
        "x": 0,
        "X": 0,
        "%": 1,
        "f": 6,
        "F": 6,
        "e": 6,
        "E": 6,
        "s": 6,
        "": 6,
    })

    THOUSANDS_GROUP = 3

    # Largest magnitude representable as a signed 64-bit integer
    I64_MAX = 2 ** 63 - 1

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FormatOptions:
    """
    Process-wide rendering options.

    Attributes:
        nan: Text rendered for NaN, upper-cased for upper case types (X, E, F).
        inf: Text rendered for infinity, upper-cased the same way.
        thousands: Group separator inserted by the "," flag.
        radix_overflow: What radix types do with magnitudes beyond the signed 64-bit range:
            - "saturate": clamp to 2**63 - 1 and emit a RuntimeWarning
            - "raise": raise OverflowError
    """
    nan: str = "nan"
    inf: str = "inf"
    thousands: str = ","
    radix_overflow: Literal["saturate", "raise"] = "saturate"

    def __post_init__(self):
        for name in ("nan", "inf", "thousands"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"{name} must be str, but got {fmt_type(value)}")
        if not self.thousands:
            raise ValueError("thousands separator must be a non-empty string")
        if any(ch.isdigit() for ch in self.thousands):
            raise ValueError(f"thousands separator must not contain digits, got {fmt_value(self.thousands)}")
        if self.radix_overflow not in ("saturate", "raise"):
            raise ValueError(f"radix_overflow expected one of 'saturate' or 'raise' "
                             f"but found {fmt_value(self.radix_overflow)}")

    @classmethod
    def strict(cls) -> Self:
        """Options which raise instead of silently clamping radix overflow."""
        return cls(radix_overflow="raise")

    def merge(self,
              nan: str | UnsetType = UNSET,
              inf: str | UnsetType = UNSET,
              thousands: str | UnsetType = UNSET,
              radix_overflow: Literal["saturate", "raise"] | UnsetType = UNSET,
              ) -> "FormatOptions":
        """
        Create a new FormatOptions instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.
        """
        return FormatOptions(
            nan=ifnotunset(nan, default=self.nan),
            inf=ifnotunset(inf, default=self.inf),
            thousands=ifnotunset(thousands, default=self.thousands),
            radix_overflow=ifnotunset(radix_overflow, default=self.radix_overflow),
        )


# Module Options -------------------------------------------------------------------------------------------------------

_PRESETS = {
    "default": FormatOptions,
    "strict": FormatOptions.strict,
}

_options: FormatOptions = FormatOptions()


def configure(preset: Literal["default", "strict"] | None = None, **overrides) -> FormatOptions:
    """
    Set module-wide rendering options.

    A preset replaces the current options before overrides are merged on top of it.
    Without a preset, overrides are merged onto the current options.

    Args:
        preset: "default", "strict" or None to keep the current options as the base.
        **overrides: FormatOptions fields to override.

    Returns:
        The options now in effect.

    Raises:
        ValueError: If the preset name is unknown.
        TypeError: If an override is not a FormatOptions field.
    """
    global _options

    if preset is None:
        base = _options
    elif preset in _PRESETS:
        base = _PRESETS[preset]()
    else:
        raise ValueError(f"unknown options preset {fmt_value(preset)}, expected one of {tuple(_PRESETS)}")

    _options = base.merge(**overrides)
    log.debug("format options set to %r", _options)
    return _options


def get_options() -> FormatOptions:
    """Return the module-wide rendering options."""
    return _options
