"""
Coerce numeric values from Python stdlib and third-party libraries to float.

The renderer works on 64-bit floats only; this module is the single place where
ints, Decimals, Fractions, array scalars and Quantity-like objects become one.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value


# Methods --------------------------------------------------------------------------------------------------------------

def std_float(value) -> float:
    """
    Convert a numeric value to a Python float.

    Parameters
    ----------
    value : various
        Python int/float, Decimal, Fraction, and third-party types exposing
        __index__, .item(), .value (with .unit) or __float__.

    Returns
    -------
    float
        The value as float. Integers beyond float range become inf/-inf with
        the sign preserved, NaN and infinities pass through unchanged.

    Raises
    ------
    TypeError
        For None, bool, str and other non-numeric types.

    Detection Priority
    ------------------
    1. float / int fast path
    2. __index__() → int (NumPy integers)
    3. .item() → Python scalar (array scalars)
    4. .value when .unit is present (Astropy Quantity)
    5. __float__() (Decimal, Fraction, NumPy floats, ...)

    Examples
    --------
    >>> std_float(42)
    42.0
    >>> from decimal import Decimal
    >>> std_float(Decimal('2.5'))
    2.5
    >>> std_float(10**400)
    inf
    """
    if value is None:
        raise TypeError("cannot format None as a number")

    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool):
        raise TypeError(f"boolean values are not numbers, got {value}")

    if isinstance(value, float):
        return value

    if isinstance(value, int):
        return _int_to_float(value)

    if isinstance(value, (str, bytes, bytearray)):
        raise TypeError(f"cannot format {fmt_value(value)} as a number")

    # NumPy integer types implement __index__
    if hasattr(value, "__index__"):
        try:
            return _int_to_float(operator.index(value))
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to int via __index__: {e}") from e

    # Array and tensor scalars
    if hasattr(value, "item") and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, (int, float)) and not isinstance(result, bool):
            return std_float(result)

    # Quantity-like objects carry the magnitude in .value
    if hasattr(value, "value") and hasattr(value, "unit"):
        return std_float(value.value)

    if hasattr(value, "__float__"):
        try:
            return float(value)
        except OverflowError:
            # Fraction beyond float range
            return math.inf if value > 0 else -math.inf
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to float: {e}") from e

    raise TypeError(
        f"unsupported numeric type: {fmt_type(value)}. "
        f"Expected int, float, or types implementing __index__, __float__, "
        f".item() or having .value attribute (e.g., numpy scalars, Decimal, Fraction, Quantity)"
    )


# Private Methods ------------------------------------------------------------------------------------------------------

def _int_to_float(value: int) -> float:
    """Convert int to float, overflowing to a signed infinity."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf
