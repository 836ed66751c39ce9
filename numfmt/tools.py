"""
Formatting helpers for exception and log messages.

Short, robust type-value tokens like ``<int: 42>`` that survive broken __repr__
and never grow beyond a bounded length.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, show_module: bool = False) -> str:
    """Format type information for exception messages.

    Args:
        obj: Any Python object or type.
        show_module: Whether to include module name for non-builtin types.

    Returns:
        Formatted string like "<type: int>".

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(int)
        '<type: int>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)

    try:
        type_name = target_type.__name__
    except AttributeError:
        type_name = str(target_type)

    if show_module:
        module_name = getattr(target_type, "__module__", None)
        if module_name and module_name != "builtins":
            type_name = f"{module_name}.{type_name}"

    return f"<type: {type_name}>"


def fmt_value(x: Any, *, max_repr: int = 80) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Broken __repr__ methods are replaced by a fallback token, long reprs are truncated.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=8)
        "<str: 'hell'...>"
    """
    t = type(x).__name__

    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {_fmt_truncate(base_repr, max_repr)}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """
    Truncate s to at most max_len visible characters before appending the ellipsis.

    Quoted reprs keep their quotes and get the ellipsis outside the closing quote.
    """
    if max_len <= 0:
        return ""
    if len(s) <= max_len:
        return s

    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner_budget = max(1, max_len - 4)
        return f"{s[0]}{s[1:1 + inner_budget]}{s[0]}{ellipsis}"

    return s[:max(1, max_len)] + ellipsis
