"""
Sentinel objects for distinguishing an omitted argument from an explicit None.

Used by the merge() methods of format specifiers and options, where None can be
a legitimate override value (for example ``max_width=None`` removes a limit).

Example:
    >>> def merge(self, width: int | UnsetType = UNSET):
    ...     width = ifnotunset(width, default=self.width)
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifnotunset',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType:
    """
    Sentinel type for UNSET.

    Singleton compared by identity. Falsy, hashable and pickles back to the same instance.
    """
    __slots__ = ()

    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


UNSET: Final[UnsetType] = UnsetType()


# Methods --------------------------------------------------------------------------------------------------------------

def ifnotunset(value: Any, *, default: Any) -> Any:
    """Return default if value is UNSET, otherwise return value."""
    return default if value is UNSET else value
