"""
Per-column cell formats for tabular display.

A CellFormat is a closed union over the four concrete formatter kinds (number,
binary, string, bool). CellFormatShorthand adds an unresolved kind which holds
only width constraints until the data kind of the column is known; finalize()
turns it into a CellFormat. ColumnFormat names a column and carries its widths
and optional format.

    >>> column = ColumnFormat().with_name("gas_used").with_min_width(8)
    >>> format_column(column, [21000, 1234567])
    ['   21000', ' 1234567']
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import logging
import numbers
from dataclasses import dataclass, replace as dataclasses_replace
from enum import StrEnum, unique
from typing import Any, Iterable, Mapping, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .formats import BinaryFormat, BoolFormat, NumberFormat, StringFormat, UnknownFormat
from .spec import FormatType
from .tools import fmt_type, fmt_value

log = logging.getLogger(__name__)

ConcreteFormat = NumberFormat | BinaryFormat | StringFormat | BoolFormat


# Exceptions -----------------------------------------------------------------------------------------------------------

class MismatchedFormatType(TypeError):
    """A formatter of one kind was requested as another kind."""


class UnsupportedDatatype(TypeError):
    """No formatter kind can render the data kind of a column."""


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class DataKind(StrEnum):
    """Kind of the values stored in a column."""
    STRING = "string"
    BOOLEAN = "boolean"
    BINARY = "binary"
    INTEGER = "integer"
    FLOAT = "float"
    TEMPORAL = "temporal"
    OBJECT = "object"


@unique
class FormatKind(StrEnum):
    """Kind of a cell formatter."""
    NUMBER = "number"
    BINARY = "binary"
    STRING = "string"
    BOOL = "bool"
    UNKNOWN = "unknown"


_KINDS = {
    NumberFormat: FormatKind.NUMBER,
    BinaryFormat: FormatKind.BINARY,
    StringFormat: FormatKind.STRING,
    BoolFormat: FormatKind.BOOL,
    UnknownFormat: FormatKind.UNKNOWN,
}


@dataclass(frozen=True)
class CellFormat:
    """
    Concrete cell formatter of one of the kinds number, binary, string or bool.

    Raises:
        TypeError: If fmt is not one of the concrete formatters.
    """
    fmt: ConcreteFormat

    def __post_init__(self):
        if type(self.fmt) not in _KINDS or isinstance(self.fmt, UnknownFormat):
            raise TypeError(f"fmt must be NumberFormat, BinaryFormat, StringFormat or BoolFormat, "
                            f"but got {fmt_type(self.fmt)}")

    @property
    def kind(self) -> FormatKind:
        return _KINDS[type(self.fmt)]

    @property
    def min_width(self) -> int:
        return self.fmt.min_width

    @property
    def max_width(self) -> int | None:
        return self.fmt.max_width

    def with_min_width(self, min_width: int) -> "CellFormat":
        return CellFormat(self.fmt.with_min_width(min_width))

    def with_max_width(self, max_width: int | None) -> "CellFormat":
        return CellFormat(self.fmt.with_max_width(max_width))

    def format(self, value: Any) -> str:
        return self.fmt.format(value)

    def as_number(self) -> NumberFormat:
        return self._as(FormatKind.NUMBER, "NumberFormat")

    def as_binary(self) -> BinaryFormat:
        return self._as(FormatKind.BINARY, "BinaryFormat")

    def as_string(self) -> StringFormat:
        return self._as(FormatKind.STRING, "StringFormat")

    def as_bool(self) -> BoolFormat:
        return self._as(FormatKind.BOOL, "BoolFormat")

    def _as(self, kind: FormatKind, name: str):
        if self.kind != kind:
            raise MismatchedFormatType(f"not a {name}: {self.kind} format")
        return self.fmt


@dataclass(frozen=True)
class CellFormatShorthand:
    """
    Cell formatter which may still be unresolved.

    Example:
        >>> CellFormatShorthand(UnknownFormat(min_width=6)).finalize(DataKind.INTEGER).format(42)
        '    42'
    """
    fmt: ConcreteFormat | UnknownFormat

    def __post_init__(self):
        if type(self.fmt) not in _KINDS:
            raise TypeError(f"fmt must be a cell formatter, but got {fmt_type(self.fmt)}")

    @property
    def kind(self) -> FormatKind:
        return _KINDS[type(self.fmt)]

    def with_min_width(self, min_width: int) -> "CellFormatShorthand":
        return CellFormatShorthand(self.fmt.with_min_width(min_width))

    def with_max_width(self, max_width: int | None) -> "CellFormatShorthand":
        return CellFormatShorthand(self.fmt.with_max_width(max_width))

    def finalize(self, kind: DataKind | str) -> CellFormat:
        """
        Resolve into a CellFormat for data of the given kind.

        Concrete formatters are kept as they are. An unknown format becomes:
            string  → StringFormat
            boolean → BoolFormat
            binary  → BinaryFormat
            integer → NumberFormat, fixed-point with precision 0
            float   → NumberFormat, exponent notation

        Raises:
            UnsupportedDatatype: If an unknown format meets any other data kind.
        """
        kind = DataKind(kind)
        fmt = self.fmt
        if not isinstance(fmt, UnknownFormat):
            return CellFormat(fmt)

        if kind == DataKind.STRING:
            resolved = fmt.to_string()
        elif kind == DataKind.BOOLEAN:
            resolved = fmt.to_bool()
        elif kind == DataKind.BINARY:
            resolved = fmt.to_binary()
        elif kind == DataKind.INTEGER:
            resolved = fmt.to_number().with_type(FormatType.FIXED).with_precision(0)
        elif kind == DataKind.FLOAT:
            resolved = fmt.to_number().with_type(FormatType.EXPONENT)
        else:
            raise UnsupportedDatatype(f"unsupported datatype: {kind}")

        log.debug("resolved unknown format for %s data to %r", kind, resolved)
        return CellFormat(resolved)


@dataclass(frozen=True)
class ColumnFormat:
    """
    Display configuration of one table column.

    Attributes:
        name: Column name in the data.
        display_name: Header text, defaults to name.
        min_width: Width used when no format is given.
        max_width: Width limit used when no format is given.
        format: Explicit cell format, None resolves by data kind.
    """
    name: str = ""
    display_name: str = ""
    min_width: int | None = None
    max_width: int | None = None
    format: CellFormatShorthand | None = None

    def __post_init__(self):
        if isinstance(self.format, (CellFormat, *_KINDS)):
            fmt = self.format.fmt if isinstance(self.format, CellFormat) else self.format
            object.__setattr__(self, "format", CellFormatShorthand(fmt))
        elif self.format is not None and not isinstance(self.format, CellFormatShorthand):
            raise TypeError(f"format must be a cell formatter or None, but got {fmt_type(self.format)}")

    # Builder --------------------------------------------------------------------------------

    def with_name(self, name: str) -> "ColumnFormat":
        """Set the name, and the display name too while it is empty."""
        return dataclasses_replace(self, name=name, display_name=self.display_name or name)

    def with_display_name(self, display_name: str) -> "ColumnFormat":
        return dataclasses_replace(self, display_name=display_name)

    def newline_underscores(self) -> "ColumnFormat":
        """Break the display name into lines at underscores."""
        return dataclasses_replace(self, display_name=self.display_name.replace("_", "\n"))

    def with_min_width(self, min_width: int) -> "ColumnFormat":
        return dataclasses_replace(self, min_width=min_width)

    def no_min_width(self) -> "ColumnFormat":
        return dataclasses_replace(self, min_width=None)

    def with_max_width(self, max_width: int) -> "ColumnFormat":
        return dataclasses_replace(self, max_width=max_width)

    def no_max_width(self) -> "ColumnFormat":
        return dataclasses_replace(self, max_width=None)

    def with_format(self, fmt: CellFormatShorthand | CellFormat | ConcreteFormat | UnknownFormat) -> "ColumnFormat":
        return dataclasses_replace(self, format=fmt)

    # Formats --------------------------------------------------------------------------------

    def number_format(self) -> NumberFormat:
        """
        NumberFormat of this column, built from the widths when no format is set.

        Raises:
            MismatchedFormatType: If the column has a format of another kind.
        """
        if self.format is None or isinstance(self.format.fmt, UnknownFormat):
            return self._unknown().to_number()
        if self.format.kind == FormatKind.NUMBER:
            return self.format.fmt
        raise MismatchedFormatType(f"column {self.name} requires NumberFormat")

    def binary_format(self) -> BinaryFormat:
        """
        BinaryFormat of this column, built from the widths when no format is set.

        Raises:
            MismatchedFormatType: If the column has a format of another kind.
        """
        if self.format is None or isinstance(self.format.fmt, UnknownFormat):
            return self._unknown().to_binary()
        if self.format.kind == FormatKind.BINARY:
            return self.format.fmt
        raise MismatchedFormatType(f"column {self.name} requires BinaryFormat")

    def cell_format(self, kind: DataKind | str) -> CellFormat:
        """Resolve the cell format of this column for data of the given kind."""
        if self.format is None or isinstance(self.format.fmt, UnknownFormat):
            return CellFormatShorthand(self._unknown()).finalize(kind)
        return self.format.finalize(kind)

    def _unknown(self) -> UnknownFormat:
        fmt = self.format.fmt if self.format is not None else UnknownFormat()
        return UnknownFormat(
            min_width=self.min_width if self.min_width is not None else fmt.min_width,
            max_width=self.max_width if self.max_width is not None else fmt.max_width,
        )


# Methods --------------------------------------------------------------------------------------------------------------

def infer_kind(values: Iterable[Any]) -> DataKind | None:
    """
    Data kind of the first non-None value, None for an empty or all-None column.

    Examples:
        >>> infer_kind([None, 1.5])
        <DataKind.FLOAT: 'float'>
        >>> infer_kind([]) is None
        True
    """
    for value in values:
        if value is None:
            continue
        if isinstance(value, bool):
            return DataKind.BOOLEAN
        if isinstance(value, str):
            return DataKind.STRING
        if isinstance(value, (bytes, bytearray, memoryview)):
            return DataKind.BINARY
        if isinstance(value, numbers.Integral) or hasattr(value, "__index__"):
            return DataKind.INTEGER
        if isinstance(value, numbers.Real) or hasattr(value, "__float__"):
            return DataKind.FLOAT
        if isinstance(value, (dt.date, dt.time, dt.timedelta)):
            return DataKind.TEMPORAL
        return DataKind.OBJECT
    return None


def format_column(column: ColumnFormat, values: Sequence[Any], kind: DataKind | str | None = None) -> list[str]:
    """
    Render the values of one column into cells of equal width.

    None values render as blank cells. Strings are left-justified to the
    common width, everything else right-justified.

    Args:
        column: Column configuration.
        values: Column values.
        kind: Data kind of the values, inferred from them when None.

    Raises:
        UnsupportedDatatype: If no formatter kind handles the data kind.
        MismatchedFormatType: Propagated from formatters given wrong values.
    """
    kind = kind if kind is not None else infer_kind(values)
    if kind is None:
        return [" " * (column.min_width or 0) for _ in values]

    cell = column.cell_format(kind)
    cells = ["" if value is None else cell.format(value) for value in values]
    width = max([cell.min_width, *(len(c) for c in cells)])
    if cell.kind == FormatKind.STRING:
        return [c.ljust(width) for c in cells]
    return [c.rjust(width) for c in cells]


def format_table(columns: Sequence[ColumnFormat], data: Mapping[str, Sequence[Any]], *,
                 sep: str = "  ", header: bool = True) -> str:
    """
    Render columns of data as a plain text table.

    Headers follow the justification of their cells: left for string
    columns, right for everything else.

    Args:
        columns: Columns to render, in display order.
        data: Values by column name; all columns must have the same length.
        sep: Text between columns.
        header: Whether to render display names above the values.

    Raises:
        KeyError: If a column name is missing from data.
        ValueError: If columns have different lengths.
    """
    rendered = []
    justify = []
    for column in columns:
        if column.name not in data:
            raise KeyError(f"column {column.name!r} not found in data")
        values = data[column.name]
        rendered.append(format_column(column, values))
        kind = infer_kind(values)
        left = kind is not None and column.cell_format(kind).kind == FormatKind.STRING
        justify.append(str.ljust if left else str.rjust)

    lengths = {len(cells) for cells in rendered}
    if len(lengths) > 1:
        raise ValueError(f"columns must have the same length, got lengths {fmt_value(sorted(lengths))}")

    widths = [max([len(cells[0]) if cells else 0, *_header_widths(col, header)])
              for col, cells in zip(columns, rendered)]

    lines = []
    if header:
        header_lines = [col.display_name.split("\n") for col in columns]
        for i in range(max((len(h) for h in header_lines), default=0)):
            lines.append(sep.join(
                just(h[i] if i < len(h) else "", w) for h, w, just in zip(header_lines, widths, justify)
            ).rstrip())
    for row in zip(*rendered):
        lines.append(sep.join(just(c, w) for c, w, just in zip(row, widths, justify)).rstrip())
    return "\n".join(lines)


# Private Methods ------------------------------------------------------------------------------------------------------

def _header_widths(column: ColumnFormat, header: bool) -> list[int]:
    if not header:
        return []
    return [len(line) for line in column.display_name.split("\n")]
