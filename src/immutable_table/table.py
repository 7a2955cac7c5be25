"""Persistent (immutable, copy-on-write) two-dimensional table.

A Table is a fixed-size grid of cells addressed by (column, row).  Cells are
stored sparsely as nested pyrsistent maps -- column -> (row -> value) -- so a
table with no data takes almost no space, and every derived table shares the
columns it did not touch with the table it came from.

Every "mutating" operation (set_cell, paste, slice) returns a new Table; the
receiver is never modified.

Invariants kept by all constructors:
  - column keys lie in [0, width) and row keys in [0, height)
  - no column map is empty (so equality never depends on how a table was built)
"""

import logging
from typing import Any, Callable, Iterator

from pyrsistent import PMap, pmap

from immutable_table import serialization
from immutable_table.config import get_settings
from immutable_table.coordinates import normalize_coordinates
from immutable_table.formatting import split_csv

logger = logging.getLogger(__name__)

_EMPTY: PMap = pmap()


def _check_dimensions(width: int, height: int) -> None:
    """Raise ValueError unless both dimensions are non-negative."""
    if width < 0 or height < 0:
        raise ValueError(f"Table dimensions must be non-negative, got {width}x{height}")


class Table:
    """Represents a data table in memory.  Immutable."""

    __slots__ = ("_width", "_height", "_data")

    # ─── Construction ────────────────────────────────────────────────────

    def __init__(self, width: int, height: int):
        _check_dimensions(width, height)
        object.__setattr__(self, "_width", width)
        object.__setattr__(self, "_height", height)
        object.__setattr__(self, "_data", _EMPTY)

    @classmethod
    def _derive(cls, width: int, height: int, data: PMap) -> "Table":
        """Build a table around an already-validated data map (no copying)."""
        table = cls.__new__(cls)
        object.__setattr__(table, "_width", width)
        object.__setattr__(table, "_height", height)
        object.__setattr__(table, "_data", data)
        return table

    @classmethod
    def from_csv(cls, csv: str, delimiter: str | None = None) -> "Table":
        """Create a table from a CSV representation.

        One row per line, one column per delimited field; fields are stripped
        of surrounding whitespace and kept as strings.  The width is the
        longest line's field count, so shorter lines leave their trailing
        cells absent.
        """
        rows = split_csv(csv, delimiter)
        width = max((len(row) for row in rows), default=0)
        columns: dict[int, dict[int, str]] = {}
        for y, row in enumerate(rows):
            for x, item in enumerate(row):
                columns.setdefault(x, {})[y] = item
        logger.debug("Parsed CSV into %dx%d table", width, len(rows))
        return cls._derive(width, len(rows), pmap({x: pmap(column) for x, column in columns.items()}))

    @classmethod
    def from_dict(cls, width: int, height: int, data: dict[int, dict[int, Any]]) -> "Table":
        """Build a table from a plain ``{column: {row: value}}`` mapping.

        Raises IndexError if any key lies outside the given dimensions.  Empty
        columns are dropped.
        """
        _check_dimensions(width, height)
        columns = {}
        for x, column in data.items():
            if not 0 <= x < width:
                raise IndexError(f"column {x} out of range for table width {width}")
            for y in column:
                if not 0 <= y < height:
                    raise IndexError(f"row {y} out of range for table height {height}")
            if column:
                columns[x] = pmap(column)
        return cls._derive(width, height, pmap(columns))

    # ─── Properties ──────────────────────────────────────────────────────

    @property
    def width(self) -> int:
        """The number of addressable columns."""
        return self._width

    @property
    def height(self) -> int:
        """The number of addressable rows."""
        return self._height

    def __setattr__(self, name, value):
        raise AttributeError(f"Table is immutable; cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Table is immutable; cannot delete {name!r}")

    # ─── Cell Access ─────────────────────────────────────────────────────

    def get_cell(self, x: int, y: int, default: Any = None) -> Any:
        """Get a value in the table.

        Negative x / y address columns from the right and rows from the
        bottom.  Returns *default* when the cell is unset.  Raises IndexError
        for coordinates outside the table.
        """
        x, y = normalize_coordinates(x, y, self._width, self._height)
        return self._data.get(x, _EMPTY).get(y, default)

    def has_cell(self, x: int, y: int) -> bool:
        """Return True if the cell holds a value (even a falsy one)."""
        x, y = normalize_coordinates(x, y, self._width, self._height)
        return y in self._data.get(x, _EMPTY)

    def set_cell(self, x: int, y: int, value: Any) -> "Table":
        """Set a value, or a whole sub-table, and return the derived table.

        If *value* is a Table its cells are pasted with their top-left corner
        at (x, y) -- see paste().  Any other value is stored as-is.
        """
        if isinstance(value, Table):
            return self.paste(x, y, value)
        x, y = normalize_coordinates(x, y, self._width, self._height)
        column = self._data.get(x, _EMPTY)
        return self._derive(self._width, self._height, self._data.set(x, column.set(y, value)))

    def paste(self, x: int, y: int, table: "Table") -> "Table":
        """Stamp *table*'s populated cells onto this one at offset (x, y).

        The pasted table must fit entirely (no clipping), otherwise
        OverflowError is raised.  Where both tables define a cell, the pasted
        value wins; cells outside the pasted footprint are untouched.  The
        result keeps this table's dimensions.
        """
        x, y = normalize_coordinates(x, y, self._width, self._height)
        if table.width + x > self._width:
            raise OverflowError("table overflows x dimension")
        if table.height + y > self._height:
            raise OverflowError("table overflows y dimension")

        logger.debug("Pasting %dx%d table at (%d, %d)", table.width, table.height, x, y)
        evolver = self._data.evolver()
        for from_x, column in table._data.items():  # pylint: disable=protected-access
            target = self._data.get(from_x + x, _EMPTY)
            evolver[from_x + x] = target.update({from_y + y: value for from_y, value in column.items()})
        return self._derive(self._width, self._height, evolver.persistent())

    # ─── Slicing ─────────────────────────────────────────────────────────

    def slice(self, start_x: int, start_y: int, end_x: int | None = None, end_y: int | None = None) -> "Table":
        """Get a subset of the table, re-indexed so (start_x, start_y) becomes (0, 0).

        The region is [start_x, end_x) x [start_y, end_y).  All bounds accept
        negative indices.  When end_x is omitted the slice runs to the right
        and bottom edges; end_y is never defaulted on its own.  An inverted
        range yields a zero-sized table along that axis.
        """
        start_x, start_y = normalize_coordinates(start_x, start_y, self._width, self._height)
        if end_x is None:
            end_x, end_y = self._width, self._height
        elif end_y is None:
            raise TypeError("slice() requires end_y when end_x is given")
        else:
            end_x, end_y = normalize_coordinates(end_x, end_y, self._width, self._height)

        width = max(end_x - start_x, 0)
        height = max(end_y - start_y, 0)
        logger.debug("Slicing [%d, %d) x [%d, %d) -> %dx%d", start_x, end_x, start_y, end_y, width, height)

        # Full-height window: whole columns can be shared without re-keying rows
        full_rows = start_y == 0 and end_y == self._height
        evolver = _EMPTY.evolver()
        for from_x, column in self._data.items():
            if not start_x <= from_x < end_x:
                continue
            if full_rows:
                evolver[from_x - start_x] = column
                continue
            kept = {from_y - start_y: value for from_y, value in column.items() if start_y <= from_y < end_y}
            if kept:
                evolver[from_x - start_x] = pmap(kept)
        return self._derive(width, height, evolver.persistent())

    # ─── Iteration / Plain Data ──────────────────────────────────────────

    def cells(self) -> Iterator[tuple[int, int, Any]]:
        """Yield (x, y, value) for every populated cell, column by column."""
        for x in sorted(self._data):
            column = self._data[x]
            for y in sorted(column):
                yield x, y, column[y]

    def to_dict(self) -> dict[int, dict[int, Any]]:
        """Return the sparse contents as plain nested dicts ``{column: {row: value}}``."""
        return {x: dict(column) for x, column in self._data.items()}

    # ─── Equality ────────────────────────────────────────────────────────

    def equals(self, other: Any) -> bool:
        """Structural equality: same dimensions and same populated cells with equal values."""
        if not isinstance(other, Table):
            return False
        if self is other:
            return True
        return self._width == other._width and self._height == other._height and self._data == other._data

    def __eq__(self, other):
        if not isinstance(other, Table):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash((self._width, self._height, self._data))

    # ─── Serialization ───────────────────────────────────────────────────

    def to_json(self) -> dict[str, str]:
        """Serialize the table to its JSON wrapper object.

        Used automatically by serialization.TableJSONEncoder; deserialize with
        json.loads(..., object_hook=Table.make_reviver()).
        """
        return serialization.encode_table(self)

    @staticmethod
    def make_reviver(wrapped_reviver: Callable[[Any], Any] | None = None) -> Callable[[Any], Any]:
        """Make an object_hook for json.loads that rebuilds serialized Tables.

        *wrapped_reviver*, if given, runs first on every decoded object.
        """
        return serialization.make_reviver(wrapped_reviver)

    # ─── Text Forms ──────────────────────────────────────────────────────

    def __str__(self):
        limit = get_settings().repr_max_cells
        entries = []
        for index, (x, y, value) in enumerate(self.cells()):
            if index == limit:
                entries.append("...")
                break
            entries.append(f"({x}, {y}): {value!r}")
        return f"Table {{width: {self._width}, height: {self._height}, cells: {{{', '.join(entries)}}}}}"

    def __repr__(self):
        populated = sum(len(column) for column in self._data.values())
        return f"Table(width={self._width}, height={self._height}, populated={populated})"
