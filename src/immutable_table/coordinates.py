"""Coordinate normalization for (column, row) table addressing.

Negative indices count back from the far edge (-1 is the last column/row).
Every coordinate-accepting Table operation runs its arguments through
normalize_coordinates() before touching the data.
"""

# Axis name -> dimension it is checked against (used in error messages)
_DIMENSION = {"x": "width", "y": "height"}


def _wrap(index: int, size: int) -> int:
    """Add *size* to a negative index; leave non-negative ones alone."""
    return index + size if index < 0 else index


def _too_large(axis: str, original: int, size: int) -> IndexError:
    return IndexError(f"{axis} index {original} out of range for table {_DIMENSION[axis]} {size}")


def _too_small(axis: str, original: int, size: int) -> IndexError:
    return IndexError(f"{axis} index {original} less than 0 after wrapping (table {_DIMENSION[axis]} {size})")


def normalize_index(index: int, size: int, axis: str) -> int:
    """Return the canonical non-negative index along one axis, raising IndexError if out of range."""
    wrapped = _wrap(index, size)
    if wrapped >= size:
        raise _too_large(axis, index, size)
    if wrapped < 0:
        raise _too_small(axis, index, size)
    return wrapped


def normalize_coordinates(x: int, y: int, width: int, height: int) -> tuple[int, int]:
    """Convert negative (x, y) into positive ones and validate both against the table bounds.

    Upper bounds are checked for both axes before either lower bound, so an
    overflowing y is reported ahead of an over-negative x.  Raises IndexError
    if either coordinate falls outside [-size, size).
    """
    new_x, new_y = _wrap(x, width), _wrap(y, height)
    if new_x >= width:
        raise _too_large("x", x, width)
    if new_y >= height:
        raise _too_large("y", y, height)
    if new_x < 0:
        raise _too_small("x", x, width)
    if new_y < 0:
        raise _too_small("y", y, height)
    return new_x, new_y
