"""CSV splitting and text rendering for Tables.

split_csv() is the parsing half used by Table.from_csv().  The render_*
functions turn a Table back into text: CSV, a markdown table, or a plain
grid for terminals.  Absent cells always render as empty strings.
"""

import logging

from immutable_table.config import get_settings
from immutable_table.constants import MARKDOWN_PIPE, ROW_SEPARATOR

logger = logging.getLogger(__name__)


# ─── CSV Parsing ─────────────────────────────────────────────────────────────


def split_csv(text: str, delimiter: str | None = None) -> list[list[str]]:
    """Split CSV text into rows of whitespace-stripped fields (no quoting support)."""
    delimiter = delimiter or get_settings().csv_delimiter
    return [[field.strip() for field in line.split(delimiter)] for line in text.split(ROW_SEPARATOR)]


# ─── Rendering ───────────────────────────────────────────────────────────────


def _row_values(table, y: int, *, trim: bool = False) -> list[str]:
    """Return row *y* as strings, with "" for absent cells (trailing ones dropped if *trim*)."""
    values = []
    last_present = -1
    for x in range(table.width):
        if table.has_cell(x, y):
            last_present = x
            values.append(str(table.get_cell(x, y)))
        else:
            values.append("")
    return values[: last_present + 1] if trim else values


def render_csv(table, delimiter: str | None = None) -> str:
    """Render *table* as CSV, one line per row.

    Trailing absent cells are omitted, so a ragged table parsed by
    Table.from_csv() renders back to the same shape.
    """
    delimiter = delimiter or get_settings().csv_delimiter
    return ROW_SEPARATOR.join(delimiter.join(_row_values(table, y, trim=True)) for y in range(table.height))


def _escape_markdown(value: str) -> str:
    """Escape pipe characters so a value cannot split a markdown cell."""
    return value.replace(MARKDOWN_PIPE, "\\" + MARKDOWN_PIPE)


def render_markdown(table, title: str | None = None) -> str:
    """Convert *table* into a markdown table string, using the first row as the header row."""
    lines: list[str] = []
    if title:
        lines.extend([f"**{title}**", ""])
    if table.width == 0 or table.height == 0:
        logger.debug("Rendering empty %dx%d table as markdown", table.width, table.height)
        return "\n".join(lines)

    # Header row + separator
    header = [_escape_markdown(value) for value in _row_values(table, 0)]
    lines.append("| " + " | ".join(header) + " |")
    lines.append("| " + " | ".join(["---"] * table.width) + " |")

    # Data rows
    for y in range(1, table.height):
        row = [_escape_markdown(value) for value in _row_values(table, y)]
        lines.append("| " + " | ".join(row) + " |")

    return "\n".join(lines)


def render_grid(table) -> str:
    """Render *table* as left-aligned columns separated by two spaces (for terminals)."""
    rows = [_row_values(table, y) for y in range(table.height)]
    widths = [max((len(row[x]) for row in rows), default=0) for x in range(table.width)]
    return "\n".join("  ".join(value.ljust(widths[x]) for x, value in enumerate(row)).rstrip() for row in rows)
