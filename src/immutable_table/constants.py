"""Fixed strings and defaults shared across the immutable_table package.

The sentinel tag identifies a serialized Table inside an arbitrary JSON
document.  Used by serialization.py, formatting.py and config.py.
"""

# ─── Serialization ────────────────────────────────────────────────────────────

# Single key of the wrapper object produced by Table.to_json()
TABLE_JSON_ID = "__IMMUTABLE-TABLE"


# ─── CSV / Text Rendering ─────────────────────────────────────────────────────

# Rows are always newline-separated; no quoting or escaping is supported
ROW_SEPARATOR = "\n"

DEFAULT_CSV_DELIMITER = ","

# Upper bound on cells listed by str(table) before truncating with "..."
DEFAULT_REPR_MAX_CELLS = 20

# Markdown cell separator; occurrences inside values are escaped
MARKDOWN_PIPE = "|"


# ─── Environment Variables ────────────────────────────────────────────────────

ENV_PREFIX = "IMMUTABLE_TABLE_"
