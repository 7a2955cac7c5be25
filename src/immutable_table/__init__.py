"""Persistent, copy-on-write two-dimensional tables.

Submodules:
  constants      -- sentinel tag and fixed defaults
  coordinates    -- negative-index normalization and bounds checks
  table          -- the immutable Table value type
  schema         -- SerializedTable Pydantic model for the JSON payload
  serialization  -- JSON encoder, reviver, dumps/loads helpers
  formatting     -- CSV splitting and CSV / markdown / grid rendering
  config         -- environment-driven settings (python-dotenv)
  cli            -- immutable-table command-line entry point
"""

from immutable_table.constants import TABLE_JSON_ID
from immutable_table.table import Table

__all__ = ["TABLE_JSON_ID", "Table"]
