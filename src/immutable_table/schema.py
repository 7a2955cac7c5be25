"""Pydantic model for the JSON payload embedded in a serialized Table.

JSON forces object keys to strings, so column and row indices arrive as
decimal strings ("0", "12", ...).  Validating through this model turns them
back into integers and checks them against the declared width/height.
"""

from typing import Any

from pydantic import BaseModel, NonNegativeInt, model_validator


class SerializedTable(BaseModel):
    """Plain-data form of a Table: dimensions plus the sparse column -> row -> value mapping."""

    width: NonNegativeInt
    height: NonNegativeInt
    data: dict[int, dict[int, Any]]

    @model_validator(mode="after")
    def validate_cell_keys(self) -> "SerializedTable":
        """Ensure every column key is in [0, width) and every row key in [0, height)."""
        for x, column in self.data.items():
            if not 0 <= x < self.width:
                raise ValueError(f"Column {x} outside table width {self.width}")
            for y in column:
                if not 0 <= y < self.height:
                    raise ValueError(f"Row {y} in column {x} outside table height {self.height}")
        return self
