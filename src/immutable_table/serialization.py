"""JSON serialization for Tables.

A serialized Table is a single-key wrapper object whose key is the sentinel
TABLE_JSON_ID and whose value is the table's plain-data payload encoded as a
JSON *string*:

    {"__IMMUTABLE-TABLE": "{\"width\": 3, \"height\": 2, \"data\": {\"0\": {\"1\": \"a\"}}}"}

The double encoding keeps sentinel detection to a single key lookup and lets a
table sit anywhere inside a larger JSON document without key collisions.

Encoding happens through TableJSONEncoder (pass ``cls=TableJSONEncoder`` to
json.dumps, or use dumps() below).  Decoding happens through the object_hook
returned by make_reviver(); Tables nested as cell values are rebuilt too,
because the embedded payload is parsed with the same hook.
"""

import json
import logging
from typing import TYPE_CHECKING, Any, Callable

from immutable_table.constants import TABLE_JSON_ID
from immutable_table.schema import SerializedTable

if TYPE_CHECKING:
    from immutable_table.table import Table

logger = logging.getLogger(__name__)

Reviver = Callable[[Any], Any]


class TableJSONEncoder(json.JSONEncoder):
    """JSONEncoder that writes every Table it meets as its sentinel wrapper object."""

    def default(self, o):
        from immutable_table.table import Table  # pylint: disable=import-outside-toplevel

        if isinstance(o, Table):
            return o.to_json()
        return super().default(o)


def table_payload(table: "Table") -> dict:
    """Return the plain-data form of *table* with decimal-string keys in sorted order."""
    data = table.to_dict()
    return {
        "width": table.width,
        "height": table.height,
        "data": {str(x): {str(y): data[x][y] for y in sorted(data[x])} for x in sorted(data)},
    }


def encode_table(table: "Table") -> dict[str, str]:
    """Wrap *table*'s JSON-encoded payload under the sentinel key."""
    return {TABLE_JSON_ID: json.dumps(table_payload(table), cls=TableJSONEncoder)}


def decode_table(embedded: str, object_hook: Reviver | None = None) -> "Table":
    """Rebuild a Table from the embedded payload string of a sentinel wrapper.

    Raises pydantic.ValidationError if the payload is malformed or has keys
    outside the declared dimensions.
    """
    from immutable_table.table import Table  # pylint: disable=import-outside-toplevel

    payload = SerializedTable.model_validate(json.loads(embedded, object_hook=object_hook))
    logger.debug("Rehydrated %dx%d table from JSON", payload.width, payload.height)
    return Table.from_dict(payload.width, payload.height, payload.data)


def make_reviver(wrapped_reviver: Reviver | None = None) -> Reviver:
    """Return an object_hook for json.loads that turns sentinel wrappers back into Tables.

    For each decoded JSON object, *wrapped_reviver* (if given) runs first; if
    the result carries the sentinel key it is replaced by the rebuilt Table,
    otherwise it is returned unchanged.  The embedded payload of a table is
    outside the caller's document, so *wrapped_reviver* never sees it; only
    nested sentinel wrappers inside it are rebuilt.
    """

    def rebuild(value: Any) -> Any:
        if isinstance(value, dict) and TABLE_JSON_ID in value:
            return decode_table(value[TABLE_JSON_ID], object_hook=rebuild)
        return value

    if wrapped_reviver is None:
        return rebuild

    def reviver(value: Any) -> Any:
        return rebuild(wrapped_reviver(value))

    return reviver


def dumps(obj: Any, **kwargs) -> str:
    """json.dumps with Table support."""
    kwargs.setdefault("cls", TableJSONEncoder)
    return json.dumps(obj, **kwargs)


def loads(text: str, reviver: Reviver | None = None, **kwargs) -> Any:
    """json.loads that rebuilds serialized Tables, optionally chaining *reviver* first."""
    return json.loads(text, object_hook=make_reviver(reviver), **kwargs)
