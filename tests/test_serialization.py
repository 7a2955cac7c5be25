"""Unit tests for JSON serialization: to_json, TableJSONEncoder, make_reviver, dumps/loads.

Also covers the SerializedTable Pydantic model that validates the embedded
payload during deserialization.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

import pytest
from pydantic import ValidationError

from immutable_table import TABLE_JSON_ID, Table
from immutable_table.schema import SerializedTable
from immutable_table.serialization import TableJSONEncoder, dumps, loads, make_reviver, table_payload


def make_3x3() -> Table:
    """Build the 3x3 table 1..9."""
    return Table.from_csv("1, 2, 3\n4, 5, 6\n7, 8, 9")


def wrap(payload: dict) -> str:
    """Hand-build a serialized table document from a payload dict."""
    return json.dumps({TABLE_JSON_ID: json.dumps(payload)})


# ===========================================================================
# to_json / payload tests
# ===========================================================================


class TestToJson:

    def test_wrapper_has_single_sentinel_key(self):
        wrapper = make_3x3().to_json()
        assert list(wrapper) == [TABLE_JSON_ID]
        assert isinstance(wrapper[TABLE_JSON_ID], str)

    def test_embedded_payload_shape(self):
        t = Table(3, 2).set_cell(2, 1, "x")
        payload = json.loads(t.to_json()[TABLE_JSON_ID])
        assert payload == {"width": 3, "height": 2, "data": {"2": {"1": "x"}}}

    def test_payload_keys_are_sorted_decimal_strings(self):
        t = Table(12, 12).set_cell(10, 0, "b").set_cell(2, 11, "a").set_cell(2, 3, "c")
        payload = table_payload(t)
        assert list(payload["data"]) == ["2", "10"]
        assert list(payload["data"]["2"]) == ["3", "11"]

    def test_serialization_is_deterministic(self):
        a = Table(3, 3).set_cell(2, 2, "z").set_cell(0, 0, "a")
        b = Table(3, 3).set_cell(0, 0, "a").set_cell(2, 2, "z")
        assert dumps(a) == dumps(b)


# ===========================================================================
# Round-trip tests
# ===========================================================================


class TestRoundTrip:

    def test_serialization_round_trip(self):
        t = make_3x3()
        serialized = json.dumps(t, cls=TableJSONEncoder)
        assert isinstance(serialized, str)
        u = json.loads(serialized, object_hook=Table.make_reviver())
        assert isinstance(u, Table)
        assert t.equals(u)

    def test_round_trip_with_absent_cells(self):
        t = Table.from_csv("1,2,3\n4")
        u = loads(dumps(t))
        assert u == t
        assert not u.has_cell(2, 1)

    def test_round_trip_after_slice_and_paste(self):
        t = make_3x3()
        t = t.set_cell(0, 0, t.slice(1, 1)).slice(0, 1)
        assert loads(dumps(t)) == t

    def test_round_trip_empty_table(self):
        t = Table(0, 0)
        assert loads(dumps(t)) == t

    def test_round_trip_explicit_none(self):
        t = Table(2, 1).set_cell(1, 0, None)
        u = loads(dumps(t))
        assert u.has_cell(1, 0)
        assert u == t

    def test_round_trip_json_values(self):
        t = Table(2, 1).set_cell(0, 0, {"a": [1, 2]}).set_cell(1, 0, 3.5)
        u = loads(dumps(t))
        assert u.get_cell(0, 0) == {"a": [1, 2]}
        assert u.get_cell(1, 0) == 3.5

    def test_table_inside_larger_document(self):
        doc = {"name": "grid", "tables": [make_3x3(), Table(1, 1)]}
        revived = loads(dumps(doc))
        assert revived["name"] == "grid"
        assert revived["tables"][0] == make_3x3()
        assert revived["tables"][1] == Table(1, 1)

    def test_nested_table_as_cell_value(self):
        inner = Table(1, 1).set_cell(0, 0, "inner")
        outer = Table.from_dict(2, 1, {1: {0: inner}})
        revived = loads(dumps(outer))
        assert isinstance(revived.get_cell(1, 0), Table)
        assert revived == outer


# ===========================================================================
# make_reviver tests
# ===========================================================================


class TestMakeReviver:

    def test_non_sentinel_values_pass_through(self):
        assert json.loads('{"a": {"b": 1}}', object_hook=make_reviver()) == {"a": {"b": 1}}

    def test_wrapped_reviver_runs_first(self):
        seen = []

        def record(value):
            seen.append(value)
            return value

        json.loads(dumps({"t": Table(1, 1)}), object_hook=make_reviver(record))
        assert any(TABLE_JSON_ID in value for value in seen)

    def test_wrapped_reviver_can_transform(self):
        def upper_keys(value):
            return {key.upper(): val for key, val in value.items()}

        assert loads('{"a": 1}', reviver=upper_keys) == {"A": 1}

    def test_transforming_reviver_keeps_table_round_trip(self):
        def upper_keys(value):
            return {key.upper(): val for key, val in value.items()}

        t = Table.from_csv("1,2\n3,4")
        assert loads(dumps(t), reviver=upper_keys) == t

    def test_transforming_reviver_on_document_with_tables(self):
        def tag(value):
            return {**value, "_seen": True}

        t = make_3x3()
        inner = Table(1, 1).set_cell(0, 0, "inner")
        outer = Table.from_dict(2, 1, {1: {0: inner}})
        revived = loads(dumps({"t": t, "nested": outer}), reviver=tag)
        assert revived["_seen"] is True
        assert revived["t"] == t
        assert revived["nested"] == outer
        assert revived["nested"].get_cell(1, 0) == inner

    def test_wrapped_reviver_does_not_see_table_payload(self):
        seen = []

        def record(value):
            seen.append(value)
            return value

        loads(dumps({"t": make_3x3()}), reviver=record)
        assert all("width" not in value for value in seen)
        assert len(seen) == 2

    def test_static_method_matches_module_function(self):
        text = dumps(make_3x3())
        assert json.loads(text, object_hook=Table.make_reviver()) == loads(text)


# ===========================================================================
# SerializedTable / malformed payload tests
# ===========================================================================


class TestSerializedTable:

    def test_string_keys_become_ints(self):
        payload = SerializedTable.model_validate({"width": 2, "height": 2, "data": {"1": {"0": "x"}}})
        assert payload.data == {1: {0: "x"}}

    def test_rejects_negative_width(self):
        with pytest.raises(ValidationError):
            SerializedTable(width=-1, height=2, data={})

    def test_rejects_column_outside_width(self):
        with pytest.raises(ValidationError):
            SerializedTable.model_validate({"width": 2, "height": 2, "data": {"2": {"0": "x"}}})

    def test_rejects_row_outside_height(self):
        with pytest.raises(ValidationError):
            SerializedTable.model_validate({"width": 2, "height": 2, "data": {"0": {"9": "x"}}})

    def test_malformed_document_raises(self):
        with pytest.raises(ValidationError):
            loads(wrap({"width": 2, "height": 2, "data": {"0": {"5": "x"}}}))

    def test_missing_field_raises(self):
        with pytest.raises(ValidationError):
            loads(wrap({"width": 2, "data": {}}))

    def test_hand_written_document_revives(self):
        t = loads(wrap({"width": 2, "height": 2, "data": {"1": {"1": "d"}, "0": {}}}))
        assert t == Table(2, 2).set_cell(1, 1, "d")
