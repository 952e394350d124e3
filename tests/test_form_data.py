"""
Tests for form_data.py
Logic testing: Decision/Branch, Boundary Value coverage
"""
import io
from datetime import date, datetime, timezone

from rest_api_client.core.form_data import FormData, serialize_to_form_data


class TestSerializeToFormData:
    """Tests for serialize_to_form_data."""

    # Happy Path: nested list and mapping keys
    def test_bracket_path_keys(self):
        form = serialize_to_form_data({"a": [1, 2], "b": {"c": True}})
        assert form.fields == [("a[]", 1), ("a[]", 2), ("b['c']", "true")]

    # Boundary: empty list under a key
    def test_empty_list(self):
        form = serialize_to_form_data({"x": []})
        assert form.fields == [("x[]", "")]

    # Decision: None is skipped
    def test_none_skipped(self):
        form = serialize_to_form_data({"a": None, "b": "kept"})
        assert form.fields == [("b", "kept")]

    # Decision: top-level None returns the accumulator unchanged
    def test_top_level_none(self):
        existing = FormData()
        existing.append("pre", "1")
        result = serialize_to_form_data(None, existing)
        assert result is existing
        assert result.fields == [("pre", "1")]

    # Decision: booleans become literal strings
    def test_booleans(self):
        form = serialize_to_form_data({"yes": True, "no": False})
        assert form.fields == [("yes", "true"), ("no", "false")]

    # Decision: dates become ISO-8601
    def test_dates(self):
        moment = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        form = serialize_to_form_data({"at": moment, "on": date(2024, 5, 1)})
        assert form.fields == [("at", "2024-05-01T12:30:00+00:00"), ("on", "2024-05-01")]

    # Path: deep nesting of objects inside arrays
    def test_objects_in_arrays(self):
        form = serialize_to_form_data({"a": {"b": [{"c": 1}, {"c": 2}]}})
        assert form.fields == [("a['b'][]['c']", 1), ("a['b'][]['c']", 2)]

    # Path: nested arrays
    def test_nested_arrays(self):
        form = serialize_to_form_data({"m": [[1, 2], []]})
        assert form.fields == [("m[][]", 1), ("m[][]", 2), ("m[][]", "")]

    # Path: other values appended as-is
    def test_primitives_as_is(self):
        upload = io.BytesIO(b"payload")
        form = serialize_to_form_data({"n": 1.5, "s": "text", "raw": b"\x00\x01", "file": upload})
        assert form.fields == [("n", 1.5), ("s", "text"), ("raw", b"\x00\x01"), ("file", upload)]

    # Path: explicit starting key path
    def test_explicit_path(self):
        form = serialize_to_form_data({"c": 1}, path="root")
        assert form.fields == [("root['c']", 1)]

    # Path: appends to an existing accumulator
    def test_existing_accumulator(self):
        form = FormData()
        result = serialize_to_form_data({"a": 1}, form)
        assert result is form
        assert len(form) == 1


class TestFormData:
    """Tests for FormData encoding."""

    # Path: headers carry the boundary
    def test_headers_include_boundary(self):
        form = FormData(boundary="testboundary")
        assert form.get_headers() == {"Content-Type": "multipart/form-data; boundary=testboundary"}

    # Path: encoded body uses the same boundary and keeps repeated names in order
    def test_encode(self):
        form = serialize_to_form_data({"a": [1, 2], "b": {"c": True}}, FormData(boundary="xyz"))
        body = form.encode()

        assert body.startswith(b"--xyz\r\n")
        assert body.rstrip().endswith(b"--xyz--")
        assert body.count(b'name="a[]"') == 2
        first = body.index(b'name="a[]"\r\n\r\n1\r\n')
        second = body.index(b'name="a[]"\r\n\r\n2\r\n')
        assert first < second
        assert b"name=\"b['c']\"\r\n\r\ntrue\r\n" in body

    # Boundary: no fields encodes to the closing delimiter only
    def test_encode_empty(self):
        form = serialize_to_form_data({}, FormData(boundary="xyz"))
        assert len(form) == 0
        assert form.encode() == b"--xyz--\r\n"

    # Path: file objects are sent as file parts
    def test_encode_file(self):
        form = FormData(boundary="xyz")
        upload = io.BytesIO(b"file-content")
        upload.name = "report.txt"
        form.append("doc", upload)
        body = form.encode()

        assert b'filename="report.txt"' in body
        assert b"file-content" in body

    # State: appending after encoding re-encodes
    def test_append_invalidates_encoding(self):
        form = FormData(boundary="xyz")
        form.append("a", "1")
        first = form.encode()
        form.append("b", "2")
        assert form.encode() != first
        assert b'name="b"' in form.getvalue()
