"""Tests for recording intake."""

import json

import pytest

from session_digest.recording.intake import RecordingFormatError, load_recording
from session_digest.recording.models import RRWebEventType


EVENTS = [
    {"type": 4, "timestamp": 0, "data": {"href": "https://example.com"}},
    {"type": 2, "timestamp": 5, "data": {"node": {}}},
]


class TestLoadRecordingShapes:
    """Tests for the accepted recording shapes."""

    @pytest.mark.parametrize(
        "payload",
        [
            EVENTS,
            {"data": {"snapshots": EVENTS}},
            {"snapshots": EVENTS},
            {"events": EVENTS, "metadata": {}},
        ],
    )
    def test_supported_shapes(self, payload):
        """All supported wrappers yield the same events."""
        events = load_recording(payload)

        assert [e.kind for e in events] == [RRWebEventType.META, RRWebEventType.FULL_SNAPSHOT]

    def test_json_string(self):
        """JSON text is parsed."""
        events = load_recording(json.dumps({"data": {"snapshots": EVENTS}}))

        assert len(events) == 2

    def test_file_path(self, tmp_path):
        """Recordings are read from disk."""
        path = tmp_path / "recording.json"
        path.write_text(json.dumps({"data": {"snapshots": EVENTS}}), encoding="utf-8")

        assert len(load_recording(path)) == 2
        assert len(load_recording(str(path))) == 2

    def test_empty_list(self):
        """An empty recording is valid."""
        assert load_recording([]) == []


class TestLoadRecordingErrors:
    """Tests for intake failures."""

    def test_invalid_json(self):
        """Malformed JSON raises RecordingFormatError."""
        with pytest.raises(RecordingFormatError, match="not valid JSON"):
            load_recording("{not json")

    def test_missing_file(self, tmp_path):
        """Missing files raise RecordingFormatError."""
        with pytest.raises(RecordingFormatError, match="Cannot read"):
            load_recording(tmp_path / "missing.json")

    def test_non_utf8_file(self, tmp_path):
        """Files that are not UTF-8 raise RecordingFormatError."""
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe{}")

        with pytest.raises(RecordingFormatError, match="not UTF-8"):
            load_recording(path)

    def test_unsupported_shape(self):
        """Objects without an event list are rejected."""
        with pytest.raises(RecordingFormatError, match="Unsupported recording shape"):
            load_recording({"data": {"other": []}})

    def test_non_object_entry(self):
        """Every event must be an object."""
        with pytest.raises(RecordingFormatError, match="Event 1"):
            load_recording([EVENTS[0], "oops"])

    def test_is_value_error(self):
        """Format errors are ValueErrors."""
        assert issubclass(RecordingFormatError, ValueError)
