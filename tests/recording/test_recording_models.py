"""Tests for recording models."""

from session_digest.recording.models import (
    AddedNodeMutation,
    MouseInteractionType,
    RemovedNodeMutation,
    RRWebEvent,
    RRWebEventType,
    RRWebIncrementalSource,
    SessionDigest,
    SummaryNode,
)

# =============================================================================
# Enum Tests
# =============================================================================


class TestRRWebEventType:
    """Tests for RRWebEventType enum."""

    def test_event_type_values(self):
        """Test event type values match the rrweb wire format."""
        assert RRWebEventType.DOM_CONTENT_LOADED == 0
        assert RRWebEventType.LOAD == 1
        assert RRWebEventType.FULL_SNAPSHOT == 2
        assert RRWebEventType.INCREMENTAL_SNAPSHOT == 3
        assert RRWebEventType.META == 4
        assert RRWebEventType.CUSTOM == 5
        assert RRWebEventType.PLUGIN == 6


class TestRRWebIncrementalSource:
    """Tests for RRWebIncrementalSource enum."""

    def test_incremental_source_values(self):
        """Test incremental source values."""
        assert RRWebIncrementalSource.MUTATION == 0
        assert RRWebIncrementalSource.MOUSE_MOVE == 1
        assert RRWebIncrementalSource.MOUSE_INTERACTION == 2
        assert RRWebIncrementalSource.SCROLL == 3
        assert RRWebIncrementalSource.VIEWPORT_RESIZE == 4
        assert RRWebIncrementalSource.INPUT == 5
        assert RRWebIncrementalSource.TOUCH_MOVE == 6
        assert RRWebIncrementalSource.ADOPTED_STYLE_SHEET == 15


class TestMouseInteractionType:
    """Tests for MouseInteractionType enum."""

    def test_mouse_interaction_values(self):
        """Test mouse interaction type values."""
        assert MouseInteractionType.MOUSE_UP == 0
        assert MouseInteractionType.CLICK == 2
        assert MouseInteractionType.FOCUS == 5
        assert MouseInteractionType.TOUCH_END == 9


# =============================================================================
# RRWebEvent Tests
# =============================================================================


class TestRRWebEvent:
    """Tests for RRWebEvent dataclass."""

    def test_from_dict(self):
        """Test creating event from dictionary."""
        event = RRWebEvent.from_dict({
            "type": 3,
            "timestamp": 1500,
            "windowId": "abc",
            "data": {"source": 2, "type": 2, "id": 9},
        })

        assert event.type == 3
        assert event.kind == RRWebEventType.INCREMENTAL_SNAPSHOT
        assert event.source == RRWebIncrementalSource.MOUSE_INTERACTION
        assert event.timestamp == 1500
        assert event.window_id == "abc"

    def test_unknown_type_preserved(self):
        """Unknown types stay raw instead of being coerced."""
        event = RRWebEvent.from_dict({"type": 42, "timestamp": 0, "data": {}})

        assert event.type == 42
        assert event.kind is None

    def test_missing_fields(self):
        """Missing fields fall back to safe defaults."""
        event = RRWebEvent.from_dict({})

        assert event.kind is None
        assert event.timestamp == 0
        assert event.data == {}
        assert event.window_id == ""

    def test_non_dict_data(self):
        """Non-object payloads are replaced with an empty dict."""
        event = RRWebEvent.from_dict({"type": 5, "timestamp": 1, "data": "text"})

        assert event.data == {}

    def test_source_only_for_incremental(self):
        """Non-incremental events have no source."""
        event = RRWebEvent(type=4, timestamp=0, data={"source": 2})

        assert event.source is None
        assert event.raw_source == 2

    def test_unknown_source(self):
        """Unknown incremental sources map to None."""
        event = RRWebEvent(type=3, timestamp=0, data={"source": 99})

        assert event.source is None
        assert event.raw_source == 99


class TestMutationEntries:
    """Tests for mutation entry models."""

    def test_added_node_from_dict(self):
        """Test reading an adds entry."""
        add = AddedNodeMutation.from_dict({"parentId": 1, "nextId": 3, "node": {"id": 2}})

        assert add.parent_id == 1
        assert add.node == {"id": 2}

    def test_removed_node_from_dict(self):
        """Test reading a removes entry."""
        remove = RemovedNodeMutation.from_dict({"id": 4, "parentId": 1})

        assert remove.id == 4
        assert remove.parent_id == 1


# =============================================================================
# SummaryNode Tests
# =============================================================================


class TestSummaryNode:
    """Tests for SummaryNode dataclass."""

    def test_leaf_to_dict(self):
        """Absent attributes are omitted."""
        node = SummaryNode(label="Page Load", timestamp_start=20)

        assert node.to_dict() == {"label": "Page Load", "timestampStart": 20}
        assert node.is_group is False

    def test_truncated_to_dict(self):
        """Truncated nodes carry the full details."""
        node = SummaryNode(
            label="Custom Event",
            timestamp_start=0,
            details={"a": "x"},
            truncated=True,
            full_details={"a": "xyz"},
        )

        assert node.to_dict() == {
            "label": "Custom Event",
            "timestampStart": 0,
            "details": {"a": "x"},
            "truncated": True,
            "fullDetails": {"a": "xyz"},
        }

    def test_untruncated_flag_serialized(self):
        """A False truncated flag is still emitted."""
        node = SummaryNode(label="Text Input", timestamp_start=0, details={}, truncated=False)

        assert node.to_dict()["truncated"] is False

    def test_span(self):
        """Span nodes report their end."""
        node = SummaryNode(label="Mouse Movement", timestamp_start=100, timestamp_end=250)

        assert node.end_or_start == 250
        assert node.to_dict()["timestampEnd"] == 250

    def test_group_to_dict(self):
        """Group nodes serialize their children."""
        child = SummaryNode(label="Custom Event", timestamp_start=5)
        group = SummaryNode(
            label="DOM Mutations and Events",
            timestamp_start=5,
            timestamp_end=5,
            details={"count": 1},
            children=[child],
        )

        assert group.is_group is True
        assert group.to_dict()["children"] == [{"label": "Custom Event", "timestampStart": 5}]


class TestSessionDigest:
    """Tests for SessionDigest dataclass."""

    def test_to_dict(self):
        """Test digest serialization."""
        digest = SessionDigest(
            session_id="rec-1",
            nodes=[SummaryNode(label="Page Load", timestamp_start=0)],
            event_count=3,
            duration_ms=900,
        )

        assert digest.node_count == 1
        assert digest.to_dict() == {
            "session_id": "rec-1",
            "event_count": 3,
            "duration_ms": 900,
            "nodes": [{"label": "Page Load", "timestampStart": 0}],
        }
