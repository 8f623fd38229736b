"""Data models for rrweb recordings and their condensed summaries."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional


class RRWebEventType(IntEnum):
    """rrweb event types."""

    DOM_CONTENT_LOADED = 0
    LOAD = 1
    FULL_SNAPSHOT = 2
    INCREMENTAL_SNAPSHOT = 3
    META = 4
    CUSTOM = 5
    PLUGIN = 6


class RRWebIncrementalSource(IntEnum):
    """rrweb incremental snapshot sources."""

    MUTATION = 0
    MOUSE_MOVE = 1
    MOUSE_INTERACTION = 2
    SCROLL = 3
    VIEWPORT_RESIZE = 4
    INPUT = 5
    TOUCH_MOVE = 6
    MEDIA_INTERACTION = 7
    STYLE_SHEET_RULE = 8
    CANVAS_MUTATION = 9
    FONT = 10
    LOG = 11
    DRAG = 12
    STYLE_DECLARATION = 13
    SELECTION = 14
    ADOPTED_STYLE_SHEET = 15


class MouseInteractionType(IntEnum):
    """Mouse interaction types in rrweb."""

    MOUSE_UP = 0
    MOUSE_DOWN = 1
    CLICK = 2
    CONTEXT_MENU = 3
    DBL_CLICK = 4
    FOCUS = 5
    BLUR = 6
    TOUCH_START = 7
    TOUCH_MOVE_DEPARTED = 8
    TOUCH_END = 9
    TOUCH_CANCEL = 10


def _coerce_enum(enum_cls, value):
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return None


@dataclass(frozen=True)
class RRWebEvent:
    """A single rrweb event as captured in the recording log."""

    type: int
    timestamp: int  # Absolute milliseconds
    data: dict = field(default_factory=dict)
    window_id: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "RRWebEvent":
        """Create RRWebEvent from dictionary.

        Unknown event types are kept as raw integers so they can be
        reported as unknown instead of being folded into another kind.
        """
        payload = data.get("data")
        return cls(
            type=data.get("type", -1),
            timestamp=data.get("timestamp", 0) or 0,
            data=payload if isinstance(payload, dict) else {},
            window_id=data.get("windowId", "") or "",
        )

    @property
    def kind(self) -> Optional[RRWebEventType]:
        """Event type as an enum, or None when unrecognized."""
        return _coerce_enum(RRWebEventType, self.type)

    @property
    def raw_source(self) -> Any:
        return self.data.get("source")

    @property
    def source(self) -> Optional[RRWebIncrementalSource]:
        """Incremental source, only meaningful for incremental snapshots."""
        if self.kind != RRWebEventType.INCREMENTAL_SNAPSHOT:
            return None
        return _coerce_enum(RRWebIncrementalSource, self.raw_source)


@dataclass(frozen=True)
class AddedNodeMutation:
    """An entry of a mutation's ``adds`` list."""

    parent_id: Optional[int] = None
    node: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "AddedNodeMutation":
        return cls(
            parent_id=data.get("parentId"),
            node=data.get("node"),
        )


@dataclass(frozen=True)
class RemovedNodeMutation:
    """An entry of a mutation's ``removes`` list."""

    id: Optional[int] = None
    parent_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "RemovedNodeMutation":
        return cls(id=data.get("id"), parent_id=data.get("parentId"))


@dataclass
class SummaryNode:
    """One entry of the condensed event summary.

    Leaf nodes describe a single event, span nodes carry ``timestamp_end``
    for a continuous activity and group nodes own a flat list of children.
    """

    label: str
    timestamp_start: int  # ms since the first event
    timestamp_end: Optional[int] = None
    details: Any = None
    truncated: Optional[bool] = None
    full_details: Any = None
    children: Optional[list["SummaryNode"]] = None

    @property
    def is_group(self) -> bool:
        return self.children is not None

    @property
    def end_or_start(self) -> int:
        if self.timestamp_end is not None:
            return self.timestamp_end
        return self.timestamp_start

    def to_dict(self) -> dict:
        """Serialize with camelCase keys, omitting absent attributes."""
        result: dict[str, Any] = {
            "label": self.label,
            "timestampStart": self.timestamp_start,
        }
        if self.timestamp_end is not None:
            result["timestampEnd"] = self.timestamp_end
        if self.details is not None:
            result["details"] = self.details
        if self.truncated is not None:
            result["truncated"] = self.truncated
        if self.full_details is not None:
            result["fullDetails"] = self.full_details
        if self.children is not None:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class SessionDigest:
    """A summarized recording session."""

    session_id: str
    nodes: list[SummaryNode] = field(default_factory=list)
    event_count: int = 0
    duration_ms: int = 0

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "event_count": self.event_count,
            "duration_ms": self.duration_ms,
            "nodes": [node.to_dict() for node in self.nodes],
        }
