"""rrweb event summarizer - Condense a recording into reviewable nodes.

The summarizer runs in two stages:
1. classify: one forward pass turning raw events into leaf and span nodes,
   dropping noise and size-limiting every attached payload
2. group: batch consecutive atomic detail nodes (DOM additions/removals,
   custom and plugin events) under a single group node

Which incremental sources are kept, spanned or dropped is decided by an
explicit source policy table rather than by dispatch fall-through.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..utils.logging import get_logger
from .models import (
    AddedNodeMutation,
    MouseInteractionType,
    RemovedNodeMutation,
    RRWebEvent,
    RRWebEventType,
    RRWebIncrementalSource,
    SessionDigest,
    SummaryNode,
)
from .size_limiter import TruncationPolicy, limit_data_size

logger = get_logger(__name__)


# =============================================================================
# Labels
# =============================================================================

PAGE_NAVIGATION = "Page Navigation"
DOM_CONTENT_LOADED = "DOM Content Loaded"
PAGE_LOAD = "Page Load"
FULL_SNAPSHOT = "Full Snapshot"
CUSTOM_EVENT = "Custom Event"
PLUGIN_EVENT = "Plugin Event"
UNKNOWN_EVENT = "Unknown Event"
MOUSE_MOVEMENT = "Mouse Movement"
MOUSE_INTERACTION = "Mouse Interaction"
TEXT_INPUT = "Text Input"
VIEWPORT_RESIZE = "Viewport Resize"
ELEMENT_ADDED = "Element Added"
ELEMENT_REMOVED = "Element Removed"
UNKNOWN_INCREMENTAL_EVENT = "Unknown Incremental Event"
GROUP_LABEL = "DOM Mutations and Events"

BARE_EVENT_LABELS = {
    RRWebEventType.DOM_CONTENT_LOADED: DOM_CONTENT_LOADED,
    RRWebEventType.LOAD: PAGE_LOAD,
    RRWebEventType.FULL_SNAPSHOT: FULL_SNAPSHOT,
}

SOURCE_LABELS = {
    RRWebIncrementalSource.MUTATION: "DOM Mutation",
    RRWebIncrementalSource.MOUSE_MOVE: MOUSE_MOVEMENT,
    RRWebIncrementalSource.MOUSE_INTERACTION: MOUSE_INTERACTION,
    RRWebIncrementalSource.SCROLL: "Scroll",
    RRWebIncrementalSource.VIEWPORT_RESIZE: VIEWPORT_RESIZE,
    RRWebIncrementalSource.INPUT: TEXT_INPUT,
    RRWebIncrementalSource.TOUCH_MOVE: MOUSE_MOVEMENT,
    RRWebIncrementalSource.MEDIA_INTERACTION: "Media Interaction",
    RRWebIncrementalSource.STYLE_SHEET_RULE: "Style Sheet Rule",
    RRWebIncrementalSource.CANVAS_MUTATION: "Canvas Mutation",
    RRWebIncrementalSource.FONT: "Font",
    RRWebIncrementalSource.LOG: "Console Log",
    RRWebIncrementalSource.DRAG: "Drag",
    RRWebIncrementalSource.STYLE_DECLARATION: "Style Declaration",
    RRWebIncrementalSource.SELECTION: "Selection",
    RRWebIncrementalSource.ADOPTED_STYLE_SHEET: "Adopted Style Sheet",
}

# Nodes batched together by the grouping pass
ATOMIC_LABELS = frozenset({ELEMENT_ADDED, ELEMENT_REMOVED, PLUGIN_EVENT, CUSTOM_EVENT})

INTERACTION_NAMES = {
    MouseInteractionType.MOUSE_UP: "Mouse Up",
    MouseInteractionType.MOUSE_DOWN: "Mouse Down",
    MouseInteractionType.CLICK: "Click",
    MouseInteractionType.CONTEXT_MENU: "Context Menu",
    MouseInteractionType.DBL_CLICK: "DblClick",
    MouseInteractionType.FOCUS: "Focus",
    MouseInteractionType.BLUR: "Blur",
    MouseInteractionType.TOUCH_START: "Touch Start",
    MouseInteractionType.TOUCH_END: "Touch End",
}

DEFAULT_EXCLUDED_INTERACTIONS = frozenset({
    MouseInteractionType.MOUSE_UP,
    MouseInteractionType.MOUSE_DOWN,
    MouseInteractionType.FOCUS,
    MouseInteractionType.BLUR,
})

# Keys copied through the size limiter untouched, per node kind
CUSTOM_EXEMPT_KEYS = ("parentId", "plugin", "tag")
PLUGIN_EXEMPT_KEYS = ("plugin",)
INTERACTION_EXEMPT_KEYS = ("element",)
INPUT_EXEMPT_KEYS = ("element", "value")
RESIZE_EXEMPT_KEYS = ("width", "height")
ADDED_EXEMPT_KEYS = ("parentId",)
REMOVED_EXEMPT_KEYS = ("id", "parentId")


# =============================================================================
# Source Policy
# =============================================================================


class SourcePolicy(str, Enum):
    """What the classification pass does with an incremental source."""

    SUMMARIZE = "summarize"  # One leaf node per event
    SPAN = "span"  # Coalesce consecutive events into one span node
    DROP = "drop"  # No node


_S = RRWebIncrementalSource

# Keyed by source; None stands for an unrecognized source value.
DEFAULT_SOURCE_POLICY: dict[Optional[RRWebIncrementalSource], SourcePolicy] = {
    _S.MUTATION: SourcePolicy.SUMMARIZE,
    _S.MOUSE_MOVE: SourcePolicy.SPAN,
    _S.MOUSE_INTERACTION: SourcePolicy.SUMMARIZE,
    _S.SCROLL: SourcePolicy.DROP,
    _S.VIEWPORT_RESIZE: SourcePolicy.SUMMARIZE,
    _S.INPUT: SourcePolicy.SUMMARIZE,
    _S.TOUCH_MOVE: SourcePolicy.SPAN,
    _S.MEDIA_INTERACTION: SourcePolicy.DROP,
    _S.STYLE_SHEET_RULE: SourcePolicy.DROP,
    _S.CANVAS_MUTATION: SourcePolicy.DROP,
    _S.FONT: SourcePolicy.DROP,
    _S.LOG: SourcePolicy.DROP,
    _S.DRAG: SourcePolicy.DROP,
    _S.STYLE_DECLARATION: SourcePolicy.DROP,
    _S.SELECTION: SourcePolicy.DROP,
    _S.ADOPTED_STYLE_SHEET: SourcePolicy.DROP,
    None: SourcePolicy.DROP,
}

VERBOSE_SOURCE_POLICY: dict[Optional[RRWebIncrementalSource], SourcePolicy] = {
    **DEFAULT_SOURCE_POLICY,
    _S.SCROLL: SourcePolicy.SPAN,
    _S.MEDIA_INTERACTION: SourcePolicy.SUMMARIZE,
    _S.STYLE_SHEET_RULE: SourcePolicy.SUMMARIZE,
    _S.CANVAS_MUTATION: SourcePolicy.SUMMARIZE,
    _S.FONT: SourcePolicy.SUMMARIZE,
    _S.LOG: SourcePolicy.SUMMARIZE,
    _S.DRAG: SourcePolicy.SUMMARIZE,
    _S.STYLE_DECLARATION: SourcePolicy.SUMMARIZE,
    _S.SELECTION: SourcePolicy.SUMMARIZE,
    _S.ADOPTED_STYLE_SHEET: SourcePolicy.SUMMARIZE,
    None: SourcePolicy.SUMMARIZE,
}


# =============================================================================
# Accumulator
# =============================================================================


@dataclass
class _Accumulator:
    """Working state of one classification pass."""

    first_timestamp: int
    nodes: list[SummaryNode] = field(default_factory=list)
    open_span: Optional[SummaryNode] = None
    dropped: int = 0

    def append(self, node: SummaryNode) -> None:
        self.nodes.append(node)

    def span(self, label: str, timestamp: int) -> None:
        """Extend the open span, or open a new one.

        A span only keeps growing while it is the most recent node, so any
        other node appended in between closes it.
        """
        span = self.open_span
        if span is not None and span.label == label and self.nodes and self.nodes[-1] is span:
            span.timestamp_end = timestamp
            return
        span = SummaryNode(label=label, timestamp_start=timestamp, timestamp_end=timestamp)
        self.nodes.append(span)
        self.open_span = span


def _as_code(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _entries(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


# =============================================================================
# Summarizer
# =============================================================================


class EventSummarizer:
    """Summarizer for rrweb recordings.

    Turns a raw rrweb event log into a short list of SummaryNode objects
    that a person can skim without replaying the session.

    Example:
        summarizer = EventSummarizer()
        nodes = summarizer.summarize(events)
    """

    def __init__(
        self,
        truncation: TruncationPolicy | None = None,
        source_policy: Mapping[Optional[RRWebIncrementalSource], SourcePolicy] | None = None,
        excluded_interactions: Iterable[int] = DEFAULT_EXCLUDED_INTERACTIONS,
    ):
        """Initialize summarizer with configuration.

        Args:
            truncation: Size limits for node details (exempt keys are set per node kind)
            source_policy: Incremental source handling table
            excluded_interactions: Mouse interaction codes that produce no node
        """
        self.truncation = truncation or TruncationPolicy()
        self.source_policy = dict(source_policy or DEFAULT_SOURCE_POLICY)
        self.excluded_interactions = frozenset(excluded_interactions)
        self.log = logger.bind(component="event_summarizer")

    @classmethod
    def from_settings(cls, settings) -> "EventSummarizer":
        """Build a summarizer from DigestSettings."""
        return cls(
            truncation=TruncationPolicy(
                max_string_length=settings.max_string_length,
                max_container_size=settings.max_container_size,
                marker=settings.truncation_marker,
            ),
            source_policy=VERBOSE_SOURCE_POLICY if settings.verbose_sources else DEFAULT_SOURCE_POLICY,
        )

    def policy_for(self, source: Optional[RRWebIncrementalSource]) -> SourcePolicy:
        return self.source_policy.get(source, self.source_policy.get(None, SourcePolicy.DROP))

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def summarize(self, events: Iterable[RRWebEvent | dict]) -> list[SummaryNode]:
        """Classify then group a complete, ordered event log.

        Args:
            events: rrweb events (RRWebEvent objects or raw dicts)

        Returns:
            Ordered list of summary nodes
        """
        events = _coerce_events(events)
        acc = self._classify(events)
        nodes = self.group(acc.nodes)

        self.log.info(
            "Summarization complete",
            event_count=len(events),
            node_count=len(nodes),
            group_count=sum(1 for node in nodes if node.is_group),
            dropped_count=acc.dropped,
        )
        return nodes

    def digest(self, events: Iterable[RRWebEvent | dict], session_id: str = "recording") -> SessionDigest:
        """Summarize events into a SessionDigest with session totals."""
        events = _coerce_events(events)
        digest = SessionDigest(
            session_id=session_id,
            nodes=self.summarize(events),
            event_count=len(events),
        )
        if events:
            digest.duration_ms = events[-1].timestamp - events[0].timestamp
        return digest

    def classify(self, events: Iterable[RRWebEvent | dict]) -> list[SummaryNode]:
        """First pass: one flat list of leaf and span nodes."""
        return self._classify(_coerce_events(events)).nodes

    def group(self, nodes: list[SummaryNode]) -> list[SummaryNode]:
        """Second pass: merge each run of atomic detail nodes into a group.

        Runs never cross a non-atomic node and a single atomic node still
        becomes a group of one. Existing group nodes are left as they are.
        """
        grouped: list[SummaryNode] = []
        run: list[SummaryNode] = []

        for node in nodes:
            if node.label in ATOMIC_LABELS and not node.is_group:
                run.append(node)
                continue
            if run:
                grouped.append(_group_node(run))
                run = []
            grouped.append(node)

        if run:
            grouped.append(_group_node(run))
        return grouped

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def _classify(self, events: list[RRWebEvent]) -> _Accumulator:
        if not events:
            return _Accumulator(first_timestamp=0)

        acc = _Accumulator(first_timestamp=events[0].timestamp)
        for event in events:
            self._process_event(event, acc)

        self.log.debug(
            "Classification pass complete",
            event_count=len(events),
            node_count=len(acc.nodes),
            dropped_count=acc.dropped,
        )
        return acc

    def _process_event(self, event: RRWebEvent, acc: _Accumulator):
        """Process a single rrweb event."""
        timestamp = event.timestamp - acc.first_timestamp
        kind = event.kind

        if kind is None:
            acc.append(SummaryNode(label=UNKNOWN_EVENT, timestamp_start=timestamp))

        elif kind == RRWebEventType.META:
            self._process_meta(event, timestamp, acc)

        elif kind in BARE_EVENT_LABELS:
            acc.append(SummaryNode(label=BARE_EVENT_LABELS[kind], timestamp_start=timestamp))

        elif kind == RRWebEventType.CUSTOM:
            acc.append(self._limited_node(CUSTOM_EVENT, timestamp, event.data, CUSTOM_EXEMPT_KEYS))

        elif kind == RRWebEventType.PLUGIN:
            node = self._limited_node(PLUGIN_EVENT, timestamp, event.data, PLUGIN_EXEMPT_KEYS)
            # Plugin payloads are always shown as-is
            node.truncated = False
            node.full_details = None
            acc.append(node)

        elif kind == RRWebEventType.INCREMENTAL_SNAPSHOT:
            self._process_incremental(event, timestamp, acc)

    def _process_meta(self, event: RRWebEvent, timestamp: int, acc: _Accumulator):
        """Meta events only matter when they carry a navigation URL."""
        href = event.data.get("href")
        if href:
            acc.append(SummaryNode(
                label=PAGE_NAVIGATION,
                timestamp_start=timestamp,
                details={"url": href},
            ))
        else:
            self._drop(acc, event, "meta event without href")

    def _process_incremental(self, event: RRWebEvent, timestamp: int, acc: _Accumulator):
        """Process incremental snapshot events according to the source policy."""
        source = event.source
        policy = self.policy_for(source)

        if policy == SourcePolicy.DROP:
            self._drop(acc, event, "source dropped by policy")

        elif policy == SourcePolicy.SPAN:
            acc.span(SOURCE_LABELS.get(source, UNKNOWN_INCREMENTAL_EVENT), timestamp)

        elif source == RRWebIncrementalSource.MOUSE_INTERACTION:
            self._process_mouse_interaction(event, timestamp, acc)

        elif source == RRWebIncrementalSource.INPUT:
            self._process_input(event, timestamp, acc)

        elif source == RRWebIncrementalSource.MUTATION:
            self._process_mutation(event, timestamp, acc)

        elif source == RRWebIncrementalSource.VIEWPORT_RESIZE:
            acc.append(self._limited_node(VIEWPORT_RESIZE, timestamp, event.data, RESIZE_EXEMPT_KEYS))

        else:
            acc.append(self._limited_node(
                SOURCE_LABELS.get(source, UNKNOWN_INCREMENTAL_EVENT),
                timestamp,
                event.data,
            ))

    def _process_mouse_interaction(self, event: RRWebEvent, timestamp: int, acc: _Accumulator):
        """Process mouse interaction events (click, dblclick, etc.)."""
        data = event.data
        interaction_type = _as_code(data.get("type"))

        if interaction_type in self.excluded_interactions:
            self._drop(acc, event, "excluded interaction type")
            return

        details = {
            "element": f"Element ID {data.get('id')}",
            "interactionType": INTERACTION_NAMES.get(interaction_type, "Unknown"),
        }
        acc.append(self._limited_node(MOUSE_INTERACTION, timestamp, details, INTERACTION_EXEMPT_KEYS))

    def _process_input(self, event: RRWebEvent, timestamp: int, acc: _Accumulator):
        """Process text input events, skipping blank values."""
        data = event.data
        text = data.get("text")

        if not isinstance(text, str) or not text.strip():
            self._drop(acc, event, "blank input")
            return

        details = {
            "element": f"Element ID {data.get('id')}",
            "value": text,
        }
        node = self._limited_node(TEXT_INPUT, timestamp, details, INPUT_EXEMPT_KEYS)
        node.truncated = False
        node.full_details = None
        acc.append(node)

    def _process_mutation(self, event: RRWebEvent, timestamp: int, acc: _Accumulator):
        """Emit one leaf per added and per removed node."""
        adds = [AddedNodeMutation.from_dict(entry) for entry in _entries(event.data.get("adds"))]
        removes = [RemovedNodeMutation.from_dict(entry) for entry in _entries(event.data.get("removes"))]

        if not adds and not removes:
            self._drop(acc, event, "mutation without adds or removes")
            return

        for add in adds:
            acc.append(self._limited_node(
                ELEMENT_ADDED,
                timestamp,
                {"parentId": add.parent_id, "node": add.node},
                ADDED_EXEMPT_KEYS,
            ))

        for remove in removes:
            acc.append(self._limited_node(
                ELEMENT_REMOVED,
                timestamp,
                {"id": remove.id, "parentId": remove.parent_id},
                REMOVED_EXEMPT_KEYS,
            ))

    def _limited_node(
        self,
        label: str,
        timestamp: int,
        payload: Any,
        exempt_keys: tuple[str, ...] = (),
    ) -> SummaryNode:
        limited = limit_data_size(payload, self.truncation.with_exempt(*exempt_keys))
        return SummaryNode(
            label=label,
            timestamp_start=timestamp,
            details=limited.value,
            truncated=limited.truncated,
            full_details=limited.original,
        )

    def _drop(self, acc: _Accumulator, event: RRWebEvent, reason: str):
        acc.dropped += 1
        self.log.debug(
            "Event dropped",
            reason=reason,
            event_type=event.type,
            source=event.raw_source,
            timestamp=event.timestamp,
        )


def _group_node(run: list[SummaryNode]) -> SummaryNode:
    return SummaryNode(
        label=GROUP_LABEL,
        timestamp_start=run[0].timestamp_start,
        timestamp_end=run[-1].end_or_start,
        details={"count": len(run)},
        children=list(run),
    )


def _coerce_events(events: Iterable[RRWebEvent | dict]) -> list[RRWebEvent]:
    return [
        event if isinstance(event, RRWebEvent) else RRWebEvent.from_dict(event)
        for event in events
    ]


def summarize_events(
    events: Iterable[RRWebEvent | dict],
    **summarizer_options,
) -> list[SummaryNode]:
    """Convenience function to summarize an rrweb recording.

    Args:
        events: rrweb events (RRWebEvent objects or raw dicts)
        **summarizer_options: Options for EventSummarizer

    Returns:
        Ordered list of summary nodes
    """
    return EventSummarizer(**summarizer_options).summarize(events)
