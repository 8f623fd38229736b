"""Recording summarization module - Condense rrweb recordings for review.

This module turns a complete rrweb event log into a short, ordered list of
summary nodes:
- noise (mouse up/down, focus, blank input) is filtered out
- mouse movement is coalesced into spans
- DOM additions/removals, custom and plugin events are batched into groups
- large payloads are size-limited with the full value kept alongside
"""

from .intake import RecordingFormatError, load_recording
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
from .render import format_timestamp, render_json, render_text
from .size_limiter import LimitResult, TruncationPolicy, limit_data_size
from .summarizer import (
    DEFAULT_SOURCE_POLICY,
    VERBOSE_SOURCE_POLICY,
    EventSummarizer,
    SourcePolicy,
    summarize_events,
)

__all__ = [
    # Models
    "RRWebEventType",
    "RRWebIncrementalSource",
    "MouseInteractionType",
    "RRWebEvent",
    "AddedNodeMutation",
    "RemovedNodeMutation",
    "SummaryNode",
    "SessionDigest",
    # Size limiting
    "TruncationPolicy",
    "LimitResult",
    "limit_data_size",
    # Summarizer
    "EventSummarizer",
    "SourcePolicy",
    "DEFAULT_SOURCE_POLICY",
    "VERBOSE_SOURCE_POLICY",
    "summarize_events",
    # Intake
    "load_recording",
    "RecordingFormatError",
    # Rendering
    "format_timestamp",
    "render_text",
    "render_json",
]
