"""Digest API endpoints for summarizing uploaded rrweb recordings."""

from uuid import uuid4

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from session_digest.config import get_settings
from session_digest.recording.models import RRWebEvent
from session_digest.recording.summarizer import EventSummarizer
from session_digest.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/digest", tags=["Digest"])


# =============================================================================
# Request/Response Models
# =============================================================================


class RRWebEventModel(BaseModel):
    """Single rrweb event."""

    type: int
    data: dict = Field(default_factory=dict)
    timestamp: int
    windowId: str | None = None


class DigestRequest(BaseModel):
    """Request to summarize a recording."""

    events: list[RRWebEventModel] = Field(..., description="Ordered list of rrweb events")
    session_id: str | None = Field(None, description="ID to attach to the digest")
    verbose_sources: bool | None = Field(
        None,
        description="Override whether low-level incremental sources are summarized"
    )


class DigestResponse(BaseModel):
    """Summarized recording."""

    success: bool
    session_id: str
    event_count: int
    duration_ms: int
    node_count: int
    nodes: list[dict] = []


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=DigestResponse)
async def create_digest(body: DigestRequest):
    """
    Summarize an rrweb recording.

    Returns the condensed node list; nothing is stored.
    """
    settings = get_settings()

    if len(body.events) > settings.max_events:
        raise HTTPException(
            status_code=413,
            detail=f"Recording has {len(body.events)} events, maximum allowed is {settings.max_events}",
        )

    if body.verbose_sources is not None:
        settings.verbose_sources = body.verbose_sources

    session_id = body.session_id or str(uuid4())
    events = [
        RRWebEvent(
            type=event.type,
            timestamp=event.timestamp,
            data=event.data,
            window_id=event.windowId or "",
        )
        for event in body.events
    ]

    digest = EventSummarizer.from_settings(settings).digest(events, session_id=session_id)

    logger.info(
        "Digest created",
        session_id=session_id,
        events=digest.event_count,
        nodes=digest.node_count,
        duration_ms=digest.duration_ms,
    )

    return DigestResponse(success=True, node_count=digest.node_count, **digest.to_dict())
