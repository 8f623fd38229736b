"""FastAPI service for Session Digest.

Provides REST API endpoints for:
- Summarizing uploaded recordings
- Health checks
"""

from datetime import UTC, datetime

from fastapi import FastAPI
from pydantic import BaseModel

from session_digest import __version__
from session_digest.api.digest import router as digest_router


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str


app = FastAPI(
    title="Session Digest API",
    description="Condensed summaries of rrweb session recordings",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(digest_router)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )
