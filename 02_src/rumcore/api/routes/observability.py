"""Observability API routes."""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ...app import IApplication
from ...interaction import get_current_interaction_id


class ReportEntryResponse(BaseModel):
    """Response model for a report log entry."""

    id: str
    event_type: str
    interaction_id: str
    data: dict[str, Any]
    timestamp: datetime


class CurrentInteractionResponse(BaseModel):
    """Response model for the live interaction id."""

    interaction_id: str | None


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/interactions/current", response_model=CurrentInteractionResponse)
    async def get_current_interaction() -> dict:
        """Get the id of the interaction currently seeing activity."""
        return {"interaction_id": get_current_interaction_id()}

    @router.get("/interactions", response_model=list[ReportEntryResponse])
    async def get_interactions(
        limit: int = Query(100, ge=1, le=1000),
        event_type: str | None = Query(None, description="Filter by event type"),
        interaction_id: str | None = Query(None, description="Filter by interaction"),
    ) -> list[dict]:
        """Get recent interaction events, newest first."""
        try:
            event_types = [event_type] if event_type else None
            entries = app.report_log.get_entries(
                event_types=event_types,
                interaction_id=interaction_id,
                limit=limit,
            )
            return [
                {
                    "id": e.id,
                    "event_type": e.event_type,
                    "interaction_id": e.interaction_id,
                    "data": e.data,
                    "timestamp": e.timestamp.isoformat(),
                }
                for e in entries
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
