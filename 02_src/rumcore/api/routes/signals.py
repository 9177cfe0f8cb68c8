"""Signal ingestion API routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from ...app import IApplication
from ...lifecycle import LifeCycleEventType
from ...models import Element, InputEvent, PerformanceEntry


class ElementPayload(BaseModel):
    """Element snapshot, parent chain included."""

    tag_name: str
    attributes: dict[str, str] = Field(default_factory=dict)
    text_content: str | None = None
    value: str | None = None
    has_child_nodes: bool = False
    parent: Optional["ElementPayload"] = None

    def to_element(self) -> Element:
        return Element(
            tag_name=self.tag_name,
            attributes=dict(self.attributes),
            text_content=self.text_content,
            value=self.value,
            has_child_nodes=self.has_child_nodes,
            parent=self.parent.to_element() if self.parent else None,
        )


ElementPayload.model_rebuild()


class InputRequest(BaseModel):
    """Request model for a user input."""

    type: str = "click"
    target: ElementPayload | None = None


class PerformanceEntryRequest(BaseModel):
    """Request model for a performance-timeline entry."""

    entry_type: str
    name: str = ""
    start_time: float = 0.0
    duration: float = 0.0
    initiator_type: str | None = None


class AcceptedResponse(BaseModel):
    """Response model for accepted signals."""

    accepted: bool = True
    interaction_id: str | None = None


def create_signals_router(app: IApplication) -> APIRouter:
    """Create signals router."""
    router = APIRouter(prefix="/api/signals", tags=["signals"])

    @router.post(
        "/input",
        response_model=AcceptedResponse,
        status_code=status.HTTP_202_ACCEPTED,
    )
    async def post_input(request: InputRequest) -> dict:
        """Publish a user input; it may open an interaction."""
        try:
            event = InputEvent(
                type=request.type,
                target=request.target.to_element() if request.target else None,
            )
            interaction_id = app.collector.handle_input(event)
            return {"accepted": True, "interaction_id": interaction_id}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post(
        "/dom-mutation",
        response_model=AcceptedResponse,
        status_code=status.HTTP_202_ACCEPTED,
    )
    async def post_dom_mutation() -> dict:
        """Publish a DOM mutation signal."""
        try:
            app.lifecycle.notify(LifeCycleEventType.DOM_MUTATED)
            return {"accepted": True}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post(
        "/performance-entry",
        response_model=AcceptedResponse,
        status_code=status.HTTP_202_ACCEPTED,
    )
    async def post_performance_entry(request: PerformanceEntryRequest) -> dict:
        """Publish a performance-timeline entry."""
        try:
            app.lifecycle.notify(
                LifeCycleEventType.PERFORMANCE_ENTRY_COLLECTED,
                PerformanceEntry(**request.model_dump()),
            )
            return {"accepted": True}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
