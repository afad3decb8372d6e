from typing import Any, List
from pydantic import BaseModel, Field


class PackResponse(BaseModel):
    name: str = Field(..., description="Name of the pack")
    commands: List[str] = Field(..., description="Names of the available commands")
    events: List[str] = Field(..., description="Names of all events the pack emits")


class CommandInfoResponse(BaseModel):
    name: str
    method: str = Field(..., description="HTTP method sent by the command")
    input_names: List[str] = Field(..., description="Logical input names")
    output_events: List[str] = Field(..., description="Success and failure events")


class OutcomeEventResponse(BaseModel):
    """Event produced by a single command invocation"""

    kind: str = Field(..., description="'success' or 'failure'")
    name: str = Field(..., description="Name of the emitted event")
    payload: Any = Field(
        None, description="Decoded response body or error description"
    )
    timestamp: str = Field(..., description="ISO 8601 time the event was produced")
