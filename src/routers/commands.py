import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from src.commands.registry.command_registry import CommandRegistry
from src.models.responses import (
    CommandInfoResponse,
    OutcomeEventResponse,
    PackResponse,
)

logger = logging.getLogger(__name__)

# Initialize router
router = APIRouter(
    prefix="/pack",
    tags=["Pack"],
    responses={404: {"description": "Not found"}},
)


# Dependency functions
def get_command_registry(request: Request) -> CommandRegistry:
    """Get the registry compiled at startup"""
    registry = getattr(request.app.state, "command_registry", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="Pack is not loaded")
    return registry


@router.get("", response_model=PackResponse)
async def get_pack(
    registry: CommandRegistry = Depends(get_command_registry),
) -> PackResponse:
    return PackResponse(
        name=registry.pack_name,
        commands=registry.get_available_commands(),
        events=[event.name for event in registry.get_event_definitions()],
    )


@router.get("/commands/{command_name}", response_model=CommandInfoResponse)
async def get_command_info(
    command_name: str,
    registry: CommandRegistry = Depends(get_command_registry),
) -> CommandInfoResponse:
    try:
        info = registry.get_command_info(command_name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CommandInfoResponse(**info)


@router.post("/commands/{command_name}", response_model=OutcomeEventResponse)
async def invoke_command(
    command_name: str,
    request: Request,
    registry: CommandRegistry = Depends(get_command_registry),
) -> Dict:
    """
    Invoke a command with the raw request body as its input payload.

    Failure events are returned with status 200 as well: the event is the
    result of the invocation.
    """
    try:
        command = registry.get_command(command_name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    raw_input = await request.body()
    event = await command.invoke(raw_input)
    logger.info(f"Command '{command_name}' emitted '{event.name}'")
    return event.to_dict()
