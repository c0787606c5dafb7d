"""Typed command endpoint for UI clients."""

from fastapi import APIRouter, Depends

from ledgerbook.api.dependencies import get_command_dispatcher
from ledgerbook.application.commands import CommandDispatcher, CommandRequest
from ledgerbook.application.dto.responses import ErrorResponse, WorkspaceSnapshot

router = APIRouter(prefix="/api", tags=["commands"])


@router.get("/workspace", response_model=WorkspaceSnapshot)
async def get_workspace(
    dispatcher: CommandDispatcher = Depends(get_command_dispatcher),
) -> WorkspaceSnapshot:
    """Current products, documents and draft."""
    return await dispatcher.snapshot()


@router.post(
    "/commands",
    response_model=WorkspaceSnapshot,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def run_command(
    request: CommandRequest,
    dispatcher: CommandDispatcher = Depends(get_command_dispatcher),
) -> WorkspaceSnapshot:
    """Apply one user action and return the workspace to re-render."""
    return await dispatcher.dispatch(request.command)
