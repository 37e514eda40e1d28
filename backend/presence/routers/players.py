from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..dependencies import get_presence_manager
from ..players import PresenceManager

router = APIRouter(
    prefix="/servers",
    tags=["server-players"],
)


class TrackedServers(BaseModel):
    servers: list[str]


class ServerPlayers(BaseModel):
    onlinePlayers: list[str]


class SyncRequested(BaseModel):
    submitted: bool


@router.get("", response_model=TrackedServers)
async def get_tracked_servers(
    manager: PresenceManager = Depends(get_presence_manager),
):
    """List servers whose players are currently tracked"""
    return TrackedServers(servers=manager.tracked_servers())


@router.get("/{server_id}/players", response_model=ServerPlayers)
async def get_server_players(
    server_id: str, manager: PresenceManager = Depends(get_presence_manager)
):
    """Get the players currently believed to be online on a server"""
    if not manager.is_tracking(server_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Server '{server_id}' is not being tracked",
        )

    return ServerPlayers(onlinePlayers=manager.get_players(server_id))


@router.post(
    "/{server_id}/players/sync",
    response_model=SyncRequested,
    status_code=status.HTTP_202_ACCEPTED,
)
async def sync_server_players(
    server_id: str, manager: PresenceManager = Depends(get_presence_manager)
):
    """Ask the server for its player listing; the roster updates when the reply is logged"""
    if not manager.is_tracking(server_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Server '{server_id}' is not being tracked",
        )

    return SyncRequested(submitted=await manager.request_snapshot(server_id))
