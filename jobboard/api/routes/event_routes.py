"""
Event Routes

WS /ws/companies - Subscribe to `company:update` events
"""

from fastapi import APIRouter, Depends, WebSocket

from jobboard.api.dependencies import get_broadcaster
from jobboard.services.company_events import CompanyEventBroadcaster

router = APIRouter(tags=["Events"])


@router.websocket("/ws/companies")
async def company_updates(
    websocket: WebSocket,
    broadcaster: CompanyEventBroadcaster = Depends(get_broadcaster),
):
    """Push-only channel; anything the client sends (text or binary) is ignored."""
    await broadcaster.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        broadcaster.disconnect(websocket)
