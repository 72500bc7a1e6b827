"""
Company Events - pushes company profile changes to connected WebSocket clients.

Event contract:
    {"event": "company:update", "data": <public company record>}
"""

import logging
from typing import Any, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


COMPANY_UPDATE_EVENT = "company:update"


class CompanyEventBroadcaster:
    """In-process fan-out of company events to WebSocket subscribers."""

    def __init__(self):
        self.connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.connections.add(websocket)
        logger.info("Company event subscriber connected (%d total)", len(self.connections))

    def disconnect(self, websocket: WebSocket) -> None:
        self.connections.discard(websocket)

    async def publish(self, event: str, payload: Any) -> int:
        """
        Send an event to every subscriber.

        Subscribers whose send fails are dropped.

        Returns:
            Number of subscribers that received the event
        """
        message = {"event": event, "data": payload}
        delivered = 0
        for websocket in list(self.connections):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning("Dropping company event subscriber: %s", e)
                self.disconnect(websocket)
        return delivered


_broadcaster = CompanyEventBroadcaster()


def get_company_broadcaster() -> CompanyEventBroadcaster:
    return _broadcaster
