# campfire/services/campfire.py

from __future__ import annotations

from typing import List, Optional

from campfire.core.logging import get_logger
from campfire.models.models import RoomSummary, UserRecord
from campfire.services.connection import Connection
from campfire.services.room import Room

logger = get_logger(__name__)

# ============================================================================
# ACCOUNT ENTRY POINT
# ============================================================================

class Campfire:
    """
    Account-level access: lists the rooms and hands out Room objects.

    Rooms are seeded with their id and name only; everything else is
    fetched lazily by the Room itself.

    Usage:
        campfire = Campfire(Connection("mycompany", token="abc123"))
        room = campfire.find_room_by_name("Product Team")
        room.speak("Morning!")
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def rooms(self) -> List[Room]:
        """All rooms visible to the authenticated user (GET /rooms.json)."""
        payload = self.connection.get("/rooms.json")
        summaries = [RoomSummary.model_validate(r) for r in payload["rooms"]]
        logger.debug("Listed %d rooms", len(summaries))
        return [Room(self.connection, {"id": s.id, "name": s.name}) for s in summaries]

    def find_room_by_id(self, room_id: int) -> Optional[Room]:
        """
        Get a room by id.

        Returns:
            Room if found, None otherwise
        """
        return next((r for r in self.rooms() if r.id == room_id), None)

    def find_room_by_name(self, name: str) -> Optional[Room]:
        """
        Get a room by its exact name.

        Returns:
            Room if found, None otherwise
        """
        return next((r for r in self.rooms() if r.name == name), None)

    def me(self) -> UserRecord:
        """The authenticated user (GET /users/me.json)."""
        return UserRecord.model_validate(self.connection.get("/users/me.json")["user"])
