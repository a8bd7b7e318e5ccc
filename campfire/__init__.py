"""Client for Campfire group-chat rooms."""

from campfire.models.models import MessageType, TranscriptEntry, UserRecord
from campfire.services.campfire import Campfire
from campfire.services.connection import Connection
from campfire.services.room import Room

__all__ = [
    "Campfire",
    "Connection",
    "MessageType",
    "Room",
    "TranscriptEntry",
    "UserRecord",
]
