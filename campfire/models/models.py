# campfire/models/models.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Format used by the service for every *_at field, e.g. "2009/11/20 16:41:39 +0000"
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S %z"


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a timestamp as sent by the service.

    Accepts the service's own "YYYY/MM/DD HH:MM:SS +ZZZZ" format and falls
    back to ISO 8601. Already-parsed datetimes are returned unchanged.

    Raises:
        ValueError: if the value is not a recognizable timestamp
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a timestamp string, got {type(value).__name__}")
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))


class MessageType(str, Enum):
    """How the service renders a posted message."""

    TEXT = "TextMessage"
    PASTE = "PasteMessage"
    SOUND = "SoundMessage"
    TWEET = "TweetMessage"


class UserRecord(BaseModel):
    """A user, from a room roster or from /users/{id}.json."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    created_at: datetime

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: Any) -> datetime:
        return parse_timestamp(value)


class RoomAttributes(BaseModel):
    """Body of GET /room/{id}.json (under the "room" key)."""

    id: int
    name: str
    topic: Optional[str] = None
    full: bool = False
    open_to_guests: Optional[bool] = None
    active_token_value: Optional[str] = None
    # Roster entries are kept exactly as the service returned them
    users: List[Dict[str, Any]] = []


class RoomSummary(BaseModel):
    """One entry of GET /rooms.json."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str


class TranscriptEntry(BaseModel):
    """A transcript message, renamed from the wire shape."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_id: Optional[int] = None
    message: Optional[str] = Field(default=None, alias="body")
    timestamp: datetime = Field(alias="created_at")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime:
        return parse_timestamp(value)


class Upload(BaseModel):
    """One entry of GET /room/{id}/uploads.json."""

    model_config = ConfigDict(extra="allow")

    full_url: str
