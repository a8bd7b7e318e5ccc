# campfire/services/room.py

from __future__ import annotations

import mimetypes
import os
from datetime import date
from typing import IO, Any, Dict, List, Optional, Union

from campfire.core.errors import UserNotFound
from campfire.core.logging import get_logger
from campfire.models.models import (
    MessageType,
    RoomAttributes,
    TranscriptEntry,
    Upload,
    UserRecord,
)
from campfire.services.connection import Connection

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# ============================================================================
# ROOM RESOURCE
# ============================================================================

class Room:
    """
    One remote chat room.

    A Room is seeded with an id (and optionally a name) and fetches the rest
    of its attributes from GET /room/{id}.json on demand.

    Caching:
        - Passive accessors (topic, is_full, guest_access_enabled,
          guest_invite_code) call load(), which fetches at most once.
          Later calls reuse the cached values even if they went stale.
        - users() calls reload() every time, since occupancy keeps changing.
        - Setters (name, topic, rename) only PUT the change to the service.
          The local cache keeps the old value until the next reload().

    Not thread-safe: callers sharing a Room across threads must serialize
    access themselves.

    Usage:
        room = Room(connection, {"id": 80749})
        room.join()
        room.speak("Hello!")
        print(room.topic)
    """

    def __init__(self, connection: Connection, attributes: Optional[Dict[str, Any]] = None) -> None:
        attributes = attributes or {}
        self.connection = connection
        self.id = attributes.get("id")
        self._name: Optional[str] = attributes.get("name")

        self._topic: Optional[str] = None
        self._full: bool = False
        self._open_to_guests: Optional[bool] = None
        self._active_token_value: Optional[str] = None
        self._users: List[Dict[str, Any]] = []

        self._loaded = False

    def __repr__(self) -> str:
        return f"<Room id={self.id!r} name={self._name!r}>"

    # ------------------------------------------------------------------------
    # Attribute cache
    # ------------------------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Fetch the room's attributes unless they were already fetched once."""
        if not self._loaded:
            self.reload()

    def reload(self) -> None:
        """
        Fetch the room's current attributes and overwrite the cache.

        The payload is validated in full before any field is assigned, so a
        failed request or a malformed body leaves the cache as it was.

        Raises:
            CampfireError: on transport or HTTP failure
            pydantic.ValidationError: if the room payload is malformed
        """
        payload = self.connection.get(self._url())
        attributes = RoomAttributes.model_validate(payload["room"])

        self.id = attributes.id
        self._name = attributes.name
        self._topic = attributes.topic
        self._full = attributes.full
        self._open_to_guests = attributes.open_to_guests
        self._active_token_value = attributes.active_token_value
        self._users = attributes.users

        self._loaded = True
        logger.debug("Reloaded room %s (%d users)", self.id, len(self._users))

    # ------------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------------

    @property
    def name(self) -> Optional[str]:
        """Cached name; never triggers a fetch."""
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self.update(name=name)

    def rename(self, name: str) -> Dict[str, Any]:
        return self.update(name=name)

    @property
    def topic(self) -> Optional[str]:
        self.load()
        return self._topic

    @topic.setter
    def topic(self, topic: str) -> None:
        self.update(topic=topic)

    def is_full(self) -> bool:
        self.load()
        return self._full

    def update(self, **attrs: Any) -> Dict[str, Any]:
        """
        Change room attributes on the service (PUT /room/{id}.json).

        Only the given attributes are sent. The local cache is left alone;
        call reload() to see the change.
        """
        logger.info(f"Updating room {self.id}: {sorted(attrs)}")
        return self.connection.put(self._url(), {"room": attrs})

    # ------------------------------------------------------------------------
    # Guest access
    # ------------------------------------------------------------------------

    def guest_access_enabled(self) -> bool:
        self.load()
        return bool(self._open_to_guests)

    def guest_invite_code(self) -> Optional[str]:
        """The token guests use to enter the room."""
        self.load()
        return self._active_token_value

    def guest_url(self) -> Optional[str]:
        """
        URL guests can use to enter the room.

        Returns:
            "{connection uri}/{invite code}", or None when guest access is off
            or the room has no invite code
        """
        if not self.guest_access_enabled():
            return None
        code = self.guest_invite_code()
        if not code:
            return None
        return f"{self.connection.uri}/{code}"

    # ------------------------------------------------------------------------
    # Room actions
    # ------------------------------------------------------------------------

    def join(self) -> None:
        # join and leave are still XML endpoints on the service side
        self._post("join", format="xml")
        logger.info(f"✓ Joined room {self.id}")

    def leave(self) -> None:
        self._post("leave", format="xml")
        logger.info(f"✓ Left room {self.id}")

    def lock(self) -> None:
        """Keep new users out and stop logging the room."""
        self._post("lock")
        logger.info(f"🔒 Locked room {self.id}")

    def unlock(self) -> None:
        self._post("unlock")
        logger.info(f"🔓 Unlocked room {self.id}")

    # ------------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------------

    def speak(self, message: str) -> Dict[str, Any]:
        return self.send_message(message)

    def paste(self, message: str) -> Dict[str, Any]:
        return self.send_message(message, MessageType.PASTE)

    def play(self, sound: str) -> Dict[str, Any]:
        return self.send_message(sound, MessageType.SOUND)

    def tweet(self, url: str) -> Dict[str, Any]:
        return self.send_message(url, MessageType.TWEET)

    def send_message(
        self,
        body: str,
        message_type: Union[MessageType, str] = MessageType.TEXT,
    ) -> Dict[str, Any]:
        """
        Post a message to the room (POST /room/{id}/speak.json).

        Args:
            body: Message text (or sound name / tweet URL)
            message_type: Tag telling the service how to render the message

        Returns:
            The service's response body, uninterpreted
        """
        message_type = MessageType(message_type)
        return self._post("speak", {"message": {"body": body, "type": message_type.value}})

    # ------------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------------

    def upload(
        self,
        file: Union[str, os.PathLike, IO[bytes]],
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Upload a file to the room as a multipart POST.

        Args:
            file: Path to the file, or an open binary file object
            content_type: MIME type; guessed from the file name when omitted
            filename: Name shown in the room; defaults to the file's base name
        """
        if isinstance(file, (str, os.PathLike)):
            with open(file, "rb") as fileobj:
                return self._upload(fileobj, os.fspath(file), content_type, filename)
        return self._upload(file, getattr(file, "name", None), content_type, filename)

    def _upload(
        self,
        fileobj: IO[bytes],
        path: Optional[str],
        content_type: Optional[str],
        filename: Optional[str],
    ) -> Dict[str, Any]:
        filename = filename or (os.path.basename(path) if path else "upload")
        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0] or DEFAULT_CONTENT_TYPE

        logger.info(f"Uploading {filename} ({content_type}) to room {self.id}")
        return self.connection.raw_post(
            self._url("uploads"),
            {"upload": (filename, fileobj, content_type)},
        )

    def files(self, count: int = 5) -> List[str]:
        """
        Full URLs of the room's latest uploads, in the service's order.

        ``count`` is accepted for compatibility; the service decides how many
        uploads it lists and no truncation happens here.
        """
        payload = self.connection.get(self._url("uploads"))
        return [Upload.model_validate(u).full_url for u in payload["uploads"]]

    # ------------------------------------------------------------------------
    # Transcripts
    # ------------------------------------------------------------------------

    def transcript(self, transcript_date: date) -> List[TranscriptEntry]:
        """
        Messages logged in the room on the given day, in the service's order.

        Timestamps typically have a granularity of five minutes.

        Args:
            transcript_date: A date (or datetime; only the day is used)

        Raises:
            HTTPError: if the service has no transcript for that day
        """
        path = f"/room/{self.id}/transcript/{transcript_date:%Y/%m/%d}.json"
        payload = self.connection.get(path)
        return [TranscriptEntry.model_validate(m) for m in payload["messages"]]

    # ------------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------------

    def users(self) -> List[Dict[str, Any]]:
        """Users currently in the room. Always refetches the room."""
        self.reload()
        return list(self._users)

    def user(self, user_id: Optional[int]) -> Optional[UserRecord]:
        """
        Look up a user, first in the room's roster, then on the service.

        Args:
            user_id: Id of the user; None returns None without any request

        Returns:
            UserRecord with created_at parsed into a datetime

        Raises:
            UserNotFound: if the direct fetch returns no user
            pydantic.ValidationError: if the record lacks id, name or created_at
        """
        if user_id is None:
            return None

        record = next((u for u in self.users() if u.get("id") == user_id), None)
        if record is None:
            logger.debug("User %s not in room %s roster, fetching", user_id, self.id)
            record = self.connection.get(f"/users/{user_id}.json").get("user")
            if not record:
                raise UserNotFound(f"User {user_id} not found")

        return UserRecord.model_validate(record)

    # ------------------------------------------------------------------------
    # URL helpers
    # ------------------------------------------------------------------------

    def _url(self, action: Optional[str] = None, format: str = "json") -> str:
        if action is None:
            return f"/room/{self.id}.{format}"
        return f"/room/{self.id}/{action}.{format}"

    def _post(self, action: str, body: Optional[Dict[str, Any]] = None, format: str = "json") -> Dict[str, Any]:
        return self.connection.post(self._url(action, format), body)
