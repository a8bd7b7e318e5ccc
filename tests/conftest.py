import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from campfire.services.connection import Connection
from campfire.services.room import Room


ROOM_SHOW = {
    "room": {
        "full": False,
        "name": "Room 1",
        "created_at": "2007/03/16 18:03:21 +0000",
        "updated_at": "2007/03/16 18:03:21 +0000",
        "topic": "Testing",
        "active_token_value": "90cf7",
        "id": 80749,
        "open_to_guests": True,
        "membership_limit": 4,
        "users": [
            {
                "name": "Jim Bob",
                "created_at": "2006/12/07 21:20:39 +0000",
                "admin": True,
                "id": 1158839,
                "type": "Member",
                "email_address": "jim@bob.com",
            },
            {
                "name": "Jane Doe",
                "created_at": "2007/01/12 09:02:11 +0000",
                "admin": False,
                "id": 1158840,
                "type": "Member",
                "email_address": "jane@doe.com",
            },
        ],
    }
}


class FakeCampfire:
    """
    Stand-in for the remote service.

    Routes are keyed by (method, path) and map to (status, body). Every
    request that reaches the transport is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def stub(self, method: str, path: str, body: Any = "", status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def json_body(self, request: httpx.Request) -> Any:
        return json.loads(request.content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, text="Not Found")
        status, body = self.routes[key]
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)


@pytest.fixture
def fake_campfire():
    fake = FakeCampfire()
    fake.stub("GET", "/room/80749.json", ROOM_SHOW)
    return fake


@pytest.fixture
def connection(fake_campfire):
    conn = Connection(
        "test",
        token="mytoken",
        ssl=True,
        host="campfirenow.com",
        transport=httpx.MockTransport(fake_campfire.handler),
    )
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def room(connection):
    return Room(connection, {"id": 80749})
