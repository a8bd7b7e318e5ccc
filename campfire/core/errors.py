# campfire/core/errors.py

from __future__ import annotations


class CampfireError(Exception):
    """Base class for every error raised by this package."""


class RequestFailed(CampfireError):
    """The request never got a response (DNS, refused connection, timeout...)."""


class HTTPError(CampfireError):
    """
    The service answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the service
        detail: Response body, as text
    """

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}" if detail else str(status_code))


class AuthenticationFailed(HTTPError):
    """The token or username/password was rejected (401)."""


class UserNotFound(CampfireError):
    """A user lookup by id came back without a user."""
