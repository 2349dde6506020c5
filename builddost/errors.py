"""Error taxonomy shared by the store, generation client, exporter and routers.

Every error carries the HTTP status it maps to; the API renders all of them
as ``{"success": false, "error": <message>}``.
"""

from http import HTTPStatus


class BuildDostError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message safe to show to the end user."""
        return self.message


class ValidationError(BuildDostError):
    """Missing or malformed request fields."""

    status_code = HTTPStatus.BAD_REQUEST


class NotFoundError(BuildDostError):
    """Referenced id does not exist."""

    status_code = HTTPStatus.NOT_FOUND

    @classmethod
    def for_entity(cls, entity: str) -> "NotFoundError":
        return cls(f"{entity} not found")


class GenerationFailure(BuildDostError):
    """The generation call failed or returned an unusable payload."""

    status_code = HTTPStatus.BAD_GATEWAY


class ExportFailure(BuildDostError):
    """Archive construction or GitHub export failed.

    ``message`` holds the diagnostic detail for the logs; clients only see
    the generic ``public_message``.
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, public_message: str = "Export failed"):
        super().__init__(message)
        self._public_message = public_message

    @property
    def public_message(self) -> str:
        return self._public_message


class ClientDisconnected(BuildDostError):
    """The HTTP client went away before the response was ready."""

    # nginx convention; nobody receives it
    status_code = 499
