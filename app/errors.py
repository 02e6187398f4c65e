"""Error taxonomy for the API.

Every error is raised where it is detected and converted to a plain-text HTTP
response by the single handler registered in `app.main.create_app`.
"""

from __future__ import annotations


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class BadRequestError(ApiError):
    """Request body could not be parsed as the expected JSON type."""

    status_code = 400

    def __init__(self, expected_type: str) -> None:
        super().__init__(f"Invalid body. Should be {expected_type} as JSON.")
        self.expected_type = expected_type


class MissingParameterError(ApiError):
    status_code = 400

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing parameter: {name}")
        self.name = name


class SecretInvalidError(ApiError):
    status_code = 403

    def __init__(self) -> None:
        super().__init__("Invalid secret")


class NotFoundError(ApiError):
    status_code = 404


class OutboundError(ApiError):
    """An email or push provider rejected the request or was unreachable."""

    status_code = 502


class MissingElementError(ApiError):
    """An optional collaborator (email/push repository) is not configured."""

    status_code = 503

    def __init__(self, element: str) -> None:
        super().__init__(f"Missing element: {element}")
        self.element = element


class StorageError(ApiError):
    status_code = 500
