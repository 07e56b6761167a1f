# school_portal/core/errors.py
from fastapi import status


class PortalError(Exception):
    """Base for errors a request handler knows how to turn into a response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class InvalidCredentials(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid email or password."


class StoreError(PortalError):
    """A document store call failed. The message is never shown to callers."""

    default_message = "lookup failed"
