"""Errors raised by chat transports.

The conversation controller recovers from every TransportError locally, so
these never reach the user as exceptions.
"""


class TransportError(Exception):
    """Base class for failures of the outbound chat request."""


class RequestFailedError(TransportError):
    """The endpoint could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(TransportError):
    """The endpoint answered successfully but the payload has no usable reply."""
