"""
Exceptions raised by the Spotzee SDK.
"""


class SpotzeeError(Exception):
    """Base for all SDK errors."""


class InvalidRequestError(SpotzeeError, ValueError):
    """A call was rejected locally, before anything was sent."""


class ApiError(SpotzeeError):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API Error {status_code}: {body}")
        self.status_code = status_code
        self.body = body
