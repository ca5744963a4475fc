"""
Error types for credkit and translation of failed API responses.

Every error carries the process exit code the CLI should terminate with.
"""

import json
from typing import Optional, Union


class CredkitError(Exception):
    """Base class for all errors surfaced to the user."""

    exit_code = 1


class ValidationError(CredkitError, ValueError):
    """Raised when input is rejected before any request is sent."""


class MissingNameError(ValidationError):
    """Raised when no usable secret name was supplied."""

    def __init__(self, message: str = "name required") -> None:
        super().__init__(message)


class ConfigError(CredkitError):
    """Raised when the configuration cannot be loaded or is incomplete."""


class ServerError(CredkitError):
    """Raised when the server rejected the request with an error message."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(CredkitError):
    """Raised when the request did not complete or the reply was unusable."""


class ResponseShapeError(CredkitError):
    """Raised when a successful response does not describe a known secret."""


def translate_error(body: Union[bytes, str], status_code: int) -> CredkitError:
    """
    Turn a non-success response into the error to surface.

    A body of the form ``{"error": "<message>"}`` yields a ServerError whose
    message is exactly ``<message>``. Anything else yields a TransportError
    with a generic message.

    Args:
        body: Raw response body
        status_code: HTTP status of the response

    Returns:
        The error to raise.
    """
    message = _error_message(body)
    if message is None:
        return TransportError(f"The server returned an unexpected response (HTTP {status_code}).")
    return ServerError(message, status_code)


def _error_message(body: Union[bytes, str]) -> Optional[str]:
    try:
        envelope = json.loads(body)
    except (ValueError, TypeError):
        return None
    if not isinstance(envelope, dict):
        return None
    message = envelope.get("error")
    if not isinstance(message, str):
        return None
    return message
