"""Costume pipeline errors.

Every error carries the HTTP status it surfaces with. All of them are
terminal for the current invocation; nothing in the pipeline retries.
"""

from __future__ import annotations


class CostumeError(Exception):
    """Base class for errors surfaced to the caller as ``{"error": message}``."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(CostumeError):
    """Required configuration (the model API credential) is missing."""


class UpstreamError(CostumeError):
    """The model API answered with a non-success status.

    ``message`` is the raw upstream body, ``status_code`` the upstream status.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(body, status_code=status_code)


class UpstreamTransportError(CostumeError):
    """The model API could not be reached (connect error, timeout)."""

    status_code = 502


class ExtractionError(CostumeError):
    """No JSON object could be located in the model's reply."""
