"""
Error taxonomy for the transcribe pipeline.

Each error carries the HTTP status and the user-facing ``error`` text it maps
to; ``responses.error_response`` turns any of them into the JSON envelope.
"""
from __future__ import annotations
from typing import Optional


class TranscribeError(Exception):
    status_code: int = 500
    default_error: str = "Error processing audio file"

    def __init__(
        self,
        error: Optional[str] = None,
        *,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
        stack: Optional[str] = None,
    ):
        self.error = error or self.default_error
        super().__init__(self.error)
        self.details = details
        self.stack = stack
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(TranscribeError):
    """Operator-fixable: the service credential is missing."""
    status_code = 500
    default_error = "OpenAI API key is not configured"


class ValidationError(TranscribeError):
    """Client-fixable: missing field, not a file, empty, or too large."""
    status_code = 400
    default_error = "Invalid audio file"


class RemoteServiceError(TranscribeError):
    """The transcription provider rejected the request or failed."""
    status_code = 500
    default_error = "OpenAI API error"


class LocalProcessingError(TranscribeError):
    status_code = 500
    default_error = "Error processing audio file"

    @classmethod
    def from_exception(cls, exc: BaseException, stack: Optional[str] = None) -> "LocalProcessingError":
        return cls(details=str(exc) or exc.__class__.__name__, stack=stack)
