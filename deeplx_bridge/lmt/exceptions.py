"""
LMT Client Exceptions

Exception classes raised by the translation pipeline.
Every thrown failure derives from TranslationError so callers can catch one type.
Rate limiting is not an exception: see models.RateLimited.
"""

from typing import Optional


class TranslationError(Exception):
    """Translation service error with optional code and details."""

    default_code = "translation_error"

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code or self.default_code
        self.details = details or {}


class ValidationError(TranslationError):
    """Caller input was rejected before any remote call."""

    default_code = "validation_error"


class MalformedUpstreamResponse(TranslationError):
    """A split or translate response lacked the fields the protocol requires."""

    default_code = "malformed_response"

    def __init__(self, message: str, stage: Optional[str] = None, code: str = None, details: dict = None):
        details = dict(details or {})
        if stage:
            details.setdefault("stage", stage)
        super().__init__(message, code=code, details=details)
        self.stage = stage


class EmptyTranslationError(MalformedUpstreamResponse):
    """The translate response contained no usable beam."""

    default_code = "empty_translation"


class TransportError(TranslationError):
    """No response was received from the remote host."""

    default_code = "transport_error"


class UpstreamServerError(TranslationError):
    """The remote host answered with a non-2xx, non-429 status."""

    default_code = "upstream_error"

    def __init__(self, status_code: int, body: str = "", details: dict = None):
        details = dict(details or {})
        details.update({"status_code": status_code, "body": body})
        super().__init__(f"Server responded with status {status_code}: {body}", details=details)
        self.status_code = status_code
        self.body = body


class DecompressionError(TranslationError):
    """A compressed response body could not be decoded."""

    default_code = "decompression_error"
