"""Free DeepL translation through the browser extension's JSON-RPC protocol."""

from deeplx_bridge.lmt import (
    DeepLTranslator,
    DecompressionError,
    EmptyTranslationError,
    LMTClient,
    MalformedUpstreamResponse,
    RateLimited,
    TranslationError,
    TranslationResult,
    TransportError,
    UpstreamServerError,
    ValidationError,
    translate,
)

__version__ = "1.0.0"

__all__ = [
    "DeepLTranslator",
    "DecompressionError",
    "EmptyTranslationError",
    "LMTClient",
    "MalformedUpstreamResponse",
    "RateLimited",
    "TranslationError",
    "TranslationResult",
    "TransportError",
    "UpstreamServerError",
    "ValidationError",
    "translate",
]
