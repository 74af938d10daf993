"""
LMT Module

This module implements the JSON-RPC protocol used by the DeepL browser
extension: request formatting, the HTTP client, sentence splitting, job
building and beam extraction.
"""

from deeplx_bridge.lmt.exceptions import (
    TranslationError,
    ValidationError,
    MalformedUpstreamResponse,
    EmptyTranslationError,
    TransportError,
    UpstreamServerError,
    DecompressionError,
)
from deeplx_bridge.lmt.models import RateLimited, TranslationResult
from deeplx_bridge.lmt.client import LMTClient
from deeplx_bridge.lmt.service import DeepLTranslator, translate

__all__ = [
    'TranslationError',
    'ValidationError',
    'MalformedUpstreamResponse',
    'EmptyTranslationError',
    'TransportError',
    'UpstreamServerError',
    'DecompressionError',
    'RateLimited',
    'TranslationResult',
    'LMTClient',
    'DeepLTranslator',
    'translate',
]
