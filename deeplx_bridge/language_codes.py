"""
Language code mappings and utilities.

Conventions used by the remote service:
- Source languages are sent upper case after normalization; 'auto' asks the
  split call to detect the language
- Target languages are upper case and may carry a regional variant
  (EN-US, PT-BR, ZH-HANS) which is sent separately from the base code
"""

from typing import Optional, Tuple

AUTO = 'auto'
DEFAULT_TARGET = 'EN'
FALLBACK_SOURCE = 'en'
REGION_SEPARATOR = '-'

# Languages accepted by the remote service
SUPPORTED_LANGUAGES = {
    'AR': 'Arabic',
    'BG': 'Bulgarian',
    'CS': 'Czech',
    'DA': 'Danish',
    'DE': 'German',
    'EL': 'Greek',
    'EN': 'English',
    'ES': 'Spanish',
    'ET': 'Estonian',
    'FI': 'Finnish',
    'FR': 'French',
    'HU': 'Hungarian',
    'ID': 'Indonesian',
    'IT': 'Italian',
    'JA': 'Japanese',
    'KO': 'Korean',
    'LT': 'Lithuanian',
    'LV': 'Latvian',
    'NB': 'Norwegian Bokmål',
    'NL': 'Dutch',
    'PL': 'Polish',
    'PT': 'Portuguese',
    'RO': 'Romanian',
    'RU': 'Russian',
    'SK': 'Slovak',
    'SL': 'Slovenian',
    'SV': 'Swedish',
    'TR': 'Turkish',
    'UK': 'Ukrainian',
    'ZH': 'Chinese',
}

REGIONAL_VARIANTS = {
    'EN-GB': 'English (British)',
    'EN-US': 'English (American)',
    'PT-BR': 'Portuguese (Brazilian)',
    'PT-PT': 'Portuguese (European)',
    'ZH-HANS': 'Chinese (Simplified)',
    'ZH-HANT': 'Chinese (Traditional)',
}


def normalize_source_language(code: Optional[str]) -> str:
    """
    Lower-case a source language, defaulting to 'auto'.

    Examples:
        >>> normalize_source_language('DE')
        'de'
        >>> normalize_source_language(None)
        'auto'
    """
    return code.strip().lower() if code and code.strip() else AUTO


def normalize_target_language(code: Optional[str]) -> str:
    """
    Upper-case a target language, defaulting to 'EN'.

    Examples:
        >>> normalize_target_language('en-us')
        'EN-US'
        >>> normalize_target_language('')
        'EN'
    """
    return code.strip().upper() if code and code.strip() else DEFAULT_TARGET


def extract_base_language(code: str) -> str:
    """
    Extract base language from code (remove region).

    Examples:
        >>> extract_base_language('EN-US')
        'EN'
        >>> extract_base_language('FR')
        'FR'
    """
    return code.split(REGION_SEPARATOR)[0]


def split_regional_variant(code: str) -> Tuple[str, Optional[str]]:
    """
    Split a target code into (base code, regional variant or None).

    Examples:
        >>> split_regional_variant('EN-US')
        ('EN', 'EN-US')
        >>> split_regional_variant('FR')
        ('FR', None)
    """
    if REGION_SEPARATOR in code:
        return extract_base_language(code), code
    return code, None


def is_auto(code: Optional[str]) -> bool:
    return not code or code.lower() == AUTO


def is_supported_language(code: str) -> bool:
    """Check a code (with or without region) against the known language table."""
    upper = code.upper()
    return upper in SUPPORTED_LANGUAGES or upper in REGIONAL_VARIANTS

