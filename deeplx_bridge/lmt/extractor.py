"""Pick the primary translation and alternatives out of a beam response."""

from typing import Any, Dict, List, Tuple

from deeplx_bridge.logger import get_logger
from deeplx_bridge.lmt.exceptions import EmptyTranslationError

logger = get_logger(__name__)


def collect_beam_texts(response: Dict[str, Any]) -> List[str]:
    """First-sentence text of every beam of the first translation, in beam order."""
    result = response.get("result")
    if not isinstance(result, dict):
        return []
    translations = result.get("translations")
    if not isinstance(translations, list) or not translations or not isinstance(translations[0], dict):
        return []

    texts = []
    for beam in translations[0].get("beams") or []:
        sentences = beam.get("sentences") if isinstance(beam, dict) else None
        if not isinstance(sentences, list) or not sentences or not isinstance(sentences[0], dict):
            continue
        text = sentences[0].get("text")
        if isinstance(text, str) and text:
            texts.append(text)
    return texts


def extract_translations(response: Dict[str, Any]) -> Tuple[str, List[str]]:
    """
    Split beam candidates into (primary, alternatives).

    The first beam is the primary translation. Alternatives keep beam order and
    never repeat the primary text.

    Raises:
        EmptyTranslationError: If no beam carries a sentence
    """
    candidates = collect_beam_texts(response)
    if not candidates:
        logger.error(f"Translation result is empty. Full response: {response}")
        raise EmptyTranslationError("Translation failed or returned empty result", stage="translate")

    primary = candidates[0]
    alternatives = [text for text in candidates[1:] if text != primary]
    return primary, alternatives
