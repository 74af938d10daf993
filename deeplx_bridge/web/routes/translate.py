"""Translation API route."""

from __future__ import annotations

import time

from flask import Blueprint, current_app, jsonify, request

from deeplx_bridge import language_codes as lc
from deeplx_bridge.logger import get_logger
from deeplx_bridge.lmt import service
from deeplx_bridge.lmt.exceptions import TranslationError, ValidationError
from deeplx_bridge.lmt.models import RateLimited

translate_bp = Blueprint("translate", __name__)
logger = get_logger(__name__)


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _error(code: int, message: str, started: float):
    log = logger.warning if code < 500 else logger.error
    log('POST "translate" | %s | %s | %sms', code, message, _elapsed_ms(started))
    return jsonify({"code": code, "message": message}), code


@translate_bp.post("/translate")
def translate_text():
    """Translate text through the free DeepL protocol."""
    started = time.monotonic()
    settings = current_app.config.get("DEEPLX", {})

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    text = data.get("text")
    if not text or not isinstance(text, str):
        return _error(400, "Text is required", started)

    source_lang = str(data.get("source_lang") or "AUTO").upper()
    target_lang = str(data.get("target_lang") or lc.DEFAULT_TARGET).upper()
    dl_session = data.get("dl_session") or settings.get("dl_session")
    tag_handling = data.get("tag_handling") or False

    for code in (source_lang, target_lang):
        if not lc.is_auto(code) and not lc.is_supported_language(code):
            logger.warning("Language code %s is not known; passing it through", code)

    try:
        result = service.translate(
            text,
            source_lang=source_lang,
            target_lang=target_lang,
            dl_session=dl_session,
            tag_handling=tag_handling,
            timeout=settings.get("timeout"),
        )
    except ValidationError as e:
        return _error(400, str(e), started)
    except TranslationError as e:
        logger.exception("Translation failed (%s): %s", e.code, e)
        return _error(500, str(e) or "Translation failed", started)

    if isinstance(result, RateLimited):
        logger.warning('POST "translate" | %s | %s | %sms', result.code, result.message, _elapsed_ms(started))
        return jsonify(result.to_dict()), result.code

    logger.info('POST "translate" | 200 | %sms', _elapsed_ms(started))
    payload = result.to_dict()
    payload["method"] = "Free"
    if not settings.get("alternatives", True):
        payload["alternatives"] = []
    return jsonify(payload)
