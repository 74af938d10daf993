"""
Translation Orchestrator

Runs the two-call protocol for one piece of text:
1. LMT_split_text splits the text into sentences and detects the language
2. Jobs are built from the chunks with neighbouring-sentence context
3. LMT_handle_jobs translates the jobs
4. The first beam becomes the translation, the other beams alternatives

The two calls are strictly sequential; the second depends on the first.
"""

import random
import time
from typing import Any, Callable, Dict, List, Optional, Union

from deeplx_bridge import language_codes as lc
from deeplx_bridge.logger import get_logger
from deeplx_bridge.lmt.client import LMTClient
from deeplx_bridge.lmt.exceptions import MalformedUpstreamResponse, ValidationError
from deeplx_bridge.lmt.extractor import extract_translations
from deeplx_bridge.lmt.jobs import build_jobs
from deeplx_bridge.lmt.models import Job, RateLimited, TranslationResult
from deeplx_bridge.lmt.splitter import JSONRPC_VERSION, split_text

logger = get_logger(__name__)

TRANSLATE_METHOD = "LMT_handle_jobs"
JOB_PRIORITY = 1
MAX_REQUEST_ID = 1_000_000

RICH_TEXT_TAG_HANDLING = ("html", "xml")

Outcome = Union[TranslationResult, RateLimited]


def current_timestamp_ms() -> int:
    return int(time.time() * 1000)


def build_translate_request(
    jobs: List[Job],
    request_id: int,
    source_lang: str,
    target_lang: str,
    timestamp: int,
    regional_variant: Optional[str] = None,
) -> Dict[str, Any]:
    common_job_params: Dict[str, Any] = {"mode": "translate"}
    if regional_variant:
        common_job_params["regional_variant"] = regional_variant

    return {
        "jsonrpc": JSONRPC_VERSION,
        "method": TRANSLATE_METHOD,
        "id": request_id,
        "params": {
            "commonJobParams": common_job_params,
            "lang": {
                "source_lang_computed": source_lang.upper(),
                "target_lang": target_lang.upper(),
            },
            "jobs": [job.to_payload() for job in jobs],
            "priority": JOB_PRIORITY,
            "timestamp": timestamp,
        },
    }


class DeepLTranslator:
    """Translation pipeline over one LMTClient."""

    def __init__(
        self,
        client: Optional[LMTClient] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._owns_client = client is None
        self.client = client if client is not None else LMTClient()
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else current_timestamp_ms

    def close(self):
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def next_request_id(self) -> int:
        return self.rng.randrange(MAX_REQUEST_ID)

    def translate(
        self,
        text: str,
        source_lang: Optional[str] = lc.AUTO,
        target_lang: Optional[str] = lc.DEFAULT_TARGET,
        dl_session: Optional[str] = None,
        tag_handling: Union[str, bool, None] = False,
        verbose: bool = False,
    ) -> Outcome:
        """
        Translate text through the split and handle_jobs calls.

        Args:
            text: Text to translate; must be non-empty
            source_lang: Source language or 'auto' to use the detected language
            target_lang: Target language, optionally with a regional variant (EN-US)
            dl_session: Session cookie forwarded unchanged to the remote service
            tag_handling: 'html' or 'xml' to split the text as rich text
            verbose: Log requests and responses at DEBUG level

        Returns:
            TranslationResult, or RateLimited if either call hit a 429

        Raises:
            ValidationError: If text is empty
            TranslationError: Subclasses for malformed responses and transport/server failures
        """
        if not text:
            raise ValidationError("No text to translate")

        source = lc.normalize_source_language(source_lang)
        target = lc.normalize_target_language(target_lang)

        if verbose:
            logger.debug(f"translate() called with: text={text[:50]!r}, source={source!r}, target={target!r}")

        rich_text = isinstance(tag_handling, str) and tag_handling.lower() in RICH_TEXT_TAG_HANDLING
        split_result = split_text(
            self.client,
            text,
            self.next_request_id(),
            rich_text=rich_text,
            dl_session=dl_session,
            verbose=verbose,
        )
        if isinstance(split_result, RateLimited):
            logger.warning("splitText returned 429 Too Many Requests")
            return split_result

        effective_source = source
        if lc.is_auto(source):
            if isinstance(split_result.detected_language, str) and split_result.detected_language:
                effective_source = split_result.detected_language.lower()
                if verbose:
                    logger.debug(f"Detected source language: {effective_source}")
            else:
                logger.warning(f"Could not detect source language, defaulting to '{lc.FALLBACK_SOURCE}'")
                effective_source = lc.FALLBACK_SOURCE

        jobs = build_jobs(split_result.chunks)
        base_target, regional_variant = lc.split_regional_variant(target)

        request_id = self.next_request_id()
        payload = build_translate_request(
            jobs,
            request_id,
            source_lang=effective_source,
            target_lang=base_target,
            timestamp=self.clock(),
            regional_variant=regional_variant,
        )

        if verbose:
            logger.debug(f"Sending translate request with {len(jobs)} job(s)")

        response = self.client.send(payload, dl_session=dl_session, verbose=verbose)
        if isinstance(response, RateLimited):
            logger.warning("Translate request returned 429 Too Many Requests")
            return response

        if not isinstance(response, dict) or not response.get("result"):
            logger.error(f"Invalid translate response: {response}")
            raise MalformedUpstreamResponse("Failed to get translation result", stage="translate")

        primary, alternatives = extract_translations(response)

        result = TranslationResult(
            id=request_id,
            data=primary,
            source_lang=effective_source.upper(),
            target_lang=target.upper(),
            alternatives=alternatives,
        )
        if verbose:
            logger.debug(f"Final translation result: {result}")
        return result


def translate(
    text: str,
    source_lang: Optional[str] = lc.AUTO,
    target_lang: Optional[str] = lc.DEFAULT_TARGET,
    dl_session: Optional[str] = None,
    tag_handling: Union[str, bool, None] = False,
    verbose: bool = False,
    timeout: Any = None,
) -> Outcome:
    """
    Translate with a fresh client and translator; see DeepLTranslator.translate.

    timeout is passed to LMTClient; None reads it from the configuration.
    """
    if not text:
        raise ValidationError("No text to translate")

    with LMTClient(timeout=timeout) as client, DeepLTranslator(client=client) as translator:
        return translator.translate(
            text,
            source_lang=source_lang,
            target_lang=target_lang,
            dl_session=dl_session,
            tag_handling=tag_handling,
            verbose=verbose,
        )
