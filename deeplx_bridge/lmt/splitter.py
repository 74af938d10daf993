"""Sentence splitting through the remote LMT_split_text method."""

from typing import Any, Dict, Optional, Union

from deeplx_bridge.logger import get_logger
from deeplx_bridge.lmt.client import LMTClient
from deeplx_bridge.lmt.exceptions import MalformedUpstreamResponse
from deeplx_bridge.lmt.models import Chunk, RateLimited, Sentence, SplitResult

logger = get_logger(__name__)

SPLIT_METHOD = "LMT_split_text"
JSONRPC_VERSION = "2.0"


def build_split_request(text: str, request_id: int, rich_text: bool = False) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "method": SPLIT_METHOD,
        "id": request_id,
        "params": {
            "commonJobParams": {"mode": "translate"},
            "lang": {"lang_user_selected": "auto"},
            "texts": [text],
            "textType": "richtext" if rich_text else "plaintext",
        },
    }


def _parse_chunk(raw_chunk: Any) -> Chunk:
    sentences = []
    raw_sentences = raw_chunk.get("sentences") if isinstance(raw_chunk, dict) else None
    for raw_sentence in raw_sentences if isinstance(raw_sentences, list) else []:
        if not isinstance(raw_sentence, dict) or not isinstance(raw_sentence.get("text"), str):
            continue
        prefix = raw_sentence.get("prefix")
        sentences.append(Sentence(text=raw_sentence["text"], prefix=prefix if isinstance(prefix, str) else ""))
    return Chunk(sentences=sentences)


def parse_split_response(response: Dict[str, Any]) -> SplitResult:
    """
    Convert a raw LMT_split_text response into a SplitResult.

    Raises:
        MalformedUpstreamResponse: If 'result' or the chunk list is missing
    """
    result = response.get("result") if isinstance(response, dict) else None
    if not isinstance(result, dict):
        logger.error(f"Invalid splitText response: {response}")
        raise MalformedUpstreamResponse("Failed to split text for translation", stage="split")

    texts = result.get("texts")
    raw_chunks = None
    if isinstance(texts, list) and texts and isinstance(texts[0], dict):
        raw_chunks = texts[0].get("chunks")
    if not isinstance(raw_chunks, list):
        logger.error(f"Invalid chunks structure in splitText response: {response}")
        raise MalformedUpstreamResponse("Invalid text chunks received from splitText", stage="split")

    lang = result.get("lang")
    detected = lang.get("detected") if isinstance(lang, dict) else None
    if not isinstance(detected, str):
        detected = None

    return SplitResult(
        chunks=[_parse_chunk(raw_chunk) for raw_chunk in raw_chunks],
        detected_language=detected or None,
    )


def split_text(
    client: LMTClient,
    text: str,
    request_id: int,
    rich_text: bool = False,
    dl_session: Optional[str] = None,
    verbose: bool = False,
) -> Union[SplitResult, RateLimited]:
    """Split text into sentence chunks; a 429 is passed through unchanged."""
    payload = build_split_request(text, request_id, rich_text=rich_text)
    response = client.send(payload, dl_session=dl_session, verbose=verbose)

    if isinstance(response, RateLimited):
        return response

    split_result = parse_split_response(response)
    if verbose:
        logger.debug(
            f"splitText returned {len(split_result.chunks)} chunk(s), "
            f"detected language: {split_result.detected_language}"
        )
    return split_result
