"""
Request body serialization for the LMT JSON-RPC endpoint.

The browser extension the remote service expects varies the spacing around
the "method" key depending on the request id. The service fingerprints on this,
so the output has to match byte for byte.
"""

import json
from typing import Any, Callable, Dict

METHOD_TOKEN = '"method":"'
METHOD_SPACED = '"method" : "'
METHOD_DEFAULT = '"method": "'

BodyTransform = Callable[[str, int], str]


def uses_spaced_method(request_id: int) -> bool:
    """True when the id selects the '"method" : "' variant."""
    return (request_id + 5) % 29 == 0 or (request_id + 3) % 13 == 0


def method_spacing(body: str, request_id: int) -> str:
    """Rewrite the first compact "method" key into the id-dependent spacing."""
    replacement = METHOD_SPACED if uses_spaced_method(request_id) else METHOD_DEFAULT
    return body.replace(METHOD_TOKEN, replacement, 1)


def serialize(payload: Dict[str, Any]) -> str:
    """Compact JSON, matching JSON.stringify output."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def format_post_body(payload: Dict[str, Any], transform: BodyTransform = method_spacing) -> bytes:
    """
    Serialize a JSON-RPC request into wire bytes.

    Args:
        payload: Request object; must carry an integer 'id'
        transform: Post-serialization rewrite, parameterized by request id

    Returns:
        UTF-8 encoded request body
    """
    body = transform(serialize(payload), payload["id"])
    # Lone surrogates go out as \udXXX escapes, as JSON.stringify writes them
    return body.encode("utf-8", "backslashreplace")
