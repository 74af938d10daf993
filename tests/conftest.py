"""Shared test fixtures for the translation bridge tests."""

import gzip
import json
import os
import zlib
from typing import Any, Callable, Dict, Iterator, List, Optional

# Keep test runs quiet and off the log file
os.environ.setdefault("LOG_MODE", "off")

import brotli
import httpx
import pytest

from deeplx_bridge.lmt.client import LMTClient
from deeplx_bridge.lmt.service import DeepLTranslator


class RawStream(httpx.SyncByteStream):
    """Undecoded response body, as it would arrive over the wire."""

    def __init__(self, data: bytes):
        self._data = data

    def __iter__(self) -> Iterator[bytes]:
        yield self._data


def make_response(
    payload: Any = None,
    status_code: int = 200,
    encoding: Optional[str] = None,
    body: Optional[bytes] = None,
) -> httpx.Response:
    raw = body if body is not None else json.dumps(payload).encode("utf-8")
    if body is None and encoding == "br":
        raw = brotli.compress(raw)
    elif body is None and encoding == "gzip":
        raw = gzip.compress(raw)
    elif body is None and encoding == "deflate":
        raw = zlib.compress(raw)
    headers = {"Content-Type": "application/json"}
    if encoding:
        headers["Content-Encoding"] = encoding
    return httpx.Response(status_code, headers=headers, stream=RawStream(raw))


def split_payload(sentences: List[str], detected: Optional[str] = "EN") -> Dict[str, Any]:
    lang: Dict[str, Any] = {"isConfident": True}
    if detected is not None:
        lang["detected"] = detected
    return {
        "jsonrpc": "2.0",
        "id": 1,
        "result": {
            "lang": lang,
            "texts": [{
                "chunks": [{"sentences": [{"text": s, "prefix": ""}]} for s in sentences],
            }],
        },
    }


def translate_payload(beams: List[str]) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": 2,
        "result": {
            "translations": [{
                "beams": [
                    {"sentences": [{"text": text, "ids": [1]}], "num_symbols": len(text)}
                    for text in beams
                ],
                "quality": "normal",
            }],
            "target_lang": "FR",
            "source_lang": "EN",
        },
    }


class FakeLMTServer:
    """MockTransport handler that answers per JSON-RPC method and records requests."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.bodies: List[Dict[str, Any]] = []
        self._handlers: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def respond(self, method: str, payload: Any = None, **kwargs):
        self._handlers[method] = lambda request: make_response(payload, **kwargs)

    def fail(self, method: str, exc_factory: Callable[[httpx.Request], Exception]):
        def handler(request):
            raise exc_factory(request)
        self._handlers[method] = handler

    @property
    def methods(self) -> List[str]:
        return [body["method"] for body in self.bodies]

    def body_for(self, method: str) -> Dict[str, Any]:
        return next(body for body in self.bodies if body["method"] == method)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(request)
        self.bodies.append(body)
        return self._handlers[body["method"]](request)


class SequenceRng:
    """Stand-in for random.Random that hands out fixed request ids."""

    def __init__(self, ids: List[int]):
        self._ids = iter(ids)

    def randrange(self, stop: int) -> int:
        return next(self._ids)


@pytest.fixture
def fake_server() -> FakeLMTServer:
    return FakeLMTServer()


@pytest.fixture
def lmt_client(fake_server) -> Iterator[LMTClient]:
    http_client = httpx.Client(transport=httpx.MockTransport(fake_server))
    client = LMTClient(http_client=http_client)
    yield client
    http_client.close()


@pytest.fixture
def translator(lmt_client) -> DeepLTranslator:
    return DeepLTranslator(client=lmt_client, rng=SequenceRng([100, 200]), clock=lambda: 1700000000000)


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def split_factory():
    return split_payload


@pytest.fixture
def translate_factory():
    return translate_payload
