"""
LMT Protocol Client

Performs the HTTP exchange with the JSON-RPC endpoint used by the DeepL
browser extension:
- Extension-identity headers and optional dl_session cookie
- Request bodies from formatter.format_post_body
- Compressed (br/gzip/deflate) bodies decoded by httpx
- Classification of 429 / server / transport failures
"""

from typing import Any, Dict, Optional, Union

import httpx

from deeplx_bridge.logger import get_logger
from deeplx_bridge.lmt.exceptions import (
    DecompressionError,
    MalformedUpstreamResponse,
    TransportError,
    UpstreamServerError,
)
from deeplx_bridge.lmt.formatter import format_post_body
from deeplx_bridge.lmt.models import RateLimited

logger = get_logger(__name__)

BASE_URL = "https://www2.deepl.com"
JSONRPC_PATH = "/jsonrpc"

USER_AGENT = "DeepLBrowserExtension/1.28.0 Mozilla/5.0"
ORIGIN = "https://www.deepl.com"
REFERER = "https://www.deepl.com/"

MAX_ERROR_BODY_CHARS = 500

Response = Union[Dict[str, Any], RateLimited]


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 30.0),
            read=timeout_config.get('read', 30.0),
            pool=timeout_config.get('pool', 10.0),
        )
    else:
        timeout_value = float(timeout_config) if timeout_config else 30.0
        return httpx.Timeout(
            connect=10.0,
            write=30.0,
            read=timeout_value,
            pool=10.0,
        )


def build_headers(dl_session: Optional[str] = None) -> Dict[str, str]:
    """Headers mimicking the browser extension; the cookie only when a session is given."""
    headers = {
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.9",
        "Accept-Encoding": "gzip, deflate, br",
        "Origin": ORIGIN,
        "Referer": REFERER,
        "Pragma": "no-cache",
        "Cache-Control": "no-cache",
    }
    if dl_session:
        headers["Cookie"] = f"dl_session={dl_session}"
    return headers


class LMTClient:
    """HTTP client for the LMT JSON-RPC endpoint."""

    def __init__(
        self,
        timeout: Any = None,
        transport: Optional[httpx.BaseTransport] = None,
        http_client: Optional[httpx.Client] = None,
        base_url: str = BASE_URL,
    ):
        self.url = f"{base_url}{JSONRPC_PATH}"
        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            if timeout is None:
                from deeplx_bridge.config import load_config
                timeout = load_config().get('timeout')
            self._client = httpx.Client(timeout=get_httpx_timeout(timeout), transport=transport)
            self._owns_client = True

    def close(self):
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def send(self, payload: Dict[str, Any], dl_session: Optional[str] = None, verbose: bool = False) -> Response:
        """
        POST a JSON-RPC request and return the parsed JSON response.

        httpx undoes the Content-Encoding; br needs the httpx[brotli] extra.

        Returns:
            Parsed JSON dict, or RateLimited when the service answers 429

        Raises:
            TransportError: No response was received
            UpstreamServerError: Any other non-2xx status
            DecompressionError: Compressed body could not be decoded
            MalformedUpstreamResponse: Body is not JSON
        """
        method = payload.get("method")
        request = self._client.build_request(
            "POST",
            self.url,
            content=format_post_body(payload),
            headers=build_headers(dl_session),
        )

        try:
            response = self._client.send(request, stream=True)
        except httpx.TransportError as e:
            logger.error(f"sendRequest: No response received for {method}: {e}")
            raise TransportError(
                f"No response received from {self.url}: {e}",
                details={"method": method},
            ) from e

        try:
            if response.status_code == 429:
                logger.warning(f"sendRequest: {method} rate limited (429)")
                return RateLimited()
            response.read()
        except httpx.DecodingError as e:
            content_encoding = response.headers.get("content-encoding")
            logger.error(f"{content_encoding} decompression failed: {e}")
            raise DecompressionError(
                f"Failed to decompress {content_encoding} response: {e}",
                details={"content_encoding": content_encoding, "method": method},
            ) from e
        except httpx.TransportError as e:
            logger.error(f"sendRequest: Connection lost while reading {method} response: {e}")
            raise TransportError(
                f"Connection lost while reading response from {self.url}: {e}",
                details={"method": method},
            ) from e
        finally:
            response.close()

        if not response.is_success:
            body = response.text[:MAX_ERROR_BODY_CHARS]
            logger.error(f"sendRequest: Server responded with status {response.status_code}")
            logger.error(f"sendRequest: Response data: {body}")
            raise UpstreamServerError(response.status_code, body, details={"method": method})

        try:
            result = response.json()
        except ValueError as e:
            logger.error(f"sendRequest: {method} returned a non-JSON body: {e}")
            raise MalformedUpstreamResponse(
                f"Response to {method} is not valid JSON",
                stage=method,
                details={"body": response.text[:MAX_ERROR_BODY_CHARS]},
            ) from e

        if verbose:
            logger.debug(f"{method} response: {result}")
        return result
