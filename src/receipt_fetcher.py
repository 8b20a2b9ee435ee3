"""
Receipt Fetcher
Downloads a provider receipt by transaction reference.

Single attempt, no retries; timeout and TLS verification come from the
`fetch` section of the config.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import quote

import httpx
from loguru import logger

from receipt_extractor.errors import ReceiptFetchError


@dataclass(frozen=True)
class FetchedReceipt:
    content: bytes
    media_type: Optional[str]
    url: str


class ReceiptFetcher:
    """
    HTTP client for receipt documents.

    Args:
        fetch_config: the `fetch` config section (url_template,
                      timeout_seconds, verify_tls, headers)
        client:       optional pre-built httpx.Client (tests pass one with
                      a MockTransport)
    """

    def __init__(self, fetch_config: Dict, client: Optional[httpx.Client] = None):
        self.url_template = fetch_config['url_template']
        self.timeout = float(fetch_config.get('timeout_seconds', 30))
        self.verify_tls = bool(fetch_config.get('verify_tls', False))
        self.headers = dict(fetch_config.get('headers') or {})
        self._client = client

        if not self.verify_tls:
            logger.warning("[ReceiptFetcher] TLS certificate verification is disabled")

    def receipt_url(self, reference: str) -> str:
        return self.url_template.format(reference=quote(reference.strip(), safe=''))

    def fetch(self, reference: str) -> FetchedReceipt:
        """
        Fetch the receipt document for a transaction reference.

        Raises:
            ReceiptFetchError: transport failure, timeout or non-2xx status
        """
        url = self.receipt_url(reference)
        logger.info(f"[ReceiptFetcher] 🔎 Fetching receipt: {url}")

        try:
            if self._client is not None:
                response = self._client.get(
                    url, headers=self.headers, timeout=self.timeout, follow_redirects=True,
                )
            else:
                with httpx.Client(
                    verify=self.verify_tls, timeout=self.timeout, follow_redirects=True,
                ) as client:
                    response = client.get(url, headers=self.headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ReceiptFetchError(
                f"Receipt server returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ReceiptFetchError(str(e) or e.__class__.__name__) from e

        content = response.content
        logger.info(f"[ReceiptFetcher] ✅ Receipt fetched ({len(content)} bytes)")
        return FetchedReceipt(
            content=content,
            media_type=response.headers.get('content-type'),
            url=url,
        )
