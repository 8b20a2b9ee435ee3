"""
Receipt Verification Pipeline
Combines fetching, decoding and field extraction into one call.
"""

import time
from typing import Optional

from loguru import logger

from document_decoder import decode_document
from receipt_extractor import (
    DocumentDecodeError,
    ReceiptEngine,
    ReceiptFetchError,
    VerificationResult,
    get_ruleset,
)
from receipt_fetcher import ReceiptFetcher
from verifier_utils import format_processing_time, load_config, setup_logging

PARSE_FAILURE = "Error parsing receipt document"


class ReceiptVerifier:
    """
    End-to-end receipt verification.

    Workflow:
    1. Fetch the receipt by transaction reference
    2. Decode PDF / HTML bytes to text
    3. Run the provider's extraction engine

    Every entry point returns a VerificationResult; fetch and decode
    errors become success=False results instead of exceptions.
    """

    def __init__(self, config_path: Optional[str] = None, fetcher: Optional[ReceiptFetcher] = None):
        self.config = load_config(config_path)
        self.provider = self.config['provider']
        self.engine = ReceiptEngine(get_ruleset(self.provider))
        self.fetcher = fetcher or ReceiptFetcher(self.config['fetch'])
        logger.info(f"Receipt Verifier ready (provider={self.provider})")

    def verify(self, reference: str) -> VerificationResult:
        """
        Fetch and verify the receipt for a transaction reference.

        Args:
            reference: Provider transaction reference, e.g. "FT24015ABC12"
        """
        if not reference or not reference.strip():
            return VerificationResult.failure("Transaction reference is required")

        started = time.perf_counter()
        try:
            receipt = self.fetcher.fetch(reference)
        except ReceiptFetchError as e:
            logger.error(f"❌ Receipt fetch failed for {reference!r}: {e}")
            return VerificationResult.failure(f"Failed to fetch receipt: {e}")

        result = self.verify_document(receipt.content, receipt.media_type)
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"Verification of {reference!r} finished in {format_processing_time(elapsed_ms)} "
            f"(success={result.success})"
        )
        return result

    def verify_document(self, content: bytes, media_type: Optional[str] = None) -> VerificationResult:
        """Verify receipt bytes that were already retrieved (PDF or HTML)."""
        try:
            text = decode_document(content, media_type)
        except DocumentDecodeError as e:
            logger.error(f"❌ Receipt document could not be decoded: {e}")
            return VerificationResult.failure(PARSE_FAILURE)
        return self.verify_text(text)

    def verify_text(self, text: str) -> VerificationResult:
        """Verify text that was already extracted from a receipt (e.g. by OCR)."""
        return self.engine.run(text)


def main():
    """Verify one reference from the command line."""
    import sys

    setup_logging(log_file=None, level="INFO")
    if len(sys.argv) != 2:
        print("Usage: python receipt_verifier.py <transaction-reference>")
        sys.exit(2)

    result = ReceiptVerifier().verify(sys.argv[1])
    for key, value in result.to_response().items():
        print(f"  {key}: {value}")
    sys.exit(0 if result.success else 1)


if __name__ == "__main__":
    main()
