"""
Tests for the HTTP receipt fetcher (httpx MockTransport, no network)
"""

import httpx
import pytest

from receipt_extractor import ReceiptFetchError
from receipt_fetcher import ReceiptFetcher
from verifier_utils import default_config


def _fetcher(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return ReceiptFetcher(default_config()['fetch'], client=client)


def test_fetch_success_builds_url_and_headers():
    seen = {}

    def handler(request):
        seen['url'] = str(request.url)
        seen['ua'] = request.headers.get('user-agent')
        seen['accept'] = request.headers.get('accept')
        return httpx.Response(200, content=b"%PDF-1.4 ...", headers={"content-type": "application/pdf"})

    receipt = _fetcher(handler).fetch(" FT24015ABC12 ")

    assert seen['url'] == "https://receipt.dashensuperapp.com/receipt/FT24015ABC12"
    assert seen['ua'].startswith("Mozilla/5.0")
    assert seen['accept'] == "application/pdf"
    assert receipt.content == b"%PDF-1.4 ..."
    assert receipt.media_type == "application/pdf"
    assert receipt.url == seen['url']


def test_reference_is_url_quoted():
    fetcher = ReceiptFetcher(default_config()['fetch'])
    assert fetcher.receipt_url("a/b c") == "https://receipt.dashensuperapp.com/receipt/a%2Fb%20c"


def test_redirect_is_followed():
    def handler(request):
        if request.url.path == "/receipt/FT1":
            return httpx.Response(302, headers={"location": "https://cdn.example.test/FT1.pdf"})
        return httpx.Response(200, content=b"%PDF-1.4 ...", headers={"content-type": "application/pdf"})

    receipt = _fetcher(handler).fetch("FT1")

    assert receipt.content == b"%PDF-1.4 ..."
    assert receipt.media_type == "application/pdf"


def test_http_error_status():
    fetcher = _fetcher(lambda request: httpx.Response(404, text="not found"))
    with pytest.raises(ReceiptFetchError, match="HTTP 404"):
        fetcher.fetch("MISSING1")


def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ReceiptFetchError, match="connection refused"):
        _fetcher(handler).fetch("FT1")


def test_timeout_is_a_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ReceiptFetchError):
        _fetcher(handler).fetch("FT1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
