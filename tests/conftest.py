"""
Pytest fixtures shared by the receipt verifier tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from receipt_extractor import get_ruleset  # noqa: E402


DASHEN_RECEIPT_TEXT = """
Dashen Bank
Transaction Receipt

Sender Name: ABEBE KEBEDE TESFAYE
Sender Account Number: 5036****011
Transaction Channel: Mobile
Service Type: Account To Account
Narrative: House rent January
Receiver Name: TIGIST ALEMU
Phone No: +251 911 234567
Institution Name: DASHEN BANK S.C.
Transaction Reference: FT24015ABC12
Transfer Reference: DSH-778899
Transaction Date: 1/15/2024, 10:30:45 AM
Transaction Amount    ETB 1,500.00
Service Charge        ETB 2.00
Excise Tax (15%)      ETB 0.30
VAT (15%)             ETB 0.35
Penalty Fee           ETB 0.00
Income Tax Fee        ETB 0.00
Interest Fee          ETB 0.00
Stamp Duty            ETB 0.00
Discount Amount       ETB 0.00
Total                 ETB 1,502.65

Thank you for banking with Dashen
"""


def build_pdf(lines) -> bytes:
    """Minimal single-page PDF with one text line per entry (Helvetica)."""
    ops = ["BT", "/F1 12 Tf", "72 720 Td"]
    for i, line in enumerate(lines):
        if i:
            ops.append("0 -20 Td")
        ops.append(f"({line}) Tj")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, 1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1, xref_at,
    )
    return bytes(out)


@pytest.fixture
def dashen_ruleset():
    return get_ruleset("dashen")


@pytest.fixture
def receipt_text():
    return DASHEN_RECEIPT_TEXT


@pytest.fixture
def receipt_pdf():
    return build_pdf([
        "Dashen Bank",
        "Sender Name: ABEBE KEBEDE",
        "Transaction Reference: FT24015ABC12",
        "Transaction Amount ETB 500.00",
        "Total ETB 502.00",
    ])


@pytest.fixture
def receipt_html():
    return (
        b"<!DOCTYPE html><html><head><title>Receipt</title>"
        b"<style>.total { font-weight: bold }</style></head><body>"
        b"<h2>Dashen Bank</h2><table>"
        b"<tr><td>Receiver Name</td><td>TIGIST ALEMU</td></tr>"
        b"<tr><td>Transaction Reference</td><td>FT24015ABC12</td></tr>"
        b"<tr><td>Transaction Amount</td><td>ETB&nbsp;500.00</td></tr>"
        b"</table><script>var Total = 1;</script></body></html>"
    )


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test."""
    from loguru import logger

    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
