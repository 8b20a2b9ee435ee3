"""
Document Decoder
Recovers raw text from receipt bytes (PDF text layer or HTML).

Output is raw text; whitespace normalization happens in the engine.
Any failure surfaces as DocumentDecodeError.
"""

from html.parser import HTMLParser
from io import BytesIO
from typing import List, Optional

from loguru import logger
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from receipt_extractor.errors import DocumentDecodeError

PDF = "application/pdf"
HTML = "text/html"
TEXT = "text/plain"

_PDF_MAGIC = b"%PDF-"
_GENERIC_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

# Tags whose content separates label/value cells on rendered receipts
_BLOCK_TAGS = {
    "p", "div", "br", "tr", "td", "th", "li", "table", "section",
    "h1", "h2", "h3", "h4", "h5", "h6",
}
_SKIP_TAGS = {"script", "style", "head", "noscript"}


class _TextCollector(HTMLParser):
    """Collects visible text, one newline per block boundary."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in _SKIP_TAGS:
            self._skip_depth += 1
        elif tag in _BLOCK_TAGS:
            self.parts.append("\n")

    def handle_endtag(self, tag):
        if tag in _SKIP_TAGS:
            self._skip_depth = max(0, self._skip_depth - 1)
        elif tag in _BLOCK_TAGS:
            self.parts.append("\n")

    def handle_data(self, data):
        if not self._skip_depth:
            self.parts.append(data)

    def text(self) -> str:
        return "".join(self.parts)


def detect_media_type(content: bytes, declared: Optional[str] = None) -> str:
    """
    Resolve the media type of a receipt.

    A specific declared type wins; otherwise the bytes are sniffed:
    %PDF- signature → PDF, an <html>/<body> tag → HTML, else plain text.
    """
    media = (declared or "").split(";", 1)[0].strip().lower()
    if media and media not in _GENERIC_TYPES:
        if media == "application/xhtml+xml":
            return HTML
        return media

    head = content[:1024].lstrip()
    if head.startswith(_PDF_MAGIC):
        return PDF
    lowered = head.lower()
    if b"<html" in lowered or b"<body" in lowered or lowered.startswith(b"<!doctype html"):
        return HTML
    return TEXT


def pdf_to_text(content: bytes) -> str:
    reader = PdfReader(BytesIO(content))
    if len(reader.pages) == 0:
        raise DocumentDecodeError("PDF has no pages")
    pages = [(page.extract_text() or "") for page in reader.pages]
    logger.debug(f"[DocumentDecoder] PDF: {len(pages)} page(s)")
    return "\n".join(pages)


def html_to_text(content: bytes) -> str:
    collector = _TextCollector()
    collector.feed(content.decode("utf-8", errors="replace"))
    collector.close()
    return collector.text()


def decode_document(content: bytes, media_type: Optional[str] = None) -> str:
    """
    Turn receipt bytes into raw text.

    Args:
        content:    Document bytes as fetched / uploaded
        media_type: Declared Content-Type (may be None or generic)

    Returns:
        Raw, un-normalized text

    Raises:
        DocumentDecodeError: empty content, unsupported type, or a
            corrupt document
    """
    if not content:
        raise DocumentDecodeError("Empty document")

    resolved = detect_media_type(content, media_type)
    logger.info(f"[DocumentDecoder] Decoding {len(content)} bytes as {resolved}")

    try:
        if resolved == PDF:
            return pdf_to_text(content)
        if resolved == HTML:
            return html_to_text(content)
        if resolved.startswith("text/"):
            return content.decode("utf-8")
    except DocumentDecodeError:
        raise
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(f"Document is not valid UTF-8 text: {e}") from e
    except PyPdfError as e:
        raise DocumentDecodeError(f"Corrupt PDF: {e}") from e
    except Exception as e:
        # pypdf surfaces some structural damage as plain Python errors
        raise DocumentDecodeError(f"Could not decode {resolved} document: {e}") from e

    raise DocumentDecodeError(f"Unsupported document type: {resolved}")
