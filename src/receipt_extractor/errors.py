"""Exceptions raised at the fetch and decode seams of receipt verification."""


class ReceiptVerificationError(Exception):
    """Base class for verification pipeline errors."""


class ReceiptFetchError(ReceiptVerificationError):
    """The receipt document could not be retrieved."""


class DocumentDecodeError(ReceiptVerificationError):
    """The receipt bytes could not be turned into text."""
