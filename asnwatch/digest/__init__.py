"""
Digest rendering and the end-to-end digest run.
"""

from asnwatch.digest.formatter import (
    WORDINGS,
    UnsupportedLocaleError,
    format_digest,
    format_item,
)
from asnwatch.digest.service import DigestRun, DigestService

__all__ = [
    "WORDINGS",
    "DigestRun",
    "DigestService",
    "UnsupportedLocaleError",
    "format_digest",
    "format_item",
]
