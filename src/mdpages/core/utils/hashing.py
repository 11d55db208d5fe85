"""Content hashing for page change detection"""

import hashlib


def content_hash(content: str | None) -> str:
    """Hex SHA-256 of the page source; None hashes like ''. Fits the String(64) hash column."""
    return hashlib.sha256((content or '').encode('utf-8')).hexdigest()
