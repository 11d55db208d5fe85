"""Front matter harvesting from the token stream and coercion onto Document fields"""

import logging
from typing import Optional

from markdown_it.token import Token
from pydantic import ValidationError

from mdpages.core.models import FRONT_MATTER_FIELDS, Document


logger = logging.getLogger(__name__)

DELIMITER = '---'


def parse_front_matter(block: str) -> dict[str, str]:
    """Split 'key: value' lines on the first colon; blank, delimiter-only and colon-less lines are skipped."""
    fields: dict[str, str] = {}
    for line in block.splitlines():
        stripped = line.strip()
        if not stripped or stripped.strip('-') == '':
            continue
        key, sep, value = stripped.partition(':')
        if not sep or not key.strip():
            logger.debug("Skipping front matter line without a key: %r", stripped)
            continue
        fields[key.strip()] = value.strip()
    return fields


def extract_front_matter(tokens: list[Token]) -> dict[str, str]:
    """Return the key/value pairs of the first front matter block, or {} when there is none."""
    for token in tokens:
        if token.type == 'front_matter':
            return parse_front_matter(token.content)
    return {}


def apply_front_matter(doc: Document, fields: dict[str, str]) -> Document:
    """Coerce recognized keys (case-insensitive) onto doc; unknown keys are ignored.

    A value that fails validation (e.g. an unparsable date) leaves the field
    at its current value.
    """
    for key, value in fields.items():
        name = key.lower()
        if name not in FRONT_MATTER_FIELDS:
            continue
        try:
            setattr(doc, name, value)
        except ValidationError as e:
            logger.debug("Ignoring front matter %s=%r: %s", key, value, e.errors()[0]['msg'])
    return doc


def strip_front_matter(content: Optional[str]) -> Optional[str]:
    """Return the trimmed text after the second '---', or content unchanged with fewer than two."""
    if content is None:
        return None
    start = content.find(DELIMITER)
    if start == -1:
        return content
    end = content.find(DELIMITER, start + len(DELIMITER))
    if end == -1:
        return content
    return content[end + len(DELIMITER):].strip()
