"""Slug generation for document and heading identifiers"""

import re


NON_ASCII_RE = re.compile(r'[^\x00-\x7F]+')
INVALID_CHARS_RE = re.compile(r'[^a-z0-9 _-]')
SEPARATOR_RE = re.compile(r'[\s_]+')
HYPHENS_RE = re.compile(r'-+')


def slugify(text: str | None, max_length: int = 100) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug of at most max_length chars.

    Tag-style names keep their meaning: 'C#' -> 'csharp', 'C++' -> 'cpp'.
    """
    if not text:
        return ''

    text = text.lower().replace('#', 'sharp').replace('++', 'pp')
    text = NON_ASCII_RE.sub('', text)
    text = INVALID_CHARS_RE.sub('-', text)
    text = text[:max_length].strip()
    text = SEPARATOR_RE.sub('-', text)
    text = HYPHENS_RE.sub('-', text)

    if text.startswith('-'):
        text = text[1:]
    if text.endswith('-'):
        text = text[:-1]
    return text
