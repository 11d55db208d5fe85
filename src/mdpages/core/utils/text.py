"""Word, line, and reading-time statistics for raw document content"""

import math
import re


WORD_BOUNDARIES = (' ', '.', '?', '!', '(', ')', '[', ']')
WORDS_PER_MIN = 225


def word_count(text: str, boundaries: tuple[str, ...] = WORD_BOUNDARIES) -> int:
    """Count non-empty fragments of text split on any boundary character."""
    pattern = '[' + re.escape(''.join(boundaries)) + ']'
    return sum(1 for part in re.split(pattern, text) if part)


def line_count(text: str) -> int:
    """Count line-feed characters (a trailing line without '\\n' is not counted)."""
    return text.count('\n')


def minutes_to_read(words: int | None, words_per_min: int = WORDS_PER_MIN) -> int:
    """Whole minutes needed to read `words` words, rounded up; None counts as a single word."""
    return math.ceil((words or 1) / words_per_min)
