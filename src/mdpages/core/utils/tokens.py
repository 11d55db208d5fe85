"""Shared markdown-it token utilities"""

from markdown_it.token import Token


TEXT_TOKEN_TYPES = ('text', 'code_inline')


def heading_level(token: Token) -> int | None:
    """Return the heading level (1-6) for a heading_open/heading_close token, else None."""
    if token.type in ('heading_open', 'heading_close') and token.tag[:1] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def inline_text(token: Token | None) -> str:
    """Concatenate the plain text of an inline token's children (markup dropped)."""
    if token is None or not token.children:
        return ''
    return ''.join(child.content for child in token.children if child.type in TEXT_TOKEN_TYPES).strip()


def find_closing(tokens: list[Token], start: int) -> int:
    """Return the index of the token closing the one opened at start (same type family, nesting-aware).

    Returns len(tokens) when the stream ends before the close token, so a
    truncated region still renders all of its remaining children.
    """
    open_type = tokens[start].type
    close_type = open_type[:-len('_open')] + '_close'
    depth = 0
    for i in range(start, len(tokens)):
        if tokens[i].type == open_type:
            depth += 1
        elif tokens[i].type == close_type:
            depth -= 1
            if depth == 0:
                return i
    return len(tokens)
