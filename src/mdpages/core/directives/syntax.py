"""Parsing rules for ':::key arg' block containers and '::key arg::' inline directives"""

from markdown_it import MarkdownIt
from markdown_it.rules_inline.state_inline import Delimiter, StateInline
from mdit_py_plugins.container import container_plugin


BLOCK_NAME = 'directive'
BLOCK_OPEN = f'container_{BLOCK_NAME}_open'
INLINE_OPEN = 'directive_inline_open'
INLINE_CLOSE = 'directive_inline_close'

MARKER = ':'
MARKER_CODE = ord(MARKER)


def _accept_any(params: str, *args) -> bool:
    """Every ':::' fence is a directive; unknown or missing keys fall back at render time."""
    return True


def tokenize_inline(state: StateInline, silent: bool) -> bool:
    """Push each '::' pair as a text token and record it as a delimiter (balanced later by balance_pairs)."""
    start = state.pos
    ch = state.src[start]
    if silent or ch != MARKER:
        return False

    scanned = state.scanDelims(start, True)
    length = scanned.length
    if length < 2:
        return False

    if length % 2:
        token = state.push('text', '', 0)
        token.content = ch
        length -= 1

    for _ in range(0, length, 2):
        token = state.push('text', '', 0)
        token.content = ch * 2
        state.delimiters.append(Delimiter(
            marker=MARKER_CODE,
            length=0,  # no "rule of 3" checks, those only apply to emphasis
            token=len(state.tokens) - 1,
            end=-1,
            open=scanned.can_open,
            close=scanned.can_close,
        ))

    state.pos += scanned.length
    return True


def _post_process(state: StateInline, delimiters: list[Delimiter]) -> None:
    lone_markers = []

    for opener in delimiters:
        if opener.marker != MARKER_CODE or opener.end == -1:
            continue
        closer = delimiters[opener.end]

        token = state.tokens[opener.token]
        token.type = INLINE_OPEN
        token.tag = 'span'
        token.nesting = 1
        token.markup = MARKER * 2
        token.content = ''

        token = state.tokens[closer.token]
        token.type = INLINE_CLOSE
        token.tag = 'span'
        token.nesting = -1
        token.markup = MARKER * 2
        token.content = ''

        before = state.tokens[closer.token - 1]
        if before.type == 'text' and before.content == MARKER:
            lone_markers.append(closer.token - 1)

    # An odd run ':::' splits as ':' + '::'; move the lone ':' after the close tokens.
    while lone_markers:
        i = lone_markers.pop()
        j = i + 1
        while j < len(state.tokens) and state.tokens[j].type == INLINE_CLOSE:
            j += 1
        j -= 1
        if i != j:
            state.tokens[i], state.tokens[j] = state.tokens[j], state.tokens[i]


def post_process_inline(state: StateInline) -> None:
    """Turn balanced '::' delimiter pairs into directive_inline_open/close tokens."""
    _post_process(state, state.delimiters)
    for meta in state.tokens_meta:
        if meta and 'delimiters' in meta:
            _post_process(state, meta['delimiters'])


def directive_syntax_plugin(md: MarkdownIt) -> None:
    """Register block containers ahead of code fences and inline directives ahead of emphasis."""
    container_plugin(md, BLOCK_NAME, marker=MARKER, validate=_accept_any)
    md.inline.ruler.before('emphasis', 'directive_inline', tokenize_inline)
    md.inline.ruler2.before('emphasis', 'directive_inline', post_process_inline)
