"""Heading ids, permalink anchors, and Document Map collection"""

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_core.state_core import StateCore

from mdpages.core.context import RenderContext
from mdpages.core.utils.slug import slugify
from mdpages.core.utils.tokens import heading_level, inline_text


PERMALINK_MAX_LEVEL = 4


def permalink(anchor_id: str) -> str:
    """Zero-width permalink anchor appended inside a heading."""
    anchor_id = escapeHtml(anchor_id)
    return (
        f'<a class="header-anchor" href="javascript:;" onclick="location.hash=\'#{anchor_id}\'" '
        f'aria-label="Permalink">&ZeroWidthSpace;</a>'
    )


def _make_heading_ids(max_length: int):
    """Core rule assigning unique slug ids to headings; headings whose text slugs to '' get none."""

    def heading_ids(state: StateCore) -> None:
        seen: set[str] = set()
        tokens = state.tokens
        for idx, token in enumerate(tokens):
            if token.type != 'heading_open':
                continue
            existing = token.attrGet('id')
            if existing:
                seen.add(str(existing))
                continue
            base = slugify(inline_text(tokens[idx + 1]), max_length)
            if not base:
                continue
            anchor_id, n = base, 1
            while anchor_id in seen:
                anchor_id = f"{base}-{n}"
                n += 1
            seen.add(anchor_id)
            token.attrSet('id', anchor_id)

    return heading_ids


def render_heading_close(self, tokens, idx, options, env) -> str:
    """Write the permalink (h1-h4) before the closing tag, then report the heading to the render context."""
    level = heading_level(tokens[idx])
    start = idx - 1
    while start >= 0 and tokens[start].type != 'heading_open':
        start -= 1
    anchor_id = str(tokens[start].attrGet('id') or '') if start >= 0 else ''
    text = inline_text(tokens[idx - 1]) if tokens[idx - 1].type == 'inline' else ''

    result = ''
    if anchor_id and level is not None and level <= PERMALINK_MAX_LEVEL:
        result += permalink(anchor_id)
    result += self.renderToken(tokens, idx, options, env)

    if level is not None:
        RenderContext.from_env(env).add_heading(level, text, anchor_id)
    return result


def headings_plugin(md: MarkdownIt, max_length: int = 100) -> None:
    """Assign heading ids, emit permalinks, and feed the Document Map."""
    md.core.ruler.push('heading_ids', _make_heading_ids(max_length))
    md.add_render_rule('heading_close', render_heading_close)
