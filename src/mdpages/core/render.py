"""HTML renderer that dispatches directive regions to registered renderers"""

from collections.abc import MutableMapping, Sequence

from markdown_it import MarkdownIt
from markdown_it.renderer import RendererHTML
from markdown_it.token import Token
from markdown_it.utils import OptionsDict

from mdpages.core.context import RenderContext
from mdpages.core.directives.include import default_inline_registry
from mdpages.core.directives.registry import Directive, DirectiveRegistry
from mdpages.core.directives.renderers import default_block_registry
from mdpages.core.directives.syntax import BLOCK_OPEN, INLINE_OPEN, directive_syntax_plugin
from mdpages.core.utils.tokens import find_closing
from mdpages.errors import ConfigurationError


class DirectiveHtmlRenderer(RendererHTML):
    """RendererHTML that hands each directive region (open..close) to a registry as one node.

    Everything outside directives renders exactly as in RendererHTML, and
    directive children come back through this renderer, so nested directives
    and headings keep working.
    """

    def __init__(self, parser=None):
        super().__init__(parser)
        self.block_directives: DirectiveRegistry = default_block_registry()
        self.inline_directives: DirectiveRegistry = default_inline_registry()

    def render(self, tokens: Sequence[Token], options: OptionsDict, env: MutableMapping) -> str:
        return self._render_tokens(tokens, options, env, inline=False)

    def renderInline(self, tokens: Sequence[Token], options: OptionsDict, env: MutableMapping) -> str:
        return self._render_tokens(tokens, options, env, inline=True)

    def _render_tokens(self, tokens, options, env, inline: bool) -> str:
        result = ''
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token.type in (BLOCK_OPEN, INLINE_OPEN):
                end = find_closing(tokens, i)
                result += self._render_directive(tokens, i, end, options, env)
                i = end + 1
                continue
            if token.type == 'inline' and not inline:
                if token.children:
                    result += self.renderInline(token.children, options, env)
            elif token.type in self.rules:
                result += self.rules[token.type](tokens, i, options, env)
            else:
                result += self.renderToken(tokens, i, options, env)
            i += 1
        return result

    def _render_directive(self, tokens, start: int, end: int, options, env) -> str:
        block = tokens[start].type == BLOCK_OPEN
        render_children = self.render if block else self.renderInline
        directive = Directive.from_tokens(
            tokens[start],
            list(tokens[start + 1:end]),
            block=block,
            render=lambda children: render_children(children, options, env),
        )
        registry = self.block_directives if block else self.inline_directives
        return registry.render(directive, RenderContext.from_env(env))


def directives_plugin(
    md: MarkdownIt,
    block_registry: DirectiveRegistry | None = None,
    inline_registry: DirectiveRegistry | None = None,
    ) -> None:
    """Enable directive syntax and install the registries on md's DirectiveHtmlRenderer."""
    if not isinstance(md.renderer, DirectiveHtmlRenderer):
        raise ConfigurationError("directives_plugin requires MarkdownIt(..., renderer_cls=DirectiveHtmlRenderer)")
    directive_syntax_plugin(md)
    if block_registry is not None:
        md.renderer.block_directives = block_registry
    if inline_registry is not None:
        md.renderer.inline_directives = inline_registry
