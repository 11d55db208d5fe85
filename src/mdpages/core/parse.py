"""markdown-it parser assembly: front matter, directives, and heading anchors"""

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.front_matter import front_matter_plugin

from mdpages.core.context import RenderContext
from mdpages.core.directives.registry import DirectiveRegistry
from mdpages.core.headings import headings_plugin
from mdpages.core.render import DirectiveHtmlRenderer, directives_plugin


def make_parser(
    preset: str = 'gfm-like',
    block_registry: DirectiveRegistry | None = None,
    inline_registry: DirectiveRegistry | None = None,
    slug_max_length: int = 100,
    ) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset with the mdpages extensions installed.

    The instance keeps no per-document state; everything a pass produces goes
    into the RenderContext held in env.
    """
    return (
        MarkdownIt(preset, options_update={"linkify": False}, renderer_cls=DirectiveHtmlRenderer)
        .use(front_matter_plugin)
        .use(directives_plugin, block_registry=block_registry, inline_registry=inline_registry)
        .use(headings_plugin, max_length=slug_max_length)
    )


def parse(md: MarkdownIt, content: str, context: RenderContext) -> tuple[list[Token], dict]:
    """Tokenize content, returning the tokens and the env (holding context) to render them with."""
    env = context.env()
    return md.parse(content, env), env


def render(md: MarkdownIt, tokens: list[Token], env: dict) -> str:
    """Render a token stream to HTML, driving heading and directive hooks via env."""
    return md.renderer.render(tokens, md.options, env)
