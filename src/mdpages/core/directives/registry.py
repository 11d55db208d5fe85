"""Directive nodes and the key -> renderer registry used for block and inline dispatch"""

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Optional, Protocol

from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token

from mdpages.core.context import RenderContext


logger = logging.getLogger(__name__)


@dataclass
class Directive:
    """A named block (:::key arg) or inline (::key arg::) region awaiting rendering.

    key is None for key-less containers. Children are rendered through the
    same renderer (nested directives included) and are never escaped.
    """
    key:      Optional[str]
    argument: str
    block:    bool
    children: list[Token] = field(default_factory=list, repr=False)
    _render:  Callable[[list[Token]], str] = field(default=lambda tokens: '', repr=False)

    @classmethod
    def from_tokens(
        cls,
        opening: Token,
        children: list[Token],
        block: bool,
        render: Callable[[list[Token]], str],
        ) -> 'Directive':
        """Build from an opening token: block keys come from the fence info, inline keys from the leading text."""
        if block:
            leading = opening.info
        else:
            leading = children[0].content if children and children[0].type == 'text' else ''
        key, *rest = leading.split(maxsplit=1) or [None]
        argument = rest[0].strip() if rest else ''
        return cls(key=key, argument=argument, block=block, children=children, _render=render)

    def render_children(self) -> str:
        return self._render(self.children)


class ContainerRenderer(Protocol):
    """Renders one directive to HTML."""

    def render(self, directive: Directive, context: RenderContext) -> str: ...


class DefaultBlockRenderer:
    """Fallback for block directives: a neutral <div> classed by key."""

    def render(self, directive: Directive, context: RenderContext) -> str:
        cls = f' class="{escapeHtml(directive.key)}"' if directive.key else ''
        return f"<div{cls}>\n{directive.render_children()}</div>\n"


class DefaultInlineRenderer:
    """Fallback for inline directives: children wrapped in a <span>."""

    def render(self, directive: Directive, context: RenderContext) -> str:
        return f"<span>{directive.render_children()}</span>"


class DirectiveRegistry:
    """Case-sensitive mapping of directive key to renderer, with a default for everything else."""

    def __init__(self, default: ContainerRenderer, renderers: Optional[Mapping[str, ContainerRenderer]] = None):
        self.default = default
        self._renderers: dict[str, ContainerRenderer] = dict(renderers or {})

    def __contains__(self, key: object) -> bool:
        return key in self._renderers

    def __iter__(self) -> Iterator[str]:
        return iter(self._renderers)

    def __len__(self) -> int:
        return len(self._renderers)

    def register(self, key: str, renderer: ContainerRenderer) -> None:
        """Add or replace the renderer for key."""
        self._renderers[key] = renderer

    def unregister(self, key: str) -> None:
        self._renderers.pop(key, None)

    def get(self, key: Optional[str]) -> Optional[ContainerRenderer]:
        return self._renderers.get(key) if key is not None else None

    def resolve(self, key: Optional[str]) -> ContainerRenderer:
        """Return the renderer registered for key, or the default one."""
        renderer = self.get(key)
        if renderer is None:
            logger.debug("No renderer registered for directive %r, using default", key)
            return self.default
        return renderer

    def render(self, directive: Directive, context: RenderContext) -> str:
        return self.resolve(directive.key).render(directive, context)
