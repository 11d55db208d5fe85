"""Built-in block directive renderers: copy-to-clipboard boxes and admonitions"""

from dataclasses import dataclass

from markdown_it.common.utils import escapeHtml

from mdpages.core.context import RenderContext
from mdpages.core.directives.registry import DefaultBlockRenderer, Directive, DirectiveRegistry


COPIED_ICON = (
    '<svg class="copied w-6 h-6" fill="none" stroke="currentColor" viewBox="0 0 24 24" '
    'xmlns="http://www.w3.org/2000/svg"><path stroke-linecap="round" stroke-linejoin="round" '
    'stroke-width="2" d="M5 13l4 4L19 7"></path></svg>'
)
COPY_ICON = (
    '<svg class="nocopy w-6 h-6" title="copy" fill="none" stroke="white" viewBox="0 0 24 24" '
    'xmlns="http://www.w3.org/2000/svg"><path stroke-linecap="round" stroke-linejoin="round" '
    'stroke-width="1" d="M8 7v8a2 2 0 002 2h6M8 7V5a2 2 0 012-2h4.586a1 1 0 01.707.293l4.414 '
    '4.414a1 1 0 01.293.707V15a2 2 0 01-2 2h-2M8 7H6a2 2 0 00-2 2v10a2 2 0 002 2h8a2 2 0 002-2v-2">'
    '</path></svg>'
)


@dataclass
class CopyContainerRenderer:
    """Box whose content is copied to the clipboard on click (e.g. shell commands)."""
    css_class:  str = ''
    box_class:  str = 'bg-gray-700'
    icon_class: str = ''
    text_class: str = 'text-lg text-white'

    def render(self, directive: Directive, context: RenderContext) -> str:
        return (
            f'<div class="{self.css_class} flex cursor-pointer mb-3" onclick="copy(this)">\n'
            f'<div class="flex-grow {self.box_class}">\n'
            f'<div class="pl-4 py-1 pb-1.5 align-middle {self.text_class}">'
            f'{directive.render_children()}'
            f'</div>\n</div>\n'
            f'<div class="flex">\n<div class="{self.icon_class} text-white p-1.5 pb-0">\n'
            f'{COPIED_ICON}\n{COPY_ICON}\n'
            f'</div>\n</div>\n</div>\n'
        )


@dataclass
class AdmonitionRenderer:
    """TIP/INFO/WARNING/DANGER box; the title is the argument, else the key, else `title`."""
    title:     str = 'TIP'
    css_class: str = 'tip'

    def render(self, directive: Directive, context: RenderContext) -> str:
        title = directive.argument or directive.key or self.title
        return (
            f'<div class="{self.css_class} custom-block">\n'
            f'<p class="custom-block-title">{escapeHtml(title)}</p>\n'
            f'{directive.render_children()}'
            f'</div>\n'
        )


def default_block_registry() -> DirectiveRegistry:
    """Registry with the stock block directives: sh, nuget, tip, info, warning, danger."""
    return DirectiveRegistry(DefaultBlockRenderer(), {
        'sh': CopyContainerRenderer(
            css_class='not-prose sh-copy cp',
            box_class='bg-gray-800',
            icon_class='bg-green-600',
            text_class='whitespace-pre text-base text-gray-100',
        ),
        'nuget': CopyContainerRenderer(css_class='not-prose nuget-copy cp', icon_class='bg-sky-500'),
        'tip': AdmonitionRenderer(),
        'info': AdmonitionRenderer(title='INFO', css_class='info'),
        'warning': AdmonitionRenderer(title='WARNING', css_class='warning'),
        'danger': AdmonitionRenderer(title='DANGER', css_class='danger'),
    })
