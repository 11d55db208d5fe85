"""Full-page rendering of documents through Jinja2 layouts"""

import logging
from pathlib import Path

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from mdpages.core.models import Document
from mdpages.core.utils.text import minutes_to_read


logger = logging.getLogger(__name__)

DEFAULT_LAYOUT = 'default'

DEFAULT_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{ doc.title }}</title>
{% if doc.summary %}
<meta name="description" content="{{ doc.summary }}">
{% endif %}
</head>
<body>
<article>
<header>
<h1>{{ doc.title }}</h1>
{% if doc.author %}<p class="author">{{ doc.author }}</p>{% endif %}
{% if doc.date %}<time datetime="{{ doc.date.isoformat() }}">{{ doc.date.strftime('%B %d, %Y') }}</time>{% endif %}
<p class="reading-time">{{ minutes }} min read</p>
</header>
{% if doc.document_map and doc.document_map.headings %}
<nav class="toc">
<ul>
{% for menu in doc.document_map.headings %}
<li><a href="{{ menu.link }}">{{ menu.text }}</a>
{% if menu.children %}
<ul>
{% for item in menu.children %}
<li><a href="{{ item.link }}">{{ item.text }}</a></li>
{% endfor %}
</ul>
{% endif %}
</li>
{% endfor %}
</ul>
</nav>
{% endif %}
{{ doc.preview | safe }}
</article>
</body>
</html>
"""


class PageLayouts:
    """Resolves a document's layout name to '<name>.html' in layout_dir, falling back to the built-in page."""

    def __init__(self, layout_dir: Path | str | None = None, words_per_min: int = 225):
        loaders = []
        if layout_dir is not None:
            loaders.append(FileSystemLoader(str(layout_dir)))
        loaders.append(DictLoader({f"{DEFAULT_LAYOUT}.html": DEFAULT_TEMPLATE}))
        self.words_per_min = words_per_min
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(['html', 'xml']),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, doc: Document) -> str:
        name = f"{doc.layout or DEFAULT_LAYOUT}.html"
        try:
            template = self.env.get_template(name)
        except TemplateNotFound:
            logger.warning("Layout %r not found for %s, using %r", name, doc.path, DEFAULT_LAYOUT)
            template = self.env.get_template(f"{DEFAULT_LAYOUT}.html")
        return template.render(doc=doc, minutes=minutes_to_read(doc.word_count, self.words_per_min))
