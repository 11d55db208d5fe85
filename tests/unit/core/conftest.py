"""Shared fixtures for core unit tests"""

import pytest

from mdpages.core.context import RenderContext
from mdpages.core.parse import make_parser, parse, render


SAMPLE_FM_MD = """\
---
title: Test Doc
Summary: A short summary
tags: [a, b]
date: 2020-01-02
draft: true
order: 3
---

## Intro

Body content.
"""


@pytest.fixture(name="md")
def md_fixture():
    return make_parser()


@pytest.fixture(name="render_md")
def render_md_fixture(md):
    """Render markdown text with an optional store and document path; returns (html, context)."""
    def _render(content: str, store=None, path: str = '') -> tuple[str, RenderContext]:
        context = RenderContext(store=store, path=path)
        tokens, env = parse(md, content, context)
        return render(md, tokens, env), context
    return _render


@pytest.fixture(name="sample_fm_md")
def sample_fm_md_fixture():
    return SAMPLE_FM_MD
