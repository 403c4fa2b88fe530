"""Shared fixtures: in-memory render capabilities standing in for a real engine."""

import html

import markdown
import pytest

from gladest_segments.MarkdownProcessor.MathExtension import GladestMathExtension
from gladest_segments.interfaces import EngineError


class FakeRenderer:
    """Records every call and answers with a tiny <img> fragment."""

    def __init__(self, crash_on=(), engine_errors=(), font_result=True):
        self.crash_on = set(crash_on)
        self.engine_errors = set(engine_errors)
        self.font_result = font_result
        self.calls = []
        self.font_calls = []
        self.events = []

    def render_formula(self, source, delimiter, options):
        self.calls.append((source, delimiter, options))
        self.events.append("render")
        if source in self.crash_on:
            raise RuntimeError("engine crashed\nwhile loading glyphs")
        if source in self.engine_errors:
            return EngineError("Unknown symbol", source)
        return f'<img class="fake" data-delimiter="{delimiter}" alt="{html.escape(source)}"/>'

    def set_font_config(self, fonts):
        self.font_calls.append(fonts)
        self.events.append("fonts")
        if isinstance(self.font_result, Exception):
            raise self.font_result
        return self.font_result


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def make_md():
    def factory(renderer, **config):
        return markdown.Markdown(extensions=[GladestMathExtension(renderer=renderer, **config)])

    return factory


@pytest.fixture
def md(make_md, renderer):
    return make_md(renderer)
