"""
Extension tag registry tests

Tests tag lookup, per-mode dispatch and the wiki slide lexer.
"""

import pytest
from pygments.token import Generic, Keyword, Name

from wikislides.lib.lexer import WikiSlidesLexer
from wikislides.lib.tags import TagRegistry
from wikislides.models.tags import TagCall, TagCategory, TagMode


class RecordingContext:
    """Context recording which handler ran"""

    pygments_style = 'default'

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if name.endswith(('_view', '_parse', '_legacy')):
            def handler(call):
                self.calls.append((name, call.name))
                return f"[{name}]"
            return handler
        raise AttributeError(name)


@pytest.fixture
def registry():
    return TagRegistry()


class TestRegistry:
    """Test registration and lookup"""

    def test_builtin_names(self, registry):
        assert set(registry.names()) == {'slideshow', 'slide', 'slides', 'slidecss', 'syntaxhighlight', 'source'}

    def test_lookup_case_insensitive(self, registry):
        assert registry.get('SLIDES').name == 'slides'
        assert registry.get('div') is None

    def test_alias(self, registry):
        assert registry.get('source') is registry.get('syntaxhighlight')
        assert registry.get('source').matches('source')

    def test_categories(self, registry):
        structural = [spec.name for spec in registry.tags_listByCategory(TagCategory.STRUCTURAL)]
        assert structural == ['slideshow', 'slide', 'slides']
        assert len(registry.tags_listByCategory(TagCategory.CONTENT)) == 1


class TestDispatch:
    """Test the per-mode handler table"""

    @pytest.mark.parametrize("tag,mode,handler", [
        ('slideshow', TagMode.VIEW, 'slideshow_view'),
        ('slideshow', TagMode.SETUP, 'slideshow_parse'),
        ('slide', TagMode.VIEW, 'slideshow_legacy'),
        ('slide', TagMode.SETUP, 'slideshow_parse'),
        ('slides', TagMode.VIEW, 'slides_view'),
        ('slides', TagMode.COLLECT, 'slides_parse'),
        ('slidecss', TagMode.VIEW, 'slidecss_view'),
        ('slidecss', TagMode.COLLECT, 'slidecss_parse'),
        ('slidecss', TagMode.RENDER, 'slidecss_parse'),
    ])
    def test_handler_per_mode(self, registry, tag, mode, handler):
        context = RecordingContext()
        assert registry.dispatch(TagCall(tag, {}), mode, context) == f"[{handler}]"
        assert context.calls == [(handler, tag)]

    @pytest.mark.parametrize("tag,mode", [
        ('slideshow', TagMode.COLLECT),
        ('slideshow', TagMode.RENDER),
        ('slides', TagMode.SETUP),
        ('slides', TagMode.RENDER),
        ('slidecss', TagMode.SETUP),
        ('syntaxhighlight', TagMode.SETUP),
        ('unknown', TagMode.VIEW),
    ])
    def test_no_handler_renders_empty(self, registry, tag, mode):
        context = RecordingContext()
        assert registry.dispatch(TagCall(tag, {}), mode, context) == ""
        assert context.calls == []

    def test_code_highlighting(self, registry):
        call = TagCall('source', {'lang': 'python'}, 'def f():\n    return 1\n')
        html = registry.dispatch(call, TagMode.VIEW, RecordingContext())
        assert html.startswith('<div class="highlight"')
        assert 'style="' in html

    def test_unknown_language_is_plain_text(self, registry):
        call = TagCall('syntaxhighlight', {'lang': 'no-such-language'}, 'a < b')
        html = registry.dispatch(call, TagMode.RENDER, RecordingContext())
        assert 'a &lt; b' in html


class TestWikiSlidesLexer:
    """Test the lexer for slide markup"""

    def test_tokens(self):
        source = '<slideshow style="default" />\n== ★ Intro ==\n; author: Jane\n'
        tokens = list(WikiSlidesLexer().get_tokens(source))

        assert (Keyword.Declaration, 'slideshow') in tokens
        assert (Name.Attribute, 'style') in tokens
        assert (Generic.Heading, ' ★ Intro ') in tokens
        assert (Name.Attribute, 'author') in tokens

    def test_s5_language_highlighted(self, registry):
        call = TagCall('syntaxhighlight', {'lang': 's5'}, '== ★ Intro ==')
        html = registry.dispatch(call, TagMode.VIEW, RecordingContext())
        assert '★ Intro' in html
