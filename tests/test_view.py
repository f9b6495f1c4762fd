"""
Article view tests

Tests how slide tags render on the ordinary page.
"""

import re

import pytest

from wikislides.lib.view import ArticleView, SlideCounter


@pytest.fixture
def view(make_environment):
    return ArticleView("Talk", make_environment(pages={"Talk": ""}))


def slide_ids(html):
    return [int(n) for n in re.findall(r'id="slide(\d+)"', html)]


class TestSlideCounter:
    """Test the page-scoped slide id counter"""

    def test_monotonic(self):
        counter = SlideCounter()
        assert [counter.next() for _ in range(3)] == [0, 1, 2]

    def test_shared_by_views(self, make_environment):
        """Views sharing a counter never repeat an id"""
        counter = SlideCounter()
        environment = make_environment()
        first = ArticleView("A", environment, counter=counter).page_render('<slides split="|">1|2</slides>')
        second = ArticleView("B", environment, counter=counter).page_render("<slides>3</slides>")
        assert slide_ids(first) + slide_ids(second) == [0, 1, 2]


class TestSlidesView:
    """Test <slides> in article view"""

    def test_ids_increase_across_blocks(self, view):
        html = view.page_render('<slides split="----">A\n----\nB</slides>\ntext\n<slides>C</slides>\n')
        assert slide_ids(html) == [0, 1, 2]

    def test_default_float_and_clear(self, view):
        html = view.page_render("<slides>A</slides>")
        assert html.startswith("<div class=\"slide\" style='float: left; ' id=\"slide0\"><p>A</p>")
        assert html.rstrip().endswith('<div style="clear: both"></div>')

    def test_title_on_first_piece(self, view):
        html = view.page_render('<slides title="Agenda" split="|">A|B</slides>')
        boxes = re.findall(r'<div class="([^"]*)"', html)
        assert boxes == ["slide withtitle", "slide"]
        assert "<h2>Agenda</h2>" in html

    def test_width(self, view):
        html = view.page_render('<slides width="300">A</slides>')
        assert "style='float: left; width: 300px; '" in html

    @pytest.mark.parametrize("side,margin", [("left", "0 1em 1em 0"), ("right", "0 0 0 1em")])
    def test_float_wrapper(self, view, side, margin):
        html = view.page_render(f'<slides float="{side}">A</slides>')
        assert html.startswith(f"<div style='float: {side}; margin: {margin}'><div class=\"slide\" id=\"slide0\">")
        assert "clear: both" not in html


class TestSlidecssView:
    """Test <slidecss> in article view"""

    @pytest.mark.parametrize("value", ["true", "1"])
    def test_view_adds_head_item(self, view, value):
        html = view.page_render(f'<slidecss view="{value}">h1 {{}}</slidecss>')
        assert html.strip() == ""
        assert view.head_html() == '<style type="text/css">h1 {}</style>'

    @pytest.mark.parametrize("attrs", ["", ' view="false"', ' view="yes"'])
    def test_hidden_by_default(self, view, attrs):
        view.page_render(f"<slidecss{attrs}>h1 {{}}</slidecss>")
        assert view.head_html() == ""


class TestSlideshowView:
    """Test <slideshow> and legacy <slide> in article view"""

    def test_bundle(self, view):
        html = view.page_render('<slideshow title="Talk" author="Jane">\n; subtitle: Q3\n</slideshow>')
        assert html.startswith('<div id="slideshow-bundle">')
        assert 'href="/slides/Talk"' in html
        assert "<dt>Title</dt><dd>Talk</dd>" in html
        assert "<dt>Subtitle</dt><dd>Q3</dd>" in html
        assert "<dt>Author</dt><dd>Jane</dd>" in html
        assert "./skins/default/preview.png" in html
        assert 'src="./skins/contentScale.js"' in html
        assert 'src="./skins/slideView.js"' in html
        assert "wgSlideViewFont" not in html
        assert "Warning" not in html

    def test_date_token_in_header(self, view):
        html = view.page_render('<slideshow footer="Made {{date}}" />')
        assert "<dt>Footer</dt><dd>Made 14:05, 19 October 2026</dd>" in html

    def test_preview_from_media(self, make_environment):
        environment = make_environment(media={"S5-blue-preview.png": "media/S5-blue-preview.png"})
        html = ArticleView("Talk", environment).page_render('<slideshow style="blue" />')
        assert '<img src="media/S5-blue-preview.png"' in html

    def test_font_script(self, view):
        html = view.page_render('<slideshow font="Comic &quot;Sans&quot;" />')
        assert '<script type="text/javascript">var wgSlideViewFont = "Comic \\"Sans\\"";</script>' in html

    def test_legacy_tag_warns(self, view):
        html = view.page_render('<slide title="Old" />')
        assert "Warning: legacy &lt;slide&gt; parser hook used" in html
        assert '<div id="slideshow-bundle">' in html
