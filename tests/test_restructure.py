"""
Section-to-slide restructuring tests

Tests grouping of marked sections into slide containers, the stop rules,
malformed trees and the text round trip.
"""

import pytest

from wikislides.lib.marks import marks_compile
from wikislides.lib.restructure import sections_restructure, sections_transform, tree_fragments
from wikislides.lib.wikitext import WikiText
from wikislides.models.errors import MalformedTreeError, SlideShowFatalError
from wikislides.models.slides import MarkSet, SlideFragment
from wikislides.models.tree import (
    DocumentTree,
    ExtensionNode,
    HeadingNode,
    SlideContainer,
    TextNode,
)


@pytest.fixture
def wikitext():
    return WikiText()


@pytest.fixture
def matchers():
    return marks_compile(MarkSet("★", "(step)", "(center)"))


class TestRestructure:
    """Test the single pass over top-level siblings"""

    def test_marked_heading_becomes_container(self, wikitext, matchers):
        """Classified heading is replaced and absorbs following text"""
        tree = wikitext.tree_parse("== ★ Intro ==\nHello\n")
        sections_restructure(tree, matchers)

        assert len(tree.children) == 1
        container = tree.children[0]
        assert isinstance(container, SlideContainer)
        assert container.title == "Intro"
        assert container.inner == [TextNode("\nHello\n")]

    def test_slide_family_tag_not_absorbed(self, wikitext, matchers):
        """A <slides> tag after a container stays outside of it"""
        tree = wikitext.tree_parse("== ★ Intro ==\nHello\n<slides>x</slides>\nAfter\n")
        sections_restructure(tree, matchers)

        container, slides, after = tree.children
        assert container.inner == [TextNode("\nHello\n")]
        assert isinstance(slides, ExtensionNode) and slides.name == "slides"
        assert after == TextNode("\nAfter\n")

    def test_slideshow_tag_not_absorbed(self, wikitext, matchers):
        """Any tag whose name starts with "slide" ends the group"""
        tree = wikitext.tree_parse("== ★ Intro ==\nHello\n<slideshow/>")
        sections_restructure(tree, matchers)
        assert isinstance(tree.children[-1], ExtensionNode)

    def test_other_tags_absorbed(self, wikitext, matchers):
        """Non-slide tags belong to the slide"""
        tree = wikitext.tree_parse('== ★ Code ==\n<syntaxhighlight lang="c">x;</syntaxhighlight>\n')
        sections_restructure(tree, matchers)
        assert len(tree.children) == 1
        assert isinstance(tree.children[0].inner[1], ExtensionNode)

    def test_stops_at_deeper_heading(self, wikitext, matchers):
        """A level 4 heading still ends a level 2 slide"""
        tree = wikitext.tree_parse("== ★ A ==\ntext\n==== Sub ====\nmore\n")
        sections_restructure(tree, matchers)

        container, heading, rest = tree.children
        assert container.inner == [TextNode("\ntext\n")]
        assert heading == HeadingNode(text="==== Sub ====", level=4)
        assert rest == TextNode("\nmore\n")

    def test_stops_at_next_marked_heading(self, wikitext, matchers):
        tree = wikitext.tree_parse("== ★ A ==\none\n=== ★ B (step) ===\ntwo\n")
        sections_restructure(tree, matchers)

        first, second = tree.children
        assert first.title == "A" and first.inner == [TextNode("\none\n")]
        assert second.title == "B" and second.incremental is True
        assert second.inner == [TextNode("\ntwo\n")]

    def test_ordinary_content_untouched(self, wikitext, matchers):
        """Text before the first slide and unmarked headings stay in place"""
        text = "Preface\n== Notes ==\nplain\n"
        tree = wikitext.tree_parse(text)
        sections_restructure(tree, matchers)
        assert wikitext.tree_expand(tree) == text

    def test_nodes_moved_not_copied(self, wikitext, matchers):
        """Absorbed nodes keep their identity"""
        tree = wikitext.tree_parse("== ★ A ==\nbody\n")
        body = tree.children[1]
        sections_restructure(tree, matchers)
        assert tree.children[0].inner[0] is body


class TestMalformedTree:
    """Test the fatal malformed-tree path"""

    @pytest.mark.parametrize("names", [[], ["slides", "extra"]])
    def test_extension_without_single_name(self, matchers, names):
        """Extension node must have exactly one name"""
        tree = DocumentTree([
            HeadingNode(text="== ★ A ==", level=2),
            ExtensionNode(names=names),
        ])
        with pytest.raises(MalformedTreeError):
            sections_restructure(tree, matchers)

    def test_is_fatal_error(self):
        """Malformed tree is not a recoverable generation error"""
        assert issubclass(MalformedTreeError, SlideShowFatalError)


class TestSectionsTransform:
    """Test restructuring through text"""

    def test_container_serialised_as_slides_tag(self, wikitext, matchers):
        text = "== ★ Intro (center) ==\nHello\n"
        result = sections_transform(text, matchers, wikitext)
        assert result == '<slides title="Intro" center="1">\nHello\n</slides>\n'

    def test_incremental_attribute(self, wikitext, matchers):
        result = sections_transform("== ★ List (step) ==\n* a\n", matchers, wikitext)
        assert result.startswith('<slides title="List" incremental="1">')

    def test_round_trip_keeps_fragments(self, wikitext, matchers):
        """Expanding and re-parsing yields the same fragments as walking the tree"""
        text = (
            "Intro text\n"
            "== ★ First & \"quoted\" ==\nHello **world**\n"
            "== ★ Steps (step) ==\n* one\n* two\n"
            '<slides title="Extra" split="----">A\n----\nB</slides>\n'
            "== Unmarked ==\nnot a slide\n"
            "== ★ Last (center) ==\nbye\n"
        )
        tree = wikitext.tree_parse(text)
        sections_restructure(tree, matchers)
        direct = tree_fragments(tree, wikitext)

        reparsed = tree_fragments(wikitext.tree_parse(wikitext.tree_expand(tree)), wikitext)

        assert reparsed == direct
        assert direct == [
            SlideFragment(content="Hello **world**", title='First & "quoted"'),
            SlideFragment(content="* one\n* two", title="Steps", incremental=True),
            SlideFragment(content="A", title="Extra"),
            SlideFragment(content="B", title=""),
            SlideFragment(content="bye", title="Last", centered=True),
        ]

    def test_commented_heading_stays_text(self, wikitext, matchers):
        """Headings inside an HTML comment never start a slide"""
        text = "<!--\n== ★ Hidden ==\n-->\n== ★ Shown ==\nvisible\n"
        result = sections_transform(text, matchers, wikitext)
        assert result == '<!--\n== ★ Hidden ==\n-->\n<slides title="Shown">\nvisible\n</slides>\n'

    def test_unclosed_comment_runs_to_end(self, wikitext, matchers):
        text = "before\n<!-- draft\n== ★ Hidden ==\n<slides>x</slides>\n"
        assert sections_transform(text, matchers, wikitext) == text
        assert tree_fragments(wikitext.tree_parse(text), wikitext) == []


class TestTreeFragments:
    """Test fragments read from <slides> tags in the tree"""

    def test_self_closing_slides_is_one_empty_slide(self, wikitext):
        assert tree_fragments(wikitext.tree_parse("a <slides title=\"T\" /> b"), wikitext) == [
            SlideFragment(content="", title="T"),
        ]

    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("on", True),
        ("2", True),
        ("yes", True),
        ("0", False),
        ("", False),
    ])
    def test_switch_values(self, wikitext, value, expected):
        text = f'<slides incremental="{value}" center="{value}">x</slides>'
        fragment, = tree_fragments(wikitext.tree_parse(text), wikitext)
        assert fragment.incremental is expected
        assert fragment.centered is expected
