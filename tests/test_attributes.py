"""
Presentation attribute tests

Tests precedence of tag attributes, content lines and defaults, and the
computed author and subfooter.
"""

from wikislides.config import AppSettings
from wikislides.lib.attributes import attributes_build, contentAttributes_extract


DATE = "14:05, 19 October 2026"


class TestContentAttributes:
    """Test "; key: value" lines"""

    def test_lines_extracted(self):
        attrs = contentAttributes_extract("; subtitle: Q3 review\n;author:Jane\n  ; font :  Arial \n")
        assert attrs == {'subtitle': 'Q3 review', 'author': 'Jane', 'font': 'Arial'}

    def test_other_text_ignored(self):
        assert contentAttributes_extract("Just text\n* item") == {}
        assert contentAttributes_extract(None) == {}


class TestPrecedence:
    """Test the merge order"""

    def test_tag_attribute_beats_content_line(self, make_environment):
        attributes = attributes_build(
            {'title': 'From tag'}, "; title: From content", "Page", make_environment()
        )
        assert attributes.title == "From tag"

    def test_content_line_beats_default(self, make_environment):
        attributes = attributes_build({}, "; style: blue\n; headingmark: (slide)", "Page", make_environment())
        assert attributes.style == "blue"
        assert attributes.headingmark == "(slide)"

    def test_defaults(self, make_environment):
        settings = AppSettings(default_style="plain", heading_mark="#", scaled="yes")
        attributes = attributes_build(None, None, "My Page", make_environment(), settings)

        assert attributes.title == "My Page"
        assert attributes.footer == "My Page"
        assert attributes.subtitle == ""
        assert attributes.style == "plain"
        assert attributes.headingmark == "#"
        assert attributes.incmark == "(step)"
        assert attributes.centermark == "(center)"
        assert attributes.scaled is True

    def test_unset_heading_mark(self, make_environment):
        settings = AppSettings(heading_mark=None)
        attributes = attributes_build(None, None, "Page", make_environment(), settings)
        assert attributes.headingmark is None

    def test_scaled_flag_parsed(self, make_environment):
        attributes = attributes_build({'scaled': 'TRUE'}, None, "Page", make_environment())
        assert attributes.scaled is True
        attributes = attributes_build({'scaled': 'no'}, None, "Page", make_environment())
        assert attributes.scaled is False

    def test_unknown_keys_kept_as_extra(self, make_environment):
        attributes = attributes_build({'width': '300'}, None, "Page", make_environment())
        assert attributes.get('width') == '300'


class TestComputedFallbacks:
    """Test author and subfooter fallbacks"""

    def test_author_from_earliest_revision(self, make_environment):
        environment = make_environment(pages={"Page": "text"}, author="Jane Doe")
        attributes = attributes_build(None, None, "Page", environment)
        assert attributes.author == "Jane Doe"

    def test_author_of_unsaved_page_is_current_user(self, make_environment):
        environment = make_environment(pages={}, user="Visitor")
        attributes = attributes_build(None, None, "Page", environment)
        assert attributes.author == "Visitor"

    def test_subfooter_from_author_and_date(self, make_environment):
        environment = make_environment(pages={"Page": "text"}, author="Jane Doe")
        attributes = attributes_build(None, None, "Page", environment)
        assert attributes.subfooter == f"Jane Doe, {DATE}"

    def test_subfooter_without_author(self, make_environment):
        attributes = attributes_build({'author': ''}, None, "Page", make_environment())
        assert attributes.subfooter == DATE

    def test_date_token_in_explicit_subfooter(self, make_environment):
        attributes = attributes_build({'subfooter': 'Berlin, {{DATE}}'}, None, "Page", make_environment())
        assert attributes.subfooter == f"Berlin, {DATE}"
