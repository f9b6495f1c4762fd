"""
Slide heading marks

Compiles the configured marker strings into matchers and classifies
headings against them.

A heading becomes a slide when it carries the heading mark, or when no
heading mark is configured at all. The incremental and center marks are
then stripped from what is left, each one setting its flag.

Example:
    >>> matchers = marks_compile(MarkSet("★", "(step)", "(center)"))
    >>> heading_classify("== ★ Results (step) ==", matchers)
    HeadingClassification(title='Results', incremental=True, centered=False)
    >>> heading_classify("== Appendix ==", matchers) is None
    True
"""

import re
from typing import Optional

from ..models.slides import MarkSet, MarkMatchers, HeadingClassification
from .log import LOG


# Characters trimmed off heading node text (decoration and whitespace)
HEADING_TRIM = "= \n\r\t\v"


def mark_compile(mark: Optional[str]) -> Optional[re.Pattern]:
    """
    Compile one marker into a literal-substring matcher.

    Args:
        mark: Marker string; regex metacharacters are matched literally

    Returns:
        Compiled pattern, or None for an empty/unset marker
    """
    if not mark:
        return None
    return re.compile(re.escape(mark))


def marks_compile(marks: MarkSet) -> MarkMatchers:
    """Compile all three markers of a MarkSet"""
    return MarkMatchers(
        heading=mark_compile(marks.heading_mark),
        incremental=mark_compile(marks.inc_mark),
        centered=mark_compile(marks.center_mark),
    )


def mark_strip(pattern: Optional[re.Pattern], text: str) -> tuple[str, bool]:
    """
    Remove the first occurrence of a mark from text.

    Returns:
        (remaining text, whether the text changed)
    """
    if pattern is None:
        return text, False
    stripped = pattern.sub("", text, count=1)
    return stripped, stripped != text


def heading_classify(text: str, matchers: MarkMatchers) -> Optional[HeadingClassification]:
    """
    Classify a heading as a slide boundary.

    Order matters: the heading mark is stripped first, then the
    incremental mark, then the center mark, each on the previous result,
    so marks may be combined in one heading.

    Args:
        text: Heading text, "=" decoration included or not
        matchers: Compiled marks of the presentation

    Returns:
        HeadingClassification, or None for an ordinary heading
    """
    original = text.strip(HEADING_TRIM)
    title, marked = mark_strip(matchers.heading, original)

    if matchers.heading is not None and not marked:
        return None

    title, incremental = mark_strip(matchers.incremental, title)
    title, centered = mark_strip(matchers.centered, title)

    classification = HeadingClassification(
        title=title.strip(),
        incremental=incremental,
        centered=centered,
    )
    LOG(f"Slide heading: {classification}", level=3)
    return classification
