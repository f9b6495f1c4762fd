"""
Slide content splitter

Splits the content of one <slides> block into several slides on a
literal delimiter (the "split" attribute).
"""

import re
from typing import List, Optional

from ..models.slides import SlideFragment


def fragments_split(
    content: str,
    split: Optional[str] = None,
    title: str = "",
    incremental: bool = False,
    centered: bool = False,
) -> List[SlideFragment]:
    """
    Split slide content into ordered fragments.

    Only the first fragment inherits the title; the others are untitled.
    Every fragment shares the incremental/centered flags. An empty or
    missing delimiter yields exactly one fragment.

    Args:
        content: Raw slide text
        split: Literal delimiter (e.g. "----")
        title: Title of the first slide
        incremental: Reveal lists incrementally
        centered: Suppress title styling

    Returns:
        List of SlideFragment, content trimmed

    Example:
        >>> [f.title for f in fragments_split("A|B|C", "|", "T")]
        ['T', '', '']
    """
    if split:
        pieces = re.split(re.escape(split), content)
    else:
        pieces = [content]

    fragments = []
    for i, piece in enumerate(pieces):
        fragments.append(SlideFragment(
            content=piece.strip(),
            title=title if i == 0 else "",
            incremental=incremental,
            centered=centered,
        ))
    return fragments


def flag_parse(value: Optional[str]) -> bool:
    """
    Interpret a boolean tag attribute.

    True for "TRUE"/"YES" (any case) or anything whose integer value is 1.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip()
    if text.upper() in ("TRUE", "YES"):
        return True
    match = re.match(r"[+-]?\d+", text)
    return bool(match) and int(match.group(0)) == 1


def switch_parse(value: Optional[str]) -> bool:
    """
    Interpret an on/off attribute of <slides> (incremental, center).

    Any value other than "" and "0" switches it on.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return value != "" and value != "0"
