"""
Extension tag specification and metadata models

Defines the structure of the tag dispatch table: every extension tag
name maps to one TagSpec holding a handler per rendering mode.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


class TagMode(Enum):
    """
    Rendering pass a tag is handled in

    The mode is chosen once per renderer invocation and selects which
    handler of each TagSpec runs.
    """
    VIEW = "view"          # ordinary article view of the page
    SETUP = "setup"        # slideshow attribute pass (<slideshow> sets attributes)
    COLLECT = "collect"    # slideshow collection pass (<slides> become fragments)
    RENDER = "render"      # rendering the body/title of one slide


class TagCategory(Enum):
    """
    Categories of extension tags

    Used for organization and documentation.
    """
    STRUCTURAL = "structural"  # <slideshow>, <slides>, <slide>
    STYLE = "style"            # <slidecss>
    CONTENT = "content"        # <syntaxhighlight>, <source>


@dataclass
class TagCall:
    """
    One occurrence of an extension tag in the text being rendered

    Attributes:
        name: Tag name as written (e.g. "slides")
        attrs: Parsed attributes (e.g. {"split": "----", "title": "Intro"})
        content: Raw tag content, "" for self-closing tags

    Example:
        For <slides title="Intro">Hello</slides>:
        TagCall(name="slides", attrs={"title": "Intro"}, content="Hello")
    """
    name: str
    attrs: Dict[str, str]
    content: str = ""


TagHandler = Callable[[TagCall, Any], str]


@dataclass
class TagSpec:
    """
    Specification for an extension tag

    Attributes:
        name: Tag name
        category: Category for organization
        description: Human-readable description
        handlers: Handler per mode, (call, context) -> html. A mode without
                  a handler renders the tag as an empty string.
        examples: Example usage strings
        aliases: Alternative names for the tag
    """
    name: str
    category: TagCategory
    description: str
    handlers: Dict[TagMode, TagHandler] = field(default_factory=dict)
    examples: List[str] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)

    def matches(self, tag_name: str) -> bool:
        """Check if this spec handles a tag name (directly or via alias)"""
        return self.name == tag_name or tag_name in self.aliases

    def handler_get(self, mode: TagMode) -> Optional[TagHandler]:
        """Handler for a mode, or None if the tag renders empty in that mode"""
        return self.handlers.get(mode)
