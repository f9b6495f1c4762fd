"""
Document tree models

Top-level structure of a wiki page as produced by WikiText.tree_parse().
Only headings and registered extension tags are structural; everything in
between is kept verbatim as TextNode so the tree expands back to the exact
source text.

Example:
    Source:
        == Intro ==
        Hello
        <slides split="----">A----B</slides>

    Tree:
        DocumentTree(children=[
            HeadingNode(text="== Intro ==", level=2),
            TextNode(text="\\nHello\\n"),
            ExtensionNode(names=["slides"], attr=' split="----"',
                          inner="A----B", close="</slides>"),
        ])
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .errors import MalformedTreeError


@dataclass
class TextNode:
    """Run of source text with no structural meaning"""
    text: str


@dataclass
class HeadingNode:
    """
    Section heading line

    Attributes:
        text: Heading source including "=" decoration (e.g. "== Title ==")
        level: Number of "=" on each side
    """
    text: str
    level: int


@dataclass
class ExtensionNode:
    """
    Extension tag (<name attr>inner</name>)

    Attributes:
        names: Name elements of the tag; a well-formed node has exactly one
        attr: Raw attribute text including leading whitespace
        inner: Tag content, None for self-closing tags
        close: Closing tag text, None for self-closing tags
    """
    names: List[str]
    attr: str = ""
    inner: Optional[str] = None
    close: Optional[str] = None

    @property
    def name(self) -> str:
        """
        The tag name.

        Raises:
            MalformedTreeError: If the node does not have exactly one name
        """
        if len(self.names) != 1:
            raise MalformedTreeError(
                f"Internal error: extension node with {len(self.names)} names in document tree"
            )
        return self.names[0]


@dataclass
class SlideContainer:
    """
    Synthesized slide replacing a classified heading

    Owns the sibling nodes that followed the heading up to the next
    heading or slide-family tag.
    """
    title: str
    incremental: bool = False
    centered: bool = False
    inner: List["DocumentNode"] = field(default_factory=list)


DocumentNode = Union[TextNode, HeadingNode, ExtensionNode, SlideContainer]


@dataclass
class DocumentTree:
    """Ordered top-level sibling list of a page"""
    children: List[DocumentNode] = field(default_factory=list)
