"""
Section-to-slide restructuring

Turns marked section headings into <slides> blocks. One left-to-right pass
over the top-level siblings of the page:

    - a classified heading is replaced by a SlideContainer carrying its
      title and flags
    - the container then absorbs the following siblings, stopping (without
      consuming) at the next heading of any level or at an extension tag
      whose name starts with "slide" (already segmented content)
    - everything else stays where it is

Example:
    == ★ Intro ==             <slides title="Intro">
    Hello                 →   Hello
    == Notes ==               </slides>
    not a slide               == Notes ==
                              not a slide
"""

from typing import Any, List

from ..models.slides import MarkMatchers, SlideFragment
from ..models.tree import (
    DocumentTree,
    ExtensionNode,
    HeadingNode,
    SlideContainer,
)
from .log import LOG
from .marks import heading_classify
from .splitter import fragments_split, switch_parse
from .wikitext import MarkupRenderer, attrs_parse


def groupEnd_is(node: Any) -> bool:
    """
    Check whether a sibling ends the group of the slide before it.

    Raises:
        MalformedTreeError: If node is an extension without exactly one name
    """
    if isinstance(node, HeadingNode):
        return True
    if isinstance(node, ExtensionNode):
        return node.name.lower().startswith("slide")
    return False


def sections_restructure(tree: DocumentTree, matchers: MarkMatchers) -> DocumentTree:
    """
    Replace classified headings by slide containers, in place.

    Nodes are moved, never copied: the absorbed siblings are removed from
    the top-level list and appended, in order, to the container.

    Args:
        tree: Document tree (mutated)
        matchers: Compiled heading marks

    Returns:
        The same tree

    Raises:
        MalformedTreeError: On an extension node without exactly one name;
                            never caught here
    """
    children = tree.children
    slides = 0
    i = 0

    while i < len(children):
        node = children[i]
        if isinstance(node, HeadingNode):
            classification = heading_classify(node.text, matchers)
            if classification is not None:
                container = SlideContainer(
                    title=classification.title,
                    incremental=classification.incremental,
                    centered=classification.centered,
                )
                children[i] = container
                slides += 1

                while i + 1 < len(children) and not groupEnd_is(children[i + 1]):
                    container.inner.append(children.pop(i + 1))

                LOG(f"Slide '{container.title}' absorbed {len(container.inner)} nodes", level=3)
        i += 1

    LOG(f"Restructured {slides} section slides", level=2)
    return tree


def sections_transform(text: str, matchers: MarkMatchers, renderer: MarkupRenderer) -> str:
    """
    Turn marked sections of page text into <slides> tags.

    Args:
        text: Page text
        matchers: Compiled heading marks
        renderer: Tree builder/expander

    Returns:
        Page text with every slide section wrapped in <slides>...</slides>
    """
    tree = renderer.tree_parse(text)
    sections_restructure(tree, matchers)
    return renderer.tree_expand(tree)


def tree_fragments(tree: DocumentTree, renderer: MarkupRenderer) -> List[SlideFragment]:
    """
    Slide fragments of a restructured tree, read straight from its nodes.

    Yields the same fragments as expanding the tree and collecting its
    <slides> tags from the text.
    """
    fragments: List[SlideFragment] = []
    for node in tree.children:
        if isinstance(node, SlideContainer):
            content = "".join(renderer.tree_expand(DocumentTree([child])) for child in node.inner)
            fragments.extend(fragments_split(
                content,
                title=node.title,
                incremental=node.incremental,
                centered=node.centered,
            ))
        elif isinstance(node, ExtensionNode) and node.name.lower() == "slides":
            attrs = attrs_parse(node.attr)
            fragments.extend(fragments_split(
                node.inner or "",
                split=attrs.get('split'),
                title=attrs.get('title', ''),
                incremental=switch_parse(attrs.get('incremental')),
                centered=switch_parse(attrs.get('center')),
            ))
    return fragments
