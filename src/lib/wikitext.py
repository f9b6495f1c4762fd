"""
Wiki text tree builder and renderer

The engine consumes markup through the MarkupRenderer protocol; WikiText
is the implementation shipped with wikislides.

Structure is kept deliberately shallow:
    - heading lines (== Title ==) become HeadingNode
    - registered extension tags (<slides>...</slides>) become ExtensionNode
    - everything else stays verbatim in TextNode

Rendering swaps each extension tag for a strip marker, renders the rest
as CommonMark with markdown-it-py, then puts the tag handler output back
in place of the markers:

    "Hi <slidecss>x</slidecss>"  →  "Hi \\x7fUNIQ-STRIP-0-QINU\\x7f"
                                 →  "<p>Hi \\x7fUNIQ-STRIP-0-QINU\\x7f</p>"
                                 →  "<p>Hi </p>"            (handler output "")
"""

import html
import re
from typing import Any, Dict, List, Optional, Protocol

from markdown_it import MarkdownIt

from ..config import AppSettings, appsettings
from ..models.tags import TagCall, TagMode
from ..models.tree import (
    DocumentTree,
    ExtensionNode,
    HeadingNode,
    SlideContainer,
    TextNode,
)
from .marks import HEADING_TRIM
from .tags import TagRegistry


HEADING_RE = re.compile(r'^(=+)([^\n]+?)(=+)[ \t]*$', re.MULTILINE)

# Wiki list line: "* item", "# item", "** nested", "*# mixed"
LIST_LINE_RE = re.compile(r'^([*#]*#[*#]*|\*+(?=[ \t]))[ \t]*(.*)$')

FENCE_RE = re.compile(r'^[ ]{0,3}(```|~~~)')

# Unclosed comments run to the end of the text
COMMENT_RE = re.compile(r'<!--.*?(?:-->|\Z)', re.DOTALL)

ATTR_RE = re.compile(
    r'([^\s=/>"\']+)(?:\s*=\s*(?:"([^"]*)"|\'([^\']*)\'|([^\s"\'>]+)))?'
)


class MarkupRenderer(Protocol):
    """Markup collaborator consumed by the slide engine"""

    def tree_parse(self, text: str) -> DocumentTree:
        ...

    def tree_expand(self, tree: DocumentTree) -> str:
        ...

    def render_inline(self, text: str, mode: TagMode, context: Any) -> str:
        ...

    def render_block(self, text: str, mode: TagMode, context: Any) -> str:
        ...


def attrs_parse(attr_text: Optional[str]) -> Dict[str, str]:
    """
    Parse tag attribute text into a dict.

    Keys are lowercased, values HTML-unescaped; bare attributes map to "".

    Example:
        >>> attrs_parse(' title="A &amp; B" split=----  float')
        {'title': 'A & B', 'split': '----', 'float': ''}
    """
    attrs: Dict[str, str] = {}
    for match in ATTR_RE.finditer(attr_text or ""):
        value = next((g for g in match.groups()[1:] if g is not None), "")
        attrs[match.group(1).lower()] = html.unescape(value)
    return attrs


def container_open(container: SlideContainer) -> str:
    """Opening <slides> tag carrying a container's title and flags"""
    attr = f' title="{html.escape(container.title)}"'
    if container.incremental:
        attr += ' incremental="1"'
    if container.centered:
        attr += ' center="1"'
    return f"<slides{attr}>"


class WikiText:
    """
    Tree builder, expander and renderer for wiki slide pages

    Args:
        registry: Extension tags to recognise and dispatch (default: built-ins)
        settings: Application settings (strip markers)
    """

    def __init__(self, registry: Optional[TagRegistry] = None, settings: AppSettings = appsettings):
        self.registry = registry or TagRegistry()
        self.settings = settings

        self.markdown = MarkdownIt('commonmark', {'html': True})
        self.markdown.enable(['table', 'strikethrough'])

        names = sorted(self.registry.names(), key=len, reverse=True)
        self.tagOpen_re = re.compile(
            r'<(' + '|'.join(re.escape(n) for n in names) + r')'
            r'(\s(?:[^>"\']|"[^"]*"|\'[^\']*\')*?)?(/?)>',
            re.IGNORECASE,
        )
        self.marker_re = re.compile(
            r'(<p>)?(' + re.escape(settings.strip_prefix) + r'\d+'
            + re.escape(settings.strip_suffix) + r')(</p>)?'
        )

    def tree_parse(self, text: str) -> DocumentTree:
        """
        Split page text into top-level nodes.

        Unclosed extension tags are left as plain text. Content of an
        extension tag or of an HTML comment is never scanned for headings
        or nested tags.

        Args:
            text: Raw page text

        Returns:
            DocumentTree whose expansion reproduces text exactly
        """
        children: List[Any] = []
        pos = 0
        text_start = 0

        while pos < len(text):
            heading = HEADING_RE.search(text, pos)
            tag = self.tagOpen_re.search(text, pos)
            comment = COMMENT_RE.search(text, pos)

            if heading is None and tag is None:
                break

            if comment is not None and all(
                m is None or comment.start() <= m.start() for m in (heading, tag)
            ):
                # stays part of the surrounding text node
                pos = comment.end()
                continue

            if heading is not None and (tag is None or heading.start() < tag.start()):
                if heading.start() > text_start:
                    children.append(TextNode(text[text_start:heading.start()]))
                level = min(len(heading.group(1)), len(heading.group(3)), 6)
                children.append(HeadingNode(text=heading.group(0), level=level))
                pos = text_start = heading.end()
                continue

            name = tag.group(1)
            attr = tag.group(2) or ""
            if tag.group(3):
                node = ExtensionNode(names=[name], attr=attr)
                end = tag.end()
            else:
                close_re = re.compile(r'</' + re.escape(name) + r'\s*>', re.IGNORECASE)
                close = close_re.search(text, tag.end())
                if close is None:
                    pos = tag.end()
                    continue
                node = ExtensionNode(
                    names=[name],
                    attr=attr,
                    inner=text[tag.end():close.start()],
                    close=close.group(0),
                )
                end = close.end()

            if tag.start() > text_start:
                children.append(TextNode(text[text_start:tag.start()]))
            children.append(node)
            pos = text_start = end

        if text_start < len(text):
            children.append(TextNode(text[text_start:]))

        return DocumentTree(children=children)

    def tree_expand(self, tree: DocumentTree) -> str:
        """Serialize a (possibly restructured) tree back to page text"""
        return "".join(self.node_expand(node) for node in tree.children)

    def node_expand(self, node: Any) -> str:
        """Serialize one node; slide containers become <slides> tags"""
        if isinstance(node, TextNode):
            return node.text
        if isinstance(node, HeadingNode):
            return node.text
        if isinstance(node, ExtensionNode):
            if node.inner is None:
                return f"<{node.name}{node.attr}/>"
            return f"<{node.name}{node.attr}>{node.inner}{node.close}"
        if isinstance(node, SlideContainer):
            inner = "".join(self.node_expand(child) for child in node.inner)
            return container_open(node) + inner + "</slides>\n"
        raise TypeError(f"Unknown document node: {node!r}")

    def render_inline(self, text: str, mode: TagMode, context: Any) -> str:
        """Render text as inline HTML (no paragraph wrapping)"""
        return self.text_render(text, mode, context, inline=True)

    def render_block(self, text: str, mode: TagMode, context: Any) -> str:
        """Render text as block HTML"""
        return self.text_render(text, mode, context, inline=False)

    def text_render(self, text: str, mode: TagMode, context: Any, inline: bool = False) -> str:
        """
        Render wiki text, dispatching extension tags for the given mode.

        Args:
            text: Wiki text
            mode: Selects the handler of every tag
            context: Object the tag handlers act on
            inline: Render without block structure

        Returns:
            HTML string
        """
        text = text.replace("__TOC__", "").strip()
        if not text:
            return ""

        tree = self.tree_parse(text)
        parts: List[str] = []
        outputs: List[str] = []

        for index, node in enumerate(tree.children):
            if isinstance(node, ExtensionNode):
                call = TagCall(
                    name=node.name.lower(),
                    attrs=attrs_parse(node.attr),
                    content=node.inner or "",
                )
                outputs.append(self.registry.dispatch(call, mode, context))
                marker = self.settings.stripMarker_make(len(outputs) - 1)
                if not inline and lineAlone_is(tree.children, index):
                    # paragraph of its own, unwrapped again by markers_expand
                    marker = f"\n\n{marker}\n\n"
                parts.append(marker)
            elif isinstance(node, HeadingNode):
                parts.append(heading_markdown(node))
            elif inline:
                parts.append(node.text)
            else:
                parts.append(wikiLists_convert(node.text, lineStart_is(tree.children, index)))

        source = "".join(parts)
        if inline:
            rendered = self.markdown.renderInline(source)
        else:
            rendered = self.markdown.render(source)

        return self.markers_expand(rendered, outputs)

    def markers_expand(self, rendered: str, outputs: List[str]) -> str:
        """
        Replace strip markers with tag output.

        A marker that is a paragraph of its own loses the <p> wrapper.
        """
        def marker_replace(match: re.Match[str]) -> str:
            index = self.settings.stripIndex_extract(match.group(2))
            if index is None or index >= len(outputs):
                return match.group(0)
            output = outputs[index]
            if match.group(1) and match.group(3):
                return output
            return (match.group(1) or "") + output + (match.group(3) or "")

        return self.marker_re.sub(marker_replace, rendered)


def lineAlone_is(children: List[Any], index: int) -> bool:
    """Check whether the node at index fills its source line(s) alone"""
    before = children[index - 1] if index > 0 else None
    after = children[index + 1] if index + 1 < len(children) else None
    before_ok = before is None or (isinstance(before, TextNode) and before.text.endswith("\n"))
    after_ok = after is None or (isinstance(after, TextNode) and after.text.startswith(("\n", "\r\n")))
    return before_ok and after_ok


def lineStart_is(children: List[Any], index: int) -> bool:
    """Check whether the node at index starts at the beginning of a line"""
    if index == 0:
        return True
    before = children[index - 1]
    if isinstance(before, HeadingNode):
        return False
    return isinstance(before, TextNode) and before.text.endswith("\n")


def listItem_markdown(bullets: str, item: str) -> str:
    """
    CommonMark list item for a wiki bullet prefix.

    Every outer level indents the item by the width of its own marker.

    Example:
        >>> listItem_markdown("*#", "two")
        '  1. two'
    """
    indent = sum(3 if bullet == '#' else 2 for bullet in bullets[:-1])
    marker = "1." if bullets[-1] == '#' else "-"
    return " " * indent + f"{marker} {item}"


def wikiLists_convert(text: str, line_start: bool = True) -> str:
    """
    Rewrite wiki list lines as CommonMark lists.

    A list ends at the first line that is not a list item. Lines inside
    fenced code blocks are left alone, as is a first line that does not
    begin a source line.

    Example:
        >>> wikiLists_convert("# one\\n## nested\\nafter")
        '1. one\\n   1. nested\\n\\nafter'
    """
    lines = text.split("\n")
    converted: List[str] = []
    fenced = False
    in_list = False

    for number, line in enumerate(lines):
        if number == 0 and not line_start:
            converted.append(line)
            continue
        if FENCE_RE.match(line):
            fenced = not fenced
        match = None if fenced else LIST_LINE_RE.match(line)
        if match is not None:
            converted.append(listItem_markdown(match.group(1), match.group(2)))
            in_list = True
            continue
        if in_list and line.strip():
            converted.append("")
        in_list = False
        converted.append(line)

    return "\n".join(converted)


def heading_markdown(node: HeadingNode) -> str:
    """Markdown equivalent of a wiki heading line"""
    return "#" * node.level + " " + node.text.strip(HEADING_TRIM)
