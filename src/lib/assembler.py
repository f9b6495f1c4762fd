"""
Presentation assembler

Builds the final slide show document from rendered slide records, the
presentation attributes and a template with bracketed tokens:

    [title] [subtitle] [author] [footer] [subfooter] [addcss] [addscript]
    [style] [styleurl] [pageid] [scaled] [defaultView] [headitems] [content]

Tokens are substituted in one pass; token-like text inside a substituted
value is never replaced again.
"""

import html
import re
from typing import Any, Callable, Dict, List, Optional

from ..config import AppSettings, appsettings
from ..models.slides import HEADER_KEYS, PresentationAttributes, PrintPageSize, SlideRecord
from ..models.tags import TagMode
from .log import LOG
from .wikitext import MarkupRenderer


TAG_RE = re.compile(r'<[^<>]*>')

HEAD_ITEM_RE = re.compile(
    r'<script[^<>]*>.*?</script>|<link[^<>]*rel="stylesheet"[^<>]*>|'
    r'<meta[^<>]*name="ResourceLoaderDynamicStyles"[^<>]*>',
    re.IGNORECASE | re.DOTALL,
)

# Head items of this bundle only apply to the printed article
PRINT_BUNDLE = 'commonPrint'


def tags_strip(text: str) -> str:
    """Remove markup tags, keeping their text"""
    return TAG_RE.sub('', text)


def headItems_extract(head_html: str) -> str:
    """
    Pick the loader scripts and stylesheets out of a page head.

    Keeps <script> elements, stylesheet <link>s and the
    ResourceLoaderDynamicStyles <meta> marker, in document order, and drops
    anything belonging to the print-only bundle.

    Example:
        >>> headItems_extract('<title>x</title><script src="a.js"></script>')
        '<script src="a.js"></script>'
    """
    items = HEAD_ITEM_RE.findall(head_html or "")
    return "\n".join(item for item in items if PRINT_BUNDLE not in item)


def tokens_substitute(template: str, replace: Dict[str, str]) -> str:
    """
    Replace bracketed tokens in a single pass.

    Args:
        template: Template text
        replace: Token (with brackets) → value

    Returns:
        Template with every token occurrence replaced
    """
    if not replace:
        return template
    pattern = re.compile('|'.join(re.escape(token) for token in replace))
    return pattern.sub(lambda m: replace[m.group(0)], template)


class PresentationAssembler:
    """
    Assemble slide records into a presentation document

    Args:
        attributes: Merged attributes of the presentation
        renderer: Renders header fields (inline, RENDER mode)
        context: Tag handler context for header rendering (the SlideShow)
        settings: Application settings (style URL)
    """

    def __init__(
        self,
        attributes: PresentationAttributes,
        renderer: MarkupRenderer,
        context: Any,
        settings: AppSettings = appsettings,
    ):
        self.attributes = attributes
        self.renderer = renderer
        self.context = context
        self.settings = settings

    def header_render(self) -> Dict[str, str]:
        """Header fields and attribute CSS rendered as inline markup"""
        header: Dict[str, str] = {}
        for key in HEADER_KEYS + ('addcss',):
            header[key] = self.renderer.render_inline(
                self.attributes.get(key), TagMode.RENDER, self.context
            )
        return header

    def stylesheet_build(self, addcss_html: str, css: List[str]) -> str:
        """
        Combine attribute CSS, collected <slidecss> fragments and the font rule.

        Markup tags are stripped from the result.
        """
        parts = list(css)
        addcss = html.unescape(addcss_html)
        if addcss:
            parts.insert(0, addcss)
        stylesheet = "\n".join(parts)
        if self.attributes.font:
            stylesheet += (
                "\n.slide, div.header, div.footer { "
                f"font-family: {self.attributes.font}; }}"
            )
        return tags_strip(stylesheet)

    def slides_build(self, header: Dict[str, str], records: List[SlideRecord]) -> str:
        """
        Slide markup: optional cover slide, then one block per record.

        Only the first emitted slide carries the "visible" class. The cover
        slide is emitted when both the rendered author and title are
        non-empty.
        """
        slides_html = ""
        slide0 = " visible"

        if header['author'].strip() and header['title'].strip():
            slides_html += (
                f'<div class="slide{slide0}"><h1 class="stitle" style="margin-top: 0">'
                f'{header["title"]}</h1><div class="slidecontent">'
                f'<h1 style="margin-top: 0; font-size: 60%">{header["subtitle"]}</h1>'
                f'<h3>{header["author"]}</h3></div></div>'
            )
            slide0 = ""

        for record in records:
            content = record.content_html
            if record.incremental:
                content = content.replace('<ul>', '<ul class="anim">')
                content = content.replace('<ol>', '<ol class="anim">')
            content = f"<div class='slidecontent'>{content}</div>"

            title = record.title_html
            if tags_strip(title).strip():
                notitle = " notitle" if record.centered else ""
                slides_html += (
                    f"<div class='slide{slide0}{notitle}'>"
                    f"<h1 class='stitle'>{title}</h1>{content}</div>\n"
                )
            else:
                slides_html += f"<div class='slide{slide0} notitle'>{content}</div>\n"
            slide0 = ""

        return slides_html

    def styleUrl_get(self, print_size: Optional[PrintPageSize] = None) -> str:
        """URL of the skin stylesheet, with the page size in print mode"""
        url = self.settings.style_url.replace('{skin}', self.attributes.style)
        if print_size is not None:
            separator = '&' if '?' in url else '?'
            url += f"{separator}print={print_size}"
        return url

    def document_build(
        self,
        template: str,
        records: List[SlideRecord],
        css: List[str],
        page_id: int,
        head_items: str = "",
        print_size: Optional[PrintPageSize] = None,
        convert: Optional[Callable[[str], str]] = None,
    ) -> str:
        """
        Substitute the template tokens.

        Args:
            template: Template text
            records: Rendered slides in presentation order
            css: Collected <slidecss> fragments (encounter order)
            page_id: Id of the presented page
            head_items: Scripts and stylesheets for [headitems]
            print_size: Page size for print mode, None for slide show mode
            convert: Post-processing of the finished document

        Returns:
            Presentation HTML
        """
        header = self.header_render()

        addcss = self.stylesheet_build(header['addcss'], css)
        addscript = ""
        default_view = "slideshow"

        if print_size is not None:
            width, height = print_size.pixels()
            if addcss and not addcss.endswith("\n"):
                addcss += "\n"
            addcss += (
                f"@page {{size: {print_size.width_mm}mm {print_size.height_mm}mm;}}\n"
                f".body {{width: {width}px; height: {height}px;}}\n"
            )
            addscript += f"var s5PrintPageSize = [ {width}, {height} ];\n"
            default_view = "print"
            LOG(f"Print mode: {print_size} mm = {width}x{height} px", level=2)

        replace: Dict[str, str] = {f"[{key}]": header[key] for key in HEADER_KEYS}
        replace.update({
            '[addcss]': addcss,
            '[addscript]': addscript,
            '[style]': self.attributes.style,
            '[styleurl]': self.styleUrl_get(print_size),
            '[pageid]': str(page_id),
            '[scaled]': 'true' if self.attributes.scaled else 'false',
            '[defaultView]': default_view,
            '[headitems]': head_items,
            '[content]': self.slides_build(header, records),
        })

        document = tokens_substitute(template, replace)
        if convert is not None:
            document = convert(document)

        LOG(f"Assembled {len(records)} slides", level=2)
        return document
