"""
Article view of slide show pages

How the slide tags look on the ordinary page:

    <slideshow>   floating box linking to the slide show, with the skin
                  preview and the presentation header
    <slide>       the same, plus a deprecation warning
    <slides>      every slide drawn inline as a box
    <slidecss>    nothing, unless view="true" adds it to the page head
"""

import html
import json
import re
from typing import Any, List, Optional

from ..config import AppSettings, appsettings
from ..models.slides import HEADER_KEYS
from ..models.tags import TagCall, TagMode
from .attributes import DATE_TOKEN_RE, attributes_build
from .log import LOG
from .messages import timeanddate
from .skin import skin_load
from .wikitext import MarkupRenderer, WikiText


LEGACY_WARNING = (
    '<div style="width: 240px; color: red">Warning: legacy &lt;slide&gt;'
    ' parser hook used, change it to &lt;slideshow&gt; please</div>'
)


class SlideCounter:
    """
    Source of unique slide box ids for one page render

    Shared by every (nested) <slides> box of the page, so ids never repeat
    within it.
    """

    def __init__(self, start: int = 0):
        self.value = start

    def next(self) -> int:
        """Current number; advances the counter"""
        value = self.value
        self.value += 1
        return value


class ArticleView:
    """
    Renders a page as an article, with slide tags in VIEW mode

    Args:
        page_title: Title of the page
        environment: PageEnvironment serving page data
        wikitext: Markup renderer (default: WikiText)
        settings: Application settings
        counter: Slide id counter (default: a fresh one for this page)
    """

    def __init__(
        self,
        page_title: str,
        environment: Any,
        wikitext: Optional[MarkupRenderer] = None,
        settings: AppSettings = appsettings,
        counter: Optional[SlideCounter] = None,
    ):
        self.page_title = page_title
        self.environment = environment
        self.settings = settings
        self.wikitext: MarkupRenderer = wikitext or WikiText(settings=settings)
        self.counter = counter or SlideCounter()
        self.head_items: List[str] = []
        self.style = settings.default_style

    @property
    def pygments_style(self) -> str:
        skin = skin_load(self.style, self.settings.skins_dir)
        if skin is None:
            return 'default'
        return skin.pygmentsStyle_get()

    def page_render(self, content: Optional[str] = None) -> str:
        """Render the page (or given text) as article HTML"""
        if content is None:
            content = self.environment.page_text(self.page_title) or ""
        return self.wikitext.render_block(content, TagMode.VIEW, self)

    def head_html(self) -> str:
        """Head items added by the tags of the rendered page"""
        return "\n".join(self.head_items)

    def slideshow_view(self, call: TagCall, addmsg: str = "") -> str:
        """
        <slideshow>: link to the slide show, skin preview and header fields
        """
        attributes = attributes_build(
            call.attrs, call.content, self.page_title, self.environment, self.settings
        )
        self.style = attributes.style
        date = timeanddate(self.environment.page_timestamp(self.page_title), self.settings.language)

        rows = ""
        for key in HEADER_KEYS:
            value = attributes.get(key)
            if value:
                value = DATE_TOKEN_RE.sub(lambda _: date, value)
                label = html.escape(self.environment.label(f"s5slide-header-{key}"))
                rendered = self.wikitext.render_inline(value, TagMode.VIEW, self)
                rows += f"<dt>{label}</dt><dd>{rendered}</dd>"
        inside = f"<dl>{rows}</dl>" if rows else ""

        url = html.escape(self.environment.slideshow_url(self.page_title))
        style = html.escape(attributes.style)
        static = f"{self.settings.script_path}/{self.settings.skin_base_url}"
        preview_url = self.environment.media_url(f"S5-{attributes.style}-preview.png")
        if preview_url is None:
            preview_url = f"{static}/{style}/preview.png"
        preview = f'<img src="{preview_url}" alt="Slide Show" width="240px" />'

        output = (
            f'<script type="text/javascript" src="{static}/contentScale.js"></script>'
            f'<script type="text/javascript" src="{static}/slideView.js"></script>'
            '<div class="floatright" style="text-align: center"><span>'
            f'<a href="{url}" class="image" title="Slide Show" target="_blank">'
            f'{preview}<br />Slide Show</a></span>{addmsg}</div>'
            f'{inside}'
        )
        if attributes.font:
            output = (
                '<script type="text/javascript">var wgSlideViewFont = '
                f'{json.dumps(attributes.font)};</script>' + output
            )
        return f'<div id="slideshow-bundle">{output}</div>'

    def slideshow_legacy(self, call: TagCall) -> str:
        """<slide>: deprecated spelling of <slideshow>"""
        LOG("Legacy <slide> tag used", level=2)
        return self.slideshow_view(call, addmsg=LEGACY_WARNING)

    def slides_view(self, call: TagCall) -> str:
        """
        <slides>: each slide as an inline box with a page-unique id

        Boxes float left unless a float attribute is given, in which case
        they are wrapped in one box floating that way.
        """
        attrs = call.attrs
        split = attrs.get('split')
        pieces = re.split(re.escape(split), call.content) if split else [call.content]

        style = ""
        if 'float' not in attrs:
            style += "float: left; "
        if 'width' in attrs:
            style += f"width: {html.escape(attrs['width'])}px; "
        if style:
            style = f" style='{style}'"

        output = ""
        for i, piece in enumerate(pieces):
            piece = piece.strip()
            if 'title' in attrs and i == 0:
                piece = f"== {attrs['title']} ==\n{piece}"
                css_class = "slide withtitle"
            else:
                css_class = "slide"
            rendered = self.wikitext.render_block(piece, TagMode.VIEW, self)
            output += f'<div class="{css_class}"{style} id="slide{self.counter.next()}">{rendered}</div>'

        if 'float' not in attrs:
            output += '<div style="clear: both"></div>'
        else:
            float_side = html.escape(attrs['float'])
            margin = '0 1em 1em 0' if attrs['float'].upper() == 'LEFT' else '0 0 0 1em'
            output = f"<div style='float: {float_side}; margin: {margin}'>{output}</div>"
        return output

    def slidecss_view(self, call: TagCall) -> str:
        """<slidecss>: added to the page head only when view is true or 1"""
        if call.attrs.get('view') in ('true', '1'):
            self.head_items.append(f'<style type="text/css">{call.content}</style>')
        return ""
