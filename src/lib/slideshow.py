"""
Slide show generation

One SlideShow serves one presentation request for one page:

    slides_load()
        1. SETUP pass     <slideshow> tags set the attributes
        2. section pass   marked headings become <slides> tags
                          (skipped when headingmark is None)
        3. COLLECT pass   <slides> tags become slide fragments,
                          <slidecss> tags become style fragments
        4. RENDER         body (block) and title (inline) of every fragment

    slideFile_generate()
        template + slide records + attributes → presentation HTML
"""

from typing import Any, Dict, List, Optional

from ..config import AppSettings, appsettings
from ..models.errors import TemplateNotFoundError
from ..models.slides import PresentationAttributes, PrintPageSize, SlideFragment, SlideRecord
from ..models.tags import TagCall, TagMode
from .assembler import PresentationAssembler, headItems_extract
from .attributes import attributes_build
from .log import LOG
from .marks import marks_compile
from .restructure import sections_transform
from .skin import skin_load
from .splitter import fragments_split, switch_parse
from .wikitext import MarkupRenderer, WikiText


class SlideShow:
    """
    Slide show of one page

    Args:
        page_title: Title of the presented page
        environment: PageEnvironment serving page data
        content: Page text; read from the environment when None
        tag_attrs: Attributes of a <slideshow> tag known up front
        tag_content: Content of that tag ("; key: value" lines)
        wikitext: Markup renderer (default: WikiText)
        settings: Global defaults
        overrides: Attributes that win over everything the page says
                   (e.g. a skin chosen on the command line)
    """

    def __init__(
        self,
        page_title: str,
        environment: Any,
        content: Optional[str] = None,
        tag_attrs: Optional[Dict[str, str]] = None,
        tag_content: str = "",
        wikitext: Optional[MarkupRenderer] = None,
        settings: AppSettings = appsettings,
        overrides: Optional[Dict[str, str]] = None,
    ):
        self.page_title = page_title
        self.environment = environment
        self.settings = settings
        self.wikitext: MarkupRenderer = wikitext or WikiText(settings=settings)
        self.overrides: Dict[str, str] = dict(overrides or {})

        if content is None:
            content = environment.page_text(page_title) or ""
        self.page_content = content

        self.fragments: List[SlideFragment] = []
        self.slides: List[SlideRecord] = []
        self.css: List[str] = []
        self.loaded = False

        self.attributes: PresentationAttributes
        self.attributes_set(tag_attrs, tag_content)

    def attributes_set(self, tag_attrs: Optional[Dict[str, str]], content: Optional[str]) -> None:
        """Rebuild the attributes from a <slideshow> tag"""
        merged = dict(tag_attrs or {})
        merged.update(self.overrides)
        self.attributes = attributes_build(
            merged, content, self.page_title, self.environment, self.settings
        )

    @property
    def pygments_style(self) -> str:
        """Code highlighting style of the presentation skin"""
        skin = skin_load(self.attributes.style, self.settings.skins_dir)
        if skin is None:
            return 'default'
        return skin.pygmentsStyle_get()

    def slides_load(self, content: Optional[str] = None) -> List[SlideRecord]:
        """
        Extract and render the slides of the page.

        Args:
            content: Page text to use instead of the page content

        Returns:
            Rendered slide records in presentation order

        Raises:
            MalformedTreeError: If the page tree is malformed
        """
        text = self.page_content if content is None else content

        self.wikitext.render_block(text, TagMode.SETUP, self)

        if self.attributes.headingmark is not None:
            matchers = marks_compile(self.attributes.markSet_get())
            text = sections_transform(text, matchers, self.wikitext)

        self.fragments = []
        self.css = []
        self.wikitext.render_block(text, TagMode.COLLECT, self)
        LOG(f"Collected {len(self.fragments)} slides", level=2)

        self.slides = [self.record_render(fragment) for fragment in self.fragments]
        self.loaded = True
        return self.slides

    def record_render(self, fragment: SlideFragment) -> SlideRecord:
        """Render the body and (non-empty) title of one slide"""
        content_html = self.wikitext.render_block(fragment.content, TagMode.RENDER, self)
        title_html = ""
        if fragment.title:
            title_html = self.wikitext.render_inline(fragment.title, TagMode.RENDER, self)
        return SlideRecord(
            content=fragment.content,
            title=fragment.title,
            incremental=fragment.incremental,
            centered=fragment.centered,
            content_html=content_html,
            title_html=title_html,
        )

    def slideshow_parse(self, call: TagCall) -> str:
        """<slideshow> while generating: take its attributes"""
        self.attributes_set(call.attrs, call.content)
        return ""

    def slides_parse(self, call: TagCall) -> str:
        """<slides> while generating: collect its fragments"""
        self.fragments.extend(fragments_split(
            call.content,
            split=call.attrs.get('split'),
            title=call.attrs.get('title', ''),
            incremental=switch_parse(call.attrs.get('incremental')),
            centered=switch_parse(call.attrs.get('center')),
        ))
        return ""

    def slidecss_parse(self, call: TagCall) -> str:
        """<slidecss> while generating: collect its stylesheet"""
        self.css.append(call.content)
        return ""

    def slideFile_generate(self, print_size: Optional[PrintPageSize] = None) -> str:
        """
        Generate the presentation HTML.

        Args:
            print_size: Page size for print mode, None for slide show mode

        Returns:
            Presentation HTML

        Raises:
            TemplateNotFoundError: If the template cannot be loaded
            MalformedTreeError: If the page tree is malformed
        """
        template = self.environment.template_load(self.settings.template_file)
        if not template:
            raise TemplateNotFoundError(f"Cannot load slide template {self.settings.template_file}")

        if not self.loaded:
            self.slides_load()

        assembler = PresentationAssembler(self.attributes, self.wikitext, self, self.settings)
        return assembler.document_build(
            template,
            self.slides,
            self.css,
            page_id=self.environment.page_id(self.page_title),
            head_items=headItems_extract(self.environment.head_html()),
            print_size=print_size,
            convert=self.environment.convert,
        )
