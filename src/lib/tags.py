"""
Extension tag handlers for wikislides

Maps every extension tag name to a TagSpec holding one handler per
rendering mode. The structural slide tags delegate to their context
object: an ArticleView in VIEW mode, a SlideShow in the other modes.

    tag          VIEW              SETUP            COLLECT          RENDER
    slideshow    slideshow_view    slideshow_parse  -                -
    slide        slideshow_legacy  slideshow_parse  -                -
    slides       slides_view       -                slides_parse     -
    slidecss     slidecss_view     -                slidecss_parse   slidecss_parse
    syntaxhighlight (source): highlighted code in VIEW and RENDER

"-" renders the tag as an empty string.
"""

from typing import Any, Dict, List, Optional

from pygments import highlight
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.lexer import Lexer
from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from ..models.tags import TagCall, TagCategory, TagMode, TagSpec
from .lexer import WikiSlidesLexer
from .log import LOG


class TagRegistry:
    """
    Registry of extension tag specifications and handlers

    Maps tag names to TagSpec objects; the renderer treats exactly the
    registered names as extension tags.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in tags"""
        self.specs: Dict[str, TagSpec] = {}
        self.slideTags_register()
        self.styleTags_register()
        self.contentTags_register()

    def register(self, spec: TagSpec) -> None:
        """Register a tag specification"""
        self.specs[spec.name] = spec
        for alias in spec.aliases:
            self.specs[alias] = spec

    def get(self, name: str) -> Optional[TagSpec]:
        """Get tag specification by name (case-insensitive)"""
        return self.specs.get(name.lower())

    def names(self) -> List[str]:
        """All registered tag names and aliases"""
        return list(self.specs.keys())

    def tags_listByCategory(self, category: TagCategory) -> list[TagSpec]:
        """Get all tags in a category (aliases listed once)"""
        seen: List[TagSpec] = []
        for spec in self.specs.values():
            if spec.category == category and spec not in seen:
                seen.append(spec)
        return seen

    def dispatch(self, call: TagCall, mode: TagMode, context: Any) -> str:
        """
        Run the handler of a tag for the current mode.

        Args:
            call: Tag occurrence (name, attributes, content)
            mode: Rendering mode of the current pass
            context: ArticleView or SlideShow handling the pass

        Returns:
            HTML replacing the tag, "" when the tag has no handler in mode
        """
        spec = self.get(call.name)
        if spec is None:
            return ""
        handler = spec.handler_get(mode)
        if handler is None:
            return ""
        LOG(f"<{call.name}> in {mode.value} mode", level=3)
        return handler(call, context)

    def slideTags_register(self) -> None:
        """Register the slide show structure tags"""

        def slideshow_view(call: TagCall, context: Any) -> str:
            return context.slideshow_view(call)

        def slideshow_legacy(call: TagCall, context: Any) -> str:
            return context.slideshow_legacy(call)

        def slideshow_parse(call: TagCall, context: Any) -> str:
            return context.slideshow_parse(call)

        def slides_view(call: TagCall, context: Any) -> str:
            return context.slides_view(call)

        def slides_parse(call: TagCall, context: Any) -> str:
            return context.slides_parse(call)

        self.register(TagSpec(
            name='slideshow',
            category=TagCategory.STRUCTURAL,
            description='Presentation settings; a link to the slide show in article view',
            handlers={
                TagMode.VIEW: slideshow_view,
                TagMode.SETUP: slideshow_parse,
            },
            examples=['<slideshow style="default" headingmark="★">\n; subtitle: Q3 review\n</slideshow>'],
        ))

        self.register(TagSpec(
            name='slide',
            category=TagCategory.STRUCTURAL,
            description='Deprecated spelling of <slideshow>',
            handlers={
                TagMode.VIEW: slideshow_legacy,
                TagMode.SETUP: slideshow_parse,
            },
            examples=['<slide style="default" />'],
        ))

        self.register(TagSpec(
            name='slides',
            category=TagCategory.STRUCTURAL,
            description='One or more explicit slides, optionally split on a delimiter',
            handlers={
                TagMode.VIEW: slides_view,
                TagMode.COLLECT: slides_parse,
            },
            examples=['<slides title="Agenda" split="----">One\n----\nTwo</slides>'],
        ))

    def styleTags_register(self) -> None:
        """Register stylesheet tags"""

        def slidecss_view(call: TagCall, context: Any) -> str:
            return context.slidecss_view(call)

        def slidecss_parse(call: TagCall, context: Any) -> str:
            return context.slidecss_parse(call)

        self.register(TagSpec(
            name='slidecss',
            category=TagCategory.STYLE,
            description='Extra CSS for the slide show (and the article with view="true")',
            handlers={
                TagMode.VIEW: slidecss_view,
                TagMode.COLLECT: slidecss_parse,
                TagMode.RENDER: slidecss_parse,
            },
            examples=['<slidecss>.slide h1 { color: navy; }</slidecss>'],
        ))

    def contentTags_register(self) -> None:
        """Register content tags rendered the same way in articles and slides"""

        def code_handler(call: TagCall, context: Any) -> str:
            """Handle <syntaxhighlight lang="..."> - Pygments highlighted code"""
            language = call.attrs.get('lang', 'text')

            lexer: Lexer
            try:
                if language.lower() in ['wikislides', 's5']:
                    lexer = WikiSlidesLexer()
                else:
                    lexer = get_lexer_by_name(language)
            except ClassNotFound:
                lexer = TextLexer()

            # Inline styles: the presentation is a single file
            formatter = HtmlFormatter(style=context.pygments_style, noclasses=True)
            return highlight(call.content.strip('\n'), lexer, formatter)

        handlers = {
            TagMode.VIEW: code_handler,
            TagMode.RENDER: code_handler,
        }

        self.register(TagSpec(
            name='syntaxhighlight',
            category=TagCategory.CONTENT,
            description='Syntax highlighted source code',
            handlers=handlers,
            aliases=['source'],
            examples=[
                '<syntaxhighlight lang="python">\ndef hello():\n    print("Hi")\n</syntaxhighlight>',
                '<source lang="s5">== ★ Intro ==</source>',
            ],
        ))
