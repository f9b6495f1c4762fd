"""
wikislides - Wiki page to S5 slide show generator

Slide segmentation and presentation assembly for wiki pages.
"""

__version__ = "1.0.0"

from .log import LOG, state_connectToLogger
from .marks import marks_compile, heading_classify
from .splitter import fragments_split
from .restructure import sections_restructure, sections_transform
from .wikitext import WikiText
from .tags import TagRegistry
from .environment import FileEnvironment
from .slideshow import SlideShow
from .assembler import PresentationAssembler, headItems_extract
from .skin import Skin, skin_load, skins_listAvailable, styleUrls_rewrite, skinStyle_generate
from .view import ArticleView, SlideCounter

__all__ = [
    "LOG",
    "state_connectToLogger",
    "marks_compile",
    "heading_classify",
    "fragments_split",
    "sections_restructure",
    "sections_transform",
    "WikiText",
    "TagRegistry",
    "FileEnvironment",
    "SlideShow",
    "PresentationAssembler",
    "headItems_extract",
    "Skin",
    "skin_load",
    "skins_listAvailable",
    "styleUrls_rewrite",
    "skinStyle_generate",
    "ArticleView",
    "SlideCounter",
    "__version__",
]
