"""
Models package for wikislides

Contains data structures and type definitions for the presentation pipeline.
"""

from .state import ProgramState, pipeline
from .errors import (
    SlideShowFatalError,
    MalformedTreeError,
    GenerationError,
    TemplateNotFoundError,
    SkinError,
)
from .slides import (
    MarkSet,
    MarkMatchers,
    HeadingClassification,
    SlideFragment,
    SlideRecord,
    PrintPageSize,
    PresentationAttributes,
    PRINT_DPI,
)
from .tree import (
    TextNode,
    HeadingNode,
    ExtensionNode,
    SlideContainer,
    DocumentNode,
    DocumentTree,
)
from .tags import TagMode, TagCategory, TagCall, TagSpec

__all__ = [
    "ProgramState",
    "pipeline",
    "SlideShowFatalError",
    "MalformedTreeError",
    "GenerationError",
    "TemplateNotFoundError",
    "SkinError",
    "MarkSet",
    "MarkMatchers",
    "HeadingClassification",
    "SlideFragment",
    "SlideRecord",
    "PrintPageSize",
    "PresentationAttributes",
    "PRINT_DPI",
    "TextNode",
    "HeadingNode",
    "ExtensionNode",
    "SlideContainer",
    "DocumentNode",
    "DocumentTree",
    "TagMode",
    "TagCategory",
    "TagCall",
    "TagSpec",
]
