"""
Slide data models

Type-safe structures passed between the segmentation, rendering and
assembly stages of a presentation request.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Dict, Optional


# Print layout resolution (pixels per inch)
PRINT_DPI = 96


@dataclass(frozen=True)
class MarkSet:
    """
    Heading marker strings of a presentation

    Attributes:
        heading_mark: Marks a heading as a slide boundary. Empty or None
                      means every heading is a boundary.
        inc_mark: Marks a slide whose lists are revealed incrementally
        center_mark: Marks a slide shown without title styling
    """
    heading_mark: Optional[str] = None
    inc_mark: Optional[str] = None
    center_mark: Optional[str] = None


@dataclass(frozen=True)
class MarkMatchers:
    """
    Compiled MarkSet. An absent matcher never triggers its axis.
    """
    heading: Optional[re.Pattern] = None
    incremental: Optional[re.Pattern] = None
    centered: Optional[re.Pattern] = None


@dataclass(frozen=True)
class HeadingClassification:
    """
    Result of classifying a heading as a slide boundary

    Example:
        Heading "== ★ Results (step) ==" with marks ★ and (step):
        HeadingClassification(title="Results", incremental=True, centered=False)
    """
    title: str
    incremental: bool = False
    centered: bool = False


@dataclass
class SlideFragment:
    """
    One slide worth of raw wiki text, before rendering

    Attributes:
        content: Raw slide body text
        title: Raw slide title ("" when the slide has none)
        incremental: Reveal lists item by item
        centered: Suppress title styling (adds the "notitle" class)
    """
    content: str
    title: str = ""
    incremental: bool = False
    centered: bool = False


@dataclass
class SlideRecord(SlideFragment):
    """
    Rendered slide ready for assembly

    title_html is "" whenever title is empty; the renderer is never asked
    to render an empty title.
    """
    content_html: str = ""
    title_html: str = ""


@dataclass(frozen=True)
class PrintPageSize:
    """Printed page size in millimetres"""
    width_mm: int
    height_mm: int

    @classmethod
    def parse(cls, value: str) -> "PrintPageSize":
        """
        Parse "WxH" (e.g. "210x297") into a page size.

        Raises:
            ValueError: If value is not two integers joined by "x"
        """
        parts = value.lower().split("x")
        if len(parts) != 2:
            raise ValueError(f"Print page size must look like 210x297, got '{value}'")
        return cls(int(parts[0]), int(parts[1]))

    def pixels(self) -> tuple[int, int]:
        """Page size in CSS pixels at PRINT_DPI"""
        return (
            math.floor(self.width_mm * PRINT_DPI / 25.4),
            math.floor(self.height_mm * PRINT_DPI / 25.4),
        )

    def __str__(self) -> str:
        return f"{self.width_mm}x{self.height_mm}"


@dataclass(frozen=True)
class PresentationAttributes:
    """
    Merged configuration of one presentation request (immutable).

    Built once by lib.attributes.attributes_build() and handed to every
    component; nothing reads global settings after that point.

    Attributes:
        headingmark: None disables section-to-slide conversion entirely,
                     "" turns every heading into a slide
        scaled: Each slide is scaled independently by the viewer script
        extra: Any tag attribute without a dedicated field
    """
    title: str = ""
    subtitle: str = ""
    footer: str = ""
    subfooter: str = ""
    author: str = ""
    headingmark: Optional[str] = None
    incmark: str = ""
    centermark: str = ""
    style: str = "default"
    font: str = ""
    addcss: str = ""
    scaled: bool = False
    extra: Dict[str, str] = field(default_factory=dict)

    def markSet_get(self) -> MarkSet:
        """Marker strings of this presentation"""
        return MarkSet(
            heading_mark=self.headingmark,
            inc_mark=self.incmark,
            center_mark=self.centermark,
        )

    def get(self, key: str, default: str = "") -> str:
        """Look up a header field or extra attribute by tag key"""
        if key in HEADER_KEYS or key in ("style", "font", "addcss"):
            return getattr(self, key)
        return self.extra.get(key, default)


# Attribute keys rendered into the presentation header
HEADER_KEYS = ("title", "subtitle", "author", "footer", "subfooter")
