"""
Presentation attribute merge

Builds the immutable PresentationAttributes of one request. Precedence,
highest first:

    1. explicit tag attributes    <slideshow title="Talk">
    2. content lines              ; subtitle: Q3 review
    3. global defaults            AppSettings (marks, style, scaled)
    4. computed fallbacks         author, subfooter
"""

import re
from typing import Any, Dict, Optional

from ..config import AppSettings, appsettings
from ..models.slides import PresentationAttributes
from .messages import timeanddate
from .splitter import flag_parse


# "; key: value" lines inside <slideshow> content
CONTENT_ATTR_RE = re.compile(r'(?:^|\n)\s*;\s*([^:\s]*)\s*:\s*([^\n]*)', re.IGNORECASE | re.DOTALL)

DATE_TOKEN_RE = re.compile(re.escape('{{date}}'), re.IGNORECASE)

FIELDS = (
    'title', 'subtitle', 'footer', 'subfooter', 'author',
    'headingmark', 'incmark', 'centermark', 'style', 'font', 'addcss', 'scaled',
)


def contentAttributes_extract(content: Optional[str]) -> Dict[str, str]:
    """
    Extract "; key: value" lines from tag content.

    Example:
        >>> contentAttributes_extract("; subtitle: Q3 review\\n;author: Jane")
        {'subtitle': 'Q3 review', 'author': 'Jane'}
    """
    attrs: Dict[str, str] = {}
    for match in CONTENT_ATTR_RE.finditer(content or ""):
        attrs[match.group(1)] = match.group(2).strip()
    return attrs


def attributes_build(
    tag_attrs: Optional[Dict[str, str]],
    content: Optional[str],
    page_title: str,
    environment: Any,
    settings: AppSettings = appsettings,
) -> PresentationAttributes:
    """
    Merge tag attributes, content lines, settings and computed fallbacks.

    Args:
        tag_attrs: Attributes written on the <slideshow> tag
        content: Content of the <slideshow> tag
        page_title: Title of the page the presentation belongs to
        environment: PageEnvironment (revision author, user, timestamp)
        settings: Global defaults

    Returns:
        PresentationAttributes for the request
    """
    attrs: Dict[str, Any] = contentAttributes_extract(content)
    attrs.update({k: v for k, v in (tag_attrs or {}).items() if k != 'content'})

    defaults: Dict[str, Any] = {
        'title': page_title,
        'subtitle': '',
        'footer': page_title,
        'headingmark': settings.heading_mark,
        'incmark': settings.inc_mark,
        'centermark': settings.center_mark,
        'style': settings.default_style,
        'font': '',
        'addcss': '',
        'scaled': settings.scaled,
    }
    for key, value in defaults.items():
        attrs.setdefault(key, value)

    attrs['scaled'] = flag_parse(attrs['scaled'])

    if 'author' not in attrs:
        author = environment.earliest_revision_author(page_title)
        if author is None:
            # page never saved
            author = environment.current_user_name()
        attrs['author'] = author

    date = timeanddate(environment.page_timestamp(page_title), settings.language)
    if 'subfooter' not in attrs:
        subfooter = attrs['author']
        if subfooter:
            subfooter += ', '
        attrs['subfooter'] = subfooter + date
    else:
        attrs['subfooter'] = DATE_TOKEN_RE.sub(lambda _: date, attrs['subfooter'])

    extra = {k: v for k, v in attrs.items() if k not in FIELDS}
    return PresentationAttributes(
        **{k: attrs[k] for k in FIELDS},
        extra=extra,
    )
