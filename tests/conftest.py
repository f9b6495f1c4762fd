"""
Shared fixtures: an in-memory page environment
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import pytest

from wikislides.lib.messages import message_get


TEMPLATE = (
    "<title>[title]</title>[headitems]\n"
    "<link href=\"[styleurl]\" /><style>[addcss]</style>\n"
    "<script>var s5ScaleEachSlide = [scaled];\n[addscript]</script>\n"
    "<meta name=\"defaultView\" content=\"[defaultView]\" />\n"
    "<meta name=\"s5skin\" content=\"[style]\" /><meta name=\"pageid\" content=\"[pageid]\" />\n"
    "<h1>[footer]</h1><h2>[subfooter]</h2><h3>[subtitle]</h3><h4>[author]</h4>\n"
    "<div class=\"presentation\">[content]</div>"
)


class MemoryEnvironment:
    """PageEnvironment serving pages and media from dicts"""

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        author: Optional[str] = "Jane Doe",
        user: str = "Visitor",
        media: Optional[Dict[str, str]] = None,
        template: Optional[str] = TEMPLATE,
        head: str = "",
    ):
        self.pages = pages or {}
        self.author = author
        self.user = user
        self.media = media or {}
        self.template = template
        self.head = head
        self.timestamp = datetime(2026, 10, 19, 14, 5)

    def page_text(self, title: str) -> Optional[str]:
        return self.pages.get(title)

    def page_exists(self, title: str) -> bool:
        return title in self.pages

    def page_id(self, title: str) -> int:
        return 42

    def earliest_revision_author(self, title: str) -> Optional[str]:
        return self.author if title in self.pages else None

    def current_user_name(self) -> str:
        return self.user

    def page_timestamp(self, title: str) -> datetime:
        return self.timestamp

    def media_url(self, name: str) -> Optional[str]:
        return self.media.get(name)

    def slideshow_url(self, title: str) -> str:
        return f"/slides/{title}"

    def label(self, key: str) -> str:
        return message_get(key)

    def head_html(self) -> str:
        return self.head

    def convert(self, text: str) -> str:
        return text

    def template_load(self, path: Path) -> Optional[str]:
        return self.template


@pytest.fixture
def make_environment():
    """Factory for MemoryEnvironment instances"""
    return MemoryEnvironment
