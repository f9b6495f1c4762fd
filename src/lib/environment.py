"""
Page environment

Everything the slide engine needs from the outside world (page text and
history, the current user, media files, labels, the template) goes through
the PageEnvironment protocol. FileEnvironment serves it from a directory:

    inputdir/
        Talk.wiki               page "Talk"
        Talk.meta.yaml          optional: author, timestamp, id
        S5/default/pretty.css   optional skin override for key "pretty"
        media/logo.png          media resource "logo.png"
"""

import zlib
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import yaml

from ..config import AppSettings, appsettings
from ..models.errors import GenerationError
from .log import LOG
from .messages import message_get


PAGE_SUFFIXES = ("", ".wiki", ".txt", ".css")


class PageEnvironment(Protocol):
    """Data sources consumed by a presentation request"""

    def page_text(self, title: str) -> Optional[str]:
        ...

    def page_exists(self, title: str) -> bool:
        ...

    def page_id(self, title: str) -> int:
        ...

    def earliest_revision_author(self, title: str) -> Optional[str]:
        ...

    def current_user_name(self) -> str:
        ...

    def page_timestamp(self, title: str) -> datetime:
        ...

    def media_url(self, name: str) -> Optional[str]:
        ...

    def slideshow_url(self, title: str) -> str:
        ...

    def label(self, key: str) -> str:
        ...

    def head_html(self) -> str:
        ...

    def convert(self, text: str) -> str:
        ...

    def template_load(self, path: Path) -> Optional[str]:
        ...


class FileEnvironment:
    """
    PageEnvironment backed by a directory of page files

    Args:
        root: Directory holding pages, page metadata and media/
        settings: Application settings (language, user name)
        head_html: Head markup of the surrounding site, if any
    """

    def __init__(self, root: Path, settings: AppSettings = appsettings, head_html: str = ""):
        self.root = Path(root)
        self.settings = settings
        self.media_dir = self.root / "media"
        self._head_html = head_html
        self._meta_cache: Dict[str, Dict[str, Any]] = {}

    def page_path(self, title: str) -> Optional[Path]:
        """File holding a page, or None if the page does not exist"""
        for suffix in PAGE_SUFFIXES:
            path = self.root / f"{title}{suffix}"
            if path.is_file():
                return path
        return None

    def page_text(self, title: str) -> Optional[str]:
        path = self.page_path(title)
        if path is None:
            return None
        return path.read_text(encoding='utf-8')

    def page_exists(self, title: str) -> bool:
        return self.page_path(title) is not None

    def page_meta(self, title: str) -> Dict[str, Any]:
        """
        Page metadata from <title>.meta.yaml.

        Raises:
            GenerationError: If the metadata file is not valid YAML
        """
        if title in self._meta_cache:
            return self._meta_cache[title]

        meta: Dict[str, Any] = {}
        path = self.root / f"{title}.meta.yaml"
        if path.is_file():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    meta = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise GenerationError(f"Failed to parse {path.name}: {e}")
            LOG(f"Page metadata: {path}", level=3)

        self._meta_cache[title] = meta
        return meta

    def page_id(self, title: str) -> int:
        meta = self.page_meta(title)
        if 'id' in meta:
            return int(meta['id'])
        return zlib.crc32(title.encode('utf-8'))

    def earliest_revision_author(self, title: str) -> Optional[str]:
        """Author recorded in page metadata; default author for saved pages"""
        meta = self.page_meta(title)
        if meta.get('author'):
            return str(meta['author'])
        if self.page_exists(title):
            return self.settings.default_author
        return None

    def current_user_name(self) -> str:
        return self.settings.user_name

    def page_timestamp(self, title: str) -> datetime:
        meta = self.page_meta(title)
        timestamp = meta.get('timestamp')
        if isinstance(timestamp, datetime):
            return timestamp
        if isinstance(timestamp, date):
            return datetime(timestamp.year, timestamp.month, timestamp.day)
        if isinstance(timestamp, str):
            return datetime.fromisoformat(timestamp)
        path = self.page_path(title)
        if path is not None:
            return datetime.fromtimestamp(path.stat().st_mtime)
        return datetime.now()

    def media_url(self, name: str) -> Optional[str]:
        """URL of a media file, or None if there is no such file"""
        if not name or '/' in name or '\\' in name:
            return None
        if (self.media_dir / name).is_file():
            return f"media/{name}"
        return None

    def slideshow_url(self, title: str) -> str:
        return "index.html"

    def label(self, key: str) -> str:
        return message_get(key, self.settings.language)

    def head_html(self) -> str:
        return self._head_html

    def convert(self, text: str) -> str:
        return text

    def template_load(self, path: Path) -> Optional[str]:
        path = Path(path)
        if not path.is_absolute():
            path = self.root / path
        if not path.is_file():
            LOG(f"Template not found: {path}", level=2)
            return None
        return path.read_text(encoding='utf-8')
