"""
Skin loader and stylesheet generator for wikislides presentations.

Skins provide the visual styling of a slide show. The bundled skins live
under AppSettings.skins_dir:
  - s5-core.css, print.css: shared by all skins
  - <skin>/framing.css, <skin>/pretty.css: skin stylesheets
  - <skin>/skin.yaml: optional configuration (code highlighting style)
  - <skin>/preview.png: preview shown in article view

Any stylesheet can be overridden per site by a page titled S5/<skin>/<key>.
"""

import re
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from ..config import AppSettings, appsettings
from ..models.errors import SkinError
from .log import LOG


# url(...) references inside a stylesheet
URL_RE = re.compile(r'url\(([^\)]*)\)', re.IGNORECASE | re.DOTALL)

# Anything outside these characters is not a plain skin file name
UNSAFE_NAME_RE = re.compile(r'[^a-z0-9_\-\.]', re.IGNORECASE | re.DOTALL)

BLANK_IMAGE = "blank.gif"


class Skin:
    """
    Represents a wikislides skin.

    A skin consists of:
      - Stylesheets (framing.css, pretty.css) under its directory
      - Optional configuration from skin.yaml
    """

    def __init__(self, skin_name: str, skins_dir: Path):
        """
        Load a skin by name.

        Args:
            skin_name: Name of the skin directory (e.g., "default")
            skins_dir: Directory holding all skins

        Raises:
            SkinError: If the skin directory doesn't exist or skin.yaml is broken
        """
        self.name = skin_name
        self.skins_dir = Path(skins_dir)
        self.skin_dir = self.skins_dir / skin_name

        if not self.skin_dir.is_dir():
            raise SkinError(
                f"Skin '{skin_name}' not found. "
                f"Expected directory: {self.skin_dir}"
            )

        self.config_path = self.skin_dir / "skin.yaml"
        self.config: Dict[str, Any] = self._config_load() if self.config_path.exists() else {}

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse skin.yaml"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SkinError(f"Failed to parse skin.yaml of '{self.name}': {e}")
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise SkinError(f"skin.yaml of '{self.name}' must be a mapping")
        return config

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from skin.yaml.

        Supports nested keys with dot notation:
          skin.config_get('code.pygments_style', 'default')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def pygmentsStyle_get(self) -> str:
        """Pygments style name for <syntaxhighlight> (default: 'default')"""
        return self.config_get('code.pygments_style', 'default')

    def __repr__(self) -> str:
        return f"Skin(name='{self.name}', path='{self.skin_dir}')"


def skin_load(skin_name: str, skins_dir: Path) -> Optional[Skin]:
    """
    Load a skin, or return None if no such skin directory exists.

    Raises:
        SkinError: If the skin exists but its skin.yaml is broken
    """
    if not (Path(skins_dir) / skin_name).is_dir():
        LOG(f"Skin '{skin_name}' not found in {skins_dir}", level=2)
        return None
    return Skin(skin_name, skins_dir)


def skins_listAvailable(skins_dir: Path) -> list[str]:
    """
    List all available skin names.

    Args:
        skins_dir: Directory holding the skins

    Returns:
        Sorted list of skin directory names
    """
    skins_path: Path = Path(skins_dir)

    if not skins_path.exists():
        return []

    return sorted(item.name for item in skins_path.iterdir() if item.is_dir())


def styleUrl_replace(
    reference: str,
    skin: str,
    media_lookup: Callable[[str], Optional[str]],
    base_url: str,
) -> str:
    """
    Resolve one url(...) reference of a skin stylesheet.

    Resolution order:
        1. an existing media file of that name → its URL
        2. a name with characters outside [a-z0-9_.-] → <base>/blank.gif
        3. otherwise → <base>/<skin>/<reference>

    Example:
        >>> styleUrl_replace("../../etc/passwd", "default", lambda n: None, "skins")
        'url(skins/blank.gif)'
        >>> styleUrl_replace("logo.png", "default", lambda n: None, "skins")
        'url(skins/default/logo.png)'
    """
    media = media_lookup(reference)
    if media is not None:
        return f"url({media})"
    if UNSAFE_NAME_RE.search(reference):
        return f"url({base_url}/{BLANK_IMAGE})"
    return f"url({base_url}/{skin}/{reference})"


def styleUrls_rewrite(
    css: str,
    skin: str,
    media_lookup: Callable[[str], Optional[str]],
    base_url: str,
) -> str:
    """Rewrite every url(...) reference in stylesheet text"""
    return URL_RE.sub(
        lambda m: styleUrl_replace(m.group(1), skin, media_lookup, base_url),
        css,
    )


def skinStyle_generate(
    skin: str,
    environment: Any,
    settings: AppSettings = appsettings,
    print_mode: bool = False,
) -> str:
    """
    Generate the complete stylesheet of a skin.

    Concatenates the stylesheets of AppSettings.skin_styles (plus the print
    stylesheet in print mode), each taken from the page S5/<skin>/<key> if
    it exists and from the bundled file otherwise, with url(...) references
    rewritten.

    Args:
        skin: Skin name
        environment: PageEnvironment (override pages, media lookup)
        settings: Application settings
        print_mode: Append the print stylesheet

    Returns:
        Stylesheet text
    """
    styles: Dict[str, str] = dict(settings.skin_styles)
    if print_mode:
        styles['print'] = settings.print_style

    css = ""
    for key, file_template in styles.items():
        content = environment.page_text(f"S5/{skin}/{key}")
        if content is not None:
            LOG(f"Stylesheet '{key}' from page S5/{skin}/{key}", level=2)
        else:
            path = Path(settings.skins_dir) / file_template.replace('$skin', skin)
            if path.is_file():
                content = path.read_text(encoding='utf-8')
            else:
                LOG(f"Stylesheet '{key}' missing: {path}", level=2)
                content = ""
        css += styleUrls_rewrite(content, skin, environment.media_url, settings.skin_base_url)

    return css
