"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use WIKISLIDES_ prefix (e.g., WIKISLIDES_HEADING_MARK=*).

Settings can also be loaded from a .env file in the project root. These are
the global defaults of a presentation; tag attributes and content lines of a
page override them per request (see lib/attributes.py).
"""

from pathlib import Path
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_ROOT = Path(__file__).parent.parent


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use WIKISLIDES_ prefix.

    Examples:
        WIKISLIDES_HEADING_MARK=(slide)
        WIKISLIDES_DEFAULT_STYLE=blue
        WIKISLIDES_LANGUAGE=ru
    """

    model_config = SettingsConfigDict(
        env_prefix="WIKISLIDES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Strip markers: tag output is swapped for these while markdown renders
    strip_prefix: str = Field(
        default="\x7fUNIQ-STRIP-",
        description="Prefix for rendered-tag placeholders (DEL byte survives markdown rendering untouched)",
    )

    strip_suffix: str = Field(
        default="-QINU\x7f",
        description="Suffix for rendered-tag placeholders",
    )

    # Slide segmentation marks
    heading_mark: Optional[str] = Field(
        default="★",
        description="Marker making a heading a slide boundary. Empty: every heading is one. "
        "Unset (null): headings are never turned into slides",
    )

    inc_mark: str = Field(
        default="(step)",
        description="Heading marker for slides with incremental lists",
    )

    center_mark: str = Field(
        default="(center)",
        description="Heading marker for slides without title styling",
    )

    # Presentation defaults
    default_style: str = Field(
        default="default",
        description="Default skin name",
    )

    scaled: str = Field(
        default="false",
        description="Scale each slide independently (TRUE/YES/1)",
    )

    default_author: str = Field(
        default="",
        description="Author of pages that have no revision history",
    )

    user_name: str = Field(
        default="",
        description="Real name of the user generating the presentation",
    )

    language: str = Field(
        default="en",
        description="Content language for header labels and dates",
    )

    # Resources
    template_file: Path = Field(
        default=PACKAGE_ROOT / "assets" / "slides.html",
        description="Presentation template with [placeholder] tokens",
    )

    skins_dir: Path = Field(
        default=PACKAGE_ROOT / "assets" / "skins",
        description="Directory holding the bundled skins",
    )

    skin_base_url: str = Field(
        default="skins",
        description="URL prefix of skin static files as seen from the presentation",
    )

    style_url: str = Field(
        default="index.php?action=slide&s5skin={skin}&s5css=1",
        description="URL of the generated skin stylesheet; {skin} is replaced",
    )

    script_path: str = Field(
        default=".",
        description="URL prefix for scripts and skin previews in article view",
    )

    skin_styles: Dict[str, str] = Field(
        default={
            "core": "s5-core.css",
            "framing": "$skin/framing.css",
            "pretty": "$skin/pretty.css",
        },
        description="Stylesheets concatenated into a skin, keyed by name ($skin is replaced)",
    )

    print_style: str = Field(
        default="print.css",
        description="Extra stylesheet appended in print mode",
    )

    def stripMarker_make(self, index: int) -> str:
        """
        Generate a placeholder string for a rendered tag at given index.

        Args:
            index: Zero-based index of the tag in the text being rendered

        Returns:
            Placeholder string (e.g., "\\x7fUNIQ-STRIP-0-QINU\\x7f")

        Example:
            >>> settings = AppSettings()
            >>> settings.stripMarker_make(0)
            '\\x7fUNIQ-STRIP-0-QINU\\x7f'
        """
        return f"{self.strip_prefix}{index}{self.strip_suffix}"

    def stripIndex_extract(self, placeholder: str) -> int | None:
        """
        Extract tag index from a placeholder string.

        Args:
            placeholder: Placeholder string to parse

        Returns:
            Tag index if valid placeholder, None otherwise
        """
        if not placeholder.startswith(self.strip_prefix):
            return None
        if not placeholder.endswith(self.strip_suffix):
            return None

        content = placeholder[len(self.strip_prefix) : -len(self.strip_suffix)]

        try:
            return int(content)
        except ValueError:
            return None


# Singleton instance - import this in your code
appsettings = AppSettings()
