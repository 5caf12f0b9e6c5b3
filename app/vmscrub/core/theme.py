"""Theme management for vmscrub CLI.

Colors are validated by pydantic and may be overridden from the
``[colors]`` section of the configuration file.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme


class ThemeColors(BaseModel):
    """Color configuration for vmscrub CLI.

    All colors must be valid hex codes (#RRGGBB or #RGB).
    """

    model_config = ConfigDict(extra="forbid")

    # Stage headers
    header: str = "#69B9A1"

    # Semantic colors
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Action markers
    dry_run: str = "#faf870"
    execute: str = "#0e8ac8"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Validate that all color values are valid hex codes."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        color_part = color[1:]
        if len(color_part) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        try:
            int(color_part, 16)
        except ValueError:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg) from None
        return color


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Convert ThemeColors to a Rich Theme.

    Args:
        colors: ThemeColors instance to convert. If None, uses the defaults.

    Returns:
        Rich Theme instance configured with the color scheme.
    """
    if colors is None:
        colors = ThemeColors()

    styles: dict[str, str] = {
        "success": colors.success,
        "warning": colors.warning,
        "error": f"bold {colors.error}",
        "info": colors.info,
        "dry_run": f"bold {colors.dry_run}",
        "execute": f"bold {colors.execute}",
        # Convenience styles
        "bold_header": f"bold {colors.header}",
        "banner": f"bold {colors.error}",
    }

    return Theme(styles)
