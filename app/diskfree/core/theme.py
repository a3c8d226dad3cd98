"""Console styles for diskfree output.

Every style role used by the volume menu, the blocker report and the eject
messages can be restyled in ``$XDG_CONFIG_HOME/diskfree/theme.toml``::

    [styles]
    writing = "bold #ff5555"
    volume = "underline cyan"

Values are Rich style definitions. Roles not listed keep their defaults.
"""

import logging
import tomllib
from functools import cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.theme import Theme

from diskfree.core.paths import get_config_dir

logger = logging.getLogger(__name__)


class StylePalette(BaseModel):
    """Rich style definition for each output role."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Banner and secondary text
    header: str = "bold #69B9A1"
    border: str = "#29526d"
    muted: str = "#b2bec3"

    # Status symbols
    success: str = "#03b971"
    info: str = "#0ec1c8"
    warning: str = "#f5b332"
    error: str = "bold #f53263"

    # Blocker report
    writing: str = "bold #f53263"
    reading: str = "#b2bec3"
    user_process: str = "bold #ffffff"
    system_process: str = "#b2bec3"
    blocker: str = "bold #ffffff"
    volume: str = "bold #0ec1c8"

    @field_validator("*")
    @classmethod
    def check_style(cls, value: str) -> str:
        """Reject definitions Rich cannot parse, e.g. unknown color names."""
        try:
            Style.parse(value)
        except StyleSyntaxError as e:
            raise ValueError(str(e)) from None
        return value

    def to_theme(self) -> Theme:
        """Build the Rich theme, one style per role."""
        return Theme(self.model_dump())


def get_user_theme_path() -> Path:
    """Return the path of the user's theme file."""
    return get_config_dir() / "theme.toml"


def read_style_overrides(path: Path) -> dict[str, object]:
    """Read the ``[styles]`` table of a theme file.

    A missing file is the normal case and yields no overrides. Unreadable
    or malformed files are logged and ignored.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    table = data.get("styles", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'styles' is not a table", path)
        return {}
    return table


def load_palette(path: Path | None = None) -> StylePalette:
    """Build the palette from the defaults and the user's overrides.

    Each override is checked on its own: an unknown role or a style Rich
    cannot parse is skipped with a warning and that role keeps its default.

    Args:
        path: Theme file to read. Defaults to the user theme path.

    Returns:
        Palette with all valid overrides applied.
    """
    if path is None:
        path = get_user_theme_path()

    accepted: dict[str, object] = {}
    for role, value in read_style_overrides(path).items():
        if role not in StylePalette.model_fields:
            logger.warning("Unknown style role %r in %s", role, path)
            continue
        try:
            StylePalette.model_validate({role: value})
        except ValidationError as e:
            logger.warning("Invalid style for %r in %s: %s", role, path, e.errors()[0]["msg"])
            continue
        accepted[role] = value

    if accepted:
        logger.debug("Applied %d style override(s) from %s", len(accepted), path)
    return StylePalette.model_validate(accepted)


@cache
def get_theme() -> Theme:
    """Return the Rich theme for the shared consoles, loaded once."""
    return load_palette().to_theme()
