"""Settings read from git config.

All keys live in the ``select-branch`` section, so they can be set with e.g.::

    git config --global select-branch.limit none
    git config --global select-branch.fuzzy false
    git config --global select-branch.theme simple
"""

from dataclasses import dataclass
from typing import Any, Optional

from git.config import GitConfigParser

SECTION = "select-branch"
THEMES = ("colorful", "simple")
DEFAULT_LIMIT = 20

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


class ConfigError(ValueError):
    """Invalid ``select-branch.*`` value."""


@dataclass
class Config:
    """Runtime settings."""

    fuzzy: bool = True
    theme: str = "colorful"
    limit: Optional[int] = DEFAULT_LIMIT

    @classmethod
    def from_git_config(cls, reader: GitConfigParser) -> "Config":
        """Build settings from git config, keeping defaults for unset keys."""
        config = cls()

        fuzzy = reader.get_value(SECTION, "fuzzy", None)
        if fuzzy is not None:
            config.fuzzy = parse_bool(fuzzy, "fuzzy")

        theme = reader.get_value(SECTION, "theme", None)
        if theme is not None:
            config.theme = parse_theme(theme)

        limit = reader.get_value(SECTION, "limit", None)
        if limit is not None:
            config.limit = parse_limit(limit)

        return config


def parse_bool(value: Any, key: str) -> bool:
    """Parse a git boolean."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f'"{value}" is not a valid "{SECTION}.{key}" value, expected true or false')


def parse_theme(value: Any) -> str:
    """Validate a theme name."""
    theme = str(value).strip().lower()
    if theme not in THEMES:
        expected = ", ".join(f'"{name}"' for name in THEMES)
        raise ConfigError(f"{value} is not a valid theme, expected one of {expected}")
    return theme


def parse_limit(value: Any) -> Optional[int]:
    """Parse a limit: a positive integer, or ``none`` for no limit."""
    if isinstance(value, str) and value.strip().lower() == "none":
        return None
    try:
        # bool is an int subclass but "limit = true" is not a count
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(value)
        limit = int(value)
    except (TypeError, ValueError):
        limit = 0
    if limit <= 0:
        raise ConfigError(
            f'"{value}" is not a valid "{SECTION}.limit" value.\n'
            'The value must be either a positive integer, or "none". e.g.:\n'
            f"> git config --global {SECTION}.limit none\n"
            "or\n"
            f"> git config --global {SECTION}.limit {DEFAULT_LIMIT}"
        )
    return limit
