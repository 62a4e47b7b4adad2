"""
Server settings for AllayLS.

Defaults describe a standard Allay project. Editors may override them
through the LSP ``initializationOptions`` object, e.g.::

    {
        "configFile": "allay.toml",
        "templatesDir": "templates",
        "shortcodesDir": "shortcodes",
        "extensions": ["html", "md"],
        "excludeDirs": ["node_modules", ".git"]
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_EXCLUDE_DIRS = frozenset(
    {"venv", "node_modules", ".git", "__pycache__", "vendor"}
)


@dataclass(frozen=True)
class AllaySettings:
    """Project layout settings used by the workspace lookups."""

    config_file: str = "allay.toml"
    param_section: str = "Param"
    templates_dir: str = "templates"
    shortcodes_dir: str = "shortcodes"
    extensions: tuple[str, ...] = ("html", "md")
    exclude_dirs: frozenset[str] = field(default=DEFAULT_EXCLUDE_DIRS)

    @classmethod
    def from_initialization_options(cls, options: Any) -> AllaySettings:
        """
        Build settings from the client's initialization options.

        Unknown keys are ignored and values of the wrong type fall back
        to the defaults.
        """
        if not isinstance(options, dict):
            return cls()

        defaults = cls()
        kwargs: dict[str, Any] = {}

        for key, attr in (
            ("configFile", "config_file"),
            ("templatesDir", "templates_dir"),
            ("shortcodesDir", "shortcodes_dir"),
        ):
            value = options.get(key)
            if isinstance(value, str) and value:
                kwargs[attr] = value

        extensions = _string_list(options.get("extensions"))
        if extensions:
            kwargs["extensions"] = tuple(ext.lstrip(".") for ext in extensions)

        exclude_dirs = _string_list(options.get("excludeDirs"))
        if exclude_dirs is not None:
            kwargs["exclude_dirs"] = frozenset(exclude_dirs)

        if not kwargs:
            return defaults
        return cls(**kwargs)


def _string_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return value
