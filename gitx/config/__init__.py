"""Configuration Management Package

Looks for config in (order):
1. .gxrc in current directory (project-specific)
2. .gxrc in home directory (global default)
3. Built-in defaults

Config format (JSON):
{
    "tag_style": "emoji",
    "show_commands": true,
    "aliases": {"gd": {"cmd": "git diff", "desc": "Show unstaged changes"}}
}
"""

import json
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from gitx.output import print_warning
from gitx.table import DEFAULT_TABLE, LIST_ALIAS, GitAlias

# Valid configuration values
VALID_TAG_STYLES = {"code", "emoji"}

ENV_TAG_STYLE = 'GX_TAG_STYLE'


def _splits(command: str) -> bool:
    try:
        return bool(shlex.split(command))
    except ValueError:
        return False


@dataclass
class Config:
    """User configuration with sensible defaults."""
    tag_style: str = "code"  # "code" -> :bug:, "emoji" -> 🐛
    show_commands: bool = True
    aliases: dict = field(default_factory=dict)

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.tag_style not in VALID_TAG_STYLES:
            warnings.append(f"Invalid tag_style '{self.tag_style}', using '{defaults.tag_style}'")
            self.tag_style = defaults.tag_style

        if not isinstance(self.show_commands, bool):
            warnings.append(f"Invalid show_commands '{self.show_commands}', using {str(defaults.show_commands).lower()}")
            self.show_commands = defaults.show_commands

        if not isinstance(self.aliases, dict):
            warnings.append("Invalid aliases (expected an object), ignoring")
            self.aliases = {}

        for key in list(self.aliases):
            entry = self.aliases[key]
            if key == LIST_ALIAS or key in DEFAULT_TABLE.aliases:
                warnings.append(f"Alias '{key}' conflicts with a built-in alias, ignoring")
                del self.aliases[key]
            elif not isinstance(entry, dict) or not str(entry.get('cmd', '')).strip():
                warnings.append(f"Alias '{key}' has no 'cmd', ignoring")
                del self.aliases[key]
            elif not _splits(str(entry["cmd"])):
                warnings.append(f"Alias '{key}' has an unparseable cmd, ignoring")
                del self.aliases[key]

        return warnings

    @property
    def use_glyph(self) -> bool:
        return self.tag_style == "emoji"

    def extra_aliases(self) -> list[GitAlias]:
        return [
            GitAlias(key, str(entry['cmd']).strip(), str(entry.get('desc') or ''))
            for key, entry in self.aliases.items()
        ]

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print_warning(f"Config warning: {warning}")
        return config


class ConfigManager:
    """Manages loading configuration."""

    CONFIG_FILENAME = ".gxrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        home_path = Path.home() / self.CONFIG_FILENAME
        for path in (local_path, home_path):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                break
        else:
            self._config = Config()

        self._apply_env(self._config)
        return self._config

    def _apply_env(self, config: Config) -> None:
        tag_style = os.environ.get(ENV_TAG_STYLE)
        if not tag_style:
            return
        if tag_style in VALID_TAG_STYLES:
            config.tag_style = tag_style
        else:
            print_warning(f"Config warning: Invalid {ENV_TAG_STYLE} '{tag_style}', using '{config.tag_style}'")

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print_warning(f"Config warning: Could not load {path}: {e}")
            return Config()
        if not isinstance(data, dict):
            print_warning(f"Config warning: {path} must contain a JSON object")
            return Config()
        return Config.from_dict(data)

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "VALID_TAG_STYLES",
    "ENV_TAG_STYLE",
]
