# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Configuration management for bump-migrations."""

from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
import tomli
import tomlkit

from .stems import StemReplaceMode

DEFAULT_CONFIG_FILE = ".bump_migrations.toml"

DEFAULT_CONFIG_PATHS = [
    "bump_migrations.toml",
    DEFAULT_CONFIG_FILE,
]

PYPROJECT_SECTION = "bump-migrations"


class Settings(BaseModel):
    """Settings for bumping migrations."""
    model_config = ConfigDict(extra='forbid')

    extension: str = Field(
        default=".py",
        description="Migration file extension, stripped to build dependency references"
    )
    separator: str = Field(
        default="_",
        description="Character separating the sequence id from the rest of the filename"
    )
    stem_replace: StemReplaceMode = Field(
        default=StemReplaceMode.FIRST,
        description="How the id is replaced in the filename: 'first' occurrence or the 'prefix' segment"
    )
    strict_exit_code: bool = Field(
        default=True,
        description="Exit with status 1 when any migration fails to bump"
    )

    @field_validator('separator')
    @classmethod
    def separator_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("separator must not be empty")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Load settings from a dictionary."""
        return cls(**data)

    @classmethod
    def from_file(cls, config_path: str) -> "Settings":
        """Load settings from a TOML file.

        ``pyproject.toml`` files are read from their ``[tool.bump-migrations]``
        table; any other file is read as a whole.
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'rb') as f:
            data = tomli.load(f)

        if path.name == "pyproject.toml":
            data = data.get('tool', {}).get(PYPROJECT_SECTION, {})

        return cls.from_dict(data)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Copy of the settings with the non-None overrides applied."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return Settings(**values)


def _pyproject_has_section(path: Path) -> bool:
    try:
        with open(path, 'rb') as f:
            data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError):
        return False
    return PYPROJECT_SECTION in data.get('tool', {})


def load_config(config_path: Optional[str] = None, cwd: Optional[Path] = None) -> Settings:
    """Load settings from file or use defaults.

    Args:
        config_path: Path to config file (optional, will search default locations if not provided)
        cwd: Directory the default locations are relative to (defaults to the current directory)

    Returns:
        Settings object
    """
    if config_path:
        return Settings.from_file(config_path)

    base = Path(cwd) if cwd else Path.cwd()

    for default_path in DEFAULT_CONFIG_PATHS:
        if (base / default_path).exists():
            return Settings.from_file(str(base / default_path))

    pyproject = base / "pyproject.toml"
    if pyproject.exists() and _pyproject_has_section(pyproject):
        return Settings.from_file(str(pyproject))

    # No config file is fine, every setting has a default
    return Settings()


def render_config_template(settings: Optional[Settings] = None) -> str:
    """Render a commented config file for ``settings`` (defaults if omitted)."""
    settings = settings or Settings()

    doc = tomlkit.document()
    doc.add(tomlkit.comment("bump-migrations configuration"))
    doc.add(tomlkit.nl())

    doc.add(tomlkit.comment("Extension of migration files, removed to build the dependency reference"))
    doc.add("extension", settings.extension)
    doc.add(tomlkit.comment("Separator between the numeric id and the migration name"))
    doc.add("separator", settings.separator)
    doc.add(tomlkit.comment("'first': replace the first occurrence of the id in the filename"))
    doc.add(tomlkit.comment("'prefix': replace the leading id segment, keeping its zero padding"))
    doc.add("stem_replace", settings.stem_replace.value)
    doc.add(tomlkit.comment("Exit with status 1 when any migration fails to bump"))
    doc.add("strict_exit_code", settings.strict_exit_code)

    return tomlkit.dumps(doc)
