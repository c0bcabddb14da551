"""Configuration management for the .skill-compiler.json project file.

Values in the file are merged over the defaults; the nested compression
block is merged key by key so a partial block keeps the other defaults.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from pydantic import BaseModel, Field, ValidationError

from skill_compiler.errors import ConfigError
from skill_compiler.schemas import IndexFormat, DEFAULT_TARGET_SIZE

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".skill-compiler.json"
DEFAULT_OUT = "./AGENTS.md"
DEFAULT_CACHE_TTL_HOURS = 168


class CustomSkillConfig(BaseModel):
    """A user-supplied documentation tree registered as a skill."""
    name: str = Field(description="Skill identifier")
    path: str = Field(description="Docs location relative to the project root")
    priority: Optional[List[str]] = Field(None, description="Priority terms for this skill")


class CompressionConfig(BaseModel):
    """Compression settings."""
    target_size: int = Field(default=DEFAULT_TARGET_SIZE, gt=0, alias="targetSize")
    format: IndexFormat = Field(default=IndexFormat.V1)

    class Config:
        populate_by_name = True


class SkillCompilerConfig(BaseModel):
    """
    Contents of .skill-compiler.json.

    ``conflicts`` is read and written back unchanged so hand-written rules
    survive saves; nothing acts on it yet.
    """
    out: str = Field(default=DEFAULT_OUT, description="Output path for AGENTS.md")
    only: Optional[List[str]] = Field(None, description="Only process these frameworks")
    exclude: Optional[List[str]] = Field(None, description="Skip these frameworks")
    custom_skills: Optional[List[CustomSkillConfig]] = Field(None, alias="customSkills")
    compression: CompressionConfig = Field(default_factory=CompressionConfig)
    conflicts: Optional[Dict[str, str]] = Field(
        None,
        description="Conflict rules, e.g. {'hooks/*': 'prefer:react'}"
    )
    cache_ttl_hours: int = Field(default=DEFAULT_CACHE_TTL_HOURS, gt=0, alias="cacheTtlHours")

    class Config:
        populate_by_name = True

    def to_json(self) -> str:
        """Serialize with the camelCase keys used on disk."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def get_config_path(cwd: Path) -> Path:
    """Return the config file path for a project."""
    return Path(cwd) / CONFIG_FILENAME


def config_exists(cwd: Path) -> bool:
    """Check whether a project has a config file."""
    return get_config_path(cwd).exists()


def merge_config(user_config: Dict[str, Any]) -> SkillCompilerConfig:
    """
    Merge raw user values over the defaults.

    Args:
        user_config: Parsed JSON object

    Returns:
        Validated SkillCompilerConfig
    """
    defaults = SkillCompilerConfig().model_dump(by_alias=True)
    merged = {**defaults, **user_config}
    merged["compression"] = {
        **defaults["compression"],
        **(user_config.get("compression") or {}),
    }
    return SkillCompilerConfig.model_validate(merged)


def load_config(cwd: Path) -> SkillCompilerConfig:
    """
    Load .skill-compiler.json from a project directory.

    Missing files yield the defaults; unreadable or invalid files are reported
    and also yield the defaults.

    Args:
        cwd: Project directory

    Returns:
        SkillCompilerConfig
    """
    config_path = get_config_path(cwd)

    if not config_path.exists():
        return SkillCompilerConfig()

    try:
        user_config = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(user_config, dict):
            raise ValueError("top-level value must be an object")
        return merge_config(user_config)
    except (json.JSONDecodeError, ValidationError, ValueError, OSError) as e:
        logger.warning(f"Could not parse {CONFIG_FILENAME}, using defaults: {e}")
        return SkillCompilerConfig()


def save_config(cwd: Path, config: SkillCompilerConfig) -> Path:
    """
    Write the config file.

    Args:
        cwd: Project directory
        config: Configuration to save

    Returns:
        Path of the written file
    """
    config_path = get_config_path(cwd)
    try:
        config_path.write_text(config.to_json() + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot write {config_path}: {e}") from e

    logger.debug(f"Saved config to {config_path}")
    return config_path


def create_initial_config(
    out: Optional[str] = None,
    frameworks: Optional[List[str]] = None
) -> SkillCompilerConfig:
    """
    Create a fresh config with defaults.

    Args:
        out: Output path for AGENTS.md
        frameworks: Restrict processing to these frameworks

    Returns:
        SkillCompilerConfig
    """
    config = SkillCompilerConfig()

    if out:
        config.out = out

    if frameworks:
        config.only = list(frameworks)

    return config
