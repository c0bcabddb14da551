"""
Pydantic schemas shared across skill-compiler subsystems.

Architecture:
- DetectedSkill: A framework or skill discovered in a project
- IndexFormat: Which index layout to render (v1 basic, v2 semantic)
- CompressionOptions: Per-call compression settings (with DetectedSkill, the compression request)
- CompressionStats: Size comparison between raw docs and the rendered index
- CacheMeta: Metadata written next to fetched documentation
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Literal

from pydantic import BaseModel, Field


DEFAULT_TARGET_SIZE = 8192
CACHE_DIR_NAME = ".agent-docs"


# ============================================================================
# DETECTION SCHEMAS
# ============================================================================

class DetectedSkill(BaseModel):
    """
    A framework or skill detected in a project.

    Produced by the scanner (package.json, SKILL.md frontmatter, config files)
    or by custom skill registration, and consumed by the fetcher and compressor.
    """
    name: str = Field(description="Skill identifier (e.g., 'nextjs')")
    version: str = Field(default="latest", description="Semantic version string or 'latest'")
    source: Literal["package", "skill", "config", "custom"] = Field(
        default="package",
        description="Where the skill was detected"
    )
    display_name: Optional[str] = Field(None, description="Human-readable name (e.g., 'Next.js')")
    doc_registry: Optional[str] = Field(None, description="Documentation source declared by a SKILL.md")

    @property
    def label(self) -> str:
        """Display name, falling back to the identifier."""
        return self.display_name or self.name

    class Config:
        json_schema_extra = {
            "example": {
                "name": "nextjs",
                "version": "14.0.0",
                "source": "package",
                "display_name": "Next.js",
                "doc_registry": None
            }
        }


# ============================================================================
# COMPRESSION SCHEMAS
# ============================================================================

class IndexFormat(str, Enum):
    """Index layout variants."""
    V1 = "v1"
    V2 = "v2"


class CompressionOptions(BaseModel):
    """
    Settings for a single compression call.

    The working directory is always explicit; nothing inside the compressor
    consults the process working directory.
    """
    format: IndexFormat = Field(default=IndexFormat.V1, description="Index layout variant")
    target_size: int = Field(
        default=DEFAULT_TARGET_SIZE,
        gt=0,
        description="Target byte budget for the rendered index"
    )
    cwd: Path = Field(..., description="Project directory holding .agent-docs/")
    cache_dir: Optional[Path] = Field(
        None,
        description="Explicit cache root (default: <cwd>/.agent-docs/<skill>)"
    )
    priority: Optional[List[str]] = Field(
        None,
        description="Priority terms overriding the registry's list"
    )

    def resolve_cache_dir(self, skill_name: str) -> Path:
        """Return the cache root for a skill."""
        if self.cache_dir is not None:
            return Path(self.cache_dir)
        return Path(self.cwd) / CACHE_DIR_NAME / skill_name


class CompressionStats(BaseModel):
    """Raw documentation size versus rendered index size."""
    original_size: int = Field(ge=0, description="Sum of raw file sizes in bytes")
    compressed_size: int = Field(ge=0, description="UTF-8 byte length of the index")
    reduction_percent: int = Field(ge=0, le=100, description="Size reduction (0-100)")

    class Config:
        json_schema_extra = {
            "example": {
                "original_size": 2450000,
                "compressed_size": 7900,
                "reduction_percent": 100
            }
        }


# ============================================================================
# FETCHER SCHEMAS
# ============================================================================

class CacheMeta(BaseModel):
    """Metadata stored in <cache>/.cache-meta.json after a fetch."""
    skill: str = Field(description="Skill identifier")
    version: str = Field(description="Version the docs were fetched for")
    branch: str = Field(description="Git ref the docs were fetched from")
    fetched_at: float = Field(description="Unix timestamp (seconds) of the fetch")
    file_count: int = Field(default=0, description="Number of documentation files written")
