"""
skill-compiler - Compressed documentation indexes for coding agents.

Turns the documentation of the frameworks a project depends on into compact,
pipe-delimited indexes (about 8KB each) and keeps them in a managed section
of AGENTS.md so agents retrieve docs instead of relying on pre-training.

Main Components:
- Scanner: Detect frameworks from package.json, SKILL.md files and config files
- Fetcher: Download version-matched docs into .agent-docs/
- Compressor: Build, prioritize, format and size-limit the index
- Injector: Splice indexes into AGENTS.md
- Pipeline: Orchestrates the whole process

Usage:
    from pathlib import Path
    from skill_compiler import DetectedSkill, CompressionOptions, compress_index

    index = compress_index(
        DetectedSkill(name="nextjs", version="15.1.0", display_name="Next.js"),
        CompressionOptions(cwd=Path("."), format="v2"),
    )
"""

__version__ = "0.2.0"

from .schemas import (
    DetectedSkill,
    IndexFormat,
    CompressionOptions,
    CompressionStats,
    CacheMeta,
)
from .compressor import compress_index, get_compression_stats
from .pipeline import CompilePipeline, CompileResult

__all__ = [
    "DetectedSkill",
    "IndexFormat",
    "CompressionOptions",
    "CompressionStats",
    "CacheMeta",
    "compress_index",
    "get_compression_stats",
    "CompilePipeline",
    "CompileResult",
]
