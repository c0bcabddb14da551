"""
Index compressor - main orchestration logic.

Ties together the tree builder, prioritizer, formatters and size enforcer:

1. Build the documentation tree from the skill's cache root
2. Reorder top-level sections by priority terms
3. Render the index in the requested layout
4. Enforce the byte budget
"""

from pathlib import Path
from typing import Optional
import logging
import math
import os

from skill_compiler.schemas import DetectedSkill, CompressionOptions, CompressionStats, IndexFormat
from skill_compiler.registries import get_registry
from skill_compiler.compressor.tree_builder import build_tree
from skill_compiler.compressor.prioritizer import prioritize
from skill_compiler.compressor.formatters import get_formatter
from skill_compiler.compressor.release_notes import ReleaseNotes
from skill_compiler.compressor.size_enforcer import enforce_with_report, byte_size

logger = logging.getLogger(__name__)


def compress_index(
    skill: DetectedSkill,
    options: CompressionOptions,
    release_notes: Optional[ReleaseNotes] = None
) -> str:
    """
    Compress a skill's cached documentation into an index string.

    Missing or empty documentation is not an error: the result is then just
    the header lines.

    Args:
        skill: Detected skill (identifier, version, display name)
        options: Compression settings, including the project directory
        release_notes: Breaking change / new API source for v2

    Returns:
        Rendered, size-enforced index
    """
    cache_dir = options.resolve_cache_dir(skill.name)
    registry = get_registry(skill.name)

    display_name = skill.display_name or (registry.display_name if registry else skill.name)
    if options.priority is not None:
        priority = options.priority
    else:
        priority = registry.priority if registry else []

    index_format = IndexFormat(options.format)
    formatter = get_formatter(index_format, release_notes)

    tree = build_tree(cache_dir, extract_content=index_format is IndexFormat.V2)
    ordered = prioritize(tree, priority)

    index = formatter.render(skill.name, display_name, skill.version, ordered, cache_dir)
    result = enforce_with_report(index, options.target_size, formatter.floor)

    logger.info(
        f"Compressed {skill.name} ({index_format.value}): "
        f"{len(tree)} top-level entries, {byte_size(result.text)} bytes"
    )
    if result.passes_applied:
        logger.debug(f"Passes applied for {skill.name}: {', '.join(result.passes_applied)}")

    return result.text


def directory_size(directory: Path) -> int:
    """Sum of all file sizes under ``directory`` (0 if it does not exist)."""
    total = 0
    for dirpath, _dirnames, filenames in os.walk(directory):
        for filename in filenames:
            try:
                total += (Path(dirpath) / filename).stat().st_size
            except OSError as e:
                logger.debug(f"Cannot stat {filename} in {dirpath}: {e}")
    return total


def reduction_percent(original_size: int, compressed_size: int) -> int:
    """Percentage saved, rounded half up and clamped to 0-100."""
    if original_size <= 0:
        return 0
    percent = math.floor((1 - compressed_size / original_size) * 100 + 0.5)
    return max(0, min(100, percent))


def get_compression_stats(
    skill: DetectedSkill,
    options: CompressionOptions,
    release_notes: Optional[ReleaseNotes] = None
) -> CompressionStats:
    """
    Compare the raw documentation size with the compressed index size.

    Args:
        skill: Detected skill
        options: Compression settings
        release_notes: Breaking change / new API source for v2

    Returns:
        CompressionStats
    """
    cache_dir = options.resolve_cache_dir(skill.name)

    original_size = directory_size(cache_dir)
    compressed_size = byte_size(compress_index(skill, options, release_notes))

    return CompressionStats(
        original_size=original_size,
        compressed_size=compressed_size,
        reduction_percent=reduction_percent(original_size, compressed_size),
    )
