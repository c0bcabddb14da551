"""Documentation index compressor."""

from .tree_builder import FileTreeNode, build_tree, extract_headings, extract_first_paragraph
from .prioritizer import prioritize
from .formatters import (
    IndexFormatter,
    BasicFormatter,
    SemanticFormatter,
    FORMATTERS,
    get_formatter,
    format_v1,
    format_v2,
)
from .release_notes import ReleaseNotes, DEFAULT_RELEASE_NOTES
from .size_enforcer import EnforcementResult, enforce, enforce_with_report
from .compressor import compress_index, get_compression_stats

__all__ = [
    "FileTreeNode",
    "build_tree",
    "extract_headings",
    "extract_first_paragraph",
    "prioritize",
    "IndexFormatter",
    "BasicFormatter",
    "SemanticFormatter",
    "FORMATTERS",
    "get_formatter",
    "format_v1",
    "format_v2",
    "ReleaseNotes",
    "DEFAULT_RELEASE_NOTES",
    "EnforcementResult",
    "enforce",
    "enforce_with_report",
    "compress_index",
    "get_compression_stats",
]
