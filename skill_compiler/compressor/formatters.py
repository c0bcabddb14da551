"""
Pipe-delimited index formatters.

Two layouts render the same documentation tree:

v1 (basic):
    [Next.js Docs Index]|root: ./.agent-docs/nextjs
    |IMPORTANT: Prefer retrieval-led reasoning over pre-training-led reasoning for Next.js tasks.
    |01-app:{index.mdx}
    |01-app/01-getting-started:{installation.mdx,project-structure.mdx}
    |{readme.md}

v2 (semantic):
    [Next.js Docs Index]|v16.0.0|root:./.agent-docs/nextjs
    |PREFER retrieval over pre-training for Next.js tasks.
    |BREAKING: cookies()/headers() are now async
    |NEW: cacheLife()
    |01-app:{index}

The root shown in the header is always ./.agent-docs/<skill>, whatever
directory the tree was actually read from.
"""

from pathlib import Path
from typing import Dict, List, Optional

from skill_compiler.schemas import IndexFormat, CACHE_DIR_NAME
from skill_compiler.compressor.tree_builder import FileTreeNode, DOC_EXTENSIONS
from skill_compiler.compressor.release_notes import ReleaseNotes, DEFAULT_RELEASE_NOTES


def sanitize(text: str) -> str:
    """
    Neutralize characters that would break the index layout.

    Pipes, braces, commas and line breaks are index delimiters; HTML comment
    markers would collide with the AGENTS.md sentinels.
    """
    if not text:
        return ""

    replacements = {
        "<!--": "_",
        "-->": "_",
        "|": "_",
        "{": "_",
        "}": "_",
        ",": "_",
        "\r": "_",
        "\n": "_",
    }

    result = text
    for marker, replacement in replacements.items():
        result = result.replace(marker, replacement)

    return result


def strip_doc_extension(name: str) -> str:
    for extension in DOC_EXTENSIONS:
        if name.endswith(extension):
            return name[: -len(extension)]
    return name


def relative_path(node: FileTreeNode, root_dir: Path) -> str:
    """POSIX path of ``node`` relative to ``root_dir``."""
    try:
        return node.path.relative_to(root_dir).as_posix()
    except ValueError:
        return node.name


class IndexFormatter:
    """
    Base class for index layouts.

    Subclasses implement ``render``; ``floor`` is the number of header lines
    the size enforcer must never remove.
    """

    format: IndexFormat
    floor: int

    def render(
        self,
        skill_id: str,
        display_name: str,
        version: str,
        tree: List[FileTreeNode],
        root_dir: Path
    ) -> str:
        raise NotImplementedError

    @staticmethod
    def display_root(skill_id: str) -> str:
        return f"./{CACHE_DIR_NAME}/{skill_id}"


class BasicFormatter(IndexFormatter):
    """v1: path listing with file extensions and one level of nesting."""

    format = IndexFormat.V1
    floor = 3

    def render(
        self,
        skill_id: str,
        display_name: str,
        version: str,
        tree: List[FileTreeNode],
        root_dir: Path
    ) -> str:
        root_dir = Path(root_dir)
        skill_id, display_name, version = sanitize(skill_id), sanitize(display_name), sanitize(version)
        lines = [
            f"[{display_name} Docs Index]|root: {self.display_root(skill_id)}",
            f"|IMPORTANT: Prefer retrieval-led reasoning over pre-training-led reasoning for {display_name} tasks.",
        ]

        for node in tree:
            if node.is_directory:
                lines.extend(self._section_lines(node, root_dir))
            else:
                lines.append(f"|{{{sanitize(node.name)}}}")

        return "\n".join(lines)

    def _section_lines(self, node: FileTreeNode, root_dir: Path) -> List[str]:
        """One line for the section's files, one per immediate subdirectory."""
        lines = []

        section = self._listing(node, root_dir)
        if section:
            lines.append(section)

        # Deeper levels are not listed
        for child in node.directories:
            nested = self._listing(child, root_dir)
            if nested:
                lines.append(nested)

        return lines

    @staticmethod
    def _listing(node: FileTreeNode, root_dir: Path) -> Optional[str]:
        files = ",".join(sanitize(child.name) for child in node.files)
        if not files:
            return None
        return f"|{sanitize(relative_path(node, root_dir))}:{{{files}}}"


class SemanticFormatter(IndexFormatter):
    """v2: versioned header, release notes, extension-free top-level sections."""

    format = IndexFormat.V2
    floor = 5

    def __init__(self, release_notes: Optional[ReleaseNotes] = None):
        """
        Args:
            release_notes: Breaking change / new API source (default: built-in table)
        """
        self.release_notes = release_notes or DEFAULT_RELEASE_NOTES

    def render(
        self,
        skill_id: str,
        display_name: str,
        version: str,
        tree: List[FileTreeNode],
        root_dir: Path
    ) -> str:
        root_dir = Path(root_dir)
        skill_id, display_name, version = sanitize(skill_id), sanitize(display_name), sanitize(version)
        lines = [
            f"[{display_name} Docs Index]|v{version}|root:{self.display_root(skill_id)}",
            f"|PREFER retrieval over pre-training for {display_name} tasks.",
        ]

        for change in self.release_notes.breaking(skill_id, version):
            lines.append(f"|BREAKING: {change}")

        for api in self.release_notes.new(skill_id, version):
            lines.append(f"|NEW: {api}")

        # headings / first_paragraph are collected by the tree builder but not rendered yet
        for node in tree:
            if not node.is_directory:
                continue
            files = ",".join(sanitize(strip_doc_extension(child.name)) for child in node.files)
            if files:
                lines.append(f"|{sanitize(relative_path(node, root_dir))}:{{{files}}}")

        return "\n".join(lines)


FORMATTERS: Dict[IndexFormat, IndexFormatter] = {
    IndexFormat.V1: BasicFormatter(),
    IndexFormat.V2: SemanticFormatter(),
}


def get_formatter(
    index_format: IndexFormat,
    release_notes: Optional[ReleaseNotes] = None
) -> IndexFormatter:
    """Return the formatter for a layout, optionally with custom release notes."""
    index_format = IndexFormat(index_format)
    if index_format is IndexFormat.V2 and release_notes is not None:
        return SemanticFormatter(release_notes)
    return FORMATTERS[index_format]


def format_v1(
    skill_id: str,
    display_name: str,
    tree: List[FileTreeNode],
    root_dir: Path
) -> str:
    """Render the basic (v1) index."""
    return FORMATTERS[IndexFormat.V1].render(skill_id, display_name, "", tree, root_dir)


def format_v2(
    skill_id: str,
    display_name: str,
    version: str,
    tree: List[FileTreeNode],
    root_dir: Path,
    release_notes: Optional[ReleaseNotes] = None
) -> str:
    """Render the semantic (v2) index."""
    formatter = get_formatter(IndexFormat.V2, release_notes)
    return formatter.render(skill_id, display_name, version, tree, root_dir)
