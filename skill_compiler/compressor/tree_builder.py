"""
Documentation tree builder.

Walks a cached documentation directory and produces an ordered tree of
directory/file nodes. Only Markdown and MDX files are kept, dotfiles (including
cache metadata) are skipped, and directories without any qualifying descendant
are pruned. Optionally annotates file nodes with their leading headings and
first paragraph.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

DOC_EXTENSIONS = (".md", ".mdx")
MAX_HEADINGS = 5
MAX_PARAGRAPH_CHARS = 150


@dataclass
class FileTreeNode:
    """One filesystem entry under a documentation cache root."""
    path: Path
    name: str
    is_directory: bool
    children: List["FileTreeNode"] = field(default_factory=list)
    headings: Optional[List[str]] = None
    first_paragraph: Optional[str] = None

    @property
    def files(self) -> List["FileTreeNode"]:
        """Immediate file children."""
        return [child for child in self.children if not child.is_directory]

    @property
    def directories(self) -> List["FileTreeNode"]:
        """Immediate directory children."""
        return [child for child in self.children if child.is_directory]


def is_doc_file(name: str) -> bool:
    return name.endswith(DOC_EXTENSIONS)


def build_tree(root_dir: Path, extract_content: bool = False) -> List[FileTreeNode]:
    """
    Build the documentation tree under ``root_dir``.

    Entries are visited in name order so the tree (and everything rendered
    from it) is identical across platforms. A missing or unreadable directory
    yields an empty list.

    Args:
        root_dir: Cache root to walk
        extract_content: Read each file and record headings / first paragraph

    Returns:
        Top-level nodes in listing order
    """
    root_dir = Path(root_dir)

    try:
        entries = sorted(root_dir.iterdir(), key=lambda item: item.name)
    except FileNotFoundError:
        logger.debug(f"Documentation directory does not exist: {root_dir}")
        return []
    except OSError as e:
        logger.warning(f"Cannot read documentation directory {root_dir}: {e}")
        return []

    nodes: List[FileTreeNode] = []

    for entry in entries:
        # Skip hidden files and cache metadata
        if entry.name.startswith("."):
            continue

        if entry.is_dir():
            children = build_tree(entry, extract_content)
            if children:
                nodes.append(FileTreeNode(
                    path=entry,
                    name=entry.name,
                    is_directory=True,
                    children=children,
                ))
        elif is_doc_file(entry.name):
            node = FileTreeNode(path=entry, name=entry.name, is_directory=False)
            if extract_content:
                _annotate(node)
            nodes.append(node)

    return nodes


def _annotate(node: FileTreeNode) -> None:
    """Attach headings and first paragraph; unreadable files stay unannotated."""
    try:
        content = node.path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Skipping content extraction for {node.path}: {e}")
        return

    headings = extract_headings(content)
    if headings:
        node.headings = headings
    node.first_paragraph = extract_first_paragraph(content)


def extract_headings(content: str) -> List[str]:
    """
    Collect top-level and second-level Markdown headings in document order.

    Args:
        content: Markdown/MDX source

    Returns:
        Up to five trimmed heading strings
    """
    headings: List[str] = []

    for line in content.splitlines():
        if line.startswith("# ") or line.startswith("## "):
            text = line.lstrip("#").strip()
            if text:
                headings.append(text)
            if len(headings) >= MAX_HEADINGS:
                break

    return headings


def extract_first_paragraph(content: str) -> Optional[str]:
    """
    Return the first run of prose lines, joined with spaces.

    A leading frontmatter block, stray ``---`` rules, headings, code fence
    markers and MDX import statements are skipped. Paragraphs longer than 150 characters are cut to
    147 characters plus an ellipsis.
    """
    paragraph = ""
    lines = content.splitlines()

    # Leading frontmatter block is metadata, not prose
    if lines and lines[0].strip() == "---":
        for index in range(1, len(lines)):
            if lines[index].strip() == "---":
                lines = lines[index + 1:]
                break

    for raw_line in lines:
        line = raw_line.strip()

        if not line:
            if paragraph:
                break
            continue

        if (
            line.startswith("---")
            or line.startswith("#")
            or line.startswith("```")
            or line.startswith("import ")
        ):
            continue

        paragraph = f"{paragraph} {line}" if paragraph else line

        if len(paragraph) > MAX_PARAGRAPH_CHARS:
            return paragraph[:MAX_PARAGRAPH_CHARS - 3] + "..."

    return paragraph or None
