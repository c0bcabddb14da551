"""
AGENTS.md injector.

Writes compressed indexes into a managed section of AGENTS.md delimited by
sentinel comment lines. Content outside the section is preserved.
"""

from pathlib import Path
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

START_MARKER = "<!-- skill-compiler:start -->"
END_MARKER = "<!-- skill-compiler:end -->"


def render_managed_section(indexes: List[str]) -> str:
    """Wrap indexes (separated by blank lines) in the sentinel markers."""
    body = "\n\n".join(index.strip("\n") for index in indexes)
    return f"{START_MARKER}\n{body}\n{END_MARKER}"


def extract_managed_section(text: str) -> Optional[str]:
    """
    Return the body of the managed section, or None if absent.

    Args:
        text: AGENTS.md content

    Returns:
        Text between the markers without the surrounding newlines
    """
    start = text.find(START_MARKER)
    if start == -1:
        return None
    end = text.find(END_MARKER, start + len(START_MARKER))
    if end == -1:
        return None
    return text[start + len(START_MARKER):end].strip("\n")


def splice_managed_section(existing: str, indexes: List[str]) -> str:
    """
    Replace (or append) the managed section in ``existing``.

    An unterminated start marker is treated as running to the end of the file.
    """
    section = render_managed_section(indexes)

    start = existing.find(START_MARKER)
    if start == -1:
        if not existing.strip():
            return section + "\n"
        return existing.rstrip("\n") + "\n\n" + section + "\n"

    end = existing.find(END_MARKER, start + len(START_MARKER))
    tail = "" if end == -1 else existing[end + len(END_MARKER):]
    return existing[:start] + section + (tail if tail else "\n")


def inject_agents_md(out_path: Path, indexes: List[str]) -> str:
    """
    Write indexes into the managed section of an AGENTS.md file.

    Args:
        out_path: AGENTS.md location (created if missing)
        indexes: Compressed indexes, one per skill

    Returns:
        The full file content written
    """
    out_path = Path(out_path)
    existing = out_path.read_text(encoding="utf-8") if out_path.exists() else ""

    content = splice_managed_section(existing, indexes)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")

    logger.info(f"Wrote {len(indexes)} index(es) to {out_path}")
    return content


__all__ = [
    "START_MARKER",
    "END_MARKER",
    "render_managed_section",
    "extract_managed_section",
    "splice_managed_section",
    "inject_agents_md",
]
