"""Shared fixtures for skill-compiler tests."""

from pathlib import Path
from typing import Dict

import pytest


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    """Create files (relative path -> content) under root."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def docs_root(tmp_path):
    """Factory writing a documentation tree under <tmp>/.agent-docs/<skill>."""
    def _make(skill: str, files: Dict[str, str]) -> Path:
        return write_tree(tmp_path / ".agent-docs" / skill, files)
    return _make
