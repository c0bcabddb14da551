"""
Custom skill management.

Copies a local documentation tree into .agent-docs/custom/<name> and records
it in .skill-compiler.json so it is compiled alongside detected frameworks.
"""

import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
import logging

from skill_compiler.errors import CustomSkillError
from skill_compiler.schemas import CACHE_DIR_NAME
from skill_compiler.config.manager import CustomSkillConfig, load_config, save_config

logger = logging.getLogger(__name__)

CUSTOM_SKILLS_DIR = f"{CACHE_DIR_NAME}/custom"


@dataclass
class AddSkillResult:
    """Outcome of registering a custom skill."""
    name: str
    path: Path
    file_count: int


def skill_name_from_path(source: str) -> str:
    """Derive a skill identifier from a directory name ('My Docs' -> 'my-docs')."""
    return re.sub(r"[^a-z0-9-]", "-", Path(source).name, flags=re.IGNORECASE).lower()


def add_custom_skill(
    cwd: Path,
    source: str,
    name: Optional[str] = None,
    priority: Optional[List[str]] = None
) -> AddSkillResult:
    """
    Register a local documentation directory as a custom skill.

    Args:
        cwd: Project directory
        source: Documentation directory (relative to ``cwd`` or absolute)
        name: Skill identifier (default: derived from the directory name)
        priority: Optional priority terms

    Returns:
        AddSkillResult with the destination and Markdown file count

    Raises:
        CustomSkillError: If the source directory does not exist
    """
    cwd = Path(cwd)
    source_path = cwd / source
    if not source_path.is_dir():
        raise CustomSkillError(f"Source path not found: {source}")

    name = name or skill_name_from_path(source)

    doc_files = [
        path for path in source_path.rglob("*")
        if path.is_file() and path.suffix in (".md", ".mdx")
    ]
    if not doc_files:
        logger.warning(f"No markdown files found in {source}")

    dest_path = cwd / CUSTOM_SKILLS_DIR / name
    if dest_path.exists():
        shutil.rmtree(dest_path)
    shutil.copytree(source_path, dest_path)

    config = load_config(cwd)
    custom_skills = [skill for skill in (config.custom_skills or []) if skill.name != name]
    custom_skills.append(CustomSkillConfig(
        name=name,
        path=f"{CUSTOM_SKILLS_DIR}/{name}",
        priority=priority or None,
    ))
    config.custom_skills = custom_skills
    save_config(cwd, config)

    logger.info(f"Added custom skill '{name}' ({len(doc_files)} files)")

    return AddSkillResult(name=name, path=dest_path, file_count=len(doc_files))


def list_custom_skills(cwd: Path) -> List[CustomSkillConfig]:
    """Return the custom skills recorded in the project config."""
    return load_config(cwd).custom_skills or []


def get_custom_skill(cwd: Path, name: str) -> Optional[CustomSkillConfig]:
    """Look up a custom skill by name."""
    for skill in list_custom_skills(cwd):
        if skill.name == name:
            return skill
    return None


def remove_custom_skill(cwd: Path, name: str) -> bool:
    """
    Remove a custom skill and its copied files.

    Returns:
        True if the skill existed
    """
    cwd = Path(cwd)
    config = load_config(cwd)
    custom_skills = config.custom_skills or []

    skill = next((s for s in custom_skills if s.name == name), None)
    if skill is None:
        return False

    config.custom_skills = [s for s in custom_skills if s.name != name]
    save_config(cwd, config)

    skill_path = cwd / skill.path
    if skill_path.exists():
        shutil.rmtree(skill_path)

    logger.info(f"Removed custom skill '{name}'")
    return True
