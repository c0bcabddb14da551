"""
Project scanner.

Detects frameworks and skills used by a project from three sources:
- package.json dependencies and devDependencies
- .agent/skills/*/SKILL.md YAML frontmatter
- framework config files (next.config.*, tailwind.config.*, ...)
"""

import json
import re
from pathlib import Path
from typing import Dict, List, Optional
import logging

import yaml

from skill_compiler.registries import REGISTRIES
from skill_compiler.schemas import DetectedSkill

logger = logging.getLogger(__name__)

SKILLS_DIR = Path(".agent") / "skills"
_FRONTMATTER_PATTERN = re.compile(r"^---\r?\n(.*?)\r?\n---", re.DOTALL)


def scan_project(cwd: Path, only: Optional[List[str]] = None) -> List[DetectedSkill]:
    """
    Scan a project directory for frameworks and skills.

    Skills found in several places are reported once, preferring the
    package.json entry since it carries a real version.

    Args:
        cwd: Project directory
        only: Restrict results to these skill identifiers

    Returns:
        Detected skills in discovery order
    """
    cwd = Path(cwd)
    detected: List[DetectedSkill] = []

    package_json = cwd / "package.json"
    if package_json.exists():
        detected.extend(scan_package_json(package_json))

    skills_dir = cwd / SKILLS_DIR
    if skills_dir.is_dir():
        detected.extend(scan_skills_directory(skills_dir))

    detected.extend(scan_config_files(cwd))

    unique: Dict[str, DetectedSkill] = {}
    for skill in detected:
        existing = unique.get(skill.name)
        if existing is None or (skill.source == "package" and existing.source != "package"):
            unique[skill.name] = skill

    skills = list(unique.values())

    if only:
        skills = [skill for skill in skills if skill.name in only]

    logger.info(f"Detected {len(skills)} skill(s): {', '.join(s.name for s in skills) or 'none'}")
    return skills


def scan_package_json(package_json_path: Path) -> List[DetectedSkill]:
    """Match package.json dependencies against registry package names."""
    try:
        package = json.loads(Path(package_json_path).read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not parse {package_json_path}: {e}")
        return []

    all_deps = {
        **(package.get("dependencies") or {}),
        **(package.get("devDependencies") or {}),
    }

    detected = []
    for registry in REGISTRIES:
        for package_name in registry.package_match:
            if package_name in all_deps:
                version = re.sub(r"^[\^~]", "", str(all_deps[package_name]))
                detected.append(DetectedSkill(
                    name=registry.name,
                    version=version,
                    source="package",
                    display_name=registry.display_name,
                ))
                # Only detect once per registry
                break

    return detected


def parse_frontmatter(content: str) -> Optional[dict]:
    """Return the YAML frontmatter of a Markdown document, if any."""
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        return None

    data = yaml.safe_load(match.group(1))
    return data if isinstance(data, dict) else None


def scan_skills_directory(skills_dir: Path) -> List[DetectedSkill]:
    """Read skill definitions from <skills_dir>/*/SKILL.md."""
    detected = []

    for skill_file in sorted(Path(skills_dir).glob("*/SKILL.md")):
        try:
            frontmatter = parse_frontmatter(skill_file.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Skipping {skill_file}: {e}")
            continue

        if not frontmatter or not frontmatter.get("name"):
            logger.debug(f"No skill name in {skill_file}")
            continue

        name = str(frontmatter["name"])
        detected.append(DetectedSkill(
            name=name,
            version=str(frontmatter.get("version") or "latest"),
            source="skill",
            display_name=str(frontmatter.get("displayName") or name),
            doc_registry=str(frontmatter["docSource"]) if frontmatter.get("docSource") else None,
        ))

    return detected


def scan_config_files(cwd: Path) -> List[DetectedSkill]:
    """Detect frameworks by their config files (versions are unknown)."""
    detected = []

    for registry in REGISTRIES:
        for pattern in registry.config_match:
            if any(Path(cwd).glob(pattern)):
                detected.append(DetectedSkill(
                    name=registry.name,
                    version="latest",
                    source="config",
                    display_name=registry.display_name,
                ))
                break

    return detected


__all__ = [
    "scan_project",
    "scan_package_json",
    "scan_skills_directory",
    "scan_config_files",
    "parse_frontmatter",
]
