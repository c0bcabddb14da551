"""
Compile pipeline - main orchestration logic.

Ties together scanning, fetching, compression and injection. Used by the
`compile` and `watch` CLI commands and callable programmatically.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
import logging

import requests

from skill_compiler.compressor import compress_index
from skill_compiler.config import SkillCompilerConfig, load_config
from skill_compiler.fetcher import fetch_docs
from skill_compiler.injector import inject_agents_md, render_managed_section, extract_managed_section
from skill_compiler.scanner import scan_project
from skill_compiler.schemas import CompressionOptions, DetectedSkill, IndexFormat

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Outcome of a compile run."""
    skills: List[DetectedSkill] = field(default_factory=list)
    indexes: List[str] = field(default_factory=list)
    out_path: Optional[Path] = None
    written: bool = False


class CompilePipeline:
    """
    Scan a project, fetch docs, compress indexes and inject AGENTS.md.

    Steps:
    1. Detect frameworks (plus configured custom skills)
    2. Fetch documentation into .agent-docs/
    3. Compress one index per skill (concurrently)
    4. Splice the indexes into the AGENTS.md managed section
    """

    def __init__(
        self,
        cwd: Path,
        config: Optional[SkillCompilerConfig] = None,
        out: Optional[str] = None,
        only: Optional[List[str]] = None,
        index_format: Optional[IndexFormat] = None,
        target_size: Optional[int] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the pipeline.

        Args:
            cwd: Project directory
            config: Project config (default: loaded from cwd)
            out: AGENTS.md path override
            only: Framework filter override
            index_format: Index layout override
            target_size: Byte budget override
            session: HTTP session for the fetcher
        """
        self.cwd = Path(cwd).resolve()
        self.config = config or load_config(self.cwd)
        self.out_path = self.cwd / (out or self.config.out)
        self.only = only or self.config.only
        self.index_format = IndexFormat(index_format or self.config.compression.format)
        self.target_size = target_size or self.config.compression.target_size
        self.session = session

    def detect(self) -> List[Tuple[DetectedSkill, CompressionOptions]]:
        """Detected and custom skills paired with their compression options."""
        skills = scan_project(self.cwd, only=self.only)
        excluded = set(self.config.exclude or [])

        planned = [
            (skill, self._options())
            for skill in skills
            if skill.name not in excluded
        ]

        for custom in self.config.custom_skills or []:
            if custom.name in excluded or (self.only and custom.name not in self.only):
                continue
            skill = DetectedSkill(name=custom.name, source="custom", display_name=custom.name)
            planned.append((skill, self._options(
                cache_dir=self.cwd / custom.path,
                priority=custom.priority or [],
            )))

        return planned

    def _options(self, **overrides) -> CompressionOptions:
        return CompressionOptions(
            format=self.index_format,
            target_size=self.target_size,
            cwd=self.cwd,
            **overrides,
        )

    def build_indexes(self, refresh: bool = False) -> CompileResult:
        """Detect, fetch and compress without writing AGENTS.md."""
        planned = self.detect()
        result = CompileResult(skills=[skill for skill, _ in planned], out_path=self.out_path)

        if not planned:
            logger.info("No frameworks detected")
            return result

        for skill, options in planned:
            if skill.source == "custom":
                continue
            logger.info(f"Fetching docs for {skill.name}@{skill.version}")
            fetch_docs(
                skill,
                self.cwd,
                refresh=refresh,
                ttl_hours=self.config.cache_ttl_hours,
                session=self.session,
            )

        logger.info("Compressing documentation indexes")
        with ThreadPoolExecutor() as executor:
            result.indexes = list(executor.map(
                lambda item: compress_index(item[0], item[1]),
                planned,
            ))

        return result

    def write(self, result: CompileResult) -> CompileResult:
        """Write built indexes into AGENTS.md (no-op when there are none)."""
        if result.indexes:
            inject_agents_md(self.out_path, result.indexes)
            result.written = True
        return result

    def run(self, refresh: bool = False) -> CompileResult:
        """Build indexes and write them into AGENTS.md."""
        return self.write(self.build_indexes(refresh=refresh))

    def is_up_to_date(self, result: CompileResult) -> bool:
        """Check whether AGENTS.md already holds exactly these indexes."""
        if not self.out_path.exists():
            return False
        current = extract_managed_section(self.out_path.read_text(encoding="utf-8"))
        expected = extract_managed_section(render_managed_section(result.indexes))
        return current == expected
