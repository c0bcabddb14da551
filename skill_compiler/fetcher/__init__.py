"""
Documentation fetcher.

Downloads version-matched documentation for a framework into
<cwd>/.agent-docs/<skill>/ and records when it was fetched in
.cache-meta.json. Only the Markdown/MDX files under the registry's docs path
are downloaded, narrowed by the registry's include and exclude globs.
"""

import os
import time
from concurrent.futures import ThreadPoolExecutor
from fnmatch import fnmatch
from pathlib import Path
from typing import Dict, List, Optional
import logging

import requests
from dotenv import load_dotenv, find_dotenv

from skill_compiler.errors import FetchError
from skill_compiler.registries import FrameworkRegistry, get_registry
from skill_compiler.schemas import DetectedSkill, CacheMeta, CACHE_DIR_NAME

load_dotenv(find_dotenv(usecwd=True))

logger = logging.getLogger(__name__)

CACHE_META_FILENAME = ".cache-meta.json"
DEFAULT_TTL_HOURS = 168
PRERELEASE_TTL_HOURS = 24
BATCH_SIZE = 10
REQUEST_TIMEOUT = 30

GITHUB_API = "https://api.github.com"
GITHUB_RAW = "https://raw.githubusercontent.com"


def get_cache_dir(skill: DetectedSkill, cwd: Path) -> Path:
    return Path(cwd) / CACHE_DIR_NAME / skill.name


def read_cache_meta(cache_dir: Path) -> Optional[CacheMeta]:
    """Load cache metadata, or None when missing or corrupted."""
    meta_path = Path(cache_dir) / CACHE_META_FILENAME
    if not meta_path.exists():
        return None
    try:
        return CacheMeta.model_validate_json(meta_path.read_text(encoding="utf-8"))
    except (ValueError, OSError) as e:
        logger.debug(f"Ignoring unreadable cache metadata {meta_path}: {e}")
        return None


def cache_ttl_seconds(version: str, ttl_hours: int = DEFAULT_TTL_HOURS) -> float:
    """Pre-release (canary/beta) docs expire after a day."""
    if "canary" in version or "beta" in version:
        return PRERELEASE_TTL_HOURS * 3600
    return ttl_hours * 3600


def is_cache_valid(
    skill: DetectedSkill,
    cwd: Path,
    ttl_hours: int = DEFAULT_TTL_HOURS,
    now: Optional[float] = None
) -> bool:
    """Check whether cached docs for a skill are still fresh."""
    meta = read_cache_meta(get_cache_dir(skill, cwd))
    if meta is None:
        return False
    now = time.time() if now is None else now
    return now - meta.fetched_at < cache_ttl_seconds(skill.version, ttl_hours)


def get_version_branch(version: str, version_mapping: Dict[str, str]) -> str:
    """
    Pick the git ref holding docs for a version.

    Tries an exact version key, then the major version, then the first
    mapping entry, and finally 'main'.
    """
    if not version_mapping:
        return "main"

    if version in version_mapping:
        return version_mapping[version]

    major = version.split(".")[0]
    if major in version_mapping:
        return version_mapping[major]

    return next(iter(version_mapping.values()), "main")


def _github_headers() -> Dict[str, str]:
    headers = {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": "skill-compiler",
    }
    token = os.getenv("GITHUB_TOKEN")
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def list_github_docs(
    session: requests.Session,
    repo: str,
    branch: str,
    docs_path: str
) -> List[str]:
    """
    List Markdown/MDX blob paths under ``docs_path`` via the git trees API.

    Raises:
        FetchError: If the listing request fails
    """
    url = f"{GITHUB_API}/repos/{repo}/git/trees/{branch}?recursive=1"
    try:
        response = session.get(url, headers=_github_headers(), timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise FetchError(f"GitHub API request failed for {repo}@{branch}: {e}") from e

    if response.status_code != 200:
        raise FetchError(f"GitHub API error: {response.status_code} {response.reason}")

    prefix = docs_path.rstrip("/") + "/"
    return [
        item["path"]
        for item in response.json().get("tree", [])
        if item.get("type") == "blob"
        and item["path"].startswith(prefix)
        and item["path"].endswith((".md", ".mdx"))
    ]


def _glob_match(path: str, pattern: str) -> bool:
    # A leading "**/" also matches at the top level
    if fnmatch(path, pattern):
        return True
    return pattern.startswith("**/") and fnmatch(path, pattern[3:])


def select_docs(
    paths: List[str],
    includes: List[str],
    excludes: List[str]
) -> List[str]:
    """
    Keep paths matching any include glob (all paths when there are none) and
    no exclude glob. Paths and globs are relative to the docs path.
    """
    return [
        path for path in paths
        if (not includes or any(_glob_match(path, pattern) for pattern in includes))
        and not any(_glob_match(path, pattern) for pattern in excludes)
    ]


def _download_file(
    session: requests.Session,
    repo: str,
    branch: str,
    remote_path: str,
    local_path: Path
) -> bool:
    url = f"{GITHUB_RAW}/{repo}/{branch}/{remote_path}"
    try:
        response = session.get(url, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.warning(f"Failed to download {remote_path}: {e}")
        return False

    if response.status_code != 200:
        logger.warning(f"Failed to download {remote_path}: HTTP {response.status_code}")
        return False

    local_path.parent.mkdir(parents=True, exist_ok=True)
    local_path.write_text(response.text, encoding="utf-8")
    return True


def fetch_from_github(
    registry: FrameworkRegistry,
    branch: str,
    cache_dir: Path,
    session: requests.Session
) -> int:
    """
    Download a registry's docs from GitHub into ``cache_dir``.

    Files are fetched in batches of ten. Individual download failures are
    logged and skipped.

    Returns:
        Number of files written
    """
    repo = registry.doc_source.repo
    if not repo:
        raise FetchError(f"GitHub repo not specified for {registry.name}")
    docs_path = registry.doc_source.path or "docs"

    prefix = docs_path.rstrip("/") + "/"
    listed = list_github_docs(session, repo, branch, docs_path)
    selected = select_docs(
        [remote[len(prefix):] for remote in listed],
        registry.includes,
        registry.excludes,
    )
    remote_files = [prefix + relative for relative in selected]
    logger.info(f"Fetching {len(remote_files)} files for {registry.name} from {repo}@{branch}")

    cache_dir.mkdir(parents=True, exist_ok=True)
    written = 0

    with ThreadPoolExecutor(max_workers=BATCH_SIZE) as executor:
        for start in range(0, len(remote_files), BATCH_SIZE):
            batch = remote_files[start:start + BATCH_SIZE]
            results = executor.map(
                lambda remote: _download_file(
                    session, repo, branch, remote, cache_dir / remote[len(prefix):]
                ),
                batch,
            )
            written += sum(1 for ok in results if ok)

    return written


def fetch_docs(
    skill: DetectedSkill,
    cwd: Path,
    refresh: bool = False,
    ttl_hours: int = DEFAULT_TTL_HOURS,
    session: Optional[requests.Session] = None
) -> Path:
    """
    Ensure documentation for a skill is cached locally.

    Args:
        skill: Detected skill
        cwd: Project directory
        refresh: Ignore a still-valid cache
        ttl_hours: Cache lifetime for stable versions
        session: HTTP session (default: a new requests.Session)

    Returns:
        Cache directory for the skill

    Raises:
        FetchError: If the documentation source cannot be listed
    """
    cache_dir = get_cache_dir(skill, cwd)

    if not refresh and is_cache_valid(skill, cwd, ttl_hours):
        logger.debug(f"Using cached docs for {skill.name}")
        return cache_dir

    registry = get_registry(skill.name)
    if registry is None:
        # Custom skills: docs are expected to be in place already
        logger.debug(f"No registry for {skill.name}, using {cache_dir} as-is")
        return cache_dir

    branch = get_version_branch(skill.version, registry.version_mapping)
    source_type = registry.doc_source.type
    file_count = 0

    if source_type == "github":
        owns_session = session is None
        session = session or requests.Session()
        try:
            file_count = fetch_from_github(registry, branch, cache_dir, session)
        finally:
            if owns_session:
                session.close()
    elif source_type == "url":
        # TODO: download and unpack archives from doc_source.url
        cache_dir.mkdir(parents=True, exist_ok=True)
    else:
        raise FetchError(f"Unsupported doc source type: {source_type}")

    cache_dir.mkdir(parents=True, exist_ok=True)
    meta = CacheMeta(
        skill=skill.name,
        version=skill.version,
        branch=branch,
        fetched_at=time.time(),
        file_count=file_count,
    )
    (cache_dir / CACHE_META_FILENAME).write_text(meta.model_dump_json(indent=2), encoding="utf-8")

    return cache_dir


__all__ = [
    "CACHE_META_FILENAME",
    "fetch_docs",
    "fetch_from_github",
    "list_github_docs",
    "get_version_branch",
    "is_cache_valid",
    "read_cache_meta",
    "get_cache_dir",
]
