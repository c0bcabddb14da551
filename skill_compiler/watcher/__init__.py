"""Poll-based dependency watcher.

Computes a digest over stat metadata of package manifests, lockfiles and
skill definitions. The watch loop compares digests between polls and runs
the update callback once a change has settled.
"""

import hashlib
import time
from pathlib import Path
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)

WATCHED_FILES = [
    "package.json",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
]
WATCHED_GLOBS = [".agent/skills/**/*.md"]

DEFAULT_INTERVAL = 1.0
DEFAULT_DEBOUNCE = 1.0


def _update_digest(digest, token: str) -> None:
    digest.update(token.encode("utf-8", errors="surrogateescape"))
    digest.update(b"\0")


def _stat_signature(path: Path) -> str:
    try:
        st = path.stat()
    except FileNotFoundError:
        return "missing"
    except OSError:
        return "error"
    return f"{st.st_mtime_ns}:{st.st_size}"


def watched_paths(cwd: Path) -> List[Path]:
    """Files whose changes trigger an update."""
    cwd = Path(cwd)
    paths = [cwd / name for name in WATCHED_FILES]
    for pattern in WATCHED_GLOBS:
        paths.extend(sorted(cwd.glob(pattern)))
    return paths


def build_watch_signature(cwd: Path) -> str:
    """Digest of the watched files' existence, mtime and size."""
    digest = hashlib.sha256()
    cwd = Path(cwd)
    for path in watched_paths(cwd):
        _update_digest(digest, path.relative_to(cwd).as_posix())
        _update_digest(digest, _stat_signature(path))
    return digest.hexdigest()


def watch_project(
    cwd: Path,
    on_change: Callable[[], None],
    interval: float = DEFAULT_INTERVAL,
    debounce: float = DEFAULT_DEBOUNCE,
    max_iterations: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep
) -> None:
    """
    Run ``on_change`` once initially and again whenever watched files change.

    A change is acted on once the signature has been stable for ``debounce``
    seconds. Exceptions from ``on_change`` are logged and watching continues.

    Args:
        cwd: Project directory
        on_change: Update callback
        interval: Seconds between polls
        debounce: Quiet period before reacting to a change
        max_iterations: Stop after this many polls (default: run forever)
        sleep: Sleep function
    """
    def run_update():
        try:
            on_change()
        except Exception as e:
            logger.error(f"Update failed: {e}")

    run_update()

    last_seen = build_watch_signature(cwd)
    applied = last_seen
    quiet_for = 0.0
    iterations = 0

    while max_iterations is None or iterations < max_iterations:
        sleep(interval)
        iterations += 1

        current = build_watch_signature(cwd)
        if current != last_seen:
            logger.debug("Watched files changed, waiting for them to settle")
            last_seen = current
            quiet_for = 0.0
            continue

        if current != applied:
            quiet_for += interval
            if quiet_for >= debounce:
                logger.info("Detected dependency changes, updating")
                applied = current
                run_update()


__all__ = [
    "WATCHED_FILES",
    "build_watch_signature",
    "watched_paths",
    "watch_project",
]
