"""
Size enforcement for rendered indexes.

When an index exceeds its byte budget, a fixed sequence of lossy rewrites is
applied to the whole text, then trailing lines are dropped until the text
fits or only the header floor remains. The rewrites are irreversible: an
enforced index cannot be mapped back to the original paths.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
import logging
import re

logger = logging.getLogger(__name__)

ABBREVIATIONS: List[Tuple[str, str]] = [
    ("getting-started", "gs"),
    ("api-reference", "api"),
    ("building-your-application", "build"),
    ("configuration", "config"),
]

_EXTENSION_PATTERN = re.compile(r"\.mdx?")
# Approximate: "01-app" becomes "1app", "10-b" becomes "10b"
_NUMBERED_PREFIX_PATTERN = re.compile(r"(\d{2})-([a-z])")
_SEPARATOR_RUN_PATTERN = re.compile(r"\|+")


@dataclass
class EnforcementResult:
    """Outcome of enforcing a byte budget."""
    text: str
    passes_applied: List[str] = field(default_factory=list)
    lines_dropped: int = 0
    within_budget: bool = True


def byte_size(text: str) -> int:
    return len(text.encode("utf-8"))


def strip_extensions(text: str) -> str:
    return _EXTENSION_PATTERN.sub("", text)


def abbreviate_segments(text: str) -> str:
    for verbose, short in ABBREVIATIONS:
        text = text.replace(verbose, short)
    return text


def contract_numbered_prefixes(text: str) -> str:
    return _NUMBERED_PREFIX_PATTERN.sub(
        lambda match: f"{int(match.group(1))}{match.group(2)}",
        text
    )


def collapse_separators(text: str) -> str:
    return _SEPARATOR_RUN_PATTERN.sub("|", text)


REWRITE_PASSES = [
    ("strip_extensions", strip_extensions),
    ("abbreviate_segments", abbreviate_segments),
    ("contract_numbered_prefixes", contract_numbered_prefixes),
    ("collapse_separators", collapse_separators),
]


def enforce_with_report(index: str, target_bytes: int, floor: int = 3) -> EnforcementResult:
    """
    Shrink ``index`` towards ``target_bytes`` and report what was done.

    Never raises. The result may still exceed the budget once only ``floor``
    lines remain.

    Args:
        index: Rendered index text
        target_bytes: Byte budget (UTF-8)
        floor: Minimum number of lines to keep

    Returns:
        EnforcementResult with the final text
    """
    if byte_size(index) <= target_bytes:
        return EnforcementResult(text=index)

    result = EnforcementResult(text=index, within_budget=False)
    text = index

    for name, rewrite in REWRITE_PASSES:
        text = rewrite(text)
        result.passes_applied.append(name)

    lines = text.split("\n")
    size = byte_size(text)

    # Drop trailing sections, keeping at least `floor` lines
    while size > target_bytes and len(lines) > floor:
        dropped = lines.pop()
        size -= byte_size(dropped) + 1
        result.lines_dropped += 1

    result.text = "\n".join(lines)
    result.within_budget = size <= target_bytes

    if result.within_budget:
        logger.debug(
            f"Enforced {target_bytes}B budget: {byte_size(index)}B -> {size}B "
            f"({result.lines_dropped} lines dropped)"
        )
    else:
        logger.warning(
            f"Index still {size}B after compression (budget {target_bytes}B, "
            f"floor of {floor} lines reached)"
        )

    return result


def enforce(index: str, target_bytes: int, floor: int = 3) -> str:
    """Return ``index`` shrunk towards ``target_bytes``; see enforce_with_report."""
    return enforce_with_report(index, target_bytes, floor).text
