"""
Release notes lookup for the semantic (v2) index.

Maps (framework identifier, major version) to ordered lists of breaking
changes and notable new APIs. The knowledge is curated by hand, not derived
from the scanned documentation. Formatters receive a ``ReleaseNotes`` instance
so callers can supply their own table.
"""

from typing import Dict, List, Optional, Tuple
import re

NotesTable = Dict[Tuple[str, str], List[str]]

MAX_NEW_APIS = 5

DEFAULT_BREAKING_CHANGES: NotesTable = {
    ("nextjs", "13"): [
        "app/ directory introduces React Server Components by default",
        "next/link no longer requires a child <a>",
        "next/image uses native lazy loading",
    ],
    ("nextjs", "14"): [
        "next export removed, use output: 'export'",
        "Minimum Node.js version is 18.17",
    ],
    ("nextjs", "15"): [
        "cookies()/headers() are now async",
        "params/searchParams are now Promises",
        "fetch() requests are no longer cached by default",
        "GET route handlers are no longer cached by default",
    ],
    ("nextjs", "16"): [
        "cookies()/headers() are now async",
        "params/searchParams must be awaited",
        "middleware renamed to proxy",
        "Turbopack is the default bundler",
    ],
    ("react", "19"): [
        "ReactDOM.render removed, use createRoot",
        "ref is a regular prop, forwardRef no longer needed",
        "propTypes and defaultProps on function components removed",
        "string refs removed",
    ],
    ("react", "18"): [
        "ReactDOM.render deprecated in favour of createRoot",
        "Automatic batching for all updates",
    ],
    ("tailwindcss", "4"): [
        "tailwind.config.js replaced by CSS-first @theme configuration",
        "@tailwind directives replaced by @import \"tailwindcss\"",
    ],
    ("prisma", "5"): [
        "rejectOnNotFound removed, use findUniqueOrThrow",
    ],
    ("prisma", "6"): [
        "Minimum Node.js version is 18.18",
        "Buffer replaced by Uint8Array for Bytes fields",
    ],
    ("astro", "5"): [
        "Content collections use the Content Layer API",
        "output: 'hybrid' merged into 'static'",
    ],
    ("sveltekit", "2"): [
        "redirect()/error() are no longer thrown by you",
        "Top-level promises in load are no longer awaited",
    ],
    ("zod", "4"): [
        "error customization uses a unified error param",
        ".strict()/.passthrough() replaced by z.strictObject()/z.looseObject()",
    ],
}

DEFAULT_NEW_APIS: NotesTable = {
    ("nextjs", "14"): [
        "Server Actions (stable)",
        "Partial Prerendering (preview)",
        "next/navigation useSelectedLayoutSegment()",
    ],
    ("nextjs", "15"): [
        "after()",
        "<Form> from next/form",
        "connection()",
        "unstable_cache",
        "instrumentation.js onRequestError",
    ],
    ("nextjs", "16"): [
        "\"use cache\" directive",
        "cacheLife()",
        "cacheTag()",
        "updateTag()",
        "refresh()",
        "revalidateTag(tag, profile)",
    ],
    ("react", "19"): [
        "use()",
        "useActionState()",
        "useOptimistic()",
        "useFormStatus()",
        "<form action> accepts functions",
    ],
    ("react", "18"): [
        "useId()",
        "useTransition()",
        "useDeferredValue()",
        "useSyncExternalStore()",
    ],
    ("tailwindcss", "4"): [
        "@theme",
        "@utility",
        "@variant",
        "@source",
    ],
    ("astro", "5"): [
        "Server Islands (server:defer)",
        "astro:env",
        "Content Layer loaders",
    ],
    ("zod", "4"): [
        "z.interface()",
        "z.templateLiteral()",
        ".meta() and z.globalRegistry",
        "z.toJSONSchema()",
    ],
}


_MAJOR_PATTERN = re.compile(r"(\d+)")


def major_version(version: str) -> Optional[str]:
    """
    Extract the major version from a version string.

    Range prefixes are ignored ('^16.0.0' -> '16'). Returns None when the
    string carries no number (e.g., 'latest').
    """
    head = version.strip().lstrip("^~=v>< ").split(".")[0]
    match = _MAJOR_PATTERN.match(head)
    if not match:
        return None
    return str(int(match.group(1)))


class ReleaseNotes:
    """Lookup of breaking changes and new APIs per (framework, major version)."""

    def __init__(
        self,
        breaking_changes: Optional[NotesTable] = None,
        new_apis: Optional[NotesTable] = None
    ):
        """
        Args:
            breaking_changes: Table of breaking changes (default: DEFAULT_BREAKING_CHANGES)
            new_apis: Table of new APIs (default: DEFAULT_NEW_APIS)
        """
        self.breaking_changes = DEFAULT_BREAKING_CHANGES if breaking_changes is None else breaking_changes
        self.new_apis = DEFAULT_NEW_APIS if new_apis is None else new_apis

    def breaking(self, framework: str, version: str) -> List[str]:
        """Breaking changes for a framework version, in table order."""
        return self._lookup(self.breaking_changes, framework, version)

    def new(self, framework: str, version: str) -> List[str]:
        """Up to five new APIs for a framework version."""
        return self._lookup(self.new_apis, framework, version)[:MAX_NEW_APIS]

    @staticmethod
    def _lookup(table: NotesTable, framework: str, version: str) -> List[str]:
        major = major_version(version)
        if major is None:
            return []
        return list(table.get((framework, major), []))


DEFAULT_RELEASE_NOTES = ReleaseNotes()
