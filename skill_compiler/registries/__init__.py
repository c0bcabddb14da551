"""
Framework registries.

Defines how documentation is located, fetched and prioritized for each
supported framework. The compressor uses the display name and priority
terms; the scanner uses the package/config matchers; the fetcher uses the
doc source and version mapping.
"""

from typing import List, Dict, Optional, Literal

from pydantic import BaseModel, Field


class DocSource(BaseModel):
    """Where a framework's documentation lives."""
    type: Literal["github", "npm", "url"] = Field(description="Source kind")
    repo: Optional[str] = Field(None, description="GitHub 'owner/name'")
    path: Optional[str] = Field(None, description="Docs directory inside the repository")
    branch: Optional[str] = Field(None, description="Default branch")
    url: Optional[str] = Field(None, description="Direct URL for 'url' sources")


class FrameworkRegistry(BaseModel):
    """Registry entry for one framework."""
    name: str = Field(description="Skill identifier")
    display_name: str = Field(description="Human-readable name")
    package_match: List[str] = Field(description="package.json dependency names")
    config_match: List[str] = Field(default_factory=list, description="Config file globs")
    doc_source: DocSource
    version_mapping: Dict[str, str] = Field(
        default_factory=dict,
        description="Version (exact or major) to git ref"
    )
    includes: List[str] = Field(
        default_factory=list,
        description="Globs (relative to the docs path) a fetched file must match"
    )
    excludes: List[str] = Field(
        default_factory=list,
        description="Globs (relative to the docs path) dropped when fetching"
    )
    priority: List[str] = Field(
        default_factory=list,
        description="Ordered terms that move matching top-level sections first"
    )


def _github(repo: str, path: str, branch: str) -> DocSource:
    return DocSource(type="github", repo=repo, path=path, branch=branch)


REGISTRIES: List[FrameworkRegistry] = [
    FrameworkRegistry(
        name="nextjs",
        display_name="Next.js",
        package_match=["next"],
        config_match=["next.config.*"],
        doc_source=_github("vercel/next.js", "docs", "canary"),
        version_mapping={
            "16": "canary",
            "15": "v15.0.0",
            "14": "v14.0.0",
            "13": "v13.0.0",
        },
        includes=["**/*.mdx"],
        excludes=["**/examples/**"],
        priority=["app", "api-reference", "routing"],
    ),
    FrameworkRegistry(
        name="react",
        display_name="React",
        package_match=["react"],
        doc_source=_github("reactjs/react.dev", "src/content", "main"),
        includes=["**/*.md", "**/*.mdx"],
        priority=["reference", "learn"],
    ),
    FrameworkRegistry(
        name="supabase",
        display_name="Supabase",
        package_match=["@supabase/supabase-js"],
        doc_source=_github("supabase/supabase", "apps/docs/content", "master"),
        includes=["**/*.mdx"],
        priority=["guides", "reference"],
    ),
    FrameworkRegistry(
        name="tailwindcss",
        display_name="Tailwind CSS",
        package_match=["tailwindcss"],
        config_match=["tailwind.config.*"],
        doc_source=_github("tailwindlabs/tailwindcss.com", "src/pages/docs", "master"),
        includes=["**/*.mdx"],
    ),
    FrameworkRegistry(
        name="prisma",
        display_name="Prisma",
        package_match=["prisma", "@prisma/client"],
        config_match=["prisma/schema.prisma"],
        doc_source=_github("prisma/docs", "content", "main"),
        includes=["**/*.mdx"],
        priority=["orm", "reference"],
    ),
    FrameworkRegistry(
        name="vue",
        display_name="Vue.js",
        package_match=["vue"],
        config_match=["vue.config.*", "vite.config.*"],
        doc_source=_github("vuejs/docs", "src", "main"),
        includes=["**/*.md"],
        priority=["guide", "api"],
    ),
    FrameworkRegistry(
        name="astro",
        display_name="Astro",
        package_match=["astro"],
        config_match=["astro.config.*"],
        doc_source=_github("withastro/docs", "src/content/docs", "main"),
        includes=["**/*.mdx"],
        priority=["guides", "reference"],
    ),
    FrameworkRegistry(
        name="sveltekit",
        display_name="SvelteKit",
        package_match=["@sveltejs/kit"],
        config_match=["svelte.config.*"],
        doc_source=_github("sveltejs/kit", "documentation/docs", "main"),
        includes=["**/*.md"],
    ),
    FrameworkRegistry(
        name="drizzle",
        display_name="Drizzle ORM",
        package_match=["drizzle-orm"],
        config_match=["drizzle.config.*"],
        doc_source=_github("drizzle-team/drizzle-orm", "docs", "main"),
        includes=["**/*.md", "**/*.mdx"],
    ),
    FrameworkRegistry(
        name="trpc",
        display_name="tRPC",
        package_match=["@trpc/server", "@trpc/client"],
        doc_source=_github("trpc/trpc", "www/docs", "main"),
        includes=["**/*.md", "**/*.mdx"],
    ),
    FrameworkRegistry(
        name="zod",
        display_name="Zod",
        package_match=["zod"],
        doc_source=_github("colinhacks/zod", "docs", "main"),
        includes=["**/*.md"],
    ),
    FrameworkRegistry(
        name="tanstack-query",
        display_name="TanStack Query",
        package_match=["@tanstack/react-query", "@tanstack/vue-query"],
        doc_source=_github("TanStack/query", "docs", "main"),
        includes=["**/*.md"],
        priority=["framework/react", "guides"],
    ),
    FrameworkRegistry(
        name="nuxt",
        display_name="Nuxt",
        package_match=["nuxt"],
        config_match=["nuxt.config.*"],
        doc_source=_github("nuxt/nuxt", "docs", "main"),
        includes=["**/*.md"],
        priority=["guide", "api"],
    ),
    FrameworkRegistry(
        name="remix",
        display_name="Remix",
        package_match=["@remix-run/react", "@remix-run/node"],
        doc_source=_github("remix-run/remix", "docs", "main"),
        includes=["**/*.md"],
        priority=["guides", "api"],
    ),
    FrameworkRegistry(
        name="hono",
        display_name="Hono",
        package_match=["hono"],
        doc_source=_github("honojs/hono", "docs", "main"),
        includes=["**/*.md"],
    ),
    FrameworkRegistry(
        name="effect",
        display_name="Effect",
        package_match=["effect", "@effect/platform"],
        doc_source=_github("Effect-TS/effect", "docs", "main"),
        includes=["**/*.md", "**/*.mdx"],
    ),
    FrameworkRegistry(
        name="bun",
        display_name="Bun",
        package_match=["bun"],
        config_match=["bunfig.toml"],
        doc_source=_github("oven-sh/bun", "docs", "main"),
        includes=["**/*.md"],
        priority=["api", "runtime"],
    ),
]


def get_registry(name: str) -> Optional[FrameworkRegistry]:
    """Look up a registry entry by skill identifier."""
    for registry in REGISTRIES:
        if registry.name == name:
            return registry
    return None


def get_registry_names() -> List[str]:
    """Return all registered skill identifiers."""
    return [registry.name for registry in REGISTRIES]


__all__ = [
    "DocSource",
    "FrameworkRegistry",
    "REGISTRIES",
    "get_registry",
    "get_registry_names",
]
