"""Tests for the built-in framework registries."""

from skill_compiler.registries import REGISTRIES, get_registry, get_registry_names


def test_registry_names_are_unique():
    names = get_registry_names()
    assert len(names) == len(set(names))
    assert "nextjs" in names


def test_get_registry():
    nextjs = get_registry("nextjs")
    assert nextjs.display_name == "Next.js"
    assert nextjs.priority == ["app", "api-reference", "routing"]
    assert nextjs.version_mapping["16"] == "canary"
    assert get_registry("unknown") is None


def test_github_sources_are_complete():
    for registry in REGISTRIES:
        if registry.doc_source.type == "github":
            assert registry.doc_source.repo
            assert registry.doc_source.path
        assert registry.package_match
