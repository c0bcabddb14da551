"""Tests for the v1 and v2 index formatters."""

from pathlib import Path

import pytest

from conftest import write_tree
from skill_compiler.compressor.formatters import (
    format_v1,
    format_v2,
    get_formatter,
    sanitize,
    BasicFormatter,
    SemanticFormatter,
)
from skill_compiler.compressor.release_notes import ReleaseNotes, major_version
from skill_compiler.compressor.tree_builder import build_tree, FileTreeNode
from skill_compiler.injector import START_MARKER, END_MARKER
from skill_compiler.schemas import IndexFormat


@pytest.fixture
def nested_docs(tmp_path):
    root = tmp_path / "cache"
    write_tree(root, {
        "01-app/index.mdx": "",
        "01-app/01-getting-started/installation.mdx": "",
        "01-app/01-getting-started/project-structure.mdx": "",
        "01-app/01-getting-started/deep/too-deep.mdx": "",
        "02-pages/routing/dynamic.mdx": "",
        "readme.md": "",
    })
    return root


class TestFormatV1:
    """Tests for the basic layout."""

    def test_header_lines(self, tmp_path):
        lines = format_v1("nextjs", "Next.js", [], tmp_path).split("\n")
        assert lines == [
            "[Next.js Docs Index]|root: ./.agent-docs/nextjs",
            "|IMPORTANT: Prefer retrieval-led reasoning over pre-training-led reasoning for Next.js tasks.",
        ]

    def test_root_comes_from_skill_id_not_directory(self, tmp_path):
        index = format_v1("react", "React", [], tmp_path / "somewhere" / "else")
        assert index.startswith("[React Docs Index]|root: ./.agent-docs/react")

    def test_sections_nested_and_top_level_files(self, nested_docs):
        index = format_v1("nextjs", "Next.js", build_tree(nested_docs), nested_docs)
        assert index.split("\n")[2:] == [
            "|01-app:{index.mdx}",
            "|01-app/01-getting-started:{installation.mdx,project-structure.mdx}",
            "|02-pages/routing:{dynamic.mdx}",
            "|{readme.md}",
        ]

    def test_grandchildren_are_not_listed(self, nested_docs):
        index = format_v1("nextjs", "Next.js", build_tree(nested_docs), nested_docs)
        assert "too-deep" not in index

    def test_section_without_direct_files_has_no_own_line(self, nested_docs):
        index = format_v1("nextjs", "Next.js", build_tree(nested_docs), nested_docs)
        assert "|02-pages:" not in index


class TestFormatV2:
    """Tests for the semantic layout."""

    def test_header_and_preference_line(self, tmp_path):
        lines = format_v2("unknown", "Unknown", "1.2.3", [], tmp_path).split("\n")
        assert lines == [
            "[Unknown Docs Index]|v1.2.3|root:./.agent-docs/unknown",
            "|PREFER retrieval over pre-training for Unknown tasks.",
        ]

    def test_nextjs_16_breaking_change(self, tmp_path):
        lines = format_v2("nextjs", "Next.js", "16.0.0", [], tmp_path).split("\n")
        assert "|BREAKING: cookies()/headers() are now async" in lines

    def test_new_apis_capped_at_five(self, tmp_path):
        notes = ReleaseNotes(
            breaking_changes={},
            new_apis={("demo", "2"): [f"api{i}()" for i in range(8)]},
        )
        lines = format_v2("demo", "Demo", "2.1.0", [], tmp_path, release_notes=notes).split("\n")
        assert [line for line in lines if line.startswith("|NEW: ")] == [
            f"|NEW: api{i}()" for i in range(5)
        ]

    def test_release_notes_order_breaking_before_new(self, tmp_path):
        notes = ReleaseNotes(
            breaking_changes={("demo", "3"): ["old() removed"]},
            new_apis={("demo", "3"): ["fresh()"]},
        )
        lines = format_v2("demo", "Demo", "^3.0.0", [], tmp_path, release_notes=notes).split("\n")
        assert lines[2:] == ["|BREAKING: old() removed", "|NEW: fresh()"]

    def test_sections_strip_extensions_and_skip_nesting(self, nested_docs):
        index = format_v2("unknown", "Docs", "1.0.0", build_tree(nested_docs), nested_docs)
        assert index.split("\n")[2:] == ["|01-app:{index}"]

    def test_unknown_version_has_no_release_notes(self, tmp_path):
        index = format_v2("nextjs", "Next.js", "latest", [], tmp_path)
        assert "|BREAKING:" not in index
        assert "|NEW:" not in index

    def test_extracted_content_is_not_rendered(self, tmp_path):
        """Headings and first paragraphs are collected for later use only."""
        write_tree(tmp_path, {"guide/page.md": "# Secret Heading\n\nSecret paragraph."})
        tree = build_tree(tmp_path, extract_content=True)
        assert tree[0].children[0].headings == ["Secret Heading"]

        index = format_v2("demo", "Demo", "1.0.0", tree, tmp_path)
        assert "Secret" not in index


class TestFormatterSelection:

    def test_floors(self):
        assert get_formatter(IndexFormat.V1).floor == 3
        assert get_formatter(IndexFormat.V2).floor == 5

    def test_string_format_accepted(self):
        assert isinstance(get_formatter("v1"), BasicFormatter)
        assert isinstance(get_formatter("v2"), SemanticFormatter)

    def test_custom_release_notes_get_fresh_formatter(self):
        notes = ReleaseNotes(breaking_changes={}, new_apis={})
        formatter = get_formatter(IndexFormat.V2, notes)
        assert formatter.release_notes is notes


class TestSanitize:
    """Names must not break the layout or collide with AGENTS.md sentinels."""

    def test_delimiters_replaced(self):
        assert sanitize("a|b{c},d\ne") == "a_b_c__d_e"

    def test_comment_markers_replaced(self):
        assert sanitize(START_MARKER) == "_ skill-compiler:start _"

    def test_hostile_file_names(self):
        root = Path("/docs")
        nodes = [
            FileTreeNode(
                path=root / "sec|tion",
                name="sec|tion",
                is_directory=True,
                children=[FileTreeNode(
                    path=root / "sec|tion" / f"{END_MARKER}.md",
                    name=f"{END_MARKER}.md",
                    is_directory=False,
                )],
            ),
            FileTreeNode(path=root / "a,b}.md", name="a,b}.md", is_directory=False),
        ]
        for index in (
            format_v1("x", "X", nodes, root),
            format_v2("x", "X", "1.0.0", nodes, root),
        ):
            assert START_MARKER not in index
            assert END_MARKER not in index
            assert "<!--" not in index
            for line in index.split("\n")[2:]:
                assert line.count("|") == 1
                assert line.count("{") == 1 and line.count("}") == 1


class TestMajorVersion:

    @pytest.mark.parametrize("version,expected", [
        ("16.0.0", "16"),
        ("^15.2.1", "15"),
        ("~14.1", "14"),
        ("v5.0.0", "5"),
        ("19.0.0-rc.1", "19"),
        ("latest", None),
        ("", None),
    ])
    def test_major_version(self, version, expected):
        assert major_version(version) == expected
