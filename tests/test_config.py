"""Tests for .skill-compiler.json handling and custom skills."""

import json

import pytest

from skill_compiler.config import (
    load_config,
    save_config,
    create_initial_config,
    config_exists,
    get_config_path,
    add_custom_skill,
    list_custom_skills,
    get_custom_skill,
    remove_custom_skill,
)
from skill_compiler.config.custom import skill_name_from_path
from skill_compiler.errors import CustomSkillError, ConfigError
from skill_compiler.schemas import IndexFormat


class TestConfig:
    """Tests for loading, merging and saving configuration."""

    def test_initial_config_defaults(self):
        config = create_initial_config()
        assert config.out == "./AGENTS.md"
        assert config.compression.target_size == 8192
        assert config.compression.format == IndexFormat.V1
        assert config.cache_ttl_hours == 168

    def test_initial_config_overrides(self):
        config = create_initial_config(out="./docs/AGENTS.md", frameworks=["nextjs", "react"])
        assert config.out == "./docs/AGENTS.md"
        assert config.only == ["nextjs", "react"]

    def test_load_defaults_without_file(self, tmp_path):
        config = load_config(tmp_path)
        assert config.out == "./AGENTS.md"
        assert config.compression.target_size == 8192
        assert config.compression.format == IndexFormat.V1

    def test_load_existing_file(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({
            "out": "./custom-AGENTS.md",
            "only": ["nextjs"],
            "compression": {"targetSize": 4096, "format": "v2"},
        }))

        config = load_config(tmp_path)

        assert config.out == "./custom-AGENTS.md"
        assert config.only == ["nextjs"]
        assert config.compression.target_size == 4096
        assert config.compression.format == IndexFormat.V2

    def test_partial_compression_block_keeps_defaults(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({
            "only": ["nextjs"],
            "compression": {"format": "v2"},
        }))

        config = load_config(tmp_path)

        assert config.out == "./AGENTS.md"
        assert config.compression.target_size == 8192
        assert config.compression.format == IndexFormat.V2

    @pytest.mark.parametrize("content", [
        "{not json",
        "[1, 2, 3]",
        json.dumps({"compression": {"targetSize": -5}}),
        json.dumps({"cacheTtlHours": "soon"}),
    ])
    def test_invalid_file_falls_back_to_defaults(self, tmp_path, content):
        get_config_path(tmp_path).write_text(content)
        config = load_config(tmp_path)
        assert config.compression.target_size == 8192
        assert config.cache_ttl_hours == 168

    def test_save_uses_camel_case_keys(self, tmp_path):
        config = create_initial_config()
        path = save_config(tmp_path, config)

        assert path == get_config_path(tmp_path)
        content = path.read_text()
        assert '"out": "./AGENTS.md"' in content
        data = json.loads(content)
        assert data["compression"] == {"targetSize": 8192, "format": "v1"}
        assert data["cacheTtlHours"] == 168
        assert "only" not in data

    def test_save_then_load_round_trip(self, tmp_path):
        config = create_initial_config(frameworks=["react"])
        config.compression.format = IndexFormat.V2
        save_config(tmp_path, config)
        assert load_config(tmp_path).model_dump() == config.model_dump()

    def test_conflicts_survive_save(self, tmp_path):
        get_config_path(tmp_path).write_text(json.dumps({"conflicts": {"hooks/*": "prefer:react"}}))

        save_config(tmp_path, load_config(tmp_path))

        data = json.loads(get_config_path(tmp_path).read_text())
        assert data["conflicts"] == {"hooks/*": "prefer:react"}

    def test_save_into_missing_directory_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            save_config(tmp_path / "missing", create_initial_config())

    def test_config_exists(self, tmp_path):
        assert not config_exists(tmp_path)
        get_config_path(tmp_path).write_text("{}")
        assert config_exists(tmp_path)

    def test_config_path(self, tmp_path):
        assert get_config_path(tmp_path) == tmp_path / ".skill-compiler.json"


class TestCustomSkills:
    """Tests for registering local documentation as skills."""

    @pytest.fixture
    def skill_source(self, tmp_path):
        source = tmp_path / "skill-source"
        (source / "guides").mkdir(parents=True)
        (source / "README.md").write_text("# My Custom Skill\n\nSome content.")
        (source / "guides" / "setup.mdx").write_text("# Setup")
        (source / "logo.png").write_bytes(b"\x89PNG")
        return source

    def test_add_custom_skill(self, tmp_path, skill_source):
        result = add_custom_skill(tmp_path, "skill-source", name="my-skill")

        assert result.name == "my-skill"
        assert result.path == tmp_path / ".agent-docs" / "custom" / "my-skill"
        assert result.file_count == 2
        assert (result.path / "README.md").exists()
        assert (result.path / "guides" / "setup.mdx").exists()

    def test_name_derived_from_directory(self, tmp_path):
        (tmp_path / "My Docs").mkdir()
        (tmp_path / "My Docs" / "a.md").write_text("# A")
        result = add_custom_skill(tmp_path, "My Docs")
        assert result.name == "my-docs"

    def test_missing_source_raises(self, tmp_path):
        with pytest.raises(CustomSkillError):
            add_custom_skill(tmp_path, "nope")

    def test_list_custom_skills(self, tmp_path, skill_source):
        add_custom_skill(tmp_path, "skill-source", name="my-skill", priority=["guides"])

        skills = list_custom_skills(tmp_path)

        assert len(skills) == 1
        assert skills[0].name == "my-skill"
        assert skills[0].path == ".agent-docs/custom/my-skill"
        assert skills[0].priority == ["guides"]

    def test_adding_same_name_replaces(self, tmp_path, skill_source):
        add_custom_skill(tmp_path, "skill-source", name="my-skill")

        other = tmp_path / "skill-source-2"
        other.mkdir()
        (other / "OTHER.md").write_text("# Other")
        add_custom_skill(tmp_path, "skill-source-2", name="my-skill")

        skills = list_custom_skills(tmp_path)
        assert len(skills) == 1
        copied = tmp_path / ".agent-docs" / "custom" / "my-skill"
        assert (copied / "OTHER.md").exists()
        assert not (copied / "README.md").exists()

    def test_get_custom_skill(self, tmp_path, skill_source):
        add_custom_skill(tmp_path, "skill-source", name="my-skill")
        assert get_custom_skill(tmp_path, "my-skill").name == "my-skill"
        assert get_custom_skill(tmp_path, "other") is None

    def test_remove_custom_skill(self, tmp_path, skill_source):
        add_custom_skill(tmp_path, "skill-source", name="my-skill")

        assert remove_custom_skill(tmp_path, "my-skill")
        assert not (tmp_path / ".agent-docs" / "custom" / "my-skill").exists()
        assert list_custom_skills(tmp_path) == []

    def test_remove_unknown_skill(self, tmp_path):
        assert not remove_custom_skill(tmp_path, "ghost")

    def test_add_preserves_other_config(self, tmp_path, skill_source):
        get_config_path(tmp_path).write_text(json.dumps({"out": "./docs/AGENTS.md"}))
        add_custom_skill(tmp_path, "skill-source", name="my-skill")
        assert load_config(tmp_path).out == "./docs/AGENTS.md"


class TestSkillNameFromPath:

    @pytest.mark.parametrize("source,expected", [
        ("docs", "docs"),
        ("./vendor/Internal_API", "internal-api"),
        ("My Docs", "my-docs"),
    ])
    def test_skill_name_from_path(self, source, expected):
        assert skill_name_from_path(source) == expected
