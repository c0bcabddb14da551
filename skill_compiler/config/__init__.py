"""Project configuration and custom skill management."""

from .manager import (
    CONFIG_FILENAME,
    CustomSkillConfig,
    CompressionConfig,
    SkillCompilerConfig,
    load_config,
    save_config,
    config_exists,
    get_config_path,
    create_initial_config,
)
from .custom import (
    AddSkillResult,
    add_custom_skill,
    list_custom_skills,
    get_custom_skill,
    remove_custom_skill,
)

__all__ = [
    "CONFIG_FILENAME",
    "CustomSkillConfig",
    "CompressionConfig",
    "SkillCompilerConfig",
    "load_config",
    "save_config",
    "config_exists",
    "get_config_path",
    "create_initial_config",
    "AddSkillResult",
    "add_custom_skill",
    "list_custom_skills",
    "get_custom_skill",
    "remove_custom_skill",
]
