"""Exception types raised by skill-compiler collaborators.

The compressor core never raises for missing or malformed documentation;
these are used by the config, fetcher and custom-skill layers.
"""


class SkillCompilerError(Exception):
    """Base class for skill-compiler errors."""


class ConfigError(SkillCompilerError):
    """Raised when a configuration file cannot be written or is invalid."""


class FetchError(SkillCompilerError):
    """Raised when documentation cannot be fetched from its source."""


class CustomSkillError(SkillCompilerError):
    """Raised when a custom skill cannot be added."""
