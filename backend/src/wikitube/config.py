# backend/src/wikitube/config.py
"""Configuration system for the WikiTube backend.

This module handles loading settings from environment variables and an INI
file, providing sensible defaults, and computing derived paths inside the
data directory.

The API credential is deliberately NOT validated here: its absence is a
generation-time error (see wikitube.generation.errors.ConfigurationError), so
the service can start and report the problem on the entry screen.
"""

from configparser import ConfigParser
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
import os


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[type, Any, Any, Any, str]]] = {
    "generation": {
        "temperature": (float, 0.5, 0.0, 1.0, "Sampling temperature for encyclopaedia output"),
        "entry_count": (int, 6, 1, 20, "Entries requested per channel"),
        "summary_words": (int, 80, 20, 500, "Target length of an entry summary"),
        "article_words": (int, 300, 50, 2000, "Target length of an entry article body"),
    },
    "pipeline": {
        "tick_interval": (float, 1.2, 0.0, 10.0, "Seconds between processing step advances"),
        "settle_delay": (float, 0.8, 0.0, 10.0, "Pause before showing the finished wiki"),
    },
    "llm": {
        "max_tokens": (int, 8192, 256, 65536, "Max response tokens"),
    },
    "paths": {
        "logs_dir": (str, "logs", None, None, "Logs directory name"),
    },
}


@dataclass(frozen=True)
class GenerationConfig:
    """Encyclopaedia generation configuration."""

    temperature: float
    entry_count: int
    summary_words: int
    article_words: int


@dataclass(frozen=True)
class PipelineConfig:
    """Processing pipeline pacing."""

    tick_interval: float
    settle_delay: float


@dataclass(frozen=True)
class LLMConfig:
    """LLM client configuration."""

    max_tokens: int


@dataclass(frozen=True)
class PathsConfig:
    """Path names configuration."""

    logs_dir: str


def _load_section(
    parser: ConfigParser, section: str, schema: dict[str, tuple[type, Any, Any, Any, str]]
) -> dict[str, Any]:
    """Load and validate a configuration section.

    Args:
        parser: ConfigParser instance with loaded config
        section: Section name to load
        schema: Schema definition for the section

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If validation fails
    """
    result = {}

    for key, (typ, default, min_val, max_val, _) in schema.items():
        if parser.has_option(section, key):
            raw_value = parser.get(section, key)
            value: bool | int | float | str
            try:
                if typ is bool:
                    value = raw_value.lower() in ("true", "1", "yes", "on")
                elif typ is int:
                    value = int(raw_value)
                elif typ is float:
                    value = float(raw_value)
                else:
                    value = raw_value
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected {typ.__name__})"
                ) from e
        else:
            value = default

        if typ in (int, float) and value is not None:
            if min_val is not None and value < min_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but minimum is {min_val}"
                )
            if max_val is not None and value > max_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but maximum is {max_val}"
                )

        result[key] = value

    return result


def _defaults(section: str) -> dict[str, Any]:
    return {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA[section].items()}


def _load_config(config_path: Optional[Path] = None) -> "Config":
    """Load configuration from an INI file (internal use only).

    Args:
        config_path: Path to config file. If None, uses defaults from schema.

    Returns:
        Config object with all sections populated (data_dir is a placeholder)

    Raises:
        ConfigError: If validation fails
    """
    parser = ConfigParser()

    if config_path and config_path.exists():
        parser.read(config_path)

    return Config(
        data_dir=Path("."),
        generation=GenerationConfig(
            **_load_section(parser, "generation", CONFIG_SCHEMA["generation"])
        ),
        pipeline=PipelineConfig(**_load_section(parser, "pipeline", CONFIG_SCHEMA["pipeline"])),
        llm=LLMConfig(**_load_section(parser, "llm", CONFIG_SCHEMA["llm"])),
        paths=PathsConfig(**_load_section(parser, "paths", CONFIG_SCHEMA["paths"])),
    )


@dataclass(frozen=True)
class Config:
    """Complete application configuration."""

    data_dir: Path
    active_provider: str = "gemini"
    active_model: str = "gemini-2.5-flash"
    gemini_api_key: Optional[str] = None

    # Section configs - defaults set in __post_init__
    generation: GenerationConfig = None  # type: ignore[assignment]
    pipeline: PipelineConfig = None  # type: ignore[assignment]
    llm: LLMConfig = None  # type: ignore[assignment]
    paths: PathsConfig = None  # type: ignore[assignment]

    def __post_init__(self):
        """Initialize section configs with defaults if not provided."""
        # Since frozen=True, we need to use object.__setattr__
        if self.generation is None:
            object.__setattr__(self, "generation", GenerationConfig(**_defaults("generation")))
        if self.pipeline is None:
            object.__setattr__(self, "pipeline", PipelineConfig(**_defaults("pipeline")))
        if self.llm is None:
            object.__setattr__(self, "llm", LLMConfig(**_defaults("llm")))
        if self.paths is None:
            object.__setattr__(self, "paths", PathsConfig(**_defaults("paths")))

    @property
    def config_path(self) -> Path:
        """Path to the optional config.ini file."""
        return self.data_dir / "config.ini"

    @property
    def logs_path(self) -> Path:
        """Path to the logs directory."""
        return self.data_dir / self.paths.logs_dir

    @property
    def llm_log_path(self) -> Path:
        """Path to LLM query log file."""
        return self.logs_path / "llm-queries.jsonl"

    @property
    def llm_provider(self) -> str:
        """LLM provider name."""
        return self.active_provider

    @property
    def llm_model(self) -> str:
        """LLM model name."""
        return self.active_model

    @property
    def llm_api_key(self) -> Optional[str]:
        """API key for the active LLM provider, or None when unset."""
        return self.gemini_api_key or None


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from environment variables and config file.

    Settings are cached for the lifetime of the application.
    Use load_settings.cache_clear() to reload settings.

    Returns:
        Config object populated from environment variables and config file.

    Raises:
        ConfigError: If config.ini holds an invalid value.
    """
    data_dir_str = os.getenv("WIKITUBE_DATA_DIR")
    data_dir = Path(data_dir_str) if data_dir_str else Path.home() / ".wikitube"

    config_file = data_dir / "config.ini"
    try:
        config_exists = config_file.exists()
    except PermissionError:
        config_exists = False
    base_config = _load_config(config_file if config_exists else None)

    return Config(
        data_dir=data_dir,
        active_provider=os.getenv("ACTIVE_PROVIDER", "gemini"),
        active_model=os.getenv("ACTIVE_MODEL", "gemini-2.5-flash"),
        gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
        generation=base_config.generation,
        pipeline=base_config.pipeline,
        llm=base_config.llm,
        paths=base_config.paths,
    )
