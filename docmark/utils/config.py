"""Configuration loader and validator for docmark.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from docmark.errors import ConfigError

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"

MISSING_SEPARATOR_POLICIES = ("error", "skip")


@dataclass
class ParserConfig:
    """Configuration for the doc-comment parser."""

    marker: str = "///"
    tag_marker: str = "@"
    encoding: str = "utf-8"


@dataclass
class OutputConfig:
    """Configuration for Markdown output."""

    title_separator: str = ". "
    on_missing_separator: str = "error"
    output_dir: str = "docs/generated"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_parser_config(data: dict) -> ParserConfig:
    """Build a ParserConfig from a dictionary.

    Args:
        data: Dictionary with parser settings.

    Returns:
        A configured ParserConfig instance.

    Raises:
        ConfigError: If a marker is empty.
    """
    config = ParserConfig(
        marker=data.get("marker", "///"),
        tag_marker=data.get("tag_marker", "@"),
        encoding=data.get("encoding", "utf-8"),
    )
    if not config.marker or not config.tag_marker:
        raise ConfigError("parser.marker and parser.tag_marker must be non-empty")
    return config


def _build_output_config(data: dict) -> OutputConfig:
    """Build an OutputConfig from a dictionary.

    Args:
        data: Dictionary with output settings.

    Returns:
        A configured OutputConfig instance.

    Raises:
        ConfigError: If the missing-separator policy is unknown or the
            separator is empty.
    """
    config = OutputConfig(
        title_separator=data.get("title_separator", ". "),
        on_missing_separator=data.get("on_missing_separator", "error"),
        output_dir=data.get("output_dir", "docs/generated"),
    )
    validate_policy(config.on_missing_separator)
    if not config.title_separator:
        raise ConfigError("output.title_separator must be non-empty")
    return config


def validate_policy(policy: str) -> str:
    """Check a missing-separator policy name.

    Args:
        policy: Policy name from config or the command line.

    Returns:
        The policy, unchanged.

    Raises:
        ConfigError: If the policy is not one of MISSING_SEPARATOR_POLICIES.
    """
    if policy not in MISSING_SEPARATOR_POLICIES:
        raise ConfigError(
            f"Unknown on_missing_separator policy {policy!r}; "
            f"expected one of {', '.join(MISSING_SEPARATOR_POLICIES)}"
        )
    return policy


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml, and a missing default
            file is not reported.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        ConfigError: If a config value is invalid.
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        # An installed package has no configs/ directory beside it.
        if config_path:
            logger.warning("Config file not found at %s, using defaults", path)
        else:
            logger.debug("No default config at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "WARNING"),
        format=logging_data.get(
            "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ),
        file=logging_data.get("file"),
    )

    return AppConfig(
        parser=_build_parser_config(raw.get("parser", {})),
        output=_build_output_config(raw.get("output", {})),
        logging=logging_config,
    )
