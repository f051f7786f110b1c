"""Configuration loading for CLI MCP Mapper."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from .errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigStructureError,
    ConfigSyntaxError,
    ConfigValidationError,
)
from .models import CommandSpec, MapperConfig

logger = logging.getLogger(__name__)

# Define environment variable names
ENV_CONFIG_PATH = "CLI_MCP_MAPPER_CONFIG"
ENV_LOG_LEVEL = "CLI_MCP_MAPPER_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# Top-level CommandSpec fields reported with a fixed message
_REQUIRED_FIELDS = ("command", "description")


def default_config_path() -> Path:
    return Path.home() / ".config" / "cli-mcp-mapper" / "commands.json"


def resolve_config_path(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Pick the config file: explicit path, then $CLI_MCP_MAPPER_CONFIG, then the default."""
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.getenv(ENV_CONFIG_PATH)
    if from_env:
        return Path(from_env).expanduser()
    return default_config_path()


def resolve_log_level(explicit: Optional[str] = None) -> str:
    """Pick the log level: explicit value, then $CLI_MCP_MAPPER_LOG_LEVEL, then INFO."""
    level = (explicit or os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level: {level!r} (expected one of {', '.join(LOG_LEVELS)})"
        )
    return level


def read_config_document(path: Path) -> Dict[str, Any]:
    """Read and parse the JSON document, checking only its outer shape."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Configuration file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise ConfigSyntaxError(f"Invalid UTF-8 in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e.strerror or e}") from e

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigSyntaxError(f"Invalid JSON syntax in {path}: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get("commands"), dict):
        raise ConfigStructureError(
            'Invalid configuration structure: Expected "commands" object'
        )
    return document


def _describe_errors(error: ValidationError) -> List[str]:
    messages: List[str] = []
    for detail in error.errors():
        loc = detail.get("loc", ())
        if loc and loc[0] in _REQUIRED_FIELDS:
            message = f"missing or invalid '{loc[0]}' field"
        elif loc:
            message = f"{'.'.join(str(part) for part in loc)}: {detail['msg']}"
        else:
            message = detail["msg"]
        if message not in messages:
            messages.append(message)
    return messages


def parse_config(document: Dict[str, Any]) -> MapperConfig:
    """
    Validate every command definition in a parsed document.

    All commands are checked before failing, so one error report covers the
    whole file.

    Raises:
        ConfigStructureError: The document has no "commands" object.
        ConfigValidationError: At least one command definition is invalid.
    """
    raw_commands = document.get("commands") if isinstance(document, dict) else None
    if not isinstance(raw_commands, dict):
        raise ConfigStructureError(
            'Invalid configuration structure: Expected "commands" object'
        )

    commands: Dict[str, CommandSpec] = {}
    problems: Dict[str, List[str]] = {}
    for name, raw in raw_commands.items():
        try:
            commands[name] = CommandSpec.model_validate(raw)
        except ValidationError as e:
            problems[name] = _describe_errors(e)

    if problems:
        raise ConfigValidationError(problems)
    return MapperConfig(commands=commands)


def load_config(path: Optional[Union[str, Path]] = None) -> MapperConfig:
    """Load and validate the configuration file."""
    config_path = resolve_config_path(path)
    config = parse_config(read_config_document(config_path))
    logger.info("Loaded %d command(s) from %s", len(config.commands), config_path)
    return config
