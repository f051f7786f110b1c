"""Exceptions raised by CLI MCP Mapper."""

from typing import Mapping, Sequence


class MapperError(Exception):
    """Base exception for all mapper errors."""
    pass


class CommandError(MapperError):
    """Base exception for command-related errors."""
    pass


class UnknownCommandError(CommandError):
    """A tool call named a command that is not configured."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name


class CommandLaunchError(CommandError):
    """The child process could not be started at all."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"Failed to execute command: {reason}")
        self.command = command
        self.reason = reason


class ConfigError(MapperError):
    """Base exception for configuration errors."""
    pass


class ConfigNotFoundError(ConfigError):
    pass


class ConfigSyntaxError(ConfigError):
    pass


class ConfigStructureError(ConfigError):
    pass


class ConfigValidationError(ConfigError):
    """One or more command definitions failed validation."""

    def __init__(self, problems: Mapping[str, Sequence[str]]) -> None:
        self.problems = {name: list(messages) for name, messages in problems.items()}
        summary = "; ".join(
            f"{name}: {', '.join(messages)}" for name, messages in self.problems.items()
        )
        super().__init__(f"Invalid command definitions: {summary}")
