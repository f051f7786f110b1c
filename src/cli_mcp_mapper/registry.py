"""Lookup of configured commands by tool name."""

import logging
from typing import Any, Mapping, Optional

from .command import build_command
from .errors import UnknownCommandError
from .executor import ExecutionResult, SafeExecutor
from .models import CommandSpec, MapperConfig
from .schema import build_input_schema

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Holds one configuration and answers tool discovery and invocation."""

    def __init__(self, config: MapperConfig, executor: Optional[SafeExecutor] = None) -> None:
        self.config = config
        self.executor = executor or SafeExecutor()
        # Schemas only depend on the configuration, so build them once
        self._schemas = {
            name: build_input_schema(spec.parameters)
            for name, spec in config.commands.items()
        }

    def __contains__(self, name: str) -> bool:
        return name in self.config.commands

    def __len__(self) -> int:
        return len(self.config.commands)

    def get(self, name: str) -> CommandSpec:
        try:
            return self.config.commands[name]
        except KeyError:
            raise UnknownCommandError(name) from None

    def list_tools(self) -> list[dict[str, Any]]:
        """Tool descriptors in configuration order."""
        return [
            {
                "name": name,
                "description": spec.description,
                "inputSchema": self._schemas[name],
            }
            for name, spec in self.config.commands.items()
        ]

    def build_argv(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> list[str]:
        return build_command(self.get(name), arguments)

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ExecutionResult:
        """
        Build the argument vector for ``name`` and execute it.

        Raises:
            UnknownCommandError: No command is configured under ``name``.
            CommandLaunchError: The process could not be started.
        """
        argv = self.build_argv(name, arguments)
        logger.info("Invoking tool %s", name)
        logger.debug("Argument vector for %s: %r", name, argv)
        return await self.executor.execute(argv)
