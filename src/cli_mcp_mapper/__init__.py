"""CLI MCP Mapper - expose configured command line tools as MCP tools."""

__version__ = "1.0.0"

from .command import build_command
from .executor import ExecutionResult, SafeExecutor
from .models import CommandSpec, MapperConfig
from .registry import CommandRegistry
from .schema import build_input_schema

__all__ = [
    "CommandRegistry",
    "CommandSpec",
    "ExecutionResult",
    "MapperConfig",
    "SafeExecutor",
    "build_command",
    "build_input_schema",
]
