"""MCP server implementation."""

import argparse
import asyncio
import logging
import sys
from typing import Any, Optional, Sequence

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .config import load_config, parse_config, read_config_document, resolve_config_path, resolve_log_level
from .errors import ConfigError, ConfigValidationError
from .registry import CommandRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "cli-mcp-mapper"


class MapperServer:
    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry
        self.server: Server = Server(
            name=SERVER_NAME,
            version=__version__,
            instructions="Exposes operator-configured command line tools. Arguments are passed to the programs directly, never through a shell.",
        )

        # Register handlers
        self._register_handlers()

    # --- Handler Registration (Called from __init__) ---
    def _register_handlers(self) -> None:
        """Registers handlers after self.server is created."""

        @self.server.list_tools()  # type: ignore[misc]
        async def list_tools_handler() -> list[Tool]:
            return await self.list_tools_impl()

        @self.server.call_tool()  # type: ignore[misc]
        async def _dispatch_tool_call(
            tool_name: str,
            arguments: dict[str, Any],
        ) -> list[TextContent]:
            return await self.call_tool_impl(tool_name, arguments)

    # --- Tool Implementations ---

    async def list_tools_impl(self) -> list[Tool]:
        """Provides the configured commands as MCP tools."""
        return [Tool(**descriptor) for descriptor in self.registry.list_tools()]

    async def call_tool_impl(
        self,
        tool_name: str,
        arguments: Optional[dict[str, Any]],
    ) -> list[TextContent]:
        """Run the configured command for ``tool_name``.

        A non-zero exit is returned as normal text output carrying the exit
        code. Unknown tools and launch failures raise, and the MCP library
        reports them to the client as tool errors.
        """
        result = await self.registry.invoke(tool_name, arguments or {})
        return [TextContent(type="text", text=result.text)]

    # --- Server Run ---

    async def run(self) -> None:
        """Run the server using stdio."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def dry_run(config_path: Optional[str] = None) -> int:
    """Validate the configuration and report it without starting the server."""
    path = resolve_config_path(config_path)
    try:
        config = parse_config(read_config_document(path))
    except ConfigValidationError as e:
        print("Error: Invalid command definitions", file=sys.stderr)
        for name, messages in e.problems.items():
            for message in messages:
                print(f"  ✗ {name}: {message}", file=sys.stderr)
        return 1
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Configuration loaded successfully from: {path}")
    print(f"Found {len(config.commands)} command(s):")
    for name, spec in config.commands.items():
        print(f"  ✓ {name}: {spec.description}")
    print("Dry-run completed successfully. Configuration is valid.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="Expose configured command line tools over MCP (stdio).",
    )
    parser.add_argument(
        "--config",
        help="Path to commands.json (default: $CLI_MCP_MAPPER_CONFIG or ~/.config/cli-mcp-mapper/commands.json)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the configuration, list the commands and exit",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: $CLI_MCP_MAPPER_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def serve(config_path: Optional[str] = None) -> None:
    registry = CommandRegistry(load_config(config_path))
    server = MapperServer(registry)
    logger.info("Serving %d tool(s) over stdio", len(registry))
    await server.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        level = resolve_log_level(args.log_level)
    except ConfigError as e:
        parser.error(str(e))

    # stdout is reserved for the MCP protocol
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.dry_run:
        return dry_run(args.config)

    try:
        asyncio.run(serve(args.config))
    except ConfigError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
