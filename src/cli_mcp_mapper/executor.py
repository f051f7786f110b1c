"""Run argument vectors as child processes without a shell."""

import asyncio
import logging
from typing import NamedTuple, Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict

from .errors import CommandLaunchError

logger = logging.getLogger(__name__)

EXIT_MARKER = "Command exited with code"


class ProcessOutput(NamedTuple):
    """Raw result of a finished child process."""
    returncode: int
    stdout: bytes
    stderr: bytes


class ProcessLauncher(Protocol):
    """Starts a program with a literal argument list and waits for it.

    Implementations must never hand the arguments to a shell, and must raise
    OSError when the program cannot be started.
    """

    async def run(self, program: str, args: Sequence[str]) -> ProcessOutput:
        ...


class AsyncioProcessLauncher:
    """Launch processes with asyncio.create_subprocess_exec."""

    async def run(self, program: str, args: Sequence[str]) -> ProcessOutput:
        process = await asyncio.create_subprocess_exec(
            program,
            *args,
            # stdin belongs to the MCP transport, never to the child
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
        return ProcessOutput(process.returncode, stdout, stderr)


class ExecutionResult(BaseModel):
    """Captured output of a command that ran to completion."""
    model_config = ConfigDict(frozen=True)

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def text(self) -> str:
        """Text returned to the MCP client.

        On success this is stdout, falling back to stderr for commands that only
        write there. On failure it starts with a fixed exit code marker so a
        failing command without stderr still reads as a failure.
        """
        if self.succeeded:
            return self.stdout or self.stderr
        parts = [f"{EXIT_MARKER} {self.exit_code}"]
        if self.stdout:
            parts.append(self.stdout)
        if self.stderr:
            parts.append(self.stderr)
        return "\n".join(parts)


class SafeExecutor:
    """Executes argument vectors and normalizes their output."""

    def __init__(self, launcher: Optional[ProcessLauncher] = None) -> None:
        self.launcher = launcher or AsyncioProcessLauncher()

    async def execute(self, argv: Sequence[str]) -> ExecutionResult:
        """
        Run ``argv[0]`` with ``argv[1:]`` as its literal arguments.

        A command that exits non-zero is still returned as a result; only a
        failure to start the process raises.

        Raises:
            CommandLaunchError: The vector is empty or the process could not be started.
        """
        if not argv:
            raise CommandLaunchError("", "empty command")

        program, *args = argv
        logger.debug("Launching %s with arguments %r", program, args)
        try:
            output = await self.launcher.run(program, args)
        except (OSError, ValueError) as e:
            # ValueError covers NUL bytes and unencodable text in argv
            logger.error("Could not launch %s: %s", program, e)
            raise CommandLaunchError(program, str(e)) from e

        result = ExecutionResult(
            exit_code=output.returncode,
            stdout=output.stdout.decode("utf-8", errors="replace"),
            stderr=output.stderr.decode("utf-8", errors="replace"),
        )
        if result.succeeded:
            logger.info("%s finished successfully", program)
        else:
            logger.warning("%s exited with code %d", program, result.exit_code)
        return result
