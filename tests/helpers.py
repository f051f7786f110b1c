from __future__ import annotations

from typing import Any, Sequence

from cli_mcp_mapper.executor import ProcessOutput
from cli_mcp_mapper.models import CommandSpec


def make_spec(command: str = "echo", **fields: Any) -> CommandSpec:
    raw: dict[str, Any] = {"command": command, "description": f"Run {command}"}
    raw.update(fields)
    return CommandSpec.model_validate(raw)


class FakeLauncher:
    """Records launches instead of creating processes."""

    def __init__(
        self,
        returncode: int = 0,
        stdout: bytes = b"",
        stderr: bytes = b"",
        error: Exception | None = None,
    ) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.error = error
        self.calls: list[tuple[str, list[str]]] = []

    async def run(self, program: str, args: Sequence[str]) -> ProcessOutput:
        self.calls.append((program, list(args)))
        if self.error is not None:
            raise self.error
        return ProcessOutput(self.returncode, self.stdout, self.stderr)
