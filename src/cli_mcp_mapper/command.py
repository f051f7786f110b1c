"""Turn a command definition plus tool arguments into an argument vector."""

import json
import math
from typing import Any, Mapping, Optional

from .models import BooleanParameter, CommandSpec, NumberParameter, StringParameter


def format_argument(value: Any) -> str:
    """Render a supplied value as a single argv word.

    Strings pass through untouched. Booleans become ``true``/``false`` and
    integral floats below 1e21 lose their fraction, matching how JSON clients
    write them.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # JSON numbers switch to exponent notation from 1e21 up
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def build_command(spec: CommandSpec, arguments: Optional[Mapping[str, Any]]) -> list[str]:
    """
    Build the argument vector for one invocation.

    The vector is ``[command, *baseArgs, *positional, *named]``. Positional
    parameters are emitted in ascending ``position`` order (ties keep
    declaration order), named parameters in declaration order. Parameters
    the caller did not supply are left out; declared defaults are not filled in.

    Values are never quoted, escaped or split: each one becomes exactly one
    element, and the vector is executed without a shell.

    Args:
        spec: The command definition.
        arguments: Tool arguments keyed by parameter name.

    Returns:
        A new list of argv words.
    """
    args = arguments or {}
    argv = [spec.command, *spec.base_args]

    def supplied(name: str) -> bool:
        return args.get(name) is not None

    positional = sorted(
        ((name, param) for name, param in spec.parameters.items() if param.is_positional),
        key=lambda item: item[1].position,
    )
    for name, _param in positional:
        if supplied(name):
            argv.append(format_argument(args[name]))

    for name, param in spec.parameters.items():
        if param.is_positional or not supplied(name):
            continue

        value = args[name]
        if isinstance(param, BooleanParameter):
            # Only the literal boolean true enables a flag; 1 or "true" do not.
            if value is True:
                argv.append(param.arg_name)
                if param.arg_value:
                    argv.append(param.arg_value)
        elif isinstance(param, (StringParameter, NumberParameter)):
            argv.append(param.arg_name)
            argv.append(format_argument(value))
        else:
            raise TypeError(f"Unsupported parameter type for '{name}': {type(param).__name__}")

    return argv
