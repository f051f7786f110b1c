"""Shell metacharacters in tool arguments must reach the program verbatim."""

import pytest

from cli_mcp_mapper.command import build_command
from cli_mcp_mapper.executor import SafeExecutor

from helpers import make_spec

PAYLOADS = [
    "$(whoami)",
    "`whoami`",
    "test | cat /etc/passwd",
    "hello; rm -rf /",
    "test && cat /etc/passwd",
    "test || cat /etc/passwd",
    "test > /tmp/owned.txt",
    "line one\nline two",
    "${HOME}",
    "'quoted' \"twice\"",
]


def _echo_spec():
    return make_spec(
        "echo",
        parameters={"message": {"type": "string", "description": "Message", "position": 0}},
    )


@pytest.mark.parametrize("payload", PAYLOADS)
def test_payload_becomes_single_argument(payload):
    assert build_command(_echo_spec(), {"message": payload}) == ["echo", payload]


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", PAYLOADS)
async def test_payload_is_echoed_literally(payload):
    argv = build_command(_echo_spec(), {"message": payload})

    result = await SafeExecutor().execute(argv)

    assert result.succeeded
    assert result.text == payload + "\n"


def test_named_argument_payload_is_not_split():
    spec = make_spec(
        "grep",
        parameters={"pattern": {"type": "string", "description": "", "argName": "-e"}},
    )

    argv = build_command(spec, {"pattern": "x; rm -rf ~"})

    assert argv == ["grep", "-e", "x; rm -rf ~"]


def test_number_parameter_with_string_payload_stays_one_word():
    spec = make_spec(
        "head",
        parameters={"lines": {"type": "number", "description": "", "argName": "-n"}},
    )

    assert build_command(spec, {"lines": "5; whoami"}) == ["head", "-n", "5; whoami"]


def test_boolean_parameter_cannot_smuggle_text():
    spec = make_spec(
        "ls",
        parameters={"long": {"type": "boolean", "description": "", "argName": "-l"}},
    )

    assert build_command(spec, {"long": "-la; whoami"}) == ["ls"]


@pytest.mark.asyncio
async def test_payloads_across_parameters(tmp_path):
    spec = make_spec(
        "printf",
        parameters={
            "fmt": {"type": "string", "description": "", "position": 0},
            "first": {"type": "string", "description": "", "position": 1},
            "second": {"type": "string", "description": "", "position": 2},
        },
    )
    marker = tmp_path / "created"

    argv = build_command(
        spec,
        {"fmt": "%s|%s", "first": f"$(touch {marker})", "second": f"; touch {marker}"},
    )
    result = await SafeExecutor().execute(argv)

    assert result.text == f"$(touch {marker})|; touch {marker}"
    assert not marker.exists()
