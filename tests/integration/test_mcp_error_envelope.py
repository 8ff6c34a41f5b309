"""Wire-level integration tests for the MCP tool surface."""

from __future__ import annotations

import json
import subprocess
import sys


def _run_session(env: dict[str, str], calls: list[tuple[str, dict]]) -> dict[int, dict]:
    """Send initialize + tools/call messages over stdio; return responses by id."""
    proc = subprocess.Popen(
        [sys.executable, "-m", "mdanchor.server"],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
    )

    assert proc.stdin is not None
    assert proc.stdout is not None
    assert proc.stderr is not None

    messages: list[dict] = [
        {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "initialize",
            "params": {
                "protocolVersion": "2025-03-26",
                "capabilities": {},
                "clientInfo": {"name": "pytest", "version": "0"},
            },
        },
        {"jsonrpc": "2.0", "method": "notifications/initialized"},
    ]
    for offset, (name, arguments) in enumerate(calls):
        messages.append(
            {
                "jsonrpc": "2.0",
                "id": 2 + offset,
                "method": "tools/call",
                "params": {"name": name, "arguments": arguments},
            }
        )

    for message in messages:
        proc.stdin.write(json.dumps(message) + "\n")
    proc.stdin.close()

    stdout_lines = [line for line in proc.stdout.read().splitlines() if line.strip()]
    proc.stderr.read()  # Drain for clean process shutdown on all platforms
    proc.wait(timeout=10)

    responses = [json.loads(line) for line in stdout_lines]
    return {response["id"]: response for response in responses if "id" in response}


def test_mdanchor_error_serializes_to_structured_tool_error(
    subprocess_env: dict[str, str],
) -> None:
    """MdAnchorError should be returned as structured JSON in tool result text."""
    responses = _run_session(
        subprocess_env,
        [("classify_context", {"text": "one line", "line": 3, "character": 0})],
    )
    tool_response = responses[2]

    assert tool_response["result"]["isError"] is True

    text_payload = tool_response["result"]["content"][0]["text"]
    assert "Error executing tool" not in text_payload

    parsed = json.loads(text_payload)
    assert parsed["error"]["code"] == "INVALID_POSITION"
    assert parsed["error"]["recoverable"] is True
    assert "past the end of the document" in parsed["error"]["message"]


def test_slugify_heading_round_trip(subprocess_env: dict[str, str]) -> None:
    responses = _run_session(
        subprocess_env,
        [("slugify_heading", {"heading": "404", "mode": "gitlab"})],
    )
    result = responses[2]["result"]

    assert result.get("isError", False) is False
    payload = json.loads(result["content"][0]["text"])
    assert payload == {"slug": "anchor-404", "mode": "gitlab", "downcase": True}
