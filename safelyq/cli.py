#!/usr/bin/env python3
"""Command line front-end for the SafelyQ tools."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict

from safelyq.config import get_settings
from safelyq.dependencies.services import get_graphql_client_cached, get_tool_registry_cached
from safelyq.services.agent_logging import configure_logging
from safelyq.services.exceptions import ToolArgumentError, UnknownToolError
from safelyq.tools.agent import AgentConfigurationError, build_agent

BANNER = "SafelyQ tools ready. Ask about businesses or appointments (type 'exit' to quit):"


def _parse_arguments(raw: str | None) -> Dict[str, Any]:
    if not raw:
        return {}
    value = json.loads(raw)
    if not isinstance(value, dict):
        raise ValueError("--args must be a JSON object")
    return value


async def _call_tool(name: str, arguments: Dict[str, Any]) -> int:
    registry = get_tool_registry_cached()
    try:
        result = await registry.dispatch(name, arguments)
    except UnknownToolError as exc:
        print(f"{exc}. Available tools: {', '.join(registry.names())}", file=sys.stderr)
        return 2
    except ToolArgumentError as exc:
        print(f"{exc}: {exc.errors}", file=sys.stderr)
        return 2
    print(result.text)
    return 0


async def _ask(prompt: str) -> int:
    agent = build_agent(get_settings(), get_tool_registry_cached())
    print(await agent.arun(prompt))
    return 0


async def _repl() -> int:
    agent = build_agent(get_settings(), get_tool_registry_cached())
    print(BANNER)
    while True:
        try:
            text = await asyncio.to_thread(input, "\n> ")
        except EOFError:
            break
        if not text.strip():
            continue
        if text.strip().lower() == "exit":
            break
        reply = await agent.arun(text)
        print("Response:")
        print(reply)
    return 0


async def _run(args: argparse.Namespace, arguments: Dict[str, Any]) -> int:
    try:
        if args.call:
            return await _call_tool(args.call, arguments)
        if args.prompt:
            return await _ask(args.prompt)
        return await _repl()
    finally:
        await get_graphql_client_cached().close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Ask the SafelyQ assistant about businesses and your booked "
            "appointments, or call one of its tools directly."
        )
    )
    parser.add_argument(
        "--prompt",
        help="Send a single prompt to the assistant and print the reply.",
    )
    parser.add_argument(
        "--call",
        metavar="TOOL",
        help="Dispatch a tool directly without the language model.",
    )
    parser.add_argument(
        "--args",
        metavar="JSON",
        help="JSON object with the arguments for --call.",
    )

    args = parser.parse_args(argv)
    configure_logging()

    try:
        arguments = _parse_arguments(args.args)
    except ValueError as exc:
        print(f"Invalid arguments: {exc}", file=sys.stderr)
        return 2

    try:
        return asyncio.run(_run(args, arguments))
    except AgentConfigurationError as exc:
        print(f"Assistant unavailable: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        return 130


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
