from __future__ import annotations

from typing import Any, List

from langchain_core.tools import StructuredTool

from safelyq.services.exceptions import ToolArgumentError
from safelyq.tools.registry import ToolRegistry, ToolSpec


def _tool_for(registry: ToolRegistry, spec: ToolSpec) -> StructuredTool:
    async def _run(**kwargs: Any) -> str:
        try:
            result = await registry.dispatch(spec.name, kwargs)
        except ToolArgumentError as exc:
            details = "; ".join(str(error.get("msg")) for error in exc.errors)
            return f"Invalid arguments for {spec.name}: {details}"
        return result.text

    return StructuredTool.from_function(
        coroutine=_run,
        name=spec.name,
        description=spec.description,
        args_schema=spec.args_schema,
    )


def as_structured_tools(registry: ToolRegistry) -> List[StructuredTool]:
    """Expose every registered tool as an async LangChain ``StructuredTool``."""

    return [_tool_for(registry, spec) for spec in registry.specs()]
