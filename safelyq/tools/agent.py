import ast
import json
import logging
from functools import lru_cache
import os
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
from google.api_core.exceptions import NotFound as GoogleAPINotFound
from langchain_google_genai import ChatGoogleGenerativeAI

from safelyq.config import Settings, get_settings
from safelyq.dependencies.services import get_tool_registry_cached
from safelyq.schemas.agent import AgentRunRequest, AgentRunResponse, AgentToolsResponse
from safelyq.services.agent_logging import AgentLoggingCallbackHandler, AgentRunCollector
from safelyq.services.langchain_compat import ToolCallingAgent, initialize_agent
from safelyq.tools.registry import ToolRegistry
from safelyq.tools.structured import as_structured_tools

logger = logging.getLogger(__name__)

router = APIRouter()

SYSTEM_PROMPT = (
    "You are the SafelyQ assistant. Use the available tools to answer questions "
    "about businesses listed on SafelyQ and about the user's booked "
    "appointments. Dates passed to tools must use the YYYY-MM-DD format. "
    "Base your answer on the tool result and keep it short."
)


class AgentConfigurationError(RuntimeError):
    """Raised when the agent cannot be built from the current settings."""


def _cache_key(settings: Settings) -> Tuple[str, float, Tuple[str, ...]]:
    return (
        settings.agent_google_model,
        settings.agent_temperature,
        tuple(settings.enabled_tools),
    )


def _strip_nones(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v not in (None, [], {})}


def _safe_parse_string(value: str) -> Any:
    text = value.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        try:
            return ast.literal_eval(text)
        except (ValueError, SyntaxError):
            return text


def _normalize_io(value: Any) -> Any:
    if value is None:
        return None
    if hasattr(value, "model_dump"):
        return value.model_dump()  # type: ignore[call-arg]
    if isinstance(value, str):
        return _safe_parse_string(value)
    return value


def summarize_tool_result(
    registry: ToolRegistry, tool_name: Optional[str], tool_input: Any, tool_output: Any
) -> tuple[Optional[str], List[Dict[str, Any]]]:
    """Return the display name of the tool and the data points it produced."""

    if not tool_name:
        return None, []

    display_name = (
        registry.get(tool_name).display_name
        if tool_name in registry
        else tool_name.replace("_", " ").title()
    )

    normalized_input = _normalize_io(tool_input)
    data_point: Dict[str, Any] = {}
    if isinstance(normalized_input, dict):
        data_point.update(normalized_input)
    elif normalized_input is not None:
        data_point["input"] = normalized_input
    if isinstance(tool_output, str):
        data_point["text"] = tool_output
    elif tool_output is not None:
        data_point["text"] = str(tool_output)

    data_point = _strip_nones(data_point)
    return display_name, [data_point] if data_point else []


def build_agent(settings: Settings, registry: ToolRegistry) -> ToolCallingAgent:
    api_key = settings.google_api_key or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise AgentConfigurationError("GOOGLE_API_KEY not set")

    llm = ChatGoogleGenerativeAI(
        model=settings.agent_google_model,
        temperature=settings.agent_temperature,
        google_api_key=api_key,
    )
    return initialize_agent(
        tools=as_structured_tools(registry),
        llm=llm,
        system_prompt=SYSTEM_PROMPT,
        callbacks=[AgentLoggingCallbackHandler()],
    )


@lru_cache(maxsize=1)
def _get_agent_bundle(cache_key: Tuple[str, float, Tuple[str, ...]]):
    settings = get_settings()
    registry = get_tool_registry_cached()
    return build_agent(settings, registry), registry


def _get_agent(settings: Settings) -> Tuple[ToolCallingAgent, ToolRegistry]:
    try:
        return _get_agent_bundle(_cache_key(settings))
    except AgentConfigurationError as exc:
        raise HTTPException(status_code=500, detail=f"{exc} on server") from exc


@router.post("/run", response_model=AgentRunResponse)
async def run_agent(
    req: AgentRunRequest,
    settings: Settings = Depends(get_settings),
):
    try:
        agent, registry = _get_agent(settings)
        collector = AgentRunCollector()

        output = await agent.arun(req.prompt, callbacks=[collector])
        tool_name, data_points = summarize_tool_result(
            registry, collector.tool_name, collector.tool_input, collector.tool_output
        )

        return AgentRunResponse(
            output=output,
            tool=tool_name,
            data_points=data_points,
        )
    except HTTPException:
        raise
    except GoogleAPINotFound as exc:
        raise HTTPException(
            status_code=500,
            detail=(
                "Agent model is unavailable. Configure SAFELYQ_AGENT_GOOGLE_MODEL "
                "to a supported model such as 'gemini-2.0-flash'. Original error: "
                f"{exc}"
            ),
        ) from exc
    except Exception as exc:  # pragma: no cover - runtime dependency
        logger.exception("Agent run failed")
        raise HTTPException(status_code=500, detail=f"Agent error: {exc}") from exc


@router.get("/run", response_model=AgentRunResponse)
async def run_agent_get(
    prompt: str = Query(..., description="Your natural language question"),
    settings: Settings = Depends(get_settings),
):
    return await run_agent(AgentRunRequest(prompt=prompt), settings)


@router.get("/tools", response_model=AgentToolsResponse)
async def list_agent_tools(settings: Settings = Depends(get_settings)):
    _, registry = _get_agent(settings)
    return AgentToolsResponse(
        tools=[
            {"name": spec.name, "description": spec.description}
            for spec in registry.specs()
        ]
    )
