# safelyq/mcp_server.py
from __future__ import annotations

import logging
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from safelyq.dependencies.services import get_tool_registry_cached
from safelyq.services.exceptions import ToolArgumentError
from safelyq.tools.registry import (
    CHECK_USER_APPOINTMENTS,
    CHECK_USER_APPOINTMENTS_DESCRIPTION,
    GET_BUSINESS_INFO,
    GET_BUSINESS_INFO_DESCRIPTION,
)

log = logging.getLogger("safelyq.mcp")

# Mounted under /mcp by the FastAPI app, so the transport itself lives at its root.
mcp = FastMCP("safelyq_mcp", streamable_http_path="/")


async def _dispatch(name: str, arguments: dict) -> str:
    registry = get_tool_registry_cached()
    log.debug("%s input=%s", name, arguments)
    try:
        result = await registry.dispatch(name, arguments)
    except ToolArgumentError as exc:
        return f"Invalid arguments for {name}: " + "; ".join(
            str(error.get("msg")) for error in exc.errors
        )
    log.debug("%s output=%s", name, result.text)
    return result.text


@mcp.tool(name=GET_BUSINESS_INFO, description=GET_BUSINESS_INFO_DESCRIPTION)
async def get_business_info(
    business_name: Annotated[
        Optional[str], Field(description="Business name, or part of it")
    ] = "",
) -> str:
    return await _dispatch(GET_BUSINESS_INFO, {"business_name": business_name})


@mcp.tool(name=CHECK_USER_APPOINTMENTS, description=CHECK_USER_APPOINTMENTS_DESCRIPTION)
async def check_user_appointments(
    date: Annotated[
        Optional[str],
        Field(description="Date to check (YYYY-MM-DD); defaults to today (UTC)"),
    ] = None,
) -> str:
    return await _dispatch(CHECK_USER_APPOINTMENTS, {"date": date})
