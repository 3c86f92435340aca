# safelyq/tools/mcp.py
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from safelyq.config import Settings, get_settings
from safelyq.dependencies.services import get_tool_registry
from safelyq.schemas.agent import ToolCall, ToolCallResponse
from safelyq.services.exceptions import ToolArgumentError, UnknownToolError
from safelyq.tools.registry import ToolRegistry

router = APIRouter()


def require_api_key(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
):
    expected = settings.api_key
    if expected and x_api_key != expected:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return True


@router.get("/tools/list", dependencies=[Depends(require_api_key)])
def tools_list(registry: ToolRegistry = Depends(get_tool_registry)):
    return {"tools": registry.describe()}


@router.post(
    "/tools/call",
    response_model=ToolCallResponse,
    dependencies=[Depends(require_api_key)],
)
async def tools_call(
    call: ToolCall,
    registry: ToolRegistry = Depends(get_tool_registry),
):
    try:
        result = await registry.dispatch(call.name, call.arguments)
    except UnknownToolError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ToolArgumentError as exc:
        raise HTTPException(status_code=422, detail=exc.errors) from exc
    return ToolCallResponse(tool=call.name, text=result.text)
