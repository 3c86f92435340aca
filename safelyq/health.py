# safelyq/health.py
from fastapi import APIRouter
router = APIRouter()

@router.get("/mcp/info")
def mcp_info():
    return {"status":"ok","transport":"streamable-http","path":"/mcp"}

@router.get("/health")
def health():
    return {"ok": True}
