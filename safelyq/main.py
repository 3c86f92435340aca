from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from safelyq.config import get_settings
from safelyq.dependencies.services import get_graphql_client_cached
from safelyq.health import router as health_router
from safelyq.mcp_server import mcp
from safelyq.services.agent_logging import configure_logging
from safelyq.tools.agent import router as agent_router
from safelyq.tools.appointment import router as appointment_router
from safelyq.tools.business import router as business_router
from safelyq.tools.mcp import router as tools_router

# Configure logging as soon as the module is loaded
configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    settings = get_settings()

    settings_snapshot = settings.model_dump(
        exclude={"client_secret", "google_api_key", "api_key", "user_phone_number"},
        mode="json",
    )
    logger.info("Application settings on startup: %s", settings_snapshot)

    client = get_graphql_client_cached()
    async with mcp.session_manager.run():
        logger.info("Application startup complete.")
        try:
            yield
        finally:
            logger.info("Closing SafelyQ client connection.")
            await client.close()
            logger.info("Application shutdown complete.")


settings = get_settings()
app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.cors_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(business_router, prefix="/tools/business")
app.include_router(appointment_router, prefix="/tools/appointment")
app.include_router(agent_router, prefix="/agent")
app.include_router(tools_router)  # Exposes /tools/list and /tools/call
app.include_router(health_router)

# Mount the MCP Streamable HTTP server at /mcp
app.mount("/mcp", mcp.streamable_http_app())
