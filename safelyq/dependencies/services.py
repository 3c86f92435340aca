from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from safelyq.clients.graphql import GraphQLClient
from safelyq.config import Settings, get_settings
from safelyq.services import AppointmentService, BusinessInfoService
from safelyq.tools.registry import ToolRegistry, build_tool_registry


@lru_cache(maxsize=1)
def get_graphql_client_cached() -> GraphQLClient:
    settings = get_settings()
    return GraphQLClient(
        str(settings.graphql_url),
        timeout=settings.request_timeout,
    )


def get_graphql_client() -> GraphQLClient:
    return get_graphql_client_cached()


def build_appointment_service(
    client: GraphQLClient, settings: Settings
) -> AppointmentService:
    return AppointmentService(
        client,
        token_url=str(settings.token_url),
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        phone_number=settings.user_phone_number,
    )


def build_registry(client: GraphQLClient, settings: Settings) -> ToolRegistry:
    return build_tool_registry(
        BusinessInfoService(client),
        build_appointment_service(client, settings),
        enabled=settings.enabled_tools,
    )


@lru_cache(maxsize=1)
def get_tool_registry_cached() -> ToolRegistry:
    return build_registry(get_graphql_client_cached(), get_settings())


def get_business_info_service(
    client: GraphQLClient = Depends(get_graphql_client),
) -> BusinessInfoService:
    return BusinessInfoService(client)


def get_appointment_service(
    client: GraphQLClient = Depends(get_graphql_client),
    settings: Settings = Depends(get_settings),
) -> AppointmentService:
    return build_appointment_service(client, settings)


def get_tool_registry() -> ToolRegistry:
    return get_tool_registry_cached()
