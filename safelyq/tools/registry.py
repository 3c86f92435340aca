"""Typed tool contracts and the dispatch table used by every model boundary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from safelyq.schemas.appointment import AppointmentQuery, AppointmentResult
from safelyq.schemas.business import BusinessInfoQuery, BusinessInfoResult
from safelyq.services.appointment import AppointmentService
from safelyq.services.business import BusinessInfoService
from safelyq.services.exceptions import ToolArgumentError, UnknownToolError

logger = logging.getLogger(__name__)

GET_BUSINESS_INFO = "get_business_info"
CHECK_USER_APPOINTMENTS = "check_user_appointments"

GET_BUSINESS_INFO_DESCRIPTION = (
    "Search for a business and return details from SafelyQ. Trigger when the "
    "user asks about a business by name (e.g. 'tell me about X', 'info on X')."
)
CHECK_USER_APPOINTMENTS_DESCRIPTION = (
    "Check a user's booked appointments. Triggers when the user mentions: "
    "appointments, my appointments, schedule, bookings, upcoming, see my "
    "appointments, check appointments. If the user provides only a date "
    "(YYYY-MM-DD), treat that as the date to check. Parameter: date "
    "(YYYY-MM-DD) optional; defaults to today."
)

ToolHandler = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    display_name: str
    description: str
    args_schema: Type[BaseModel]
    handler: ToolHandler


class ToolRegistry:
    """Maps tool names to their argument schema and handler."""

    def __init__(self, specs: Iterable[ToolSpec] = ()) -> None:
        self._specs: Dict[str, ToolSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._specs:
            raise ValueError(f"Tool '{spec.name}' is already registered")
        self._specs[spec.name] = spec

    def get(self, name: str) -> ToolSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def names(self) -> List[str]:
        return list(self._specs)

    def specs(self) -> List[ToolSpec]:
        return list(self._specs.values())

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    def coerce(self, name: str, arguments: Mapping[str, Any] | BaseModel | None) -> BaseModel:
        """Validate raw model arguments against the tool's schema."""

        spec = self.get(name)
        if isinstance(arguments, spec.args_schema):
            return arguments
        if isinstance(arguments, BaseModel):
            arguments = arguments.model_dump()
        if arguments is not None and not isinstance(arguments, Mapping):
            raise ToolArgumentError(
                name, [{"type": "dict_type", "loc": (), "msg": "Arguments must be an object"}]
            )
        try:
            return spec.args_schema.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            raise ToolArgumentError(
                name, exc.errors(include_url=False, include_context=False), cause=exc
            ) from exc

    async def dispatch(
        self, name: str, arguments: Mapping[str, Any] | BaseModel | None = None
    ) -> Any:
        spec = self.get(name)
        query = self.coerce(name, arguments)
        logger.info("Dispatching tool '%s' with %s", name, query.model_dump())
        result = await spec.handler(query)
        logger.info("Tool '%s' returned: %s", name, getattr(result, "text", result))
        return result

    def describe(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "inputSchema": spec.args_schema.model_json_schema(),
            }
            for spec in self._specs.values()
        ]


def build_tool_registry(
    business_service: BusinessInfoService,
    appointment_service: AppointmentService,
    *,
    enabled: Optional[Iterable[str]] = None,
) -> ToolRegistry:
    """Register the SafelyQ tools, optionally restricted to ``enabled`` names."""

    async def get_business_info(query: BusinessInfoQuery) -> BusinessInfoResult:
        return await business_service.get_business_info(query)

    async def check_user_appointments(query: AppointmentQuery) -> AppointmentResult:
        return await appointment_service.check_user_appointments(query)

    available = [
        ToolSpec(
            name=GET_BUSINESS_INFO,
            display_name="Business Info",
            description=GET_BUSINESS_INFO_DESCRIPTION,
            args_schema=BusinessInfoQuery,
            handler=get_business_info,
        ),
        ToolSpec(
            name=CHECK_USER_APPOINTMENTS,
            display_name="Appointments",
            description=CHECK_USER_APPOINTMENTS_DESCRIPTION,
            args_schema=AppointmentQuery,
            handler=check_user_appointments,
        ),
    ]

    if enabled is None:
        return ToolRegistry(available)

    wanted = set(enabled)
    unknown = wanted - {spec.name for spec in available}
    if unknown:
        raise ValueError(f"Unknown tools in configuration: {', '.join(sorted(unknown))}")
    return ToolRegistry(spec for spec in available if spec.name in wanted)
