from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List

from safelyq.clients.graphql import GraphQLClient
from safelyq.schemas.appointment import (
    AppointmentQuery,
    AppointmentResult,
    AppointmentSummary,
)
from safelyq.services.exceptions import (
    UNREACHABLE_MESSAGE,
    ResponseParseError,
    TransportError,
)
from safelyq.services.queries import (
    GET_CURRENT_USER_APPOINTMENTS_OPERATION,
    GET_CURRENT_USER_APPOINTMENTS_QUERY,
    data_field,
)

logger = logging.getLogger(__name__)

BOOKED_STATUS = "Booked"

AUTH_FAILED_MESSAGE = "Failed to authenticate with SafelyQ API."
NO_USER_MESSAGE = "No SafelyQ user is configured for appointment lookups."


def today_utc() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def summarize_appointments(date: str, appointments: List[AppointmentSummary]) -> str:
    lines = [appointment.describe() for appointment in appointments]
    if not lines:
        return f"No appointments found on {date}."
    return f"Appointments on {date}:\n" + "\n".join(lines)


class AppointmentService:
    """Reads the configured user's booked appointments for a single day."""

    def __init__(
        self,
        client: GraphQLClient,
        *,
        token_url: str,
        client_id: str | None,
        client_secret: str | None,
        phone_number: str | None,
    ) -> None:
        self._client = client
        self._token_url = str(token_url)
        self._client_id = client_id
        self._client_secret = client_secret
        self._phone_number = phone_number

    def resolve_date(self, query: AppointmentQuery) -> str:
        return query.date or today_utc()

    async def check_user_appointments(self, query: AppointmentQuery) -> AppointmentResult:
        date = self.resolve_date(query)
        logger.info("Checking booked appointments on %s", date)

        if not self._client_id or not self._client_secret:
            logger.warning("SafelyQ client credentials are not configured")
            return AppointmentResult(text=AUTH_FAILED_MESSAGE)
        if not self._phone_number:
            logger.warning("SafelyQ user phone number is not configured")
            return AppointmentResult(text=NO_USER_MESSAGE)

        try:
            return AppointmentResult(text=await self._lookup(date))
        except TransportError:
            return AppointmentResult(text=UNREACHABLE_MESSAGE)

    async def _authenticate(self) -> str | None:
        try:
            return await self._client.fetch_oauth_token(
                self._token_url, self._client_id or "", self._client_secret or ""
            )
        except ResponseParseError as exc:
            logger.warning("Token endpoint returned a malformed response: %s", exc)
            return None

    async def _lookup(self, date: str) -> str:
        token = await self._authenticate()
        if not token:
            logger.warning("Token request returned no access_token")
            return AUTH_FAILED_MESSAGE

        not_found = f"No appointments found or failed to fetch for {date}."
        try:
            response = await self._client.query(
                GET_CURRENT_USER_APPOINTMENTS_QUERY,
                operation_name=GET_CURRENT_USER_APPOINTMENTS_OPERATION,
                variables={
                    "status": BOOKED_STATUS,
                    "startDate": date,
                    "userInput": {"phoneNumber": self._phone_number},
                },
                bearer_token=token,
            )
        except ResponseParseError as exc:
            logger.warning("Appointment lookup received a malformed response: %s", exc)
            return not_found

        raw: Any = data_field(response, "getCurrentUserAppointments")
        if not isinstance(raw, list):
            return not_found

        appointments: List[AppointmentSummary] = []
        for item in raw:
            appointment = AppointmentSummary.from_payload(item)
            if appointment is not None:
                appointments.append(appointment)
        return summarize_appointments(date, appointments)
