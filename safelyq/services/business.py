from __future__ import annotations

import logging
from typing import Any, Dict

from safelyq.clients.graphql import GraphQLClient
from safelyq.schemas.business import (
    BusinessDetails,
    BusinessInfoQuery,
    BusinessInfoResult,
    BusinessSearchMatch,
)
from safelyq.services.exceptions import (
    UNREACHABLE_MESSAGE,
    ResponseParseError,
    TransportError,
)
from safelyq.services.queries import (
    GET_BUSINESS_BY_ID_OPERATION,
    GET_BUSINESS_BY_ID_QUERY,
    SEARCH_BUSINESSES_OPERATION,
    SEARCH_BUSINESSES_QUERY,
    data_field,
)

logger = logging.getLogger(__name__)

SEARCH_RADIUS = 100

MISSING_NAME_MESSAGE = "Please specify a business name."
DETAILS_FAILED_MESSAGE = "Failed to fetch business details."


def _search_variables(business_name: str) -> Dict[str, Any]:
    return {
        "searchBusinessInput": {
            "areaText": "",
            "categories": [],
            "latitude": 0,
            "longitude": 0,
            "radius": SEARCH_RADIUS,
            "locationEnabled": True,
            "searchText": business_name,
            "tagsText": "",
        }
    }


def summarize_business(details: BusinessDetails) -> str:
    services = [service.name or "Unknown" for service in details.services]
    coupons = [coupon.describe() for coupon in details.active_coupons]
    return (
        f"Business: {details.name or 'Unknown'}\n"
        f"Services: {', '.join(services)}\n"
        f"Active Coupons: {' | '.join(coupons) if coupons else 'None'}"
    )


class BusinessInfoService:
    """Looks up a business by name and summarises its services and coupons."""

    def __init__(self, client: GraphQLClient) -> None:
        self._client = client

    async def get_business_info(self, query: BusinessInfoQuery) -> BusinessInfoResult:
        if not query.business_name or not query.business_name.strip():
            return BusinessInfoResult(text=MISSING_NAME_MESSAGE)

        logger.info("Looking up business '%s'", query.business_name)
        try:
            return BusinessInfoResult(text=await self._lookup(query.business_name))
        except TransportError:
            return BusinessInfoResult(text=UNREACHABLE_MESSAGE)
        except ResponseParseError as exc:
            logger.warning("Business lookup received a malformed response: %s", exc)
            return BusinessInfoResult(text=DETAILS_FAILED_MESSAGE)

    async def _lookup(self, business_name: str) -> str:
        search = await self._client.query(
            SEARCH_BUSINESSES_QUERY,
            operation_name=SEARCH_BUSINESSES_OPERATION,
            variables=_search_variables(business_name),
        )
        candidates = data_field(search, "searchBusinesses")
        if not isinstance(candidates, list) or not candidates:
            logger.info("No businesses matched '%s'", business_name)
            return f"No businesses found for '{business_name}'."

        match = BusinessSearchMatch.from_payload(candidates[0])
        if match is None or match.id is None:
            logger.warning("First search match for '%s' has no usable id", business_name)
            return DETAILS_FAILED_MESSAGE

        logger.info("Fetching details for business %s (%s)", match.id, match.name)
        response = await self._client.query(
            GET_BUSINESS_BY_ID_QUERY,
            operation_name=GET_BUSINESS_BY_ID_OPERATION,
            variables={"id": match.id},
        )
        details = BusinessDetails.from_payload(data_field(response, "getBusinessById"))
        if details is None:
            logger.warning("Business %s details missing from response", match.id)
            return DETAILS_FAILED_MESSAGE

        return summarize_business(details)
