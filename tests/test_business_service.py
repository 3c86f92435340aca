import asyncio

import pytest

from safelyq.schemas.business import BusinessInfoQuery
from safelyq.services.business import BusinessInfoService
from safelyq.services.exceptions import ResponseParseError, TransportError


def _search(*businesses):
    return {"data": {"searchBusinesses": list(businesses)}}


def _details(name="Chill Breeze", services=None, coupons=None):
    return {
        "data": {
            "getBusinessById": {
                "id": 42,
                "name": name,
                "services": services if services is not None else [],
                "businessCoupons": coupons if coupons is not None else [],
            }
        }
    }


def _run(service, name):
    return asyncio.run(service.get_business_info(BusinessInfoQuery(business_name=name)))


@pytest.mark.parametrize("name", [None, "", "   ", "\t\n"])
def test_blank_business_name_prompts_without_network(fake_gateway_factory, name) -> None:
    gateway = fake_gateway_factory()
    result = _run(BusinessInfoService(gateway), name)

    assert result.text == "Please specify a business name."
    assert gateway.queries == []


@pytest.mark.parametrize(
    "response",
    [
        _search(),
        {"data": {}},
        {"data": None},
        {"errors": [{"message": "boom"}]},
        {"data": {"searchBusinesses": "not-a-list"}},
    ],
)
def test_missing_or_empty_search_results_report_not_found(fake_gateway_factory, response) -> None:
    gateway = fake_gateway_factory([response])
    result = _run(BusinessInfoService(gateway), "Zeta Spa ")

    assert result.text == "No businesses found for 'Zeta Spa '."
    assert len(gateway.queries) == 1


def test_search_uses_fixed_defaults_and_first_match_only(fake_gateway_factory) -> None:
    gateway = fake_gateway_factory(
        [
            _search({"id": 42, "name": "Chill Breeze"}, {"id": 7, "name": "Other"}),
            _details(services=[{"id": 1, "name": "Haircut"}]),
        ]
    )
    _run(BusinessInfoService(gateway), "chill")

    search_variables = gateway.queries[0]["variables"]["searchBusinessInput"]
    assert search_variables == {
        "areaText": "",
        "categories": [],
        "latitude": 0,
        "longitude": 0,
        "radius": 100,
        "locationEnabled": True,
        "searchText": "chill",
        "tagsText": "",
    }
    details_call = gateway.queries[1]
    assert details_call["variables"] == {"id": 42}
    assert "42" not in details_call["query"]
    assert "entrances" not in details_call["query"]
    assert details_call["bearer_token"] is None


def test_numeric_string_identifier_is_bound_as_int(fake_gateway_factory) -> None:
    gateway = fake_gateway_factory([_search({"id": "108"}), _details()])
    _run(BusinessInfoService(gateway), "chill")

    assert gateway.queries[1]["variables"] == {"id": 108}


def test_first_match_without_id_fails_details(fake_gateway_factory) -> None:
    gateway = fake_gateway_factory([_search({"name": "No Id"})])
    result = _run(BusinessInfoService(gateway), "chill")

    assert result.text == "Failed to fetch business details."
    assert len(gateway.queries) == 1


def test_summary_lists_services_and_only_active_coupons(fake_gateway_factory) -> None:
    gateway = fake_gateway_factory(
        [
            _search({"id": 42}),
            _details(
                services=[{"id": 1, "name": "Haircut"}, {"id": 2, "name": "Shave"}],
                coupons=[
                    {"title": "A", "discount": 10, "discountType": "%", "isActive": True},
                    {"title": "B", "discount": 5, "discountType": "%", "isActive": False},
                    "garbage",
                    {"title": "C", "discount": 2.5, "discountType": "$", "isActive": True},
                ],
            ),
        ]
    )
    result = _run(BusinessInfoService(gateway), "chill")

    assert result.text == (
        "Business: Chill Breeze\n"
        "Services: Haircut, Shave\n"
        "Active Coupons: A (10%) | C (2.5$)"
    )
    assert "B" not in result.text.split("Active Coupons:")[1]


def test_zero_active_coupons_render_none_marker(fake_gateway_factory) -> None:
    gateway = fake_gateway_factory(
        [
            _search({"id": 42}),
            _details(
                coupons=[{"title": "B", "discount": 5, "discountType": "%", "isActive": False}]
            ),
        ]
    )
    result = _run(BusinessInfoService(gateway), "chill")

    assert result.text.endswith("Active Coupons: None")


def test_missing_details_report_failure(fake_gateway_factory) -> None:
    gateway = fake_gateway_factory([_search({"id": 42}), {"data": {"getBusinessById": None}}])
    result = _run(BusinessInfoService(gateway), "chill")

    assert result.text == "Failed to fetch business details."


def test_transport_failure_becomes_message(fake_gateway_factory) -> None:
    gateway = fake_gateway_factory([TransportError("down")])
    result = _run(BusinessInfoService(gateway), "chill")

    assert result.text == "Unable to reach the SafelyQ service. Please try again later."


def test_unparseable_details_report_failure(fake_gateway_factory) -> None:
    gateway = fake_gateway_factory([_search({"id": 42}), ResponseParseError("html page")])
    result = _run(BusinessInfoService(gateway), "chill")

    assert result.text == "Failed to fetch business details."


def test_identical_input_yields_identical_text(fake_gateway_factory) -> None:
    responses = [
        _search({"id": 42}),
        _details(
            services=[{"id": 1, "name": "Haircut"}],
            coupons=[{"title": "A", "discount": 10, "discountType": "%", "isActive": True}],
        ),
    ]
    gateway = fake_gateway_factory(responses * 2)
    service = BusinessInfoService(gateway)

    assert _run(service, "chill").text == _run(service, "chill").text
