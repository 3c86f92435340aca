"""GraphQL documents sent to the SafelyQ API.

Identifiers, dates and user details are always passed as variables.
"""

from typing import Any

SEARCH_BUSINESSES_OPERATION = "SearchBusinesses"
SEARCH_BUSINESSES_QUERY = """
query SearchBusinesses($searchBusinessInput: SearchBusinessInput) {
  searchBusinesses(searchBusinessInput: $searchBusinessInput) {
    id name address1 address2 city state zipCode country description
  }
}
"""

GET_BUSINESS_BY_ID_OPERATION = "GetBusinessById"
GET_BUSINESS_BY_ID_QUERY = """
query GetBusinessById($id: Int!) {
  getBusinessById(id: $id) {
    id
    name
    businessCoupons {
      code title discount discountType isActive startDate endDate
    }
    services {
      id name
    }
  }
}
"""

GET_CURRENT_USER_APPOINTMENTS_OPERATION = "GetCurrentUserAppointments"
GET_CURRENT_USER_APPOINTMENTS_QUERY = """
query GetCurrentUserAppointments($status: String, $startDate: String, $userInput: UserInput) {
  getCurrentUserAppointments(status: $status, startDate: $startDate, userInput: $userInput) {
    id
    startTimeOnly
    startDateOnly
    status
    allocatedTimeFormatted
    business {
      name
    }
  }
}
"""


def data_field(document: Any, field: str) -> Any:
    """Return ``document["data"][field]`` or ``None`` when any level is missing."""

    if not isinstance(document, dict):
        return None
    data = document.get("data")
    if not isinstance(data, dict):
        return None
    return data.get(field)
