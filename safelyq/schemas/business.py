from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from safelyq.schemas.payload import identifier_or_none, number_or_none, text_or_none


def format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


class BusinessInfoQuery(BaseModel):
    business_name: Optional[str] = Field(
        default="",
        description="Business name, or part of it, to look up in SafelyQ",
    )

    @field_validator("business_name", mode="before")
    @classmethod
    def blank_when_missing(cls, value: Any) -> Any:
        # A null name is treated like an empty one; the pipeline asks for a name.
        return "" if value is None else value


class BusinessInfoResult(BaseModel):
    text: str


class BusinessSearchMatch(BaseModel):
    """One candidate returned by ``searchBusinesses``."""

    id: Optional[int] = None
    name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["BusinessSearchMatch"]:
        if not isinstance(payload, dict):
            return None
        return cls(
            id=identifier_or_none(payload.get("id")),
            name=text_or_none(payload.get("name")),
            address1=text_or_none(payload.get("address1")),
            address2=text_or_none(payload.get("address2")),
            city=text_or_none(payload.get("city")),
            state=text_or_none(payload.get("state")),
            zip_code=text_or_none(payload.get("zipCode")),
            country=text_or_none(payload.get("country")),
            description=text_or_none(payload.get("description")),
        )


class ServiceSummary(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["ServiceSummary"]:
        if not isinstance(payload, dict):
            return None
        return cls(id=identifier_or_none(payload.get("id")), name=text_or_none(payload.get("name")))


class CouponSummary(BaseModel):
    code: Optional[str] = None
    title: Optional[str] = None
    discount: Optional[float] = None
    discount_type: Optional[str] = None
    is_active: bool = False
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["CouponSummary"]:
        if not isinstance(payload, dict):
            return None
        return cls(
            code=text_or_none(payload.get("code")),
            title=text_or_none(payload.get("title")),
            discount=number_or_none(payload.get("discount")),
            discount_type=text_or_none(payload.get("discountType")),
            is_active=payload.get("isActive") is True,
            start_date=text_or_none(payload.get("startDate")),
            end_date=text_or_none(payload.get("endDate")),
        )

    def describe(self) -> str:
        """Render the coupon as ``"<title> (<discount><type>)"``."""

        discount = format_number(self.discount) if self.discount is not None else ""
        return f"{self.title or 'Unknown'} ({discount}{self.discount_type or ''})"


class BusinessDetails(BaseModel):
    """Projection of ``getBusinessById``."""

    id: Optional[int] = None
    name: Optional[str] = None
    services: List[ServiceSummary] = Field(default_factory=list)
    coupons: List[CouponSummary] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["BusinessDetails"]:
        if not isinstance(payload, dict):
            return None

        services: List[ServiceSummary] = []
        raw_services = payload.get("services")
        if isinstance(raw_services, list):
            for item in raw_services:
                service = ServiceSummary.from_payload(item)
                if service is not None:
                    services.append(service)

        coupons: List[CouponSummary] = []
        raw_coupons = payload.get("businessCoupons")
        if isinstance(raw_coupons, list):
            for item in raw_coupons:
                coupon = CouponSummary.from_payload(item)
                if coupon is not None:
                    coupons.append(coupon)

        return cls(
            id=identifier_or_none(payload.get("id")),
            name=text_or_none(payload.get("name")),
            services=services,
            coupons=coupons,
        )

    @property
    def active_coupons(self) -> List[CouponSummary]:
        return [coupon for coupon in self.coupons if coupon.is_active]
