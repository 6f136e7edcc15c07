"""Pydantic request/response schemas for the HTTP API.

These are external contracts, separate from the application DTOs.
Field names are camelCase on the wire to match the storefront.
Required checkout fields default to empty values so that the domain
reports which one is missing.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from foodops.application.dto import AddressSpec, CreateOrderSpec, OrderDTO, OrderItemSpec
from foodops.domain.service.analytics import AnalyticsReport


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


_FIELD_ALIASES = {"address": "addressParts"}


def wire_field(field: str | None) -> str | None:
    """Translate a domain field path such as ``address.city`` to request keys."""
    if field is None:
        return None
    segments = []
    for segment in field.split("."):
        name, bracket, index = segment.partition("[")
        segments.append(_FIELD_ALIASES.get(name, to_camel(name)) + bracket + index)
    return ".".join(segments)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class AddressPartsSchema(CamelModel):
    city: str = ""
    street: str = ""
    building: str = ""
    apartment: str | None = None
    entrance: str | None = None
    floor: str | None = None


class OrderItemSchema(CamelModel):
    name: str = ""
    price: Decimal = Decimal("0")
    quantity: int = 0


class CreateOrderRequest(CamelModel):
    customer_name: str = ""
    customer_phone: str = ""
    address_parts: AddressPartsSchema = Field(default_factory=AddressPartsSchema)
    comment: str | None = None
    payment_method: str = ""
    items: list[OrderItemSchema] = Field(default_factory=list)
    subtotal: Decimal = Decimal("0")
    delivery_fee: Decimal = Decimal("0")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "customerName": "Олена",
                    "customerPhone": "+380991234567",
                    "addressParts": {"city": "Київ", "street": "Хрещатик", "building": "1"},
                    "paymentMethod": "cash",
                    "items": [
                        {"name": "Маргарита", "price": 499, "quantity": 1},
                        {"name": "Кола", "price": 99, "quantity": 2},
                    ],
                    "subtotal": 697,
                    "deliveryFee": 199,
                }
            ]
        },
    )

    def to_spec(self) -> CreateOrderSpec:
        parts = self.address_parts
        return CreateOrderSpec(
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            address=AddressSpec(
                city=parts.city,
                street=parts.street,
                building=parts.building,
                apartment=parts.apartment,
                entrance=parts.entrance,
                floor=parts.floor,
            ),
            payment_method=self.payment_method,
            items=[
                OrderItemSpec(product_name=i.name, price=i.price, quantity=i.quantity)
                for i in self.items
            ],
            subtotal=self.subtotal,
            delivery_fee=self.delivery_fee,
            comment=self.comment,
        )


class UpdateStatusRequest(CamelModel):
    status: str


# ---------------------------------------------------------------------------
# Order responses
# ---------------------------------------------------------------------------
class OrderLineResponse(CamelModel):
    name: str
    price: float
    quantity: int
    line_total: float


class OrderResponse(CamelModel):
    id: str
    customer_name: str
    customer_phone: str
    address: str
    comment: str | None
    payment_method: str
    items: list[OrderLineResponse]
    subtotal: float
    delivery_fee: float
    total: float
    status: str
    status_label: str
    next_statuses: list[str]
    created_at: dt.datetime
    updated_at: dt.datetime

    @staticmethod
    def from_dto(dto: OrderDTO) -> OrderResponse:
        return OrderResponse(
            id=dto.id,
            customer_name=dto.customer_name,
            customer_phone=dto.customer_phone,
            address=dto.address,
            comment=dto.comment,
            payment_method=dto.payment_method,
            items=[
                OrderLineResponse(
                    name=item.product_name,
                    price=float(item.unit_price),
                    quantity=item.quantity,
                    line_total=float(item.line_total),
                )
                for item in dto.items
            ],
            subtotal=float(dto.subtotal),
            delivery_fee=float(dto.delivery_fee),
            total=float(dto.total),
            status=dto.status,
            status_label=dto.status_label,
            next_statuses=dto.next_statuses,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


# ---------------------------------------------------------------------------
# Analytics responses
# ---------------------------------------------------------------------------
class DailySalesResponse(CamelModel):
    date: dt.date
    order_count: int
    revenue: float
    unique_customers: int


class CategoryStatsResponse(CamelModel):
    category_id: str
    name: str
    order_lines: int
    revenue: float
    items: int


class ProductStatsResponse(CamelModel):
    name: str
    order_lines: int
    revenue: float
    quantity: int


class CustomerSummaryResponse(CamelModel):
    phone: str
    name: str
    order_count: int
    total_spent: float
    first_order_at: dt.datetime
    last_order_at: dt.datetime


class CustomerStatsResponse(CamelModel):
    total: int
    new_customers: int
    returning_customers: int
    average_orders: float
    top_customers: list[CustomerSummaryResponse]


class StatusCountResponse(CamelModel):
    status: str
    count: int
    label: str


class AnalyticsResponse(CamelModel):
    period: str
    sales: list[DailySalesResponse]
    categories: list[CategoryStatsResponse]
    top_products: list[ProductStatsResponse]
    customers: CustomerStatsResponse
    order_status_histogram: list[StatusCountResponse]
    total_orders: int
    total_revenue: float

    @staticmethod
    def from_report(report: AnalyticsReport) -> AnalyticsResponse:
        customers = report.customers
        return AnalyticsResponse(
            period=report.period.value,
            sales=[
                DailySalesResponse(
                    date=day.date,
                    order_count=day.order_count,
                    revenue=float(day.revenue.amount),
                    unique_customers=day.unique_customers,
                )
                for day in report.sales
            ],
            categories=[
                CategoryStatsResponse(
                    category_id=c.category_id,
                    name=c.name,
                    order_lines=c.order_lines,
                    revenue=float(c.revenue.amount),
                    items=c.items,
                )
                for c in report.categories
            ],
            top_products=[
                ProductStatsResponse(
                    name=p.name,
                    order_lines=p.order_lines,
                    revenue=float(p.revenue.amount),
                    quantity=p.quantity,
                )
                for p in report.top_products
            ],
            customers=CustomerStatsResponse(
                total=customers.total,
                new_customers=customers.new_customers,
                returning_customers=customers.returning_customers,
                average_orders=customers.average_orders,
                top_customers=[
                    CustomerSummaryResponse(
                        phone=s.phone,
                        name=s.name,
                        order_count=s.order_count,
                        total_spent=float(s.total_spent.amount),
                        first_order_at=s.first_order_at,
                        last_order_at=s.last_order_at,
                    )
                    for s in customers.top_customers
                ],
            ),
            order_status_histogram=[
                StatusCountResponse(status=h.status.value, count=h.count, label=h.label)
                for h in report.order_status_histogram
            ],
            total_orders=report.total_orders,
            total_revenue=float(report.total_revenue.amount),
        )
