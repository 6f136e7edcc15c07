"""Unit tests for the Order aggregate and its business rules."""

from datetime import timedelta

import pytest

from foodops.domain.exceptions import InvalidTransitionError, ValidationError
from foodops.domain.model.order import Order, OrderLine, PaymentMethod
from foodops.domain.model.status import OrderStatus
from foodops.domain.model.value_objects import DeliveryAddress, Money, Quantity
from tests.fakes import NOW


def _line(name: str = "Margherita", price: int = 499, qty: int = 1) -> OrderLine:
    return OrderLine(product_name=name, unit_price=Money.of(price), quantity=Quantity(qty))


def _create(**overrides) -> Order:
    fields = dict(
        customer_name="Olena",
        customer_phone="+380991112233",
        address=DeliveryAddress(city="Kyiv", street="Khreshchatyk", building="1"),
        payment_method="cash",
        items=[_line(), _line("Cola", 99, 2)],
        subtotal=Money.of(697),
        delivery_fee=Money.of(199),
        now=NOW,
    )
    fields.update(overrides)
    return Order.create(**fields)


class TestOrderCreation:

    def test_happy_path(self):
        order = _create()
        assert order.status == OrderStatus.PENDING
        assert len(order.items) == 2
        assert order.address == "Kyiv, вул. Khreshchatyk, буд. 1"
        assert order.payment_method == PaymentMethod.CASH
        assert order.created_at == order.updated_at == NOW

    def test_id_is_none_for_new_orders(self):
        assert _create().id is None  # assigned by repository

    def test_total_includes_delivery(self):
        assert _create().total == Money.of(896)

    def test_blank_comment_dropped(self):
        assert _create(comment="   ").comment is None

    def test_subtotal_matches_items(self):
        assert _create().subtotal_matches_items

    def test_client_subtotal_kept_even_when_wrong(self):
        order = _create(subtotal=Money.of(1))
        assert order.subtotal == Money.of(1)
        assert not order.subtotal_matches_items


class TestOrderValidation:

    def test_empty_customer_name_rejected(self):
        with pytest.raises(ValidationError, match="Customer name") as exc_info:
            _create(customer_name="  ")
        assert exc_info.value.field == "customer_name"

    def test_empty_phone_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _create(customer_phone="")
        assert exc_info.value.field == "customer_phone"

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _create(items=[])

    def test_unknown_payment_method_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _create(payment_method="crypto")
        assert exc_info.value.field == "payment_method"


class TestApplyStatus:

    def test_forward_move_updates_timestamp(self):
        order = _create()
        later = NOW + timedelta(minutes=5)
        order.apply_status(OrderStatus.CONFIRMED, now=later)
        assert order.status == OrderStatus.CONFIRMED
        assert order.updated_at == later

    def test_updated_at_never_before_created_at(self):
        order = _create()
        order.apply_status(OrderStatus.CONFIRMED, now=NOW - timedelta(hours=1))
        assert order.updated_at >= order.created_at

    def test_rejected_move_leaves_order_unchanged(self):
        order = _create()
        with pytest.raises(InvalidTransitionError):
            order.apply_status(OrderStatus.DELIVERED, now=NOW + timedelta(minutes=1))
        assert order.status == OrderStatus.PENDING
        assert order.updated_at == NOW


class TestOrderLine:

    def test_line_total_calculation(self):
        assert _line("Cola", 99, 3).line_total == Money.of(297)
