"""Integration tests for the CreateOrderHandler."""

from decimal import Decimal

import pytest

from foodops.application.create_order import CreateOrderHandler
from foodops.application.dto import AddressSpec, OrderItemSpec
from foodops.domain.exceptions import ValidationError
from foodops.infrastructure.persistence.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from tests.fakes import (
    NOW,
    CrashingNotifier,
    FailingNotifier,
    FixedClock,
    RecordingNotifier,
    make_spec,
)


def _setup(notifier=None):
    repo = InMemoryOrderRepository()
    handler = CreateOrderHandler(repo, notifier, FixedClock())
    return handler, repo


class TestCreateOrderHandler:

    def test_successful_order(self):
        handler, repo = _setup()

        dto = handler.handle(make_spec())

        assert dto.status == "pending"
        assert dto.status_label == "Ожидает"
        assert len(dto.items) == 2
        assert dto.address == "Kyiv, вул. Khreshchatyk, буд. 1"
        assert dto.subtotal == Decimal("697")
        assert dto.total == Decimal("896")
        assert dto.created_at == dto.updated_at == NOW
        assert dto.next_statuses == ["confirmed", "cancelled"]
        assert len(repo) == 1

    def test_order_is_retrievable_by_id(self):
        handler, repo = _setup()
        dto = handler.handle(make_spec())

        stored = repo.get_by_id(dto.id)
        assert stored is not None
        assert stored.customer_name == "Olena"

    def test_ids_are_unique(self):
        handler, _ = _setup()
        ids = {handler.handle(make_spec()).id for _ in range(20)}
        assert len(ids) == 20

    def test_comment_and_optional_address_parts(self):
        handler, _ = _setup()
        spec = make_spec(
            address=AddressSpec(city="Kyiv", street="Khreshchatyk", building="1", floor="4"),
            comment="Ring twice",
        )

        dto = handler.handle(spec)

        assert dto.address == "Kyiv, вул. Khreshchatyk, буд. 1, поверх 4"
        assert dto.comment == "Ring twice"

    def test_mismatched_subtotal_stored_as_sent(self):
        handler, repo = _setup()

        dto = handler.handle(make_spec(subtotal=100))

        assert dto.subtotal == Decimal("100")
        assert not repo.get_by_id(dto.id).subtotal_matches_items

    def test_notifier_receives_stored_order(self):
        notifier = RecordingNotifier()
        handler, _ = _setup(notifier)

        dto = handler.handle(make_spec())

        assert [o.id for o in notifier.notified] == [dto.id]

    def test_notification_failure_keeps_order(self):
        handler, repo = _setup(FailingNotifier())

        dto = handler.handle(make_spec())

        assert repo.get_by_id(dto.id) is not None

    def test_notifier_crash_keeps_order_and_succeeds(self):
        handler, repo = _setup(CrashingNotifier())

        dto = handler.handle(make_spec())

        assert dto.status == "pending"
        assert len(repo) == 1
        assert repo.get_by_id(dto.id) is not None


class TestCreateOrderValidation:

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"customer_name": ""}, "customer_name"),
            ({"customer_phone": " "}, "customer_phone"),
            ({"payment_method": "bitcoin"}, "payment_method"),
            ({"items": []}, "items"),
            ({"subtotal": "abc"}, "subtotal"),
            ({"delivery_fee": -5}, "delivery_fee"),
            ({"address": AddressSpec(city="", street="x", building="1")}, "address.city"),
        ],
    )
    def test_rejected_with_field(self, overrides, field):
        handler, repo = _setup()

        with pytest.raises(ValidationError) as exc_info:
            handler.handle(make_spec(**overrides))

        assert exc_info.value.field == field
        assert len(repo) == 0

    @pytest.mark.parametrize(
        "item, field",
        [
            (OrderItemSpec("", 100, 1), "items[1].name"),
            (OrderItemSpec("Cola", 99, 0), "items[1].quantity"),
            (OrderItemSpec("Cola", -1, 1), "items[1].price"),
        ],
    )
    def test_bad_line_named_by_index(self, item, field):
        handler, repo = _setup()
        spec = make_spec(items=[OrderItemSpec("Margherita", 499, 1), item])

        with pytest.raises(ValidationError) as exc_info:
            handler.handle(spec)

        assert exc_info.value.field == field
        assert len(repo) == 0
