"""Tests for the in-memory order log and the JSON snapshot/catalog files."""

import json
import threading
from datetime import datetime, timedelta, timezone

import pytest

from foodops.domain.exceptions import NotFoundError, StorageError
from foodops.domain.model.status import OrderStatus
from foodops.domain.model.value_objects import Money
from foodops.infrastructure.persistence.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from foodops.infrastructure.persistence.json_catalog_registry import JsonCatalogRegistry
from foodops.infrastructure.persistence.json_order_log import JsonOrderLog
from tests.fakes import NOW, make_order


class TestInMemoryOrderRepository:

    def test_add_assigns_time_ordered_id(self):
        repo = InMemoryOrderRepository()
        order = make_order()

        repo.add(order)

        assert order.id is not None
        assert len(order.id) == 18
        assert order.id[:13].isdigit()
        assert repo.get_by_id(order.id) == order

    def test_newest_first(self):
        repo = InMemoryOrderRepository()
        for hours in (3, 2, 1):
            repo.add(make_order(created_at=NOW - timedelta(hours=hours)))

        created = [o.created_at for o in repo.list_all()]

        assert created == sorted(created, reverse=True)

    def test_seed_orders_replayed_oldest_first(self):
        repo = InMemoryOrderRepository([
            make_order(order_id="new", created_at=NOW),
            make_order(order_id="old", created_at=NOW - timedelta(days=1)),
        ])
        assert [o.id for o in repo.list_all()] == ["new", "old"]

    def test_duplicate_id_rejected(self):
        repo = InMemoryOrderRepository([make_order(order_id="A")])
        with pytest.raises(StorageError, match="already exists"):
            repo.add(make_order(order_id="A"))

    def test_reads_are_copies(self):
        repo = InMemoryOrderRepository([make_order(order_id="A")])

        copy = repo.get_by_id("A")
        copy.status = OrderStatus.CANCELLED
        repo.list_all()[0].customer_name = "Mallory"

        stored = repo.get_by_id("A")
        assert stored.status == OrderStatus.PENDING
        assert stored.customer_name == "Olena"

    def test_save_replaces(self):
        repo = InMemoryOrderRepository([make_order(order_id="A")])
        order = repo.get_by_id("A")
        order.apply_status(OrderStatus.CONFIRMED, now=NOW)

        repo.save(order)

        assert repo.get_by_id("A").status == OrderStatus.CONFIRMED

    def test_save_unknown_order(self):
        repo = InMemoryOrderRepository()
        with pytest.raises(NotFoundError):
            repo.save(make_order(order_id="ghost"))

    def test_get_missing_returns_none(self):
        assert InMemoryOrderRepository().get_by_id("nope") is None

    def test_concurrent_adds_keep_every_order(self):
        repo = InMemoryOrderRepository()

        def place():
            for _ in range(25):
                repo.add(make_order())

        threads = [threading.Thread(target=place) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [o.id for o in repo.snapshot()]
        assert len(ids) == 100
        assert len(set(ids)) == 100


class TestJsonOrderLog:

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonOrderLog(tmp_path / "none.json").load() == []

    def test_dump_and_load(self, tmp_path):
        order = make_order(order_id="A", items=[("Маргарита", 499, 1), ("Кола", 99, 2)])
        order.comment = "Домофон 12"
        order.apply_status(OrderStatus.CONFIRMED, now=NOW + timedelta(minutes=5))
        log = JsonOrderLog(tmp_path / "orders.json")

        log.dump([order])
        loaded = log.load()

        assert loaded == [order]

    def test_file_uses_camel_case_keys(self, tmp_path):
        log = JsonOrderLog(tmp_path / "orders.json")
        log.dump([make_order(order_id="A")])

        raw = json.loads(log.file_path.read_text(encoding="utf-8"))

        assert set(raw[0]) == {
            "id", "customerName", "customerPhone", "address", "comment",
            "paymentMethod", "items", "subtotal", "deliveryFee", "status",
            "createdAt", "updatedAt",
        }

    def test_timestamps_without_offset_read_as_utc(self, tmp_path):
        log = JsonOrderLog(tmp_path / "orders.json")
        log.dump([
            make_order(order_id="A", created_at=NOW - timedelta(hours=1)),
            make_order(order_id="B", created_at=NOW),
        ])
        raw = json.loads(log.file_path.read_text(encoding="utf-8"))
        raw[0]["createdAt"] = "2026-10-19T10:00:00"
        del raw[0]["updatedAt"]
        log.file_path.write_text(json.dumps(raw), encoding="utf-8")

        orders = log.load()
        repo = InMemoryOrderRepository(orders)

        assert orders[0].created_at == datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)
        assert orders[0].updated_at == orders[0].created_at
        assert [o.id for o in repo.list_all()] == ["B", "A"]

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="Cannot read order snapshot"):
            JsonOrderLog(path).load()

    def test_invalid_status_in_file(self, tmp_path):
        log = JsonOrderLog(tmp_path / "orders.json")
        log.dump([make_order(order_id="A")])
        raw = json.loads(log.file_path.read_text(encoding="utf-8"))
        raw[0]["status"] = "lost"
        log.file_path.write_text(json.dumps(raw), encoding="utf-8")

        with pytest.raises(StorageError):
            log.load()


class TestJsonCatalogRegistry:

    def test_packaged_catalog(self):
        catalog = JsonCatalogRegistry()

        assert [c.id for c in catalog.list_categories()] == [
            "pizza", "burgers", "sushi", "salads", "desserts", "drinks",
        ]
        assert catalog.lookup_category("Маргарита").id == "pizza"
        assert catalog.lookup_category("Кола").name == "Напитки"
        assert len(catalog.list_entries()) == 15

    def test_lookup_is_exact(self):
        catalog = JsonCatalogRegistry()
        assert catalog.lookup_category("маргарита") is None
        assert catalog.lookup_category("Margherita") is None

    def test_custom_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({
            "categories": [{"id": "soup", "name": "Супы"}],
            "products": [{"name": "Борщ", "category": "soup", "price": "189.50"}],
        }), encoding="utf-8")

        catalog = JsonCatalogRegistry(path)

        entry = catalog.list_entries()[0]
        assert entry.category.id == "soup"
        assert entry.price == Money.of("189.50")

    def test_product_with_unknown_category(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({
            "categories": [],
            "products": [{"name": "Борщ", "category": "soup", "price": "189"}],
        }), encoding="utf-8")

        with pytest.raises(StorageError, match="Cannot read catalog"):
            JsonCatalogRegistry(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(StorageError):
            JsonCatalogRegistry(tmp_path / "absent.json")
