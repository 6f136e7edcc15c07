"""Tests for the foodops command line via CliRunner."""

from datetime import datetime, timedelta, timezone

import pytest
from click.testing import CliRunner

from foodops.domain.model.status import OrderStatus
from foodops.infrastructure.cli.main import cli
from foodops.infrastructure.persistence.json_order_log import JsonOrderLog
from tests.fakes import make_order


@pytest.fixture(autouse=True)
def _keep_test_logging(monkeypatch):
    # The root handler would otherwise hold on to CliRunner's stderr.
    monkeypatch.setattr("foodops.infrastructure.cli.main.configure_logging", lambda *args: None)


@pytest.fixture()
def snapshot(tmp_path):
    now = datetime.now(timezone.utc)
    path = tmp_path / "orders.json"
    JsonOrderLog(path).dump([
        make_order(order_id="A1", name="Olena", created_at=now - timedelta(minutes=30),
                   items=[("Маргарита", 499, 1), ("Кола", 99, 2)]),
        make_order(order_id="B2", name="Taras", phone="+380671234567",
                   created_at=now - timedelta(minutes=10), status=OrderStatus.READY,
                   items=[("Цезарь", 399, 1)]),
    ])
    return path


def _run(*args):
    return CliRunner().invoke(cli, list(args))


class TestOrdersCommands:

    def test_list(self, snapshot):
        result = _run("orders", "list", "--file", str(snapshot))

        assert result.exit_code == 0, result.output
        assert result.output.index("B2") < result.output.index("A1")

    def test_list_by_status(self, snapshot):
        result = _run("orders", "list", "--file", str(snapshot), "--status", "ready")

        assert result.exit_code == 0, result.output
        assert "Taras" in result.output
        assert "Olena" not in result.output

    def test_list_nothing_found(self, snapshot):
        result = _run("orders", "list", "--file", str(snapshot), "--search", "Ivan")
        assert "No orders found." in result.output

    def test_show(self, snapshot):
        result = _run("orders", "show", "--file", str(snapshot), "--id", "A1")

        assert result.exit_code == 0, result.output
        assert "Order #A1" in result.output
        assert "Маргарита" in result.output
        assert "697.00" in result.output

    def test_show_missing(self, snapshot):
        result = _run("orders", "show", "--file", str(snapshot), "--id", "ZZ")

        assert result.exit_code == 1
        assert "Order #ZZ not found" in result.output

    def test_status_saves_snapshot(self, snapshot):
        result = _run("orders", "status", "--file", str(snapshot), "--id", "B2", "--to", "delivering")

        assert result.exit_code == 0, result.output
        assert "is now delivering" in result.output
        stored = {o.id: o for o in JsonOrderLog(snapshot).load()}
        assert stored["B2"].status == OrderStatus.DELIVERING
        assert stored["A1"].status == OrderStatus.PENDING

    def test_status_rejected(self, snapshot):
        result = _run("orders", "status", "--file", str(snapshot), "--id", "A1", "--to", "delivered")

        assert result.exit_code == 1
        assert "Cannot change status" in result.output
        stored = {o.id: o for o in JsonOrderLog(snapshot).load()}
        assert stored["A1"].status == OrderStatus.PENDING

    def test_corrupt_snapshot(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("[{]", encoding="utf-8")

        result = _run("orders", "list", "--file", str(path))

        assert result.exit_code == 1
        assert "Cannot read order snapshot" in result.output


class TestReportCommand:

    def test_week(self, snapshot):
        result = _run("report", "--file", str(snapshot))

        assert result.exit_code == 0, result.output
        assert "Period 7d: 2 orders" in result.output
        assert "Пицца" in result.output
        assert "Customers: 2 total, 2 new, 0 returning" in result.output
        assert "pending=1, ready=1" in result.output

    def test_empty_snapshot(self, tmp_path):
        result = _run("report", "--file", str(tmp_path / "absent.json"), "--period", "30d")

        assert result.exit_code == 0, result.output
        assert "Period 30d: 0 orders" in result.output
