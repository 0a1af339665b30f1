"""
Тесты для модуля config
"""
import pytest

from shop_admin.core import Config, CrowdfundingStatus, ErrorKind, OrderType, RefundStatus, ShipStatus


class TestConstants:
    """Тесты для констант статусов"""

    def test_ship_statuses(self):
        assert ShipStatus.all_statuses() == ["pending", "delivered", "received"]

    def test_refund_statuses(self):
        statuses = RefundStatus.all_statuses()
        assert RefundStatus.APPLIED in statuses
        assert RefundStatus.NO_ACTIVE_REQUEST in statuses
        assert len(statuses) == 6

    def test_order_types(self):
        assert OrderType.CROWDFUNDING in OrderType.all_types()

    def test_crowdfunding_statuses(self):
        assert CrowdfundingStatus.SUCCESS in CrowdfundingStatus.all_statuses()

    def test_business_rule_kinds(self):
        assert ErrorKind.NOT_PAID in ErrorKind.BUSINESS_RULES
        assert ErrorKind.CONCURRENT_MODIFICATION not in ErrorKind.BUSINESS_RULES


class TestConfig:
    """Тесты для класса Config"""

    def test_database_url_from_path(self, monkeypatch):
        monkeypatch.setattr(Config, "DATABASE_URL", None)
        monkeypatch.setattr(Config, "DATABASE_PATH", "data/shop.db")

        assert Config.get_database_url() == "sqlite+aiosqlite:///data/shop.db"

    def test_database_url_override(self, monkeypatch):
        monkeypatch.setattr(Config, "DATABASE_URL", "postgresql+asyncpg://u:p@db/shop")

        assert Config.get_database_url() == "postgresql+asyncpg://u:p@db/shop"

    def test_validate_with_bad_timeout(self, monkeypatch):
        monkeypatch.setattr(Config, "REFUND_GATEWAY_TIMEOUT", 0)

        with pytest.raises(ValueError, match="REFUND_GATEWAY_TIMEOUT"):
            Config.validate()

    def test_validate_without_database(self, monkeypatch):
        monkeypatch.setattr(Config, "DATABASE_URL", None)
        monkeypatch.setattr(Config, "DATABASE_PATH", "")

        with pytest.raises(ValueError, match="DATABASE_PATH"):
            Config.validate()

    def test_validate_success(self, monkeypatch):
        monkeypatch.setattr(Config, "REFUND_GATEWAY_TIMEOUT", 5.0)
        monkeypatch.setattr(Config, "ORDERS_PAGE_SIZE", 20)

        assert Config.validate() is True

    def test_validate_with_bad_notify_timeout(self, monkeypatch):
        monkeypatch.setattr(Config, "SHIPMENT_NOTIFY_TIMEOUT", -1)

        with pytest.raises(ValueError, match="SHIPMENT_NOTIFY_TIMEOUT"):
            Config.validate()
