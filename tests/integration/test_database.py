"""
Сквозные тесты: сервисы поверх SQLite
"""
import pytest

from shop_admin.bootstrap import init_app, shutdown_app
from shop_admin.core.constants import (
    CrowdfundingStatus,
    ErrorKind,
    ExtraKey,
    OrderType,
    RefundStatus,
    ShipStatus,
)
from shop_admin.database.models import ShipData
from shop_admin.domain.order_state_machine import BusinessRuleViolation
from shop_admin.services.refund_gateway import RefundGatewayError, TransientRefundError


@pytest.fixture
async def app(tmp_path, gateway, notifier):
    factory = await init_app(
        refund_gateway=gateway,
        notifier=notifier,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'app.db'}",
        create_tables=True,
        configure_logging=False,
    )
    yield factory
    await shutdown_app(factory)


class TestShipment:
    """Отгрузка"""

    @pytest.mark.asyncio
    async def test_ship_paid_order(self, app, seed, notifier):
        await seed(app.database, order_id=1)

        order = await app.shipment_service.ship(
            1, {"express_company": "SF", "express_no": "123"}, changed_by=1
        )

        assert order.ship_status == ShipStatus.DELIVERED
        stored = await app.order_repository.load(1)
        assert stored.ship_status == ShipStatus.DELIVERED
        assert stored.ship_data == ShipData(express_company="SF", express_no="123")
        assert stored.version == 2
        assert notifier.shipped == [1]

        history = await app.order_repository.get_history(1)
        assert [(h.field, h.new_status) for h in history] == [
            ("ship_status", ShipStatus.DELIVERED)
        ]

    @pytest.mark.asyncio
    async def test_ship_twice(self, app, seed):
        await seed(app.database, order_id=1)
        tracking = {"express_company": "SF", "express_no": "123"}

        await app.shipment_service.ship(1, tracking)
        with pytest.raises(BusinessRuleViolation) as exc_info:
            await app.shipment_service.ship(1, tracking)

        assert exc_info.value.kind == ErrorKind.ALREADY_SHIPPED

    @pytest.mark.asyncio
    async def test_unpaid_order(self, app, seed):
        await seed(app.database, order_id=1, paid_at=None)

        with pytest.raises(BusinessRuleViolation) as exc_info:
            await app.shipment_service.ship(1, {"express_company": "SF", "express_no": "1"})

        assert exc_info.value.kind == ErrorKind.NOT_PAID

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "campaign_status, shipped",
        [(CrowdfundingStatus.SUCCESS, True), (CrowdfundingStatus.FUNDING, False)],
    )
    async def test_crowdfunding_order(self, app, seed, campaign_status, shipped):
        await seed(
            app.database,
            order_id=3,
            order_type=OrderType.CROWDFUNDING,
            campaign_status=campaign_status,
        )
        tracking = {"express_company": "SF", "express_no": "9"}

        if shipped:
            order = await app.shipment_service.ship(3, tracking)
            assert order.ship_status == ShipStatus.DELIVERED
        else:
            with pytest.raises(BusinessRuleViolation) as exc_info:
                await app.shipment_service.ship(3, tracking)
            assert exc_info.value.kind == ErrorKind.CROWDFUNDING_NOT_SUCCESSFUL


class TestRefund:
    """Решения по возвратам"""

    @pytest.mark.asyncio
    async def test_reject_refund(self, app, seed):
        await seed(app.database, order_id=1, refund_status=RefundStatus.APPLIED)

        await app.refund_service.decide_refund(1, approve=False, reject_reason="out of stock")

        stored = await app.order_repository.load(1)
        assert stored.refund_status == RefundStatus.NO_ACTIVE_REQUEST
        assert stored.extra[ExtraKey.REFUND_DISAGREE_REASON] == "out of stock"

    @pytest.mark.asyncio
    async def test_approve_refund(self, app, seed, gateway):
        await seed(
            app.database,
            order_id=1,
            refund_status=RefundStatus.APPLIED,
            extra={ExtraKey.REFUND_DISAGREE_REASON: "R", ExtraKey.REFUND_REASON: "брак"},
        )

        await app.refund_service.decide_refund(1, approve=True, changed_by=2)

        stored = await app.order_repository.load(1)
        assert stored.refund_status == RefundStatus.SUCCESS
        assert stored.refund_no == "RF000001"
        assert stored.extra == {ExtraKey.REFUND_REASON: "брак"}
        assert gateway.calls == [1]

        history = await app.order_repository.get_history(1)
        assert history[-1].old_status == RefundStatus.APPLIED
        assert history[-1].new_status == RefundStatus.SUCCESS
        assert history[-1].changed_by == 2

    @pytest.mark.asyncio
    async def test_gateway_failure_keeps_request(self, app, seed, gateway):
        await seed(app.database, order_id=1, refund_status=RefundStatus.APPLIED)
        gateway.error = TransientRefundError("503")

        with pytest.raises(RefundGatewayError):
            await app.refund_service.decide_refund(1, approve=True)

        stored = await app.order_repository.load(1)
        assert stored.refund_status == RefundStatus.APPLIED
        assert stored.version == 1

    @pytest.mark.asyncio
    async def test_no_active_request(self, app, seed):
        await seed(app.database, order_id=1)

        with pytest.raises(BusinessRuleViolation) as exc_info:
            await app.refund_service.decide_refund(1, approve=False, reject_reason="R")

        assert exc_info.value.kind == ErrorKind.NO_ACTIVE_REFUND_REQUEST


class TestQuery:
    """Просмотр заказов"""

    @pytest.mark.asyncio
    async def test_list_and_details(self, app, seed):
        await seed(app.database, order_id=1, refund_status=RefundStatus.APPLIED)
        await seed(app.database, order_id=2, paid_at=None)

        page = await app.query_service.list_paid_orders()

        assert page.total == 1
        assert page.pages == 1
        assert [row["id"] for row in page.rows] == ["1"]
        assert page.rows[0]["refund_status"] == "Запрошен возврат"

        order, text, actions = await app.query_service.get_order_details(1)
        assert order.id == 1
        assert "Заказ #1" in text
        assert actions == ["ship", "approve_refund", "reject_refund"]
