"""
Тесты для OrderRepository и CampaignRepository на SQLite
"""
from dataclasses import replace
from datetime import datetime

import pytest

from shop_admin.core.constants import (
    CrowdfundingStatus,
    ExtraKey,
    OrderType,
    RefundStatus,
    ShipStatus,
)
from shop_admin.database.models import ShipData, StatusChange
from shop_admin.repositories import (
    CampaignRepository,
    ConcurrentModificationError,
    EntityNotFoundError,
    OrderRepository,
)


@pytest.fixture
def order_repository(db):
    return OrderRepository(db)


@pytest.mark.asyncio
async def test_load_order_with_items(db, seed, order_repository):
    await seed(db, order_id=1, extra={ExtraKey.REFUND_REASON: "брак"})

    order = await order_repository.load(1)

    assert order.id == 1
    assert order.no == "NO00000001"
    assert order.paid_at is not None
    assert order.ship_status == ShipStatus.PENDING
    assert order.refund_status == RefundStatus.NONE
    assert order.extra == {ExtraKey.REFUND_REASON: "брак"}
    assert order.version == 1
    assert len(order.items) == 1
    assert order.first_product_id() == 101
    assert order.items[0].product.title == "Товар 101"


@pytest.mark.asyncio
async def test_load_missing_order(order_repository):
    with pytest.raises(EntityNotFoundError):
        await order_repository.load(999)

    assert await order_repository.get_by_id(999) is None


@pytest.mark.asyncio
async def test_save_bumps_version_and_writes_history(db, seed, order_repository):
    await seed(db, order_id=1)
    order = await order_repository.load(1)

    shipped = replace(
        order,
        ship_status=ShipStatus.DELIVERED,
        ship_data=ShipData(express_company="SF", express_no="123"),
        version=order.version + 1,
    )
    change = StatusChange(
        field="ship_status",
        old_status=ShipStatus.PENDING,
        new_status=ShipStatus.DELIVERED,
        changed_by=7,
    )
    await order_repository.save(shipped, expected_version=1, changes=[change])

    reloaded = await order_repository.load(1)
    assert reloaded.ship_status == ShipStatus.DELIVERED
    assert reloaded.ship_data == ShipData(express_company="SF", express_no="123")
    assert reloaded.version == 2

    history = await order_repository.get_history(1)
    assert len(history) == 1
    assert history[0].new_status == ShipStatus.DELIVERED
    assert history[0].changed_by == 7


@pytest.mark.asyncio
async def test_stale_save_is_rejected(db, seed, order_repository):
    """Второй писатель со старой версией получает ConcurrentModificationError"""
    await seed(db, order_id=1, refund_status=RefundStatus.APPLIED)
    first = await order_repository.load(1)
    second = await order_repository.load(1)

    await order_repository.save(
        replace(first, refund_status=RefundStatus.SUCCESS, refund_no="RF1"),
        expected_version=first.version,
    )

    with pytest.raises(ConcurrentModificationError) as exc_info:
        await order_repository.save(
            replace(
                second,
                refund_status=RefundStatus.NO_ACTIVE_REQUEST,
                extra={ExtraKey.REFUND_DISAGREE_REASON: "R"},
            ),
            expected_version=second.version,
            changes=[StatusChange("refund_status", RefundStatus.APPLIED, "no_active_request")],
        )

    assert exc_info.value.expected_version == 1
    reloaded = await order_repository.load(1)
    assert reloaded.refund_status == RefundStatus.SUCCESS
    assert reloaded.refund_no == "RF1"
    assert ExtraKey.REFUND_DISAGREE_REASON not in reloaded.extra
    assert await order_repository.get_history(1) == []


@pytest.mark.asyncio
async def test_save_missing_order(order_repository, make_order):
    with pytest.raises(EntityNotFoundError):
        await order_repository.save(make_order(id=404), expected_version=1)


@pytest.mark.asyncio
async def test_list_paid_orders(db, seed, order_repository):
    await seed(db, order_id=1, paid_at=datetime(2024, 1, 1, 10, 0))
    await seed(db, order_id=2, paid_at=datetime(2024, 3, 1, 10, 0))
    await seed(db, order_id=3, paid_at=None)

    orders = await order_repository.list_paid()

    assert [order.id for order in orders] == [2, 1]
    assert await order_repository.count_paid() == 2

    second_page = await order_repository.list_paid(limit=1, offset=1)
    assert [order.id for order in second_page] == [1]


@pytest.mark.asyncio
async def test_campaign_status(db, seed):
    await seed(
        db,
        order_id=5,
        order_type=OrderType.CROWDFUNDING,
        campaign_status=CrowdfundingStatus.FUNDING,
    )
    campaigns = CampaignRepository(db)

    assert await campaigns.status_of(105) == CrowdfundingStatus.FUNDING
    assert await campaigns.status_of(999) is None
