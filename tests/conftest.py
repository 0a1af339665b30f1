"""
Pytest fixtures и конфигурация для тестов
"""
import asyncio
import sys
from collections.abc import AsyncGenerator
from copy import deepcopy
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest


# Добавляем корневую директорию в PYTHONPATH
ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from shop_admin.core.constants import CrowdfundingStatus, OrderType, RefundStatus, ShipStatus
from shop_admin.database import orm_models
from shop_admin.database.models import Order, OrderItem, ProductSnapshot
from shop_admin.database.orm_database import ORMDatabase
from shop_admin.repositories.exceptions import ConcurrentModificationError, EntityNotFoundError
from shop_admin.services.refund_gateway import RefundResult


PAID_AT = datetime(2024, 5, 1, 12, 30)


class FakeOrderRepository:
    """Хранилище заказов в памяти с проверкой версии, как у OrderRepository"""

    def __init__(self, orders=(), yield_on_load: bool = False):
        self.orders = {order.id: deepcopy(order) for order in orders}
        self.history = []
        self.save_calls = 0
        self.yield_on_load = yield_on_load
        self.fail_next_save: Exception | None = None

    async def load(self, order_id: int) -> Order:
        if order_id not in self.orders:
            raise EntityNotFoundError("Order", order_id)
        order = deepcopy(self.orders[order_id])
        if self.yield_on_load:
            # Отдаём управление, чтобы параллельные вызовы прочитали одну версию
            await asyncio.sleep(0)
        return order

    async def save(self, order: Order, expected_version: int, changes=None) -> None:
        if self.fail_next_save is not None:
            error, self.fail_next_save = self.fail_next_save, None
            raise error

        current = self.orders.get(order.id)
        if current is None:
            raise EntityNotFoundError("Order", order.id)
        if current.version != expected_version:
            raise ConcurrentModificationError("Order", order.id, expected_version)

        self.orders[order.id] = replace(deepcopy(order), version=expected_version + 1)
        self.history.extend(changes or [])
        self.save_calls += 1


class FakeCampaignLookup:
    """Статусы кампаний по ID товара"""

    def __init__(self, statuses: dict[int, str] | None = None):
        self.statuses = statuses or {}
        self.calls = []

    async def status_of(self, product_id: int) -> str | None:
        self.calls.append(product_id)
        return self.statuses.get(product_id)


class FakeRefundGateway:
    """
    Шлюз возвратов, идемпотентный по ID заказа

    executions - выполненные возвраты (один на заказ), calls - все вызовы.
    """

    def __init__(
        self,
        status: str = RefundStatus.SUCCESS,
        error: Exception | None = None,
        delay: float = 0,
    ):
        self.status = status
        self.error = error
        self.delay = delay
        self.calls = []
        self.executions = {}

    async def refund(self, order: Order) -> RefundResult:
        self.calls.append(order.id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        reference = self.executions.setdefault(order.id, f"RF{order.id:06d}")
        return RefundResult(status=self.status, reference=reference)


class FakeNotifier:
    """Уведомления об отправке"""

    def __init__(self, error: Exception | None = None, delay: float = 0):
        self.error = error
        self.delay = delay
        self.shipped = []

    async def order_shipped(self, order: Order) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        self.shipped.append(order.id)


@pytest.fixture
def make_order():
    """
    Фабрика заказов: по умолчанию оплаченный обычный заказ, не отправлен
    """

    def _make_order(**overrides) -> Order:
        data = {
            "id": 1,
            "no": "20240501123000000001",
            "user_id": 10,
            "total_amount": Decimal("199.00"),
            "type": OrderType.NORMAL,
            "paid_at": PAID_AT,
            "ship_status": ShipStatus.PENDING,
            "refund_status": RefundStatus.NONE,
            "extra": {},
            "items": [
                OrderItem(
                    id=1,
                    product=ProductSnapshot(id=100, title="Наушники", type=OrderType.NORMAL),
                    amount=1,
                    price=Decimal("199.00"),
                )
            ],
            "version": 1,
        }
        data.update(overrides)
        return Order(**data)

    return _make_order


@pytest.fixture
def crowdfunding_order(make_order) -> Order:
    """Оплаченный краудфандинговый заказ на товар #200"""
    return make_order(
        id=2,
        no="20240501123000000002",
        type=OrderType.CROWDFUNDING,
        items=[
            OrderItem(
                id=2,
                product=ProductSnapshot(id=200, title="Умная лампа", type=OrderType.CROWDFUNDING),
                amount=1,
                price=Decimal("99.00"),
            )
        ],
    )


@pytest.fixture
def order_store():
    """Фабрика хранилища заказов в памяти"""
    return FakeOrderRepository


@pytest.fixture
def gateway_factory():
    """Фабрика шлюза возвратов"""
    return FakeRefundGateway


@pytest.fixture
def gateway() -> FakeRefundGateway:
    return FakeRefundGateway()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def notifier_factory():
    """Фабрика уведомлений"""
    return FakeNotifier


@pytest.fixture
def failing_notifier() -> FakeNotifier:
    return FakeNotifier(error=RuntimeError("SMTP недоступен"))


@pytest.fixture
def campaign_lookup() -> FakeCampaignLookup:
    return FakeCampaignLookup({200: CrowdfundingStatus.SUCCESS})


@pytest.fixture
async def db(tmp_path) -> AsyncGenerator[ORMDatabase, None]:
    """
    Фикстура для тестовой базы данных (SQLite файл во временной директории)
    """
    database = ORMDatabase(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.connect()
    await database.create_tables()
    yield database
    await database.disconnect()


async def seed_order(
    database: ORMDatabase,
    order_id: int = 1,
    order_type: str = OrderType.NORMAL,
    paid_at: datetime | None = PAID_AT,
    ship_status: str = ShipStatus.PENDING,
    refund_status: str = RefundStatus.NONE,
    extra: dict | None = None,
    campaign_status: str | None = None,
) -> int:
    """Создание заказа с одной позицией (и кампанией для краудфандинга)"""
    product_id = 100 + order_id
    async with database.get_session() as session:
        session.add(
            orm_models.Product(
                id=product_id, title=f"Товар {product_id}", type=order_type
            )
        )
        if campaign_status is not None:
            session.add(
                orm_models.CrowdfundingProduct(
                    product_id=product_id,
                    target_amount=Decimal("1000.00"),
                    total_amount=Decimal("1200.00"),
                    status=campaign_status,
                )
            )
        session.add(
            orm_models.Order(
                id=order_id,
                no=f"NO{order_id:08d}",
                user_id=10,
                total_amount=Decimal("50.00"),
                type=order_type,
                paid_at=paid_at,
                ship_status=ship_status,
                refund_status=refund_status,
                extra=extra or {},
            )
        )
        await session.flush()
        session.add(
            orm_models.OrderItem(
                order_id=order_id, product_id=product_id, amount=1, price=Decimal("50.00")
            )
        )
    return order_id


@pytest.fixture
def seed():
    """Хелпер для наполнения тестовой БД"""
    return seed_order
