"""
Сервис отгрузки заказов
"""

import asyncio
import logging
from dataclasses import replace
from typing import Protocol

from shop_admin.core.config import Config
from shop_admin.core.constants import OrderType, ShipStatus
from shop_admin.database.models import Order, ShipData, StatusChange
from shop_admin.domain.order_state_machine import BusinessRuleViolation, OrderStateMachine
from shop_admin.repositories.base import CampaignStatusLookup, OrderStore
from shop_admin.schemas.order import ShipOrderSchema, validate_command


logger = logging.getLogger(__name__)


class ShipmentNotifier(Protocol):
    """Уведомление покупателя об отправке"""

    async def order_shipped(self, order: Order) -> None:
        ...


class ShipmentService:
    """
    Сервис отгрузки

    Последовательность: проверка трек-данных → загрузка заказа →
    проверка state machine → атомарное сохранение → уведомление.
    """

    def __init__(
        self,
        order_repo: OrderStore,
        campaign_lookup: CampaignStatusLookup,
        notifier: ShipmentNotifier | None = None,
        state_machine: OrderStateMachine | None = None,
        notify_timeout: float | None = None,
    ):
        """
        Инициализация сервиса

        Args:
            order_repo: Хранилище заказов
            campaign_lookup: Статусы краудфандинговых кампаний
            notifier: Уведомления об отправке (опционально)
            state_machine: State machine для валидации переходов
            notify_timeout: Таймаут уведомления в секундах
        """
        self.order_repo = order_repo
        self.campaign_lookup = campaign_lookup
        self.notifier = notifier
        self.state_machine = state_machine or OrderStateMachine()
        self.notify_timeout = notify_timeout or Config.SHIPMENT_NOTIFY_TIMEOUT

    async def ship(
        self, order_id: int, tracking_info: dict, changed_by: int | None = None
    ) -> Order:
        """
        Отгрузка заказа

        Args:
            order_id: ID заказа
            tracking_info: {"express_company": ..., "express_no": ...}
            changed_by: ID администратора

        Returns:
            Заказ после отгрузки

        Raises:
            OrderValidationError: Не заполнены данные отправки
            EntityNotFoundError: Заказ не найден
            BusinessRuleViolation: NOT_PAID, ALREADY_SHIPPED, CROWDFUNDING_NOT_SUCCESSFUL
            ConcurrentModificationError: Заказ изменён параллельно
        """
        data = validate_command(ShipOrderSchema, tracking_info)

        order = await self.order_repo.load(order_id)

        campaign_status = None
        if order.type == OrderType.CROWDFUNDING:
            product_id = order.first_product_id()
            if product_id is not None:
                campaign_status = await self.campaign_lookup.status_of(product_id)

        try:
            result = self.state_machine.can_ship(order, campaign_status)
        except BusinessRuleViolation as e:
            logger.warning(f"Невозможно отправить заказ #{order_id}: {e}")
            raise

        ship_data = ShipData(express_company=data.express_company, express_no=data.express_no)
        shipped = replace(
            order,
            ship_status=result.target_state,
            ship_data=ship_data,
            version=order.version + 1,
        )
        change = StatusChange(
            field="ship_status",
            old_status=order.ship_status,
            new_status=ShipStatus.DELIVERED,
            changed_by=changed_by,
            notes=f"{ship_data.express_company} {ship_data.express_no}",
        )

        await self.order_repo.save(shipped, expected_version=order.version, changes=[change])
        logger.info(
            f"Заказ #{order_id} отправлен: {ship_data.express_company}, {ship_data.express_no}"
        )

        await self._notify(shipped)
        return shipped

    async def _notify(self, order: Order) -> None:
        """Уведомление после коммита; ошибка или таймаут не откатывают отгрузку"""
        if self.notifier is None:
            return
        try:
            await asyncio.wait_for(
                self.notifier.order_shipped(order), timeout=self.notify_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Таймаут уведомления по заказу #{order.id} ({self.notify_timeout}s)"
            )
        except Exception as e:
            logger.error(f"Не удалось отправить уведомление по заказу #{order.id}: {e}")
