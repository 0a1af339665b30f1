"""
Репозиторий для работы с заказами
"""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.orm import selectinload

from shop_admin.database import orm_models
from shop_admin.database.models import (
    Order,
    OrderItem,
    ProductSnapshot,
    ShipData,
    StatusChange,
)
from shop_admin.repositories.base import BaseRepository
from shop_admin.repositories.exceptions import ConcurrentModificationError, EntityNotFoundError
from shop_admin.utils.helpers import get_now


logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository[Order]):
    """Репозиторий для работы с заказами"""

    def _base_query(self):
        return select(orm_models.Order).options(
            selectinload(orm_models.Order.items).selectinload(orm_models.OrderItem.product)
        )

    async def get_by_id(self, order_id: int) -> Order | None:
        """
        Получение заказа по ID

        Args:
            order_id: ID заказа

        Returns:
            Объект Order или None
        """
        async with self.session() as session:
            result = await session.execute(
                self._base_query().where(orm_models.Order.id == order_id)
            )
            row = result.scalar_one_or_none()

        if row:
            return self._row_to_order(row)
        return None

    async def load(self, order_id: int) -> Order:
        """
        Загрузка заказа по ID

        Raises:
            EntityNotFoundError: Если заказа нет
        """
        order = await self.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order", order_id)
        return order

    async def save(
        self,
        order: Order,
        expected_version: int,
        changes: list[StatusChange] | None = None,
    ) -> None:
        """
        Атомарное сохранение состояния заказа с проверкой версии

        Статусы доставки и возврата, ship_data, refund_no и extra пишутся одним
        UPDATE вместе с записями аудита. Запись проходит только если версия в БД
        совпадает с expected_version.

        Args:
            order: Новое состояние заказа
            expected_version: Версия, прочитанная при загрузке
            changes: Записи истории статусов

        Raises:
            ConcurrentModificationError: Заказ изменён другим процессом
            EntityNotFoundError: Заказа нет
        """
        now = get_now()

        async with self.session() as session:
            result = await session.execute(
                update(orm_models.Order)
                .where(
                    orm_models.Order.id == order.id,
                    orm_models.Order.version == expected_version,
                )
                .values(
                    ship_status=order.ship_status,
                    ship_data=order.ship_data.to_dict() if order.ship_data else None,
                    refund_status=order.refund_status,
                    refund_no=order.refund_no,
                    extra=dict(order.extra),
                    version=expected_version + 1,
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )

            if result.rowcount == 0:
                exists = await session.scalar(
                    select(orm_models.Order.id).where(orm_models.Order.id == order.id)
                )
                if exists is None:
                    raise EntityNotFoundError("Order", order.id)
                raise ConcurrentModificationError("Order", order.id, expected_version)

            for change in changes or []:
                session.add(
                    orm_models.OrderStatusHistory(
                        order_id=order.id,
                        field=change.field,
                        old_status=change.old_status,
                        new_status=change.new_status,
                        changed_by=change.changed_by,
                        notes=change.notes,
                        changed_at=now,
                    )
                )

        logger.info(f"Заказ #{order.id} сохранён (версия {expected_version} -> {expected_version + 1})")

    async def list_paid(self, limit: int = 20, offset: int = 0) -> list[Order]:
        """
        Оплаченные заказы, последние оплаченные первыми

        Args:
            limit: Лимит количества
            offset: Смещение

        Returns:
            Список заказов
        """
        query = (
            self._base_query()
            .where(orm_models.Order.paid_at.is_not(None))
            .order_by(orm_models.Order.paid_at.desc(), orm_models.Order.id.desc())
            .limit(limit)
            .offset(offset)
        )
        async with self.session() as session:
            result = await session.execute(query)
            rows = result.scalars().all()

        return [self._row_to_order(row) for row in rows]

    async def count_paid(self) -> int:
        """Количество оплаченных заказов"""
        async with self.session() as session:
            count = await session.scalar(
                select(func.count(orm_models.Order.id)).where(
                    orm_models.Order.paid_at.is_not(None)
                )
            )
        return count or 0

    async def get_history(self, order_id: int) -> list[StatusChange]:
        """
        История изменений статусов заказа

        Args:
            order_id: ID заказа

        Returns:
            Записи истории в порядке изменения
        """
        async with self.session() as session:
            result = await session.execute(
                select(orm_models.OrderStatusHistory)
                .where(orm_models.OrderStatusHistory.order_id == order_id)
                .order_by(orm_models.OrderStatusHistory.id)
            )
            rows = result.scalars().all()

        return [
            StatusChange(
                field=row.field,
                old_status=row.old_status,
                new_status=row.new_status,
                changed_by=row.changed_by,
                notes=row.notes,
                changed_at=row.changed_at,
                order_id=row.order_id,
            )
            for row in rows
        ]

    def _row_to_order(self, row: orm_models.Order) -> Order:
        """
        Преобразование ORM строки в объект Order

        Args:
            row: ORM модель заказа

        Returns:
            Объект Order
        """
        ship_data = None
        if row.ship_data:
            ship_data = ShipData(
                express_company=row.ship_data.get("express_company", ""),
                express_no=row.ship_data.get("express_no", ""),
            )

        items = [
            OrderItem(
                id=item.id,
                product=ProductSnapshot(
                    id=item.product.id, title=item.product.title, type=item.product.type
                ),
                amount=item.amount,
                price=item.price,
            )
            for item in row.items
        ]

        return Order(
            id=row.id,
            no=row.no,
            user_id=row.user_id,
            total_amount=row.total_amount,
            type=row.type,
            paid_at=row.paid_at,
            ship_status=row.ship_status,
            ship_data=ship_data,
            refund_status=row.refund_status,
            refund_no=row.refund_no,
            extra=dict(row.extra or {}),
            items=items,
            version=row.version,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
