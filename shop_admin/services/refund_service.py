"""
Сервис решений по возвратам
"""

import asyncio
import logging
from dataclasses import replace

from shop_admin.core.config import Config
from shop_admin.core.constants import ExtraKey, RefundStatus
from shop_admin.database.models import Order, StatusChange
from shop_admin.domain.order_state_machine import BusinessRuleViolation, OrderStateMachine
from shop_admin.repositories.base import OrderStore
from shop_admin.schemas.order import DecideRefundSchema, validate_command
from shop_admin.services.refund_gateway import (
    PermanentRefundError,
    RefundGateway,
    RefundGatewayError,
    TransientRefundError,
)


logger = logging.getLogger(__name__)


class RefundService:
    """
    Сервис для одобрения и отклонения заявок на возврат

    Ничего не повторяет сам: при ошибке шлюза решение можно вызвать ещё раз,
    шлюз идемпотентен по ID заказа.
    """

    def __init__(
        self,
        order_repo: OrderStore,
        gateway: RefundGateway,
        gateway_timeout: float | None = None,
        state_machine: OrderStateMachine | None = None,
    ):
        """
        Инициализация сервиса

        Args:
            order_repo: Хранилище заказов
            gateway: Платёжный шлюз для возвратов
            gateway_timeout: Таймаут вызова шлюза в секундах
            state_machine: State machine для валидации переходов
        """
        self.order_repo = order_repo
        self.gateway = gateway
        self.gateway_timeout = gateway_timeout or Config.REFUND_GATEWAY_TIMEOUT
        self.state_machine = state_machine or OrderStateMachine()

    async def decide_refund(
        self,
        order_id: int,
        approve: bool,
        reject_reason: str | None = None,
        changed_by: int | None = None,
    ) -> Order:
        """
        Решение по заявке на возврат

        Args:
            order_id: ID заказа
            approve: True - одобрить, False - отклонить
            reject_reason: Причина отказа (обязательна при отклонении)
            changed_by: ID администратора

        Returns:
            Заказ после решения

        Raises:
            EntityNotFoundError: Заказ не найден
            BusinessRuleViolation: NO_ACTIVE_REFUND_REQUEST
            OrderValidationError: Отказ без причины
            RefundGatewayError: Ошибка или таймаут шлюза
            ConcurrentModificationError: Заказ изменён параллельно
        """
        order = await self.order_repo.load(order_id)

        try:
            self.state_machine.can_decide_refund(order)
        except BusinessRuleViolation as e:
            logger.warning(f"Невозможно обработать возврат по заказу #{order_id}: {e}")
            raise

        data = validate_command(DecideRefundSchema, {"agree": approve, "reason": reject_reason})

        if data.agree:
            return await self._approve(order, changed_by)
        return await self._reject(order, data.reason, changed_by)

    async def _reject(self, order: Order, reason: str, changed_by: int | None) -> Order:
        """Отказ: статус no_active_request, причина в extra"""
        rejected = replace(
            order,
            refund_status=RefundStatus.NO_ACTIVE_REQUEST,
            extra=self.state_machine.reject_refund_extra(order.extra, reason),
            version=order.version + 1,
        )
        await self._persist(order, rejected, changed_by, notes=reason)
        logger.info(f"Возврат по заказу #{order.id} отклонён: {reason}")
        return rejected

    async def _approve(self, order: Order, changed_by: int | None) -> Order:
        """Одобрение: вызов шлюза и сохранение статуса, который он вернул"""
        new_extra = self.state_machine.approve_refund_extra(order.extra)

        try:
            result = await asyncio.wait_for(
                self.gateway.refund(order), timeout=self.gateway_timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                f"Таймаут шлюза при возврате по заказу #{order.id} ({self.gateway_timeout}s)"
            )
            raise RefundGatewayError(order.id, "gateway timeout") from e
        except TransientRefundError as e:
            logger.warning(f"Временная ошибка шлюза по заказу #{order.id}: {e}")
            raise RefundGatewayError(order.id, str(e)) from e
        except PermanentRefundError as e:
            await self._mark_failed(order, new_extra, e, changed_by)
            raise RefundGatewayError(order.id, str(e), permanent=True, code=e.code) from e

        new_status = self.state_machine.refund_status_after_gateway(result.status)
        if new_status is None:
            logger.error(
                f"Шлюз вернул неожиданный статус '{result.status}' по заказу #{order.id}"
            )
            raise RefundGatewayError(order.id, f"unexpected gateway status '{result.status}'")

        approved = replace(
            order,
            refund_status=new_status,
            refund_no=result.reference,
            extra=new_extra,
            version=order.version + 1,
        )
        await self._persist(order, approved, changed_by, notes=result.reference)
        logger.info(
            f"Возврат по заказу #{order.id} одобрен: {result.status}, операция {result.reference}"
        )
        return approved

    async def _mark_failed(
        self, order: Order, extra: dict, error: PermanentRefundError, changed_by: int | None
    ) -> Order:
        failed_extra = dict(extra)
        failed_extra[ExtraKey.REFUND_FAILED_CODE] = error.code or str(error)
        failed = replace(
            order,
            refund_status=RefundStatus.FAILED,
            extra=failed_extra,
            version=order.version + 1,
        )
        await self._persist(order, failed, changed_by, notes=str(error))
        logger.error(f"Шлюз отказал в возврате по заказу #{order.id}: {error}")
        return failed

    async def _persist(
        self, old: Order, new: Order, changed_by: int | None, notes: str | None = None
    ) -> None:
        """Статус и extra сохраняются одной записью вместе с аудитом"""
        change = StatusChange(
            field="refund_status",
            old_status=old.refund_status,
            new_status=new.refund_status,
            changed_by=changed_by,
            notes=notes,
        )
        await self.order_repo.save(new, expected_version=old.version, changes=[change])
