"""
State Machine для валидации отгрузки и решений по возврату
"""

from dataclasses import dataclass

from shop_admin.core.constants import (
    CrowdfundingStatus,
    ErrorKind,
    ExtraKey,
    OrderType,
    RefundStatus,
    ShipStatus,
)
from shop_admin.core.errors import ShopAdminError
from shop_admin.database.models import Order


class BusinessRuleViolation(ShopAdminError):
    """Нарушение бизнес-правила; повтор не поможет"""

    def __init__(self, kind: str, message: str, order_id: int | None = None):
        self.kind = kind
        self.order_id = order_id
        super().__init__(message)


@dataclass
class TransitionResult:
    """Результат валидации перехода"""

    is_valid: bool
    target_state: str | None = None
    error_kind: str | None = None
    error_message: str | None = None


class OrderStateMachine:
    """
    State Machine для отгрузки и возвратов

    Доставка (монотонно):

    pending → delivered → received

    Возврат:

    none → applied                     (покупатель, вне модуля)
    applied → processing → success     (асинхронный шлюз)
    applied → success                  (синхронный шлюз)
    applied → failed                   (шлюз отказал окончательно)
    applied → no_active_request        (отказ администратора)
    no_active_request/failed/success → applied  (повторная заявка, вне модуля)

    Методы не имеют побочных эффектов и не изменяют переданный заказ.
    """

    SHIP_TRANSITIONS: dict[str, set[str]] = {
        ShipStatus.PENDING: {ShipStatus.DELIVERED},
        ShipStatus.DELIVERED: {ShipStatus.RECEIVED},
        ShipStatus.RECEIVED: set(),
    }

    REFUND_TRANSITIONS: dict[str, set[str]] = {
        RefundStatus.NONE: {RefundStatus.APPLIED},
        RefundStatus.APPLIED: {
            RefundStatus.PROCESSING,
            RefundStatus.SUCCESS,
            RefundStatus.FAILED,
            RefundStatus.NO_ACTIVE_REQUEST,
        },
        RefundStatus.PROCESSING: {RefundStatus.SUCCESS, RefundStatus.FAILED},
        RefundStatus.NO_ACTIVE_REQUEST: {RefundStatus.APPLIED},
        RefundStatus.FAILED: {RefundStatus.APPLIED},
        RefundStatus.SUCCESS: {RefundStatus.APPLIED},
    }

    # Статусы, которые шлюз может вернуть при успешном принятии возврата
    GATEWAY_ACCEPTED_STATUSES = frozenset({RefundStatus.PROCESSING, RefundStatus.SUCCESS})

    @classmethod
    def _fail(
        cls, kind: str, message: str, order: Order, raise_exception: bool
    ) -> TransitionResult:
        if raise_exception:
            raise BusinessRuleViolation(kind, message, order_id=order.id)
        return TransitionResult(is_valid=False, error_kind=kind, error_message=message)

    @classmethod
    def can_ship(
        cls,
        order: Order,
        campaign_status: str | None = None,
        raise_exception: bool = True,
    ) -> TransitionResult:
        """
        Проверка возможности отгрузки заказа

        Args:
            order: Заказ
            campaign_status: Статус краудфандинговой кампании (только для
                краудфандинговых заказов)
            raise_exception: Выбрасывать ли исключение при ошибке

        Returns:
            TransitionResult с целевым статусом delivered

        Raises:
            BusinessRuleViolation: NOT_PAID, ALREADY_SHIPPED или
                CROWDFUNDING_NOT_SUCCESSFUL при raise_exception=True
        """
        if not order.paid_at:
            return cls._fail(
                ErrorKind.NOT_PAID, f"Заказ #{order.id} не оплачен", order, raise_exception
            )

        if order.ship_status != ShipStatus.PENDING:
            return cls._fail(
                ErrorKind.ALREADY_SHIPPED,
                f"Заказ #{order.id} уже отправлен",
                order,
                raise_exception,
            )

        if order.type == OrderType.CROWDFUNDING and campaign_status != CrowdfundingStatus.SUCCESS:
            return cls._fail(
                ErrorKind.CROWDFUNDING_NOT_SUCCESSFUL,
                f"Краудфандинговый заказ #{order.id} можно отправить только после "
                f"успешного завершения кампании",
                order,
                raise_exception,
            )

        return TransitionResult(is_valid=True, target_state=ShipStatus.DELIVERED)

    @classmethod
    def can_decide_refund(cls, order: Order, raise_exception: bool = True) -> TransitionResult:
        """
        Проверка возможности принять решение по возврату

        Args:
            order: Заказ
            raise_exception: Выбрасывать ли исключение при ошибке

        Returns:
            TransitionResult (решение принимает сервис возвратов)

        Raises:
            BusinessRuleViolation: NO_ACTIVE_REFUND_REQUEST при raise_exception=True
        """
        if order.refund_status != RefundStatus.APPLIED:
            return cls._fail(
                ErrorKind.NO_ACTIVE_REFUND_REQUEST,
                f"У заказа #{order.id} нет активной заявки на возврат "
                f"(статус: {order.refund_status})",
                order,
                raise_exception,
            )
        return TransitionResult(is_valid=True)

    @classmethod
    def can_transition_refund(cls, from_state: str, to_state: str) -> bool:
        """Допустим ли переход статуса возврата"""
        return to_state in cls.REFUND_TRANSITIONS.get(from_state, set())

    @classmethod
    def can_transition_ship(cls, from_state: str, to_state: str) -> bool:
        """Допустим ли переход статуса доставки"""
        return to_state in cls.SHIP_TRANSITIONS.get(from_state, set())

    @classmethod
    def is_terminal_ship_status(cls, state: str) -> bool:
        """
        Проверка, является ли статус доставки терминальным

        Args:
            state: Статус для проверки

        Returns:
            True если из этого статуса нельзя никуда перейти
        """
        return len(cls.SHIP_TRANSITIONS.get(state, set())) == 0

    @classmethod
    def refund_status_after_gateway(cls, gateway_status: str) -> str | None:
        """
        Статус возврата после ответа шлюза

        Returns:
            processing/success или None, если шлюз вернул что-то другое
        """
        if gateway_status in cls.GATEWAY_ACCEPTED_STATUSES:
            return gateway_status
        return None

    @classmethod
    def reject_refund_extra(cls, extra: dict | None, reason: str) -> dict:
        """Новое значение extra после отказа в возврате (старая причина перезаписывается)"""
        new_extra = dict(extra or {})
        new_extra[ExtraKey.REFUND_DISAGREE_REASON] = reason
        return new_extra

    @classmethod
    def approve_refund_extra(cls, extra: dict | None) -> dict:
        """Новое значение extra после одобрения возврата: без причины отказа"""
        new_extra = dict(extra or {})
        new_extra.pop(ExtraKey.REFUND_DISAGREE_REASON, None)
        return new_extra

    @classmethod
    def available_actions(cls, order: Order, campaign_status: str | None = None) -> list[str]:
        """
        Действия администратора, доступные для заказа

        Args:
            order: Заказ
            campaign_status: Статус кампании для краудфандинговых заказов

        Returns:
            Список из "ship", "approve_refund", "reject_refund"
        """
        actions = []
        if cls.can_ship(order, campaign_status, raise_exception=False).is_valid:
            actions.append("ship")
        if cls.can_decide_refund(order, raise_exception=False).is_valid:
            actions.extend(["approve_refund", "reject_refund"])
        return actions
