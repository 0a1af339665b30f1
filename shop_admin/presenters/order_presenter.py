"""
OrderPresenter - форматирование заказов для административной панели
"""

from types import MappingProxyType

from shop_admin.core.constants import ErrorKind, OrderType, RefundStatus, ShipStatus
from shop_admin.core.errors import OrderValidationError, ShopAdminError
from shop_admin.database.models import Order
from shop_admin.utils.helpers import format_amount, format_datetime


SHIP_STATUS_LABELS = MappingProxyType(
    {
        ShipStatus.PENDING: "Не отправлен",
        ShipStatus.DELIVERED: "Отправлен",
        ShipStatus.RECEIVED: "Получен",
    }
)

REFUND_STATUS_LABELS = MappingProxyType(
    {
        RefundStatus.NONE: "Возврат не запрашивался",
        RefundStatus.APPLIED: "Запрошен возврат",
        RefundStatus.PROCESSING: "Возврат выполняется",
        RefundStatus.NO_ACTIVE_REQUEST: "В возврате отказано",
        RefundStatus.FAILED: "Ошибка возврата",
        RefundStatus.SUCCESS: "Возврат выполнен",
    }
)

ORDER_TYPE_LABELS = MappingProxyType(
    {
        OrderType.NORMAL: "Обычный",
        OrderType.CROWDFUNDING: "Краудфандинг",
        OrderType.SECKILL: "Флеш-распродажа",
    }
)

# Названия полей форм
FIELD_LABELS = MappingProxyType(
    {
        "express_company": "Транспортная компания",
        "express_no": "Трек-номер",
        "agree": "Решение",
        "reason": "Причина отказа",
    }
)

ERROR_MESSAGES = MappingProxyType(
    {
        ErrorKind.NOT_PAID: "Заказ не оплачен",
        ErrorKind.ALREADY_SHIPPED: "Заказ уже отправлен",
        ErrorKind.CROWDFUNDING_NOT_SUCCESSFUL: (
            "Краудфандинговый заказ можно отправить только после успешной кампании"
        ),
        ErrorKind.NO_ACTIVE_REFUND_REQUEST: "Неверный статус заказа",
        ErrorKind.CONCURRENT_MODIFICATION: "Заказ изменён другим пользователем, обновите страницу",
        ErrorKind.REFUND_GATEWAY_ERROR: "Платёжный шлюз недоступен, попробуйте позже",
        ErrorKind.NOT_FOUND: "Заказ не найден",
    }
)


class OrderPresenter:
    """Presenter для форматирования заказов"""

    @staticmethod
    def ship_status_label(status: str) -> str:
        return SHIP_STATUS_LABELS.get(status, status)

    @staticmethod
    def refund_status_label(status: str) -> str:
        return REFUND_STATUS_LABELS.get(status, status)

    @staticmethod
    def localize_fields(fields: list[str]) -> list[str]:
        """Названия полей для пользователя"""
        return [FIELD_LABELS.get(name, name) for name in fields]

    @classmethod
    def format_error(cls, error: ShopAdminError) -> str:
        """
        Сообщение об ошибке для администратора

        Args:
            error: Исключение ядра

        Returns:
            Текст ошибки
        """
        if isinstance(error, OrderValidationError):
            return "Заполните поля: " + ", ".join(cls.localize_fields(error.fields))
        return ERROR_MESSAGES.get(error.kind, str(error))

    @classmethod
    def format_grid_row(cls, order: Order) -> dict[str, str]:
        """
        Строка таблицы оплаченных заказов

        Args:
            order: Заказ

        Returns:
            Словарь колонка → значение
        """
        return {
            "id": str(order.id),
            "no": order.no,
            "user_id": str(order.user_id) if order.user_id is not None else "-",
            "total_amount": format_amount(order.total_amount),
            "paid_at": format_datetime(order.paid_at),
            "ship_status": cls.ship_status_label(order.ship_status),
            "refund_status": cls.refund_status_label(order.refund_status),
        }

    @classmethod
    def format_order_details(cls, order: Order) -> str:
        """
        Детальная информация о заказе

        Args:
            order: Заказ

        Returns:
            Отформатированный текст
        """
        lines = [
            f"Заказ #{order.id} ({order.no})",
            f"Тип: {ORDER_TYPE_LABELS.get(order.type, order.type)}",
            f"Сумма: {format_amount(order.total_amount)}",
            f"Оплачен: {format_datetime(order.paid_at)}",
            f"Доставка: {cls.ship_status_label(order.ship_status)}",
        ]

        if order.ship_data:
            lines.append(
                f"Отправка: {order.ship_data.express_company}, {order.ship_data.express_no}"
            )

        lines.append(f"Возврат: {cls.refund_status_label(order.refund_status)}")

        if order.refund_disagree_reason:
            lines.append(f"Причина отказа: {order.refund_disagree_reason}")

        for item in order.items:
            title = item.product.title if item.product else "-"
            lines.append(f"  • {title} × {item.amount} = {format_amount(item.price)}")

        return "\n".join(lines)
