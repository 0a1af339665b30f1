"""
Интерфейс платёжного шлюза для возвратов и его ошибки
"""

from dataclasses import dataclass
from typing import Protocol

from shop_admin.core.constants import ErrorKind
from shop_admin.core.errors import ShopAdminError
from shop_admin.database.models import Order


@dataclass
class RefundResult:
    """Ответ шлюза: статус возврата (processing/success) и идентификатор операции"""

    status: str
    reference: str


class TransientRefundError(Exception):
    """Временная ошибка шлюза (сеть, таймаут, 5xx); повторный вызов безопасен"""


class PermanentRefundError(Exception):
    """Шлюз окончательно отказал в возврате"""

    def __init__(self, message: str, code: str | None = None):
        self.code = code
        super().__init__(message)


class RefundGateway(Protocol):
    """
    Шлюз, выполняющий возврат средств

    Вызов должен быть идемпотентен по ID заказа: повторный вызов для того же
    заказа не создаёт второй возврат.
    """

    async def refund(self, order: Order) -> RefundResult:
        ...


class RefundGatewayError(ShopAdminError):
    """
    Ошибка вызова шлюза, возвращаемая вызывающему коду

    permanent=False: статус заказа не изменён, решение можно повторить.
    permanent=True: заказ переведён в failed.
    """

    kind = ErrorKind.REFUND_GATEWAY_ERROR

    def __init__(self, order_id: int, message: str, permanent: bool = False, code: str | None = None):
        self.order_id = order_id
        self.permanent = permanent
        self.code = code
        super().__init__(f"Refund for order #{order_id} failed: {message}")
