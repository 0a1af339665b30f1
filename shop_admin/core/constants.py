"""
Константы приложения - статусы доставки, возвратов, типы заказов
"""


class ShipStatus:
    """Статусы доставки"""

    PENDING = "pending"  # Не отправлен
    DELIVERED = "delivered"  # Отправлен
    RECEIVED = "received"  # Получен покупателем

    @classmethod
    def all_statuses(cls) -> list[str]:
        """Список всех статусов доставки"""
        return [cls.PENDING, cls.DELIVERED, cls.RECEIVED]


class RefundStatus:
    """
    Статусы возврата средств

    NO_ACTIVE_REQUEST - заявка на возврат отклонена, активной заявки нет.
    Покупатель может подать заявку повторно (вне этого модуля).
    """

    NONE = "none"  # Возврат не запрашивался
    APPLIED = "applied"  # Покупатель подал заявку
    PROCESSING = "processing"  # Возврат выполняется платёжным шлюзом
    NO_ACTIVE_REQUEST = "no_active_request"  # Заявка отклонена
    FAILED = "failed"  # Шлюз отказал в возврате
    SUCCESS = "success"  # Средства возвращены

    @classmethod
    def all_statuses(cls) -> list[str]:
        """Список всех статусов возврата"""
        return [
            cls.NONE,
            cls.APPLIED,
            cls.PROCESSING,
            cls.NO_ACTIVE_REQUEST,
            cls.FAILED,
            cls.SUCCESS,
        ]


class OrderType:
    """Типы заказов"""

    NORMAL = "normal"
    CROWDFUNDING = "crowdfunding"
    SECKILL = "seckill"

    @classmethod
    def all_types(cls) -> list[str]:
        """Список всех типов заказов"""
        return [cls.NORMAL, cls.CROWDFUNDING, cls.SECKILL]


class CrowdfundingStatus:
    """Статусы краудфандинговой кампании"""

    FUNDING = "funding"
    SUCCESS = "success"
    FAIL = "fail"

    @classmethod
    def all_statuses(cls) -> list[str]:
        """Список всех статусов кампании"""
        return [cls.FUNDING, cls.SUCCESS, cls.FAIL]


class ExtraKey:
    """Ключи поля extra заказа"""

    REFUND_REASON = "refund_reason"  # Причина возврата от покупателя
    REFUND_DISAGREE_REASON = "refund_disagree_reason"  # Причина отказа в возврате
    REFUND_FAILED_CODE = "refund_failed_code"  # Код ошибки шлюза


class ErrorKind:
    """Виды ошибок, которые ядро возвращает вызывающему коду"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_PAID = "NOT_PAID"
    ALREADY_SHIPPED = "ALREADY_SHIPPED"
    CROWDFUNDING_NOT_SUCCESSFUL = "CROWDFUNDING_NOT_SUCCESSFUL"
    NO_ACTIVE_REFUND_REQUEST = "NO_ACTIVE_REFUND_REQUEST"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"
    REFUND_GATEWAY_ERROR = "REFUND_GATEWAY_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Нарушения бизнес-правил никогда не повторяются
    BUSINESS_RULES = frozenset(
        {NOT_PAID, ALREADY_SHIPPED, CROWDFUNDING_NOT_SUCCESSFUL, NO_ACTIVE_REFUND_REQUEST}
    )
