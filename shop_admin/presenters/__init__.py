"""
Presenters - форматирование заказов для административной панели

Подписи статусов живут здесь; ядро работает только со значениями статусов.
"""

from shop_admin.presenters.order_presenter import (
    FIELD_LABELS,
    REFUND_STATUS_LABELS,
    SHIP_STATUS_LABELS,
    OrderPresenter,
)


__all__ = [
    "FIELD_LABELS",
    "OrderPresenter",
    "REFUND_STATUS_LABELS",
    "SHIP_STATUS_LABELS",
]
