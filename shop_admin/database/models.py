"""
Модели данных
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from shop_admin.core.constants import ExtraKey, OrderType, RefundStatus, ShipStatus


@dataclass
class ProductSnapshot:
    """Снимок товара на момент оформления заказа"""
    id: int
    title: str = ""
    type: str = OrderType.NORMAL


@dataclass
class OrderItem:
    """Позиция заказа"""
    id: int | None = None
    product: ProductSnapshot | None = None
    amount: int = 1
    price: Decimal = Decimal("0")

    @property
    def product_id(self) -> int | None:
        return self.product.id if self.product else None


@dataclass
class ShipData:
    """Данные об отправке: транспортная компания и трек-номер"""
    express_company: str
    express_no: str

    def to_dict(self) -> dict[str, str]:
        return {"express_company": self.express_company, "express_no": self.express_no}


@dataclass
class Order:
    """Модель заказа (агрегат)"""
    id: int | None = None
    no: str = ""
    user_id: int | None = None
    total_amount: Decimal = Decimal("0")
    type: str = OrderType.NORMAL
    paid_at: datetime | None = None
    ship_status: str = ShipStatus.PENDING
    ship_data: ShipData | None = None
    refund_status: str = RefundStatus.NONE
    refund_no: str | None = None
    extra: dict = field(default_factory=dict)
    items: list[OrderItem] = field(default_factory=list)
    version: int = 1
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.paid_at is not None

    @property
    def refund_disagree_reason(self) -> str | None:
        """Причина последнего отказа в возврате (если есть)"""
        return self.extra.get(ExtraKey.REFUND_DISAGREE_REASON)

    def first_product_id(self) -> int | None:
        """
        ID товара первой позиции

        Краудфандинговый заказ всегда содержит ровно одну позицию,
        по ней определяется кампания.
        """
        if not self.items:
            return None
        return self.items[0].product_id


@dataclass
class StatusChange:
    """Запись аудита изменения статуса заказа"""
    field: str
    old_status: str | None
    new_status: str
    changed_by: int | None = None
    notes: str | None = None
    changed_at: datetime | None = None
    order_id: int | None = None
