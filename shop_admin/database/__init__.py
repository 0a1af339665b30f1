"""
Database package: модели данных и подключение к БД
"""

from shop_admin.database.models import (
    Order,
    OrderItem,
    ProductSnapshot,
    ShipData,
    StatusChange,
)
from shop_admin.database.orm_database import ORMDatabase


__all__ = [
    "ORMDatabase",
    "Order",
    "OrderItem",
    "ProductSnapshot",
    "ShipData",
    "StatusChange",
]
