"""Ядро приложения - конфигурация, константы и базовые исключения"""

from shop_admin.core.config import Config
from shop_admin.core.constants import (
    CrowdfundingStatus,
    ErrorKind,
    ExtraKey,
    OrderType,
    RefundStatus,
    ShipStatus,
)
from shop_admin.core.errors import OrderValidationError, ShopAdminError


__all__ = [
    "Config",
    "CrowdfundingStatus",
    "ErrorKind",
    "ExtraKey",
    "OrderType",
    "OrderValidationError",
    "RefundStatus",
    "ShipStatus",
    "ShopAdminError",
]
