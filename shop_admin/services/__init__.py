"""
Сервисный слой: отгрузка и возвраты
"""

from shop_admin.services.order_query_service import OrderQueryService, OrdersPage
from shop_admin.services.refund_gateway import (
    PermanentRefundError,
    RefundGateway,
    RefundGatewayError,
    RefundResult,
    TransientRefundError,
)
from shop_admin.services.refund_service import RefundService
from shop_admin.services.service_factory import ServiceFactory
from shop_admin.services.shipment_service import ShipmentNotifier, ShipmentService


__all__ = [
    "OrderQueryService",
    "OrdersPage",
    "PermanentRefundError",
    "RefundGateway",
    "RefundGatewayError",
    "RefundResult",
    "RefundService",
    "ServiceFactory",
    "ShipmentNotifier",
    "ShipmentService",
    "TransientRefundError",
]
