"""Pydantic schemas package"""
from shop_admin.schemas.order import DecideRefundSchema, ShipOrderSchema, validate_command


__all__ = [
    "DecideRefundSchema",
    "ShipOrderSchema",
    "validate_command",
]
