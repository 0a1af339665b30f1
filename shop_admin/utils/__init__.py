"""Утилиты и вспомогательные функции"""
from shop_admin.utils.helpers import MOSCOW_TZ, format_amount, format_datetime, get_now
from shop_admin.utils.logging_setup import setup_logging
from shop_admin.utils.sentry import init_sentry


__all__ = [
    "MOSCOW_TZ",
    "format_amount",
    "format_datetime",
    "get_now",
    "init_sentry",
    "setup_logging",
]
