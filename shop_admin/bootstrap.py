"""
Инициализация приложения: логирование, Sentry, БД и сервисы
"""

import logging

from shop_admin.core.config import Config
from shop_admin.database.orm_database import ORMDatabase
from shop_admin.services.refund_gateway import RefundGateway
from shop_admin.services.service_factory import ServiceFactory
from shop_admin.services.shipment_service import ShipmentNotifier
from shop_admin.utils.logging_setup import setup_logging
from shop_admin.utils.sentry import init_sentry


logger = logging.getLogger(__name__)


async def init_app(
    refund_gateway: RefundGateway,
    notifier: ShipmentNotifier | None = None,
    database_url: str | None = None,
    create_tables: bool = False,
    configure_logging: bool = True,
) -> ServiceFactory:
    """
    Запуск приложения

    Args:
        refund_gateway: Платёжный шлюз для возвратов
        notifier: Уведомления об отправке (опционально)
        database_url: URL базы данных (по умолчанию из Config)
        create_tables: Создать таблицы (без alembic, для локального запуска)
        configure_logging: Настроить root logger

    Returns:
        ServiceFactory с подключённой БД
    """
    if configure_logging:
        setup_logging()

    Config.validate()
    init_sentry()

    database = ORMDatabase(database_url)
    await database.connect()
    if create_tables:
        await database.create_tables()

    logger.info(f"Приложение запущено (environment: {Config.ENVIRONMENT})")
    return ServiceFactory(database, refund_gateway=refund_gateway, notifier=notifier)


async def shutdown_app(factory: ServiceFactory) -> None:
    """Остановка приложения: закрытие подключений к БД"""
    await factory.database.disconnect()
    logger.info("Приложение остановлено")
