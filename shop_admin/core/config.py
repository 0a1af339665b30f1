"""
Конфигурация приложения из переменных окружения
"""

import os

from dotenv import load_dotenv


load_dotenv()


class Config:
    """Конфигурация приложения"""

    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "shop_admin.db")
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOGS_DIR: str = os.getenv("LOGS_DIR", "logs")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Таймаут вызова платёжного шлюза при возврате (секунды)
    REFUND_GATEWAY_TIMEOUT: float = float(os.getenv("REFUND_GATEWAY_TIMEOUT", "10"))

    # Таймаут уведомления об отправке (секунды)
    SHIPMENT_NOTIFY_TIMEOUT: float = float(os.getenv("SHIPMENT_NOTIFY_TIMEOUT", "5"))

    # Размер страницы списка оплаченных заказов
    ORDERS_PAGE_SIZE: int = int(os.getenv("ORDERS_PAGE_SIZE", "20"))

    @classmethod
    def get_database_url(cls) -> str:
        """URL базы данных; по умолчанию SQLite файл DATABASE_PATH"""
        if cls.DATABASE_URL:
            return cls.DATABASE_URL
        return f"sqlite+aiosqlite:///{cls.DATABASE_PATH}"

    @classmethod
    def validate(cls) -> bool:
        """
        Проверка конфигурации

        Returns:
            True если конфигурация корректна

        Raises:
            ValueError: Если параметры заданы неверно
        """
        if not cls.DATABASE_URL and not cls.DATABASE_PATH:
            raise ValueError("DATABASE_PATH или DATABASE_URL не установлены")

        if cls.REFUND_GATEWAY_TIMEOUT <= 0:
            raise ValueError("REFUND_GATEWAY_TIMEOUT должен быть больше нуля")

        if cls.SHIPMENT_NOTIFY_TIMEOUT <= 0:
            raise ValueError("SHIPMENT_NOTIFY_TIMEOUT должен быть больше нуля")

        if cls.ORDERS_PAGE_SIZE <= 0:
            raise ValueError("ORDERS_PAGE_SIZE должен быть больше нуля")

        return True
