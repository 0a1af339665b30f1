"""
Базовый репозиторий и интерфейсы хранилищ, которые использует ядро
"""

import logging
from typing import Generic, Protocol, TypeVar

from shop_admin.database.models import Order, StatusChange
from shop_admin.database.orm_database import ORMDatabase


logger = logging.getLogger(__name__)

T = TypeVar("T")


class OrderStore(Protocol):
    """Хранилище заказов: загрузка и сохранение с проверкой версии"""

    async def load(self, order_id: int) -> Order:
        """Raises EntityNotFoundError"""
        ...

    async def save(
        self,
        order: Order,
        expected_version: int,
        changes: list[StatusChange] | None = None,
    ) -> None:
        """Raises ConcurrentModificationError"""
        ...


class CampaignStatusLookup(Protocol):
    """Статус краудфандинговой кампании по товару"""

    async def status_of(self, product_id: int) -> str | None:
        ...


class BaseRepository(Generic[T]):
    """
    Базовый класс для всех репозиториев
    Предоставляет общую функциональность для работы с БД
    """

    def __init__(self, database: ORMDatabase):
        """
        Инициализация репозитория

        Args:
            database: Подключённая ORM база данных
        """
        self.db = database

    def session(self):
        """
        Сессия в рамках одной транзакции (commit/rollback автоматически)

        Returns:
            Асинхронный контекстный менеджер AsyncSession
        """
        return self.db.get_session()
