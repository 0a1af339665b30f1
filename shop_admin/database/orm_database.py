"""
SQLAlchemy ORM Database класс
"""

import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from shop_admin.core.config import Config
from shop_admin.database.orm_models import Base


logger = logging.getLogger(__name__)


class ORMDatabase:
    """Класс для работы с базой данных через SQLAlchemy ORM"""

    def __init__(self, database_url: str | None = None):
        """
        Инициализация ORM Database

        Args:
            database_url: URL базы данных (SQLite или PostgreSQL)
        """
        self.database_url = database_url or Config.get_database_url()
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self._is_sqlite = self.database_url.startswith("sqlite")

    async def connect(self):
        """Подключение к базе данных"""
        logger.info("Инициализация подключения к БД...")
        logger.debug(f"   Database URL: {self.database_url}")

        engine_kwargs = {"echo": False}
        if self._is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs["pool_pre_ping"] = True
            engine_kwargs["pool_recycle"] = 3600

        try:
            self.engine = create_async_engine(self.database_url, **engine_kwargs)
        except Exception as e:
            logger.error(f"ERROR: Ошибка подключения к БД: {e}")
            raise

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Важно для async работы
        )
        logger.info("OK: Подключено к базе данных")

    async def disconnect(self):
        """Отключение от базы данных"""
        if self.engine:
            await self.engine.dispose()
            logger.info("Отключено от базы данных")

    async def create_tables(self):
        """
        Создание таблиц по ORM моделям

        Используется в тестах и для локального запуска.
        В production используйте 'alembic upgrade head'.
        """
        if not self.engine:
            raise RuntimeError("База данных не подключена")

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.debug("Таблицы созданы")

    @asynccontextmanager
    async def get_session(self):
        """
        Context manager для получения сессии

        Usage:
            async with db.get_session() as session:
                order = await session.get(Order, order_id)
                # Автоматический commit/rollback
        """
        if not self.session_factory:
            raise RuntimeError("База данных не подключена")

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
                logger.debug("OK: Транзакция успешно завершена (commit)")
            except Exception as e:
                await session.rollback()
                logger.error(f"ERROR: Транзакция отменена (rollback): {e}")
                raise
