"""
Factory для создания сервисов и репозиториев
"""

import logging

from shop_admin.core.config import Config
from shop_admin.database.orm_database import ORMDatabase
from shop_admin.domain.order_state_machine import OrderStateMachine
from shop_admin.repositories import CampaignRepository, OrderRepository
from shop_admin.services.order_query_service import OrderQueryService
from shop_admin.services.refund_gateway import RefundGateway
from shop_admin.services.refund_service import RefundService
from shop_admin.services.shipment_service import ShipmentNotifier, ShipmentService


logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory для создания сервисов с инжекцией зависимостей
    """

    def __init__(
        self,
        database: ORMDatabase,
        refund_gateway: RefundGateway,
        notifier: ShipmentNotifier | None = None,
        gateway_timeout: float | None = None,
    ):
        """
        Инициализация фабрики

        Args:
            database: Подключённая ORM база данных
            refund_gateway: Платёжный шлюз для возвратов
            notifier: Уведомления об отправке (опционально)
            gateway_timeout: Таймаут шлюза (по умолчанию Config.REFUND_GATEWAY_TIMEOUT)
        """
        self.database = database
        self.refund_gateway = refund_gateway
        self.notifier = notifier
        self.gateway_timeout = gateway_timeout or Config.REFUND_GATEWAY_TIMEOUT
        self._order_repo = None
        self._campaign_repo = None
        self._shipment_service = None
        self._refund_service = None
        self._query_service = None
        self._state_machine = None

    @property
    def order_repository(self) -> OrderRepository:
        """Ленивая инициализация OrderRepository"""
        if self._order_repo is None:
            self._order_repo = OrderRepository(self.database)
        return self._order_repo

    @property
    def campaign_repository(self) -> CampaignRepository:
        """Ленивая инициализация CampaignRepository"""
        if self._campaign_repo is None:
            self._campaign_repo = CampaignRepository(self.database)
        return self._campaign_repo

    @property
    def state_machine(self) -> OrderStateMachine:
        """Ленивая инициализация OrderStateMachine"""
        if self._state_machine is None:
            self._state_machine = OrderStateMachine()
        return self._state_machine

    @property
    def shipment_service(self) -> ShipmentService:
        """Получение ShipmentService"""
        if self._shipment_service is None:
            self._shipment_service = ShipmentService(
                order_repo=self.order_repository,
                campaign_lookup=self.campaign_repository,
                notifier=self.notifier,
                state_machine=self.state_machine,
            )
        return self._shipment_service

    @property
    def refund_service(self) -> RefundService:
        """Получение RefundService"""
        if self._refund_service is None:
            self._refund_service = RefundService(
                order_repo=self.order_repository,
                gateway=self.refund_gateway,
                gateway_timeout=self.gateway_timeout,
                state_machine=self.state_machine,
            )
        return self._refund_service

    @property
    def query_service(self) -> OrderQueryService:
        """Получение OrderQueryService"""
        if self._query_service is None:
            self._query_service = OrderQueryService(
                order_repo=self.order_repository,
                campaign_lookup=self.campaign_repository,
                state_machine=self.state_machine,
            )
        return self._query_service
