"""
Сервис просмотра оплаченных заказов для административной панели
"""

import logging
from dataclasses import dataclass

from shop_admin.core.config import Config
from shop_admin.core.constants import OrderType
from shop_admin.database.models import Order
from shop_admin.domain.order_state_machine import OrderStateMachine
from shop_admin.presenters.order_presenter import OrderPresenter
from shop_admin.repositories.base import CampaignStatusLookup
from shop_admin.repositories.order_repository import OrderRepository


logger = logging.getLogger(__name__)


@dataclass
class OrdersPage:
    """Страница таблицы заказов"""

    rows: list[dict[str, str]]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        return max(1, -(-self.total // self.page_size))


class OrderQueryService:
    """Чтение заказов: таблица оплаченных заказов и карточка заказа"""

    def __init__(
        self,
        order_repo: OrderRepository,
        campaign_lookup: CampaignStatusLookup,
        state_machine: OrderStateMachine | None = None,
        page_size: int | None = None,
    ):
        self.order_repo = order_repo
        self.campaign_lookup = campaign_lookup
        self.state_machine = state_machine or OrderStateMachine()
        self.page_size = page_size or Config.ORDERS_PAGE_SIZE

    async def list_paid_orders(self, page: int = 1) -> OrdersPage:
        """
        Оплаченные заказы, последние оплаченные первыми

        Args:
            page: Номер страницы (с 1)

        Returns:
            OrdersPage со строками таблицы
        """
        page = max(page, 1)
        orders = await self.order_repo.list_paid(
            limit=self.page_size, offset=(page - 1) * self.page_size
        )
        total = await self.order_repo.count_paid()
        return OrdersPage(
            rows=[OrderPresenter.format_grid_row(order) for order in orders],
            total=total,
            page=page,
            page_size=self.page_size,
        )

    async def get_order_details(self, order_id: int) -> tuple[Order, str, list[str]]:
        """
        Карточка заказа

        Args:
            order_id: ID заказа

        Returns:
            (заказ, текст карточки, доступные действия)

        Raises:
            EntityNotFoundError: Заказ не найден
        """
        order = await self.order_repo.load(order_id)

        campaign_status = None
        if order.type == OrderType.CROWDFUNDING and order.first_product_id() is not None:
            campaign_status = await self.campaign_lookup.status_of(order.first_product_id())

        actions = self.state_machine.available_actions(order, campaign_status)
        return order, OrderPresenter.format_order_details(order), actions
