"""
Репозиторий для краудфандинговых кампаний
"""

import logging

from sqlalchemy import select

from shop_admin.database.orm_models import CrowdfundingProduct
from shop_admin.repositories.base import BaseRepository


logger = logging.getLogger(__name__)


class CampaignRepository(BaseRepository[CrowdfundingProduct]):
    """Репозиторий для статусов краудфандинговых кампаний"""

    async def status_of(self, product_id: int) -> str | None:
        """
        Статус кампании по ID товара

        Args:
            product_id: ID товара

        Returns:
            Статус кампании или None если кампании нет
        """
        async with self.session() as session:
            result = await session.execute(
                select(CrowdfundingProduct.status).where(
                    CrowdfundingProduct.product_id == product_id
                )
            )
            status = result.scalar_one_or_none()

        if status is None:
            logger.warning(f"Кампания для товара #{product_id} не найдена")
        return status
