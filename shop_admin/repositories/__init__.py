"""
Repository layer для абстракции работы с базой данных
"""

from shop_admin.repositories.base import BaseRepository, CampaignStatusLookup, OrderStore
from shop_admin.repositories.campaign_repository import CampaignRepository
from shop_admin.repositories.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    RepositoryError,
)
from shop_admin.repositories.order_repository import OrderRepository


__all__ = [
    "BaseRepository",
    "CampaignRepository",
    "CampaignStatusLookup",
    "ConcurrentModificationError",
    "EntityNotFoundError",
    "OrderRepository",
    "OrderStore",
    "RepositoryError",
]
