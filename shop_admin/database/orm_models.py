"""
SQLAlchemy ORM модели для базы данных
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Базовый класс для всех моделей"""


class Product(Base):
    """Модель товара в SQLAlchemy"""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="normal")

    crowdfunding: Mapped[Optional["CrowdfundingProduct"]] = relationship(
        "CrowdfundingProduct", back_populates="product", uselist=False
    )

    __table_args__ = (
        CheckConstraint(
            "type IN ('normal', 'crowdfunding', 'seckill')", name="chk_products_type"
        ),
    )


class CrowdfundingProduct(Base):
    """Краудфандинговая кампания товара"""

    __tablename__ = "crowdfunding_products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id"), unique=True, nullable=False
    )
    target_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="funding")
    end_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    product: Mapped["Product"] = relationship("Product", back_populates="crowdfunding")

    __table_args__ = (
        Index("idx_crowdfunding_products_status", "status"),
        CheckConstraint(
            "status IN ('funding', 'success', 'fail')", name="chk_crowdfunding_products_status"
        ),
    )


class Order(Base):
    """Модель заказа в SQLAlchemy"""

    __tablename__ = "orders"

    # Основные поля
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    no: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="normal")

    # Оплата и доставка
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    ship_status: Mapped[str] = mapped_column(String(50), nullable=False, default="pending")
    ship_data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    # Возврат
    refund_status: Mapped[str] = mapped_column(String(50), nullable=False, default="none")
    refund_no: Mapped[Optional[str]] = mapped_column(String(64), unique=True, nullable=True)
    extra: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    # Системные поля
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")

    # Связи
    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order", order_by="OrderItem.id"
    )
    status_history: Mapped[list["OrderStatusHistory"]] = relationship(
        "OrderStatusHistory", back_populates="order"
    )

    # Индексы и ограничения
    __table_args__ = (
        Index("idx_orders_paid_at", "paid_at"),
        Index("idx_orders_ship_status", "ship_status"),
        Index("idx_orders_refund_status", "refund_status"),
        CheckConstraint(
            "ship_status IN ('pending', 'delivered', 'received')", name="chk_orders_ship_status"
        ),
        CheckConstraint(
            "refund_status IN ('none', 'applied', 'processing', 'no_active_request', "
            "'failed', 'success')",
            name="chk_orders_refund_status",
        ),
        CheckConstraint("total_amount >= 0", name="chk_orders_total_amount"),
        CheckConstraint("version > 0", name="chk_orders_version"),
    )


class OrderItem(Base):
    """Позиция заказа в SQLAlchemy"""

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id: Mapped[int] = mapped_column(Integer, ForeignKey("products.id"), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)

    order: Mapped["Order"] = relationship("Order", back_populates="items")
    product: Mapped["Product"] = relationship("Product")

    __table_args__ = (
        Index("idx_order_items_order_id", "order_id"),
        CheckConstraint("amount > 0", name="chk_order_items_amount"),
    )


class OrderStatusHistory(Base):
    """Модель истории изменений статусов заказов (аудит)"""

    __tablename__ = "order_status_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(Integer, ForeignKey("orders.id"), nullable=False)
    field: Mapped[str] = mapped_column(String(50), nullable=False)
    old_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    new_status: Mapped[str] = mapped_column(String(50), nullable=False)
    changed_by: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    changed_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    order: Mapped["Order"] = relationship("Order", back_populates="status_history")

    __table_args__ = (
        Index("idx_order_status_history_order_id", "order_id"),
        Index("idx_order_status_history_changed_at", "changed_at"),
    )
