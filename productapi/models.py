"""Database tables for users and their products."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base shared by every table of the API."""


class User(Base):
    """A registered account that owns products."""

    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=True, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=True, default="")
    role: Mapped[str] = mapped_column(String(255), nullable=True, default="")
    created_at: Mapped[datetime] = mapped_column(default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(
        default=datetime.now, onupdate=datetime.now
    )
    products: Mapped[list[Product]] = relationship()


class Product(Base):
    """A stock item belonging to one user."""

    __tablename__ = "product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_name: Mapped[str] = mapped_column(String(255), nullable=True, default="")
    total: Mapped[int] = mapped_column(Integer, nullable=True, default=0)
    price: Mapped[float] = mapped_column(Float, nullable=True, default=0.0)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user.id"), nullable=True, default=0
    )
    created_at: Mapped[datetime] = mapped_column(default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(
        default=datetime.now, onupdate=datetime.now
    )