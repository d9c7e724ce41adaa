"""Data access for users and products."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from productapi.models import Product, User

_UPDATABLE_FIELDS = ("product_name", "total", "price", "user_id")


class UserNotFoundError(LookupError):
    """No user has the requested username."""


@contextmanager
def _transaction(session: Session) -> Iterator[None]:
    try:
        yield
        session.commit()
    except Exception:
        session.rollback()
        raise


class ProductRepository:
    """Stores and retrieves products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, product: Product) -> Product:
        """Insert the product; its id and timestamps are filled in."""
        with _transaction(self._session):
            self._session.add(product)
        return product

    def get_by_user_id(self, user_id: int) -> list[Product]:
        """Return every product owned by the user."""
        statement = select(Product).where(Product.user_id == user_id).order_by(Product.id)
        return list(self._session.scalars(statement))

    def update(self, product_id: int, user_id: int, product: Product) -> None:
        """Write the product's non-empty fields onto the user's product."""
        now = datetime.now()
        values = {
            name: getattr(product, name)
            for name in _UPDATABLE_FIELDS
            if getattr(product, name)
        }
        values["updated_at"] = now
        statement = (
            update(Product)
            .where(Product.id == product_id, Product.user_id == user_id)
            .values(**values)
        )
        with _transaction(self._session):
            self._session.execute(statement)
        product.updated_at = now

    def delete(self, product_id: int, user_id: int) -> int:
        """Remove the user's product and return how many rows went."""
        statement = delete(Product).where(
            Product.id == product_id, Product.user_id == user_id
        )
        with _transaction(self._session):
            result = self._session.execute(statement)
        return result.rowcount


class UserRepository:
    """Stores and looks up user accounts."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def check_username(self, username: str) -> User:
        """Return the user with this username or raise UserNotFoundError."""
        statement = select(User).where(User.username == username).order_by(User.id).limit(1)
        user = self._session.scalars(statement).first()
        if user is None:
            raise UserNotFoundError(username)
        return user

    def register(self, user: User) -> User:
        """Insert a new user."""
        with _transaction(self._session):
            self._session.add(user)
        return user