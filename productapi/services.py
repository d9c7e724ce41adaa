"""Business rules for user accounts and their products."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from productapi.models import Product, User
from productapi.repositories import ProductRepository, UserNotFoundError, UserRepository
from productapi.schemas import (
    LoginResponse,
    ProductResponse,
    UserResponse,
    to_login_response,
    to_product_response,
    to_register_response,
)
from productapi.security import check_password_hash, generate_jwt, hash_password


class AuthenticationError(Exception):
    """The username or the password given at login is wrong."""

    def __init__(self, message: str = "invalid username or password") -> None:
        super().__init__(message)


def _product_from(request: Any) -> Product:
    return Product(
        product_name=request.product_name,
        total=request.total,
        price=request.price,
        user_id=request.user_id,
    )


class ProductService:
    """Creates, lists, changes and removes a user's products."""

    def __init__(self, session: Session) -> None:
        self._products = ProductRepository(session)

    def create(self, request: Any) -> ProductResponse:
        """Store a new product built from the request and return its public view."""
        product = self._products.create(_product_from(request))
        return to_product_response(product)

    def get_by_user_id(self, user_id: int) -> list[Product]:
        """Return every product owned by the user."""
        return self._products.get_by_user_id(user_id)

    def update(self, product_id: int, user_id: int, request: Any) -> ProductResponse:
        """Apply the request's non-empty fields to the user's product."""
        product = _product_from(request)
        self._products.update(product_id, user_id, product)
        return to_product_response(product)

    def delete(self, product_id: int, user_id: int) -> int:
        """Remove the user's product and return how many rows were removed."""
        return self._products.delete(product_id, user_id)


class UserService:
    """Registers accounts and logs users in."""

    def __init__(self, session: Session, secret: bytes | str | None = None) -> None:
        self._users = UserRepository(session)
        self._secret = secret

    def register(self, request: Any) -> UserResponse:
        """Store a new account with a hashed password."""
        user = User(
            username=request.username,
            email=request.email,
            role=request.role,
            password=hash_password(request.password),
        )
        self._users.register(user)
        return to_register_response(user)

    def login(self, request: Any) -> LoginResponse:
        """Check the credentials and issue an access token."""
        try:
            user = self._users.check_username(request.username)
        except UserNotFoundError as exc:
            raise AuthenticationError() from exc
        if not check_password_hash(request.password, user.password or ""):
            raise AuthenticationError()
        token = generate_jwt(user.id, user.username, user.role, self._secret)
        return to_login_response(user, token)