"""Request payloads and response bodies exchanged with API clients."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def _body(data: Any) -> Mapping:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("request body must be a JSON object")
    return data


def _string(data: Mapping, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected a string")
    return value


def _integer(data: Mapping, key: str, *, unsigned: bool = False) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key}: expected an integer")
    if unsigned and value < 0:
        raise ValueError(f"{key}: expected a non-negative integer")
    return value


def _number(data: Mapping, key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key}: expected a number")
    return float(value)


def _serialize(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _serialize(item) for key, item in value.items()}
    return value


@dataclass
class RegisterRequest:
    """Payload of a registration request."""

    username: str = ""
    password: str = ""
    email: str = ""
    role: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> RegisterRequest:
        body = _body(data)
        return cls(
            username=_string(body, "username"),
            password=_string(body, "password"),
            email=_string(body, "email"),
            role=_string(body, "role"),
        )


@dataclass
class LoginRequest:
    """Payload of a login request."""

    username: str = ""
    password: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> LoginRequest:
        body = _body(data)
        return cls(
            username=_string(body, "username"),
            password=_string(body, "password"),
        )


@dataclass
class ProductRequest:
    """Payload for creating a product."""

    product_name: str = ""
    total: int = 0
    price: float = 0.0
    user_id: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> ProductRequest:
        body = _body(data)
        return cls(
            product_name=_string(body, "product_name"),
            total=_integer(body, "total"),
            price=_number(body, "price"),
            user_id=_integer(body, "user_id", unsigned=True),
        )


@dataclass
class UpdateProductRequest:
    """Payload for changing a product."""

    id: int = 0
    product_name: str = ""
    total: int = 0
    price: float = 0.0
    user_id: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> UpdateProductRequest:
        body = _body(data)
        return cls(
            id=_integer(body, "id", unsigned=True),
            product_name=_string(body, "product_name"),
            total=_integer(body, "total"),
            price=_number(body, "price"),
            user_id=_integer(body, "user_id", unsigned=True),
        )


@dataclass
class ApiResponse:
    """Envelope wrapped around every successful answer."""

    status: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "data": _serialize(self.data),
        }


@dataclass
class UserResponse:
    """Public view of a user after registration."""

    username: str
    email: str
    role: str

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "email": self.email, "role": self.role}


@dataclass
class LoginResponse:
    """Public view of a user together with an access token."""

    username: str
    email: str
    role: str
    token: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "token": self.token,
        }


@dataclass
class ProductResponse:
    """Public view of a product."""

    id: int
    product_name: str
    total: int
    price: float
    user_id: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "product_name": self.product_name,
            "total": self.total,
            "price": self.price,
            "user_id": self.user_id,
        }


def to_register_response(user: Any) -> UserResponse:
    """Build the registration answer for a user."""
    return UserResponse(username=user.username, email=user.email, role=user.role)


def to_login_response(user: Any, token: str) -> LoginResponse:
    """Build the login answer for a user and the token issued to them."""
    return LoginResponse(
        username=user.username, email=user.email, role=user.role, token=token
    )


def to_product_response(product: Any) -> ProductResponse:
    """Build the public view of a product."""
    return ProductResponse(
        id=product.id or 0,
        product_name=product.product_name or "",
        total=product.total or 0,
        price=product.price or 0.0,
        user_id=product.user_id or 0,
    )