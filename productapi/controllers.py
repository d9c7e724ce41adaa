"""HTTP handlers for user accounts and products."""

from __future__ import annotations

import functools
import json
import logging
import re
from collections.abc import Callable
from datetime import datetime
from typing import Any

import jwt
from flask import Response, g, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from productapi.models import Product
from productapi.schemas import (
    ApiResponse,
    LoginRequest,
    ProductRequest,
    RegisterRequest,
    UpdateProductRequest,
)
from productapi.services import AuthenticationError, ProductService, UserService

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_ZERO_TIME = "0001-01-01T00:00:00Z"
_OK = 200
_NON_AUTHORITATIVE = 203
_BAD_REQUEST = 400
_UNAUTHORIZED = 401
_UNSUPPORTED_MEDIA = 415
_SERVER_ERROR = 500

SessionFactory = Callable[[], Session]


class _Rejected(Exception):
    """Stops a handler early with a prepared JSON answer."""

    def __init__(self, status: int, body: Any) -> None:
        super().__init__(status)
        self.status = status
        self.body = body


def _json(body: Any, status: int) -> Response:
    response = jsonify(body)
    response.status_code = status
    return response


def _handles_rejection(method: Callable[..., Response]) -> Callable[..., Response]:
    @functools.wraps(method)
    def wrapper(*args: Any, **kwargs: Any) -> Response:
        try:
            return method(*args, **kwargs)
        except _Rejected as rejected:
            return _json(rejected.body, rejected.status)

    return wrapper


def _bind(schema: Any) -> Any:
    """Read the JSON request body into the given request schema."""
    raw = request.get_data(cache=True)
    if not raw:
        return schema.from_dict(None)
    if not request.is_json:
        raise _Rejected(_UNSUPPORTED_MEDIA, {"message": "Unsupported Media Type"})
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise _Rejected(_BAD_REQUEST, {"message": f"invalid JSON body: {exc}"}) from exc
    try:
        return schema.from_dict(data)
    except ValueError as exc:
        raise _Rejected(_BAD_REQUEST, {"message": str(exc)}) from exc


def _require_user_present() -> None:
    if getattr(g, "user_id", None) is None:
        raise _Rejected(_UNAUTHORIZED, {"message": "Unauthorized"})


def _require_role() -> str:
    role = getattr(g, "role", None)
    if role is None:
        raise _Rejected(_UNAUTHORIZED, {"message": "Role Undetected"})
    logger.debug("request role: %s", role)
    return role


def _user_id() -> float:
    user_id = getattr(g, "user_id", None)
    if not isinstance(user_id, float):
        raise _Rejected(_UNAUTHORIZED, {"message": "Invalid user_id type"})
    return user_id


def _path_id(value: str, message: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise _Rejected(
            _BAD_REQUEST, ApiResponse(status=_BAD_REQUEST, message=message).to_dict()
        )
    return int(value)


def _timestamp(value: datetime | None) -> str:
    if value is None:
        return _ZERO_TIME
    return value.astimezone().isoformat()


def _product_json(product: Product) -> dict[str, Any]:
    return {
        "id": product.id or 0,
        "product_name": product.product_name or "",
        "total": product.total or 0,
        "price": product.price or 0.0,
        "user_id": product.user_id or 0,
        "CreatedAt": _timestamp(product.created_at),
        "UpdatedAt": _timestamp(product.updated_at),
    }


class UserController:
    """Handles registration and login."""

    def __init__(
        self, session_factory: SessionFactory, secret: bytes | str | None = None
    ) -> None:
        self._session_factory = session_factory
        self._secret = secret

    @_handles_rejection
    def register(self) -> Response:
        """Create an account from the request body."""
        payload = _bind(RegisterRequest)
        with self._session_factory() as session:
            try:
                result = UserService(session, self._secret).register(payload)
            except (SQLAlchemyError, ValueError) as exc:
                return _json(
                    {"message": "Gagal register", "error": str(exc)}, _SERVER_ERROR
                )
        logger.info("registered user %s", result.username)
        return _json(
            ApiResponse(status=_OK, message="Berhasil Register", data=result).to_dict(),
            _OK,
        )

    @_handles_rejection
    def login(self) -> Response:
        """Check the credentials in the request body and issue a token."""
        payload = _bind(LoginRequest)
        credentials = LoginRequest(username=payload.username, password=payload.password)
        with self._session_factory() as session:
            try:
                result = UserService(session, self._secret).login(credentials)
            except (AuthenticationError, jwt.PyJWTError) as exc:
                return _json({"message": "Gagal Login", "error": str(exc)}, _SERVER_ERROR)
        logger.info("user %s logged in", result.username)
        return _json(
            ApiResponse(status=_OK, message="Berhasil Login", data=result).to_dict(),
            _OK,
        )


class ProductController:
    """Handles the products of the authenticated user."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    @_handles_rejection
    def create(self) -> Response:
        """Store a product for the authenticated user."""
        payload = _bind(ProductRequest)
        _require_user_present()
        payload.user_id = int(_user_id())
        with self._session_factory() as session:
            result = ProductService(session).create(payload)
        return _json(
            ApiResponse(status=_OK, message="Berhasil Tambah Data", data=result).to_dict(),
            _OK,
        )

    @_handles_rejection
    def get_by_user_id(self) -> Response:
        """List the authenticated user's products."""
        _require_user_present()
        user_id = int(_user_id())
        with self._session_factory() as session:
            products = [
                _product_json(product)
                for product in ProductService(session).get_by_user_id(user_id)
            ]
        return _json(
            ApiResponse(
                status=_OK,
                message="Berhasil Ambil Data Berdasarkan UserID",
                data=products,
            ).to_dict(),
            _OK,
        )

    @_handles_rejection
    def update(self, product_id: str) -> Response:
        """Change one of the user's products; only admins may do so."""
        payload = _bind(UpdateProductRequest)
        _require_user_present()
        role = _require_role()
        payload.user_id = int(_user_id())
        payload.id = _path_id(product_id, "ID tidak valid")
        if role != "admin":
            return _json(
                ApiResponse(
                    status=_NON_AUTHORITATIVE,
                    message="Cannot Update! You are not admin",
                ).to_dict(),
                _SERVER_ERROR,
            )
        with self._session_factory() as session:
            result = ProductService(session).update(payload.id, payload.user_id, payload)
        return _json(
            ApiResponse(status=_OK, message="Berhasil Ubah Data", data=result).to_dict(),
            _OK,
        )

    @_handles_rejection
    def delete(self, product_id: str) -> Response:
        """Remove one of the user's products; only admins may do so."""
        _require_user_present()
        role = _require_role()
        user_id = int(_user_id())
        target = _path_id(product_id, "productID tidak valid")
        if role != "admin":
            return _json(
                ApiResponse(
                    status=_NON_AUTHORITATIVE,
                    message="Cannot Delete! You are not admin",
                ).to_dict(),
                _SERVER_ERROR,
            )
        with self._session_factory() as session:
            try:
                removed = ProductService(session).delete(target, user_id)
            except SQLAlchemyError as exc:
                logger.error("Delete error: %s", exc)
                return _json(
                    ApiResponse(
                        status=_BAD_REQUEST, message="Failed to Delete Data"
                    ).to_dict(),
                    _SERVER_ERROR,
                )
        if removed < 1:
            return _json(
                ApiResponse(status=_BAD_REQUEST, message="No Data Found").to_dict(),
                _SERVER_ERROR,
            )
        return _json(
            ApiResponse(status=_OK, message="Berhasil Hapus Data").to_dict(), _OK
        )