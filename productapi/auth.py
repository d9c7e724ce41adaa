"""Bearer-token authentication for protected routes."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

import jwt
from flask import current_app, g, jsonify, request

from productapi.security import get_secret_key

_BEARER = "Bearer "
_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


class TokenError(Exception):
    """The request carries no usable access token."""


def authenticate(
    authorization_header: str | None, secret: bytes | str | None = None
) -> tuple[float, str]:
    """Validate a bearer token and return the user id and role it names."""
    header = authorization_header or ""
    if not header.startswith(_BEARER):
        raise TokenError("Missing or invalid token")
    token = header[len(_BEARER):]
    key = get_secret_key() if secret is None else secret
    try:
        claims = jwt.decode(token, key, algorithms=_HMAC_ALGORITHMS)
    except jwt.InvalidTokenError as exc:
        raise TokenError("invalid or expired token") from exc
    if not isinstance(claims, dict):
        raise TokenError("cannot parse JWT claims")
    user_id = claims.get("id")
    if isinstance(user_id, bool) or not isinstance(user_id, (int, float)):
        raise TokenError("invalid user_id in token")
    role = claims.get("role")
    if not isinstance(role, str):
        raise TokenError("invalid role in token")
    return float(user_id), role


def jwt_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Let the view run only for requests with a valid bearer token."""

    @functools.wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        secret = current_app.config.get("JWT_SECRET")
        try:
            user_id, role = authenticate(request.headers.get("Authorization"), secret)
        except TokenError as exc:
            return jsonify({"message": str(exc)}), 401
        g.user_id = user_id
        g.role = role
        return view(*args, **kwargs)

    return wrapper