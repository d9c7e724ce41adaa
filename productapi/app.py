"""The web application and its command-line entry point."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from productapi.auth import jwt_required
from productapi.controllers import ProductController, UserController
from productapi.database import init_db

logger = logging.getLogger(__name__)

_JSON_ERROR_CODES = (400, 401, 403, 404, 405, 406, 409, 413, 415, 422, 429, 500)


def _index() -> tuple[str, int, dict[str, str]]:
    return "This is Product API", 200, {"Content-Type": "text/plain; charset=UTF-8"}


def _http_error(exc):
    return jsonify({"message": exc.name}), exc.code


def create_app(
    session_factory: Callable[[], Session] | None = None,
    secret: bytes | str | None = None,
) -> Flask:
    """Build the application with its routes wired to the given database."""
    factory = session_factory if session_factory is not None else init_db()
    app = Flask(__name__)
    app.config["JWT_SECRET"] = secret

    users = UserController(factory, secret)
    products = ProductController(factory)

    app.add_url_rule("/", "index", _index, methods=["GET"])
    app.add_url_rule("/user/register", "register", users.register, methods=["POST"])
    app.add_url_rule("/user/login", "login", users.login, methods=["POST"])
    app.add_url_rule(
        "/product", "create_product", jwt_required(products.create), methods=["POST"]
    )
    app.add_url_rule(
        "/product", "list_products", jwt_required(products.get_by_user_id), methods=["GET"]
    )
    app.add_url_rule(
        "/product/<product_id>",
        "update_product",
        jwt_required(products.update),
        methods=["PATCH"],
    )
    app.add_url_rule(
        "/product/<product_id>",
        "delete_product",
        jwt_required(products.delete),
        methods=["DELETE"],
    )
    for code in _JSON_ERROR_CODES:
        app.register_error_handler(code, _http_error)
    return app


def main(argv: Sequence[str] | None = None) -> None:
    """Load .env, connect to the database and serve the API."""
    parser = argparse.ArgumentParser(
        prog="productapi",
        description="Serve the product API on LOCALHOST:APP_PORT from the .env file.",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    env_file = Path(".env")
    if not env_file.is_file():
        raise SystemExit("Error loading .env file")
    load_dotenv(env_file)

    try:
        app = create_app()
    except SQLAlchemyError as exc:
        raise SystemExit("Failed Connect to Database") from exc

    host = os.environ.get("LOCALHOST", "")
    port_text = os.environ.get("APP_PORT", "")
    try:
        port = int(port_text) if port_text else None
    except ValueError as exc:
        raise SystemExit(f"invalid APP_PORT: {port_text!r}") from exc
    app.run(host=host or None, port=port)


if __name__ == "__main__":
    main()