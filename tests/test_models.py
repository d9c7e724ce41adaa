from datetime import datetime

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from productapi.models import Base, Product, User


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as db:
        yield db
    engine.dispose()


def test_table_names():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    try:
        assert set(inspect(engine).get_table_names()) == {"user", "product"}
    finally:
        engine.dispose()
    assert User(username="alice").__table__.name == "user"
    assert Product(product_name="Pen").__table__.name == "product"


def test_product_columns():
    columns = set(Base.metadata.tables["product"].columns.keys())
    assert columns == {
        "id",
        "product_name",
        "total",
        "price",
        "user_id",
        "created_at",
        "updated_at",
    }


def test_user_columns():
    columns = set(Base.metadata.tables["user"].columns.keys())
    assert columns == {
        "id",
        "username",
        "password",
        "email",
        "role",
        "created_at",
        "updated_at",
    }


def test_user_roundtrip_sets_id_and_timestamps(session):
    password = "password"
    user = User(username="alice", password=password, email="alice@example.com", role="admin")
    session.add(user)
    session.commit()
    loaded = session.get(User, user.id)
    assert loaded.username == "alice"
    assert loaded.email == "alice@example.com"
    assert loaded.role == "admin"
    assert loaded.id >= 1
    assert isinstance(loaded.created_at, datetime)
    assert loaded.updated_at >= loaded.created_at


def test_username_is_unique(session):
    session.add(User(username="bob"))
    session.commit()
    session.add(User(username="bob"))
    with pytest.raises(IntegrityError):
        session.commit()


def test_username_is_required(session):
    session.add(User(email="nobody@example.com"))
    with pytest.raises(IntegrityError):
        session.commit()


def test_product_defaults(session):
    product = Product()
    session.add(product)
    session.commit()
    assert product.product_name == ""
    assert product.total == 0
    assert product.price == 0.0


def test_user_products_relationship(session):
    user = User(username="carol")
    user.products.append(Product(product_name="Book", total=2, price=4.5))
    session.add(user)
    session.commit()
    product = user.products[0]
    assert product.user_id == user.id
    assert inspect(product).persistent