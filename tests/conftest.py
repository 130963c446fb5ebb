"""
Pytest configuration and fixtures.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.api.deps import get_store
from app.db.records import new_record
from app.db.schema import metadata
from app.db.store import EntityStore
from app.main import app


@pytest.fixture(scope="function")
def engine():
    """
    Fresh SQLite in-memory database for each test.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def store(engine):
    return EntityStore(engine)


@pytest.fixture
def client(store):
    """
    Test client whose routes all talk to the in-memory store.
    """
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_menu(store):
    menu = new_record("menu_id", name="Dinner", category="Mains")
    return store.insert_one("menus", menu)


@pytest.fixture
def seed_table(store):
    table = new_record("table_id", table_number=7, number_of_guests=4)
    return store.insert_one("dining_tables", table)


@pytest.fixture
def add_food(store, seed_menu):
    def _add(name="Burger", price=10.0, image="burger.png"):
        food = new_record(
            "food_id",
            name=name,
            price=price,
            food_image=image,
            menu_id=seed_menu["menu_id"],
        )
        return store.insert_one("foods", food)

    return _add


@pytest.fixture
def add_order(store):
    def _add(table_id=None):
        order = new_record("order_id", order_date=None, table_id=table_id)
        return store.insert_one("orders", order)

    return _add


@pytest.fixture
def add_item(store):
    def _add(order_id, food_id, unit_price, quantity="M"):
        item = new_record(
            "order_item_id",
            quantity=quantity,
            unit_price=unit_price,
            food_id=food_id,
            order_id=order_id,
        )
        return store.insert_one("order_items", item)

    return _add
