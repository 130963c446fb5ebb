# app/db/schema.py
"""
One table per entity collection.

Each record has a store-internal integer `id` plus the stable string
identifier handed out to clients (`menu_id`, `food_id`, ...). Besides the
identifiers and timestamps, columns are nullable: records are written
through partial updates with upsert, the way a document store accepts
them.
"""

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    Float, DateTime, Text
)

metadata = MetaData()


def _timestamps():
    return (
        Column("created_at", DateTime(timezone=True), nullable=True),
        Column("updated_at", DateTime(timezone=True), nullable=True),
    )


menus = Table(
    "menus",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("menu_id", String(64), nullable=False, unique=True),
    Column("name", String),
    Column("category", String),
    Column("start_date", DateTime(timezone=True)),
    Column("end_date", DateTime(timezone=True)),
    *_timestamps(),
)

foods = Table(
    "foods",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("food_id", String(64), nullable=False, unique=True),
    Column("name", String),
    Column("price", Float),
    Column("food_image", Text),
    Column("menu_id", String(64), index=True),
    *_timestamps(),
)

dining_tables = Table(
    "dining_tables",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("table_id", String(64), nullable=False, unique=True),
    Column("table_number", Integer),
    Column("number_of_guests", Integer),
    *_timestamps(),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", String(64), nullable=False, unique=True),
    Column("order_date", DateTime(timezone=True)),
    Column("table_id", String(64), index=True),
    *_timestamps(),
)

order_items = Table(
    "order_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_item_id", String(64), nullable=False, unique=True),
    Column("quantity", String(1)),
    Column("unit_price", Float),
    Column("food_id", String(64), index=True),
    Column("order_id", String(64), index=True),
    *_timestamps(),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("invoice_id", String(64), nullable=False, unique=True),
    Column("order_id", String(64), index=True),
    Column("payment_method", String(16)),
    Column("payment_status", String(16)),
    Column("payment_due_date", DateTime(timezone=True)),
    *_timestamps(),
)

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False, unique=True),
    Column("first_name", String(100)),
    Column("last_name", String(100)),
    Column("email", String, index=True),
    Column("phone", String, index=True),
    Column("avatar", Text),
    *_timestamps(),
)

COLLECTIONS = dict(metadata.tables)
