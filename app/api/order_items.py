# app/api/order_items.py

import logging
from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_deadline, get_order_view_service, get_store
from app.db.deadline import Deadline
from app.db.records import new_record, utcnow
from app.db.store import EntityStore
from app.errors import NotFoundError
from app.models.order_items import (
    OrderItemOut,
    OrderItemPack,
    OrderItemPackOut,
    OrderItemUpdate,
    OrderView,
)
from app.services.order_view import OrderViewService
from app.services.pricing import normalize

router = APIRouter(prefix="/order-items", tags=["order-items"])

logger = logging.getLogger(__name__)


@router.get("/", response_model=List[OrderItemOut])
def list_order_items(
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> List[OrderItemOut]:
    return [OrderItemOut(**doc) for doc in store.find_many("order_items", deadline=deadline)]


@router.get("/order/{order_id}", response_model=List[OrderView])
def list_order_items_by_order(
    order_id: str,
    order_views: OrderViewService = Depends(get_order_view_service),
    deadline: Deadline = Depends(get_deadline),
) -> List[OrderView]:
    """
    The order's items joined with food and table, grouped with the amount due.
    """
    return order_views.compute_order_view(order_id, deadline=deadline)


@router.get("/{order_item_id}", response_model=OrderItemOut)
def get_order_item(
    order_item_id: str,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> OrderItemOut:
    doc = store.require_one(
        "order_items", {"order_item_id": order_item_id}, "Order item", deadline=deadline
    )
    return OrderItemOut(**doc)


@router.post("/", response_model=OrderItemPackOut, status_code=201)
def create_order_items(
    pack: OrderItemPack,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> OrderItemPackOut:
    """
    Open a new order for the pack's table and store its items.

    Every reference is checked before anything is written.
    """
    if pack.table_id is not None:
        store.require_one("dining_tables", {"table_id": pack.table_id}, "Table", deadline=deadline)

    food_ids = {item.food_id for item in pack.order_items}
    known = {doc["food_id"] for doc in store.find_in("foods", "food_id", food_ids, deadline=deadline)}
    missing = sorted(food_ids - known)
    if missing:
        raise NotFoundError("Food", ", ".join(missing))

    order = new_record("order_id", order_date=utcnow(), table_id=pack.table_id)
    store.insert_one("orders", order, deadline=deadline)

    items = [
        new_record(
            "order_item_id",
            quantity=item.quantity,
            unit_price=normalize(item.unit_price),
            food_id=item.food_id,
            order_id=order["order_id"],
        )
        for item in pack.order_items
    ]
    store.insert_many("order_items", items, deadline=deadline)

    logger.info("Order %s opened with %s item(s)", order["order_id"], len(items))

    return OrderItemPackOut(
        order_id=order["order_id"],
        order_item_ids=[item["order_item_id"] for item in items],
    )


@router.patch("/{order_item_id}", response_model=OrderItemOut)
def update_order_item(
    order_item_id: str,
    payload: OrderItemUpdate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> OrderItemOut:
    values = {}
    if payload.unit_price is not None:
        values["unit_price"] = normalize(payload.unit_price)
    if payload.quantity is not None:
        values["quantity"] = payload.quantity
    if payload.food_id is not None:
        store.require_one("foods", {"food_id": payload.food_id}, "Food", deadline=deadline)
        values["food_id"] = payload.food_id
    values["updated_at"] = utcnow()

    filters = {"order_item_id": order_item_id}
    store.update_one("order_items", filters, values, upsert=True, deadline=deadline)
    return OrderItemOut(**store.find_one("order_items", filters, deadline=deadline))
