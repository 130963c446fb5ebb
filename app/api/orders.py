# app/api/orders.py

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_deadline, get_listing_service, get_page_window, get_store
from app.db.deadline import Deadline
from app.db.records import new_record, utcnow
from app.db.store import EntityStore
from app.models.common import Page
from app.models.orders import OrderCreate, OrderOut, OrderUpdate
from app.services.pagination import ListingService, PageWindow

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/", response_model=Page[OrderOut])
def list_orders(
    table_id: Optional[str] = Query(default=None, description="Only orders of this table"),
    window: PageWindow = Depends(get_page_window),
    listing: ListingService = Depends(get_listing_service),
    deadline: Deadline = Depends(get_deadline),
) -> Page[OrderOut]:
    filters = {"table_id": table_id} if table_id is not None else {}
    result = listing.list_page("orders", window, filters, deadline=deadline)

    return Page[OrderOut](
        page=result.page,
        record_per_page=result.record_per_page,
        total_count=result.total_count,
        items=[OrderOut(**doc) for doc in result.items],
    )


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> OrderOut:
    doc = store.require_one("orders", {"order_id": order_id}, "Order", deadline=deadline)
    return OrderOut(**doc)


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> OrderOut:
    if payload.table_id is not None:
        store.require_one(
            "dining_tables", {"table_id": payload.table_id}, "Table", deadline=deadline
        )

    record = new_record("order_id", order_date=payload.order_date, table_id=payload.table_id)
    return OrderOut(**store.insert_one("orders", record, deadline=deadline))


@router.patch("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: str,
    payload: OrderUpdate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> OrderOut:
    values = {}
    if payload.table_id is not None:
        store.require_one(
            "dining_tables", {"table_id": payload.table_id}, "Table", deadline=deadline
        )
        values["table_id"] = payload.table_id
    values["updated_at"] = utcnow()

    store.update_one("orders", {"order_id": order_id}, values, upsert=True, deadline=deadline)
    return OrderOut(**store.find_one("orders", {"order_id": order_id}, deadline=deadline))
