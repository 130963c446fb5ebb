# app/api/foods.py

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_deadline, get_listing_service, get_page_window, get_store
from app.db.deadline import Deadline
from app.db.records import new_record, utcnow
from app.db.store import EntityStore
from app.errors import InvalidRequestError
from app.models.common import Page
from app.models.foods import FoodCreate, FoodOut, FoodUpdate
from app.services.pagination import ListingService, PageWindow
from app.services.pricing import normalize

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("/", response_model=Page[FoodOut])
def list_foods(
    menu_id: Optional[str] = Query(default=None, description="Only foods of this menu"),
    window: PageWindow = Depends(get_page_window),
    listing: ListingService = Depends(get_listing_service),
    deadline: Deadline = Depends(get_deadline),
) -> Page[FoodOut]:
    filters = {"menu_id": menu_id} if menu_id is not None else {}
    result = listing.list_page("foods", window, filters, deadline=deadline)

    return Page[FoodOut](
        page=result.page,
        record_per_page=result.record_per_page,
        total_count=result.total_count,
        items=[FoodOut(**doc) for doc in result.items],
    )


@router.get("/{food_id}", response_model=FoodOut)
def get_food(
    food_id: str,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> FoodOut:
    doc = store.require_one("foods", {"food_id": food_id}, "Food", deadline=deadline)
    return FoodOut(**doc)


@router.post("/", response_model=FoodOut, status_code=201)
def create_food(
    payload: FoodCreate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> FoodOut:
    store.require_one("menus", {"menu_id": payload.menu_id}, "Menu", deadline=deadline)

    record = new_record(
        "food_id",
        name=payload.name,
        price=normalize(payload.price),
        food_image=payload.food_image,
        menu_id=payload.menu_id,
    )
    return FoodOut(**store.insert_one("foods", record, deadline=deadline))


@router.patch("/{food_id}", response_model=FoodOut)
def update_food(
    food_id: str,
    payload: FoodUpdate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> FoodOut:
    values = {}
    if payload.name is not None:
        values["name"] = payload.name
    if payload.price is not None:
        values["price"] = normalize(payload.price)
    if payload.food_image is not None:
        values["food_image"] = payload.food_image
    if payload.menu_id is not None:
        store.require_one("menus", {"menu_id": payload.menu_id}, "Menu", deadline=deadline)
        values["menu_id"] = payload.menu_id

    if not values:
        raise InvalidRequestError("No fields to update")

    values["updated_at"] = utcnow()
    store.update_one("foods", {"food_id": food_id}, values, upsert=True, deadline=deadline)
    return FoodOut(**store.find_one("foods", {"food_id": food_id}, deadline=deadline))
