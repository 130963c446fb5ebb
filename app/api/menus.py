# app/api/menus.py

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_deadline, get_store
from app.db.deadline import Deadline
from app.db.records import new_record, utcnow
from app.db.store import EntityStore
from app.errors import InvalidRequestError
from app.models.menus import MenuCreate, MenuOut, MenuUpdate

router = APIRouter(prefix="/menus", tags=["menus"])


def in_time_span(start: datetime, end: datetime, check: datetime) -> bool:
    return start < check < end


@router.get("/", response_model=List[MenuOut])
def list_menus(
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> List[MenuOut]:
    return [MenuOut(**doc) for doc in store.find_many("menus", deadline=deadline)]


@router.get("/{menu_id}", response_model=MenuOut)
def get_menu(
    menu_id: str,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> MenuOut:
    doc = store.require_one("menus", {"menu_id": menu_id}, "Menu", deadline=deadline)
    return MenuOut(**doc)


@router.post("/", response_model=MenuOut, status_code=201)
def create_menu(
    payload: MenuCreate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> MenuOut:
    doc = store.insert_one(
        "menus", new_record("menu_id", **payload.model_dump()), deadline=deadline
    )
    return MenuOut(**doc)


@router.patch("/{menu_id}", response_model=MenuOut)
def update_menu(
    menu_id: str,
    payload: MenuUpdate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> MenuOut:
    """
    Update a menu. Only accepted with a start/end window that contains now.
    """
    if payload.start_date is None or payload.end_date is None:
        raise InvalidRequestError("Start and End dates must be provided")

    now = utcnow()
    if not in_time_span(payload.start_date, payload.end_date, now):
        raise InvalidRequestError("Kindly retype the time")

    values = {"start_date": payload.start_date, "end_date": payload.end_date}
    if payload.name:
        values["name"] = payload.name
    if payload.category:
        values["category"] = payload.category
    values["updated_at"] = now

    store.update_one("menus", {"menu_id": menu_id}, values, upsert=True, deadline=deadline)
    return MenuOut(**store.find_one("menus", {"menu_id": menu_id}, deadline=deadline))
