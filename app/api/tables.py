# app/api/tables.py

from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_deadline, get_store
from app.db.deadline import Deadline
from app.db.records import new_record, utcnow
from app.db.store import EntityStore
from app.models.tables import TableCreate, TableOut, TableUpdate

router = APIRouter(prefix="/tables", tags=["tables"])


@router.get("/", response_model=List[TableOut])
def list_tables(
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> List[TableOut]:
    return [TableOut(**doc) for doc in store.find_many("dining_tables", deadline=deadline)]


@router.get("/{table_id}", response_model=TableOut)
def get_table(
    table_id: str,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> TableOut:
    doc = store.require_one("dining_tables", {"table_id": table_id}, "Table", deadline=deadline)
    return TableOut(**doc)


@router.post("/", response_model=TableOut, status_code=201)
def create_table(
    payload: TableCreate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> TableOut:
    record = new_record("table_id", **payload.model_dump())
    return TableOut(**store.insert_one("dining_tables", record, deadline=deadline))


@router.patch("/{table_id}", response_model=TableOut)
def update_table(
    table_id: str,
    payload: TableUpdate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> TableOut:
    values = payload.model_dump(exclude_none=True)
    values["updated_at"] = utcnow()

    store.update_one(
        "dining_tables", {"table_id": table_id}, values, upsert=True, deadline=deadline
    )
    return TableOut(**store.find_one("dining_tables", {"table_id": table_id}, deadline=deadline))
