# app/api/users.py

import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_deadline, get_listing_service, get_page_window, get_store
from app.db.deadline import Deadline
from app.db.records import new_record
from app.db.store import EntityStore
from app.errors import ConflictError
from app.models.common import Page
from app.models.users import UserCreate, UserOut
from app.services.pagination import ListingService, PageWindow

router = APIRouter(prefix="/users", tags=["users"])

logger = logging.getLogger(__name__)


@router.get("/", response_model=Page[UserOut])
def list_users(
    window: PageWindow = Depends(get_page_window),
    listing: ListingService = Depends(get_listing_service),
    deadline: Deadline = Depends(get_deadline),
) -> Page[UserOut]:
    result = listing.list_page("users", window, deadline=deadline)

    return Page[UserOut](
        page=result.page,
        record_per_page=result.record_per_page,
        total_count=result.total_count,
        items=[UserOut(**doc) for doc in result.items],
    )


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> UserOut:
    doc = store.require_one("users", {"user_id": user_id}, "User", deadline=deadline)
    return UserOut(**doc)


@router.post("/", response_model=UserOut, status_code=201)
def create_user(
    payload: UserCreate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> UserOut:
    """
    Register a user profile. Both the e-mail and the phone must be unused.
    """
    email_count = store.count("users", {"email": payload.email}, deadline=deadline)
    phone_count = store.count("users", {"phone": payload.phone}, deadline=deadline)

    if email_count > 0 or phone_count > 0:
        logger.warning(
            "Rejected user with duplicate contact (email taken: %s, phone taken: %s)",
            email_count > 0,
            phone_count > 0,
        )
        raise ConflictError("this email or phone number already exists")

    record = new_record("user_id", **payload.model_dump())
    return UserOut(**store.insert_one("users", record, deadline=deadline))
