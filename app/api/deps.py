# app/api/deps.py
"""
FastAPI dependencies wiring the store and services into the routers.

Tests replace get_store through app.dependency_overrides.
"""

from typing import Optional

from fastapi import Depends, Query

from app.db.deadline import Deadline
from app.db.engine import get_engine
from app.db.store import EntityStore
from app.services.invoice_view import InvoiceViewService
from app.services.order_view import OrderViewService
from app.services.pagination import ListingService, PageWindow, paginate
from app.settings import Settings, get_settings


def get_store() -> EntityStore:
    return EntityStore(get_engine())


def get_deadline(settings: Settings = Depends(get_settings)) -> Deadline:
    return Deadline(settings.operation_timeout_seconds)


def get_page_window(
    page: Optional[str] = Query(default=None, description="1-based page number"),
    record_per_page: Optional[str] = Query(
        default=None,
        alias="recordPerPage",
        description="Records per page",
    ),
    settings: Settings = Depends(get_settings),
) -> PageWindow:
    # taken as raw strings: bad values fall back to defaults instead of a 422
    return paginate(
        page,
        record_per_page,
        default_page=settings.default_page,
        default_record_per_page=settings.default_record_per_page,
    )


def get_listing_service(
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ListingService:
    return ListingService(store, settings.operation_timeout_seconds)


def get_order_view_service(
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> OrderViewService:
    return OrderViewService(store, settings.operation_timeout_seconds)


def get_invoice_view_service(
    store: EntityStore = Depends(get_store),
    order_views: OrderViewService = Depends(get_order_view_service),
    settings: Settings = Depends(get_settings),
) -> InvoiceViewService:
    return InvoiceViewService(store, order_views, settings.operation_timeout_seconds)
