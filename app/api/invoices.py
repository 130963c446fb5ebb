# app/api/invoices.py

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import (
    get_deadline,
    get_invoice_view_service,
    get_listing_service,
    get_page_window,
    get_store,
)
from app.db.deadline import Deadline
from app.db.records import new_record, utcnow
from app.db.store import EntityStore
from app.models.common import Page
from app.models.invoices import (
    InvoiceCreate,
    InvoiceOut,
    InvoiceUpdate,
    InvoiceView,
    PaymentStatus,
)
from app.services.invoice_view import InvoiceViewService
from app.services.pagination import ListingService, PageWindow
from app.settings import Settings, get_settings

router = APIRouter(prefix="/invoices", tags=["invoices"])

DEFAULT_PAYMENT_STATUS = "PENDING"


@router.get("/", response_model=Page[InvoiceOut])
def list_invoices(
    payment_status: Optional[PaymentStatus] = Query(
        default=None,
        description="PENDING | PAID",
    ),
    window: PageWindow = Depends(get_page_window),
    listing: ListingService = Depends(get_listing_service),
    deadline: Deadline = Depends(get_deadline),
) -> Page[InvoiceOut]:
    filters = {"payment_status": payment_status} if payment_status is not None else {}
    result = listing.list_page("invoices", window, filters, deadline=deadline)

    return Page[InvoiceOut](
        page=result.page,
        record_per_page=result.record_per_page,
        total_count=result.total_count,
        items=[InvoiceOut(**doc) for doc in result.items],
    )


@router.get("/{invoice_id}", response_model=InvoiceView)
def get_invoice(
    invoice_id: str,
    invoice_views: InvoiceViewService = Depends(get_invoice_view_service),
    deadline: Deadline = Depends(get_deadline),
) -> InvoiceView:
    """
    The invoice with its order lines, table number and amount due.
    """
    return invoice_views.build_invoice_view(invoice_id, deadline=deadline)


@router.post("/", response_model=InvoiceOut, status_code=201)
def create_invoice(
    payload: InvoiceCreate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
    settings: Settings = Depends(get_settings),
) -> InvoiceOut:
    store.require_one("orders", {"order_id": payload.order_id}, "Order", deadline=deadline)

    record = new_record(
        "invoice_id",
        order_id=payload.order_id,
        payment_method=payload.payment_method,
        payment_status=payload.payment_status or DEFAULT_PAYMENT_STATUS,
    )
    # due date is fixed at creation and never taken from the request
    record["payment_due_date"] = record["created_at"] + timedelta(days=settings.invoice_due_days)

    return InvoiceOut(**store.insert_one("invoices", record, deadline=deadline))


@router.patch("/{invoice_id}", response_model=InvoiceOut)
def update_invoice(
    invoice_id: str,
    payload: InvoiceUpdate,
    store: EntityStore = Depends(get_store),
    deadline: Deadline = Depends(get_deadline),
) -> InvoiceOut:
    values = payload.model_dump(exclude_none=True)
    values["updated_at"] = utcnow()

    filters = {"invoice_id": invoice_id}
    store.update_one("invoices", filters, values, upsert=True, deadline=deadline)
    return InvoiceOut(**store.find_one("invoices", filters, deadline=deadline))
