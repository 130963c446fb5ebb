# app/services/invoice_view.py

import logging
from typing import Optional

from app.db.deadline import Deadline
from app.db.store import EntityStore
from app.errors import NotFoundError
from app.models.invoices import InvoiceView
from app.services.order_view import OrderViewService

logger = logging.getLogger(__name__)

# Kept for API compatibility: clients expect this string, not "" or null
MISSING_PAYMENT_METHOD = "null"


class InvoiceViewService:
    def __init__(
        self,
        store: EntityStore,
        order_views: OrderViewService,
        timeout_seconds: float,
    ) -> None:
        self._store = store
        self._order_views = order_views
        self._timeout = timeout_seconds

    def build_invoice_view(
        self,
        invoice_id: str,
        deadline: Optional[Deadline] = None,
    ) -> InvoiceView:
        """
        The invoice joined with its order's lines and total.

        An order without items still gives a view, with payment_due,
        table_number and order_details left as None.
        """
        deadline = deadline or Deadline(self._timeout)

        invoice = self._store.find_one(
            "invoices", {"invoice_id": invoice_id}, deadline=deadline
        )
        if invoice is None:
            logger.warning("Invoice %s not found", invoice_id)
            raise NotFoundError("Invoice", invoice_id)

        order_id = invoice.get("order_id")
        groups = []
        if order_id is not None:
            groups = self._order_views.compute_order_view(order_id, deadline=deadline)

        payment_method = invoice.get("payment_method")
        if payment_method is None:
            payment_method = MISSING_PAYMENT_METHOD

        view = InvoiceView(
            invoice_id=invoice["invoice_id"],
            payment_method=payment_method,
            order_id=order_id,
            payment_status=invoice.get("payment_status"),
            payment_due_date=invoice.get("payment_due_date"),
        )

        if groups:
            first = groups[0]
            view.payment_due = first.payment_due
            view.table_number = first.table_number
            view.order_details = first.order_items

        return view
