# app/services/order_view.py
"""
Order line join.

Rebuilds the denormalized view of one order from the normalized
collections: every order item is left-joined to its food, its order and
the order's table, projected to an order line, and the lines are grouped
by (order_id, table_id, table_number) with the amounts summed into
`payment_due`.

The joins are hash joins over lookup maps. A missing food, order or table
never drops the item; its fields just come back as None.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from app.db.deadline import Deadline
from app.db.store import Document, EntityStore
from app.errors import AggregationFailedError, DecodeFailedError, StoreError
from app.models.order_items import OrderView

logger = logging.getLogger(__name__)

_MISSING: Document = {}

GroupKey = Tuple[Optional[str], Optional[str], Optional[int]]


def index_by(documents: Iterable[Document], field: str) -> Dict[Any, Document]:
    # first record wins when identifiers repeat
    index: Dict[Any, Document] = {}
    for doc in documents:
        index.setdefault(doc.get(field), doc)
    return index


def project_line(
    item: Document,
    food: Document,
    order: Document,
    table: Document,
) -> Document:
    # amount is the unit price stored with the item, so later food price
    # changes never move an existing order's total
    return {
        "amount": item.get("unit_price"),
        "food_name": food.get("name"),
        "food_image": food.get("food_image"),
        "table_number": table.get("table_number"),
        "table_id": table.get("table_id"),
        "order_id": order.get("order_id"),
        "price": food.get("price"),
        "quantity": item.get("quantity"),
    }


def group_lines(lines: Iterable[Document]) -> List[Document]:
    """Group projected lines by order/table, first-seen order preserved."""
    groups: Dict[GroupKey, Dict[str, Any]] = {}

    for line in lines:
        key = (line["order_id"], line["table_id"], line["table_number"])
        group = groups.get(key)
        if group is None:
            group = groups[key] = {"table_number": line["table_number"], "order_items": []}
        group["order_items"].append(line)

    results = []
    for group in groups.values():
        amounts = [
            line["amount"]
            for line in group["order_items"]
            if isinstance(line["amount"], (int, float))
        ]
        results.append(
            {
                "payment_due": math.fsum(amounts),
                "total_count": len(group["order_items"]),
                "table_number": group["table_number"],
                "order_items": group["order_items"],
            }
        )
    return results


class OrderViewService:
    def __init__(self, store: EntityStore, timeout_seconds: float) -> None:
        self._store = store
        self._timeout = timeout_seconds

    def _fetch(self, order_id: str, deadline: Deadline) -> List[Document]:
        items = self._store.find_many(
            "order_items", {"order_id": order_id}, deadline=deadline
        )
        if not items:
            return []

        foods = index_by(
            self._store.find_in(
                "foods", "food_id", (i.get("food_id") for i in items), deadline=deadline
            ),
            "food_id",
        )
        orders = index_by(
            self._store.find_in(
                "orders", "order_id", (i.get("order_id") for i in items), deadline=deadline
            ),
            "order_id",
        )
        tables = index_by(
            self._store.find_in(
                "dining_tables",
                "table_id",
                (o.get("table_id") for o in orders.values()),
                deadline=deadline,
            ),
            "table_id",
        )

        lines = []
        for item in items:
            order = orders.get(item.get("order_id"), _MISSING)
            lines.append(
                project_line(
                    item,
                    foods.get(item.get("food_id"), _MISSING),
                    order,
                    tables.get(order.get("table_id"), _MISSING),
                )
            )
        return lines

    def compute_order_view(
        self,
        order_id: str,
        deadline: Optional[Deadline] = None,
    ) -> List[OrderView]:
        """
        Grouped order lines for `order_id`.

        An order without items (or an unknown order) gives an empty list.
        """
        deadline = deadline or Deadline(self._timeout)

        try:
            lines = self._fetch(order_id, deadline)
        except StoreError as exc:
            logger.error("Order line join for %s failed: %s", order_id, exc)
            raise AggregationFailedError(f"aggregation failed: {exc}") from exc

        try:
            views = [OrderView.model_validate(group) for group in group_lines(lines)]
        except ValidationError as exc:
            logger.error("Order line join for %s returned bad records: %s", order_id, exc)
            raise DecodeFailedError(f"failed to decode results: {exc}") from exc

        logger.debug("Order %s: %s line(s) in %s group(s)", order_id, len(lines), len(views))
        return views
