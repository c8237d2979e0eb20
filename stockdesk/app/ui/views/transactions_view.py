from __future__ import annotations

from typing import Any

from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.application.stores.transactions_store import RangeTotals, TransactionsStore
from stockdesk.app.infrastructure.scheduler import Scheduler
from stockdesk.app.ui.derived_view import DerivedView
from stockdesk.app.ui.filters import (
    ALL,
    TRANSACTION_SEARCH_FIELDS,
    Predicate,
    date_range_filter,
    equals_filter,
    search_filter,
)
from stockdesk.app.ui.forms import TransactionForm
from stockdesk.app.ui.views.base import Confirm, PageController
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.models import Transaction, TransactionQuery
from stockdesk.sdk.validation import ClientValidationError


def transaction_predicates(filters: dict[str, Any]) -> list[Predicate | None]:
    return [
        equals_filter("type", filters.get("type")),
        date_range_filter(filters.get("start_date"), filters.get("end_date"), lambda row: row.date),
        search_filter(filters.get("search"), TRANSACTION_SEARCH_FIELDS),
    ]


def build_query(filters: dict[str, Any]) -> TransactionQuery | None:
    values = {
        "type": filters.get("type") if filters.get("type") not in (None, "", ALL) else None,
        "start_date": filters.get("start_date") or None,
        "end_date": filters.get("end_date") or None,
        "search": (filters.get("search") or "").strip() or None,
    }
    if not any(values.values()):
        return None
    return TransactionQuery(**values)


class TransactionsView(PageController):
    def __init__(
        self,
        session: SessionState,
        transactions: TransactionsStore,
        products: ProductsStore,
        *,
        confirm: Confirm,
        scheduler: Scheduler | None = None,
        page_size: int = 10,
        flash_seconds: float = 2.0,
    ) -> None:
        super().__init__(session, scheduler, flash_seconds)
        self.transactions = transactions
        self.products = products
        self.confirm = confirm
        self.view: DerivedView[Transaction] = DerivedView(
            transactions.items,
            transaction_predicates,
            page_size=page_size,
            filters={"type": ALL, "start_date": "", "end_date": "", "search": ""},
        )
        self.track(self.view.dispose)
        self.create_form: TransactionForm | None = None
        self.range_totals: RangeTotals | None = None

    def open(self) -> None:
        self.transactions.load(build_query(self.view.filters))
        self.products.load()
        self.refresh_totals()

    def set_filters(self, **values: Any) -> None:
        """Apply locally right away, then re-query the server with the same filters."""
        self.view.set_filters(**values)
        self.transactions.load(build_query(self.view.filters))
        self.refresh_totals()

    def open_create(self) -> bool:
        if not self.admin_gate("create transactions"):
            return False
        self.create_form = TransactionForm()
        self.messages.error.set("")
        return True

    def close_create(self) -> None:
        self.create_form = None
        self.messages.error.set("")

    def submit_create(self) -> bool:
        if not self.admin_gate("create transactions"):
            return False
        form = self.create_form
        if form is None:
            return False
        try:
            self.transactions.create(form.product_id, form.type, form.quantity, form.notes)
        except (ApiError, ClientValidationError) as error:
            self.report_failure(error, "Failed to create transaction")
            return False
        self.refresh_totals()
        self.close_create()
        self.messages.flash_success("Transaction created successfully")
        return True

    def delete(self, transaction_id: str) -> bool:
        if not self.admin_gate("delete transactions"):
            return False
        if not self.confirm(
            "Delete Transaction?",
            "Are you sure you want to delete this transaction? This action cannot be undone.",
        ):
            return False
        try:
            self.transactions.delete(transaction_id)
        except (ApiError, ClientValidationError) as error:
            self.report_failure(error, "Failed to delete transaction")
            return False
        self.refresh_totals()
        self.messages.flash_success("Transaction has been deleted successfully.")
        return True

    def refresh_totals(self) -> RangeTotals:
        start = self.view.filters.get("start_date") or None
        end = self.view.filters.get("end_date") or None
        self.range_totals = self.transactions.range_totals(start, end)
        return self.range_totals

    def totals(self) -> dict[str, Any]:
        totals = self.range_totals or self.refresh_totals()
        return {
            "total_sales": totals.total_sales,
            "total_purchases": totals.total_purchases,
            "totals_source": totals.source,
        }

    def render(self) -> dict[str, Any]:
        return {
            **self.view.result.value.render(),
            **self.totals(),
            "filters": dict(self.view.filters),
            "loading": self.transactions.loading.value,
            "load_error": self.transactions.error.value,
            "error": self.messages.error.value,
            "success": self.messages.success.value,
            "can_edit": self.session.is_admin(),
        }
