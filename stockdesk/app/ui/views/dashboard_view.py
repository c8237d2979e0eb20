from __future__ import annotations

from typing import Any

from stockdesk.app.application.dashboard import DashboardService, DashboardSummary
from stockdesk.app.application.reactive import Signal
from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.application.stores.transactions_store import TransactionsStore
from stockdesk.app.ui.filters import ALERT_SEARCH_FIELDS, TRANSACTION_SEARCH_FIELDS, as_utc, search_filter
from stockdesk.app.ui.views.base import Navigate
from stockdesk.sdk.models import Product, Transaction

RECENT_ALERTS = 5
RECENT_TRANSACTIONS = 6


class DashboardView:
    """Welcome page: headline stats plus the newest alerts and transactions."""

    def __init__(
        self,
        session: SessionState,
        service: DashboardService,
        products: ProductsStore,
        transactions: TransactionsStore,
        navigate: Navigate | None = None,
    ) -> None:
        self.session = session
        self.service = service
        self.products = products
        self.transactions = transactions
        self.navigate = navigate
        self.summary: Signal[DashboardSummary | None] = Signal(None)
        self.search: Signal[str] = Signal("")
        self.loading: Signal[bool] = Signal(False)

    def open(self) -> None:
        self.products.load()
        self.transactions.load()
        self.load_stats()

    def load_stats(self) -> DashboardSummary:
        self.loading.set(True)
        summary = self.service.load_stats()
        self.summary.set(summary)
        self.loading.set(False)
        return summary

    def set_search(self, term: str) -> None:
        self.search.set(term)

    def recent_alerts(self) -> list[Product]:
        return self.products.low_stock_snapshot()[:RECENT_ALERTS]

    def recent_transactions(self) -> list[Transaction]:
        rows = sorted(self.transactions.snapshot, key=lambda row: as_utc(row.date), reverse=True)
        return rows[:RECENT_TRANSACTIONS]

    def filtered_alerts(self) -> list[Product]:
        predicate = search_filter(self.search.value, ALERT_SEARCH_FIELDS)
        rows = self.recent_alerts()
        return [row for row in rows if predicate(row)] if predicate else rows

    def filtered_transactions(self) -> list[Transaction]:
        predicate = search_filter(self.search.value, TRANSACTION_SEARCH_FIELDS)
        rows = self.recent_transactions()
        return [row for row in rows if predicate(row)] if predicate else rows

    def logout(self) -> None:
        self.session.logout()
        if self.navigate is not None:
            self.navigate("login")

    def render(self) -> dict[str, Any]:
        return {
            "summary": self.summary.value,
            "alerts": self.filtered_alerts(),
            "transactions": self.filtered_transactions(),
            "loading": self.loading.value,
            "user": self.session.current_user.value,
        }
