from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.application.stores.remote_store import RemoteStore
from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.infrastructure.logging.logger import get_logger, log_action
from stockdesk.app.ui.filters import date_range_filter
from stockdesk.sdk.clients.transactions_client import TransactionsClient
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.models import Transaction, TransactionCreate, TransactionQuery, TransactionType
from stockdesk.sdk.validation import raise_issue, validate_stock_movement

DateLike = date | datetime | str | None

logger = get_logger("stockdesk.transactions")


@dataclass(frozen=True)
class RangeTotals:
    total_sales: float
    total_purchases: float
    source: str = "remote"


class TransactionsStore(RemoteStore[Transaction]):
    """Transactions snapshot. Every mutation also refreshes the products store,
    since the server recomputes stock levels."""

    resource = "transactions"
    load_fallback = "Failed to load transactions"

    def __init__(self, session: SessionState, client: TransactionsClient, products: ProductsStore) -> None:
        super().__init__(session)
        self.client = client
        self.products = products

    def fetch(self, params: TransactionQuery | None) -> list[Transaction]:
        return self.client.list_transactions(params)

    def get_by_id(self, transaction_id: str) -> Transaction | None:
        return next((row for row in self.items.value if row.id == transaction_id), None)

    def by_product(self, product_id: str) -> list[Transaction]:
        return [row for row in self.items.value if row.product_id == product_id]

    def in_range(self, start: DateLike, end: DateLike) -> list[Transaction]:
        predicate = date_range_filter(start, end, lambda row: row.date)
        rows = self.items.value
        return [row for row in rows if predicate(row)] if predicate else list(rows)

    def total_sales(self, start: DateLike = None, end: DateLike = None) -> float:
        return _total(self.in_range(start, end), TransactionType.SALE)

    def total_purchases(self, start: DateLike = None, end: DateLike = None) -> float:
        return _total(self.in_range(start, end), TransactionType.PURCHASE)

    def range_totals(self, start: str | None = None, end: str | None = None) -> RangeTotals:
        """Sales and purchase totals from the stats endpoints, summed from the
        snapshot when either call fails."""
        try:
            sales = self.client.sales_stats(start, end)
            purchases = self.client.purchase_stats(start, end)
        except (ApiError, ValueError) as error:
            payload = ErrorMapper.to_payload(error)
            log_action(logger, "transactions", "stats", None, payload["trace_id"], "fallback", payload)
            return RangeTotals(self.total_sales(start, end), self.total_purchases(start, end), source="local")
        return RangeTotals(sales.total_sales, purchases.total_purchases)

    def create(
        self,
        product_id: str,
        transaction_type: TransactionType | str,
        quantity: int,
        notes: str | None = None,
    ) -> Transaction | None:
        self.session.require_admin("create transactions")
        if not product_id or quantity is None or quantity <= 0:
            raise_issue("productId", "Please select a product and enter a valid quantity")
        product = self.products.get_by_id(product_id)
        if product is None:
            raise_issue("productId", "Product not found")
        transaction_type = TransactionType(transaction_type)
        validate_stock_movement(
            quantity,
            removes_stock=transaction_type is TransactionType.SALE,
            stock_level=product.stock_level,
        )
        payload = TransactionCreate(
            product_id=product_id,
            type=transaction_type,
            quantity=quantity,
            unit_price=product.unit_price,
            notes=(notes or "").strip() or None,
        )
        result = self._mutate("create", lambda: self.client.create_transaction(payload))
        self.products.refresh()
        return result

    def delete(self, transaction_id: str) -> None:
        self.session.require_admin("delete transactions")
        self._mutate("delete", lambda: self.client.delete_transaction(transaction_id))
        self.products.refresh()


def _total(rows: list[Transaction], transaction_type: TransactionType) -> float:
    return sum(row.total_amount for row in rows if row.type is transaction_type)
