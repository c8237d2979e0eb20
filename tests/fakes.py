from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from stockdesk.sdk.exceptions import ApiError, ServerError
from stockdesk.sdk.models import (
    AlertSettings,
    DashboardStats,
    LoginResponse,
    MessageResponse,
    Product,
    PurchaseStats,
    SalesStats,
    Transaction,
    TransactionType,
    UserMutationResponse,
)

BASE_URL = "https://api.example.com"


def server_error(message: str | None = "boom", status_code: int = 500) -> ApiError:
    payload = {"message": message} if message is not None else {}
    return ServerError(
        code="SERVER_ERROR",
        message=message or f"Request failed with status {status_code}",
        details=None,
        trace_id="trace-test",
        status_code=status_code,
        raw_payload=payload,
    )


def always_confirm(_title: str, _text: str) -> bool:
    return True


class ManualScheduler:
    """Collects delayed callbacks so tests decide when time passes."""

    def __init__(self) -> None:
        self.pending: list[ManualHandle] = []

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> "ManualHandle":
        handle = ManualHandle(delay_seconds, callback)
        self.pending.append(handle)
        return handle

    def run_all(self) -> int:
        handles, self.pending = self.pending, []
        ran = 0
        for handle in handles:
            if not handle.cancelled:
                handle.callback()
                ran += 1
        return ran

    def run_due(self, now: float | None = None) -> int:
        return self.run_all()


class ManualHandle:
    def __init__(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self.delay_seconds = delay_seconds
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeAuthClient:
    def __init__(self, response: LoginResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or LoginResponse(username="admin", role="admin", token="tok-1", message="ok")
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def login(self, email: str, password: str) -> LoginResponse:
        self.calls.append((email, password))
        if self.error is not None:
            raise self.error
        return self.response


class FakeProductsClient:
    def __init__(self, products: list[Product] | None = None) -> None:
        self.products = list(products or [])
        self.low_stock_products: list[Product] | None = None
        self.fail_next: Exception | None = None
        self.fail_low_stock: Exception | None = None
        self.calls: list[tuple] = []

    def _maybe_fail(self) -> None:
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error

    def list_products(self, filters=None) -> list[Product]:
        self.calls.append(("list", filters))
        self._maybe_fail()
        return list(self.products)

    def create_product(self, payload) -> Product:
        self.calls.append(("create", payload))
        self._maybe_fail()
        product = Product(id=f"p{len(self.products) + 1}", sku=payload.sku, name=payload.name, category=payload.category)
        self.products.append(product)
        return product

    def update_product(self, product_id, patch) -> Product:
        self.calls.append(("update", product_id, patch))
        self._maybe_fail()
        return next(p for p in self.products if p.id == product_id)

    def delete_product(self, product_id) -> MessageResponse:
        self.calls.append(("delete", product_id))
        self._maybe_fail()
        self.products = [p for p in self.products if p.id != product_id]
        return MessageResponse(message="deleted")

    def adjust_stock(self, product_id, adjustment) -> Product:
        self.calls.append(("adjust_stock", product_id, adjustment))
        self._maybe_fail()
        return next(p for p in self.products if p.id == product_id)

    def low_stock(self) -> list[Product]:
        self.calls.append(("low_stock",))
        if self.fail_low_stock is not None:
            raise self.fail_low_stock
        return list(self.low_stock_products or [])


class FakeTransactionsClient:
    def __init__(self, transactions: list[Transaction] | None = None) -> None:
        self.transactions = list(transactions or [])
        self.fail_next: Exception | None = None
        self.stats_totals = (0.0, 0.0)
        self.fail_stats: Exception | None = None
        self.calls: list[tuple] = []

    def list_transactions(self, filters=None) -> list[Transaction]:
        self.calls.append(("list", filters))
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error
        return list(self.transactions)

    def create_transaction(self, payload) -> None:
        self.calls.append(("create", payload))
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error
        return None

    def delete_transaction(self, transaction_id) -> MessageResponse:
        self.calls.append(("delete", transaction_id))
        return MessageResponse(message="deleted")

    def sales_stats(self, start_date=None, end_date=None) -> SalesStats:
        self.calls.append(("sales_stats", start_date, end_date))
        if self.fail_stats is not None:
            raise self.fail_stats
        return SalesStats(totalSales=self.stats_totals[0])

    def purchase_stats(self, start_date=None, end_date=None) -> PurchaseStats:
        self.calls.append(("purchase_stats", start_date, end_date))
        if self.fail_stats is not None:
            raise self.fail_stats
        return PurchaseStats(totalPurchases=self.stats_totals[1])


class FakeUsersClient:
    def __init__(self) -> None:
        self.fail_next: Exception | None = None
        self.calls: list[tuple] = []

    def _maybe_fail(self) -> None:
        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error

    def create_user(self, payload) -> UserMutationResponse:
        self.calls.append(("create", payload))
        self._maybe_fail()
        return UserMutationResponse(username=payload.username, email=payload.email)

    def update_user(self, username, payload) -> UserMutationResponse:
        self.calls.append(("update", username, payload))
        self._maybe_fail()
        return UserMutationResponse(message="updated")

    def delete_user(self, username) -> MessageResponse:
        self.calls.append(("delete", username))
        self._maybe_fail()
        return MessageResponse(message="deleted")


class FakeAlertsClient:
    def __init__(self, settings: AlertSettings | None = None) -> None:
        self.settings = settings or AlertSettings(enabled=True, emailAlerts=True, smsAlerts=False)
        self.fail_get: Exception | None = None
        self.fail_update: Exception | None = None

    def get_settings(self) -> AlertSettings:
        if self.fail_get is not None:
            raise self.fail_get
        return self.settings

    def update_settings(self, settings: AlertSettings) -> AlertSettings:
        if self.fail_update is not None:
            raise self.fail_update
        self.settings = settings
        return settings


class FakeDashboardClient:
    def __init__(self, stats: DashboardStats | None = None, error: Exception | None = None) -> None:
        self.stats_value = stats
        self.error = error
        self.calls: list[tuple[str | None, str | None]] = []

    def stats(self, start_date=None, end_date=None) -> DashboardStats:
        self.calls.append((start_date, end_date))
        if self.error is not None:
            raise self.error
        return self.stats_value or DashboardStats()


def make_product(
    product_id: str = "p1",
    sku: str = "SKU-1",
    name: str = "Widget",
    category: str = "Tools",
    supplier: str = "Acme",
    unit_price: float = 10.0,
    stock_level: int = 10,
    min_stock_threshold: int = 5,
) -> Product:
    return Product(
        id=product_id,
        sku=sku,
        name=name,
        category=category,
        supplier=supplier,
        unitPrice=unit_price,
        stockLevel=stock_level,
        minStockThreshold=min_stock_threshold,
    )


def make_transaction(
    transaction_id: str = "t1",
    product_id: str = "p1",
    transaction_type: TransactionType = TransactionType.SALE,
    quantity: int = 1,
    total_amount: float = 10.0,
    date: datetime | None = None,
    product_name: str = "Widget",
    user_name: str = "admin",
) -> Transaction:
    return Transaction(
        id=transaction_id,
        productId=product_id,
        productName=product_name,
        productSku="SKU-1",
        type=transaction_type,
        quantity=quantity,
        unitPrice=total_amount / quantity if quantity else 0.0,
        totalAmount=total_amount,
        userId="u1",
        userName=user_name,
        date=date or datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
    )
