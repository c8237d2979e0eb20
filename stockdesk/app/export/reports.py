from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.application.stores.transactions_store import TransactionsStore
from stockdesk.sdk.models import Product, Transaction

DEFAULT_RANGE_DAYS = 30


class ReportType(str, Enum):
    SUMMARY = "summary"
    TRANSACTIONS = "transactions"
    PRODUCTS = "products"


@dataclass(frozen=True)
class ReportContext:
    start_date: str
    end_date: str
    products: list[Product]
    low_stock: list[Product]
    transactions: list[Transaction]
    total_sales: float
    total_purchases: float
    generated_at: datetime = field(default_factory=lambda: datetime.now().astimezone())

    @property
    def net_profit(self) -> float:
        return self.total_sales - self.total_purchases


def default_range(today: date, days: int = DEFAULT_RANGE_DAYS) -> tuple[str, str]:
    return (today - timedelta(days=days)).isoformat(), today.isoformat()


def build_context(products: ProductsStore, transactions: TransactionsStore, start_date: str, end_date: str) -> ReportContext:
    return ReportContext(
        start_date=start_date,
        end_date=end_date,
        products=products.snapshot,
        low_stock=products.low_stock_snapshot(),
        transactions=transactions.in_range(start_date, end_date),
        total_sales=transactions.total_sales(start_date, end_date),
        total_purchases=transactions.total_purchases(start_date, end_date),
    )


def money(value: float) -> str:
    return f"${value:.2f}"


def display_moment(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%S")
