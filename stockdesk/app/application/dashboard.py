from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable

from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.application.stores.transactions_store import TransactionsStore
from stockdesk.app.domain.policies.stock_policy import StockPolicy
from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.infrastructure.logging.logger import get_logger, log_action
from stockdesk.sdk.clients.dashboard_client import DashboardClient
from stockdesk.sdk.exceptions import ApiError

logger = get_logger("stockdesk.dashboard")


@dataclass(frozen=True)
class DashboardSummary:
    total_products: int
    low_stock_count: int
    out_of_stock_count: int
    total_sales: float
    total_purchases: float
    start_date: str
    end_date: str
    source: str = "remote"

    @property
    def net_profit(self) -> float:
        return self.total_sales - self.total_purchases


def window_dates(days: int, today: date) -> tuple[str, str]:
    return (today - timedelta(days=days)).isoformat(), today.isoformat()


class DashboardService:
    def __init__(
        self,
        client: DashboardClient,
        products: ProductsStore,
        transactions: TransactionsStore,
        window_days: int = 30,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.client = client
        self.products = products
        self.transactions = transactions
        self.window_days = window_days
        self.today = today

    def load_stats(self) -> DashboardSummary:
        start, end = window_dates(self.window_days, self.today())
        products = self.products.snapshot
        # The stats endpoint has no out-of-stock figure; always derived from the snapshot.
        out_of_stock = sum(1 for product in products if StockPolicy.is_out_of_stock(product))
        try:
            stats = self.client.stats(start, end)
        except (ApiError, ValueError) as error:
            payload = ErrorMapper.to_payload(error)
            log_action(logger, "dashboard", "stats", None, payload["trace_id"], "fallback", payload)
            return DashboardSummary(
                total_products=len(products),
                low_stock_count=len(self.products.low_stock_snapshot()),
                out_of_stock_count=out_of_stock,
                total_sales=self.transactions.total_sales(start, end),
                total_purchases=self.transactions.total_purchases(start, end),
                start_date=start,
                end_date=end,
                source="local",
            )
        return DashboardSummary(
            total_products=stats.total_products,
            low_stock_count=stats.low_stock_count,
            out_of_stock_count=out_of_stock,
            total_sales=stats.total_sales,
            total_purchases=stats.total_purchases,
            start_date=start,
            end_date=end,
        )
