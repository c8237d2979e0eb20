from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

from ..models import (
    MessageResponse,
    PurchaseStats,
    SalesStats,
    Transaction,
    TransactionCreate,
    TransactionQuery,
)
from .base import BaseClient, range_params


@dataclass
class TransactionsClient(BaseClient):
    def list_transactions(self, filters: TransactionQuery | None = None) -> list[Transaction]:
        params = build_transaction_params(filters or TransactionQuery())
        data = self._request("GET", "/transactions", params=params or None, module="transactions", operation="list")
        if not isinstance(data, list):
            raise ValueError("Expected transactions list response to be a JSON array")
        return [Transaction.model_validate(row) for row in data]

    def create_transaction(self, payload: TransactionCreate | Mapping[str, Any]) -> Transaction | None:
        request = payload if isinstance(payload, TransactionCreate) else TransactionCreate.model_validate(payload)
        data = self._request(
            "POST",
            "/transactions",
            json_body=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            module="transactions",
            operation="create",
        )
        return Transaction.model_validate(data) if isinstance(data, dict) and "id" in data else None

    def delete_transaction(self, transaction_id: str) -> MessageResponse:
        data = self._request(
            "DELETE", f"/transactions/{quote(transaction_id, safe='')}", module="transactions", operation="delete"
        )
        return MessageResponse.model_validate(data if isinstance(data, dict) else {})

    def sales_stats(self, start_date: str | None = None, end_date: str | None = None) -> SalesStats:
        data = self._request(
            "GET",
            "/transactions/stats/sales",
            params=range_params(start_date, end_date),
            module="transactions",
            operation="sales_stats",
        )
        return SalesStats.model_validate(data or {})

    def purchase_stats(self, start_date: str | None = None, end_date: str | None = None) -> PurchaseStats:
        data = self._request(
            "GET",
            "/transactions/stats/purchases",
            params=range_params(start_date, end_date),
            module="transactions",
            operation="purchase_stats",
        )
        return PurchaseStats.model_validate(data or {})


def build_transaction_params(filters: TransactionQuery) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for key, value in filters.model_dump(mode="json", by_alias=True, exclude_none=True).items():
        if isinstance(value, str) and not value.strip():
            continue
        params[key] = value.strip() if isinstance(value, str) else value
    return params

