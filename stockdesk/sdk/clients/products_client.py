from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

from ..models import (
    MessageResponse,
    Product,
    ProductCreate,
    ProductQuery,
    ProductUpdate,
    StockAdjustment,
)
from .base import BaseClient


@dataclass
class ProductsClient(BaseClient):
    def list_products(self, filters: ProductQuery | None = None) -> list[Product]:
        params = build_product_params(filters or ProductQuery())
        data = self._request("GET", "/products", params=params or None, module="products", operation="list")
        return _product_list(data, "products list")

    def create_product(self, payload: ProductCreate | Mapping[str, Any]) -> Product | None:
        request = payload if isinstance(payload, ProductCreate) else ProductCreate.model_validate(payload)
        data = self._request(
            "POST",
            "/products",
            json_body=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            module="products",
            operation="create",
        )
        return Product.model_validate(data) if isinstance(data, dict) and "id" in data else None

    def update_product(self, product_id: str, patch: ProductUpdate | Mapping[str, Any]) -> Product | None:
        request = patch if isinstance(patch, ProductUpdate) else ProductUpdate.model_validate(patch)
        data = self._request(
            "PUT",
            f"/products/{quote(product_id, safe='')}",
            json_body=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            module="products",
            operation="update",
        )
        return Product.model_validate(data) if isinstance(data, dict) and "id" in data else None

    def delete_product(self, product_id: str) -> MessageResponse:
        data = self._request("DELETE", f"/products/{quote(product_id, safe='')}", module="products", operation="delete")
        return MessageResponse.model_validate(data if isinstance(data, dict) else {})

    def adjust_stock(self, product_id: str, adjustment: StockAdjustment | Mapping[str, Any]) -> Product | None:
        request = adjustment if isinstance(adjustment, StockAdjustment) else StockAdjustment.model_validate(adjustment)
        data = self._request(
            "POST",
            f"/products/{quote(product_id, safe='')}/stock",
            json_body=request.model_dump(mode="json", exclude_none=True),
            module="products",
            operation="adjust_stock",
        )
        return Product.model_validate(data) if isinstance(data, dict) and "id" in data else None

    def low_stock(self) -> list[Product]:
        data = self._request("GET", "/products/low-stock", module="products", operation="low_stock")
        return _product_list(data, "low-stock list")


def build_product_params(filters: ProductQuery) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for key, value in filters.model_dump(by_alias=True, exclude_none=True).items():
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, str):
            if value.strip():
                params[key] = value.strip()
        else:
            params[key] = value
    return params


def _product_list(data: Any, label: str) -> list[Product]:
    if not isinstance(data, list):
        raise ValueError(f"Expected {label} response to be a JSON array")
    return [Product.model_validate(row) for row in data]
