from __future__ import annotations

from typing import Any, Mapping

from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.remote_store import RemoteStore, logger
from stockdesk.app.domain.policies.stock_policy import StockPolicy
from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.infrastructure.logging.logger import log_action
from stockdesk.sdk.clients.products_client import ProductsClient
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.models import (
    Product,
    ProductCreate,
    ProductQuery,
    ProductUpdate,
    StockAdjustment,
    StockDirection,
)
from stockdesk.sdk.validation import (
    raise_issue,
    validate_product_fields,
    validate_stock_movement,
    validate_threshold,
)

STOCK_NOTES = {
    StockDirection.IN: "Stock In - Manual adjustment",
    StockDirection.OUT: "Stock Out - Manual adjustment",
}


class ProductsStore(RemoteStore[Product]):
    resource = "products"
    load_fallback = "Failed to load products"

    def __init__(self, session: SessionState, client: ProductsClient) -> None:
        super().__init__(session)
        self.client = client

    def fetch(self, params: ProductQuery | None) -> list[Product]:
        return self.client.list_products(params)

    def get_by_id(self, product_id: str) -> Product | None:
        return next((product for product in self.items.value if product.id == product_id), None)

    def get_by_sku(self, sku: str) -> Product | None:
        return next((product for product in self.items.value if product.sku == sku), None)

    def categories(self) -> list[str]:
        return sorted({product.category for product in self.items.value if product.category})

    def low_stock_snapshot(self) -> list[Product]:
        return [product for product in self.items.value if StockPolicy.is_low_stock(product)]

    def create(self, payload: ProductCreate | Mapping[str, Any]) -> Product | None:
        self.session.require_admin("create products")
        request = payload if isinstance(payload, ProductCreate) else ProductCreate.model_validate(payload)
        validate_product_fields(
            sku=request.sku,
            name=request.name,
            category=request.category,
            unit_price=request.unit_price,
            min_stock_threshold=request.min_stock_threshold,
        )
        if self.get_by_sku(request.sku) is not None:
            raise_issue("sku", "SKU already exists")
        return self._mutate("create", lambda: self.client.create_product(request))

    def update(self, product_id: str, patch: ProductUpdate | Mapping[str, Any]) -> Product | None:
        self.session.require_admin("update products")
        request = patch if isinstance(patch, ProductUpdate) else ProductUpdate.model_validate(patch)
        current = self.get_by_id(product_id)
        merged = {**(current.model_dump() if current else {}), **request.model_dump(exclude_none=True)}
        validate_product_fields(
            sku=merged.get("sku"),
            name=merged.get("name"),
            category=merged.get("category"),
            unit_price=merged.get("unit_price"),
            min_stock_threshold=merged.get("min_stock_threshold"),
        )
        if request.sku is not None and any(
            product.sku == request.sku and product.id != product_id for product in self.items.value
        ):
            raise_issue("sku", "SKU already exists")
        return self._mutate("update", lambda: self.client.update_product(product_id, request))

    def delete(self, product_id: str) -> None:
        self.session.require_admin("delete products")
        self._mutate("delete", lambda: self.client.delete_product(product_id))

    def adjust_stock(self, product_id: str, quantity: int, direction: StockDirection | str) -> Product | None:
        self.session.require_admin("adjust stock")
        direction = StockDirection(direction)
        product = self.get_by_id(product_id)
        if product is None:
            raise_issue("productId", "Product not found")
        validate_stock_movement(
            quantity,
            removes_stock=direction is StockDirection.OUT,
            stock_level=product.stock_level,
        )
        adjustment = StockAdjustment(quantity=quantity, type=direction, notes=STOCK_NOTES[direction])
        return self._mutate("adjust_stock", lambda: self.client.adjust_stock(product_id, adjustment))

    def update_threshold(self, product_id: str, threshold: int) -> Product | None:
        self.session.require_admin("update thresholds")
        validate_threshold(threshold)
        patch = ProductUpdate(min_stock_threshold=threshold)
        return self._mutate("update_threshold", lambda: self.client.update_product(product_id, patch))

    def load_low_stock(self) -> list[Product]:
        """Server low-stock list, or the snapshot filtered locally when that call fails."""
        try:
            products = self.client.low_stock()
        except (ApiError, ValueError) as error:
            payload = ErrorMapper.to_payload(error)
            log_action(logger, self.resource, "low_stock", self.session.role, payload["trace_id"], "fallback", payload)
            return self.low_stock_snapshot()
        return products
