from __future__ import annotations

from typing import Any

from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.application.stores.transactions_store import TransactionsStore
from stockdesk.app.domain.policies.stock_policy import StockPolicy, StockStatus
from stockdesk.app.infrastructure.scheduler import Scheduler
from stockdesk.app.ui.components.permission_gate import PermissionGate
from stockdesk.app.ui.derived_view import DerivedView
from stockdesk.app.ui.filters import PRODUCT_SEARCH_FIELDS, Predicate, equals_filter, search_filter
from stockdesk.app.ui.forms import EditorText, FormEditor, ProductForm
from stockdesk.app.ui.views.base import Confirm, PageController
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.models import Product, StockDirection
from stockdesk.sdk.validation import ClientValidationError

PRODUCT_TEXT = EditorText(
    created="Product created successfully",
    updated="Product updated successfully",
    create_failed="Failed to create product",
    update_failed="Failed to update product",
)


def product_predicates(filters: dict[str, Any]) -> list[Predicate | None]:
    return [
        equals_filter("category", filters.get("category")),
        search_filter(filters.get("search"), PRODUCT_SEARCH_FIELDS),
    ]


class ProductsView(PageController):
    def __init__(
        self,
        session: SessionState,
        products: ProductsStore,
        transactions: TransactionsStore | None = None,
        *,
        confirm: Confirm,
        scheduler: Scheduler | None = None,
        page_size: int = 12,
        flash_seconds: float = 2.0,
    ) -> None:
        super().__init__(session, scheduler, flash_seconds)
        self.products = products
        self.transactions = transactions
        self.confirm = confirm
        self.view: DerivedView[Product] = DerivedView(products.items, product_predicates, page_size=page_size)
        self.track(self.view.dispose)
        self.editor: FormEditor[ProductForm, Product] = FormEditor(
            defaults=ProductForm,
            from_entity=ProductForm.from_product,
            create=lambda form: products.create(form.to_create()),
            update=lambda product, form: products.update(product.id, form.to_update()),
            messages=self.messages,
            text=PRODUCT_TEXT,
            gate=lambda verb: PermissionGate.require_admin(session, f"{verb} products"),
        )
        self.stock_target: Product | None = None
        self.stock_direction: StockDirection = StockDirection.IN

    def open(self) -> None:
        self.products.load()

    def set_search(self, term: str) -> None:
        self.view.set_filter("search", term)

    def set_category(self, category: str | None) -> None:
        self.view.set_filter("category", category)

    def save(self):
        if not self.admin_gate("create products" if self.editor.is_creating else "update products"):
            return None
        return self.editor.save()

    def delete(self, product_id: str) -> bool:
        if not self.admin_gate("delete products"):
            return False
        if not self.confirm(
            "Delete Product?",
            "Are you sure you want to delete this product? This action cannot be undone.",
        ):
            return False
        try:
            self.products.delete(product_id)
        except (ApiError, ClientValidationError) as error:
            self.report_failure(error, "Failed to delete product")
            return False
        self.messages.flash_success("Product has been deleted successfully.")
        return True

    def open_stock(self, product: Product, direction: StockDirection | str) -> bool:
        if not self.admin_gate("adjust stock"):
            return False
        self.stock_target = product
        self.stock_direction = StockDirection(direction)
        self.messages.error.set("")
        return True

    def close_stock(self) -> None:
        self.stock_target = None

    def submit_stock(self, quantity: int) -> bool:
        if not self.admin_gate("adjust stock"):
            return False
        if self.stock_target is None:
            return False
        try:
            self.products.adjust_stock(self.stock_target.id, quantity, self.stock_direction)
        except (ApiError, ClientValidationError) as error:
            self.report_failure(error, "Failed to update stock")
            return False
        verb = "added" if self.stock_direction is StockDirection.IN else "removed"
        if self.transactions is not None:
            self.transactions.refresh()
        self.close_stock()
        self.messages.flash_success(f"Stock {verb} successfully")
        return True

    @staticmethod
    def stock_status(product: Product) -> StockStatus:
        return StockPolicy.status(product)

    def render(self) -> dict[str, Any]:
        page = self.view.result.value
        return {
            **page.render(),
            "rows": [{"product": row, "status": self.stock_status(row).value} for row in page.rows],
            "categories": self.products.categories(),
            "loading": self.products.loading.value,
            "load_error": self.products.error.value,
            "error": self.messages.error.value,
            "success": self.messages.success.value,
            "editor": self.editor.mode.value.value,
            "can_edit": self.session.is_admin(),
        }
