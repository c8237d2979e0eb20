from __future__ import annotations

from typing import Any

from stockdesk.app.application.alert_settings import AlertSettingsStore
from stockdesk.app.application.reactive import Signal
from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.domain.policies.stock_policy import StockPolicy
from stockdesk.app.infrastructure.scheduler import Scheduler
from stockdesk.app.ui.views.base import PageController
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.models import AlertSettings, Product
from stockdesk.sdk.validation import ClientValidationError

SAVE_LOCAL_ONLY = "Failed to save settings to server. Saved locally."


class AlertsView(PageController):
    def __init__(
        self,
        session: SessionState,
        products: ProductsStore,
        settings: AlertSettingsStore,
        scheduler: Scheduler | None = None,
        flash_seconds: float = 2.0,
        error_flash_seconds: float = 3.0,
    ) -> None:
        super().__init__(session, scheduler, flash_seconds)
        self.products = products
        self.settings = settings
        self.error_flash_seconds = error_flash_seconds
        self.low_stock: Signal[list[Product]] = Signal([])
        self.loading: Signal[bool] = Signal(False)

    @property
    def low_stock_count(self) -> int:
        return len(self.low_stock.value)

    @property
    def out_of_stock_count(self) -> int:
        return sum(1 for product in self.low_stock.value if StockPolicy.is_out_of_stock(product))

    def open(self) -> None:
        self.load_alerts()
        self.settings.load()

    def load_alerts(self) -> list[Product]:
        self.loading.set(True)
        products = self.products.load_low_stock()
        self.low_stock.set(products)
        self.loading.set(False)
        return products

    def save_settings(self, settings: AlertSettings) -> bool:
        self.messages.error.set("")
        try:
            self.settings.save(settings)
        except ApiError as error:
            message = error.server_message or SAVE_LOCAL_ONLY
            self.messages.flash_error(message, self.error_flash_seconds)
            return False
        self.messages.flash_success("Alert settings saved successfully")
        return True

    def update_threshold(self, product: Product, threshold: int) -> bool:
        if not self.admin_gate("update thresholds"):
            return False
        try:
            self.products.update_threshold(product.id, threshold)
        except (ApiError, ClientValidationError) as error:
            self.report_failure(error, "Failed to update threshold")
            return False
        self.load_alerts()
        self.messages.flash_success("Threshold updated successfully")
        return True

    def render(self) -> dict[str, Any]:
        return {
            "low_stock": list(self.low_stock.value),
            "low_stock_count": self.low_stock_count,
            "out_of_stock_count": self.out_of_stock_count,
            "settings": self.settings.settings.value,
            "loading": self.loading.value,
            "error": self.messages.error.value,
            "success": self.messages.success.value,
        }
