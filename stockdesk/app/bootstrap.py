from __future__ import annotations

from pathlib import Path

from stockdesk.app.application.alert_settings import AlertSettingsStore
from stockdesk.app.application.dashboard import DashboardService
from stockdesk.app.application.guards import admin_guard
from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.products_store import ProductsStore
from stockdesk.app.application.stores.transactions_store import TransactionsStore
from stockdesk.app.application.stores.users_store import UsersStore
from stockdesk.app.config import AppConfig
from stockdesk.app.infrastructure.scheduler import LoopScheduler, Scheduler
from stockdesk.app.ui.views.alerts_view import AlertsView
from stockdesk.app.ui.views.base import Confirm, Navigate
from stockdesk.app.ui.views.dashboard_view import DashboardView
from stockdesk.app.ui.views.login_view import LoginView
from stockdesk.app.ui.views.products_view import ProductsView
from stockdesk.app.ui.views.reports_view import ReportsView
from stockdesk.app.ui.views.signup_view import SignupView
from stockdesk.app.ui.views.transactions_view import TransactionsView
from stockdesk.app.ui.views.users_view import UsersView
from stockdesk.sdk import ApiSession, ClientConfig, LocalCache, load_config


class StockdeskBootstrap:
    """Wires one API session, one cache and the shared stores into page controllers."""

    def __init__(
        self,
        confirm: Confirm,
        config: ClientConfig | None = None,
        app_config: AppConfig | None = None,
        api: ApiSession | None = None,
        navigate: Navigate | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.app_config = app_config or AppConfig.from_env()
        self.api = api or ApiSession(config or load_config(), cache=LocalCache(base_dir=self.app_config.data_dir))
        self.cache = self.api.cache
        self.navigate = navigate or (lambda _route: None)
        self.confirm = confirm
        self.scheduler = scheduler or LoopScheduler()
        self.session = SessionState(self.api.auth_client(), self.cache, self.api.auth_store)
        self.products = ProductsStore(self.session, self.api.products_client())
        self.transactions = TransactionsStore(self.session, self.api.transactions_client(), self.products)
        self.users = UsersStore(self.session, self.api.users_client(), self.cache)
        self.alert_settings = AlertSettingsStore(self.api.alerts_client(), self.cache)
        self.session.restore()

    def tick(self, now: float | None = None) -> int:
        """Runs the delayed callbacks that are due; call it from the UI loop."""
        return self.scheduler.run_due(now)

    def guard_admin(self) -> bool:
        redirect = admin_guard(self.session)
        if redirect is not None:
            self.navigate(redirect)
        return redirect is None

    def login_view(self) -> LoginView:
        return LoginView(self.session, self.navigate)

    def signup_view(self) -> SignupView:
        return SignupView(self.users, self.navigate, self.scheduler, self.app_config.flash_seconds)

    def dashboard_view(self) -> DashboardView:
        service = DashboardService(
            self.api.dashboard_client(),
            self.products,
            self.transactions,
            window_days=self.app_config.dashboard_window_days,
        )
        return DashboardView(self.session, service, self.products, self.transactions, self.navigate)

    def products_view(self) -> ProductsView:
        return ProductsView(
            self.session,
            self.products,
            self.transactions,
            confirm=self.confirm,
            scheduler=self.scheduler,
            page_size=self.app_config.products_page_size,
            flash_seconds=self.app_config.flash_seconds,
        )

    def transactions_view(self) -> TransactionsView:
        return TransactionsView(
            self.session,
            self.transactions,
            self.products,
            confirm=self.confirm,
            scheduler=self.scheduler,
            page_size=self.app_config.transactions_page_size,
            flash_seconds=self.app_config.flash_seconds,
        )

    def users_view(self) -> UsersView | None:
        if not self.guard_admin():
            return None
        return UsersView(
            self.session,
            self.users,
            confirm=self.confirm,
            navigate=self.navigate,
            scheduler=self.scheduler,
            flash_seconds=self.app_config.flash_seconds,
        )

    def alerts_view(self) -> AlertsView:
        return AlertsView(
            self.session,
            self.products,
            self.alert_settings,
            scheduler=self.scheduler,
            flash_seconds=self.app_config.flash_seconds,
            error_flash_seconds=self.app_config.error_flash_seconds,
        )

    def reports_view(self, output_dir: str | Path = "exports") -> ReportsView:
        return ReportsView(
            self.session,
            self.products,
            self.transactions,
            output_dir,
            scheduler=self.scheduler,
            flash_seconds=self.app_config.flash_seconds,
        )
