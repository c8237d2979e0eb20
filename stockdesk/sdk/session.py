from __future__ import annotations

from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.alerts_client import AlertsClient
from .clients.auth import AuthClient
from .clients.dashboard_client import DashboardClient
from .clients.products_client import ProductsClient
from .clients.transactions_client import TransactionsClient
from .clients.users_client import UsersClient
from .config import ClientConfig
from .http_client import HttpClient
from .local_cache import LocalCache
from .tracing import TraceContext


@dataclass
class ApiSession:
    """Client factory sharing one transport, trace context and token source."""

    config: ClientConfig
    cache: LocalCache | None = None
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        self.cache = self.cache or LocalCache()
        self.auth_store = self.auth_store or AuthStore(cache=self.cache)
        self.trace = self.trace or TraceContext()
        self.http = self.http or HttpClient(config=self.config, trace=self.trace)

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, auth_store=self.auth_store)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self.http, auth_store=self.auth_store)

    def products_client(self) -> ProductsClient:
        return ProductsClient(http=self.http, auth_store=self.auth_store)

    def transactions_client(self) -> TransactionsClient:
        return TransactionsClient(http=self.http, auth_store=self.auth_store)

    def dashboard_client(self) -> DashboardClient:
        return DashboardClient(http=self.http, auth_store=self.auth_store)

    def alerts_client(self) -> AlertsClient:
        return AlertsClient(http=self.http, auth_store=self.auth_store)
