from .alerts_client import AlertsClient
from .auth import AuthClient
from .dashboard_client import DashboardClient
from .products_client import ProductsClient
from .transactions_client import TransactionsClient
from .users_client import UsersClient

__all__ = [
    "AlertsClient",
    "AuthClient",
    "DashboardClient",
    "ProductsClient",
    "TransactionsClient",
    "UsersClient",
]
