from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .local_cache import LocalCache
from .models import (
    AlertSettings,
    DashboardStats,
    LoginResponse,
    Product,
    ProductCreate,
    ProductQuery,
    ProductUpdate,
    StockAdjustment,
    StockDirection,
    Transaction,
    TransactionCreate,
    TransactionQuery,
    TransactionType,
    User,
    UserRole,
)
from .session import ApiSession
from .tracing import TraceContext
from .validation import AdminRequiredError, ClientValidationError, RoleMismatchError, ValidationIssue

__all__ = [
    "AdminRequiredError",
    "AlertSettings",
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "ClientConfig",
    "ClientValidationError",
    "ConfigError",
    "ConflictError",
    "DashboardStats",
    "HttpClient",
    "LocalCache",
    "LoginResponse",
    "NotFoundError",
    "PermissionDeniedError",
    "Product",
    "ProductCreate",
    "ProductQuery",
    "ProductUpdate",
    "RateLimitError",
    "RoleMismatchError",
    "ServerError",
    "StockAdjustment",
    "StockDirection",
    "TraceContext",
    "Transaction",
    "TransactionCreate",
    "TransactionQuery",
    "TransactionType",
    "TransportError",
    "User",
    "UserRole",
    "ValidationError",
    "ValidationIssue",
    "load_config",
]
