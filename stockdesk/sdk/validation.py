from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


class ClientValidationError(ValueError):
    """Local pre-flight failure. Raised before any request is sent."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        return self.issues[0].reason

    @property
    def message(self) -> str:
        return self._format_message()


class AdminRequiredError(ClientValidationError):
    """A mutation was attempted by a session without the admin role."""


class RoleMismatchError(ClientValidationError):
    """Credentials were valid but belong to a different role tab."""


def raise_issue(field: str, reason: str, error_type: type[ClientValidationError] = ClientValidationError) -> NoReturn:
    raise error_type([ValidationIssue(field=field, reason=reason)])


MIN_PASSWORD_LENGTH = 6
GENERATED_PASSWORD_SUFFIX = "123"


def validate_product_fields(
    *,
    sku: str | None,
    name: str | None,
    category: str | None,
    unit_price: float | None,
    min_stock_threshold: int | None,
) -> None:
    if not (sku or "").strip() or not (name or "").strip() or not (category or "").strip():
        raise_issue("sku", "SKU, name, and category are required")
    if unit_price is not None and unit_price < 0:
        raise_issue("unitPrice", "Unit price must be non-negative")
    if min_stock_threshold is not None and min_stock_threshold < 0:
        raise_issue("minStockThreshold", "Minimum stock threshold must be non-negative")


def validate_threshold(threshold: int) -> None:
    if threshold < 0:
        raise_issue("minStockThreshold", "Threshold must be non-negative")


def validate_stock_movement(quantity: int, *, removes_stock: bool, stock_level: int) -> None:
    """Shared check for stock-out adjustments and sale transactions."""
    if quantity <= 0:
        raise_issue("quantity", "Quantity must be greater than 0")
    if removes_stock and quantity > stock_level:
        raise_issue("quantity", "Insufficient stock")


def generate_password(username: str) -> str:
    base = "".join(username.split())
    return f"{base[:4].lower()}{GENERATED_PASSWORD_SUFFIX}"


def resolve_new_user_password(username: str, password: str | None) -> str:
    resolved = (password or "").strip() or generate_password(username)
    if len(resolved) < MIN_PASSWORD_LENGTH:
        raise_issue("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return resolved


def validate_user_fields(name: str | None, email: str | None, *, label: str = "Username") -> None:
    if not (name or "").strip() or not (email or "").strip():
        raise_issue("name", f"{label} and email are required")
