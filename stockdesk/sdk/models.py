from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class TransactionType(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"


class StockDirection(str, Enum):
    IN = "in"
    OUT = "out"


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    username: str | None = None
    role: str | None = None
    message: str | None = None
    token: str | None = None


class User(BaseModel):
    """A user record as cached locally. Never carries a password."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    email: str
    name: str
    role: UserRole = UserRole.USER


class CreateUserRequest(BaseModel):
    username: str
    email: str
    password: str
    role: UserRole = UserRole.USER


class UpdateUserRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None
    role: UserRole | None = None


class UserMutationResponse(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str | None = None
    username: str | None = None
    email: str | None = None
    role: str | None = None
    message: str | None = None


class MessageResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: str | None = None


class Product(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    sku: str
    name: str
    category: str = ""
    supplier: str = ""
    unit_price: float = Field(default=0.0, alias="unitPrice")
    stock_level: int = Field(default=0, alias="stockLevel")
    min_stock_threshold: int = Field(default=0, alias="minStockThreshold")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class ProductCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sku: str
    name: str
    category: str
    supplier: str | None = None
    unit_price: float | None = Field(default=None, alias="unitPrice")
    min_stock_threshold: int | None = Field(default=None, alias="minStockThreshold")


class ProductUpdate(BaseModel):
    """Partial product patch. ``stockLevel`` is deliberately absent."""

    model_config = ConfigDict(populate_by_name=True)

    sku: str | None = None
    name: str | None = None
    category: str | None = None
    supplier: str | None = None
    unit_price: float | None = Field(default=None, alias="unitPrice")
    min_stock_threshold: int | None = Field(default=None, alias="minStockThreshold")


class ProductQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    search: str | None = None
    category: str | None = None
    low_stock: bool | None = Field(default=None, alias="lowStock")


class StockAdjustment(BaseModel):
    quantity: int
    type: StockDirection
    notes: str | None = None


class Transaction(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    product_id: str = Field(alias="productId")
    product_name: str = Field(default="", alias="productName")
    product_sku: str = Field(default="", alias="productSku")
    type: TransactionType
    quantity: int
    unit_price: float = Field(default=0.0, alias="unitPrice")
    total_amount: float = Field(default=0.0, alias="totalAmount")
    user_id: str = Field(default="", alias="userId")
    user_name: str = Field(default="", alias="userName")
    date: datetime
    notes: str | None = None


class TransactionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")
    type: TransactionType
    quantity: int
    unit_price: float | None = Field(default=None, alias="unitPrice")
    notes: str | None = None


class TransactionQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: TransactionType | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    product_id: str | None = Field(default=None, alias="productId")
    user_id: str | None = Field(default=None, alias="userId")
    search: str | None = None


class DashboardStats(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    total_products: int = Field(default=0, alias="totalProducts")
    low_stock_count: int = Field(default=0, alias="lowStockCount")
    total_sales: float = Field(default=0.0, alias="totalSales")
    total_purchases: float = Field(default=0.0, alias="totalPurchases")
    net_profit: float = Field(default=0.0, alias="netProfit")
    total_transactions: int = Field(default=0, alias="totalTransactions")


class SalesStats(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    total_sales: float = Field(default=0.0, alias="totalSales")
    transaction_count: int = Field(default=0, alias="transactionCount")
    average_sale_amount: float = Field(default=0.0, alias="averageSaleAmount")


class PurchaseStats(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    total_purchases: float = Field(default=0.0, alias="totalPurchases")
    transaction_count: int = Field(default=0, alias="transactionCount")
    average_purchase_amount: float = Field(default=0.0, alias="averagePurchaseAmount")


class AlertSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = True
    email_alerts: bool = Field(default=False, alias="emailAlerts")
    sms_alerts: bool = Field(default=False, alias="smsAlerts")
