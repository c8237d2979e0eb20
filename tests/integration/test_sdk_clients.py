from __future__ import annotations

import pytest
import responses
from responses import matchers

from stockdesk.sdk.auth_store import AuthStore
from stockdesk.sdk.clients import (
    AlertsClient,
    AuthClient,
    DashboardClient,
    ProductsClient,
    TransactionsClient,
    UsersClient,
)
from stockdesk.sdk.exceptions import AuthError, ConflictError
from stockdesk.sdk.models import (
    AlertSettings,
    ProductCreate,
    ProductQuery,
    ProductUpdate,
    StockAdjustment,
    StockDirection,
    TransactionCreate,
    TransactionQuery,
    TransactionType,
    UpdateUserRequest,
)
from tests.fakes import BASE_URL

PRODUCT_ROW = {
    "id": 7,
    "sku": "SKU-7",
    "name": "Bolt",
    "category": "Hardware",
    "supplier": "Acme",
    "unitPrice": 2.5,
    "stockLevel": 40,
    "minStockThreshold": 10,
}


@pytest.fixture
def auth_store(cache) -> AuthStore:
    store = AuthStore(cache=cache)
    store.set_token("tok-1")
    return store


@responses.activate
def test_login_posts_credentials_without_token(http, cache) -> None:
    store = AuthStore(cache=cache)
    store.set_token("stale")
    responses.add(
        responses.POST,
        f"{BASE_URL}/login",
        json={"username": "admin", "role": "admin", "token": "tok-9", "message": "Login successful"},
        match=[matchers.json_params_matcher({"email": "admin@example.com", "password": "admin123"})],
    )
    result = AuthClient(http=http, auth_store=store).login("admin@example.com", "admin123")
    assert result.username == "admin"
    assert result.token == "tok-9"
    assert "Authorization" not in responses.calls[0].request.headers


@responses.activate
def test_login_failure_maps_to_auth_error(http) -> None:
    responses.add(responses.POST, f"{BASE_URL}/login", json={"message": "Invalid credentials"}, status=401)
    with pytest.raises(AuthError) as excinfo:
        AuthClient(http=http).login("a@b.c", "nope")
    assert excinfo.value.server_message == "Invalid credentials"


@responses.activate
def test_list_products_sends_filters_and_coerces_ids(http, auth_store) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/products",
        json=[PRODUCT_ROW],
        match=[matchers.query_param_matcher({"search": "bolt", "category": "Hardware", "lowStock": "true"})],
    )
    client = ProductsClient(http=http, auth_store=auth_store)
    products = client.list_products(ProductQuery(search=" bolt ", category="Hardware", low_stock=True))
    assert products[0].id == "7"
    assert products[0].unit_price == 2.5
    assert responses.calls[0].request.headers["Authorization"] == "Bearer tok-1"


@responses.activate
def test_list_products_rejects_non_array(http, auth_store) -> None:
    responses.add(responses.GET, f"{BASE_URL}/products", json={"items": []})
    with pytest.raises(ValueError):
        ProductsClient(http=http, auth_store=auth_store).list_products()


@responses.activate
def test_create_product_body_never_carries_stock_level(http, auth_store) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/products",
        json=PRODUCT_ROW,
        status=201,
        match=[
            matchers.json_params_matcher(
                {"sku": "SKU-7", "name": "Bolt", "category": "Hardware", "unitPrice": 2.5, "minStockThreshold": 10}
            )
        ],
    )
    client = ProductsClient(http=http, auth_store=auth_store)
    created = client.create_product(
        ProductCreate(sku="SKU-7", name="Bolt", category="Hardware", unit_price=2.5, min_stock_threshold=10)
    )
    assert created is not None
    assert created.sku == "SKU-7"


@responses.activate
def test_duplicate_sku_is_a_conflict(http, auth_store) -> None:
    responses.add(responses.PUT, f"{BASE_URL}/products/7", json={"message": "SKU already exists"}, status=409)
    client = ProductsClient(http=http, auth_store=auth_store)
    with pytest.raises(ConflictError) as excinfo:
        client.update_product("7", ProductUpdate(sku="SKU-1"))
    assert excinfo.value.server_message == "SKU already exists"


@responses.activate
def test_adjust_stock_and_low_stock_paths(http, auth_store) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/products/7/stock",
        json={"message": "ok"},
        match=[matchers.json_params_matcher({"quantity": 5, "type": "out", "notes": "Stock removal"})],
    )
    responses.add(responses.GET, f"{BASE_URL}/products/low-stock", json=[PRODUCT_ROW])
    client = ProductsClient(http=http, auth_store=auth_store)
    assert client.adjust_stock("7", StockAdjustment(quantity=5, type=StockDirection.OUT, notes="Stock removal")) is None
    assert [p.id for p in client.low_stock()] == ["7"]


@responses.activate
def test_transactions_query_and_create(http, auth_store) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/transactions",
        json=[
            {
                "id": 1,
                "productId": 7,
                "productName": "Bolt",
                "type": "sale",
                "quantity": 2,
                "unitPrice": 2.5,
                "totalAmount": 5.0,
                "date": "2024-01-15T12:00:00Z",
            }
        ],
        match=[
            matchers.query_param_matcher(
                {"type": "sale", "startDate": "2024-01-01T00:00:00.000Z", "endDate": "2024-01-31T23:59:59.999Z"}
            )
        ],
    )
    responses.add(
        responses.POST,
        f"{BASE_URL}/transactions",
        json={"message": "created"},
        status=201,
        match=[matchers.json_params_matcher({"productId": "7", "type": "purchase", "quantity": 3, "unitPrice": 2.5})],
    )
    client = TransactionsClient(http=http, auth_store=auth_store)
    rows = client.list_transactions(
        TransactionQuery(
            type=TransactionType.SALE,
            start_date="2024-01-01T00:00:00.000Z",
            end_date="2024-01-31T23:59:59.999Z",
            search="  ",
        )
    )
    assert rows[0].product_id == "7"
    assert rows[0].type is TransactionType.SALE
    created = client.create_transaction(
        TransactionCreate(product_id="7", type=TransactionType.PURCHASE, quantity=3, unit_price=2.5)
    )
    assert created is None


@responses.activate
def test_transaction_stats_send_date_range(http, auth_store) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/transactions/stats/sales",
        json={"totalSales": 320.5, "transactionCount": 4, "averageSaleAmount": 80.125},
        match=[matchers.query_param_matcher({"startDate": "2024-01-01", "endDate": "2024-01-31"})],
    )
    responses.add(
        responses.GET,
        f"{BASE_URL}/transactions/stats/purchases",
        json={"totalPurchases": 90},
        match=[matchers.query_param_matcher({})],
    )
    client = TransactionsClient(http=http, auth_store=auth_store)
    sales = client.sales_stats("2024-01-01", "2024-01-31")
    assert (sales.total_sales, sales.transaction_count) == (320.5, 4)
    assert client.purchase_stats().total_purchases == 90.0

@responses.activate
def test_users_are_addressed_by_username(http, auth_store) -> None:
    responses.add(
        responses.PUT,
        f"{BASE_URL}/users/jane%20doe",
        json={"message": "updated"},
        match=[matchers.json_params_matcher({"username": "jane", "email": "jane@example.com"})],
    )
    responses.add(responses.DELETE, f"{BASE_URL}/users/jane", json={"message": "deleted"})
    client = UsersClient(http=http, auth_store=auth_store)
    client.update_user("jane doe", UpdateUserRequest(username="jane", email="jane@example.com"))
    assert client.delete_user("jane").message == "deleted"


@responses.activate
def test_dashboard_stats_and_alert_settings(http, auth_store) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/dashboard/stats",
        json={"totalProducts": 4, "lowStockCount": 1, "totalSales": 100, "totalPurchases": 40, "netProfit": 60},
        match=[matchers.query_param_matcher({"startDate": "2024-01-01", "endDate": "2024-01-31"})],
    )
    responses.add(
        responses.PUT,
        f"{BASE_URL}/alerts/settings",
        body="",
        status=204,
        match=[matchers.json_params_matcher({"enabled": False, "emailAlerts": True, "smsAlerts": False})],
    )
    stats = DashboardClient(http=http, auth_store=auth_store).stats("2024-01-01", "2024-01-31")
    assert stats.net_profit == 60
    saved = AlertsClient(http=http, auth_store=auth_store).update_settings(
        AlertSettings(enabled=False, email_alerts=True, sms_alerts=False)
    )
    assert saved.enabled is False
