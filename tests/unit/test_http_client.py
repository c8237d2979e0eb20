from __future__ import annotations

import pytest
import requests
import responses

from stockdesk.sdk.auth_store import AuthStore
from stockdesk.sdk.clients.products_client import ProductsClient
from stockdesk.sdk.exceptions import NotFoundError, ServerError, TransportError, ValidationError
from stockdesk.sdk.tracing import TRACE_HEADER
from tests.fakes import BASE_URL


@responses.activate
def test_request_sends_trace_header_and_parses_json(http) -> None:
    responses.add(responses.GET, f"{BASE_URL}/products", json=[], status=200)
    assert http.request("GET", "/products") == []
    sent = responses.calls[0].request
    assert sent.headers[TRACE_HEADER]
    assert sent.headers["Accept"] == "application/json"
    assert sent.req_kwargs["timeout"] == (5.0, 10.0)


@responses.activate
def test_bearer_token_is_read_from_cache_on_every_call(http, cache) -> None:
    responses.add(responses.GET, f"{BASE_URL}/products", json=[], status=200)
    store = AuthStore(cache=cache)
    client = ProductsClient(http=http, auth_store=store)

    client.list_products()
    assert "Authorization" not in responses.calls[0].request.headers

    store.set_token("tok-a")
    client.list_products()
    assert responses.calls[1].request.headers["Authorization"] == "Bearer tok-a"

    cache.set("authToken", "tok-b")
    client.list_products()
    assert responses.calls[2].request.headers["Authorization"] == "Bearer tok-b"


@responses.activate
def test_error_is_not_retried(http) -> None:
    responses.add(responses.POST, f"{BASE_URL}/products", json={"message": "boom"}, status=500)
    with pytest.raises(ServerError) as excinfo:
        http.request("POST", "/products", json_body={"sku": "A"})
    assert len(responses.calls) == 1
    assert excinfo.value.server_message == "boom"


@responses.activate
def test_non_json_error_body_has_no_server_message(http) -> None:
    responses.add(responses.PUT, f"{BASE_URL}/products/1", body="<html>bad</html>", status=400)
    with pytest.raises(ValidationError) as excinfo:
        http.request("PUT", "/products/1", json_body={})
    assert excinfo.value.server_message is None
    assert excinfo.value.details == "<html>bad</html>"


@responses.activate
def test_transport_failure_maps_to_transport_error(http) -> None:
    responses.add(responses.GET, f"{BASE_URL}/products", body=requests.ConnectionError("refused"))
    with pytest.raises(TransportError) as excinfo:
        http.request("GET", "/products")
    assert excinfo.value.status_code == 0
    assert excinfo.value.details == {"type": "ConnectionError", "operation": "unknown.unknown"}
    assert excinfo.value.trace_id == http.trace.trace_id


@responses.activate
def test_empty_success_body_returns_none(http) -> None:
    responses.add(responses.DELETE, f"{BASE_URL}/products/1", body="", status=204)
    assert http.request("DELETE", "/products/1") is None


@responses.activate
def test_each_request_gets_a_fresh_trace_id(http) -> None:
    responses.add(responses.GET, f"{BASE_URL}/products", json=[], status=200)
    http.request("GET", "/products")
    http.request("GET", "/products")
    first, second = (call.request.headers[TRACE_HEADER] for call in responses.calls)
    assert first != second


@responses.activate
def test_server_trace_id_is_kept_on_errors(http) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/products/9",
        json={"message": "Product not found"},
        status=404,
        headers={"x-trace-id": "from-header"},
    )
    responses.add(
        responses.DELETE,
        f"{BASE_URL}/products/9",
        json={"message": "Product not found", "trace_id": "from-body"},
        status=404,
        headers={"X-Trace-ID": "from-header"},
    )
    with pytest.raises(NotFoundError) as by_header:
        http.request("GET", "/products/9")
    assert by_header.value.trace_id == "from-header"
    with pytest.raises(NotFoundError) as by_body:
        http.request("DELETE", "/products/9")
    assert by_body.value.trace_id == "from-body"
    assert by_body.value.code == "NOT_FOUND"
