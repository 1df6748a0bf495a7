from __future__ import annotations

import json
from decimal import Decimal
from urllib.parse import parse_qs, urlparse

import pytest
import responses

from bizops_client_sdk.clients.business_client import BusinessProfileClient
from bizops_client_sdk.clients.invoices_client import InvoicesClient
from bizops_client_sdk.clients.returns_client import ReturnsClient, build_return_request, returnable_quantities
from bizops_client_sdk.clients.sales_client import SalesClient, build_sales_params
from bizops_client_sdk.http_client import HttpClient
from bizops_client_sdk.models_sales import Sale, SaleQuery
from bizops_client_sdk.validation import ClientValidationError

BASE_URL = "https://api.example.com"

SALE = {
    "id": "sale-1",
    "storeId": "store-1",
    "paymentMethod": "CASH",
    "totalAmount": 30,
    "status": "COMPLETED",
    "saleItems": [
        {"productId": "p1", "productName": "Shirt", "pluUpc": "111", "quantity": 2, "sellingPrice": 10},
        {"productId": "p2", "productName": "Cap", "pluUpc": "222", "quantity": 1, "sellingPrice": 10},
    ],
}


def test_sales_params_omit_all_and_uppercase() -> None:
    params = build_sales_params(
        SaleQuery(store_id="s1", status="completed", payment_method="All", date_from="2024-01-01")
    )
    assert params == {"storeId": "s1", "page": 1, "limit": 20, "status": "COMPLETED", "dateFrom": "2024-01-01"}


@responses.activate
def test_list_sales_unwraps_nested_envelope(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/sales/list",
        json={"data": {"sales": [SALE], "pagination": {"total": 1, "totalPages": 1}}},
    )

    result = SalesClient(http=http, access_token="token").list_sales(SaleQuery(store_id="store-1"))

    assert result.sales[0].sale_items[1].product_name == "Cap"
    assert result.pagination.total == 1
    assert parse_qs(urlparse(responses.calls[0].request.url).query)["storeId"] == ["store-1"]


@responses.activate
def test_create_sale_posts_payload(http: HttpClient) -> None:
    responses.add(responses.POST, f"{BASE_URL}/sales/create", status=201, json={"data": SALE})

    sale = SalesClient(http=http, access_token="token").create_sale(
        {
            "customer_phone": "5550100",
            "customer_data": {"customer_name": "Dana"},
            "store_id": "store-1",
            "payment_method": "CASH",
            "total_amount": 30,
            "sale_items": [{"product_id": "p1", "quantity": 3, "selling_price": 10, "total_price": 30}],
        }
    )

    body = json.loads(responses.calls[0].request.body)
    assert body["customerData"] == {"customerName": "Dana"}
    assert body["saleItems"][0]["sellingPrice"] == 10.0
    assert sale.id == "sale-1"


def test_build_return_request_computes_refunds() -> None:
    sale = Sale.model_validate(SALE)
    request = build_return_request(
        sale,
        [{"product_id": "p1", "quantity": 1, "reason": "damaged"}, {"product_id": "unknown", "quantity": 1}],
        mode="percentage",
        value=50,
    )
    assert len(request.return_items) == 1
    assert request.return_items[0].refund_amount == Decimal("5.00")
    assert request.return_items[0].plu_upc == "111"
    assert returnable_quantities(sale) == {"p1": 2, "p2": 1}


@responses.activate
def test_create_return_refuses_excess_quantity(http: HttpClient) -> None:
    sale = Sale.model_validate(SALE)
    request = build_return_request(sale, [{"product_id": "p2", "quantity": 2, "reason": "wrong size"}])

    with pytest.raises(ClientValidationError):
        ReturnsClient(http=http).create_return(request, available_quantities=returnable_quantities(sale))
    assert len(responses.calls) == 0


@responses.activate
def test_list_returns_and_invoices_by_store(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/sales/returns",
        json={"data": [{"id": "r1", "saleId": "sale-1", "productId": "p1", "quantity": 1}]},
    )
    responses.add(
        responses.GET,
        f"{BASE_URL}/invoice/store/store-1",
        json={"data": [{"id": "inv-1", "invoiceNumber": "INV-001", "totalAmount": 30}]},
    )

    returns = ReturnsClient(http=http, store_id="store-1").list_returns()
    invoices = InvoicesClient(http=http, store_id="store-1").list_invoices()

    assert returns[0].product_id == "p1"
    assert invoices[0].invoice_number == "INV-001"
    assert parse_qs(urlparse(responses.calls[0].request.url).query) == {"storeId": ["store-1"]}


def test_list_invoices_needs_a_store(http: HttpClient) -> None:
    with pytest.raises(ValueError):
        InvoicesClient(http=http).list_invoices()


@responses.activate
def test_business_profile_absent_when_setup_needed(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/invoice/get-business/details",
        json={"success": True, "showBusinessForm": True},
    )
    assert BusinessProfileClient(http=http).get_profile() is None


@responses.activate
def test_business_profile_round_trip(http: HttpClient) -> None:
    profile = {"businessName": "Dana Retail", "contactNo": "5550100", "website": "https://dana.example.com"}
    responses.add(responses.GET, f"{BASE_URL}/invoice/get-business/details", json={"data": profile})
    responses.add(responses.POST, f"{BASE_URL}/invoice/set-business/details", json={"data": profile})
    client = BusinessProfileClient(http=http, access_token="token")

    assert client.get_profile().business_name == "Dana Retail"
    saved = client.save_profile({"business_name": "Dana Retail", "website": "https://dana.example.com"})
    assert saved.website == "https://dana.example.com"
    assert json.loads(responses.calls[1].request.body)["businessName"] == "Dana Retail"
