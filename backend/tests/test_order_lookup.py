import pytest

from conftest import FakeShopifyClient, make_order
from order_desk.shopify.client import ShopifyError
from order_desk.shopify.queries import (
    CUSTOMER_LATEST_ORDER_QUERY,
    ORDER_BY_ID_QUERY,
    ORDER_SEARCH_QUERY,
)
from order_desk.tools.order_lookup import (
    LookupInputError,
    normalize_email,
    normalize_order_gid,
    normalize_order_number,
    normalize_phone_number,
    resolve_order,
)


@pytest.mark.parametrize("raw", ["", None, "555-1234", "(555) 123-456", "+1 234", "abc", 5551234567])
def test_short_or_non_string_phone_is_invalid(raw):
    assert normalize_phone_number(raw) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("555-123-4567", "+5551234567"),
        ("(555) 123-4567", "+5551234567"),
        ("1 555 123 4567", "+15551234567"),
        ("+1 (555) 123-4567", "+1 (555) 123-4567"),
        ("+15551234567", "+15551234567"),
        ("44 20 7946 0958 12", "+44207946095812"),
    ],
)
def test_phone_normalization(raw, expected):
    assert normalize_phone_number(raw) == expected


@pytest.mark.parametrize("raw", ["+15551234567", "+1 (555) 123-4567", "555.123.4567", "1-800-555-0199"])
def test_phone_normalization_is_idempotent(raw):
    once = normalize_phone_number(raw)
    assert normalize_phone_number(once) == once


def test_order_number_normalization():
    assert normalize_order_number("#1024") == "1024"
    assert normalize_order_number("  #1024 ") == "1024"
    assert normalize_order_number("1024") == "1024"
    assert normalize_order_number("#") is None
    assert normalize_order_number(None) is None


def test_email_normalization():
    assert normalize_email(" jane@example.com ") == "jane@example.com"
    assert normalize_email("jane@example") is None
    assert normalize_email("jane example.com") is None
    assert normalize_email("") is None
    assert normalize_email("jane..doe@example.com") is None
    assert normalize_email("jane@example..com") is None
    assert normalize_email("jane@Example.COM") == "jane@example.com"


def test_order_gid_normalization():
    assert normalize_order_gid("5512345") == "gid://shopify/Order/5512345"
    assert normalize_order_gid("gid://shopify/Order/5512345") == "gid://shopify/Order/5512345"
    assert normalize_order_gid("gid://shopify/Customer/1") is None
    assert normalize_order_gid("abc") is None


def test_resolve_by_phone_uses_customer_query():
    customer = {"id": "gid://shopify/Customer/1", "firstName": "Jane", "lastName": "Doe", "orders": {"edges": [{"node": make_order()}]}}
    client = FakeShopifyClient({"customers": {"edges": [{"node": customer}]}})

    match = resolve_order(client, "phone", "555-123-4567")

    assert match is not None
    assert match.order["name"] == "#1024"
    assert match.customer["firstName"] == "Jane"
    assert client.calls[0]["query"] == CUSTOMER_LATEST_ORDER_QUERY
    assert client.calls[0]["variables"] == {"customerQuery": "phone:+5551234567"}


def test_resolve_by_phone_rejects_short_input_without_calling_upstream():
    client = FakeShopifyClient()
    with pytest.raises(LookupInputError, match="Invalid phone number format: 555-1234"):
        resolve_order(client, "phone", "555-1234")
    assert client.calls == []


def test_resolve_by_phone_customer_without_orders_is_not_found():
    customer = {"firstName": "Jane", "orders": {"edges": []}}
    client = FakeShopifyClient({"customers": {"edges": [{"node": customer}]}})
    assert resolve_order(client, "phone", "5551234567") is None


def test_resolve_by_phone_no_customer_is_not_found():
    client = FakeShopifyClient({"customers": {"edges": []}})
    assert resolve_order(client, "phone", "5551234567") is None


def test_resolve_by_order_number_strips_hash():
    client = FakeShopifyClient({"orders": {"edges": [{"node": make_order()}]}})

    match = resolve_order(client, "order_number", " #1024 ")

    assert match.customer is None
    assert client.calls[0]["query"] == ORDER_SEARCH_QUERY
    assert client.calls[0]["variables"] == {"orderQuery": "name:1024"}


def test_resolve_by_email():
    customer = {"email": "jane@example.com", "orders": {"edges": [{"node": make_order()}]}}
    client = FakeShopifyClient({"customers": {"edges": [{"node": customer}]}})

    match = resolve_order(client, "email", "jane@example.com")

    assert match.customer["email"] == "jane@example.com"
    assert client.calls[0]["variables"] == {"customerQuery": "email:jane@example.com"}


def test_resolve_by_email_rejects_malformed_address():
    client = FakeShopifyClient()
    with pytest.raises(LookupInputError):
        resolve_order(client, "email", "not-an-email")
    assert client.calls == []


def test_resolve_by_id():
    client = FakeShopifyClient({"order": make_order()})

    match = resolve_order(client, "id", "5001")

    assert match.order["id"] == "gid://shopify/Order/5001"
    assert client.calls[0]["query"] == ORDER_BY_ID_QUERY
    assert client.calls[0]["variables"] == {"id": "gid://shopify/Order/5001"}


def test_resolve_by_id_missing_order():
    client = FakeShopifyClient({"order": None})
    assert resolve_order(client, "id", "5001") is None


def test_upstream_errors_propagate():
    client = FakeShopifyClient(ShopifyError("boom"))
    with pytest.raises(ShopifyError):
        resolve_order(client, "order_number", "1024")


def test_unknown_kind_is_an_input_error():
    with pytest.raises(LookupInputError):
        resolve_order(FakeShopifyClient(), "sku", "ABC")
