from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from order_desk.api.deps import get_escalation_mailer, get_formatter_config, get_shopify_client
from order_desk.config import FormatterConfig
from order_desk.main import app
from order_desk.shopify.client import ShopifyError


def money(amount: str, currency: str = "USD") -> Dict[str, Any]:
    return {"shopMoney": {"amount": amount, "currencyCode": currency}}


def make_line_item(
    item_id: str,
    title: str,
    quantity: int = 1,
    unit_price: str = "10.00",
    total: Optional[str] = None,
    requires_shipping: bool = True,
    product_type: str = "Apparel",
    variant_title: Optional[str] = "Large",
    discounts: Optional[List[str]] = None,
) -> Dict[str, Any]:
    return {
        "id": item_id,
        "title": title,
        "quantity": quantity,
        "requiresShipping": requires_shipping,
        "originalUnitPriceSet": money(unit_price),
        "discountedTotalSet": money(total if total is not None else unit_price),
        "discountAllocations": [{"allocatedAmountSet": money(d)} for d in (discounts or [])],
        "variant": {"title": variant_title, "product": {"productType": product_type}},
    }


def make_fulfillment(created_at: str, line_item_ids: List[str], tracking: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    return {
        "createdAt": created_at,
        "displayStatus": "FULFILLED",
        "trackingInfo": [tracking] if tracking else [],
        "fulfillmentLineItems": {"edges": [{"node": {"lineItem": {"id": i}}} for i in line_item_ids]},
    }


def make_order(
    line_items: Optional[List[Dict[str, Any]]] = None,
    fulfillments: Optional[List[Dict[str, Any]]] = None,
    tags: Optional[List[str]] = None,
    customer: Optional[Dict[str, Any]] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    order = {
        "id": "gid://shopify/Order/5001",
        "name": "#1024",
        "processedAt": "2024-05-02T15:30:00Z",
        "email": "order-contact@example.com",
        "displayFinancialStatus": "PAID",
        "displayFulfillmentStatus": "UNFULFILLED",
        "tags": tags or [],
        "subtotalPriceSet": money("45.00"),
        "totalShippingPriceSet": money("0.00"),
        "totalTaxSet": money("3.60"),
        "totalDiscountsSet": money("5.00"),
        "totalPriceSet": money("43.60"),
        "customer": customer,
        "shippingAddress": {
            "address1": "12 Main St",
            "address2": None,
            "city": "Springfield",
            "provinceCode": "IL",
            "zip": "62701",
            "country": "United States",
        },
        "lineItems": {"edges": [{"node": li} for li in (line_items or [])]},
        "fulfillments": fulfillments or [],
    }
    order.update(overrides)
    return order


class FakeShopifyClient:
    """Stands in for ShopifyClient; replays canned `data` payloads and records calls."""

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.calls.append({"query": query, "variables": variables})
        if not self.responses:
            return {}
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FakeMailer:
    def __init__(self, error: Optional[Exception] = None):
        self.sent = []
        self.error = error

    def send(self, escalation) -> None:
        if self.error:
            raise self.error
        self.sent.append(escalation)


@pytest.fixture
def fake_client():
    return FakeShopifyClient()


@pytest.fixture
def api(fake_client):
    app.dependency_overrides[get_shopify_client] = lambda: fake_client
    app.dependency_overrides[get_formatter_config] = lambda: FormatterConfig()
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_mailer():
    return FakeMailer()


@pytest.fixture
def escalation_api(fake_mailer):
    app.dependency_overrides[get_escalation_mailer] = lambda: fake_mailer
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def upstream_failure():
    return ShopifyError("Shopify API responded with status 502")
