from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from order_desk.api.schemas import (
    FormattedLineItem,
    FormattedOrder,
    OrderStatus,
    Pricing,
    ShippingInfo,
)
from order_desk.config import FormatterConfig
from order_desk.tools.formatting import (
    format_amount,
    format_date,
    format_money,
    money_amount,
    money_currency,
    parse_shipping_date_from_tags,
)
from order_desk.tools.fulfillment import (
    connection_nodes,
    fulfilled_line_item_ids,
    latest_fulfillment,
    line_item_status,
    tracking_entry,
)

PLACEHOLDER_CUSTOMER_NAME = "Valued Customer"
NO_ITEMS_SUMMARY = "No items found in this order."
AWAITING_SHIPMENT = "Awaiting shipment"
NOT_SHIPPABLE_MESSAGE = "This order does not require shipping."


def _full_name(customer: Optional[Dict[str, Any]]) -> Optional[str]:
    if not customer:
        return None
    parts = [customer.get("firstName"), customer.get("lastName")]
    name = " ".join(str(p).strip() for p in parts if p is not None and str(p).strip())
    return name or None


def customer_display_name(
    customer: Optional[Dict[str, Any]],
    order: Dict[str, Any],
) -> str:
    """
    Precedence, one source at a time:
      1. separately fetched customer (phone/email lookups)
      2. customer embedded on the order
      3. placeholder
    """
    return (
        _full_name(customer)
        or _full_name(order.get("customer"))
        or PLACEHOLDER_CUSTOMER_NAME
    )


def customer_email(customer: Optional[Dict[str, Any]], order: Dict[str, Any]) -> Optional[str]:
    return (
        (customer or {}).get("email")
        or (order.get("customer") or {}).get("email")
        or order.get("email")
        or None
    )


def format_address(address: Optional[Dict[str, Any]]) -> Optional[str]:
    if not address:
        return None
    parts = [
        address.get("address1"),
        address.get("address2"),
        address.get("city"),
        address.get("provinceCode"),
        address.get("zip"),
    ]
    joined = ", ".join(str(p).strip() for p in parts if p is not None and str(p).strip())
    return joined or None


def _discount_total(line_item: Dict[str, Any]) -> Decimal:
    total = Decimal("0")
    for allocation in line_item.get("discountAllocations") or []:
        amount = money_amount((allocation or {}).get("allocatedAmountSet"))
        if amount is not None:
            total += amount
    return total


def _item_currency(line_item: Dict[str, Any]) -> Optional[str]:
    currency = money_currency(line_item.get("originalUnitPriceSet"))
    if currency:
        return currency
    for allocation in line_item.get("discountAllocations") or []:
        currency = money_currency((allocation or {}).get("allocatedAmountSet"))
        if currency:
            return currency
    return None


def is_physical(line_item: Dict[str, Any], physical_product_types: tuple[str, ...]) -> bool:
    product = ((line_item.get("variant") or {}).get("product") or {})
    product_type = product.get("productType") or ""
    return bool(line_item.get("requiresShipping")) or product_type in physical_product_types


def format_line_item(
    line_item: Dict[str, Any],
    fulfilled_ids: set[str],
    cfg: FormatterConfig,
) -> FormattedLineItem:
    variant = line_item.get("variant") or {}
    return FormattedLineItem(
        name=line_item.get("title"),
        variant=variant.get("title") or "Default",
        quantity=int(line_item.get("quantity") or 0),
        unit_price=format_money(line_item.get("originalUnitPriceSet")),
        total_price=format_money(line_item.get("discountedTotalSet")),
        discount=format_amount(_discount_total(line_item), _item_currency(line_item)),
        item_category="PHYSICAL" if is_physical(line_item, cfg.physical_product_types) else "DIGITAL",
        fulfillment_status=line_item_status(line_item, fulfilled_ids),
    )


def items_summary(items: List[FormattedLineItem]) -> str:
    if not items:
        return NO_ITEMS_SUMMARY
    first = items[0]
    summary = f"{first.quantity}x {first.name or 'item'}"
    if len(items) > 1:
        summary += f" and {len(items) - 1} other item(s)"
    return summary


def _shipping_info(
    order: Dict[str, Any],
    requires_shipping: bool,
    cfg: FormatterConfig,
) -> ShippingInfo:
    if not requires_shipping:
        return ShippingInfo(is_shippable=False, status_message=NOT_SHIPPABLE_MESSAGE)

    latest = latest_fulfillment(order.get("fulfillments"))
    expected = parse_shipping_date_from_tags(order.get("tags"), cfg.ship_date_tag_prefix)
    shipped_on = format_date(latest.get("createdAt")) if latest else None
    tracking = tracking_entry(latest)

    return ShippingInfo(
        is_shippable=True,
        address=format_address(order.get("shippingAddress")),
        status_message=format_date(expected) if expected else (shipped_on or AWAITING_SHIPMENT),
        carrier=tracking.get("company") or None,
        tracking_number=tracking.get("number") or None,
        tracking_url=tracking.get("url") or None,
    )


def format_order_for_ai(
    order: Dict[str, Any],
    customer: Optional[Dict[str, Any]] = None,
    cfg: Optional[FormatterConfig] = None,
) -> FormattedOrder:
    """
    Flattens a Shopify order node into the speakable summary handed to the voice agent.

    `customer` is the separately fetched customer node when the lookup went through
    the customer first (phone/email). Every nested field is optional upstream, so
    absent structures degrade to defaults instead of raising.
    """
    cfg = cfg or FormatterConfig()
    order = order or {}

    fulfilled_ids = fulfilled_line_item_ids(order.get("fulfillments"))
    line_items = connection_nodes(order.get("lineItems"))
    items = [format_line_item(li, fulfilled_ids, cfg) for li in line_items]
    requires_shipping = any(i.item_category == "PHYSICAL" for i in items)

    return FormattedOrder(
        order_number=order.get("name"),
        order_date=format_date(order.get("processedAt")),
        customer_name=customer_display_name(customer, order),
        customer_email=customer_email(customer, order),
        status=OrderStatus(
            financial=order.get("displayFinancialStatus"),
            fulfillment=order.get("displayFulfillmentStatus"),
        ),
        pricing=Pricing(
            subtotal=format_money(order.get("subtotalPriceSet")),
            shipping=format_money(order.get("totalShippingPriceSet")),
            tax=format_money(order.get("totalTaxSet")),
            total_discount=format_money(order.get("totalDiscountsSet")),
            total=format_money(order.get("totalPriceSet")),
        ),
        items=items,
        items_summary=items_summary(items),
        shipping_info=_shipping_info(order, requires_shipping, cfg),
    )
