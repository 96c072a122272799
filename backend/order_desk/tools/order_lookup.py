import re
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from loguru import logger
from pydantic import EmailStr, TypeAdapter, ValidationError

from order_desk.shopify.client import ShopifyClient
from order_desk.shopify.queries import (
    CUSTOMER_LATEST_ORDER_QUERY,
    ORDER_BY_ID_QUERY,
    ORDER_SEARCH_QUERY,
)
from order_desk.tools.fulfillment import connection_nodes


LookupKind = Literal["phone", "order_number", "email", "id"]

MIN_PHONE_DIGITS = 10
_EMAIL = TypeAdapter(EmailStr)
ORDER_GID_RE = re.compile(r"^gid://shopify/Order/(\d+)$")


class LookupInputError(ValueError):
    """Caller-supplied lookup key is missing or malformed; no upstream call was made."""


@dataclass(frozen=True)
class OrderMatch:
    order: Dict[str, Any]
    # Set when the lookup resolved a customer before the order (phone/email)
    customer: Optional[Dict[str, Any]] = None


def normalize_phone_number(phone: Any) -> Optional[str]:
    """
    "555-123-4567" -> "+5551234567". Returns None when fewer than 10 digits remain;
    no country code is ever guessed. Inputs already starting with "+" pass through.
    """
    if not phone or not isinstance(phone, str):
        return None
    digits = re.sub(r"\D", "", phone)
    if len(digits) < MIN_PHONE_DIGITS:
        return None
    return phone if phone.startswith("+") else f"+{digits}"


def normalize_order_number(order_number: Any) -> Optional[str]:
    if not order_number or not isinstance(order_number, str):
        return None
    return order_number.replace("#", "", 1).strip() or None


def normalize_email(email: Any) -> Optional[str]:
    if not email or not isinstance(email, str):
        return None
    try:
        return _EMAIL.validate_python(email.strip())
    except ValidationError:
        return None


def normalize_order_gid(order_id: Any) -> Optional[str]:
    """Accepts a numeric id or an Order GID and returns the GID form."""
    if order_id is None:
        return None
    raw = str(order_id).strip()
    if raw.isdigit():
        return f"gid://shopify/Order/{raw}"
    return raw if ORDER_GID_RE.match(raw) else None


def _customer_latest_order(client: ShopifyClient, customer_query: str) -> Optional[OrderMatch]:
    data = client.execute(CUSTOMER_LATEST_ORDER_QUERY, {"customerQuery": customer_query})
    customers = connection_nodes((data or {}).get("customers"))
    if not customers:
        return None
    customer = customers[0]
    orders = connection_nodes(customer.get("orders"))
    if not orders:
        return None
    return OrderMatch(order=orders[0], customer=customer)


def _latest_order(client: ShopifyClient, order_query: str) -> Optional[OrderMatch]:
    data = client.execute(ORDER_SEARCH_QUERY, {"orderQuery": order_query})
    orders = connection_nodes((data or {}).get("orders"))
    return OrderMatch(order=orders[0]) if orders else None


def _order_by_id(client: ShopifyClient, gid: str) -> Optional[OrderMatch]:
    data = client.execute(ORDER_BY_ID_QUERY, {"id": gid})
    order = (data or {}).get("order")
    return OrderMatch(order=order) if order else None


def resolve_order(client: ShopifyClient, kind: LookupKind, raw_value: Any) -> Optional[OrderMatch]:
    """
    Normalizes the lookup key, then issues exactly one upstream query.

    Raises LookupInputError before any network call when the key is unusable.
    Returns None when nothing matched; ShopifyError propagates to the caller.
    """
    if kind == "phone":
        phone = normalize_phone_number(raw_value)
        if not phone:
            raise LookupInputError(f"Invalid phone number format: {raw_value}")
        logger.info("Looking up latest order by phone {}", phone)
        return _customer_latest_order(client, f"phone:{phone}")

    if kind == "order_number":
        number = normalize_order_number(raw_value)
        if not number:
            raise LookupInputError(f"Invalid order number: {raw_value}")
        logger.info("Looking up order by number {}", number)
        return _latest_order(client, f"name:{number}")

    if kind == "email":
        email = normalize_email(raw_value)
        if not email:
            raise LookupInputError(f"Invalid email format: {raw_value}")
        logger.info("Looking up latest order by email {}", email)
        return _customer_latest_order(client, f"email:{email}")

    if kind == "id":
        gid = normalize_order_gid(raw_value)
        if not gid:
            raise LookupInputError(f"Invalid order ID: {raw_value}")
        logger.info("Looking up order by id {}", gid)
        return _order_by_id(client, gid)

    raise LookupInputError(f"Unsupported lookup kind: {kind}")
