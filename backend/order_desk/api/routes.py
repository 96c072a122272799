from typing import Any, Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from order_desk.api.deps import get_formatter_config, get_shopify_client
from order_desk.api.schemas import (
    EmailLookupRequest,
    OrderIdLookupRequest,
    OrderNumberLookupRequest,
    PhoneLookupRequest,
)
from order_desk.config import FormatterConfig
from order_desk.shopify.client import ShopifyClient, ShopifyError
from order_desk.tools.order_format import format_order_for_ai
from order_desk.tools.order_lookup import (
    LookupInputError,
    LookupKind,
    normalize_order_number,
    resolve_order,
)

router = APIRouter()

INTERNAL_LOOKUP_ERROR = "Internal error fetching order details."


@router.get("/health", response_class=PlainTextResponse)
def health():
    return "Server is running!"


def _lookup(
    endpoint: str,
    client: ShopifyClient,
    cfg: FormatterConfig,
    kind: LookupKind,
    value: Any,
    not_found: Callable[[], str],
):
    # LookupInputError is left to the app-level handler (400)
    try:
        match = resolve_order(client, kind, value)
    except ShopifyError as e:
        logger.error("Error in {}: {}", endpoint, e)
        return JSONResponse(status_code=500, content={"success": False, "error": INTERNAL_LOOKUP_ERROR})

    if match is None:
        logger.info("{}: no order found", endpoint)
        return {"success": False, "message": not_found()}

    order = format_order_for_ai(match.order, match.customer, cfg)
    return {"success": True, "order": order.model_dump(by_alias=True)}


@router.post("/getOrderByPhone")
def get_order_by_phone(
    req: PhoneLookupRequest,
    client: ShopifyClient = Depends(get_shopify_client),
    cfg: FormatterConfig = Depends(get_formatter_config),
):
    if not req.phone:
        raise LookupInputError("Phone number is required.")
    return _lookup(
        "/getOrderByPhone", client, cfg, "phone", req.phone,
        lambda: "I couldn't find any recent orders with that phone number.",
    )


@router.post("/getOrderById")
def get_order_by_number(
    req: OrderNumberLookupRequest,
    client: ShopifyClient = Depends(get_shopify_client),
    cfg: FormatterConfig = Depends(get_formatter_config),
):
    """Lookup by the customer-facing order number ("#1024"); the path name is kept for existing agent tools."""
    if not req.order_number:
        raise LookupInputError("Order number is required.")
    return _lookup(
        "/getOrderById", client, cfg, "order_number", req.order_number,
        lambda: f"I couldn't find an order with the number {normalize_order_number(req.order_number)}",
    )


@router.post("/getOrderByEmail")
def get_order_by_email(
    req: EmailLookupRequest,
    client: ShopifyClient = Depends(get_shopify_client),
    cfg: FormatterConfig = Depends(get_formatter_config),
):
    if not req.email:
        raise LookupInputError("Email is required.")
    return _lookup(
        "/getOrderByEmail", client, cfg, "email", req.email,
        lambda: "I couldn't find any recent orders with that email address.",
    )


@router.post("/getOrderByShopifyId")
def get_order_by_shopify_id(
    req: OrderIdLookupRequest,
    client: ShopifyClient = Depends(get_shopify_client),
    cfg: FormatterConfig = Depends(get_formatter_config),
):
    if not req.order_id:
        raise LookupInputError("Order ID is required.")
    return _lookup(
        "/getOrderByShopifyId", client, cfg, "id", req.order_id,
        lambda: f"I couldn't find an order with the ID {req.order_id.strip()}",
    )
