from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire format is camelCase (what the voice agent's tools expect); Python side stays snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests ---

class PhoneLookupRequest(CamelModel):
    phone: Optional[str] = Field(None, examples=["555-123-4567"])


class OrderNumberLookupRequest(CamelModel):
    order_number: Optional[str] = Field(None, examples=["#1024"])


class EmailLookupRequest(CamelModel):
    email: Optional[str] = Field(None, examples=["jane@example.com"])


class OrderIdLookupRequest(CamelModel):
    order_id: Optional[str] = Field(None, examples=["gid://shopify/Order/5512345678901", "5512345678901"])


class EscalationRequest(CamelModel):
    reason: Optional[str] = Field(None, examples=["Package marked delivered but not received"])
    order_number: Optional[str] = Field(None, examples=["#1024"])
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    summary: Optional[str] = Field(None, examples=["Caller asked for a supervisor after two failed deliveries."])


# --- FormattedOrder ---

ItemCategory = Literal["PHYSICAL", "DIGITAL"]
FulfillmentStatus = Literal["FULFILLED", "UNFULFILLED"]


class OrderStatus(CamelModel):
    financial: Optional[str] = None
    fulfillment: Optional[str] = None


class Pricing(CamelModel):
    subtotal: Optional[str] = None
    shipping: Optional[str] = None
    tax: Optional[str] = None
    total_discount: Optional[str] = None
    total: Optional[str] = None


class FormattedLineItem(CamelModel):
    name: Optional[str] = None
    variant: str = "Default"
    quantity: int = 0
    unit_price: Optional[str] = None
    total_price: Optional[str] = None
    discount: Optional[str] = None
    item_category: ItemCategory
    fulfillment_status: FulfillmentStatus


class ShippingInfo(CamelModel):
    is_shippable: bool
    address: Optional[str] = None
    status_message: str
    carrier: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None


class FormattedOrder(CamelModel):
    order_number: Optional[str] = None
    order_date: Optional[str] = None
    customer_name: str
    customer_email: Optional[str] = None
    status: OrderStatus
    pricing: Pricing
    items: List[FormattedLineItem] = []
    items_summary: str
    shipping_info: ShippingInfo
