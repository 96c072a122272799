from functools import lru_cache

from order_desk.config import (
    FormatterConfig,
    load_formatter_config_from_env,
    load_shopify_config_from_env,
    load_smtp_config_from_env,
)
from order_desk.escalation.mailer import EscalationMailer
from order_desk.shopify.client import ShopifyClient


@lru_cache
def get_shopify_client() -> ShopifyClient:
    return ShopifyClient(load_shopify_config_from_env())


@lru_cache
def get_formatter_config() -> FormatterConfig:
    return load_formatter_config_from_env()


@lru_cache
def get_escalation_mailer() -> EscalationMailer:
    return EscalationMailer(load_smtp_config_from_env())
