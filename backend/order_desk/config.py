import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv


DEFAULT_PHYSICAL_PRODUCT_TYPES = ("Embroidered Patches", "Alterations")


def _split_csv(raw: Optional[str]) -> Tuple[str, ...]:
    return tuple(part.strip() for part in (raw or "").split(",") if part.strip())


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ShopifyConfig:
    # Full Admin GraphQL endpoint, e.g. https://<shop>.myshopify.com/admin/api/2024-10/graphql.json
    store_url: str = ""
    access_token: str = ""
    timeout_seconds: float = 10.0

    @property
    def is_configured(self) -> bool:
        return bool(self.store_url and self.access_token)


@dataclass(frozen=True)
class FormatterConfig:
    # Product types that ship even when the line item is not flagged requiresShipping
    physical_product_types: Tuple[str, ...] = DEFAULT_PHYSICAL_PRODUCT_TYPES
    ship_date_tag_prefix: str = "w3dd"


@dataclass(frozen=True)
class SmtpConfig:
    host: str = ""
    port: int = 587
    username: str = ""
    password: str = ""
    use_tls: bool = True
    sender: str = ""
    support_address: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.sender and self.support_address)


def load_shopify_config_from_env() -> ShopifyConfig:
    load_dotenv()
    return ShopifyConfig(
        store_url=os.getenv("SHOPIFY_STORE_URL", ""),
        access_token=os.getenv("SHOPIFY_ACCESS_TOKEN", ""),
        timeout_seconds=float(os.getenv("SHOPIFY_TIMEOUT_SECONDS", "10")),
    )


def load_formatter_config_from_env() -> FormatterConfig:
    load_dotenv()
    types = _split_csv(os.getenv("PHYSICAL_PRODUCT_TYPES"))
    return FormatterConfig(
        physical_product_types=types or DEFAULT_PHYSICAL_PRODUCT_TYPES,
        ship_date_tag_prefix=os.getenv("SHIP_DATE_TAG_PREFIX", "w3dd").strip() or "w3dd",
    )


def load_smtp_config_from_env() -> SmtpConfig:
    load_dotenv()
    return SmtpConfig(
        host=os.getenv("SMTP_HOST", ""),
        port=int(os.getenv("SMTP_PORT", "587")),
        username=os.getenv("SMTP_USERNAME", ""),
        password=os.getenv("SMTP_PASSWORD", ""),
        use_tls=_env_bool("SMTP_USE_TLS", True),
        sender=os.getenv("ESCALATION_FROM", ""),
        support_address=os.getenv("ESCALATION_TO", ""),
    )


def load_cors_origins_from_env() -> list[str]:
    load_dotenv()
    return list(_split_csv(os.getenv("CORS_ORIGINS"))) or ["*"]
