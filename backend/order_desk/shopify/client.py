from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from order_desk.config import ShopifyConfig


class ShopifyError(RuntimeError):
    """Any failure talking to the Admin API. Detail is for logs, not for callers."""


class ShopifyClient:
    """
    Thin Admin GraphQL wrapper: one POST per call, no retries.

    `transport` lets tests plug in httpx.MockTransport.
    """

    def __init__(self, config: ShopifyConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self._transport = transport

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.config.is_configured:
            raise ShopifyError("Shopify URL or Access Token is not defined in environment variables.")

        headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.config.access_token,
        }
        try:
            with httpx.Client(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                response = client.post(
                    self.config.store_url,
                    json={"query": query, "variables": variables or {}},
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            logger.error("Shopify API timeout: {}", e)
            raise ShopifyError(f"Shopify API timed out after {self.config.timeout_seconds}s") from e
        except httpx.HTTPError as e:
            logger.error("Network error calling Shopify GraphQL API: {}", e)
            raise ShopifyError(f"Network or unexpected error during Shopify API call: {e}") from e

        if response.status_code >= 400:
            logger.error("Shopify API response error: {} {}", response.status_code, response.text[:500])
            raise ShopifyError(f"Shopify API responded with status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ShopifyError("Shopify API returned a non-JSON body") from e
        if not isinstance(payload, dict):
            raise ShopifyError("Shopify API returned an unexpected payload")

        errors = payload.get("errors")
        if errors:
            logger.error("Shopify GraphQL errors: {}", errors)
            if isinstance(errors, list):
                message = ", ".join(
                    str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors
                )
            else:
                message = str(errors)
            raise ShopifyError(message)

        return payload.get("data") or {}
