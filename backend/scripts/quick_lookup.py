"""
Manual check against the configured store: runs one lookup and prints the
speakable summary the voice agent would receive.

    python scripts/quick_lookup.py order_number "#1024"
    python scripts/quick_lookup.py phone "555-123-4567"
"""
import json
import sys

from dotenv import load_dotenv

from order_desk.config import load_formatter_config_from_env, load_shopify_config_from_env
from order_desk.shopify.client import ShopifyClient
from order_desk.tools.order_format import format_order_for_ai
from order_desk.tools.order_lookup import resolve_order


def main():
    load_dotenv()

    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)
    kind, value = sys.argv[1], sys.argv[2]

    client = ShopifyClient(load_shopify_config_from_env())
    match = resolve_order(client, kind, value)
    if match is None:
        print(f"No order found for {kind}={value}")
        return

    order = format_order_for_ai(match.order, match.customer, load_formatter_config_from_env())
    print(json.dumps(order.model_dump(by_alias=True), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
