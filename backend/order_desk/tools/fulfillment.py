from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set

from order_desk.api.schemas import FulfillmentStatus
from order_desk.tools.formatting import parse_datetime

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def connection_nodes(connection: Any) -> List[Dict[str, Any]]:
    """
    Flattens a GraphQL connection ({edges: [{node}]} or {nodes: [...]}) or a plain
    list into its nodes. Missing connections yield an empty list.
    """
    if not connection:
        return []
    if isinstance(connection, list):
        return [n for n in connection if isinstance(n, dict)]
    if connection.get("nodes") is not None:
        return [n for n in connection["nodes"] if isinstance(n, dict)]
    return [
        edge["node"]
        for edge in (connection.get("edges") or [])
        if isinstance(edge, dict) and isinstance(edge.get("node"), dict)
    ]


def latest_fulfillment(fulfillments: Optional[Iterable[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    """
    Most recent fulfillment by createdAt. Equal timestamps keep their original
    list order (sorted() is stable under reverse=True), and records without a
    parseable createdAt sort last.
    """
    records = [f for f in (fulfillments or []) if isinstance(f, dict)]
    if not records:
        return None
    ordered = sorted(
        records,
        key=lambda f: parse_datetime(f.get("createdAt")) or _EPOCH,
        reverse=True,
    )
    return ordered[0]


def fulfilled_line_item_ids(fulfillments: Optional[Iterable[Dict[str, Any]]]) -> Set[str]:
    ids: Set[str] = set()
    for fulfillment in fulfillments or []:
        if not isinstance(fulfillment, dict):
            continue
        for node in connection_nodes(fulfillment.get("fulfillmentLineItems")):
            line_item_id = (node.get("lineItem") or {}).get("id")
            if line_item_id:
                ids.add(line_item_id)
    return ids


def line_item_status(line_item: Dict[str, Any], fulfilled_ids: Set[str]) -> FulfillmentStatus:
    # Coarse: covered by any fulfillment counts, regardless of quantity or cancellation
    return "FULFILLED" if line_item.get("id") in fulfilled_ids else "UNFULFILLED"


def tracking_entry(fulfillment: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not fulfillment:
        return {}
    info = fulfillment.get("trackingInfo") or []
    if isinstance(info, dict):
        return info
    return info[0] if info and isinstance(info[0], dict) else {}
