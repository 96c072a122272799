from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional, Union

# en-US display symbols; anything else is rendered as "<CODE> <amount>"
CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}
ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW", "VND"}


def to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def _shop_money(money_set: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Accepts either a MoneyBag ({shopMoney: {...}}) or a bare MoneyV2 dict."""
    if not money_set:
        return {}
    return money_set.get("shopMoney") or money_set


def money_amount(money_set: Optional[Dict[str, Any]]) -> Optional[Decimal]:
    return to_decimal(_shop_money(money_set).get("amount"))


def money_currency(money_set: Optional[Dict[str, Any]]) -> Optional[str]:
    return _shop_money(money_set).get("currencyCode") or None


def format_amount(amount: Optional[Decimal], currency_code: Optional[str]) -> Optional[str]:
    """
    Renders an amount for speech/display. Absent and zero amounts return None so
    optional charges (free shipping, no tax) read as unset instead of "$0.00".
    """
    if amount is None or amount == 0:
        return None

    code = (currency_code or "USD").upper()
    digits = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    rounded = abs(amount).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    if rounded == 0:
        return None
    number = f"{rounded:,.{digits}f}"

    symbol = CURRENCY_SYMBOLS.get(code)
    text = f"{symbol}{number}" if symbol else f"{code} {number}"
    return f"-{text}" if amount < 0 else text


def format_money(money_set: Optional[Dict[str, Any]]) -> Optional[str]:
    return format_amount(money_amount(money_set), money_currency(money_set))


def parse_datetime(value: Union[str, datetime, date, None]) -> Optional[datetime]:
    """Parses ISO-8601 timestamps or dates into an aware UTC datetime; None when unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        try:
            dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_date(value: Union[str, datetime, date, None]) -> Optional[str]:
    """'2024-06-15T10:00:00Z' -> 'June 15, 2024' (calendar date in UTC)."""
    if isinstance(value, date) and not isinstance(value, datetime):
        d = value
    else:
        dt = parse_datetime(value)
        if dt is None:
            return None
        d = dt.date()
    return f"{d:%B} {d.day}, {d.year}"


def _as_tag_list(tags: Any) -> Iterable[str]:
    if not tags:
        return []
    if isinstance(tags, str):
        return [t.strip() for t in tags.split(",")]
    return [t for t in tags if isinstance(t, str)]


def parse_shipping_date_from_tags(tags: Any, prefix: str = "w3dd") -> Optional[date]:
    """
    Finds the first "<prefix>:YYYY-MM-DD" tag (prefix compared case-insensitively)
    and returns its calendar date. Missing, empty or unparseable values give None.
    """
    marker = f"{prefix.lower()}:"
    tag = next((t for t in _as_tag_list(tags) if t.lower().startswith(marker)), None)
    if tag is None:
        return None

    _, _, raw = tag.partition(":")
    raw = raw.strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None
