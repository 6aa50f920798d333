"""Item normalizer: turn raw model records into complete CostumeItems.

Policy for model-supplied annotations:
- ``vendorTrusted`` is always recomputed from the vendor trust table; the
  model's own flag is ignored.
- ``productLink`` is kept only when it is an absolute http(s) URL; anything
  else is replaced by a vendor search link.
"""

from __future__ import annotations

import math
import re
import urllib.parse
import uuid
from typing import Any

import structlog

from costume.config import settings
from costume.models.contracts import CostumeItem
from costume.pipeline.vendors import DEFAULT_VENDOR, build_search_url, is_trusted_vendor

log = structlog.get_logger("costume.normalize")

DEFAULT_BRAND = "Generic"
DEFAULT_CATEGORY = "accessory"
DEFAULT_NAME = "Costume piece"

# Optional sign (only before the amount or its "$"), then "1,299.50", "12,99" or ".99".
_PRICE_RE = re.compile(r"(?P<sign>(?<!\w)-)?\s*\$?\s*(?P<amount>\d[\d,]*(?:\.\d+)?|\.\d+)")
_DECIMAL_COMMA_RE = re.compile(r"^\d+,\d{2}$")


def _amount_to_float(amount: str) -> float:
    if _DECIMAL_COMMA_RE.match(amount):
        return float(amount.replace(",", "."))
    return float(amount.replace(",", ""))


def _text(value: Any) -> str:
    """Stripped string for scalar values, '' for None and containers."""
    if value is None or isinstance(value, (dict, list, bool)):
        return ""
    return str(value).strip()


def _parse_price(value: Any) -> float:
    """Coerce a model price to a non-negative float.

    Accepts numbers and strings like '$1,299.00', '$.99' or '12,99' (a comma
    before exactly two trailing digits is a decimal comma). Anything
    unparseable or negative, including '-$5', becomes 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        match = _PRICE_RE.search(value)
        if not match:
            return 0.0
        try:
            price = _amount_to_float(match.group("amount"))
        except ValueError:
            return 0.0
        if match.group("sign"):
            price = -price
    else:
        return 0.0
    if not math.isfinite(price) or price < 0:
        return 0.0
    return round(price, 2)


def _is_absolute_http_url(value: str) -> bool:
    parsed = urllib.parse.urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _placeholder_image(name: str) -> str:
    return settings.placeholder_image_url.format(name=urllib.parse.quote_plus(name))


def normalize_item(raw: dict[str, Any]) -> CostumeItem:
    """Normalize one raw record. Missing fields get deterministic defaults."""
    search_term = _text(raw.get("searchTerm"))
    name = _text(raw.get("name")) or search_term or DEFAULT_NAME
    vendor = _text(raw.get("vendor")) or DEFAULT_VENDOR

    product_link = _text(raw.get("productLink"))
    if not _is_absolute_http_url(product_link):
        product_link = build_search_url(vendor, search_term or name)

    image_url = _text(raw.get("imageUrl"))
    if not _is_absolute_http_url(image_url):
        image_url = _placeholder_image(name)

    return CostumeItem(
        item_id=_text(raw.get("itemId")) or str(uuid.uuid4()),
        category=_text(raw.get("category")).lower() or DEFAULT_CATEGORY,
        name=name,
        brand=_text(raw.get("brand")) or DEFAULT_BRAND,
        price=_parse_price(raw.get("price")),
        vendor=vendor,
        vendor_trusted=is_trusted_vendor(vendor),
        product_link=product_link,
        image_url=image_url,
        search_term=search_term or None,
    )


def normalize_items(raw_items: list[Any]) -> list[CostumeItem]:
    """Normalize records in input order, dropping entries that aren't objects.

    Item IDs are unique within the returned batch: a repeated model-supplied
    ID is replaced by a fresh one.
    """
    items: list[CostumeItem] = []
    seen_ids: set[str] = set()
    dropped = 0
    for raw in raw_items:
        if not isinstance(raw, dict):
            dropped += 1
            continue
        item = normalize_item(raw)
        if item.item_id in seen_ids:
            item.item_id = str(uuid.uuid4())
        seen_ids.add(item.item_id)
        items.append(item)

    if dropped:
        log.warning("costume_items_dropped", dropped=dropped, kept=len(items))
    log.info(
        "costume_items_normalized",
        count=len(items),
        untrusted=sum(1 for i in items if not i.vendor_trusted),
    )
    return items


def compute_total(items: list[CostumeItem]) -> float:
    """Sum of item prices, rounded to cents; 0 for an empty list."""
    return round(sum(item.price for item in items), 2)
