"""Cart-level delivery delay from product tags.

Recognised tags, case-insensitive: ``delay`` and ``cake-delay`` add one day,
``delay-N`` and ``cake-delay-N`` add N days. The slowest product decides the
delay of the whole cart.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

DELAY_TAG_PATTERN = re.compile(r"^(?:cake-)?delay(?:-(\d+))?$", re.ASCII)
DEFAULT_TAG_DELAY_DAYS: int = 1


def parse_delay_from_tag(tag: str | None) -> int:
    """Return delay days encoded in tag, or 0 when tag is not a delay tag."""
    if not isinstance(tag, str):
        return 0

    match = DELAY_TAG_PATTERN.match(tag.strip().lower())
    if match is None:
        return 0

    suffix = match.group(1)
    if suffix is None:
        return DEFAULT_TAG_DELAY_DAYS
    try:
        delay = int(suffix)
    except ValueError:
        return 0
    return delay if delay >= 0 else 0


def _product_tags(product: Any) -> list[Any]:
    if isinstance(product, Mapping):
        tags = product.get("tags")
    else:
        tags = getattr(product, "tags", None)
    if not isinstance(tags, (list, tuple)):
        return []
    return list(tags)


def get_product_delay(product: Any) -> int:
    """Return the largest delay among one product's tags."""
    return max((parse_delay_from_tag(tag) for tag in _product_tags(product)), default=0)


def calculate_cart_delay(products: Iterable[Any] | None) -> int:
    """Return the worst-case delay across the cart; never the sum."""
    if not isinstance(products, Iterable) or isinstance(products, (str, bytes, Mapping)):
        return 0
    return max((get_product_delay(product) for product in products), default=0)
