"""Parsing and serialization of the filter query parameters.

The filter state is addressable through three optional query keys:
``category``, ``minPrice`` and ``maxPrice``. Parsing never fails. A price that
is not a finite, non-negative number is treated as absent and a blank category
is treated as absent, so a bad link degrades to the unfiltered catalog instead
of an error page. No validation message is ever shown for such input; this is
a UX choice carried over from the storefront and may be revisited.

Serialization only emits the keys that carry a constraint, so shared links
stay minimal. Parsing then serializing is lossy for malformed input but stable:
the second pass is always a fixed point.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode

from ..schemas import FilterCriteria, FilterDraft

CATEGORY_KEY = "category"
MIN_PRICE_KEY = "minPrice"
MAX_PRICE_KEY = "maxPrice"
FILTER_KEYS = (CATEGORY_KEY, MIN_PRICE_KEY, MAX_PRICE_KEY)

ExternalParams = Union[str, Mapping[str, str], Iterable[Tuple[str, str]]]


def parse_price(value: Optional[str]) -> Optional[float]:
    """Return the price encoded in ``value`` or ``None`` when it is unusable."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        price = float(text)
    except ValueError:
        return None
    if not math.isfinite(price) or price < 0:
        return None
    # collapse -0.0
    return price + 0.0


def parse_category(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    slug = str(value).strip()
    return slug or None


def format_price(price: Optional[float]) -> str:
    """Canonical text for a parsed price: ``1000.0`` -> ``"1000"``."""
    if price is None:
        return ""
    if float(price).is_integer():
        return str(int(price))
    return repr(float(price))


def first_value(params: ExternalParams, key: str) -> Optional[str]:
    """First value given for ``key``, whatever shape ``params`` has."""
    if isinstance(params, str):
        params = parse_qsl(params.lstrip("?"), keep_blank_values=True)
    if hasattr(params, "getlist"):
        # multi-dicts such as Starlette's QueryParams return the last value from get()
        values = params.getlist(key)
        return values[0] if values else None
    if isinstance(params, Mapping):
        return params.get(key)
    for name, value in params:
        if name == key:
            return value
    return None


def init_from_external(params: Optional[ExternalParams]) -> FilterCriteria:
    """Build normalized criteria from query parameters.

    ``params`` may be a mapping (such as Starlette's ``QueryParams``), a
    sequence of ``(key, value)`` pairs, or a raw query string. A repeated key
    resolves to its first occurrence for every shape. Unknown keys are ignored.
    """
    if params is None:
        return FilterCriteria()
    if not isinstance(params, (str, Mapping)):
        params = list(params)
    return FilterCriteria(
        category_slug=parse_category(first_value(params, CATEGORY_KEY)),
        min_price=parse_price(first_value(params, MIN_PRICE_KEY)),
        max_price=parse_price(first_value(params, MAX_PRICE_KEY)),
    )


def to_external(criteria: FilterCriteria) -> Dict[str, str]:
    """Serialize criteria, omitting every unconstrained key."""
    params: Dict[str, str] = {}
    if criteria.category_slug:
        params[CATEGORY_KEY] = criteria.category_slug
    if criteria.min_price is not None:
        params[MIN_PRICE_KEY] = format_price(criteria.min_price)
    if criteria.max_price is not None:
        params[MAX_PRICE_KEY] = format_price(criteria.max_price)
    return params


def draft_from_criteria(criteria: FilterCriteria) -> FilterDraft:
    return FilterDraft(
        category=criteria.category_slug or "",
        min_price=format_price(criteria.min_price),
        max_price=format_price(criteria.max_price),
    )


def draft_to_external(draft: FilterDraft) -> Dict[str, str]:
    """Normalize the control values and serialize what survives."""
    return to_external(
        init_from_external(
            {
                CATEGORY_KEY: draft.category,
                MIN_PRICE_KEY: draft.min_price,
                MAX_PRICE_KEY: draft.max_price,
            }
        )
    )


def has_active_filters(draft: FilterDraft) -> bool:
    return bool(draft.category or draft.min_price or draft.max_price)


def to_location(params: Mapping[str, str], path: str = "/") -> str:
    """Link for ``params``; no filter keys addresses the bare resource."""
    query = urlencode([(key, params[key]) for key in FILTER_KEYS if params.get(key)])
    return f"{path}?{query}" if query else path
