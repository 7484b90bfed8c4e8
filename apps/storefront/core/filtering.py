"""Filter application over catalog items, plus the equivalent store query.

``apply_filters`` is the in-memory path used by the listing endpoint.
``compile_query`` expresses the same criteria as a GROQ document query so a
content store can do the narrowing itself; both must agree on semantics:
every constraint is ANDed, price bounds are inclusive, and an absent field
constrains nothing.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..schemas import CatalogItem, Category, FilterCriteria, FilterSummary
from .criteria import MAX_PRICE_KEY, MIN_PRICE_KEY, first_value, format_price, parse_price

logger = logging.getLogger(__name__)

CATEGORY_PROJECTION = "{ _id, name, slug }"
LAPTOP_PROJECTION = (
    "{ _id, title, slug, price, status, images, description, "
    "category->{ _id, name, slug } }"
)


def _matches(item: CatalogItem, criteria: FilterCriteria) -> bool:
    if criteria.category_slug and item.category_slug != criteria.category_slug:
        return False
    if criteria.min_price is not None and item.price < criteria.min_price:
        return False
    if criteria.max_price is not None and item.price > criteria.max_price:
        return False
    return True


def apply_filters(items: Iterable[CatalogItem], criteria: Optional[FilterCriteria]) -> List[CatalogItem]:
    """Return the items satisfying every active constraint, in input order.

    An inverted range (``min_price > max_price``) is not rejected; it simply
    matches nothing.
    """
    items = list(items)
    if criteria is None or criteria.is_empty:
        return items
    filtered = [item for item in items if _matches(item, criteria)]
    logger.debug(
        "filtered catalog: %d of %d items kept (category=%s min=%s max=%s)",
        len(filtered),
        len(items),
        criteria.category_slug,
        criteria.min_price,
        criteria.max_price,
    )
    return filtered


def _price_label(value: Optional[float], raw: Optional[Mapping[str, str]], key: str) -> Optional[str]:
    if value is None:
        return None
    # echo what the visitor typed as long as it parses to the same bound
    if raw is not None:
        literal = first_value(raw, key)
        if literal is not None and parse_price(literal) == value:
            return literal.strip()
    return format_price(value)


def summarize(
    criteria: FilterCriteria,
    categories: Sequence[Category],
    result_count: int,
    raw: Optional[Mapping[str, str]] = None,
) -> FilterSummary:
    """Describe the active filters for display next to the results.

    An unknown category slug is shown as-is; the result count is 0 in that case.
    ``raw`` is the query mapping the criteria were parsed from, used to echo
    price text verbatim.
    """
    category_label = None
    if criteria.category_slug:
        names = {category.slug: category.name for category in categories}
        category_label = names.get(criteria.category_slug, criteria.category_slug)
    min_label = _price_label(criteria.min_price, raw, MIN_PRICE_KEY)
    max_label = _price_label(criteria.max_price, raw, MAX_PRICE_KEY)

    labels = []
    if category_label is not None:
        labels.append(f"Category: {category_label}")
    if min_label is not None:
        labels.append(f"Min: ${min_label}")
    if max_label is not None:
        labels.append(f"Max: ${max_label}")

    return FilterSummary(
        category_label=category_label,
        min_price_label=min_label,
        max_price_label=max_label,
        labels=labels,
        result_count=result_count,
        result_label=f"{result_count} result{'' if result_count == 1 else 's'}",
    )


def compile_query(criteria: Optional[FilterCriteria]) -> Tuple[str, Dict[str, Any]]:
    """Build a GROQ query and its bound parameters for ``criteria``.

    Returns:
        Tuple of (query string, parameters). Parameters are referenced as
        ``$category``, ``$minPrice`` and ``$maxPrice`` and only present when
        the matching constraint is.
    """
    conditions = ['_type == "laptop"']
    params: Dict[str, Any] = {}
    criteria = criteria or FilterCriteria()

    if criteria.category_slug:
        conditions.append("category->slug.current == $category")
        params["category"] = criteria.category_slug
    if criteria.min_price is not None:
        conditions.append("price >= $minPrice")
        params["minPrice"] = criteria.min_price
    if criteria.max_price is not None:
        conditions.append("price <= $maxPrice")
        params["maxPrice"] = criteria.max_price

    query = f"*[{' && '.join(conditions)}] | order(_createdAt desc) {LAPTOP_PROJECTION}"
    return query, params


def categories_query() -> str:
    return f'*[_type == "category"] | order(name asc) {CATEGORY_PROJECTION}'


def item_by_slug_query() -> str:
    return f'*[_type == "laptop" && slug.current == $slug][0] {LAPTOP_PROJECTION}'
