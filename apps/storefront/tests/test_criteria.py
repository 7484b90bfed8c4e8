import pytest
from starlette.datastructures import QueryParams

from storefront.core.criteria import (
    draft_from_criteria,
    draft_to_external,
    format_price,
    has_active_filters,
    init_from_external,
    parse_price,
    to_external,
    to_location,
)
from storefront.schemas import FilterCriteria, FilterDraft


@pytest.mark.parametrize("text, expected", [("1000", 1000.0), (" 12.5 ", 12.5), ("0", 0.0), ("-0", 0.0), ("1e3", 1000.0)])
def test_parse_price_accepts_non_negative_numbers(text, expected):
    assert parse_price(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", "abc", "not-a-number", "-5", "nan", "inf", "100abc", "$100"])
def test_parse_price_rejects_everything_else(text):
    assert parse_price(text) is None


def test_format_price_is_canonical():
    assert format_price(1000.0) == "1000"
    assert format_price(1299.99) == "1299.99"
    assert format_price(None) == ""


def test_init_from_external_reads_all_keys():
    criteria = init_from_external({"category": "premium", "minPrice": "1000", "maxPrice": "2000"})
    assert criteria == FilterCriteria(category_slug="premium", min_price=1000, max_price=2000)


def test_init_from_external_empty_is_unconstrained():
    assert init_from_external({}) == FilterCriteria()
    assert init_from_external(None) == FilterCriteria()
    assert init_from_external("").is_empty


def test_malformed_price_is_treated_as_absent():
    criteria = init_from_external({"minPrice": "not-a-number", "maxPrice": "-20"})
    assert criteria.min_price is None
    assert criteria.max_price is None


def test_blank_category_is_absent_and_unknown_slug_is_kept():
    assert init_from_external({"category": "  "}).category_slug is None
    assert init_from_external({"category": "nonexistent"}).category_slug == "nonexistent"


def test_init_from_query_string_and_pairs():
    from_string = init_from_external("?category=gaming&minPrice=800&ignored=1")
    from_pairs = init_from_external([("category", "gaming"), ("minPrice", "800"), ("minPrice", "900")])
    assert from_string == from_pairs == FilterCriteria(category_slug="gaming", min_price=800)


def test_to_external_omits_absent_fields():
    assert to_external(FilterCriteria()) == {}
    assert to_external(FilterCriteria(max_price=2000)) == {"maxPrice": "2000"}


def test_to_external_key_order():
    params = to_external(FilterCriteria(category_slug="premium", min_price=1000, max_price=1999.5))
    assert list(params.items()) == [("category", "premium"), ("minPrice", "1000"), ("maxPrice", "1999.5")]


@pytest.mark.parametrize(
    "criteria",
    [
        FilterCriteria(),
        FilterCriteria(category_slug="premium"),
        FilterCriteria(min_price=0),
        FilterCriteria(min_price=1000, max_price=2000),
        FilterCriteria(category_slug="budget", min_price=249.99, max_price=0.5),
        FilterCriteria(min_price=3000, max_price=1000),
    ],
)
def test_round_trip_is_identity_for_well_formed_criteria(criteria):
    assert init_from_external(to_external(criteria)) == criteria


@pytest.mark.parametrize(
    "params",
    [
        {"minPrice": "abc"},
        {"category": " ", "maxPrice": "-1"},
        {"category": "premium", "minPrice": "1000.50", "maxPrice": "lots"},
        {"minPrice": "1e3"},
    ],
)
def test_round_trip_is_stable_for_malformed_input(params):
    first = init_from_external(params)
    assert init_from_external(to_external(first)) == first


def test_draft_round_trip_normalizes_values():
    draft = FilterDraft(category="premium", min_price=" 1000 ", max_price="cheap")
    assert draft_to_external(draft) == {"category": "premium", "minPrice": "1000"}
    assert draft_from_criteria(init_from_external(draft_to_external(draft))) == FilterDraft(
        category="premium", min_price="1000"
    )


def test_has_active_filters():
    assert not has_active_filters(FilterDraft())
    assert has_active_filters(FilterDraft(category="budget"))
    assert has_active_filters(FilterDraft(max_price="100"))


def test_to_location():
    assert to_location({}) == "/"
    assert to_location({"maxPrice": "2000", "category": "premium"}) == "/?category=premium&maxPrice=2000"
    assert to_location({"category": "a b"}, path="/catalog") == "/catalog?category=a+b"


def test_repeated_key_resolves_to_first_value_for_every_shape():
    query = "minPrice=100&minPrice=900&category=budget&category=premium"
    expected = FilterCriteria(category_slug="budget", min_price=100)
    assert init_from_external(query) == expected
    assert init_from_external(QueryParams(query)) == expected
    assert init_from_external([("minPrice", "100"), ("minPrice", "900"), ("category", "budget")]) == expected
