import pytest

from storefront.schemas import CatalogItem, Category


BUDGET = Category(_id="cat-budget", name="Budget", slug="budget")
PREMIUM = Category(_id="cat-premium", name="Premium", slug="premium")


def make_item(item_id: str, price: float, category=None, **extra) -> CatalogItem:
    return CatalogItem(
        _id=item_id,
        title=extra.pop("title", item_id.title()),
        slug=extra.pop("slug", item_id),
        price=price,
        category=category,
        **extra,
    )


@pytest.fixture(name="make_item")
def make_item_fixture():
    return make_item


@pytest.fixture
def categories():
    return [PREMIUM, BUDGET]


@pytest.fixture
def items():
    return [
        make_item("budget-500", 500, BUDGET),
        make_item("premium-1500", 1500, PREMIUM),
        make_item("premium-2500", 2500, PREMIUM),
    ]
