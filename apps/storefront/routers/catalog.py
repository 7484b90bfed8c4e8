"""Catalog listing and detail endpoints.

The listing reads the query parameters exactly like the storefront page does:
parse them into criteria, fetch categories and laptops side by side, then
narrow the laptops in memory and attach the active-filter summary.
"""

from __future__ import annotations

import asyncio
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from .. import config
from ..core.content_store import ContentStore, get_content_store
from ..core.criteria import draft_from_criteria, has_active_filters, init_from_external
from ..core.filtering import apply_filters, summarize
from ..core.images import image_url
from ..schemas import CatalogItem, Category, ItemCard, ItemDetail, ListingResponse

router = APIRouter()

CARD_IMAGE_SIZE = (400, 300)
DETAIL_IMAGE_SIZE = (800, 800)
THUMBNAIL_SIZE = (150, 150)


def _item_link(item: CatalogItem) -> str:
    return f"/laptop/{item.slug}"


def _item_to_card(item: CatalogItem) -> ItemCard:
    return ItemCard(
        id=item.id,
        title=item.title,
        slug=item.slug,
        price=item.price,
        status=item.status,
        status_label=item.status_label,
        category=item.category_name,
        image=image_url(item.images[0], *CARD_IMAGE_SIZE) if item.images else None,
        description=item.description,
        link=_item_link(item),
    )


def _item_to_detail(item: CatalogItem) -> ItemDetail:
    thumbnails = []
    if len(item.images) > 1:
        thumbnails = [image_url(ref, *THUMBNAIL_SIZE) for ref in item.images]
    return ItemDetail(
        id=item.id,
        title=item.title,
        slug=item.slug,
        price=item.price,
        status=item.status,
        status_label=item.status_label,
        category=item.category_name,
        category_slug=item.category_slug,
        image=image_url(item.images[0], *DETAIL_IMAGE_SIZE) if item.images else None,
        thumbnails=[url for url in thumbnails if url],
        description=item.description,
    )


@router.get("/categories", response_model=List[Category])
def list_categories(store: ContentStore = Depends(get_content_store)) -> List[Category]:
    return store.list_categories()


@router.get("/laptops", response_model=ListingResponse)
async def list_laptops(request: Request, store: ContentStore = Depends(get_content_store)) -> ListingResponse:
    raw = request.query_params
    criteria = init_from_external(raw)

    if config.PUSHDOWN_FILTERS:
        categories, laptops = await asyncio.gather(
            run_in_threadpool(store.list_categories),
            run_in_threadpool(store.list_items, criteria),
        )
    else:
        categories, all_laptops = await asyncio.gather(
            run_in_threadpool(store.list_categories),
            run_in_threadpool(store.list_items),
        )
        laptops = apply_filters(all_laptops, criteria)

    draft = draft_from_criteria(criteria)
    active = has_active_filters(draft)
    return ListingResponse(
        filters=draft,
        has_active_filters=active,
        summary=summarize(criteria, categories, len(laptops), raw=raw) if active else None,
        results=[_item_to_card(laptop) for laptop in laptops],
    )


@router.get("/laptops/{slug}", response_model=ItemDetail)
def get_laptop(slug: str, store: ContentStore = Depends(get_content_store)) -> ItemDetail:
    laptop = store.get_item(slug)
    if laptop is None:
        raise HTTPException(status_code=404, detail=f"Laptop '{slug}' not found")
    return _item_to_detail(laptop)
