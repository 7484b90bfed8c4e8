"""Pydantic schemas for catalog records, filter criteria and API payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNCATEGORIZED = "Uncategorized"

STATUS_LABELS = {"in-stock": "In Stock", "sold-out": "Sold Out"}


def _unwrap_slug(value: Any) -> Any:
    # Content-store slugs arrive as {"current": "..."}; plain strings are accepted too.
    if isinstance(value, dict):
        return value.get("current")
    return value


class Category(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    name: str
    slug: str

    @field_validator("slug", mode="before")
    @classmethod
    def current_slug(cls, value: Any) -> Any:
        return _unwrap_slug(value)


class CatalogItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    title: str
    slug: str
    price: float = Field(ge=0)
    status: Literal["in-stock", "sold-out"] = "in-stock"
    images: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    category: Optional[Category] = None

    @field_validator("slug", mode="before")
    @classmethod
    def current_slug(cls, value: Any) -> Any:
        return _unwrap_slug(value)

    @field_validator("category", mode="before")
    @classmethod
    def complete_category(cls, value: Any) -> Any:
        # a dangling or partial reference is shown as uncategorized
        if isinstance(value, dict):
            has_id = value.get("_id") or value.get("id")
            if not (has_id and value.get("name") and _unwrap_slug(value.get("slug"))):
                return None
        return value

    @field_validator("images", mode="before")
    @classmethod
    def image_refs(cls, value: Any) -> Any:
        if value is None:
            return []
        refs = []
        for image in value:
            # {"asset": {"_ref": "image-..."}} is the content-store shape
            if isinstance(image, dict):
                image = (image.get("asset") or {}).get("_ref") or image.get("url")
            if image:
                refs.append(image)
        return refs

    @property
    def category_slug(self) -> Optional[str]:
        return self.category.slug if self.category else None

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else UNCATEGORIZED

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]


class FilterCriteria(BaseModel):
    """Normalized filter selection. A ``None`` field places no constraint."""

    model_config = ConfigDict(frozen=True)

    category_slug: Optional[str] = None
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)

    @property
    def is_empty(self) -> bool:
        return not self.category_slug and self.min_price is None and self.max_price is None


class FilterDraft(BaseModel):
    """Values shown in the filter controls; an empty string means unset."""

    category: str = ""
    min_price: str = ""
    max_price: str = ""


class FilterSummary(BaseModel):
    category_label: Optional[str] = None
    min_price_label: Optional[str] = None
    max_price_label: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    result_count: int = 0
    result_label: str = "0 results"


class ItemCard(BaseModel):
    id: str
    title: str
    slug: str
    price: float
    status: str
    status_label: str
    category: str
    image: Optional[str] = None
    description: Optional[str] = None
    link: str


class ListingResponse(BaseModel):
    filters: FilterDraft
    has_active_filters: bool
    summary: Optional[FilterSummary] = None
    results: List[ItemCard] = Field(default_factory=list)
    clear_link: str = "/"


class ItemDetail(BaseModel):
    id: str
    title: str
    slug: str
    price: float
    status: str
    status_label: str
    category: str
    category_slug: Optional[str] = None
    image: Optional[str] = None
    # gallery, only filled when there is more than one image
    thumbnails: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    back_link: str = "/"


class NavigationResponse(BaseModel):
    params: Dict[str, str] = Field(default_factory=dict)
    location: str = "/"
