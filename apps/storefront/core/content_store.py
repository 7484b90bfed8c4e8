"""Read-only access to the catalog content.

Two backends share one small interface: a JSON file bundled with the repo for
local development and tests, and the Sanity HTTP query API used in
production. Both return complete lists; narrowing happens in
:mod:`storefront.core.filtering` unless criteria are explicitly pushed down.
Failures are raised as :class:`ContentStoreError` and never retried here.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from .. import config
from ..schemas import CatalogItem, Category, FilterCriteria
from .filtering import apply_filters, categories_query, compile_query, item_by_slug_query


class ContentStoreError(RuntimeError):
    """The content store could not be read."""


class ContentStore(ABC):
    @abstractmethod
    def list_categories(self) -> List[Category]:
        ...

    @abstractmethod
    def list_items(self, criteria: Optional[FilterCriteria] = None) -> List[CatalogItem]:
        ...

    @abstractmethod
    def get_item(self, slug: str) -> Optional[CatalogItem]:
        ...


def _parse_records(model, records: Any, source: str) -> list:
    if records is None:
        return []
    try:
        return [model.model_validate(record) for record in records]
    except (ValidationError, TypeError) as exc:
        raise ContentStoreError(f"Invalid {model.__name__} record from {source}: {exc}") from exc


class JsonContentStore(ContentStore):
    """Catalog held in a JSON document ``{"categories": [...], "laptops": [...]}``.

    Laptops are kept in file order, which stands in for newest-first.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._data is None:
            try:
                data = json.loads(self.path.read_text())
            except (OSError, ValueError) as exc:
                logging.exception("Failed reading catalog file %s", self.path)
                raise ContentStoreError(f"Unable to read catalog file {self.path}") from exc
            if not isinstance(data, dict):
                raise ContentStoreError(f"Catalog file {self.path} must hold a JSON object")
            self._data = data
        return self._data

    def list_categories(self) -> List[Category]:
        categories = _parse_records(Category, self._load().get("categories"), str(self.path))
        return sorted(categories, key=lambda category: category.name)

    def list_items(self, criteria: Optional[FilterCriteria] = None) -> List[CatalogItem]:
        items = _parse_records(CatalogItem, self._load().get("laptops"), str(self.path))
        if criteria is not None:
            return apply_filters(items, criteria)
        return items

    def get_item(self, slug: str) -> Optional[CatalogItem]:
        for item in self.list_items():
            if item.slug == slug:
                return item
        return None


class SanityContentStore(ContentStore):
    """Catalog served by the Sanity HTTP query API."""

    def __init__(
        self,
        project_id: str,
        dataset: str = "production",
        api_version: str = "2024-01-01",
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not project_id:
            raise ContentStoreError("SANITY_PROJECT_ID is not set")
        self.query_url = f"https://{project_id}.api.sanity.io/v{api_version}/data/query/{dataset}"
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _query(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        payload = {"query": query}
        # GROQ parameters travel as $name=<JSON value>
        for name, value in (params or {}).items():
            payload[f"${name}"] = json.dumps(value)
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            resp = self.session.get(self.query_url, params=payload, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logging.exception("Content store query failed: %s", exc)
            raise ContentStoreError(f"Content store query failed: {exc}") from exc
        if not isinstance(data, dict) or "result" not in data:
            raise ContentStoreError("Content store response has no result")
        return data["result"]

    def list_categories(self) -> List[Category]:
        return _parse_records(Category, self._query(categories_query()), self.query_url)

    def list_items(self, criteria: Optional[FilterCriteria] = None) -> List[CatalogItem]:
        query, params = compile_query(criteria)
        return _parse_records(CatalogItem, self._query(query, params), self.query_url)

    def get_item(self, slug: str) -> Optional[CatalogItem]:
        record = self._query(item_by_slug_query(), {"slug": slug})
        if record is None:
            return None
        return _parse_records(CatalogItem, [record], self.query_url)[0]


@lru_cache(maxsize=1)
def get_content_store() -> ContentStore:
    """Content store chosen by ``CATALOG_BACKEND``; used as a FastAPI dependency."""
    if config.CATALOG_BACKEND == "sanity":
        return SanityContentStore(
            config.SANITY_PROJECT_ID,
            dataset=config.SANITY_DATASET,
            api_version=config.SANITY_API_VERSION,
            token=config.SANITY_TOKEN,
            timeout=config.SANITY_TIMEOUT,
        )
    return JsonContentStore(config.CATALOG_PATH)
