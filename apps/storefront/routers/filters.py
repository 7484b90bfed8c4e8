"""Endpoints backing the filter controls' apply and clear buttons.

The client posts the values currently in its controls; the response carries
the representation to navigate to.
"""

from __future__ import annotations

from fastapi import APIRouter

from ..core.filter_state import FilterState
from ..schemas import FilterDraft, NavigationResponse

router = APIRouter()


@router.post("/apply", response_model=NavigationResponse)
def apply_draft(draft: FilterDraft) -> NavigationResponse:
    state = FilterState()
    state.set_category(draft.category)
    state.set_min_price(draft.min_price)
    state.set_max_price(draft.max_price)
    params = state.apply()
    return NavigationResponse(params=params, location=state.location)


@router.post("/clear", response_model=NavigationResponse)
def clear_draft() -> NavigationResponse:
    state = FilterState()
    params = state.clear()
    return NavigationResponse(params=params, location=state.location)
