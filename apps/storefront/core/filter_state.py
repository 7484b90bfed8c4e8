"""Filter-control state kept in step with the addressable query parameters.

The state moves through two transitions only:

- ``sync-in``: a new external representation arrived (first load, a link, a
  back/forward navigation, or our own commit). The draft is re-derived from it
  through :func:`init_from_external`, discarding local edits.
- ``commit-out``: the visitor pressed apply or clear. The draft is serialized,
  handed to the navigator, and then synced back in, just as the resulting
  navigation would.

Between transitions the setters only touch the draft, so the controls always
show the last external representation unless the visitor edited them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..schemas import FilterCriteria, FilterDraft
from .criteria import (
    ExternalParams,
    draft_from_criteria,
    draft_to_external,
    has_active_filters,
    init_from_external,
    to_location,
)

Navigator = Callable[[Dict[str, str]], None]


class Transition(str, Enum):
    SYNC_IN = "sync-in"
    COMMIT_OUT = "commit-out"


@dataclass
class FilterState:
    """Draft filter selection for one browsing session.

    Example:
        state = FilterState(navigate=pushes.append)
        state.sync_in("category=premium")
        state.set_min_price("1000")
        state.apply()  # navigates to {"category": "premium", "minPrice": "1000"}
    """

    navigate: Optional[Navigator] = None
    external: Dict[str, str] = field(default_factory=dict)
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    draft: FilterDraft = field(default_factory=FilterDraft)
    edited: bool = False
    history: List[Transition] = field(default_factory=list)

    @classmethod
    def from_external(cls, params: Optional[ExternalParams], navigate: Optional[Navigator] = None) -> "FilterState":
        state = cls(navigate=navigate)
        state.sync_in(params)
        return state

    def sync_in(self, params: Optional[ExternalParams]) -> FilterCriteria:
        self.criteria = init_from_external(params)
        self.draft = draft_from_criteria(self.criteria)
        self.external = draft_to_external(self.draft)
        self.edited = False
        self.history.append(Transition.SYNC_IN)
        return self.criteria

    def set_category(self, slug: Optional[str]) -> None:
        self._edit(category=slug or "")

    def set_min_price(self, value: str) -> None:
        self._edit(min_price=value or "")

    def set_max_price(self, value: str) -> None:
        self._edit(max_price=value or "")

    def _edit(self, **changes: str) -> None:
        self.draft = self.draft.model_copy(update=changes)
        self.edited = True

    def apply(self) -> Dict[str, str]:
        return self._commit_out(draft_to_external(self.draft))

    def clear(self) -> Dict[str, str]:
        self.draft = FilterDraft()
        return self._commit_out({})

    def _commit_out(self, params: Dict[str, str]) -> Dict[str, str]:
        self.history.append(Transition.COMMIT_OUT)
        if self.navigate is not None:
            self.navigate(dict(params))
        self.sync_in(params)
        return params

    @property
    def has_active_filters(self) -> bool:
        return has_active_filters(self.draft)

    @property
    def location(self) -> str:
        return to_location(self.external)

    @property
    def last_transition(self) -> Optional[Transition]:
        return self.history[-1] if self.history else None
