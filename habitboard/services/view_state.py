# habitboard/services/view_state.py
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar

T = TypeVar("T")


@dataclass
class ViewState(Generic[T]):
    """
    Last-request-wins holder for one rendered view.

    Every recomputation calls begin() before awaiting anything and commit()
    with the token afterwards. A result whose token is older than the latest
    begin() is dropped, so a slow stale computation never replaces a newer one.
    The value is replaced, never merged.
    """
    value: T | None = None
    _latest: int = 0
    _counter: itertools.count = field(default_factory=lambda: itertools.count(1))

    def begin(self) -> int:
        self._latest = next(self._counter)
        return self._latest

    def is_latest(self, token: int) -> bool:
        return token == self._latest

    def commit(self, token: int, value: T) -> bool:
        if not self.is_latest(token):
            return False
        self.value = value
        return True


class ViewStates(Generic[T]):
    """ViewState per key (e.g. per chat message being edited)."""

    def __init__(self, max_views: int = 1024) -> None:
        self.max_views = max_views
        self._views: dict[Hashable, ViewState[T]] = {}

    def get(self, key: Hashable) -> ViewState[T]:
        view = self._views.get(key)
        if view is None:
            if len(self._views) >= self.max_views:
                # dicts keep insertion order: drop the oldest view
                self._views.pop(next(iter(self._views)))
            view = self._views[key] = ViewState()
        return view

    def __len__(self) -> int:
        return len(self._views)
