import asyncio

import pytest

from habitboard.services.view_state import ViewState, ViewStates


def test_latest_request_wins():
    view: ViewState[str] = ViewState()
    old = view.begin()
    new = view.begin()

    assert view.commit(new, "current week") is True
    assert view.commit(old, "last week") is False
    assert view.value == "current week"


def test_commit_replaces_value():
    view: ViewState[dict] = ViewState()
    view.commit(view.begin(), {"a": 1})
    view.commit(view.begin(), {"b": 2})
    assert view.value == {"b": 2}


@pytest.mark.asyncio
async def test_slow_stale_computation_does_not_overwrite_newer_result():
    view: ViewState[str] = ViewState()

    async def compute(label: str, delay: float) -> None:
        token = view.begin()
        await asyncio.sleep(delay)
        view.commit(token, label)

    await asyncio.gather(compute("stale", 0.05), compute("fresh", 0.0))
    assert view.value == "fresh"


def test_view_states_are_independent_per_key():
    views: ViewStates[str] = ViewStates()
    a = views.get(("lb", 1, 10))
    b = views.get(("lb", 1, 11))

    token_a = a.begin()
    b.begin()
    assert a.commit(token_a, "x") is True
    assert views.get(("lb", 1, 10)) is a
    assert len(views) == 2


def test_view_states_evict_oldest():
    views: ViewStates[str] = ViewStates(max_views=2)
    first = views.get("first")
    views.get("second")
    views.get("third")

    assert len(views) == 2
    assert views.get("first") is not first
