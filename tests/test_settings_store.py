"""Tests for the settings state container."""

from dataclasses import replace

from profile_settings.domain.profile import DislikedIngredient
from profile_settings.domain.settings import SettingsState
from profile_settings.services.settings_store import SettingsStore


def test_update_replaces_snapshot() -> None:
    store = SettingsStore()
    original = store.state

    updated = store.update(lambda prev: replace(prev, is_saving_allergens=True))

    assert updated is store.state
    assert updated is not original
    assert not original.is_saving_allergens


def test_listeners_receive_snapshots_until_unsubscribed() -> None:
    store = SettingsStore()
    seen: list[SettingsState] = []
    unsubscribe = store.subscribe(seen.append)

    store.update(lambda prev: replace(prev, error="boom"))
    unsubscribe()
    store.update(lambda prev: replace(prev, error=None))

    assert [state.error for state in seen] == ["boom"]


def test_clear_listeners_stops_broadcast() -> None:
    store = SettingsStore()
    seen: list[SettingsState] = []
    store.subscribe(seen.append)

    store.clear_listeners()
    store.update(lambda prev: replace(prev, error="boom"))

    assert seen == []
    assert store.state.error == "boom"


def test_pending_ingredient_detection() -> None:
    state = SettingsState(
        disliked_ingredients=(
            DislikedIngredient(id="ingredient-1", ingredient_name="Cebula"),
            DislikedIngredient(id="temp-1-0", ingredient_name="Czosnek"),
        )
    )

    assert state.has_pending_ingredient("temp-")
    assert not replace(
        state, disliked_ingredients=state.disliked_ingredients[:1]
    ).has_pending_ingredient("temp-")
