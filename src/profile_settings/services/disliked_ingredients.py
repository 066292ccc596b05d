"""Optimistic editing of the disliked-ingredient list."""

import itertools
import logging
import time
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

from profile_settings.adapters.profile_api_client import ProfileApiClient
from profile_settings.domain.errors import ProfileApiError
from profile_settings.domain.profile import DislikedIngredient
from profile_settings.domain.settings import SettingsState
from profile_settings.services.notifications import (
    Notifier,
    notify_error,
    notify_success,
)
from profile_settings.services.settings_store import SettingsStore

_logger = logging.getLogger(__name__)


@dataclass
class DislikedIngredientService:
    """Applies list changes locally first and reconciles with the server."""

    client: ProfileApiClient
    store: SettingsStore
    notifier: Notifier
    temp_id_prefix: str = "temp-"
    _counter: itertools.count = field(default_factory=itertools.count)

    def new_placeholder_id(self) -> str:
        """Return a local id that cannot collide with a server id."""
        return f"{self.temp_id_prefix}{time.time_ns()}-{next(self._counter)}"

    def has_pending_ingredient(self) -> bool:
        """Return True while a placeholder awaits server confirmation."""
        return self.store.state.has_pending_ingredient(self.temp_id_prefix)

    async def add_disliked_ingredient(self, name: str) -> None:
        """Append a placeholder, then swap in the server record or roll back."""
        ingredient_name = name.strip()
        placeholder = DislikedIngredient(
            id=self.new_placeholder_id(),
            ingredient_name=ingredient_name,
            created_at=datetime.now(tz=UTC),
        )
        self.store.update(
            lambda prev: replace(
                prev,
                is_adding_ingredient=True,
                disliked_ingredients=(*prev.disliked_ingredients, placeholder),
            )
        )

        try:
            created = await self.client.add_disliked_ingredient(ingredient_name)
        except ProfileApiError as exc:
            self.store.update(
                lambda prev: replace(
                    prev,
                    disliked_ingredients=_without(prev, placeholder.id),
                    is_adding_ingredient=False,
                )
            )
            message = exc.message or "Failed to add ingredient"
            _logger.warning(
                "Rolled back ingredient add (kind=%s, status=%s): %s",
                exc.kind,
                exc.status_code,
                message,
            )
            notify_error(self.notifier, message)
            raise

        self.store.update(
            lambda prev: replace(
                prev,
                disliked_ingredients=tuple(
                    created if item.id == placeholder.id else item
                    for item in prev.disliked_ingredients
                ),
                is_adding_ingredient=False,
            )
        )
        notify_success(self.notifier, "Ingredient added")

    async def remove_disliked_ingredient(self, ingredient_id: str) -> None:
        """Drop the entry immediately and restore it if the delete fails.

        Concurrent removals are not serialized; the removing slot tracks only
        the most recent one.
        """
        removed = next(
            (
                item
                for item in self.store.state.disliked_ingredients
                if item.id == ingredient_id
            ),
            None,
        )
        self.store.update(
            lambda prev: replace(
                prev,
                removing_ingredient_id=ingredient_id,
                disliked_ingredients=_without(prev, ingredient_id),
            )
        )

        try:
            await self.client.remove_disliked_ingredient(ingredient_id)
        except ProfileApiError as exc:

            def rollback(prev: SettingsState) -> SettingsState:
                restored = prev.disliked_ingredients
                if removed is not None and removed not in restored:
                    restored = (*restored, removed)
                return replace(
                    prev, disliked_ingredients=restored, removing_ingredient_id=None
                )

            self.store.update(rollback)
            message = exc.message or "Failed to remove ingredient"
            _logger.warning(
                "Rolled back ingredient removal (id=%s, status=%s): %s",
                ingredient_id,
                exc.status_code,
                message,
            )
            notify_error(self.notifier, message)
            raise

        self.store.update(lambda prev: replace(prev, removing_ingredient_id=None))
        notify_success(self.notifier, "Ingredient removed")


def _without(
    state: SettingsState, ingredient_id: str
) -> tuple[DislikedIngredient, ...]:
    return tuple(
        item for item in state.disliked_ingredients if item.id != ingredient_id
    )
