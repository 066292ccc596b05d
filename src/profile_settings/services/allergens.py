"""Diff-based synchronization of the user's allergen selections."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from profile_settings.adapters.profile_api_client import ProfileApiClient
from profile_settings.domain.errors import ProfileApiError
from profile_settings.services.notifications import (
    Notifier,
    notify_error,
    notify_success,
)
from profile_settings.services.settings_store import SettingsStore

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllergenDiff:
    """Remote operations needed to reach a desired selection."""

    to_add: tuple[str, ...]
    to_remove: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


def compute_allergen_diff(
    current_ids: Iterable[str], desired_ids: Iterable[str]
) -> AllergenDiff:
    """Return the ids to add and the ids to remove, each sorted."""
    current = set(current_ids)
    desired = set(desired_ids)
    return AllergenDiff(
        to_add=tuple(sorted(desired - current)),
        to_remove=tuple(sorted(current - desired)),
    )


@dataclass
class AllergenSelectionService:
    """Reconciles the selection with the server, then adopts the server's list."""

    client: ProfileApiClient
    store: SettingsStore
    notifier: Notifier

    async def save_allergens(self, selected_ids: set[str]) -> None:
        """Issue the add/remove calls concurrently and refetch the selections."""
        diff = compute_allergen_diff(
            self.store.state.selected_allergen_ids(), selected_ids
        )
        if diff.is_empty:
            notify_success(self.notifier, "Allergens updated")
            return

        self.store.update(lambda prev: replace(prev, is_saving_allergens=True))
        try:
            await asyncio.gather(
                *(self.client.add_user_allergen(item) for item in diff.to_add),
                *(self.client.remove_user_allergen(item) for item in diff.to_remove),
            )
            user_allergens = await self.client.list_user_allergens()
        except ProfileApiError as exc:
            self.store.update(lambda prev: replace(prev, is_saving_allergens=False))
            message = exc.message or "Failed to update allergens"
            _logger.warning(
                "Allergen sync failed (added=%s, removed=%s, status=%s): %s",
                len(diff.to_add),
                len(diff.to_remove),
                exc.status_code,
                message,
            )
            notify_error(self.notifier, message)
            raise

        self.store.update(
            lambda prev: replace(
                prev,
                user_allergens=tuple(user_allergens),
                is_saving_allergens=False,
            )
        )
        notify_success(self.notifier, "Allergens updated")
