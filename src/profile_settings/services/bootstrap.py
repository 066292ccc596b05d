"""Parallel loading of all profile settings resources."""

import asyncio
import logging
from dataclasses import dataclass, replace

from profile_settings.adapters.profile_api_client import ProfileApiClient
from profile_settings.domain.errors import ProfileApiError
from profile_settings.services.notifications import Notifier, notify_error
from profile_settings.services.settings_store import SettingsStore

_FALLBACK_MESSAGE = "An error occurred while loading data"

_logger = logging.getLogger(__name__)


@dataclass
class SettingsLoader:
    """Fetches the profile, allergen catalog, selections and ingredients together."""

    client: ProfileApiClient
    store: SettingsStore
    notifier: Notifier

    async def load_all(self) -> None:
        """Load every resource; apply results only when all four reads succeed."""
        self.store.update(
            lambda prev: replace(
                prev,
                is_loading_profile=True,
                is_loading_allergens=True,
                is_loading_disliked_ingredients=True,
                error=None,
            )
        )

        try:
            (
                profile,
                all_allergens,
                user_allergens,
                disliked_ingredients,
            ) = await asyncio.gather(
                self.client.get_profile(),
                self.client.list_allergens(),
                self.client.list_user_allergens(),
                self.client.list_disliked_ingredients(),
            )
        except ProfileApiError as exc:
            message = exc.message or _FALLBACK_MESSAGE
            _logger.warning(
                "Settings load failed (kind=%s, status=%s): %s",
                exc.kind,
                exc.status_code,
                message,
            )
            self.store.update(
                lambda prev: replace(
                    prev,
                    is_loading_profile=False,
                    is_loading_allergens=False,
                    is_loading_disliked_ingredients=False,
                    error=message,
                )
            )
            notify_error(self.notifier, message)
            return

        self.store.update(
            lambda prev: replace(
                prev,
                profile=profile,
                all_allergens=tuple(all_allergens),
                user_allergens=tuple(user_allergens),
                disliked_ingredients=tuple(disliked_ingredients),
                is_loading_profile=False,
                is_loading_allergens=False,
                is_loading_disliked_ingredients=False,
            )
        )

    async def refetch_all(self) -> None:
        """Reload everything; a successful refetch clears a standing error."""
        await self.load_all()
