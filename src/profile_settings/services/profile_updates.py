"""Saving profile field groups."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from profile_settings.adapters.profile_api_client import ProfileApiClient
from profile_settings.domain.errors import ProfileApiError
from profile_settings.domain.profile import BasicInfoUpdate, DietaryPreferencesUpdate
from profile_settings.domain.settings import SettingsState
from profile_settings.services.notifications import (
    Notifier,
    notify_error,
    notify_success,
)
from profile_settings.services.settings_store import SettingsStore

_logger = logging.getLogger(__name__)


@dataclass
class ProfileUpdateService:
    """Saves basic info and dietary preferences, adopting the server's profile."""

    client: ProfileApiClient
    store: SettingsStore
    notifier: Notifier

    async def save_basic_info(self, data: BasicInfoUpdate) -> None:
        """Save weight, age, gender and activity level."""
        await self._save(
            data.to_payload(),
            set_flag=lambda prev, value: replace(prev, is_saving_basic_info=value),
            success_message="Basic info saved",
            fallback_message="Failed to save basic info",
        )

    async def save_dietary_preferences(self, data: DietaryPreferencesUpdate) -> None:
        """Save diet type, target goal and target value."""
        await self._save(
            data.to_payload(),
            set_flag=lambda prev, value: replace(
                prev, is_saving_dietary_preferences=value
            ),
            success_message="Dietary preferences saved",
            fallback_message="Failed to save dietary preferences",
        )

    async def _save(
        self,
        payload: dict[str, object],
        *,
        set_flag: Callable[[SettingsState, bool], SettingsState],
        success_message: str,
        fallback_message: str,
    ) -> None:
        self.store.update(lambda prev: set_flag(prev, True))
        try:
            profile = await self.client.update_profile(payload)
        except ProfileApiError as exc:
            self.store.update(lambda prev: set_flag(prev, False))
            message = exc.message or fallback_message
            _logger.warning(
                "Profile update failed (status=%s): %s", exc.status_code, message
            )
            notify_error(self.notifier, message)
            raise

        self.store.update(lambda prev: replace(set_flag(prev, False), profile=profile))
        notify_success(self.notifier, success_message)
