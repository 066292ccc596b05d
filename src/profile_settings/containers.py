"""Dependency container wiring for the settings engine."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from profile_settings.adapters.profile_api_client import (
    HttpxProfileApiClient,
    ProfileApiClient,
)
from profile_settings.config import Settings
from profile_settings.services.allergens import AllergenSelectionService
from profile_settings.services.bootstrap import SettingsLoader
from profile_settings.services.disliked_ingredients import DislikedIngredientService
from profile_settings.services.notifications import LoggingNotifier, Notifier
from profile_settings.services.profile_settings import ProfileSettingsService
from profile_settings.services.profile_updates import ProfileUpdateService
from profile_settings.services.settings_store import SettingsStore


@dataclass
class AppContainer:
    """Holds the engine's dependencies."""

    settings: Settings
    api_client: ProfileApiClient
    notifier: Notifier
    profile_settings_service: ProfileSettingsService
    close_resources: Callable[[], Awaitable[None]]


def build_service(
    client: ProfileApiClient,
    notifier: Notifier,
    temp_id_prefix: str = "temp-",
) -> ProfileSettingsService:
    """Wire a settings service around one fresh state container."""
    store = SettingsStore()
    return ProfileSettingsService(
        store=store,
        loader=SettingsLoader(client=client, store=store, notifier=notifier),
        profile_updates=ProfileUpdateService(
            client=client, store=store, notifier=notifier
        ),
        allergens=AllergenSelectionService(
            client=client, store=store, notifier=notifier
        ),
        disliked_ingredients=DislikedIngredientService(
            client=client,
            store=store,
            notifier=notifier,
            temp_id_prefix=temp_id_prefix,
        ),
    )


def build_container(
    settings: Settings | None = None, notifier: Notifier | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_notifier = notifier or LoggingNotifier()
    api_client = HttpxProfileApiClient.create(
        base_url=resolved_settings.api_base_url,
        api_token=resolved_settings.api_token,
        timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    service = build_service(
        api_client,
        resolved_notifier,
        temp_id_prefix=resolved_settings.temp_id_prefix,
    )

    async def close_resources() -> None:
        service.close()
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        api_client=api_client,
        notifier=resolved_notifier,
        profile_settings_service=service,
        close_resources=close_resources,
    )
