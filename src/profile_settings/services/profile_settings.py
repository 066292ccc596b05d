"""Entry point combining every profile settings operation."""

from collections.abc import Callable
from dataclasses import dataclass

from profile_settings.domain.profile import BasicInfoUpdate, DietaryPreferencesUpdate
from profile_settings.domain.settings import SettingsState
from profile_settings.services.allergens import AllergenSelectionService
from profile_settings.services.bootstrap import SettingsLoader
from profile_settings.services.disliked_ingredients import DislikedIngredientService
from profile_settings.services.profile_updates import ProfileUpdateService
from profile_settings.services.settings_store import Listener, SettingsStore


@dataclass
class ProfileSettingsService:
    """Application service exposing settings state and its operations."""

    store: SettingsStore
    loader: SettingsLoader
    profile_updates: ProfileUpdateService
    allergens: AllergenSelectionService
    disliked_ingredients: DislikedIngredientService

    @property
    def state(self) -> SettingsState:
        """Return the current settings snapshot."""
        return self.store.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a snapshot listener; returns an unsubscribe callable."""
        return self.store.subscribe(listener)

    def has_pending_ingredient(self) -> bool:
        """Return True while an added ingredient is still unconfirmed."""
        return self.disliked_ingredients.has_pending_ingredient()

    async def load_all(self) -> None:
        await self.loader.load_all()

    async def refetch_all(self) -> None:
        await self.loader.refetch_all()

    async def save_basic_info(self, data: BasicInfoUpdate) -> None:
        await self.profile_updates.save_basic_info(data)

    async def save_dietary_preferences(self, data: DietaryPreferencesUpdate) -> None:
        await self.profile_updates.save_dietary_preferences(data)

    async def save_allergens(self, selected_ids: set[str]) -> None:
        await self.allergens.save_allergens(selected_ids)

    async def add_disliked_ingredient(self, name: str) -> None:
        await self.disliked_ingredients.add_disliked_ingredient(name)

    async def remove_disliked_ingredient(self, ingredient_id: str) -> None:
        await self.disliked_ingredients.remove_disliked_ingredient(ingredient_id)

    def close(self) -> None:
        """Stop broadcasting snapshots to listeners."""
        self.store.clear_listeners()
