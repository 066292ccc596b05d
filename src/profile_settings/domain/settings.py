"""Aggregate state of the profile settings screen."""

from dataclasses import dataclass, field

from profile_settings.domain.profile import (
    Allergen,
    DislikedIngredient,
    Profile,
    UserAllergen,
)


@dataclass(frozen=True)
class SettingsState:
    """Immutable snapshot of profile settings data and operation flags."""

    profile: Profile | None = None
    all_allergens: tuple[Allergen, ...] = field(default_factory=tuple)
    user_allergens: tuple[UserAllergen, ...] = field(default_factory=tuple)
    disliked_ingredients: tuple[DislikedIngredient, ...] = field(
        default_factory=tuple
    )

    is_loading_profile: bool = True
    is_loading_allergens: bool = True
    is_loading_disliked_ingredients: bool = True

    is_saving_basic_info: bool = False
    is_saving_dietary_preferences: bool = False
    is_saving_allergens: bool = False
    is_adding_ingredient: bool = False
    removing_ingredient_id: str | None = None

    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return (
            self.is_loading_profile
            or self.is_loading_allergens
            or self.is_loading_disliked_ingredients
        )

    def selected_allergen_ids(self) -> set[str]:
        """Return the join-row ids of the user's current allergen selections."""
        return {allergen.id for allergen in self.user_allergens}

    def has_pending_ingredient(self, temp_id_prefix: str) -> bool:
        """Return True when an unconfirmed placeholder ingredient is present."""
        return any(
            item.id.startswith(temp_id_prefix) for item in self.disliked_ingredients
        )
