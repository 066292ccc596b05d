"""Domain models for the user profile and its preference collections."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


class DietType(StrEnum):
    HIGH_PROTEIN = "high_protein"
    KETO = "keto"
    VEGETARIAN = "vegetarian"
    WEIGHT_GAIN = "weight_gain"
    WEIGHT_LOSS = "weight_loss"
    BALANCED = "balanced"


class TargetGoal(StrEnum):
    LOSE_WEIGHT = "lose_weight"
    GAIN_WEIGHT = "gain_weight"
    MAINTAIN_WEIGHT = "maintain_weight"


@dataclass(frozen=True)
class Profile:
    """Server representation of a user's profile."""

    user_id: str
    weight: float | None
    age: int | None
    gender: Gender | str | None
    activity_level: ActivityLevel | str | None
    diet_type: DietType | str | None
    target_goal: TargetGoal | str | None
    target_value: float | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Allergen:
    """Catalog allergen."""

    id: str
    name: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserAllergen:
    """Membership of a catalog allergen in the user's profile."""

    id: str
    allergen_id: str | None = None
    name: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class DislikedIngredient:
    """Ingredient the user does not want in recipes."""

    id: str
    ingredient_name: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class BasicInfoUpdate:
    """Basic info form values; None means the field is left untouched."""

    weight: float | None = None
    age: int | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None

    def to_payload(self) -> dict[str, object]:
        return _drop_none(
            {
                "weight": self.weight,
                "age": self.age,
                "gender": self.gender,
                "activityLevel": self.activity_level,
            }
        )


@dataclass(frozen=True)
class DietaryPreferencesUpdate:
    """Dietary preferences form values; None means the field is left untouched."""

    diet_type: DietType | None = None
    target_goal: TargetGoal | None = None
    target_value: float | None = None

    def to_payload(self) -> dict[str, object]:
        return _drop_none(
            {
                "dietType": self.diet_type,
                "targetGoal": self.target_goal,
                "targetValue": self.target_value,
            }
        )


def _drop_none(values: dict[str, object]) -> dict[str, object]:
    payload: dict[str, object] = {}
    for key, value in values.items():
        if value is None:
            continue
        payload[key] = str(value) if isinstance(value, StrEnum) else value
    return payload
