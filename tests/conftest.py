"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

import pytest

from profile_settings.adapters.profile_api_client import ProfileApiClient
from profile_settings.config import Settings
from profile_settings.containers import build_service
from profile_settings.domain.errors import (
    FailureKind,
    ProfileApiError,
    kind_for_status,
)
from profile_settings.domain.profile import (
    Allergen,
    DislikedIngredient,
    Profile,
    UserAllergen,
)
from profile_settings.services.notifications import (
    Notification,
    NotificationLevel,
    Notifier,
)
from profile_settings.services.profile_settings import ProfileSettingsService

CREATED_AT = datetime(2025, 1, 1, tzinfo=UTC)

_PROFILE_FIELDS = {
    "weight": "weight",
    "age": "age",
    "gender": "gender",
    "activityLevel": "activity_level",
    "dietType": "diet_type",
    "targetGoal": "target_goal",
    "targetValue": "target_value",
}


def make_profile(**overrides: object) -> Profile:
    values: dict[str, object] = {
        "user_id": "user-1",
        "weight": 75.0,
        "age": 30,
        "gender": "male",
        "activity_level": "moderately_active",
        "diet_type": "balanced",
        "target_goal": "maintain_weight",
        "target_value": None,
        "created_at": CREATED_AT,
        "updated_at": CREATED_AT,
    }
    values.update(overrides)
    return Profile(**values)  # type: ignore[arg-type]


def make_allergens() -> list[Allergen]:
    return [
        Allergen(id="allergen-1", name="Gluten", created_at=CREATED_AT),
        Allergen(id="allergen-2", name="Dairy", created_at=CREATED_AT),
        Allergen(id="allergen-3", name="Nuts", created_at=CREATED_AT),
    ]


def make_user_allergens() -> list[UserAllergen]:
    return [
        UserAllergen(
            id="user-allergen-1", allergen_id="allergen-1", created_at=CREATED_AT
        )
    ]


def make_disliked_ingredients() -> list[DislikedIngredient]:
    return [
        DislikedIngredient(
            id="ingredient-1", ingredient_name="Cebula", created_at=CREATED_AT
        ),
        DislikedIngredient(
            id="ingredient-2", ingredient_name="Papryka", created_at=CREATED_AT
        ),
    ]


def api_error(status_code: int, message: str = "Server error") -> ProfileApiError:
    return ProfileApiError(
        message, kind=kind_for_status(status_code), status_code=status_code
    )


def transport_error(message: str = "Connection refused") -> ProfileApiError:
    return ProfileApiError(message, kind=FailureKind.TRANSPORT)


@dataclass
class FakeProfileApiClient(ProfileApiClient):
    """In-memory profile API that records calls and can fail or block."""

    profile: Profile = field(default_factory=make_profile)
    allergens: list[Allergen] = field(default_factory=make_allergens)
    user_allergens: list[UserAllergen] = field(default_factory=make_user_allergens)
    disliked_ingredients: list[DislikedIngredient] = field(
        default_factory=make_disliked_ingredients
    )
    failures: dict[str, ProfileApiError] = field(default_factory=dict)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    update_extras: dict[str, object] = field(default_factory=dict)
    calls: list[tuple[str, object]] = field(default_factory=list)
    _next_id: int = 100

    async def _call(self, name: str, argument: object = None) -> None:
        self.calls.append((name, argument))
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        failure = self.failures.get(name)
        if failure is not None:
            raise failure

    def calls_to(self, name: str) -> list[object]:
        return [argument for called, argument in self.calls if called == name]

    async def get_profile(self) -> Profile:
        await self._call("get_profile")
        return self.profile

    async def update_profile(self, payload: dict[str, object]) -> Profile:
        await self._call("update_profile", payload)
        changes = {_PROFILE_FIELDS[key]: value for key, value in payload.items()}
        self.profile = replace(self.profile, **changes, **self.update_extras)
        return self.profile

    async def list_allergens(self) -> list[Allergen]:
        await self._call("list_allergens")
        return list(self.allergens)

    async def list_user_allergens(self) -> list[UserAllergen]:
        await self._call("list_user_allergens")
        return list(self.user_allergens)

    async def add_user_allergen(self, allergen_id: str) -> UserAllergen:
        await self._call("add_user_allergen", allergen_id)
        created = UserAllergen(
            id=f"user-{allergen_id}", allergen_id=allergen_id, created_at=CREATED_AT
        )
        self.user_allergens.append(created)
        return created

    async def remove_user_allergen(self, user_allergen_id: str) -> None:
        await self._call("remove_user_allergen", user_allergen_id)
        self.user_allergens = [
            item for item in self.user_allergens if item.id != user_allergen_id
        ]

    async def list_disliked_ingredients(self) -> list[DislikedIngredient]:
        await self._call("list_disliked_ingredients")
        return list(self.disliked_ingredients)

    async def add_disliked_ingredient(self, ingredient_name: str) -> DislikedIngredient:
        await self._call("add_disliked_ingredient", ingredient_name)
        self._next_id += 1
        created = DislikedIngredient(
            id=f"ingredient-{self._next_id}",
            ingredient_name=ingredient_name,
            created_at=CREATED_AT,
        )
        self.disliked_ingredients.append(created)
        return created

    async def remove_disliked_ingredient(self, ingredient_id: str) -> None:
        await self._call("remove_disliked_ingredient", ingredient_id)
        self.disliked_ingredients = [
            item for item in self.disliked_ingredients if item.id != ingredient_id
        ]


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that keeps every notification."""

    notifications: list[Notification] = field(default_factory=list)

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def successes(self) -> list[str]:
        return [
            item.message
            for item in self.notifications
            if item.level is NotificationLevel.SUCCESS
        ]

    @property
    def errors(self) -> list[str]:
        return [
            item.message
            for item in self.notifications
            if item.level is NotificationLevel.ERROR
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="https://api.test/api")


@pytest.fixture
def api_client() -> FakeProfileApiClient:
    return FakeProfileApiClient()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(
    api_client: FakeProfileApiClient, notifier: RecordingNotifier
) -> ProfileSettingsService:
    return build_service(api_client, notifier)


@pytest.fixture
def loaded_service(
    service: ProfileSettingsService,
    api_client: FakeProfileApiClient,
    notifier: RecordingNotifier,
) -> ProfileSettingsService:
    asyncio.run(service.load_all())
    api_client.calls.clear()
    notifier.notifications.clear()
    return service


async def settle() -> None:
    """Let scheduled tasks run until they block."""
    for _ in range(5):
        await asyncio.sleep(0)
