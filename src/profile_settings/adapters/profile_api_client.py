"""HTTP client for the profile settings API."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

import httpx

from profile_settings.domain.errors import FailureKind, ProfileApiError, kind_for_status
from profile_settings.domain.profile import (
    ActivityLevel,
    Allergen,
    DietType,
    DislikedIngredient,
    Gender,
    Profile,
    TargetGoal,
    UserAllergen,
)

_INGREDIENT_CONFLICT_MESSAGE = "This ingredient is already on the list"

T = TypeVar("T")
E = TypeVar("E", bound=StrEnum)

if TYPE_CHECKING:
    from collections.abc import Callable


class ProfileApiClient(Protocol):
    """Interface for the remote profile settings resources."""

    async def get_profile(self) -> Profile:
        """Fetch the user's profile."""

    async def update_profile(self, payload: dict[str, object]) -> Profile:
        """Apply a partial profile update and return the stored profile."""

    async def list_allergens(self) -> list[Allergen]:
        """Fetch the allergen catalog."""

    async def list_user_allergens(self) -> list[UserAllergen]:
        """Fetch the user's allergen selections."""

    async def add_user_allergen(self, allergen_id: str) -> UserAllergen:
        """Add an allergen to the user's profile."""

    async def remove_user_allergen(self, user_allergen_id: str) -> None:
        """Remove an allergen from the user's profile."""

    async def list_disliked_ingredients(self) -> list[DislikedIngredient]:
        """Fetch the user's disliked ingredients."""

    async def add_disliked_ingredient(self, ingredient_name: str) -> DislikedIngredient:
        """Add a disliked ingredient and return the stored record."""

    async def remove_disliked_ingredient(self, ingredient_id: str) -> None:
        """Delete a disliked ingredient."""


@dataclass
class HttpxProfileApiClient(ProfileApiClient):
    """Profile API client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(
        cls,
        base_url: str,
        api_token: str | None = None,
        timeout_seconds: float = 10,
    ) -> "HttpxProfileApiClient":
        """Create a profile API client with a managed httpx session."""
        headers = {"Authorization": f"Bearer {api_token}"} if api_token else None
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(headers=headers),
            timeout_seconds=timeout_seconds,
        )

    async def get_profile(self) -> Profile:
        """Fetch the user's profile."""
        data = await self._request(
            "GET", "/profile", fallback="Failed to load profile"
        )
        return _parse(_parse_profile, data)

    async def update_profile(self, payload: dict[str, object]) -> Profile:
        """Send a partial profile update."""
        data = await self._request(
            "PUT", "/profile", json=payload, fallback="Failed to update profile"
        )
        return _parse(_parse_profile, data)

    async def list_allergens(self) -> list[Allergen]:
        """Fetch the allergen catalog."""
        data = await self._request(
            "GET", "/allergens", fallback="Failed to load the allergen list"
        )
        return _parse(
            lambda body: [_parse_allergen(row) for row in body["allergens"]], data
        )

    async def list_user_allergens(self) -> list[UserAllergen]:
        """Fetch the user's allergen selections."""
        data = await self._request(
            "GET", "/profile/allergens", fallback="Failed to load user allergens"
        )
        return _parse(
            lambda body: [_parse_user_allergen(row) for row in body["allergens"]],
            data,
        )

    async def add_user_allergen(self, allergen_id: str) -> UserAllergen:
        """Add an allergen to the user's profile."""
        data = await self._request(
            "POST",
            "/profile/allergens",
            json={"allergenId": allergen_id},
            fallback="Failed to add allergen",
        )
        return _parse(lambda body: _parse_user_allergen(body["allergen"]), data)

    async def remove_user_allergen(self, user_allergen_id: str) -> None:
        """Remove an allergen from the user's profile."""
        await self._request(
            "DELETE",
            f"/profile/allergens/{user_allergen_id}",
            fallback="Failed to remove allergen",
            expect_body=False,
        )

    async def list_disliked_ingredients(self) -> list[DislikedIngredient]:
        """Fetch the user's disliked ingredients."""
        data = await self._request(
            "GET",
            "/profile/disliked-ingredients",
            fallback="Failed to load disliked ingredients",
        )
        return _parse(
            lambda body: [
                _parse_disliked_ingredient(row) for row in body["dislikedIngredients"]
            ],
            data,
        )

    async def add_disliked_ingredient(self, ingredient_name: str) -> DislikedIngredient:
        """Add a disliked ingredient."""
        data = await self._request(
            "POST",
            "/profile/disliked-ingredients",
            json={"ingredientName": ingredient_name},
            fallback="Failed to add ingredient",
            conflict_message=_INGREDIENT_CONFLICT_MESSAGE,
        )
        return _parse(
            lambda body: _parse_disliked_ingredient(body["dislikedIngredient"]), data
        )

    async def remove_disliked_ingredient(self, ingredient_id: str) -> None:
        """Delete a disliked ingredient."""
        await self._request(
            "DELETE",
            f"/profile/disliked-ingredients/{ingredient_id}",
            fallback="Failed to remove ingredient",
            expect_body=False,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(  # noqa: PLR0913
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        json: dict[str, object] | None = None,
        conflict_message: str | None = None,
        expect_body: bool = True,
    ) -> object:
        """Perform one API call and return its decoded JSON body."""
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                json=json,
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            raise ProfileApiError(fallback, kind=FailureKind.TRANSPORT) from exc

        if response.is_error:
            kind = kind_for_status(response.status_code)
            if kind is FailureKind.CONFLICT and conflict_message:
                message = conflict_message
            else:
                message = _error_message(response) or fallback
            raise ProfileApiError(
                message, kind=kind, status_code=response.status_code
            )

        if not expect_body:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ProfileApiError(
                fallback,
                kind=FailureKind.MALFORMED_RESPONSE,
                status_code=response.status_code,
            ) from exc


def _error_message(response: httpx.Response) -> str | None:
    """Extract the `message` field from an error payload, if present."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


def _parse(parser: "Callable[[Any], T]", data: object) -> T:
    """Apply a payload parser, mapping shape errors to a malformed response."""
    try:
        return parser(data)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ProfileApiError(
            "Received an invalid response from the server",
            kind=FailureKind.MALFORMED_RESPONSE,
        ) from exc


def _parse_datetime(value: object) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _optional_float(value: object) -> float | None:
    return None if value is None else float(value)


def _enum_or_raw(enum_cls: type[E], value: object) -> E | str | None:
    """Map a wire value onto its enum, keeping unknown values as plain strings."""
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def _parse_profile(row: dict[str, object]) -> Profile:
    age = row.get("age")
    return Profile(
        user_id=str(row["userId"]),
        weight=_optional_float(row.get("weight")),
        age=None if age is None else int(age),
        gender=_enum_or_raw(Gender, row.get("gender")),
        activity_level=_enum_or_raw(ActivityLevel, row.get("activityLevel")),
        diet_type=_enum_or_raw(DietType, row.get("dietType")),
        target_goal=_enum_or_raw(TargetGoal, row.get("targetGoal")),
        target_value=_optional_float(row.get("targetValue")),
        created_at=_parse_datetime(row.get("createdAt")),
        updated_at=_parse_datetime(row.get("updatedAt")),
    )


def _parse_allergen(row: dict[str, object]) -> Allergen:
    return Allergen(
        id=str(row["id"]),
        name=str(row["name"]),
        created_at=_parse_datetime(row.get("createdAt")),
    )


def _parse_user_allergen(row: dict[str, object]) -> UserAllergen:
    allergen_id = row.get("allergenId")
    name = row.get("name")
    return UserAllergen(
        id=str(row["id"]),
        allergen_id=None if allergen_id is None else str(allergen_id),
        name=None if name is None else str(name),
        created_at=_parse_datetime(row.get("createdAt")),
    )


def _parse_disliked_ingredient(row: dict[str, object]) -> DislikedIngredient:
    return DislikedIngredient(
        id=str(row["id"]),
        ingredient_name=str(row["ingredientName"]),
        created_at=_parse_datetime(row.get("createdAt")),
    )
