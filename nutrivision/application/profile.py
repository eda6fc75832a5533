from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..domain.profile.norm import calculate_calorie_norm
from ..firestore.application.ports import ProfileRepository
from ..models.profile import CalorieNormRequest, CalorieNormResponse, Profile, ProfileUpdate

NormCalculator = Callable[[str, float, float, int], int]


@dataclass
class GetProfileUseCase:
    """Return the stored profile or a default one for new users."""

    profiles: ProfileRepository
    default_daily_goal: int = 2000

    async def __call__(self, user_id: str, email: Optional[str] = None) -> Profile:
        profile = await self.profiles.get_profile(user_id)
        if profile is None:
            return Profile(name=email, email=email, daily_limit=self.default_daily_goal)
        return profile


@dataclass
class UpdateProfileUseCase:
    """Apply a partial profile update.

    Setting the daily limit without an explicit calorie norm also sets the
    norm, so both stay in agreement.
    """

    profiles: ProfileRepository

    async def __call__(
        self, user_id: str, update: ProfileUpdate, email: Optional[str] = None
    ) -> Profile:
        changes: Dict[str, Any] = update.model_dump(exclude_unset=True, exclude_none=True)
        if "daily_limit" in changes and "calorie_norm" not in changes:
            changes["calorie_norm"] = changes["daily_limit"]
        return await self.profiles.save_profile(user_id, changes, email=email)


@dataclass
class CalculateCalorieNormUseCase:
    """Estimate the daily calorie need from body parameters."""

    calculator: NormCalculator = calculate_calorie_norm

    def __call__(self, request: CalorieNormRequest) -> CalorieNormResponse:
        norm = self.calculator(request.gender, request.weight, request.height, request.age)
        return CalorieNormResponse(calorie_norm=norm)


__all__ = ["CalculateCalorieNormUseCase", "GetProfileUseCase", "UpdateProfileUseCase"]
