from __future__ import annotations

from fastapi import APIRouter, Depends

from ..application.profile import (
    CalculateCalorieNormUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from ..models.profile import CalorieNormRequest, CalorieNormResponse, Profile, ProfileUpdate
from ..platform.wiring import (
    get_calorie_norm_use_case,
    get_profile_use_case,
    get_update_profile_use_case,
)
from ..security import AuthenticatedUser, get_current_user

router: APIRouter = APIRouter()


@router.get("/profile", response_model=Profile)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetProfileUseCase = Depends(get_profile_use_case),
) -> Profile:
    return await use_case(user.uid, user.email)


@router.put("/profile", response_model=Profile)
async def update_profile(
    update: ProfileUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
) -> Profile:
    return await use_case(user.uid, update, user.email)


@router.post("/profile/calorie-norm", response_model=CalorieNormResponse)
async def calculate_calorie_norm(
    request: CalorieNormRequest,
    use_case: CalculateCalorieNormUseCase = Depends(get_calorie_norm_use_case),
) -> CalorieNormResponse:
    return use_case(request)
