"""Onboarding, user profile and app settings."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from gymbaazi.dependencies import Repository
from gymbaazi.models.profile import (
    OnboardingStatus,
    ProfileCreate,
    ProfileRead,
    ProfileUpdate,
    UserSettingsSchema,
)
from gymbaazi.workouts.base import UserProfile, UserSettings
from gymbaazi.workouts.validation import validate_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=OnboardingStatus)
def get_profile(repository: Repository) -> Any:
    profile = repository.get_profile()
    return OnboardingStatus(
        is_onboarded=repository.is_onboarded(),
        profile=ProfileRead.model_validate(profile) if profile else None,
    )


@router.post("/onboarding", response_model=ProfileRead, status_code=201)
def complete_onboarding(body: ProfileCreate, repository: Repository) -> Any:
    validate_profile(body.name, body.age, body.height_cm, body.weight_kg).raise_if_invalid()
    profile = UserProfile(
        name=body.name.strip(),
        age=body.age,
        height_cm=body.height_cm,
        weight_kg=body.weight_kg,
    )
    repository.complete_onboarding(profile)
    return ProfileRead.model_validate(profile)


@router.put("", response_model=ProfileRead)
def update_profile(body: ProfileUpdate, repository: Repository) -> Any:
    current = repository.get_profile()
    if current is None:
        raise HTTPException(status_code=404, detail="Profile not found")

    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    merged = {
        "name": current.name,
        "age": current.age,
        "height_cm": current.height_cm,
        "weight_kg": current.weight_kg,
        **updates,
    }
    validate_profile(**merged).raise_if_invalid()
    return ProfileRead.model_validate(repository.update_profile(**updates))


@router.get("/settings", response_model=UserSettingsSchema)
def get_settings(repository: Repository) -> Any:
    return UserSettingsSchema.model_validate(repository.get_settings())


@router.put("/settings", response_model=UserSettingsSchema)
def update_settings(body: UserSettingsSchema, repository: Repository) -> Any:
    settings = UserSettings(**body.model_dump())
    repository.save_settings(settings)
    return UserSettingsSchema.model_validate(settings)
