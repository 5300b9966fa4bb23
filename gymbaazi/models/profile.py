"""User profile and app settings schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from gymbaazi.models.base import GymBaaziBase
from gymbaazi.workouts.base import WeightUnit


# ---------- Profile ----------

class ProfileBase(GymBaaziBase):
    name: str
    age: int
    height_cm: float
    weight_kg: float


class ProfileCreate(ProfileBase):
    pass


class ProfileUpdate(GymBaaziBase):
    name: str | None = None
    age: int | None = None
    height_cm: float | None = None
    weight_kg: float | None = None


class ProfileRead(ProfileBase):
    id: uuid.UUID
    created_at: datetime


class OnboardingStatus(GymBaaziBase):
    is_onboarded: bool
    profile: ProfileRead | None = None


# ---------- Settings ----------

class UserSettingsSchema(GymBaaziBase):
    notifications_enabled: bool = True
    rest_timer_sound: bool = True
    haptic_feedback: bool = True
    dark_mode_override: bool | None = None
    weight_unit: WeightUnit = WeightUnit.KG
