"""Field validators for profile and workout forms.

Each ``validate_*`` function returns a ``ValidationError`` describing the
first problem with the value, or None when it is acceptable.  Bounds come
from the ``validation`` section of workout_config.yaml.  ``ValidationResult``
collects errors per field so a form can show all of them at once.
"""

from __future__ import annotations

from gymbaazi.workouts.config_loader import ValidationConfig, get_workout_config
from gymbaazi.workouts.errors import WorkoutError
from gymbaazi.workouts.formatting import CM_PER_INCH


class ValidationError(WorkoutError):
    """A user-facing validation failure for one form field."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, message={self.message!r})"


def _bounds(config: ValidationConfig | None) -> ValidationConfig:
    return config or get_workout_config().validation


def _validate_text(label: str, value: str, min_len: int, max_len: int) -> ValidationError | None:
    trimmed = value.strip()
    if not trimmed:
        return ValidationError(label, f"{label} cannot be empty")
    if len(trimmed) < min_len:
        return ValidationError(label, f"{label} must be at least {min_len} characters")
    if len(trimmed) > max_len:
        return ValidationError(label, f"{label} cannot exceed {max_len} characters")
    return None


def validate_name(name: str, config: ValidationConfig | None = None) -> ValidationError | None:
    b = _bounds(config)
    return _validate_text("Name", name, b.name_min_length, b.name_max_length)


def validate_age(age: int, config: ValidationConfig | None = None) -> ValidationError | None:
    b = _bounds(config)
    if age < b.age_min or age > b.age_max:
        return ValidationError("Age", f"Age must be between {b.age_min} and {b.age_max} years")
    return None


def _height_message(b: ValidationConfig) -> str:
    lo_ft, lo_in = divmod(b.height_min_inches, 12)
    hi_ft, hi_in = divmod(b.height_max_inches, 12)
    return f"Height must be between {lo_ft}'{lo_in}\" and {hi_ft}'{hi_in}\""


def validate_height_inches(inches: float, config: ValidationConfig | None = None) -> ValidationError | None:
    b = _bounds(config)
    if inches < b.height_min_inches or inches > b.height_max_inches:
        return ValidationError("Height", _height_message(b))
    return None


def validate_height_cm(cm: float, config: ValidationConfig | None = None) -> ValidationError | None:
    b = _bounds(config)
    if cm < b.height_min_inches * CM_PER_INCH or cm > b.height_max_inches * CM_PER_INCH:
        return ValidationError("Height", _height_message(b))
    return None


def validate_weight(weight_kg: float, config: ValidationConfig | None = None) -> ValidationError | None:
    """Body weight in kilograms."""
    b = _bounds(config)
    if weight_kg < b.weight_min_kg or weight_kg > b.weight_max_kg:
        return ValidationError(
            "Weight",
            f"Weight must be between {int(b.weight_min_kg)} and {int(b.weight_max_kg)} kg",
        )
    return None


def validate_workout_day_name(name: str, config: ValidationConfig | None = None) -> ValidationError | None:
    b = _bounds(config)
    return _validate_text("Workout name", name, b.workout_name_min_length, b.workout_name_max_length)


def validate_sets(sets: int, config: ValidationConfig | None = None) -> ValidationError | None:
    b = _bounds(config)
    if sets < b.sets_min or sets > b.sets_max:
        return ValidationError("Sets", f"Sets must be between {b.sets_min} and {b.sets_max}")
    return None


def validate_reps(reps: int, config: ValidationConfig | None = None) -> ValidationError | None:
    b = _bounds(config)
    if reps < b.reps_min or reps > b.reps_max:
        return ValidationError("Reps", f"Reps must be between {b.reps_min} and {b.reps_max}")
    return None


def validate_exercise_weight(weight: float, config: ValidationConfig | None = None) -> ValidationError | None:
    """Load on a logged set, in kilograms."""
    b = _bounds(config)
    if weight < 0 or weight > b.exercise_weight_max_kg:
        return ValidationError(
            "Weight", f"Weight must be between 0 and {int(b.exercise_weight_max_kg)} kg"
        )
    return None


class ValidationResult:
    """Per-field error collection.

    Adding None for a field clears any earlier error on it, so a form can
    re-validate one field at a time.
    """

    def __init__(self) -> None:
        self.errors: dict[str, ValidationError] = {}

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> ValidationError | None:
        return next(iter(self.errors.values()), None)

    def add(self, error: ValidationError | None, field: str) -> ValidationResult:
        if error is None:
            self.errors.pop(field, None)
        else:
            self.errors[field] = error
        return self

    def error_for(self, field: str) -> ValidationError | None:
        return self.errors.get(field)

    def messages(self) -> dict[str, str]:
        return {name: err.message for name, err in self.errors.items()}

    def raise_if_invalid(self) -> None:
        """Raise the first collected error, if any."""
        if self.first_error is not None:
            raise self.first_error


def validate_profile(
    name: str,
    age: int,
    height_cm: float,
    weight_kg: float,
    config: ValidationConfig | None = None,
) -> ValidationResult:
    result = ValidationResult()
    result.add(validate_name(name, config), "name")
    result.add(validate_age(age, config), "age")
    result.add(validate_height_cm(height_cm, config), "height_cm")
    result.add(validate_weight(weight_kg, config), "weight_kg")
    return result
