"""Display formatting for durations, weights and heights."""

from __future__ import annotations

from gymbaazi.workouts.base import WeightUnit

CM_PER_INCH = 2.54


def format_duration(seconds: int) -> str:
    """``3661`` → ``"1:01:01"``; under an hour ``125`` → ``"02:05"``."""
    hours, rem = divmod(max(int(seconds), 0), 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def format_duration_human(seconds: int) -> str:
    """``3661`` → ``"1h 1m"``; ``125`` → ``"2 minutes"``."""
    hours, rem = divmod(max(int(seconds), 0), 3600)
    minutes = rem // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes} minutes"


def format_weight(value: float, unit: WeightUnit | None = None) -> str:
    """Whole numbers print without decimals, others with one: 70 → "70", 70.5 → "70.5".

    With ``unit`` the value (kilograms) is converted and the symbol appended.
    """
    if unit is not None:
        value = unit.from_kg(value)
    text = f"{value:.0f}" if float(value).is_integer() else f"{value:.1f}"
    return f"{text} {unit.symbol}" if unit is not None else text


def cm_to_inches(cm: float) -> float:
    return cm / CM_PER_INCH


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def cm_to_feet_inches(cm: float) -> str:
    """``175.26`` → ``5' 9"``."""
    total = int(cm / CM_PER_INCH)
    return f"{total // 12}' {total % 12}\""
