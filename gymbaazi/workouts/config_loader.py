"""Load, validate, and hot-reload the GymBaazi workout policy configuration.

The config lives in ``workout_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_workout_config()`` to re-read from
disk after an edit without restarting.

Usage::

    from gymbaazi.workouts.config_loader import get_workout_config

    config = get_workout_config()
    config.rotation[0]                        # WorkoutType.LEGS (Monday)
    config.session.recovery_window_seconds    # 7200
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gymbaazi.workouts.base import ROTATION_TYPES, WEEKDAY_KEYS, WorkoutType

logger = logging.getLogger("gymbaazi.workouts.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "workout_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class SessionConfig:
    """Session lifecycle policy."""

    recovery_window_seconds: int = 7200
    tick_interval_seconds: float = 1.0
    default_target_reps: int = 10


@dataclass
class StreakConfig:
    """Streak walk settings."""

    max_lookback_days: int = 730


@dataclass
class CatalogConfig:
    """Exercise catalog client settings."""

    base_url: str = "https://www.exercisedb.dev/api/v1"
    exercise_ttl_seconds: int = 3600
    lists_ttl_seconds: int = 86400
    default_page_limit: int = 25
    max_requests_per_minute: int = 100
    rate_limit_window_seconds: int = 60
    timeout_seconds: float = 30.0


@dataclass
class ValidationConfig:
    """Bounds applied to user-entered profile and workout data."""

    name_min_length: int = 2
    name_max_length: int = 50
    age_min: int = 13
    age_max: int = 100
    height_min_inches: int = 48
    height_max_inches: int = 84
    weight_min_kg: float = 20.0
    weight_max_kg: float = 300.0
    workout_name_min_length: int = 2
    workout_name_max_length: int = 30
    sets_min: int = 1
    sets_max: int = 10
    reps_min: int = 1
    reps_max: int = 100
    exercise_weight_max_kg: float = 1000.0


@dataclass
class WorkoutConfig:
    """Complete, validated workout configuration.

    This is the single in-memory representation of workout_config.yaml.
    The schedule resolver, session controller, streak walk and catalog
    client all read from this object.

    Attributes:
        version:    Config schema version string.
        rotation:   Weekday (0=Monday .. 6=Sunday) → workout category.
        session:    Session lifecycle policy.
        streak:     Streak walk settings.
        catalog:    Exercise catalog client settings.
        validation: Input bounds for profile and workout forms.
    """

    version: str
    rotation: dict[int, WorkoutType]
    session: SessionConfig
    streak: StreakConfig
    catalog: CatalogConfig
    validation: ValidationConfig
    _raw: dict = field(default_factory=dict, repr=False)

    def workout_type_for_weekday(self, weekday: int) -> WorkoutType:
        """Return the rotation category for a weekday, REST when unlisted."""
        return self.rotation.get(weekday, WorkoutType.REST)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when workout_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    import yaml

    if not path.exists():
        raise FileNotFoundError(f"Workout config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _build_section(cls: type, raw: Any, section: str, errors: list[str]) -> Any:
    """Coerce a mapping into a typed section, using dataclass defaults for gaps."""
    instance = cls()
    if raw is None:
        return instance
    if not isinstance(raw, dict):
        errors.append(f"'{section}' must be a mapping")
        return instance

    for key, value in raw.items():
        if not hasattr(instance, key):
            errors.append(f"Unknown key '{key}' in section '{section}'")
            continue
        default = getattr(instance, key)
        try:
            coerced = type(default)(value)
        except (TypeError, ValueError):
            errors.append(f"{section}.{key} must be a {type(default).__name__}, got {value!r}")
            continue
        if isinstance(coerced, (int, float)) and not isinstance(coerced, bool) and coerced < 0:
            errors.append(f"{section}.{key} = {coerced} must not be negative")
            continue
        setattr(instance, key, coerced)
    return instance


def _validate_and_build(raw: dict) -> WorkoutConfig:
    """Validate the raw YAML dict and construct a WorkoutConfig.

    Every problem is collected so a single error lists all of them.

    Raises:
        ConfigValidationError: If required fields are missing or invalid.
    """
    errors: list[str] = []

    version = str(raw.get("version", "1.0"))

    # ── Rotation ──
    rotation_raw = raw.get("rotation")
    rotation: dict[int, WorkoutType] = {}
    if not rotation_raw:
        errors.append("'rotation' section is missing or empty")
    elif not isinstance(rotation_raw, dict):
        errors.append("'rotation' must be a mapping of weekday→category")
    else:
        for day_key, category in rotation_raw.items():
            key = str(day_key).strip().lower()[:3]
            if key not in WEEKDAY_KEYS:
                errors.append(f"rotation.{day_key} is not a weekday")
                continue
            try:
                workout_type = WorkoutType(str(category).upper())
            except ValueError:
                workout_type = None
            if workout_type not in ROTATION_TYPES:
                errors.append(
                    f"rotation.{day_key} must be one of "
                    f"{sorted(t.value for t in ROTATION_TYPES)}, got {category!r}"
                )
                continue
            rotation[WEEKDAY_KEYS.index(key)] = workout_type

    session = _build_section(SessionConfig, raw.get("session"), "session", errors)
    streak = _build_section(StreakConfig, raw.get("streak"), "streak", errors)
    catalog = _build_section(CatalogConfig, raw.get("catalog"), "catalog", errors)
    validation = _build_section(ValidationConfig, raw.get("validation"), "validation", errors)

    if session.recovery_window_seconds <= 0:
        errors.append("session.recovery_window_seconds must be positive")
    if session.tick_interval_seconds <= 0:
        errors.append("session.tick_interval_seconds must be positive")
    if streak.max_lookback_days < 1:
        errors.append("streak.max_lookback_days must be at least 1")
    if catalog.default_page_limit < 1:
        errors.append("catalog.default_page_limit must be at least 1")

    if rotation and all(t is WorkoutType.REST for t in rotation.values()):
        logger.warning("Rotation has no training days; every unbound weekday is REST")

    if errors:
        raise ConfigValidationError(
            f"workout_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return WorkoutConfig(
        version=version,
        rotation=rotation,
        session=session,
        streak=streak,
        catalog=catalog,
        validation=validation,
        _raw=raw,
    )


def load_workout_config(path: Path | None = None) -> WorkoutConfig:
    """Load and validate the workout config from disk.

    Args:
        path: Override path to YAML. Uses the bundled workout_config.yaml by default.

    Returns:
        Validated WorkoutConfig instance.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded workout config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: WorkoutConfig | None = None
_config_lock = threading.Lock()


def get_workout_config() -> WorkoutConfig:
    """Return the global WorkoutConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_workout_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_workout_config()
    return _config


def reload_workout_config(path: Path | None = None) -> WorkoutConfig:
    """Reload the workout config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_workout_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded workout config: %s → %s", old_version, new_config.version)
    return new_config
