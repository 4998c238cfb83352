from app.errors import InvalidConfiguration
from app.settings import Difficulty, SettingKind, SettingsChange, ThemeName


def validate_duration(seconds) -> int:
    try:
        value = int(seconds)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"Duration must be a whole number of seconds, got {seconds!r}")
    if value <= 0:
        raise InvalidConfiguration(f"Duration must be positive, got {value}")
    return value


def parse_setting_change(kind: str, raw) -> SettingsChange:
    """Turn a raw UI selection (``"time"``, ``"60"``) into a typed SettingsChange."""
    try:
        setting = SettingKind(kind)
    except ValueError:
        raise InvalidConfiguration(f"Unknown setting {kind!r}")

    if setting is SettingKind.TIME:
        return SettingsChange(setting, validate_duration(raw))
    value = str(getattr(raw, "value", raw)).strip().lower()
    try:
        if setting is SettingKind.DIFFICULTY:
            return SettingsChange(setting, Difficulty(value))
        return SettingsChange(setting, ThemeName(value))
    except ValueError:
        raise InvalidConfiguration(f"Invalid {setting.value} value {raw!r}")
