"""Operator preferences persisted in ``healthcare_settings.properties``.

The file is a flat list of ``key=value`` lines.  A missing file means every
preference takes its default; an unreadable value resets only that key.
"""

import datetime as dt
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from frontdesk.domain.exceptions import PreferencesError
from frontdesk.records.adapters.datetime_helpers import format_date, format_time, format_timestamp
from frontdesk.records.adapters.parsing_helpers import format_properties, parse_properties
from frontdesk.theme import Theme

DateFormat = Literal["MM/dd/yyyy", "dd/MM/yyyy", "yyyy-MM-dd"]
TimeFormat = Literal["12-hour", "24-hour"]


class Language(str, Enum):
    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"
    PIG_LATIN = "Pig Latin"


class Preferences(BaseModel):
    """Display and accessibility choices for the front-desk operator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    language: Language = Language.ENGLISH
    enable_accessibility_features: bool = Field(default=True, alias="enableAccessibilityFeatures")
    large_text_mode: bool = Field(default=False, alias="largeTextMode")
    dyslexia_font: bool = Field(default=False, alias="dyslexiaFont")
    colorblind_mode: bool = Field(default=False, alias="colorblindMode")
    date_time_visible: bool = Field(default=False, alias="dateTimeVisible")
    date_format: DateFormat = Field(default="MM/dd/yyyy", alias="dateFormat")
    time_format: TimeFormat = Field(default="12-hour", alias="timeFormat")
    theme: Theme = Theme.LIGHT

    def format_date(self, date: dt.date) -> str:
        return format_date(date, self.date_format)

    def format_time(self, time: dt.time) -> str:
        return format_time(time, self.time_format)

    def format_timestamp(self, moment: dt.datetime) -> str:
        return format_timestamp(moment, self.date_format, self.time_format)

    def to_properties(self) -> dict[str, str]:
        values: dict[str, Any] = self.model_dump(by_alias=True, mode="json")
        return {
            key: str(value).lower() if isinstance(value, bool) else str(value)
            for key, value in values.items()
        }

    @classmethod
    def from_properties(cls, raw: dict[str, str]) -> "Preferences":
        """Build preferences from raw strings, keeping defaults for bad values."""
        accepted: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            key = field.alias or name
            if key not in raw:
                continue
            try:
                cls.model_validate({**accepted, key: raw[key]})
            except ValidationError:
                logger.warning("Ignoring invalid value '{}' for setting '{}'", raw[key], key)
                continue
            accepted[key] = raw[key]
        return cls.model_validate(accepted)


class PreferencesFile:
    """Loads and saves :class:`Preferences` at a fixed path."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Preferences:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No settings file at {}; using defaults", self._path)
            return Preferences()
        except OSError as exc:
            logger.warning("Could not load settings, using defaults: {}", exc)
            return Preferences()

        prefs = Preferences.from_properties(parse_properties(text))
        logger.debug("Loaded settings from {}", self._path)
        return prefs

    def save(self, prefs: Preferences) -> None:
        header = dt.datetime.now().strftime("%a %b %d %H:%M:%S %Y")
        try:
            self._path.write_text(format_properties(prefs.to_properties(), header), encoding="utf-8")
        except OSError as exc:
            logger.error("Could not save settings: {}", exc)
            raise PreferencesError(f"Could not save settings to {self._path}: {exc}") from exc
        logger.info("Saved settings to {}", self._path)

    def reset_to_defaults(self) -> Preferences:
        prefs = Preferences()
        self.save(prefs)
        return prefs
