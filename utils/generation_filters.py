"""
Generation Filters
The preference profile that drives both hard index filtering and soft scoring.
Every field is always present; partial payloads are merged over the defaults.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Dict

from utils.time_utils import DAY_FLAGS, normalize_time_value


@dataclass(frozen=True)
class NumericRange:
    min: float
    max: float
    enabled: bool = False

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class DayStartEnd:
    start_after: str = '08:00'
    end_before: str = '23:00'
    start_enabled: bool = False
    end_enabled: bool = False


@dataclass(frozen=True)
class DaysOfWeek:
    monday: bool = True
    tuesday: bool = True
    wednesday: bool = True
    thursday: bool = True
    friday: bool = True
    saturday: bool = True
    sunday: bool = True

    def all_enabled(self) -> bool:
        return all(getattr(self, f.name) for f in fields(self))

    def allows(self, day_code: str) -> bool:
        # Unknown day codes are never allowed while a restriction is active
        flag = DAY_FLAGS.get(day_code)
        return bool(flag and getattr(self, flag))


@dataclass(frozen=True)
class DailyLoad:
    preference: str = 'skewed'  # 'balanced' | 'skewed'
    enabled: bool = False


@dataclass(frozen=True)
class ClassesToConsider:
    tutorial: bool = True
    lab: bool = True
    seminar: bool = True
    lecture: bool = True
    project: bool = True
    design: bool = True


@dataclass(frozen=True)
class VenuePreference:
    include_online: bool = True
    include_in_person: bool = True


@dataclass(frozen=True)
class GenerationGoals:
    balance_workload: bool = False
    minimize_days: bool = False
    consecutive_days: bool = False


@dataclass(frozen=True)
class GenerationFilters:
    """User preference profile for timetable generation."""
    day_duration: NumericRange = field(default_factory=lambda: NumericRange(4, 8))
    # Accepted and validated but not read by filtering or scoring
    consecutive_classes: NumericRange = field(default_factory=lambda: NumericRange(1, 3))
    gaps_between_classes: NumericRange = field(default_factory=lambda: NumericRange(1, 2))
    day_start_end: DayStartEnd = field(default_factory=DayStartEnd)
    days_of_week: DaysOfWeek = field(default_factory=DaysOfWeek)
    daily_load: DailyLoad = field(default_factory=DailyLoad)
    classes_to_consider: ClassesToConsider = field(default_factory=ClassesToConsider)
    venue_preference: VenuePreference = field(default_factory=VenuePreference)
    generation_goals: GenerationGoals = field(default_factory=GenerationGoals)

    @classmethod
    def from_dict(cls, data: Dict = None) -> 'GenerationFilters':
        """Build filters from the camelCase request payload, filling gaps with defaults."""
        data = data or {}
        defaults = cls()
        kwargs = {}
        for f in fields(cls):
            section_default = getattr(defaults, f.name)
            section = data.get(_camel(f.name))
            if not isinstance(section, dict):
                kwargs[f.name] = section_default
                continue
            values = {}
            for sub in fields(section_default):
                raw_key = _camel(sub.name)
                values[sub.name] = section[raw_key] if raw_key in section else getattr(section_default, sub.name)
            kwargs[f.name] = type(section_default)(**values)
        return cls(**kwargs)

    def normalized(self) -> 'GenerationFilters':
        """Copy with dayStartEnd times normalized to HHMM."""
        return replace(
            self,
            day_start_end=replace(
                self.day_start_end,
                start_after=normalize_time_value(self.day_start_end.start_after),
                end_before=normalize_time_value(self.day_start_end.end_before),
            ),
        )


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)
