"""
Generation Types
Immutable value types shared by the index filter, combination builder and scorer.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, FrozenSet, List, Optional, Tuple

from utils.time_utils import normalize_day, time_to_minutes


def parse_weeks(weeks) -> FrozenSet[int]:
    """Accept [1, 2, 3], '1,2,3' or None; anything else, or any non-numeric week, is skipped."""
    if not weeks or not isinstance(weeks, (str, list, tuple, set, frozenset)):
        return frozenset()
    if isinstance(weeks, str):
        weeks = weeks.split(',')
    parsed = set()
    for week in weeks:
        try:
            parsed.add(int(str(week).strip()))
        except ValueError:
            continue
    return frozenset(parsed)


@dataclass(frozen=True)
class ClassSession:
    """One weekly meeting of a class. Empty weeks means every week."""
    type: str
    day: str
    start_time: str
    end_time: str
    venue: str = ''
    weeks: FrozenSet[int] = frozenset()

    @cached_property
    def day_code(self) -> str:
        return normalize_day(self.day)

    @cached_property
    def start_minutes(self) -> Optional[int]:
        return time_to_minutes(self.start_time)

    @cached_property
    def end_minutes(self) -> Optional[int]:
        return time_to_minutes(self.end_time)

    @classmethod
    def from_dict(cls, data: Dict) -> 'ClassSession':
        return cls(
            type=str(data.get('type', '')),
            day=normalize_day(data.get('day', '')),
            start_time=str(data.get('startTime', '')),
            end_time=str(data.get('endTime', '')),
            venue=str(data.get('venue') or ''),
            weeks=parse_weeks(data.get('weeks')),
        )

    def to_dict(self) -> Dict:
        return {
            'type': self.type,
            'day': self.day,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'venue': self.venue,
            'weeks': sorted(self.weeks),
        }


@dataclass(frozen=True)
class ModuleIndex:
    """A section of a module; the unit of choice."""
    index_number: str
    classes: Tuple[ClassSession, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> 'ModuleIndex':
        return cls(
            index_number=str(data.get('indexNumber', '')),
            classes=tuple(ClassSession.from_dict(c) for c in data.get('classes') or []),
        )

    def to_dict(self) -> Dict:
        return {
            'indexNumber': self.index_number,
            'classes': [c.to_dict() for c in self.classes],
        }


@dataclass(frozen=True)
class ModuleForGeneration:
    """A requested module together with its candidate indexes."""
    code: str
    indexes: Tuple[ModuleIndex, ...] = ()
    name: str = ''
    au: int = 0

    @classmethod
    def from_dict(cls, data: Dict) -> 'ModuleForGeneration':
        return cls(
            code=str(data.get('code', '')),
            indexes=tuple(ModuleIndex.from_dict(i) for i in data.get('indexes') or []),
            name=str(data.get('name') or ''),
            au=int(data.get('au') or 0),
        )

    def to_dict(self) -> Dict:
        return {
            'code': self.code,
            'name': self.name,
            'au': self.au,
            'indexes': [i.to_dict() for i in self.indexes],
        }


@dataclass(frozen=True)
class ModulePick:
    """The index chosen for one module inside a combination."""
    module_code: str
    index_number: str
    module_name: str = ''
    au: int = 0

    def to_dict(self) -> Dict:
        return {
            'moduleCode': self.module_code,
            'name': self.module_name,
            'au': self.au,
            'indexNumber': self.index_number,
        }


@dataclass(frozen=True)
class ScheduledClass:
    """A class session tagged with the module and index it was picked from."""
    module_code: str
    index_number: str
    session: ClassSession

    def to_dict(self) -> Dict:
        data = {'moduleCode': self.module_code, 'indexNumber': self.index_number}
        data.update(self.session.to_dict())
        return data


@dataclass(frozen=True)
class CandidateCombination:
    """A conflict-free pick of one index per module, before scoring."""
    picks: Tuple[ModulePick, ...]
    classes: Tuple[ScheduledClass, ...]

    @property
    def sessions(self) -> List[ClassSession]:
        return [c.session for c in self.classes]


@dataclass(frozen=True)
class CombinationStats:
    total_days: int = 0
    total_hours: float = 0.0
    average_gap_duration: int = 0  # minutes
    earliest_start: str = '0000'
    latest_end: str = '0000'

    def to_dict(self) -> Dict:
        return {
            'totalDays': self.total_days,
            'totalHours': self.total_hours,
            'averageGapDuration': self.average_gap_duration,
            'earliestStart': self.earliest_start,
            'latestEnd': self.latest_end,
        }


@dataclass(frozen=True)
class TimetableCombination:
    """A scored, enriched combination as returned to callers."""
    id: str
    picks: Tuple[ModulePick, ...]
    classes: Tuple[ScheduledClass, ...]
    stats: CombinationStats
    score: float

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'modules': [p.to_dict() for p in self.picks],
            'classes': [c.to_dict() for c in self.classes],
            'stats': self.stats.to_dict(),
            'score': round(self.score, 2),
        }


@dataclass
class GenerationResult:
    """Capped, sorted combinations plus summary counts."""
    combinations: List[TimetableCombination]
    generated_at: str
    total_combinations: int = 0
    returned_count: int = 0
    has_more: bool = False
    truncated: bool = False
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'combinations': [c.to_dict() for c in self.combinations],
            'generatedAt': self.generated_at,
            'totalCombinations': self.total_combinations,
            'returnedCount': self.returned_count,
            'hasMore': self.has_more,
            'truncated': self.truncated,
            'warnings': list(self.warnings),
        }
