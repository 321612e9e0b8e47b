"""
Result Validator
Post-generation self-check: returned combinations must be clash-free and must
respect the hard filters on every considered class.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from utils.combination_builder import has_time_clash
from utils.generation_filters import GenerationFilters
from utils.generation_types import ScheduledClass
from utils.index_filter import is_online_venue, should_consider_class_type
from utils.time_utils import time_to_minutes


class GeneratedResultsInvalid(Exception):
    """Generated combinations failed the self-check."""

    def __init__(self, errors: List[str], warnings: List[str] = None):
        super().__init__(f"Generated timetables failed validation ({len(errors)} error(s))")
        self.errors = errors
        self.warnings = warnings or []


@dataclass
class ResultValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _describe(c: ScheduledClass) -> str:
    s = c.session
    return f"{c.module_code} ({s.type} on {s.day} {s.start_time}-{s.end_time})"


def find_conflicts(classes: Sequence[ScheduledClass]) -> List[Tuple[ScheduledClass, ScheduledClass]]:
    """Clashing pairs of classes that belong to different modules."""
    conflicts = []
    for i, first in enumerate(classes):
        for second in classes[i + 1:]:
            if first.module_code == second.module_code:
                continue
            if has_time_clash(first.session, second.session):
                conflicts.append((first, second))
    return conflicts


def find_filter_violations(classes: Sequence[ScheduledClass], filters: GenerationFilters) -> List[str]:
    """Hard filter violations among the classes whose type is considered."""
    violations = []
    considered = [c for c in classes if should_consider_class_type(c.session.type, filters)]

    days = filters.days_of_week
    if not days.all_enabled():
        for c in considered:
            if not days.allows(c.session.day_code):
                violations.append(f"Class {_describe(c)} violates day filter ({c.session.day_code} not selected)")

    venue = filters.venue_preference
    if not venue.include_online or not venue.include_in_person:
        for c in considered:
            online = is_online_venue(c.session.venue)
            if online and not venue.include_online:
                violations.append(f"Class {_describe(c)} has online venue '{c.session.venue}' but online classes are not allowed")
            if not online and not venue.include_in_person:
                violations.append(f"Class {_describe(c)} has in-person venue '{c.session.venue}' but in-person classes are not allowed")

    window = filters.day_start_end
    start_after = time_to_minutes(window.start_after)
    end_before = time_to_minutes(window.end_before)
    for c in considered:
        start, end = c.session.start_minutes, c.session.end_minutes
        if window.start_enabled and None not in (start_after, start) and start < start_after:
            violations.append(f"Class {_describe(c)} starts before allowed start time {window.start_after}")
        if window.end_enabled and None not in (end_before, end) and end > end_before:
            violations.append(f"Class {_describe(c)} ends after allowed end time {window.end_before}")

    return violations


def validate_generated_results(combinations, filters: GenerationFilters, requested_codes: Sequence[str]) -> ResultValidation:
    errors = []
    warnings = []

    for position, combination in enumerate(combinations):
        prefix = f"Combination[{position}]"
        for first, second in find_conflicts(combination.classes):
            errors.append(f"{prefix}: Time clash detected between {_describe(first)} and {_describe(second)}")
        errors.extend(f"{prefix}: {v}" for v in find_filter_violations(combination.classes, filters))

    for code in requested_codes:
        if not any(p.module_code == code for c in combinations for p in c.picks):
            warnings.append(f"Module {code} does not appear in any generated combination")

    return ResultValidation(valid=not errors, errors=errors, warnings=warnings)
