"""
Index Filter
Drops indexes that can never satisfy the hard constraints of a filter profile.
"""

from dataclasses import replace
from typing import List, Sequence

from utils.generation_filters import GenerationFilters
from utils.generation_types import ClassSession, ModuleForGeneration, ModuleIndex
from utils.time_utils import time_to_minutes

# Checked in order; first keyword found in the lowercased type wins
CLASS_TYPE_KEYWORDS = [
    ('tut', 'tutorial'),
    ('lab', 'lab'),
    ('sem', 'seminar'),
    ('lec', 'lecture'),
    ('prj', 'project'),
    ('des', 'design'),
]

ONLINE_VENUE_KEYWORDS = ['online', 'e-learn', 'elearn', 'virtual', 'zoom', 'teams']


def class_type_category(class_type: str):
    """Map a free-text class type to its category, or None when unmatched."""
    lowered = (class_type or '').lower()
    for keyword, category in CLASS_TYPE_KEYWORDS:
        if keyword in lowered:
            return category
    return None


def should_consider_class_type(class_type: str, filters: GenerationFilters) -> bool:
    category = class_type_category(class_type)
    if category is None:
        return True
    return getattr(filters.classes_to_consider, category)


def filter_classes_by_type(index: ModuleIndex, filters: GenerationFilters) -> List[ClassSession]:
    return [c for c in index.classes if should_consider_class_type(c.type, filters)]


def is_online_venue(venue: str) -> bool:
    lowered = (venue or '').lower()
    return any(keyword in lowered for keyword in ONLINE_VENUE_KEYWORDS)


def passes_venue_preference(classes: Sequence[ClassSession], filters: GenerationFilters) -> bool:
    include_online = filters.venue_preference.include_online
    include_in_person = filters.venue_preference.include_in_person
    if include_online and include_in_person:
        return True

    if include_online and not include_in_person:
        return all(is_online_venue(c.venue) for c in classes)
    if include_in_person and not include_online:
        return not any(is_online_venue(c.venue) for c in classes)
    # Neither selected: request validation rejects this, nothing to enforce here
    return True


def passes_day_time_constraints(classes: Sequence[ClassSession], filters: GenerationFilters) -> bool:
    window = filters.day_start_end
    if not window.start_enabled and not window.end_enabled:
        return True

    # Unparseable bounds or class times never eliminate an index
    start_after = time_to_minutes(window.start_after) if window.start_enabled else None
    end_before = time_to_minutes(window.end_before) if window.end_enabled else None

    for c in classes:
        if start_after is not None and c.start_minutes is not None and c.start_minutes < start_after:
            return False
        if end_before is not None and c.end_minutes is not None and c.end_minutes > end_before:
            return False
    return True


def passes_day_of_week_constraints(classes: Sequence[ClassSession], filters: GenerationFilters) -> bool:
    days = filters.days_of_week
    if days.all_enabled():
        return True
    return all(days.allows(c.day_code) for c in classes)


def index_passes_filters(index: ModuleIndex, filters: GenerationFilters) -> bool:
    classes_to_check = filter_classes_by_type(index, filters)
    if not classes_to_check:
        return False
    return (
        passes_venue_preference(classes_to_check, filters)
        and passes_day_time_constraints(classes_to_check, filters)
        and passes_day_of_week_constraints(classes_to_check, filters)
    )


def filter_module_indexes(
    modules: Sequence[ModuleForGeneration],
    filters: GenerationFilters
) -> List[ModuleForGeneration]:
    """
    Keep only indexes whose considered classes pass every enabled hard filter.

    Modules left without indexes are dropped. Order is preserved and the
    input is not modified.
    """
    filtered = []
    for module in modules:
        indexes = tuple(i for i in module.indexes if index_passes_filters(i, filters))
        if indexes:
            filtered.append(replace(module, indexes=indexes))
    return filtered
