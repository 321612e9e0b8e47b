"""
Request Validator
Shape checks for generation payloads, run before the generator is invoked.
"""

import re
from typing import Dict, List

MODULE_CODE_PATTERN = re.compile(r'^[A-Z]{2,3}\d{4}[A-Z]?$', re.IGNORECASE)
INDEX_NUMBER_PATTERN = re.compile(r'^\d{5}$')
TIME_PATTERN = re.compile(r'^([01]?\d|2[0-3]):?[0-5]\d$')
CLASS_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):?[0-5]\d$|^2400$')

DAY_NAMES = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']
DAY_CODES = ['MON', 'TUE', 'WED', 'THU', 'FRI', 'SAT', 'SUN']
CLASS_TYPES = ['tutorial', 'lab', 'seminar', 'lecture', 'project', 'design']
RANGE_FIELDS = ['dayDuration', 'consecutiveClasses', 'gapsBetweenClasses']
GOAL_FIELDS = ['balanceWorkload', 'minimizeDays', 'consecutiveDays']


class GenerationRequestError(ValueError):
    """Request payload failed validation."""

    def __init__(self, errors: List[str]):
        super().__init__('Validation failed: ' + '; '.join(errors))
        self.errors = errors


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_module_request(module, position: int) -> List[str]:
    """Validate one {code, indexNumbers} entry."""
    errors = []
    prefix = f"Module[{position}]"

    if not isinstance(module, dict):
        return [f"{prefix}: Module object is null or undefined"]

    code = module.get('code')
    if not code or not isinstance(code, str) or not code.strip():
        errors.append(f"{prefix}: Module code must be a non-empty string")
    elif not MODULE_CODE_PATTERN.match(code):
        errors.append(f"{prefix}: Module code '{code}' has invalid format (expected format: AB1234 or ABC1234)")

    index_numbers = module.get('indexNumbers')
    if not isinstance(index_numbers, list):
        errors.append(f"{prefix}: indexNumbers must be a non-empty array")
    elif not index_numbers:
        errors.append(f"{prefix}: At least one index number must be provided")
    else:
        for i, index_number in enumerate(index_numbers):
            if not isinstance(index_number, str):
                errors.append(f"{prefix}.indexNumbers[{i}]: Index number must be a string")
            elif not INDEX_NUMBER_PATTERN.match(index_number):
                errors.append(f"{prefix}.indexNumbers[{i}]: Index number '{index_number}' has invalid format (expected 5 digits)")
        if len(set(map(str, index_numbers))) != len(index_numbers):
            errors.append(f"{prefix}: Duplicate index numbers found")

    return errors


def validate_class_session(session, prefix: str) -> List[str]:
    if not isinstance(session, dict):
        return [f"{prefix}: Class must be an object"]

    errors = []
    if not isinstance(session.get('type', ''), str):
        errors.append(f"{prefix}: type must be a string")
    day = session.get('day')
    if not isinstance(day, str) or day.strip().upper()[:3] not in DAY_CODES:
        errors.append(f"{prefix}: day '{day}' must be one of {', '.join(DAY_CODES)}")
    for key in ('startTime', 'endTime'):
        value = session.get(key)
        if not isinstance(value, str) or not CLASS_TIME_PATTERN.match(value.strip()):
            errors.append(f"{prefix}: {key} '{value}' has invalid time format (expected HHMM)")
    weeks = session.get('weeks')
    if weeks is not None and not isinstance(weeks, (list, str)):
        errors.append(f"{prefix}: weeks must be a list of week numbers")
    return errors


def validate_inline_module(module, position: int) -> List[str]:
    """Validate a module that carries its own indexes and classes."""
    prefix = f"Module[{position}]"
    if not isinstance(module, dict):
        return [f"{prefix}: Module object is null or undefined"]

    errors = []
    code = module.get('code')
    if not code or not isinstance(code, str) or not code.strip():
        errors.append(f"{prefix}: Module code must be a non-empty string")

    au = module.get('au')
    if au is not None and not (_is_number(au) and au >= 0) and not (isinstance(au, str) and au.strip().isdigit()):
        errors.append(f"{prefix}: au '{au}' must be a non-negative number")

    indexes = module.get('indexes')
    if not isinstance(indexes, list) or not indexes:
        errors.append(f"{prefix}: indexes must be a non-empty array")
        return errors

    for i, index in enumerate(indexes):
        index_prefix = f"{prefix}.indexes[{i}]"
        if not isinstance(index, dict):
            errors.append(f"{index_prefix}: Index must be an object")
            continue
        if not isinstance(index.get('indexNumber'), str) or not index['indexNumber'].strip():
            errors.append(f"{index_prefix}: indexNumber must be a non-empty string")
        classes = index.get('classes')
        if not isinstance(classes, list):
            errors.append(f"{index_prefix}: classes must be an array")
            continue
        for j, session in enumerate(classes):
            errors.extend(validate_class_session(session, f"{index_prefix}.classes[{j}]"))
    return errors


def validate_filters(filters) -> List[str]:
    """Validate the sections that are present; missing sections take defaults."""
    if not isinstance(filters, dict):
        return ['Filters must be an object']

    errors = []

    for name in RANGE_FIELDS:
        section = filters.get(name)
        if section is None:
            continue
        if not isinstance(section, dict):
            errors.append(f"{name} must be an object")
            continue
        low, high = section.get('min'), section.get('max')
        if not _is_number(low) or low < 0:
            errors.append(f"{name}.min must be a non-negative number")
        if not _is_number(high) or high < 0:
            errors.append(f"{name}.max must be a non-negative number")
        if _is_number(low) and _is_number(high) and low > high:
            errors.append(f"{name}.min cannot be greater than {name}.max")
        if 'enabled' in section and not isinstance(section['enabled'], bool):
            errors.append(f"{name}.enabled must be a boolean")

    day_start_end = filters.get('dayStartEnd')
    if isinstance(day_start_end, dict):
        for key in ('startAfter', 'endBefore'):
            value = day_start_end.get(key)
            if value and (not isinstance(value, str) or not TIME_PATTERN.match(value.strip())):
                errors.append(f"dayStartEnd.{key} '{value}' has invalid time format (expected HH:MM)")
    elif day_start_end is not None:
        errors.append("dayStartEnd must be an object")

    days = filters.get('daysOfWeek')
    if isinstance(days, dict):
        for day in DAY_NAMES:
            if not isinstance(days.get(day), bool):
                errors.append(f"daysOfWeek.{day} must be a boolean")
    elif days is not None:
        errors.append("daysOfWeek must be an object")

    classes = filters.get('classesToConsider')
    if isinstance(classes, dict):
        for class_type in CLASS_TYPES:
            if not isinstance(classes.get(class_type), bool):
                errors.append(f"classesToConsider.{class_type} must be a boolean")
        if not any(classes.get(class_type) is True for class_type in CLASS_TYPES):
            errors.append("At least one class type must be selected in classesToConsider")
    elif classes is not None:
        errors.append("classesToConsider must be an object")

    venue = filters.get('venuePreference')
    if isinstance(venue, dict):
        for key in ('includeOnline', 'includeInPerson'):
            if not isinstance(venue.get(key), bool):
                errors.append(f"venuePreference.{key} must be a boolean")
        if not venue.get('includeOnline') and not venue.get('includeInPerson'):
            errors.append("At least one venue type must be selected in venuePreference")
    elif venue is not None:
        errors.append("venuePreference must be an object")

    daily_load = filters.get('dailyLoad')
    if isinstance(daily_load, dict):
        preference = daily_load.get('preference')
        if preference not in ('skewed', 'balanced'):
            errors.append(f"dailyLoad.preference must be either 'skewed' or 'balanced', got '{preference}'")
    elif daily_load is not None:
        errors.append("dailyLoad must be an object")

    goals = filters.get('generationGoals')
    if isinstance(goals, dict):
        for key in GOAL_FIELDS:
            if not isinstance(goals.get(key), bool):
                errors.append(f"generationGoals.{key} must be a boolean")
    elif goals is not None:
        errors.append("generationGoals must be an object")

    return errors


def _validate_module_list(modules, max_modules: int) -> List[str]:
    if not isinstance(modules, list):
        return ['Modules must be a non-empty array']
    if not modules:
        return ['At least one module must be provided']
    if max_modules and len(modules) > max_modules:
        return [f'At most {max_modules} modules can be generated at once']
    return []


def validate_generation_request(data: Dict, max_modules: int = 15) -> None:
    """Validate a {modules: [{code, indexNumbers}], filters, semester} payload."""
    if not isinstance(data, dict):
        raise GenerationRequestError(['Request body must be a JSON object'])

    modules = data.get('modules')
    errors = _validate_module_list(modules, max_modules)
    if not errors:
        for position, module in enumerate(modules):
            errors.extend(validate_module_request(module, position))

    semester = data.get('semester')
    if not isinstance(semester, str) or not semester.strip():
        errors.append('Semester must be a non-empty string')

    if data.get('filters') is None:
        errors.append('Filters object is required')
    else:
        errors.extend(validate_filters(data['filters']))

    if errors:
        raise GenerationRequestError(errors)


def validate_inline_request(data: Dict, max_modules: int = 15) -> None:
    """Validate a {modules: [{code, indexes: [...]}], filters} payload."""
    if not isinstance(data, dict):
        raise GenerationRequestError(['Request body must be a JSON object'])

    modules = data.get('modules')
    errors = _validate_module_list(modules, max_modules)
    if not errors:
        for position, module in enumerate(modules):
            errors.extend(validate_inline_module(module, position))

    if data.get('filters') is not None:
        errors.extend(validate_filters(data['filters']))

    if errors:
        raise GenerationRequestError(errors)
