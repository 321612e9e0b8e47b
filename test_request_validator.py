import pytest

from utils.request_validator import (
    GenerationRequestError, validate_filters, validate_generation_request, validate_inline_request
)


def valid_request(**overrides):
    data = {
        'modules': [{'code': 'CS1010', 'indexNumbers': ['10101', '10102']}],
        'filters': {},
        'semester': '2025_2',
    }
    data.update(overrides)
    return data


def errors_of(data, **kwargs):
    with pytest.raises(GenerationRequestError) as excinfo:
        validate_generation_request(data, **kwargs)
    return excinfo.value.errors


def test_valid_request_passes():
    validate_generation_request(valid_request())


def test_missing_pieces_are_reported_together():
    errors = errors_of({'modules': [], 'semester': ' '})

    assert 'At least one module must be provided' in errors
    assert 'Semester must be a non-empty string' in errors
    assert 'Filters object is required' in errors


def test_module_entry_rules():
    errors = errors_of(valid_request(modules=[
        {'code': 'C1', 'indexNumbers': ['10101']},
        {'code': 'CS1231', 'indexNumbers': ['1010', '20201', '20201']},
        {'code': 'MA1521', 'indexNumbers': []},
    ]))

    assert any("Module[0]: Module code 'C1' has invalid format" in e for e in errors)
    assert any("Module[1].indexNumbers[0]" in e for e in errors)
    assert 'Module[1]: Duplicate index numbers found' in errors
    assert 'Module[2]: At least one index number must be provided' in errors


def test_module_count_is_capped():
    modules = [{'code': f'CS{1000 + i}', 'indexNumbers': ['10101']} for i in range(16)]

    assert errors_of(valid_request(modules=modules), max_modules=15) == [
        'At most 15 modules can be generated at once'
    ]


def test_filter_rules():
    errors = validate_filters({
        'dayDuration': {'min': 9, 'max': 4, 'enabled': True},
        'gapsBetweenClasses': {'min': -1, 'max': 2, 'enabled': True},
        'dayStartEnd': {'startAfter': '25:00', 'endBefore': '1800', 'startEnabled': True, 'endEnabled': True},
        'classesToConsider': {'tutorial': False, 'lab': False, 'seminar': False, 'lecture': False, 'project': False, 'design': False},
        'venuePreference': {'includeOnline': False, 'includeInPerson': False},
        'dailyLoad': {'preference': 'random', 'enabled': True},
        'generationGoals': {'balanceWorkload': 'yes', 'minimizeDays': False, 'consecutiveDays': False},
    })

    assert 'dayDuration.min cannot be greater than dayDuration.max' in errors
    assert 'gapsBetweenClasses.min must be a non-negative number' in errors
    assert any(e.startswith("dayStartEnd.startAfter '25:00'") for e in errors)
    assert not any(e.startswith('dayStartEnd.endBefore') for e in errors)
    assert 'At least one class type must be selected in classesToConsider' in errors
    assert 'At least one venue type must be selected in venuePreference' in errors
    assert any(e.startswith('dailyLoad.preference') for e in errors)
    assert 'generationGoals.balanceWorkload must be a boolean' in errors


def test_filters_must_be_an_object():
    assert validate_filters([]) == ['Filters must be an object']


def test_inline_request_checks_classes():
    with pytest.raises(GenerationRequestError) as excinfo:
        validate_inline_request({'modules': [{'code': 'CS1010', 'indexes': [
            {'indexNumber': '10101', 'classes': [
                {'type': 'LEC', 'day': 'XYZ', 'startTime': '9am', 'endTime': '1100'}
            ]}
        ]}]})

    errors = excinfo.value.errors
    assert any('day' in e and 'XYZ' in e for e in errors)
    assert any("startTime '9am'" in e for e in errors)


def test_inline_request_without_filters_is_valid():
    validate_inline_request({'modules': [{'code': 'CS1010', 'indexes': [
        {'indexNumber': '10101', 'classes': [{'type': 'LEC', 'day': 'MON', 'startTime': '0900', 'endTime': '1100'}]}
    ]}]})


def test_inline_request_rejects_non_numeric_au():
    with pytest.raises(GenerationRequestError) as excinfo:
        validate_inline_request({'modules': [{'code': 'CS1010', 'au': 'four', 'indexes': [
            {'indexNumber': '10101', 'classes': [{'type': 'LEC', 'day': 'MON', 'startTime': '0900', 'endTime': '1100'}]}
        ]}]})

    assert excinfo.value.errors == ["Module[0]: au 'four' must be a non-negative number"]


def test_inline_request_accepts_numeric_au():
    for au in (4, '4', 0):
        validate_inline_request({'modules': [{'code': 'CS1010', 'au': au, 'indexes': [
            {'indexNumber': '10101', 'classes': [{'type': 'LEC', 'day': 'MON', 'startTime': '0900', 'endTime': '1100'}]}
        ]}]})
