"""Routes for timetable generation and combination checks."""

import time
from flask import Blueprint, current_app, jsonify, request
from utils.generation_filters import GenerationFilters
from utils.generation_types import ClassSession, ModuleForGeneration, ScheduledClass
from utils.module_fetcher import fetch_modules_with_indexes
from utils.request_validator import (
    GenerationRequestError, validate_class_session, validate_filters, validate_generation_request,
    validate_inline_request
)
from utils.result_validator import GeneratedResultsInvalid, find_conflicts, find_filter_violations
from utils.timetable_generator import TimetableGenerator, build_empty_result

planner_bp = Blueprint('planner', __name__)


def _generator_options():
    config = current_app.config
    return {
        'max_results': config['GENERATION_MAX_RESULTS'],
        'max_steps': config['GENERATION_MAX_STEPS'] or None,
        'validate_results': config['VALIDATE_GENERATED_RESULTS'],
    }


def _run_generation(modules, filters, extra_warnings=None):
    """Run the shared generator and wrap the outcome in a JSON response."""
    started = time.perf_counter()
    try:
        if modules:
            result = TimetableGenerator(modules, filters, **_generator_options()).generate()
        else:
            result = build_empty_result()
    except GeneratedResultsInvalid as e:
        current_app.logger.error(f"Generated timetables failed validation: {e.errors}")
        return jsonify({
            'success': False,
            'error': 'Generated timetables failed validation',
            'details': {'errors': e.errors, 'warnings': e.warnings}
        }), 500

    if extra_warnings:
        result.warnings = list(extra_warnings) + result.warnings

    elapsed = (time.perf_counter() - started) * 1000
    current_app.logger.info(
        f"[Planner] Generated {result.total_combinations} combinations in {elapsed:.0f}ms."
    )
    return jsonify({'success': True, 'data': result.to_dict()})


def _validation_failed(e: GenerationRequestError):
    current_app.logger.info(f"[Planner] Rejected generation request: {'; '.join(e.errors)}")
    return jsonify({'success': False, 'error': 'Validation failed', 'details': e.errors}), 400


@planner_bp.route('/generate', methods=['POST'])
def generate_timetables():
    """
    Generate timetables for catalogue modules.
    Body: {modules: [{code, indexNumbers}], filters, semester}
    """
    data = request.get_json(silent=True)
    try:
        validate_generation_request(data, current_app.config['GENERATION_MAX_MODULES'])
    except GenerationRequestError as e:
        return _validation_failed(e)

    filters = GenerationFilters.from_dict(data['filters'])
    semester = data['semester'].strip()

    try:
        modules = fetch_modules_with_indexes(data['modules'], semester)
    except Exception as e:
        current_app.logger.error(f"[Planner] Failed to load modules for {semester}: {e}")
        return jsonify({'success': False, 'error': 'Failed to load modules'}), 500

    found = {m.code for m in modules}
    missing = [
        f"Module {m['code'].upper()} has no matching indexes in semester {semester}"
        for m in data['modules'] if m['code'].upper() not in found
    ]
    return _run_generation(modules, filters, missing)


@planner_bp.route('/generate/local', methods=['POST'])
def generate_local_timetables():
    """
    Generate timetables for modules supplied with their own indexes and classes.
    Body: {modules: [{code, name, au, indexes: [{indexNumber, classes}]}], filters}
    """
    data = request.get_json(silent=True)
    try:
        validate_inline_request(data, current_app.config['GENERATION_MAX_MODULES'])
    except GenerationRequestError as e:
        return _validation_failed(e)

    modules = [ModuleForGeneration.from_dict(m) for m in data['modules']]
    filters = GenerationFilters.from_dict(data.get('filters'))
    return _run_generation(modules, filters)


@planner_bp.route('/validate', methods=['POST'])
def validate_timetable():
    """
    Check a combination for clashes and hard filter violations.
    Body: {combination: {classes: [{moduleCode, indexNumber, type, day, startTime, endTime, venue, weeks}]}, filters?}
    """
    data = request.get_json(silent=True)
    combination = data.get('combination') if isinstance(data, dict) else None

    if not isinstance(combination, dict) or not isinstance(combination.get('classes'), list):
        return jsonify({'success': False, 'error': 'Combination is required'}), 400

    errors = []
    for i, c in enumerate(combination['classes']):
        errors.extend(validate_class_session(c, f"combination.classes[{i}]"))
    if data.get('filters') is not None:
        errors.extend(validate_filters(data['filters']))
    if errors:
        return _validation_failed(GenerationRequestError(errors))

    classes = [
        ScheduledClass(
            module_code=str(c.get('moduleCode', '')),
            index_number=str(c.get('indexNumber', '')),
            session=ClassSession.from_dict(c)
        )
        for c in combination['classes']
    ]
    filters = GenerationFilters.from_dict(data.get('filters')).normalized()

    conflicts = [
        {'first': first.to_dict(), 'second': second.to_dict()}
        for first, second in find_conflicts(classes)
    ]
    warnings = find_filter_violations(classes, filters)

    return jsonify({
        'success': True,
        'data': {
            'isValid': not conflicts,
            'conflicts': conflicts,
            'warnings': warnings
        }
    })
