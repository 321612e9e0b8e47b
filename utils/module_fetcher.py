"""Resolve {code, indexNumbers} requests into ModuleForGeneration values from the catalogue."""

import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from models import IndexClass, Module
from utils.generation_types import ClassSession, ModuleForGeneration, ModuleIndex

logger = logging.getLogger(__name__)


def build_module_for_generation(module: Module, index_numbers: Optional[Sequence[str]] = None) -> Optional[ModuleForGeneration]:
    """Group a module's class rows by index number; None when no index matches."""
    query = module.index_classes
    if index_numbers:
        query = query.filter(IndexClass.index_number.in_(list(index_numbers)))
    rows = query.order_by(
        IndexClass.index_number,
        IndexClass.class_type,
        IndexClass.day,
        IndexClass.start_time
    ).all()

    if not rows:
        return None

    grouped: Dict[str, List[ClassSession]] = OrderedDict()
    for row in rows:
        grouped.setdefault(row.index_number, []).append(ClassSession(
            type=row.class_type,
            day=row.day,
            start_time=row.start_time,
            end_time=row.end_time,
            venue=row.venue or '',
            weeks=frozenset(row.get_weeks())
        ))

    return ModuleForGeneration(
        code=module.code,
        name=module.name,
        au=module.au or 0,
        indexes=tuple(ModuleIndex(index_number=number, classes=tuple(classes)) for number, classes in grouped.items())
    )


def fetch_modules_with_indexes(module_requests: Sequence[Dict], semester: str) -> List[ModuleForGeneration]:
    """
    Load the requested indexes of each module for a semester.

    Unknown modules and modules with none of the requested indexes are
    skipped with a warning, in request order.
    """
    modules = []
    for request in module_requests:
        code = request['code'].upper()
        module = Module.query.filter_by(code=code, semester=semester).first()
        if not module:
            logger.warning("Module %s not found for semester %s", code, semester)
            continue

        resolved = build_module_for_generation(module, request.get('indexNumbers'))
        if resolved is None:
            logger.warning("No indexes found for module %s", code)
            continue
        modules.append(resolved)

    return modules
