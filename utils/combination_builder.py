"""
Combination Builder
Enumerates every clash-free way to pick one index per module.

Worst case cost is the product of the per-module index counts, times the
session comparisons per step. Partial assignments are rejected as soon as a
candidate index clashes, so dead branches are never expanded.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from utils.generation_types import (
    CandidateCombination, ClassSession, ModuleForGeneration, ModuleIndex, ModulePick, ScheduledClass
)

logger = logging.getLogger(__name__)


def has_time_clash(class1: ClassSession, class2: ClassSession) -> bool:
    """
    Two sessions clash when they share a day, share at least one week and
    overlap in time. Intervals are half-open, so 0900-1100 and 1100-1200 do
    not clash. An empty week set means every week.
    """
    if class1.day_code != class2.day_code:
        return False

    start1, end1 = class1.start_minutes, class1.end_minutes
    start2, end2 = class2.start_minutes, class2.end_minutes
    if None in (start1, end1, start2, end2):
        return False
    if not (start1 < end2 and start2 < end1):
        return False

    if not class1.weeks or not class2.weeks:
        return True
    return not class1.weeks.isdisjoint(class2.weeks)


def index_clashes(index: ModuleIndex, picked: Sequence[Tuple[ModuleForGeneration, ModuleIndex]]) -> bool:
    """Check the candidate index against every class already committed."""
    for _, existing in picked:
        for new_class in index.classes:
            for existing_class in existing.classes:
                if has_time_clash(new_class, existing_class):
                    return True
    return False


class CombinationBuilder:
    """
    Lazy, iterative backtracking over the module list.

    Iterating yields CandidateCombination objects in module/index order. An
    optional step budget caps the number of candidate indexes examined; when
    it runs out iteration stops and budget_exhausted is set.
    """

    def __init__(self, modules: Sequence[ModuleForGeneration], max_steps: Optional[int] = None):
        self.modules = list(modules)
        self.max_steps = max_steps or None
        self.steps = 0
        self.emitted = 0
        self.budget_exhausted = False

    def __iter__(self) -> Iterator[CandidateCombination]:
        if not self.modules:
            return

        # Invariant at the top of the loop: len(picked) == len(stack) - 1
        stack = [iter(self.modules[0].indexes)]
        picked: List[Tuple[ModuleForGeneration, ModuleIndex]] = []

        while stack:
            index = next(stack[-1], None)
            if index is None:
                stack.pop()
                if picked:
                    picked.pop()
                continue

            self.steps += 1
            if self.max_steps is not None and self.steps > self.max_steps:
                self.budget_exhausted = True
                logger.warning(
                    "Combination search stopped after %d steps (%d combinations emitted)",
                    self.max_steps, self.emitted
                )
                return

            if index_clashes(index, picked):
                continue

            module = self.modules[len(stack) - 1]
            picked.append((module, index))

            if len(picked) == len(self.modules):
                self.emitted += 1
                yield self._build_candidate(picked)
                picked.pop()
            else:
                stack.append(iter(self.modules[len(picked)].indexes))

    @staticmethod
    def _build_candidate(picked) -> CandidateCombination:
        picks = []
        classes = []
        for module, index in picked:
            picks.append(ModulePick(
                module_code=module.code,
                index_number=index.index_number,
                module_name=module.name,
                au=module.au
            ))
            classes.extend(
                ScheduledClass(module_code=module.code, index_number=index.index_number, session=c)
                for c in index.classes
            )
        return CandidateCombination(picks=tuple(picks), classes=tuple(classes))


def generate_combinations(modules: Sequence[ModuleForGeneration], max_steps: Optional[int] = None) -> List[CandidateCombination]:
    """Materialize every clash-free combination (non-generator version)."""
    return list(CombinationBuilder(modules, max_steps=max_steps))
