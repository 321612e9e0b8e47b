"""
Timetable Generator Module
Generates clash-free timetable combinations and ranks them against a
preference profile.

Pipeline: normalize filters -> index filter -> combination builder -> scorer.
Each call is a pure function of its inputs.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from utils.combination_builder import CombinationBuilder
from utils.combination_scorer import rank_combinations
from utils.generation_filters import GenerationFilters
from utils.generation_types import GenerationResult, ModuleForGeneration, TimetableCombination
from utils.index_filter import filter_module_indexes
from utils.result_validator import GeneratedResultsInvalid, validate_generated_results

logger = logging.getLogger(__name__)

MAX_RESULTS = 100


def build_result(
    combinations: List[TimetableCombination],
    total: int,
    max_results: int = MAX_RESULTS,
    truncated: bool = False,
    warnings: Optional[List[str]] = None
) -> GenerationResult:
    top = combinations[:max_results]
    return GenerationResult(
        combinations=top,
        generated_at=datetime.now(timezone.utc).isoformat(),
        total_combinations=total,
        returned_count=len(top),
        has_more=total > max_results,
        truncated=truncated,
        warnings=list(warnings or []),
    )


def build_empty_result(warnings: Optional[List[str]] = None) -> GenerationResult:
    return build_result([], 0, warnings=warnings)


class TimetableGenerator:
    """
    Filter, enumerate and rank timetable combinations.

    Worst-case cost is the product of the surviving index counts per module;
    clashing partial picks are pruned as soon as they appear and max_steps
    bounds the search when given.
    """

    def __init__(
        self,
        modules: Sequence[ModuleForGeneration],
        filters: GenerationFilters = None,
        max_results: int = MAX_RESULTS,
        max_steps: Optional[int] = None,
        validate_results: bool = False
    ):
        """
        Args:
            modules: Modules with their candidate indexes
            filters: Preference profile (defaults when omitted)
            max_results: Number of combinations returned
            max_steps: Candidate indexes examined before giving up (None = unbounded)
            validate_results: Re-check returned combinations for clashes and hard filter violations
        """
        self.modules = list(modules)
        self.filters = (filters or GenerationFilters()).normalized()
        self.max_results = max_results
        self.max_steps = max_steps
        self.validate_results = validate_results

        # Warnings collection
        self.warnings: List[str] = []

    def filter_modules(self) -> List[ModuleForGeneration]:
        """Apply hard filters and record which modules lost every index."""
        filtered = filter_module_indexes(self.modules, self.filters)
        kept = {m.code for m in filtered}
        for module in self.modules:
            if module.code not in kept:
                msg = f"Module {module.code} has no indexes left after filtering"
                if msg not in self.warnings:
                    self.warnings.append(msg)
        return filtered

    def generate(self) -> GenerationResult:
        if not self.modules:
            return build_empty_result()

        filtered = self.filter_modules()
        if len(filtered) < len(self.modules):
            logger.warning("Some modules have no valid indexes after filtering: %s", "; ".join(self.warnings))
            return build_empty_result(self.warnings)

        builder = CombinationBuilder(filtered, max_steps=self.max_steps)
        ranked, total = rank_combinations(builder, self.filters, self.max_results)

        if builder.budget_exhausted:
            self.warnings.append(
                f"Search stopped after examining {self.max_steps} candidate indexes; results are partial"
            )

        if self.validate_results and ranked:
            validation = validate_generated_results(ranked, self.filters, [m.code for m in self.modules])
            if not validation.valid:
                raise GeneratedResultsInvalid(validation.errors, validation.warnings)
            self.warnings.extend(w for w in validation.warnings if w not in self.warnings)

        logger.debug(
            "Generated %d combinations (%d steps) for %d modules",
            total, builder.steps, len(filtered)
        )
        return build_result(
            ranked,
            total,
            max_results=self.max_results,
            truncated=builder.budget_exhausted,
            warnings=self.warnings,
        )


def generate_timetable_combinations(
    modules: Sequence[ModuleForGeneration],
    filters: GenerationFilters = None,
    **options
) -> GenerationResult:
    """Shared entry point for every caller (HTTP adapters, scripts, tests)."""
    return TimetableGenerator(modules, filters, **options).generate()
