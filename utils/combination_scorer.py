"""
Combination Scorer
Computes display statistics and the preference score of each combination,
then ranks them best first.
"""

import heapq
import itertools
import math
import uuid
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from utils.generation_filters import GenerationFilters
from utils.generation_types import (
    CandidateCombination, ClassSession, CombinationStats, TimetableCombination
)
from utils.index_filter import should_consider_class_type
from utils.time_utils import DAY_ORDER, minutes_to_hhmm

BASE_SCORE = 100
DAY_DURATION_PENALTY = 20
GAP_PENALTY = 10
DAILY_LOAD_WEIGHT = 5
MINIMIZE_DAYS_WEIGHT = 20
BALANCE_WORKLOAD_BONUS = 30
CONSECUTIVE_DAYS_BONUS = 50
# Large enough to sink a combination below every other one without removing it
NON_CONSECUTIVE_DAYS_PENALTY = 10000


def _round_half_up(value: float) -> int:
    """Round halves up (1.5 -> 2, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _timed(sessions: Iterable[ClassSession]) -> List[ClassSession]:
    return [s for s in sessions if s.start_minutes is not None and s.end_minutes is not None]


def group_by_day(sessions: Iterable[ClassSession]) -> Dict[str, List[ClassSession]]:
    """Sessions per day code, each day sorted by start time."""
    by_day: Dict[str, List[ClassSession]] = defaultdict(list)
    for session in sessions:
        by_day[session.day_code].append(session)
    for day_sessions in by_day.values():
        day_sessions.sort(key=lambda s: s.start_minutes)
    return dict(by_day)


def calculate_stats(sessions: Sequence[ClassSession]) -> CombinationStats:
    days = {s.day_code for s in sessions}
    timed = _timed(sessions)
    if not timed:
        return CombinationStats(total_days=len(days))

    total_minutes = sum(s.end_minutes - s.start_minutes for s in timed)

    total_gap_minutes = 0
    gap_count = 0
    for day_sessions in group_by_day(timed).values():
        for current, nxt in zip(day_sessions, day_sessions[1:]):
            if nxt.start_minutes > current.end_minutes:
                total_gap_minutes += nxt.start_minutes - current.end_minutes
                gap_count += 1

    return CombinationStats(
        total_days=len(days),
        total_hours=_round_half_up(total_minutes / 6) / 10,
        average_gap_duration=_round_half_up(total_gap_minutes / gap_count) if gap_count else 0,
        earliest_start=minutes_to_hhmm(min(s.start_minutes for s in timed)),
        latest_end=minutes_to_hhmm(max(s.end_minutes for s in timed)),
    )


def enrich_combination(combination: CandidateCombination, score: float) -> TimetableCombination:
    """Attach stats, score and a fresh id."""
    return TimetableCombination(
        id=str(uuid.uuid4()),
        picks=combination.picks,
        classes=combination.classes,
        stats=calculate_stats(combination.sessions),
        score=score,
    )


def _is_consecutive(day_codes: Iterable[str]) -> bool:
    indices = sorted(DAY_ORDER.index(d) for d in day_codes if d in DAY_ORDER)
    return all(b - a == 1 for a, b in zip(indices, indices[1:]))


def score_combination(combination: CandidateCombination, filters: GenerationFilters) -> float:
    """
    Score a combination against the preference profile (higher is better).

    Only classes whose type is enabled in classesToConsider are scored.
    Classes with unparseable times count towards days used but are left out
    of duration and gap checks.
    """
    score = BASE_SCORE
    considered = [s for s in combination.sessions if should_consider_class_type(s.type, filters)]
    days_used = len({s.day_code for s in considered})
    by_day = group_by_day(_timed(considered))

    if filters.day_duration.enabled:
        for day_sessions in by_day.values():
            # Span runs to the end of the last class by start time
            duration = (day_sessions[-1].end_minutes - day_sessions[0].start_minutes) / 60
            if not filters.day_duration.contains(duration):
                score -= DAY_DURATION_PENALTY

    if filters.gaps_between_classes.enabled:
        for day_sessions in by_day.values():
            for current, nxt in zip(day_sessions, day_sessions[1:]):
                gap = (nxt.start_minutes - current.end_minutes) / 60
                if not filters.gaps_between_classes.contains(gap):
                    score -= GAP_PENALTY

    if filters.daily_load.enabled:
        if filters.daily_load.preference == 'balanced':
            score += days_used * DAILY_LOAD_WEIGHT
        else:
            score -= days_used * DAILY_LOAD_WEIGHT

    goals = filters.generation_goals
    if goals.minimize_days:
        score += (7 - days_used) * MINIMIZE_DAYS_WEIGHT

    if goals.balance_workload and days_used > 0:
        counts = defaultdict(int)
        for s in considered:
            counts[s.day_code] += 1
        mean = sum(counts.values()) / days_used
        variance = sum((count - mean) ** 2 for count in counts.values()) / days_used
        score += max(0, BALANCE_WORKLOAD_BONUS - variance * 10)

    if goals.consecutive_days:
        if days_used <= 1:
            score += CONSECUTIVE_DAYS_BONUS
        elif _is_consecutive({s.day_code for s in considered}):
            score += CONSECUTIVE_DAYS_BONUS
        else:
            score -= NON_CONSECUTIVE_DAYS_PENALTY

    return score


def score_and_sort(
    combinations: Iterable[CandidateCombination],
    filters: GenerationFilters
) -> List[TimetableCombination]:
    """Enrich and score every combination, sorted by score descending (stable)."""
    scored = [enrich_combination(c, score_combination(c, filters)) for c in combinations]
    scored.sort(key=lambda c: c.score, reverse=True)
    return scored


def rank_combinations(
    combinations: Iterable[CandidateCombination],
    filters: GenerationFilters,
    limit: int
) -> Tuple[List[TimetableCombination], int]:
    """
    Stream combinations and keep only the best `limit`.

    Returns the same combinations, in the same order, as score_and_sort()[:limit]
    together with the total number of combinations seen. Only the kept ones
    are enriched.
    """
    counter = itertools.count()
    total = 0

    def scored():
        nonlocal total
        for combination in combinations:
            total += 1
            yield score_combination(combination, filters), next(counter), combination

    # Ties keep arrival order, matching a stable descending sort
    best = heapq.nlargest(limit, scored(), key=lambda item: (item[0], -item[1]))
    return [enrich_combination(c, score) for score, _, c in best], total
