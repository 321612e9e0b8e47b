import itertools

from utils.combination_builder import CombinationBuilder, generate_combinations, has_time_clash
from utils.generation_types import ClassSession, ModuleForGeneration, ModuleIndex, parse_weeks
from utils.time_utils import time_to_minutes


def session(day, start, end, weeks=(), class_type='LEC', venue='LT1'):
    return ClassSession(type=class_type, day=day, start_time=start, end_time=end, venue=venue, weeks=frozenset(weeks))


def module(code, *indexes):
    return ModuleForGeneration(
        code=code,
        indexes=tuple(ModuleIndex(number, tuple(classes)) for number, classes in indexes)
    )


def picks_of(combination):
    return tuple((p.module_code, p.index_number) for p in combination.picks)


class TestHasTimeClash:
    def test_back_to_back_classes_do_not_clash(self):
        assert not has_time_clash(session('MON', '0900', '1100'), session('MON', '1100', '1200'))
        assert not has_time_clash(session('MON', '1100', '1200'), session('MON', '0900', '1100'))

    def test_overlap_on_same_day_clashes(self):
        assert has_time_clash(session('MON', '0900', '1100'), session('MON', '1000', '1200'))
        assert has_time_clash(session('MON', '0900', '1200'), session('MON', '1000', '1100'))

    def test_different_days_never_clash(self):
        assert not has_time_clash(session('MON', '0900', '1100'), session('TUE', '0900', '1100'))

    def test_day_names_are_normalized(self):
        assert has_time_clash(session('Monday', '0900', '1100'), session('MON', '10:00', '12:00'))

    def test_disjoint_weeks_do_not_clash(self):
        odd = session('THU', '1400', '1700', weeks=[1, 3, 5])
        even = session('THU', '1400', '1700', weeks=[2, 4, 6])
        assert not has_time_clash(odd, even)

    def test_shared_week_clashes(self):
        assert has_time_clash(
            session('THU', '1400', '1700', weeks=[1, 3, 5]),
            session('THU', '1500', '1600', weeks=[5, 6])
        )

    def test_empty_weeks_means_every_week(self):
        assert has_time_clash(session('THU', '1400', '1700'), session('THU', '1400', '1700', weeks=[9]))

    def test_unparseable_time_is_not_a_clash(self):
        assert not has_time_clash(session('MON', 'TBA', 'TBA'), session('MON', '0900', '1100'))


class TestCombinationBuilder:
    def test_enumerates_exactly_the_legal_combinations(self):
        modules = [
            module('AB1001', ('11111', [session('MON', '0900', '1000')]), ('11112', [session('TUE', '0900', '1000')])),
            module('AB1002', ('22221', [session('MON', '0930', '1030')]), ('22222', [session('WED', '0900', '1000')])),
        ]

        combinations = generate_combinations(modules)

        assert [picks_of(c) for c in combinations] == [
            (('AB1001', '11111'), ('AB1002', '22222')),
            (('AB1001', '11112'), ('AB1002', '22221')),
            (('AB1001', '11112'), ('AB1002', '22222')),
        ]

    def test_matches_brute_force_and_never_clashes(self):
        days = ['MON', 'TUE', 'WED']
        modules = []
        for m in range(4):
            indexes = []
            for i in range(3):
                day = days[(m + i) % 3]
                start = 800 + 100 * ((m * 2 + i) % 4)
                indexes.append((f'{m}{i}000', [
                    session(day, f'{start:04d}', f'{start + 130:04d}'),
                    session(days[(m * i) % 3], '1400', '1500', class_type='TUT', weeks=[m % 2 + 1]),
                ]))
            modules.append(module(f'CS100{m}', *indexes))

        built = [picks_of(c) for c in CombinationBuilder(modules)]

        expected = []
        for choice in itertools.product(*[m.indexes for m in modules]):
            clash = any(
                has_time_clash(a, b)
                for x, y in itertools.combinations(choice, 2)
                for a in x.classes for b in y.classes
            )
            if not clash:
                expected.append(tuple((m.code, i.index_number) for m, i in zip(modules, choice)))

        assert built == expected
        assert built  # fixture must exercise at least one legal combination

    def test_carries_every_class_of_the_chosen_indexes(self):
        modules = [module('AB1001', ('11111', [
            session('MON', '0900', '1000'),
            session('TUE', '0900', '1000', class_type='TUT'),
        ]))]

        combination = generate_combinations(modules)[0]

        assert [c.session.type for c in combination.classes] == ['LEC', 'TUT']
        assert {c.module_code for c in combination.classes} == {'AB1001'}
        assert {c.index_number for c in combination.classes} == {'11111'}

    def test_no_modules_yields_nothing(self):
        assert generate_combinations([]) == []

    def test_module_without_indexes_yields_nothing(self):
        modules = [module('AB1001', ('11111', [session('MON', '0900', '1000')])), module('AB1002')]
        assert generate_combinations(modules) == []

    def test_is_lazy(self):
        modules = [
            module('AB1001', *[(f'1000{i}', [session('MON', f'{800 + i * 100:04d}', f'{850 + i * 100:04d}')]) for i in range(5)]),
            module('AB1002', *[(f'2000{i}', [session('TUE', f'{800 + i * 100:04d}', f'{850 + i * 100:04d}')]) for i in range(5)]),
        ]
        builder = CombinationBuilder(modules)

        first = next(iter(builder))

        assert picks_of(first) == (('AB1001', '10000'), ('AB1002', '20000'))
        assert builder.emitted == 1

    def test_step_budget_stops_the_search(self):
        modules = [
            module('AB1001', *[(f'1000{i}', [session('MON', f'{800 + i * 100:04d}', f'{850 + i * 100:04d}')]) for i in range(5)]),
            module('AB1002', *[(f'2000{i}', [session('TUE', f'{800 + i * 100:04d}', f'{850 + i * 100:04d}')]) for i in range(5)]),
        ]
        builder = CombinationBuilder(modules, max_steps=4)

        combinations = list(builder)

        # steps: A0, B0 (emit), B1 (emit), B2 (emit), then the budget runs out
        assert len(combinations) == 3
        assert builder.budget_exhausted

    def test_unbounded_search_does_not_flag_budget(self):
        modules = [module('AB1001', ('11111', [session('MON', '0900', '1000')]))]
        builder = CombinationBuilder(modules, max_steps=0)

        assert len(list(builder)) == 1
        assert not builder.budget_exhausted


def test_time_to_minutes_bounds():
    assert time_to_minutes('0000') == 0
    assert time_to_minutes('23:59') == 23 * 60 + 59
    assert time_to_minutes('2400') == 24 * 60
    assert time_to_minutes('2401') is None
    assert time_to_minutes('2459') is None
    assert time_to_minutes('2500') is None
    assert time_to_minutes('1260') is None


def test_times_past_midnight_never_clash():
    assert not has_time_clash(session('MON', '2300', '2430'), session('MON', '2330', '2400'))


def test_parse_weeks_ignores_unsupported_values():
    assert parse_weeks([1, '2', 'x']) == frozenset({1, 2})
    assert parse_weeks('1, 3,5') == frozenset({1, 3, 5})
    assert parse_weeks(3) == frozenset()
    assert parse_weeks({'week': 1}) == frozenset()
    assert parse_weeks(None) == frozenset()
