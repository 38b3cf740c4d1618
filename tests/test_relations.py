"""Tests for Allen's interval relations."""

from datetime import date, datetime, timezone
from itertools import product

import pytest

from lucc import (
    CONVERSES,
    DERIVED,
    RELATIONS,
    AfterSemantics,
    InvalidArgument,
    after,
    after_legacy,
    before,
    contains,
    during,
    equals,
    finishes,
    follows,
    get_relation,
    in_,
    interval,
    meets,
    met_by,
    overlaps,
    overlapped_by,
    precedes,
    relate,
    started_by,
    starts,
)

POINTS = range(5)
# Every interval over a small grid of points, zero-length ones included
ALL_INTERVALS = [interval(a, b) for a, b in product(POINTS, POINTS) if a <= b]
PROPER_INTERVALS = [ivl for ivl in ALL_INTERVALS if ivl.start < ivl.end]

time1 = ["2011-09-01", "2011-10-01"]
time2 = ["2011-09-15", "2011-11-01"]
time3 = ["2011-10-01", "2011-11-01"]
time4 = ["2011-08-01", "2011-09-01"]
time5 = ["2011-08-01", "2011-09-15"]
time6 = ["2011-08-15", "2011-08-29"]


class TestScenarios:
    def test_meeting_intervals_are_not_before(self):
        assert before(time1, time3) is False
        assert meets(time1, time3) is True

    def test_overlaps(self):
        assert overlaps(time1, time2) is True
        assert overlapped_by(time2, time1) is True

    def test_starts_and_started_by(self):
        assert starts(time4, time5) is True
        assert started_by(time5, time4) is True

    def test_during_and_contains(self):
        assert during(time6, time5) is True
        assert contains(time5, time6) is True

    def test_equals_excludes_every_other_relation(self):
        assert equals(time3, time3) is True
        others = [r for name, r in RELATIONS.items() if name != "equals"]
        assert len(others) == 12
        assert not any(r(time3, time3) for r in others)

    def test_before_with_gap(self):
        assert before(time4, time3) is True
        assert after(time3, time4) is True

    def test_finishes(self):
        later = ["2011-08-20", "2011-09-15"]
        assert finishes(later, time5) is True
        assert relate(time5, later) == "finished_by"


class TestAlgebra:
    def test_exactly_one_relation_holds_for_proper_intervals(self):
        for i, j in product(PROPER_INTERVALS, PROPER_INTERVALS):
            holding = [name for name, r in RELATIONS.items() if r(i, j)]
            assert len(holding) == 1, (i, j, holding)
            assert relate(i, j) == holding[0]

    def test_converse_pairs_agree(self):
        for i, j in product(ALL_INTERVALS, ALL_INTERVALS):
            for name, counterpart in CONVERSES.items():
                assert RELATIONS[name](i, j) == RELATIONS[counterpart](j, i), (
                    name,
                    i,
                    j,
                )

    def test_equals_is_reflexive(self):
        for ivl in ALL_INTERVALS:
            assert equals(ivl, ivl)

    def test_pre_swapped_bounds_give_same_answers(self):
        for i, j in product(ALL_INTERVALS, ALL_INTERVALS):
            swapped_i = (i.end, i.start)
            swapped_j = (j.end, j.start)
            for relation in [*RELATIONS.values(), *DERIVED.values()]:
                assert relation(i, j) == relation(swapped_i, swapped_j)

    def test_every_relation_occurs_on_the_grid(self):
        seen = {relate(i, j) for i, j in product(PROPER_INTERVALS, PROPER_INTERVALS)}
        assert seen == set(RELATIONS)

    def test_zero_length_intervals_follow_the_conditions_literally(self):
        instant = interval(2, 2)
        assert meets(instant, instant)
        assert met_by(instant, instant)
        assert equals(instant, instant)
        assert relate(instant, instant) == "meets"
        assert during(instant, interval(1, 3))


class TestDerived:
    def test_in_is_during_starts_or_finishes(self):
        for i, j in product(ALL_INTERVALS, ALL_INTERVALS):
            expected = during(i, j) or starts(i, j) or finishes(i, j)
            assert in_(i, j) == expected

    def test_follows_is_meets_or_before(self):
        for i, j in product(ALL_INTERVALS, ALL_INTERVALS):
            assert follows(i, j) == (meets(i, j) or before(i, j))

    def test_precedes_is_met_by_or_after(self):
        for i, j in product(ALL_INTERVALS, ALL_INTERVALS):
            assert precedes(i, j) == (met_by(i, j) or after(i, j))

    def test_in_scenarios(self):
        assert in_(time6, time5)
        assert in_(time4, time5)
        assert not in_(time5, time6)
        assert not in_(time1, time3)

    def test_derived_relations_are_named(self):
        assert in_.name == "in"
        assert get_relation("in") is in_
        assert get_relation("follows") is follows
        assert get_relation("precedes") is precedes


class TestAfterSemantics:
    """Pins both readings of `after`."""

    def test_canonical_after_requires_start_past_end(self):
        assert after(interval(3, 4), interval(1, 2))
        assert not after(interval(2, 4), interval(1, 3))
        assert not after(interval(2, 4), interval(1, 2))

    def test_legacy_after_compares_end_with_start(self):
        # end_I > start_J: true for overlapping and equal pairs
        assert after_legacy(interval(2, 4), interval(1, 3))
        assert after_legacy(interval(1, 2), interval(1, 2))
        assert after_legacy(time3, time3)
        assert not after_legacy(time1, time3)

    def test_semantics_selectable_per_call(self):
        assert not after(interval(1, 3), interval(2, 4))
        assert after(interval(1, 3), interval(2, 4), semantics="legacy")
        assert after(interval(1, 3), interval(2, 4), semantics=AfterSemantics.LEGACY)
        assert not after_legacy(
            interval(1, 3), interval(2, 4), semantics=AfterSemantics.CANONICAL
        )

    def test_precedes_follows_the_selected_semantics(self):
        assert not precedes(interval(1, 3), interval(2, 4))
        assert precedes(interval(1, 3), interval(2, 4), semantics="legacy")

    def test_legacy_after_breaks_exclusivity(self):
        # Overlapping pair: both `overlaps` and legacy `after` hold
        assert overlaps(interval(1, 3), interval(2, 4))
        assert after_legacy(interval(1, 3), interval(2, 4))

    def test_unknown_semantics_rejected(self):
        with pytest.raises(InvalidArgument, match="Unknown after semantics"):
            after(interval(1, 2), interval(3, 4), semantics="loose")

    def test_after_legacy_by_name(self):
        assert get_relation("after_legacy") is after_legacy


class TestComposition:
    def test_union(self):
        within = during | starts | finishes
        for i, j in product(ALL_INTERVALS, ALL_INTERVALS):
            assert within(i, j) == in_(i, j)
        assert within.name == "during | starts | finishes"

    def test_intersection(self):
        impossible = before & meets
        for i, j in product(PROPER_INTERVALS, PROPER_INTERVALS):
            assert not impossible(i, j)

    def test_negation(self):
        not_before = ~before
        assert not_before(interval(3, 4), interval(1, 2))
        assert not not_before(interval(1, 2), interval(3, 4))
        assert ~not_before is before

    def test_converse(self):
        for i, j in product(ALL_INTERVALS, ALL_INTERVALS):
            assert before.converse(i, j) == after(i, j)
            assert during.converse(i, j) == contains(i, j)
        assert before.converse.converse is before

    def test_named_relations_stay_grouped(self):
        combined = in_ | equals
        assert combined.name == "in | equals"


class TestErrors:
    def test_non_interval_arguments_fail_fast(self):
        with pytest.raises(InvalidArgument):
            before(None, time1)
        with pytest.raises(InvalidArgument):
            meets(time1, "2011-09-01")
        with pytest.raises(InvalidArgument):
            during(time1, [None, "2011-09-01"])

    def test_mixed_timestamp_types_fail_fast(self):
        dates = interval(date(2011, 9, 1), date(2011, 10, 1))
        with pytest.raises(InvalidArgument, match="Cannot compare"):
            overlaps(dates, interval(1, 2))
        with pytest.raises(InvalidArgument):
            relate(dates, interval(1, 2))

    @pytest.mark.parametrize("relation", [meets, met_by, equals])
    def test_equality_relations_reject_mixed_types(self, relation):
        dates = interval(date(2011, 9, 1), date(2011, 10, 1))
        with pytest.raises(InvalidArgument, match="Cannot compare"):
            relation(dates, interval(1, 2))
        with pytest.raises(InvalidArgument, match="Cannot compare"):
            relation(interval(1, 2), dates)

    def test_dates_and_datetimes_do_not_mix(self):
        dates = interval(date(2011, 9, 1), date(2011, 10, 1))
        stamps = interval(datetime(2011, 10, 1), datetime(2011, 11, 1))
        with pytest.raises(InvalidArgument, match="Cannot compare"):
            meets(dates, stamps)
        with pytest.raises(InvalidArgument, match="Cannot compare"):
            equals(stamps, dates)

    def test_naive_and_aware_datetimes_do_not_mix(self):
        naive = interval(datetime(2011, 9, 1), datetime(2011, 10, 1))
        aware = interval(
            datetime(2011, 10, 1, tzinfo=timezone.utc),
            datetime(2011, 11, 1, tzinfo=timezone.utc),
        )
        with pytest.raises(InvalidArgument, match="Cannot compare"):
            meets(naive, aware)

    def test_ints_and_floats_compare(self):
        assert meets(interval(1, 2), interval(2.0, 3.5))

    def test_unknown_relation_name(self):
        with pytest.raises(InvalidArgument, match="Unknown relation"):
            get_relation("near")
