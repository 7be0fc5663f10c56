from __future__ import annotations


__copyright__ = "Copyright (C) 2025 nopenaltycalc authors"

__license__ = """
Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE.
"""

import pytest

from nopenaltycalc.calculation import (
    calculate_no_penalty_final_grade,
    get_category_grades,
    normalise_category_grades,
    remove_penalties,
    sort_grade_values,
    standardise_score,
)
from nopenaltycalc.constants import grade_item_type
from nopenaltycalc.signals import CategoryAggregationCalculated

from tests.factories import (
    DEFAULT_COURSE_ID,
    DEFAULT_USER_ID,
    DeductionRecordFactory,
    ItemBoundsFactory,
    NoPenaltyFinalGradeFactory,
)
from tests.host import (
    InMemoryNoPenaltyRepository,
    MeanGradeCategory,
    SimpleGradeItem,
    SumGradeCategory,
)
from tests.utils import mock


def make_hook(category, values, items=None, **kwargs):
    if items is None:
        items = {itemid: ItemBoundsFactory() for itemid in values}

    return CategoryAggregationCalculated(
            gradecategory=category,
            userid=DEFAULT_USER_ID,
            gradevaluesprelimit=values,
            items=items,
            **kwargs)


# {{{ standardise_score

def test_standardise_score():
    assert standardise_score(10, 0, 100, 0, 1) == pytest.approx(0.1)
    assert standardise_score(0.75, 0, 1, 0, 100) == pytest.approx(75)
    assert standardise_score(15, 10, 20, 0, 1) == pytest.approx(0.5)
    assert standardise_score(-5, 0, 50, 0, 1) == pytest.approx(-0.1)


def test_standardise_score_none():
    assert standardise_score(None, 0, 100, 0, 1) is None


def test_standardise_score_degenerate_range():
    assert standardise_score(3, 5, 5, 0, 1) == 1
    assert standardise_score(3, 0, 10, 7, 7) == 7

# }}}


# {{{ remove_penalties

def test_remove_penalties_example():
    category = MeanGradeCategory(SimpleGradeItem(201))
    hook = make_hook(category, {101: 0.6})
    deductions = {101: DeductionRecordFactory(
        itemid=101, deductedmark=10, finalgrade=50)}

    removal = remove_penalties(hook, deductions)

    assert removal.gradevalues[101] == pytest.approx(0.7)
    assert removal.penaltycount == 1
    assert list(removal.graded) == [101]


@pytest.mark.parametrize("deduction", [
    None,
    DeductionRecordFactory.build(
        itemid=101, deductedmark=10, overridden=True),
    DeductionRecordFactory.build(
        itemid=101, deductedmark=10, finalgrade=None),
    ])
def test_remove_penalties_leaves_value_unchanged(deduction):
    category = MeanGradeCategory(SimpleGradeItem(201))
    hook = make_hook(category, {101: 0.6})
    deductions = {} if deduction is None else {101: deduction}

    removal = remove_penalties(hook, deductions)

    assert removal.gradevalues == {101: 0.6}
    assert removal.penaltycount == 0
    assert removal.graded == {}


def test_remove_penalties_zero_or_missing_deduction_is_not_a_penalty():
    category = MeanGradeCategory(SimpleGradeItem(201))
    hook = make_hook(category, {101: 0.6, 102: 0.4})
    deductions = {
        101: DeductionRecordFactory(itemid=101, deductedmark=0),
        102: DeductionRecordFactory(itemid=102, deductedmark=None),
        }

    removal = remove_penalties(hook, deductions)

    assert removal.gradevalues == {101: 0.6, 102: 0.4}
    assert removal.penaltycount == 0
    assert set(removal.graded) == {101, 102}


def test_remove_penalties_uses_user_grade_bounds():
    category = MeanGradeCategory(SimpleGradeItem(201))
    hook = make_hook(
            category, {101: 0.2, 102: 0.2},
            items={
                101: ItemBoundsFactory(grademin=0, grademax=100),
                102: ItemBoundsFactory(grademin=0, grademax=100),
                },
            grademinoverrides={102: 20},
            grademaxoverrides={101: 50, 102: 70})
    deductions = {
        101: DeductionRecordFactory(itemid=101, deductedmark=10),
        102: DeductionRecordFactory(itemid=102, deductedmark=30),
        }

    removal = remove_penalties(hook, deductions)

    # 10 out of 0..50, 30 out of 20..70
    assert removal.gradevalues[101] == pytest.approx(0.4)
    assert removal.gradevalues[102] == pytest.approx(0.4)
    assert removal.penaltycount == 2


def test_remove_penalties_keeps_order():
    category = MeanGradeCategory(SimpleGradeItem(201))
    hook = make_hook(category, {103: 0.9, 101: 0.1, 102: 0.5})
    deductions = {101: DeductionRecordFactory(itemid=101, deductedmark=5)}

    removal = remove_penalties(hook, deductions)

    assert list(removal.gradevalues) == [103, 101, 102]

# }}}


# {{{ sub-categories

def test_get_category_grades_prefers_stored_no_penalty_grade():
    graded = {
        201: DeductionRecordFactory(
            itemid=201, itemtype=grade_item_type.category, finalgrade=20),
        202: DeductionRecordFactory(
            itemid=202, itemtype=grade_item_type.category, finalgrade=40),
        101: DeductionRecordFactory(itemid=101, finalgrade=60),
        }
    no_penalty_grades = {
        201: NoPenaltyFinalGradeFactory.build(itemid=201, finalgrade=30),
        }

    assert get_category_grades(graded, no_penalty_grades) == {
        201: 30, 202: 40}


def test_normalise_category_grades():
    category = MeanGradeCategory(SimpleGradeItem(1))
    hook = make_hook(
            category, {201: 0.5, 202: 0.5},
            items={
                201: ItemBoundsFactory(grademin=10, grademax=50),
                202: ItemBoundsFactory(grademin=0, grademax=100),
                })

    normalised = normalise_category_grades(hook, {201: 30, 202: None})

    assert normalised == {201: pytest.approx(0.5)}


def test_normalise_category_grades_sum_starts_at_zero():
    category = SumGradeCategory(SimpleGradeItem(1))
    hook = make_hook(
            category, {201: 0.5},
            items={201: ItemBoundsFactory(grademin=10, grademax=50)})

    normalised = normalise_category_grades(hook, {201: 30})

    assert normalised == {201: pytest.approx(0.6)}


def test_normalise_category_grades_uses_item_or_user_bounds():
    category = MeanGradeCategory(SimpleGradeItem(1))
    hook = make_hook(
            category, {201: 0.5, 202: 0.5},
            items={
                201: ItemBoundsFactory(grademin=0, grademax=100),
                202: ItemBoundsFactory(grademin=0, grademax=100),
                },
            grademinoverrides={202: 10},
            grademaxoverrides={202: 50})

    normalised = normalise_category_grades(hook, {201: 20, 202: 20})

    assert normalised[201] == pytest.approx(0.2)
    assert normalised[202] == pytest.approx(0.25)


def test_stored_sub_category_bounds_are_not_used(course_item):
    category = MeanGradeCategory(course_item)
    hook = make_hook(category, {201: 0.2})
    repository = InMemoryNoPenaltyRepository(
        deductions=[
            DeductionRecordFactory(
                itemid=201, itemtype=grade_item_type.category,
                deductedmark=None, finalgrade=20),
            ],
        records=[
            NoPenaltyFinalGradeFactory.build(
                itemid=201, grademin=0, grademax=40, finalgrade=20),
            ])

    record = calculate_no_penalty_final_grade(hook, repository)

    # 20 out of the item's 0..100, not the stored 0..40
    assert category.aggregated_values == pytest.approx({201: 0.2})
    assert record.finalgrade == pytest.approx(20)

# }}}


def test_sort_grade_values_is_stable():
    values = {101: 0.5, 102: 0.2, 103: 0.5, 104: 0.1}

    assert list(sort_grade_values(values).items()) == [
        (104, 0.1), (102, 0.2), (101, 0.5), (103, 0.5)]


# {{{ calculate_no_penalty_final_grade

def test_category_without_penalties_is_skipped():
    category = MeanGradeCategory(SimpleGradeItem(201))
    hook = make_hook(category, {101: 0.6, 102: 0.8})
    repository = mock.Mock(wraps=InMemoryNoPenaltyRepository(deductions=[
        DeductionRecordFactory(itemid=101, deductedmark=0),
        ]))

    assert calculate_no_penalty_final_grade(hook, repository) is None

    assert repository.find_deductions.call_count == 1
    assert repository.find_no_penalty_records.call_count == 0
    assert repository.upsert_no_penalty_record.call_count == 0
    assert category.aggregated_values is None


def test_category_with_penalty_is_stored():
    category = MeanGradeCategory(SimpleGradeItem(201))
    hook = make_hook(category, {101: 0.6, 102: 0.8}, usermodified=7)
    repository = InMemoryNoPenaltyRepository(deductions=[
        DeductionRecordFactory(itemid=101, deductedmark=10),
        DeductionRecordFactory(itemid=102, deductedmark=0),
        ])

    record = calculate_no_penalty_final_grade(hook, repository)

    assert record.courseid == DEFAULT_COURSE_ID
    assert record.userid == DEFAULT_USER_ID
    assert record.itemid == 201
    assert record.itemtype == grade_item_type.category
    assert record.grademin == 0
    assert record.grademax == 100
    assert record.finalgrade == pytest.approx(75)
    assert record.usermodified == 7


def test_course_category_is_stored_without_penalties(course_item):
    category = MeanGradeCategory(course_item)
    hook = make_hook(category, {101: 0.5})
    repository = InMemoryNoPenaltyRepository()

    record = calculate_no_penalty_final_grade(hook, repository)

    assert record.itemid == course_item.id
    assert record.itemtype == grade_item_type.course
    assert record.finalgrade == pytest.approx(50)


def test_limit_rules_see_adjusted_values_in_order():
    category = MeanGradeCategory(SimpleGradeItem(201), droplow=1)
    hook = make_hook(category, {101: 0.2, 102: 0.6, 103: 0.9})
    repository = InMemoryNoPenaltyRepository(deductions=[
        DeductionRecordFactory(itemid=101, deductedmark=50),
        ])

    record = calculate_no_penalty_final_grade(hook, repository)

    # 101 is back at 0.7, so 102 is the lowest and gets dropped
    assert set(category.aggregated_values) == {101, 103}
    assert record.finalgrade == pytest.approx(80)


def test_sub_category_uses_stored_no_penalty_grade(course_item):
    category = MeanGradeCategory(course_item)
    hook = make_hook(
            category, {201: 0.4, 101: 0.5},
            items={
                201: ItemBoundsFactory(grademin=0, grademax=50),
                101: ItemBoundsFactory(),
                })
    repository = InMemoryNoPenaltyRepository(
        deductions=[
            DeductionRecordFactory(
                itemid=201, itemtype=grade_item_type.category,
                deductedmark=None, finalgrade=20),
            DeductionRecordFactory(itemid=101, finalgrade=50),
            ],
        records=[
            NoPenaltyFinalGradeFactory.build(
                itemid=201, grademin=0, grademax=50, finalgrade=30),
            ])

    record = calculate_no_penalty_final_grade(hook, repository)

    assert category.aggregated_values == pytest.approx({201: 0.6, 101: 0.5})
    assert list(category.aggregated_values) == [201, 101]
    assert record.finalgrade == pytest.approx(55)


def test_sub_category_without_stored_grade_uses_raw_grade(course_item):
    category = MeanGradeCategory(course_item)
    hook = make_hook(
            category, {201: 0.4},
            items={201: ItemBoundsFactory(grademin=0, grademax=50)})
    repository = InMemoryNoPenaltyRepository(deductions=[
        DeductionRecordFactory(
            itemid=201, itemtype=grade_item_type.category,
            deductedmark=None, finalgrade=20),
        ])

    record = calculate_no_penalty_final_grade(hook, repository)

    assert category.aggregated_values == pytest.approx({201: 0.4})
    assert record.finalgrade == pytest.approx(40)


def test_ungraded_sub_category_uses_adjusted_value(course_item):
    category = MeanGradeCategory(course_item)
    hook = make_hook(category, {201: 0.3, 101: 0.5})
    repository = InMemoryNoPenaltyRepository(
        deductions=[
            DeductionRecordFactory(
                itemid=201, itemtype=grade_item_type.category,
                deductedmark=None, finalgrade=20),
            ],
        records=[
            NoPenaltyFinalGradeFactory.build(itemid=201, finalgrade=None),
            ])

    record = calculate_no_penalty_final_grade(hook, repository)

    assert category.aggregated_values == pytest.approx({201: 0.3, 101: 0.5})
    assert record.finalgrade == pytest.approx(40)


def test_sum_aggregation_stores_zero_grademin():
    course_item = SimpleGradeItem(
            1, itemtype=grade_item_type.course, grademin=0, grademax=30)
    category = SumGradeCategory(course_item)
    hook = make_hook(
            category, {101: 0.5, 102: 0.5},
            items={
                101: ItemBoundsFactory(grademin=0, grademax=10),
                102: ItemBoundsFactory(grademin=2, grademax=20),
                })
    repository = InMemoryNoPenaltyRepository(deductions=[
        DeductionRecordFactory(itemid=101, deductedmark=1),
        ])

    record = calculate_no_penalty_final_grade(hook, repository)

    assert record.grademin == 0
    assert record.grademax == 30
    # (0.6 * 10 + 0.5 * 20) out of 30
    assert record.finalgrade == pytest.approx(16)


def test_sum_aggregation_keeps_negative_grade(course_item):
    course_item.grademax = 30
    course_item.bound = mock.Mock(side_effect=lambda grade: grade)
    category = SumGradeCategory(course_item)
    hook = make_hook(
            category, {201: -0.25, 101: 0.2},
            items={
                201: ItemBoundsFactory(grademin=0, grademax=20),
                101: ItemBoundsFactory(grademin=2, grademax=10),
                })
    repository = InMemoryNoPenaltyRepository(deductions=[
        DeductionRecordFactory(
            itemid=201, itemtype=grade_item_type.category,
            deductedmark=None, finalgrade=-5),
        ])

    record = calculate_no_penalty_final_grade(hook, repository)

    # -5 out of 0..20 stays negative
    assert category.aggregated_values == pytest.approx({201: -0.25, 101: 0.2})

    # (-0.25 * 20 + 0.2 * 10) out of 30
    grade, = course_item.bound.call_args.args
    assert grade == pytest.approx(-3)
    assert grade < 0

    assert record.grademin == 0
    assert record.grademax == 30
    assert record.finalgrade == pytest.approx(-3)


def test_final_grade_is_bounded():
    category = MeanGradeCategory(SimpleGradeItem(201, grademax=100))
    hook = make_hook(category, {101: 0.95})
    repository = InMemoryNoPenaltyRepository(deductions=[
        DeductionRecordFactory(itemid=101, deductedmark=20),
        ])

    record = calculate_no_penalty_final_grade(hook, repository)

    assert record.finalgrade == 100


def test_recalculation_updates_stored_record():
    category = MeanGradeCategory(SimpleGradeItem(201))
    repository = InMemoryNoPenaltyRepository(deductions=[
        DeductionRecordFactory(itemid=101, deductedmark=10),
        ])

    first = calculate_no_penalty_final_grade(
            make_hook(category, {101: 0.5}), repository)
    second = calculate_no_penalty_final_grade(
            make_hook(category, {101: 0.7}), repository)

    assert first is second
    assert len(repository.records) == 1
    assert second.finalgrade == pytest.approx(80)

# }}}

# vim: foldmethod=marker
