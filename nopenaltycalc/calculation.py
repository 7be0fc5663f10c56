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

__doc__ = """
Recomputes a category grade as if no penalties had been deducted.

The grading engine hands over the values it was about to aggregate. The
deducted marks are added back onto them, sub-category totals are replaced by
their own no-penalty totals, and the category's aggregation is run a second
time on the result.

.. autofunction:: standardise_score
.. autofunction:: remove_penalties
.. autofunction:: get_category_grades
.. autofunction:: normalise_category_grades
.. autofunction:: sort_grade_values
.. autofunction:: calculate_no_penalty_final_grade
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nopenaltycalc.constants import category_aggregation, grade_item_type


if TYPE_CHECKING:
    from nopenaltycalc.host import DeductionRecord
    from nopenaltycalc.models import NoPenaltyFinalGrade
    from nopenaltycalc.repository import NoPenaltyRepository
    from nopenaltycalc.signals import CategoryAggregationCalculated


logger = logging.getLogger(__name__)


def standardise_score(
            value: float | None,
            source_min: float, source_max: float,
            target_min: float, target_max: float,
        ) -> float | None:
    """Map *value* linearly from the range *source_min*..*source_max* onto
    *target_min*..*target_max*.

    A degenerate source or target range yields *target_max*.
    """
    if value is None:
        return None

    if source_max == source_min or target_min == target_max:
        return target_max

    factor = (value - source_min) / (source_max - source_min)
    return factor * (target_max - target_min) + target_min


def get_user_grade_bounds(
            hook: CategoryAggregationCalculated,
            itemid: int,
            grademin: float, grademax: float,
        ) -> tuple[float, float]:
    """Return *grademin* and *grademax*, replaced by the user-specific
    overrides for *itemid* where those exist.
    """
    min_override = hook.grademinoverrides.get(itemid)
    max_override = hook.grademaxoverrides.get(itemid)

    return (
            grademin if min_override is None else min_override,
            grademax if max_override is None else max_override)


# {{{ penalty removal

@dataclass
class PenaltyRemoval:
    """
    .. attribute:: gradevalues

        Item id to normalised value with the deducted mark added back, in the
        order of the pre-limit values.

    .. attribute:: graded

        Deduction records of the items whose value was considered for
        adjustment.

    .. attribute:: penaltycount

        Number of items that had a positive deduction.
    """
    gradevalues: dict[int, float]
    graded: dict[int, DeductionRecord]
    penaltycount: int


def remove_penalties(
            hook: CategoryAggregationCalculated,
            deductions: Mapping[int, DeductionRecord],
        ) -> PenaltyRemoval:
    gradevalues: dict[int, float] = {}
    graded: dict[int, DeductionRecord] = {}
    penaltycount = 0

    for itemid, value in hook.gradevaluesprelimit.items():
        gradevalues[itemid] = value

        grade = deductions.get(itemid)
        if grade is None or grade.overridden or grade.finalgrade is None:
            continue

        item = hook.items[itemid]
        grademin, grademax = get_user_grade_bounds(
                hook, itemid, item.grademin, item.grademax)
        deduction = standardise_score(
                float(grade.deductedmark or 0), grademin, grademax, 0, 1)
        assert deduction is not None

        if deduction > 0:
            penaltycount += 1

        gradevalues[itemid] = value + deduction
        graded[itemid] = grade

    return PenaltyRemoval(
            gradevalues=gradevalues,
            graded=graded,
            penaltycount=penaltycount)

# }}}


# {{{ sub-categories

def get_category_grades(
            graded: Mapping[int, DeductionRecord],
            no_penalty_grades: Mapping[int, NoPenaltyFinalGrade],
        ) -> dict[int, float | None]:
    """Return the raw (unnormalised) total of every graded sub-category,
    preferring a previously stored no-penalty total over the plain one.
    """
    category_grades: dict[int, float | None] = {}

    for itemid, grade in graded.items():
        if itemid in no_penalty_grades:
            category_grades[itemid] = no_penalty_grades[itemid].finalgrade
        elif grade.itemtype == grade_item_type.category:
            category_grades[itemid] = grade.finalgrade

    return category_grades


def normalise_category_grades(
            hook: CategoryAggregationCalculated,
            category_grades: Mapping[int, float | None],
        ) -> dict[int, float]:
    """Map every sub-category total into [0, 1], using the sub-category
    item's range (or the user's overrides of it).
    """
    normalised: dict[int, float] = {}

    for itemid, value in category_grades.items():
        # An ungraded sub-category gets no normalised value, so its
        # adjusted pre-limit value is aggregated instead.
        if value is None:
            continue

        item = hook.items[itemid]
        grademin, grademax = get_user_grade_bounds(
                hook, itemid, item.grademin, item.grademax)

        if hook.gradecategory.aggregation == category_aggregation.sum:
            # Standardise from 0 so that negative totals stay negative.
            result = standardise_score(value, 0, grademax, 0, 1)
        else:
            result = standardise_score(value, grademin, grademax, 0, 1)

        assert result is not None
        normalised[itemid] = result

    return normalised

# }}}


def sort_grade_values(values: Mapping[int, float]) -> dict[int, float]:
    """Return *values* ordered by ascending value. Equal values keep their
    relative order.
    """
    return dict(sorted(values.items(), key=lambda item: item[1]))


def calculate_no_penalty_final_grade(
            hook: CategoryAggregationCalculated,
            repository: NoPenaltyRepository,
        ) -> NoPenaltyFinalGrade | None:
    """Compute and store the no-penalty final grade of *hook*'s category for
    *hook*'s user.

    :returns: the stored record, or *None* if the category is not the course
        category and none of its items carried a penalty. Nothing is read
        from or written to the no-penalty table in that case.
    """
    category = hook.gradecategory
    grade_item = category.grade_item

    deductions = repository.find_deductions(
            hook.userid, hook.gradevaluesprelimit.keys())
    removal = remove_penalties(hook, deductions)

    # The course total is always recomputed, since penalties in nested
    # categories have to roll up into it.
    is_course_category = grade_item.itemtype == grade_item_type.course
    if not is_course_category and removal.penaltycount == 0:
        logger.debug("no penalties for user %s in category item %s, skipping",
                hook.userid, grade_item.id)
        return None

    no_penalty_grades = repository.find_no_penalty_records(
            category.courseid, hook.userid)
    category_grades = get_category_grades(removal.graded, no_penalty_grades)
    normalised = normalise_category_grades(hook, category_grades)

    gradevalues = sort_grade_values(removal.gradevalues)
    if category.supports_limit_rules():
        category.apply_limit_rules(gradevalues, hook.items)

    updated_gradevalues = dict(normalised)
    for itemid, value in gradevalues.items():
        updated_gradevalues.setdefault(itemid, value)

    result = category.aggregate(
            updated_gradevalues,
            hook.items,
            hook.usedweights,
            hook.grademinoverrides,
            hook.grademaxoverrides)

    grademin = result.grademin
    if category.aggregation == category_aggregation.sum:
        # Natural aggregation displays category ranges from 0, while the
        # bounded grade may still be negative.
        grademin = 0

    finalgrade = standardise_score(
            result.grade, 0, 1, grademin, result.grademax)
    bounded_grade = grade_item.bound(finalgrade)

    return repository.upsert_no_penalty_record(
            courseid=category.courseid,
            userid=hook.userid,
            itemid=grade_item.id,
            itemtype=grade_item.itemtype,
            grademin=grademin,
            grademax=result.grademax,
            finalgrade=bounded_grade,
            usermodified=hook.usermodified)

# vim: foldmethod=marker
